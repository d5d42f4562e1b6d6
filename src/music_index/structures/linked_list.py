"""
Doubly-linked ordered list.

Backs playlist ordering. Every index-based operation is total over its input:
out-of-range indices return None/False instead of raising.
"""

from typing import Any, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


class _Node(Generic[T]):
    """Single link in the chain. Owned exclusively by its OrderedList."""

    __slots__ = ("value", "prev", "next")

    def __init__(self, value: T) -> None:
        self.value = value
        self.prev: Optional["_Node[T]"] = None
        self.next: Optional["_Node[T]"] = None


class OrderedList(Generic[T]):
    """Doubly-linked sequence with O(1) head/tail insertion.

    Indexed access walks from whichever end is closer, so lookups cost at most
    n/2 hops.
    """

    def __init__(self) -> None:
        self._head: Optional[_Node[T]] = None
        self._tail: Optional[_Node[T]] = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        current = self._head
        while current:
            yield current.value
            current = current.next

    def __repr__(self) -> str:
        return f"OrderedList({self.to_list()!r})"

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def append(self, value: T) -> None:
        """Add a value after the current tail."""
        node = _Node(value)
        if self._tail is None:
            self._head = self._tail = node
        else:
            node.prev = self._tail
            self._tail.next = node
            self._tail = node
        self._size += 1

    def prepend(self, value: T) -> None:
        """Add a value before the current head."""
        node = _Node(value)
        if self._head is None:
            self._head = self._tail = node
        else:
            node.next = self._head
            self._head.prev = node
            self._head = node
        self._size += 1

    def insert_at(self, index: int, value: T) -> bool:
        """
        Insert a value so that it ends up at ``index``.

        Args:
            index: Target position, 0..len (len appends)
            value: Value to insert

        Returns:
            True if inserted, False if index was out of range
        """
        if index < 0 or index > self._size:
            return False
        if index == 0:
            self.prepend(value)
            return True
        if index == self._size:
            self.append(value)
            return True

        current = self._node_at(index)
        node = _Node(value)
        node.next = current
        node.prev = current.prev
        current.prev.next = node
        current.prev = node
        self._size += 1
        return True

    def remove_at(self, index: int) -> Optional[T]:
        """
        Remove and return the value at ``index``.

        Returns:
            The removed value, or None if index was out of range
        """
        node = self._node_at(index)
        if node is None:
            return None
        self._unlink(node)
        return node.value

    def remove(self, value: Any) -> bool:
        """Remove the first occurrence of ``value``. Returns False if absent."""
        current = self._head
        while current:
            if current.value is value or current.value == value:
                self._unlink(current)
                return True
            current = current.next
        return False

    def move(self, from_index: int, to_index: int) -> bool:
        """
        Move a value from one position to another.

        Implemented as remove-then-reinsert. When moving forward the target
        index is decremented by one to account for the removal shift, so
        ``[A, B, C, D].move(0, 2)`` yields ``[B, A, C, D]``.

        Returns:
            True on success (including a no-op move), False on bad indices
        """
        if not (0 <= from_index < self._size and 0 <= to_index < self._size):
            return False
        if from_index == to_index:
            return True

        value = self.remove_at(from_index)
        target = to_index - 1 if from_index < to_index else to_index
        return self.insert_at(target, value)

    def get(self, index: int) -> Optional[T]:
        node = self._node_at(index)
        return node.value if node else None

    def index_of(self, value: Any) -> int:
        """Position of the first occurrence of ``value``, or -1."""
        current = self._head
        index = 0
        while current:
            if current.value is value or current.value == value:
                return index
            current = current.next
            index += 1
        return -1

    def reverse(self) -> None:
        """Reverse in place by swapping every node's links, then head/tail."""
        current = self._head
        while current:
            current.prev, current.next = current.next, current.prev
            # old next is now prev
            current = current.prev
        self._head, self._tail = self._tail, self._head

    def to_list(self) -> list[T]:
        return list(iter(self))

    def clear(self) -> None:
        self._head = self._tail = None
        self._size = 0

    def _unlink(self, node: _Node[T]) -> None:
        if node.prev:
            node.prev.next = node.next
        else:
            self._head = node.next
        if node.next:
            node.next.prev = node.prev
        else:
            self._tail = node.prev
        node.prev = node.next = None
        self._size -= 1

    def _node_at(self, index: int) -> Optional[_Node[T]]:
        if index < 0 or index >= self._size:
            return None

        if index < self._size / 2:
            current = self._head
            for _ in range(index):
                current = current.next
        else:
            current = self._tail
            for _ in range(self._size - 1 - index):
                current = current.prev
        return current
