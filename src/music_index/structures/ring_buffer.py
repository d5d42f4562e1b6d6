"""
Fixed-capacity circular buffers.

CircularQueue is a sliding window: enqueueing onto a full queue silently
drops the oldest element. CircularDeque refuses inserts when full instead.
Skip tracking relies on the queue's eviction, so the two policies stay
distinct.
"""

from typing import Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


def _check_capacity(capacity: int) -> None:
    if capacity < 1:
        raise ValueError(f"capacity must be >= 1, got {capacity}")


class CircularQueue(Generic[T]):
    """FIFO ring buffer with oldest-eviction on overflow."""

    def __init__(self, capacity: int = 10) -> None:
        _check_capacity(capacity)
        self._capacity = capacity
        self._items: list[Optional[T]] = [None] * capacity
        self._front = 0
        self._rear = 0
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[T]:
        index = self._front
        for _ in range(self._count):
            yield self._items[index]
            index = (index + 1) % self._capacity

    def __repr__(self) -> str:
        return f"CircularQueue({self.to_list()!r}, capacity={self._capacity})"

    @property
    def capacity(self) -> int:
        return self._capacity

    def size(self) -> int:
        return self._count

    def is_empty(self) -> bool:
        return self._count == 0

    def is_full(self) -> bool:
        return self._count == self._capacity

    def enqueue(self, item: T) -> None:
        """
        Add ``item`` at the rear.

        If the queue is full the front element is dequeued first and
        discarded. Callers that need the evicted value must ``peek()`` before
        enqueueing.
        """
        if self.is_full():
            self.dequeue()

        self._items[self._rear] = item
        self._rear = (self._rear + 1) % self._capacity
        self._count += 1

    def dequeue(self) -> Optional[T]:
        if self._count == 0:
            return None
        item = self._items[self._front]
        self._items[self._front] = None
        self._front = (self._front + 1) % self._capacity
        self._count -= 1
        return item

    def peek(self) -> Optional[T]:
        if self._count == 0:
            return None
        return self._items[self._front]

    def contains(self, item: T) -> bool:
        return any(existing is item or existing == item for existing in self)

    def to_list(self) -> list[T]:
        """Elements from front (oldest) to rear (newest)."""
        return list(iter(self))

    def clear(self) -> None:
        self._items = [None] * self._capacity
        self._front = self._rear = self._count = 0


class CircularDeque(Generic[T]):
    """Double-ended ring buffer. Inserts fail (return False) when full."""

    def __init__(self, capacity: int = 10) -> None:
        _check_capacity(capacity)
        self._capacity = capacity
        self._items: list[Optional[T]] = [None] * capacity
        self._front = 0
        self._rear = capacity - 1
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[T]:
        index = self._front
        for _ in range(self._count):
            yield self._items[index]
            index = (index + 1) % self._capacity

    def __repr__(self) -> str:
        return f"CircularDeque({self.to_list()!r}, capacity={self._capacity})"

    @property
    def capacity(self) -> int:
        return self._capacity

    def size(self) -> int:
        return self._count

    def is_empty(self) -> bool:
        return self._count == 0

    def is_full(self) -> bool:
        return self._count == self._capacity

    def add_front(self, item: T) -> bool:
        if self.is_full():
            return False
        self._front = (self._front - 1) % self._capacity
        self._items[self._front] = item
        self._count += 1
        return True

    def add_rear(self, item: T) -> bool:
        if self.is_full():
            return False
        self._rear = (self._rear + 1) % self._capacity
        self._items[self._rear] = item
        self._count += 1
        return True

    def remove_front(self) -> Optional[T]:
        if self._count == 0:
            return None
        item = self._items[self._front]
        self._items[self._front] = None
        self._front = (self._front + 1) % self._capacity
        self._count -= 1
        return item

    def remove_rear(self) -> Optional[T]:
        if self._count == 0:
            return None
        item = self._items[self._rear]
        self._items[self._rear] = None
        self._rear = (self._rear - 1) % self._capacity
        self._count -= 1
        return item

    def peek_front(self) -> Optional[T]:
        return self._items[self._front] if self._count else None

    def peek_rear(self) -> Optional[T]:
        return self._items[self._rear] if self._count else None

    def to_list(self) -> list[T]:
        """Elements from front to rear."""
        return list(iter(self))

    def clear(self) -> None:
        self._items = [None] * self._capacity
        self._front = 0
        self._rear = self._capacity - 1
        self._count = 0
