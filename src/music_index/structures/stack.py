"""
Array-backed LIFO stack with optional capacity.

When a capacity is set and reached, pushing evicts the *bottom* (oldest)
element, so the stack always holds the most recent ``max_size`` items.
"""

from typing import Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


class BoundedStack(Generic[T]):
    """LIFO buffer that keeps the most recent ``max_size`` pushes."""

    def __init__(self, max_size: Optional[int] = None) -> None:
        if max_size is not None and max_size < 1:
            raise ValueError(f"max_size must be >= 1 or None, got {max_size}")
        self._max_size = max_size
        self._items: list[T] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        """Iterate top to bottom."""
        return reversed(self._items)

    def __repr__(self) -> str:
        return f"BoundedStack({self.to_list()!r}, max_size={self._max_size})"

    @property
    def max_size(self) -> Optional[int]:
        return self._max_size

    def size(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def is_full(self) -> bool:
        return self._max_size is not None and len(self._items) >= self._max_size

    def push(self, item: T) -> bool:
        if self.is_full():
            del self._items[0]
        self._items.append(item)
        return True

    def pop(self) -> Optional[T]:
        return self._items.pop() if self._items else None

    def peek(self) -> Optional[T]:
        return self._items[-1] if self._items else None

    def contains(self, item: T) -> bool:
        return any(existing is item or existing == item for existing in self._items)

    def to_list(self) -> list[T]:
        """Elements from top (newest) to bottom (oldest)."""
        return self._items[::-1]

    def bottom_to_top(self) -> list[T]:
        return list(self._items)

    def clear(self) -> None:
        self._items = []
