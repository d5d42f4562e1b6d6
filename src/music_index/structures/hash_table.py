"""
Hash table with separate chaining.

Each bucket is a list of entries that hashed to the same slot. The table
doubles and rehashes once ``size >= capacity * load_factor_threshold``.
Deletions are physical; no tombstones are kept.

Collision-heavy key sets degrade to O(n) per operation. No probing or
rebalancing is attempted.
"""

from typing import Any, Generic, Iterable, Iterator, Optional, TypeVar

K = TypeVar("K")
V = TypeVar("V")

DEFAULT_CAPACITY = 16
DEFAULT_LOAD_FACTOR = 0.75


class _Entry(Generic[K, V]):
    __slots__ = ("key", "value")

    def __init__(self, key: K, value: V) -> None:
        self.key = key
        self.value = value


def polynomial_hash(key: Any) -> int:
    """
    Deterministic 32-bit polynomial string hash (``h = h * 31 + c``).

    The key is stringified first so ints and strings with the same text hash
    identically. Result is non-negative.

    Args:
        key: Any key; hashed via ``str(key)``

    Returns:
        Absolute value of the signed 32-bit hash
    """
    h = 0
    for char in str(key):
        h = ((h << 5) - h + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


class ChainedHashTable(Generic[K, V]):
    """Key/value map using separate chaining and doubling resize."""

    def __init__(
        self,
        initial_capacity: int = DEFAULT_CAPACITY,
        load_factor_threshold: float = DEFAULT_LOAD_FACTOR,
    ) -> None:
        if initial_capacity < 1:
            raise ValueError(f"initial_capacity must be >= 1, got {initial_capacity}")
        if not 0 < load_factor_threshold < 1:
            raise ValueError(
                f"load_factor_threshold must be in (0, 1), got {load_factor_threshold}"
            )
        self._capacity = initial_capacity
        self._threshold = load_factor_threshold
        self._buckets: list[list[_Entry[K, V]]] = self._empty_buckets(initial_capacity)
        self._size = 0

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[K, V]]) -> "ChainedHashTable[K, V]":
        """Build a table from (key, value) pairs, sized at twice their count."""
        pairs = list(pairs)
        table = cls(max(DEFAULT_CAPACITY, len(pairs) * 2))
        for key, value in pairs:
            table.set(key, value)
        return table

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return self.has(key)

    def __iter__(self) -> Iterator[tuple[K, V]]:
        for bucket in self._buckets:
            for entry in bucket:
                yield entry.key, entry.value

    def __repr__(self) -> str:
        return f"ChainedHashTable(size={self._size}, capacity={self._capacity})"

    @property
    def capacity(self) -> int:
        return self._capacity

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def set(self, key: K, value: V) -> None:
        """Insert or overwrite ``key``. May trigger a resize."""
        bucket = self._buckets[self._index(key)]
        for entry in bucket:
            if entry.key == key:
                entry.value = value
                return

        bucket.append(_Entry(key, value))
        self._size += 1

        if self._size >= self._capacity * self._threshold:
            self._resize()

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        entry = self._find(key)
        return entry.value if entry else default

    def has(self, key: object) -> bool:
        return self._find(key) is not None

    def delete(self, key: K) -> bool:
        """Remove ``key``. Returns False if it was not present."""
        bucket = self._buckets[self._index(key)]
        for i, entry in enumerate(bucket):
            if entry.key == key:
                del bucket[i]
                self._size -= 1
                return True
        return False

    def keys(self) -> list[K]:
        return [key for key, _ in self]

    def values(self) -> list[V]:
        return [value for _, value in self]

    def entries(self) -> list[tuple[K, V]]:
        return list(iter(self))

    def clear(self) -> None:
        self._buckets = self._empty_buckets(self._capacity)
        self._size = 0

    def load_factor(self) -> float:
        return self._size / self._capacity

    def stats(self) -> dict[str, Any]:
        """
        Bucket occupancy statistics.

        Returns:
            Dict with size, capacity, load_factor, collisions (entries beyond
            the first in each bucket), max_bucket_size, and avg_bucket_size
            over non-empty buckets
        """
        collisions = 0
        max_bucket = 0
        occupied = 0
        for bucket in self._buckets:
            length = len(bucket)
            if length:
                occupied += 1
                collisions += length - 1
                max_bucket = max(max_bucket, length)

        return {
            "size": self._size,
            "capacity": self._capacity,
            "load_factor": self.load_factor(),
            "collisions": collisions,
            "max_bucket_size": max_bucket,
            "avg_bucket_size": self._size / occupied if occupied else 0.0,
        }

    def _index(self, key: object) -> int:
        return polynomial_hash(key) % self._capacity

    def _find(self, key: object) -> Optional[_Entry[K, V]]:
        for entry in self._buckets[self._index(key)]:
            if entry.key == key:
                return entry
        return None

    def _resize(self) -> None:
        old_buckets = self._buckets
        self._capacity *= 2
        self._buckets = self._empty_buckets(self._capacity)

        # Rehash against the new capacity; keys are already unique.
        for bucket in old_buckets:
            for entry in bucket:
                self._buckets[self._index(entry.key)].append(entry)

    @staticmethod
    def _empty_buckets(capacity: int) -> list[list[_Entry[K, V]]]:
        return [[] for _ in range(capacity)]
