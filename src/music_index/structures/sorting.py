"""
Comparator-driven sorting algorithms.

Pure functions: every sorter returns a new list and leaves its input alone.

- merge_sort: top-down, stable, O(n log n), O(n) extra space
- quick_sort: Lomuto partition with last-element pivot, not stable,
  O(n^2) worst case on already-ordered input
- heap_sort: max-heap extraction, not stable, O(n log n), O(1) extra space

Comparators follow the ``cmp`` convention: negative, zero, or positive.
"""

import time
from dataclasses import dataclass
from datetime import datetime
from functools import cmp_to_key
from typing import Any, Callable, Optional, Sequence, TypeVar

T = TypeVar("T")
Comparator = Callable[[Any, Any], int]

SORT_FIELDS = ("title", "duration", "date_added", "play_count", "rating")
SORT_ORDERS = ("asc", "desc")

_FIELD_ALIASES = {
    "dateadded": "date_added",
    "playcount": "play_count",
    "date-added": "date_added",
    "play-count": "play_count",
}


@dataclass(frozen=True)
class SortCriteria:
    """A single ``{field, order}`` sort key.

    Raises:
        ValueError: If field or order is not recognised
    """

    field: str
    order: str = "asc"

    def __post_init__(self) -> None:
        if self.field not in SORT_FIELDS:
            raise ValueError(f"Invalid sort field: {self.field!r}. Valid fields: {SORT_FIELDS}")
        if self.order not in SORT_ORDERS:
            raise ValueError(f"Invalid sort order: {self.order!r}. Valid orders: {SORT_ORDERS}")

    @classmethod
    def parse(cls, text: str) -> "SortCriteria":
        """
        Parse ``"field"`` or ``"field:order"``.

        Examples:
            >>> SortCriteria.parse("duration:desc")
            SortCriteria(field='duration', order='desc')
            >>> SortCriteria.parse("playCount")
            SortCriteria(field='play_count', order='asc')
        """
        field, _, order = text.strip().partition(":")
        field = field.strip()
        field = _FIELD_ALIASES.get(field.lower(), field)
        return cls(field=field, order=(order.strip().lower() or "asc"))


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def merge_sort(items: Sequence[T], compare: Comparator) -> list[T]:
    """Stable top-down merge sort."""
    if len(items) <= 1:
        return list(items)

    mid = len(items) // 2
    left = merge_sort(items[:mid], compare)
    right = merge_sort(items[mid:], compare)

    merged: list[T] = []
    i = j = 0
    while i < len(left) and j < len(right):
        # <= keeps equal elements in their original order
        if compare(left[i], right[j]) <= 0:
            merged.append(left[i])
            i += 1
        else:
            merged.append(right[j])
            j += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged


def quick_sort(items: Sequence[T], compare: Comparator) -> list[T]:
    """Quick sort on a copy using Lomuto partitioning (pivot = last element)."""
    result = list(items)
    _quick_sort(result, 0, len(result) - 1, compare)
    return result


def _quick_sort(arr: list[T], low: int, high: int, compare: Comparator) -> None:
    # Recurse into the smaller side and loop on the larger one to bound stack depth
    while low < high:
        pivot_index = _partition(arr, low, high, compare)
        if pivot_index - low < high - pivot_index:
            _quick_sort(arr, low, pivot_index - 1, compare)
            low = pivot_index + 1
        else:
            _quick_sort(arr, pivot_index + 1, high, compare)
            high = pivot_index - 1


def _partition(arr: list[T], low: int, high: int, compare: Comparator) -> int:
    pivot = arr[high]
    i = low - 1
    for j in range(low, high):
        if compare(arr[j], pivot) <= 0:
            i += 1
            arr[i], arr[j] = arr[j], arr[i]
    arr[i + 1], arr[high] = arr[high], arr[i + 1]
    return i + 1


def heap_sort(items: Sequence[T], compare: Comparator) -> list[T]:
    """Heap sort on a copy: build a max-heap, then swap the max to the back."""
    result = list(items)
    n = len(result)

    for i in range(n // 2 - 1, -1, -1):
        _sift_down(result, n, i, compare)

    for end in range(n - 1, 0, -1):
        result[0], result[end] = result[end], result[0]
        _sift_down(result, end, 0, compare)

    return result


def _sift_down(arr: list[T], n: int, i: int, compare: Comparator) -> None:
    while True:
        largest = i
        left = 2 * i + 1
        right = 2 * i + 2
        if left < n and compare(arr[left], arr[largest]) > 0:
            largest = left
        if right < n and compare(arr[right], arr[largest]) > 0:
            largest = right
        if largest == i:
            return
        arr[i], arr[largest] = arr[largest], arr[i]
        i = largest


SORTERS: dict[str, Callable[[Sequence[Any], Comparator], list[Any]]] = {
    "merge": merge_sort,
    "quick": quick_sort,
    "heap": heap_sort,
}


def get_sorter(name: str) -> Optional[Callable[[Sequence[Any], Comparator], list[Any]]]:
    """Resolve a sorter by name ("merge", "quick", "heap"). None if unknown."""
    return SORTERS.get(name)


def _field_value(item: Any, field: str) -> Any:
    value = getattr(item, field, None)
    if field == "title":
        return (value or "").casefold()
    if field == "rating":
        return value or 0
    if field == "date_added":
        return value.timestamp() if isinstance(value, datetime) else (value or 0)
    return value or 0


def track_comparator(criteria: SortCriteria) -> Comparator:
    """
    Build a comparator over one track field.

    Titles compare case-insensitively and an unset rating counts as 0.

    Args:
        criteria: Field and order to sort by

    Returns:
        Comparator returning negative/zero/positive
    """
    sign = -1 if criteria.order == "desc" else 1

    def compare(a: Any, b: Any) -> int:
        return sign * _cmp(_field_value(a, criteria.field), _field_value(b, criteria.field))

    return compare


def multi_criteria_comparator(criteria_list: Sequence[SortCriteria]) -> Comparator:
    """Chain criteria lexicographically: the first non-zero comparison wins."""
    comparators = [track_comparator(c) for c in criteria_list]

    def compare(a: Any, b: Any) -> int:
        for comparator in comparators:
            result = comparator(a, b)
            if result != 0:
                return result
        return 0

    return compare


def is_sorted(items: Sequence[T], compare: Comparator) -> bool:
    return all(compare(items[i - 1], items[i]) <= 0 for i in range(1, len(items)))


def benchmark_sorts(
    items: Sequence[T], compare: Comparator, iterations: int = 1
) -> dict[str, float]:
    """
    Time each sorter (plus the built-in ``sorted`` as a baseline).

    Args:
        items: Data to sort; copied per run
        compare: Comparator shared by every algorithm
        iterations: Runs to average over

    Returns:
        Dict mapping algorithm name to mean wall time in seconds
    """
    iterations = max(1, iterations)
    totals = {name: 0.0 for name in (*SORTERS, "builtin")}

    for _ in range(iterations):
        for name, sorter in SORTERS.items():
            start = time.perf_counter()
            sorter(items, compare)
            totals[name] += time.perf_counter() - start

        start = time.perf_counter()
        sorted(items, key=cmp_to_key(compare))
        totals["builtin"] += time.perf_counter() - start

    return {name: total / iterations for name, total in totals.items()}
