"""Container layer - hand-written collections with no domain knowledge.

This package provides:
- OrderedList (doubly-linked playlist order)
- ChainedHashTable (separate chaining, doubling resize)
- RatingTree (multi-valued BST over a small rating domain)
- CircularQueue / CircularDeque (fixed-capacity ring buffers)
- BoundedStack (LIFO with bottom eviction)
- merge/quick/heap sort and comparator builders
"""

from .hash_table import ChainedHashTable, polynomial_hash
from .linked_list import OrderedList
from .rating_tree import RatingBucket, RatingTree
from .ring_buffer import CircularDeque, CircularQueue
from .sorting import (
    SORT_FIELDS,
    SortCriteria,
    benchmark_sorts,
    get_sorter,
    heap_sort,
    is_sorted,
    merge_sort,
    multi_criteria_comparator,
    quick_sort,
    track_comparator,
)
from .stack import BoundedStack

__all__ = [
    "ChainedHashTable",
    "polynomial_hash",
    "OrderedList",
    "RatingBucket",
    "RatingTree",
    "CircularDeque",
    "CircularQueue",
    "BoundedStack",
    # Sorting
    "SORT_FIELDS",
    "SortCriteria",
    "merge_sort",
    "quick_sort",
    "heap_sort",
    "get_sorter",
    "track_comparator",
    "multi_criteria_comparator",
    "is_sorted",
    "benchmark_sorts",
]
