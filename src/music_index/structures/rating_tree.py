"""
Binary search tree keyed by small integer ratings.

Each node holds every value sharing its key (a "rating bucket"). Nodes are
created on first insert for a key and removed only once their bucket empties.
The tree is not self-balancing; with a 1..5 key domain height never exceeds 4.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class RatingBucket(Generic[T]):
    """Snapshot of one tree node: a rating and the values filed under it."""

    rating: int
    tracks: list[T]


class _TreeNode(Generic[T]):
    __slots__ = ("key", "values", "left", "right")

    def __init__(self, key: int, value: T) -> None:
        self.key = key
        self.values: list[T] = [value]
        self.left: Optional["_TreeNode[T]"] = None
        self.right: Optional["_TreeNode[T]"] = None


class RatingTree(Generic[T]):
    """Multi-valued BST over an inclusive integer key domain."""

    def __init__(self, min_key: int = 1, max_key: int = 5) -> None:
        if min_key > max_key:
            raise ValueError(f"Invalid key domain: {min_key}..{max_key}")
        self.min_key = min_key
        self.max_key = max_key
        self._root: Optional[_TreeNode[T]] = None
        self._node_count = 0

    def __repr__(self) -> str:
        return f"RatingTree(nodes={self._node_count}, values={self.total_count()})"

    @property
    def node_count(self) -> int:
        return self._node_count

    def in_domain(self, key: Any) -> bool:
        return isinstance(key, int) and self.min_key <= key <= self.max_key

    def is_empty(self) -> bool:
        return self._root is None

    def clear(self) -> None:
        self._root = None
        self._node_count = 0

    def insert(self, key: int, value: T) -> bool:
        """
        File ``value`` under ``key``.

        Appends to the existing node's bucket when the key is present,
        otherwise creates a new leaf.

        Returns:
            False if key is outside the domain (tree unchanged), else True
        """
        if not self.in_domain(key):
            return False

        if self._root is None:
            self._root = _TreeNode(key, value)
            self._node_count += 1
            return True

        node = self._root
        while True:
            if key == node.key:
                node.values.append(value)
                return True
            if key < node.key:
                if node.left is None:
                    node.left = _TreeNode(key, value)
                    self._node_count += 1
                    return True
                node = node.left
            else:
                if node.right is None:
                    node.right = _TreeNode(key, value)
                    self._node_count += 1
                    return True
                node = node.right

    def search_by_key(self, key: int) -> list[T]:
        """Copy of the bucket for ``key`` ([] when absent or out of domain)."""
        if not self.in_domain(key):
            return []
        node = self._find(key)
        return list(node.values) if node else []

    def contains_key(self, key: int) -> bool:
        return self.in_domain(key) and self._find(key) is not None

    def delete_value(self, key: int, value: T) -> bool:
        """
        Remove one occurrence of ``value`` from the bucket at ``key``.

        When the bucket becomes empty the node itself is removed.

        Returns:
            True if a value was removed, False otherwise (tree unchanged)
        """
        if not self.in_domain(key):
            return False
        node = self._find(key)
        if node is None:
            return False

        for i, existing in enumerate(node.values):
            if existing is value or existing == value:
                del node.values[i]
                break
        else:
            return False

        if not node.values:
            self._root = self._delete_node(self._root, key)
            self._node_count -= 1
        return True

    def ascending(self) -> list[RatingBucket[T]]:
        result: list[RatingBucket[T]] = []
        self._in_order(self._root, lambda n: result.append(RatingBucket(n.key, list(n.values))))
        return result

    def descending(self) -> list[RatingBucket[T]]:
        result: list[RatingBucket[T]] = []
        self._reverse_in_order(
            self._root, lambda n: result.append(RatingBucket(n.key, list(n.values)))
        )
        return result

    def values_with_key_at_least(self, min_key: int) -> list[T]:
        result: list[T] = []
        self._collect_at_least(self._root, min_key, result)
        return result

    def values_with_key_at_most(self, max_key: int) -> list[T]:
        result: list[T] = []
        self._collect_at_most(self._root, max_key, result)
        return result

    def count_by_key(self) -> list[tuple[int, int]]:
        """(key, bucket size) pairs in ascending key order."""
        counts: list[tuple[int, int]] = []
        self._in_order(self._root, lambda n: counts.append((n.key, len(n.values))))
        return counts

    def total_count(self) -> int:
        return self._count(self._root)

    def height(self) -> int:
        """Edges on the longest root-to-leaf path; -1 for an empty tree."""
        return self._height(self._root)

    def _find(self, key: int) -> Optional[_TreeNode[T]]:
        node = self._root
        while node and node.key != key:
            node = node.left if key < node.key else node.right
        return node

    def _delete_node(self, node: Optional[_TreeNode[T]], key: int) -> Optional[_TreeNode[T]]:
        if node is None:
            return None

        if key < node.key:
            node.left = self._delete_node(node.left, key)
        elif key > node.key:
            node.right = self._delete_node(node.right, key)
        else:
            if node.left is None:
                return node.right
            if node.right is None:
                return node.left

            # Two children: promote in-order successor, then drop its old node
            successor = node.right
            while successor.left:
                successor = successor.left
            node.key = successor.key
            node.values = successor.values
            node.right = self._delete_node(node.right, successor.key)

        return node

    def _in_order(self, node: Optional[_TreeNode[T]], visit: Callable[[_TreeNode[T]], None]) -> None:
        if node:
            self._in_order(node.left, visit)
            visit(node)
            self._in_order(node.right, visit)

    def _reverse_in_order(
        self, node: Optional[_TreeNode[T]], visit: Callable[[_TreeNode[T]], None]
    ) -> None:
        if node:
            self._reverse_in_order(node.right, visit)
            visit(node)
            self._reverse_in_order(node.left, visit)

    def _collect_at_least(self, node: Optional[_TreeNode[T]], min_key: int, result: list[T]) -> None:
        if node is None:
            return
        if node.key >= min_key:
            result.extend(node.values)
            self._collect_at_least(node.left, min_key, result)
        self._collect_at_least(node.right, min_key, result)

    def _collect_at_most(self, node: Optional[_TreeNode[T]], max_key: int, result: list[T]) -> None:
        if node is None:
            return
        if node.key <= max_key:
            result.extend(node.values)
            self._collect_at_most(node.right, max_key, result)
        self._collect_at_most(node.left, max_key, result)

    def _count(self, node: Optional[_TreeNode[T]]) -> int:
        if node is None:
            return 0
        return len(node.values) + self._count(node.left) + self._count(node.right)

    def _height(self, node: Optional[_TreeNode[T]]) -> int:
        if node is None:
            return -1
        return 1 + max(self._height(node.left), self._height(node.right))
