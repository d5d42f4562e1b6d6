"""Tests for the multi-valued RatingTree."""

import pytest

from music_index.structures import RatingBucket, RatingTree


@pytest.fixture
def tree() -> RatingTree[str]:
    """Tree with keys inserted in order 3, 1, 5, 4, 2."""
    t: RatingTree[str] = RatingTree()
    for key in (3, 1, 5, 4, 2):
        t.insert(key, f"t{key}")
    return t


class TestInsertAndSearch:
    def test_multiple_values_share_a_node(self) -> None:
        t: RatingTree[str] = RatingTree()
        t.insert(4, "a")
        t.insert(4, "b")
        assert t.search_by_key(4) == ["a", "b"]
        assert t.node_count == 1

    def test_out_of_domain_rejected(self) -> None:
        t: RatingTree[str] = RatingTree()
        assert t.insert(0, "x") is False
        assert t.insert(6, "x") is False
        assert t.search_by_key(6) == []
        assert t.is_empty()

    def test_search_returns_copy(self, tree: RatingTree[str]) -> None:
        tree.search_by_key(3).append("intruder")
        assert tree.search_by_key(3) == ["t3"]

    def test_invalid_domain(self) -> None:
        with pytest.raises(ValueError):
            RatingTree(5, 1)


class TestDeletion:
    """Node removal happens only when the bucket empties."""

    def test_delete_one_of_two_keeps_node(self) -> None:
        t: RatingTree[str] = RatingTree()
        t.insert(2, "a")
        t.insert(2, "b")
        assert t.delete_value(2, "a") is True
        assert t.search_by_key(2) == ["b"]
        assert t.contains_key(2)

    def test_delete_last_removes_node(self, tree: RatingTree[str]) -> None:
        assert tree.delete_value(4, "t4") is True
        assert not tree.contains_key(4)
        assert tree.node_count == 4

    def test_delete_root_with_two_children(self, tree: RatingTree[str]) -> None:
        """Root 3 is replaced by its in-order successor 4."""
        assert tree.delete_value(3, "t3") is True
        assert [b.rating for b in tree.ascending()] == [1, 2, 4, 5]
        assert tree.search_by_key(4) == ["t4"]
        assert tree.search_by_key(5) == ["t5"]

    def test_delete_missing(self, tree: RatingTree[str]) -> None:
        assert tree.delete_value(3, "nope") is False
        assert tree.delete_value(9, "t3") is False
        assert tree.total_count() == 5


class TestTraversal:
    def test_ascending_descending(self, tree: RatingTree[str]) -> None:
        assert [b.rating for b in tree.ascending()] == [1, 2, 3, 4, 5]
        assert tree.descending()[0] == RatingBucket(5, ["t5"])

    def test_range_collection(self, tree: RatingTree[str]) -> None:
        assert sorted(tree.values_with_key_at_least(4)) == ["t4", "t5"]
        assert sorted(tree.values_with_key_at_most(2)) == ["t1", "t2"]

    def test_count_and_height(self, tree: RatingTree[str]) -> None:
        assert tree.count_by_key() == [(1, 1), (2, 1), (3, 1), (4, 1), (5, 1)]
        assert tree.height() == 2
        assert RatingTree().height() == -1
