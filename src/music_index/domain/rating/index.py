"""
Star rating index.

Tracks are filed in a RatingTree under their 1-5 star rating, with a side
hash table (track id -> rating) for O(1) "what is this track rated" lookups.
Ratings are not additive: re-rating moves the track to its new bucket.
"""

from datetime import datetime
from typing import Any, Iterable, Optional

from loguru import logger

from music_index.domain.library.models import Track
from music_index.structures import ChainedHashTable, RatingBucket, RatingTree, merge_sort

MIN_RATING = 1
MAX_RATING = 5
RECOMMEND_THRESHOLD = 4
POOR_THRESHOLD = 2


def is_valid_rating(rating: Any) -> bool:
    return isinstance(rating, int) and not isinstance(rating, bool) and MIN_RATING <= rating <= MAX_RATING


def _recommendation_order(a: Track, b: Track) -> int:
    # Higher rating first, then higher play count
    if (a.rating or 0) != (b.rating or 0):
        return (b.rating or 0) - (a.rating or 0)
    return b.play_count - a.play_count


class RatingIndex:
    """Rating-bucketed track retrieval."""

    def __init__(self) -> None:
        self._tree: RatingTree[Track] = RatingTree(MIN_RATING, MAX_RATING)
        self._ratings: ChainedHashTable[str, int] = ChainedHashTable()

    def __len__(self) -> int:
        return len(self._ratings)

    def insert_track(self, track: Track, rating: int) -> bool:
        """
        Rate a track, replacing any earlier rating.

        Args:
            track: Track to rate
            rating: Stars, 1-5

        Returns:
            False if rating is out of range (nothing changes)
        """
        if not is_valid_rating(rating):
            logger.debug(f"Rejected rating {rating!r} for track {track.id}")
            return False

        old_rating = self._ratings.get(track.id)
        if old_rating is not None:
            self._remove_from_bucket(track.id, old_rating)

        self._tree.insert(rating, track)
        self._ratings.set(track.id, rating)
        track.rating = rating
        return True

    def search_by_rating(self, rating: int) -> list[Track]:
        return self._tree.search_by_key(rating)

    def remove_track(self, track_id: str) -> bool:
        """Drop a track's rating. Returns False if it was not rated."""
        rating = self._ratings.get(track_id)
        if rating is None:
            return False

        track = self._remove_from_bucket(track_id, rating)
        self._ratings.delete(track_id)
        if track is not None:
            track.rating = None
        return True

    def rating_of(self, track_id: str) -> Optional[int]:
        return self._ratings.get(track_id)

    def at_least(self, min_rating: int) -> list[Track]:
        if not is_valid_rating(min_rating):
            return []
        return self._tree.values_with_key_at_least(min_rating)

    def at_most(self, max_rating: int) -> list[Track]:
        if not is_valid_rating(max_rating):
            return []
        return self._tree.values_with_key_at_most(max_rating)

    def in_range(self, min_rating: int, max_rating: int) -> list[Track]:
        if not (is_valid_rating(min_rating) and is_valid_rating(max_rating)) or min_rating > max_rating:
            return []
        return [t for t in self._tree.values_with_key_at_least(min_rating) if t.rating <= max_rating]

    def ascending(self) -> list[RatingBucket[Track]]:
        return self._tree.ascending()

    def descending(self) -> list[RatingBucket[Track]]:
        return self._tree.descending()

    def top_rated(self) -> list[Track]:
        return self._tree.search_by_key(MAX_RATING)

    def poorly_rated(self) -> list[Track]:
        return self._tree.values_with_key_at_most(POOR_THRESHOLD)

    def distribution(self) -> dict[int, int]:
        """Track count per rating, only for ratings that have tracks."""
        return dict(self._tree.count_by_key())

    def average(self) -> float:
        total = count = 0
        for rating, tracks in self._tree.count_by_key():
            total += rating * tracks
            count += tracks
        return total / count if count else 0.0

    def recommended(self, limit: Optional[int] = None) -> list[Track]:
        """
        Tracks rated 4+ ordered by rating, then play count (both descending).

        Args:
            limit: Maximum number to return (None for all)
        """
        ranked = merge_sort(self._tree.values_with_key_at_least(RECOMMEND_THRESHOLD), _recommendation_order)
        return ranked[:limit] if limit else ranked

    def unrated(self, tracks: Iterable[Track]) -> list[Track]:
        return [t for t in tracks if not self._ratings.has(t.id)]

    def bulk_update(self, ratings: Iterable[tuple[Track, int]]) -> bool:
        """
        Apply several ratings at once.

        Every rating is validated before any is applied, so a single bad
        value leaves the index untouched.
        """
        pairs = list(ratings)
        if not all(is_valid_rating(rating) for _, rating in pairs):
            logger.warning("Bulk rating update rejected: contains out-of-range rating")
            return False
        for track, rating in pairs:
            self.insert_track(track, rating)
        return True

    def total(self) -> int:
        return len(self._ratings)

    def is_empty(self) -> bool:
        return self._tree.is_empty()

    def clear(self) -> None:
        for track in self._tree.values_with_key_at_least(MIN_RATING):
            track.rating = None
        self._tree.clear()
        self._ratings.clear()

    def export(self) -> dict[str, Any]:
        return {
            "ratings": {track_id: rating for track_id, rating in self._ratings},
            "distribution": self.distribution(),
            "average_rating": self.average(),
            "total_rated": self.total(),
            "exported_at": datetime.now(),
        }

    def _remove_from_bucket(self, track_id: str, rating: int) -> Optional[Track]:
        for track in self._tree.search_by_key(rating):
            if track.id == track_id:
                self._tree.delete_value(rating, track)
                return track
        return None
