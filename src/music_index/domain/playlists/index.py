"""
Ordered playlist backed by a doubly-linked list.

Insertion at either end is O(1); positional operations are O(n). Sorting and
shuffling extract the list into an array, reorder it, then rebuild the chain
rather than relinking nodes in place.
"""

import random
from datetime import datetime
from typing import Any, Optional, Sequence, Union

from loguru import logger

from music_index.domain.library.models import Track, normalize_key
from music_index.structures import (
    ChainedHashTable,
    OrderedList,
    SortCriteria,
    get_sorter,
    multi_criteria_comparator,
    track_comparator,
)


class PlaylistIndex:
    """A single named playlist."""

    def __init__(self, playlist_id: str = "default-playlist", name: str = "My Playlist") -> None:
        self.playlist_id = playlist_id
        self.name = name
        self.created_at = datetime.now()
        self.updated_at = self.created_at
        self._tracks: OrderedList[Track] = OrderedList()

    def __len__(self) -> int:
        return len(self._tracks)

    def __iter__(self):
        return iter(self._tracks)

    def is_empty(self) -> bool:
        return self._tracks.is_empty()

    def add_track(self, track: Track) -> bool:
        self._tracks.append(track)
        self._touch()
        return True

    def add_track_at(self, track: Track, position: int) -> bool:
        """
        Insert a track at ``position`` (0..len).

        Returns:
            False if position is out of range
        """
        inserted = self._tracks.insert_at(position, track)
        if inserted:
            self._touch()
        else:
            logger.debug(f"Playlist insert out of range: {position} (size={len(self)})")
        return inserted

    def remove_at(self, index: int) -> Optional[Track]:
        track = self._tracks.remove_at(index)
        if track is not None:
            self._touch()
        return track

    def remove_track(self, track: Track) -> bool:
        """Remove the first occurrence of ``track``."""
        removed = self._tracks.remove(track)
        if removed:
            self._touch()
        return removed

    def remove_all(self, track: Track) -> int:
        """Remove every occurrence of ``track``. Returns how many were removed."""
        removed = 0
        while self._tracks.remove(track):
            removed += 1
        if removed:
            self._touch()
        return removed

    def move_track(self, from_index: int, to_index: int) -> bool:
        moved = self._tracks.move(from_index, to_index)
        if moved:
            self._touch()
        return moved

    def reverse(self) -> None:
        self._tracks.reverse()
        self._touch()

    def get(self, index: int) -> Optional[Track]:
        return self._tracks.get(index)

    def index_of(self, track: Track) -> int:
        return self._tracks.index_of(track)

    def index_of_id(self, track_id: str) -> int:
        for index, track in enumerate(self._tracks):
            if track.id == track_id:
                return index
        return -1

    def tracks(self) -> list[Track]:
        return self._tracks.to_list()

    def sort(
        self,
        criteria: Union[SortCriteria, Sequence[SortCriteria]],
        algorithm: str = "merge",
    ) -> bool:
        """
        Reorder the playlist.

        Args:
            criteria: One SortCriteria, or several applied lexicographically
            algorithm: "merge" (stable), "quick", or "heap"

        Returns:
            False if the algorithm is unknown or no criteria were given
            (playlist unchanged)
        """
        sorter = get_sorter(algorithm)
        if sorter is None:
            logger.warning(f"Unknown sort algorithm: {algorithm}")
            return False

        if isinstance(criteria, SortCriteria):
            compare = track_comparator(criteria)
        else:
            if not criteria:
                return False
            compare = multi_criteria_comparator(criteria)

        self._rebuild(sorter(self._tracks.to_list(), compare))
        logger.debug(f"Sorted playlist {self.playlist_id} with {algorithm} sort")
        return True

    def shuffle(self, rng: Optional[random.Random] = None) -> bool:
        """Fisher-Yates shuffle, then rebuild the list."""
        rng = rng or random.Random()
        tracks = self._tracks.to_list()
        for i in range(len(tracks) - 1, 0, -1):
            j = rng.randint(0, i)
            tracks[i], tracks[j] = tracks[j], tracks[i]
        self._rebuild(tracks)
        return True

    def find_by_title(self, query: str) -> list[Track]:
        needle = normalize_key(query)
        return [t for t in self._tracks if needle in t.normalized_title]

    def find_by_artist(self, query: str) -> list[Track]:
        needle = normalize_key(query)
        return [t for t in self._tracks if needle in t.normalized_artist]

    def stats(self) -> dict[str, Any]:
        """
        Aggregate statistics for the playlist.

        Returns:
            Dict with total_tracks, total_duration, average_duration,
            average_rating (over rated tracks only), tracks_by_genre,
            created_at, updated_at
        """
        tracks = self._tracks.to_list()
        total_duration = sum(t.duration for t in tracks)
        rated = [t.rating for t in tracks if t.rating is not None]

        by_genre: ChainedHashTable[str, int] = ChainedHashTable()
        for track in tracks:
            by_genre.set(track.genre, by_genre.get(track.genre, 0) + 1)

        return {
            "total_tracks": len(tracks),
            "total_duration": total_duration,
            "average_duration": total_duration / len(tracks) if tracks else 0.0,
            "average_rating": sum(rated) / len(rated) if rated else 0.0,
            "tracks_by_genre": dict(by_genre.entries()),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def info(self) -> dict[str, Any]:
        return {
            "id": self.playlist_id,
            "name": self.name,
            "track_count": len(self._tracks),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def rename(self, name: str) -> None:
        self.name = name
        self._touch()

    def clear(self) -> None:
        self._tracks.clear()
        self._touch()

    def _rebuild(self, tracks: list[Track]) -> None:
        self._tracks.clear()
        for track in tracks:
            self._tracks.append(track)
        self._touch()

    def _touch(self) -> None:
        self.updated_at = datetime.now()
