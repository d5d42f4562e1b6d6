"""
Recently-skipped track window.

Skips go into a fixed-size circular queue; a per-track count table mirrors
the queue's contents. When a new skip evicts the oldest one, that track's
count is decremented (and dropped at zero), so the counts never drift from
what the window actually holds.
"""

from datetime import datetime, timedelta
from typing import Any, Iterable, Optional

from loguru import logger

from music_index.domain.library.models import SkipEntry, Track
from music_index.structures import ChainedHashTable, CircularQueue, merge_sort


class SkipTracker:
    """Sliding window of the last ``max_size`` skips."""

    def __init__(self, max_size: int = 10) -> None:
        self._queue: CircularQueue[SkipEntry] = CircularQueue(max_size)
        self._counts: ChainedHashTable[str, int] = ChainedHashTable()

    def __len__(self) -> int:
        return len(self._queue)

    @property
    def max_size(self) -> int:
        return self._queue.capacity

    def is_empty(self) -> bool:
        return self._queue.is_empty()

    def is_full(self) -> bool:
        return self._queue.is_full()

    def record_skip(self, track: Track, skipped_at: Optional[datetime] = None) -> SkipEntry:
        """
        Record a skip, evicting the oldest one if the window is full.

        Args:
            track: Skipped track
            skipped_at: When (defaults to now)

        Returns:
            The recorded entry
        """
        entry = SkipEntry(track=track, skipped_at=skipped_at or datetime.now())

        evicted = self._queue.peek() if self._queue.is_full() else None
        self._queue.enqueue(entry)
        self._counts.set(track.id, self._counts.get(track.id, 0) + 1)

        if evicted is not None:
            self._decrement(evicted.track.id)
            logger.debug(f"Skip window full, evicted {evicted.track.id}")

        return entry

    def was_recently_skipped(self, track_id: str) -> bool:
        return self._counts.has(track_id)

    def skip_count(self, track_id: str) -> int:
        return self._counts.get(track_id, 0)

    def skipped_within(self, track_id: str, minutes: float, now: Optional[datetime] = None) -> bool:
        cutoff = (now or datetime.now()) - timedelta(minutes=minutes)
        return any(e.track.id == track_id and e.skipped_at >= cutoff for e in self._queue)

    def history(self) -> list[SkipEntry]:
        """Skips in the window, most recent first."""
        return self._queue.to_list()[::-1]

    def recent(self, limit: Optional[int] = None) -> list[SkipEntry]:
        entries = self.history()
        return entries[:limit] if limit else entries

    def skipped_in_last_minutes(self, minutes: float, now: Optional[datetime] = None) -> list[SkipEntry]:
        cutoff = (now or datetime.now()) - timedelta(minutes=minutes)
        return [e for e in self._queue if e.skipped_at >= cutoff]

    def most_skipped(self, limit: int = 5) -> list[tuple[Track, int]]:
        """(track, skip_count) pairs, highest first; ties keep oldest-first order."""
        seen: ChainedHashTable[str, bool] = ChainedHashTable()
        pairs: list[tuple[Track, int]] = []
        for entry in self._queue:
            if not seen.has(entry.track.id):
                seen.set(entry.track.id, True)
                pairs.append((entry.track, self.skip_count(entry.track.id)))
        return merge_sort(pairs, lambda a, b: b[1] - a[1])[:limit]

    def remove(self, track_id: str) -> bool:
        """
        Forget every skip of a track, rebuilding the window without it.

        Returns:
            False if the track was not in the window
        """
        if not self._counts.has(track_id):
            return False

        kept = [e for e in self._queue if e.track.id != track_id]
        self._queue.clear()
        for entry in kept:
            self._queue.enqueue(entry)
        self._counts.delete(track_id)
        return True

    def filter_out_recent(self, tracks: Iterable[Track]) -> list[Track]:
        return [t for t in tracks if not self._counts.has(t.id)]

    def resize(self, new_size: int) -> bool:
        """
        Change the window size, keeping the most recent skips.

        Returns:
            False if new_size < 1 (window unchanged)
        """
        if new_size < 1:
            logger.warning(f"Ignoring skip window resize to {new_size}")
            return False

        kept = self._queue.to_list()[-new_size:]
        self._queue = CircularQueue(new_size)
        self._counts.clear()
        for entry in kept:
            self._queue.enqueue(entry)
            self._counts.set(entry.track.id, self._counts.get(entry.track.id, 0) + 1)
        return True

    def stats(self) -> dict[str, Any]:
        entries = self._queue.to_list()
        unique = len(self._counts)
        times = [e.skipped_at for e in entries]
        return {
            "total_skips_tracked": len(entries),
            "unique_tracks_skipped": unique,
            "average_skips_per_track": len(entries) / unique if unique else 0.0,
            "oldest_skip_time": min(times) if times else None,
            "newest_skip_time": max(times) if times else None,
            "max_history_size": self.max_size,
            "current_history_size": len(entries),
        }

    def export(self) -> dict[str, Any]:
        return {
            "skip_history": self.history(),
            "skip_counts": {track_id: count for track_id, count in self._counts},
            "stats": self.stats(),
            "exported_at": datetime.now(),
        }

    def clear(self) -> None:
        self._queue.clear()
        self._counts.clear()

    def _decrement(self, track_id: str) -> None:
        count = self._counts.get(track_id, 0)
        if count > 1:
            self._counts.set(track_id, count - 1)
        else:
            self._counts.delete(track_id)
