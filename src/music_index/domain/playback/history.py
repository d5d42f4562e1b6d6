"""
Playback history with undo.

Plays are pushed onto a bounded stack, so history is LIFO and keeps only the
most recent ``max_size`` entries; once full, the oldest play is dropped.
"""

from datetime import datetime, timedelta
from typing import Any, Optional

from music_index.domain.library.models import PlaybackEntry, Track
from music_index.structures import BoundedStack, ChainedHashTable, merge_sort


class HistoryStack:
    """Most-recent-first play history."""

    def __init__(self, max_size: int = 50) -> None:
        self._stack: BoundedStack[PlaybackEntry] = BoundedStack(max_size)

    def __len__(self) -> int:
        return len(self._stack)

    @property
    def max_size(self) -> int:
        return self._stack.max_size

    def size(self) -> int:
        return len(self._stack)

    def is_empty(self) -> bool:
        return self._stack.is_empty()

    def record(
        self, track: Track, position: int = -1, timestamp: Optional[datetime] = None
    ) -> PlaybackEntry:
        """
        Push a play onto the history.

        Args:
            track: Track that was played
            position: Playlist index at play time (-1 if not in the playlist)
            timestamp: When it was played (defaults to now)

        Returns:
            The recorded entry
        """
        entry = PlaybackEntry(track=track, timestamp=timestamp or datetime.now(), position=position)
        self._stack.push(entry)
        return entry

    def undo(self) -> Optional[PlaybackEntry]:
        """Pop the most recent play (None if history is empty)."""
        return self._stack.pop()

    def last(self) -> Optional[PlaybackEntry]:
        return self._stack.peek()

    def history(self, limit: Optional[int] = None) -> list[PlaybackEntry]:
        """Entries, most recent first."""
        entries = self._stack.to_list()
        return entries[:limit] if limit else entries

    def recent(self, limit: int = 10) -> list[PlaybackEntry]:
        return self.history(limit)

    def in_time_range(self, start: datetime, end: datetime) -> list[PlaybackEntry]:
        return [e for e in self._stack if start <= e.timestamp <= end]

    def for_track(self, track_id: str) -> list[PlaybackEntry]:
        return [e for e in self._stack if e.track.id == track_id]

    def was_recently_played(self, track_id: str, within_last: int = 5) -> bool:
        return any(e.track.id == track_id for e in self.history(within_last))

    def played_in_last_minutes(
        self, minutes: float, now: Optional[datetime] = None
    ) -> list[PlaybackEntry]:
        cutoff = (now or datetime.now()) - timedelta(minutes=minutes)
        return [e for e in self._stack if e.timestamp >= cutoff]

    def most_played(self, limit: int = 10) -> list[tuple[Track, int]]:
        """
        Tracks ranked by how often they appear in the retained history.

        Returns:
            (track, play_count) pairs, highest count first; ties keep
            most-recent-first order
        """
        counts: ChainedHashTable[str, list[Any]] = ChainedHashTable()
        order: list[list[Any]] = []
        for entry in self._stack:
            slot = counts.get(entry.track.id)
            if slot is None:
                slot = [entry.track, 0]
                counts.set(entry.track.id, slot)
                order.append(slot)
            slot[1] += 1

        ranked = merge_sort(order, lambda a, b: b[1] - a[1])
        return [(track, count) for track, count in ranked[:limit]]

    def stats(self) -> dict[str, Any]:
        entries = self._stack.bottom_to_top()
        if not entries:
            return {
                "total_plays": 0,
                "unique_tracks": 0,
                "average_plays_per_track": 0.0,
                "first_play_time": None,
                "last_play_time": None,
                "total_listening_time": 0.0,
            }

        unique: ChainedHashTable[str, bool] = ChainedHashTable()
        for entry in entries:
            unique.set(entry.track.id, True)
        timestamps = [e.timestamp for e in entries]

        return {
            "total_plays": len(entries),
            "unique_tracks": len(unique),
            "average_plays_per_track": len(entries) / len(unique),
            "first_play_time": min(timestamps),
            "last_play_time": max(timestamps),
            "total_listening_time": sum(e.track.duration for e in entries),
        }

    def export(self) -> dict[str, Any]:
        return {
            "history": self.history(),
            "stats": self.stats(),
            "exported_at": datetime.now(),
        }

    def clear(self) -> None:
        self._stack.clear()
