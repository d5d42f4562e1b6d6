"""
Auto-replay selection.

Counts plays per track and, when the playlist runs out, offers the most-played
tracks from "calming" genres for replay.
"""

from dataclasses import fields, replace
from typing import Any, Optional

from loguru import logger

from music_index.core.config import ReplayConfig
from music_index.domain.library.models import Track, normalize_key
from music_index.structures import ChainedHashTable, merge_sort


def _by_play_count(a: tuple[Track, int], b: tuple[Track, int]) -> int:
    return b[1] - a[1]


class ReplaySelector:
    """Per-track play counter with calming-genre replay picks."""

    def __init__(self, config: Optional[ReplayConfig] = None) -> None:
        base = config or ReplayConfig()
        self.config = replace(
            base, calming_genres=[normalize_key(g) for g in base.calming_genres]
        )
        self._play_counts: ChainedHashTable[str, int] = ChainedHashTable()
        self._genres: ChainedHashTable[str, str] = ChainedHashTable()
        self._tracks: ChainedHashTable[str, Track] = ChainedHashTable()

    def track_play(self, track: Track) -> None:
        """Count one play of a track and remember its genre."""
        self._play_counts.set(track.id, self._play_counts.get(track.id, 0) + 1)
        self._genres.set(track.id, normalize_key(track.genre))
        self._tracks.set(track.id, track)

    def refresh_track(self, track: Track) -> bool:
        """Re-read the genre of an already counted track after an edit."""
        if not self._play_counts.has(track.id):
            return False
        self._genres.set(track.id, normalize_key(track.genre))
        self._tracks.set(track.id, track)
        return True

    def should_auto_replay(self) -> bool:
        return self.config.enabled

    def is_calming(self, genre: str) -> bool:
        return normalize_key(genre) in self.config.calming_genres

    def replay_candidates(self) -> list[Track]:
        """
        Top-played tracks from calming genres.

        Returns:
            Up to ``top_count`` tracks with at least one play, highest play
            count first; empty when auto-replay is disabled
        """
        if not self.config.enabled:
            return []
        return self._ranked(lambda genre: genre in self.config.calming_genres)

    def candidates_by_genre(self, genre: str) -> list[Track]:
        """Top-played tracks of a single genre (calming or not)."""
        if not self.config.enabled:
            return []
        wanted = normalize_key(genre)
        return self._ranked(lambda g: g == wanted)

    def update_config(self, **changes: Any) -> bool:
        """
        Change replay settings.

        Args:
            **changes: Any of enabled, calming_genres, top_count

        Returns:
            False if an unknown setting was given (config unchanged)
        """
        known = {f.name for f in fields(ReplayConfig)}
        unknown = set(changes) - known
        if unknown:
            logger.warning(f"Unknown replay settings: {sorted(unknown)}")
            return False
        if "calming_genres" in changes:
            changes["calming_genres"] = [normalize_key(g) for g in changes["calming_genres"]]
        self.config = replace(self.config, **changes)
        return True

    def add_calming_genre(self, genre: str) -> None:
        key = normalize_key(genre)
        if key and key not in self.config.calming_genres:
            self.config.calming_genres.append(key)

    def remove_calming_genre(self, genre: str) -> bool:
        key = normalize_key(genre)
        if key not in self.config.calming_genres:
            return False
        self.config.calming_genres.remove(key)
        return True

    def most_played(self, limit: int = 10) -> list[tuple[Track, int]]:
        pairs = []
        for track_id, count in self._play_counts:
            track = self._tracks.get(track_id)
            if track is not None and count > 0:
                pairs.append((track, count))
        return merge_sort(pairs, _by_play_count)[:limit]

    def play_count(self, track_id: str) -> int:
        return self._play_counts.get(track_id, 0)

    def total_plays(self) -> int:
        return sum(self._play_counts.values())

    def stats_by_genre(self) -> dict[str, dict[str, float]]:
        """Track count, total plays and average plays per genre."""
        stats: ChainedHashTable[str, dict[str, float]] = ChainedHashTable()
        for track_id, genre in self._genres:
            entry = stats.get(genre)
            if entry is None:
                entry = {"track_count": 0, "total_plays": 0, "average_plays": 0.0}
                stats.set(genre, entry)
            entry["track_count"] += 1
            entry["total_plays"] += self.play_count(track_id)

        result = {}
        for genre, entry in stats:
            entry["average_plays"] = entry["total_plays"] / entry["track_count"]
            result[genre] = entry
        return result

    def reset_play_counts(self) -> None:
        self._play_counts.clear()

    def remove_track(self, track_id: str) -> bool:
        removed = self._play_counts.delete(track_id)
        removed = self._genres.delete(track_id) or removed
        removed = self._tracks.delete(track_id) or removed
        return removed

    def clear(self) -> None:
        self._play_counts.clear()
        self._genres.clear()
        self._tracks.clear()

    def stats(self) -> dict[str, Any]:
        return {
            "enabled": self.config.enabled,
            "tracked_tracks": len(self._tracks),
            "total_plays": self.total_plays(),
            "calming_genres": list(self.config.calming_genres),
            "top_count": self.config.top_count,
            "plays_by_genre": self.stats_by_genre(),
        }

    def _ranked(self, genre_matches) -> list[Track]:
        pairs = []
        for track_id, genre in self._genres:
            if not genre_matches(genre):
                continue
            track = self._tracks.get(track_id)
            count = self.play_count(track_id)
            if track is not None and count > 0:
                pairs.append((track, count))
        ranked = merge_sort(pairs, _by_play_count)
        return [track for track, _ in ranked[: self.config.top_count]]
