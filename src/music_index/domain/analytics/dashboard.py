"""
Live dashboard and system statistics.

Read-only aggregation across every engine held by a Session.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from music_index.domain.library.models import PlaybackEntry, Track
from music_index.structures import heap_sort

if TYPE_CHECKING:
    from music_index.session import Session


@dataclass
class DashboardSnapshot:
    """Point-in-time summary of the library and playback state."""

    top_longest_tracks: list[Track]
    most_recently_played: list[PlaybackEntry]
    count_by_rating: dict[int, int]
    total_tracks: int
    total_playlists: int
    average_rating: float
    timestamp: datetime = field(default_factory=datetime.now)


def _longest_first(a: Track, b: Track) -> int:
    if a.duration == b.duration:
        return 0
    return -1 if a.duration > b.duration else 1


def top_longest_tracks(session: "Session", limit: int = 5) -> list[Track]:
    """Longest registered tracks, via heap sort on duration."""
    return heap_sort(session.lookup.all_tracks(), _longest_first)[:limit]


def build_snapshot(session: "Session", limit: int = 5) -> DashboardSnapshot:
    """
    Build the live dashboard for a session.

    Args:
        session: Session to summarise
        limit: Size of the longest-tracks and recent-plays lists

    Returns:
        DashboardSnapshot
    """
    return DashboardSnapshot(
        top_longest_tracks=top_longest_tracks(session, limit),
        most_recently_played=session.history.recent(limit),
        count_by_rating=session.ratings.distribution(),
        total_tracks=len(session.lookup),
        total_playlists=1,
        average_rating=session.ratings.average(),
    )


def system_stats(session: "Session") -> dict[str, Any]:
    """Per-engine sizes and ratios, including hash table load statistics."""
    lookup_stats = session.lookup.stats()
    history_stats = session.history.stats()
    skip_stats = session.skips.stats()
    tracks = session.lookup.all_tracks()
    rated = session.ratings.total()

    total_plays = history_stats["total_plays"]
    return {
        "tracks": {
            "total": lookup_stats["total_tracks"],
            "rated": rated,
            "unrated": lookup_stats["total_tracks"] - rated,
            "average_rating": session.ratings.average(),
            "average_duration": sum(t.duration for t in tracks) / len(tracks) if tracks else 0.0,
        },
        "playback": {
            "total_plays": total_plays,
            "unique_tracks_played": history_stats["unique_tracks"],
            "total_listening_time": history_stats["total_listening_time"],
            "history_size": len(session.history),
        },
        "skipping": {
            "total_skips": skip_stats["total_skips_tracked"],
            "unique_tracks_skipped": skip_stats["unique_tracks_skipped"],
            "skip_rate": skip_stats["total_skips_tracked"] / total_plays if total_plays else 0.0,
        },
        "playlists": {
            "total_playlists": 1,
            "tracks_in_playlists": len(session.playlist),
        },
        "auto_replay": {
            "enabled": session.replay.config.enabled,
            "tracked_tracks": session.replay.stats()["tracked_tracks"],
            "total_plays": session.replay.total_plays(),
        },
        "hash_tables": lookup_stats["hash_tables"],
    }


def suggestions(session: "Session", limit: int = 5) -> dict[str, list[Track]]:
    """
    Rating suggestions drawn from play history.

    Returns:
        Dict with needs_rating (unrated tracks), popular_unrated (unrated but
        among the most played), undervalued (rated 2 or less yet among the
        most played) and overlooked (5 stars but not among the most played)
    """
    unrated = session.ratings.unrated(session.lookup.all_tracks())
    most_played = [track for track, _ in session.replay.most_played(20)]

    return {
        "needs_rating": unrated[: limit * 2],
        "popular_unrated": [t for t in unrated if t in most_played][:limit],
        "undervalued": [t for t in most_played if t.rating is not None and t.rating <= 2][:limit],
        "overlooked": [t for t in session.ratings.top_rated() if t not in most_played][:limit],
    }
