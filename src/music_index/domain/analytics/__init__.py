"""Analytics domain - dashboard snapshot and cross-engine statistics."""

from .dashboard import (
    DashboardSnapshot,
    build_snapshot,
    suggestions,
    system_stats,
    top_longest_tracks,
)

__all__ = [
    "DashboardSnapshot",
    "build_snapshot",
    "system_stats",
    "suggestions",
    "top_longest_tracks",
]
