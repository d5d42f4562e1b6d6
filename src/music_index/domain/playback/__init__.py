"""Playback domain - what was played, what was skipped, what to replay.

This domain handles:
- Bounded play history with undo (HistoryStack)
- Sliding window of recent skips with per-track counts (SkipTracker)
- Play counting and calming-genre auto-replay picks (ReplaySelector)
"""

from .history import HistoryStack
from .replay import ReplaySelector
from .skips import SkipTracker

__all__ = [
    "HistoryStack",
    "SkipTracker",
    "ReplaySelector",
]
