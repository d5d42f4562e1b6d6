"""music-index - in-memory music track indexing.

Hand-written containers (linked list, chained hash table, rating tree, ring
buffers, bounded stack, merge/quick/heap sort) composed into playlist, lookup,
rating, history, skip and auto-replay engines, fronted by Session.
"""

__version__ = "0.1.0"

from music_index.core.config import Config, load_config
from music_index.domain.library.models import PlaybackEntry, SearchCriteria, SkipEntry, Track
from music_index.session import Session
from music_index.structures import SortCriteria

__all__ = [
    "Session",
    "Config",
    "load_config",
    "Track",
    "PlaybackEntry",
    "SkipEntry",
    "SearchCriteria",
    "SortCriteria",
]
