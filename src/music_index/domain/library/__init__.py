"""Library domain - track records and multi-key lookup.

This domain handles:
- Track data models and history/skip records
- Registration and O(1)-average lookup by id, title, and artist
- Substring and multi-criteria search
"""

from .lookup import LookupIndex
from .models import (
    METADATA_FIELDS,
    PlaybackEntry,
    SearchCriteria,
    SkipEntry,
    Track,
    normalize_key,
)

__all__ = [
    # Models
    "Track",
    "PlaybackEntry",
    "SkipEntry",
    "SearchCriteria",
    "METADATA_FIELDS",
    "normalize_key",
    # Lookup
    "LookupIndex",
]
