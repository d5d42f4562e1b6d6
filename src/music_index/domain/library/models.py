"""
Music library domain models.

Contains data structures for representing tracks and the records engines keep
about them (plays, skips, search filters).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

# Fields update_track() copies onto the stored record
METADATA_FIELDS = ("title", "artist", "album", "duration", "genre", "year", "file_url")


def normalize_key(text: Optional[str]) -> str:
    """Lowercase/trim a title or artist for case-insensitive lookup."""
    return (text or "").strip().lower()


@dataclass(eq=False)
class Track:
    """Represents a music track.

    One Track object is the single authoritative record for a track: every
    index (lookup, playlist, rating tree, history) holds a reference to the
    same object, so metadata edits are visible everywhere at once. Equality is
    identity for the same reason.

    ``id`` is fixed once set; reassigning it raises AttributeError.
    """

    id: str
    title: str
    artist: str
    album: str = ""
    duration: float = 0.0  # seconds
    genre: str = ""
    year: Optional[int] = None
    file_url: Optional[str] = None
    rating: Optional[int] = None  # 1..5, None = unrated
    play_count: int = 0
    date_added: datetime = field(default_factory=datetime.now)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id" and "id" in self.__dict__:
            raise AttributeError(f"Track id is immutable (tried to change {self.id!r})")
        super().__setattr__(name, value)

    @property
    def normalized_title(self) -> str:
        return normalize_key(self.title)

    @property
    def normalized_artist(self) -> str:
        return normalize_key(self.artist)


@dataclass(frozen=True)
class PlaybackEntry:
    """A single play recorded in history."""

    track: Track
    timestamp: datetime
    position: int = -1  # Playlist index at play time, -1 if not in playlist


@dataclass(frozen=True)
class SkipEntry:
    """A single skip recorded in the sliding skip window."""

    track: Track
    skipped_at: datetime


@dataclass
class SearchCriteria:
    """Filters for advanced lookup. Unset fields match everything.

    title/artist match by case-insensitive substring, genre exactly
    (case-insensitive). Rating bounds exclude unrated tracks.
    """

    title: Optional[str] = None
    artist: Optional[str] = None
    genre: Optional[str] = None
    min_duration: Optional[float] = None
    max_duration: Optional[float] = None
    min_rating: Optional[int] = None
    max_rating: Optional[int] = None

    def matches(self, track: Track) -> bool:
        if self.title and normalize_key(self.title) not in track.normalized_title:
            return False
        if self.artist and normalize_key(self.artist) not in track.normalized_artist:
            return False
        if self.genre and normalize_key(self.genre) != normalize_key(track.genre):
            return False
        if self.min_duration is not None and track.duration < self.min_duration:
            return False
        if self.max_duration is not None and track.duration > self.max_duration:
            return False
        if self.min_rating is not None and (track.rating is None or track.rating < self.min_rating):
            return False
        if self.max_rating is not None and (track.rating is None or track.rating > self.max_rating):
            return False
        return True
