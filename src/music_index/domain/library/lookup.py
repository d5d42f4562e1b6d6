"""
Instant track lookup.

Three chained hash tables give O(1)-average retrieval by id, by normalized
title, and by normalized artist (artist maps to a list of tracks). The id
table is the authoritative store: ids are unique and every other index holds
references to the records it contains.
"""

from typing import Any, Optional

from loguru import logger

from music_index.structures import ChainedHashTable

from .models import METADATA_FIELDS, SearchCriteria, Track, normalize_key


class LookupIndex:
    """Track registry with id/title/artist hash indexes."""

    def __init__(self, initial_capacity: int = 200) -> None:
        self._by_id: ChainedHashTable[str, Track] = ChainedHashTable(initial_capacity)
        self._by_title: ChainedHashTable[str, Track] = ChainedHashTable(initial_capacity)
        self._by_artist: ChainedHashTable[str, list[Track]] = ChainedHashTable(initial_capacity)
        # id -> (title key, artist key) the track is currently filed under
        self._keys: ChainedHashTable[str, tuple[str, str]] = ChainedHashTable(initial_capacity)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, track_id: object) -> bool:
        return self._by_id.has(track_id)

    def has(self, track_id: str) -> bool:
        return self._by_id.has(track_id)

    def add_track(self, track: Track) -> bool:
        """
        Register a new track in all three indexes.

        Args:
            track: Track to register

        Returns:
            False if a track with the same id is already registered
        """
        if self._by_id.has(track.id):
            logger.debug(f"Lookup add rejected, duplicate id: {track.id}")
            return False

        self._by_id.set(track.id, track)
        self._by_title.set(track.normalized_title, track)
        self._add_artist_entry(track.normalized_artist, track)
        self._keys.set(track.id, (track.normalized_title, track.normalized_artist))
        return True

    def get_by_id(self, track_id: str) -> Optional[Track]:
        return self._by_id.get(track_id)

    def get_by_title(self, title: str) -> Optional[Track]:
        """Exact, case-insensitive title match. Last registered title wins."""
        return self._by_title.get(normalize_key(title))

    def get_by_artist(self, artist: str) -> list[Track]:
        tracks = self._by_artist.get(normalize_key(artist))
        return list(tracks) if tracks else []

    def remove_track(self, track_id: str) -> bool:
        """Remove a track from every index. Returns False if unknown."""
        track = self._by_id.get(track_id)
        if track is None:
            return False

        title_key, artist_key = self._keys.get(track_id)
        self._by_id.delete(track_id)
        self._keys.delete(track_id)
        self._drop_title_entry(title_key, track)
        self._drop_artist_entry(artist_key, track)
        return True

    def update_track(self, updated: Track) -> bool:
        """
        Apply new metadata to the stored record with the same id.

        The stored object is mutated in place (so playlist, rating and history
        references see the change) and stale title/artist mappings are
        replaced in the same call.

        Args:
            updated: Track carrying the new metadata; may be the stored object

        Returns:
            False if no track with that id is registered
        """
        existing = self._by_id.get(updated.id)
        if existing is None:
            return False

        old_title, old_artist = self._keys.get(existing.id)

        if updated is not existing:
            for name in METADATA_FIELDS:
                setattr(existing, name, getattr(updated, name))

        if existing.normalized_title != old_title:
            self._drop_title_entry(old_title, existing)
        self._by_title.set(existing.normalized_title, existing)

        if existing.normalized_artist != old_artist:
            self._drop_artist_entry(old_artist, existing)
            self._add_artist_entry(existing.normalized_artist, existing)

        self._keys.set(existing.id, (existing.normalized_title, existing.normalized_artist))
        return True

    def search_by_title(self, query: str) -> list[Track]:
        needle = normalize_key(query)
        return [t for t in self._by_id.values() if needle in t.normalized_title]

    def search_by_artist(self, query: str) -> list[Track]:
        needle = normalize_key(query)
        return [t for t in self._by_id.values() if needle in t.normalized_artist]

    def search_by_genre(self, genre: str) -> list[Track]:
        wanted = normalize_key(genre)
        return [t for t in self._by_id.values() if normalize_key(t.genre) == wanted]

    def advanced_search(self, criteria: SearchCriteria) -> list[Track]:
        return [t for t in self._by_id.values() if criteria.matches(t)]

    def all_tracks(self) -> list[Track]:
        return self._by_id.values()

    def all_artists(self) -> list[str]:
        """Normalized artist keys."""
        return self._by_artist.keys()

    def all_genres(self) -> list[str]:
        seen: ChainedHashTable[str, bool] = ChainedHashTable()
        genres: list[str] = []
        for track in self._by_id.values():
            if not seen.has(track.genre):
                seen.set(track.genre, True)
                genres.append(track.genre)
        return genres

    def stats(self) -> dict[str, Any]:
        total = len(self._by_id)
        artists = len(self._by_artist)
        return {
            "total_tracks": total,
            "total_artists": artists,
            "total_genres": len(self.all_genres()),
            "avg_tracks_per_artist": total / artists if artists else 0.0,
            "hash_tables": {
                "by_id": self._by_id.stats(),
                "by_title": self._by_title.stats(),
                "by_artist": self._by_artist.stats(),
            },
        }

    def clear(self) -> None:
        self._by_id.clear()
        self._by_title.clear()
        self._by_artist.clear()
        self._keys.clear()

    def _add_artist_entry(self, artist_key: str, track: Track) -> None:
        tracks = self._by_artist.get(artist_key)
        if tracks is None:
            self._by_artist.set(artist_key, [track])
        else:
            tracks.append(track)

    def _drop_artist_entry(self, artist_key: str, track: Track) -> None:
        tracks = self._by_artist.get(artist_key)
        if tracks is None:
            return
        remaining = [t for t in tracks if t is not track]
        if remaining:
            self._by_artist.set(artist_key, remaining)
        else:
            self._by_artist.delete(artist_key)

    def _drop_title_entry(self, title_key: str, track: Track) -> None:
        # Another track may have claimed this title since; leave it alone
        if self._by_title.get(title_key) is track:
            self._by_title.delete(title_key)
