"""Session object tying every engine together.

A Session owns one LookupIndex (the registry of authoritative Track records),
one PlaylistIndex, one RatingIndex, one HistoryStack, one SkipTracker and one
ReplaySelector, plus the playback cursor. Callers build one with
Session.create(config) and pass it explicitly; there is no module-level
instance.

Expected failures (unknown id, bad rating, bad index) are reported as
False/None/empty results, never raised.
"""

import random
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Union

from loguru import logger

from music_index.core.config import Config
from music_index.domain.analytics.dashboard import DashboardSnapshot, build_snapshot, system_stats
from music_index.domain.library.lookup import LookupIndex
from music_index.domain.library.models import PlaybackEntry, SearchCriteria, Track
from music_index.domain.playback.history import HistoryStack
from music_index.domain.playback.replay import ReplaySelector
from music_index.domain.playback.skips import SkipTracker
from music_index.domain.playlists.index import PlaylistIndex
from music_index.domain.rating.index import RatingIndex, is_valid_rating
from music_index.structures import SortCriteria


@dataclass
class Session:
    """In-memory music index session.

    Attributes:
        config: Configuration the engines were sized from
        lookup: Track registry with id/title/artist lookup
        playlist: The session playlist
        ratings: Rating-bucketed index
        history: Play history with undo
        skips: Recently-skipped window
        replay: Play counts and auto-replay picks
        current_index: Playlist position of the current track (-1 if none)
        is_playing: Whether something is playing
        auto_replay_mode: Whether playback came from auto-replay
    """

    config: Config
    lookup: LookupIndex
    playlist: PlaylistIndex
    ratings: RatingIndex
    history: HistoryStack
    skips: SkipTracker
    replay: ReplaySelector
    current_index: int = -1
    is_playing: bool = False
    auto_replay_mode: bool = False
    _current: Optional[Track] = field(default=None, repr=False)

    @classmethod
    def create(cls, config: Optional[Config] = None) -> "Session":
        """Create a session with empty engines sized from config.

        Args:
            config: Configuration (defaults to Config())

        Returns:
            New Session
        """
        config = config or Config()
        return cls(
            config=config,
            lookup=LookupIndex(config.library.lookup_capacity),
            playlist=PlaylistIndex(config.playlist.playlist_id, config.playlist.name),
            ratings=RatingIndex(),
            history=HistoryStack(config.history.max_size),
            skips=SkipTracker(config.skips.window_size),
            replay=ReplaySelector(config.replay),
        )

    # Track CRUD

    def add_track(self, track: Track, add_to_playlist: bool = True) -> bool:
        """Register a track, optionally appending it to the playlist.

        A track that arrives already rated is filed in the rating index.

        Returns:
            False if the id is already registered or the rating is out of range
        """
        if track.rating is not None and not is_valid_rating(track.rating):
            logger.warning(f"Rejecting {track.id}: invalid rating {track.rating!r}")
            return False
        if not self.lookup.add_track(track):
            return False

        if track.rating is not None:
            self.ratings.insert_track(track, track.rating)

        if add_to_playlist:
            self.playlist.add_track(track)
        logger.debug(f"Added track {track.id}")
        return True

    def remove_track(self, track_id: str) -> bool:
        """Remove a track from every engine.

        History entries already recorded are kept; they describe past plays.
        """
        track = self.lookup.get_by_id(track_id)
        if track is None:
            return False

        self.playlist.remove_all(track)
        self.ratings.remove_track(track_id)
        self.skips.remove(track_id)
        self.replay.remove_track(track_id)
        self.lookup.remove_track(track_id)

        if self._current is track:
            self._current = None
            self.current_index = -1
            self.is_playing = False
        elif self._current is not None:
            self.current_index = self.playlist.index_of(self._current)

        logger.debug(f"Removed track {track_id}")
        return True

    def get_track(self, track_id: str) -> Optional[Track]:
        return self.lookup.get_by_id(track_id)

    def update_track(self, track: Track) -> bool:
        """Apply new metadata (and rating, if changed) to a registered track.

        Returns:
            False if the track is unknown or its rating is out of range; the
            stored record is left untouched in both cases
        """
        existing = self.lookup.get_by_id(track.id)
        if existing is None:
            return False

        new_rating = track.rating
        if new_rating is not None and not is_valid_rating(new_rating):
            logger.warning(f"Rejecting update of {track.id}: invalid rating {new_rating!r}")
            return False
        if not self.lookup.update_track(track):
            return False

        if new_rating != self.ratings.rating_of(track.id):
            if new_rating is None:
                self.ratings.remove_track(track.id)
            else:
                self.ratings.insert_track(existing, new_rating)
        self.replay.refresh_track(existing)
        return True

    def search(self, criteria: SearchCriteria) -> list[Track]:
        return self.lookup.advanced_search(criteria)

    # Playlist

    def add_to_playlist(self, track: Track, position: Optional[int] = None) -> bool:
        """Insert a registered track into the playlist.

        The stored record with the same id is inserted, so the playlist never
        holds a stray copy.

        Args:
            track: Track (or any Track with a registered id)
            position: Index to insert at (None appends)

        Returns:
            False if the track is not registered or position is out of range
        """
        stored = self.lookup.get_by_id(track.id)
        if stored is None:
            logger.debug(f"Cannot add unregistered track {track.id} to playlist")
            return False

        if position is None:
            added = self.playlist.add_track(stored)
        else:
            added = self.playlist.add_track_at(stored, position)
        self._sync_cursor()
        return added

    def remove_from_playlist(self, index: int) -> Optional[Track]:
        removed = self.playlist.remove_at(index)
        if removed is not None:
            self._sync_cursor()
        return removed

    def move_in_playlist(self, from_index: int, to_index: int) -> bool:
        moved = self.playlist.move_track(from_index, to_index)
        if moved:
            self._sync_cursor()
        return moved

    def reverse_playlist(self) -> None:
        self.playlist.reverse()
        self._sync_cursor()

    def sort_playlist(
        self,
        criteria: Union[SortCriteria, Sequence[SortCriteria]],
        algorithm: Optional[str] = None,
    ) -> bool:
        sorted_ok = self.playlist.sort(criteria, algorithm or self.config.playlist.default_algorithm)
        if sorted_ok:
            self._sync_cursor()
        return sorted_ok

    def shuffle_playlist(self, rng: Optional[random.Random] = None) -> bool:
        shuffled = self.playlist.shuffle(rng)
        self._sync_cursor()
        return shuffled

    def list_playlist(self) -> list[Track]:
        return self.playlist.tracks()

    # Rating

    def rate(self, track_id: str, rating: int) -> bool:
        """Rate a registered track 1-5; re-rating replaces the old rating."""
        track = self.lookup.get_by_id(track_id)
        if track is None:
            return False
        if not self.ratings.insert_track(track, rating):
            return False
        self.lookup.update_track(track)
        return True

    def by_rating(self, rating: int) -> list[Track]:
        return self.ratings.search_by_rating(rating)

    def recommended(self, limit: Optional[int] = None) -> list[Track]:
        return self.ratings.recommended(limit)

    # Playback

    def record_play(self, track_id: str) -> Optional[PlaybackEntry]:
        """Play a registered track.

        Pushes it onto history, counts it for auto-replay, bumps its
        play_count and moves the cursor to its playlist position.

        Returns:
            The history entry, or None if the track is unknown
        """
        track = self.lookup.get_by_id(track_id)
        if track is None:
            return None

        position = self.playlist.index_of(track)
        entry = self.history.record(track, position)
        self.replay.track_play(track)
        track.play_count += 1

        self._current = track
        self.current_index = position
        self.is_playing = True
        return entry

    def undo_last_play(self) -> Optional[PlaybackEntry]:
        """Pop the last play from history.

        The cursor returns to the play before it (or is cleared when history
        is now empty). play_count is not rolled back.
        """
        entry = self.history.undo()
        if entry is None:
            return None

        previous = self.history.last()
        # removed tracks stay in history but cannot become current
        if previous is not None and self.lookup.has(previous.track.id):
            self._current = previous.track
            self.current_index = self.playlist.index_of(previous.track)
        else:
            self._current = None
            self.current_index = -1
            self.is_playing = False
        return entry

    def record_skip(self, track_id: str) -> bool:
        track = self.lookup.get_by_id(track_id)
        if track is None:
            return False
        self.skips.record_skip(track)
        return True

    def was_recently_skipped(self, track_id: str) -> bool:
        return self.skips.was_recently_skipped(track_id)

    def play_next(self) -> Optional[PlaybackEntry]:
        """Advance to the next playlist track.

        At the end of the playlist, falls back to auto-replay when enabled;
        otherwise playback stops.
        """
        next_index = self.current_index + 1
        if next_index < len(self.playlist):
            self.auto_replay_mode = False
            return self.record_play(self.playlist.get(next_index).id)

        if self.replay.should_auto_replay():
            return self.start_auto_replay()

        self.is_playing = False
        return None

    def play_previous(self) -> Optional[PlaybackEntry]:
        if self.current_index <= 0:
            return None
        self.auto_replay_mode = False
        return self.record_play(self.playlist.get(self.current_index - 1).id)

    def start_auto_replay(self) -> Optional[PlaybackEntry]:
        """Play the top calming track that was not recently skipped."""
        candidates = self.skips.filter_out_recent(self.replay.replay_candidates())
        if not candidates:
            logger.debug("No auto-replay candidates")
            self.is_playing = False
            return None

        entry = self.record_play(candidates[0].id)
        self.auto_replay_mode = True
        logger.info(f"Auto-replay started with {candidates[0].id}")
        return entry

    def currently_playing(self) -> Optional[Track]:
        return self._current if self.is_playing else None

    def status(self) -> dict[str, Any]:
        return {
            "currently_playing": self.currently_playing(),
            "current_index": self.current_index,
            "is_playing": self.is_playing,
            "auto_replay_mode": self.auto_replay_mode,
            "playlist_size": len(self.playlist),
            "total_tracks": len(self.lookup),
            "history_size": len(self.history),
            "rated_tracks": self.ratings.total(),
            "recent_skips": len(self.skips),
            "system": system_stats(self),
        }

    def dashboard(self) -> DashboardSnapshot:
        return build_snapshot(self)

    def reset(self) -> None:
        """Clear every engine and the playback cursor."""
        self.playlist.clear()
        self.history.clear()
        self.ratings.clear()
        self.lookup.clear()
        self.replay.clear()
        self.skips.clear()
        self._current = None
        self.current_index = -1
        self.is_playing = False
        self.auto_replay_mode = False
        logger.info("Session reset")

    def _sync_cursor(self) -> None:
        # Playlist edits shift positions; follow the current track
        if self._current is not None:
            self.current_index = self.playlist.index_of(self._current)
