"""Tests for the Session façade."""

import random

import pytest

from music_index.core.config import Config, HistoryConfig, ReplayConfig, SkipConfig
from music_index.domain.library import SearchCriteria, Track
from music_index.session import Session
from music_index.structures import SortCriteria


def make(track_id: str, **kwargs) -> Track:
    kwargs.setdefault("title", f"Title {track_id}")
    kwargs.setdefault("artist", "Artist")
    return Track(id=track_id, **kwargs)


@pytest.fixture
def session() -> Session:
    """Session with A, B, C, D registered and queued in order."""
    session = Session.create()
    for track_id, duration, genre in [("A", 240, "jazz"), ("B", 180, "rock"), ("C", 300, "ambient"), ("D", 200, "jazz")]:
        session.add_track(make(track_id, duration=duration, genre=genre))
    return session


def playlist_ids(session: Session) -> list[str]:
    return [t.id for t in session.list_playlist()]


class TestCreate:
    def test_engines_sized_from_config(self) -> None:
        config = Config(history=HistoryConfig(max_size=3), skips=SkipConfig(window_size=2))
        session = Session.create(config)
        assert session.history.max_size == 3
        assert session.skips.max_size == 2
        assert session.current_index == -1
        assert not session.is_playing

    def test_sessions_are_independent(self) -> None:
        first = Session.create()
        second = Session.create()
        first.add_track(make("X"))
        assert second.get_track("X") is None


class TestTrackCrud:
    def test_add_and_get(self, session: Session) -> None:
        assert session.get_track("A").duration == 240
        assert playlist_ids(session) == ["A", "B", "C", "D"]

    def test_duplicate_rejected(self, session: Session) -> None:
        assert session.add_track(make("A")) is False
        assert playlist_ids(session) == ["A", "B", "C", "D"]

    def test_add_without_playlist(self, session: Session) -> None:
        session.add_track(make("E"), add_to_playlist=False)
        assert session.get_track("E") is not None
        assert "E" not in playlist_ids(session)

    def test_prerated_track_is_indexed(self, session: Session) -> None:
        session.add_track(make("E", rating=4))
        assert [t.id for t in session.by_rating(4)] == ["E"]

    def test_add_rejects_invalid_rating(self, session: Session) -> None:
        track = make("Z", rating=9)
        assert session.add_track(track) is False
        assert session.get_track("Z") is None
        assert "Z" not in playlist_ids(session)
        assert track.rating == 9

    def test_remove_from_every_engine(self, session: Session) -> None:
        session.rate("B", 5)
        session.record_skip("B")
        session.record_play("B")
        session.add_to_playlist(session.get_track("B"))

        assert session.remove_track("B") is True
        assert session.get_track("B") is None
        assert "B" not in playlist_ids(session)
        assert session.by_rating(5) == []
        assert not session.was_recently_skipped("B")
        assert session.replay.play_count("B") == 0
        assert session.remove_track("B") is False

    def test_update_rekeys_and_rates(self, session: Session) -> None:
        stored = session.get_track("A")
        assert session.update_track(make("A", title="New Title", artist="New Artist", rating=3)) is True

        assert stored.title == "New Title"
        assert session.lookup.get_by_title("new title") is stored
        assert session.lookup.get_by_title("title a") is None
        assert session.by_rating(3) == [stored]
        assert session.list_playlist()[0] is stored

    def test_update_with_invalid_rating_changes_nothing(self, session: Session) -> None:
        session.rate("A", 4)
        stored = session.get_track("A")

        assert session.update_track(make("A", title="New", artist="Other", rating=9)) is False
        assert stored.title == "Title A"
        assert stored.artist == "Artist"
        assert stored.rating == 4
        assert session.lookup.get_by_title("title a") is stored
        assert session.lookup.get_by_title("new") is None
        assert session.by_rating(4) == [stored]

    def test_genre_edit_updates_replay_picks(self, session: Session) -> None:
        session.record_play("A")
        session.record_play("C")
        session.record_play("C")
        assert [t.id for t in session.replay.replay_candidates()] == ["C", "A"]

        session.update_track(make("C", duration=300, genre="rock"))
        assert [t.id for t in session.replay.replay_candidates()] == ["A"]

    def test_update_unknown(self, session: Session) -> None:
        assert session.update_track(make("Z")) is False

    def test_search(self, session: Session) -> None:
        found = session.search(SearchCriteria(genre="JAZZ", min_duration=220))
        assert [t.id for t in found] == ["A"]


class TestPlaylist:
    def test_move_forward(self, session: Session) -> None:
        """[A, B, C, D] move(0, 2) lands A one slot before index 2."""
        assert session.move_in_playlist(0, 2) is True
        assert playlist_ids(session) == ["B", "A", "C", "D"]

    def test_move_invalid(self, session: Session) -> None:
        assert session.move_in_playlist(0, 10) is False

    def test_add_requires_registration(self, session: Session) -> None:
        assert session.add_to_playlist(make("Z")) is False

    def test_add_inserts_stored_record(self, session: Session) -> None:
        copy = make("C")
        assert session.add_to_playlist(copy, position=0) is True
        assert session.list_playlist()[0] is session.get_track("C")

    def test_remove_from_playlist(self, session: Session) -> None:
        assert session.remove_from_playlist(1).id == "B"
        assert session.remove_from_playlist(10) is None
        assert session.get_track("B") is not None

    def test_sort_and_reverse(self, session: Session) -> None:
        assert session.sort_playlist(SortCriteria("duration")) is True
        assert playlist_ids(session) == ["B", "D", "A", "C"]
        session.reverse_playlist()
        assert playlist_ids(session) == ["C", "A", "D", "B"]

    def test_sort_unknown_algorithm(self, session: Session) -> None:
        assert session.sort_playlist(SortCriteria("duration"), "bogo") is False
        assert playlist_ids(session) == ["A", "B", "C", "D"]

    def test_shuffle(self, session: Session) -> None:
        assert session.shuffle_playlist(random.Random(1)) is True
        assert sorted(playlist_ids(session)) == ["A", "B", "C", "D"]

    def test_cursor_follows_current_track(self, session: Session) -> None:
        session.record_play("C")
        assert session.current_index == 2
        session.reverse_playlist()
        assert session.current_index == 1
        session.remove_from_playlist(0)
        assert session.current_index == 0


class TestRating:
    def test_rerate_moves_bucket(self, session: Session) -> None:
        session.rate("A", 4)
        session.rate("A", 5)
        assert session.by_rating(4) == []
        assert [t.id for t in session.by_rating(5)] == ["A"]
        assert session.get_track("A").rating == 5

    def test_invalid_rating(self, session: Session) -> None:
        assert session.rate("A", 0) is False
        assert session.rate("Z", 3) is False
        assert session.get_track("A").rating is None

    def test_recommended(self, session: Session) -> None:
        session.rate("A", 4)
        session.rate("B", 5)
        session.rate("C", 2)
        assert [t.id for t in session.recommended()] == ["B", "A"]


class TestPlayback:
    def test_record_play(self, session: Session) -> None:
        entry = session.record_play("B")
        assert entry.track.id == "B"
        assert entry.position == 1
        assert session.get_track("B").play_count == 1
        assert session.currently_playing().id == "B"
        assert session.record_play("Z") is None

    def test_undo_restores_previous(self, session: Session) -> None:
        session.record_play("A")
        session.record_play("C")
        undone = session.undo_last_play()
        assert undone.track.id == "C"
        assert session.currently_playing().id == "A"
        assert session.current_index == 0

        session.undo_last_play()
        assert session.currently_playing() is None
        assert session.undo_last_play() is None

    def test_undo_does_not_restore_removed_track(self, session: Session) -> None:
        session.record_play("A")
        session.record_play("B")
        session.remove_track("A")

        assert session.undo_last_play().track.id == "B"
        assert session.currently_playing() is None
        assert session.current_index == -1
        assert len(session.history) == 1

    def test_history_is_bounded(self) -> None:
        session = Session.create(Config(history=HistoryConfig(max_size=2)))
        for track_id in "ABC":
            session.add_track(make(track_id))
            session.record_play(track_id)
        assert [e.track.id for e in session.history.history()] == ["C", "B"]

    def test_skip_window(self) -> None:
        """Skipping A, B, C with window 2 forgets A."""
        session = Session.create(Config(skips=SkipConfig(window_size=2)))
        for track_id in "ABC":
            session.add_track(make(track_id))
            assert session.record_skip(track_id) is True
        assert not session.was_recently_skipped("A")
        assert session.was_recently_skipped("B")
        assert session.was_recently_skipped("C")
        assert session.record_skip("Z") is False

    def test_next_and_previous(self, session: Session) -> None:
        assert session.play_next().track.id == "A"
        assert session.play_next().track.id == "B"
        assert session.play_previous().track.id == "A"
        assert session.play_previous() is None

    def test_end_of_playlist_stops_without_replay(self) -> None:
        session = Session.create(Config(replay=ReplayConfig(enabled=False)))
        session.add_track(make("A"))
        session.play_next()
        assert session.play_next() is None
        assert not session.is_playing

    def test_end_of_playlist_auto_replays(self, session: Session) -> None:
        session.record_play("C")
        session.record_play("C")
        session.record_play("A")
        session.record_play("D")

        entry = session.play_next()
        assert entry.track.id == "C"
        assert session.auto_replay_mode is True

    def test_auto_replay_skips_recently_skipped(self, session: Session) -> None:
        session.record_play("C")
        session.record_play("C")
        session.record_play("A")
        session.record_skip("C")

        assert session.start_auto_replay().track.id == "A"

    def test_auto_replay_without_candidates(self, session: Session) -> None:
        assert session.start_auto_replay() is None
        assert session.auto_replay_mode is False


class TestStatusAndReset:
    def test_status(self, session: Session) -> None:
        session.record_play("A")
        session.rate("A", 5)
        status = session.status()
        assert status["currently_playing"].id == "A"
        assert status["playlist_size"] == 4
        assert status["total_tracks"] == 4
        assert status["history_size"] == 1
        assert status["rated_tracks"] == 1
        assert status["system"]["tracks"]["total"] == 4

    def test_reset(self, session: Session) -> None:
        session.rate("A", 5)
        session.record_play("A")
        session.record_skip("B")
        session.reset()

        assert session.list_playlist() == []
        assert session.get_track("A") is None
        assert session.by_rating(5) == []
        assert len(session.history) == 0
        assert not session.was_recently_skipped("B")
        assert session.currently_playing() is None
        assert session.current_index == -1
