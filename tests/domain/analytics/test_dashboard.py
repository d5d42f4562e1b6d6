"""Tests for dashboard snapshot and system statistics."""

import pytest

from music_index.domain.analytics import build_snapshot, suggestions, system_stats
from music_index.domain.library import Track
from music_index.session import Session


@pytest.fixture
def session() -> Session:
    session = Session.create()
    for i, (duration, genre) in enumerate([(200, "jazz"), (400, "rock"), (100, "jazz"), (300, "ambient")]):
        session.add_track(Track(id=f"t{i}", title=f"Track {i}", artist="A", duration=duration, genre=genre))
    return session


class TestSnapshot:
    def test_longest_tracks_and_totals(self, session: Session) -> None:
        snapshot = build_snapshot(session, limit=2)
        assert [t.id for t in snapshot.top_longest_tracks] == ["t1", "t3"]
        assert snapshot.total_tracks == 4
        assert snapshot.total_playlists == 1

    def test_recent_plays_and_ratings(self, session: Session) -> None:
        session.record_play("t0")
        session.record_play("t2")
        session.rate("t0", 5)
        session.rate("t2", 3)

        snapshot = session.dashboard()
        assert [e.track.id for e in snapshot.most_recently_played] == ["t2", "t0"]
        assert snapshot.count_by_rating == {3: 1, 5: 1}
        assert snapshot.average_rating == 4

    def test_empty_session(self) -> None:
        """An empty session still owns its one playlist."""
        session = Session.create()
        snapshot = build_snapshot(session)
        assert snapshot.top_longest_tracks == []
        assert snapshot.total_playlists == 1
        assert snapshot.average_rating == 0.0
        assert system_stats(session)["playlists"]["total_playlists"] == 1


class TestSystemStats:
    def test_sections(self, session: Session) -> None:
        session.rate("t1", 4)
        session.record_play("t1")
        session.record_play("t1")
        session.record_skip("t0")

        stats = system_stats(session)
        assert stats["tracks"]["total"] == 4
        assert stats["tracks"]["rated"] == 1
        assert stats["tracks"]["unrated"] == 3
        assert stats["tracks"]["average_duration"] == 250
        assert stats["playback"]["total_plays"] == 2
        assert stats["skipping"]["skip_rate"] == 0.5
        assert stats["playlists"]["tracks_in_playlists"] == 4
        assert stats["auto_replay"]["total_plays"] == 2
        assert stats["hash_tables"]["by_id"]["size"] == 4


class TestSuggestions:
    def test_categories(self, session: Session) -> None:
        session.rate("t0", 1)
        session.rate("t3", 5)
        session.record_play("t0")
        session.record_play("t1")

        result = suggestions(session)
        assert {t.id for t in result["needs_rating"]} == {"t1", "t2"}
        assert [t.id for t in result["popular_unrated"]] == ["t1"]
        assert [t.id for t in result["undervalued"]] == ["t0"]
        assert [t.id for t in result["overlooked"]] == ["t3"]
