"""Tests for configuration loading."""

import tomllib
from pathlib import Path

import pytest

from music_index.core.config import (
    Config,
    PlaylistConfig,
    create_default_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    load_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate from the developer's environment and working directory."""
    for name in ("MUSIC_INDEX_LOG_LEVEL", "MUSIC_INDEX_HISTORY_SIZE", "MUSIC_INDEX_SKIP_WINDOW"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    def test_default_values(self) -> None:
        config = Config()
        assert config.library.lookup_capacity == 200
        assert config.history.max_size == 50
        assert config.skips.window_size == 10
        assert config.replay.top_count == 3
        assert config.replay.calming_genres == ["lo-fi", "jazz", "ambient", "classical", "chill"]
        assert config.playlist.default_algorithm == "merge"

    def test_default_toml_matches_dataclasses(self) -> None:
        data = tomllib.loads(create_default_config())
        assert data["history"]["max_size"] == Config().history.max_size
        assert data["skips"]["window_size"] == Config().skips.window_size
        assert data["replay"]["calming_genres"] == Config().replay.calming_genres

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path / "missing.toml")
        assert config == Config()


class TestPaths:
    def test_xdg_dirs(self, tmp_path: Path) -> None:
        assert get_config_dir() == tmp_path / "xdg-config" / "music-index"
        assert get_data_dir() == tmp_path / "xdg-data" / "music-index"

    def test_local_file_preferred(self, tmp_path: Path) -> None:
        assert get_config_path() == tmp_path / "xdg-config" / "music-index" / "config.toml"
        (tmp_path / "music-index.toml").write_text("")
        assert get_config_path() == tmp_path / "music-index.toml"


class TestLoading:
    def test_reads_sections(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text(
            """
[history]
max_size = 5

[skips]
window_size = 3

[replay]
enabled = false
calming_genres = ["Jazz", "Ambient"]
top_count = 1

[playlist]
name = "Road Trip"
default_algorithm = "heap"

[logging]
level = "debug"
"""
        )
        config = load_config(path)
        assert config.history.max_size == 5
        assert config.skips.window_size == 3
        assert config.replay.enabled is False
        assert config.replay.calming_genres == ["jazz", "ambient"]
        assert config.playlist.name == "Road Trip"
        assert config.playlist.default_algorithm == "heap"
        assert config.logging.level == "DEBUG"

    def test_invalid_playlist_section_falls_back(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[playlist]\ndefault_algorithm = "bogo"\n')
        assert load_config(path).playlist == PlaylistConfig()

    def test_invalid_toml_falls_back(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[history\nmax_size = ")
        assert load_config(path) == Config()

    def test_env_overrides(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[history]\nmax_size = 5\n")
        monkeypatch.setenv("MUSIC_INDEX_HISTORY_SIZE", "7")
        monkeypatch.setenv("MUSIC_INDEX_SKIP_WINDOW", "not-a-number")
        monkeypatch.setenv("MUSIC_INDEX_LOG_LEVEL", "warning")

        config = load_config(path)
        assert config.history.max_size == 7
        assert config.skips.window_size == 10
        assert config.logging.level == "WARNING"

    def test_dotenv_beside_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        # set then delete so monkeypatch removes whatever the .env file adds
        monkeypatch.setenv("MUSIC_INDEX_SKIP_WINDOW", "")
        monkeypatch.delenv("MUSIC_INDEX_SKIP_WINDOW")
        path = tmp_path / "config.toml"
        path.write_text("")
        (tmp_path / ".env").write_text("MUSIC_INDEX_SKIP_WINDOW=4\n")

        config = load_config(path)
        assert config.skips.window_size == 4


class TestPlaylistConfigValidation:
    def test_rejects_unknown_algorithm(self) -> None:
        with pytest.raises(ValueError):
            PlaylistConfig(default_algorithm="bogo").validate()

    def test_rejects_empty_id(self) -> None:
        with pytest.raises(ValueError):
            PlaylistConfig(playlist_id="").validate()
