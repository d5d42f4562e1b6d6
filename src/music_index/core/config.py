"""
Configuration management for music-index
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from loguru import logger

from music_index.structures.sorting import SORTERS

DEFAULT_CALMING_GENRES = ["lo-fi", "jazz", "ambient", "classical", "chill"]


@dataclass
class LibraryConfig:
    """Configuration for the track lookup index."""

    lookup_capacity: int = 200


@dataclass
class PlaylistConfig:
    """Configuration for the session playlist."""

    playlist_id: str = "default-playlist"
    name: str = "My Playlist"
    default_algorithm: str = "merge"  # merge, quick or heap

    def validate(self) -> None:
        """Validate playlist configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if self.default_algorithm not in SORTERS:
            raise ValueError(
                f"Invalid sort algorithm: {self.default_algorithm!r}. "
                f"Valid algorithms are: {sorted(SORTERS)}"
            )
        if not self.playlist_id:
            raise ValueError("playlist_id must not be empty")


@dataclass
class HistoryConfig:
    """Configuration for playback history."""

    max_size: int = 50


@dataclass
class SkipConfig:
    """Configuration for the recently-skipped window."""

    window_size: int = 10


@dataclass
class ReplayConfig:
    """Configuration for auto-replay of calming tracks."""

    enabled: bool = True
    calming_genres: List[str] = field(
        default_factory=lambda: list(DEFAULT_CALMING_GENRES)
    )
    top_count: int = 3


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/music-index/music-index.log)
    )
    console_output: bool = False  # Also output to stderr


@dataclass
class Config:
    """Main configuration object."""

    library: LibraryConfig = field(default_factory=LibraryConfig)
    playlist: PlaylistConfig = field(default_factory=PlaylistConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    skips: SkipConfig = field(default_factory=SkipConfig)
    replay: ReplayConfig = field(default_factory=ReplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "music-index"
    return Path.home() / ".config" / "music-index"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "music-index"
    return Path.home() / ".local" / "share" / "music-index"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for a config file in the following order:
    1. ./music-index.toml in the current working directory
    2. XDG_CONFIG_HOME/music-index/config.toml (or ~/.config/music-index)
    """
    local_config = Path.cwd() / "music-index.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# music-index configuration

[library]
# Initial bucket count of the lookup hash tables
lookup_capacity = 200

[playlist]
playlist_id = "default-playlist"
name = "My Playlist"

# Sort algorithm used when none is given (merge, quick, heap)
default_algorithm = "merge"

[history]
# Number of plays kept for undo; oldest is dropped when full
max_size = 50

[skips]
# Number of recent skips remembered
window_size = 10

[replay]
# Offer calming tracks for auto-replay
enabled = true
calming_genres = ["lo-fi", "jazz", "ambient", "classical", "chill"]

# How many of the most-played calming tracks to return
top_count = 3

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/music-index/music-index.log)
# log_file = "/path/to/music-index.log"

# Also output logs to stderr
console_output = false
""".strip()


def _apply_env_overrides(config: Config) -> None:
    """Override file values with MUSIC_INDEX_* environment variables."""
    log_level = os.environ.get("MUSIC_INDEX_LOG_LEVEL")
    if log_level:
        config.logging.level = log_level.upper()

    history_size = os.environ.get("MUSIC_INDEX_HISTORY_SIZE")
    if history_size:
        try:
            config.history.max_size = int(history_size)
        except ValueError:
            logger.warning(f"Ignoring non-integer MUSIC_INDEX_HISTORY_SIZE={history_size!r}")

    skip_window = os.environ.get("MUSIC_INDEX_SKIP_WINDOW")
    if skip_window:
        try:
            config.skips.window_size = int(skip_window)
        except ValueError:
            logger.warning(f"Ignoring non-integer MUSIC_INDEX_SKIP_WINDOW={skip_window!r}")


def load_config(path: Optional[Path] = None) -> Config:
    """Load configuration from file, falling back to defaults.

    A .env file beside the config file (or in the working directory) is
    loaded first so its MUSIC_INDEX_* variables take part in overrides.

    Args:
        path: Explicit config file (defaults to get_config_path())

    Returns:
        Parsed configuration; defaults for anything missing or invalid
    """
    config_path = Path(path) if path is not None else get_config_path()

    env_file = config_path.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)
    else:
        load_dotenv()

    if not config_path.exists():
        logger.debug(f"No config file at {config_path}, using defaults")
        config = Config()
        _apply_env_overrides(config)
        return config

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Error loading configuration from {config_path}: {e}")
        logger.warning("Using default configuration.")
        config = Config()
        _apply_env_overrides(config)
        return config

    config = Config()

    if "library" in toml_data:
        library_data = toml_data["library"]
        config.library = LibraryConfig(
            lookup_capacity=library_data.get(
                "lookup_capacity", config.library.lookup_capacity
            ),
        )

    if "playlist" in toml_data:
        playlist_data = toml_data["playlist"]
        config.playlist = PlaylistConfig(
            playlist_id=playlist_data.get("playlist_id", config.playlist.playlist_id),
            name=playlist_data.get("name", config.playlist.name),
            default_algorithm=playlist_data.get(
                "default_algorithm", config.playlist.default_algorithm
            ),
        )
        try:
            config.playlist.validate()
        except ValueError as e:
            logger.warning(f"Invalid playlist configuration: {e}")
            logger.warning("Using default playlist configuration.")
            config.playlist = PlaylistConfig()

    if "history" in toml_data:
        config.history = HistoryConfig(
            max_size=toml_data["history"].get("max_size", config.history.max_size),
        )

    if "skips" in toml_data:
        config.skips = SkipConfig(
            window_size=toml_data["skips"].get("window_size", config.skips.window_size),
        )

    if "replay" in toml_data:
        replay_data = toml_data["replay"]
        config.replay = ReplayConfig(
            enabled=replay_data.get("enabled", config.replay.enabled),
            calming_genres=[
                g.lower()
                for g in replay_data.get("calming_genres", config.replay.calming_genres)
            ],
            top_count=replay_data.get("top_count", config.replay.top_count),
        )

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if log_file:
            log_file = str(Path(log_file).expanduser())
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level).upper(),
            log_file=log_file,
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )

    _apply_env_overrides(config)
    return config
