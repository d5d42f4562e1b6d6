"""Core infrastructure - configuration and logging."""

from .config import (
    Config,
    HistoryConfig,
    LibraryConfig,
    LoggingConfig,
    PlaylistConfig,
    ReplayConfig,
    SkipConfig,
    create_default_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    load_config,
)
from .output import setup_logging, setup_loguru

__all__ = [
    # Config
    "Config",
    "LibraryConfig",
    "PlaylistConfig",
    "HistoryConfig",
    "SkipConfig",
    "ReplayConfig",
    "LoggingConfig",
    "load_config",
    "create_default_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    # Logging
    "setup_loguru",
    "setup_logging",
]
