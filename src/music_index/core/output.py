"""
Loguru sink setup.
Replaces the default stderr handler with a rotating file sink.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from music_index.core.config import Config, get_data_dir

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"


def setup_loguru(log_file: Path, level: str = "INFO", console_output: bool = False) -> None:
    """
    Configure loguru for file logging, optionally mirrored to stderr.

    Args:
        log_file: Path to log file
        level: Minimum level for logging (DEBUG, INFO, WARNING, ERROR)
        console_output: Also log to stderr
    """
    # Remove default handler
    logger.remove()

    logger.add(
        log_file,
        rotation="10 MB",
        retention=5,  # Keep 5 backup files
        level=level,
        format=LOG_FORMAT,
        enqueue=False,
    )

    if console_output:
        logger.add(sys.stderr, level=level, format=LOG_FORMAT)

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def setup_logging(config: Config, log_file: Optional[Path] = None) -> Path:
    """
    Apply the [logging] section of a config.

    Args:
        config: Loaded configuration
        log_file: Override for the log path

    Returns:
        The log file in use
    """
    if log_file is None:
        if config.logging.log_file:
            log_file = Path(config.logging.log_file)
        else:
            log_file = get_data_dir() / "music-index.log"

    log_file.parent.mkdir(parents=True, exist_ok=True)
    setup_loguru(log_file, config.logging.level, config.logging.console_output)
    return log_file
