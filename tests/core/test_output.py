"""Tests for loguru setup."""

from pathlib import Path

import pytest
from loguru import logger

from music_index.core.config import Config, LoggingConfig
from music_index.core.output import setup_logging, setup_loguru


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    logger.remove()


class TestSetupLoguru:
    def test_writes_to_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "test.log"
        setup_loguru(log_file, "DEBUG")
        logger.debug("hello from test")
        logger.remove()

        content = log_file.read_text()
        assert "Loguru initialized" in content
        assert "hello from test" in content
        assert "| DEBUG    |" in content

    def test_level_filters(self, tmp_path: Path) -> None:
        log_file = tmp_path / "test.log"
        setup_loguru(log_file, "WARNING")
        logger.info("quiet")
        logger.warning("loud")
        logger.remove()

        content = log_file.read_text()
        assert "quiet" not in content
        assert "loud" in content


class TestSetupLogging:
    def test_uses_configured_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "nested" / "index.log"
        config = Config(logging=LoggingConfig(level="INFO", log_file=str(log_file)))
        assert setup_logging(config) == log_file
        assert log_file.exists()

    def test_defaults_to_data_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        path = setup_logging(Config())
        assert path == tmp_path / "music-index" / "music-index.log"
