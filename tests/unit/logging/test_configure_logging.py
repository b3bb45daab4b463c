"""Unit tests for logging configuration."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from ffmpeg_pipe.config.models import LoggingConfig
from ffmpeg_pipe.logging import JSONFormatter, configure_logging
from ffmpeg_pipe.logging.config import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Save and restore root and package logger state between tests."""
    root = logging.getLogger()
    package = logging.getLogger(PACKAGE_LOGGER)
    original_handlers = root.handlers[:]
    original_level = root.level
    original_package_level = package.level
    yield
    package.setLevel(original_package_level)
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers[:] = original_handlers
    root.setLevel(original_level)


class TestConfigureLogging:
    """Tests for configure_logging()."""

    @pytest.mark.parametrize(
        "level,expected",
        [
            ("debug", logging.DEBUG),
            ("info", logging.INFO),
            ("WARNING", logging.WARNING),
            ("error", logging.ERROR),
        ],
    )
    def test_levels(self, level: str, expected: int) -> None:
        """Should set the package logger and handler levels from config."""
        configure_logging(LoggingConfig(level=level))

        assert logging.getLogger(PACKAGE_LOGGER).level == expected
        assert logging.getLogger().handlers[0].level == expected

    def test_other_libraries_stay_at_warning(self) -> None:
        """Should not raise other loggers to info."""
        configure_logging(LoggingConfig(level="info"))

        assert logging.getLogger().level == logging.WARNING
        assert not logging.getLogger("some.library").isEnabledFor(logging.INFO)
        assert logging.getLogger("ffmpeg_pipe.tools.process").isEnabledFor(
            logging.INFO
        )

    def test_debug_applies_to_all_loggers(self) -> None:
        """Should lower the root level for debug output."""
        configure_logging(LoggingConfig(level="debug"))

        assert logging.getLogger().level == logging.DEBUG

    def test_stderr_by_default(self) -> None:
        """Should log to stderr when no file is configured."""
        configure_logging(LoggingConfig())

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert not isinstance(handlers[0].formatter, JSONFormatter)

    def test_json_format(self) -> None:
        """Should use the JSON formatter when asked."""
        configure_logging(LoggingConfig(format="json"))

        assert isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)

    def test_file_only(self, tmp_path: Path) -> None:
        """Should log only to the file unless stderr is included."""
        log_file = tmp_path / "logs" / "ffpipe.log"

        configure_logging(LoggingConfig(file=log_file))
        logging.getLogger("ffmpeg_pipe.test").info("hello")

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], RotatingFileHandler)
        handlers[0].flush()
        assert "hello" in log_file.read_text()

    def test_file_and_stderr(self, tmp_path: Path) -> None:
        """Should add a stderr handler when include_stderr is set."""
        configure_logging(
            LoggingConfig(file=tmp_path / "ffpipe.log", include_stderr=True)
        )

        assert len(logging.getLogger().handlers) == 2

    def test_unwritable_file_falls_back_to_stderr(
        self, tmp_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        """Should warn and use stderr when the log file cannot be opened."""
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")

        configure_logging(LoggingConfig(file=blocker / "ffpipe.log"))

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert not isinstance(handlers[0], RotatingFileHandler)
        assert "Could not open log file" in capsys.readouterr().err
