"""Logging configuration for ffmpeg-pipe.

Provides configure_logging() to set up logging based on LoggingConfig.
Handlers are installed on the root logger, but only the ``ffmpeg_pipe``
logger tree follows the configured level; other libraries stay at warning
unless debug output is requested.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from ffmpeg_pipe.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from ffmpeg_pipe.config.models import LoggingConfig

# Logger at the top of the package's logger tree
PACKAGE_LOGGER = "ffmpeg_pipe"

_LEVEL_MAP: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(_TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")


def _open_log_file(config: LoggingConfig) -> logging.Handler | None:
    """Open the rotating log file, or return None if it is unavailable."""
    assert config.file is not None
    try:
        file_path = Path(config.file).expanduser()
        file_path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            file_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {config.file}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> None:
    """Configure logging based on LoggingConfig.

    Stdout is never used, since it may carry a media stream. If the log
    file cannot be opened, logs go to stderr instead.

    Args:
        config: Logging configuration.
    """
    level = _LEVEL_MAP.get(config.level.casefold(), logging.INFO)

    logging.getLogger(PACKAGE_LOGGER).setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(min(level, logging.WARNING))
    root_logger.handlers.clear()

    handlers: list[logging.Handler] = []
    if config.file:
        file_handler = _open_log_file(config)
        if file_handler is not None:
            handlers.append(file_handler)
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    formatter = _build_formatter(config.format)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
