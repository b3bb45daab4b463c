"""Structured logging module for ffmpeg-pipe.

Provides configurable logging with JSON format support and file rotation.
"""

from ffmpeg_pipe.logging.config import configure_logging
from ffmpeg_pipe.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "configure_logging",
]
