"""Configuration module for ffmpeg-pipe."""

from ffmpeg_pipe.config.loader import get_config, load_config_file
from ffmpeg_pipe.config.logging_factory import build_logging_config
from ffmpeg_pipe.config.models import (
    DeviceConfig,
    FFmpegPipeConfig,
    LoggingConfig,
    StreamConfig,
    ToolPathsConfig,
)

__all__ = [
    "DeviceConfig",
    "FFmpegPipeConfig",
    "LoggingConfig",
    "StreamConfig",
    "ToolPathsConfig",
    "build_logging_config",
    "get_config",
    "load_config_file",
]
