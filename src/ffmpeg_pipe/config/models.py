"""Configuration data models.

This module defines dataclasses for ffmpeg-pipe configuration options.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class ToolPathsConfig:
    """Configuration for external tool paths.

    If not specified, ffmpeg is looked up in PATH.
    """

    ffmpeg: Path | None = None


@dataclass
class DeviceConfig:
    """Configuration for local playback.

    Used when a sink destination is one of the device aliases
    (speakers, speaker, local, default).
    """

    # ffmpeg output device format (alsa, pulse, ...)
    format: str = "alsa"

    # Device name passed to the output device
    name: str = "default"

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.format:
            raise ValueError("device format must not be empty")
        if not self.name:
            raise ValueError("device name must not be empty")


@dataclass
class StreamConfig:
    """Configuration for streams written to stdout."""

    # Format source() produces when the caller does not ask for one
    format: str = "wav"

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.format:
            raise ValueError("stream format must not be empty")


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class FFmpegPipeConfig:
    """Main configuration container."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    device: DeviceConfig = field(default_factory=DeviceConfig)
    stream: StreamConfig = field(default_factory=StreamConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
