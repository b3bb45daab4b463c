"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (FFPIPE_*)
3. Config file (~/.ffpipe/config.toml)
4. Default values

Environment variables:
- FFPIPE_CONFIG_PATH: Path to config file (overrides default location)
- FFPIPE_FFMPEG_PATH: Path to ffmpeg executable
- FFPIPE_DEVICE_FORMAT: ffmpeg output device for local playback (default alsa)
- FFPIPE_DEVICE: Device name for local playback (default "default")
- FFPIPE_STREAM_FORMAT: Format source streams are written in (default wav)
- FFPIPE_LOG_LEVEL: Log level (debug, info, warning, error)
- FFPIPE_LOG_FILE: Log file path
- FFPIPE_LOG_FORMAT: Log format (text, json)
"""

import logging
import os
import tomllib
from pathlib import Path

from ffmpeg_pipe.config.models import (
    DeviceConfig,
    FFmpegPipeConfig,
    LoggingConfig,
    StreamConfig,
    ToolPathsConfig,
)

logger = logging.getLogger(__name__)

# Default config location
DEFAULT_CONFIG_DIR = Path.home() / ".ffpipe"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


def get_default_config_path() -> Path:
    """Get the default config file path.

    Can be overridden by FFPIPE_CONFIG_PATH environment variable.

    Returns:
        Path to config file.
    """
    env_path = os.environ.get("FFPIPE_CONFIG_PATH")
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None) -> dict:
    """Load configuration from TOML file.

    Args:
        path: Path to config file. If None, uses default location.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist or is
        not valid TOML.
    """
    if path is None:
        path = get_default_config_path()

    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        config = tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load config file %s: %s", path, e)
        return {}

    logger.debug("Loaded config from %s", path)
    return config


def _get_env_path(var_name: str) -> Path | None:
    """Get a path from environment variable.

    Args:
        var_name: Environment variable name.

    Returns:
        Path if set and existing, None otherwise.
    """
    value = os.environ.get(var_name)
    if value:
        path = Path(value)
        if path.exists():
            return path
        logger.warning(
            "Environment variable %s points to non-existent path: %s",
            var_name,
            value,
        )
    return None


def _get_env_str(var_name: str, default: str) -> str:
    """Get a string from environment variable.

    Args:
        var_name: Environment variable name.
        default: Default value if not set.

    Returns:
        String value.
    """
    return os.environ.get(var_name, default)


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    ffmpeg_path: Path | None = None,
) -> FFmpegPipeConfig:
    """Get configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides FFPIPE_CONFIG_PATH).
        ffmpeg_path: CLI override for ffmpeg path.

    Returns:
        FFmpegPipeConfig with merged configuration.
    """
    file_config = load_config_file(config_path)

    tools_file = file_config.get("tools", {})
    tools = ToolPathsConfig(
        ffmpeg=(
            ffmpeg_path
            or _get_env_path("FFPIPE_FFMPEG_PATH")
            or (Path(tools_file["ffmpeg"]) if tools_file.get("ffmpeg") else None)
        ),
    )

    device_file = file_config.get("device", {})
    device = DeviceConfig(
        format=_get_env_str("FFPIPE_DEVICE_FORMAT", device_file.get("format", "alsa")),
        name=_get_env_str("FFPIPE_DEVICE", device_file.get("name", "default")),
    )

    stream_file = file_config.get("stream", {})
    stream = StreamConfig(
        format=_get_env_str("FFPIPE_STREAM_FORMAT", stream_file.get("format", "wav")),
    )

    logging_file = file_config.get("logging", {})
    log_file = os.environ.get("FFPIPE_LOG_FILE") or logging_file.get("file")
    logging_config = LoggingConfig(
        level=_get_env_str("FFPIPE_LOG_LEVEL", logging_file.get("level", "info")),
        file=Path(log_file).expanduser() if log_file else None,
        format=_get_env_str("FFPIPE_LOG_FORMAT", logging_file.get("format", "text")),
        include_stderr=logging_file.get("include_stderr", False),
        max_bytes=logging_file.get("max_bytes", 10_485_760),
        backup_count=logging_file.get("backup_count", 5),
    )

    return FFmpegPipeConfig(
        tools=tools, device=device, stream=stream, logging=logging_config
    )
