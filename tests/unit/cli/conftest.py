"""Shared fixtures for CLI tests."""

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Point the CLI at a missing config file and clear FFPIPE_* variables."""
    for name in (
        "FFPIPE_FFMPEG_PATH",
        "FFPIPE_DEVICE_FORMAT",
        "FFPIPE_DEVICE",
        "FFPIPE_STREAM_FORMAT",
        "FFPIPE_LOG_LEVEL",
        "FFPIPE_LOG_FILE",
        "FFPIPE_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FFPIPE_CONFIG_PATH", str(tmp_path / "missing.toml"))


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep the CLI from replacing the test's log handlers."""
    with patch("ffmpeg_pipe.cli.configure_logging") as mock:
        yield mock


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner."""
    return CliRunner()
