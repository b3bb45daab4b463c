"""Tests for the doctor and check commands."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from ffmpeg_pipe.cli import main
from ffmpeg_pipe.cli.exit_codes import ExitCode
from ffmpeg_pipe.tools import CapabilityProbeError, CapabilitySet, FFmpegAdapter


@pytest.fixture
def adapter() -> FFmpegAdapter:
    """Create an adapter with a few capabilities."""
    return FFmpegAdapter(
        capabilities=CapabilitySet(
            formats=frozenset({"mp3", "ogg", "wav"}),
            codecs=frozenset({"mp3", "vorbis"}),
        ),
        ffmpeg_path=Path("/usr/bin/ffmpeg"),
    )


@pytest.fixture
def mock_create(adapter: FFmpegAdapter):
    """Patch adapter creation to return the fixture adapter."""
    with patch(
        "ffmpeg_pipe.cli.doctor.create_ffmpeg_adapter", return_value=adapter
    ) as mock:
        yield mock


class TestDoctor:
    """Tests for ffpipe doctor."""

    def test_reports_capabilities(self, runner: CliRunner, mock_create) -> None:
        """Should print counts and succeed."""
        result = runner.invoke(main, ["doctor"])

        assert result.exit_code == 0
        assert "ffmpeg-pipe Health Check" in result.output
        assert "Formats: 3" in result.output
        assert "Audio codecs: 2" in result.output
        assert "Playback device: alsa default" in result.output

    def test_verbose_lists_names(self, runner: CliRunner, mock_create) -> None:
        """Should list formats and codecs in verbose mode."""
        result = runner.invoke(main, ["doctor", "--verbose"])

        assert result.exit_code == 0
        assert "mp3, ogg, wav" in result.output
        assert "mp3, vorbis" in result.output

    def test_json_output(self, runner: CliRunner, mock_create) -> None:
        """Should emit machine readable output."""
        result = runner.invoke(main, ["doctor", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ffmpeg"] == "/usr/bin/ffmpeg"
        assert data["available"] is True
        assert data["formats"] == ["mp3", "ogg", "wav"]
        assert data["codecs"] == ["mp3", "vorbis"]
        assert data["device"] == {"format": "alsa", "name": "default"}

    def test_missing_ffmpeg(self, runner: CliRunner) -> None:
        """Should exit with TOOL_NOT_AVAILABLE when nothing was detected."""
        with patch(
            "ffmpeg_pipe.cli.doctor.create_ffmpeg_adapter",
            return_value=FFmpegAdapter(),
        ):
            result = runner.invoke(main, ["doctor"])

        assert result.exit_code == ExitCode.TOOL_NOT_AVAILABLE
        assert "Install ffmpeg" in result.output

    def test_empty_listing(self, runner: CliRunner) -> None:
        """Should exit with NO_CAPABILITIES on a fatal probe error."""
        with patch(
            "ffmpeg_pipe.cli.doctor.create_ffmpeg_adapter",
            side_effect=CapabilityProbeError("formats"),
        ):
            result = runner.invoke(main, ["doctor"])

        assert result.exit_code == ExitCode.NO_CAPABILITIES
        assert "No supported formats found" in result.output

    def test_passes_config(self, runner: CliRunner, mock_create, tmp_path) -> None:
        """Should build the adapter from the loaded config."""
        ffmpeg = tmp_path / "ffmpeg"
        ffmpeg.touch()

        runner.invoke(main, ["--ffmpeg", str(ffmpeg), "doctor"])

        config = mock_create.call_args[0][0]
        assert config.tools.ffmpeg == ffmpeg


class TestCheck:
    """Tests for ffpipe check."""

    def test_supported(self, runner: CliRunner, mock_create) -> None:
        """Should print supported and exit 0."""
        result = runner.invoke(
            main, ["check", "--format", "ogg", "--codec", "vorbis"]
        )

        assert result.exit_code == 0
        assert result.output.strip() == "supported"

    def test_unsupported(self, runner: CliRunner, mock_create) -> None:
        """Should print unsupported and exit NOT_SUPPORTED."""
        result = runner.invoke(main, ["check", "--format", "flac", "--codec", "flac"])

        assert result.exit_code == ExitCode.NOT_SUPPORTED
        assert "unsupported" in result.output

    def test_unknown(self, runner: CliRunner, mock_create) -> None:
        """Should print unknown when the codec is not given."""
        result = runner.invoke(main, ["check", "--format", "mp3"])

        assert result.exit_code == ExitCode.SUPPORT_UNKNOWN
        assert "unknown" in result.output


class TestMain:
    """Tests for global options."""

    def test_invalid_config(self, runner: CliRunner, tmp_path: Path) -> None:
        """Should exit with CONFIG_ERROR on invalid settings."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[logging]\nformat = "xml"\n')

        result = runner.invoke(main, ["--config", str(config_file), "doctor"])

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "invalid configuration" in result.output

    def test_version(self, runner: CliRunner) -> None:
        """Should print the package version."""
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_configures_logging(
        self, runner: CliRunner, mock_create, no_logging_setup
    ) -> None:
        """Should apply logging overrides from the command line."""
        runner.invoke(main, ["--log-level", "debug", "--log-json", "doctor"])

        logging_config = no_logging_setup.call_args[0][0]
        assert logging_config.level == "debug"
        assert logging_config.format == "json"
