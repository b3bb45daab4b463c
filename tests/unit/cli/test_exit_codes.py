"""Tests for CLI exit codes."""

from ffmpeg_pipe.cli.exit_codes import ExitCode


class TestExitCodes:
    """Tests for ExitCode values."""

    def test_values_are_unique(self) -> None:
        """No two exit codes share a value."""
        values = [code.value for code in ExitCode]
        assert len(values) == len(set(values))

    def test_support_results(self) -> None:
        """Support check results live in the 50 range."""
        assert ExitCode.NOT_SUPPORTED == 50
        assert ExitCode.SUPPORT_UNKNOWN == 51
