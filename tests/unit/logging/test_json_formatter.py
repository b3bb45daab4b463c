"""Unit tests for the JSON log formatter."""

import json
import logging
import sys

from ffmpeg_pipe.logging.handlers import JSONFormatter


def _record(msg: str = "hello %s", args: tuple = ("world",), **extra):
    record = logging.LogRecord(
        name="ffmpeg_pipe.tools.process",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter output."""

    def test_basic_fields(self) -> None:
        """Should emit timestamp, level, logger and formatted message."""
        entry = json.loads(JSONFormatter().format(_record()))

        assert entry["level"] == "WARNING"
        assert entry["message"] == "hello world"
        assert entry["logger"] == "ffmpeg_pipe.tools.process"
        assert entry["timestamp"].endswith("+00:00")
        assert "context" not in entry

    def test_extra_fields_in_context(self) -> None:
        """Should put extra attributes under context."""
        record = _record(ffmpeg_label="ffmpeg[42]", stderr=["bad input"])

        entry = json.loads(JSONFormatter().format(record))

        assert entry["context"] == {
            "ffmpeg_label": "ffmpeg[42]",
            "stderr": ["bad input"],
        }

    def test_single_line(self) -> None:
        """Multi-line messages stay on one output line."""
        output = JSONFormatter().format(_record("a\n\tb", ()))

        assert "\n" not in output
        assert json.loads(output)["message"] == "a\n\tb"

    def test_exception(self) -> None:
        """Should include formatted exception info."""
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()

        entry = json.loads(JSONFormatter().format(record))

        assert "RuntimeError: boom" in entry["exception"]
