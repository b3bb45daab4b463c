"""FFmpeg argument builder.

This module translates stream descriptors into ffmpeg command-line
arguments. An ffmpeg invocation looks like::

    ffmpeg [global_options] {[input_file_options] -i input_url} ...
           {[output_file_options] output_url} ...

All functions are pure: they return new lists and never mutate their
arguments.

Example:
    >>> args = input_args("mp3")
    >>> args += ["-i", "-"]
    >>> args = output_args(args, {"format": "wav"})
    >>> args.append("-")
"""

import logging
import shlex
from collections.abc import Sequence
from typing import Any

from ffmpeg_pipe.tools.specs import normalize_stream_spec

logger = logging.getLogger(__name__)

# Only output errors to stderr, skip video, data and subtitle streams
BASELINE_ARGS: tuple[str, ...] = ("-loglevel", "error", "-vn", "-dn", "-sn")

# Destinations routed to the local audio output device
DEVICE_ALIASES: frozenset[str] = frozenset({"speakers", "speaker", "local", "default"})

# ffmpeg reads from stdin / writes to stdout
PIPE = "-"


def _format_seek(seek: float) -> str:
    if float(seek).is_integer():
        return str(int(seek))
    return str(seek)


def input_args(input: Any = None, log: logging.Logger | None = None) -> list[str]:
    """Build the arguments describing how an incoming stream is interpreted.

    Leaving the format blank makes ffmpeg guess, which works for files but
    is unreliable for pipes.

    Args:
        input: None, a format string, a mapping or a StreamSpec.
        log: Logger to use instead of the module logger.

    Returns:
        Baseline arguments followed by input format and codec flags.
    """
    log = log or logger
    args = list(BASELINE_ARGS)

    spec = normalize_stream_spec(input)
    if spec is None or not spec.format:
        log.info("No incoming format info, ffmpeg will be forced to guess")
    if spec is None:
        return args

    if spec.format:
        args.extend(["-f", spec.format])
    if spec.codec:
        args.extend(["-codec:a", spec.codec])
    return args


def output_args(args: Sequence[str], output: Any = None) -> list[str]:
    """Append output format and codec flags to a copy of args.

    Args:
        args: Arguments built so far.
        output: None, a format string, a mapping or a StreamSpec.

    Returns:
        New argument list.
    """
    result = list(args)
    spec = normalize_stream_spec(output)
    if spec is None:
        return result

    if spec.format:
        result.extend(["-f", spec.format])
    if spec.codec:
        result.extend(["-codec:a", spec.codec])
    return result


def seek_args(seek: float | None) -> list[str]:
    """Get arguments discarding decoded audio before a timestamp.

    Must be placed after the input designation. Seeking on the input is
    faster but less precise and produces stderr noise.

    Args:
        seek: Offset in seconds. Zero or None disables seeking.

    Returns:
        ["-ss", offset] or an empty list.
    """
    if seek is None or seek <= 0:
        return []
    return ["-ss", _format_seek(seek)]


def device_output_args(
    output: Any = None,
    device_format: str = "alsa",
    device: str = "default",
) -> list[str]:
    """Get arguments routing output to the local audio device.

    Args:
        output: Optional output format override (string, mapping or StreamSpec).
        device_format: ffmpeg output device used when no format is given.
        device: Device name passed to the output device.

    Returns:
        ["-f", format, device].
    """
    spec = normalize_stream_spec(output)
    fmt = spec.format if spec is not None and spec.format else device_format
    return ["-f", fmt, device]


def has_baseline(args: Sequence[str]) -> bool:
    """Return True if args already start with the baseline flags."""
    return tuple(args[: len(BASELINE_ARGS)]) == BASELINE_ARGS


def with_baseline(args: Sequence[str]) -> list[str]:
    """Prepend the baseline flags unless already present."""
    if has_baseline(args):
        return list(args)
    return list(BASELINE_ARGS) + list(args)


def args_to_string(args: Sequence[str]) -> str:
    """Render arguments as a shell-quoted string for logging."""
    return shlex.join(str(arg) for arg in args)
