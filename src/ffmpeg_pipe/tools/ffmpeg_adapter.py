"""FFmpeg adapter exposing the streaming operations.

This module provides the caller-facing operations built on top of the
argument builder and process launcher:

- is_supported: check a track's format and codec against probed capabilities
- source: decode a local file or remote URL into a readable stream
- sink: consume a stream into the local audio device, a file or a pipe
- transform: recode a piped stream on the fly

Example:
    >>> from ffmpeg_pipe.tools.ffmpeg_adapter import create_ffmpeg_adapter
    >>> adapter = create_ffmpeg_adapter()
    >>> child = adapter.source("/music/song.flac")
    >>> child.readable.result()
    >>> data = child.stdout.read(4096)
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for pipe constants
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ffmpeg_pipe.tools.detection import find_ffmpeg, probe_capabilities
from ffmpeg_pipe.tools.ffmpeg_builder import (
    DEVICE_ALIASES,
    PIPE,
    device_output_args,
    input_args,
    output_args,
    seek_args,
)
from ffmpeg_pipe.tools.models import CapabilitySet
from ffmpeg_pipe.tools.process import FFmpegProcess, launch_ffmpeg
from ffmpeg_pipe.tools.specs import (
    StreamSpec,
    normalize_stream_spec,
    require_stream_spec,
    to_track_descriptor,
)

if TYPE_CHECKING:
    from ffmpeg_pipe.config.models import FFmpegPipeConfig

logger = logging.getLogger(__name__)


def _spec_seek(*specs: StreamSpec | None) -> float:
    """Return the first positive seek carried by specs, or 0."""
    for spec in specs:
        if spec is not None and spec.seek > 0:
            return spec.seek
    return 0


@dataclass
class FFmpegAdapter:
    """High-level adapter for piping audio through ffmpeg.

    Attributes:
        capabilities: Probed formats and codecs. Empty means nothing is
            reported as supported.
        ffmpeg_path: Path to the ffmpeg executable.
        device_format: ffmpeg output device used for local playback.
        device: Device name used for local playback.
        stream_format: Format written to stdout by source() when the caller
            does not ask for one.
    """

    capabilities: CapabilitySet = field(default_factory=CapabilitySet.empty)
    ffmpeg_path: Path | str = "ffmpeg"
    device_format: str = "alsa"
    device: str = "default"
    stream_format: str = "wav"

    def is_supported(
        self, track: Any, log: logging.Logger | None = None
    ) -> bool | None:
        """Check if a track can be played based on its format and codec.

        Args:
            track: TrackDescriptor or mapping with format, codec and uri.
            log: Logger to use instead of the module logger.

        Returns:
            True or False, or None if format or codec is not given.

        Raises:
            TypeError: If track is not a TrackDescriptor or mapping.
        """
        log = log or logger
        descriptor = to_track_descriptor(track)

        if not descriptor.format or not descriptor.codec:
            return None

        if not self.capabilities.has_format(descriptor.format):
            log.warning("Unsupported format: %s (%s)", descriptor.format, descriptor)
            return False

        if not self.capabilities.has_codec(descriptor.codec):
            log.warning("Unsupported codec: %s (%s)", descriptor.codec, descriptor)
            return False

        log.info(
            "Format (%s) and codec (%s) of %s are supported",
            descriptor.format,
            descriptor.codec,
            descriptor.uri,
        )
        return True

    def _launch(
        self,
        args: list[str],
        log: logging.Logger,
        stdin: int = subprocess.DEVNULL,
        expect_output: bool = True,
    ) -> FFmpegProcess:
        return launch_ffmpeg(
            args,
            ffmpeg_path=self.ffmpeg_path,
            log=log,
            stdin=stdin,
            expect_output=expect_output,
        )

    def source(
        self,
        path: Path | str,
        input_format: Any = None,
        output_format: Any = None,
        log: logging.Logger | None = None,
    ) -> FFmpegProcess:
        """Create a stream from a local file or remote URL.

        Args:
            path: File path or URL of the audio file.
            input_format: Format of the file (string, mapping or StreamSpec).
                If omitted ffmpeg will try to guess.
            output_format: Format/codec written to stdout. The format
                defaults to stream_format, since ffmpeg cannot pick a muxer
                for a pipe. A seek on either spec is applied after the input.
            log: Logger to use instead of the module logger.

        Returns:
            FFmpegProcess whose stdout carries the decoded stream.
        """
        log = log or logger
        source_spec = normalize_stream_spec(input_format)
        output_spec = normalize_stream_spec(output_format) or StreamSpec()
        if not output_spec.format:
            output_spec = output_spec.model_copy(update={"format": self.stream_format})

        args = input_args(source_spec, log)
        args.extend(["-i", str(path)])
        args.extend(seek_args(_spec_seek(output_spec, source_spec)))
        args = output_args(args, output_spec)
        args.append(PIPE)
        return self._launch(args, log)

    def sink(
        self,
        input_format: Any,
        dest: Path | str,
        seek: float | None = 0,
        output_format: Any = None,
        *,
        input_location: Path | str = PIPE,
        log: logging.Logger | None = None,
    ) -> FFmpegProcess:
        """Consume a stream, outputting it to a device, file or named pipe.

        Args:
            input_format: Format of the incoming stream.
            dest: One of the device aliases (speakers, speaker, local,
                default) for local playback, otherwise a path or "-" for
                stdout.
            seek: Discard audio before this many seconds. When zero, the seek
                of the output or input spec is used.
            output_format: Format/codec to write (string, mapping or
                StreamSpec). For local playback, overrides the output device.
            input_location: Where to read from. Defaults to stdin.
            log: Logger to use instead of the module logger.

        Returns:
            FFmpegProcess. Its stdin is a pipe when reading from "-".
        """
        log = log or logger
        input_location = str(input_location)
        dest = str(dest)

        source_spec = normalize_stream_spec(input_format)
        output_spec = normalize_stream_spec(output_format)

        args = input_args(source_spec, log)
        args.extend(["-i", input_location])
        args.extend(seek_args(seek or _spec_seek(output_spec, source_spec)))

        if dest in DEVICE_ALIASES:
            args.extend(
                device_output_args(output_spec, self.device_format, self.device)
            )
        else:
            args = output_args(args, output_spec)
            args.append(dest)

        return self._launch(
            args,
            log,
            stdin=subprocess.PIPE if input_location == PIPE else subprocess.DEVNULL,
            expect_output=dest == PIPE,
        )

    def transform(
        self,
        input_format: Any,
        output: Any,
        log: logging.Logger | None = None,
    ) -> FFmpegProcess:
        """Transform a stream, recoding it on the fly.

        The caller writes to the process's stdin and reads from its stdout.
        A seek on the output (or input) spec is applied after the input.

        Args:
            input_format: Mapping or StreamSpec describing the incoming stream.
            output: Mapping or StreamSpec describing the produced stream.
            log: Logger to use instead of the module logger.

        Returns:
            FFmpegProcess with piped stdin and stdout.

        Raises:
            TypeError: If either spec is not a mapping or StreamSpec.
        """
        log = log or logger
        source_spec = require_stream_spec(input_format, "input_format")
        output_spec = require_stream_spec(output, "output")

        args = input_args(source_spec, log)
        args.extend(["-i", PIPE])
        args.extend(seek_args(_spec_seek(output_spec, source_spec)))

        if output_spec.format:
            args.extend(["-f", output_spec.format])
        if output_spec.codec:
            args.extend(["-codec:a", output_spec.codec])

        args.append(PIPE)
        return self._launch(args, log, stdin=subprocess.PIPE)


def create_ffmpeg_adapter(config: FFmpegPipeConfig | None = None) -> FFmpegAdapter:
    """Locate ffmpeg, probe its capabilities and build an adapter.

    Args:
        config: Configuration. Loaded with get_config() when omitted.

    Returns:
        Configured FFmpegAdapter. Its capabilities are empty if ffmpeg is
        missing.

    Raises:
        CapabilityProbeError: If ffmpeg ran but reported no capabilities.
    """
    if config is None:
        from ffmpeg_pipe.config import get_config

        config = get_config()

    path = find_ffmpeg(config.tools.ffmpeg)
    if path is None:
        logger.error("ffmpeg not found in PATH")
        logger.warning("Nothing will be reported as playable without ffmpeg")
        return FFmpegAdapter(
            ffmpeg_path=config.tools.ffmpeg or "ffmpeg",
            device_format=config.device.format,
            device=config.device.name,
            stream_format=config.stream.format,
        )

    return FFmpegAdapter(
        capabilities=probe_capabilities(path),
        ffmpeg_path=path,
        device_format=config.device.format,
        device=config.device.name,
        stream_format=config.stream.format,
    )
