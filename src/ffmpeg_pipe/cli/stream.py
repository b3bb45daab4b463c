"""ffpipe source, sink and transform commands.

These commands pipe media between the terminal's stdin/stdout and ffmpeg.
"""

import logging
import shutil
import sys
import threading
from typing import IO

import click

from ffmpeg_pipe.cli.exit_codes import ExitCode
from ffmpeg_pipe.config.models import FFmpegPipeConfig
from ffmpeg_pipe.tools import FFmpegAdapter, FFmpegProcess, FFmpegProcessError
from ffmpeg_pipe.tools.detection import find_ffmpeg
from ffmpeg_pipe.tools.specs import StreamSpec

logger = logging.getLogger(__name__)

# Chunk size when copying between pipes
COPY_BUFSIZE = 64 * 1024


def _adapter(config: FFmpegPipeConfig) -> FFmpegAdapter:
    """Build an adapter for streaming (no capability probe needed)."""
    return FFmpegAdapter(
        ffmpeg_path=find_ffmpeg(config.tools.ffmpeg) or "ffmpeg",
        device_format=config.device.format,
        device=config.device.name,
        stream_format=config.stream.format,
    )


def _spec(format_: str | None, codec: str | None) -> StreamSpec | None:
    if not format_ and not codec:
        return None
    return StreamSpec(format=format_, codec=codec)


def _feed(source: IO[bytes], child: FFmpegProcess) -> threading.Thread:
    """Copy source into ffmpeg's stdin on a background thread."""

    def pump() -> None:
        assert child.stdin is not None
        try:
            shutil.copyfileobj(source, child.stdin, COPY_BUFSIZE)
        except BrokenPipeError:
            logger.debug("%s closed its input early", child.label)
        finally:
            try:
                child.stdin.close()
            except BrokenPipeError:
                logger.debug("%s closed its input early", child.label)

    thread = threading.Thread(target=pump, name=f"{child.label}-feed", daemon=True)
    thread.start()
    return thread


def _run(child: FFmpegProcess, forward_output: bool) -> ExitCode:
    """Drive a spawned ffmpeg until it exits.

    Args:
        child: Spawned process.
        forward_output: Copy ffmpeg's stdout to our stdout.

    Returns:
        Exit code for the command.
    """
    if child.stdin is not None:
        _feed(click.get_binary_stream("stdin"), child)

    try:
        child.readable.result()
        if forward_output and child.stdout is not None:
            shutil.copyfileobj(
                child.stdout, click.get_binary_stream("stdout"), COPY_BUFSIZE
            )
        returncode = child.wait()
    except FFmpegProcessError as e:
        click.echo(f"Error: {e}", err=True)
        return ExitCode.OPERATION_FAILED
    except BrokenPipeError:
        logger.debug("Output closed, stopping %s", child.label)
        child.close()
        return ExitCode.SUCCESS
    except KeyboardInterrupt:
        child.close()
        return ExitCode.INTERRUPTED

    if returncode != 0:
        click.echo(f"Error: {child.label} exited with code {returncode}", err=True)
        return ExitCode.OPERATION_FAILED
    return ExitCode.SUCCESS


@click.command("source")
@click.argument("path")
@click.option("--format", "format_", default=None, help="Input format (guessed).")
@click.option("--codec", default=None, help="Input audio codec.")
@click.pass_obj
def source_command(
    config: FFmpegPipeConfig,
    path: str,
    format_: str | None,
    codec: str | None,
) -> None:
    """Decode a local file or URL at PATH and write it to stdout."""
    child = _adapter(config).source(path, _spec(format_, codec))
    sys.exit(_run(child, forward_output=True))


@click.command("sink")
@click.argument("dest")
@click.option(
    "--input",
    "input_location",
    default="-",
    show_default=True,
    help="Where to read from ('-' is stdin).",
)
@click.option("--input-format", default=None, help="Format of the input.")
@click.option("--input-codec", default=None, help="Audio codec of the input.")
@click.option(
    "--seek", type=click.FloatRange(min=0), default=0, help="Seconds to skip."
)
@click.option("--output-format", default=None, help="Output format or device.")
@click.option("--output-codec", default=None, help="Output audio codec.")
@click.pass_obj
def sink_command(
    config: FFmpegPipeConfig,
    dest: str,
    input_location: str,
    input_format: str | None,
    input_codec: str | None,
    seek: float,
    output_format: str | None,
    output_codec: str | None,
) -> None:
    """Play a stream on the local device or write it to DEST.

    DEST is one of speakers, speaker, local or default for local playback,
    a file or named pipe path, or '-' for stdout.
    """
    child = _adapter(config).sink(
        _spec(input_format, input_codec),
        dest,
        seek,
        _spec(output_format, output_codec),
        input_location=input_location,
    )
    sys.exit(_run(child, forward_output=dest == "-"))


@click.command("transform")
@click.option("--input-format", default=None, help="Format of the input.")
@click.option("--input-codec", default=None, help="Audio codec of the input.")
@click.option("--output-format", required=True, help="Format to produce.")
@click.option("--output-codec", default=None, help="Audio codec to produce.")
@click.pass_obj
def transform_command(
    config: FFmpegPipeConfig,
    input_format: str | None,
    input_codec: str | None,
    output_format: str,
    output_codec: str | None,
) -> None:
    """Recode stdin to stdout."""
    child = _adapter(config).transform(
        StreamSpec(format=input_format, codec=input_codec),
        StreamSpec(format=output_format, codec=output_codec),
    )
    sys.exit(_run(child, forward_output=True))
