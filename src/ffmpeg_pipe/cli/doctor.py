"""ffpipe doctor and check commands.

This module provides the 'ffpipe doctor' command reporting what the local
ffmpeg can decode, and 'ffpipe check' answering whether a single track is
playable.
"""

import json
import sys

import click

from ffmpeg_pipe.cli.exit_codes import ExitCode
from ffmpeg_pipe.config.models import FFmpegPipeConfig
from ffmpeg_pipe.tools import (
    CapabilityProbeError,
    FFmpegAdapter,
    TrackDescriptor,
    create_ffmpeg_adapter,
)


def _format_status(available: bool) -> str:
    """Format status for display."""
    return "✓" if available else "✗"


def _probe_or_exit(config: FFmpegPipeConfig) -> FFmpegAdapter:
    """Build a probed adapter, exiting on fatal probe errors."""
    try:
        return create_ffmpeg_adapter(config)
    except CapabilityProbeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.NO_CAPABILITIES)


@click.command("doctor")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="List every supported format and codec",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output results as JSON",
)
@click.pass_obj
def doctor_command(config: FFmpegPipeConfig, verbose: bool, json_output: bool) -> None:
    """Check ffmpeg availability and decoding capabilities.

    Exit codes:
      0  - ffmpeg found and capabilities detected
      30 - ffmpeg missing or its listings could not be run
      31 - ffmpeg reported no capabilities
    """
    adapter = _probe_or_exit(config)
    caps = adapter.capabilities
    available = not caps.is_empty()

    if json_output:
        click.echo(
            json.dumps(
                {
                    "ffmpeg": str(adapter.ffmpeg_path),
                    "available": available,
                    "formats": sorted(caps.formats),
                    "codecs": sorted(caps.codecs),
                    "device": {
                        "format": adapter.device_format,
                        "name": adapter.device,
                    },
                },
                indent=2,
            )
        )
    else:
        click.echo("ffmpeg-pipe Health Check")
        click.echo("=" * 40)
        click.echo(f"  {_format_status(available)} ffmpeg: {adapter.ffmpeg_path}")
        click.echo(f"    ├─ Formats: {len(caps.formats)}")
        click.echo(f"    ├─ Audio codecs: {len(caps.codecs)}")
        device = f"{adapter.device_format} {adapter.device}"
        click.echo(f"    └─ Playback device: {device}")
        if verbose and available:
            click.echo()
            click.echo("Formats:")
            click.echo("  " + ", ".join(sorted(caps.formats)))
            click.echo("Audio codecs:")
            click.echo("  " + ", ".join(sorted(caps.codecs)))
        if not available:
            click.echo()
            click.echo("  Install ffmpeg: https://ffmpeg.org/download.html")

    if not available:
        sys.exit(ExitCode.TOOL_NOT_AVAILABLE)


@click.command("check")
@click.option("--format", "format_", default=None, help="Container format.")
@click.option("--codec", default=None, help="Audio codec.")
@click.option("--uri", default=None, help="Track location, used in log messages.")
@click.pass_obj
def check_command(
    config: FFmpegPipeConfig,
    format_: str | None,
    codec: str | None,
    uri: str | None,
) -> None:
    """Check whether a track with FORMAT and CODEC can be played.

    Prints "supported", "unsupported" or "unknown" (format or codec not
    given) and exits 0, 50 or 51 respectively.
    """
    adapter = _probe_or_exit(config)
    result = adapter.is_supported(TrackDescriptor(format=format_, codec=codec, uri=uri))

    if result is None:
        click.echo("unknown")
        sys.exit(ExitCode.SUPPORT_UNKNOWN)
    if not result:
        click.echo("unsupported")
        sys.exit(ExitCode.NOT_SUPPORTED)
    click.echo("supported")
