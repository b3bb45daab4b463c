"""CLI module for ffmpeg-pipe."""

import logging
import sys
from pathlib import Path

import click

from ffmpeg_pipe.cli.exit_codes import ExitCode
from ffmpeg_pipe.config import build_logging_config, get_config
from ffmpeg_pipe.logging import configure_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="ffmpeg-pipe")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Path to config file (default ~/.ffpipe/config.toml).",
)
@click.option(
    "--ffmpeg",
    "ffmpeg_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Path to the ffmpeg executable.",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level.",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write logs to this file.",
)
@click.option("--log-json", is_flag=True, help="Emit logs as JSON.")
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    ffmpeg_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Pipe audio through ffmpeg.

    Media streams are written to stdout; logs always go to stderr or the
    log file.
    """
    try:
        config = get_config(config_path=config_path, ffmpeg_path=ffmpeg_path)
        logging_config = build_logging_config(
            config.logging,
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    except ValueError as e:
        click.echo(f"Error: invalid configuration: {e}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)

    configure_logging(logging_config)
    logger.debug("Using ffmpeg: %s", config.tools.ffmpeg or "from PATH")
    ctx.obj = config


# Defer import to avoid circular dependency
def _register_commands() -> None:
    from ffmpeg_pipe.cli.doctor import check_command, doctor_command
    from ffmpeg_pipe.cli.stream import sink_command, source_command, transform_command

    main.add_command(doctor_command)
    main.add_command(check_command)
    main.add_command(source_command)
    main.add_command(sink_command)
    main.add_command(transform_command)


_register_commands()
