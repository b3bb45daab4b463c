"""ffmpeg detection and capability probing.

This module locates the ffmpeg executable and enumerates the container
formats and audio codecs it can decode, by parsing the tables printed by
``ffmpeg -formats`` and ``ffmpeg -codecs``.
"""

import logging
import re
import shutil
import subprocess  # nosec B404 - subprocess is required for ffmpeg detection
from pathlib import Path

from ffmpeg_pipe.tools.exceptions import CapabilityProbeError, ProbeInvocationError
from ffmpeg_pipe.tools.models import CapabilityKind, CapabilitySet

logger = logging.getLogger(__name__)

# Timeout for capability listing commands (seconds)
DETECTION_TIMEOUT = 10

# Marks the end of the legend printed above each listing table
_SEPARATOR = "--"

_NAMES_PATTERN = re.compile(r"[\w,]+")


def find_ffmpeg(configured_path: Path | None = None) -> Path | None:
    """Find the ffmpeg executable.

    Args:
        configured_path: Optional configured path override.

    Returns:
        Path to ffmpeg, or None if not found.
    """
    if configured_path and configured_path.exists():
        return configured_path

    which_result = shutil.which("ffmpeg")
    if which_result:
        return Path(which_result)

    return None


def _run_listing(kind: CapabilityKind, ffmpeg_path: Path | str) -> str:
    """Run an ffmpeg capability listing and return its stdout.

    Args:
        kind: Which listing to request.
        ffmpeg_path: Path to the ffmpeg executable.

    Returns:
        Captured standard output.

    Raises:
        ProbeInvocationError: If the command could not be run or failed.
    """
    args = [str(ffmpeg_path), "-hide_banner", kind.flag]
    try:
        result = subprocess.run(  # nosec B603
            args,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=DETECTION_TIMEOUT,
        )
    except subprocess.TimeoutExpired as e:
        raise ProbeInvocationError(args, "timeout") from e
    except OSError as e:
        raise ProbeInvocationError(args, str(e)) from e

    if result.returncode != 0:
        raise ProbeInvocationError(
            args, result.stderr.strip() or f"exit code {result.returncode}"
        )
    return result.stdout


def _data_rows(output: str) -> list[str]:
    """Return the table rows following the legend separator.

    Args:
        output: Listing output.

    Returns:
        Non-blank lines after the first line starting with ``--``. Empty if
        the separator never appears.
    """
    lines = [line for line in output.splitlines() if line.strip()]
    for index, line in enumerate(lines):
        if line.strip()[:2] == _SEPARATOR:
            return lines[index + 1 :]
    return []


def _is_decodable_format(flags: str) -> bool:
    """Check a ``-formats`` flag field: D=demuxing, E=muxing."""
    return flags in ("D", "DE")


def _is_decodable_audio_codec(flags: str) -> bool:
    """Check a ``-codecs`` flag field.

    Format: "DEA.L." where D=decoding, E=encoding, then the media type
    (V=video, A=audio, S=subtitle, D=data, T=attachment), then feature flags.
    """
    return len(flags) >= 6 and flags[0] == "D" and flags[2] == "A"


_ROW_FILTERS = {
    CapabilityKind.FORMATS: _is_decodable_format,
    CapabilityKind.CODECS: _is_decodable_audio_codec,
}


def parse_capability_listing(kind: CapabilityKind | str, output: str) -> list[str]:
    """Parse ffmpeg -formats or -codecs output.

    Rows look like " DE matroska,webm   Matroska / WebM" or
    " DEA.L. mp3   MP3 (MPEG audio layer 3)". Several names may share a row.

    Args:
        kind: Which listing the output came from.
        output: Command output.

    Returns:
        Names of decodable formats or audio codecs, in listing order.
    """
    kind = CapabilityKind(kind)
    accepts = _ROW_FILTERS[kind]

    names: list[str] = []
    for row in _data_rows(output):
        fields = row.split(None, 2)
        if len(fields) < 2 or not accepts(fields[0]):
            continue
        match = _NAMES_PATTERN.match(fields[1])
        if match:
            names.extend(name for name in match.group(0).split(",") if name)
    return names


def _log_probe_failure(kind: CapabilityKind, error: ProbeInvocationError) -> None:
    logger.error("Failed to determine supported %s: %s", kind.value, error.reason)
    logger.warning("Nothing will be reported as playable without ffmpeg %s", kind.value)


def _collect(kind: CapabilityKind, output: str) -> list[str]:
    names = parse_capability_listing(kind, output)
    if not names:
        logger.error("No supported %s found", kind.value)
    else:
        logger.info("Found %d supported %s", len(names), kind.value)
    return names


def probe(
    kind: CapabilityKind | str, ffmpeg_path: Path | str | None = None
) -> list[str]:
    """List the formats or codecs the local ffmpeg can decode.

    Never raises for environmental problems: a failed invocation is logged and
    yields an empty list, so every later support check fails closed.

    Args:
        kind: "formats" or "codecs".
        ffmpeg_path: Path to ffmpeg. Looked up in PATH when omitted.

    Returns:
        List of supported names, possibly empty.
    """
    kind = CapabilityKind(kind)
    try:
        output = _run_listing(kind, ffmpeg_path or "ffmpeg")
    except ProbeInvocationError as e:
        _log_probe_failure(kind, e)
        return []
    return _collect(kind, output)


def probe_capabilities(ffmpeg_path: Path | str | None = None) -> CapabilitySet:
    """Probe ffmpeg once and build the capability set.

    Args:
        ffmpeg_path: Path to ffmpeg. Looked up in PATH when omitted.

    Returns:
        CapabilitySet. A kind whose listing could not be run is empty.

    Raises:
        CapabilityProbeError: If a listing ran but contained no entries.
    """
    found: dict[CapabilityKind, frozenset[str]] = {}
    for kind in CapabilityKind:
        try:
            output = _run_listing(kind, ffmpeg_path or "ffmpeg")
        except ProbeInvocationError as e:
            _log_probe_failure(kind, e)
            found[kind] = frozenset()
            continue

        names = _collect(kind, output)
        if not names:
            raise CapabilityProbeError(kind.value)
        found[kind] = frozenset(names)

    return CapabilitySet(
        formats=found[CapabilityKind.FORMATS],
        codecs=found[CapabilityKind.CODECS],
    )
