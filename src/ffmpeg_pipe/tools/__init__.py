"""ffmpeg capability probing, argument building and process management.

This module provides the infrastructure for detecting what the local ffmpeg
can decode and for piping audio streams through it.
"""

from ffmpeg_pipe.tools.detection import (
    find_ffmpeg,
    parse_capability_listing,
    probe,
    probe_capabilities,
)
from ffmpeg_pipe.tools.exceptions import (
    CapabilityProbeError,
    FFmpegError,
    FFmpegProcessError,
    ProbeInvocationError,
)
from ffmpeg_pipe.tools.ffmpeg_adapter import FFmpegAdapter, create_ffmpeg_adapter
from ffmpeg_pipe.tools.ffmpeg_builder import (
    BASELINE_ARGS,
    DEVICE_ALIASES,
    args_to_string,
    device_output_args,
    input_args,
    output_args,
    seek_args,
)
from ffmpeg_pipe.tools.models import CapabilityKind, CapabilitySet
from ffmpeg_pipe.tools.process import FFmpegProcess, launch_ffmpeg
from ffmpeg_pipe.tools.specs import (
    StreamSpec,
    TrackDescriptor,
    normalize_stream_spec,
)

__all__ = [
    # Models
    "CapabilityKind",
    "CapabilitySet",
    "StreamSpec",
    "TrackDescriptor",
    "normalize_stream_spec",
    # Detection
    "find_ffmpeg",
    "parse_capability_listing",
    "probe",
    "probe_capabilities",
    # Arguments
    "BASELINE_ARGS",
    "DEVICE_ALIASES",
    "args_to_string",
    "device_output_args",
    "input_args",
    "output_args",
    "seek_args",
    # Processes
    "FFmpegProcess",
    "launch_ffmpeg",
    # Adapter
    "FFmpegAdapter",
    "create_ffmpeg_adapter",
    # Errors
    "CapabilityProbeError",
    "FFmpegError",
    "FFmpegProcessError",
    "ProbeInvocationError",
]
