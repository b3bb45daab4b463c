"""ffmpeg-pipe: audio streams through ffmpeg."""

from ffmpeg_pipe.tools import (
    CapabilitySet,
    FFmpegAdapter,
    FFmpegProcess,
    StreamSpec,
    TrackDescriptor,
    create_ffmpeg_adapter,
    probe,
    probe_capabilities,
)

__version__ = "0.1.0"

__all__ = [
    "CapabilitySet",
    "FFmpegAdapter",
    "FFmpegProcess",
    "StreamSpec",
    "TrackDescriptor",
    "__version__",
    "create_ffmpeg_adapter",
    "probe",
    "probe_capabilities",
]
