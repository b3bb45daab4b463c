"""Exceptions raised while probing or running ffmpeg."""


class FFmpegError(Exception):
    """Base class for FFmpeg-related errors."""

    pass


class ProbeInvocationError(FFmpegError):
    """Error running an ffmpeg capability listing command."""

    def __init__(self, command: list[str], reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Command failed: {' '.join(command)} - {reason}")


class CapabilityProbeError(FFmpegError):
    """Error due to ffmpeg reporting no usable capabilities.

    Raised during initialization when a capability listing ran successfully
    but contained no decodable entries. Nothing downstream can be trusted.
    """

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"No supported {kind} found")


class FFmpegProcessError(FFmpegError):
    """Error from a spawned ffmpeg process.

    Used to reject a process's readiness future when ffmpeg could not be
    started or exited before producing output.
    """

    def __init__(
        self,
        label: str,
        returncode: int | None,
        stderr: list[str] | None = None,
        reason: str | None = None,
    ):
        self.label = label
        self.returncode = returncode
        self.stderr = list(stderr or [])
        if reason is None:
            reason = f"exited with code {returncode}"
        msg = f"{label} {reason}"
        if self.stderr:
            msg += f": {self.stderr[-1]}"
        super().__init__(msg)
