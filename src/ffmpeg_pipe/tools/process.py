"""Spawning ffmpeg and tracking its readiness.

This module starts ffmpeg with assembled arguments and returns a handle whose
``readable`` future settles once the output stream starts producing data,
or rejects if ffmpeg fails first. Everything ffmpeg writes to stderr is kept
on the handle and logged if the process fails.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for ffmpeg invocation
import threading
from collections.abc import Sequence
from concurrent.futures import Future, InvalidStateError
from pathlib import Path
from typing import IO, Any

from ffmpeg_pipe.tools.exceptions import FFmpegProcessError
from ffmpeg_pipe.tools.ffmpeg_builder import args_to_string, with_baseline

logger = logging.getLogger(__name__)

# Timeout for draining stderr after the process ends (seconds)
STDERR_DRAIN_TIMEOUT = 5.0


class FFmpegProcess:
    """Handle on a running ffmpeg invocation.

    Attributes:
        args: Arguments passed to ffmpeg (without the executable).
        label: Identifying label used in log messages.
        process: Underlying Popen, or None if spawning failed.
        stderr_lines: Lines written by ffmpeg to stderr so far.
        readable: Future resolving to this handle once the stream is readable.
    """

    def __init__(
        self,
        args: list[str],
        process: subprocess.Popen | None,
        log: logging.Logger,
        label: str | None = None,
    ) -> None:
        self.args = args
        self.process = process
        self.stderr_lines: list[str] = []
        self.readable: Future[FFmpegProcess] = Future()
        self._log = log
        if label is None:
            label = f"ffmpeg[{process.pid}]" if process is not None else "ffmpeg"
        self.label = label
        self._stderr_thread: threading.Thread | None = None
        self._watcher: threading.Thread | None = None

        self.readable.add_done_callback(self._log_failure)

    @property
    def pid(self) -> int | None:
        """Process id, or None if spawning failed."""
        return self.process.pid if self.process is not None else None

    @property
    def stdin(self) -> IO[bytes] | None:
        """Pipe feeding ffmpeg's input, if one was requested."""
        return self.process.stdin if self.process is not None else None

    @property
    def stdout(self) -> IO[bytes] | None:
        """Pipe carrying ffmpeg's output."""
        return self.process.stdout if self.process is not None else None

    @property
    def returncode(self) -> int | None:
        """Exit code, or None while running."""
        return self.process.returncode if self.process is not None else None

    def stderr_text(self) -> str:
        """Return captured stderr joined into one string."""
        return "\n".join(self.stderr_lines)

    def wait(self, timeout: float | None = None) -> int | None:
        """Wait for ffmpeg to exit.

        Args:
            timeout: Seconds to wait, or None to wait forever.

        Returns:
            Exit code, or None if spawning failed.
        """
        if self.process is None:
            return None
        return self.process.wait(timeout=timeout)

    def terminate(self) -> None:
        """Ask ffmpeg to stop."""
        if self.process is not None and self.process.poll() is None:
            self.process.terminate()

    def kill(self) -> None:
        """Kill ffmpeg."""
        if self.process is not None and self.process.poll() is None:
            self.process.kill()

    def close(self) -> None:
        """Stop ffmpeg if still running and release its pipes."""
        if self.process is None:
            return
        self.terminate()
        for pipe in (self.process.stdin, self.process.stdout):
            if pipe is not None:
                try:
                    pipe.close()
                except OSError:
                    logger.debug("Error closing pipe of %s", self.label)
        self.process.wait()

        # stderr is released once its reader has drained it
        if self._stderr_thread is not None:
            self._stderr_thread.join(timeout=STDERR_DRAIN_TIMEOUT)
            if self._stderr_thread.is_alive():
                logger.warning("Stderr reader of %s did not terminate", self.label)
                return
        if self.process.stderr is not None:
            self.process.stderr.close()

    def __enter__(self) -> FFmpegProcess:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<FFmpegProcess {self.label} returncode={self.returncode}>"

    # Watcher side

    def _start(self, expect_output: bool) -> None:
        assert self.process is not None
        self._stderr_thread = threading.Thread(
            target=self._read_stderr,
            name=f"{self.label}-stderr",
            daemon=True,
        )
        self._stderr_thread.start()
        self._watcher = threading.Thread(
            target=self._watch,
            args=(expect_output,),
            name=f"{self.label}-watch",
            daemon=True,
        )
        self._watcher.start()

    def _read_stderr(self) -> None:
        assert self.process is not None and self.process.stderr is not None
        try:
            for raw in self.process.stderr:
                line = raw.decode("utf-8", errors="replace").rstrip()
                if line:
                    self.stderr_lines.append(line)
        except (OSError, ValueError):
            # Pipe closed by close()
            pass

    def _watch(self, expect_output: bool) -> None:
        assert self.process is not None
        if expect_output and self.process.stdout is not None:
            try:
                first = self.process.stdout.peek(1)
            except (OSError, ValueError):
                first = b""
            if first:
                self._settle()
                return

        returncode = self.process.wait()
        if self._stderr_thread is not None:
            self._stderr_thread.join(timeout=STDERR_DRAIN_TIMEOUT)
            if self._stderr_thread.is_alive():
                logger.warning("Stderr reader of %s did not terminate", self.label)

        if returncode == 0:
            self._settle()
        else:
            self._settle(FFmpegProcessError(self.label, returncode, self.stderr_lines))

    def _settle(self, error: FFmpegProcessError | None = None) -> None:
        try:
            if error is None:
                self.readable.set_result(self)
            else:
                self.readable.set_exception(error)
        except InvalidStateError:
            # Cancelled by the caller
            logger.debug("Readiness of %s already settled", self.label)

    def _log_failure(self, future: Future[FFmpegProcess]) -> None:
        if future.cancelled() or future.exception() is None:
            return
        if self.stderr_lines:
            self._log.warning(
                "%s STDERR:\n\t%s\n",
                self.label,
                "\n\t".join(self.stderr_lines),
                extra={"ffmpeg_label": self.label, "stderr": list(self.stderr_lines)},
            )


def launch_ffmpeg(
    args: Sequence[str],
    *,
    ffmpeg_path: Path | str = "ffmpeg",
    log: logging.Logger | None = None,
    stdin: int | IO[Any] | None = subprocess.DEVNULL,
    expect_output: bool = True,
) -> FFmpegProcess:
    """Spawn ffmpeg and return a handle on it.

    Never raises for spawn failures: they are logged and reject the handle's
    ``readable`` future, which the caller is responsible for handling.

    Args:
        args: ffmpeg arguments. Baseline flags are prepended if missing.
        ffmpeg_path: Path to the ffmpeg executable.
        log: Logger for this invocation. Module logger if omitted.
        stdin: Stdin for ffmpeg (subprocess.PIPE to feed it a stream).
        expect_output: True if ffmpeg writes its output to stdout. When False
            (devices and files), readiness settles when ffmpeg exits.

    Returns:
        FFmpegProcess handle.
    """
    log = log or logger
    full_args = with_baseline(args)
    log.debug('About to spawn: "ffmpeg %s"', args_to_string(full_args))

    try:
        popen = subprocess.Popen(  # nosec B603
            [str(ffmpeg_path), *full_args],
            stdin=stdin,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as e:
        log.warning("Failed to spawn ffmpeg (%s): %s", ffmpeg_path, e)
        child = FFmpegProcess(full_args, None, log)
        child.readable.set_exception(
            FFmpegProcessError(child.label, None, reason=f"failed to start: {e}")
        )
        return child

    child = FFmpegProcess(full_args, popen, log)
    child._start(expect_output)
    return child
