"""External formatter jobs driven from the UI loop.

Each request spawns the formatter with the patch on stdin (from a temporary
file) and a pipe on stdout/stderr. ``poll`` drains whatever output is ready
without blocking; finished jobs surface through ``drain_results`` in
completion order.
"""

from __future__ import annotations

import logging
import os
import select
import subprocess
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field

from ..errors import FormatterError

logger = logging.getLogger(__name__)

DEFAULT_FORMATTER = "delta"
_READ_CHUNK = 65536


@dataclass(frozen=True)
class RenderRequest:
    """Value snapshot of one formatter invocation."""

    request_id: int
    key: str
    patch_text: str
    width: int
    side_by_side: bool


@dataclass(frozen=True)
class RenderResult:
    """Completed formatter output, or the error that prevented it."""

    request: RenderRequest
    text: str
    error: FormatterError | None = None

    @property
    def key(self) -> str:
        return self.request.key

    @property
    def request_id(self) -> int:
        return self.request.request_id


def build_formatter_argv(formatter: str, width: int, side_by_side: bool) -> list[str]:
    """Return the formatter command line for a diff pane ``width`` cells wide."""
    argv = [
        formatter,
        "--paging=never",
        f"-w={width}",
        f"--max-line-length={width}",
    ]
    if side_by_side:
        argv.append("--side-by-side")
    return argv


@dataclass
class _RunningJob:
    request: RenderRequest
    process: subprocess.Popen
    stdout_chunks: list[bytes] = field(default_factory=list)
    stderr_chunks: list[bytes] = field(default_factory=list)
    open_fds: set[int] = field(default_factory=set)


class RenderJobScheduler:
    """Spawns formatter processes and collects their output without threads."""

    def __init__(
        self,
        formatter: str = DEFAULT_FORMATTER,
        *,
        build_argv: Callable[[RenderRequest], list[str]] | None = None,
        popen: Callable[..., subprocess.Popen] = subprocess.Popen,
    ) -> None:
        self.formatter = formatter
        self._build_argv = build_argv or (
            lambda request: build_formatter_argv(self.formatter, request.width, request.side_by_side)
        )
        self._popen = popen
        self._next_request_id = 1
        self._running: dict[int, _RunningJob] = {}
        self._results: list[RenderResult] = []

    def schedule(self, *, key: str, patch_text: str, width: int, side_by_side: bool) -> int:
        """Start a formatter job and return its request id."""
        request = RenderRequest(
            request_id=self._next_request_id,
            key=key,
            patch_text=patch_text,
            width=width,
            side_by_side=side_by_side,
        )
        self._next_request_id += 1
        argv = self._build_argv(request)
        logger.debug("render dispatch id=%d key=%r argv=%s", request.request_id, key, argv)

        with tempfile.TemporaryFile() as stdin_file:
            stdin_file.write((patch_text + "\n").encode("utf-8"))
            stdin_file.seek(0)
            try:
                process = self._popen(
                    argv,
                    stdin=stdin_file,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.PIPE,
                    env=os.environ.copy(),
                )
            except OSError as exc:
                error = FormatterError(f"could not run {argv[0]}: {exc.strerror or exc}")
                logger.warning("render failed id=%d key=%r: %s", request.request_id, key, error)
                self._results.append(RenderResult(request=request, text="", error=error))
                return request.request_id

        job = _RunningJob(request=request, process=process)
        for stream in (process.stdout, process.stderr):
            if stream is not None:
                job.open_fds.add(stream.fileno())
        self._running[request.request_id] = job
        return request.request_id

    def has_pending(self) -> bool:
        return bool(self._running) or bool(self._results)

    def poll(self, timeout: float = 0.0) -> None:
        """Read ready output from running jobs and finalize finished ones."""
        fd_to_job: dict[int, _RunningJob] = {}
        for job in self._running.values():
            for fd in job.open_fds:
                fd_to_job[fd] = job
        if fd_to_job:
            ready, _, _ = select.select(list(fd_to_job), [], [], max(0.0, timeout))
            for fd in ready:
                job = fd_to_job[fd]
                chunk = os.read(fd, _READ_CHUNK)
                if not chunk:
                    job.open_fds.discard(fd)
                    continue
                if job.process.stdout is not None and fd == job.process.stdout.fileno():
                    job.stdout_chunks.append(chunk)
                else:
                    job.stderr_chunks.append(chunk)

        for request_id, job in list(self._running.items()):
            if job.open_fds:
                continue
            returncode = job.process.wait()
            self._close_streams(job)
            del self._running[request_id]
            self._results.append(self._finish(job, returncode))

    def _finish(self, job: _RunningJob, returncode: int) -> RenderResult:
        request = job.request
        text = b"".join(job.stdout_chunks).decode("utf-8", errors="replace")
        if returncode != 0:
            stderr = b"".join(job.stderr_chunks).decode("utf-8", errors="replace").strip()
            detail = stderr.splitlines()[-1] if stderr else f"exit status {returncode}"
            error = FormatterError(f"{self.formatter}: {detail}", returncode=returncode)
            logger.warning("render failed id=%d key=%r: %s", request.request_id, request.key, error)
            return RenderResult(request=request, text="", error=error)
        logger.debug("render complete id=%d key=%r bytes=%d", request.request_id, request.key, len(text))
        return RenderResult(request=request, text=text)

    @staticmethod
    def _close_streams(job: _RunningJob) -> None:
        for stream in (job.process.stdout, job.process.stderr):
            if stream is not None:
                stream.close()

    def drain_results(self) -> list[RenderResult]:
        """Return and clear completed results in completion order."""
        out = self._results
        self._results = []
        return out

    def shutdown(self) -> None:
        """Terminate jobs that are still running."""
        for job in self._running.values():
            if job.process.poll() is None:
                job.process.kill()
            job.process.wait()
            self._close_streams(job)
        self._running.clear()
