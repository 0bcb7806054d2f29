"""Main interactive event loop for the terminal UI.

Each cycle re-reads the terminal size, expires the status line, collects
finished formatter jobs, draws a frame when something changed, and
dispatches one input token. Feature logic lives on ``DiffnavApp``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..input import read_key
from ..render import build_frame
from .actions import expire_status_message
from .app import DiffnavApp
from .terminal import TerminalController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    idle_timeout_ms: int = 120
    busy_timeout_ms: int = 20


def run_main_loop(
    app: DiffnavApp,
    terminal: TerminalController,
    input_fd: int,
    timing: RuntimeLoopTiming | None = None,
    *,
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """Run the TUI until a quit key; formatter jobs are killed on the way out."""
    timing = timing or RuntimeLoopTiming()
    scheduler = app.scheduler
    state = app.state

    with terminal.raw_mode():
        try:
            while True:
                columns, lines = terminal.size()
                expire_status_message(state, clock())
                app.resize(columns, lines)

                scheduler.poll()
                app.handle_render_results()

                if state.dirty:
                    terminal.write(build_frame(app.frame_context()))
                    state.dirty = False

                timeout = timing.busy_timeout_ms if scheduler.has_pending() else timing.idle_timeout_ms
                key = read_key(input_fd, timeout_ms=timeout)
                if not key:
                    continue
                if app.handle_key(key):
                    logger.info("quit requested")
                    break
        finally:
            scheduler.shutdown()
