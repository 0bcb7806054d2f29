"""Side-effect actions keyed off the selected path: clipboard and editor.

Failures raise ``ActionError``; the app turns them into a status message.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys
import time
from collections.abc import Callable

from ..errors import ActionError
from .state import AppState

logger = logging.getLogger(__name__)

STATUS_SECONDS = 2.0
ERROR_STATUS_SECONDS = 4.0


def clipboard_commands() -> list[list[str]]:
    """Return candidate clipboard commands for the current platform."""
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def copy_text_to_clipboard(text: str) -> None:
    """Copy ``text`` with the first clipboard tool that succeeds."""
    if not text:
        raise ActionError("nothing to copy")

    tried: list[str] = []
    for command in clipboard_commands():
        if shutil.which(command[0]) is None:
            continue
        tried.append(command[0])
        try:
            proc = subprocess.run(
                command,
                input=text,
                text=True,
                check=False,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            logger.warning("clipboard command %s failed: %s", command[0], exc)
            continue
        if proc.returncode == 0:
            return
    if not tried:
        raise ActionError("no clipboard tool found")
    raise ActionError(f"copy failed ({', '.join(tried)})")


def launch_editor(
    path: str,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
) -> None:
    """Run ``$EDITOR path`` outside raw mode and restore the TUI afterwards."""
    editor_env = os.environ.get("EDITOR", "").strip()
    if not editor_env:
        raise ActionError("cannot open: $EDITOR is not set")
    cmd = shlex.split(editor_env)
    if not cmd:
        raise ActionError("cannot open: $EDITOR is empty")

    disable_tui_mode()
    try:
        subprocess.run([*cmd, path], check=False)
    except OSError as exc:
        raise ActionError(f"failed to launch editor: {exc}") from exc
    finally:
        enable_tui_mode()


def set_status_message(
    state: AppState,
    message: str,
    *,
    error: bool = False,
    now: float | None = None,
) -> None:
    """Show ``message`` in the footer for a short interval."""
    current = time.monotonic() if now is None else now
    state.status_message = message
    state.status_is_error = error
    state.status_message_until = current + (ERROR_STATUS_SECONDS if error else STATUS_SECONDS)
    state.dirty = True


def expire_status_message(state: AppState, now: float | None = None) -> bool:
    """Clear an expired status message; return whether it was cleared."""
    current = time.monotonic() if now is None else now
    if state.status_message and current >= state.status_message_until:
        state.status_message = ""
        state.status_message_until = 0.0
        state.status_is_error = False
        state.dirty = True
        return True
    return False
