"""Command-line front door for diffnav.

Parses CLI options, reads the unified diff from a path or stdin, and parses
it into file changes. Then dispatches into the interactive runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from . import __version__
from .diff_pane import render_raw_patch
from .diff_source import FileChange, parse_diff_text, sort_file_changes
from .errors import DiffParseError
from .logging_setup import configure_logging
from .runtime import run_diffnav
from .runtime.config import load_config
from .ui_theme import no_color_requested, resolve_theme

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"


def decode_text(data: bytes) -> str:
    """Decode ``data`` as utf-8 (dropping a BOM), falling back to latin-1."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def read_text(path: Path) -> str:
    return decode_text(path.read_bytes())


def read_diff_input(path_arg: str | None, stdin=None) -> tuple[str, bool]:
    """Return ``(diff_text, from_stdin)`` for the PATH argument.

    ``-`` or an omitted PATH with piped stdin reads stdin.
    """
    stream = sys.stdin if stdin is None else stdin
    if path_arg is None or path_arg == "-":
        if path_arg is None and stream.isatty():
            raise SystemExit("diffnav: no diff input (pass PATH or pipe a diff)")
        buffer = getattr(stream, "buffer", None)
        if buffer is None:
            return stream.read(), True
        return decode_text(buffer.read()), True
    path = Path(path_arg)
    if not path.is_file():
        raise SystemExit(f"diffnav: file not found: {path}")
    return read_text(path), False


def render_plain(files: list[FileChange], no_color: bool) -> str:
    """Return the whole diff highlighted for non-interactive output."""
    return render_raw_patch("".join(change.patch_text for change in files), no_color)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch diffnav on a unified diff.

    Parse failures exit with status 1; a diff with no files exits cleanly
    without starting the UI.
    """
    parser = argparse.ArgumentParser(
        prog="diffnav",
        description="Browse a unified diff with a file tree and a formatted diff pane.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Diff file to read, or '-' for stdin.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--nopager",
        action="store_true",
        help="Print the highlighted diff directly without the interactive view.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    config = load_config()
    configure_logging(config.log_file, config.log_level)

    diff_text, from_stdin = read_diff_input(args.path)
    try:
        files = sort_file_changes(parse_diff_text(diff_text))
    except DiffParseError as exc:
        logger.error("parse failed: %s", exc)
        sys.stderr.write(f"diffnav: {exc}\n")
        raise SystemExit(1) from exc

    if not files:
        logger.info("no files in diff; exiting")
        return

    no_color = args.no_color or no_color_requested()
    if args.nopager or not sys.stdout.isatty():
        sys.stdout.write(render_plain(files, no_color))
        return

    input_fd = sys.stdin.fileno()
    tty_fd: int | None = None
    if from_stdin:
        try:
            tty_fd = os.open(TTY_PATH, os.O_RDONLY)
        except OSError as exc:
            raise SystemExit(f"diffnav: cannot open {TTY_PATH} for keyboard input: {exc}") from exc
        input_fd = tty_fd
    try:
        run_diffnav(
            files,
            config,
            input_fd=input_fd,
            output_fd=sys.stdout.fileno(),
            theme=resolve_theme(no_color=no_color),
        )
    finally:
        if tty_fd is not None:
            os.close(tty_fd)


if __name__ == "__main__":
    main()
