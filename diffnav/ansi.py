"""ANSI-aware text measurement and line shaping utilities.

Labels and pre-rendered formatter output both carry escape sequences and
wide characters; these helpers measure, clip, truncate and pad them in
terminal cells so pane columns stay aligned.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
ELLIPSIS = "…"


def strip_ansi(text: str) -> str:
    """Return ``text`` without escape sequences."""
    return ANSI_ESCAPE_RE.sub("", text)


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the number of terminal cells ``text`` occupies, ignoring escapes."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        if col >= max_cols:
            break
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    return "".join(out)


def truncate_with_tail(text: str, max_cols: int, tail: str = ELLIPSIS) -> str:
    """Shorten plain ``text`` to ``max_cols`` cells, ending with ``tail`` when cut.

    Negative budgets behave like zero. The result never exceeds the budget,
    even when the tail itself does not fit.
    """
    max_cols = max(0, max_cols)
    if display_width(text) <= max_cols:
        return text
    tail_width = display_width(tail)
    if tail_width > max_cols:
        return clip_ansi_line(tail, max_cols)

    budget = max_cols - tail_width
    out: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch, col)
        if col + w > budget:
            break
        out.append(ch)
        col += w
    return "".join(out) + tail


def pad_ansi_line(text: str, width: int) -> str:
    """Clip then right-pad a styled line to exactly ``width`` cells."""
    clipped = clip_ansi_line(text, width)
    used = display_width(clipped)
    if "\x1b" in clipped:
        clipped += "\033[0m"
    if used < width:
        clipped += " " * (width - used)
    return clipped


def split_screen_lines(rendered: str) -> list[str]:
    """Split rendered output into lines without their terminators."""
    if not rendered:
        return []
    return rendered.splitlines()
