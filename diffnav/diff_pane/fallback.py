"""Raw-patch rendering used when the external formatter fails."""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import DiffLexer


def render_raw_patch(patch_text: str, no_color: bool = False) -> str:
    """Return ``patch_text`` colorized with pygments' diff lexer.

    With ``no_color`` the text is returned unchanged.
    """
    if no_color or not patch_text:
        return patch_text
    return highlight(patch_text, DiffLexer(), TerminalFormatter())
