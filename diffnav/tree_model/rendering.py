"""Formatting helpers for laid-out tree rows."""

from __future__ import annotations

from ..ansi import pad_ansi_line
from ..diff_source.types import FileChange
from ..ui_theme import DEFAULT_THEME, UITheme
from .icons import directory_icon, file_icon_prefix
from .layout import INDENT_WIDTH, format_diff_stats
from .types import LeafNode, TreeRow


def status_color_for(change: FileChange, theme: UITheme | None = None) -> str:
    """Return ANSI color for a file's change status."""
    active_theme = theme or DEFAULT_THEME
    if change.is_new:
        return active_theme.file_added
    if change.is_deleted:
        return active_theme.file_deleted
    return active_theme.file_modified


def format_stats(added: int, deleted: int, theme: UITheme | None = None) -> str:
    """Render ``+A -D`` with added/deleted colors, omitting zero parts."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    parts: list[str] = []
    if added > 0:
        parts.append(f"{active_theme.stat_added}+{added}{reset}")
    if deleted > 0:
        parts.append(f"{active_theme.stat_deleted}-{deleted}{reset}")
    return " ".join(parts)


def format_tree_row(
    row: TreeRow,
    width: int,
    icon_style: str,
    *,
    color_file_names: bool = False,
    show_stats: bool = True,
    theme: UITheme | None = None,
) -> str:
    """Render one tree row as ANSI text exactly ``width`` cells wide."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    indent = " " * (INDENT_WIDTH * row.depth)

    if not isinstance(row.node, LeafNode):
        icon = directory_icon(icon_style)
        text = f"{indent}{active_theme.tree_dir}{icon} {row.label}{reset}"
        return pad_ansi_line(text, width)

    change = row.node.change
    color = status_color_for(change, active_theme)
    icons = "".join(f"{color}{glyph}{reset} " for glyph in file_icon_prefix(change, icon_style))
    stats = ""
    if show_stats and format_diff_stats(change.lines_added, change.lines_deleted):
        stats = " " + format_stats(change.lines_added, change.lines_deleted, active_theme)

    if row.selected:
        name = f"{active_theme.tree_selected}{color}{row.label}{reset}"
    elif color_file_names:
        name = f"{color}{row.label}{reset}"
    else:
        name = f"{active_theme.tree_file}{row.label}{reset}"
    return pad_ansi_line(f"{indent}{icons}{name}{stats}", width)
