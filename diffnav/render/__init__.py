"""Frame composition for the sidebar/diff terminal view.

``build_frame`` turns a ``RenderContext`` snapshot into one ANSI string
(cursor home, then every screen row). Nothing here mutates runtime state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..ansi import pad_ansi_line, truncate_with_tail
from ..tree_model import TreeRow, format_tree_row
from ..ui_theme import DEFAULT_THEME, UITheme

TITLE = "DIFFNAV"
SEARCH_PLACEHOLDER = "Filter files"
SEARCH_PROMPT = "> "
HELP_ITEMS: tuple[tuple[str, str], ...] = (
    ("↑/k", "prev file"),
    ("↓/j", "next file"),
    ("ctrl+d", "diff down"),
    ("ctrl+u", "diff up"),
    ("e", "toggle file tree"),
    ("t", "search files"),
    ("tab", "switch panel"),
    ("s", "side-by-side"),
    ("i", "icons"),
    ("y", "copy path"),
    ("o", "open"),
    ("q", "quit"),
)
HELP_SEPARATOR = " · "


@dataclass
class RenderContext:
    width: int
    height: int
    content_top: int
    content_height: int
    sidebar_width: int
    show_file_tree: bool
    searching: bool
    tree_focused: bool
    diff_header: list[str]
    diff_body: list[str]
    tree_rows: list[TreeRow] = field(default_factory=list)
    icon_style: str = "ascii"
    color_file_names: bool = True
    show_stats: bool = True
    search_query: str = ""
    search_results: list[tuple[int, str]] = field(default_factory=list)
    search_cursor: int = 0
    show_header: bool = True
    show_footer: bool = True
    status_message: str = ""
    status_is_error: bool = False
    theme: UITheme = DEFAULT_THEME


def help_line(width: int, theme: UITheme | None = None) -> str:
    """Return the footer key hints, clipped to ``width``."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    parts = [f"{active_theme.help_key}{key}{reset} {active_theme.help_dim}{desc}{reset}" for key, desc in HELP_ITEMS]
    return pad_ansi_line(HELP_SEPARATOR.join(parts), width)


def separator_line(context: RenderContext) -> str:
    """Return the T-shaped separator, colored by focus on each side."""
    theme = context.theme
    reset = theme.reset
    left_color = theme.divider_active if context.tree_focused and not context.searching else theme.divider
    right_color = theme.divider if context.tree_focused else theme.divider_active
    if not context.show_file_tree:
        return f"{right_color}{'─' * context.width}{reset}"
    left_width = min(context.sidebar_width, context.width)
    right_width = max(0, context.width - left_width - 1)
    return f"{left_color}{'─' * left_width}┬{reset}{right_color}{'─' * right_width}{reset}"


def search_box_lines(context: RenderContext) -> list[str]:
    """Return the three rows of the rounded search box."""
    theme = context.theme
    reset = theme.reset
    width = context.sidebar_width
    inner = max(0, width - 2)
    if context.searching and context.search_query:
        text = f"{SEARCH_PROMPT}{theme.search_query}{context.search_query}{reset}"
    else:
        text = f"{theme.search_placeholder}{SEARCH_PROMPT}{SEARCH_PLACEHOLDER}{reset}"
    if context.searching:
        text += "▏"
    border = theme.search_border
    top = f"{border}╭{'─' * inner}╮{reset}"
    middle = f"{border}│{reset}{pad_ansi_line(text, inner)}{border}│{reset}"
    bottom = f"{border}╰{'─' * inner}╯{reset}"
    return [pad_ansi_line(line, width) for line in (top, middle, bottom)]


def sidebar_list_lines(context: RenderContext, rows: int) -> list[str]:
    """Return tree rows or search results for the sidebar list area."""
    theme = context.theme
    width = context.sidebar_width
    lines: list[str] = []
    if context.searching:
        for index, path in context.search_results[:rows]:
            text = truncate_with_tail(" " + path, width - 2)
            if index == context.search_cursor:
                lines.append(pad_ansi_line(f"{theme.search_selected}{text}{theme.reset}", width))
            else:
                lines.append(pad_ansi_line(text, width))
    else:
        for row in context.tree_rows[:rows]:
            lines.append(
                format_tree_row(
                    row,
                    width,
                    context.icon_style,
                    color_file_names=context.color_file_names,
                    show_stats=context.show_stats,
                    theme=theme,
                )
            )
    while len(lines) < rows:
        lines.append(" " * width)
    return lines


def build_frame(context: RenderContext) -> str:
    """Compose one full frame as an ANSI string."""
    theme = context.theme
    reset = theme.reset
    width = max(1, context.width)
    lines: list[str] = []

    if context.show_header:
        lines.append(pad_ansi_line(f"{theme.header_title}{TITLE}{reset}", width))
    lines.append(pad_ansi_line(separator_line(context), width))

    content_height = max(1, context.content_height)
    if context.show_file_tree:
        sidebar = search_box_lines(context)[:content_height]
        sidebar.extend(sidebar_list_lines(context, max(0, content_height - len(sidebar))))
        left_color = theme.divider_active if context.tree_focused and not context.searching else theme.divider
        border = f"{left_color}│{reset}"
    else:
        sidebar = [""] * content_height
        border = f"{theme.divider}│{reset}"

    diff_width = max(1, width - context.sidebar_width - 1)
    diff_lines = list(context.diff_header) + list(context.diff_body)
    for row in range(content_height):
        diff_text = diff_lines[row] if row < len(diff_lines) else ""
        lines.append(f"{sidebar[row]}{border}{pad_ansi_line(diff_text, diff_width)}")

    if context.show_footer:
        lines.append(f"{theme.divider}{'─' * width}{reset}")
    if context.status_message:
        color = theme.status_error if context.status_is_error else theme.help_key
        lines.append(pad_ansi_line(f"{color}{context.status_message}{reset}", width))
    elif context.show_footer:
        lines.append(help_line(width, theme))

    return "\033[H\033[J" + "\r\n".join(lines[: max(1, context.height)]) + reset


__all__ = [
    "RenderContext",
    "TITLE",
    "SEARCH_PLACEHOLDER",
    "build_frame",
    "help_line",
    "search_box_lines",
    "separator_line",
    "sidebar_list_lines",
]
