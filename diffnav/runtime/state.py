from __future__ import annotations

from dataclasses import dataclass

PANEL_TREE = "tree"
PANEL_DIFF = "diff"


@dataclass
class AppState:
    term_width: int = 80
    term_height: int = 24
    show_file_tree: bool = True
    custom_sidebar_width: int = 0
    active_panel: str = PANEL_TREE
    searching: bool = False
    dragging_sidebar: bool = False
    side_by_side: bool = True
    icon_style: str = "ascii"
    displayed_key: str | None = None
    status_message: str = ""
    status_message_until: float = 0.0
    status_is_error: bool = False
    formatter_error_reported: bool = False
    dirty: bool = True
