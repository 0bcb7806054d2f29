"""Panel geometry and the sidebar/focus state machine.

Screen rows, top to bottom: optional title row, the T-shaped separator, the
content area (sidebar, border column, diff pane), and an optional two-row
footer. The sidebar holds a three-row search box above the tree or the
search results. All coordinates here are zero-based cells.
"""

from __future__ import annotations

import logging

from .config import DiffnavConfig
from .state import PANEL_DIFF, PANEL_TREE, AppState

logger = logging.getLogger(__name__)

FOOTER_HEIGHT = 2
TITLE_HEIGHT = 1
SEPARATOR_HEIGHT = 1
SEARCH_HEIGHT = 3
SIDEBAR_GRAB_THRESHOLD = 2
SIDEBAR_MIN_WIDTH = 20
SIDEBAR_HIDE_WIDTH = 10
MIN_RESIZE_STEP = 6
SCROLL_LINES = 3

REGION_SEARCH_BOX = "search_box"
REGION_TREE = "tree"
REGION_RESULTS = "results"
REGION_BORDER = "border"
REGION_DIFF = "diff"


def clamp_sidebar_width(term_width: int, desired: int) -> int:
    """Clamp a sidebar width so the border and one diff column still fit."""
    return max(1, min(desired, term_width - 2))


class PanelLayout:
    """Derives pane geometry from ``AppState`` and applies layout transitions."""

    def __init__(self, state: AppState, config: DiffnavConfig) -> None:
        self.state = state
        self.config = config

    # Geometry

    def sidebar_width(self) -> int:
        state = self.state
        if not state.show_file_tree:
            return 0
        if state.searching:
            desired = self.config.search_tree_width
        elif state.custom_sidebar_width > 0:
            desired = state.custom_sidebar_width
        else:
            desired = self.config.file_tree_width
        return clamp_sidebar_width(state.term_width, desired)

    def header_height(self) -> int:
        return 0 if self.config.hide_header else TITLE_HEIGHT

    def footer_height(self) -> int:
        if not self.config.hide_footer:
            return FOOTER_HEIGHT
        return 1 if self.state.status_message else 0

    def content_top(self) -> int:
        return self.header_height() + SEPARATOR_HEIGHT

    def content_height(self) -> int:
        return max(1, self.state.term_height - self.content_top() - self.footer_height())

    def sidebar_list_top(self) -> int:
        return self.content_top() + SEARCH_HEIGHT

    def sidebar_list_height(self) -> int:
        return max(1, self.content_height() - SEARCH_HEIGHT)

    def diff_x(self) -> int:
        # The border (or the hidden-sidebar grab line) takes one column.
        return self.sidebar_width() + 1

    def diff_width(self) -> int:
        return max(1, self.state.term_width - self.diff_x())

    def region_at(self, x: int, y: int) -> str | None:
        """Return the screen region under cell ``(x, y)``."""
        top = self.content_top()
        if y < top or y >= top + self.content_height():
            return None
        sidebar = self.sidebar_width()
        if x >= self.diff_x():
            return REGION_DIFF
        if x == sidebar:
            return REGION_BORDER
        if y < self.sidebar_list_top():
            return REGION_SEARCH_BOX
        return REGION_RESULTS if self.state.searching else REGION_TREE

    # Transitions

    def toggle_file_tree(self) -> None:
        state = self.state
        state.show_file_tree = not state.show_file_tree
        if state.show_file_tree:
            state.custom_sidebar_width = 0
            state.active_panel = PANEL_TREE
        else:
            state.active_panel = PANEL_DIFF
        state.dirty = True

    def switch_panel(self) -> bool:
        state = self.state
        if not state.show_file_tree:
            return False
        state.active_panel = PANEL_DIFF if state.active_panel == PANEL_TREE else PANEL_TREE
        state.dirty = True
        return True

    def press(self, x: int) -> bool:
        """Start a sidebar drag when ``x`` is on the grab zone; return whether it did."""
        state = self.state
        if state.show_file_tree and abs(x - self.sidebar_width()) <= SIDEBAR_GRAB_THRESHOLD:
            state.dragging_sidebar = True
            return True
        if not state.show_file_tree and x <= SIDEBAR_GRAB_THRESHOLD:
            state.dragging_sidebar = True
            state.show_file_tree = True
            state.dirty = True
            return True
        return False

    def drag_to(self, x: int) -> bool:
        """Apply one drag motion to column ``x``; return whether layout changed."""
        state = self.state
        if not state.dragging_sidebar:
            return False
        if x < SIDEBAR_HIDE_WIDTH:
            state.show_file_tree = False
            state.dragging_sidebar = False
            state.active_panel = PANEL_DIFF
            state.dirty = True
            logger.debug("sidebar hidden by drag")
            return True
        new_width = min(max(SIDEBAR_MIN_WIDTH, x), max(1, state.term_width // 2))
        if abs(new_width - self.sidebar_width()) < MIN_RESIZE_STEP:
            return False
        state.custom_sidebar_width = new_width
        state.dirty = True
        logger.debug("sidebar resized to %d", new_width)
        return True

    def release(self) -> None:
        self.state.dragging_sidebar = False
