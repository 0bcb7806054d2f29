"""Tree pane: file cursor, selection highlighting, scrolling and hit-testing."""

from __future__ import annotations

import logging

from ..diff_source.types import FileChange
from ..tree_model import (
    DirectoryNode,
    LeafNode,
    TreeRow,
    build_collapsed_tree,
    find_leaf_offset,
    layout_tree,
    normalize_icon_style,
)

logger = logging.getLogger(__name__)

# Rows kept visible above a cursor-selected file.
CONTEXT_MARGIN = 15


class TreePane:
    """Owns the flat file list and the laid-out rows derived from it.

    Selection is a cursor into ``files``; every selection, width or icon
    change rebuilds the collapsed tree and re-runs the layout pass.
    """

    def __init__(
        self,
        *,
        width: int,
        icon_style: str = "ascii",
        hide_root: bool = False,
        show_stats: bool = True,
    ) -> None:
        self.width = max(0, width)
        self.icon_style = normalize_icon_style(icon_style)
        self.hide_root = hide_root
        self.show_stats = show_stats
        self.files: list[FileChange] = []
        self.root: DirectoryNode | None = None
        self.rows: list[TreeRow] = []
        self.cursor = 0
        self.selected_path: str | None = None
        self.scroll_start = 0
        self.view_height = 1

    # Rebuilds

    def set_files(self, files: list[FileChange]) -> None:
        self.files = list(files)
        self.cursor = 0
        self.selected_path = None
        self.scroll_start = 0
        self._rebuild()

    def set_width(self, width: int) -> None:
        width = max(0, width)
        if width == self.width:
            return
        self.width = width
        self._rebuild()

    def set_icon_style(self, icon_style: str) -> None:
        self.icon_style = normalize_icon_style(icon_style)
        if self.files:
            self._rebuild()

    def set_view_height(self, height: int) -> None:
        self.view_height = max(1, height)
        self.scroll_start = self._clamp_scroll(self.scroll_start)

    def _rebuild(self) -> None:
        self.root = build_collapsed_tree(self.files)
        self.rows = layout_tree(
            self.root,
            self.width,
            self.selected_path,
            self.icon_style,
            hide_root=self.hide_root,
            show_stats=self.show_stats,
        )
        self.scroll_start = self._clamp_scroll(self.scroll_start)

    # Selection

    def _select(self, index: int) -> bool:
        if not self.files:
            return False
        index = max(0, min(index, len(self.files) - 1))
        self.cursor = index
        self.selected_path = self.files[index].path
        self._rebuild()
        return True

    def set_cursor(self, index: int) -> None:
        """Select file ``index`` and scroll it into view with context above."""
        if not self._select(index):
            return
        offset = self.selected_offset()
        if offset is not None:
            self.scroll_start = self._clamp_scroll(max(0, offset - CONTEXT_MARGIN))

    def set_cursor_no_scroll(self, index: int) -> None:
        """Select file ``index`` leaving the viewport where it is."""
        scroll = self.scroll_start
        if self._select(index):
            self.scroll_start = self._clamp_scroll(scroll)

    def index_of_path(self, path: str) -> int | None:
        for index, change in enumerate(self.files):
            if change.path == path:
                return index
        return None

    def select_path(self, path: str) -> bool:
        """Move the cursor to the file at ``path`` without scrolling."""
        index = self.index_of_path(path)
        if index is None:
            return False
        self.set_cursor_no_scroll(index)
        return True

    def move_cursor(self, delta: int) -> bool:
        """Move to the next/previous file; return whether the cursor moved."""
        if not self.files:
            return False
        target = max(0, min(len(self.files) - 1, self.cursor + delta))
        if target == self.cursor and self.selected_path is not None:
            return False
        self.set_cursor(target)
        return True

    def selected_change(self) -> FileChange | None:
        if not self.files or self.selected_path is None:
            return None
        return self.files[self.cursor]

    def selected_offset(self) -> int | None:
        if self.selected_path is None:
            return None
        return find_leaf_offset(self.rows, self.selected_path)

    # Viewport

    def max_scroll(self) -> int:
        return max(0, len(self.rows) - self.view_height)

    def _clamp_scroll(self, start: int) -> int:
        return max(0, min(start, self.max_scroll()))

    def scroll_by(self, delta: int) -> bool:
        previous = self.scroll_start
        self.scroll_start = self._clamp_scroll(self.scroll_start + delta)
        return self.scroll_start != previous

    def visible_rows(self) -> list[TreeRow]:
        return self.rows[self.scroll_start : self.scroll_start + self.view_height]

    # Hit-testing

    def node_at_row(self, row: int) -> TreeRow | None:
        """Return the laid-out row shown at viewport row ``row``."""
        if row < 0:
            return None
        line = row + self.scroll_start
        if 0 <= line < len(self.rows):
            return self.rows[line]
        return None

    def path_at_row(self, row: int) -> str | None:
        """Return the file path shown at viewport row ``row``; ``None`` for directories."""
        hit = self.node_at_row(row)
        if hit is None or not isinstance(hit.node, LeafNode):
            return None
        return hit.node.path

    def changes_under(self, full_path: str) -> list[FileChange]:
        """Return member files of the directory ``full_path`` in file order."""
        if not full_path:
            return list(self.files)
        prefix = full_path + "/"
        return [change for change in self.files if change.path.startswith(prefix)]
