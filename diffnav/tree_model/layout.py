"""Pre-order layout pass producing flat, width-truncated tree rows."""

from __future__ import annotations

from ..ansi import display_width, truncate_with_tail
from ..diff_source.types import FileChange
from .icons import file_icon_prefix
from .types import DirectoryNode, LeafNode, TreeNode, TreeRow

INDENT_WIDTH = 2
# Directory icon plus one space.
DIR_PREFIX_WIDTH = 2


def format_diff_stats(added: int, deleted: int) -> str:
    """Return ``"+A -D"``, omitting zero parts."""
    parts: list[str] = []
    if added > 0:
        parts.append(f"+{added}")
    if deleted > 0:
        parts.append(f"-{deleted}")
    return " ".join(parts)


def leaf_prefix_width(change: FileChange, icon_style: str) -> int:
    return sum(display_width(icon) + 1 for icon in file_icon_prefix(change, icon_style))


def leaf_stats_width(change: FileChange, show_stats: bool) -> int:
    if not show_stats:
        return 0
    stats = format_diff_stats(change.lines_added, change.lines_deleted)
    return display_width(" " + stats) if stats else 0


def layout_tree(
    root: DirectoryNode,
    width: int,
    selected_path: str | None,
    icon_style: str,
    *,
    hide_root: bool = False,
    show_stats: bool = True,
) -> list[TreeRow]:
    """Flatten ``root`` into rows with depth, visual offset and label.

    The root row has depth 0 and its children depth 1. ``hide_root`` omits
    the root row and shifts every depth and offset down by one. Labels are
    truncated with a trailing ellipsis so that indent, icons, label and stats
    fit in ``width`` cells.
    """
    rows: list[TreeRow] = []
    depth_shift = 1 if hide_root else 0

    def visit(node: TreeNode, depth: int) -> None:
        if isinstance(node, DirectoryNode):
            is_root = node is root
            if not (is_root and hide_root):
                budget = width - INDENT_WIDTH * (depth - depth_shift) - DIR_PREFIX_WIDTH
                rows.append(
                    TreeRow(
                        node=node,
                        depth=depth - depth_shift,
                        visual_offset=len(rows),
                        label=truncate_with_tail(node.name, budget),
                        is_root=is_root,
                    )
                )
            for child in node.children:
                visit(child, depth + 1)
            return

        assert isinstance(node, LeafNode)
        row_depth = depth - depth_shift
        budget = (
            width
            - INDENT_WIDTH * row_depth
            - leaf_prefix_width(node.change, icon_style)
            - leaf_stats_width(node.change, show_stats)
        )
        rows.append(
            TreeRow(
                node=node,
                depth=row_depth,
                visual_offset=len(rows),
                label=truncate_with_tail(node.name, budget),
                selected=selected_path is not None and node.path == selected_path,
            )
        )

    visit(root, 0)
    return rows


def find_leaf_offset(rows: list[TreeRow], path: str) -> int | None:
    """Return the visual offset of the leaf row for ``path``."""
    for row in rows:
        if isinstance(row.node, LeafNode) and row.node.path == path:
            return row.visual_offset
    return None
