"""Changed-path tree: build, collapse, layout and row formatting.

The tree is rebuilt wholesale from the flat file list whenever selection,
width or icon style changes; layout emits flat ``TreeRow`` values located by
visual offset or ``full_path``.
"""

from __future__ import annotations

from .build import build_path_tree, find_directory, iter_leaves
from .collapse import build_collapsed_tree, collapse_tree
from .icons import (
    ICON_STYLES,
    ICONS_ASCII,
    ICONS_NERD_FILETYPE,
    ICONS_NERD_FULL,
    ICONS_NERD_SIMPLE,
    ICONS_NERD_STATUS,
    ICONS_UNICODE,
    directory_icon,
    file_icon,
    next_icon_style,
    normalize_icon_style,
)
from .layout import find_leaf_offset, format_diff_stats, layout_tree
from .rendering import format_stats, format_tree_row, status_color_for
from .types import PATH_SEPARATOR, ROOT_NAME, DirectoryNode, LeafNode, TreeNode, TreeRow

__all__ = [
    "DirectoryNode",
    "LeafNode",
    "TreeNode",
    "TreeRow",
    "ROOT_NAME",
    "PATH_SEPARATOR",
    "build_path_tree",
    "build_collapsed_tree",
    "collapse_tree",
    "find_directory",
    "iter_leaves",
    "layout_tree",
    "find_leaf_offset",
    "format_diff_stats",
    "format_stats",
    "format_tree_row",
    "status_color_for",
    "ICON_STYLES",
    "ICONS_ASCII",
    "ICONS_UNICODE",
    "ICONS_NERD_STATUS",
    "ICONS_NERD_SIMPLE",
    "ICONS_NERD_FILETYPE",
    "ICONS_NERD_FULL",
    "directory_icon",
    "file_icon",
    "next_icon_style",
    "normalize_icon_style",
]
