"""Single-child directory chain collapsing."""

from __future__ import annotations

from collections.abc import Iterable

from ..diff_source.types import FileChange
from .build import build_path_tree
from .types import PATH_SEPARATOR, DirectoryNode, TreeNode


def collapse_tree(node: DirectoryNode, *, is_root: bool = True) -> DirectoryNode:
    """Return a copy of ``node`` with single-directory chains merged.

    Children collapse first. A non-root directory whose only child is a
    directory then absorbs it as ``"parent/child"``. The input is not mutated.
    """
    children: list[TreeNode] = []
    for child in node.children:
        if isinstance(child, DirectoryNode):
            children.append(collapse_tree(child, is_root=False))
        else:
            children.append(child)

    if not is_root and len(children) == 1 and isinstance(children[0], DirectoryNode):
        only = children[0]
        return DirectoryNode(
            name=node.name + PATH_SEPARATOR + only.name,
            full_path=only.full_path,
            children=list(only.children),
        )
    return DirectoryNode(name=node.name, full_path=node.full_path, children=children)


def build_collapsed_tree(changes: Iterable[FileChange]) -> DirectoryNode:
    """Build then collapse the tree for ``changes``."""
    return collapse_tree(build_path_tree(changes))
