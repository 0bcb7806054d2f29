"""Path-tree construction from a flat list of changed files."""

from __future__ import annotations

from collections.abc import Iterable

from ..diff_source.types import FileChange
from .types import PATH_SEPARATOR, ROOT_NAME, DirectoryNode, LeafNode, TreeNode


def _find_child_directory(node: DirectoryNode, name: str) -> DirectoryNode | None:
    for child in node.children:
        if isinstance(child, DirectoryNode) and child.name == name:
            return child
    return None


def build_path_tree(changes: Iterable[FileChange]) -> DirectoryNode:
    """Build the directory tree for ``changes`` in the given order.

    Existing directories are reused by exact segment name; the remaining
    segments of each path become new directory nodes and a final leaf.
    """
    root = DirectoryNode(name=ROOT_NAME, full_path="")
    for change in changes:
        segments = change.path.split(PATH_SEPARATOR)
        dir_segments = segments[:-1]
        subtree = root
        consumed = 0
        for segment in dir_segments:
            existing = _find_child_directory(subtree, segment)
            if existing is None:
                break
            subtree = existing
            consumed += 1

        for segment in dir_segments[consumed:]:
            full_path = segment if not subtree.full_path else subtree.full_path + PATH_SEPARATOR + segment
            created = DirectoryNode(name=segment, full_path=full_path)
            subtree.children.append(created)
            subtree = created

        subtree.children.append(LeafNode(change))
    return root


def iter_leaves(node: TreeNode):
    """Yield leaves below ``node`` in pre-order."""
    if isinstance(node, LeafNode):
        yield node
        return
    for child in node.children:
        yield from iter_leaves(child)


def find_directory(node: DirectoryNode, full_path: str) -> DirectoryNode | None:
    """Return the directory with ``full_path`` below ``node`` (inclusive)."""
    if node.full_path == full_path:
        return node
    for child in node.children:
        if isinstance(child, DirectoryNode):
            found = find_directory(child, full_path)
            if found is not None:
                return found
    return None
