"""Tree node and layout row datatypes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from ..diff_source.types import FileChange

ROOT_NAME = "."
PATH_SEPARATOR = "/"


@dataclass
class DirectoryNode:
    """Directory in the changed-path tree; ``full_path`` is "" for the root."""

    name: str
    full_path: str
    children: list[TreeNode] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.full_path == "" and self.name == ROOT_NAME


@dataclass(frozen=True)
class LeafNode:
    """One changed file."""

    change: FileChange

    @property
    def path(self) -> str:
        return self.change.path

    @property
    def name(self) -> str:
        return self.change.name


TreeNode = Union[DirectoryNode, LeafNode]


@dataclass(frozen=True)
class TreeRow:
    """One laid-out tree row; ``visual_offset`` is its pre-order index."""

    node: TreeNode
    depth: int
    visual_offset: int
    label: str
    selected: bool = False
    is_root: bool = False

    @property
    def is_dir(self) -> bool:
        return isinstance(self.node, DirectoryNode)

    @property
    def path(self) -> str:
        """Leaf path or directory ``full_path``."""
        if isinstance(self.node, LeafNode):
            return self.node.path
        return self.node.full_path
