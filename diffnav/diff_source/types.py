"""Change records produced by the diff parser."""

from __future__ import annotations

from dataclasses import dataclass

STATUS_ADDED = "added"
STATUS_DELETED = "deleted"
STATUS_MODIFIED = "modified"
STATUS_RENAMED = "renamed"


@dataclass(frozen=True)
class HunkStats:
    """Line counts for one hunk."""

    lines_added: int
    lines_deleted: int


@dataclass(frozen=True)
class FileChange:
    """One file section of a unified diff."""

    old_path: str
    new_path: str
    status: str
    hunks: tuple[HunkStats, ...] = ()
    patch_text: str = ""

    @property
    def path(self) -> str:
        """Effective path: the new name unless the file was deleted."""
        return self.new_path if self.new_path else self.old_path

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def lines_added(self) -> int:
        return sum(hunk.lines_added for hunk in self.hunks)

    @property
    def lines_deleted(self) -> int:
        return sum(hunk.lines_deleted for hunk in self.hunks)

    @property
    def is_new(self) -> bool:
        return self.status == STATUS_ADDED

    @property
    def is_deleted(self) -> bool:
        return self.status == STATUS_DELETED


def aggregate_stats(changes: list[FileChange] | tuple[FileChange, ...]) -> tuple[int, int]:
    """Return summed ``(added, deleted)`` line counts across ``changes``."""
    added = 0
    deleted = 0
    for change in changes:
        added += change.lines_added
        deleted += change.lines_deleted
    return added, deleted
