"""Unified-diff parsing and file ordering.

Parsing is delegated to ``unidiff``; this module only maps its patched-file
objects onto ``FileChange`` records and applies the tree-friendly ordering.
"""

from __future__ import annotations

import functools
import logging

from unidiff import PatchSet
from unidiff.errors import UnidiffParseError

from ..errors import DiffParseError
from .types import (
    STATUS_ADDED,
    STATUS_DELETED,
    STATUS_MODIFIED,
    STATUS_RENAMED,
    FileChange,
    HunkStats,
)

logger = logging.getLogger(__name__)

DEV_NULL = "/dev/null"
ROOT_DIR = "."


def _strip_side_prefix(raw: str | None) -> str:
    """Normalize one side of a file header to a repository-relative path."""
    if not raw:
        return ""
    path = raw.strip()
    if path == DEV_NULL:
        return ""
    if path.startswith(("a/", "b/")):
        return path[2:]
    return path


def _status_for(patched_file, old_path: str, new_path: str) -> str:
    if patched_file.is_added_file or not old_path:
        return STATUS_ADDED
    if patched_file.is_removed_file or not new_path:
        return STATUS_DELETED
    if old_path != new_path:
        return STATUS_RENAMED
    return STATUS_MODIFIED


def file_change_from_patched_file(patched_file) -> FileChange:
    """Convert one ``unidiff.PatchedFile`` into a ``FileChange``."""
    old_path = _strip_side_prefix(patched_file.source_file)
    new_path = _strip_side_prefix(patched_file.target_file)
    status = _status_for(patched_file, old_path, new_path)
    if status == STATUS_ADDED:
        old_path = ""
    elif status == STATUS_DELETED:
        new_path = ""
    hunks = tuple(HunkStats(lines_added=hunk.added, lines_deleted=hunk.removed) for hunk in patched_file)
    return FileChange(
        old_path=old_path,
        new_path=new_path,
        status=status,
        hunks=hunks,
        patch_text=str(patched_file),
    )


def parse_diff_text(text: str) -> list[FileChange]:
    """Parse a complete unified diff into file changes in diff order.

    Raises ``DiffParseError`` when the text is not a parseable diff.
    """
    if not text.strip():
        return []
    try:
        patch_set = PatchSet(text)
    except UnidiffParseError as exc:
        raise DiffParseError(f"could not parse diff: {exc}") from exc

    changes = [file_change_from_patched_file(patched_file) for patched_file in patch_set]
    changes = [change for change in changes if change.path]
    logger.info("parsed %d file(s) from %d bytes of diff", len(changes), len(text))
    return changes


def _parent_dir(path: str) -> str:
    head, sep, _tail = path.rpartition("/")
    if not sep or not head:
        return ROOT_DIR
    return head


def _is_path_prefix(prefix: str, path: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def compare_file_changes(a: FileChange, b: FileChange) -> int:
    """Three-way comparison used by ``sort_file_changes``."""
    name_a = a.path
    name_b = b.path
    dir_a = _parent_dir(name_a)
    dir_b = _parent_dir(name_b)

    if dir_a != ROOT_DIR and dir_b == ROOT_DIR:
        return -1
    if dir_b != ROOT_DIR and dir_a == ROOT_DIR:
        return 1

    if dir_a != ROOT_DIR and dir_b != ROOT_DIR and dir_a != dir_b:
        if _is_path_prefix(dir_a, dir_b):
            return -1
        if _is_path_prefix(dir_b, dir_a):
            return 1

    folded_a = name_a.lower()
    folded_b = name_b.lower()
    if folded_a < folded_b:
        return -1
    if folded_a > folded_b:
        return 1
    return 0


def sort_file_changes(changes: list[FileChange]) -> list[FileChange]:
    """Return ``changes`` in display order.

    Files sharing a directory compare case-insensitively by full path, a file
    at the root sorts after any file inside a subdirectory, and a directory
    that is a path-prefix of another sorts first. Ties keep input order.
    """
    return sorted(changes, key=functools.cmp_to_key(compare_file_changes))
