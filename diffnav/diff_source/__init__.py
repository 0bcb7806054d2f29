"""Diff text parsing and the ``FileChange`` record."""

from __future__ import annotations

from .parse import compare_file_changes, parse_diff_text, sort_file_changes
from .types import (
    STATUS_ADDED,
    STATUS_DELETED,
    STATUS_MODIFIED,
    STATUS_RENAMED,
    FileChange,
    HunkStats,
    aggregate_stats,
)

__all__ = [
    "FileChange",
    "HunkStats",
    "STATUS_ADDED",
    "STATUS_DELETED",
    "STATUS_MODIFIED",
    "STATUS_RENAMED",
    "aggregate_stats",
    "compare_file_changes",
    "parse_diff_text",
    "sort_file_changes",
]
