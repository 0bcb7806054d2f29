"""Per-path memo of formatter output.

Entries are keyed by a file path or a directory ``full_path`` and live for the
whole session. Each entry remembers the id of its in-flight request so a
repeated lookup never spawns a second formatter, and a result superseded by
a re-render is dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ..diff_source.types import FileChange, aggregate_stats
from .fallback import render_raw_patch
from .jobs import RenderResult

logger = logging.getLogger(__name__)

Dispatch = Callable[..., int]


@dataclass
class CacheEntry:
    """Rendered diff text and stats for one path key."""

    key: str
    changes: tuple[FileChange, ...]
    added: int
    deleted: int
    rendered_text: str = ""
    side_by_side: bool | None = None
    pending_request_id: int | None = None
    failed: bool = False

    @property
    def patch_text(self) -> str:
        return "".join(change.patch_text for change in self.changes)

    @property
    def is_pending(self) -> bool:
        return self.pending_request_id is not None

    @property
    def is_rendered(self) -> bool:
        """Whether a render finished for this entry, even with empty output."""
        return self.side_by_side is not None


def wants_side_by_side(preference: bool, changes: Sequence[FileChange]) -> bool:
    """Side-by-side only when preferred and no member file is new or deleted."""
    if not preference:
        return False
    return not any(change.is_new or change.is_deleted for change in changes)


class DiffRenderCache:
    """Memoizes formatter output and issues render requests through ``dispatch``.

    ``dispatch(key=, patch_text=, width=, side_by_side=)`` starts a render and
    returns its request id.
    """

    def __init__(
        self,
        dispatch: Dispatch,
        *,
        width: int = 80,
        side_by_side: bool = True,
        no_color: bool = False,
        render_fallback: Callable[[str, bool], str] = render_raw_patch,
    ) -> None:
        self._dispatch = dispatch
        self.width = max(1, width)
        self.side_by_side = side_by_side
        self.no_color = no_color
        self._render_fallback = render_fallback
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def entry(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def set_width(self, width: int) -> None:
        self.width = max(1, width)

    def set_side_by_side(self, side_by_side: bool) -> None:
        self.side_by_side = side_by_side

    def _issue(self, entry: CacheEntry) -> None:
        side_by_side = wants_side_by_side(self.side_by_side, entry.changes)
        entry.pending_request_id = self._dispatch(
            key=entry.key,
            patch_text=entry.patch_text,
            width=self.width,
            side_by_side=side_by_side,
        )

    def get(self, key: str, changes: Sequence[FileChange]) -> CacheEntry:
        """Return the entry for ``key``, requesting a render when needed.

        Nothing is dispatched when text for the current render mode exists or
        a render for the entry is already in flight.
        """
        entry = self._entries.get(key)
        if entry is None:
            members = tuple(changes)
            added, deleted = aggregate_stats(members)
            entry = CacheEntry(key=key, changes=members, added=added, deleted=deleted)
            self._entries[key] = entry

        if entry.is_pending:
            return entry
        if entry.is_rendered and entry.side_by_side == wants_side_by_side(self.side_by_side, entry.changes):
            logger.debug("cache hit key=%r", key)
            return entry
        self._issue(entry)
        return entry

    def rerender(self, key: str) -> CacheEntry | None:
        """Issue one new render for ``key`` regardless of cached text.

        Any in-flight request for the key is superseded; other entries are
        untouched.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        self._issue(entry)
        return entry

    def accept(self, result: RenderResult) -> bool:
        """Store ``result`` on its own entry; return whether it was stored.

        Results for unknown keys or superseded request ids are discarded.
        """
        entry = self._entries.get(result.key)
        if entry is None or entry.pending_request_id != result.request_id:
            logger.debug("discarding stale render id=%d key=%r", result.request_id, result.key)
            return False

        entry.pending_request_id = None
        entry.side_by_side = result.request.side_by_side
        if result.error is not None:
            entry.failed = True
            entry.rendered_text = self._render_fallback(entry.patch_text, self.no_color)
        else:
            entry.failed = False
            entry.rendered_text = result.text
        return True
