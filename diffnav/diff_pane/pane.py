"""Diff pane: the displayed path key, its rendered lines and scroll offset."""

from __future__ import annotations

from ..ansi import clip_ansi_line, split_screen_lines, truncate_with_tail
from ..ui_theme import DEFAULT_THEME, UITheme
from .cache import CacheEntry

HEADER_HEIGHT = 3
LOADING_TEXT = "Loading..."


class DiffPane:
    """Shows one cache entry; only text for ``key`` is ever displayed."""

    def __init__(self) -> None:
        self.key: str | None = None
        self.title = ""
        self.added = 0
        self.deleted = 0
        self.lines: list[str] = []
        self.loading = False
        self.start = 0
        self.width = 1
        self.height = 1

    def set_size(self, width: int, height: int) -> None:
        self.width = max(1, width)
        self.height = max(1, height)
        self.start = self._clamp(self.start)

    def body_height(self) -> int:
        return max(1, self.height - HEADER_HEIGHT)

    def show(self, entry: CacheEntry, title: str, *, reset_scroll: bool = True) -> None:
        """Display ``entry``; text arrives later when its render is pending."""
        self.key = entry.key
        self.title = title
        self.added = entry.added
        self.deleted = entry.deleted
        if reset_scroll:
            self.start = 0
        self.update_text(entry)

    def update_text(self, entry: CacheEntry) -> bool:
        """Refresh lines from ``entry`` when it is the displayed key."""
        if entry.key != self.key:
            return False
        if entry.is_rendered:
            self.lines = split_screen_lines(entry.rendered_text)
            self.loading = False
        else:
            self.lines = []
            self.loading = True
        self.start = self._clamp(self.start)
        return True

    def max_start(self) -> int:
        return max(0, len(self.lines) - self.body_height())

    def _clamp(self, start: int) -> int:
        return max(0, min(start, self.max_start()))

    def scroll_by(self, delta: int) -> bool:
        previous = self.start
        self.start = self._clamp(self.start + delta)
        return self.start != previous

    def half_page(self) -> int:
        return max(1, self.body_height() // 2)

    def go_to_top(self) -> None:
        self.start = 0

    def go_to_bottom(self) -> None:
        self.start = self.max_start()

    def header_lines(self, theme: UITheme | None = None) -> list[str]:
        """Return the path line, the stats line and the separator."""
        active_theme = theme or DEFAULT_THEME
        reset = active_theme.reset
        if self.key is None:
            return ["", "", active_theme.divider + "─" * self.width + reset]
        name = truncate_with_tail(self.title, self.width - 1)
        top = f" \033[1m{name}{reset}" if reset else f" {name}"
        bottom = (
            f"  {active_theme.stat_added}+{self.added}{reset} "
            f"{active_theme.stat_deleted}-{self.deleted}{reset}"
        )
        return [top, bottom, active_theme.divider + "─" * self.width + reset]

    def body_lines(self) -> list[str]:
        """Return the visible body lines clipped to the pane width."""
        if self.key is not None and self.loading:
            return [LOADING_TEXT]
        visible = self.lines[self.start : self.start + self.body_height()]
        return [clip_ansi_line(line, self.width) for line in visible]
