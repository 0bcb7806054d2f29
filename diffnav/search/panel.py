"""Incremental file-path search overlay."""

from __future__ import annotations


def filter_paths(paths: list[str], query: str) -> list[str]:
    """Return ``paths`` containing ``query`` case-insensitively, in input order."""
    folded = query.casefold()
    if not folded:
        return list(paths)
    return [path for path in paths if folded in path.casefold()]


class SearchPanel:
    """Query, filtered results and result cursor for the search overlay.

    ``cursor`` stays within ``filtered``; it is 0 when nothing matches.
    """

    def __init__(self) -> None:
        self.active = False
        self.query = ""
        self.paths: list[str] = []
        self.filtered: list[str] = []
        self.cursor = 0
        self.list_start = 0
        self.view_height = 1

    def set_paths(self, paths: list[str]) -> None:
        self.paths = list(paths)
        if self.active:
            self.apply_query(self.query)

    def open(self) -> None:
        self.active = True
        self.apply_query("")

    def close(self) -> None:
        self.active = False
        self.query = ""
        self.filtered = []
        self.cursor = 0
        self.list_start = 0

    def apply_query(self, query: str) -> None:
        """Refilter for ``query`` and reset the result cursor."""
        self.query = query
        self.filtered = filter_paths(self.paths, query)
        self.cursor = 0
        self.list_start = 0

    def insert_text(self, text: str) -> None:
        self.apply_query(self.query + text)

    def backspace(self) -> None:
        self.apply_query(self.query[:-1])

    def clear_query(self) -> None:
        self.apply_query("")

    def set_view_height(self, height: int) -> None:
        self.view_height = max(1, height)
        self._follow_cursor()

    def move(self, delta: int) -> bool:
        """Move the result cursor, clamped to the filtered list."""
        if not self.filtered:
            self.cursor = 0
            return False
        previous = self.cursor
        self.cursor = max(0, min(len(self.filtered) - 1, self.cursor + delta))
        self._follow_cursor()
        return self.cursor != previous

    def _max_list_start(self) -> int:
        return max(0, len(self.filtered) - self.view_height)

    def _follow_cursor(self) -> None:
        if self.cursor < self.list_start:
            self.list_start = self.cursor
        elif self.cursor >= self.list_start + self.view_height:
            self.list_start = self.cursor - self.view_height + 1
        self.list_start = max(0, min(self.list_start, self._max_list_start()))

    def scroll_by(self, delta: int) -> bool:
        previous = self.list_start
        self.list_start = max(0, min(self.list_start + delta, self._max_list_start()))
        return self.list_start != previous

    def selected_path(self) -> str | None:
        if not self.filtered:
            return None
        return self.filtered[self.cursor]

    def path_at_row(self, row: int) -> str | None:
        """Return the result shown at viewport row ``row``."""
        if row < 0:
            return None
        index = row + self.list_start
        if 0 <= index < len(self.filtered):
            return self.filtered[index]
        return None

    def visible_results(self) -> list[tuple[int, str]]:
        end = self.list_start + self.view_height
        return list(enumerate(self.filtered[self.list_start : end], start=self.list_start))
