"""Frame composition for the sidebar/diff layout."""

from __future__ import annotations

import unittest

from diffnav.ansi import display_width, strip_ansi
from diffnav.render import (
    RenderContext,
    SEARCH_PLACEHOLDER,
    build_frame,
    help_line,
    search_box_lines,
    separator_line,
    sidebar_list_lines,
)
from diffnav.ui_theme import DEFAULT_THEME, PLAIN_THEME

CLEAR = "\033[H\033[J"


def context(**overrides) -> RenderContext:
    values = dict(
        width=60,
        height=12,
        content_top=2,
        content_height=8,
        sidebar_width=20,
        show_file_tree=True,
        searching=False,
        tree_focused=True,
        diff_header=[" a.py", "  +1 -0", "─" * 39],
        diff_body=["+hello"],
        theme=PLAIN_THEME,
    )
    values.update(overrides)
    return RenderContext(**values)


def frame_rows(ctx: RenderContext) -> list[str]:
    frame = build_frame(ctx)
    assert frame.startswith(CLEAR)
    return frame[len(CLEAR) :].split("\r\n")


class BuildFrameTests(unittest.TestCase):
    def test_rows_are_full_width_and_fill_height(self) -> None:
        rows = frame_rows(context())
        self.assertEqual(len(rows), 12)
        for row in rows:
            self.assertEqual(display_width(row), 60)

    def test_title_separator_and_footer(self) -> None:
        rows = frame_rows(context())
        self.assertEqual(rows[0].rstrip(), "DIFFNAV")
        self.assertEqual(rows[1], "─" * 20 + "┬" + "─" * 39)
        self.assertEqual(rows[-2], "─" * 60)
        self.assertTrue(rows[-1].startswith("↑/k prev file"))

    def test_content_rows_join_sidebar_border_and_diff(self) -> None:
        rows = frame_rows(context())
        self.assertEqual(rows[2][20], "│")
        self.assertEqual(rows[2][21:].rstrip(), " a.py")
        self.assertEqual(rows[5][21:].rstrip(), "+hello")

    def test_hidden_sidebar_draws_grab_line(self) -> None:
        rows = frame_rows(context(show_file_tree=False, sidebar_width=0, tree_focused=False))
        self.assertEqual(rows[1], "─" * 60)
        self.assertTrue(rows[2].startswith("│ a.py"))

    def test_hidden_header_and_footer(self) -> None:
        rows = frame_rows(context(show_header=False, show_footer=False, height=9, content_top=1))
        self.assertEqual(len(rows), 9)
        self.assertTrue(rows[0].startswith("─"))

    def test_status_message_without_footer(self) -> None:
        rows = frame_rows(context(show_footer=False, status_message="copied a.py", height=11))
        self.assertEqual(rows[-1].rstrip(), "copied a.py")

    def test_default_theme_keeps_widths(self) -> None:
        frame = build_frame(context(theme=DEFAULT_THEME))
        rows = frame[len(CLEAR) :].split("\r\n")
        self.assertEqual([display_width(row) for row in rows], [60] * 12)


class SidebarPartsTests(unittest.TestCase):
    def test_search_box_placeholder_and_query(self) -> None:
        idle = search_box_lines(context())
        self.assertEqual(len(idle), 3)
        self.assertTrue(idle[0].startswith("╭"))
        self.assertIn(SEARCH_PLACEHOLDER, idle[1])
        typing = search_box_lines(context(searching=True, search_query="json"))
        self.assertIn("> json▏", typing[1])
        self.assertTrue(all(display_width(line) == 20 for line in typing))

    def test_search_results_mark_cursor(self) -> None:
        theme = DEFAULT_THEME
        ctx = context(
            searching=True,
            search_results=[(0, "src/config.json"), (1, "tests/fix.json")],
            search_cursor=1,
            theme=theme,
        )
        lines = sidebar_list_lines(ctx, 4)
        self.assertEqual(len(lines), 4)
        self.assertNotIn(theme.search_selected, lines[0])
        self.assertIn(theme.search_selected, lines[1])
        self.assertEqual(strip_ansi(lines[1]).rstrip(), " tests/fix.json")
        self.assertEqual(lines[3], " " * 20)

    def test_separator_follows_focus(self) -> None:
        theme = DEFAULT_THEME
        tree = separator_line(context(theme=theme, tree_focused=True))
        diff = separator_line(context(theme=theme, tree_focused=False))
        self.assertTrue(tree.startswith(theme.divider_active))
        self.assertTrue(diff.startswith(theme.divider))

    def test_help_line_is_clipped(self) -> None:
        self.assertEqual(display_width(help_line(30, PLAIN_THEME)), 30)


if __name__ == "__main__":
    unittest.main()
