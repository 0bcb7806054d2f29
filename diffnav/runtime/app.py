"""Application controller: composes panes and routes input.

``DiffnavApp`` owns the tree pane, search overlay, render cache and diff
pane, and translates key tokens and mouse events into their transitions.
It never touches the terminal directly; the main loop feeds it terminal
sizes, key tokens and completed render results, and draws its frames.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from ..diff_pane import DiffPane, DiffRenderCache, RenderJobScheduler
from ..diff_source.types import FileChange
from ..errors import ActionError
from ..input import KeyComboBinding, KeyComboRegistry, parse_mouse_col_row
from ..render import RenderContext
from ..search import SearchPanel
from ..tree_model import ROOT_NAME, LeafNode, next_icon_style
from ..tree_pane import TreePane
from ..ui_theme import DEFAULT_THEME, PLAIN_THEME, UITheme
from .actions import copy_text_to_clipboard, set_status_message
from .config import DiffnavConfig
from .layout import (
    REGION_DIFF,
    REGION_RESULTS,
    REGION_SEARCH_BOX,
    REGION_TREE,
    SCROLL_LINES,
    PanelLayout,
)
from .state import PANEL_DIFF, PANEL_TREE, AppState

logger = logging.getLogger(__name__)


def _noop_editor(path: str) -> None:
    raise ActionError("cannot open: no terminal attached")


class DiffnavApp:
    """Panel orchestration state machine for one diff session."""

    def __init__(
        self,
        files: Sequence[FileChange],
        config: DiffnavConfig,
        scheduler: RenderJobScheduler,
        *,
        width: int = 80,
        height: int = 24,
        theme: UITheme = DEFAULT_THEME,
        copy_text: Callable[[str], None] = copy_text_to_clipboard,
        open_editor: Callable[[str], None] = _noop_editor,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.files = list(files)
        self.config = config
        self.scheduler = scheduler
        self.theme = theme
        self._copy_text = copy_text
        self._open_editor = open_editor
        self._clock = clock

        self.state = AppState(
            term_width=max(1, width),
            term_height=max(1, height),
            show_file_tree=config.show_file_tree,
            active_panel=PANEL_TREE if config.show_file_tree else PANEL_DIFF,
            side_by_side=config.side_by_side,
            icon_style=config.icons,
        )
        self.layout = PanelLayout(self.state, config)
        self.tree = TreePane(
            width=config.file_tree_width,
            icon_style=config.icons,
            hide_root=config.hide_tree_root,
            show_stats=config.show_diff_stats,
        )
        self.search = SearchPanel()
        self.diff = DiffPane()
        self.cache = DiffRenderCache(
            scheduler.schedule,
            width=self.layout.diff_width(),
            side_by_side=config.side_by_side,
            no_color=theme is PLAIN_THEME,
        )
        self._normal_keys = self._build_normal_bindings()
        self._applied_geometry: tuple[int, int, int, int] | None = None

        self.tree.set_files(self.files)
        self.search.set_paths([change.path for change in self.files])
        self.apply_geometry()
        if self.files:
            self.set_cursor(0)

    # Geometry

    def resize(self, width: int, height: int) -> None:
        width = max(1, width)
        height = max(1, height)
        self.state.term_width = width
        self.state.term_height = height
        # A status line in a hidden footer changes the content height too.
        if self._geometry_key() != self._applied_geometry:
            self.apply_geometry()

    def _geometry_key(self) -> tuple[int, int, int, int]:
        return (
            self.state.term_width,
            self.state.term_height,
            self.layout.sidebar_width(),
            self.layout.footer_height(),
        )

    def apply_geometry(self) -> None:
        """Push current layout sizes into the panes.

        A diff width change re-renders the displayed path at the new width.
        """
        self._applied_geometry = self._geometry_key()
        layout = self.layout
        list_height = layout.sidebar_list_height()
        if not self.state.searching and self.state.show_file_tree:
            self.tree.set_width(layout.sidebar_width())
        self.tree.set_view_height(list_height)
        self.search.set_view_height(list_height)

        diff_width = layout.diff_width()
        self.diff.set_size(diff_width, layout.content_height())
        if diff_width != self.cache.width:
            self.cache.set_width(diff_width)
            self._rerender_displayed()
        self.state.dirty = True

    # Diff display

    def show_key(self, key: str, changes: Sequence[FileChange], title: str) -> None:
        entry = self.cache.get(key, changes)
        self.diff.show(entry, title)
        self.state.displayed_key = key
        self.state.dirty = True

    def _rerender_displayed(self) -> None:
        key = self.state.displayed_key
        if key is None:
            return
        entry = self.cache.rerender(key)
        if entry is not None:
            self.diff.update_text(entry)

    def set_cursor(self, index: int) -> None:
        """Select file ``index`` in the tree and show its diff."""
        if not self.files:
            return
        self.tree.set_cursor(index)
        self.show_selected_change()

    def show_selected_change(self) -> None:
        change = self.tree.selected_change()
        if change is not None:
            self.show_key(change.path, [change], change.path)

    def select_directory(self, full_path: str) -> None:
        """Show the combined diff of every file below ``full_path``."""
        changes = self.tree.changes_under(full_path)
        if not changes:
            return
        title = f"{full_path}/" if full_path else ROOT_NAME
        self.show_key(full_path, changes, title)

    def handle_render_results(self) -> bool:
        """Store completed renders; return whether the visible pane changed."""
        changed = False
        for result in self.scheduler.drain_results():
            if not self.cache.accept(result):
                continue
            if result.error is not None and not self.state.formatter_error_reported:
                self.state.formatter_error_reported = True
                set_status_message(self.state, f"{result.error}; showing raw diff", error=True, now=self._clock())
            entry = self.cache.entry(result.key)
            if entry is not None and result.key == self.state.displayed_key:
                self.diff.update_text(entry)
                self.state.dirty = True
                changed = True
        return changed

    # Search

    def open_search(self) -> None:
        if self.state.searching:
            return
        self.state.searching = True
        if not self.state.show_file_tree:
            self.state.show_file_tree = True
        self.search.open()
        self.apply_geometry()

    def close_search(self) -> None:
        self.state.searching = False
        self.search.close()
        self.apply_geometry()

    def commit_search(self, path: str | None) -> None:
        self.close_search()
        if path is None:
            return
        index = self.tree.index_of_path(path)
        if index is not None:
            self.set_cursor(index)

    def handle_search_key(self, key: str) -> bool:
        search = self.search
        if key == "CTRL_C":
            return True
        if key == "ESC":
            self.close_search()
        elif key == "ENTER":
            self.commit_search(search.selected_path())
        elif key in {"DOWN", "CTRL_N", "CTRL_J"}:
            search.move(1)
        elif key in {"UP", "CTRL_P", "CTRL_K"}:
            search.move(-1)
        elif key == "BACKSPACE":
            search.backspace()
        elif key == "CTRL_U":
            search.clear_query()
        elif len(key) == 1 and key.isprintable():
            search.insert_text(key)
        else:
            return False
        self.state.dirty = True
        return False

    # Normal-mode keys

    def _build_normal_bindings(self) -> KeyComboRegistry:
        state = self.state

        def quit_action() -> bool:
            return True

        def search_action() -> bool:
            self.open_search()
            return False

        def toggle_tree_action() -> bool:
            self.layout.toggle_file_tree()
            self.apply_geometry()
            return False

        def cycle_icons_action() -> bool:
            state.icon_style = next_icon_style(state.icon_style)
            self.tree.set_icon_style(state.icon_style)
            state.dirty = True
            return False

        def toggle_side_by_side_action() -> bool:
            state.side_by_side = not state.side_by_side
            self.cache.set_side_by_side(state.side_by_side)
            self._rerender_displayed()
            state.dirty = True
            return False

        def switch_panel_action() -> bool:
            self.layout.switch_panel()
            return False

        def move_action(delta: int) -> Callable[[], bool]:
            def action() -> bool:
                if state.active_panel == PANEL_TREE:
                    if self.tree.move_cursor(delta):
                        self.show_selected_change()
                elif self.diff.scroll_by(delta):
                    state.dirty = True
                return False

            return action

        def scroll_action(step: Callable[[], int]) -> Callable[[], bool]:
            def action() -> bool:
                if self.diff.scroll_by(step()):
                    state.dirty = True
                return False

            return action

        def top_action() -> bool:
            self.diff.go_to_top()
            state.dirty = True
            return False

        def bottom_action() -> bool:
            self.diff.go_to_bottom()
            state.dirty = True
            return False

        def copy_action() -> bool:
            self.copy_selected_path()
            return False

        def open_action() -> bool:
            self.open_selected_in_editor()
            return False

        return KeyComboRegistry().register_bindings(
            KeyComboBinding(("q", "CTRL_C"), quit_action),
            KeyComboBinding(("t", "/"), search_action),
            KeyComboBinding(("e",), toggle_tree_action),
            KeyComboBinding(("i",), cycle_icons_action),
            KeyComboBinding(("s",), toggle_side_by_side_action),
            KeyComboBinding(("TAB",), switch_panel_action),
            KeyComboBinding(("UP", "k", "CTRL_P"), move_action(-1)),
            KeyComboBinding(("DOWN", "j", "CTRL_N"), move_action(1)),
            KeyComboBinding(("CTRL_D",), scroll_action(lambda: self.diff.half_page())),
            KeyComboBinding(("CTRL_U",), scroll_action(lambda: -self.diff.half_page())),
            KeyComboBinding(("PAGE_DOWN",), scroll_action(lambda: self.diff.body_height())),
            KeyComboBinding(("PAGE_UP",), scroll_action(lambda: -self.diff.body_height())),
            KeyComboBinding(("g", "HOME"), top_action),
            KeyComboBinding(("G", "END"), bottom_action),
            KeyComboBinding(("y",), copy_action),
            KeyComboBinding(("o",), open_action),
        )

    def handle_key(self, key: str) -> bool:
        """Handle one key token; return ``True`` when the app should quit."""
        if key.startswith("MOUSE"):
            self.handle_mouse(key)
            return False
        if self.state.searching:
            return self.handle_search_key(key)
        handled = self._normal_keys.dispatch(key)
        return bool(handled)

    # Side effects

    def copy_selected_path(self) -> None:
        change = self.tree.selected_change()
        if change is None:
            return
        try:
            self._copy_text(change.path)
        except ActionError as exc:
            logger.warning("copy failed: %s", exc)
            set_status_message(self.state, str(exc), error=True, now=self._clock())
            return
        set_status_message(self.state, f"copied {change.path}", now=self._clock())

    def open_selected_in_editor(self) -> None:
        change = self.tree.selected_change()
        if change is None:
            return
        try:
            self._open_editor(change.path)
        except ActionError as exc:
            logger.warning("editor failed: %s", exc)
            set_status_message(self.state, str(exc), error=True, now=self._clock())
        self.state.dirty = True

    # Mouse

    def handle_mouse(self, mouse_key: str) -> bool:
        """Route one mouse token; return whether anything changed."""
        col, row = parse_mouse_col_row(mouse_key)
        if col is None or row is None:
            return False
        x = col - 1
        y = row - 1
        kind = mouse_key.split(":", 1)[0]

        if kind in {"MOUSE_WHEEL_UP", "MOUSE_WHEEL_DOWN"}:
            return self._handle_wheel(x, y, SCROLL_LINES if kind == "MOUSE_WHEEL_DOWN" else -SCROLL_LINES)
        if kind == "MOUSE_MOVE":
            if self.layout.drag_to(x):
                self.apply_geometry()
                return True
            return False
        if kind in {"MOUSE_LEFT_UP", "MOUSE_UP"}:
            self.layout.release()
            return False
        if kind != "MOUSE_LEFT_DOWN":
            return False

        was_shown = self.state.show_file_tree
        if self.layout.press(x):
            if self.state.show_file_tree != was_shown:
                self.apply_geometry()
            return True

        region = self.layout.region_at(x, y)
        list_row = y - self.layout.sidebar_list_top()
        if region == REGION_SEARCH_BOX:
            self.open_search()
            return True
        if region == REGION_RESULTS:
            path = self.search.path_at_row(list_row)
            if path is None:
                return False
            self.commit_search(path)
            return True
        if region == REGION_TREE:
            return self._click_tree_row(list_row)
        if region == REGION_DIFF and self.state.show_file_tree and not self.state.searching:
            self.state.active_panel = PANEL_DIFF
            self.state.dirty = True
            return True
        return False

    def _click_tree_row(self, list_row: int) -> bool:
        hit = self.tree.node_at_row(list_row)
        if hit is None:
            return False
        self.state.active_panel = PANEL_TREE
        if isinstance(hit.node, LeafNode):
            if not self.tree.select_path(hit.node.path):
                return False
            self.show_selected_change()
        else:
            self.select_directory(hit.path)
        self.state.dirty = True
        return True

    def _handle_wheel(self, x: int, y: int, delta: int) -> bool:
        region = self.layout.region_at(x, y)
        if region == REGION_TREE:
            changed = self.tree.scroll_by(delta)
        elif region == REGION_RESULTS:
            changed = self.search.scroll_by(delta)
        elif region == REGION_DIFF:
            changed = self.diff.scroll_by(delta)
        else:
            return False
        if changed:
            self.state.dirty = True
        return changed

    # Rendering

    def frame_context(self) -> RenderContext:
        layout = self.layout
        state = self.state
        return RenderContext(
            width=state.term_width,
            height=state.term_height,
            content_top=layout.content_top(),
            content_height=layout.content_height(),
            sidebar_width=layout.sidebar_width(),
            show_file_tree=state.show_file_tree,
            searching=state.searching,
            tree_focused=state.active_panel == PANEL_TREE,
            diff_header=self.diff.header_lines(self.theme),
            diff_body=self.diff.body_lines(),
            tree_rows=self.tree.visible_rows(),
            icon_style=state.icon_style,
            color_file_names=self.config.color_file_names,
            show_stats=self.config.show_diff_stats,
            search_query=self.search.query,
            search_results=self.search.visible_results(),
            search_cursor=self.search.cursor,
            show_header=not self.config.hide_header,
            show_footer=not self.config.hide_footer,
            status_message=state.status_message,
            status_is_error=state.status_is_error,
            theme=self.theme,
        )


def run_diffnav(
    files: Sequence[FileChange],
    config: DiffnavConfig,
    *,
    input_fd: int,
    output_fd: int,
    theme: UITheme = DEFAULT_THEME,
) -> None:
    """Open the TUI on ``files`` and block until the user quits."""
    from .actions import launch_editor
    from .loop import run_main_loop
    from .terminal import TerminalController

    terminal = TerminalController(input_fd, output_fd)
    scheduler = RenderJobScheduler(config.formatter)
    width, height = terminal.size()
    app = DiffnavApp(
        files,
        config,
        scheduler,
        width=width,
        height=height,
        theme=theme,
        open_editor=lambda path: launch_editor(path, terminal.disable_tui_mode, terminal.enable_tui_mode),
    )
    logger.info("session start files=%d size=%dx%d", len(files), width, height)
    run_main_loop(app, terminal, input_fd)
