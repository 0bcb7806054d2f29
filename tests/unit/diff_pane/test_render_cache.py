"""Per-path render cache: dedupe, mode awareness and stale-result handling."""

from __future__ import annotations

import unittest

from diffnav.diff_pane import DiffRenderCache, RenderRequest, RenderResult, wants_side_by_side
from diffnav.diff_source import STATUS_ADDED, STATUS_MODIFIED, FileChange, HunkStats
from diffnav.errors import FormatterError


def change(path: str, status: str = STATUS_MODIFIED, added: int = 1, deleted: int = 0) -> FileChange:
    return FileChange(
        old_path="" if status == STATUS_ADDED else path,
        new_path=path,
        status=status,
        hunks=(HunkStats(lines_added=added, lines_deleted=deleted),),
        patch_text=f"--- {path}\n",
    )


class FakeDispatch:
    """Records render requests instead of spawning a formatter."""

    def __init__(self) -> None:
        self.requests: list[RenderRequest] = []

    def __call__(self, *, key: str, patch_text: str, width: int, side_by_side: bool) -> int:
        request = RenderRequest(
            request_id=len(self.requests) + 1,
            key=key,
            patch_text=patch_text,
            width=width,
            side_by_side=side_by_side,
        )
        self.requests.append(request)
        return request.request_id

    def result(self, index: int, text: str, error: FormatterError | None = None) -> RenderResult:
        return RenderResult(request=self.requests[index], text=text, error=error)


class DiffRenderCacheTests(unittest.TestCase):
    def setUp(self) -> None:
        self.dispatch = FakeDispatch()
        self.cache = DiffRenderCache(
            self.dispatch,
            width=100,
            render_fallback=lambda patch, no_color: "RAW:" + patch,
        )

    def test_pending_entry_is_not_dispatched_twice(self) -> None:
        entry = self.cache.get("a.py", [change("a.py")])
        self.cache.get("a.py", [change("a.py")])
        self.assertEqual(len(self.dispatch.requests), 1)
        self.assertTrue(entry.is_pending)
        self.assertEqual(self.dispatch.requests[0].width, 100)

    def test_rendered_entry_is_a_cache_hit(self) -> None:
        self.cache.get("a.py", [change("a.py")])
        self.assertTrue(self.cache.accept(self.dispatch.result(0, "formatted")))
        entry = self.cache.get("a.py", [change("a.py")])
        self.assertEqual(entry.rendered_text, "formatted")
        self.assertEqual(len(self.dispatch.requests), 1)

    def test_empty_output_still_counts_as_rendered(self) -> None:
        self.cache.get("a.py", [change("a.py")])
        self.cache.accept(self.dispatch.result(0, ""))
        self.cache.get("a.py", [change("a.py")])
        self.assertEqual(len(self.dispatch.requests), 1)

    def test_entry_stats_are_aggregated(self) -> None:
        entry = self.cache.get("src", [change("src/a.py", added=2, deleted=1), change("src/b.py", added=3)])
        self.assertEqual((entry.added, entry.deleted), (5, 1))
        self.assertEqual(entry.patch_text, "--- src/a.py\n--- src/b.py\n")

    def test_new_file_is_never_side_by_side(self) -> None:
        self.cache.get("new.py", [change("new.py", status=STATUS_ADDED)])
        self.cache.get("src", [change("src/a.py"), change("src/n.py", status=STATUS_ADDED)])
        self.cache.get("old.py", [change("old.py")])
        self.assertEqual([r.side_by_side for r in self.dispatch.requests], [False, False, True])

    def test_mode_change_re_renders_on_next_lookup(self) -> None:
        self.cache.get("a.py", [change("a.py")])
        self.cache.accept(self.dispatch.result(0, "wide"))
        self.cache.set_side_by_side(False)
        self.cache.get("a.py", [change("a.py")])
        self.assertEqual(len(self.dispatch.requests), 2)
        self.assertFalse(self.dispatch.requests[1].side_by_side)

    def test_rerender_touches_only_requested_key(self) -> None:
        self.cache.get("a.py", [change("a.py")])
        self.cache.get("b.py", [change("b.py")])
        self.cache.accept(self.dispatch.result(0, "A"))
        self.cache.accept(self.dispatch.result(1, "B"))

        self.cache.set_width(60)
        self.cache.rerender("a.py")

        self.assertEqual(len(self.dispatch.requests), 3)
        self.assertEqual(self.dispatch.requests[2].key, "a.py")
        self.assertEqual(self.dispatch.requests[2].width, 60)
        self.assertFalse(self.cache.entry("b.py").is_pending)
        self.assertEqual(self.cache.entry("a.py").rendered_text, "A")
        self.assertIsNone(self.cache.rerender("missing"))

    def test_superseded_result_is_discarded(self) -> None:
        self.cache.get("a.py", [change("a.py")])
        self.cache.rerender("a.py")
        self.assertFalse(self.cache.accept(self.dispatch.result(0, "stale")))
        self.assertTrue(self.cache.entry("a.py").is_pending)
        self.assertTrue(self.cache.accept(self.dispatch.result(1, "fresh")))
        self.assertEqual(self.cache.entry("a.py").rendered_text, "fresh")

    def test_late_result_for_other_key_is_stored(self) -> None:
        self.cache.get("a.py", [change("a.py")])
        self.cache.get("b.py", [change("b.py")])
        self.assertTrue(self.cache.accept(self.dispatch.result(0, "A")))
        self.assertEqual(self.cache.entry("a.py").rendered_text, "A")
        self.assertTrue(self.cache.entry("b.py").is_pending)

    def test_unknown_key_is_discarded(self) -> None:
        request = RenderRequest(request_id=9, key="ghost", patch_text="", width=1, side_by_side=False)
        self.assertFalse(self.cache.accept(RenderResult(request=request, text="x")))
        self.assertNotIn("ghost", self.cache)

    def test_formatter_error_falls_back_to_raw_patch(self) -> None:
        self.cache.get("a.py", [change("a.py")])
        self.cache.accept(self.dispatch.result(0, "", FormatterError("delta: not found")))
        entry = self.cache.entry("a.py")
        self.assertTrue(entry.failed)
        self.assertEqual(entry.rendered_text, "RAW:--- a.py\n")
        self.assertTrue(entry.is_rendered)


class WantsSideBySideTests(unittest.TestCase):
    def test_preference_off_wins(self) -> None:
        self.assertFalse(wants_side_by_side(False, [change("a.py")]))

    def test_any_new_member_disables(self) -> None:
        self.assertFalse(wants_side_by_side(True, [change("a.py"), change("b.py", status=STATUS_ADDED)]))
        self.assertTrue(wants_side_by_side(True, [change("a.py")]))


if __name__ == "__main__":
    unittest.main()
