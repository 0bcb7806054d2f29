"""Key-token decoding from raw terminal bytes."""

from __future__ import annotations

import os
import unittest

from diffnav.input import (
    _PENDING_BYTES,
    UNKNOWN_KEY,
    KeyComboBinding,
    KeyComboRegistry,
    parse_mouse_col_row,
    read_key,
)


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        _PENDING_BYTES.clear()
        self.read_fd, self.write_fd = os.pipe()
        self.addCleanup(os.close, self.read_fd)
        self.addCleanup(os.close, self.write_fd)

    def feed(self, data: bytes) -> str:
        os.write(self.write_fd, data)
        return read_key(self.read_fd, timeout_ms=100)

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(read_key(self.read_fd, timeout_ms=10), "")

    def test_control_keys(self) -> None:
        expected = {
            b"\x03": "CTRL_C",
            b"\x04": "CTRL_D",
            b"\x15": "CTRL_U",
            b"\x0e": "CTRL_N",
            b"\x10": "CTRL_P",
            b"\n": "CTRL_J",
            b"\x0b": "CTRL_K",
            b"\r": "ENTER",
            b"\t": "TAB",
            b"\x7f": "BACKSPACE",
        }
        for raw, token in expected.items():
            with self.subTest(token=token):
                self.assertEqual(self.feed(raw), token)

    def test_arrow_and_page_keys(self) -> None:
        self.assertEqual(self.feed(b"\x1b[A"), "UP")
        self.assertEqual(self.feed(b"\x1b[B"), "DOWN")
        self.assertEqual(self.feed(b"\x1b[5~"), "PAGE_UP")
        self.assertEqual(self.feed(b"\x1b[6~"), "PAGE_DOWN")

    def test_home_end_variants(self) -> None:
        self.assertEqual(self.feed(b"\x1b[H"), "HOME")
        self.assertEqual(self.feed(b"\x1b[F"), "END")
        self.assertEqual(self.feed(b"\x1b[1~"), "HOME")
        self.assertEqual(self.feed(b"\x1b[4~"), "END")

    def test_unmapped_sequences_are_consumed_whole(self) -> None:
        self.assertEqual(self.feed(b"\x1b[3~"), UNKNOWN_KEY)
        self.assertEqual(read_key(self.read_fd, timeout_ms=10), "")
        self.assertEqual(self.feed(b"\x1b[1;5A"), UNKNOWN_KEY)
        self.assertEqual(read_key(self.read_fd, timeout_ms=10), "")
        self.assertEqual(self.feed(b"\x1b[15;2~x"), UNKNOWN_KEY)
        self.assertEqual(read_key(self.read_fd, timeout_ms=10), "x")

    def test_lone_escape(self) -> None:
        self.assertEqual(self.feed(b"\x1b"), "ESC")

    def test_escape_then_letter_keeps_letter(self) -> None:
        self.assertEqual(self.feed(b"\x1bx"), "ESC")
        self.assertEqual(read_key(self.read_fd, timeout_ms=10), "x")

    def test_utf8_text(self) -> None:
        self.assertEqual(self.feed("é".encode("utf-8")), "é")
        self.assertEqual(self.feed(b"q"), "q")

    def test_sgr_mouse_events(self) -> None:
        self.assertEqual(self.feed(b"\x1b[<0;10;5M"), "MOUSE_LEFT_DOWN:10:5")
        self.assertEqual(self.feed(b"\x1b[<0;10;5m"), "MOUSE_LEFT_UP:10:5")
        self.assertEqual(self.feed(b"\x1b[<32;12;5M"), "MOUSE_MOVE:12:5")
        self.assertEqual(self.feed(b"\x1b[<64;3;4M"), "MOUSE_WHEEL_UP:3:4")
        self.assertEqual(self.feed(b"\x1b[<65;3;4M"), "MOUSE_WHEEL_DOWN:3:4")
        self.assertEqual(self.feed(b"\x1b[<2;3;4m"), "MOUSE_UP:3:4")

    def test_malformed_mouse_sequence(self) -> None:
        self.assertEqual(self.feed(b"\x1b[<0;x;5M"), "ESC")


class MouseCoordinateTests(unittest.TestCase):
    def test_parse(self) -> None:
        self.assertEqual(parse_mouse_col_row("MOUSE_MOVE:3:4"), (3, 4))
        self.assertEqual(parse_mouse_col_row("MOUSE"), (None, None))
        self.assertEqual(parse_mouse_col_row("MOUSE_MOVE:a:4"), (None, None))


class KeyComboRegistryTests(unittest.TestCase):
    def test_dispatch(self) -> None:
        calls: list[str] = []
        registry = KeyComboRegistry().register_bindings(
            KeyComboBinding(("q", "CTRL_C"), lambda: True),
            KeyComboBinding(("j",), lambda: calls.append("j")),
        )
        self.assertTrue(registry.dispatch("CTRL_C"))
        self.assertIsNone(registry.dispatch("j"))
        self.assertEqual(calls, ["j"])
        self.assertIsNone(registry.dispatch("z"))
        self.assertIn("q", registry)
        self.assertNotIn("z", registry)

    def test_later_binding_wins(self) -> None:
        registry = KeyComboRegistry()
        registry.register_binding(KeyComboBinding(("x",), lambda: False))
        registry.register_binding(KeyComboBinding(("x",), lambda: True))
        self.assertTrue(registry.dispatch("x"))


if __name__ == "__main__":
    unittest.main()
