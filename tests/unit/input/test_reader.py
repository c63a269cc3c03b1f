"""Regression tests for raw-key decoding.

Covers ESC timing, arrow/tilde sequences, and control-key token mapping.
These tests protect interactive input handling in raw terminal mode.
"""

import os
import time
import unittest

from spoiler.input import reader as reader_mod
from spoiler.input import KeyComboBinding, KeyComboRegistry, is_text_key


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        reader_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        reader_mod._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [reader_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self._read_all(b"\x1b", 1)
        elapsed = time.monotonic() - started
        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences(self) -> None:
        self.assertEqual(
            self._read_all(b"\x1b[A\x1b[B\x1b[C\x1b[D\x1bOA", 5),
            ["UP", "DOWN", "RIGHT", "LEFT", "UP"],
        )

    def test_tilde_sequences(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[3~\x1b[5~", 2), ["DELETE", "PAGE_UP"])

    def test_control_tokens(self) -> None:
        self.assertEqual(
            self._read_all(b"\r\n\t\x7f\x15\x03", 6),
            ["ENTER", "ENTER", "TAB", "BACKSPACE", "CTRL_U", "CTRL_C"],
        )

    def test_escape_followed_by_letter_keeps_letter(self) -> None:
        self.assertEqual(self._read_all(b"\x1bq", 2), ["ESC", "q"])

    def test_utf8_character(self) -> None:
        self.assertEqual(self._read_all("é✓".encode("utf-8"), 2), ["é", "✓"])

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(self._read_all(b"", 1), [""])


class KeyComboRegistryTests(unittest.TestCase):
    def test_dispatch_runs_bound_handler(self) -> None:
        calls: list[str] = []
        registry = KeyComboRegistry().register_bindings(
            KeyComboBinding(("a", "b"), lambda: calls.append("ab") or False),
            KeyComboBinding(("q",), lambda: True),
        )
        self.assertFalse(registry.dispatch("b"))
        self.assertTrue(registry.dispatch("q"))
        self.assertIsNone(registry.dispatch("z"))
        self.assertEqual(calls, ["ab"])
        self.assertEqual(registry.bound_keys(), frozenset({"a", "b", "q"}))

    def test_rejects_key_bound_twice(self) -> None:
        registry = KeyComboRegistry().register_bindings(KeyComboBinding(("q",), lambda: True))
        with self.assertRaises(ValueError):
            registry.register_bindings(KeyComboBinding(("x", "q"), lambda: False))

    def test_is_text_key(self) -> None:
        self.assertTrue(is_text_key("x"))
        self.assertTrue(is_text_key(" "))
        self.assertFalse(is_text_key("UP"))
        self.assertFalse(is_text_key("\x07"))


if __name__ == "__main__":
    unittest.main()
