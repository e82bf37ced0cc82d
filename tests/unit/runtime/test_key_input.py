"""Tests for raw key decoding and key-binding dispatch."""

from __future__ import annotations

import os
import unittest

from lazyexplorer.runtime.input import KeyReader, read_key
from lazyexplorer.runtime.keys import KeyBinding, KeyBindings


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.read_fd, self.write_fd = os.pipe()
        self.reader = KeyReader()

    def tearDown(self) -> None:
        os.close(self.read_fd)
        os.close(self.write_fd)

    def _keys(self, data: bytes, count: int) -> list[str]:
        os.write(self.write_fd, data)
        return [self.reader.read(self.read_fd, 100) for _ in range(count)]

    def test_control_keys(self) -> None:
        self.assertEqual(
            self._keys(b"\x08\r\n\t\x03\x7f", 6),
            ["CTRL_H", "ENTER", "ENTER", "TAB", "CTRL_C", "BACKSPACE"],
        )

    def test_arrow_and_paging_sequences(self) -> None:
        self.assertEqual(
            self._keys(b"\x1b[A\x1b[B\x1b[C\x1b[D\x1b[5~\x1b[6~\x1b[H\x1b[F\x1b[1~\x1b[4~", 10),
            ["UP", "DOWN", "RIGHT", "LEFT", "PAGE_UP", "PAGE_DOWN", "HOME", "END", "HOME", "END"],
        )

    def test_lone_escape(self) -> None:
        self.assertEqual(self._keys(b"\x1b", 1), ["ESC"])

    def test_escape_followed_by_plain_key_keeps_the_key(self) -> None:
        self.assertEqual(self._keys(b"\x1bq", 2), ["ESC", "q"])

    def test_printable_and_utf8_characters(self) -> None:
        self.assertEqual(self._keys("j.é".encode("utf-8"), 3), ["j", ".", "é"])

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(read_key(self.read_fd, 10), "")


class KeyBindingsTests(unittest.TestCase):
    def test_dispatch_runs_bound_action(self) -> None:
        calls: list[str] = []
        bindings = KeyBindings(
            KeyBinding(("UP", "k"), lambda: calls.append("up")),
            KeyBinding(("q",), lambda: calls.append("quit")),
        )

        self.assertTrue(bindings.dispatch("k"))
        self.assertTrue(bindings.dispatch("UP"))
        self.assertFalse(bindings.dispatch("x"))

        self.assertEqual(calls, ["up", "up"])
        self.assertIn("q", bindings)
        self.assertNotIn("x", bindings)

    def test_later_binding_overrides_earlier_one(self) -> None:
        calls: list[str] = []
        bindings = KeyBindings(
            KeyBinding(("p",), lambda: calls.append("first")),
            KeyBinding(("p",), lambda: calls.append("second")),
        )

        bindings.dispatch("p")

        self.assertEqual(calls, ["second"])


if __name__ == "__main__":
    unittest.main()
