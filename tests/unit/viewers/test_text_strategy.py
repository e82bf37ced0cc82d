"""Tests for text previews."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from lazyexplorer.errors import ReadError
from lazyexplorer.viewers import PreviewState, TextStrategy


class TextStrategyTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_produce_returns_loading_placeholder(self) -> None:
        path = self.root / "notes.txt"

        view = TextStrategy().produce(path)

        self.assertEqual(view.state, PreviewState.LOADING)
        self.assertEqual(view.kind, "text")
        self.assertEqual(view.path, path)
        self.assertEqual(view.text, "Loading...")

    def test_load_and_apply_show_file_contents(self) -> None:
        path = self.root / "notes.txt"
        path.write_text("alpha\nbeta\n", encoding="utf-8")
        strategy = TextStrategy()
        view = strategy.produce(path)

        strategy.apply(view, strategy.load(path))

        self.assertEqual(view.state, PreviewState.READY)
        self.assertEqual(view.text, "alpha\nbeta\n")

    def test_control_bytes_are_escaped(self) -> None:
        path = self.root / "bell.log"
        path.write_text("ring\x07\x1b[2J\n", encoding="utf-8")

        text = TextStrategy().load(path)

        self.assertEqual(text, "ring\\x07\\x1b[2J\n")

    def test_latin1_file_is_still_readable(self) -> None:
        path = self.root / "legacy.txt"
        path.write_bytes("caf\xe9\n".encode("latin-1"))

        self.assertEqual(TextStrategy().load(path), "caf\xe9\n")

    def test_colorized_python_contains_ansi_sequences(self) -> None:
        path = self.root / "main.py"
        path.write_text("def main():\n    return 1\n", encoding="utf-8")

        text = TextStrategy(colorize=True).load(path)

        self.assertIn("\x1b[", text)
        self.assertIn("main", text)

    def test_unreadable_file_raises_read_error(self) -> None:
        missing = self.root / "gone.txt"

        with self.assertLogs("lazyexplorer.viewers.text", level="WARNING"):
            with self.assertRaises(ReadError) as ctx:
                TextStrategy().load(missing)

        self.assertEqual(ctx.exception.path, missing)

    def test_fail_shows_error_inline(self) -> None:
        path = self.root / "gone.txt"
        strategy = TextStrategy()
        view = strategy.produce(path)

        strategy.fail(view, ReadError(path, "No such file"))

        self.assertEqual(view.state, PreviewState.FAILED)
        self.assertEqual(view.error, "No such file")
        self.assertEqual(view.text, "Error: No such file")


if __name__ == "__main__":
    unittest.main()
