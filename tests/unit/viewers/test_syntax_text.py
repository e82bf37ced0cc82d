"""Tests for text decoding, control-byte escaping, and Pygments styles."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from lazyexplorer.syntax import (
    FALLBACK_STYLE,
    colorize_source,
    normalize_style,
    read_text,
    sanitize_terminal_text,
)


class ReadTextTests(unittest.TestCase):
    def test_utf8_bom_is_kept_as_character(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bom.txt"
            path.write_bytes(b"\xef\xbb\xbfhello")

            self.assertEqual(read_text(path), "\ufeffhello")

    def test_invalid_utf8_falls_back_to_latin1(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "legacy.txt"
            path.write_bytes(b"na\xefve")

            self.assertEqual(read_text(path), "na\xefve")


class SanitizeTests(unittest.TestCase):
    def test_plain_text_is_unchanged(self) -> None:
        text = "line one\n\tindented\r\n"
        self.assertIs(sanitize_terminal_text(text), text)

    def test_c0_and_c1_controls_are_escaped(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\x00b\x9bc\x7f"), "a\\x00b\\x9bc\\x7f")


class StyleTests(unittest.TestCase):
    def test_unknown_style_uses_fallback(self) -> None:
        self.assertEqual(normalize_style("no-such-style"), FALLBACK_STYLE)
        self.assertEqual(normalize_style("monokai"), "monokai")

    def test_unknown_file_type_is_still_rendered(self) -> None:
        output = colorize_source("plain words\n", Path("notes.unknownext"), "monokai")

        self.assertIn("plain words", output)

    def test_python_source_is_highlighted(self) -> None:
        output = colorize_source("import os\n", Path("mod.py"), "gruvbox-dark")

        self.assertIn("\x1b[", output)
        self.assertIn("import", output)


if __name__ == "__main__":
    unittest.main()
