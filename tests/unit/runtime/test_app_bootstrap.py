"""Tests for building an interactive session from options and config."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyexplorer.runtime.app import build_session, run_explorer
from lazyexplorer.ui_theme import (
    DEFAULT_THEME,
    GRUVBOX_THEME,
    PLAIN_THEME,
    available_theme_names,
    normalize_theme_name,
    resolve_theme,
)


class UnusedBackend:
    def open(self, path: Path, *, video: bool):
        raise AssertionError("no media is selected during bootstrap")


class BuildSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        (self.root / ".hidden").write_text("", encoding="utf-8")
        (self.root / "visible.txt").write_text("", encoding="utf-8")
        self.config_path = self.root / "config.json"
        patcher = mock.patch("lazyexplorer.runtime.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _build(self, **overrides):
        options = {
            "style": "monokai",
            "theme_name": None,
            "no_color": False,
            "show_hidden": False,
            "playback_backend": UnusedBackend(),
        }
        options.update(overrides)
        return build_session(self.root, **options)

    def test_config_supplies_theme_width_and_autoplay(self) -> None:
        self.config_path.write_text(
            json.dumps({"theme": "default", "left_pane_percent": 40, "video_autoplay": False}),
            encoding="utf-8",
        )

        session = self._build()

        self.assertEqual(session.theme.name, "default")
        self.assertEqual(session.left_pane_percent, 40.0)
        self.assertFalse(session.pane.registry.resolve("clip.mp4").autoplay)
        self.assertTrue(session.pane.registry.frozen)
        session.close()

    def test_explicit_theme_and_no_color(self) -> None:
        session = self._build(theme_name="default", no_color=True)

        self.assertIs(session.theme, PLAIN_THEME)
        session.close()

    def test_show_hidden_option_seeds_policy(self) -> None:
        hidden = self._build(show_hidden=True)
        plain = self._build()

        self.assertIn(".hidden", [row.label for row in hidden.rows])
        self.assertNotIn(".hidden", [row.label for row in plain.rows])
        hidden.close()
        plain.close()

    def test_run_explorer_requires_a_terminal(self) -> None:
        with mock.patch("lazyexplorer.runtime.app.os.isatty", return_value=False), mock.patch(
            "lazyexplorer.runtime.app.sys.stdin"
        ) as stdin, mock.patch("lazyexplorer.runtime.app.sys.stdout") as stdout:
            stdin.fileno.return_value = 0
            stdout.fileno.return_value = 1
            with self.assertRaises(SystemExit):
                run_explorer(self.root, style="monokai")


class ThemeSelectionTests(unittest.TestCase):
    def test_names_and_fallback(self) -> None:
        self.assertEqual(available_theme_names(), ("default", "gruvbox"))
        self.assertEqual(normalize_theme_name(" Default "), "default")
        self.assertEqual(normalize_theme_name("solarized"), "gruvbox")
        self.assertEqual(normalize_theme_name(None), "gruvbox")

    def test_resolve_theme(self) -> None:
        self.assertIs(resolve_theme("default"), DEFAULT_THEME)
        self.assertIs(resolve_theme(None), GRUVBOX_THEME)
        self.assertIs(resolve_theme("default", no_color=True), PLAIN_THEME)

    def test_gruvbox_tree_colors(self) -> None:
        self.assertIn("250;189;47", GRUVBOX_THEME.tree_dir)
        self.assertIn("131;165;152", GRUVBOX_THEME.tree_file)


if __name__ == "__main__":
    unittest.main()
