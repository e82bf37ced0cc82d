"""Tests for tree-row formatting, preview lines, and frame layout."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from lazyexplorer.ansi import ANSI_ESCAPE_RE, display_width
from lazyexplorer.file_tree_model import FileTree
from lazyexplorer.runtime.render import (
    CELL_ASPECT,
    RenderContext,
    build_status_line,
    clamp_left_width,
    compute_left_width,
    format_tree_row,
    image_placement,
    preview_area,
    preview_lines,
    render_frame,
)
from lazyexplorer.ui_theme import GRUVBOX_THEME, PLAIN_THEME
from lazyexplorer.viewers import PreviewState, PreviewView


class LayoutTests(unittest.TestCase):
    def test_left_width_follows_percent_within_bounds(self) -> None:
        self.assertEqual(compute_left_width(100, 30.0), 30)
        self.assertEqual(compute_left_width(100, 5.0), 20)
        self.assertEqual(compute_left_width(100, 95.0), 88)

    def test_clamp_on_narrow_terminal(self) -> None:
        self.assertEqual(clamp_left_width(20, 15), 12)

    def test_preview_area_scales_rows_by_cell_aspect(self) -> None:
        self.assertEqual(preview_area(40, 20), (38, 17 * CELL_ASPECT))
        self.assertEqual(preview_area(1, 1), (0, 0))

    def test_image_placement_converts_back_to_cells(self) -> None:
        self.assertEqual(image_placement(30, (20, 9)), (33, 3, 20, 5))
        self.assertIsNone(image_placement(30, None))
        self.assertIsNone(image_placement(30, (0, 0)))


class TreeRowFormattingTests(unittest.TestCase):
    def test_directory_and_file_markers(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "src").mkdir()
            (root / "main.py").write_text("", encoding="utf-8")
            rows = FileTree(root).visible_rows()

        texts = [format_tree_row(row, PLAIN_THEME) for row in rows]

        self.assertEqual(texts[0], f"▾ {root.name}/")
        self.assertEqual(texts[1], "  ▸ src/")
        self.assertEqual(texts[2], "    main.py")

    def test_colored_row_has_same_display_text(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "src").mkdir()
            row = FileTree(root).visible_rows()[1]

        colored = format_tree_row(row, GRUVBOX_THEME)

        self.assertNotEqual(colored, format_tree_row(row, PLAIN_THEME))
        self.assertEqual(ANSI_ESCAPE_RE.sub("", colored), "  ▸ src/")


class PreviewLinesTests(unittest.TestCase):
    def test_empty_view_has_no_lines(self) -> None:
        self.assertEqual(preview_lines(PreviewView.empty(), PLAIN_THEME), [])

    def test_loading_placeholder(self) -> None:
        view = PreviewView.loading("image", Path("a.png"), "Loading image...")

        self.assertEqual(preview_lines(view, PLAIN_THEME), ["Loading image..."])

    def test_failed_view_keeps_error_line(self) -> None:
        view = PreviewView(kind="text", path=Path("a.txt"), state=PreviewState.FAILED, text="Error: denied")

        lines = preview_lines(view, GRUVBOX_THEME)

        self.assertEqual(lines, [f"{GRUVBOX_THEME.preview_error}Error: denied{GRUVBOX_THEME.reset}"])

    def test_playback_controls_follow_play_state(self) -> None:
        view = PreviewView.message("audio", Path("song.mp3"), "Audio: song.mp3")
        view.playback = object()

        self.assertEqual(preview_lines(view, PLAIN_THEME), ["Audio: song.mp3", "", "[space] Play"])
        self.assertEqual(preview_lines(view, PLAIN_THEME, playing=True)[-1], "[space] Pause")


class FrameTests(unittest.TestCase):
    def test_status_line_fills_width(self) -> None:
        line = build_status_line(" /tmp", 30)

        self.assertEqual(display_width(line), 30)
        self.assertTrue(line.endswith("│ q Quit"))
        self.assertEqual(build_status_line("x", 0), "")

    def test_frame_has_one_line_per_row_plus_status(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "notes.txt").write_text("", encoding="utf-8")
            rows = FileTree(root).visible_rows()
        view = PreviewView.message("text", root / "notes.txt", "first\nsecond\nthird")

        frame = render_frame(
            RenderContext(
                rows=rows,
                tree_start=0,
                selected_idx=1,
                view=view,
                preview_start=1,
                width=120,
                height=6,
                left_width=20,
                show_hidden=True,
                playing=False,
                theme=PLAIN_THEME,
            )
        )

        self.assertEqual(frame.count("\r\n"), 5)
        self.assertIn("second", frame)
        self.assertNotIn("first", frame)
        self.assertIn("\033[7m    notes.txt", frame)
        self.assertIn(str(root / "notes.txt"), frame)
        self.assertIn("hidden: shown", frame)


if __name__ == "__main__":
    unittest.main()
