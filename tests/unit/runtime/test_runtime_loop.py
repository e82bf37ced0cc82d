"""Tests for the interactive event loop with injected terminal operations."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from PIL import Image

from lazyexplorer.file_tree_model import FileTree
from lazyexplorer.preview import PreviewPane
from lazyexplorer.runtime.loop import KEY_POLL_TIMEOUT_MS, RuntimeLoopDeps, run_main_loop
from lazyexplorer.runtime.session import ExplorerSession
from lazyexplorer.viewers import ImageStrategy, TextStrategy, ViewerRegistry


class _FakeTerminal:
    def __init__(self, kitty: bool = False) -> None:
        self.kitty = kitty
        self.frames: list[str] = []
        self.drawn: list[tuple[bytes, int, int, int, int]] = []
        self.clears = 0

    def write(self, text: str) -> None:
        self.frames.append(text)

    def supports_kitty_graphics(self) -> bool:
        return self.kitty

    def kitty_clear_images(self) -> None:
        self.clears += 1

    def kitty_draw_png_data(self, png_data: bytes, col: int, row: int, width_cells: int, height_cells: int) -> None:
        self.drawn.append((png_data, col, row, width_cells, height_cells))


def _scripted_keys(keys: list[str], timeouts: list[int | None]):
    pending = list(keys)

    def read_key(_fd: int, timeout_ms: int | None = None) -> str:
        timeouts.append(timeout_ms)
        return pending.pop(0) if pending else "q"

    return read_key


class RuntimeLoopTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        (self.root / "a.txt").write_text("alpha\n", encoding="utf-8")
        Image.new("RGB", (64, 32)).save(self.root / "b.png", format="PNG")
        registry = ViewerRegistry()
        registry.register("txt", TextStrategy())
        registry.register("png", ImageStrategy())
        self.session = ExplorerSession(FileTree(self.root), PreviewPane(registry.freeze()))

    def tearDown(self) -> None:
        self.session.close()
        self._tmp.cleanup()

    def test_loop_renders_and_stops_on_quit(self) -> None:
        terminal = _FakeTerminal()
        timeouts: list[int | None] = []
        deps = RuntimeLoopDeps(terminal_size=lambda: (100, 30), read_key=_scripted_keys(["j", "x"], timeouts))

        run_main_loop(self.session, terminal, 0, deps)

        self.assertTrue(self.session.quit_requested)
        self.assertEqual((self.session.width, self.session.height), (100, 30))
        self.assertGreaterEqual(len(terminal.frames), 2)
        self.assertIn("a.txt", terminal.frames[-1])
        self.assertEqual(timeouts, [KEY_POLL_TIMEOUT_MS] * 3)

    def test_keyboard_interrupt_quits(self) -> None:
        def interrupted(_fd: int, _timeout_ms: int | None = None) -> str:
            raise KeyboardInterrupt

        deps = RuntimeLoopDeps(terminal_size=lambda: (80, 24), read_key=interrupted)

        run_main_loop(self.session, _FakeTerminal(), 0, deps)

        self.assertTrue(self.session.quit_requested)

    def test_decoded_image_is_drawn_with_kitty(self) -> None:
        self.session.handle_key("END")
        self.assertTrue(self.session.pane.wait_for_load(5.0))
        terminal = _FakeTerminal(kitty=True)
        deps = RuntimeLoopDeps(terminal_size=lambda: (100, 30), read_key=_scripted_keys([], []))

        run_main_loop(self.session, terminal, 0, deps)

        self.assertEqual(len(terminal.drawn), 1)
        png_data, col, row, width_cells, height_cells = terminal.drawn[0]
        self.assertEqual(png_data, (self.root / "b.png").read_bytes())
        self.assertEqual(col, self.session.left_width + 3)
        self.assertEqual(row, 3)
        self.assertGreater(width_cells, 0)
        self.assertGreater(height_cells, 0)

    def test_moving_off_image_clears_it(self) -> None:
        self.session.handle_key("END")
        self.assertTrue(self.session.pane.wait_for_load(5.0))
        terminal = _FakeTerminal(kitty=True)
        deps = RuntimeLoopDeps(terminal_size=lambda: (100, 30), read_key=_scripted_keys(["k"], []))

        run_main_loop(self.session, terminal, 0, deps)

        self.assertEqual(len(terminal.drawn), 1)
        self.assertEqual(terminal.clears, 1)


if __name__ == "__main__":
    unittest.main()
