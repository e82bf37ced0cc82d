"""Main interactive event loop for the terminal UI.

Each iteration applies finished background loads, forwards terminal
resizes, redraws when something changed, and waits briefly for a key so
load results are picked up without user input.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass

from .input import read_key
from .render import image_placement
from .session import ExplorerSession
from .terminal import TerminalController

KEY_POLL_TIMEOUT_MS = 50


@dataclass(frozen=True)
class RuntimeLoopDeps:
    """Injected terminal operations used by ``run_main_loop``."""

    terminal_size: Callable[[], tuple[int, int]]
    read_key: Callable[[int, int | None], str]


def default_loop_deps() -> RuntimeLoopDeps:
    def terminal_size() -> tuple[int, int]:
        size = shutil.get_terminal_size((80, 24))
        return size.columns, size.lines

    return RuntimeLoopDeps(terminal_size=terminal_size, read_key=read_key)


def run_main_loop(
    session: ExplorerSession,
    terminal: TerminalController,
    stdin_fd: int,
    deps: RuntimeLoopDeps | None = None,
) -> None:
    """Run until the session requests quit."""
    ops = deps if deps is not None else default_loop_deps()
    kitty_enabled = terminal.supports_kitty_graphics()
    image_state: tuple[int, int, int, int, int] | None = None

    while not session.quit_requested:
        columns, lines = ops.terminal_size()
        if (columns, lines) != (session.width, session.height):
            session.resize(columns, lines)

        session.poll_loads()

        if session.dirty:
            terminal.write(session.render())
            desired: tuple[int, int, int, int, int] | None = None
            view = session.pane.view
            placement = image_placement(session.left_width, view.fitted_size)
            if kitty_enabled and view.image is not None and placement is not None:
                desired = (id(view.image), *placement)
            if desired != image_state:
                if image_state is not None:
                    terminal.kitty_clear_images()
                if desired is not None:
                    col, row, width_cells, height_cells = placement
                    terminal.kitty_draw_png_data(view.image.png_data, col, row, width_cells, height_cells)
                image_state = desired
            session.dirty = False

        try:
            key = ops.read_key(stdin_fd, KEY_POLL_TIMEOUT_MS)
        except KeyboardInterrupt:
            key = "CTRL_C"
        if key:
            session.handle_key(key)


__all__ = ["RuntimeLoopDeps", "default_loop_deps", "run_main_loop"]
