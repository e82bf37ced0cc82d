"""Raw-mode terminal session and Kitty image placement.

The explorer owns the whole screen while it runs: raw input, alternate
buffer, hidden cursor. Decoded images are placed into the preview pane with
the Kitty graphics protocol, transmitted inline as base64 PNG.
"""

from __future__ import annotations

import base64
import contextlib
import os
import termios
import tty
from collections.abc import Mapping

KITTY_CHUNK_BYTES = 4096
ENTER_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_SCREEN = b"\x1b[?25h\x1b[?1049l"
KITTY_DELETE_ALL = b"\x1b_Ga=d,d=A,q=2;\x1b\\"


def kitty_supported(environ: Mapping[str, str] | None = None) -> bool:
    """Whether the hosting terminal understands Kitty graphics commands."""
    env = os.environ if environ is None else environ
    return env.get("TERM", "") == "xterm-kitty" or bool(env.get("KITTY_WINDOW_ID"))


def kitty_png_commands(png_data: bytes, width_cells: int, height_cells: int) -> list[bytes]:
    """Split one PNG into Kitty transmit-and-display escape commands.

    The first command carries the format and the cell box the image is
    scaled into; the remaining ones only carry payload chunks.
    """
    encoded = base64.standard_b64encode(png_data)
    chunks = [encoded[i : i + KITTY_CHUNK_BYTES] for i in range(0, len(encoded), KITTY_CHUNK_BYTES)] or [b""]
    commands: list[bytes] = []
    last = len(chunks) - 1
    for idx, chunk in enumerate(chunks):
        more = 0 if idx == last else 1
        if idx == 0:
            keys = f"a=T,f=100,t=d,q=2,c={max(1, width_cells)},r={max(1, height_cells)},m={more}"
        else:
            keys = f"m={more}"
        commands.append(b"\x1b_G" + keys.encode("ascii") + b";" + chunk + b"\x1b\\")
    return commands


class TerminalController:
    """Screen and input mode for one interactive run."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._cooked_attrs = termios.tcgetattr(stdin_fd)
        self._kitty = kitty_supported()

    def write(self, text: str) -> None:
        os.write(self.stdout_fd, text.encode("utf-8", errors="replace"))

    def supports_kitty_graphics(self) -> bool:
        return self._kitty

    def kitty_clear_images(self) -> None:
        os.write(self.stdout_fd, KITTY_DELETE_ALL)

    def kitty_draw_png_data(
        self,
        png_data: bytes,
        col: int,
        row: int,
        width_cells: int,
        height_cells: int,
    ) -> None:
        """Place ``png_data`` with its top-left corner at 1-based ``(col, row)``."""
        # Save cursor, move, draw, restore so the text frame stays intact.
        move = f"\x1b7\x1b[{max(1, row)};{max(1, col)}H".encode("ascii")
        payload = b"".join(kitty_png_commands(png_data, width_cells, height_cells))
        os.write(self.stdout_fd, move + payload + b"\x1b8")

    @contextlib.contextmanager
    def raw_mode(self):
        """Switch to raw input on the alternate screen for the ``with`` body."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_SCREEN)
        try:
            yield self
        finally:
            os.write(self.stdout_fd, LEAVE_SCREEN)
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._cooked_attrs)


__all__ = ["TerminalController", "kitty_png_commands", "kitty_supported"]
