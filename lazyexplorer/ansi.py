"""Width-aware clipping for strings that carry ANSI color codes.

Pane rows are built from styled text (tree colors, Pygments output), so all
measuring happens on terminal cells: SGR sequences take none, wide glyphs
take two, tabs run to the next stop.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
_SPLIT_RE = re.compile(f"({ANSI_ESCAPE_RE.pattern})")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Cells used by ``ch`` when printed at cell ``col``."""
    if ch == "\t":
        return TAB_STOP - col % TAB_STOP
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def _pieces(text: str) -> Iterator[tuple[bool, str]]:
    """Yield ``(is_escape, piece)`` in order; escapes are whole sequences."""
    for idx, piece in enumerate(_SPLIT_RE.split(text)):
        if piece:
            yield idx % 2 == 1, piece


def display_width(text: str) -> int:
    width = 0
    for is_escape, piece in _pieces(text):
        if is_escape:
            continue
        for ch in piece:
            width += char_display_width(ch, width)
    return width


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Keep at most ``max_cols`` cells of ``text``.

    Escapes before the cut are kept so colors still apply; tabs become spaces
    and a wide glyph that would straddle the edge is dropped.
    """
    if max_cols <= 0:
        return ""
    kept: list[str] = []
    width = 0
    for is_escape, piece in _pieces(text):
        if width >= max_cols:
            break
        if is_escape:
            kept.append(piece)
            continue
        for ch in piece:
            cells = char_display_width(ch, width)
            if width + cells > max_cols:
                return "".join(kept)
            kept.append(" " * cells if ch == "\t" else ch)
            width += cells
            if width >= max_cols:
                break
    return "".join(kept)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip to ``width`` and pad with spaces up to exactly ``width`` columns."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "pad_ansi_line",
]
