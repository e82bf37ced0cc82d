"""Frame composition for the split tree/preview terminal view.

Everything here is pure: functions take the tree rows and preview view and
return ANSI text or geometry, leaving terminal writes to the session.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

from ..ansi import ANSI_ESCAPE_RE, clip_ansi_line, display_width, pad_ansi_line
from ..file_tree_model import TreeRow
from ..ui_theme import UITheme
from ..viewers import PreviewState, PreviewView

# Terminal cells are roughly twice as tall as they are wide.
CELL_ASPECT = 2
IMAGE_MARGIN_CELLS = 1
IMAGE_TITLE_ROWS = 2
RESET = "\033[0m"


def compute_left_width(total_width: int, percent: float) -> int:
    """Tree-pane width for ``percent`` of the terminal, clamped to safe bounds."""
    return clamp_left_width(total_width, int(round(total_width * percent / 100.0)))


def clamp_left_width(total_width: int, desired_left: int) -> int:
    """Clamp requested tree-pane width to safe viewport bounds."""
    max_possible = max(1, total_width - 2)
    min_left = max(12, min(20, total_width - 12))
    max_left = max(min_left, total_width - 12)
    max_left = min(max_left, max_possible)
    min_left = min(min_left, max_left)
    return max(min_left, min(desired_left, max_left))


def right_pane_width(total_width: int, left_width: int) -> int:
    return max(1, total_width - left_width - 2)


def preview_area(right_width: int, content_rows: int) -> tuple[int, int]:
    """Image fitting area in horizontal-cell units (rows scaled by aspect)."""
    width = max(0, right_width - 2 * IMAGE_MARGIN_CELLS)
    rows = max(0, content_rows - IMAGE_TITLE_ROWS - IMAGE_MARGIN_CELLS)
    return width, rows * CELL_ASPECT


def image_placement(left_width: int, fitted_size: tuple[int, int] | None) -> tuple[int, int, int, int] | None:
    """Return ``(col, row, width_cells, height_cells)`` for a fitted image."""
    if fitted_size is None or fitted_size[0] <= 0 or fitted_size[1] <= 0:
        return None
    width_cells = fitted_size[0]
    height_cells = max(1, math.ceil(fitted_size[1] / CELL_ASPECT))
    col = left_width + 2 + IMAGE_MARGIN_CELLS
    row = 1 + IMAGE_TITLE_ROWS
    return col, row, width_cells, height_cells


def format_tree_row(row: TreeRow, theme: UITheme) -> str:
    """Render one tree row as ANSI-styled display text."""
    node = row.node
    indent = "  " * row.depth
    if node.is_dir:
        marker = "▾ " if node.expanded else "▸ "
        label = node.label if node.label.endswith(os.sep) else f"{node.label}/"
        return f"{indent}{theme.tree_marker}{marker}{theme.reset}{theme.tree_dir}{label}{theme.reset}"
    return f"{indent}  {theme.tree_file}{node.label}{theme.reset}"


def preview_lines(view: PreviewView, theme: UITheme, *, playing: bool = False) -> list[str]:
    """Text rows for the preview pane, including playback controls."""
    if view.state is PreviewState.EMPTY:
        return []
    lines = view.text.splitlines() or [""]
    if view.state is PreviewState.LOADING:
        lines = [f"{theme.preview_placeholder}{line}{theme.reset}" for line in lines]
    elif view.state is PreviewState.FAILED:
        lines = [f"{theme.preview_error}{line}{theme.reset}" if line.startswith("Error") else line for line in lines]
    if view.playback is not None:
        action = "Pause" if playing else "Play"
        lines.extend(["", f"{theme.preview_controls}[space] {action}{theme.reset}"])
    return lines


def build_status_line(left_text: str, width: int, right_text: str = "│ q Quit") -> str:
    """Compose a full-width status row with right-aligned hint text."""
    if width <= 0:
        return ""
    right = right_text if display_width(right_text) < width else ""
    left_room = max(0, width - display_width(right))
    return pad_ansi_line(left_text, left_room) + right


@dataclass
class RenderContext:
    rows: list[TreeRow]
    tree_start: int
    selected_idx: int
    view: PreviewView
    preview_start: int
    width: int
    height: int
    left_width: int
    show_hidden: bool
    playing: bool
    theme: UITheme


def render_frame(context: RenderContext) -> str:
    """Compose one full-screen frame."""
    theme = context.theme
    out: list[str] = ["\033[H\033[J"]
    content_rows = max(1, context.height - 1)
    left_width = clamp_left_width(context.width, context.left_width)
    right_width = right_pane_width(context.width, left_width)
    lines = preview_lines(context.view, theme, playing=context.playing)

    for screen_row in range(content_rows):
        tree_idx = context.tree_start + screen_row
        if tree_idx < len(context.rows):
            row_text = pad_ansi_line(format_tree_row(context.rows[tree_idx], theme), left_width)
            if tree_idx == context.selected_idx:
                row_text = f"{theme.reverse}{ANSI_ESCAPE_RE.sub('', row_text)}"
        else:
            row_text = " " * left_width
        out.append(row_text)
        out.append(RESET)
        out.append(f"{theme.divider}│{theme.reset} ")

        line_idx = context.preview_start + screen_row
        if line_idx < len(lines):
            text = clip_ansi_line(lines[line_idx].rstrip("\r\n"), right_width)
            out.append(text)
            if "\033" in text:
                out.append(RESET)
        out.append("\r\n")

    selected_path = ""
    if 0 <= context.selected_idx < len(context.rows):
        selected_path = str(context.rows[context.selected_idx].node.entry.path)
    hidden_label = "hidden: shown" if context.show_hidden else "hidden: off"
    status = build_status_line(f" {selected_path}  [{hidden_label}]", context.width)
    out.append(theme.reverse)
    out.append(status)
    out.append(RESET)
    return "".join(out)


__all__ = [
    "CELL_ASPECT",
    "RenderContext",
    "build_status_line",
    "clamp_left_width",
    "compute_left_width",
    "format_tree_row",
    "image_placement",
    "preview_area",
    "preview_lines",
    "render_frame",
    "right_pane_width",
]
