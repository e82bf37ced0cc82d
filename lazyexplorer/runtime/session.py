"""Interactive session state: tree selection, scrolling, and preview wiring.

The session owns every mutation of the tree and the preview pane and is only
driven from the interactive thread (key handling and the event loop).
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..file_tree_model import FileTree, TreeNode, TreeRow
from ..preview import PreviewPane
from ..ui_theme import UITheme, available_theme_names, resolve_theme
from .keys import KeyBinding, KeyBindings
from .render import (
    RenderContext,
    clamp_left_width,
    compute_left_width,
    preview_area,
    render_frame,
    right_pane_width,
)

logger = logging.getLogger(__name__)

LEFT_PANE_STEP = 2


class ExplorerSession:
    def __init__(
        self,
        tree: FileTree,
        pane: PreviewPane,
        *,
        theme_name: str | None = None,
        no_color: bool = False,
        left_pane_percent: float = 30.0,
        save_left_pane_percent: Callable[[int, int], None] | None = None,
        save_theme_name: Callable[[str], None] | None = None,
    ) -> None:
        self.tree = tree
        self.pane = pane
        self.no_color = no_color
        self.theme_name = theme_name
        self.theme: UITheme = resolve_theme(theme_name, no_color=no_color)
        self.left_pane_percent = left_pane_percent
        self._save_left_pane_percent = save_left_pane_percent
        self._save_theme_name = save_theme_name
        self.width = 0
        self.height = 0
        self.left_width = 0
        self.selected_idx = 0
        self.tree_start = 0
        self.preview_start = 0
        self.dirty = True
        self.quit_requested = False
        self._rows: list[TreeRow] = tree.visible_rows()
        self._rows_stale = False
        self._remove_listener = tree.add_listener(self._on_children_changed)
        self._bindings = KeyBindings(
            KeyBinding(("UP", "k"), lambda: self.move_selection(-1)),
            KeyBinding(("DOWN", "j"), lambda: self.move_selection(1)),
            KeyBinding(("PAGE_UP",), lambda: self.scroll_preview(-self.content_rows)),
            KeyBinding(("PAGE_DOWN",), lambda: self.scroll_preview(self.content_rows)),
            KeyBinding(("HOME", "g"), lambda: self.select_index(0)),
            KeyBinding(("END", "G"), lambda: self.select_index(len(self.rows) - 1)),
            KeyBinding(("RIGHT", "l"), self.expand_selected),
            KeyBinding(("LEFT", "h"), self.collapse_selected),
            KeyBinding(("ENTER",), self.activate_selected),
            KeyBinding(("CTRL_H", "."), self.toggle_hidden),
            KeyBinding((" ", "p"), self.toggle_playback),
            KeyBinding(("<",), lambda: self.adjust_left_width(-LEFT_PANE_STEP)),
            KeyBinding((">",), lambda: self.adjust_left_width(LEFT_PANE_STEP)),
            KeyBinding(("t",), self.cycle_theme),
            KeyBinding(("q", "Q", "ESC", "CTRL_C"), self.request_quit),
        )

    def _on_children_changed(self, _node: TreeNode) -> None:
        self._rows_stale = True
        self.dirty = True

    @property
    def rows(self) -> list[TreeRow]:
        if self._rows_stale:
            self._rows = self.tree.visible_rows()
            self._rows_stale = False
        return self._rows

    def _refresh_rows(self, keep: TreeNode | None = None) -> None:
        """Rebuild visible rows, keeping ``keep`` selected when still visible."""
        self._rows = self.tree.visible_rows()
        self._rows_stale = False
        lost_selection = False
        if keep is not None:
            for idx, row in enumerate(self._rows):
                if row.node is keep:
                    self.selected_idx = idx
                    break
            else:
                lost_selection = True
        self.selected_idx = max(0, min(self.selected_idx, len(self._rows) - 1))
        self._ensure_selected_visible()
        self.dirty = True
        if lost_selection:
            self._selection_replaced()

    def _selection_replaced(self) -> None:
        """The selected row vanished; the preview follows the new selection."""
        node = self.selected_node
        if node is None or node.is_dir:
            self.preview_start = 0
            self.pane.clear()
            return
        self._preview_selected()

    @property
    def content_rows(self) -> int:
        return max(1, self.height - 1)

    @property
    def selected_node(self) -> TreeNode | None:
        rows = self.rows
        if 0 <= self.selected_idx < len(rows):
            return rows[self.selected_idx].node
        return None

    def _ensure_selected_visible(self) -> None:
        visible = self.content_rows
        if self.selected_idx < self.tree_start:
            self.tree_start = self.selected_idx
        elif self.selected_idx >= self.tree_start + visible:
            self.tree_start = self.selected_idx - visible + 1
        self.tree_start = max(0, min(self.tree_start, max(0, len(self.rows) - visible)))

    def _preview_selected(self) -> None:
        """Selection-changed hook: preview a newly selected file leaf."""
        node = self.selected_node
        if node is None or node.is_dir:
            return
        if self.pane.view.path == node.entry.path:
            return
        self.preview_start = 0
        self.pane.render_preview(node.entry.path)
        self.dirty = True

    def select_index(self, index: int) -> None:
        rows = self.rows
        if not rows:
            return
        target = max(0, min(index, len(rows) - 1))
        if target == self.selected_idx:
            return
        self.selected_idx = target
        self._ensure_selected_visible()
        self.dirty = True
        self._preview_selected()

    def move_selection(self, delta: int) -> None:
        self.select_index(self.selected_idx + delta)

    def expand_selected(self) -> None:
        node = self.selected_node
        if node is None:
            return
        if not node.is_dir:
            self._preview_selected()
            return
        self.tree.expand(node)
        self._refresh_rows(keep=node)

    def collapse_selected(self) -> None:
        node = self.selected_node
        if node is None:
            return
        if node.is_dir and node.expanded and node is not self.tree.root:
            self.tree.collapse(node)
            self._refresh_rows(keep=node)
            return
        parent = node.parent
        if parent is not None:
            self._refresh_rows(keep=parent)

    def activate_selected(self) -> None:
        node = self.selected_node
        if node is None:
            return
        if not node.is_dir:
            self._preview_selected()
            return
        if node is self.tree.root:
            return
        self.tree.toggle_expanded(node)
        self._refresh_rows(keep=node)

    def toggle_hidden(self) -> None:
        keep = self.selected_node
        self.tree.toggle_hidden()
        self._refresh_rows(keep=keep)

    def toggle_playback(self) -> None:
        if self.pane.toggle_playback():
            self.dirty = True

    def scroll_preview(self, delta: int) -> None:
        last_line = max(0, len(self.pane.view.text.splitlines()) - 1)
        start = max(0, min(self.preview_start + delta, last_line))
        if start != self.preview_start:
            self.preview_start = start
            self.dirty = True

    def cycle_theme(self) -> None:
        if self.no_color:
            return
        names = available_theme_names()
        current = self.theme.name
        next_name = names[(names.index(current) + 1) % len(names)] if current in names else names[0]
        self.theme_name = next_name
        self.theme = resolve_theme(next_name)
        if self._save_theme_name is not None:
            self._save_theme_name(next_name)
        self.dirty = True

    def adjust_left_width(self, delta: int) -> None:
        if self.width <= 0:
            return
        new_left = clamp_left_width(self.width, self.left_width + delta)
        if new_left == self.left_width:
            return
        self.left_width = new_left
        self.left_pane_percent = new_left * 100.0 / self.width
        if self._save_left_pane_percent is not None:
            self._save_left_pane_percent(self.width, new_left)
        self._resize_preview()
        self.dirty = True

    def _resize_preview(self) -> None:
        self.pane.resize(*preview_area(right_pane_width(self.width, self.left_width), self.content_rows))

    def resize(self, width: int, height: int) -> None:
        """Area-resize event from the terminal."""
        self.width = max(1, width)
        self.height = max(2, height)
        self.left_width = compute_left_width(self.width, self.left_pane_percent)
        self._resize_preview()
        self._ensure_selected_visible()
        self.dirty = True

    def poll_loads(self) -> None:
        if self.pane.apply_completed_loads():
            self.dirty = True

    def request_quit(self) -> None:
        self.quit_requested = True

    def handle_key(self, key: str) -> bool:
        """Dispatch one key token; return whether it was bound."""
        return self._bindings.dispatch(key)

    def render(self) -> str:
        playback = self.pane.active_playback
        return render_frame(
            RenderContext(
                rows=self.rows,
                tree_start=self.tree_start,
                selected_idx=self.selected_idx,
                view=self.pane.view,
                preview_start=self.preview_start,
                width=self.width,
                height=self.height,
                left_width=self.left_width,
                show_hidden=self.tree.policy.show_hidden,
                playing=playback is not None and playback.is_playing,
                theme=self.theme,
            )
        )

    def close(self) -> None:
        self._remove_listener()
        self.pane.close()


__all__ = ["ExplorerSession"]
