"""Tree data source consumed by the front end.

Wraps the root node, the visibility policy, and "children changed"
subscribers. The root is expanded as soon as the tree is created.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .fs import list_directory_entries
from .node import ChildrenChangedListener, EntryLister, TreeNode
from .policy import VisibilityPolicy
from .types import Entry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreeRow:
    """One visible tree row."""

    node: TreeNode
    depth: int

    @property
    def label(self) -> str:
        return self.node.label

    @property
    def is_dir(self) -> bool:
        return self.node.is_dir


class FileTree:
    def __init__(
        self,
        root: Path,
        policy: VisibilityPolicy | None = None,
        *,
        list_entries: EntryLister = list_directory_entries,
    ) -> None:
        self.policy = policy if policy is not None else VisibilityPolicy()
        self._listeners: list[ChildrenChangedListener] = []
        self.root = TreeNode(
            Entry.from_path(root),
            on_children_changed=self._children_changed,
            list_entries=list_entries,
        )
        self.root.expand(self.policy)

    def _children_changed(self, node: TreeNode) -> None:
        for listener in list(self._listeners):
            listener(node)

    def add_listener(self, listener: ChildrenChangedListener) -> Callable[[], None]:
        """Subscribe to child-list replacements; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def visible_rows(self) -> list[TreeRow]:
        return [TreeRow(node, depth) for node, depth in self.root.iter_visible()]

    def expand(self, node: TreeNode) -> None:
        node.expand(self.policy)

    def collapse(self, node: TreeNode) -> None:
        node.collapse()

    def toggle_expanded(self, node: TreeNode) -> None:
        if not node.is_dir:
            return
        if node.expanded:
            node.collapse()
        else:
            node.expand(self.policy)

    def resync(self) -> None:
        """Bring every expanded node in line with the current policy."""
        self.root.resync(self.policy)

    def toggle_hidden(self) -> bool:
        """Flip hidden-entry visibility and resync expanded nodes."""
        show_hidden = self.policy.toggle()
        logger.info("Hidden files: %s", "Shown" if show_hidden else "Hidden")
        self.resync()
        return show_hidden


__all__ = ["FileTree", "TreeRow"]
