"""Lazily populated tree nodes over filesystem entries.

A directory node reads its listing the first time it is expanded and keeps
the result until it is resynchronized or explicitly reset. Leaves never read.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from ..errors import ListingError
from .fs import list_directory_entries, visible_sorted_entries
from .policy import VisibilityPolicy
from .types import Entry

logger = logging.getLogger(__name__)

ChildrenChangedListener = Callable[["TreeNode"], None]
EntryLister = Callable[..., list[Entry]]


class TreeNode:
    """One entry plus its exclusively owned, ordered children.

    ``populated`` is false only for directories that were never read (or were
    reset); such nodes always have an empty child list. ``expanded`` is the
    view state reported by the front end and decides how far ``resync``
    descends.
    """

    def __init__(
        self,
        entry: Entry,
        parent: TreeNode | None = None,
        *,
        on_children_changed: ChildrenChangedListener | None = None,
        list_entries: EntryLister = list_directory_entries,
    ) -> None:
        self.entry = entry
        self.parent = parent
        self.children: list[TreeNode] = []
        self.populated = entry.is_leaf
        self.expanded = False
        self.synced_show_hidden: bool | None = None
        self._on_children_changed = on_children_changed
        self._list_entries = list_entries

    def __repr__(self) -> str:
        return f"TreeNode({str(self.entry.path)!r}, populated={self.populated}, expanded={self.expanded})"

    @property
    def label(self) -> str:
        return self.entry.display_name

    @property
    def is_dir(self) -> bool:
        return self.entry.is_dir

    def _make_child(self, entry: Entry) -> TreeNode:
        return TreeNode(
            entry,
            self,
            on_children_changed=self._on_children_changed,
            list_entries=self._list_entries,
        )

    def _read_visible_entries(self, policy: VisibilityPolicy) -> list[Entry]:
        """List this directory; an unreadable directory counts as empty."""
        try:
            entries = self._list_entries(self.entry.path)
        except ListingError as exc:
            logger.warning("%s", exc)
            entries = []
        return visible_sorted_entries(entries, policy.show_hidden)

    def _notify(self) -> None:
        if self._on_children_changed is not None:
            self._on_children_changed(self)

    def expand(self, policy: VisibilityPolicy) -> None:
        """Mark the node expanded and read its children on first use.

        Re-expanding a populated node does not touch the filesystem unless the
        visibility policy changed while the node was collapsed, in which case
        the cached children are resynchronized.
        """
        if self.entry.is_leaf:
            return
        self.expanded = True
        if not self.populated:
            self.children = [self._make_child(entry) for entry in self._read_visible_entries(policy)]
            self.populated = True
            self.synced_show_hidden = policy.show_hidden
            self._notify()
            return
        if self.synced_show_hidden != policy.show_hidden:
            self.resync(policy)

    def collapse(self) -> None:
        """Hide children in the view while keeping them cached."""
        self.expanded = False

    def reset(self) -> None:
        """Forget cached children so the next ``expand`` reads again."""
        if self.entry.is_leaf:
            return
        self.children = []
        self.populated = False
        self.expanded = False
        self.synced_show_hidden = None
        self._notify()

    def resync(self, policy: VisibilityPolicy) -> None:
        """Re-list a populated directory under the current policy and ordering.

        Children whose path survives keep their node, so expanded grandchildren
        stay cached. Recursion only follows expanded children; collapsed ones
        are brought up to date when they are expanded again.
        """
        if self.entry.is_leaf or not self.populated:
            return
        previous = {child.entry.path: child for child in self.children}
        refreshed: list[TreeNode] = []
        for entry in self._read_visible_entries(policy):
            node = previous.get(entry.path)
            if node is None or node.entry.is_dir != entry.is_dir:
                node = self._make_child(entry)
            else:
                node.entry = entry
            refreshed.append(node)
        self.children = refreshed
        self.synced_show_hidden = policy.show_hidden
        self._notify()

        for child in self.children:
            if child.expanded:
                child.resync(policy)

    def iter_visible(self, depth: int = 0) -> Iterator[tuple[TreeNode, int]]:
        """Yield ``(node, depth)`` pairs in display order."""
        yield self, depth
        if not self.expanded:
            return
        for child in self.children:
            yield from child.iter_visible(depth + 1)


__all__ = ["TreeNode", "ChildrenChangedListener"]
