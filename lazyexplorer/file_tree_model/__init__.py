"""Lazy directory-tree model.

Contains the non-UI tree primitives:
- immutable entry snapshots and the listing/ordering helpers
- lazily populated tree nodes with visibility resync
- the tree data source handed to the front end
"""

from __future__ import annotations

from .fs import entry_sort_key, is_hidden_entry, list_directory_entries, visible_sorted_entries
from .node import ChildrenChangedListener, TreeNode
from .policy import VisibilityPolicy
from .tree import FileTree, TreeRow
from .types import Entry

__all__ = [
    "Entry",
    "VisibilityPolicy",
    "TreeNode",
    "ChildrenChangedListener",
    "FileTree",
    "TreeRow",
    "entry_sort_key",
    "is_hidden_entry",
    "list_directory_entries",
    "visible_sorted_entries",
]
