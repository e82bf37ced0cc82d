"""Domain datatypes for filesystem-backed tree entries."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Entry:
    """Snapshot of one path's type, name, and visibility at read time.

    The filesystem stays the source of truth; an entry is never refreshed in
    place, a new listing produces new entries.
    """

    path: Path
    name: str
    is_dir: bool
    is_hidden: bool = False

    @property
    def display_name(self) -> str:
        """Label for tree rows; filesystem roots have an empty name."""
        return self.name or str(self.path)

    @property
    def is_leaf(self) -> bool:
        return not self.is_dir

    @classmethod
    def from_path(cls, path: Path) -> Entry:
        """Build an entry for a path that was not obtained from a listing."""
        try:
            is_dir = path.is_dir()
        except OSError:
            is_dir = False
        return cls(path=path, name=path.name, is_dir=is_dir, is_hidden=path.name.startswith("."))


__all__ = ["Entry"]
