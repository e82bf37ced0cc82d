"""Hidden-entry visibility shared by every listing of one session."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class VisibilityPolicy:
    """Process-wide ``show_hidden`` switch, passed explicitly to tree operations."""

    show_hidden: bool = False

    def toggle(self) -> bool:
        """Flip the flag and return the new value."""
        self.show_hidden = not self.show_hidden
        return self.show_hidden


__all__ = ["VisibilityPolicy"]
