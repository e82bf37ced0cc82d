"""Key-token to action dispatch tables."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyBinding:
    """One or more key tokens bound to a single action."""

    keys: tuple[str, ...]
    action: Callable[[], None]


class KeyBindings:
    def __init__(self, *bindings: KeyBinding) -> None:
        self._actions: dict[str, Callable[[], None]] = {}
        for binding in bindings:
            for key in binding.keys:
                self._actions[key] = binding.action

    def __contains__(self, key: object) -> bool:
        return key in self._actions

    def dispatch(self, key: str) -> bool:
        """Run the action bound to ``key``; return whether one was bound."""
        action = self._actions.get(key)
        if action is None:
            return False
        action()
        return True


__all__ = ["KeyBinding", "KeyBindings"]
