"""Placeholder for file types without a registered strategy."""

from __future__ import annotations

from pathlib import Path

from .base import PreviewView, ViewStrategy


class FallbackStrategy(ViewStrategy):
    name = "fallback"

    def __init__(self, extension: str) -> None:
        self.extension = extension

    @property
    def message(self) -> str:
        return f"no preview available for .{self.extension}"

    def produce(self, path: Path) -> PreviewView:
        return PreviewView.message("unsupported", path, self.message)


__all__ = ["FallbackStrategy"]
