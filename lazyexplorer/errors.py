"""Exception types for filesystem listing, preview reads, and playback.

Each error is caught close to where it is raised and turned into a degraded
but valid UI state; none of them are meant to reach the event loop.
"""

from __future__ import annotations

from pathlib import Path


class ExplorerError(Exception):
    """Base class for lazyexplorer errors."""


class ListingError(ExplorerError):
    """A directory could not be listed (permission denied, removed, ...)."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"cannot list {path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause


class ReadError(ExplorerError):
    """A file could not be read for a text preview."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


class PlaybackError(ExplorerError):
    """An audio/video playback resource could not be constructed or driven."""


__all__ = [
    "ExplorerError",
    "ListingError",
    "ReadError",
    "PlaybackError",
]
