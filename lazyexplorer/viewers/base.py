"""Preview views and the strategy interface that produces them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class PreviewState(str, Enum):
    """Lifecycle of one preview slot."""

    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass
class PreviewView:
    """Renderable preview handed to the preview surface.

    ``text`` is what a text-only surface shows: content, placeholder, or the
    inline error. ``image`` and ``playback`` are set by the image and media
    strategies; ``fitted_size`` is recomputed whenever the area changes.
    """

    kind: str
    path: Path | None = None
    state: PreviewState = PreviewState.EMPTY
    text: str = ""
    error: str | None = None
    image: Any = None
    fitted_size: tuple[int, int] | None = None
    playback: Any = None

    @classmethod
    def empty(cls) -> PreviewView:
        return cls(kind="empty")

    @classmethod
    def loading(cls, kind: str, path: Path, placeholder: str = "Loading...") -> PreviewView:
        return cls(kind=kind, path=path, state=PreviewState.LOADING, text=placeholder)

    @classmethod
    def message(cls, kind: str, path: Path | None, text: str) -> PreviewView:
        return cls(kind=kind, path=path, state=PreviewState.READY, text=text)

    def fit_to(self, width: int, height: int) -> None:
        """Rescale a decoded image to the area without decoding again."""
        if self.image is None:
            self.fitted_size = None
            return
        self.fitted_size = self.image.fit(width, height)


class ViewStrategy(ABC):
    """Turns a file into a ``PreviewView``.

    Synchronous strategies return a finished view from ``produce``.
    Asynchronous ones (``loads_async``) return a LOADING placeholder; the
    preview pane then runs ``load`` off the interactive thread and, back on
    it, hands the outcome to ``apply`` or ``fail``.
    """

    name: str = "strategy"
    loads_async: bool = False

    @abstractmethod
    def produce(self, path: Path) -> PreviewView:
        ...

    def load(self, path: Path) -> object:
        raise NotImplementedError(f"{type(self).__name__} does not load asynchronously")

    def apply(self, view: PreviewView, payload: object) -> None:
        view.state = PreviewState.READY

    def fail(self, view: PreviewView, error: BaseException) -> None:
        view.state = PreviewState.FAILED
        view.error = str(error)
        view.text = f"Error: {error}"


__all__ = ["PreviewState", "PreviewView", "ViewStrategy"]
