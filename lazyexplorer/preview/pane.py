"""Preview slot: one view, one selection id, at most one playback handle.

All methods run on the interactive thread. Every new selection clears the
slot first, which releases the active playback handle and invalidates any
load still running for the previous selection.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from ..errors import PlaybackError
from ..viewers.base import PreviewState, PreviewView, ViewStrategy
from ..viewers.media import PlaybackHandle, toggle_playback
from ..viewers.registry import ViewerRegistry
from .loader import PreviewLoadResult, PreviewLoadScheduler

logger = logging.getLogger(__name__)


class PreviewPane:
    def __init__(self, registry: ViewerRegistry, scheduler: PreviewLoadScheduler | None = None) -> None:
        self.registry = registry
        self.scheduler = scheduler if scheduler is not None else PreviewLoadScheduler()
        self.view = PreviewView.empty()
        self.selection_id = 0
        self.active_playback: PlaybackHandle | None = None
        self.area: tuple[int, int] = (0, 0)
        self._strategy: ViewStrategy | None = None

    @property
    def state(self) -> PreviewState:
        return self.view.state

    def release_playback(self) -> None:
        """Release the active playback handle, if any. Safe to call repeatedly."""
        handle = self.active_playback
        self.active_playback = None
        if handle is not None:
            handle.release()

    def clear(self) -> None:
        """Return to EMPTY, releasing playback and orphaning pending loads."""
        self.release_playback()
        self.selection_id += 1
        self._strategy = None
        self.view = PreviewView.empty()

    def render_preview(self, path: Path) -> PreviewView:
        """Show ``path`` using the strategy registered for its extension."""
        self.clear()
        strategy = self.registry.resolve(path.name)
        view = strategy.produce(path)
        self._strategy = strategy
        self.view = view
        if view.playback is not None:
            self.active_playback = view.playback
        if strategy.loads_async and view.state is PreviewState.LOADING:
            self.scheduler.submit(selection_id=self.selection_id, path=path, load=strategy.load)
        view.fit_to(*self.area)
        return view

    def _apply_result(self, result: PreviewLoadResult) -> bool:
        request = result.request
        strategy = self._strategy
        if (
            request.selection_id != self.selection_id
            or strategy is None
            or self.view.state is not PreviewState.LOADING
        ):
            logger.debug("discarding stale preview load for %s", request.path)
            return False
        if result.error is not None:
            strategy.fail(self.view, result.error)
            return True
        strategy.apply(self.view, result.payload)
        self.view.fit_to(*self.area)
        return True

    def apply_completed_loads(self) -> bool:
        """Apply finished loads for the current selection; drop stale ones.

        Returns whether the visible view changed.
        """
        changed = False
        for result in self.scheduler.drain_results():
            if self._apply_result(result):
                changed = True
        return changed

    def wait_for_load(self, timeout: float) -> bool:
        """Block until the current view leaves LOADING or ``timeout`` passes."""
        deadline = time.monotonic() + timeout
        while self.view.state is PreviewState.LOADING:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            result = self.scheduler.wait_for_result(remaining)
            if result is not None:
                self._apply_result(result)
        return True

    def resize(self, width: int, height: int) -> None:
        """Record the new preview area and refit the current image."""
        self.area = (max(0, width), max(0, height))
        self.view.fit_to(*self.area)

    def toggle_playback(self) -> bool:
        """Play or pause the active handle; errors are shown inline."""
        handle = self.active_playback
        if handle is None:
            return False
        try:
            toggle_playback(handle)
        except PlaybackError as exc:
            logger.error("playback failed for %s: %s", self.view.path, exc)
            self.release_playback()
            self.view.playback = None
            self.view.state = PreviewState.FAILED
            self.view.error = str(exc)
            self.view.text = f"{self.view.text}\n\nError: {exc}"
        return True

    def close(self) -> None:
        self.clear()


__all__ = ["PreviewPane"]
