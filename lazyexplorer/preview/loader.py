"""Background workers for slow preview loads (text reads, image decodes).

Each load runs on its own short-lived daemon thread and is tagged with the
selection it belongs to. Results are queued and only touched again when the
interactive thread drains them.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from queue import Empty, Queue


@dataclass(frozen=True)
class PreviewLoadRequest:
    """One preview load job."""

    request_id: int
    selection_id: int
    path: Path


@dataclass(frozen=True)
class PreviewLoadResult:
    """Completed load: either a payload or the exception the loader raised."""

    request: PreviewLoadRequest
    payload: object = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PreviewLoadScheduler:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._next_request_id = 1
        self._results: Queue[PreviewLoadResult] = Queue()

    def _worker(self, request: PreviewLoadRequest, load: Callable[[Path], object]) -> None:
        try:
            payload = load(request.path)
        except Exception as exc:
            self._results.put(PreviewLoadResult(request=request, error=exc))
            return
        self._results.put(PreviewLoadResult(request=request, payload=payload))

    def submit(self, *, selection_id: int, path: Path, load: Callable[[Path], object]) -> int:
        """Start ``load(path)`` in the background and return its request id."""
        with self._lock:
            request_id = self._next_request_id
            self._next_request_id += 1
        request = PreviewLoadRequest(request_id=request_id, selection_id=selection_id, path=path)
        worker = threading.Thread(
            target=self._worker,
            args=(request, load),
            name="lazyexplorer-preview-load",
            daemon=True,
        )
        worker.start()
        return request_id

    def drain_results(self) -> list[PreviewLoadResult]:
        """Drain all completed load results without blocking."""
        out: list[PreviewLoadResult] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out

    def wait_for_result(self, timeout: float) -> PreviewLoadResult | None:
        """Block up to ``timeout`` seconds for the next completed load."""
        try:
            return self._results.get(timeout=max(0.0, timeout))
        except Empty:
            return None


__all__ = [
    "PreviewLoadRequest",
    "PreviewLoadResult",
    "PreviewLoadScheduler",
]
