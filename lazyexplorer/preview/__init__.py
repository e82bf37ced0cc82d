"""Preview slot and its background loaders."""

from __future__ import annotations

from .loader import PreviewLoadRequest, PreviewLoadResult, PreviewLoadScheduler
from .pane import PreviewPane

__all__ = [
    "PreviewLoadRequest",
    "PreviewLoadResult",
    "PreviewLoadScheduler",
    "PreviewPane",
]
