"""Text and source-code previews, read off the interactive thread."""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import ReadError
from ..syntax import DEFAULT_STYLE, colorize_source, read_text, sanitize_terminal_text
from .base import PreviewState, PreviewView, ViewStrategy

logger = logging.getLogger(__name__)

COLORIZE_MAX_FILE_BYTES = 256_000


class TextStrategy(ViewStrategy):
    name = "text"
    loads_async = True

    def __init__(self, style: str = DEFAULT_STYLE, colorize: bool = False) -> None:
        self.style = style
        self.colorize = colorize

    def produce(self, path: Path) -> PreviewView:
        return PreviewView.loading("text", path)

    def load(self, path: Path) -> str:
        """Read, sanitize, and optionally highlight ``path``.

        Raises ``ReadError`` when the file cannot be read.
        """
        try:
            source = read_text(path)
        except OSError as exc:
            logger.warning("cannot read %s: %s", path, exc)
            raise ReadError(path, str(exc)) from exc
        source = sanitize_terminal_text(source)
        if self.colorize and len(source) <= COLORIZE_MAX_FILE_BYTES:
            return colorize_source(source, path, self.style)
        return source

    def apply(self, view: PreviewView, payload: object) -> None:
        view.text = str(payload)
        view.state = PreviewState.READY


__all__ = ["COLORIZE_MAX_FILE_BYTES", "TextStrategy"]
