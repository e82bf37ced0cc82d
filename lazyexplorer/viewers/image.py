"""Image previews: background decode with Pillow, aspect-preserving fit.

The decoded image is kept on the view, so a resized preview area only needs
``fit_within`` again, never another decode.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from ..errors import ReadError
from .base import PreviewState, PreviewView, ViewStrategy

logger = logging.getLogger(__name__)


def fit_within(width: int, height: int, max_width: int, max_height: int) -> tuple[int, int]:
    """Scale ``width``x``height`` to the largest size inside the bounds.

    Aspect ratio is preserved; both dimensions are at least 1 whenever the
    bounds are positive, and ``(0, 0)`` is returned otherwise.
    """
    if width <= 0 or height <= 0 or max_width <= 0 or max_height <= 0:
        return (0, 0)
    scale = min(max_width / width, max_height / height)
    return (
        max(1, min(max_width, round(width * scale))),
        max(1, min(max_height, round(height * scale))),
    )


@dataclass(frozen=True)
class DecodedImage:
    """Decoded pixel dimensions plus PNG bytes ready for display."""

    path: Path
    width: int
    height: int
    source_format: str | None
    png_data: bytes

    def fit(self, max_width: int, max_height: int) -> tuple[int, int]:
        return fit_within(self.width, self.height, max_width, max_height)


def decode_image(path: Path) -> DecodedImage:
    """Decode ``path`` and re-encode non-PNG formats as PNG.

    Raises ``ReadError`` when Pillow cannot open or decode the file.
    """
    try:
        with Image.open(path) as img:
            img.load()
            source_format = img.format
            width, height = img.size
            if source_format == "PNG":
                png_data = path.read_bytes()
            else:
                buffer = io.BytesIO()
                converted = img if img.mode in {"RGB", "RGBA"} else img.convert("RGBA")
                converted.save(buffer, format="PNG")
                png_data = buffer.getvalue()
    except (OSError, Image.DecompressionBombError) as exc:
        logger.warning("cannot decode image %s: %s", path, exc)
        raise ReadError(path, str(exc)) from exc
    return DecodedImage(
        path=path,
        width=width,
        height=height,
        source_format=source_format,
        png_data=png_data,
    )


class ImageStrategy(ViewStrategy):
    name = "image"
    loads_async = True

    def produce(self, path: Path) -> PreviewView:
        return PreviewView.loading("image", path, "Loading image...")

    def load(self, path: Path) -> DecodedImage:
        return decode_image(path)

    def apply(self, view: PreviewView, payload: object) -> None:
        assert isinstance(payload, DecodedImage)
        view.image = payload
        view.text = f"{payload.path.name}  {payload.width}x{payload.height} {payload.source_format or ''}".rstrip()
        view.state = PreviewState.READY


__all__ = ["DecodedImage", "ImageStrategy", "decode_image", "fit_within"]
