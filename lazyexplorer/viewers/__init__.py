"""File-type dispatch for the preview pane.

``build_default_registry`` wires the text, image, audio, and video
strategies; ``ViewerRegistry.resolve`` picks one by file extension.
"""

from __future__ import annotations

from .base import PreviewState, PreviewView, ViewStrategy
from .fallback import FallbackStrategy
from .image import DecodedImage, ImageStrategy, decode_image, fit_within
from .media import (
    AudioStrategy,
    PlaybackBackend,
    PlaybackHandle,
    VideoStrategy,
    VlcPlayback,
    VlcPlaybackBackend,
    toggle_playback,
)
from .registry import (
    AUDIO_EXTENSIONS,
    IMAGE_EXTENSIONS,
    TEXT_EXTENSIONS,
    VIDEO_EXTENSIONS,
    ViewerRegistry,
    build_default_registry,
    extension_of,
)
from .text import TextStrategy

__all__ = [
    "PreviewState",
    "PreviewView",
    "ViewStrategy",
    "FallbackStrategy",
    "TextStrategy",
    "ImageStrategy",
    "DecodedImage",
    "decode_image",
    "fit_within",
    "AudioStrategy",
    "VideoStrategy",
    "PlaybackBackend",
    "PlaybackHandle",
    "VlcPlayback",
    "VlcPlaybackBackend",
    "toggle_playback",
    "ViewerRegistry",
    "build_default_registry",
    "extension_of",
    "AUDIO_EXTENSIONS",
    "IMAGE_EXTENSIONS",
    "TEXT_EXTENSIONS",
    "VIDEO_EXTENSIONS",
]
