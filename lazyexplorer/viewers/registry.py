"""Extension-keyed dispatch from file names to view strategies.

Keys are lowercase extensions without the leading dot. The registry is
filled once at startup and frozen; unknown extensions resolve to a
``FallbackStrategy`` instead of failing.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..syntax import DEFAULT_STYLE
from .base import ViewStrategy
from .fallback import FallbackStrategy
from .image import ImageStrategy
from .media import AudioStrategy, PlaybackBackend, VideoStrategy, VlcPlaybackBackend
from .text import TextStrategy

VIDEO_EXTENSIONS = frozenset({"mp4", "m4v", "flv"})
TEXT_EXTENSIONS = frozenset(
    {"txt", "java", "gradle", "md", "css", "py", "json", "xml", "kt", "js", "log"}
)
IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "bmp"})
AUDIO_EXTENSIONS = frozenset({"mp3", "wav", "m4a", "aac"})


def extension_of(file_name: str) -> str:
    """Return the lowercase text after the last dot.

    Names without a dot, or whose only dot is the first character (dotfiles),
    have an empty extension.
    """
    dot = file_name.rfind(".")
    if dot <= 0:
        return ""
    return file_name[dot + 1 :].lower()


def _normalize_extension(extension: str) -> str:
    return extension.strip().lstrip(".").lower()


class ViewerRegistry:
    def __init__(self) -> None:
        self._strategies: dict[str, ViewStrategy] = {}
        self._frozen = False

    def __contains__(self, extension: object) -> bool:
        return isinstance(extension, str) and _normalize_extension(extension) in self._strategies

    def __len__(self) -> int:
        return len(self._strategies)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, extensions: Iterable[str] | str, strategy: ViewStrategy) -> None:
        """Map each extension to ``strategy``; a repeated extension is overwritten."""
        if self._frozen:
            raise RuntimeError("viewer registry is frozen")
        if isinstance(extensions, str):
            extensions = (extensions,)
        for extension in extensions:
            key = _normalize_extension(extension)
            if key:
                self._strategies[key] = strategy

    def freeze(self) -> ViewerRegistry:
        self._frozen = True
        return self

    def lookup(self, extension: str) -> ViewStrategy | None:
        return self._strategies.get(_normalize_extension(extension))

    def resolve(self, file_name: str) -> ViewStrategy:
        extension = extension_of(file_name)
        strategy = self._strategies.get(extension)
        if strategy is None:
            return FallbackStrategy(extension)
        return strategy

    def extensions(self) -> tuple[str, ...]:
        return tuple(sorted(self._strategies))


def build_default_registry(
    *,
    style: str = DEFAULT_STYLE,
    colorize: bool = False,
    playback_backend: PlaybackBackend | None = None,
    video_autoplay: bool = True,
    audio_autoplay: bool = False,
) -> ViewerRegistry:
    """Build the frozen reference registry (video, text, image, audio)."""
    backend = playback_backend if playback_backend is not None else VlcPlaybackBackend()
    registry = ViewerRegistry()
    registry.register(VIDEO_EXTENSIONS, VideoStrategy(backend, autoplay=video_autoplay))
    registry.register(TEXT_EXTENSIONS, TextStrategy(style=style, colorize=colorize))
    registry.register(IMAGE_EXTENSIONS, ImageStrategy())
    registry.register(AUDIO_EXTENSIONS, AudioStrategy(backend, autoplay=audio_autoplay))
    return registry.freeze()


__all__ = [
    "AUDIO_EXTENSIONS",
    "IMAGE_EXTENSIONS",
    "TEXT_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "ViewerRegistry",
    "build_default_registry",
    "extension_of",
]
