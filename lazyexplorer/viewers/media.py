"""Audio and video previews backed by libVLC.

A strategy opens exactly one playback handle per preview activation; the
preview pane owns that handle and releases it before the next preview.
Video starts playing on load, audio waits for an explicit play.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from ..errors import PlaybackError
from .base import PreviewState, PreviewView, ViewStrategy

logger = logging.getLogger(__name__)

VLC_ARGS = (
    "--intf",
    "dummy",
    "--no-video-title-show",
    "--quiet",
)


class PlaybackHandle(Protocol):
    @property
    def is_playing(self) -> bool: ...

    @property
    def released(self) -> bool: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def release(self) -> None: ...


class PlaybackBackend(Protocol):
    def open(self, path: Path, *, video: bool) -> PlaybackHandle: ...


class VlcPlayback:
    """One libVLC media player bound to one file.

    ``finished_states`` are the player states after which the media is no
    longer playing on its own (end of stream, stop, error).
    """

    def __init__(self, player, finished_states: tuple = ()) -> None:
        self._player = player
        self._finished_states = finished_states
        self._playing = False

    def _finished(self) -> bool:
        return bool(self._finished_states) and self._player.get_state() in self._finished_states

    @property
    def is_playing(self) -> bool:
        if self._player is None:
            return False
        if self._playing and self._finished():
            self._playing = False
        return self._playing

    @property
    def released(self) -> bool:
        return self._player is None

    def play(self) -> None:
        if self._player is None:
            raise PlaybackError("playback already released")
        if self._finished():
            # An ended player has to be stopped before it restarts from the top.
            self._player.stop()
        if self._player.play() == -1:
            raise PlaybackError("libVLC refused to start playback")
        self._playing = True

    def pause(self) -> None:
        if self._player is None:
            return
        self._player.set_pause(1)
        self._playing = False

    def release(self) -> None:
        """Stop and free the player; calling again is a no-op."""
        player = self._player
        if player is None:
            return
        self._player = None
        self._playing = False
        player.stop()
        player.release()


class VlcPlaybackBackend:
    """Creates ``VlcPlayback`` handles from one shared libVLC instance."""

    def __init__(self, args: tuple[str, ...] = VLC_ARGS) -> None:
        self._args = args
        self._instance = None
        self._finished_states: tuple = ()

    def _ensure_instance(self):
        if self._instance is not None:
            return self._instance
        try:
            import vlc
        except (ImportError, OSError, NotImplementedError) as exc:
            raise PlaybackError(f"libVLC is not available: {exc}") from exc
        instance = vlc.Instance(list(self._args))
        if instance is None:
            raise PlaybackError("libVLC could not be initialized")
        self._instance = instance
        self._finished_states = (vlc.State.Ended, vlc.State.Stopped, vlc.State.Error)
        return instance

    def open(self, path: Path, *, video: bool) -> VlcPlayback:
        instance = self._ensure_instance()
        player = instance.media_player_new()
        if player is None:
            raise PlaybackError(f"cannot create a player for {path.name}")
        media = instance.media_new(str(path))
        if media is None:
            player.release()
            raise PlaybackError(f"cannot open media {path.name}")
        if not video:
            media.add_option(":no-video")
        player.set_media(media)
        media.release()
        return VlcPlayback(player, self._finished_states)

    def close(self) -> None:
        if self._instance is not None:
            self._instance.release()
            self._instance = None


def toggle_playback(handle: PlaybackHandle) -> None:
    if handle.is_playing:
        handle.pause()
    else:
        handle.play()


class _MediaStrategy(ViewStrategy):
    kind = "media"
    video = False

    def __init__(self, backend: PlaybackBackend, autoplay: bool) -> None:
        self.backend = backend
        self.autoplay = autoplay

    def _label(self, path: Path) -> str:
        return f"{self.kind.capitalize()}: {path.name}"

    def produce(self, path: Path) -> PreviewView:
        handle: PlaybackHandle | None = None
        try:
            handle = self.backend.open(path, video=self.video)
            if self.autoplay:
                handle.play()
        except PlaybackError as exc:
            logger.error("cannot play %s: %s", path, exc)
            if handle is not None:
                handle.release()
            return PreviewView(
                kind=self.kind,
                path=path,
                state=PreviewState.FAILED,
                text=f"{self._label(path)}\n\nError: {exc}",
                error=str(exc),
            )
        return PreviewView(
            kind=self.kind,
            path=path,
            state=PreviewState.READY,
            text=self._label(path),
            playback=handle,
        )


class AudioStrategy(_MediaStrategy):
    name = "audio"
    kind = "audio"

    def __init__(self, backend: PlaybackBackend, autoplay: bool = False) -> None:
        super().__init__(backend, autoplay)


class VideoStrategy(_MediaStrategy):
    name = "video"
    kind = "video"
    video = True

    def __init__(self, backend: PlaybackBackend, autoplay: bool = True) -> None:
        super().__init__(backend, autoplay)


__all__ = [
    "AudioStrategy",
    "PlaybackBackend",
    "PlaybackHandle",
    "VideoStrategy",
    "VlcPlayback",
    "VlcPlaybackBackend",
    "toggle_playback",
]
