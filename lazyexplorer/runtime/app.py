"""Bootstrap for the interactive explorer.

Builds the tree, viewer registry, and preview pane from CLI options and
persisted config, then runs the event loop inside raw terminal mode.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from ..file_tree_model import FileTree, VisibilityPolicy
from ..preview import PreviewPane
from ..viewers import VlcPlaybackBackend, build_default_registry
from . import config
from .loop import run_main_loop
from .session import ExplorerSession
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def build_session(
    root: Path,
    *,
    style: str,
    theme_name: str | None,
    no_color: bool,
    show_hidden: bool,
    playback_backend: VlcPlaybackBackend,
) -> ExplorerSession:
    registry = build_default_registry(
        style=style,
        colorize=not no_color,
        playback_backend=playback_backend,
        video_autoplay=config.load_video_autoplay(),
        audio_autoplay=config.load_audio_autoplay(),
    )
    tree = FileTree(root, VisibilityPolicy(show_hidden=show_hidden))
    return ExplorerSession(
        tree,
        PreviewPane(registry),
        theme_name=theme_name if theme_name is not None else config.load_theme_name(),
        no_color=no_color,
        left_pane_percent=config.load_left_pane_percent(),
        save_left_pane_percent=config.save_left_pane_percent,
        save_theme_name=config.save_theme_name,
    )


def run_explorer(
    root: Path,
    *,
    style: str,
    theme_name: str | None = None,
    no_color: bool = False,
    show_hidden: bool = False,
) -> None:
    """Run the split-pane explorer on ``root`` until the user quits."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(stdout_fd):
        raise SystemExit("lazyexplorer needs an interactive terminal; use --render PATH instead.")

    logger.info("starting explorer at %s", root)
    playback_backend = VlcPlaybackBackend()
    session = build_session(
        root,
        style=style,
        theme_name=theme_name,
        no_color=no_color,
        show_hidden=show_hidden,
        playback_backend=playback_backend,
    )
    terminal = TerminalController(stdin_fd, stdout_fd)
    try:
        with terminal.raw_mode():
            try:
                run_main_loop(session, terminal, stdin_fd)
            finally:
                if terminal.supports_kitty_graphics():
                    terminal.kitty_clear_images()
    finally:
        session.close()
        playback_backend.close()
        logger.info("explorer closed")


__all__ = ["build_session", "run_explorer"]
