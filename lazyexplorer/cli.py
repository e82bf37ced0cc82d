"""Command-line front door for lazyexplorer.

Parses CLI options, resolves the root directory, and configures logging.
Then dispatches into the interactive explorer, or prints a one-shot
rendering of a directory tree or file preview with ``--render``.
"""

from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path

from .ansi import clip_ansi_line
from .file_tree_model import FileTree, VisibilityPolicy
from .log import configure_logging
from .preview import PreviewPane
from .runtime import run_explorer
from .runtime.config import load_root_path, load_style_name
from .runtime.render import format_tree_row, preview_lines
from .syntax import DEFAULT_STYLE
from .ui_theme import available_theme_names, resolve_theme
from .viewers import VlcPlaybackBackend, build_default_registry

RENDER_LOAD_TIMEOUT_SECONDS = 10.0


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _default_render_width() -> int:
    """Resolve default render width from current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def _join_rows(rows: list[str], max_cols: int) -> str:
    out: list[str] = []
    for row in rows:
        clipped = clip_ansi_line(row, max_cols)
        out.append(clipped)
        if "\033" in clipped:
            out.append("\033[0m")
        out.append("\n")
    return "".join(out)


def render_path(path: Path, *, style: str, no_color: bool, max_cols: int, show_hidden: bool = False) -> str:
    """Render a directory's first level or a file's preview as plain rows."""
    theme = resolve_theme(None, no_color=no_color)
    if path.is_dir():
        tree = FileTree(path, VisibilityPolicy(show_hidden=show_hidden))
        return _join_rows([format_tree_row(row, theme) for row in tree.visible_rows()], max_cols)

    backend = VlcPlaybackBackend()
    registry = build_default_registry(
        style=style,
        colorize=not no_color,
        playback_backend=backend,
        video_autoplay=False,
    )
    pane = PreviewPane(registry)
    try:
        pane.render_preview(path)
        pane.wait_for_load(RENDER_LOAD_TIMEOUT_SECONDS)
        rows = preview_lines(pane.view, theme)
    finally:
        pane.close()
        backend.close()
    return _join_rows(rows, max_cols)


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch lazyexplorer on a directory.

    ``default_path`` is primarily for tests; when omitted the configured
    root is used, then the user's home directory.
    """
    parser = argparse.ArgumentParser(
        description="Browse a directory tree with text, image, audio, and video previews."
    )
    parser.add_argument("path", nargs="?", default=None, help="Root directory. Defaults to your home directory.")
    parser.add_argument("--style", default=None, help=f"Pygments style for text previews (default: {DEFAULT_STYLE}).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--show-hidden", action="store_true", help="Start with hidden entries visible.")
    parser.add_argument("--render", metavar="PATH", help="Print the tree of a directory or the preview of a file and exit.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for --render output (default: terminal width).",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR).")
    parser.add_argument("--log-file", default=None, help="Write logs to this file instead of the per-user log directory.")
    args = parser.parse_args()

    configure_logging(args.log_level, Path(args.log_file) if args.log_file else None)
    style = args.style or load_style_name() or DEFAULT_STYLE

    if args.render is not None:
        if args.path is not None:
            raise SystemExit("Cannot combine positional path with --render.")
        render_target = Path(args.render)
        if not render_target.exists():
            raise SystemExit(f"Path not found: {render_target}")
        max_cols = args.max_cols if args.max_cols is not None else _default_render_width()
        sys.stdout.write(
            render_path(
                render_target,
                style=style,
                no_color=args.no_color,
                max_cols=max_cols,
                show_hidden=args.show_hidden,
            )
        )
        return

    if args.path is not None:
        root = Path(args.path)
    elif default_path is not None:
        root = default_path
    else:
        root = load_root_path() or Path.home()
    root = root.expanduser()
    if not root.exists():
        raise SystemExit(f"Path not found: {root}")
    if not root.is_dir():
        raise SystemExit(f"Not a directory: {root}")

    run_explorer(
        root.resolve(),
        style=style,
        theme_name=args.theme,
        no_color=args.no_color,
        show_hidden=args.show_hidden,
    )


if __name__ == "__main__":
    main()
