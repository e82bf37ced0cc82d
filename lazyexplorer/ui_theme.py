"""Color palettes for the tree pane, preview pane, and status row.

A palette only affects explorer chrome. Text previews are colored by the
separate Pygments style.
"""

from __future__ import annotations

from dataclasses import dataclass

SELECTED = "\033[7m"
RESET = "\033[0m"


def _fg(r: int, g: int, b: int, *, bold: bool = False, dim: bool = False) -> str:
    prefix = "1;" if bold else "2;" if dim else ""
    return f"\033[{prefix}38;2;{r};{g};{b}m"


@dataclass(frozen=True)
class UITheme:
    """ANSI prefixes per screen role; ``reset`` closes any of them."""

    name: str
    divider: str
    tree_marker: str
    tree_dir: str
    tree_file: str
    preview_placeholder: str
    preview_error: str
    preview_controls: str
    reverse: str = SELECTED
    reset: str = RESET


GRUVBOX_THEME = UITheme(
    name="gruvbox",
    divider=_fg(80, 73, 69),
    tree_marker=_fg(146, 131, 116),
    tree_dir=_fg(250, 189, 47, bold=True),
    tree_file=_fg(131, 165, 152),
    preview_placeholder=_fg(168, 153, 132, dim=True),
    preview_error=_fg(251, 73, 52),
    preview_controls=_fg(184, 187, 38, bold=True),
)

DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    tree_marker="\033[36m",
    tree_dir="\033[1;34m",
    tree_file="\033[37m",
    preview_placeholder="\033[2m",
    preview_error="\033[31m",
    preview_controls="\033[1;32m",
)

# --no-color keeps reverse video for the selection and status row only.
PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    tree_marker="",
    tree_dir="",
    tree_file="",
    preview_placeholder="",
    preview_error="",
    preview_controls="",
    reset="",
)

THEME_CYCLE = (DEFAULT_THEME, GRUVBOX_THEME)
_BY_NAME = {theme.name: theme for theme in THEME_CYCLE}


def available_theme_names() -> tuple[str, ...]:
    """Names ``t`` cycles through, in cycle order."""
    return tuple(theme.name for theme in THEME_CYCLE)


def normalize_theme_name(name: str | None) -> str:
    """Known theme name for ``name``; anything unknown means gruvbox."""
    candidate = (name or "").strip().lower()
    return candidate if candidate in _BY_NAME else GRUVBOX_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    if no_color:
        return PLAIN_THEME
    return _BY_NAME[normalize_theme_name(name)]


__all__ = [
    "DEFAULT_THEME",
    "GRUVBOX_THEME",
    "PLAIN_THEME",
    "THEME_CYCLE",
    "UITheme",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
