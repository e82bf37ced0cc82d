"""Persistent JSON config helpers.

Stores the tree-pane width, UI theme, highlight style, default root, and
media autoplay preferences. Hidden-file visibility is never persisted.
Missing or malformed config falls back to defaults; write failures are ignored.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "lazyexplorer"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_LEFT_PANE_PERCENT = 30.0


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON; write failures are ignored."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError):
        pass


def load_left_pane_percent() -> float:
    """Tree-pane width as a percentage in the open interval (0, 100)."""
    value = load_config().get("left_pane_percent")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_LEFT_PANE_PERCENT
    if value <= 0 or value >= 100:
        return DEFAULT_LEFT_PANE_PERCENT
    return float(value)


def save_left_pane_percent(total_width: int, left_width: int) -> None:
    """Store the tree-pane width as a percentage clamped to ``[1, 99]``."""
    if total_width <= 0:
        return
    percent = max(1.0, min(99.0, (left_width / total_width) * 100.0))
    config = load_config()
    config["left_pane_percent"] = round(percent, 2)
    save_config(config)


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name() -> str | None:
    return _load_string("theme")


def save_theme_name(theme_name: str) -> None:
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def load_style_name() -> str | None:
    """Pygments style for text previews, ``None`` when unset."""
    return _load_string("style")


def load_root_path() -> Path | None:
    """Configured default root, ``None`` when unset or not a directory."""
    raw = _load_string("root")
    if raw is None:
        return None
    path = Path(raw).expanduser()
    return path if path.is_dir() else None


def _load_bool(key: str, default: bool) -> bool:
    value = load_config().get(key)
    return value if isinstance(value, bool) else default


def load_video_autoplay() -> bool:
    return _load_bool("video_autoplay", True)


def load_audio_autoplay() -> bool:
    return _load_bool("audio_autoplay", False)


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_LEFT_PANE_PERCENT",
    "load_audio_autoplay",
    "load_config",
    "load_left_pane_percent",
    "load_root_path",
    "load_style_name",
    "load_theme_name",
    "load_video_autoplay",
    "save_config",
    "save_left_pane_percent",
    "save_theme_name",
]
