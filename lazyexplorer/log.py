"""Logging setup for the interactive session.

The terminal runs in raw mode on the alternate screen, so log records go to a
file instead of stderr. Modules log through ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "lazyexplorer"
LOG_FILENAME = "lazyexplorer.log"
LOG_LEVEL_ENV = "LAZYEXPLORER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DEFAULT_LOG_LEVEL = "WARNING"


def default_log_file() -> Path:
    """Return the per-user log file location."""
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def resolve_log_level(requested: str | None) -> int:
    """Map a level name (argument, then environment) to a ``logging`` level."""
    name = (requested or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: str | None = None, log_file: Path | None = None) -> logging.Handler:
    """Attach one handler to the package logger and return it.

    Falls back to a ``NullHandler`` when the log directory is not writable.
    Calling again replaces the previously installed handler.
    """
    package_logger = logging.getLogger(APP_NAME)
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
        existing.close()

    target = log_file if log_file is not None else default_log_file()
    handler: logging.Handler
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    package_logger.addHandler(handler)
    package_logger.setLevel(resolve_log_level(level))
    package_logger.propagate = False
    return handler


__all__ = [
    "APP_NAME",
    "configure_logging",
    "default_log_file",
    "resolve_log_level",
]
