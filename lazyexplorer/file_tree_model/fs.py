"""Filesystem listing, hidden-entry detection, and tree ordering."""

from __future__ import annotations

import os
import stat
from collections.abc import Iterable
from pathlib import Path

from ..errors import ListingError
from .types import Entry


def is_hidden_entry(name: str, dir_entry: os.DirEntry | None = None) -> bool:
    """Return whether an entry counts as hidden.

    Dot-prefixed names are hidden everywhere; on Windows the hidden file
    attribute is honored as well.
    """
    if name.startswith("."):
        return True
    if os.name != "nt" or dir_entry is None:
        return False
    try:
        attributes = getattr(dir_entry.stat(follow_symlinks=False), "st_file_attributes", 0)
    except OSError:
        return False
    return bool(attributes & stat.FILE_ATTRIBUTE_HIDDEN)


def entry_sort_key(entry: Entry) -> tuple[int, str, str]:
    """Directories first, then case-insensitive name, then raw name for ties."""
    return (0 if entry.is_dir else 1, entry.name.casefold(), entry.name)


def list_directory_entries(directory: Path) -> list[Entry]:
    """Return unfiltered, unsorted entries of ``directory``.

    Raises ``ListingError`` when the directory cannot be scanned. Entries whose
    type cannot be determined are reported as files.
    """
    entries: list[Entry] = []
    try:
        with os.scandir(directory) as scanned:
            for child in scanned:
                name = child.name
                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False
                entries.append(
                    Entry(
                        path=Path(child.path),
                        name=name,
                        is_dir=is_dir,
                        is_hidden=is_hidden_entry(name, child),
                    )
                )
    except OSError as exc:
        raise ListingError(directory, exc) from exc
    return entries


def visible_sorted_entries(entries: Iterable[Entry], show_hidden: bool) -> list[Entry]:
    """Drop hidden entries unless ``show_hidden`` and apply tree ordering."""
    visible = [entry for entry in entries if show_hidden or not entry.is_hidden]
    visible.sort(key=entry_sort_key)
    return visible


__all__ = [
    "entry_sort_key",
    "is_hidden_entry",
    "list_directory_entries",
    "visible_sorted_entries",
]
