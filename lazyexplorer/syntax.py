"""Text loading, sanitization, and syntax highlighting for text previews.

Neutralizes terminal control bytes so previewed files cannot move the cursor
or ring the bell, then colorizes with Pygments.
"""

from __future__ import annotations

import re
from pathlib import Path

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "gruvbox-dark"
FALLBACK_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, Terminal256Formatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def normalize_style(style: str) -> str:
    """Return ``style`` when Pygments knows it, otherwise the fallback style."""
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return FALLBACK_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return FALLBACK_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = Terminal256Formatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def colorize_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    """Highlight ``source`` with a lexer picked from the file name."""
    formatter = _formatter_for_style(normalize_style(style))
    try:
        lexer = get_lexer_for_filename(path.name, source)
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(source, lexer, formatter)


__all__ = [
    "DEFAULT_STYLE",
    "colorize_source",
    "normalize_style",
    "read_text",
    "sanitize_terminal_text",
]
