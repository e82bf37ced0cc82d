"""Key decoding for raw-mode stdin.

Bytes are turned into key tokens: printable characters stand for
themselves, everything else gets an upper-case name (``UP``, ``PAGE_DOWN``,
``CTRL_H``, ``ESC``...). Escape sequences that do not complete within a short
window are reported as a lone ``ESC``.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25

_CONTROL_KEYS = {
    b"\x08": "CTRL_H",
    b"\x7f": "BACKSPACE",
    b"\t": "TAB",
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\x03": "CTRL_C",
}

# Final byte of ``ESC [ x`` / ``ESC O x``.
_CSI_FINAL_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

# Parameter of ``ESC [ n ~``.
_CSI_TILDE_KEYS = {
    b"1": "HOME",
    b"4": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
}


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


class KeyReader:
    """Decodes keys from one file descriptor, keeping look-ahead bytes."""

    def __init__(self) -> None:
        self._pushback: list[bytes] = []

    def _next_byte(self, fd: int, timeout_ms: int | None) -> bytes | None:
        if self._pushback:
            return self._pushback.pop(0)
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None
        data = os.read(fd, 1)
        return data or None

    def _escape_sequence(self, fd: int) -> str:
        introducer = self._next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if introducer is None:
            return "ESC"
        if introducer not in (b"[", b"O"):
            self._pushback.append(introducer)
            return "ESC"
        final = self._next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "ESC"
        if final in _CSI_FINAL_KEYS:
            return _CSI_FINAL_KEYS[final]
        if final in _CSI_TILDE_KEYS and self._next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS) == b"~":
            return _CSI_TILDE_KEYS[final]
        return "ESC"

    def read(self, fd: int, timeout_ms: int | None = None) -> str:
        first = self._next_byte(fd, timeout_ms)
        if first is None:
            return ""
        if first in _CONTROL_KEYS:
            return _CONTROL_KEYS[first]
        if first == b"\x1b":
            return self._escape_sequence(fd)
        data = first
        for _ in range(_utf8_length(first[0]) - 1):
            more = self._next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
            if more is None:
                break
            data += more
        return data.decode("utf-8", errors="replace")


_READER = KeyReader()


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return the next key token, or ``""`` when ``timeout_ms`` elapses."""
    return _READER.read(fd, timeout_ms)


__all__ = ["KeyReader", "read_key"]
