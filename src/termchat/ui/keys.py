"""Keyboard input decoding.

Hides how raw terminal bytes become key names:
- Printable characters are passed through as themselves
- Special keys are named ("esc", "enter", "backspace", "up", ...)
- Escape sequences are matched against readchar's key table
- Mouse reports, unknown sequences and malformed bytes are dropped
"""

import codecs
import os
import select
import sys
from abc import ABC, abstractmethod

import structlog
from readchar import key

from ..errors import TerminalError

logger = structlog.get_logger(__name__)

ESC = "esc"
ENTER = "enter"
BACKSPACE = "backspace"
TAB = "tab"
CTRL_C = "ctrl+c"

# Single control characters
SPECIAL_CHARS = {
    key.CR: ENTER,
    key.LF: ENTER,
    key.TAB: TAB,
    key.BACKSPACE: BACKSPACE,
    key.CTRL_H: BACKSPACE,
    key.CTRL_C: CTRL_C,
}

# Multi-character escape sequences
SPECIAL_SEQUENCES = {
    key.UP: "up",
    key.DOWN: "down",
    key.LEFT: "left",
    key.RIGHT: "right",
    key.HOME: "home",
    key.END: "end",
    key.INSERT: "insert",
    key.PAGE_UP: "page_up",
    key.PAGE_DOWN: "page_down",
    "\x1b[3~": "delete",
    # Application cursor mode
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
}


# Legacy mouse report: button, column and row follow as raw bytes
X10_MOUSE = "\x1b[M"
X10_MOUSE_PAYLOAD = 3


def _read_escape(text: str, start: int) -> tuple[str | None, int]:
    """Split one escape sequence off text[start:].

    Returns (sequence, next_index); sequence is None for a lone ESC.
    """
    nxt = start + 1
    if nxt >= len(text) or text[nxt] == key.ESC:
        return None, nxt

    if text[nxt] == "[":
        # CSI: parameter bytes up to a final byte in 0x40-0x7E
        end = nxt + 1
        while end < len(text) and not ("\x40" <= text[end] <= "\x7e"):
            end += 1
        end = min(end + 1, len(text))
        if text[start:end] == X10_MOUSE:
            end = min(end + X10_MOUSE_PAYLOAD, len(text))
        return text[start:end], end

    if text[nxt] == "O":
        end = min(start + 3, len(text))
        return text[start:end], end

    # Alt+<char>
    return text[start:nxt + 1], nxt + 1


def decode_keys(text: str) -> list[str]:
    """Turn decoded terminal input into key names."""
    keys: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == key.ESC:
            sequence, i = _read_escape(text, i)
            if sequence is None:
                keys.append(ESC)
            elif sequence in SPECIAL_SEQUENCES:
                keys.append(SPECIAL_SEQUENCES[sequence])
            else:
                logger.debug("unknown_sequence_ignored", sequence=repr(sequence))
            continue

        if ch in SPECIAL_CHARS:
            keys.append(SPECIAL_CHARS[ch])
        elif ch.isprintable():
            keys.append(ch)
        elif "\x01" <= ch <= "\x1a":
            keys.append(f"ctrl+{chr(ord(ch) + 96)}")
        i += 1
    return keys


class KeyDecoder:
    """Incremental bytes-to-keys decoder.

    Multi-byte UTF-8 characters split across reads are joined; invalid
    bytes are skipped.
    """

    def __init__(self) -> None:
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="ignore")

    def feed(self, data: bytes) -> list[str]:
        return decode_keys(self._utf8.decode(data))


class KeyReader(ABC):
    """Source of key presses polled by the key watcher thread."""

    @abstractmethod
    def read_keys(self, timeout: float) -> list[str]:
        """Wait up to timeout seconds and return the keys pressed.

        Returns an empty list when nothing arrived in time.
        """


class TerminalKeyReader(KeyReader):
    """Reads keys from a terminal file descriptor (POSIX)."""

    def __init__(self, fd: int | None = None, chunk_size: int = 1024):
        self._fd = sys.stdin.fileno() if fd is None else fd
        self._chunk_size = chunk_size
        self._decoder = KeyDecoder()

    def read_keys(self, timeout: float) -> list[str]:
        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return []
        data = os.read(self._fd, self._chunk_size)
        if not data:
            raise TerminalError("input stream closed")
        return self._decoder.feed(data)
