"""Keyboard input: raw bytes from the terminal turned into key events."""

from __future__ import annotations

import os
import select
import sys
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class Key(Enum):
    """Named key constants."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    ESCAPE = auto()
    TAB = auto()
    BACKSPACE = auto()
    DELETE = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    CTRL_C = auto()
    CTRL_U = auto()


@dataclass(frozen=True)
class KeyEvent:
    """A single key press."""
    key: Optional[Key] = None  # Named key if recognized
    char: Optional[str] = None  # Character if printable
    raw: str = ""

    @property
    def is_char(self) -> bool:
        """Check if this is a printable character."""
        return self.char is not None and self.key is None

    @classmethod
    def of(cls, key_or_char: Key | str) -> KeyEvent:
        """Build an event for a named key or a single character."""
        if isinstance(key_or_char, Key):
            return cls(key=key_or_char)
        return cls(char=key_or_char, raw=key_or_char)


# Escape sequences without the leading ESC
SEQUENCES: dict[str, Key] = {
    '[A': Key.UP,
    '[B': Key.DOWN,
    '[C': Key.RIGHT,
    '[D': Key.LEFT,
    'OA': Key.UP,
    'OB': Key.DOWN,
    'OC': Key.RIGHT,
    'OD': Key.LEFT,
    '[H': Key.HOME,
    '[F': Key.END,
    'OH': Key.HOME,
    'OF': Key.END,
    '[1~': Key.HOME,
    '[4~': Key.END,
    '[7~': Key.HOME,
    '[8~': Key.END,
    '[3~': Key.DELETE,
    '[5~': Key.PAGE_UP,
    '[6~': Key.PAGE_DOWN,
}

SIMPLE_KEYS: dict[str, Key] = {
    '\r': Key.ENTER,
    '\n': Key.ENTER,
    '\t': Key.TAB,
    '\x7f': Key.BACKSPACE,
    '\x08': Key.BACKSPACE,
    '\x03': Key.CTRL_C,
    '\x15': Key.CTRL_U,
}


def parse_keys(buffer: str) -> list[KeyEvent]:
    """Split a chunk of raw terminal input into key events."""
    events: list[KeyEvent] = []
    i = 0

    while i < len(buffer):
        ch = buffer[i]

        if ch in SIMPLE_KEYS:
            events.append(KeyEvent(key=SIMPLE_KEYS[ch], raw=ch))
            i += 1
            continue

        if ch == '\x1b':
            event, consumed = _parse_escape(buffer[i:])
            events.append(event)
            i += consumed
            continue

        if ch.isprintable():
            events.append(KeyEvent(char=ch, raw=ch))
        # Unknown control characters are dropped
        i += 1

    return events


def _parse_escape(data: str) -> tuple[KeyEvent, int]:
    """Parse one escape sequence at the start of ``data``."""
    rest = data[1:]
    if not rest or rest[0] == '\x1b':
        return KeyEvent(key=Key.ESCAPE, raw='\x1b'), 1

    # A sequence ends at the first letter (after the introducer) or '~'
    end = 0
    for idx, ch in enumerate(rest):
        if ch == '\x1b':
            break
        end = idx + 1
        if idx > 0 and (ch.isalpha() or ch == '~'):
            break

    seq = rest[:end]
    if seq in SEQUENCES:
        return KeyEvent(key=SEQUENCES[seq], raw='\x1b' + seq), 1 + end

    if len(seq) == 1 and seq not in ('[', 'O'):
        # Alt+<char>: treat as escape followed by the char
        return KeyEvent(key=Key.ESCAPE, raw='\x1b'), 1

    return KeyEvent(raw='\x1b' + seq), 1 + end


class InputReader:
    """
    Non-blocking keyboard input reader.

    Uses os.read() to bypass Python's I/O buffering and gives a lone ESC a
    short grace period so split escape sequences are decoded whole.
    """

    ESCAPE_GRACE = 0.05

    def __init__(self, fd: Optional[int] = None) -> None:
        self._fd = sys.stdin.fileno() if fd is None else fd
        self._pending: list[KeyEvent] = []

    def read(self, timeout: float = 0.1) -> Optional[KeyEvent]:
        """Return the next key event, or None if nothing arrives within ``timeout``."""
        if self._pending:
            return self._pending.pop(0)

        if not self._has_input(timeout):
            return None

        data = self._read_available()
        if data == '\x1b':
            data += self._read_escape_tail()

        events = parse_keys(data)
        self._pending.extend(events)
        return self._pending.pop(0) if self._pending else None

    def _read_available(self) -> str:
        try:
            return os.read(self._fd, 1024).decode('utf-8', errors='replace')
        except (OSError, BlockingIOError):
            return ""

    def _read_escape_tail(self) -> str:
        deadline = time.monotonic() + self.ESCAPE_GRACE
        tail = ""
        while time.monotonic() < deadline:
            if self._has_input(max(0.0, deadline - time.monotonic())):
                tail += self._read_available()
                if tail and (tail[-1].isalpha() or tail[-1] == '~'):
                    break
        return tail

    def _has_input(self, timeout: float) -> bool:
        try:
            ready, _, _ = select.select([self._fd], [], [], timeout)
            return bool(ready)
        except (ValueError, OSError):
            return False
