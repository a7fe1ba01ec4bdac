"""Low-level terminal operations for the picker."""

from __future__ import annotations

import os
import sys
import termios
import tty
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Sequence


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions."""
    rows: int
    cols: int


class Terminal:
    """Terminal I/O for a full-screen, raw-mode application."""

    @staticmethod
    def size() -> TerminalSize:
        """Get current terminal dimensions."""
        try:
            size = os.get_terminal_size(sys.stdout.fileno())
            return TerminalSize(size.lines, size.columns)
        except (OSError, ValueError):
            return TerminalSize(24, 80)

    @staticmethod
    def clear() -> None:
        """Clear screen and move cursor to home."""
        sys.stdout.write('\x1b[2J\x1b[H')
        sys.stdout.flush()

    @staticmethod
    def draw(lines: Sequence[str]) -> None:
        """
        Paint a full frame from the top-left corner.

        Each line clears to end-of-line and the rest of the screen is
        cleared afterwards, so nothing from the previous frame survives.
        """
        body = '\x1b[K\r\n'.join(lines)
        sys.stdout.write(f'\x1b[H{body}\x1b[K\x1b[J')
        sys.stdout.flush()

    @staticmethod
    def hide_cursor() -> None:
        sys.stdout.write('\x1b[?25l')
        sys.stdout.flush()

    @staticmethod
    def show_cursor() -> None:
        sys.stdout.write('\x1b[?25h')
        sys.stdout.flush()

    @staticmethod
    def reset() -> None:
        """Reset all terminal attributes."""
        sys.stdout.write('\x1b[0m')
        sys.stdout.flush()

    @staticmethod
    @contextmanager
    def raw_mode() -> Iterator[None]:
        """
        Put stdin into raw mode for the duration of the block.

        Raises ``termios.error`` if stdin is not a terminal.
        """
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    @staticmethod
    @contextmanager
    def alternate_screen() -> Iterator[None]:
        """Use alternate screen buffer (preserves scrollback)."""
        sys.stdout.write('\x1b[?1049h')
        sys.stdout.flush()
        try:
            yield
        finally:
            sys.stdout.write('\x1b[?1049l')
            sys.stdout.flush()

    @staticmethod
    @contextmanager
    def managed_mode() -> Iterator[None]:
        """Full TUI mode: raw input, alternate screen, hidden cursor."""
        with Terminal.raw_mode():
            with Terminal.alternate_screen():
                Terminal.hide_cursor()
                try:
                    yield
                finally:
                    Terminal.show_cursor()
                    Terminal.reset()
