"""Core TUI infrastructure - terminal I/O, input handling, layout."""

from fontlet.cli.core.terminal import Terminal, TerminalSize
from fontlet.cli.core.input import InputReader, KeyEvent, Key, parse_keys
from fontlet.cli.core.layout import (
    ScreenLayout,
    calculate_layout,
    output_width,
    preview_width,
)

__all__ = [
    "Terminal",
    "TerminalSize",
    "InputReader",
    "KeyEvent",
    "Key",
    "parse_keys",
    "ScreenLayout",
    "calculate_layout",
    "output_width",
    "preview_width",
]
