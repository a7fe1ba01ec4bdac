"""
fontlet: pick a figlet font by seeing your own text in all of them

Type some text, scroll through a preview of it in every installed figlet
font, pick one, then view the full-size result or save it to a file.

Quick Start:
    $ fontlet                      # interactive picker
    $ fontlet --text "Hello"       # picker with the text pre-filled
    $ fontlet fonts                # list installed fonts
    $ fontlet render "Hi" -f slant # one-shot render, no TUI

Library use:
    >>> from fontlet import FigletTool, discover_fonts
    >>> tool = FigletTool.locate()
    >>> fonts = discover_fonts(tool)
    >>> print(tool.render(fonts[0].path, "Hello", width=80))
"""

__version__ = "0.1.0"

from fontlet.config import AppConfig, Theme
from fontlet.core.font import DisplayItem, FontEntry
from fontlet.core.text import truncate_lines
from fontlet.errors import (
    FontDiscoveryError,
    FontletError,
    RenderError,
    SaveError,
    ToolNotFoundError,
)
from fontlet.figlet.discovery import discover_fonts
from fontlet.figlet.runner import FigletTool
from fontlet.io.writer import save_text

__all__ = [
    # Version
    "__version__",
    # Core types
    "FontEntry",
    "DisplayItem",
    "truncate_lines",
    # Configuration
    "AppConfig",
    "Theme",
    # figlet
    "FigletTool",
    "discover_fonts",
    # I/O
    "save_text",
    # Errors
    "FontletError",
    "ToolNotFoundError",
    "FontDiscoveryError",
    "RenderError",
    "SaveError",
]
