"""Thin wrappers around the external figlet executable."""

from fontlet.figlet.discovery import discover_fonts, find_font_directory, scan_fonts
from fontlet.figlet.runner import FigletTool

__all__ = ["FigletTool", "discover_fonts", "find_font_directory", "scan_fonts"]
