"""Core data types: font entries and text helpers."""

from fontlet.core.font import DisplayItem, FontEntry
from fontlet.core.text import line_count, truncate_lines

__all__ = ["FontEntry", "DisplayItem", "truncate_lines", "line_count"]
