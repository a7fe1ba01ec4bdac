"""File I/O for rendered output."""

from fontlet.io.writer import save_text

__all__ = ["save_text"]
