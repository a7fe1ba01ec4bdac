"""Plain-text helpers for figlet output."""

from __future__ import annotations


def truncate_lines(text: str, max_lines: int) -> str:
    """
    Keep at most ``max_lines`` lines of ``text``.

    Trailing blank (empty or whitespace-only) lines are dropped from the
    kept prefix after truncation, so figlet's padding rows never count
    against the budget twice.

    Args:
        text: Raw rendered text
        max_lines: Maximum number of lines to keep

    Returns:
        The truncated text joined with ``\\n``
    """
    if max_lines <= 0:
        return ""

    lines = text.split("\n")[:max_lines]

    while lines and not lines[-1].strip():
        lines.pop()

    return "\n".join(lines)


def line_count(text: str) -> int:
    """Number of display lines in ``text`` (an empty string has none)."""
    if not text:
        return 0
    return len(text.split("\n"))
