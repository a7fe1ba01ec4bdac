"""Measure, clip and pad strings that carry ANSI SGR codes."""

from __future__ import annotations

import re

_ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;?]*[A-Za-z~]')


def strip_ansi(s: str) -> str:
    """Remove escape sequences, leaving only visible text."""
    return _ANSI_ESCAPE.sub('', s)


def visible_len(s: str) -> int:
    """Get visible length of string (excluding ANSI escape codes)."""
    return len(strip_ansi(s))


def truncate(s: str, max_width: int, reset: bool = True) -> str:
    """
    Clip an ANSI-styled string to ``max_width`` visible columns.

    Escape sequences are kept whole and never counted. When anything was
    cut and ``reset`` is set, a reset is appended so colour cannot bleed
    into the next cell.
    """
    if max_width <= 0:
        return ""

    out: list[str] = []
    width = 0
    pos = 0

    while pos < len(s):
        match = _ANSI_ESCAPE.match(s, pos)
        if match:
            out.append(match.group())
            pos = match.end()
            continue
        if width >= max_width:
            break
        out.append(s[pos])
        width += 1
        pos += 1

    clipped = ''.join(out)
    if reset and pos < len(s):
        clipped += '\x1b[0m'
    return clipped
