"""Locate the figlet font directory and the font files inside it."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Sequence

from fontlet.core.constants import COMMON_FONT_DIRS, FONT_SUFFIX
from fontlet.core.font import FontEntry
from fontlet.errors import FontDiscoveryError
from fontlet.figlet.runner import FigletTool
from fontlet.utils.logging import get_logger

logger = get_logger(__name__)


def find_font_directory(
    tool: FigletTool,
    candidates: Sequence[str] = COMMON_FONT_DIRS,
) -> Path:
    """
    Work out where figlet keeps its fonts.

    figlet's own answer (``-I 2``) wins, preferring its ``fonts``
    subdirectory; otherwise the first existing conventional location.
    """
    info = tool.info_directory()
    if info:
        reported = Path(info)
        if (reported / "fonts").is_dir():
            return reported / "fonts"
        if reported.is_dir():
            return reported
        logger.info("figlet reported %s, which is not a directory", reported)

    for candidate in candidates:
        path = Path(candidate)
        if path.is_dir():
            return path

    raise FontDiscoveryError("could not find figlet font directory")


def scan_fonts(directory: Path, suffix: str = FONT_SUFFIX) -> list[FontEntry]:
    """
    Recursively collect font files under ``directory``.

    The suffix match is case-insensitive; the font name is the filename
    with only that suffix removed. Results are sorted by name.
    """
    def _raise(error: OSError) -> None:
        raise FontDiscoveryError(f"error walking font directory {directory}: {error}") from error

    suffix = suffix.lower()
    fonts: list[FontEntry] = []

    for root, _dirs, files in os.walk(directory, onerror=_raise):
        for filename in files:
            if filename.lower().endswith(suffix):
                name = filename[:-len(suffix)]
                fonts.append(FontEntry(name=name, path=str(Path(root) / filename)))

    if not fonts:
        raise FontDiscoveryError(f"no {suffix} font files found in {directory} or subdirectories")

    fonts.sort(key=lambda f: (f.name, f.path))
    return fonts


def discover_fonts(
    tool: FigletTool,
    font_dir: Optional[Path] = None,
    suffix: str = FONT_SUFFIX,
    candidates: Sequence[str] = COMMON_FONT_DIRS,
) -> list[FontEntry]:
    """Find every installed font, using ``font_dir`` instead of a lookup when given."""
    if font_dir is not None:
        if not font_dir.is_dir():
            raise FontDiscoveryError(f"font directory {font_dir} does not exist")
        directory = font_dir
    else:
        directory = find_font_directory(tool, candidates)

    fonts = scan_fonts(directory, suffix)
    logger.info("Discovered %d fonts in %s", len(fonts), directory)
    return fonts
