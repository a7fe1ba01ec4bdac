"""Immutable application configuration, built once at startup."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from fontlet.core.constants import (
    CHAR_LIMIT,
    COMMON_FONT_DIRS,
    FONT_SUFFIX,
    MIN_RENDER_WIDTH,
    OUTPUT_MARGIN,
    PREVIEW_LINES,
    PREVIEW_MARGIN,
    RENDER_TIMEOUT,
    STATUS_TIMEOUT,
)


@dataclass(frozen=True)
class Theme:
    """SGR prefixes for each styled element. Empty strings mean unstyled."""
    title: str = "\x1b[1;38;5;62m"
    subtitle: str = "\x1b[38;5;242m"
    help: str = "\x1b[38;5;241m"
    error: str = "\x1b[1;38;5;196m"
    success: str = "\x1b[1;38;5;76m"
    output: str = "\x1b[38;5;69m"
    selected: str = "\x1b[38;5;208m"
    preview: str = "\x1b[2m"
    font_name: str = "\x1b[1m"
    list_title: str = "\x1b[1;38;5;229m"
    status: str = "\x1b[38;5;214m"
    prompt: str = "\x1b[1;37m"
    value: str = "\x1b[97m"
    placeholder: str = "\x1b[90m"
    cursor: str = "\x1b[7m"
    spinner: str = "\x1b[38;5;205m"
    reset: str = "\x1b[0m"

    @classmethod
    def plain(cls) -> Theme:
        """A theme with every style disabled (``--no-color`` / ``NO_COLOR``)."""
        return cls(**{name: "" for name in cls.__dataclass_fields__})

    def paint(self, style: str, text: str) -> str:
        """Wrap ``text`` in ``style`` and a reset, or return it untouched when unstyled."""
        if not style:
            return text
        return f"{style}{text}{self.reset}"


@dataclass(frozen=True)
class AppConfig:
    """Everything the picker needs to know that does not change while it runs."""
    figlet_path: str = "figlet"
    font_dir: Optional[Path] = None
    font_suffix: str = FONT_SUFFIX
    search_dirs: tuple[str, ...] = COMMON_FONT_DIRS
    initial_text: str = ""
    preview_lines: int = PREVIEW_LINES
    preview_margin: int = PREVIEW_MARGIN
    min_render_width: int = MIN_RENDER_WIDTH
    output_margin: int = OUTPUT_MARGIN
    status_timeout: float = STATUS_TIMEOUT
    render_timeout: float = RENDER_TIMEOUT
    char_limit: int = CHAR_LIMIT
    theme: Theme = field(default_factory=Theme)

    @classmethod
    def from_options(
        cls,
        figlet_path: str,
        font_dir: Optional[Path] = None,
        initial_text: str = "",
        no_color: bool = False,
    ) -> AppConfig:
        """Build the config from CLI options and the environment."""
        use_plain = no_color or bool(os.environ.get("NO_COLOR"))
        return cls(
            figlet_path=figlet_path,
            font_dir=font_dir,
            initial_text=initial_text,
            theme=Theme.plain() if use_plain else Theme(),
        )
