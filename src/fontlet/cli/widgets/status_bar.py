"""Footer line listing the keys that do something on the current screen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from fontlet.cli.core.ansi_text import truncate, visible_len
from fontlet.cli.widgets.base import BaseWidget, Rect


@dataclass(frozen=True)
class Shortcut:
    """A keyboard shortcut to display."""
    key: str
    label: str


class StatusBarWidget(BaseWidget):
    """Key help, e.g. ``enter: confirm text • ctrl+c: quit``."""

    SEPARATOR = " • "

    def __init__(self, theme=None) -> None:
        super().__init__(theme)
        self._left_text = ""
        self._shortcuts: list[Shortcut] = []

    def set_left(self, text: str) -> None:
        """Set text shown before the shortcuts (e.g. a spinner)."""
        self._left_text = text

    def set_shortcuts(self, shortcuts: Sequence[Shortcut]) -> None:
        self._shortcuts = list(shortcuts)

    def render(self, bounds: Rect) -> list[str]:
        """Render on one line, dropping shortcuts from the right until it fits."""
        theme = self.theme
        parts = [f"{sc.key}: {sc.label}" for sc in self._shortcuts]
        left = f"{self._left_text} " if self._left_text else ""

        while parts:
            text = left + self.SEPARATOR.join(parts)
            if visible_len(text) <= bounds.width:
                break
            parts.pop()

        help_text = self.SEPARATOR.join(parts)
        line = left + theme.paint(theme.help, help_text) if help_text else left.rstrip()
        return [truncate(line, bounds.width)]
