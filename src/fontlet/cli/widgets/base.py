"""Widget base class and shared geometry."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from fontlet.cli.core.input import KeyEvent
from fontlet.config import Theme


@dataclass(frozen=True)
class Rect:
    """Rectangle bounds for widget positioning."""
    x: int
    y: int
    width: int
    height: int


class BaseWidget(ABC):
    """Base class with common widget functionality."""

    def __init__(self, theme: Theme | None = None) -> None:
        self.theme = theme or Theme()

    @abstractmethod
    def render(self, bounds: Rect) -> list[str]:
        """Subclasses must implement rendering."""
        pass

    def handle_input(self, event: KeyEvent) -> bool:
        """Default: don't consume events."""
        return False

    @staticmethod
    def pad_lines(lines: list[str], height: int) -> list[str]:
        """Pad or cut ``lines`` to exactly ``height`` rows."""
        lines = lines[:height]
        while len(lines) < height:
            lines.append("")
        return lines
