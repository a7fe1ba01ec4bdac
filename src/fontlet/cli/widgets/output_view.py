"""Scrollable viewport for the full-size rendered output."""

from __future__ import annotations

from fontlet.cli.core.ansi_text import truncate
from fontlet.cli.core.input import Key, KeyEvent
from fontlet.cli.widgets.base import BaseWidget, Rect


class OutputViewWidget(BaseWidget):
    """Displays rendered text with vertical scrolling."""

    def __init__(self, theme=None) -> None:
        super().__init__(theme)
        self._lines: list[str] = []
        self._scroll_y = 0
        self._visible_height = 20

    def set_content(self, text: str) -> None:
        """Show ``text`` from the top."""
        self._lines = text.rstrip("\n").split("\n") if text else []
        self._scroll_y = 0

    def clear(self) -> None:
        self._lines = []
        self._scroll_y = 0

    def set_viewport(self, height: int) -> None:
        """Fit to ``height`` rows, keeping the scroll position valid."""
        self._visible_height = max(1, height)
        self._scroll_y = min(self._scroll_y, self.max_scroll)

    @property
    def max_scroll(self) -> int:
        return max(0, len(self._lines) - self._visible_height)

    @property
    def scroll_y(self) -> int:
        return self._scroll_y

    @property
    def total_lines(self) -> int:
        return len(self._lines)

    def handle_input(self, event: KeyEvent) -> bool:
        if event.key == Key.UP or event.char == 'k':
            self._scroll_y = max(0, self._scroll_y - 1)
        elif event.key == Key.DOWN or event.char == 'j':
            self._scroll_y = min(self.max_scroll, self._scroll_y + 1)
        elif event.key == Key.PAGE_UP:
            self._scroll_y = max(0, self._scroll_y - self._visible_height)
        elif event.key == Key.PAGE_DOWN or event.char == ' ':
            self._scroll_y = min(self.max_scroll, self._scroll_y + self._visible_height)
        elif event.key == Key.HOME or event.char == 'g':
            self._scroll_y = 0
        elif event.key == Key.END or event.char == 'G':
            self._scroll_y = self.max_scroll
        else:
            return False
        return True

    def render(self, bounds: Rect) -> list[str]:
        """Render the visible slice, clipped to bounds."""
        theme = self.theme
        window = self._lines[self._scroll_y:self._scroll_y + bounds.height]
        lines = [truncate(theme.paint(theme.output, line), bounds.width) for line in window]
        return self.pad_lines(lines, bounds.height)

    @property
    def scroll_percent(self) -> float:
        """Get scroll position as percentage (0-100)."""
        if self.max_scroll <= 0:
            return 0.0
        return (self._scroll_y / self.max_scroll) * 100
