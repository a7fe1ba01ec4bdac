"""Single-line text entry with a cursor."""

from __future__ import annotations

from fontlet.cli.core.ansi_text import truncate
from fontlet.cli.core.input import Key, KeyEvent
from fontlet.cli.widgets.base import BaseWidget, Rect
from fontlet.config import Theme


class TextFieldWidget(BaseWidget):
    """
    Editable single-line input.

    Keyboard shortcuts:
        ←/→         Move cursor
        Home/End    Jump to start/end
        Backspace   Delete before cursor
        Delete      Delete under cursor
        Ctrl+U      Clear the line

    Enter and Escape are left to the owner.
    """

    def __init__(
        self,
        placeholder: str = "",
        prompt: str = "> ",
        char_limit: int = 256,
        theme: Theme | None = None,
    ) -> None:
        super().__init__(theme)
        self.placeholder = placeholder
        self.prompt = prompt
        self.char_limit = char_limit
        self._value = ""
        self._cursor = 0

    @property
    def value(self) -> str:
        return self._value

    @property
    def cursor(self) -> int:
        return self._cursor

    def set_value(self, value: str) -> None:
        """Replace the contents and put the cursor at the end."""
        self._value = value[:self.char_limit]
        self._cursor = len(self._value)

    def clear(self) -> None:
        self.set_value("")

    def handle_input(self, event: KeyEvent) -> bool:
        if event.key == Key.BACKSPACE:
            if self._cursor > 0:
                self._value = self._value[:self._cursor - 1] + self._value[self._cursor:]
                self._cursor -= 1
            return True
        if event.key == Key.DELETE:
            self._value = self._value[:self._cursor] + self._value[self._cursor + 1:]
            return True
        if event.key == Key.LEFT:
            self._cursor = max(0, self._cursor - 1)
            return True
        if event.key == Key.RIGHT:
            self._cursor = min(len(self._value), self._cursor + 1)
            return True
        if event.key == Key.HOME:
            self._cursor = 0
            return True
        if event.key == Key.END:
            self._cursor = len(self._value)
            return True
        if event.key == Key.CTRL_U:
            self.clear()
            return True

        if event.is_char and event.char.isprintable():
            if len(self._value) >= self.char_limit:
                return True
            self._value = self._value[:self._cursor] + event.char + self._value[self._cursor:]
            self._cursor += 1
            return True

        return False

    def render(self, bounds: Rect) -> list[str]:
        """Render the prompt, the visible slice of the text and the cursor."""
        theme = self.theme
        prompt = theme.paint(theme.prompt, self.prompt)
        room = max(1, bounds.width - len(self.prompt) - 1)

        if not self._value:
            cursor = theme.paint(theme.cursor, " ")
            hint = theme.paint(theme.placeholder, self.placeholder)
            return [truncate(f"{prompt}{cursor}{hint}", bounds.width)]

        # Scroll horizontally so the cursor stays in view
        start = max(0, self._cursor - room + 1)
        visible = self._value[start:start + room]
        cur = self._cursor - start

        before = visible[:cur]
        under = visible[cur] if cur < len(visible) else " "
        after = visible[cur + 1:]

        line = (
            f"{prompt}{theme.paint(theme.value, before)}"
            f"{theme.paint(theme.cursor, under)}{theme.paint(theme.value, after)}"
        )
        return [truncate(line, bounds.width)]
