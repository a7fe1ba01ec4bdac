"""Scrollable, filterable list of items with multi-line details."""

from __future__ import annotations

from typing import Callable, Generic, Optional, Sequence, TypeVar

from fontlet.cli.core.ansi_text import truncate
from fontlet.cli.core.input import Key, KeyEvent
from fontlet.cli.widgets.base import BaseWidget, Rect
from fontlet.config import Theme
from fontlet.core.font import DisplayItem

T = TypeVar("T", bound=DisplayItem)


class SelectListWidget(BaseWidget, Generic[T]):
    """
    Pick one item from a list, each shown as a label plus a block of detail lines.

    Items only need the DisplayItem capability; what goes under the label
    comes from the ``detail`` callback.

    Keyboard shortcuts:
        Navigation:
            ↑/k         Move selection up (wraps)
            ↓/j         Move selection down (wraps)
            PgUp/PgDn   Page up/down
            Home/g      Jump to first
            End/G       Jump to last

        Filtering:
            /           Start typing a filter
            Enter       Keep the filter and stop typing
            Esc         Clear the filter
    """

    def __init__(
        self,
        title: str = "",
        detail: Optional[Callable[[T], str]] = None,
        detail_lines: int = 0,
        theme: Theme | None = None,
    ) -> None:
        super().__init__(theme)
        self.title = title
        self.detail = detail
        self.detail_lines = detail_lines

        self._items: list[T] = []
        self._filter = ""
        self._filtering = False
        self._selected = 0
        self._scroll_offset = 0
        self._page_size = 1

    # ------------------------------------------------------------------
    # Contents
    # ------------------------------------------------------------------

    def set_items(self, items: Sequence[T]) -> None:
        """Replace the items, keeping the selection on the same key if it still exists."""
        previous = self.selected_item
        self._items = list(items)
        self._selected = 0
        self._scroll_offset = 0
        if previous is not None:
            self._select_key(previous.display_key())
        self._adjust_scroll()

    @property
    def items(self) -> list[T]:
        return list(self._items)

    @property
    def visible_items(self) -> list[T]:
        """Items that pass the current filter."""
        if not self._filter:
            return self._items
        needle = self._filter.lower()
        return [item for item in self._items if needle in item.filter_key().lower()]

    @property
    def selected_item(self) -> Optional[T]:
        visible = self.visible_items
        if visible and 0 <= self._selected < len(visible):
            return visible[self._selected]
        return None

    @property
    def selected_index(self) -> int:
        return self._selected

    @property
    def scroll_offset(self) -> int:
        return self._scroll_offset

    @property
    def filter_text(self) -> str:
        return self._filter

    @property
    def filtering(self) -> bool:
        """True while the user is typing a filter."""
        return self._filtering

    @property
    def item_height(self) -> int:
        """Rows per item: label, detail block, blank spacer."""
        return 1 + self.detail_lines + 1

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def set_viewport(self, height: int) -> None:
        """Fit the list to ``height`` rows of item space."""
        self._page_size = max(1, height // self.item_height)
        self._adjust_scroll()

    @property
    def page_size(self) -> int:
        """Whole items that fit in the viewport."""
        return self._page_size

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_input(self, event: KeyEvent) -> bool:
        if self._filtering:
            return self._handle_filter_input(event)

        if event.key == Key.UP or event.char == 'k':
            self._move_wrap(-1)
        elif event.key == Key.DOWN or event.char == 'j':
            self._move_wrap(1)
        elif event.key == Key.PAGE_UP:
            self._move(-self._page_size)
        elif event.key == Key.PAGE_DOWN:
            self._move(self._page_size)
        elif event.key == Key.HOME or event.char == 'g':
            self._move(-len(self._items))
        elif event.key == Key.END or event.char == 'G':
            self._move(len(self._items))
        elif event.char == '/':
            self._filtering = True
        elif event.key == Key.ESCAPE and self._filter:
            self._set_filter("")
        else:
            return False
        return True

    def _handle_filter_input(self, event: KeyEvent) -> bool:
        if event.key == Key.ESCAPE:
            self._filtering = False
            self._set_filter("")
        elif event.key == Key.ENTER:
            self._filtering = False
        elif event.key == Key.BACKSPACE:
            self._set_filter(self._filter[:-1])
        elif event.key == Key.UP:
            self._move_wrap(-1)
        elif event.key == Key.DOWN:
            self._move_wrap(1)
        elif event.is_char:
            self._set_filter(self._filter + event.char)
        return True

    def _set_filter(self, text: str) -> None:
        previous = self.selected_item
        self._filter = text
        self._selected = 0
        self._scroll_offset = 0
        if previous is not None:
            self._select_key(previous.display_key())
        self._adjust_scroll()

    def _select_key(self, key: str) -> bool:
        for i, item in enumerate(self.visible_items):
            if item.display_key() == key:
                self._selected = i
                return True
        return False

    def _move(self, delta: int) -> None:
        """Move selection by delta, clamping to bounds."""
        count = len(self.visible_items)
        if not count:
            return
        self._selected = max(0, min(count - 1, self._selected + delta))
        self._adjust_scroll()

    def _move_wrap(self, delta: int) -> None:
        """Move selection by delta, wrapping around at ends."""
        count = len(self.visible_items)
        if not count:
            return
        self._selected = (self._selected + delta) % count
        self._adjust_scroll()

    def _adjust_scroll(self) -> None:
        """Ensure the selected item is inside the viewport."""
        count = len(self.visible_items)
        if self._selected >= count:
            self._selected = max(0, count - 1)
        if self._selected < self._scroll_offset:
            self._scroll_offset = self._selected
        elif self._selected >= self._scroll_offset + self._page_size:
            self._scroll_offset = self._selected - self._page_size + 1
        self._scroll_offset = max(0, min(self._scroll_offset, max(0, count - self._page_size)))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, bounds: Rect) -> list[str]:
        """Render title, count/filter line and the items in the viewport."""
        theme = self.theme
        lines: list[str] = []
        visible = self.visible_items

        lines.append(truncate(theme.paint(theme.list_title, self.title), bounds.width))
        lines.append(truncate(self._render_status(len(visible)), bounds.width))

        rows_left = bounds.height - len(lines)
        fits = max(1, rows_left // self.item_height)
        end = min(len(visible), self._scroll_offset + fits)

        for i in range(self._scroll_offset, end):
            lines.extend(self._render_item(visible[i], i == self._selected, bounds.width))

        if not visible:
            lines.append(theme.paint(theme.subtitle, "  No items match the filter."))

        return self.pad_lines(lines, bounds.height)

    def _render_status(self, shown: int) -> str:
        theme = self.theme
        total = len(self._items)
        if self._filtering:
            text = f"Filter: {self._filter}_  ({shown}/{total})"
        elif self._filter:
            text = f"Filter: {self._filter}  ({shown}/{total}) • esc to clear"
        else:
            noun = "item" if total == 1 else "items"
            text = f"{total} {noun}"
        return theme.paint(theme.status, text)

    def _render_item(self, item: T, selected: bool, width: int) -> list[str]:
        theme = self.theme
        name = theme.paint(theme.font_name, item.display_key())
        if selected:
            label = theme.paint(theme.selected, "➤ ") + name
            detail_style = theme.selected
        else:
            label = "  " + name
            detail_style = theme.preview

        rows = [truncate(label, width)]

        detail = self.detail(item) if self.detail else ""
        detail_rows = detail.split("\n")[:self.detail_lines] if detail else []
        for row in detail_rows:
            rows.append(truncate("  " + theme.paint(detail_style, row), width))
        while len(rows) < 1 + self.detail_lines:
            rows.append("")

        rows.append("")
        return rows
