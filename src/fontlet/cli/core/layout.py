"""Screen geometry for the picker, recomputed on every resize.

The screen is a document with a fixed margin (1 row, 2 columns) around a
header (title plus a blank line), a content pane and a footer (blank line
plus key help). The content pane is what lists and viewports size to, and
the wrap widths handed to figlet are derived from the terminal width.
"""

from dataclasses import dataclass

DOC_MARGIN_ROWS = 1
DOC_MARGIN_COLS = 2
HEADER_HEIGHT = 2
FOOTER_HEIGHT = 2
LIST_CHROME_HEIGHT = 2  # list title + item count line
MIN_PANE = 1


@dataclass(frozen=True)
class ScreenLayout:
    """Computed dimensions for the current terminal size."""
    term_width: int
    term_height: int
    content_width: int
    content_height: int

    @property
    def list_height(self) -> int:
        """Rows available to font list items below the list chrome."""
        return max(MIN_PANE, self.content_height - LIST_CHROME_HEIGHT)


def calculate_layout(term_width: int, term_height: int) -> ScreenLayout:
    """Split the terminal into margins, header, content pane and footer."""
    content_width = term_width - DOC_MARGIN_COLS * 2
    content_height = term_height - DOC_MARGIN_ROWS * 2 - HEADER_HEIGHT - FOOTER_HEIGHT
    return ScreenLayout(
        term_width=term_width,
        term_height=term_height,
        content_width=max(MIN_PANE, content_width),
        content_height=max(MIN_PANE, content_height),
    )


def preview_width(term_width: int, margin: int = 20, minimum: int = 20) -> int:
    """Wrap width for list previews: terminal width less the list chrome."""
    return max(minimum, term_width - margin)


def output_width(term_width: int, margin: int = 4, minimum: int = 20) -> int:
    """Wrap width for the full render: terminal width less the doc frame and ``margin``."""
    return max(minimum, term_width - DOC_MARGIN_COLS * 2 - margin)
