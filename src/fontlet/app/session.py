"""The picker's single long-lived session state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from fontlet.cli.core.layout import ScreenLayout, calculate_layout
from fontlet.cli.widgets.output_view import OutputViewWidget
from fontlet.cli.widgets.select_list import SelectListWidget
from fontlet.cli.widgets.text_field import TextFieldWidget
from fontlet.config import AppConfig
from fontlet.core.font import FontEntry


class Screen(Enum):
    """Which screen the picker is showing."""
    INITIAL_LOADING = "initial_loading"
    INPUT_TEXT = "input_text"
    LOADING_PREVIEWS = "loading_previews"
    SELECT_FONT = "select_font"
    GENERATING_OUTPUT = "generating_output"
    OUTPUT_CHOICE = "output_choice"
    SAVE_FILENAME_INPUT = "save_filename_input"
    DISPLAY_OUTPUT = "display_output"
    STATUS_MESSAGE = "status_message"
    ERROR = "error"


class Slot(Enum):
    """Kinds of background work; at most one of each is outstanding."""
    DISCOVERY = "discovery"
    PREVIEWS = "previews"
    FULL_RENDER = "full_render"
    SAVE = "save"
    STATUS_TIMER = "status_timer"


# The screen a slot's result is meant for
SLOT_SCREENS: dict[Slot, Screen] = {
    Slot.DISCOVERY: Screen.INITIAL_LOADING,
    Slot.PREVIEWS: Screen.LOADING_PREVIEWS,
    Slot.FULL_RENDER: Screen.GENERATING_OUTPUT,
    Slot.SAVE: Screen.SAVE_FILENAME_INPUT,
    Slot.STATUS_TIMER: Screen.STATUS_MESSAGE,
}

LOADING_SCREENS = frozenset({
    Screen.INITIAL_LOADING,
    Screen.LOADING_PREVIEWS,
    Screen.GENERATING_OUTPUT,
})


@dataclass
class Session:
    """
    Everything the picker knows, mutated only by the Controller.

    Widgets hold the interactive sub-state (cursor, list selection and
    filter, scroll position); they are created from the config so the
    whole session shares one theme.
    """
    config: AppConfig
    screen: Screen = Screen.INITIAL_LOADING
    input_text: str = ""
    fonts: list[FontEntry] = field(default_factory=list)
    selected_font: Optional[FontEntry] = None
    full_output: str = ""
    output_width: int = 0
    terminal_width: int = 0
    terminal_height: int = 0
    error_message: str = ""
    status_message: str = ""
    status_is_error: bool = False
    pending: dict[Slot, int] = field(default_factory=dict)
    previews_for: Optional[tuple[str, int]] = None
    spinner_frame: int = 0
    should_quit: bool = False

    text_field: TextFieldWidget = field(init=False)
    filename_field: TextFieldWidget = field(init=False)
    font_list: SelectListWidget[FontEntry] = field(init=False)
    output_view: OutputViewWidget = field(init=False)

    def __post_init__(self) -> None:
        theme = self.config.theme
        self.text_field = TextFieldWidget(
            placeholder="Enter text to figletize...",
            char_limit=self.config.char_limit,
            theme=theme,
        )
        self.filename_field = TextFieldWidget(
            placeholder="Enter filename (e.g., output.txt)",
            char_limit=self.config.char_limit,
            theme=theme,
        )
        self.font_list = SelectListWidget(
            title="Available Fonts (with Previews)",
            detail=lambda font: font.preview_text,
            detail_lines=self.config.preview_lines,
            theme=theme,
        )
        self.output_view = OutputViewWidget(theme=theme)

    @property
    def layout(self) -> ScreenLayout:
        return calculate_layout(self.terminal_width, self.terminal_height)

    @property
    def size_known(self) -> bool:
        return self.terminal_width > 0 and self.terminal_height > 0
