"""Tests for the picker state machine, driven with synthetic events."""

import typing

import pytest

from fontlet.app.controller import OUTPUT_CHOICE_PROMPT, Controller
from fontlet.app.events import (
    DiscoveryFailed,
    Event,
    FileSaved,
    FontsDiscovered,
    KeyPressed,
    OutputRendered,
    PreviewsGenerated,
    RenderFailed,
    Resized,
    SaveFailed,
    StatusTimeout,
    TaskCrashed,
    Tick,
)
from fontlet.app.session import Screen, Session, Slot
from fontlet.app.tasks import (
    DiscoverFontsTask,
    GeneratePreviewsTask,
    RenderOutputTask,
    SaveFileTask,
    StatusTimerTask,
)
from fontlet.cli.core.input import Key, KeyEvent
from fontlet.config import AppConfig, Theme
from fontlet.core.font import FontEntry
from fontlet.figlet.runner import FigletTool

FONTS = tuple(
    FontEntry(name=name, path=f"/fonts/{name}.flf")
    for name in ("banner", "big", "slant", "standard")
)


def key(k: Key | str) -> KeyPressed:
    return KeyPressed(KeyEvent.of(k))


def type_text(controller: Controller, text: str) -> None:
    for ch in text:
        controller.handle(key(ch))


@pytest.fixture
def controller() -> Controller:
    config = AppConfig(initial_text="", status_timeout=0.0, theme=Theme.plain())
    ctl = Controller(Session(config=config), FigletTool(path="/usr/bin/figlet"))
    ctl.handle(Resized(width=100, height=40))
    return ctl


def discovered(controller: Controller) -> Controller:
    (task,) = controller.start()
    controller.handle(FontsDiscovered(task.task_id, FONTS))
    return controller


def previews(controller: Controller, text: str = "Hi") -> GeneratePreviewsTask:
    """Confirm ``text`` and return the preview task it dispatched."""
    controller.session.text_field.set_value(text)
    (task,) = controller.handle(key(Key.ENTER))
    return task


def at_select_font(controller: Controller, text: str = "Hi") -> Controller:
    discovered(controller)
    task = previews(controller, text)
    with_previews = tuple(f.with_preview(f"[{f.name}]") for f in FONTS)
    controller.handle(PreviewsGenerated(task.task_id, with_previews, task.text, task.width))
    return controller


def at_output_choice(controller: Controller) -> Controller:
    at_select_font(controller)
    (task,) = controller.handle(key(Key.ENTER))
    controller.handle(OutputRendered(task.task_id, "ART\n", task.width))
    return controller


class TestTables:
    """Every event type and every screen has a handler."""

    def test_event_table_covers_union(self, controller: Controller) -> None:
        members: set[type] = set()
        for arg in typing.get_args(Event):
            members.update(typing.get_args(arg) or (arg,))
        assert set(controller.event_handlers) == members

    def test_key_table_covers_screens(self, controller: Controller) -> None:
        assert set(controller.key_handlers) == set(Screen)

    @pytest.mark.parametrize("screen", list(Screen))
    def test_any_key_on_any_screen(self, controller: Controller, screen: Screen) -> None:
        controller.session.screen = screen
        for k in (Key.ENTER, Key.ESCAPE, Key.UP, "x"):
            controller.handle(key(k))


class TestStartup:
    """Discovery and its results."""

    def test_start_dispatches_discovery(self, controller: Controller) -> None:
        (task,) = controller.start()
        assert isinstance(task, DiscoverFontsTask)
        assert controller.session.screen == Screen.INITIAL_LOADING
        assert controller.session.pending == {Slot.DISCOVERY: task.task_id}

    def test_fonts_discovered(self, controller: Controller) -> None:
        discovered(controller)
        session = controller.session
        assert session.screen == Screen.INPUT_TEXT
        assert session.fonts == list(FONTS)
        assert session.pending == {}

    def test_initial_text_prefilled(self) -> None:
        config = AppConfig(initial_text="Hello", theme=Theme.plain())
        ctl = Controller(Session(config=config), FigletTool(path="figlet"))
        discovered(ctl)
        assert ctl.session.text_field.value == "Hello"

    def test_discovery_failure_is_fatal(self, controller: Controller) -> None:
        (task,) = controller.start()
        controller.handle(DiscoveryFailed(task.task_id, "could not find figlet font directory"))
        assert controller.session.screen == Screen.ERROR
        assert controller.session.error_message == "could not find figlet font directory"

    def test_keys_ignored_while_loading(self, controller: Controller) -> None:
        controller.start()
        assert controller.handle(key(Key.ENTER)) == []
        assert controller.session.screen == Screen.INITIAL_LOADING


class TestInputText:
    """The text entry screen."""

    def test_typing_edits_field(self, controller: Controller) -> None:
        discovered(controller)
        type_text(controller, "Hey")
        controller.handle(key(Key.BACKSPACE))
        assert controller.session.text_field.value == "He"

    def test_empty_text_is_not_confirmed(self, controller: Controller) -> None:
        discovered(controller)
        type_text(controller, "   ")
        assert controller.handle(key(Key.ENTER)) == []
        assert controller.session.screen == Screen.INPUT_TEXT

    def test_enter_dispatches_previews(self, controller: Controller) -> None:
        discovered(controller)
        task = previews(controller, "  Hi  ")
        assert isinstance(task, GeneratePreviewsTask)
        assert task.text == "Hi"
        assert task.width == 80
        assert task.fonts == FONTS
        assert task.max_lines == controller.session.config.preview_lines
        assert controller.session.screen == Screen.LOADING_PREVIEWS
        assert controller.session.input_text == "Hi"

    def test_previews_applied(self, controller: Controller) -> None:
        at_select_font(controller)
        session = controller.session
        assert session.screen == Screen.SELECT_FONT
        assert session.fonts[0].preview_text == "[banner]"
        assert session.font_list.selected_item.name == "banner"
        assert session.previews_for == ("Hi", 80)

    def test_narrow_terminal_uses_minimum_width(self, controller: Controller) -> None:
        controller.handle(Resized(width=30, height=40))
        discovered(controller)
        assert previews(controller).width == 20

    def test_escape_while_loading_returns_to_input(self, controller: Controller) -> None:
        discovered(controller)
        task = previews(controller, "Hi")
        controller.handle(key(Key.ESCAPE))
        session = controller.session
        assert session.screen == Screen.INPUT_TEXT
        assert Slot.PREVIEWS not in session.pending

        # The abandoned batch lands after the user went back
        controller.handle(PreviewsGenerated(task.task_id, FONTS, "Hi", task.width))
        assert session.screen == Screen.INPUT_TEXT
        assert session.previews_for is None


class TestSelectFont:
    """The font list screen."""

    def test_escape_prefills_input(self, controller: Controller) -> None:
        at_select_font(controller, "Hello")
        controller.handle(key(Key.ESCAPE))
        assert controller.session.screen == Screen.INPUT_TEXT
        assert controller.session.text_field.value == "Hello"

    def test_same_text_reuses_previews(self, controller: Controller) -> None:
        at_select_font(controller)
        controller.handle(key(Key.ESCAPE))
        assert controller.handle(key(Key.ENTER)) == []
        assert controller.session.screen == Screen.SELECT_FONT

    def test_changed_text_regenerates(self, controller: Controller) -> None:
        at_select_font(controller)
        controller.handle(key(Key.ESCAPE))
        type_text(controller, "!")
        (task,) = controller.handle(key(Key.ENTER))
        assert task.text == "Hi!"

    def test_navigation(self, controller: Controller) -> None:
        at_select_font(controller)
        controller.handle(key(Key.DOWN))
        controller.handle(key("j"))
        assert controller.session.font_list.selected_item.name == "slant"
        controller.handle(key(Key.UP))
        assert controller.session.font_list.selected_item.name == "big"

    def test_filter_keeps_escape(self, controller: Controller) -> None:
        at_select_font(controller)
        type_text(controller, "/sl")
        assert controller.session.font_list.filter_text == "sl"
        # Escape clears the filter rather than leaving the screen
        controller.handle(key(Key.ESCAPE))
        assert controller.session.screen == Screen.SELECT_FONT
        assert controller.session.font_list.filter_text == ""

    def test_filtered_selection_is_rendered(self, controller: Controller) -> None:
        at_select_font(controller)
        type_text(controller, "/sta")
        controller.handle(key(Key.ENTER))  # stop typing the filter
        (task,) = controller.handle(key(Key.ENTER))
        assert task.font.name == "standard"

    def test_enter_dispatches_full_render(self, controller: Controller) -> None:
        at_select_font(controller)
        (task,) = controller.handle(key(Key.ENTER))
        assert isinstance(task, RenderOutputTask)
        assert task.font.name == "banner"
        assert task.text == "Hi"
        assert task.width == 92
        assert controller.session.screen == Screen.GENERATING_OUTPUT

    def test_escape_while_rendering(self, controller: Controller) -> None:
        at_select_font(controller)
        (task,) = controller.handle(key(Key.ENTER))
        controller.handle(key(Key.ESCAPE))
        assert controller.session.screen == Screen.SELECT_FONT

        controller.handle(OutputRendered(task.task_id, "late", task.width))
        assert controller.session.screen == Screen.SELECT_FONT
        assert controller.session.full_output == ""

    def test_render_failure_is_fatal(self, controller: Controller) -> None:
        at_select_font(controller)
        (task,) = controller.handle(key(Key.ENTER))
        controller.handle(RenderFailed(task.task_id, "failed to run figlet for full output: boom"))
        assert controller.session.screen == Screen.ERROR
        assert "boom" in controller.session.error_message


class TestOutput:
    """Output choice, display and saving."""

    def test_output_choice(self, controller: Controller) -> None:
        at_output_choice(controller)
        session = controller.session
        assert session.screen == Screen.OUTPUT_CHOICE
        assert session.full_output == "ART\n"
        assert session.status_message == OUTPUT_CHOICE_PROMPT

    def test_choice_is_case_insensitive(self, controller: Controller) -> None:
        at_output_choice(controller)
        controller.handle(key("T"))
        assert controller.session.screen == Screen.DISPLAY_OUTPUT

    def test_other_keys_ignored(self, controller: Controller) -> None:
        at_output_choice(controller)
        controller.handle(key("x"))
        controller.handle(key(Key.ENTER))
        assert controller.session.screen == Screen.OUTPUT_CHOICE

    def test_display_and_back(self, controller: Controller) -> None:
        at_output_choice(controller)
        controller.handle(key("t"))
        assert controller.session.output_view.total_lines == 1
        controller.handle(key("q"))
        assert controller.session.screen == Screen.SELECT_FONT

    def test_escape_from_choice(self, controller: Controller) -> None:
        at_output_choice(controller)
        controller.handle(key(Key.ESCAPE))
        assert controller.session.screen == Screen.SELECT_FONT
        assert controller.session.status_message == ""

    def test_save_flow(self, controller: Controller) -> None:
        at_output_choice(controller)
        controller.handle(key("f"))
        assert controller.session.screen == Screen.SAVE_FILENAME_INPUT

        assert controller.handle(key(Key.ENTER)) == []  # empty name
        type_text(controller, "out.txt")
        (task,) = controller.handle(key(Key.ENTER))
        assert isinstance(task, SaveFileTask)
        assert task.path == "out.txt"
        assert task.content == "ART\n"

        # Further keys wait for the write
        assert controller.handle(key(Key.ENTER)) == []

        (timer,) = controller.handle(FileSaved(task.task_id, "out.txt"))
        assert isinstance(timer, StatusTimerTask)
        assert controller.session.screen == Screen.STATUS_MESSAGE
        assert controller.session.status_message == "Saved to out.txt!"

        controller.handle(StatusTimeout(timer.task_id))
        assert controller.session.screen == Screen.SELECT_FONT
        assert controller.session.status_message == ""

    def test_escape_cancels_save(self, controller: Controller) -> None:
        at_output_choice(controller)
        controller.handle(key("f"))
        controller.handle(key(Key.ESCAPE))
        assert controller.session.screen == Screen.OUTPUT_CHOICE
        assert controller.session.status_message == OUTPUT_CHOICE_PROMPT

    def test_save_failure_is_recoverable(self, controller: Controller) -> None:
        at_output_choice(controller)
        controller.handle(key("f"))
        type_text(controller, "/nope/out.txt")
        (task,) = controller.handle(key(Key.ENTER))
        controller.handle(SaveFailed(task.task_id, "failed to save file"))
        session = controller.session
        assert session.screen == Screen.STATUS_MESSAGE
        assert session.status_is_error is True
        assert not session.should_quit

    def test_key_dismisses_status(self, controller: Controller) -> None:
        at_output_choice(controller)
        controller.handle(key("f"))
        type_text(controller, "a.txt")
        (task,) = controller.handle(key(Key.ENTER))
        (timer,) = controller.handle(FileSaved(task.task_id, "a.txt"))

        controller.handle(key("x"))
        assert controller.session.screen == Screen.SELECT_FONT

        # The timer firing later must not move the user again
        controller.handle(key(Key.ENTER))
        assert controller.session.screen == Screen.GENERATING_OUTPUT
        controller.handle(StatusTimeout(timer.task_id))
        assert controller.session.screen == Screen.GENERATING_OUTPUT


class TestStaleResults:
    """Results only apply to the task the session is waiting for."""

    def test_unknown_task_id_dropped(self, controller: Controller) -> None:
        controller.start()
        controller.handle(FontsDiscovered(999, FONTS))
        assert controller.session.screen == Screen.INITIAL_LOADING
        assert controller.session.fonts == []

    def test_previews_for_old_text_dropped(self, controller: Controller) -> None:
        discovered(controller)
        task = previews(controller, "Hi")
        controller.handle(PreviewsGenerated(task.task_id, FONTS, "Other", task.width))
        assert controller.session.screen == Screen.LOADING_PREVIEWS

    def test_busy_previews_slot_keeps_input_screen(self, controller: Controller) -> None:
        discovered(controller)
        previews(controller, "Hi")
        controller.session.screen = Screen.INPUT_TEXT
        controller.session.text_field.set_value("Other")
        assert controller.handle(key(Key.ENTER)) == []
        # Nothing was started, so there is no spinner to wait on
        assert controller.session.screen == Screen.INPUT_TEXT
        assert controller.session.input_text == "Hi"

    def test_busy_render_slot_keeps_font_list(self, controller: Controller) -> None:
        at_select_font(controller)
        controller.handle(key(Key.ENTER))
        controller.session.screen = Screen.SELECT_FONT
        controller.handle(key(Key.DOWN))
        assert controller.handle(key(Key.ENTER)) == []
        assert controller.session.screen == Screen.SELECT_FONT
        assert controller.session.selected_font.name == "banner"

    def test_crash_of_pending_task_is_fatal(self, controller: Controller) -> None:
        (task,) = controller.start()
        controller.handle(TaskCrashed(Slot.DISCOVERY, task.task_id, "boom"))
        assert controller.session.screen == Screen.ERROR
        assert "boom" in controller.session.error_message

    def test_crash_of_stale_task_ignored(self, controller: Controller) -> None:
        discovered(controller)
        controller.handle(TaskCrashed(Slot.DISCOVERY, 1, "boom"))
        assert controller.session.screen == Screen.INPUT_TEXT


class TestGlobalKeys:
    """Keys that behave the same everywhere."""

    @pytest.mark.parametrize("screen", list(Screen))
    def test_ctrl_c_quits(self, controller: Controller, screen: Screen) -> None:
        controller.session.screen = screen
        controller.handle(key(Key.CTRL_C))
        assert controller.session.should_quit is True

    def test_any_key_quits_from_error(self, controller: Controller) -> None:
        controller.session.screen = Screen.ERROR
        controller.handle(key("z"))
        assert controller.session.should_quit is True


class TestTerminalEvents:
    """Resize and tick."""

    def test_resize_updates_session(self, controller: Controller) -> None:
        controller.handle(Resized(width=120, height=50))
        assert controller.session.terminal_width == 120
        assert controller.session.terminal_height == 50
        assert controller.session.layout.content_width == 116

    def test_tick_advances_spinner_only_when_loading(self, controller: Controller) -> None:
        controller.start()
        controller.handle(Tick())
        assert controller.session.spinner_frame == 1
        controller.session.screen = Screen.SELECT_FONT
        controller.handle(Tick())
        assert controller.session.spinner_frame == 1
