"""The picker's state machine.

``Controller.handle`` takes one event, updates the Session in place and
returns the tasks to dispatch. It never blocks and is only ever called
from the loop thread, so the Session needs no locking.

Events are routed through a table keyed by event type, and key presses
through a table keyed by screen; both tables cover every variant, so
every (screen, event) pair has a defined outcome, even if that outcome
is "ignore".
"""

from __future__ import annotations

import itertools
from typing import Callable

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
from fontlet.app.session import LOADING_SCREENS, SLOT_SCREENS, Screen, Session, Slot
from fontlet.app.tasks import (
    DiscoverFontsTask,
    GeneratePreviewsTask,
    RenderOutputTask,
    SaveFileTask,
    StatusTimerTask,
    Task,
)
from fontlet.cli.core.input import Key, KeyEvent
from fontlet.cli.core.layout import output_width, preview_width
from fontlet.figlet.runner import FigletTool
from fontlet.utils.logging import get_logger

logger = get_logger(__name__)

OUTPUT_CHOICE_PROMPT = "Output to (t)erminal or save to (f)ile?"


class Controller:
    """Applies events to a Session and decides what background work to start."""

    def __init__(self, session: Session, tool: FigletTool) -> None:
        self.session = session
        self.tool = tool
        self._ids = itertools.count(1)

        self.event_handlers: dict[type, Callable[..., list[Task]]] = {
            KeyPressed: self._on_key,
            Resized: self._on_resize,
            Tick: self._on_tick,
            FontsDiscovered: self._on_fonts_discovered,
            DiscoveryFailed: self._on_discovery_failed,
            PreviewsGenerated: self._on_previews_generated,
            OutputRendered: self._on_output_rendered,
            RenderFailed: self._on_render_failed,
            FileSaved: self._on_file_saved,
            SaveFailed: self._on_save_failed,
            StatusTimeout: self._on_status_timeout,
            TaskCrashed: self._on_task_crashed,
        }
        self.key_handlers: dict[Screen, Callable[[KeyEvent], list[Task]]] = {
            Screen.INITIAL_LOADING: self._ignore_key,
            Screen.INPUT_TEXT: self._key_input_text,
            Screen.LOADING_PREVIEWS: self._key_loading_previews,
            Screen.SELECT_FONT: self._key_select_font,
            Screen.GENERATING_OUTPUT: self._key_generating_output,
            Screen.OUTPUT_CHOICE: self._key_output_choice,
            Screen.SAVE_FILENAME_INPUT: self._key_save_filename,
            Screen.DISPLAY_OUTPUT: self._key_display_output,
            Screen.STATUS_MESSAGE: self._key_status_message,
            Screen.ERROR: self._key_error,
        }

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def start(self) -> list[Task]:
        """Kick off font discovery."""
        config = self.session.config
        self.session.screen = Screen.INITIAL_LOADING
        return self._dispatch(
            Slot.DISCOVERY,
            lambda task_id: DiscoverFontsTask(
                task_id=task_id,
                tool=self.tool,
                font_dir=config.font_dir,
                suffix=config.font_suffix,
                search_dirs=config.search_dirs,
            ),
        )

    def handle(self, event: Event) -> list[Task]:
        handler = self.event_handlers.get(type(event))
        if handler is None:
            logger.warning("No handler for event %r", event)
            return []
        return handler(event)

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def _dispatch(self, slot: Slot, make: Callable[[int], Task]) -> list[Task]:
        """Create a task for ``slot`` unless one is already expected there."""
        if slot in self.session.pending:
            logger.info("Not dispatching %s: task #%d still pending", slot.value, self.session.pending[slot])
            return []
        task = make(next(self._ids))
        self.session.pending[slot] = task.task_id
        return [task]

    def _abandon(self, slot: Slot) -> None:
        """Stop waiting for ``slot``; its result will be dropped when it arrives."""
        task_id = self.session.pending.pop(slot, None)
        if task_id is not None:
            logger.info("Abandoned %s task #%d", slot.value, task_id)

    def _accept(self, event) -> bool:
        """True if ``event`` is the result the session is currently waiting for."""
        session = self.session
        if session.pending.get(event.slot) != event.task_id:
            logger.info("Dropping stale %s result #%d", event.slot.value, event.task_id)
            return False
        del session.pending[event.slot]
        if session.screen != SLOT_SCREENS[event.slot]:
            logger.info("Dropping %s result #%d on screen %s", event.slot.value, event.task_id, session.screen.value)
            return False
        return True

    def _go(self, screen: Screen) -> None:
        logger.debug("Screen %s -> %s", self.session.screen.value, screen.value)
        self.session.screen = screen

    def _fail(self, message: str) -> None:
        logger.error("Fatal: %s", message)
        self.session.error_message = message
        self._go(Screen.ERROR)

    def _back_to_input(self) -> None:
        self.session.text_field.set_value(self.session.input_text)
        self._go(Screen.INPUT_TEXT)

    def _back_to_fonts(self) -> None:
        self.session.status_message = ""
        self.session.status_is_error = False
        self._go(Screen.SELECT_FONT)

    # ------------------------------------------------------------------
    # Terminal events
    # ------------------------------------------------------------------

    def _on_resize(self, event: Resized) -> list[Task]:
        session = self.session
        session.terminal_width = event.width
        session.terminal_height = event.height
        layout = session.layout
        session.font_list.set_viewport(layout.list_height)
        session.output_view.set_viewport(layout.content_height)
        return []

    def _on_tick(self, event: Tick) -> list[Task]:
        if self.session.screen in LOADING_SCREENS:
            self.session.spinner_frame += 1
        return []

    def _on_key(self, event: KeyPressed) -> list[Task]:
        if event.key.key == Key.CTRL_C:
            self.session.should_quit = True
            return []
        return self.key_handlers[self.session.screen](event.key)

    # ------------------------------------------------------------------
    # Keys, per screen
    # ------------------------------------------------------------------

    def _ignore_key(self, key: KeyEvent) -> list[Task]:
        return []

    def _key_input_text(self, key: KeyEvent) -> list[Task]:
        session = self.session
        if key.key != Key.ENTER:
            session.text_field.handle_input(key)
            return []

        text = session.text_field.value.strip()
        if not text:
            return []

        width = preview_width(
            session.terminal_width,
            session.config.preview_margin,
            session.config.min_render_width,
        )
        if session.previews_for == (text, width):
            # Previews for this exact text and width are still valid
            session.input_text = text
            self._go(Screen.SELECT_FONT)
            return []

        tasks = self._dispatch(
            Slot.PREVIEWS,
            lambda task_id: GeneratePreviewsTask(
                task_id=task_id,
                tool=self.tool,
                fonts=tuple(session.fonts),
                text=text,
                width=width,
                max_lines=session.config.preview_lines,
            ),
        )
        if tasks:
            session.input_text = text
            self._go(Screen.LOADING_PREVIEWS)
        return tasks

    def _key_loading_previews(self, key: KeyEvent) -> list[Task]:
        if key.key == Key.ESCAPE:
            self._abandon(Slot.PREVIEWS)
            self._back_to_input()
        return []

    def _key_select_font(self, key: KeyEvent) -> list[Task]:
        session = self.session
        font_list = session.font_list

        # The list owns keys while a filter is being typed or is showing
        if font_list.filtering or (key.key == Key.ESCAPE and font_list.filter_text):
            font_list.handle_input(key)
            return []

        if key.key == Key.ESCAPE:
            self._back_to_input()
            return []

        if key.key == Key.ENTER:
            selected = font_list.selected_item
            if selected is None:
                return []
            text = session.input_text
            width = output_width(
                session.terminal_width,
                session.config.output_margin,
                session.config.min_render_width,
            )
            tasks = self._dispatch(
                Slot.FULL_RENDER,
                lambda task_id: RenderOutputTask(
                    task_id=task_id,
                    tool=self.tool,
                    font=selected,
                    text=text,
                    width=width,
                ),
            )
            if tasks:
                session.selected_font = selected
                self._go(Screen.GENERATING_OUTPUT)
            return tasks

        font_list.handle_input(key)
        return []

    def _key_generating_output(self, key: KeyEvent) -> list[Task]:
        if key.key == Key.ESCAPE:
            self._abandon(Slot.FULL_RENDER)
            self._back_to_fonts()
        return []

    def _key_output_choice(self, key: KeyEvent) -> list[Task]:
        session = self.session
        choice = (key.char or "").lower()

        if choice == "t":
            session.output_view.set_content(session.full_output)
            session.output_view.set_viewport(session.layout.content_height)
            session.status_message = ""
            self._go(Screen.DISPLAY_OUTPUT)
        elif choice == "f":
            session.filename_field.clear()
            session.status_message = ""
            self._go(Screen.SAVE_FILENAME_INPUT)
        elif key.key == Key.ESCAPE:
            self._back_to_fonts()
        return []

    def _key_save_filename(self, key: KeyEvent) -> list[Task]:
        session = self.session
        if Slot.SAVE in session.pending:
            # Waiting on the write; only quit is honoured
            return []

        if key.key == Key.ESCAPE:
            session.status_message = OUTPUT_CHOICE_PROMPT
            self._go(Screen.OUTPUT_CHOICE)
            return []

        if key.key == Key.ENTER:
            filename = session.filename_field.value.strip()
            if not filename:
                return []
            content = session.full_output
            return self._dispatch(
                Slot.SAVE,
                lambda task_id: SaveFileTask(task_id=task_id, path=filename, content=content),
            )

        session.filename_field.handle_input(key)
        return []

    def _key_display_output(self, key: KeyEvent) -> list[Task]:
        if key.key == Key.ESCAPE or key.char == "q":
            self._back_to_fonts()
            return []
        self.session.output_view.handle_input(key)
        return []

    def _key_status_message(self, key: KeyEvent) -> list[Task]:
        self._abandon(Slot.STATUS_TIMER)
        self._back_to_fonts()
        return []

    def _key_error(self, key: KeyEvent) -> list[Task]:
        self.session.should_quit = True
        return []

    # ------------------------------------------------------------------
    # Task results
    # ------------------------------------------------------------------

    def _on_fonts_discovered(self, event: FontsDiscovered) -> list[Task]:
        if not self._accept(event):
            return []
        session = self.session
        session.fonts = list(event.fonts)
        session.text_field.set_value(session.config.initial_text)
        self._go(Screen.INPUT_TEXT)
        return []

    def _on_discovery_failed(self, event: DiscoveryFailed) -> list[Task]:
        if self._accept(event):
            self._fail(event.reason)
        return []

    def _on_previews_generated(self, event: PreviewsGenerated) -> list[Task]:
        if not self._accept(event):
            return []
        session = self.session
        if event.text != session.input_text:
            logger.info("Dropping previews for %r; text is now %r", event.text, session.input_text)
            return []
        session.fonts = list(event.fonts)
        session.font_list.set_items(session.fonts)
        session.font_list.set_viewport(session.layout.list_height)
        session.previews_for = (event.text, event.width)
        self._go(Screen.SELECT_FONT)
        return []

    def _on_output_rendered(self, event: OutputRendered) -> list[Task]:
        if not self._accept(event):
            return []
        session = self.session
        session.full_output = event.output
        session.output_width = event.width
        session.status_message = OUTPUT_CHOICE_PROMPT
        self._go(Screen.OUTPUT_CHOICE)
        return []

    def _on_render_failed(self, event: RenderFailed) -> list[Task]:
        if self._accept(event):
            self._fail(event.reason)
        return []

    def _on_file_saved(self, event: FileSaved) -> list[Task]:
        if not self._accept(event):
            return []
        return self._show_status(f"Saved to {event.path}!", is_error=False)

    def _on_save_failed(self, event: SaveFailed) -> list[Task]:
        if not self._accept(event):
            return []
        return self._show_status(event.reason, is_error=True)

    def _show_status(self, message: str, is_error: bool) -> list[Task]:
        session = self.session
        session.status_message = message
        session.status_is_error = is_error
        self._go(Screen.STATUS_MESSAGE)
        delay = session.config.status_timeout
        return self._dispatch(
            Slot.STATUS_TIMER,
            lambda task_id: StatusTimerTask(task_id=task_id, delay=delay),
        )

    def _on_status_timeout(self, event: StatusTimeout) -> list[Task]:
        if self._accept(event):
            self._back_to_fonts()
        return []

    def _on_task_crashed(self, event: TaskCrashed) -> list[Task]:
        session = self.session
        if session.pending.get(event.slot) != event.task_id:
            logger.info("Ignoring crash of stale %s task #%d", event.slot.value, event.task_id)
            return []
        del session.pending[event.slot]
        self._fail(f"internal error in {event.slot.value} task: {event.reason}")
        return []
