"""Interactive font picker: the event loop tying input, tasks and drawing together."""

from __future__ import annotations

from typing import Optional

from fontlet.app.controller import Controller
from fontlet.app.events import Event, KeyPressed, Resized, Tick
from fontlet.app.runner import TaskRunner
from fontlet.app.session import LOADING_SCREENS, Session
from fontlet.cli.core.input import InputReader
from fontlet.cli.core.terminal import Terminal
from fontlet.cli.studio.view import render_screen
from fontlet.config import AppConfig
from fontlet.figlet.runner import FigletTool
from fontlet.utils.logging import get_logger

logger = get_logger(__name__)


class PickerApp:
    """
    Full-screen figlet font picker.

    One thread runs this loop: it polls the terminal size, drains finished
    task results, redraws when something changed and waits briefly for a
    key. Everything blocking happens in the TaskRunner's workers.
    """

    POLL_INTERVAL = 0.08

    def __init__(self, config: AppConfig, tool: FigletTool) -> None:
        self.config = config
        self.session = Session(config=config)
        self.controller = Controller(self.session, tool)
        self.runner = TaskRunner()
        self._last_size: Optional[tuple[int, int]] = None
        self._needs_redraw = True

    def run(self) -> None:
        """Run until the user quits."""
        logger.info("Starting picker with figlet at %s", self.controller.tool.path)
        self.runner.submit_all(self.controller.start())

        with Terminal.managed_mode():
            Terminal.clear()
            reader = InputReader()

            while not self.session.should_quit:
                self._check_resize()

                for completion in self.runner.drain():
                    self._handle(completion)

                if self._needs_redraw:
                    Terminal.draw(render_screen(self.session, self.config))
                    self._needs_redraw = False

                if self.session.should_quit:
                    break

                key = reader.read(timeout=self.POLL_INTERVAL)
                if key is not None:
                    self._handle(KeyPressed(key))
                elif self.session.screen in LOADING_SCREENS:
                    self._handle(Tick())

        logger.info("Picker exited")

    def _check_resize(self) -> None:
        size = Terminal.size()
        current = (size.cols, size.rows)
        if current != self._last_size:
            self._last_size = current
            self._handle(Resized(width=size.cols, height=size.rows))

    def _handle(self, event: Event) -> None:
        self.runner.submit_all(self.controller.handle(event))
        self._needs_redraw = True


def run_picker(config: AppConfig, tool: FigletTool) -> None:
    """Launch the picker application."""
    PickerApp(config, tool).run()
