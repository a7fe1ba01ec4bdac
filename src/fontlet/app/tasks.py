"""One-shot background tasks.

Each task is an immutable snapshot of the inputs it needs. ``run()``
blocks (subprocesses, filesystem, sleeping) and always returns exactly
one completion event; expected failures come back as failure events
rather than exceptions.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Optional, Union

from fontlet.app.events import (
    Completion,
    DiscoveryFailed,
    FileSaved,
    FontsDiscovered,
    OutputRendered,
    PreviewsGenerated,
    RenderFailed,
    SaveFailed,
    StatusTimeout,
)
from fontlet.app.session import Slot
from fontlet.core.constants import PREVIEW_ERROR_PREFIX
from fontlet.core.font import FontEntry
from fontlet.core.text import truncate_lines
from fontlet.errors import FontletError, RenderError
from fontlet.figlet.discovery import discover_fonts
from fontlet.figlet.runner import FigletTool
from fontlet.io.writer import save_text
from fontlet.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DiscoverFontsTask:
    slot: ClassVar[Slot] = Slot.DISCOVERY
    task_id: int
    tool: FigletTool
    font_dir: Optional[Path]
    suffix: str
    search_dirs: tuple[str, ...]

    def run(self) -> Completion:
        try:
            fonts = discover_fonts(self.tool, self.font_dir, self.suffix, self.search_dirs)
        except FontletError as e:
            logger.warning("Font discovery failed: %s", e)
            return DiscoveryFailed(self.task_id, str(e))
        return FontsDiscovered(self.task_id, tuple(fonts))


@dataclass(frozen=True)
class GeneratePreviewsTask:
    """Render every font's preview in turn; one font failing never sinks the batch."""
    slot: ClassVar[Slot] = Slot.PREVIEWS
    task_id: int
    tool: FigletTool
    fonts: tuple[FontEntry, ...]
    text: str
    width: int
    max_lines: int

    def run(self) -> Completion:
        previews: list[FontEntry] = []
        failures = 0
        for font in self.fonts:
            try:
                output = self.tool.render(font.path, self.text, self.width)
            except RenderError as e:
                failures += 1
                output = f"{PREVIEW_ERROR_PREFIX}{e}"
            previews.append(font.with_preview(truncate_lines(output, self.max_lines)))

        logger.info(
            "Generated %d previews at width %d (%d failed)",
            len(previews), self.width, failures,
        )
        return PreviewsGenerated(self.task_id, tuple(previews), self.text, self.width)


@dataclass(frozen=True)
class RenderOutputTask:
    slot: ClassVar[Slot] = Slot.FULL_RENDER
    task_id: int
    tool: FigletTool
    font: FontEntry
    text: str
    width: int

    def run(self) -> Completion:
        try:
            output = self.tool.render(self.font.path, self.text, self.width)
        except RenderError as e:
            logger.warning("Full render with %s failed: %s", self.font.name, e)
            return RenderFailed(self.task_id, f"failed to run figlet for full output: {e}")
        return OutputRendered(self.task_id, output, self.width)


@dataclass(frozen=True)
class SaveFileTask:
    slot: ClassVar[Slot] = Slot.SAVE
    task_id: int
    path: str
    content: str

    def run(self) -> Completion:
        try:
            written = save_text(self.path, self.content)
        except FontletError as e:
            logger.warning("Save failed: %s", e)
            return SaveFailed(self.task_id, str(e))
        logger.info("Saved %d bytes to %s", len(self.content), written)
        return FileSaved(self.task_id, str(written))


@dataclass(frozen=True)
class StatusTimerTask:
    slot: ClassVar[Slot] = Slot.STATUS_TIMER
    task_id: int
    delay: float

    def run(self) -> Completion:
        time.sleep(self.delay)
        return StatusTimeout(self.task_id)


Task = Union[
    DiscoverFontsTask,
    GeneratePreviewsTask,
    RenderOutputTask,
    SaveFileTask,
    StatusTimerTask,
]
