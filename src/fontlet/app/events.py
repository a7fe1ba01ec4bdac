"""Events fed into the Controller: user input, terminal changes and task results.

``Event`` is a closed union. Task completions carry the id of the task
that produced them and name their slot, which is how stale results are
recognised and dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from fontlet.app.session import Slot
from fontlet.cli.core.input import KeyEvent
from fontlet.core.font import FontEntry


@dataclass(frozen=True)
class KeyPressed:
    key: KeyEvent


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class Tick:
    """Idle heartbeat from the loop; drives the spinner."""


@dataclass(frozen=True)
class FontsDiscovered:
    slot: ClassVar[Slot] = Slot.DISCOVERY
    task_id: int
    fonts: tuple[FontEntry, ...]


@dataclass(frozen=True)
class DiscoveryFailed:
    slot: ClassVar[Slot] = Slot.DISCOVERY
    task_id: int
    reason: str


@dataclass(frozen=True)
class PreviewsGenerated:
    slot: ClassVar[Slot] = Slot.PREVIEWS
    task_id: int
    fonts: tuple[FontEntry, ...]
    text: str
    width: int


@dataclass(frozen=True)
class OutputRendered:
    slot: ClassVar[Slot] = Slot.FULL_RENDER
    task_id: int
    output: str
    width: int


@dataclass(frozen=True)
class RenderFailed:
    slot: ClassVar[Slot] = Slot.FULL_RENDER
    task_id: int
    reason: str


@dataclass(frozen=True)
class FileSaved:
    slot: ClassVar[Slot] = Slot.SAVE
    task_id: int
    path: str


@dataclass(frozen=True)
class SaveFailed:
    slot: ClassVar[Slot] = Slot.SAVE
    task_id: int
    reason: str


@dataclass(frozen=True)
class StatusTimeout:
    slot: ClassVar[Slot] = Slot.STATUS_TIMER
    task_id: int


@dataclass(frozen=True)
class TaskCrashed:
    """A task raised something it should have turned into a result."""
    slot: Slot
    task_id: int
    reason: str


Completion = Union[
    FontsDiscovered,
    DiscoveryFailed,
    PreviewsGenerated,
    OutputRendered,
    RenderFailed,
    FileSaved,
    SaveFailed,
    StatusTimeout,
    TaskCrashed,
]

Event = Union[KeyPressed, Resized, Tick, Completion]
