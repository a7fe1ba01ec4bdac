"""Tests for running tasks on worker threads."""

import threading
import time
from dataclasses import dataclass, field
from typing import ClassVar

from fontlet.app.events import FileSaved, StatusTimeout, TaskCrashed
from fontlet.app.runner import TaskRunner, execute
from fontlet.app.session import Slot
from fontlet.app.tasks import StatusTimerTask


@dataclass(frozen=True)
class ExplodingTask:
    slot: ClassVar[Slot] = Slot.FULL_RENDER
    task_id: int

    def run(self):
        raise ValueError("kaboom")


@dataclass(frozen=True)
class BlockingTask:
    slot: ClassVar[Slot] = Slot.SAVE
    task_id: int
    gate: threading.Event
    started: threading.Event = field(default_factory=threading.Event)

    def run(self):
        self.started.set()
        self.gate.wait(5)
        return FileSaved(self.task_id, "out.txt")


@dataclass(frozen=True)
class QuickSaveTask:
    slot: ClassVar[Slot] = Slot.SAVE
    task_id: int

    def run(self):
        return FileSaved(self.task_id, "out.txt")


class TestExecute:
    """Tests for execute."""

    def test_returns_completion(self) -> None:
        assert execute(StatusTimerTask(1, 0.0)) == StatusTimeout(1)

    def test_exception_becomes_event(self) -> None:
        result = execute(ExplodingTask(2))
        assert result == TaskCrashed(Slot.FULL_RENDER, 2, "kaboom")


class TestTaskRunner:
    """Tests for TaskRunner."""

    def test_delivers_result(self) -> None:
        runner = TaskRunner()
        runner.submit(StatusTimerTask(1, 0.0))
        assert runner.wait(timeout=5) == StatusTimeout(1)

    def test_drain_empty(self) -> None:
        assert TaskRunner().drain() == []

    def test_crash_is_delivered(self) -> None:
        runner = TaskRunner()
        runner.submit(ExplodingTask(3))
        result = runner.wait(timeout=5)
        assert isinstance(result, TaskCrashed)
        assert result.task_id == 3

    def test_slots_run_independently(self) -> None:
        runner = TaskRunner()
        gate = threading.Event()
        runner.submit_all([BlockingTask(4, gate), ExplodingTask(5)])
        # The render slot finishes while the save slot is still blocked
        first = runner.wait(timeout=5)
        assert isinstance(first, TaskCrashed)
        gate.set()
        assert runner.wait(timeout=5) == FileSaved(4, "out.txt")

    def test_latest_queued_task_wins(self) -> None:
        runner = TaskRunner()
        gate = threading.Event()
        blocking = BlockingTask(6, gate)
        runner.submit(blocking)
        assert blocking.started.wait(5)
        runner.submit(QuickSaveTask(7))
        runner.submit(QuickSaveTask(8))
        gate.set()

        results = [runner.wait(timeout=5), runner.wait(timeout=5)]
        assert results == [FileSaved(6, "out.txt"), FileSaved(8, "out.txt")]
        assert runner.wait(timeout=0.2) is None

    def test_wait_times_out(self) -> None:
        assert TaskRunner().wait(timeout=0.01) is None

    def test_timers_do_not_queue_behind_each_other(self) -> None:
        runner = TaskRunner()
        start = time.monotonic()
        runner.submit(StatusTimerTask(9, 0.5))
        time.sleep(0.05)
        runner.submit(StatusTimerTask(10, 0.5))

        arrived = {}
        for _ in range(2):
            event = runner.wait(timeout=5)
            arrived[event.task_id] = time.monotonic() - start

        assert arrived[9] < 0.85
        # An abandoned timer still sleeping must not delay the next one
        assert arrived[10] < 0.85
