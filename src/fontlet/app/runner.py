"""Run tasks off the interactive loop and hand their results back to it."""

from __future__ import annotations

import threading
from queue import Empty, Queue
from typing import Iterable, Optional

from fontlet.app.events import Completion, TaskCrashed
from fontlet.app.session import Slot
from fontlet.app.tasks import Task
from fontlet.utils.logging import get_logger

logger = get_logger(__name__)


def execute(task: Task) -> Completion:
    """Run ``task``, turning anything it raises into a TaskCrashed event."""
    try:
        return task.run()
    except Exception as e:
        logger.exception("Task %s #%d crashed", type(task).__name__, task.task_id)
        return TaskCrashed(task.slot, task.task_id, str(e) or type(e).__name__)


class SlotWorker:
    """
    Runs one slot's tasks one at a time on a daemon thread.

    Submitting while a task is running queues the new one; submitting
    again before it starts replaces it (latest request wins).
    """

    def __init__(self, slot: Slot, results: Queue[Completion]) -> None:
        self.slot = slot
        self._results = results
        self._lock = threading.Lock()
        self._pending: Optional[Task] = None
        self._running = False

    def submit(self, task: Task) -> None:
        with self._lock:
            if self._pending is not None:
                logger.info("Replacing queued %s task #%d", self.slot.value, self._pending.task_id)
            self._pending = task
            if self._running:
                return
            self._running = True

        worker = threading.Thread(
            target=self._worker,
            name=f"fontlet-{self.slot.value}",
            daemon=True,
        )
        worker.start()

    def _worker(self) -> None:
        while True:
            with self._lock:
                task = self._pending
                self._pending = None
                if task is None:
                    self._running = False
                    return

            self._results.put(execute(task))


# Slots whose tasks only wait. Each task gets its own thread so one left
# running after it was abandoned never delays the next.
DETACHED_SLOTS = frozenset({Slot.STATUS_TIMER})


class TaskRunner:
    """Per-slot workers feeding one result queue, drained by the loop thread."""

    def __init__(self) -> None:
        self._results: Queue[Completion] = Queue()
        self._workers = {
            slot: SlotWorker(slot, self._results)
            for slot in Slot
            if slot not in DETACHED_SLOTS
        }

    def submit(self, task: Task) -> None:
        logger.debug("Dispatching %s #%d", type(task).__name__, task.task_id)
        if task.slot in DETACHED_SLOTS:
            self._start_detached(task)
            return
        self._workers[task.slot].submit(task)

    def _start_detached(self, task: Task) -> None:
        worker = threading.Thread(
            target=lambda: self._results.put(execute(task)),
            name=f"fontlet-{task.slot.value}-{task.task_id}",
            daemon=True,
        )
        worker.start()

    def submit_all(self, tasks: Iterable[Task]) -> None:
        for task in tasks:
            self.submit(task)

    def drain(self) -> list[Completion]:
        """Return every completion that has arrived, in arrival order."""
        events: list[Completion] = []
        while True:
            try:
                events.append(self._results.get_nowait())
            except Empty:
                return events

    def wait(self, timeout: Optional[float] = None) -> Optional[Completion]:
        """Block for the next completion (None on timeout)."""
        try:
            return self._results.get(timeout=timeout)
        except Empty:
            return None
