"""The picker's state machine, its events and the background tasks it starts."""

from fontlet.app.controller import Controller
from fontlet.app.events import Event
from fontlet.app.runner import TaskRunner
from fontlet.app.session import Screen, Session, Slot
from fontlet.app.tasks import Task

__all__ = ["Controller", "Event", "Screen", "Session", "Slot", "Task", "TaskRunner"]
