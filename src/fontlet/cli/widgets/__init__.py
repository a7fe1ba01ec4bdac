"""Reusable TUI widgets."""

from fontlet.cli.widgets.base import BaseWidget, Rect
from fontlet.cli.widgets.output_view import OutputViewWidget
from fontlet.cli.widgets.select_list import SelectListWidget
from fontlet.cli.widgets.status_bar import Shortcut, StatusBarWidget
from fontlet.cli.widgets.text_field import TextFieldWidget

__all__ = [
    "BaseWidget",
    "Rect",
    "SelectListWidget",
    "OutputViewWidget",
    "TextFieldWidget",
    "StatusBarWidget",
    "Shortcut",
]
