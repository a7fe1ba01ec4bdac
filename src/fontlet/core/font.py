"""Font entries and the capability the selection list depends on."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Protocol, runtime_checkable


@runtime_checkable
class DisplayItem(Protocol):
    """Anything the selection list can show and filter."""

    def display_key(self) -> str:
        """Label shown for the item."""
        ...

    def filter_key(self) -> str:
        """Text matched against the list filter."""
        ...


@dataclass(frozen=True)
class FontEntry:
    """A discovered figlet font and its rendered preview."""
    name: str
    path: str
    preview_text: str = ""

    def display_key(self) -> str:
        return self.name

    def filter_key(self) -> str:
        return self.name

    def with_preview(self, preview_text: str) -> FontEntry:
        """Return a copy carrying a new preview."""
        return replace(self, preview_text=preview_text)
