"""The text widget the editing engine drives.

The engine never edits text itself. It listens to a host's hooks, decides
what an edit should become, and asks the host to carry that out. Any widget
with these operations can carry the canvas; ``GridDocument`` is the
in-memory one used by the terminal front end and the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Optional

from .geometry import Position, Range

BEFORE_CHANGE = "before_change"
CHANGE = "change"
BEFORE_SELECTION_CHANGE = "before_selection_change"
CURSOR_ACTIVITY = "cursor_activity"
REFRESH = "refresh"

# Change origins raised by the host
ORIGIN_INPUT = "+input"
ORIGIN_PASTE = "paste"
ORIGIN_SET_VALUE = "setValue"

EVENTS = (BEFORE_CHANGE, CHANGE, BEFORE_SELECTION_CHANGE, CURSOR_ACTIVITY, REFRESH)


@dataclass
class ChangeEvent:
    """A change about to be made (or just made) to the host buffer.

    ``text`` holds the inserted text split into lines. Calling ``cancel``
    from a ``before_change`` handler stops the host from applying it.
    """
    origin: Optional[str]
    from_pos: Position
    to_pos: Position
    text: list[str] = field(default_factory=lambda: [""])
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class SelectionChangeEvent:
    """A selection about to be set. Handlers may replace ``ranges``."""
    ranges: list[Range]
    origin: Optional[str] = None

    def update(self, ranges: list[Range]) -> None:
        self.ranges = list(ranges)


class TextHost(ABC):
    """A multi-range, overwrite-capable text buffer with change hooks."""

    overwrite: bool = False

    def __init__(self):
        self._handlers: dict[str, list[Callable]] = {name: [] for name in EVENTS}

    def on(self, event: str, callback: Callable) -> None:
        """Register a hook. Handlers run in registration order."""
        if event not in self._handlers:
            raise ValueError(f"Unknown host event: {event}")
        self._handlers[event].append(callback)

    def off(self, event: str, callback: Callable) -> None:
        if callback in self._handlers.get(event, []):
            self._handlers[event].remove(callback)

    def emit(self, event: str, *args) -> None:
        for callback in list(self._handlers[event]):
            callback(self, *args)

    @abstractmethod
    def get_value(self) -> str:
        """Return the whole buffer as one string."""

    @abstractmethod
    def set_value(self, text: str) -> None:
        """Replace the whole buffer (origin ``setValue``)."""

    @abstractmethod
    def line_count(self) -> int:
        """Number of lines in the buffer."""

    @abstractmethod
    def get_line(self, line: int) -> str:
        """Text of one line."""

    @abstractmethod
    def list_selections(self) -> list[Range]:
        """Return the current ranges in caret-creation order."""

    @abstractmethod
    def set_selections(self, ranges: list[Range], origin: Optional[str] = None) -> None:
        """Propose a new selection; hooks may rewrite it before it lands."""

    @abstractmethod
    def get_range(self, start: Position, end: Position) -> str:
        """Return the text between two positions."""

    @abstractmethod
    def replace_range(self, text: str, start: Position,
                      end: Optional[Position] = None,
                      origin: Optional[str] = None) -> bool:
        """Propose replacing start..end with text (insert when end is None).

        Returns False when a ``before_change`` hook cancelled the change.
        """

    def get_cursor(self) -> Position:
        """Head of the primary (last) range."""
        return self.list_selections()[-1].head

    def set_cursor(self, pos: Position) -> None:
        self.set_selections([Range.caret(pos)])

    def get_selections(self) -> list[str]:
        """Text of every selected range, in selection order."""
        return [self.get_range(r.start, r.end) for r in self.list_selections()]

    def refresh(self) -> None:
        """Ask the host to repaint."""
        self.emit(REFRESH)
