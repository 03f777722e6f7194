"""In-memory text host with overwrite mode and change hooks."""

from __future__ import annotations

import logging
from typing import Optional

from .constants import EditorConstants
from .geometry import Position, Range
from .host import (
    BEFORE_CHANGE,
    BEFORE_SELECTION_CHANGE,
    CHANGE,
    CURSOR_ACTIVITY,
    ORIGIN_INPUT,
    ORIGIN_PASTE,
    ORIGIN_SET_VALUE,
    ChangeEvent,
    SelectionChangeEvent,
    TextHost,
)

logger = logging.getLogger(__name__)

EOL = EditorConstants.EOL


class GridDocument(TextHost):
    """A list of lines plus a multi-range selection.

    Every change goes through ``before_change`` (where it can be cancelled)
    and, once applied, the existing selection is mapped through it and
    proposed again via ``before_selection_change``. Positions handed in are
    clipped to the buffer, so a backspace at column 0 or a delete past the
    end of a line degrade into insertions rather than errors.
    """

    def __init__(self, text: str = "", overwrite: bool = False):
        super().__init__()
        self.lines: list[str] = text.split(EOL)
        self._selections: list[Range] = [Range.caret(Position(0, 0))]
        self.overwrite = overwrite

    # --- Reading ---

    def get_value(self) -> str:
        return EOL.join(self.lines)

    def line_count(self) -> int:
        return len(self.lines)

    def get_line(self, line: int) -> str:
        return self.lines[line]

    def get_range(self, start: Position, end: Position) -> str:
        start, end = self._ordered(self.clip_pos(start), self.clip_pos(end))
        if start.line == end.line:
            return self.lines[start.line][start.ch:end.ch]
        parts = [self.lines[start.line][start.ch:]]
        parts.extend(self.lines[start.line + 1:end.line])
        parts.append(self.lines[end.line][:end.ch])
        return EOL.join(parts)

    def list_selections(self) -> list[Range]:
        return list(self._selections)

    def clip_pos(self, pos: Position) -> Position:
        """Clamp a position into the buffer."""
        last = len(self.lines) - 1
        if pos.line < 0:
            return Position(0, 0)
        if pos.line > last:
            return Position(last, len(self.lines[last]))
        length = len(self.lines[pos.line])
        if pos.ch > length:
            return Position(pos.line, length)
        if pos.ch < 0:
            return Position(pos.line, 0)
        return pos

    # --- Writing ---

    def set_value(self, text: str) -> None:
        last = len(self.lines) - 1
        self.replace_range(text, Position(0, 0), Position(last, len(self.lines[last])),
                           origin=ORIGIN_SET_VALUE)
        self.set_selections([Range.caret(Position(0, 0))], origin=ORIGIN_SET_VALUE)

    def set_selections(self, ranges: list[Range], origin: Optional[str] = None) -> None:
        if not ranges:
            raise ValueError("A selection needs at least one range")
        clipped = [self._clip_range(r) for r in ranges]
        event = SelectionChangeEvent(ranges=clipped, origin=origin)
        self.emit(BEFORE_SELECTION_CHANGE, event)
        if not event.ranges:
            logger.debug("Selection change to %s dropped by a hook", clipped)
            return
        self._selections = [self._clip_range(r) for r in event.ranges]
        self.emit(CURSOR_ACTIVITY)

    def replace_range(self, text: str, start: Position,
                      end: Optional[Position] = None,
                      origin: Optional[str] = None) -> bool:
        start = self.clip_pos(start)
        end = start if end is None else self.clip_pos(end)
        start, end = self._ordered(start, end)

        event = ChangeEvent(origin=origin, from_pos=start, to_pos=end, text=text.split(EOL))
        self.emit(BEFORE_CHANGE, event)
        if event.cancelled:
            return False

        change_end = self._apply(event.from_pos, event.to_pos, event.text)
        mapped = [
            Range(anchor=self._map(r.anchor, event.from_pos, event.to_pos, change_end),
                  head=self._map(r.head, event.from_pos, event.to_pos, change_end))
            for r in self._selections
        ]
        self.emit(CHANGE, event)
        self.set_selections(mapped, origin=origin)
        return True

    # --- Simulated user input ---

    def type_text(self, text: str) -> None:
        """Type text at every range, last range first (origin ``+input``).

        In overwrite mode a bare caret replaces as many following cells as
        the last typed line is long, never past the end of the line. Once a
        hook cancels the change the remaining ranges are left alone; the
        hook has handled the whole selection.
        """
        typed = text.split(EOL)
        for selection in reversed(self.list_selections()):
            start, end = selection.start, selection.end
            if selection.is_empty and self.overwrite:
                end = Position(end.line, min(len(self.lines[end.line]), end.ch + len(typed[-1])))
            if not self.replace_range(text, start, end, origin=ORIGIN_INPUT):
                break

    def paste(self, text: str) -> None:
        """Insert text at every range, last range first (origin ``paste``).

        Stops at the first cancelled change, like ``type_text``.
        """
        for selection in reversed(self.list_selections()):
            if not self.replace_range(text, selection.start, selection.end,
                                      origin=ORIGIN_PASTE):
                break

    # --- Internals ---

    @staticmethod
    def _ordered(a: Position, b: Position) -> tuple[Position, Position]:
        return (b, a) if b < a else (a, b)

    def _clip_range(self, selection: Range) -> Range:
        return Range(anchor=self.clip_pos(selection.anchor), head=self.clip_pos(selection.head))

    def _apply(self, start: Position, end: Position, text: list[str]) -> Position:
        """Splice text lines into the buffer and return the end of the new text."""
        before = self.lines[start.line][:start.ch]
        after = self.lines[end.line][end.ch:]
        new_lines = list(text)
        new_lines[0] = before + new_lines[0]
        new_lines[-1] = new_lines[-1] + after
        self.lines[start.line:end.line + 1] = new_lines
        last = start.line + len(text) - 1
        if len(text) == 1:
            return Position(last, len(before) + len(text[0]))
        return Position(last, len(text[-1]))

    @staticmethod
    def _map(pos: Position, start: Position, end: Position, change_end: Position) -> Position:
        if pos < start:
            return pos
        if pos <= end:
            return change_end
        if pos.line == end.line:
            return Position(change_end.line, change_end.ch + pos.ch - end.ch)
        return Position(pos.line + change_end.line - end.line, pos.ch)
