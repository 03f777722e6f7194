"""Overwrite-only edit interception.

Every edit is described as a ``ProposedEdit`` and reviewed by pure functions
that return a ``Decision``: either accept the edit as the host proposed it,
or reject it and apply a list of cell overwrites instead. Nothing here
touches a host; ``EditingSession`` applies decisions.

The grid dimensions only change in two places: shift-space, which inserts
one space, and the host's clipping when a backspace happens at column 0 or
a delete at the end of a line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from .constants import EditorConstants
from .geometry import Position, Range, is_collapsed
from .host import ORIGIN_INPUT, ORIGIN_PASTE
from .selection import sorted_selection, square_ranges

SPACE = EditorConstants.SPACE

# Origins of key-bound actions
ORIGIN_BACKSPACE = "+backspace"
ORIGIN_DELETE = "+delete"
ORIGIN_CUT = "cut"


class EditState(Enum):
    """What an edit turns into, given its origin and the selection."""
    COLLAPSED_INPUT = "collapsed_input"
    BLOCK_INPUT = "block_input"
    PASTE = "paste"
    DELETE = "delete"
    CUT_DELETE = "cut_delete"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class ProposedEdit:
    """An edit about to happen.

    Attributes:
        origin: Origin tag of the change (``+input``, ``paste``, ...)
        text: Inserted text split into lines
        selections: Selection at the time of the edit, caret-creation order
        cursor: Primary caret
        selected_text: Text of every selected range (used by cut)
    """
    origin: Optional[str]
    text: tuple[str, ...] = ("",)
    selections: tuple[Range, ...] = ()
    cursor: Position = Position()
    selected_text: tuple[str, ...] = ()


@dataclass(frozen=True)
class Replacement:
    """Overwrite the cells from ``start`` to ``end`` with ``text``."""
    text: str
    start: Position
    end: Position


@dataclass
class Decision:
    """Outcome of reviewing an edit.

    When ``accept`` is False the proposed change must be cancelled and the
    replacements applied in order, then the caret moved to ``cursor``.
    """
    accept: bool = True
    replacements: list[Replacement] = field(default_factory=list)
    cursor: Optional[Position] = None
    clipboard: Optional[str] = None

    @classmethod
    def passthrough(cls) -> "Decision":
        return cls(accept=True)


def classify(origin: Optional[str], selections: Sequence[Range]) -> EditState:
    """Pick the edit state from the origin tag and the selection shape."""
    if origin == ORIGIN_PASTE:
        return EditState.PASTE
    if origin == ORIGIN_INPUT:
        if is_collapsed(list(selections)):
            return EditState.COLLAPSED_INPUT
        return EditState.BLOCK_INPUT
    if origin in (ORIGIN_BACKSPACE, ORIGIN_DELETE):
        return EditState.DELETE
    if origin == ORIGIN_CUT:
        return EditState.CUT_DELETE
    return EditState.PASSTHROUGH


def review(edit: ProposedEdit) -> Decision:
    """Turn a proposed edit into a decision."""
    state = classify(edit.origin, edit.selections)
    if state is EditState.PASTE:
        return plan_paste(edit.text, edit.cursor)
    if state is EditState.BLOCK_INPUT:
        return plan_block_input(edit.text, edit.selections)
    if state is EditState.DELETE:
        forward = edit.origin == ORIGIN_DELETE
        return plan_clear(edit.selections, forward=forward)
    if state is EditState.CUT_DELETE:
        return plan_cut(edit.selections, edit.selected_text)
    return Decision.passthrough()


def plan_paste(lines: Sequence[str], cursor: Position) -> Decision:
    """Overwrite one row per pasted line, starting at the caret.

    The caret stays where the paste started.
    """
    replacements = [
        Replacement(line, cursor.offset(lines=i), cursor.offset(lines=i, chars=len(line)))
        for i, line in enumerate(lines)
    ]
    return Decision(accept=False, replacements=replacements, cursor=cursor)


def plan_block_input(lines: Sequence[str], selections: Sequence[Range]) -> Decision:
    """Fill every selected range with the first typed character."""
    char = lines[0][:1] if lines else ""
    if not char:
        return Decision(accept=False)
    replacements = []
    for selection in selections:
        for cells in _block_cells(selection):
            replacements.append(Replacement(char * cells.width, cells.head, cells.anchor))
    return Decision(accept=False, replacements=replacements)


def plan_clear(selections: Sequence[Range], forward: bool = False) -> Decision:
    """Blank cells instead of deleting them.

    A bare caret clears the cell before it (backspace, caret moves back one
    column) or the cell after it (delete, caret stays). A block becomes
    spaces and the caret goes to its top-left corner.

    Ranges are handled last to first; the caret ends up wherever the first
    range puts it.
    """
    replacements = []
    cursor = None
    for selection in reversed(selections):
        ordered = sorted_selection(selection)
        if ordered.is_empty:
            line, ch = ordered.anchor.line, ordered.anchor.ch
            if forward:
                replacements.append(Replacement(SPACE, Position(line, ch), Position(line, ch + 1)))
                cursor = Position(line, ch)
            else:
                before = Position(line, max(ch - 1, 0))
                replacements.append(Replacement(SPACE, before, Position(line, ch)))
                cursor = before
        else:
            cells = _block_cells(ordered)
            for span in cells:
                replacements.append(Replacement(SPACE * span.width, span.head, span.anchor))
            cursor = cells[0].head
    return Decision(accept=False, replacements=replacements, cursor=cursor)


def plan_cut(selections: Sequence[Range], selected_text: Sequence[str]) -> Decision:
    """Copy the selected ranges, then clear them like backspace does."""
    decision = plan_clear(selections)
    decision.clipboard = EditorConstants.EOL.join(selected_text)
    return decision


def plan_shift_space(cursor: Position) -> Decision:
    """Insert one space at the caret, pushing the rest of the line right."""
    return Decision(accept=False, replacements=[Replacement(SPACE, cursor, cursor)], cursor=cursor)


def plan_enter(cursor: Position, line_text: str) -> Decision:
    """Move to the next line, lined up with the text block under the caret.

    A text block starts two columns after the nearest double space to the
    left of the caret. Without one the column is kept.
    """
    before = line_text[:cursor.ch]
    target = cursor.ch
    spaces = 0
    for i in range(cursor.ch, -1, -1):
        if i < len(before) and before[i] == SPACE:
            spaces += 1
            if spaces == 2:
                target = i + 2
                break
        else:
            spaces = 0
    return Decision(accept=False, cursor=Position(cursor.line + 1, target))


def _block_cells(selection: Range) -> list[Range]:
    """Split a range into single-line spans, head at the lower column."""
    ordered = sorted_selection(selection)
    if ordered.head.line == ordered.anchor.line:
        first, last = sorted((ordered.head.ch, ordered.anchor.ch))
        line = ordered.head.line
        return [Range(anchor=Position(line, last), head=Position(line, first))]
    return square_ranges(ordered.head, ordered.anchor)
