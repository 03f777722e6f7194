"""Cell coordinates and selection ranges on the canvas."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Position:
    """A cell coordinate, ordered line-major then column-major."""

    line: int = 0
    ch: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "ch": self.ch}

    def offset(self, lines: int = 0, chars: int = 0) -> "Position":
        return Position(self.line + lines, self.ch + chars)


@dataclass(frozen=True)
class Range:
    """An unordered pair of positions; either endpoint may be the drag start."""

    anchor: Position
    head: Position

    @classmethod
    def caret(cls, pos: Position) -> "Range":
        return cls(anchor=pos, head=pos)

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.head

    @property
    def start(self) -> Position:
        return min(self.anchor, self.head)

    @property
    def end(self) -> Position:
        return max(self.anchor, self.head)

    @property
    def width(self) -> int:
        """Column extent, regardless of which endpoint comes first."""
        return abs(self.head.ch - self.anchor.ch)


def is_collapsed(selections: list[Range]) -> bool:
    """True for exactly one caret with no extent."""
    return len(selections) == 1 and selections[0].is_empty
