"""Block selection normalizer.

Every proposed selection is forced into an axis-aligned rectangle: one range
per line, all with the same column bounds. A diagonal drag therefore selects
a block of cells instead of a stream of text.
"""

from .geometry import Position, Range


def sorted_selection(selection: Range) -> Range:
    """Relabel a range so the geometrically later point is the anchor.

    Only the labels may swap; the two points are never changed.
    """
    anchor, head = selection.anchor, selection.head
    if anchor.line == head.line:
        if anchor.ch < head.ch:
            return Range(anchor=head, head=anchor)
    elif anchor.line < head.line:
        return Range(anchor=head, head=anchor)
    return selection


def square_ranges(head: Position, anchor: Position) -> list[Range]:
    """Expand two corner points into one range per covered line.

    Each range spans the same columns; its lower column is the head and its
    higher column the anchor.
    """
    first_line, last_line = sorted((head.line, anchor.line))
    first_ch, last_ch = sorted((head.ch, anchor.ch))
    return [
        Range(anchor=Position(line, last_ch), head=Position(line, first_ch))
        for line in range(first_line, last_line + 1)
    ]


def normalize_selection(ranges: list[Range]) -> list[Range]:
    """Collapse a proposed multi-range selection into a single block.

    The block spans from the start of the first range to the end of the
    last one, whatever order the carets were created in.
    """
    if not ranges:
        return []
    head = sorted_selection(ranges[0]).head
    anchor = sorted_selection(ranges[-1]).anchor
    return square_ranges(head, anchor)
