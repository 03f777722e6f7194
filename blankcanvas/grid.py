"""Rectangular shape of the canvas text.

The canvas is kept as a block of equally long lines. ``fill`` is the reflow
step run on load and after every burst of edits; it only ever grows the
block to fit content.
"""

from .constants import EditorConstants

EOL = EditorConstants.EOL
SPACE = EditorConstants.SPACE


def fill(text: str,
         lines: int = EditorConstants.BASELINE_LINES,
         columns: int = EditorConstants.BASELINE_COLUMNS) -> str:
    """Pad text into a rectangle of at least ``lines`` x ``columns`` cells.

    Trailing whitespace on each line is discarded before measuring, so the
    width is the widest real content (or the baseline, whichever is larger).

    Args:
        text: Document text with lines separated by EOL
        lines: Baseline row count
        columns: Baseline column count

    Returns:
        The filled text. ``fill(fill(t)) == fill(t)`` for every ``t``.
    """
    content = [line.rstrip() for line in text.split(EOL)]
    row_count = max(lines, len(content))
    width = max([columns] + [len(line) for line in content])

    result = []
    for index in range(row_count):
        line = content[index] if index < len(content) else ""
        result.append(line.ljust(width, SPACE))
    return EOL.join(result)


def grid_size(text: str) -> tuple[int, int]:
    """Return (rows, columns) of text, columns being the longest line."""
    rows = text.split(EOL)
    return len(rows), max(len(row) for row in rows)


def trim_text(text: str) -> str:
    """Strip the padding fill() adds, for compact storage."""
    return EOL.join(line.rstrip() for line in text.rstrip().split(EOL))
