"""Viewport over the canvas for the terminal front end."""

from typing import Optional

from .host import TextHost


class GridView:
    """A num_rows x num_columns window onto the canvas.

    The canvas is at least 300 columns wide, wider than most terminals, so
    the window scrolls both ways. Whenever the caret leaves the window it is
    re-centred on the caret along that axis.
    """

    def __init__(self, host: TextHost, num_rows: int = 24, num_columns: int = 80):
        self.host = host
        self.num_rows = num_rows
        self.num_columns = num_columns
        self.top = 0  # First canvas line shown
        self.left = 0  # First canvas column shown
        self.lines: list[str] = []
        self.visual_cursor_y = 0
        self.visual_cursor_x = 0

    def render(self):
        """Rebuild the visible lines, scrolling to keep the caret in view."""
        cursor = self.host.get_cursor()
        if not self.top <= cursor.line < self.top + self.num_rows:
            self.top = max(0, cursor.line - self.num_rows // 2)
        if not self.left <= cursor.ch < self.left + self.num_columns:
            self.left = max(0, cursor.ch - self.num_columns // 2)

        last = min(self.host.line_count(), self.top + self.num_rows)
        self.lines = [
            self.host.get_line(i)[self.left:self.left + self.num_columns]
            for i in range(self.top, last)
        ]
        self.visual_cursor_y = cursor.line - self.top
        self.visual_cursor_x = cursor.ch - self.left

    def get_selection_ranges(self) -> Optional[list[Optional[tuple[int, int]]]]:
        """Visible selected columns for each visible line.

        Returns:
            One (start_col, end_col) or None per line in ``lines``, or None
            when nothing is selected.
        """
        selections = [r for r in self.host.list_selections() if not r.is_empty]
        if not selections:
            return None
        spans: dict[int, tuple[int, int]] = {}
        for selection in selections:
            start, end = selection.start, selection.end
            for line in range(start.line, end.line + 1):
                first = start.ch if line == start.line else 0
                last = end.ch if line == end.line else len(self.host.get_line(line))
                spans[line] = (first, last)

        ranges: list[Optional[tuple[int, int]]] = []
        for y in range(len(self.lines)):
            span = spans.get(self.top + y)
            if span is None:
                ranges.append(None)
                continue
            first = max(span[0] - self.left, 0)
            last = min(span[1] - self.left, self.num_columns)
            ranges.append((first, last) if first < last else None)
        return ranges
