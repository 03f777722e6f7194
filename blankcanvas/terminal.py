"""Drawing the canvas with blessed and reading keys with curtsies."""

import blessed
from typing import Optional
import sys
import select

from .constants import EditorConstants


class TerminalInterface:
    """Fullscreen canvas window with a status line at the bottom.

    Frames are diffed against the previous one so a keystroke repaints only
    the rows that changed.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self.theme = "light"
        self._input: Optional[object] = None
        # Rows, status and theme as last written to the screen
        self._shown_rows: Optional[list[str]] = None
        self._shown_status: Optional[str] = None
        self._shown_theme: Optional[str] = None

    def setup(self):
        """Switch to the alternate screen and start reading raw keys."""
        print(self.term.enter_fullscreen)
        print(self.term.hide_cursor)
        print(self.term.clear)
        self.is_fullscreen = True
        if self._input is None:
            self._input = self._open_input()

    @staticmethod
    def _open_input():
        try:
            from curtsies import Input  # type: ignore
            keys = Input(keynames='curtsies')  # type: ignore
            keys.__enter__()
        except Exception:
            # No usable tty (piped stdin, CI); the canvas still draws
            return None
        return keys

    def cleanup(self):
        """Leave the alternate screen and give the tty back."""
        if self.is_fullscreen:
            print(self.term.normal + self.term.exit_fullscreen)
            print(self.term.normal_cursor)
            self.is_fullscreen = False
        keys, self._input = self._input, None
        if keys is not None:
            try:
                keys.__exit__(None, None, None)  # type: ignore
            except Exception:
                # curtsies may have restored the tty already
                pass

    def invalidate_frame(self) -> None:
        """Forget what is on screen so the next frame repaints everything."""
        self._shown_rows = None
        self._shown_status = None
        self._shown_theme = None

    def set_theme(self, theme: str) -> None:
        """Use the ``dark`` or ``light`` palette for the canvas."""
        self.theme = theme

    @property
    def palette(self) -> str:
        """Colour sequence for canvas cells in the current theme."""
        if self.theme == "dark":
            return self.term.white_on_black
        return self.term.black_on_white

    def _compose_display_line(self, line: str, view_width: int,
                              selection: Optional[tuple[int, int]] = None) -> str:
        """Compose one canvas row, the selected span in reverse video."""
        cells = line[:view_width].ljust(view_width)
        palette = self.palette
        if not selection:
            return palette + cells + self.term.normal
        start, end = selection
        return (
            palette + cells[:start]
            + self.term.reverse + cells[start:end] + self.term.normal
            + palette + cells[end:] + self.term.normal
        )

    def format_status(self, message: Optional[str], details: str = "") -> str:
        """Status line: message (or details) left, help hint right."""
        width = self.term.width
        help_text = EditorConstants.HELP_HINT
        left = f" {message}" if message else f" {details}" if details else ""
        room = max(0, width - len(help_text) - 1)
        return left[:room].ljust(room) + help_text + " " * max(0, width - room - len(help_text))

    def update_frame(
        self,
        lines: list[str],
        cursor_y: int,
        cursor_x: int,
        view_width: int,
        status: str = "",
        selection_ranges: Optional[list] = None,
    ) -> None:
        """Paint a frame, writing only rows that differ from the last one.

        The screen is cleared first on the first frame, after a height
        change and after a theme change.
        """
        rows = max(0, self.term.height - 1)
        lines = list(lines[:rows]) + [""] * max(0, rows - len(lines))
        if (self._shown_rows is None or len(self._shown_rows) != len(lines)
                or self._shown_theme != self.theme):
            print(self.term.home + self.palette + self.term.clear + self.term.normal, end='')
            self._shown_rows = [""] * len(lines)
            self._shown_status = None
            self._shown_theme = self.theme

        spans = selection_ranges or []
        for y, line in enumerate(lines):
            row = self._compose_display_line(line, view_width, spans[y] if y < len(spans) else None)
            if row != self._shown_rows[y]:
                print(self.term.move(y, 0) + row, end='')
                self._shown_rows[y] = row

        if status != (self._shown_status or ""):
            print(self.term.move(self.term.height - 1, 0) + self.term.reverse + status
                  + self.term.normal, end='')
            self._shown_status = status

        print(self.term.move(cursor_y, cursor_x) + self.term.normal_cursor, end='', flush=True)

    def get_key(self, timeout=None):
        """Next key as a curtsies token.

        Args:
            timeout: Seconds to wait; None waits forever, 0 polls

        Returns:
            The token, or None when nothing arrived or there is no input.
        """
        if self._input is None:
            return None
        if timeout is not None:
            ready, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not ready:
                return None
        return str(next(self._input))

    @property
    def width(self):
        return self.term.width

    @property
    def height(self):
        """Rows available to the canvas (the last one is the status line)."""
        return self.term.height - 1
