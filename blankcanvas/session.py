"""Editing session: one canvas, its hooks, and the actions keys map to.

The session owns the current ``Config`` (there is no global one). All host
edits pass through ``before_change`` where the edit guard decides what they
become; every proposed selection is squared into a block by the
normalizer.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from . import edit_guard
from .clipboard import ClipboardManager
from .config_scanner import Config, scan_config
from .constants import EditorConstants
from .display import Display
from .edit_guard import Decision, ProposedEdit
from .geometry import Position, Range
from .grid import fill
from .host import (
    BEFORE_CHANGE,
    BEFORE_SELECTION_CHANGE,
    CHANGE,
    CURSOR_ACTIVITY,
    ORIGIN_SET_VALUE,
    ChangeEvent,
    SelectionChangeEvent,
    TextHost,
)
from .persistence import DocumentStore
from .reflow import ReflowController
from .selection import normalize_selection

logger = logging.getLogger(__name__)

EOL = EditorConstants.EOL


class EditingSession:
    """Wires a text host to the overwrite-only editing rules.

    Args:
        host: Text widget holding the canvas
        store: Where text and caret are loaded from and saved to
        clipboard: System clipboard access
        display: Receives the scanned config after every reflow pass
        delay: Seconds of quiet before a reflow pass
        clock: Monotonic clock for the reflow deadline
    """

    def __init__(self, host: TextHost, store: DocumentStore,
                 clipboard: Optional[ClipboardManager] = None,
                 display: Optional[Display] = None,
                 delay: float = EditorConstants.REFLOW_DELAY,
                 clock: Callable[[], float] = time.monotonic):
        self.host = host
        self.store = store
        self.clipboard = clipboard if clipboard is not None else ClipboardManager()
        self.display = display if display is not None else Display(refresh=host.refresh)
        self.config = Config()
        self.reflow = ReflowController(self.reflow_now, delay=delay, clock=clock)
        # Fixed corner and moving corner while shift-arrows grow a block
        self._drag: Optional[tuple[Position, Position]] = None
        self._started = False

    def start(self) -> None:
        """Load the canvas, hook into the host and restore the caret."""
        if self._started:
            return
        self._started = True
        text = self.store.load()
        self.host.overwrite = True
        self.host.set_value(fill(text))

        self.host.on(BEFORE_CHANGE, self._on_before_change)
        self.host.on(CHANGE, self._on_change)
        self.host.on(BEFORE_SELECTION_CHANGE, self._on_before_selection_change)
        self.host.on(CURSOR_ACTIVITY, self._on_cursor_activity)

        self.host.set_cursor(self.store.load_cursor())
        self.rescan()
        logger.info("Session started on %s", self.store.text_path)

    # --- Hooks ---

    def _on_before_change(self, host: TextHost, event: ChangeEvent) -> None:
        if event.origin == ORIGIN_SET_VALUE:
            return
        edit = ProposedEdit(
            origin=event.origin,
            text=tuple(event.text),
            selections=tuple(host.list_selections()),
            cursor=host.get_cursor(),
        )
        decision = edit_guard.review(edit)
        if decision.accept:
            return
        event.cancel()
        self.apply_decision(decision)

    def _on_change(self, host: TextHost, event: ChangeEvent) -> None:
        if event.origin == ORIGIN_SET_VALUE:
            return
        self.store.save(host.get_value())
        self.reflow.schedule()

    def _on_before_selection_change(self, host: TextHost, event: SelectionChangeEvent) -> None:
        event.update(normalize_selection(event.ranges))

    def _on_cursor_activity(self, host: TextHost) -> None:
        self.store.save_cursor(host.get_cursor())

    # --- Applying decisions ---

    def apply_decision(self, decision: Decision) -> None:
        """Carry out a rejected edit's replacements, then place the caret."""
        if decision.clipboard is not None:
            self.clipboard.copy_text(decision.clipboard)
        for replacement in decision.replacements:
            self.host.replace_range(replacement.text, replacement.start, replacement.end)
        if decision.cursor is not None:
            self.host.set_cursor(decision.cursor)

    def _run(self, origin: str, selected_text: tuple[str, ...] = ()) -> Decision:
        edit = ProposedEdit(
            origin=origin,
            selections=tuple(self.host.list_selections()),
            cursor=self.host.get_cursor(),
            selected_text=selected_text,
        )
        decision = edit_guard.review(edit)
        self.apply_decision(decision)
        return decision

    # --- Reflow ---

    def reflow_now(self) -> None:
        """Fill the canvas back into a rectangle and rescan directives.

        The selection is put back after the buffer is rewritten.
        """
        selections = self.host.list_selections()
        self.host.set_value(fill(self.host.get_value()))
        self.host.set_selections(selections)
        self.store.save(self.host.get_value())
        self.rescan()

    def rescan(self) -> Config:
        self.config = scan_config(self.host.get_value())
        self.display.apply(self.config)
        return self.config

    def poll(self) -> bool:
        """Run a due reflow pass; called from the event loop."""
        return self.reflow.poll()

    # --- Editing actions ---

    def type_text(self, text: str) -> None:
        self._drag = None
        self.host.type_text(text)

    def paste(self, text: Optional[str] = None) -> None:
        """Overwrite from the caret with text (the clipboard when None)."""
        self._drag = None
        if text is None:
            text = self.clipboard.paste_text()
        text = text.replace("\r\n", EOL).replace("\r", EOL)
        if text:
            self.host.paste(text)

    def backspace(self) -> None:
        self._drag = None
        self._run(edit_guard.ORIGIN_BACKSPACE)
        self.reflow.flush()

    def delete(self) -> None:
        self._drag = None
        self._run(edit_guard.ORIGIN_DELETE)
        self.reflow.flush()

    def cut(self) -> None:
        self._drag = None
        self._run(edit_guard.ORIGIN_CUT, selected_text=tuple(self.host.get_selections()))
        self.reflow.flush()

    def copy(self) -> bool:
        """Copy the selected block, one line per row."""
        return self.clipboard.copy_text(EOL.join(self.host.get_selections()))

    def shift_space(self) -> None:
        self._drag = None
        self.apply_decision(edit_guard.plan_shift_space(self.host.get_cursor()))

    def enter(self) -> None:
        self._drag = None
        cursor = self.host.get_cursor()
        self.apply_decision(edit_guard.plan_enter(cursor, self.host.get_line(cursor.line)))

    # --- Caret and selection ---

    def move_cursor(self, lines: int = 0, chars: int = 0) -> None:
        self._drag = None
        cursor = self.host.get_cursor()
        self.host.set_cursor(self._clamp(cursor.offset(lines, chars)))

    def move_home(self) -> None:
        self._drag = None
        self.host.set_cursor(Position(self.host.get_cursor().line, 0))

    def move_end(self) -> None:
        """Caret to just after the last non-blank cell of the line."""
        self._drag = None
        line = self.host.get_cursor().line
        self.host.set_cursor(Position(line, len(self.host.get_line(line).rstrip())))

    def extend_block(self, lines: int = 0, chars: int = 0) -> None:
        """Grow or shrink the block by moving its free corner."""
        if self._drag is None:
            cursor = self.host.get_cursor()
            self._drag = (cursor, cursor)
        anchor, head = self._drag
        head = self._clamp(head.offset(lines, chars))
        self.host.set_selections([Range(anchor=anchor, head=head)])
        self._drag = (anchor, head)

    def select_block(self, anchor: Position, head: Position) -> None:
        """Select the block with corners anchor and head, like a mouse drag."""
        self._drag = (anchor, head)
        self.host.set_selections([Range(anchor=anchor, head=head)])

    def collapse_selection(self) -> None:
        self._drag = None
        self.host.set_cursor(self.host.get_cursor())

    def _clamp(self, pos: Position) -> Position:
        line = min(max(pos.line, 0), self.host.line_count() - 1)
        ch = min(max(pos.ch, 0), len(self.host.get_line(line)))
        return Position(line, ch)
