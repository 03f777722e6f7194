"""Terminal front end: key loop, drawing and the help screen."""

import logging
import os
import sys
import select
import signal
import termios
from contextlib import contextmanager
from typing import Optional

from .commands import CommandRegistry
from .constants import EditorConstants
from .display import Display
from .document import GridDocument
from .host import REFRESH
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .persistence import DocumentStore
from .session import EditingSession
from .terminal import TerminalInterface
from .view import GridView

logger = logging.getLogger(__name__)

# Written to the wake-up pipe by the SIGINT handler
CTRL_C_MARKER = b'C'

HELP_LINES = [
    "",
    "The canvas is a grid. Typing overwrites, nothing shifts.",
    "",
    "MOVING                         EDITING",
    "  Arrows      Move caret         Backspace  Blank cell to the left",
    "  Shift-Arrow Select block       Delete     Blank cell under caret",
    "  Home/End    Line start/end     Ctrl-D     Same as Backspace",
    "  Enter       Next line, same    Shift-Spc  Insert one space",
    "              text column        Ctrl-X     Cut block",
    "  Esc         Drop selection     Ctrl-C     Copy block",
    "                                 Ctrl-V     Paste over canvas",
    "",
    "DISPLAY (write anywhere in the text, spaces included)",
    "   r.schema dark      r.font Fira Code      r.size 16",
    "",
    "  F1  Help      Ctrl-Q  Quit (everything is saved as you type)",
]

COPY_EVENT = KeyEvent(key_type=KeyType.CTRL, value='c', raw='\x03', is_ctrl=True)


class Editor:
    """Runs one editing session in the terminal.

    Args:
        filename: Text file to edit instead of the default canvas
        store: Storage to use (overrides filename)
        terminal: Terminal to draw on
    """

    def __init__(self, filename: Optional[str] = None,
                 store: Optional[DocumentStore] = None,
                 terminal: Optional[TerminalInterface] = None):
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.document = GridDocument()
        self.store = store or DocumentStore(text_path=filename)
        self.display = Display(refresh=self.document.refresh)
        self.session = EditingSession(self.document, self.store, display=self.display)
        self.view = GridView(self.document, num_rows=self.terminal.height,
                             num_columns=self.terminal.width)
        self.command_registry = CommandRegistry()
        self.document.on(REFRESH, self._on_refresh)
        self.running = False
        self.status_message: Optional[str] = None
        self.help_visible = False
        self._ctrl_c_pressed = False
        # Signal handlers only write to this pipe; the loop selects on it
        self._wake_r, self._wake_w = os.pipe()

    def _on_refresh(self, host):
        self.terminal.set_theme(self.display.theme_class)

    def _handle_resize(self, signum, frame):
        del signum, frame
        os.write(self._wake_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _handle_sigint(self, signum, frame):
        """Ctrl-C copies; it never interrupts the editor."""
        del signum, frame
        self._ctrl_c_pressed = True
        os.write(self._wake_w, CTRL_C_MARKER)

    @contextmanager
    def _signals(self):
        previous = {
            signal.SIGWINCH: signal.signal(signal.SIGWINCH, self._handle_resize),
            signal.SIGINT: signal.signal(signal.SIGINT, self._handle_sigint),
        }
        try:
            yield
        finally:
            for signum, handler in previous.items():
                signal.signal(signum, handler)

    @contextmanager
    def _raw_keys(self):
        """cbreak mode, with XON/XOFF and literal-next turned off.

        Without this the tty would swallow Ctrl-Q, Ctrl-S and Ctrl-V.
        """
        with self.terminal.term.cbreak():
            saved = None
            try:
                saved = termios.tcgetattr(sys.stdin)
                attrs = list(saved)
                attrs[0] &= ~(termios.IXON | termios.IXOFF)
                attrs[3] &= ~termios.IEXTEN
                termios.tcsetattr(sys.stdin, termios.TCSANOW, attrs)
            except (termios.error, AttributeError, OSError):
                saved = None
            try:
                yield
            finally:
                if saved is not None:
                    try:
                        termios.tcsetattr(sys.stdin, termios.TCSANOW, saved)
                    except (termios.error, OSError):
                        pass

    def run(self):
        """Load the canvas and edit until Ctrl-Q.

        Raises:
            OSError: the canvas could not be loaded or saved at startup
        """
        self.terminal.setup()
        self.running = True
        try:
            with self._signals():
                self.session.start()
                with self._raw_keys():
                    self._loop()
        except KeyboardInterrupt:
            pass
        finally:
            os.close(self._wake_r)
            os.close(self._wake_w)
            self.terminal.cleanup()

    def _loop(self):
        dirty = True
        while self.running:
            if dirty:
                self._draw()
                dirty = False

            # Wake for a key, a signal, or when the pending reflow is due
            ready, _, _ = select.select([0, self._wake_r], [], [],
                                       self.session.reflow.remaining())
            if self._wake_r in ready:
                os.read(self._wake_r, 1024)
                if self._ctrl_c_pressed:
                    self._ctrl_c_pressed = False
                    self.handle_key_event(COPY_EVENT)
                else:
                    self.terminal.invalidate_frame()
                dirty = True
            elif 0 in ready:
                key_event = self.keyboard.get_key_event(timeout=0)
                if key_event:
                    self.handle_key_event(key_event)
                    dirty = True

            if self.poll_reflow():
                dirty = True

    def handle_key_event(self, key_event: KeyEvent) -> bool:
        """Dispatch one key.

        A save failure does not stop the editor: it is logged and shown in
        the status line.

        Returns:
            True if the canvas changed
        """
        if self.help_visible:
            self.hide_help()
            return False
        self.status_message = None
        try:
            return self.command_registry.execute(self, key_event)
        except OSError as e:
            self._report_save_error(e)
            return False

    def poll_reflow(self) -> bool:
        """Run a due reflow pass. True if the screen needs a redraw."""
        try:
            return self.session.poll()
        except OSError as e:
            self._report_save_error(e)
            return True

    def _report_save_error(self, error: OSError) -> None:
        logger.error("Could not save canvas: %s", error)
        self.status_message = f"Error: could not save ({error.strerror or error})"

    def _status_details(self) -> str:
        cursor = self.document.get_cursor()
        font = self.display.variables.get('--config-font', '')
        size = self.display.variables.get('--config-size', '')
        return (f"Ln {cursor.line + 1}, Col {cursor.ch + 1}   "
                f"{self.display.theme_class}  {font} {size}")

    def _draw(self):
        if self.help_visible:
            self._draw_help()
            return

        self.view.num_rows = self.terminal.height
        self.view.num_columns = self.terminal.width
        self.view.render()
        self.terminal.update_frame(
            self.view.lines,
            self.view.visual_cursor_y,
            self.view.visual_cursor_x,
            view_width=self.terminal.width,
            status=self.terminal.format_status(self.status_message, self._status_details()),
            selection_ranges=self.view.get_selection_ranges(),
        )

    def _draw_help(self):
        term = self.terminal.term
        try:
            width, height = int(term.width), int(term.height)
        except (TypeError, ValueError):
            width, height = 80, 24

        out = [str(term.clear())]
        title = "BLANKCANVAS HELP"
        out.append(f"{term.move(1, (width - len(title)) // 2)}{term.bold}{title}{term.normal}")
        top = max(3, (height - len(HELP_LINES)) // 2)
        margin = max(0, (width - max(len(line) for line in HELP_LINES)) // 2)
        for i, line in enumerate(HELP_LINES):
            out.append(f"{term.move(top + i, margin)}{line}")
        out.append(f"{term.move(height - 1, 0)} Press any key to continue")
        out.append(str(term.hide_cursor))
        print(''.join(out), end='', flush=True)

    def show_help(self):
        self.help_visible = True

    def hide_help(self):
        self.help_visible = False
        self.terminal.invalidate_frame()
