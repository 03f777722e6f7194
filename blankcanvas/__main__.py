"""blankcanvas CLI entry point.

Allows running via `python -m blankcanvas` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys

from .constants import EditorConstants
from .version import get_version_string

USAGE = "usage: blankcanvas [FILE] [--version] [--keytest]"


def _escape_bytes(s: str) -> str:
    """Key string with control characters spelled out (``\\x1b[A``)."""
    return s.encode('unicode_escape').decode('ascii')


def configure_logging(environ=None) -> None:
    """Log to $BLANKCANVAS_LOG_FILE when set; the terminal owns stdout."""
    env = os.environ if environ is None else environ
    log_file = env.get(EditorConstants.ENV_LOG_FILE)
    if not log_file:
        logging.getLogger().addHandler(logging.NullHandler())
        return
    level_name = env.get(EditorConstants.ENV_LOG_LEVEL, "INFO").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        filename=log_file,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def describe_key(event) -> str:
    """One line describing a parsed KeyEvent, for --keytest."""
    flags = [name for name, on in (('alt', event.is_alt), ('ctrl', event.is_ctrl),
                                   ('shift', event.is_shift), ('seq', event.is_sequence)) if on]
    line = f"{event.key_type.value:<13} {event.value!r:<14} raw='{_escape_bytes(event.raw)}'"
    if flags:
        line += f"  [{'+'.join(flags)}]"
    return line


def run_keyboard_test() -> None:
    """Print how each key press is parsed until ESC.

    Signals and flow control are off so Ctrl-C, Ctrl-Q and Ctrl-V arrive as
    keys, the same as in the editor.
    """
    import termios
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyType

    terminal = TerminalInterface()
    keyboard = KeyboardHandler(terminal)
    terminal.setup()
    print("Press keys to see how they are parsed. ESC quits.")

    saved = None
    try:
        saved = termios.tcgetattr(sys.stdin)
        attrs = list(saved)
        attrs[0] &= ~(termios.IXON | termios.IXOFF)
        attrs[3] &= ~(termios.ISIG | termios.IEXTEN)
        termios.tcsetattr(sys.stdin, termios.TCSANOW, attrs)
    except (termios.error, AttributeError, OSError):
        saved = None

    try:
        while True:
            event = keyboard.get_key_event(timeout=None)
            if event is None:
                continue
            if event.key_type == KeyType.SPECIAL and event.value == 'escape':
                break
            print(describe_key(event))
    finally:
        if saved is not None:
            try:
                termios.tcsetattr(sys.stdin, termios.TCSANOW, saved)
            except (termios.error, OSError):
                pass
        terminal.cleanup()


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0
    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return 0
    if args and args[0] in ('--help', '-h'):
        print(USAGE)
        return 0
    if len(args) > 1:
        print(USAGE, file=sys.stderr)
        return 2

    configure_logging()

    # The editor pulls in blessed and curtsies; --version does not need them
    from .editor import Editor
    editor = Editor(filename=args[0] if args else None)
    try:
        editor.run()
    except OSError as e:
        print(f"blankcanvas: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
