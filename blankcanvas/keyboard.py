"""Key input for the canvas: curtsies tokens and raw control bytes to KeyEvents."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyType(Enum):
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"
    SHIFT_SPECIAL = "shift_special"  # Shift-arrows grow a block


@dataclass
class KeyEvent:
    """One key press.

    ``value`` is a lower-case key name ('left', 'backspace', 'shift_space')
    for special keys, the letter for Ctrl/Alt chords and the typed text
    otherwise. ``raw`` is what the terminal delivered.
    """
    key_type: KeyType
    value: str
    raw: str
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False
    is_sequence: bool = False


SHIFT_SPACE = 'shift_space'

SPECIALS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
    'page_up', 'page_down', 'insert',
}

# Spellings curtsies (and some terminals) use for the same key
_ALIASES = {
    'pageup': 'page_up',
    'pagedown': 'page_down',
    'spacebar': 'space',
    'spc': 'space',
    'esc': 'escape',
    'return': 'enter',
    'del': 'delete',
}

# Control bytes that are keys in their own right rather than Ctrl chords
_CONTROL_KEYS = {
    '\x00': SHIFT_SPACE,  # Ctrl-Space on most terminals
    '\x08': 'backspace',
    '\n': 'enter',
    '\r': 'enter',
    '\x1b': 'escape',
    '\x7f': 'backspace',
}


def _split_token(token: str) -> tuple[str, set[str]]:
    """'<Ctrl-Shift-LEFT>' -> ('left', {'ctrl', 'shift'})."""
    parts = token[1:-1].lower().replace('+', '-').split('-')
    base = _ALIASES.get(parts[-1], parts[-1])
    mods = set(parts[:-1])
    if mods & {'meta', 'esc'}:
        mods.add('alt')
    return base, mods


class KeyboardHandler:
    """Reads keys from a TerminalInterface and parses them."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        key = self.terminal.get_key(timeout)
        return self.parse_key(key) if key else None

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies token ('<LEFT>', '<Ctrl-x>') or a raw key string.

        Shift-Space and Ctrl-Space both become the special key
        ``shift_space``; plain Space is typed.
        """
        key_str = str(key)
        if len(key_str) > 2 and key_str[0] == '<' and key_str[-1] == '>':
            return self._parse_token(key_str)

        if key_str in _CONTROL_KEYS:
            name = _CONTROL_KEYS[key_str]
            return KeyEvent(key_type=KeyType.SPECIAL, value=name, raw=key_str,
                            is_ctrl=key_str == '\x00')
        if len(key_str) == 1 and 1 <= ord(key_str) <= 26:
            letter = chr(ord('a') + ord(key_str) - 1)
            return KeyEvent(key_type=KeyType.CTRL, value=letter, raw=key_str, is_ctrl=True)
        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)

    def _parse_token(self, token: str) -> KeyEvent:
        base, mods = _split_token(token)
        ctrl, shift, alt = 'ctrl' in mods, 'shift' in mods, 'alt' in mods

        if base == 'space':
            if ctrl or shift:
                return KeyEvent(key_type=KeyType.SPECIAL, value=SHIFT_SPACE, raw=token,
                                is_shift=shift, is_ctrl=ctrl)
            if not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
        if ctrl and len(base) == 1:
            if base in ('j', 'm'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=token,
                                is_sequence=True)
            return KeyEvent(key_type=KeyType.CTRL, value=base, raw=token, is_ctrl=True)
        if alt and (base in SPECIALS or len(base) == 1):
            return KeyEvent(key_type=KeyType.ALT, value=base, raw=token, is_alt=True)
        if shift and base in SPECIALS:
            return KeyEvent(key_type=KeyType.SHIFT_SPECIAL, value=base, raw=token,
                            is_shift=True, is_sequence=True)
        if base == 'escape':
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
        # Arrows and the like, but also F-keys and anything unknown
        return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=token, is_sequence=True)
