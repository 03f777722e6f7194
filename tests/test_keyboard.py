"""Test keyboard input handling."""

import pytest
from unittest.mock import Mock
from blankcanvas.keyboard import SHIFT_SPACE, KeyboardHandler, KeyType


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        """Mock get_key that returns from queue."""
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str):
        """Add a key to the queue."""
        key = Mock()
        key.__str__ = lambda self: key_str
        self._key_queue.append(key)


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


def test_no_key_gives_none(handler):
    assert handler.get_key_event(timeout=0) is None


def test_queued_key_is_parsed():
    terminal = MockTerminal()
    handler = KeyboardHandler(terminal)
    terminal.add_key('<LEFT>')
    event = handler.get_key_event()
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'left'


@pytest.mark.parametrize("token", ['<Shift-SPACE>', '<Ctrl-SPACE>', '\x00'])
def test_shift_space_variants(handler, token):
    event = handler.parse_key(token)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == SHIFT_SPACE


def test_plain_space_is_typed(handler):
    event = handler.parse_key('<SPACE>')
    assert event.key_type == KeyType.REGULAR
    assert event.value == ' '


@pytest.mark.parametrize("token,value", [
    ('<UP>', 'up'),
    ('<HOME>', 'home'),
    ('<END>', 'end'),
    ('<DELETE>', 'delete'),
    ('<BACKSPACE>', 'backspace'),
    ('<PAGEUP>', 'page_up'),
])
def test_special_keys(handler, token, value):
    event = handler.parse_key(token)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == value


def test_shift_arrows(handler):
    event = handler.parse_key('<Shift-RIGHT>')
    assert event.key_type == KeyType.SHIFT_SPECIAL
    assert event.value == 'right'
    assert event.is_shift


@pytest.mark.parametrize("token", ['<Ctrl-j>', '\n', '\r'])
def test_enter_variants(handler, token):
    event = handler.parse_key(token)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'enter'


@pytest.mark.parametrize("token", ['\x7f', '\x08'])
def test_backspace_bytes(handler, token):
    assert handler.parse_key(token).value == 'backspace'


def test_ctrl_letters(handler):
    for token, letter in (('\x03', 'c'), ('\x16', 'v'), ('\x18', 'x'), ('<Ctrl-q>', 'q')):
        event = handler.parse_key(token)
        assert event.key_type == KeyType.CTRL
        assert event.value == letter
        assert event.is_ctrl


def test_escape(handler):
    assert handler.parse_key('\x1b').value == 'escape'
    assert handler.parse_key('<ESC>').value == 'escape'


def test_function_key_stays_special(handler):
    event = handler.parse_key('<F1>')
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'f1'


def test_alt_keys(handler):
    event = handler.parse_key('<Esc+b>')
    assert event.key_type == KeyType.ALT
    assert event.value == 'b'


def test_printable_and_unicode(handler):
    assert handler.parse_key('a').key_type == KeyType.REGULAR
    event = handler.parse_key('é')
    assert event.key_type == KeyType.REGULAR
    assert event.value == 'é'
