"""Tests for system clipboard access."""

import unittest
from unittest.mock import patch

import pyperclip

from blankcanvas.clipboard import ClipboardManager


@patch("blankcanvas.clipboard.sys.platform", "linux")
class TestClipboardManager(unittest.TestCase):

    @patch("blankcanvas.clipboard.pyperclip.copy")
    def test_copy(self, mock_copy):
        self.assertTrue(ClipboardManager.copy_text("ab\ncd"))
        mock_copy.assert_called_once_with("ab\ncd")

    @patch("blankcanvas.clipboard.pyperclip.copy",
           side_effect=pyperclip.PyperclipException("no clipboard"))
    def test_copy_without_clipboard(self, mock_copy):
        with self.assertLogs("blankcanvas.clipboard", level="WARNING"):
            self.assertFalse(ClipboardManager.copy_text("x"))

    @patch("blankcanvas.clipboard.pyperclip.paste", return_value="hello")
    def test_paste(self, mock_paste):
        self.assertEqual(ClipboardManager.paste_text(), "hello")

    @patch("blankcanvas.clipboard.pyperclip.paste", return_value=None)
    def test_paste_nothing(self, mock_paste):
        self.assertEqual(ClipboardManager.paste_text(), "")

    @patch("blankcanvas.clipboard.pyperclip.paste",
           side_effect=pyperclip.PyperclipException("no clipboard"))
    def test_paste_without_clipboard(self, mock_paste):
        self.assertEqual(ClipboardManager.paste_text(), "")
