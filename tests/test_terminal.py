"""Tests for terminal drawing without a real tty."""

import unittest
from unittest.mock import MagicMock, patch

from blankcanvas.terminal import TerminalInterface


def make_term(width=40, height=10):
    term = MagicMock()
    term.width = width
    term.height = height
    term.black_on_white = "[BW]"
    term.white_on_black = "[WB]"
    term.reverse = "[R]"
    term.normal = "[N]"
    term.normal_cursor = "[C]"
    term.home = "[H]"
    term.clear = "[CLR]"
    term.move = lambda y, x: f"[{y},{x}]"
    return term


class TestTerminalInterface(unittest.TestCase):

    def setUp(self):
        self.terminal = TerminalInterface(make_term())

    def test_height_reserves_status_line(self):
        self.assertEqual(self.terminal.height, 9)
        self.assertEqual(self.terminal.width, 40)

    def test_palette_follows_theme(self):
        self.assertEqual(self.terminal.palette, "[BW]")
        self.terminal.set_theme("dark")
        self.assertEqual(self.terminal.palette, "[WB]")

    def test_plain_line_is_padded(self):
        line = self.terminal._compose_display_line("abc", 6)
        self.assertEqual(line, "[BW]abc   [N]")

    def test_selected_span_is_reversed(self):
        line = self.terminal._compose_display_line("abcdef", 6, (1, 3))
        self.assertEqual(line, "[BW]a[R]bc[N][BW]def[N]")

    def test_status_keeps_help_hint_on_the_right(self):
        status = self.terminal.format_status("Block copied", "Ln 1, Col 1")
        self.assertEqual(len(status), 40)
        self.assertTrue(status.startswith(" Block copied"))
        self.assertTrue(status.rstrip().endswith("F1 for help"))

    def test_status_shows_details_without_message(self):
        status = self.terminal.format_status(None, "Ln 4, Col 9")
        self.assertTrue(status.startswith(" Ln 4, Col 9"))

    @patch('builtins.print')
    def test_unchanged_frame_only_moves_cursor(self, mock_print):
        lines = ["row"] * 9
        self.terminal.update_frame(lines, 0, 0, view_width=40, status="s")
        first_calls = mock_print.call_count
        self.assertGreater(first_calls, 9)

        mock_print.reset_mock()
        self.terminal.update_frame(lines, 2, 3, view_width=40, status="s")
        mock_print.assert_called_once_with("[2,3][C]", end='', flush=True)

    @patch('builtins.print')
    def test_theme_change_repaints(self, mock_print):
        lines = ["row"] * 9
        self.terminal.update_frame(lines, 0, 0, view_width=40)
        self.terminal.set_theme("dark")
        mock_print.reset_mock()
        self.terminal.update_frame(lines, 0, 0, view_width=40)
        self.assertIn("[H][WB][CLR][N]", [c.args[0] for c in mock_print.call_args_list])

    def test_no_input_without_curtsies(self):
        self.assertIsNone(self.terminal.get_key(timeout=0))
