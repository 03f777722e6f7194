"""Tests for the overwrite-only edit decisions."""

import unittest

from blankcanvas.edit_guard import (
    EditState,
    ProposedEdit,
    Replacement,
    classify,
    plan_block_input,
    plan_clear,
    plan_cut,
    plan_enter,
    plan_paste,
    plan_shift_space,
    review,
)
from blankcanvas.geometry import Position, Range

P = Position
CARET = [Range.caret(P(2, 4))]
BLOCK = [
    Range(anchor=P(1, 5), head=P(1, 2)),
    Range(anchor=P(2, 5), head=P(2, 2)),
]


class TestClassify(unittest.TestCase):

    def test_paste(self):
        self.assertIs(classify("paste", CARET), EditState.PASTE)

    def test_input_on_caret(self):
        self.assertIs(classify("+input", CARET), EditState.COLLAPSED_INPUT)

    def test_input_on_block(self):
        self.assertIs(classify("+input", BLOCK), EditState.BLOCK_INPUT)

    def test_input_on_several_carets(self):
        carets = [Range.caret(P(1, 3)), Range.caret(P(2, 3))]
        self.assertIs(classify("+input", carets), EditState.BLOCK_INPUT)

    def test_delete_origins(self):
        self.assertIs(classify("+backspace", CARET), EditState.DELETE)
        self.assertIs(classify("+delete", BLOCK), EditState.DELETE)

    def test_cut(self):
        self.assertIs(classify("cut", BLOCK), EditState.CUT_DELETE)

    def test_everything_else_passes(self):
        for origin in (None, "setValue", "+move", "undo"):
            self.assertIs(classify(origin, CARET), EditState.PASSTHROUGH)


class TestReview(unittest.TestCase):

    def test_caret_input_is_accepted(self):
        decision = review(ProposedEdit(origin="+input", text=("x",), selections=tuple(CARET),
                                       cursor=P(2, 4)))
        self.assertTrue(decision.accept)
        self.assertEqual(decision.replacements, [])

    def test_untagged_change_is_accepted(self):
        decision = review(ProposedEdit(origin=None, text=(" ",), selections=tuple(CARET)))
        self.assertTrue(decision.accept)

    def test_block_input_is_rejected_and_replaced(self):
        decision = review(ProposedEdit(origin="+input", text=("x",), selections=tuple(BLOCK),
                                       cursor=P(2, 2)))
        self.assertFalse(decision.accept)
        self.assertEqual(decision.replacements, [
            Replacement("xxx", P(1, 2), P(1, 5)),
            Replacement("xxx", P(2, 2), P(2, 5)),
        ])
        self.assertIsNone(decision.cursor)

    def test_delete_uses_forward_plan(self):
        decision = review(ProposedEdit(origin="+delete", selections=tuple(CARET), cursor=P(2, 4)))
        self.assertEqual(decision.replacements, [Replacement(" ", P(2, 4), P(2, 5))])
        self.assertEqual(decision.cursor, P(2, 4))

    def test_cut_carries_clipboard(self):
        decision = review(ProposedEdit(origin="cut", selections=tuple(BLOCK), cursor=P(2, 2),
                                       selected_text=("abc", "def")))
        self.assertEqual(decision.clipboard, "abc\ndef")


class TestPaste(unittest.TestCase):

    def test_each_line_overwrites_one_row(self):
        decision = plan_paste(["ab", "cd"], P(5, 10))
        self.assertFalse(decision.accept)
        self.assertEqual(decision.replacements, [
            Replacement("ab", P(5, 10), P(5, 12)),
            Replacement("cd", P(6, 10), P(6, 12)),
        ])
        self.assertEqual(decision.cursor, P(5, 10))

    def test_empty_line_in_paste_changes_nothing_on_that_row(self):
        decision = plan_paste(["a", "", "b"], P(0, 0))
        self.assertEqual(decision.replacements[1], Replacement("", P(1, 0), P(1, 0)))


class TestBlockInput(unittest.TestCase):

    def test_only_first_character_is_used(self):
        decision = plan_block_input(["xyz"], [Range(anchor=P(0, 1), head=P(0, 3))])
        self.assertEqual(decision.replacements, [Replacement("xx", P(0, 1), P(0, 3))])

    def test_zero_width_carets_change_nothing(self):
        carets = [Range.caret(P(1, 3)), Range.caret(P(2, 3))]
        decision = plan_block_input(["x"], carets)
        self.assertFalse(decision.accept)
        self.assertTrue(all(r.text == "" for r in decision.replacements))

    def test_nothing_typed(self):
        decision = plan_block_input([""], BLOCK)
        self.assertFalse(decision.accept)
        self.assertEqual(decision.replacements, [])


class TestClear(unittest.TestCase):

    def test_backspace_blanks_previous_cell(self):
        decision = plan_clear([Range.caret(P(3, 8))])
        self.assertEqual(decision.replacements, [Replacement(" ", P(3, 7), P(3, 8))])
        self.assertEqual(decision.cursor, P(3, 7))

    def test_backspace_at_line_start_clamps(self):
        decision = plan_clear([Range.caret(P(3, 0))])
        self.assertEqual(decision.replacements, [Replacement(" ", P(3, 0), P(3, 0))])
        self.assertEqual(decision.cursor, P(3, 0))

    def test_delete_blanks_cell_under_caret(self):
        decision = plan_clear([Range.caret(P(3, 8))], forward=True)
        self.assertEqual(decision.replacements, [Replacement(" ", P(3, 8), P(3, 9))])
        self.assertEqual(decision.cursor, P(3, 8))

    def test_block_becomes_spaces_last_range_first(self):
        decision = plan_clear(BLOCK)
        self.assertEqual(decision.replacements, [
            Replacement("   ", P(2, 2), P(2, 5)),
            Replacement("   ", P(1, 2), P(1, 5)),
        ])
        self.assertEqual(decision.cursor, P(1, 2))

    def test_multi_line_range_is_squared(self):
        decision = plan_clear([Range(anchor=P(0, 5), head=P(1, 2))])
        self.assertEqual(decision.replacements, [
            Replacement("   ", P(0, 2), P(0, 5)),
            Replacement("   ", P(1, 2), P(1, 5)),
        ])
        self.assertEqual(decision.cursor, P(0, 2))

    def test_cut_of_one_line(self):
        decision = plan_cut([Range(anchor=P(0, 4), head=P(0, 8))], ["abcd"])
        self.assertEqual(decision.clipboard, "abcd")
        self.assertEqual(decision.replacements, [Replacement("    ", P(0, 4), P(0, 8))])
        self.assertEqual(decision.cursor, P(0, 4))


class TestKeyActions(unittest.TestCase):

    def test_shift_space_inserts_without_moving(self):
        decision = plan_shift_space(P(1, 6))
        self.assertEqual(decision.replacements, [Replacement(" ", P(1, 6), P(1, 6))])
        self.assertEqual(decision.cursor, P(1, 6))

    def test_enter_lines_up_with_text_block(self):
        decision = plan_enter(P(0, 12), "name:  Ada Lov")
        self.assertEqual(decision.cursor, P(1, 7))
        self.assertEqual(decision.replacements, [])

    def test_enter_without_double_space_keeps_column(self):
        decision = plan_enter(P(4, 7), "abc def")
        self.assertEqual(decision.cursor, P(5, 7))

    def test_enter_counts_indentation_as_a_gap(self):
        decision = plan_enter(P(1, 9), "   blank.")
        self.assertEqual(decision.cursor, P(2, 3))

    def test_enter_uses_nearest_double_space(self):
        decision = plan_enter(P(0, 20), "a  b      c  defghij")
        self.assertEqual(decision.cursor, P(1, 13))
