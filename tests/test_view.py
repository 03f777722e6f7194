"""Tests for the scrolling viewport."""

from blankcanvas.document import GridDocument
from blankcanvas.geometry import Position, Range
from blankcanvas.grid import fill
from blankcanvas.view import GridView


def make_view(text="", rows=10, columns=20):
    doc = GridDocument(fill(text))
    return doc, GridView(doc, num_rows=rows, num_columns=columns)


def test_top_left_window():
    doc, view = make_view("\n   blank.")
    doc.set_cursor(Position(1, 3))
    view.render()
    assert len(view.lines) == 10
    assert view.lines[1] == "   blank.           "
    assert (view.visual_cursor_y, view.visual_cursor_x) == (1, 3)


def test_scrolls_down_to_caret():
    doc, view = make_view()
    doc.set_cursor(Position(50, 0))
    view.render()
    assert view.top == 45
    assert view.visual_cursor_y == 5


def test_scrolls_right_to_caret():
    doc, view = make_view()
    doc.set_cursor(Position(0, 250))
    view.render()
    assert view.left == 240
    assert view.visual_cursor_x == 10


def test_window_stays_while_caret_inside():
    doc, view = make_view()
    doc.set_cursor(Position(50, 0))
    view.render()
    doc.set_cursor(Position(53, 4))
    view.render()
    assert view.top == 45
    assert view.visual_cursor_y == 8


def test_no_selection():
    doc, view = make_view()
    view.render()
    assert view.get_selection_ranges() is None


def test_block_selection_columns():
    doc, view = make_view()
    doc.set_selections([
        Range(anchor=Position(1, 5), head=Position(1, 2)),
        Range(anchor=Position(2, 5), head=Position(2, 2)),
    ])
    view.render()
    ranges = view.get_selection_ranges()
    assert ranges[:4] == [None, (2, 5), (2, 5), None]


def test_selection_outside_window_is_hidden():
    doc, view = make_view()
    doc.set_selections([Range(anchor=Position(3, 100), head=Position(3, 90))])
    doc.set_cursor(Position(3, 0))
    view.render()
    doc.set_selections([Range(anchor=Position(3, 100), head=Position(3, 90))])
    assert view.get_selection_ranges()[3] is None
