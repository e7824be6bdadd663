"""Test pointer-driven block selection and pointer resolution."""

from termpad.buffer import TextBuffer
from termpad.cursor import CursorController, CursorPosition
from termpad.selection import SelectionModel, resolve_pointer


def setup(text="first line\nsecond\nthird line here"):
    buf = TextBuffer(text)
    return buf, CursorController(buf), SelectionModel()


def test_resolve_pointer_subtracts_frame_origin():
    buf = TextBuffer("hello\nworld")
    # Screen cell (1, 1) is the first text cell inside the border
    assert resolve_pointer(buf, 1, 1) == CursorPosition(0, 0)
    assert resolve_pointer(buf, 2, 4) == CursorPosition(1, 3)


def test_resolve_pointer_saturates_on_border():
    buf = TextBuffer("hello\nworld")
    assert resolve_pointer(buf, 0, 0) == CursorPosition(0, 0)


def test_resolve_pointer_clamps_past_end():
    buf = TextBuffer("hello\nab")
    assert resolve_pointer(buf, 1, 40) == CursorPosition(0, 5)
    assert resolve_pointer(buf, 30, 40) == CursorPosition(1, 2)


def test_resolve_pointer_applies_scroll_offsets():
    buf = TextBuffer("\n".join(f"line {i}" for i in range(100)))
    pos = resolve_pointer(buf, 3, 2, top_line=50, left_column=2)
    assert pos == CursorPosition(52, 3)


def test_press_collapses_block_and_moves_cursor():
    buf, cursor, sel = setup()
    sel.press(cursor, CursorPosition(1, 3))
    assert sel.active is False
    assert sel.anchor == CursorPosition(1, 3)
    assert sel.current == CursorPosition(1, 3)
    assert cursor.position == CursorPosition(1, 3)


def test_press_clamps_target():
    buf, cursor, sel = setup()
    sel.press(cursor, CursorPosition(1, 99))
    assert cursor.position == CursorPosition(1, 6)
    assert sel.anchor == CursorPosition(1, 6)


def test_drag_activates_and_extends():
    buf, cursor, sel = setup()
    sel.press(cursor, CursorPosition(0, 2))
    sel.drag(cursor, CursorPosition(2, 4))
    assert sel.active is True
    assert sel.anchor == CursorPosition(0, 2)
    assert sel.current == CursorPosition(2, 4)
    assert cursor.position == CursorPosition(2, 4)


def test_release_clears_flag_but_keeps_positions():
    buf, cursor, sel = setup()
    sel.press(cursor, CursorPosition(0, 2))
    sel.drag(cursor, CursorPosition(1, 1))
    sel.release()
    assert sel.active is False
    assert sel.anchor == CursorPosition(0, 2)
    assert sel.current == CursorPosition(1, 1)


def test_pointer_actions_never_change_buffer():
    buf, cursor, sel = setup()
    version = buf.version
    sel.press(cursor, CursorPosition(0, 1))
    sel.drag(cursor, CursorPosition(2, 3))
    sel.release()
    assert buf.version == version


def test_ordered_handles_backward_drag():
    buf, cursor, sel = setup()
    sel.press(cursor, CursorPosition(2, 3))
    sel.drag(cursor, CursorPosition(0, 1))
    start, end = sel.ordered()
    assert start == CursorPosition(0, 1)
    assert end == CursorPosition(2, 3)


def test_column_range_for_active_block():
    buf, cursor, sel = setup()
    sel.press(cursor, CursorPosition(0, 2))
    sel.drag(cursor, CursorPosition(2, 4))
    assert sel.column_range(0, buf.line_length(0)) == (2, 11)
    assert sel.column_range(1, buf.line_length(1)) == (0, 7)
    assert sel.column_range(2, buf.line_length(2)) == (0, 4)


def test_column_range_inactive_is_none():
    buf, cursor, sel = setup()
    sel.press(cursor, CursorPosition(0, 2))
    assert sel.column_range(0, buf.line_length(0)) is None


def test_column_range_clips_stale_positions():
    buf, cursor, sel = setup()
    sel.press(cursor, CursorPosition(0, 8))
    sel.drag(cursor, CursorPosition(0, 10))
    # Line got shorter after the block was recorded
    assert sel.column_range(0, 3) is None
    assert sel.column_range(0, 9) == (8, 9)
