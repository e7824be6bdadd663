"""Test cursor movement and clamping against the buffer shape."""

import random

from termpad.buffer import TextBuffer
from termpad.cursor import CursorController, CursorPosition


def make_cursor(text, line=0, column=0):
    return CursorController(TextBuffer(text), line, column)


def assert_valid(cursor):
    buf = cursor.buffer
    assert 0 <= cursor.line < buf.line_count()
    assert 0 <= cursor.column <= buf.line_length(cursor.line)


def test_left_within_line():
    cursor = make_cursor("abc", 0, 2)
    assert cursor.left() == CursorPosition(0, 1)


def test_left_at_line_start_goes_to_previous_line_end():
    cursor = make_cursor("hello\nab", 1, 0)
    assert cursor.left() == CursorPosition(0, 5)


def test_left_at_buffer_start_stays():
    cursor = make_cursor("abc")
    assert cursor.left() == CursorPosition(0, 0)


def test_right_within_line():
    cursor = make_cursor("abc", 0, 1)
    assert cursor.right() == CursorPosition(0, 2)


def test_right_at_line_end_goes_to_next_line_start():
    cursor = make_cursor("abc\ndef", 0, 3)
    assert cursor.right() == CursorPosition(1, 0)


def test_right_at_buffer_end_stays():
    cursor = make_cursor("abc\ndef", 1, 3)
    assert cursor.right() == CursorPosition(1, 3)


def test_up_and_down_clamp_column():
    cursor = make_cursor("long line\nab\nanother long", 0, 8)
    assert cursor.down() == CursorPosition(1, 2)
    assert cursor.down() == CursorPosition(2, 2)


def test_column_is_not_sticky():
    # Moving through a short line loses the original column
    cursor = make_cursor("abcdef\nx\nabcdef", 0, 5)
    cursor.down()
    cursor.down()
    assert cursor.position == CursorPosition(2, 1)
    cursor.up()
    cursor.up()
    assert cursor.position == CursorPosition(0, 1)


def test_up_on_first_line_and_down_on_last_line_do_nothing():
    cursor = make_cursor("abc\ndef", 0, 2)
    assert cursor.up() == CursorPosition(0, 2)
    cursor.move_to(1, 1)
    assert cursor.down() == CursorPosition(1, 1)


def test_home_and_end():
    cursor = make_cursor("hello world", 0, 4)
    assert cursor.end() == CursorPosition(0, 11)
    assert cursor.home() == CursorPosition(0, 0)


def test_constructor_clamps_start_line():
    cursor = make_cursor("a\nb", 10, 0)
    assert cursor.position == CursorPosition(1, 0)


def test_move_to_clamps_line_then_column():
    cursor = make_cursor("abcdef\nxy")
    assert cursor.move_to(5, 4) == CursorPosition(1, 2)
    assert cursor.move_to(-3, -1) == CursorPosition(0, 0)


def test_clamp_after_buffer_shrinks():
    buf = TextBuffer("abcdef\nsecond\nthird")
    cursor = CursorController(buf, 2, 4)
    # Drop everything from the first terminator on
    buf.remove(buf.offset_of_line_start(1) - 1, buf.char_count())
    assert buf.to_text() == "abcdef"
    cursor.clamp_to_buffer_shape()
    assert cursor.position == CursorPosition(0, 4)


def test_attach_follows_replacement_buffer():
    cursor = make_cursor("a long first line\nsecond", 1, 5)
    cursor.attach(TextBuffer("xy"))
    assert cursor.position == CursorPosition(0, 2)


def test_invariant_holds_under_random_movement():
    rng = random.Random(1234)
    cursor = make_cursor("short\n\na much longer line here\nx\n\nend", 3, 1)
    moves = [cursor.left, cursor.right, cursor.up, cursor.down, cursor.home, cursor.end]
    for _ in range(500):
        rng.choice(moves)()
        assert_valid(cursor)


def test_position_ordering():
    assert CursorPosition(0, 5) < CursorPosition(1, 0)
    assert CursorPosition(1, 2) < CursorPosition(1, 3)
    assert CursorPosition(1, 3) >= CursorPosition(1, 3)
