"""Test the editing session: edits applied through the cursor."""

import os
import tempfile

import pytest

from termpad.buffer import TextBuffer
from termpad.config import EditorConfig
from termpad.cursor import CursorPosition
from termpad.file_binding import FileBinding
from termpad.session import EditorSession
from termpad.view import Viewport


def make_session(text="", line=0, column=0, path="untitled.txt", config=None):
    session = EditorSession(FileBinding(path, TextBuffer(text)), config=config)
    session.cursor.move_to(line, column)
    return session


@pytest.fixture
def temp_file():
    with tempfile.NamedTemporaryFile(mode='w', suffix='.txt', delete=False,
                                     encoding='utf-8', newline='') as f:
        f.write("foo\nbar")
        temp_filename = f.name
    yield temp_filename
    if os.path.exists(temp_filename):
        os.remove(temp_filename)


def test_open_places_cursor_on_start_line(temp_file):
    session = EditorSession.open(temp_file, start_line=1)
    assert session.position == CursorPosition(1, 0)
    assert session.modified is False


def test_open_clamps_start_line_past_end(temp_file):
    session = EditorSession.open(temp_file, start_line=99)
    assert session.position == CursorPosition(1, 0)


def test_open_missing_file_is_empty_and_unmodified():
    session = EditorSession.open("/nonexistent/dir/new.txt")
    assert session.lines() == [""]
    assert session.position == CursorPosition(0, 0)
    assert session.modified is False


def test_insert_char_advances_cursor():
    session = make_session("ac", 0, 1)
    session.insert_char("b")
    assert session.buffer.to_text() == "abc"
    assert session.position == CursorPosition(0, 2)
    assert session.modified is True


def test_insert_newline_splits_line():
    session = make_session("foobar", 0, 3)
    session.insert_newline()
    assert session.lines() == ["foo\n", "bar"]
    assert session.position == CursorPosition(1, 0)


def test_insert_tab_uses_configured_width():
    session = make_session("x", 0, 0)
    session.insert_tab()
    assert session.buffer.to_text() == "    x"
    assert session.position == CursorPosition(0, 4)

    narrow = make_session("x", config=EditorConfig(tab_size=2))
    narrow.insert_tab()
    assert narrow.buffer.to_text() == "  x"


def test_backspace_within_line():
    session = make_session("abc", 0, 2)
    assert session.backspace() is True
    assert session.buffer.to_text() == "ac"
    assert session.position == CursorPosition(0, 1)


def test_backspace_joins_with_previous_line():
    session = make_session("ab\ncd", 1, 0)
    assert session.backspace() is True
    assert session.buffer.to_text() == "abcd"
    assert session.position == CursorPosition(0, 2)


def test_backspace_at_buffer_start_is_noop():
    session = make_session("ab\ncd", 0, 0)
    assert session.backspace() is False
    assert session.buffer.to_text() == "ab\ncd"
    assert session.position == CursorPosition(0, 0)
    assert session.modified is False


def test_delete_keeps_cursor():
    session = make_session("ab\ncd", 0, 2)
    assert session.delete() is True
    assert session.buffer.to_text() == "abcd"
    assert session.position == CursorPosition(0, 2)


def test_delete_at_buffer_end_is_noop():
    session = make_session("ab", 0, 2)
    assert session.delete() is False
    assert session.modified is False


def test_movement_delegates_to_cursor():
    session = make_session("abc\nde", 0, 3)
    assert session.move_right() == CursorPosition(1, 0)
    assert session.move_end() == CursorPosition(1, 2)
    assert session.move_up() == CursorPosition(0, 2)
    assert session.move_home() == CursorPosition(0, 0)
    assert session.move_left() == CursorPosition(0, 0)
    assert session.move_down() == CursorPosition(1, 0)


def test_pointer_press_and_drag_use_viewport():
    session = make_session("\n".join(f"line {i}" for i in range(50)))
    viewport = Viewport(top_line=10, left_column=0, rows=20, columns=70)
    session.pointer_press(1, 1, viewport)
    assert session.position == CursorPosition(10, 0)
    session.pointer_drag(3, 5, viewport)
    assert session.position == CursorPosition(12, 4)
    assert session.selection.active is True
    session.pointer_release()
    assert session.selection.active is False
    assert session.modified is False


def test_pointer_actions_after_edit_keep_modified():
    session = make_session("abc")
    session.insert_char("x")
    session.pointer_press(1, 1, Viewport())
    session.pointer_release()
    assert session.modified is True


def test_save_then_edit_again(temp_file):
    session = EditorSession.open(temp_file)
    session.insert_char("x")
    assert session.save() == (True, None)
    assert session.modified is False
    session.insert_char("y")
    assert session.modified is True


def test_reload_moves_cursor_to_origin(temp_file):
    session = EditorSession.open(temp_file, start_line=1)
    session.move_end()
    with open(temp_file, 'w', encoding='utf-8') as f:
        f.write("replaced\ncontent\nhere")
    assert session.reload() is True
    assert session.buffer.to_text() == "replaced\ncontent\nhere"
    assert session.position == CursorPosition(0, 0)
    # Cursor follows the new buffer
    session.move_down()
    assert session.position == CursorPosition(1, 0)


def test_reload_with_identical_content_keeps_cursor(temp_file):
    session = EditorSession.open(temp_file, start_line=1)
    session.move_end()
    with open(temp_file, 'w', encoding='utf-8') as f:
        f.write("foo\nbar")
    assert session.reload() is False
    assert session.position == CursorPosition(1, 3)


def test_reload_keeps_unsaved_edits(temp_file):
    session = EditorSession.open(temp_file)
    session.insert_char("y")
    with open(temp_file, 'w', encoding='utf-8') as f:
        f.write("X")
    assert session.reload() is False
    assert session.buffer.to_text() == "yfoo\nbar"
    assert session.position == CursorPosition(0, 1)


def test_edit_save_scenario(temp_file):
    # Open at line 2, walk to the end, save, then type and save again
    session = EditorSession.open(temp_file, start_line=1)
    assert session.position == CursorPosition(1, 0)
    for _ in range(3):
        session.move_right()
    assert session.position == CursorPosition(1, 3)
    assert session.move_down() == CursorPosition(1, 3)
    assert session.save() == (True, None)
    with open(temp_file, "r", encoding="utf-8", newline="") as f:
        assert f.read() == "foo\nbar"
    session.insert_char("!")
    assert session.save() == (True, None)
    with open(temp_file, 'r', encoding='utf-8', newline='') as f:
        assert f.read() == "foo\nbar!"
    assert session.modified is False


def test_second_reload_after_one_change_keeps_cursor(temp_file):
    session = EditorSession.open(temp_file, start_line=1)
    with open(temp_file, 'w', encoding='utf-8') as f:
        f.write("one\ntwo\nthree")
    assert session.reload() is True
    assert session.position == CursorPosition(0, 0)
    session.move_down()
    session.move_end()
    assert session.reload() is False
    assert session.position == CursorPosition(1, 3)
    assert session.buffer.to_text() == "one\ntwo\nthree"
