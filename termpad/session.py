"""Editing session: the state the interactive loop owns.

A session is built once at startup and handed to the editor loop. It ties
together the file binding (and through it the buffer), the cursor, the
block selection and the highlighter, and is the only place edits are
applied so that cursor and buffer stay consistent.
"""

from __future__ import annotations

import logging
from typing import Optional

from .buffer import LINE_TERMINATOR, TextBuffer
from .config import EditorConfig
from .cursor import CursorController, CursorPosition
from .file_binding import FileBinding
from .highlighter import Highlighter
from .selection import SelectionModel, resolve_pointer
from .view import Viewport

logger = logging.getLogger(__name__)


class EditorSession:
    """Buffer, cursor, selection and file binding of one open file."""

    def __init__(self, binding: FileBinding, start_line: int = 0,
                 config: Optional[EditorConfig] = None,
                 highlighter: Optional[Highlighter] = None):
        self.config = config or EditorConfig()
        self.binding = binding
        self.cursor = CursorController(binding.buffer, start_line, 0)
        self.selection = SelectionModel()
        self.highlighter = highlighter or Highlighter(binding.path, style=self.config.style)

    @classmethod
    def open(cls, path, start_line: int = 0,
             config: Optional[EditorConfig] = None) -> "EditorSession":
        """Open a file (or a new, empty one) with the cursor on start_line."""
        session = cls(FileBinding.open(path), start_line, config)
        logger.info(
            f"Opened {session.path} ({session.buffer.line_count()} lines, "
            f"{session.highlighter.language})"
        )
        return session

    @property
    def buffer(self) -> TextBuffer:
        return self.binding.buffer

    @property
    def path(self) -> str:
        return self.binding.path

    @property
    def modified(self) -> bool:
        return self.binding.modified

    @property
    def position(self) -> CursorPosition:
        return self.cursor.position

    def lines(self) -> list[str]:
        return self.buffer.lines()

    # --- Editing ---

    def insert_char(self, ch: str) -> None:
        """Insert at the cursor and step past the new character."""
        self.buffer.insert_char(self.cursor.line, self.cursor.column, ch)
        self.cursor.right()

    def insert_newline(self) -> None:
        self.insert_char(LINE_TERMINATOR)

    def insert_tab(self) -> None:
        for _ in range(self.config.tab_size):
            self.insert_char(' ')

    def backspace(self) -> bool:
        """Delete before the cursor, joining lines at column 0.

        Returns:
            True if the buffer changed
        """
        line, column = self.cursor.line, self.cursor.column
        if column > 0:
            self.buffer.delete_char_before(line, column)
            self.cursor.left()
            return True
        if line > 0:
            join_column = self.buffer.line_length(line - 1)
            self.buffer.delete_char_before(line, column)
            self.cursor.move_to(line - 1, join_column)
            return True
        return False

    def delete(self) -> bool:
        """Delete at the cursor; the cursor does not move."""
        return self.buffer.delete_char_after(self.cursor.line, self.cursor.column)

    # --- Movement ---

    def move_left(self) -> CursorPosition:
        return self.cursor.left()

    def move_right(self) -> CursorPosition:
        return self.cursor.right()

    def move_up(self) -> CursorPosition:
        return self.cursor.up()

    def move_down(self) -> CursorPosition:
        return self.cursor.down()

    def move_home(self) -> CursorPosition:
        return self.cursor.home()

    def move_end(self) -> CursorPosition:
        return self.cursor.end()

    # --- Pointer ---

    def resolve_pointer(self, row: int, column: int, viewport: Viewport) -> CursorPosition:
        return resolve_pointer(
            self.buffer, row, column,
            top_line=viewport.top_line, left_column=viewport.left_column,
            origin_row=viewport.origin_row, origin_column=viewport.origin_column,
        )

    def pointer_press(self, row: int, column: int, viewport: Viewport) -> CursorPosition:
        return self.selection.press(self.cursor, self.resolve_pointer(row, column, viewport))

    def pointer_drag(self, row: int, column: int, viewport: Viewport) -> CursorPosition:
        return self.selection.drag(self.cursor, self.resolve_pointer(row, column, viewport))

    def pointer_release(self) -> None:
        self.selection.release()

    # --- File ---

    def save(self) -> tuple[bool, Optional[str]]:
        return self.binding.save()

    def reload(self) -> bool:
        """Handle a change notification for the open file.

        Returns:
            True if the buffer was replaced; the cursor is then at (0, 0)
        """
        if not self.binding.reload():
            return False
        self.cursor.attach(self.binding.buffer)
        self.cursor.move_to(0, 0)
        return True
