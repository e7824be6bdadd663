"""Logical cursor and its movement over a TextBuffer."""

from dataclasses import dataclass

from .buffer import TextBuffer


@dataclass
class CursorPosition:
    line: int = 0
    column: int = 0

    def __lt__(self, other):
        if self.line != other.line:
            return self.line < other.line
        return self.column < other.column

    def __ge__(self, other):
        return not self < other

    def as_tuple(self) -> tuple[int, int]:
        return (self.line, self.column)


class CursorController:
    """Owns the (line, column) insertion point.

    Every method that moves the cursor returns the new position. The
    column is not sticky: vertical moves clamp the current column to the
    target line and do not remember the column they started from.
    """

    def __init__(self, buffer: TextBuffer, line: int = 0, column: int = 0):
        self.buffer = buffer
        self.position = CursorPosition(line, column)
        self.clamp_to_buffer_shape()

    @property
    def line(self) -> int:
        return self.position.line

    @property
    def column(self) -> int:
        return self.position.column

    def attach(self, buffer: TextBuffer) -> CursorPosition:
        """Follow a replacement buffer, keeping the position valid in it."""
        self.buffer = buffer
        return self.clamp_to_buffer_shape()

    def clamp_to_buffer_shape(self) -> CursorPosition:
        """Pull the position back inside the buffer.

        All position-setting paths go through here.
        """
        pos = self.position
        pos.line = max(0, min(pos.line, self.buffer.line_count() - 1))
        pos.column = max(0, min(pos.column, self.buffer.line_length(pos.line)))
        return pos

    def move_to(self, line: int, column: int) -> CursorPosition:
        self.position.line = line
        self.position.column = column
        return self.clamp_to_buffer_shape()

    def left(self) -> CursorPosition:
        pos = self.position
        if pos.column > 0:
            pos.column -= 1
        elif pos.line > 0:
            pos.line -= 1
            pos.column = self.buffer.line_length(pos.line)
        return pos

    def right(self) -> CursorPosition:
        pos = self.position
        if pos.column < self.buffer.line_length(pos.line):
            pos.column += 1
        elif pos.line + 1 < self.buffer.line_count():
            pos.line += 1
            pos.column = 0
        return pos

    def up(self) -> CursorPosition:
        pos = self.position
        if pos.line > 0:
            pos.line -= 1
            pos.column = min(pos.column, self.buffer.line_length(pos.line))
        return pos

    def down(self) -> CursorPosition:
        pos = self.position
        if pos.line + 1 < self.buffer.line_count():
            pos.line += 1
            pos.column = min(pos.column, self.buffer.line_length(pos.line))
        return pos

    def home(self) -> CursorPosition:
        self.position.column = 0
        return self.position

    def end(self) -> CursorPosition:
        self.position.column = self.buffer.line_length(self.position.line)
        return self.position
