"""Pointer-driven block selection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .buffer import TextBuffer
from .cursor import CursorController, CursorPosition


def resolve_pointer(buffer: TextBuffer, row: int, column: int, *,
                    top_line: int = 0, left_column: int = 0,
                    origin_row: int = 1, origin_column: int = 1) -> CursorPosition:
    """Map a screen cell to a buffer position.

    This is the only place screen coordinates are turned into buffer
    coordinates. The frame origin (the border around the edit area) is
    subtracted, the scroll offsets are added, and the result is clamped
    with the same rule as the cursor.

    Args:
        buffer: Buffer the position must be valid in
        row: Screen row of the pointer (0-based)
        column: Screen column of the pointer (0-based)
        top_line: First buffer line shown in the edit area
        left_column: First buffer column shown in the edit area
        origin_row: Screen row of the edit area's first text row
        origin_column: Screen column of the edit area's first text column

    Returns:
        A position inside the buffer
    """
    line = top_line + max(0, row - origin_row)
    col = left_column + max(0, column - origin_column)
    line = min(line, buffer.line_count() - 1)
    return CursorPosition(line, min(col, buffer.line_length(line)))


@dataclass
class SelectionModel:
    """Anchor/current pair plus an active flag.

    The recorded positions are not kept in sync with edits; they are
    recomputed against the live buffer on the next pointer event.
    """
    anchor: CursorPosition = field(default_factory=CursorPosition)
    current: CursorPosition = field(default_factory=CursorPosition)
    active: bool = False

    def press(self, cursor: CursorController, target: CursorPosition) -> CursorPosition:
        """Pointer pressed: collapse the block at the target, move the cursor."""
        pos = cursor.move_to(target.line, target.column)
        self.active = False
        self.anchor = CursorPosition(pos.line, pos.column)
        self.current = CursorPosition(pos.line, pos.column)
        return pos

    def drag(self, cursor: CursorController, target: CursorPosition) -> CursorPosition:
        """Pointer dragged: extend the block to the target, move the cursor."""
        pos = cursor.move_to(target.line, target.column)
        self.active = True
        self.current = CursorPosition(pos.line, pos.column)
        return pos

    def release(self) -> None:
        # Positions are kept; only the flag is cleared
        self.active = False

    def ordered(self) -> tuple[CursorPosition, CursorPosition]:
        """Anchor and current in document order."""
        if self.current < self.anchor:
            return self.current, self.anchor
        return self.anchor, self.current

    def column_range(self, line: int, line_length: int) -> Optional[tuple[int, int]]:
        """Columns [start, end) of a line covered by an active block.

        Stale positions are clipped to the line's current length.
        """
        if not self.active:
            return None
        start, end = self.ordered()
        if not start.line <= line <= end.line:
            return None
        first = min(start.column, line_length) if line == start.line else 0
        if line == end.line:
            last = min(end.column, line_length)
        else:
            # Lines the block runs past include their terminator cell
            last = line_length + 1
        if first >= last:
            return None
        return (first, last)
