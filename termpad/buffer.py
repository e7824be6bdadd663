"""Editable text buffer with line-indexed access.

The buffer keeps its text as a list of lines without terminators; the
terminator between two lines is implicit. Absolute offsets count
characters (code points), never bytes.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from itertools import accumulate

logger = logging.getLogger(__name__)

LINE_TERMINATOR = "\n"


class BufferIndexError(IndexError):
    """A line, column or offset outside the buffer was used.

    This always indicates a bug in the caller; it is never recovered from.
    """


class TextBuffer:
    """Ordered sequence of characters organized as lines."""

    def __init__(self, text: str = ""):
        self._lines: list[str] = text.split(LINE_TERMINATOR)
        # Cached start offsets; entries beyond the first changed line are dropped
        self._starts: list[int] = []
        self.version = 0

    @classmethod
    def load(cls, path) -> "TextBuffer":
        """Read a file into a new buffer.

        Any read failure, including a missing file, gives an empty buffer:
        a file that does not exist yet is a new file, not an error.

        Args:
            path: File to read (UTF-8)

        Returns:
            The loaded buffer
        """
        try:
            with open(path, 'r', encoding='utf-8', newline='') as f:
                return cls(f.read())
        except FileNotFoundError:
            logger.debug(f"{path} does not exist, starting with an empty buffer")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {path}, starting with an empty buffer: {e}")
        return cls()

    # --- Shape ---

    def line_count(self) -> int:
        return len(self._lines)

    def _check_line(self, line: int) -> None:
        if not 0 <= line < len(self._lines):
            raise BufferIndexError(
                f"line {line} out of range (buffer has {len(self._lines)} lines)"
            )

    def line_length(self, line: int) -> int:
        """Number of characters in a line, excluding its terminator."""
        self._check_line(line)
        return len(self._lines[line])

    def line_text(self, line: int) -> str:
        """Full text of a line including its terminator, if it has one."""
        self._check_line(line)
        if line + 1 < len(self._lines):
            return self._lines[line] + LINE_TERMINATOR
        return self._lines[line]

    def lines(self) -> list[str]:
        """All lines, each with its terminator (the last one has none)."""
        return [self.line_text(i) for i in range(len(self._lines))]

    def char_count(self) -> int:
        """Total number of characters, terminators included."""
        return self.offset_of_line_start(len(self._lines) - 1) + len(self._lines[-1])

    # --- Offset arithmetic ---

    def offset_of_line_start(self, line: int) -> int:
        """Absolute offset of the first character of a line."""
        self._check_line(line)
        if len(self._starts) <= line:
            known = len(self._starts)
            if known == 0:
                self._starts.append(0)
                known = 1
            # Each line contributes its length plus one terminator
            tail = accumulate(
                (len(text) + 1 for text in self._lines[known - 1:line]),
                initial=self._starts[known - 1],
            )
            next(tail)
            self._starts.extend(tail)
        return self._starts[line]

    def offset_of(self, line: int, column: int) -> int:
        """Absolute offset of a (line, column) position."""
        if not 0 <= column <= self.line_length(line):
            raise BufferIndexError(
                f"column {column} out of range for line {line} "
                f"(length {len(self._lines[line])})"
            )
        return self.offset_of_line_start(line) + column

    def position_of_offset(self, offset: int) -> tuple[int, int]:
        """Map an absolute offset back to (line, column)."""
        if not 0 <= offset <= self.char_count():
            raise BufferIndexError(f"offset {offset} out of range (length {self.char_count()})")
        self.offset_of_line_start(len(self._lines) - 1)
        line = bisect_right(self._starts, offset) - 1
        return line, offset - self._starts[line]

    def _invalidate_from(self, line: int) -> None:
        del self._starts[line + 1:]
        self.version += 1

    # --- Mutation ---

    def insert_char(self, line: int, column: int, ch: str) -> None:
        """Insert one character at (line, column).

        Inserting the terminator splits the line in two.
        """
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        self.offset_of(line, column)
        text = self._lines[line]
        if ch == LINE_TERMINATOR:
            self._lines[line:line + 1] = [text[:column], text[column:]]
        else:
            self._lines[line] = text[:column] + ch + text[column:]
        self._invalidate_from(line)

    def remove(self, start: int, end: int) -> None:
        """Remove the characters in the offset range [start, end)."""
        if start > end:
            raise BufferIndexError(f"reversed range {start}..{end}")
        if start == end:
            return
        first_line, first_col = self.position_of_offset(start)
        last_line, last_col = self.position_of_offset(end)
        merged = self._lines[first_line][:first_col] + self._lines[last_line][last_col:]
        self._lines[first_line:last_line + 1] = [merged]
        self._invalidate_from(first_line)

    def delete_char_before(self, line: int, column: int) -> bool:
        """Backspace at (line, column).

        At column 0 this joins the line onto the previous one by removing
        the previous line's terminator; the caller moves the cursor to the
        former length of the previous line.

        Returns:
            True if a character was removed, False at the buffer start
        """
        offset = self.offset_of(line, column)
        if offset == 0:
            return False
        self.remove(offset - 1, offset)
        return True

    def delete_char_after(self, line: int, column: int) -> bool:
        """Forward delete at (line, column).

        At the end of a line the removed character is the terminator, so the
        next line is joined onto this one.

        Returns:
            True if a character was removed, False at the buffer end
        """
        offset = self.offset_of(line, column)
        if offset >= self.char_count():
            return False
        self.remove(offset, offset + 1)
        return True

    # --- Serialization ---

    def to_text(self) -> str:
        return LINE_TERMINATOR.join(self._lines)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TextBuffer):
            return self._lines == other._lines
        if isinstance(other, str):
            return self.to_text() == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TextBuffer({self.to_text()!r})"
