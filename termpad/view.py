"""Screen layout for the editor.

Everything here is pure: it reads the session and produces strings and
coordinates for the terminal layer to draw. Nothing in this module mutates
buffer, cursor or selection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .constants import EditorConstants

if TYPE_CHECKING:
    from .highlighter import RGB
    from .session import EditorSession

# Cells are one character wide; tabs and control characters would break that
_DISPLAY = {i: '?' for i in range(32)}
_DISPLAY[ord('\t')] = ' '
_DISPLAY[127] = '?'


def display_text(text: str) -> str:
    return text.translate(_DISPLAY)


@dataclass
class Viewport:
    """The part of the buffer visible in the edit area."""
    top_line: int = 0
    left_column: int = 0
    rows: int = 1
    columns: int = 1
    origin_row: int = EditorConstants.FRAME_ORIGIN_ROW
    origin_column: int = EditorConstants.FRAME_ORIGIN_COLUMN

    def resize(self, width: int, height: int) -> None:
        """Fit the edit area into a width x height terminal."""
        # Border rows/columns on both sides of the edit area, then the status bar
        self.rows = max(1, height - EditorConstants.STATUS_BAR_HEIGHT - 2 * self.origin_row)
        self.columns = max(1, width - 2 * self.origin_column)

    def scroll_to(self, line: int, column: int) -> None:
        """Scroll the least amount that makes (line, column) visible."""
        if line < self.top_line:
            self.top_line = line
        elif line >= self.top_line + self.rows:
            self.top_line = line - self.rows + 1
        if column < self.left_column:
            self.left_column = column
        elif column >= self.left_column + self.columns:
            self.left_column = column - self.columns + 1

    def screen_position(self, line: int, column: int) -> tuple[int, int]:
        return (self.origin_row + line - self.top_line,
                self.origin_column + column - self.left_column)


@dataclass
class FrameRow:
    spans: list = field(default_factory=list)  # (color, text) pairs, already clipped
    selection: Optional[tuple[int, int]] = None  # visible columns [start, end)


@dataclass
class Frame:
    title: str
    status: str
    rows: list[FrameRow]
    cursor_y: int
    cursor_x: int


def format_title(session: 'EditorSession') -> str:
    """Title line in Midnight Commander's editor format."""
    return (
        f"{session.path:16}   "
        f"[{'B' if session.selection.active else '-'}{'M' if session.modified else '-'}--] "
        f"{session.position.column:2} "
        f"L:[  0+ 0 {session.position.line + 1:3}/{session.buffer.line_count():3}] *() "
    )


def format_status(session: 'EditorSession', frame_count: int,
                  message: Optional[str] = None) -> str:
    if message:
        return f" {message}"
    start, end = session.selection.anchor, session.selection.current
    return (
        f" 1{'Help':12} 2{'Save':12} 10{'Quit':10} | "
        f"block: start={start.as_tuple()} end={end.as_tuple()} | cnt={frame_count}"
    )


def clip_spans(spans: list, start: int, width: int) -> list:
    """Keep the part of (color, text) spans that falls in [start, start+width)."""
    out = []
    pos = 0
    end = start + width
    for color, text in spans:
        span_end = pos + len(text)
        if span_end > start and pos < end:
            piece = text[max(0, start - pos):min(len(text), end - pos)]
            out.append((color, display_text(piece)))
        pos = span_end
        if pos >= end:
            break
    return out


class EditorView:
    """Lays out a session onto a terminal-sized frame."""

    def __init__(self, viewport: Optional[Viewport] = None):
        self.viewport = viewport or Viewport()

    def layout(self, session: 'EditorSession', width: int, height: int,
               frame_count: int = 0, message: Optional[str] = None) -> Frame:
        vp = self.viewport
        vp.resize(width, height)
        pos = session.position
        vp.scroll_to(pos.line, pos.column)

        buffer = session.buffer
        rows = []
        last = min(buffer.line_count(), vp.top_line + vp.rows)
        for line in range(vp.top_line, last):
            length = buffer.line_length(line)
            text = buffer.line_text(line)[:length]
            spans = clip_spans(session.highlighter.highlight_line(text), vp.left_column, vp.columns)
            selection = session.selection.column_range(line, length)
            if selection is not None:
                first = max(0, selection[0] - vp.left_column)
                stop = min(vp.columns, selection[1] - vp.left_column)
                selection = (first, stop) if first < stop else None
            rows.append(FrameRow(spans=spans, selection=selection))

        cursor_y, cursor_x = vp.screen_position(pos.line, pos.column)
        return Frame(
            title=format_title(session),
            status=format_status(session, frame_count, message),
            rows=rows,
            cursor_y=cursor_y,
            cursor_x=cursor_x,
        )
