"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
from collections import deque
from typing import Optional

import blessed
from curtsies.events import PasteEvent

from .constants import EditorConstants
from .view import Frame, FrameRow

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None, mouse: bool = True):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.mouse = mouse
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False
        # Tokens of a paste not handed out yet
        self._pending: deque = deque()
        # Virtual screen state for minimal updates
        self._last_lines: Optional[list[str]] = None
        self._last_size: Optional[tuple[int, int]] = None

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.hide_cursor, end='')
        print(self.term.clear, end='')
        if self.mouse:
            print(EditorConstants.MOUSE_ENABLE, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                # Enter raw mode immediately so reads work
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
                self._curtsies_active = True
            except Exception as e:
                # curtsies may fail to initialize without a real tty;
                # run without input rather than crash
                logger.warning(f"Keyboard input unavailable: {e}")
                self._curtsies_input = None
                self._curtsies_active = False

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            if self.mouse:
                print(EditorConstants.MOUSE_DISABLE, end='')
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception as e:
                # Teardown must not crash the app
                logger.warning(f"Could not leave raw mode cleanly: {e}")
            finally:
                self._curtsies_input = None
                self._curtsies_active = False

    def clear_screen(self):
        """Clear the entire screen."""
        print(self.term.clear, end='')

    def invalidate_frame(self) -> None:
        """Forget the cached frame so the next draw repaints everything."""
        self._last_lines = None
        self._last_size = None

    # --- Composition ---

    def _box_top(self, width: int, title: str = "") -> str:
        inner = max(0, width - 2)
        title = title[:inner]
        return "┌" + title + "─" * (inner - len(title)) + "┐"

    def _box_bottom(self, width: int) -> str:
        return "└" + "─" * max(0, width - 2) + "┘"

    def _compose_row(self, row: FrameRow, width: int) -> str:
        """Compose one text row with colors and selection, padded to width."""
        cells = []
        for color, text in row.spans:
            cells.extend((color, ch) for ch in text)
        cells = cells[:width]
        cells.extend((None, ' ') for _ in range(width - len(cells)))

        out = []
        active = (None, False)
        for i, (color, ch) in enumerate(cells):
            rev = row.selection is not None and row.selection[0] <= i < row.selection[1]
            if (color, rev) != active:
                # Reset then enable desired to avoid sticky state issues
                out.append(self.term.normal)
                if color is not None:
                    out.append(self.term.color_rgb(*color))
                if rev:
                    out.append(self.term.reverse)
                active = (color, rev)
            out.append(ch)
        if active != (None, False):
            out.append(self.term.normal)
        return ''.join(out)

    def compose_frame(self, frame: Frame, width: int, height: int) -> list[str]:
        """Full screen as one string per terminal row."""
        status_rows = EditorConstants.STATUS_BAR_HEIGHT
        text_rows = max(0, height - status_rows - 2)
        inner = max(0, width - 2)

        lines = [self._box_top(width, frame.title)]
        for y in range(text_rows):
            row = frame.rows[y] if y < len(frame.rows) else FrameRow()
            lines.append("│" + self._compose_row(row, inner) + "│")
        lines.append(self._box_bottom(width))

        status = frame.status[:inner].ljust(inner)
        lines.append(self._box_top(width))
        lines.append("│" + status + "│")
        lines.append(self._box_bottom(width))
        return lines[:height]

    # --- Drawing ---

    def update_frame(self, frame: Frame) -> None:
        """Diff against last frame and write only changes.

        Falls back to a full clear on first paint or when the size changes.
        """
        width, height = self.width, self.height
        lines = self.compose_frame(frame, width, height)

        if self._last_lines is None or self._last_size != (width, height):
            print(self.term.home + self.term.clear, end='')
            self._last_lines = ["" for _ in range(len(lines))]
            self._last_size = (width, height)

        for y, line in enumerate(lines):
            if y >= len(self._last_lines) or self._last_lines[y] != line:
                print(self.term.move(y, 0) + line, end='')
                if y < len(self._last_lines):
                    self._last_lines[y] = line

        print(self.term.move(frame.cursor_y, frame.cursor_x) + self.term.normal_cursor,
              end='', flush=True)

    def draw_error_message(self, message1: str, message2: str = ""):
        """Draw an error message in the center of the screen.

        Args:
            message1: Primary error message
            message2: Secondary information
        """
        self.invalidate_frame()
        print(self.term.home + self.term.clear, end='')
        center_y = self.height // 2
        for offset, message in enumerate((message1, message2)):
            if message:
                x = max(0, (self.width - len(message)) // 2)
                print(self.term.move(center_y - 1 + offset, x) + message, end='')
        print(self.term.hide_cursor, end='', flush=True)

    def draw_text_screen(self, title: str, lines: list[str], footer: str) -> None:
        """Draw a centered text page, used for help."""
        self.invalidate_frame()
        term = self.term
        print(term.home + term.clear, end='')
        width, height = self.width, self.height
        print(term.move(1, max(0, (width - len(title)) // 2)) + term.bold + title + term.normal, end='')
        top = max(3, (height - len(lines)) // 2)
        left = max(0, (width - max((len(line) for line in lines), default=0)) // 2)
        for i, line in enumerate(lines):
            print(term.move(top + i, left) + line, end='')
        print(term.move(height - 1, 0) + footer, end='')
        print(term.hide_cursor, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single input token from the user.

        Pastes arrive from curtsies as one PasteEvent; its tokens are queued
        and handed out one per call, as if they had been typed.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The token as a string, or None if nothing arrived in time
        """
        if self._pending:
            return self._pending.popleft()
        if self._curtsies_input is None:
            return None
        event = self._curtsies_input.send(timeout)
        if event is None:
            return None
        if isinstance(event, PasteEvent):
            self._pending.extend(str(token) for token in event.events)
            return self._pending.popleft() if self._pending else None
        return str(event)

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height
