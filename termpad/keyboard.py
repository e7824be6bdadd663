"""Keyboard and mouse input handling using curtsies-style tokens."""

import logging
import re
from typing import Optional, Union
from dataclasses import dataclass
from enum import Enum

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace', 'f2')
    raw: str  # The raw key string from the input source
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False
    is_sequence: bool = False


class MouseAction(Enum):
    PRESS = "press"
    DRAG = "drag"
    RELEASE = "release"
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"


@dataclass
class MouseEvent:
    """A pointer event in 0-based screen cells."""
    action: MouseAction
    row: int
    column: int
    button: int = 0
    raw: str = ""


InputEvent = Union[KeyEvent, MouseEvent]

# SGR (1006) mouse report: ESC [ < button ; x ; y (M = press/motion, m = release)
_SGR_MOUSE = re.compile(r'^\x1b\[<(\d+);(\d+);(\d+)([Mm])$')
MOUSE_REPORT_PREFIX = "\x1b[<"
_MOUSE_REPORT_BODY = re.compile(r"^[0-9;]+$")

_SPECIALS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
    'page_up', 'page_down', 'insert', 'tab',
}


def parse_mouse(raw: str) -> Optional[MouseEvent]:
    """Decode an SGR mouse report; None if raw is not one."""
    m = _SGR_MOUSE.match(raw)
    if not m:
        return None
    code = int(m.group(1))
    column = max(0, int(m.group(2)) - 1)
    row = max(0, int(m.group(3)) - 1)
    button = code & 3
    if code & 64:
        action = MouseAction.SCROLL_UP if button == 0 else MouseAction.SCROLL_DOWN
    elif m.group(4) == 'm':
        action = MouseAction.RELEASE
    elif code & 32:
        action = MouseAction.DRAG
    else:
        action = MouseAction.PRESS
    return MouseEvent(action=action, row=row, column=column, button=button, raw=raw)


class KeyboardHandler:
    """Turns raw input tokens into KeyEvent and MouseEvent objects."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[InputEvent]:
        """Get the next input event, waiting at most timeout seconds."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        key = str(key)
        if key.startswith(MOUSE_REPORT_PREFIX) and parse_mouse(key) is None:
            key = self._read_mouse_report(key)
            if key is None:
                return None
        return self.parse_key(key)

    def _read_mouse_report(self, head: str) -> Optional[str]:
        """Collect the rest of a mouse report curtsies split into tokens.

        The digits and separators of a report are never handed out as
        keys; an incomplete or garbled report is dropped.

        Returns:
            The whole report, or None if it could not be completed
        """
        parts = [head]
        for _ in range(EditorConstants.MOUSE_REPORT_MAX_TOKENS):
            token = self.terminal.get_key(EditorConstants.MOUSE_REPORT_TIMEOUT)
            if not token:
                break
            token = str(token)
            parts.append(token)
            if token[-1] in 'Mm' and (len(token) == 1 or _MOUSE_REPORT_BODY.match(token[:-1])):
                report = ''.join(parts)
                return report if parse_mouse(report) is not None else None
            if not _MOUSE_REPORT_BODY.match(token):
                break
        logger.debug(f"Dropped incomplete mouse report {''.join(parts)!r}")
        return None

    def parse_key(self, key) -> InputEvent:
        """Parse a curtsies token or raw string into an event.

        Args:
            key: Token such as '<LEFT>', '<Ctrl-s>', '<F2>', a single
                character, or a raw SGR mouse report

        Returns:
            Parsed KeyEvent or MouseEvent
        """
        key_str = str(key)

        mouse = parse_mouse(key_str)
        if mouse is not None:
            return mouse

        # Curtsies-style key names like '<LEFT>', '<Ctrl-x>', '<F10>'
        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            name = key_str[1:-1]
            lower = name.lower().replace('+', '-')
            parts = lower.split('-') if '-' in lower else [lower]
            mods = set(parts[:-1])
            base = parts[-1]
            if 'meta' in mods or 'esc' in mods:
                mods.add('alt')
            if base in ('pageup', 'page_up'):
                base = 'page_up'
            elif base in ('pagedown', 'page_down'):
                base = 'page_down'

            if base in ('space', 'spacebar', 'spc') and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
            if 'ctrl' in mods and len(base) == 1:
                # Ctrl-J / Ctrl-M are Enter on terminals
                if base in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str, is_sequence=True)
                if base == 'i':
                    return KeyEvent(key_type=KeyType.SPECIAL, value='tab', raw=key_str, is_sequence=True)
                return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
            if 'alt' in mods and (base in _SPECIALS or len(base) == 1):
                return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str, is_alt=True)
            if base in ('esc', 'escape'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
            # Plain specials, function keys and anything else named
            return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str,
                            is_shift='shift' in mods, is_sequence=True)

        if len(key_str) == 1:
            o = ord(key_str)
            if key_str == '\t':
                return KeyEvent(key_type=KeyType.SPECIAL, value='tab', raw=key_str)
            if key_str in ('\r', '\n'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if key_str in ('\x7f', '\x08'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                return KeyEvent(key_type=KeyType.CTRL, value=chr(ord('a') + o - 1),
                                raw=key_str, is_ctrl=True)
            if key_str == '\x1b':
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)
