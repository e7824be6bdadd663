"""termpad - a Midnight Commander-style console text editor."""

from .buffer import BufferIndexError, TextBuffer
from .cursor import CursorController, CursorPosition
from .file_binding import FileBinding
from .selection import SelectionModel, resolve_pointer
from .session import EditorSession

__all__ = [
    'BufferIndexError',
    'TextBuffer',
    'CursorController',
    'CursorPosition',
    'FileBinding',
    'SelectionModel',
    'resolve_pointer',
    'EditorSession',
]
