"""Binding between the buffer and its file on disk.

FileBinding decides when on-disk content may replace the buffer. The rule
is that unsaved edits are never overwritten by an external change: a
change notification only reloads an unmodified buffer.
"""

from __future__ import annotations

import errno
import logging
import os
import stat
import tempfile
from typing import Optional

from .buffer import TextBuffer

logger = logging.getLogger(__name__)


class FileBinding:
    """Owns the buffer's lifecycle: load, save and reload."""

    def __init__(self, path, buffer: Optional[TextBuffer] = None):
        self.path = os.fspath(path)
        self.buffer = buffer if buffer is not None else TextBuffer()
        self._clean_version = self.buffer.version

    @classmethod
    def open(cls, path) -> "FileBinding":
        """Load the file at path; a missing file gives an empty buffer."""
        return cls(path, TextBuffer.load(path))

    @property
    def modified(self) -> bool:
        """True once any edit has been applied since the last save or reload."""
        return self.buffer.version != self._clean_version

    def mark_clean(self) -> None:
        self._clean_version = self.buffer.version

    def save(self) -> tuple[bool, Optional[str]]:
        """Write the whole buffer to the bound path.

        The file is written to a temporary file in the same directory and
        renamed over the target, so the target either keeps its old content
        or gets the complete new content.

        Returns:
            (True, None) on success, (False, message) on failure. On failure
            the buffer and the modified flag are left untouched.
        """
        content = self.buffer.to_text()
        version = self.buffer.version
        dir_name = os.path.dirname(self.path) or '.'
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', newline='',
                                             dir=dir_name, prefix='.', suffix='.tmp',
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            self._copy_mode(temp_filename)
            os.replace(temp_filename, self.path)
        except PermissionError as e:
            logger.warning(f"Permission denied saving {self.path}: {e}")
            self._discard_temp(temp_filename)
            return False, f"Error: Permission denied saving {self.path}"
        except OSError as e:
            logger.warning(f"Could not save {self.path}: {e}")
            self._discard_temp(temp_filename)
            if e.errno == errno.ENOSPC:
                return False, "Error: No space left on device"
            return False, f"Error: Cannot save to {self.path}"

        self._clean_version = version
        logger.info(f"Saved {len(content)} characters to {self.path}")
        return True, None

    def _copy_mode(self, temp_filename: str) -> None:
        # Keep the permissions of the file being replaced
        try:
            mode = stat.S_IMODE(os.stat(self.path).st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            mode = 0o666 & ~umask
        os.chmod(temp_filename, mode)

    @staticmethod
    def _discard_temp(temp_filename: Optional[str]) -> None:
        if temp_filename and os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError as e:
                logger.warning(f"Could not remove temporary file {temp_filename}: {e}")

    def read_disk(self) -> Optional[str]:
        """Current file content, or None if it cannot be read."""
        try:
            with open(self.path, 'r', encoding='utf-8', newline='') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Could not read {self.path}: {e}")
            return None

    def reload(self) -> bool:
        """Reconcile with an external change notification.

        A modified buffer always wins: the notification is dropped. An
        unmodified buffer is replaced only when the file's content actually
        differs, so a touch or a rewrite with the same bytes (including our
        own saves) leaves everything as it is.

        Returns:
            True if the buffer was replaced
        """
        if self.modified:
            logger.info(f"Ignoring change to {self.path}: buffer has unsaved edits")
            return False
        content = self.read_disk()
        if content is None or content == self.buffer.to_text():
            return False
        self.buffer = TextBuffer(content)
        self.mark_clean()
        logger.info(f"Reloaded {self.path} after external change")
        return True
