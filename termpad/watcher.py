"""Background watcher reporting changes to one file."""

from __future__ import annotations

import logging
import os
import queue
import threading
from enum import Enum
from typing import Optional

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class WatchEvent(Enum):
    FILE_CHANGED = "file_changed"


def _signature(path: str) -> Optional[tuple[int, int, int]]:
    """Identity of the file's current state, or None if it is absent."""
    try:
        st = os.stat(path)
    except FileNotFoundError:
        return None
    return (st.st_ino, st.st_size, st.st_mtime_ns)


def drain_changes(events: "queue.Queue[WatchEvent]") -> bool:
    """Empty the queue without blocking.

    Returns:
        True if at least one change signal was pending
    """
    changed = False
    while True:
        try:
            event = events.get_nowait()
        except queue.Empty:
            return changed
        if event is WatchEvent.FILE_CHANGED:
            changed = True


class FileWatcher:
    """Polls one path and puts FILE_CHANGED on a queue when it changes.

    Only the watched path is looked at, so other files in the same
    directory never produce a signal. The thread is a daemon and dies with
    the process; stop() ends it earlier.
    """

    def __init__(self, path, events: "queue.Queue[WatchEvent]",
                 interval: float = EditorConstants.WATCH_INTERVAL):
        self.path = os.path.abspath(os.fspath(path))
        self.events = events
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._last = _signature(self.path)

    def start(self) -> "FileWatcher":
        if self._thread is None:
            self._last = _signature(self.path)
            self._thread = threading.Thread(
                target=self._run, name=f"watch:{os.path.basename(self.path)}", daemon=True
            )
            self._thread.start()
            logger.debug(f"Watching {self.path} every {self.interval}s")
        return self

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
            logger.debug(f"Stopped watching {self.path}")

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def poll(self) -> bool:
        """Check the file once; signal and return True if it changed."""
        try:
            current = _signature(self.path)
        except OSError as e:
            logger.warning(f"Could not stat {self.path}: {e}")
            return False
        if current == self._last:
            return False
        self._last = current
        if current is None:
            # Deleted; there is nothing to reload from
            return False
        self.events.put(WatchEvent.FILE_CHANGED)
        return True

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.poll()
