"""Main editor controller."""

import logging
import queue
import sys
import termios
from typing import Optional

from .commands import CommandRegistry
from .config import EditorConfig
from .constants import EditorConstants
from .keyboard import KeyboardHandler, KeyEvent, MouseAction, MouseEvent
from .session import EditorSession
from .terminal import TerminalInterface
from .view import EditorView
from .watcher import FileWatcher, WatchEvent, drain_changes

logger = logging.getLogger(__name__)

HELP_LINES = [
    "",
    "FILE                         NAVIGATION",
    "  F2, Ctrl-S   Save             ←/→/↑/↓   Move cursor",
    "  F10, Esc     Quit             Home/End  Line start/end",
    "  Ctrl-Q       Quit             Mouse     Place cursor, drag block",
    "  F1           Help",
    "",
    "EDITING",
    "  Enter        Split line",
    "  Tab          Insert spaces",
    "  Backspace    Delete before cursor",
    "  Delete       Delete at cursor",
]


class Editor:
    """Interactive loop around one EditorSession.

    The loop owns the session exclusively. The file watcher runs in its
    own thread and only ever puts WatchEvent values on self.events.
    """

    def __init__(self, session: EditorSession, config: Optional[EditorConfig] = None,
                 terminal: Optional[TerminalInterface] = None):
        """Initialize the editor components."""
        self.session = session
        self.config = config or session.config
        self.terminal = terminal or TerminalInterface(mouse=self.config.mouse)
        self.keyboard = KeyboardHandler(self.terminal)
        self.view = EditorView()
        self.command_registry = CommandRegistry()
        self.events: "queue.Queue[WatchEvent]" = queue.Queue()
        self.watcher = FileWatcher(session.path, self.events, interval=self.config.watch_interval)
        self.running = False
        self.status_message: Optional[str] = None
        self.quit_pending = False
        self.help_visible = False
        self.frame_count = 0
        self._static_screen: Optional[tuple] = None

    def run(self):
        """Run the main editor loop."""
        self.terminal.setup()
        self.watcher.start()
        self.running = True
        old_settings = None
        try:
            with self.terminal.term.cbreak():
                old_settings = self._disable_flow_control()
                while self.running:
                    self.tick()
        except KeyboardInterrupt:
            # Ctrl-C leaves like quit, without the unsaved-changes check
            logger.info("Interrupted")
        finally:
            if old_settings:
                try:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                except (termios.error, OSError) as e:
                    logger.warning(f"Could not restore terminal settings: {e}")
            self.watcher.stop(timeout=1.0)
            self.terminal.cleanup()

    @staticmethod
    def _disable_flow_control():
        """Let Ctrl-S and Ctrl-Q through to the editor.

        Returns:
            The previous termios settings, or None if they could not be changed
        """
        try:
            old_settings = termios.tcgetattr(sys.stdin)
            new_settings = list(old_settings)
            # Disable IXON/IXOFF in input flags (index 0)
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            return old_settings
        except (termios.error, AttributeError, OSError) as e:
            logger.debug(f"Flow control left enabled: {e}")
            return None

    def tick(self, timeout: float = EditorConstants.INPUT_POLL_TIMEOUT):
        """One loop iteration: drain signals, handle input, reconcile, draw.

        Input already queued behind the first event (the rest of a paste,
        typed-ahead keys) is handled in the same iteration. The change
        signal is only acted on after that, so an edit made in this
        iteration is seen by the reload check.
        """
        changed = drain_changes(self.events)
        event = self.keyboard.get_key_event(timeout=timeout)
        handled = 0
        while event is not None:
            self.handle_event(event)
            handled += 1
            if not self.running or handled >= EditorConstants.MAX_EVENTS_PER_TICK:
                break
            event = self.keyboard.get_key_event(timeout=0)
        if changed:
            self.handle_file_changed()
        self._draw()

    # --- Input ---

    def handle_event(self, event):
        if isinstance(event, MouseEvent):
            self._handle_mouse_event(event)
        else:
            self._handle_key_event(event)

    def _handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        # If help is visible, any key dismisses it
        if self.help_visible:
            self.hide_help()
            return

        self.status_message = None
        if not self.command_registry.execute(self, key_event):
            logger.debug(f"No command bound to {key_event.raw!r}")

    def _handle_mouse_event(self, mouse_event: MouseEvent):
        """Handle a pointer event; never changes the buffer or modified flag."""
        if self.help_visible:
            return
        viewport = self.view.viewport
        if mouse_event.action == MouseAction.SCROLL_UP:
            self.session.move_up()
        elif mouse_event.action == MouseAction.SCROLL_DOWN:
            self.session.move_down()
        elif mouse_event.button != 0:
            return
        elif mouse_event.action == MouseAction.PRESS:
            self.session.pointer_press(mouse_event.row, mouse_event.column, viewport)
        elif mouse_event.action == MouseAction.DRAG:
            self.session.pointer_drag(mouse_event.row, mouse_event.column, viewport)
        elif mouse_event.action == MouseAction.RELEASE:
            self.session.pointer_release()

    # --- Commands ---

    def handle_save(self):
        """Save the buffer and report the outcome in the status bar."""
        ok, error = self.session.save()
        if ok:
            self.status_message = f"Saved to {self.session.path}"
        else:
            self.status_message = error

    def handle_file_changed(self):
        """React to the watcher's signal that the file changed on disk."""
        if self.session.reload():
            self.status_message = f"Reloaded {self.session.path} (changed on disk)"
        elif self.session.modified:
            self.status_message = "File changed on disk; keeping unsaved edits"

    def request_quit(self):
        """Quit, asking for a second press when there are unsaved edits."""
        if self.session.modified and not self.quit_pending:
            self.quit_pending = True
            self.status_message = EditorConstants.QUIT_UNSAVED_MESSAGE
            return
        self.running = False

    def show_help(self):
        """Show the help screen."""
        self.help_visible = True

    def hide_help(self):
        """Hide the help screen and return to editor."""
        self.help_visible = False
        self.terminal.invalidate_frame()

    # --- Drawing ---

    def _draw(self):
        """Draw the current editor state to terminal."""
        width, height = self.terminal.width, self.terminal.height
        if (width < EditorConstants.MIN_TERMINAL_WIDTH
                or height < EditorConstants.MIN_TERMINAL_HEIGHT):
            # Static screens are drawn once per size, not every tick
            if self._static_screen != ('error', width, height):
                self.terminal.draw_error_message(
                    EditorConstants.TERMINAL_TOO_SMALL_MESSAGE.format(
                        EditorConstants.MIN_TERMINAL_WIDTH, EditorConstants.MIN_TERMINAL_HEIGHT),
                    EditorConstants.CURRENT_SIZE_MESSAGE.format(width, height),
                )
                self._static_screen = ('error', width, height)
            return
        if self.help_visible:
            if self._static_screen != ('help', width, height):
                self.terminal.draw_text_screen("TERMPAD HELP", HELP_LINES, " Press any key to continue")
                self._static_screen = ('help', width, height)
            return
        self._static_screen = None
        frame = self.view.layout(self.session, width, height,
                                 frame_count=self.frame_count, message=self.status_message)
        self.terminal.update_frame(frame)
        self.frame_count += 1
