"""Constants and configuration for the termpad editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Editing
    DEFAULT_TAB_SIZE = 4  # Spaces inserted by the Tab key

    # Main loop timing
    INPUT_POLL_TIMEOUT = 0.05  # Bounded wait for the next input event (seconds)
    MAX_EVENTS_PER_TICK = 256  # Queued input handled before the next redraw
    MOUSE_REPORT_TIMEOUT = 0.05  # Wait for the rest of a split mouse report (seconds)
    MOUSE_REPORT_MAX_TOKENS = 32
    WATCH_INTERVAL = 0.25  # Interval between stat() calls on the open file (seconds)

    # Screen layout: one border row/column around the edit area, 3-row status bar
    FRAME_ORIGIN_ROW = 1
    FRAME_ORIGIN_COLUMN = 1
    STATUS_BAR_HEIGHT = 3
    MIN_TERMINAL_WIDTH = 20
    MIN_TERMINAL_HEIGHT = 6

    # Mouse reporting: button events, drag motion, SGR encoding
    MOUSE_ENABLE = "\x1b[?1000h\x1b[?1002h\x1b[?1006h"
    MOUSE_DISABLE = "\x1b[?1006l\x1b[?1002l\x1b[?1000l"

    # Status messages
    QUIT_UNSAVED_MESSAGE = "Unsaved changes! Press quit again to discard them."
    TERMINAL_TOO_SMALL_MESSAGE = "Terminal too small! Need at least {}x{}."
    CURRENT_SIZE_MESSAGE = "Current size: {}x{}."
