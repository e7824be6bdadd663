#!/usr/bin/env python3
"""termpad - a Midnight Commander-style console editor.

Usage:
    python main.py [+LINE] PATH[:LINE]

Controls:
    Arrow keys, Home, End: Navigate cursor
    F2 / Ctrl-S: Save file
    F10 / Esc / Ctrl-Q: Quit (press twice with unsaved changes)
    Mouse: click to place the cursor, drag to mark a block
"""

from termpad.__main__ import main


if __name__ == "__main__":
    main()
