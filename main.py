#!/usr/bin/env python3
"""blankcanvas - an overwrite-only text canvas.

Usage:
    python main.py [filename]

Controls:
    Arrow keys: Move the caret
    Shift-arrows: Select a block
    Type to overwrite cells
    Backspace/Delete: Blank a cell
    Shift-Space: Insert one space
    Ctrl-X/Ctrl-C/Ctrl-V: Cut, copy, paste
    Ctrl-Q: Quit
"""

import sys
from blankcanvas.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
