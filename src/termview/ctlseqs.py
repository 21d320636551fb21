"""
.. Control Sequences

   See https://invisible-island.net/xterm/ctlseqs/ctlseqs.html
"""

from __future__ import annotations

__all__ = []  # Updated later on

# Parameters
Ps = "%d"
Pm = lambda n: ";".join((Ps,) * n)  # noqa: E731

_START = None  # Marks the beginning control sequence definitions

# C0
ESC = "\x1b"

# C1
CSI = f"{ESC}["

# Cursor Movement
CURSOR_UP = f"{CSI}{Ps}A"
CURSOR_DOWN = f"{CSI}{Ps}B"
CURSOR_FORWARD = f"{CSI}{Ps}C"
# 1-based line and column
CURSOR_POSITION = f"{CSI}{Pm(2)}H"

# Erase in Display; 0 -> from the cursor to the end of the screen
ERASE_IN_DISPLAY = f"{CSI}{Ps}J"
ERASE_BELOW = ERASE_IN_DISPLAY % 0

# Select Graphic Rendition
SGR_NORMAL = f"{CSI}m"
SGR_FG_DIRECT = f"{CSI}38;2;{Pm(3)}m"
SGR_BG_DIRECT = f"{CSI}48;2;{Pm(3)}m"
SGR_FG_INDEXED = f"{CSI}38;5;{Ps}m"
SGR_BG_INDEXED = f"{CSI}48;5;{Ps}m"
SGR_FG_YELLOW = f"{CSI}33m"
SGR_FG_RED = f"{CSI}31m"

# DEC Modes
DECSET = f"{CSI}?{Ps}h"
DECRST = f"{CSI}?{Ps}l"

SHOW_CURSOR = DECSET % 25
HIDE_CURSOR = DECRST % 25


module_items = tuple(globals().items())
__all__.extend(
    name for name, _ in module_items[module_items.index(("_START", None)) + 1 :]
)


def cursor_up(n: int = 1) -> str:
    """Returns the sequence to move the cursor *n* lines up.

    Returns an empty string if *n* is not positive, since ``CSI 0 A`` moves the
    cursor one line up on most terminals.
    """
    return CURSOR_UP % n if n > 0 else ""


__all__.append("cursor_up")

del _START, module_items
