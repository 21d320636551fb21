"""
.. Terminal Capabilities
"""

from __future__ import annotations

__all__ = (
    "DEFAULT_SIZE",
    "DIRECT",
    "INDEXED",
    "get_color_method",
    "get_terminal_size",
    "truecolor_supported",
)

import logging as _logging
import os
import sys

from .utils import cached

# Constants for color methods
DIRECT = "direct"
INDEXED = "indexed"

#: Used when the size of the terminal can not be determined
DEFAULT_SIZE = os.terminal_size((100, 40))


def get_terminal_size() -> os.terminal_size:
    """Returns the current size of the terminal.

    Returns:
        The terminal size in columns and lines, or :py:data:`DEFAULT_SIZE` if it
        can't be determined e.g when no standard stream is connected to a terminal.

    Output may be redirected, so the standard streams are tried in order of priority.
    """
    for stream in ("out", "err", "in"):
        try:
            return os.get_terminal_size(getattr(sys, f"__std{stream}__").fileno())
        except (OSError, AttributeError, ValueError):
            pass

    _logger.debug(
        "Could not get the terminal size, using %dx%d", *DEFAULT_SIZE, stacklevel=2
    )
    return DEFAULT_SIZE


@cached
def truecolor_supported() -> bool:
    """Checks if the terminal advertises support for direct (24-bit) color.

    Based on the ``COLORTERM`` environment variable.
    """
    COLORTERM = os.environ.get("COLORTERM") or ""
    return "truecolor" in COLORTERM or "24bit" in COLORTERM


def get_color_method(method: str = "auto") -> str:
    """Resolves a color method name.

    Args:
        method: ``"direct"``, ``"indexed"`` or ``"auto"``.

    Returns:
        :py:data:`DIRECT` or :py:data:`INDEXED`. For ``"auto"``, the former is
        returned if :py:func:`truecolor_supported` and the latter otherwise.

    Raises:
        ValueError: Unknown color method.
    """
    if method == "auto":
        return DIRECT if truecolor_supported() else INDEXED
    if method in {DIRECT, INDEXED}:
        return method

    raise ValueError(f"Unknown color method (got: {method!r})")


_logger = _logging.getLogger(__name__)
