"""
.. Pixel and Cell Geometry
"""

from __future__ import annotations

__all__ = ("RawSize", "PIXELS_PER_LINE", "cell_size")

from typing_extensions import NamedTuple, Self

#: Pixel rows drawn per terminal line
PIXELS_PER_LINE = 2


class RawSize(NamedTuple):
    """The dimensions of a rectangular region.

    Args:
        width: The horizontal dimension
        height: The vertical dimension

    Depending on where it comes from, the unit is either pixels or character cells
    (columns and lines). A dimension may be zero e.g the size of an empty image.
    """

    width: int
    height: int

    @classmethod
    def _new(cls, width: int, height: int) -> Self:
        """Alternate constructor for internal use only."""
        return tuple.__new__(cls, (width, height))


RawSize.width.__doc__ = "The horizontal dimension"
RawSize.height.__doc__ = "The vertical dimension"

_RawSize = RawSize._new


def cell_size(width: int, height: int) -> RawSize:
    """Converts a size in pixels to the size it's drawn at, in columns and lines.

    An odd last pixel row takes up a whole line.
    """
    return _RawSize(width, -(-height // PIXELS_PER_LINE))
