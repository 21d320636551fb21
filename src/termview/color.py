"""
.. The Color API
"""

from __future__ import annotations

__all__ = ("Color", "CHECKERBOARD_DARK", "CHECKERBOARD_LIGHT", "checkerboard_color")

from functools import lru_cache

from typing_extensions import NamedTuple, Self

from .utils import arg_value_error_range

# Channel levels of the 6x6x6 color cube in the xterm 256-color palette
_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)


# To bypass `NamedTuple`'s `__new__()` override limitation
class _DummyColor(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255


class Color(_DummyColor):
    """A color.

    Args:
        r: The red channel.
        g: The green channel.
        b: The blue channel.
        a: The alpha channel (opacity).

    Raises:
        ValueError: The value of a channel is not within the valid range.

    NOTE:
        The valid value range for all channels is 0 to 255, both inclusive.

        An alpha of exactly ``0`` means fully transparent, any other value is taken
        as fully opaque.

    TIP:
        This class is a :py:class:`~typing.NamedTuple` of four fields.
    """

    __slots__ = ()

    # Overrides these descriptors in order to speed up attribute resolution and to
    # simplify auto documentation.
    r: int = _DummyColor.r
    r.__doc__ = """The red channel"""

    g: int = _DummyColor.g
    g.__doc__ = """The green channel"""

    b: int = _DummyColor.b
    b.__doc__ = """The blue channel"""

    a: int = _DummyColor.a
    a.__doc__ = """The alpha channel (opacity)"""

    def __new__(cls, r: int, g: int, b: int, a: int = 255) -> Self:
        # Only the 8 LSb may be set for any value within the range [0, 255].
        # `x & ~255` unsets the 8 LSb. Hence, if the result is non-zero (i.e any
        # of the bits above the lowest 8 is set), it implies `x` is out of range.
        if (r | g | b | a) & ~255:  # First test to see if *any* is out of range
            if r & ~255:
                raise arg_value_error_range("r", r)
            if g & ~255:
                raise arg_value_error_range("g", g)
            if b & ~255:
                raise arg_value_error_range("b", b)
            if a & ~255:
                raise arg_value_error_range("a", a)

        # Using `tuple` directly instead of `super()` for performance
        return tuple.__new__(cls, (r, g, b, a))

    @property
    def indexed(self) -> int:
        """The nearest color among the upper 240 colors of the xterm 256-color
        palette.

        Returns:
            A palette index in the range [16, 255].
        """
        return rgb_to_indexed(*self[:3])

    @property
    def rgb(self) -> tuple[int, int, int]:
        """Extracts the R, G and B channels of the color.

        Returns:
            A 3-tuple containing the red, green and blue channel values.
        """
        return self[:3]

    @property
    def transparent(self) -> bool:
        """``True`` if the alpha channel is zero. Otherwise, ``False``."""
        return not self[3]

    @classmethod
    def _new(cls, r: int, g: int, b: int, a: int = 255) -> Self:
        """Alternate constructor for internal use only."""
        return tuple.__new__(cls, (r, g, b, a))


_Color = Color._new


@lru_cache(maxsize=4096)
def rgb_to_indexed(r: int, g: int, b: int) -> int:
    """Maps an RGB value to the nearest color in the xterm 256-color palette,
    excluding the 16 system colors (whose values vary across terminals).
    """

    def cube_level(value: int) -> int:
        # Boundaries are the midpoints between adjacent levels
        return 0 if value < 48 else 1 if value < 115 else (value - 35) // 40

    ri, gi, bi = cube_level(r), cube_level(g), cube_level(b)
    cube = (_CUBE_LEVELS[ri], _CUBE_LEVELS[gi], _CUBE_LEVELS[bi])

    gray_i = min(max((r + g + b) // 3 - 3, 0) // 10, 23)
    gray_level = 8 + 10 * gray_i

    cube_distance = sum((x - y) ** 2 for x, y in zip(cube, (r, g, b)))
    gray_distance = sum((gray_level - x) ** 2 for x in (r, g, b))

    if gray_distance < cube_distance:
        return 232 + gray_i
    return 16 + 36 * ri + 6 * gi + bi


CHECKERBOARD_DARK = _Color(102, 102, 102)
CHECKERBOARD_LIGHT = _Color(153, 153, 153)


def checkerboard_color(row: int, col: int) -> Color:
    """Returns the color representing a transparent pixel at the given position.

    Adjacent pixels alternate between two grays, forming a checkerboard regardless
    of the image's content.
    """
    return CHECKERBOARD_DARK if row % 2 == col % 2 else CHECKERBOARD_LIGHT
