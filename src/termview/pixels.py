"""
.. Pixel Grids and Frames
"""

from __future__ import annotations

__all__ = ("PixelGrid", "Frame", "FrameSet")

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import PIL
from PIL import Image
from typing_extensions import NamedTuple

from .color import Color, _Color
from .exceptions import RenderError
from .geometry import RawSize, _RawSize
from .utils import arg_type_error, arg_value_error_msg, arg_value_error_range


class PixelGrid:
    """An immutable rectangular grid of RGBA pixels in row-major order.

    Args:
        width: Number of pixels in a row.
        height: Number of rows.
        data: RGBA channel values, four bytes per pixel, ``width * height * 4``
          bytes in all.

    Raises:
        TypeError: An argument is of an inappropriate type.
        ValueError: A dimension is negative or *data* is not of the expected length.
    """

    __slots__ = ("_width", "_height", "_data")

    def __init__(
        self, width: int, height: int, data: Union[bytes, bytearray, memoryview]
    ) -> None:
        for name, value in (("width", width), ("height", height)):
            if not isinstance(value, int):
                raise arg_type_error(name, value)
            if value < 0:
                raise arg_value_error_range(name, value)
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise arg_type_error("data", data)

        data = bytes(data)
        if len(data) != width * height * 4:
            raise arg_value_error_msg(
                f"Pixel data length does not match a {width}x{height} RGBA grid",
                len(data),
            )

        self._width = width
        self._height = height
        self._data = data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return self.size == other.size and self._data == other._data

    def __getitem__(self, position: Tuple[int, int]) -> Color:
        """Returns the pixel at column *x* and row *y*, ``grid[x, y]``."""
        x, y = position
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Pixel position out of range (got: {position!r})")
        offset = (y * self._width + x) * 4
        return _Color(*self._data[offset : offset + 4])

    def __hash__(self) -> int:
        return hash((self._width, self._height, self._data))

    def __repr__(self) -> str:
        return f"<{type(self).__name__}: {self._width}x{self._height}>"

    data = property(lambda self: self._data, doc="The raw RGBA pixel data")
    height = property(lambda self: self._height, doc="Number of pixel rows")
    width = property(lambda self: self._width, doc="Number of pixels in a row")

    @property
    def size(self) -> RawSize:
        """The dimensions of the grid, in pixels"""
        return _RawSize(self._width, self._height)

    def rows(self) -> Iterator[List[Color]]:
        """Yields the rows of the grid, from top to bottom."""
        row_length = self._width * 4
        data = self._data
        for y in range(self._height):
            row = data[y * row_length : (y + 1) * row_length]
            yield [_Color(*row[x : x + 4]) for x in range(0, row_length, 4)]

    def to_image(self) -> PIL.Image.Image:
        """Converts the grid into a new PIL image of mode ``RGBA``."""
        if not (self._width and self._height):
            return Image.new("RGBA", self.size)
        return Image.frombytes("RGBA", self.size, self._data)

    @classmethod
    def from_image(cls, image: PIL.Image.Image) -> PixelGrid:
        """Creates a grid from a PIL image.

        Args:
            image: The source image. It's converted to ``RGBA`` mode, if necessary,
              without modifying the original.

        Raises:
            termview.exceptions.RenderError: The image can not be converted.
        """
        if not isinstance(image, Image.Image):
            raise arg_type_error("image", image)

        if image.mode != "RGBA":
            try:
                image = image.convert("RGBA")
            # Possible for images in some modes e.g "La"
            except Exception as e:
                raise RenderError("Unable to convert image") from e

        return cls(*image.size, image.tobytes())

    @classmethod
    def from_colors(cls, rows: Sequence[Sequence[Tuple[int, ...]]]) -> PixelGrid:
        """Creates a grid from rows of ``(r, g, b[, a])`` tuples.

        Raises:
            ValueError: The rows are not all of the same length.
        """
        width = len(rows[0]) if rows else 0
        data = bytearray()
        for row in rows:
            if len(row) != width:
                raise arg_value_error_msg("Rows must all be of the same length", rows)
            for pixel in row:
                data.extend(Color(*pixel))

        return cls(width, len(rows), data)


class Frame(NamedTuple):
    """A single frame of an animation.

    Args:
        grid: The (already resized) pixels of the frame.
        duration: How long the frame should be displayed, in seconds, or ``None``
          if unspecified.
    """

    grid: PixelGrid
    duration: Optional[float] = None


Frame.grid.__doc__ = "The pixels of the frame"
Frame.duration.__doc__ = "The display duration of the frame, in seconds"


class FrameSet:
    """An ordered, non-empty sequence of frames.

    Args:
        frames: The frames, in display order.

    Raises:
        TypeError: An item is not a :py:class:`Frame`.
        ValueError: *frames* is empty.
    """

    __slots__ = ("_frames",)

    def __init__(self, frames: Iterable[Frame]) -> None:
        frames = tuple(frames)
        if not frames:
            raise ValueError("A frame set must contain at least one frame")
        for frame in frames:
            if not isinstance(frame, Frame):
                raise arg_type_error("frames", frame)

        self._frames = frames

    def __getitem__(self, index: int) -> Frame:
        return self._frames[index]

    def __iter__(self) -> Iterator[Frame]:
        return iter(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}: {len(self._frames)} frame(s)>"

    animated = property(
        lambda self: len(self._frames) > 1,
        doc="``True`` if there is more than one frame",
    )

    @classmethod
    def from_grids(
        cls, grids: Iterable[PixelGrid], duration: Optional[float] = None
    ) -> FrameSet:
        """Creates a frame set with the same duration for every frame."""
        return cls(Frame(grid, duration) for grid in grids)
