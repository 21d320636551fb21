"""
.. Half-block Cell Rendering
"""

from __future__ import annotations

__all__ = (
    "BlockRenderer",
    "Cell",
    "Glyph",
    "RowBuffer",
    "Full",
    "TopOnly",
    "BottomOnly",
    "Empty",
    "resolve_paint",
)

import io
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, TextIO, Union

from typing_extensions import NamedTuple

from .color import Color, _Color, checkerboard_color
from .ctlseqs import (
    CURSOR_FORWARD,
    CURSOR_POSITION,
    SGR_BG_DIRECT,
    SGR_BG_INDEXED,
    SGR_FG_DIRECT,
    SGR_FG_INDEXED,
    SGR_NORMAL,
)
from .geometry import RawSize, _RawSize, cell_size
from .output import Output
from .pixels import PixelGrid
from .terminal import DIRECT, get_color_method
from .utils import arg_type_error, arg_value_error_range

LOWER_PIXEL = "\u2584"  # lower-half block element
UPPER_PIXEL = "\u2580"  # upper-half block element


class Glyph(Enum):
    """The character drawn in a cell."""

    UPPER = UPPER_PIXEL
    LOWER = LOWER_PIXEL
    EMPTY = " "
    #: Not yet resolved; prints nothing
    NONE = ""


class Cell(NamedTuple):
    """One terminal character position.

    Args:
        glyph: The character drawn.
        foreground: The foreground color, if any.
        background: The background color, if any.
    """

    glyph: Glyph
    foreground: Optional[Color] = None
    background: Optional[Color] = None


# Cell paints; what a pair of vertically adjacent pixels resolve to


@dataclass(frozen=True)
class Full:
    """Both halves are colored; the upper by the background"""

    background: Color
    foreground: Color

    def to_cell(self) -> Cell:
        return Cell(Glyph.LOWER, self.foreground, self.background)


@dataclass(frozen=True)
class TopOnly:
    """Only the upper half is colored"""

    foreground: Color

    def to_cell(self) -> Cell:
        return Cell(Glyph.UPPER, self.foreground)


@dataclass(frozen=True)
class BottomOnly:
    """Only the lower half is colored"""

    foreground: Color

    def to_cell(self) -> Cell:
        return Cell(Glyph.LOWER, self.foreground)


@dataclass(frozen=True)
class Empty:
    """Neither half is colored"""

    def to_cell(self) -> Cell:
        return _EMPTY_CELL


CellPaint = Union[Full, TopOnly, BottomOnly, Empty]

_EMPTY = Empty()
_EMPTY_CELL = Cell(Glyph.EMPTY)


def resolve_paint(top: Optional[Color], bottom: Optional[Color]) -> CellPaint:
    """Resolves the paint of a cell from the colors of its two halves.

    Args:
        top: The color of the upper pixel or ``None`` if absent.
        bottom: The color of the lower pixel or ``None`` if absent.
    """
    if top is None:
        return _EMPTY if bottom is None else BottomOnly(bottom)
    return TopOnly(top) if bottom is None else Full(top, bottom)


class RowBuffer:
    """The in-progress cells of one terminal row i.e two rows of pixels.

    Args:
        width: The number of cells in a row.

    The buffer is either empty or holds exactly *width* partially-built cells
    (whose upper halves are known). It's cleared whenever a row is taken out of it.
    """

    __slots__ = ("_width", "_cells", "_pending")

    def __init__(self, width: int) -> None:
        self._width = width
        self._cells: List[Cell] = []
        self._pending = False

    def __len__(self) -> int:
        return len(self._cells)

    pending = property(
        lambda self: self._pending,
        doc="``True`` if the buffer holds partially-built cells",
    )
    width = property(lambda self: self._width, doc="The number of cells in a row")

    def start(self, top: Sequence[Optional[Color]]) -> None:
        """Begins a row with the colors of its upper pixels.

        Raises:
            RuntimeError: A row is already in progress.
            ValueError: *top* is not of the buffer's width.
        """
        if self._pending:
            raise RuntimeError("A row is already in progress")
        self._check_width(top)

        # The upper color is held as the background till the lower one is known
        self._cells = [Cell(Glyph.NONE, None, color) for color in top]
        self._pending = True

    def finish(self, bottom: Sequence[Optional[Color]]) -> List[Cell]:
        """Completes the row in progress with the colors of its lower pixels.

        Returns:
            The completed cells. The buffer is cleared.

        Raises:
            RuntimeError: No row is in progress.
            ValueError: *bottom* is not of the buffer's width.
        """
        if not self._pending:
            raise RuntimeError("No row is in progress")
        self._check_width(bottom)

        return self._take(
            [
                resolve_paint(cell.background, color).to_cell()
                for cell, color in zip(self._cells, bottom)
            ]
        )

    def flush(self) -> List[Cell]:
        """Completes the row in progress without lower pixels.

        Returns:
            The completed cells, each having only a foreground color or none at all.
            The buffer is cleared.

        Raises:
            RuntimeError: No row is in progress.
        """
        if not self._pending:
            raise RuntimeError("No row is in progress")

        return self._take(
            [resolve_paint(cell.background, None).to_cell() for cell in self._cells]
        )

    def _check_width(self, colors: Sequence[Optional[Color]]) -> None:
        if len(colors) != self._width:
            raise ValueError(
                f"Expected {self._width} pixel(s) in a row (got: {len(colors)})"
            )

    def _take(self, cells: List[Cell]) -> List[Cell]:
        self._cells = []
        self._pending = False
        return cells


class BlockRenderer:
    """Renders pixel grids using Unicode half blocks with direct-color or
    indexed-color control sequences.

    Args:
        transparent: If ``True``, transparent pixels are left uncolored. Otherwise,
          they're drawn as a two-tone gray checkerboard.
        method: The color method; ``"direct"`` (24-bit), ``"indexed"`` (the upper
          240 colors of the 256-color palette) or ``"auto"`` (determined from the
          terminal's advertised support).
        x: Columns left blank before each line of a render.
        y: Lines left blank above a render. With *absolute_offset*, *x* and *y* are
          counted from the top-left corner of the terminal instead of the cursor.
        absolute_offset: See *y*.

    Two rows of pixels are drawn per line of the terminal; the upper pixel of a
    cell as its background and the lower as its foreground, with a lower-half block.

    The color method only affects how colors are encoded in the output, never what
    is drawn.
    """

    def __init__(
        self,
        *,
        transparent: bool = False,
        method: str = "auto",
        x: int = 0,
        y: int = 0,
        absolute_offset: bool = False,
    ) -> None:
        if not isinstance(transparent, bool):
            raise arg_type_error("transparent", transparent)
        if not isinstance(method, str):
            raise arg_type_error("method", method)
        for name, value in (("x", x), ("y", y)):
            if not isinstance(value, int):
                raise arg_type_error(name, value)
            if value < 0:
                raise arg_value_error_range(name, value)
        if not isinstance(absolute_offset, bool):
            raise arg_type_error("absolute_offset", absolute_offset)

        self._transparent = transparent
        self._x, self._y = x, y
        self._absolute_offset = absolute_offset
        self._method = get_color_method(method)
        if self._method == DIRECT:
            self._sgr_fg, self._sgr_bg = SGR_FG_DIRECT, SGR_BG_DIRECT
        else:
            self._sgr_fg, self._sgr_bg = SGR_FG_INDEXED, SGR_BG_INDEXED

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(transparent={self._transparent}, "
            f"method={self._method!r}, x={self._x}, y={self._y}, "
            f"absolute_offset={self._absolute_offset})"
        )

    method = property(lambda self: self._method, doc="The resolved color method")
    transparent = property(
        lambda self: self._transparent, doc="Whether transparency is passed through"
    )
    offset = property(
        lambda self: _RawSize(self._x, self._y),
        doc="The offset of a render, in columns and lines",
    )
    absolute_offset = property(
        lambda self: self._absolute_offset,
        doc="Whether the offset is from the top-left corner of the terminal",
    )

    def iter_rows(self, grid: PixelGrid) -> Iterator[List[Cell]]:
        """Yields the cells of each terminal row of a grid, from top to bottom.

        Args:
            grid: The pixels to be rendered.

        A row is yielded only when complete. If the grid's height is odd, the last
        row is built from the last row of pixels alone.
        """
        if not isinstance(grid, PixelGrid):
            raise arg_type_error("grid", grid)

        pixel_color = self._pixel_color
        buffer = RowBuffer(grid.width)
        for row_no, row in enumerate(grid.rows()):
            colors = [pixel_color(pixel, row_no, col) for col, pixel in enumerate(row)]
            if row_no % 2:
                yield buffer.finish(colors)
            else:
                buffer.start(colors)

        if buffer.pending:
            yield buffer.flush()

    def render(
        self, grid: PixelGrid, output: Union[TextIO, Output, None] = None
    ) -> RawSize:
        """Draws a grid.

        Args:
            grid: The pixels to be rendered.
            output: The stream written to. Defaults to standard output.

        Returns:
            The size of the render, in columns and lines.

        Each line is written as soon as it's complete, ending with a color reset and
        a newline. Hence, the cursor is left at the beginning of the line just below
        the render.

        The lines are offset as set up on the renderer.

        If *output* reports a broken pipe, whatever is left of the render is dropped
        silently.
        """
        output = Output.wrap(output)
        if self._absolute_offset:
            output.write(CURSOR_POSITION % (self._y + 1, 1))
        elif self._y:
            output.write("\n" * self._y)

        indent = CURSOR_FORWARD % self._x if self._x else ""
        for cells in self.iter_rows(grid):
            if not output.write(indent + self.encode_row(cells)):
                break
        output.write(SGR_NORMAL)  # Reset color after the last line
        output.flush()

        return cell_size(*grid.size)

    def rewind_lines(self, grid: PixelGrid) -> int:
        """Returns how many lines the cursor has to move up, after a render of *grid*,
        for the next render to be drawn over it.

        With an absolute offset, every render positions the cursor itself. So, it's
        always zero.
        """
        if self._absolute_offset:
            return 0
        return cell_size(*grid.size).height + self._y

    def render_to_string(self, grid: PixelGrid) -> str:
        """Returns the render of a grid as a string, as :py:meth:`render` would
        write it.
        """
        with io.StringIO() as buffer:
            self.render(grid, buffer)
            return buffer.getvalue()

    def encode_row(self, cells: Sequence[Cell]) -> str:
        """Converts a row of cells into a string which reproduces the row when
        written to the terminal.

        Color control sequences are written only when the color of a cell differs
        from that of the previous cell.
        """
        # NOTE:
        # It's more efficient to write separate strings to the buffer separately
        # than concatenate and write together.
        buffer = io.StringIO()
        buf_write = buffer.write  # Eliminate attribute resolution cost
        encode = self._encode_color
        sgr_fg, sgr_bg = self._sgr_fg, self._sgr_bg
        fg = bg = None

        for glyph, cell_fg, cell_bg in cells:
            if glyph is Glyph.NONE:
                continue

            # A color can only be unset by a reset
            if (fg is not None and cell_fg is None) or (
                bg is not None and cell_bg is None
            ):
                buf_write(SGR_NORMAL)
                fg = bg = None
            if cell_bg != bg:
                buf_write(sgr_bg % encode(cell_bg))
                bg = cell_bg
            if cell_fg != fg:
                buf_write(sgr_fg % encode(cell_fg))
                fg = cell_fg
            buf_write(glyph.value)

        buf_write(SGR_NORMAL)
        buf_write("\n")

        with buffer:
            return buffer.getvalue()

    def _encode_color(self, color: Color) -> Union[tuple, int]:
        return color.rgb if self._method == DIRECT else color.indexed

    def _pixel_color(self, pixel: Color, row: int, col: int) -> Optional[Color]:
        alpha = pixel[3]
        if alpha == 255:
            return pixel
        if alpha:  # No partial transparency
            return _Color(*pixel[:3])
        return None if self._transparent else checkerboard_color(row, col)
