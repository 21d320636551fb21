"""
.. Image Fitting
"""

from __future__ import annotations

__all__ = ("fit", "fit_size")

import logging as _logging
import os
from typing import Optional, Tuple

import PIL
from PIL import Image, ImageOps

from .exceptions import RenderError
from .logging import log
from .terminal import get_terminal_size
from .utils import arg_type_error, arg_value_error_range


def fit_size(
    image_size: Tuple[int, int],
    width: Optional[int] = None,
    height: Optional[int] = None,
    *,
    terminal_size: Optional[os.terminal_size] = None,
) -> Tuple[int, int]:
    """Computes the pixel size an image should be drawn at.

    Args:
        image_size: The size of the image, in pixels.
        width: The width to draw at, in columns.
        height: The height to draw at, in lines.
        terminal_size: Used when neither *width* nor *height* is given. Defaults
          to the size of the terminal.

    Returns:
        The new size of the image, in pixels. Since two pixel rows are drawn per
        line, the height is in units of half a line.

    - Both *width* and *height*: exactly ``(width, 2 * height)``, ignoring the
      image's aspect ratio.
    - Either: the given dimension is matched, the other follows the aspect ratio.
    - Neither: the image is shrunk (never enlarged), keeping its aspect ratio, to
      fit within the terminal's columns and all but one of its lines.

    Raises:
        TypeError: An argument is of an inappropriate type.
        ValueError: A dimension is not positive.
    """
    for name, value in (("width", width), ("height", height)):
        if value is not None:
            if not isinstance(value, int):
                raise arg_type_error(name, value)
            if value < 1:
                raise arg_value_error_range(name, value)

    ori_width, ori_height = image_size
    if not (ori_width and ori_height):
        return (ori_width, ori_height)

    if width and height:
        return (width, 2 * height)
    if width:
        return (width, max(1, round(ori_height * width / ori_width)))
    if height:
        return (max(1, round(ori_width * 2 * height / ori_height)), 2 * height)

    columns, lines = terminal_size or get_terminal_size()
    # Leave a line for the prompt
    max_width, max_height = columns, 2 * max(1, lines - 1)
    if ori_width <= max_width and ori_height <= max_height:
        return (ori_width, ori_height)

    scale = min(max_width / ori_width, max_height / ori_height)
    return (
        max(1, min(max_width, round(ori_width * scale))),
        max(1, min(max_height, round(ori_height * scale))),
    )


def fit(
    image: PIL.Image.Image,
    width: Optional[int] = None,
    height: Optional[int] = None,
    *,
    terminal_size: Optional[os.terminal_size] = None,
    mirror: bool = False,
) -> PIL.Image.Image:
    """Resizes an image to be drawn, as determined by :py:func:`fit_size`.

    Args:
        mirror: If ``True``, the image is also flipped horizontally.

    Returns:
        A new image. *image* is never modified.

    Raises:
        termview.exceptions.RenderError: The image can not be resized.
    """
    if not isinstance(image, Image.Image):
        raise arg_type_error("image", image)

    size = fit_size(image.size, width, height, terminal_size=terminal_size)
    if size != image.size:
        log(
            "From {}x{} the image is now {}x{}".format(*image.size, *size),
            _logger,
            verbose=True,
        )
        try:
            image = image.resize(size, Image.Resampling.BOX)
        except Exception as e:
            raise RenderError("Unable to resize image") from e
    else:
        image = image.copy()

    return ImageOps.mirror(image) if mirror else image


_logger = _logging.getLogger(__name__)
