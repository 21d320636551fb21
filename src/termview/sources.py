"""
.. Image Sources
"""

from __future__ import annotations

__all__ = (
    "STDIN",
    "is_url",
    "iter_dir",
    "load_frames",
    "open_image",
    "read_stdin",
)

import io
import logging as _logging
import os
import sys
from os.path import realpath
from typing import BinaryIO, FrozenSet, Iterator, Optional
from urllib.parse import urlparse

import PIL
import requests
from PIL import Image, ImageSequence, UnidentifiedImageError

from .exceptions import SourceError, URLNotFoundError
from .pixels import Frame, FrameSet, PixelGrid
from .resize import fit
from .utils import arg_type_error

#: The source name standing for standard input
STDIN = "-"


def is_url(source: str) -> bool:
    """Checks if *source* is an HTTP(S) URL."""
    url = urlparse(source)
    return url.scheme in {"http", "https"} and bool(url.netloc)


def read_stdin(stream: Optional[BinaryIO] = None) -> bytes:
    """Reads all of standard input (or *stream*) as bytes.

    Raises:
        termview.exceptions.SourceError: Nothing could be read.
    """
    if stream is None:
        stream = sys.stdin.buffer
    try:
        data = stream.read()
    except OSError as e:
        raise SourceError(f"Could not read from standard input: {e}") from e
    if not data:
        raise SourceError("No data from standard input")

    return data


def open_image(source: str, *, stdin: Optional[BinaryIO] = None) -> PIL.Image.Image:
    """Opens an image from a file path, a URL or standard input.

    Args:
        source: A file path, an ``http(s)`` URL or :py:data:`STDIN`.
        stdin: Read from instead of standard input, for :py:data:`STDIN`.

    Raises:
        TypeError: *source* is not a string.
        termview.exceptions.URLNotFoundError: The URL does not exist.
        termview.exceptions.SourceError: The source can not be read or does not
          contain an identifiable image.
    """
    if not isinstance(source, str):
        raise arg_type_error("source", source)

    if source == STDIN:
        _logger.debug("Reading image data from standard input")
        return _open(io.BytesIO(read_stdin(stdin)), "Data from standard input")

    if is_url(source):
        _logger.debug("Getting image from %r", source)
        try:
            response = requests.get(source, timeout=30)
        # Also handles `ConnectTimeout`
        except requests.exceptions.RequestException as e:
            raise SourceError(f"Unable to get {source!r}: {e}") from e
        if response.status_code == 404:
            raise URLNotFoundError(f"URL {source!r} does not exist.")
        if not response.ok:
            raise SourceError(
                f"Unable to get {source!r} (status: {response.status_code})"
            )
        return _open(io.BytesIO(response.content), f"The URL {source!r}")

    try:
        return _open(source, f"{source!r}")
    except FileNotFoundError as e:
        raise SourceError(f"No such file: {source!r}") from e
    except IsADirectoryError as e:
        raise SourceError(f"{source!r} is a directory") from e
    except OSError as e:
        raise SourceError(f"Could not read {source!r}: {e.strerror or e}") from e


def _open(fp, description: str) -> PIL.Image.Image:
    try:
        return Image.open(fp)
    except UnidentifiedImageError as e:
        raise SourceError(f"{description} is not an identifiable image") from e


def load_frames(
    image: PIL.Image.Image,
    width: Optional[int] = None,
    height: Optional[int] = None,
    *,
    terminal_size: Optional[os.terminal_size] = None,
    mirror: bool = False,
    static: bool = False,
) -> FrameSet:
    """Decodes, converts and resizes the frames of an image.

    Args:
        image: The source image.
        width: See :py:func:`~termview.resize.fit`.
        height: See :py:func:`~termview.resize.fit`.
        terminal_size: See :py:func:`~termview.resize.fit`.
        mirror: See :py:func:`~termview.resize.fit`.
        static: If ``True``, only the first frame is loaded.

    Returns:
        One frame for a still image and one per frame (as composited by Pillow)
        for an animated image. Frame durations are taken from the image, if
        specified.

    Raises:
        termview.exceptions.RenderError: A frame can not be converted or resized.
        termview.exceptions.SourceError: The image data is corrupt or truncated.
    """
    if not isinstance(image, Image.Image):
        raise arg_type_error("image", image)

    animated = not static and getattr(image, "is_animated", False)
    frames = []
    try:
        for frame in ImageSequence.Iterator(image) if animated else (image,):
            duration = frame.info.get("duration") if animated else None
            rgba = frame.convert("RGBA")
            grid = PixelGrid.from_image(
                fit(rgba, width, height, terminal_size=terminal_size, mirror=mirror)
            )
            frames.append(Frame(grid, duration / 1000 if duration else None))
    except (OSError, EOFError, SyntaxError) as e:
        raise SourceError(f"Could not decode the image: {e}") from e

    if animated:
        _logger.debug("Loaded %d frame(s)", len(frames))

    return FrameSet(frames)


def iter_dir(
    path: str, *, recursive: bool = False, show_hidden: bool = False
) -> Iterator[str]:
    """Yields the paths of the image files in a directory, in sorted order.

    Args:
        path: The directory.
        recursive: If ``True``, sub-directories are descended into, after the
          files of the directory.
        show_hidden: If ``True``, hidden (``.*``) entries are included.

    Only files Pillow can identify are yielded. Entries that can't be accessed are
    skipped. Symlinks to a directory containing the one being scanned are not
    followed, to avoid cycles.
    """
    yield from _iter_dir(path, recursive, show_hidden, frozenset((realpath(path),)))


def _iter_dir(
    path: str, recursive: bool, show_hidden: bool, ancestors: FrozenSet[str]
) -> Iterator[str]:
    try:
        with os.scandir(path) as entries:
            entries = sorted(entries, key=lambda entry: entry.name)
    except OSError as e:
        _logger.info("Could not get the contents of %r: %s", path, e)
        return

    subdirs = []
    for entry in entries:
        if not show_hidden and entry.name.startswith("."):
            continue
        try:
            is_file = entry.is_file()
            is_dir = entry.is_dir()
        except OSError:
            continue

        if is_file:
            if _is_image(entry.path):
                yield entry.path
        elif recursive and is_dir:
            subdirs.append(entry)

    for entry in subdirs:
        target = realpath(entry.path)
        # Eliminate cyclic symlinks
        if any(target == dir or dir.startswith(target + os.sep) for dir in ancestors):
            _logger.info("Skipping %r, a link into its own ancestor", entry.path)
            continue
        yield from _iter_dir(entry.path, recursive, show_hidden, ancestors | {target})


def _is_image(path: str) -> bool:
    try:
        with Image.open(path):
            return True
    except (OSError, UnidentifiedImageError, ValueError):
        return False


_logger = _logging.getLogger(__name__)
