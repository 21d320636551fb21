"""
termview

Display images and animations in the terminal
"""

from __future__ import annotations

__all__ = ("draw_image", "play_frames")

from typing import Optional, TextIO, Union

import PIL
from PIL import Image

from .cancel import DEFAULT_INTERRUPT_TIMEOUT, CancellationChannel, run_interruptible
from .geometry import RawSize
from .output import Output
from .pixels import FrameSet, PixelGrid
from .playback import FrameSequencer, PlaybackMode
from .render import BlockRenderer
from .resize import fit
from .sources import open_image
from .utils import arg_type_error

version_info = (0, 1, 0)

# Follows https://semver.org/spec/v2.0.0.html
__version__ = ".".join(map(str, version_info[:3]))
if version_info[3:]:
    __version__ += "-" + ".".join(map(str, version_info[3:]))


def draw_image(
    image: Union[str, PIL.Image.Image],
    width: Optional[int] = None,
    height: Optional[int] = None,
    *,
    transparent: bool = False,
    method: str = "auto",
    mirror: bool = False,
    output: Optional[TextIO] = None,
) -> RawSize:
    """Draws an image (the first frame, if animated) in the terminal.

    Args:
        image: A PIL image or the path/URL of an image file.
        width: See :py:func:`~termview.resize.fit`.
        height: See :py:func:`~termview.resize.fit`.
        transparent: See :py:class:`~termview.render.BlockRenderer`.
        method: See :py:class:`~termview.render.BlockRenderer`.
        mirror: See :py:func:`~termview.resize.fit`.
        output: The stream written to. Defaults to standard output.

    Returns:
        The size of the render, in columns and lines.
    """
    renderer = BlockRenderer(transparent=transparent, method=method)
    if isinstance(image, str):
        with open_image(image) as img:
            img = fit(img.convert("RGBA"), width, height, mirror=mirror)
        grid = PixelGrid.from_image(img)
    elif isinstance(image, Image.Image):
        grid = PixelGrid.from_image(fit(image, width, height, mirror=mirror))
    else:
        raise arg_type_error("image", image)

    return renderer.render(grid, output)


def play_frames(
    frames: FrameSet,
    *,
    mode: PlaybackMode = PlaybackMode.LOOP,
    frame_duration: Optional[float] = None,
    transparent: bool = False,
    method: str = "auto",
    output: Optional[TextIO] = None,
    interrupt_timeout: float = DEFAULT_INTERRUPT_TIMEOUT,
) -> None:
    """Plays frames in the terminal, in place.

    Args:
        frames: The frames to be played.
        mode: See :py:class:`~termview.playback.FrameSequencer`.
        frame_duration: See :py:class:`~termview.playback.FrameSequencer`.
        transparent: See :py:class:`~termview.render.BlockRenderer`.
        method: See :py:class:`~termview.render.BlockRenderer`.
        output: The stream written to. Defaults to standard output.
        interrupt_timeout: See :py:func:`~termview.cancel.run_interruptible`.

    Raises:
        KeyboardInterrupt: Playback was interrupted. The terminal has been cleaned up.

    Playback runs in a separate thread, such that ``CTRL + C`` stops it only after a
    frame has been completely drawn.
    """
    output = Output.wrap(output)
    channel = CancellationChannel()
    sequencer = FrameSequencer(
        frames,
        BlockRenderer(transparent=transparent, method=method),
        mode=mode,
        frame_duration=frame_duration,
        channel=channel,
        output=output,
    )
    run_interruptible(sequencer.play, channel, output=output, timeout=interrupt_timeout)
