"""
.. Animation Playback
"""

from __future__ import annotations

__all__ = ("FrameSequencer", "Phase", "PlaybackMode", "PlaybackState")

import logging as _logging
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, TextIO, Union

from .cancel import CancellationChannel
from .ctlseqs import CURSOR_DOWN, HIDE_CURSOR, SHOW_CURSOR, cursor_up
from .exceptions import TermViewError
from .output import Output
from .pixels import Frame, FrameSet
from .render import BlockRenderer
from .utils import arg_type_error, arg_value_error_range

#: Used when neither an override nor the frame specifies a duration, in seconds
DEFAULT_FRAME_DURATION = 0.1


class PlaybackMode(Enum):
    """How a frame set is played"""

    #: Replay from the first frame after the last, until stopped
    LOOP = auto()
    #: Play every frame once
    ONCE = auto()
    #: Draw only the first frame
    STATIC = auto()


class Phase(Enum):
    IDLE = auto()
    PLAYING = auto()
    STOPPED = auto()


@dataclass
class PlaybackState:
    """The state of a :py:class:`FrameSequencer`"""

    mode: PlaybackMode
    cancelled: bool = False
    phase: Phase = Phase.IDLE


class FrameSequencer:
    """Plays a frame set in place, redrawing each frame over the previous one.

    Args:
        frames: The frames to be played.
        renderer: Draws each frame.
        mode: The playback mode.
        frame_duration: If not ``None``, the display duration of every frame, in
          seconds, overriding the frames' own durations.
        channel: Polled for stop requests, at frame boundaries. If ``None``,
          playback can't be stopped other than by the end of the frames (or the
          output going away).
        output: The stream written to. Defaults to standard output.
        sleep: Called with the delay after drawing each frame.

    Raises:
        TypeError: An argument is of an inappropriate type.
        ValueError: *frame_duration* is not positive.

    A sequencer plays only once; playing a stopped sequencer raises
    :py:class:`~termview.exceptions.TermViewError`.
    """

    def __init__(
        self,
        frames: FrameSet,
        renderer: BlockRenderer,
        *,
        mode: PlaybackMode = PlaybackMode.LOOP,
        frame_duration: Optional[float] = None,
        channel: Optional[CancellationChannel] = None,
        output: Union[TextIO, Output, None] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not isinstance(frames, FrameSet):
            raise arg_type_error("frames", frames)
        if not isinstance(renderer, BlockRenderer):
            raise arg_type_error("renderer", renderer)
        if not isinstance(mode, PlaybackMode):
            raise arg_type_error("mode", mode)
        if frame_duration is not None:
            if not isinstance(frame_duration, (float, int)):
                raise arg_type_error("frame_duration", frame_duration)
            if frame_duration <= 0:
                raise arg_value_error_range("frame_duration", frame_duration)

        self._frames = frames
        self._renderer = renderer
        self._frame_duration = frame_duration
        self._channel = channel
        self._output = Output.wrap(output)
        self._sleep = sleep
        self.state = PlaybackState(mode)
        self._rewound = 0

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__}: frames={len(self._frames)}, "
            f"mode={self.state.mode.name}, phase={self.state.phase.name}>"
        )

    cancelled = property(
        lambda self: self.state.cancelled, doc="``True`` if playback was stopped early"
    )

    def delay(self, frame: Frame) -> float:
        """Returns how long *frame* stays on screen, in seconds."""
        if self._frame_duration is not None:
            return self._frame_duration
        if frame.duration:
            return frame.duration
        return DEFAULT_FRAME_DURATION

    def play(self) -> None:
        """Plays the frames.

        Returns when the frames have been played according to the mode, a stop has
        been requested and acknowledged, or the output has gone away.

        Raises:
            termview.exceptions.TermViewError: The sequencer has already played.
            termview.exceptions.CancellationError: The stop handoff broke.
        """
        state = self.state
        if state.phase is not Phase.IDLE:
            raise TermViewError(
                f"Playback has already started (phase: {state.phase.name})"
            )

        output = self._output
        state.phase = Phase.PLAYING
        hide_cursor = output.isatty()
        if hide_cursor:
            output.write(HIDE_CURSOR)
        _logger.debug(
            "Playing %d frame(s) (mode: %s)", len(self._frames), state.mode.name
        )

        try:
            self._play()
        finally:
            state.phase = Phase.STOPPED
            if hide_cursor:
                output.write(SHOW_CURSOR)
            output.flush()

        if state.cancelled:
            _logger.debug("Playback was stopped")
            # Only after the last write, so the interrupt handler has the terminal
            # to itself
            self._channel.acknowledge()

    def _play(self) -> None:
        frames = self._frames
        last = len(frames) - 1
        mode = self.state.mode
        output = self._output
        render = self._renderer.render

        while True:
            for index, frame in enumerate(frames):
                if self._stop_requested():
                    return

                render(frame.grid, output)
                self._rewound = 0
                if output.broken or mode is PlaybackMode.STATIC:
                    return

                self._sleep(self.delay(frame))
                if self._stop_requested():
                    return

                if index == last and mode is not PlaybackMode.LOOP:
                    return

                lines = self._renderer.rewind_lines(frame.grid)
                if not output.write(cursor_up(lines)) or not output.flush():
                    return
                self._rewound = lines

    def _stop_requested(self) -> bool:
        if self._channel is None or not self._channel.stop_requested():
            return False

        self.state.cancelled = True
        # Back below the frame still on screen
        if self._rewound:
            self._output.write(CURSOR_DOWN % self._rewound)
        return True


_logger = _logging.getLogger(__name__)
