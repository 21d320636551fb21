"""
.. Terminal Output Stream
"""

from __future__ import annotations

__all__ = ("Output",)

import logging as _logging
import sys
from typing import Optional, TextIO


class Output:
    """A text stream that goes silent once the reading end goes away.

    Args:
        stream: The underlying text I/O stream. Defaults to the value of
          :py:data:`sys.stdout` at the time of instantiation.

    When the stream reports a broken pipe (e.g output piped to a pager which was
    closed early), :py:attr:`broken` is set and every further write or flush is
    silently dropped. This is never reported as an error.
    """

    __slots__ = ("_stream", "_broken")

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = sys.stdout if stream is None else stream
        self._broken = False

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__}: stream={self._stream!r}, broken={self._broken}>"
        )

    broken = property(
        lambda self: self._broken,
        doc="``True`` if the stream has reported a broken pipe",
    )

    stream = property(lambda self: self._stream, doc="The underlying stream")

    def flush(self) -> bool:
        """Flushes the underlying stream.

        Returns:
            ``False`` if the stream is (or just got) broken. Otherwise, ``True``.
        """
        if self._broken:
            return False
        try:
            self._stream.flush()
        except BrokenPipeError:
            self._set_broken()
            return False

        return True

    def isatty(self) -> bool:
        """Checks if the underlying stream is connected to a terminal."""
        try:
            return self._stream.isatty()
        except (AttributeError, ValueError):
            return False

    def write(self, data: str) -> bool:
        """Writes to the underlying stream.

        Returns:
            ``False`` if the stream is (or just got) broken. Otherwise, ``True``.
        """
        if self._broken:
            return False
        try:
            self._stream.write(data)
        except BrokenPipeError:
            self._set_broken()
            return False

        return True

    @classmethod
    def wrap(cls, stream: Optional[TextIO | Output] = None) -> Output:
        """Returns *stream* as-is if it's already an instance, else wraps it."""
        return stream if isinstance(stream, cls) else cls(stream)

    def _set_broken(self) -> None:
        self._broken = True
        _logger.debug("Output stream is broken, further output is dropped")


_logger = _logging.getLogger(__name__)
