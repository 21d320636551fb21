"""
.. Cooperative Cancellation
"""

from __future__ import annotations

__all__ = ("CancellationChannel", "clean_up_terminal", "run_interruptible")

import logging as _logging
from queue import Empty, Full, Queue
from threading import Event, Thread
from time import monotonic
from typing import Any, Callable, Optional, TextIO, Union

from .ctlseqs import ERASE_BELOW, SGR_NORMAL, SHOW_CURSOR
from .exceptions import CancellationError
from .output import Output

#: Default time (in seconds) to wait for a playback loop to acknowledge a stop
DEFAULT_INTERRUPT_TIMEOUT = 1.0


class CancellationChannel:
    """A two-way stop handoff between an interrupt and a rendering loop.

    The interrupting side calls :py:meth:`request_stop` and then
    :py:meth:`wait_acknowledged`. The loop polls :py:meth:`stop_requested` at points
    where it's safe to stop (never in the middle of writing a line) and, having
    stopped, calls :py:meth:`acknowledge`. Only then may the interrupting side
    touch the terminal.

    A channel is meant for one session; once acknowledged, a stop can't be
    acknowledged again.
    """

    __slots__ = ("_requests", "_acks", "_acknowledged")

    def __init__(self) -> None:
        self._requests: Queue[bool] = Queue(1)
        self._acks: Queue[bool] = Queue(1)
        self._acknowledged = False

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__}: requested={not self._requests.empty()}, "
            f"acknowledged={self._acknowledged}>"
        )

    acknowledged = property(
        lambda self: self._acknowledged,
        doc="``True`` if a stop has been acknowledged on this channel",
    )

    # Interrupting side

    def request_stop(self) -> None:
        """Asks the loop to stop.

        Requests made before the loop gets to check are merged into one.
        """
        try:
            self._requests.put_nowait(True)
        except Full:  # Already pending
            pass

    def wait_acknowledged(self, timeout: Optional[float] = None) -> bool:
        """Waits for the loop to acknowledge a stop.

        Args:
            timeout: Maximum time to wait, in seconds. ``None`` means no limit.

        Returns:
            ``True`` if the acknowledgment was received. Otherwise, ``False``.
        """
        try:
            return self._acks.get(timeout=timeout)
        except Empty:
            return False

    # Loop side

    def stop_requested(self) -> bool:
        """Checks for (and consumes) a pending stop request.

        Returns:
            ``True`` if a stop was requested since the last check.
        """
        try:
            return self._requests.get_nowait()
        except Empty:
            return False

    def acknowledge(self) -> None:
        """Tells the interrupting side that the loop has stopped.

        Raises:
            termview.exceptions.CancellationError: A stop was already acknowledged
              on this channel.
        """
        if self._acknowledged:
            raise CancellationError("A stop has already been acknowledged")
        try:
            self._acks.put_nowait(True)
        except Full:
            raise CancellationError("Stop acknowledgment could not be sent") from None
        self._acknowledged = True


def clean_up_terminal(output: Union[TextIO, Output, None] = None) -> None:
    """Restores the terminal after an interrupted render.

    Resets colors, clears everything from the cursor downwards and shows the cursor.
    """
    output = Output.wrap(output)
    output.write(SGR_NORMAL)
    output.write(ERASE_BELOW)
    if output.isatty():
        output.write(SHOW_CURSOR)
    output.flush()


def run_interruptible(
    target: Callable[[], Any],
    channel: CancellationChannel,
    *,
    output: Union[TextIO, Output, None] = None,
    timeout: float = DEFAULT_INTERRUPT_TIMEOUT,
    name: str = "Renderer",
) -> Any:
    """Runs a rendering operation in a worker thread, such that it can be
    interrupted with :py:data:`~signal.SIGINT` (``CTRL + C``) at a safe point.

    Args:
        target: The rendering operation. It should check *channel* for stop
          requests at safe points and acknowledge.
        channel: The channel shared with *target*.
        output: The stream *target* writes to, used for cleanup.
        timeout: Maximum time to wait for *target* to acknowledge a stop, in seconds.
        name: The name of the worker thread.

    Returns:
        The return value of *target*.

    Raises:
        KeyboardInterrupt: The operation was interrupted. The terminal has been
          cleaned up.

    Any exception raised by *target* is re-raised in the calling thread.

    If *target* doesn't acknowledge within *timeout* (e.g it's in the middle of a
    large render with no checkpoint), the terminal is cleaned up anyways and the
    worker (a daemon thread) is abandoned to end with the process.
    Likewise, if interrupted again while waiting.
    """
    result = {}
    done = Event()

    def run():
        try:
            result["value"] = target()
        except BaseException as e:
            result["error"] = e
        finally:
            done.set()

    worker = Thread(target=run, name=name, daemon=True)
    worker.start()

    try:
        # Waiting with a timeout, so that `KeyboardInterrupt` can get through
        while not done.wait(0.05):
            pass
    except KeyboardInterrupt:
        _logger.debug("Interrupted, requesting %s to stop", name)
        channel.request_stop()
        try:
            deadline = monotonic() + timeout
            while not done.is_set():
                if channel.wait_acknowledged(0.05):
                    _logger.debug("%s acknowledged the stop", name)
                    break
                if monotonic() >= deadline:
                    _logger.debug("%s did not stop in time, abandoning it", name)
                    break
        finally:
            # Even if interrupted again while waiting
            clean_up_terminal(output)
        raise

    if "error" in result:
        raise result["error"]

    return result.get("value")


_logger = _logging.getLogger(__name__)
