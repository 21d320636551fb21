"""Issuing user notifications on STDERR"""

from __future__ import annotations

import sys
from typing import Optional

from . import logging
from .ctlseqs import SGR_FG_RED, SGR_FG_YELLOW, SGR_NORMAL

DEBUG = INFO = 0
WARNING = 1
ERROR = 2
CRITICAL = 3


def notify(
    msg: str,
    level: int = INFO,
    context: Optional[str] = None,
    *,
    verbose: bool = False,
) -> None:
    """Displays a message to the user.

    Args:
        msg: The message.
        level: One of the notification levels defined in this module.
        context: Prefixed to the message, if given.
        verbose: If ``True``, the message is displayed only in verbose mode.

    Everything goes to STDERR, since STDOUT carries the images.
    """
    if logging.QUIET and level < CRITICAL or verbose and not logging.VERBOSE:
        return

    if context:
        msg = f"{context}: {msg}"
    if level == WARNING:
        msg = f"{SGR_FG_YELLOW}{msg}{SGR_NORMAL}"
    elif level >= ERROR:
        msg = f"{SGR_FG_RED}{msg}{SGR_NORMAL}"

    print(msg, file=sys.stderr, flush=True)
