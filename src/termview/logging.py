"""Event logging"""

from __future__ import annotations

import logging
import os
import sys
import warnings
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from typing import Optional, Set

from . import notify


def init_log(
    logfile: str,
    level: int,
    debug: bool,
    quiet: bool,
    verbose: bool,
    verbose_log: bool,
) -> None:
    """Initialize application event logging"""
    global DEBUG, QUIET, VERBOSE, VERBOSE_LOG

    logfile = os.path.expanduser(logfile)
    os.makedirs(os.path.dirname(logfile) or ".", exist_ok=True)
    handler = RotatingFileHandler(
        logfile,
        maxBytes=2**20,  # 1 MiB
        backupCount=1,
    )
    handler.addFilter(filter_)

    QUIET, VERBOSE, VERBOSE_LOG = quiet, verbose or debug, verbose_log
    DEBUG = debug = debug or level == logging.DEBUG
    if debug:
        level = logging.DEBUG
    elif VERBOSE or VERBOSE_LOG:
        level = logging.INFO

    FORMAT = (
        "({process}) ({asctime}) "
        + "{threadName}: " * debug
        + "[{levelname}] {name}: "
        + "{funcName}: " * debug
        + "{message}"
    )
    logging.basicConfig(
        handlers=(handler,),
        format=FORMAT,
        style="{",
        level=level,
        force=True,
    )

    # Writing to STDERR messes up output, especially during playback
    warnings.showwarning = _log_warning

    if debug:
        _logger.setLevel(logging.DEBUG)
    _logger.info("Starting a new session")
    _logger.info(f"Logging level set to {logging.getLevelName(level)}")


def log(
    msg: str,
    logger: Optional[logging.Logger] = None,
    level: int = logging.INFO,
    context: Optional[str] = None,
    *,
    direct: bool = True,
    file: bool = True,
    verbose: bool = False,
) -> None:
    """Report events to various destinations"""
    if logger is None:
        logger = _logger

    if verbose:
        if VERBOSE:
            logger.log(level, msg, stacklevel=2)
            notify.notify(
                msg, getattr(notify, logging.getLevelName(level)), context, verbose=True
            )
        elif VERBOSE_LOG:
            logger.log(level, msg, stacklevel=2)
    else:
        if file:
            logger.log(level, msg, stacklevel=2)
        if direct:
            notify.notify(msg, getattr(notify, logging.getLevelName(level)), context)


def log_exception(
    msg: str, logger: logging.Logger, *, direct: bool = False, fatal: bool = False
) -> None:
    """Report an error with the exception reponsible

    NOTE: Should be called from within an exception handler
    i.e from (also possibly in a nested context) within an except or finally clause.
    """
    if DEBUG:
        logger.exception(f"{msg} due to:", stacklevel=3)
    elif VERBOSE or VERBOSE_LOG:
        exc_type, exc, _ = sys.exc_info()
        logger.error(
            f"{msg} due to: ({exc_type.__module__}.{exc_type.__qualname__}) {exc}",
            stacklevel=2,
        )
    else:
        logger.error(msg, stacklevel=2)

    if VERBOSE and direct:
        notify.notify(msg, notify.CRITICAL if fatal else notify.ERROR)


# Not annotated because it's not directly used.
def _log_warning(msg, catg, fname, lineno, f=None, line=None):
    """Redirects warnings to the logging system.

    Intended to replace `warnings.showwarning()`.
    """
    _logger.warning(
        warnings.formatwarning(msg, catg, fname, lineno, line), stacklevel=2
    )
    notify.notify("Please view the logs for some warning(s).", notify.WARNING)


# See "Filters" section in `logging` standard library documentation.
@dataclass
class Filter:
    disallowed: Set[str]

    def filter(self, record: logging.LogRecord) -> bool:
        return record.name.partition(".")[0] not in self.disallowed

    def add(self, name: str) -> None:
        self.disallowed.add(name)

    def remove(self, name: str) -> None:
        self.disallowed.remove(name)


filter_ = Filter({"PIL", "urllib3"})

# Can't use "termview", since the logger's level is changed.
# Otherwise, it would affect children of "termview".
_logger = logging.getLogger("termview-cli")

# Set from within `init_log()`
DEBUG: Optional[bool] = None
QUIET: Optional[bool] = None
VERBOSE: Optional[bool] = None
VERBOSE_LOG: Optional[bool] = None
