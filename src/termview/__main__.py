"""Support for command-line execution using `python -m termview`"""

from __future__ import annotations

import logging as _logging
import os
import sys

from .exit_codes import FAILURE, INTERRUPTED, codes


def main() -> int:
    """CLI execution entry-point"""
    from . import cli, logging

    # Can't use "termview", since the logger's level is changed.
    # Otherwise, it would affect children of "termview".
    logger = _logging.getLogger("termview-cli")
    logger.setLevel(_logging.INFO)

    try:
        exit_code = cli.main()
    except KeyboardInterrupt:
        logging.log(
            "Session interrupted",
            logger,
            _logging.CRITICAL,
            # If logging has been successfully initialized
            file=logging.VERBOSE is not None,
            # Only print to console if verbosity is enabled
            direct=bool(cli.args and (cli.args.verbose or cli.args.debug)),
        )
        if cli.args and cli.args.debug:
            raise
        return INTERRUPTED
    except Exception as e:
        logger.exception("Session terminated due to:")
        logging.log(
            "Session not ended successfully: "
            f"({type(e).__module__}.{type(e).__qualname__}) {e}",
            logger,
            _logging.CRITICAL,
            # If logging has been successfully initialized
            file=logging.VERBOSE is not None,
        )
        if cli.args and cli.args.debug:
            raise
        return FAILURE
    else:
        logger.info(f"Session ended with return-code {exit_code} ({codes[exit_code]})")
        return exit_code
    finally:
        silence_broken_stdout()


def silence_broken_stdout() -> None:
    """Redirects STDOUT to the null device if the reading end has gone away.

    Prevents the interpreter from reporting the broken pipe when it flushes STDOUT
    at exit.
    """
    try:
        sys.stdout.flush()
    except BrokenPipeError:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        os.close(devnull)


if __name__ == "__main__":
    sys.exit(main())
