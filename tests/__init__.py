import io
import logging
import warnings

import pytest

from termview import logging as tv_logging
from termview.pixels import PixelGrid

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
CLEAR = (0, 0, 0, 0)


def make_grid(width, height, pixel=RED):
    return PixelGrid.from_colors([[pixel] * width for _ in range(height)])


class BrokenPipe(io.StringIO):
    """A stream whose reading end goes away after *n* writes"""

    def __init__(self, n=0):
        super().__init__()
        self.n = n

    def write(self, data):
        if self.n <= 0:
            raise BrokenPipeError
        self.n -= 1
        return super().write(data)


class TTY(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture
def log_session(monkeypatch):
    """Undoes the effects of `termview.logging.init_log()` after a test."""
    root = logging.getLogger()
    cli_logger = logging.getLogger("termview-cli")
    handlers, level, cli_level = root.handlers[:], root.level, cli_logger.level
    for name in ("DEBUG", "QUIET", "VERBOSE", "VERBOSE_LOG"):
        monkeypatch.setattr(tv_logging, name, None)
    monkeypatch.setattr(warnings, "showwarning", warnings.showwarning)

    yield

    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    cli_logger.setLevel(cli_level)
