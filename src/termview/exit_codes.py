"""Exit codes of the ``termview`` command"""

from __future__ import annotations

SUCCESS = 0
#: At least one source could not be displayed
FAILURE = 1
INVALID_ARG = 2
INTERRUPTED = 3
#: No source (or directory entry) was left to be displayed
NO_VALID_SOURCE = 4

codes = {
    code: name
    for name, code in tuple(globals().items())
    if name.isupper() and isinstance(code, int)
}
