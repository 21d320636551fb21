"""
.. Custom Exceptions
"""

from __future__ import annotations


class TermViewError(Exception):
    """Exception baseclass. Raised for generic errors."""


class RenderError(TermViewError):
    """Raised when an image can not be prepared for rendering e.g converted or
    resized.
    """


class CancellationError(TermViewError):
    """Raised when the stop handoff between an interrupt and a playback loop breaks.

    Terminal cleanup can no longer be guaranteed to happen at a safe point, so this
    is never recovered from.
    """


class SourceError(TermViewError):
    """Raised when an image source can not be opened or decoded."""


class URLNotFoundError(SourceError, FileNotFoundError):
    """Raised for 404 errors."""
