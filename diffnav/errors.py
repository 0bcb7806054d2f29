"""Exception types raised at diffnav's adapter seams."""

from __future__ import annotations


class DiffnavError(Exception):
    """Base class for user-facing diffnav failures."""


class DiffParseError(DiffnavError):
    """Raised when input text cannot be parsed as a unified diff."""


class FormatterError(DiffnavError):
    """Raised when the external diff formatter is missing or exits non-zero."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class ActionError(DiffnavError):
    """Raised by clipboard/editor side effects; shown as a status message."""
