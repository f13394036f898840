"""Custom exceptions for printquote."""

from typing import Any, Optional


class PrintQuoteError(Exception):
    """Base exception for printquote."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(PrintQuoteError):
    """Raised when configuration is invalid."""

    pass


class MeshParseError(PrintQuoteError):
    """Raised when a parser cannot recover geometry from a buffer.

    The dispatcher catches this and moves on to the next parser in the
    chain, so it never escapes :func:`printquote.estimate`.
    """

    def __init__(self, parser: str, reason: str):
        super().__init__(f"{parser} parser failed: {reason}")
        self.parser = parser
        self.reason = reason


class EmptyInputError(PrintQuoteError):
    """Raised when an estimate is requested for an empty buffer."""

    def __init__(self, file_name: str):
        super().__init__(f"No data supplied for '{file_name}'")
        self.file_name = file_name
