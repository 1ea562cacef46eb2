"""Base exception classes for autobrowse.

This module contains the root exception hierarchy that all other
autobrowse exceptions inherit from.
"""

from typing import Any


class AutobrowseException(Exception):
    """Base exception for all autobrowse errors.

    Attributes:
        message: Human-readable error message
        error_code: Optional error code for programmatic handling
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message
            cause: Underlying exception that caused this error
            error_code: Optional error code
            context: Optional context dictionary
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        """The underlying exception, if any."""
        return self.__cause__

    def __str__(self) -> str:
        """Return string representation."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message
