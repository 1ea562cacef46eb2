"""Unsupported operation exception."""

from ..base_exceptions import AutobrowseException


class UnsupportedOperationError(AutobrowseException):
    """Raised for an action or control type the interpreter cannot execute."""
