"""Action execution exception.

Exception thrown when a browser operation fails.
"""

from ..base_exceptions import AutobrowseException


class ActionError(AutobrowseException):
    """Exception thrown when action execution fails.

    Raised when the browser cannot locate the target element within its
    timeout or the underlying browser call errors.
    """
