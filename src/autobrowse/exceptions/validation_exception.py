"""Validation exception.

Exception thrown when a well-formed task cannot be executed as written.
"""

from ..base_exceptions import AutobrowseException


class ValidationError(AutobrowseException):
    """Raised for runtime validation failures.

    Examples are a ``fill`` action without a value, a task with no actions,
    or an ``else`` node that does not follow an ``if`` node.
    """
