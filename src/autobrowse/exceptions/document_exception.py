"""Document exception.

Exception thrown when a task document has a malformed shape.
"""

from ..base_exceptions import AutobrowseException


class DocumentError(AutobrowseException):
    """Raised when a task or node document cannot be decoded.

    Document errors are load-time failures: they abort loading before any
    task runs.
    """
