"""Exceptions package.

Framework-specific exceptions.
"""

from ..base_exceptions import AutobrowseException
from .action_execution_exception import ActionError
from .configuration_exception import ConfigurationError
from .document_exception import DocumentError
from .expression_exception import ExpressionError, ExpressionEvalError, ExpressionParseError
from .unsupported_operation_exception import UnsupportedOperationError
from .validation_exception import ValidationError

__all__ = [
    "AutobrowseException",
    "ActionError",
    "ConfigurationError",
    "DocumentError",
    "ExpressionError",
    "ExpressionEvalError",
    "ExpressionParseError",
    "UnsupportedOperationError",
    "ValidationError",
]
