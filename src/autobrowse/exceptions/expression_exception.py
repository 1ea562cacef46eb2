"""Expression exceptions.

Exceptions thrown while tokenizing, parsing or evaluating condition expressions.
"""

from ..base_exceptions import AutobrowseException


class ExpressionError(AutobrowseException):
    """Base class for expression failures."""


class ExpressionParseError(ExpressionError):
    """Raised when an expression string is syntactically malformed."""


class ExpressionEvalError(ExpressionError):
    """Raised when a parsed expression cannot be evaluated.

    Typical causes are a reference to an undefined variable or an operator
    the evaluator does not support.
    """
