"""Entry points for evaluating expression text against a context."""

from typing import Any

from .expression import EvaluationScope
from .parser import parse_expression
from .values import to_boolean


def evaluate_expression(expression: str, context: EvaluationScope) -> Any:
    """Parse and evaluate an expression.

    Args:
        expression: Expression text
        context: Execution context or plain mapping of variables

    Returns:
        The typed result (bool for any operator, otherwise the literal or
        variable value)

    Raises:
        ExpressionParseError: If the text is malformed
        ExpressionEvalError: If a variable is undefined
    """
    return parse_expression(expression).evaluate(context)


def evaluate_boolean(expression: str, context: EvaluationScope) -> bool:
    """Evaluate an expression and coerce the result through truthiness."""
    return to_boolean(evaluate_expression(expression, context))
