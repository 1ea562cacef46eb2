"""Unary operation expression - logical negation."""

from dataclasses import dataclass
from typing import Any

from ....exceptions import ExpressionEvalError
from .expression import EvaluationScope, Expression
from .values import to_boolean


@dataclass(frozen=True)
class UnaryOperationExpression(Expression):
    """Prefix operator applied to one operand. Only ``!`` exists."""

    operator: str
    operand: Expression

    def evaluate(self, context: EvaluationScope) -> Any:
        value = self.operand.evaluate(context)

        if self.operator == "!":
            return not to_boolean(value)

        raise ExpressionEvalError(f"Unsupported unary operator: {self.operator}")
