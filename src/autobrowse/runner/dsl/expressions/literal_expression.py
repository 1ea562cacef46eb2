"""Literal expression - constant values in conditions."""

from dataclasses import dataclass
from typing import Any

from .expression import EvaluationScope, Expression


@dataclass(frozen=True)
class LiteralExpression(Expression):
    """A constant: number (float), string, or boolean."""

    value: Any = None

    def evaluate(self, context: EvaluationScope) -> Any:
        return self.value
