"""Variable expression - names resolved against the execution context."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ....exceptions import ExpressionEvalError
from .expression import EvaluationScope, Expression


@dataclass(frozen=True)
class VariableExpression(Expression):
    """Reference to a variable, resolved when the expression is evaluated.

    Resolution goes through the context's ``get_variable``, which checks the
    innermost loop scope before the shared table. A plain mapping is indexed
    directly.
    """

    name: str

    def evaluate(self, context: EvaluationScope) -> Any:
        """Look the variable up.

        Raises:
            ExpressionEvalError: If the variable is not defined
        """
        try:
            if isinstance(context, Mapping):
                return context[self.name]
            return context.get_variable(self.name)
        except KeyError as e:
            raise ExpressionEvalError(
                f"Undefined variable: {self.name}",
                cause=e,
                context={"variable": self.name},
            ) from e
