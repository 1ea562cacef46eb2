"""Expression base class.

Abstract base class for nodes of a parsed condition expression.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Protocol


class VariableLookup(Protocol):
    """Anything variables can be resolved against.

    ``get_variable`` raises KeyError for undefined names.
    """

    def get_variable(self, name: str) -> Any: ...


EvaluationScope = VariableLookup | Mapping[str, Any]


class Expression(ABC):
    """Abstract base class for all condition expression nodes.

    An expression is one of:
    - Literals (numbers, strings, ``true``/``false``)
    - Variables (names resolved when evaluated)
    - Unary operations (``!``)
    - Binary operations (comparisons and ``&&``/``||``)

    Trees are built by :class:`~autobrowse.runner.dsl.expressions.parser.ExpressionParser`.
    """

    @abstractmethod
    def evaluate(self, context: EvaluationScope) -> Any:
        """Evaluate the expression against a variable scope.

        Args:
            context: Execution context (or plain mapping) used to resolve variables

        Returns:
            The computed value

        Raises:
            ExpressionEvalError: If a variable is undefined or an operator is unsupported
        """
