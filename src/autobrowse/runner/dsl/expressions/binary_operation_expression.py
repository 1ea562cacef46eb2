"""Binary operation expression - comparisons and logical connectives."""

from dataclasses import dataclass
from typing import Any

from ....exceptions import ExpressionEvalError
from .expression import EvaluationScope, Expression
from .values import to_boolean, to_display_string, to_number

COMPARISON_OPERATORS = ("==", "!=", ">", ">=", "<", "<=")
LOGICAL_OPERATORS = ("&&", "||")


@dataclass(frozen=True)
class BinaryOperationExpression(Expression):
    """Operation between two operand expressions.

    Comparisons (==, !=, <, >, <=, >=) and logical connectives (&&, ||).
    There is no arithmetic.

    * ``==`` and ``!=`` compare display strings, so ``1 == "1"`` holds.
    * Ordering operators compare numbers. Numeric strings count as numbers,
      booleans do not. A non-numeric operand makes the comparison false.
    * ``&&`` and ``||`` coerce both operands through truthiness. Both
      operands are always evaluated.

    Attributes:
        operator: One of COMPARISON_OPERATORS or LOGICAL_OPERATORS
        left: Left operand
        right: Right operand
    """

    operator: str
    left: Expression
    right: Expression

    def evaluate(self, context: EvaluationScope) -> Any:
        """Evaluate both operands, then apply the operator.

        Raises:
            ExpressionEvalError: If an operand references an undefined
                variable, or the operator is unsupported
        """
        left_val = self.left.evaluate(context)
        right_val = self.right.evaluate(context)

        if self.operator == "==":
            return to_display_string(left_val) == to_display_string(right_val)
        if self.operator == "!=":
            return to_display_string(left_val) != to_display_string(right_val)

        if self.operator in (">", ">=", "<", "<="):
            left_num = to_number(left_val)
            right_num = to_number(right_val)
            if left_num is None or right_num is None:
                return False
            if self.operator == ">":
                return left_num > right_num
            if self.operator == ">=":
                return left_num >= right_num
            if self.operator == "<":
                return left_num < right_num
            return left_num <= right_num

        if self.operator == "&&":
            return to_boolean(left_val) and to_boolean(right_val)
        if self.operator == "||":
            return to_boolean(left_val) or to_boolean(right_val)

        raise ExpressionEvalError(f"Unsupported binary operator: {self.operator}")
