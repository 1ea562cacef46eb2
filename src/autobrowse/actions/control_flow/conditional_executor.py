"""Conditional execution for IF/ELSE control nodes."""

import logging
from collections.abc import Callable, Sequence

from ...exceptions import ValidationError
from ...model import ControlNode, NodeItem
from ...runner.dsl.executor import ExecutionContext
from ...runner.dsl.expressions import evaluate_boolean

logger = logging.getLogger(__name__)


class ConditionalExecutor:
    """Executor for ``if`` and ``else`` control nodes.

    An ``if`` evaluates its condition expression against the context and
    runs its children when it holds. An ``else`` is paired with the ``if``
    immediately before it in the same sequence and runs its children when
    that condition did not hold.

    The executor keeps no state between nodes; the caller passes the
    preceding ``if`` result to :meth:`execute_else`.

    Example:
        >>> context = ExecutionContext({"count": 5})
        >>> executor = ConditionalExecutor(context, run_sequence)
        >>> taken = executor.execute_if(ControlNode(type="if", condition="count > 3", children=[...]))
        >>> executor.execute_else(else_node, previous_if_result=taken)
    """

    def __init__(
        self, context: ExecutionContext, run_sequence: Callable[[Sequence[NodeItem]], None]
    ) -> None:
        """Initialize the conditional executor.

        Args:
            context: ExecutionContext conditions are evaluated against
            run_sequence: Callback executing a child node sequence
        """
        self.context = context
        self.run_sequence = run_sequence
        logger.debug("ConditionalExecutor initialized with context")

    def evaluate_condition(self, condition: str) -> bool:
        """Evaluate a condition. An empty condition holds.

        Raises:
            ExpressionParseError: If the condition is malformed
            ExpressionEvalError: If it references an undefined variable
        """
        if not condition.strip():
            return True
        return evaluate_boolean(condition, self.context)

    def execute_if(self, node: ControlNode) -> bool:
        """Execute an ``if`` node.

        Args:
            node: The if control node

        Returns:
            The condition result, for a following ``else``
        """
        condition_result = self.evaluate_condition(node.condition)
        logger.debug("IF condition '%s' evaluated to: %s", node.condition, condition_result)

        if condition_result:
            self.run_sequence(node.children)

        return condition_result

    def execute_else(self, node: ControlNode, previous_if_result: bool | None) -> bool:
        """Execute an ``else`` node.

        Args:
            node: The else control node
            previous_if_result: Condition result of the ``if`` directly before
                this node, None when the previous sibling is not an ``if``

        Returns:
            Whether the else branch ran

        Raises:
            ValidationError: If the else does not directly follow an if
        """
        if previous_if_result is None:
            raise ValidationError("else must directly follow an if")

        if previous_if_result:
            logger.debug("Skipping ELSE branch, IF condition held")
            return False

        logger.debug("Executing ELSE branch with %d nodes", len(node.children))
        self.run_sequence(node.children)
        return True
