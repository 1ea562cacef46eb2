"""Loop executor for ``for`` control nodes."""

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any

from ...exceptions import UnsupportedOperationError, ValidationError
from ...model import ControlNode, NodeItem
from ...runner.dsl.executor import ExecutionContext
from .exceptions import BreakLoop, ContinueLoop

logger = logging.getLogger(__name__)

SequenceRunner = Callable[[Sequence[NodeItem]], None]


class LoopExecutor:
    """Executor for loop control nodes.

    A ``for`` node counts from ``from`` to ``to`` inclusive in increments of
    ``step``. Each iteration binds the loop variable and runs the children
    through the sequence runner. The loop owns a scope frame on the context's
    loop stack for its whole run, popped again on every exit path.

    Example:
        >>> context = ExecutionContext()
        >>> executor = LoopExecutor(context, run_sequence)
        >>> node = ControlNode(type="for", variable="i", from_=1, to=3, children=[...])
        >>> executor.execute_for(node)["iterations_completed"]
        3
    """

    def __init__(self, context: ExecutionContext, run_sequence: SequenceRunner) -> None:
        """Initialize the loop executor.

        Args:
            context: ExecutionContext providing variable and loop scope management
            run_sequence: Callback executing a child node sequence
        """
        self.context = context
        self.run_sequence = run_sequence
        logger.debug("LoopExecutor initialized with context")

    def execute_for(self, node: ControlNode) -> dict[str, Any]:
        """Execute a ``for`` loop.

        Args:
            node: The for control node

        Returns:
            Dictionary containing:
                - loop_id: Id of the loop scope
                - variable: Loop variable name
                - iterations_completed: Number of iterations entered
                - stopped_early: Whether a break ended the loop
                - duration_ms: Total execution time in milliseconds

        Raises:
            ValidationError: If step is not positive
        """
        if node.step <= 0:
            raise ValidationError(
                f"for loop step must be positive, got {node.step}",
                context={"variable": node.variable},
            )

        logger.info(
            "Starting for loop (%s = %d..%d step %d)",
            node.variable,
            node.from_,
            node.to,
            node.step,
        )

        start_time = time.time()
        loop_id = self.context.push_loop(node.variable)
        result: dict[str, Any] = {
            "loop_id": loop_id,
            "variable": node.variable,
            "iterations_completed": 0,
            "stopped_early": False,
        }

        try:
            for value in range(node.from_, node.to + 1, node.step):
                self.context.set_variable(node.variable, value)
                logger.debug("Loop %s iteration %s = %d", loop_id, node.variable, value)
                result["iterations_completed"] += 1

                try:
                    self.run_sequence(node.children)
                except ContinueLoop as e:
                    logger.debug("Continue to next iteration: %s", e.message)
                    continue
                except BreakLoop as e:
                    logger.info("Loop %s broken: %s", loop_id, e.message)
                    result["stopped_early"] = True
                    break
        finally:
            self.context.pop_loop(loop_id)
            result["duration_ms"] = (time.time() - start_time) * 1000

        logger.info(
            "Loop completed: %d iterations, stopped_early=%s",
            result["iterations_completed"],
            result["stopped_early"],
        )
        return result

    def execute_while(self, node: ControlNode) -> dict[str, Any]:
        """``while`` nodes are reserved and cannot be executed.

        Raises:
            UnsupportedOperationError: Always
        """
        raise UnsupportedOperationError(
            "while loops are not supported",
            context={"condition": node.condition},
        )
