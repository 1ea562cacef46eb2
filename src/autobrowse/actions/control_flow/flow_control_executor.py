"""Flow control executor for BREAK and CONTINUE actions."""

import logging

from ...model import Action
from ...runner.dsl.executor import ExecutionContext
from .exceptions import BreakLoop, ContinueLoop

logger = logging.getLogger(__name__)


class FlowControlExecutor:
    """Executor for flow control actions (``break`` and ``continue``).

    Inside a loop these raise :class:`BreakLoop` or :class:`ContinueLoop`
    for the nearest enclosing loop to handle. Outside any loop they are
    logged and ignored.

    Example:
        >>> context = ExecutionContext()
        >>> executor = FlowControlExecutor(context)
        >>> executor.execute_break(Action(type="break"))  # no loop: ignored
        >>> loop_id = context.push_loop("i")
        >>> executor.execute_break(Action(type="break"))
        Traceback (most recent call last):
        ...
        BreakLoop: Break triggered
    """

    def __init__(self, context: ExecutionContext) -> None:
        """Initialize the flow control executor.

        Args:
            context: ExecutionContext whose loop stack decides whether a
                signal has a loop to target
        """
        self.context = context
        logger.debug("FlowControlExecutor initialized with context")

    def execute_break(self, action: Action) -> None:
        """Execute a ``break`` action.

        Args:
            action: The break action

        Raises:
            BreakLoop: When a loop is active
        """
        if not self.context.is_in_loop():
            logger.warning("Ignoring break outside of a loop")
            return

        loop_id = self.context.current_loop
        logger.info("Breaking loop %s", loop_id)
        raise BreakLoop("Break triggered", loop_id=loop_id)

    def execute_continue(self, action: Action) -> None:
        """Execute a ``continue`` action.

        Args:
            action: The continue action

        Raises:
            ContinueLoop: When a loop is active
        """
        if not self.context.is_in_loop():
            logger.warning("Ignoring continue outside of a loop")
            return

        loop_id = self.context.current_loop
        logger.debug("Continuing loop %s with next iteration", loop_id)
        raise ContinueLoop("Continue triggered", loop_id=loop_id)
