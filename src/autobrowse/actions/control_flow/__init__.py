"""Control flow execution for task node trees.

The node interpreter is split into specialized executors:
- LoopExecutor: Handles ``for`` loops (``while`` is reserved)
- ConditionalExecutor: Handles ``if``/``else`` branching
- FlowControlExecutor: Handles ``break`` and ``continue``
- ActionDispatcher: Runs leaf actions against the browser

ControlFlowExecutor walks node sequences and delegates each node to the
matching executor.

Exports:
    - ControlFlowExecutor: Node sequence interpreter
    - BreakLoop: Exception raised to break out of loops
    - ContinueLoop: Exception raised to skip to next loop iteration
    - LoopExecutor, ConditionalExecutor, FlowControlExecutor, ActionDispatcher
"""

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any

from ...exceptions import UnsupportedOperationError
from ...hal.interfaces import IBrowserController
from ...model import ControlType, NodeItem
from ...runner.dsl.executor import ExecutionContext
from .action_dispatcher import ActionDispatcher
from .conditional_executor import ConditionalExecutor
from .exceptions import BreakLoop, ContinueLoop
from .flow_control_executor import FlowControlExecutor
from .loop_executor import LoopExecutor

logger = logging.getLogger(__name__)

__all__ = [
    "ControlFlowExecutor",
    "ActionDispatcher",
    "BreakLoop",
    "ContinueLoop",
    "LoopExecutor",
    "ConditionalExecutor",
    "FlowControlExecutor",
]


class ControlFlowExecutor:
    """Interpreter for task node sequences.

    Executes nodes in order against one ExecutionContext. The first failing
    node stops execution and its error propagates. ``break``/``continue``
    travel as :class:`BreakLoop`/:class:`ContinueLoop` exceptions, which
    end the current sequence and are handled by the nearest loop.

    After every executed node the interpreter pauses for ``action_delay``
    seconds to let the page settle.

    Example:
        >>> executor = ControlFlowExecutor(MockBrowser(), action_delay=0)
        >>> executor.execute_sequence(task.actions)
        >>> executor.context.snapshot()
        {'i': 3}
    """

    def __init__(
        self,
        browser: IBrowserController,
        context: ExecutionContext | None = None,
        action_delay: float = 0.5,
        sleep: Callable[[float], Any] = time.sleep,
    ) -> None:
        """Initialize the control flow executor.

        Args:
            browser: Browser capability actions are dispatched to
            context: Execution context, a fresh one when None
            action_delay: Seconds to pause after each node
            sleep: Sleep function, replaceable in tests
        """
        self.browser = browser
        self.context = context if context is not None else ExecutionContext()
        self.action_delay = action_delay
        self._sleep = sleep
        self.nodes_executed = 0

        self._flow_control_executor = FlowControlExecutor(self.context)
        self._action_dispatcher = ActionDispatcher(
            self.context, browser, self._flow_control_executor
        )
        self._loop_executor = LoopExecutor(self.context, self.execute_sequence)
        self._conditional_executor = ConditionalExecutor(self.context, self.execute_sequence)

        logger.debug("ControlFlowExecutor initialized (action_delay=%s)", action_delay)

    def execute_sequence(self, items: Sequence[NodeItem]) -> None:
        """Execute a node sequence in order.

        Raises:
            AutobrowseException: The first error raised by a node
            BreakLoop: Propagated to the enclosing loop
            ContinueLoop: Propagated to the enclosing loop
        """
        previous_if_result: bool | None = None
        for item in items:
            previous_if_result = self.execute_item(item, previous_if_result)
            self.nodes_executed += 1
            self._pace()

    def execute_item(self, item: NodeItem, previous_if_result: bool | None = None) -> bool | None:
        """Execute one node.

        Args:
            item: Node to execute
            previous_if_result: Condition result of the preceding sibling
                when that sibling is an ``if``

        Returns:
            The condition result when the node is an ``if``, otherwise None
        """
        if item.action is not None:
            self._action_dispatcher.execute(item.action)
            return None

        node = item.control_node
        if node is None:
            raise UnsupportedOperationError("Node item holds neither an action nor a control node")

        if node.type == ControlType.FOR:
            self._loop_executor.execute_for(node)
        elif node.type == ControlType.IF:
            return self._conditional_executor.execute_if(node)
        elif node.type == ControlType.ELSE:
            self._conditional_executor.execute_else(node, previous_if_result)
        elif node.type == ControlType.WHILE:
            self._loop_executor.execute_while(node)
        else:
            raise UnsupportedOperationError(f"Unsupported control type: {node.type}")
        return None

    def _pace(self) -> None:
        if self.action_delay > 0:
            self._sleep(self.action_delay)
