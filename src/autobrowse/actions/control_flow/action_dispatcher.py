"""Dispatch of leaf actions to the browser capability."""

import logging
from collections.abc import Callable
from typing import Any

from ...exceptions import (
    ActionError,
    ExpressionEvalError,
    UnsupportedOperationError,
    ValidationError,
)
from ...hal.interfaces import IBrowserController
from ...logging import ActionLogger
from ...model import Action, ActionType
from ...runner.dsl.executor import ExecutionContext
from .flow_control_executor import FlowControlExecutor

logger = logging.getLogger(__name__)

TEMPLATED_FIELDS = ("selector", "value", "target", "attribute", "error_message")


class ActionDispatcher:
    """Runs one action against the browser.

    Before dispatch, ``{{name}}`` placeholders in the selector, value,
    target, attribute and error message are replaced from the context.
    Results of ``get_text`` and ``get_attribute`` are stored under the
    action's ``output_key``.

    A failing action raises the same error class it failed with, carrying
    the action's ``error_message`` when one is set and a generic
    ``Action <type> failed: ...`` message otherwise. The original error is
    kept as ``__cause__``.
    """

    def __init__(
        self,
        context: ExecutionContext,
        browser: IBrowserController,
        flow_control_executor: FlowControlExecutor | None = None,
        action_logger: ActionLogger | None = None,
    ) -> None:
        self.context = context
        self.browser = browser
        self.flow_control_executor = flow_control_executor or FlowControlExecutor(context)
        self.action_logger = action_logger or ActionLogger()

        self._handlers: dict[ActionType, Callable[[Action], Any]] = {
            ActionType.CLICK: self._click,
            ActionType.FILL: self._fill,
            ActionType.HOVER: self._hover,
            ActionType.SELECT: self._select,
            ActionType.SCROLL: self._scroll,
            ActionType.RIGHT_CLICK: self._right_click,
            ActionType.DRAG_DROP: self._drag_drop,
            ActionType.WAIT_APPEAR: self._wait_appear,
            ActionType.WAIT_DISAPPEAR: self._wait_disappear,
            ActionType.GET_TEXT: self._get_text,
            ActionType.GET_ATTRIBUTE: self._get_attribute,
        }
        logger.debug("ActionDispatcher initialized with context")

    def resolve(self, action: Action) -> Action:
        """Return a copy of the action with placeholders substituted."""
        updates = {
            name: self.context.substitute(getattr(action, name)) for name in TEMPLATED_FIELDS
        }
        return action.model_copy(update=updates)

    def execute(self, action: Action) -> Any:
        """Execute an action.

        Args:
            action: The action to run

        Returns:
            The extracted string for ``get_text``/``get_attribute``, otherwise None

        Raises:
            BreakLoop: For ``break`` inside a loop
            ContinueLoop: For ``continue`` inside a loop
            ValidationError: If a required field is missing
            ActionError: If the browser operation fails
            UnsupportedOperationError: If no handler exists for the type
        """
        if action.type == ActionType.BREAK:
            self.flow_control_executor.execute_break(action)
            return None
        if action.type == ActionType.CONTINUE:
            self.flow_control_executor.execute_continue(action)
            return None

        handler = self._handlers.get(action.type)
        if handler is None:
            raise UnsupportedOperationError(f"Unsupported action type: {action.type.value}")

        resolved = self.resolve(action)
        log_context = self.action_logger.log_action_start(resolved.type.value, resolved.selector)

        try:
            if not resolved.selector:
                raise ValidationError(f"{resolved.type.value} action requires a selector")
            result = handler(resolved)
        except (ValidationError, ActionError, ExpressionEvalError) as e:
            self.action_logger.log_action_end(log_context, success=False, error=e)
            raise self._action_failure(resolved, e) from e

        self.action_logger.log_action_end(log_context, success=True, result=result)
        return result

    def _action_failure(
        self, action: Action, error: ValidationError | ActionError | ExpressionEvalError
    ) -> Exception:
        message = action.error_message or f"Action {action.type.value} failed: {error.message}"
        context = {**error.context, "action_type": action.type.value, "selector": action.selector}
        return type(error)(message, cause=error, error_code=error.error_code, context=context)

    @staticmethod
    def _require(action: Action, field: str) -> str:
        value = getattr(action, field)
        if not value:
            raise ValidationError(f"{action.type.value} action requires '{field}'")
        return value

    # Handlers

    def _click(self, action: Action) -> None:
        self.browser.click(action.selector, timeout=action.effective_timeout)

    def _right_click(self, action: Action) -> None:
        self.browser.right_click(action.selector, timeout=action.effective_timeout)

    def _hover(self, action: Action) -> None:
        self.browser.hover(action.selector, timeout=action.effective_timeout)

    def _scroll(self, action: Action) -> None:
        self.browser.scroll_into_view(action.selector, timeout=action.effective_timeout)

    def _fill(self, action: Action) -> None:
        value = self._require(action, "value")
        self.browser.fill(action.selector, value, timeout=action.effective_timeout)

    def _select(self, action: Action) -> None:
        value = self._require(action, "value")
        self.browser.select_option(action.selector, value, timeout=action.effective_timeout)

    def _drag_drop(self, action: Action) -> None:
        target = self._require(action, "target")
        self.browser.drag_and_drop(action.selector, target, timeout=action.effective_timeout)

    def _wait_appear(self, action: Action) -> None:
        self.browser.wait_for_appear(action.selector, timeout=action.effective_timeout)

    def _wait_disappear(self, action: Action) -> None:
        self.browser.wait_for_disappear(action.selector, timeout=action.effective_timeout)

    def _get_text(self, action: Action) -> str:
        text = self.browser.get_text(action.selector, timeout=action.effective_timeout)
        self._store_output(action, text)
        return text

    def _get_attribute(self, action: Action) -> str:
        name = self._require(action, "attribute")
        value = self.browser.get_attribute(action.selector, name, timeout=action.effective_timeout)
        self._store_output(action, value)
        return value

    def _store_output(self, action: Action, value: str) -> None:
        if action.output_key:
            self.context.set_output(action.output_key, value)
            logger.debug("Stored %s = %r", action.output_key, value)
