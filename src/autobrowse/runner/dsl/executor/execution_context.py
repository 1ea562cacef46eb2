"""Execution context for task execution.

Holds the variable state of one task run: the shared variable table, the
captured output values, and the stack of active loop scopes.
"""

import itertools
from dataclasses import dataclass, field
from typing import Any

from ..expressions.template import substitute_variables


@dataclass
class LoopFrame:
    """One active loop and its isolated variable scope."""

    loop_id: str
    scope: dict[str, Any] = field(default_factory=dict)


class ExecutionContext:
    """Variable and control-flow state for a single task.

    Variables live in a shared table. Every active loop additionally owns a
    scope frame on the loop stack. Lookups check the innermost frame first
    and then the shared table. Writes land in the innermost frame and always
    in the shared table as well, and update enclosing frames that already
    hold the name, so a value set inside a loop stays visible after the loop
    ends.

    Example:
        ```python
        context = ExecutionContext()
        context.set_variable("page", 1)

        loop_id = context.push_loop("i")
        context.set_variable("i", 3)
        context.get_variable("i")  # 3
        context.pop_loop(loop_id)

        context.get_variable("i")  # 3, kept in the shared table
        ```

    Attributes:
        variables: Shared variable table
        outputs: Values captured through ``output_key``
        current_loop: Id of the innermost active loop, or None
    """

    def __init__(self, variables: dict[str, Any] | None = None) -> None:
        self.variables: dict[str, Any] = dict(variables or {})
        self.outputs: dict[str, str] = {}
        self.current_loop: str | None = None
        self._loop_stack: list[LoopFrame] = []
        self._loop_ids = itertools.count(1)

    def push_loop(self, label: str = "loop") -> str:
        """Enter a loop and open its scope.

        Args:
            label: Readable part of the generated loop id, usually the loop
                variable name

        Returns:
            The new loop id, to be handed back to :meth:`pop_loop`
        """
        loop_id = f"{label}#{next(self._loop_ids)}"
        self._loop_stack.append(LoopFrame(loop_id))
        self.current_loop = loop_id
        return loop_id

    def pop_loop(self, loop_id: str | None = None) -> dict[str, Any]:
        """Leave the innermost loop and discard its scope.

        Args:
            loop_id: Expected id of the innermost loop. Checked when given.

        Returns:
            The scope that was popped

        Raises:
            RuntimeError: If no loop is active or ``loop_id`` is not the
                innermost loop
        """
        if not self._loop_stack:
            raise RuntimeError("Cannot pop loop scope: no active loop")
        if loop_id is not None and self._loop_stack[-1].loop_id != loop_id:
            raise RuntimeError(
                f"Loop scope mismatch: expected '{loop_id}', "
                f"innermost is '{self._loop_stack[-1].loop_id}'"
            )
        frame = self._loop_stack.pop()
        self.current_loop = self._loop_stack[-1].loop_id if self._loop_stack else None
        return frame.scope

    def is_in_loop(self) -> bool:
        return bool(self._loop_stack)

    @property
    def loop_depth(self) -> int:
        return len(self._loop_stack)

    def set_variable(self, name: str, value: Any) -> None:
        """Set a variable in the innermost loop scope and the shared table.

        Enclosing loop scopes that already hold ``name`` are updated too, so
        an outer loop sees the value after an inner loop ends. Enclosing
        scopes without the name are left alone.
        """
        if self._loop_stack:
            self._loop_stack[-1].scope[name] = value
            for frame in self._loop_stack[:-1]:
                if name in frame.scope:
                    frame.scope[name] = value
        self.variables[name] = value

    def get_variable(self, name: str) -> Any:
        """Resolve a variable.

        Raises:
            KeyError: If the variable is defined neither in the innermost
                loop scope nor in the shared table
        """
        if self._loop_stack:
            scope = self._loop_stack[-1].scope
            if name in scope:
                return scope[name]
        if name in self.variables:
            return self.variables[name]
        raise KeyError(f"Variable '{name}' not found in context")

    def has_variable(self, name: str) -> bool:
        try:
            self.get_variable(name)
        except KeyError:
            return False
        return True

    def set_output(self, key: str, value: str) -> None:
        """Record a captured value and expose it as a variable."""
        self.outputs[key] = value
        self.set_variable(key, value)

    def substitute(self, text: str) -> str:
        """Replace ``{{name}}`` placeholders using this context."""
        return substitute_variables(text, self)

    def snapshot(self) -> dict[str, Any]:
        """Copy of the shared variable table."""
        return dict(self.variables)

    def __repr__(self) -> str:
        return (
            f"ExecutionContext(loops={len(self._loop_stack)}, "
            f"variables={self.variables}, outputs={self.outputs})"
        )
