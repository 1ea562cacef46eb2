"""Task execution state."""

from .execution_context import ExecutionContext, LoopFrame

__all__ = ["ExecutionContext", "LoopFrame"]
