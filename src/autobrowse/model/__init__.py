"""Task document model.

Pydantic models for tasks, their node sequences, and task results.
"""

from .action import (
    ACTION_TYPE_VALUES,
    DEFAULT_ACTION_TIMEOUT,
    FLOW_CONTROL_TYPES,
    Action,
    ActionType,
)
from .nodes import CONTROL_TYPE_VALUES, ControlNode, ControlType, NodeItem
from .task import Task, TaskResult

__all__ = [
    "ACTION_TYPE_VALUES",
    "CONTROL_TYPE_VALUES",
    "DEFAULT_ACTION_TIMEOUT",
    "FLOW_CONTROL_TYPES",
    "Action",
    "ActionType",
    "ControlNode",
    "ControlType",
    "NodeItem",
    "Task",
    "TaskResult",
]
