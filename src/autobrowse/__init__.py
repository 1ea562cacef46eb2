"""autobrowse - declarative browser task automation.

Tasks are written as JSON or YAML documents: a start URL plus a tree of
browser actions and control nodes (``for`` loops, ``if``/``else``,
``break``/``continue``). Values read from the page are stored in variables
and interpolated into later steps with ``{{name}}``.
"""

from .actions.control_flow import ControlFlowExecutor
from .base_exceptions import AutobrowseException
from .config import AutobrowseSettings, get_settings, load_settings
from .exceptions import (
    ActionError,
    ConfigurationError,
    DocumentError,
    ExpressionEvalError,
    ExpressionParseError,
    UnsupportedOperationError,
    ValidationError,
)
from .json_executor import load_tasks, load_tasks_from_string
from .model import Action, ActionType, ControlNode, ControlType, NodeItem, Task, TaskResult
from .orchestration import TaskRunner, save_results, summarize
from .runner.dsl.executor import ExecutionContext

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Action",
    "ActionError",
    "ActionType",
    "AutobrowseException",
    "AutobrowseSettings",
    "ConfigurationError",
    "ControlFlowExecutor",
    "ControlNode",
    "ControlType",
    "DocumentError",
    "ExecutionContext",
    "ExpressionEvalError",
    "ExpressionParseError",
    "NodeItem",
    "Task",
    "TaskResult",
    "TaskRunner",
    "UnsupportedOperationError",
    "ValidationError",
    "get_settings",
    "load_settings",
    "load_tasks",
    "load_tasks_from_string",
    "save_results",
    "summarize",
]
