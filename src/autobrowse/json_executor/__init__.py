"""Task document loading."""

from .task_loader import TaskLoader, load_tasks, load_tasks_from_string, validate_sequence

__all__ = ["TaskLoader", "load_tasks", "load_tasks_from_string", "validate_sequence"]
