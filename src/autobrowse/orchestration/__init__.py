"""Task orchestration."""

from .task_runner import (
    TaskRunner,
    default_results_path,
    save_results,
    screenshot_path,
    summarize,
)

__all__ = ["TaskRunner", "default_results_path", "save_results", "screenshot_path", "summarize"]
