"""Task runner: executes tasks end to end and records their results.

Each task gets a fresh ExecutionContext, so no variables leak between
tasks. A failing task is recorded and the batch continues with the next one.
"""

import json
import logging
import re
import time
from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

from ..actions.control_flow import ControlFlowExecutor
from ..base_exceptions import AutobrowseException
from ..config import AutobrowseSettings, get_settings
from ..exceptions import ActionError, ValidationError
from ..hal.interfaces import IBrowserController
from ..logging import TaskLogger
from ..model import Task, TaskResult
from ..runner.dsl.executor import ExecutionContext

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.-]+")


class TaskRunner:
    """Runs tasks sequentially against one browser.

    For every task the runner:

    1. rejects a task with no actions, before touching the browser
    2. navigates to the task URL and waits ``wait_time`` seconds
    3. executes the action tree with a ControlFlowExecutor
    4. captures a screenshot when requested

    Between tasks it pauses for ``tasks.task_delay`` seconds.

    Example:
        >>> runner = TaskRunner(MockBrowser(), settings)
        >>> results = runner.run_tasks(load_tasks("tasks.yaml"))
        >>> summarize(results)["failed"]
        0
    """

    def __init__(
        self,
        browser: IBrowserController,
        settings: AutobrowseSettings | None = None,
        sleep: Callable[[float], Any] = time.sleep,
        task_logger: TaskLogger | None = None,
    ) -> None:
        """Initialize the task runner.

        Args:
            browser: Browser capability used for every task
            settings: Settings providing task defaults and pacing, the global
                settings when None
            sleep: Sleep function, replaceable in tests
            task_logger: Structured task event logger
        """
        self.browser = browser
        self.settings = settings or get_settings()
        self._sleep = sleep
        self.task_logger = task_logger or TaskLogger()
        logger.debug("TaskRunner initialized")

    def run_tasks(self, tasks: Sequence[Task]) -> list[TaskResult]:
        """Run tasks in order.

        Returns:
            One result per task, in task order
        """
        results: list[TaskResult] = []
        total = len(tasks)

        for index, task in enumerate(tasks, 1):
            self.task_logger.log_task_start(task.name, task.url, index, total)
            result = self.run_task(task)
            results.append(result)
            self.task_logger.log_task_end(
                task.name, result.success, result.duration, error=result.error
            )

            if index < total and self.settings.tasks.task_delay > 0:
                self._sleep(self.settings.tasks.task_delay)

        self.task_logger.log_summary(summarize(results))
        return results

    def run_task(self, task: Task) -> TaskResult:
        """Run a single task and capture its outcome.

        Errors raised by the task are recorded in the result, never raised.
        """
        result = TaskResult(task_name=task.name, start_time=datetime.now())
        context = ExecutionContext()

        try:
            self._execute(task, context, result)
            result.success = True
        except AutobrowseException as e:
            logger.error("Task '%s' failed: %s", task.name, e)
            result.success = False
            result.error = str(e)
            result.error_type = type(e).__name__
        finally:
            result.end_time = datetime.now()
            result.duration = (result.end_time - result.start_time).total_seconds()
            result.variables = context.snapshot()

        return result

    def _execute(self, task: Task, context: ExecutionContext, result: TaskResult) -> None:
        if not task.actions:
            raise ValidationError("no actions defined", context={"task": task.name})

        self.browser.navigate(task.url)

        wait_time = task.wait_time
        if wait_time is None:
            wait_time = self.settings.tasks.default_wait_time
        if wait_time > 0:
            logger.debug("Waiting %.1fs for page load", wait_time)
            self._sleep(wait_time)

        executor = ControlFlowExecutor(
            self.browser,
            context=context,
            action_delay=self.settings.tasks.action_delay,
            sleep=self._sleep,
        )
        executor.execute_sequence(task.actions)

        take_screenshot = task.screenshot
        if take_screenshot is None:
            take_screenshot = self.settings.tasks.auto_screenshot
        if take_screenshot:
            result.screenshot = str(self._capture_screenshot(task))

    def _capture_screenshot(self, task: Task) -> Path:
        path = screenshot_path(self.settings.tasks.screenshot_dir, task.name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ActionError(f"Cannot create screenshot directory: {e}", cause=e) from e
        return self.browser.screenshot(path)


def screenshot_path(directory: Path, task_name: str, when: datetime | None = None) -> Path:
    """Build ``<directory>/<task name>_<YYYYmmdd_HHMMSS>.png``."""
    stamp = (when or datetime.now()).strftime(TIMESTAMP_FORMAT)
    safe_name = _UNSAFE_FILENAME_CHARS.sub("_", task_name).strip("_") or "task"
    return Path(directory) / f"{safe_name}_{stamp}.png"


def default_results_path(when: datetime | None = None) -> Path:
    """``results_<YYYYmmdd_HHMMSS>.json`` in the working directory."""
    return Path(f"results_{(when or datetime.now()).strftime(TIMESTAMP_FORMAT)}.json")


def save_results(results: Sequence[TaskResult], path: Path | str | None = None) -> Path:
    """Write task results as a JSON list.

    Args:
        results: Results to write
        path: Output file, ``results_<timestamp>.json`` when None

    Returns:
        The written path
    """
    output = Path(path) if path is not None else default_results_path()
    output.parent.mkdir(parents=True, exist_ok=True)
    data = [result.model_dump(mode="json") for result in results]
    output.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("Saved %d task results to %s", len(data), output)
    return output


def summarize(results: Sequence[TaskResult]) -> dict[str, Any]:
    """Aggregate results.

    Returns:
        Dictionary with total, passed, failed, success_rate (percent) and
        total_duration (seconds)
    """
    total = len(results)
    passed = sum(1 for result in results if result.success)
    return {
        "total": total,
        "passed": passed,
        "failed": total - passed,
        "success_rate": (passed / total * 100) if total else 0.0,
        "total_duration": sum(result.duration for result in results),
    }
