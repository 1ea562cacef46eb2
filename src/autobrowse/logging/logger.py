"""Structured logging configuration for autobrowse using structlog.

Library modules log through ``logging.getLogger(__name__)``. This module
routes those records and structlog events through one processor chain and
renders them for the console, a log file, or both.
"""

import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, cast

import structlog


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    structured: bool = False,
    console: bool = True,
    add_timestamp: bool = True,
    colorize: bool = True,
) -> None:
    """Configure structured logging for autobrowse.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        structured: Use JSON structured output
        console: Enable console output (overridden by AUTOBROWSE_DISABLE_CONSOLE_LOGGING env var)
        add_timestamp: Add timestamps to logs
        colorize: Colorize console output (only for non-structured)
    """
    if os.getenv("AUTOBROWSE_DISABLE_CONSOLE_LOGGING") == "1":
        console = False

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]

    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    processors.extend(
        [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]
    )

    if structured:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colorize and console and not log_file))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []

    if console:
        # stdout is reserved for command output
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        handlers.append(file_handler)

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        handlers=handlers,
        force=True,
    )


def setup_logging_from_settings(settings: Any, verbose: bool = False) -> None:
    """Configure logging from the ``logging`` group of the settings.

    Args:
        settings: AutobrowseSettings instance
        verbose: Force DEBUG level
    """
    log_settings = settings.logging
    setup_logging(
        level="DEBUG" if verbose else log_settings.level,
        log_file=log_settings.file,
        structured=log_settings.structured,
        console=log_settings.console,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    return cast(structlog.BoundLogger, structlog.get_logger(name))


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ActionLogger:
    """Specialized logger for action execution."""

    def __init__(self, base_logger: structlog.BoundLogger | None = None) -> None:
        self.logger = base_logger or get_logger(__name__)

    def log_action_start(self, action_type: str, target: Any, **kwargs) -> dict[str, Any]:
        """Log action start.

        Args:
            action_type: Type of action
            target: Action selector
            **kwargs: Additional context

        Returns:
            Action context dict, to be passed to :meth:`log_action_end`
        """
        context = {
            "action_type": action_type,
            "target": str(target),
            "start_time": _now().isoformat(),
            **kwargs,
        }

        self.logger.debug("action_started", **context)

        return context

    def log_action_end(
        self,
        context: dict[str, Any],
        success: bool,
        result: Any = None,
        error: Exception | None = None,
    ) -> None:
        """Log action end.

        Args:
            context: Action context from log_action_start
            success: Whether action succeeded
            result: Action result
            error: Optional error
        """
        end_time = _now()
        start_time = datetime.fromisoformat(context["start_time"])
        duration = (end_time - start_time).total_seconds()

        log_data = {
            **context,
            "end_time": end_time.isoformat(),
            "duration": duration,
            "success": success,
        }

        if result is not None:
            log_data["result"] = str(result)

        if error:
            log_data["error"] = str(error)
            log_data["error_type"] = type(error).__name__

        if success:
            self.logger.info("action_completed", **log_data)
        else:
            self.logger.error("action_failed", **log_data)


class TaskLogger:
    """Specialized logger for task lifecycle events."""

    def __init__(self, base_logger: structlog.BoundLogger | None = None) -> None:
        self.logger = base_logger or get_logger(__name__)

    def log_task_start(self, task_name: str, url: str, index: int, total: int) -> None:
        self.logger.info("task_started", task=task_name, url=url, index=index, total=total)

    def log_task_end(
        self,
        task_name: str,
        success: bool,
        duration: float,
        error: str | None = None,
        **kwargs,
    ) -> None:
        """Log task completion.

        Args:
            task_name: Name of the task
            success: Whether the task succeeded
            duration: Duration in seconds
            error: Error message of a failed task
            **kwargs: Additional context
        """
        log_data = {"task": task_name, "success": success, "duration": duration, **kwargs}
        if success:
            self.logger.info("task_completed", **log_data)
        else:
            self.logger.error("task_failed", error=error, **log_data)

    def log_summary(self, summary: dict[str, Any]) -> None:
        self.logger.info("tasks_summary", **summary)
