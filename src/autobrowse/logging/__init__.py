"""Logging module for autobrowse."""

from .logger import (
    ActionLogger,
    TaskLogger,
    get_logger,
    setup_logging,
    setup_logging_from_settings,
)

__all__ = [
    "setup_logging",
    "setup_logging_from_settings",
    "get_logger",
    "ActionLogger",
    "TaskLogger",
]
