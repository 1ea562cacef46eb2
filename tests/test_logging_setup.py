"""Tests for logging configuration and the structured event loggers."""

import logging

import pytest

from autobrowse.config import AutobrowseSettings
from autobrowse.logging import ActionLogger, TaskLogger, setup_logging, setup_logging_from_settings


class RecordingLogger:
    """Collects structured events instead of emitting them."""

    def __init__(self):
        self.events = []

    def _record(self, level):
        def log(event, **kwargs):
            self.events.append((level, event, kwargs))

        return log

    def __getattr__(self, name):
        if name in ("debug", "info", "warning", "error"):
            return self._record(name)
        raise AttributeError(name)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo basicConfig changes made by a test."""
    root = logging.getLogger()
    before, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in before:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


class TestSetupLogging:
    """Test handler configuration."""

    def test_file_handler(self, tmp_path):
        """Test a log file is created under missing parent directories."""
        log_file = tmp_path / "logs" / "run.log"

        setup_logging(level="debug", log_file=log_file, console=False)
        logging.getLogger("autobrowse.test").info("hello %s", "file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert logging.getLogger().level == logging.DEBUG
        assert "hello file" in log_file.read_text(encoding="utf-8")

    def test_console_disabled_by_environment(self, monkeypatch):
        """Test the environment switch removes the console handler."""
        monkeypatch.setenv("AUTOBROWSE_DISABLE_CONSOLE_LOGGING", "1")

        setup_logging(console=True)

        handlers = logging.getLogger().handlers
        assert not any(type(h) is logging.StreamHandler for h in handlers)

    def test_from_settings_verbose(self):
        """Test verbose forces DEBUG regardless of the configured level."""
        settings = AutobrowseSettings(logging={"level": "ERROR", "file": None, "console": False})

        setup_logging_from_settings(settings, verbose=True)

        assert logging.getLogger().level == logging.DEBUG


class TestEventLoggers:
    """Test ActionLogger and TaskLogger events."""

    def test_action_events(self):
        """Test start and end events carry the action and its outcome."""
        recorder = RecordingLogger()
        action_logger = ActionLogger(recorder)

        context = action_logger.log_action_start("click", "#go")
        action_logger.log_action_end(context, success=False, error=ValueError("boom"))

        (start_level, start_event, _), (end_level, end_event, data) = recorder.events
        assert (start_level, start_event) == ("debug", "action_started")
        assert (end_level, end_event) == ("error", "action_failed")
        assert data["target"] == "#go"
        assert data["error_type"] == "ValueError"
        assert data["duration"] >= 0

    def test_task_events(self):
        """Test task events and the summary."""
        recorder = RecordingLogger()
        task_logger = TaskLogger(recorder)

        task_logger.log_task_start("login", "https://example.com", 1, 2)
        task_logger.log_task_end("login", False, 0.5, error="no actions defined")
        task_logger.log_summary({"total": 1, "passed": 0})

        assert [event for _, event, _ in recorder.events] == [
            "task_started",
            "task_failed",
            "tasks_summary",
        ]
        assert recorder.events[1][2]["error"] == "no actions defined"
