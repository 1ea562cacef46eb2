"""Pytest configuration and fixtures."""

import pytest

from autobrowse.actions.control_flow import ControlFlowExecutor
from autobrowse.config import AutobrowseSettings, reset_settings
from autobrowse.mock import MockBrowser
from autobrowse.model import NodeItem
from autobrowse.runner.dsl.executor import ExecutionContext


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep tests independent of the environment and the global settings."""
    import os

    for name in list(os.environ):
        if name.startswith("AUTOBROWSE_"):
            monkeypatch.delenv(name)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def mock_browser():
    """Provide a recording mock browser."""
    return MockBrowser()


@pytest.fixture
def context():
    """Provide a fresh execution context."""
    return ExecutionContext()


@pytest.fixture
def settings(tmp_path):
    """Settings with pacing disabled and screenshots under tmp_path."""
    return AutobrowseSettings(
        tasks={
            "default_wait_time": 0,
            "action_delay": 0,
            "task_delay": 0,
            "screenshot_dir": str(tmp_path / "screenshots"),
        },
        logging={"file": None},
    )


@pytest.fixture
def run_nodes(mock_browser, context):
    """Run a list of flat node documents against the mock browser.

    Returns the executor so tests can inspect its context.
    """

    def run(documents, browser=None):
        executor = ControlFlowExecutor(
            browser or mock_browser, context=context, action_delay=0
        )
        executor.execute_sequence([NodeItem.from_document(doc) for doc in documents])
        return executor

    return run
