"""autobrowse CLI - Main entry point.

Provides commands for running task files, creating a starter configuration
and validating task documents.

Exit codes:
    0: Success (individual task failures are reported in the results)
    2: Configuration or task document error
    3: Runtime error (browser could not be started)
"""

import logging
import sys
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

import click
import yaml

from ..base_exceptions import AutobrowseException
from ..config import AutobrowseSettings, load_settings, save_settings, set_settings
from ..exceptions import ConfigurationError, DocumentError, ExpressionParseError
from ..json_executor import load_tasks
from ..logging import setup_logging_from_settings
from ..model import ControlType, NodeItem, Task
from ..orchestration import TaskRunner, save_results, summarize
from ..runner.dsl.expressions import parse_expression
from .formatters import FORMAT_EXTENSIONS, format_results

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 2
EXIT_RUNTIME_ERROR = 3

DEFAULT_TASKS_FILE = "tasks.yaml"
DEFAULT_CONFIG_FILE = "config.yaml"

SAMPLE_TASKS = {
    "tasks": [
        {
            "name": "example page title",
            "url": "https://example.com",
            "wait_time": 3,
            "screenshot": True,
            "actions": [
                {
                    "type": "wait_appear",
                    "selector": "h1",
                    "timeout": 5,
                    "error_message": "page heading did not appear",
                },
                {
                    "type": "get_text",
                    "selector": "h1",
                    "output_key": "page_title",
                    "error_message": "could not read page heading",
                },
            ],
        },
        {
            "name": "paged form",
            "url": "https://example.org/form",
            "wait_time": 5,
            "actions": [
                {"type": "fill", "selector": "#name", "value": "Jane Doe"},
                {"type": "fill", "selector": "#email", "value": "jane@example.com"},
                {
                    "type": "for",
                    "variable": "page",
                    "from": 1,
                    "to": 3,
                    "children": [
                        {"type": "click", "selector": "#row-{{page}} .select"},
                        {"type": "get_text", "selector": "#row-{{page}} .status", "output_key": "status"},
                        {
                            "type": "if",
                            "condition": "status == 'done'",
                            "children": [{"type": "break"}],
                        },
                    ],
                },
                {"type": "click", "selector": "#submit-btn"},
                {"type": "wait_appear", "selector": ".success-message", "timeout": 10},
            ],
        },
    ]
}


def _load_settings_or_exit(config_path: str | None) -> AutobrowseSettings:
    try:
        settings = load_settings(config_path)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    set_settings(settings)
    return settings


def _load_tasks_or_exit(tasks_path: str) -> list[Task]:
    try:
        return load_tasks(tasks_path)
    except DocumentError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)


@click.group()
@click.version_option(prog_name="autobrowse")
@click.pass_context
def main(ctx: click.Context) -> None:
    """autobrowse - declarative browser task automation.

    Run task files, create a starter configuration, and validate task documents.
    """
    ctx.ensure_object(dict)


@main.command()
@click.option("--config", "-c", "config_path", type=click.Path(), help="Config file (JSON or YAML)")
@click.option(
    "--tasks", "-t", "tasks_path", default=DEFAULT_TASKS_FILE, show_default=True, help="Task file"
)
@click.option("--interactive", "-i", is_flag=True, help="Show the browser window")
@click.option("--chrome-path", help="Chrome/Chromium executable to use")
@click.option("--output", "-o", type=click.Path(), help="Results file")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["json", "junit", "tap"]),
    default="json",
    show_default=True,
    help="Results file format",
)
@click.option("--mock", is_flag=True, help="Run against a mock browser")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def run(
    config_path: str | None,
    tasks_path: str,
    interactive: bool,
    chrome_path: str | None,
    output: str | None,
    output_format: str,
    mock: bool,
    verbose: bool,
) -> None:
    """Run the tasks of a task file."""
    settings = _load_settings_or_exit(config_path)
    setup_logging_from_settings(settings, verbose=verbose)

    tasks = _load_tasks_or_exit(tasks_path)
    click.echo(f"Running {len(tasks)} tasks from {tasks_path}")

    if interactive:
        settings.browser.headless = False
    if chrome_path:
        settings.browser.executable_path = chrome_path

    if mock:
        from ..mock import MockBrowser

        browser = MockBrowser()
        click.echo("Running in MOCK mode (no browser)")
    else:
        from ..hal.implementations.playwright_browser import PlaywrightBrowser

        browser = PlaywrightBrowser.from_settings(settings)
        click.echo(
            f"Using {settings.browser.executable_path or 'bundled Chromium'} "
            f"(headless: {settings.browser.headless})"
        )

    try:
        browser.launch()
    except AutobrowseException as e:
        click.echo(f"Runtime error: {e}", err=True)
        sys.exit(EXIT_RUNTIME_ERROR)

    try:
        results = TaskRunner(browser, settings).run_tasks(tasks)
    finally:
        browser.close()

    summary = summarize(results)
    output_path = _write_results(results, summary, output, output_format)

    click.echo("")
    click.echo("Task summary:")
    click.echo(f"  Total:   {summary['total']}")
    click.echo(f"  Passed:  {summary['passed']}")
    click.echo(f"  Failed:  {summary['failed']}")
    click.echo(f"  Success: {summary['success_rate']:.2f}%")
    for result in results:
        if not result.success:
            click.echo(f"  x {result.task_name}: {result.error}")
    click.echo(f"Results saved to: {output_path}")
    sys.exit(EXIT_SUCCESS)


def _write_results(results, summary, output: str | None, output_format: str) -> Path:
    if output_format == "json":
        return save_results(results, output)

    if output:
        path = Path(output)
    else:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = Path(f"results_{stamp}.{FORMAT_EXTENSIONS[output_format]}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_results(results, summary, output_format), encoding="utf-8")
    return path


@main.command()
@click.option(
    "--config", "-c", "config_path", default=DEFAULT_CONFIG_FILE, show_default=True,
    help="Config file to create",
)
@click.option(
    "--tasks", "-t", "tasks_path", default=DEFAULT_TASKS_FILE, show_default=True,
    help="Sample task file to create",
)
@click.option("--force", is_flag=True, help="Overwrite existing files")
def init(config_path: str, tasks_path: str, force: bool) -> None:
    """Create a default config file and a sample task file."""
    written: list[str] = []

    config_file = Path(config_path)
    if config_file.exists() and not force:
        click.echo(f"Skipping {config_file}: already exists (use --force to overwrite)")
    else:
        save_settings(AutobrowseSettings(), config_file)
        written.append(str(config_file))

    tasks_file = Path(tasks_path)
    if tasks_file.exists() and not force:
        click.echo(f"Skipping {tasks_file}: already exists (use --force to overwrite)")
    else:
        tasks_file.parent.mkdir(parents=True, exist_ok=True)
        tasks_file.write_text(
            yaml.safe_dump(SAMPLE_TASKS, sort_keys=False, allow_unicode=True), encoding="utf-8"
        )
        written.append(str(tasks_file))

    for path in written:
        click.echo(f"Created {path}")
    if written:
        click.echo("Edit the files, then run: autobrowse run")
    sys.exit(EXIT_SUCCESS)


@main.command()
@click.argument("tasks_path", type=click.Path(exists=True))
@click.option("--verbose", "-v", is_flag=True, help="Print the node tree of every task")
def validate(tasks_path: str, verbose: bool) -> None:
    """Validate a task file.

    TASKS_PATH: Path to the task file (JSON or YAML)
    """
    tasks = _load_tasks_or_exit(tasks_path)

    problems: list[str] = []
    for task in tasks:
        problems.extend(_condition_problems(task.actions, task.name))

    if problems:
        for problem in problems:
            click.echo(f"Invalid condition: {problem}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    click.echo(f"Task file is valid: {tasks_path} ({len(tasks)} tasks)")
    for task in tasks:
        click.echo(f"  - {task.name} ({task.url}, {_count_nodes(task.actions)} nodes)")
        if verbose:
            for line in _describe(task.actions, depth=2):
                click.echo(line)
    sys.exit(EXIT_SUCCESS)


def _condition_problems(items: Sequence[NodeItem], location: str) -> list[str]:
    problems: list[str] = []
    for item in items:
        node = item.control_node
        if node is None:
            continue
        if node.condition.strip():
            try:
                parse_expression(node.condition)
            except ExpressionParseError as e:
                problems.append(f"{location}: '{node.condition}': {e}")
        problems.extend(_condition_problems(node.children, f"{location} > {node.type.value}"))
    return problems


def _count_nodes(items: Sequence[NodeItem]) -> int:
    count = 0
    for item in items:
        count += 1
        if item.control_node is not None:
            count += _count_nodes(item.control_node.children)
    return count


def _describe(items: Sequence[NodeItem], depth: int) -> list[str]:
    lines: list[str] = []
    indent = "  " * depth
    for item in items:
        if item.action is not None:
            action = item.action
            detail = f" {action.selector}" if action.selector else ""
            lines.append(f"{indent}{action.type.value}{detail}")
            continue

        node = item.control_node
        if node is None:
            continue
        if node.type == ControlType.FOR:
            header = f"for {node.variable} = {node.from_}..{node.to}"
            if node.step != 1:
                header += f" step {node.step}"
        elif node.condition:
            header = f"{node.type.value} {node.condition}"
        else:
            header = node.type.value
        lines.append(f"{indent}{header}")
        lines.extend(_describe(node.children, depth + 1))
    return lines


if __name__ == "__main__":
    main()
