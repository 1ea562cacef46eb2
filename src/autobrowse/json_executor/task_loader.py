"""Loader for task documents in JSON or YAML.

A document is either a list of task records or a mapping whose ``tasks``
key holds that list::

    tasks:
      - name: search
        url: https://example.com
        actions:
          - type: fill
            selector: "#q"
            value: autobrowse
          - type: for
            variable: page
            from: 1
            to: 3
            children:
              - type: click
                selector: ".next"
"""

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml

from ..exceptions import DocumentError
from ..model import ControlType, NodeItem, Task

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


class TaskLoader:
    """Parser for task documents.

    Uses pydantic validation for the record shapes, then checks the
    structure pydantic cannot see: every ``else`` must directly follow an
    ``if`` in the same sequence.
    """

    def parse_file(self, file_path: Path | str) -> list[Task]:
        """Parse a task file. ``.yaml``/``.yml`` files are YAML, all others JSON.

        Raises:
            DocumentError: If the file is unreadable or malformed
        """
        path = Path(file_path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise DocumentError(f"Cannot read task file {path}: {e}", cause=e) from e

        if path.suffix.lower() in YAML_SUFFIXES:
            tasks = self.parse_yaml(text)
        else:
            tasks = self.parse_json(text)

        logger.info("Loaded %d tasks from %s", len(tasks), path)
        return tasks

    def parse_json(self, json_str: str) -> list[Task]:
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise DocumentError(f"Invalid JSON task document: {e}", cause=e) from e
        return self.parse_data(data)

    def parse_yaml(self, yaml_str: str) -> list[Task]:
        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise DocumentError(f"Invalid YAML task document: {e}", cause=e) from e
        return self.parse_data(data)

    def parse_data(self, data: Any) -> list[Task]:
        """Parse decoded document data into tasks.

        Raises:
            DocumentError: If the data does not have the document shape
        """
        if isinstance(data, dict):
            if "tasks" not in data:
                raise DocumentError("Task document mapping has no 'tasks' key")
            data = data["tasks"]

        if data is None:
            return []
        if not isinstance(data, list):
            raise DocumentError(
                f"Task document must be a list of tasks, got {type(data).__name__}"
            )

        tasks = [Task.from_document(record) for record in data]
        for task in tasks:
            validate_sequence(task.actions, task.name)
        return tasks


def validate_sequence(items: Sequence[NodeItem], location: str) -> None:
    """Check ``else`` placement in a node sequence and all nested sequences.

    Raises:
        DocumentError: If an else does not directly follow an if
    """
    previous: NodeItem | None = None
    for index, item in enumerate(items):
        node = item.control_node
        if node is not None:
            if node.type == ControlType.ELSE:
                previous_node = previous.control_node if previous is not None else None
                if previous_node is None or previous_node.type != ControlType.IF:
                    raise DocumentError(
                        f"{location}: else at position {index} must directly follow an if",
                        context={"location": location, "index": index},
                    )
            validate_sequence(node.children, f"{location} > {node.type.value}[{index}]")
        previous = item


def load_tasks(file_path: Path | str) -> list[Task]:
    """Load tasks from a JSON or YAML file."""
    return TaskLoader().parse_file(file_path)


def load_tasks_from_string(text: str, format: str = "yaml") -> list[Task]:
    """Load tasks from document text.

    Args:
        text: Document text
        format: "yaml" or "json"
    """
    loader = TaskLoader()
    if format == "json":
        return loader.parse_json(text)
    if format == "yaml":
        return loader.parse_yaml(text)
    raise ValueError(f"Unknown task document format: {format}")
