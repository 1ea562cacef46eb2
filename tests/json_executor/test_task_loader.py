"""Tests for loading task documents from JSON and YAML."""

import json

import pytest

from autobrowse.exceptions import DocumentError
from autobrowse.json_executor import TaskLoader, load_tasks, load_tasks_from_string
from autobrowse.model import ActionType, ControlType

YAML_DOCUMENT = """
tasks:
  - name: search
    url: https://example.com
    wait_time: 1
    screenshot: true
    actions:
      - type: fill
        selector: "#q"
        value: autobrowse
      - type: for
        variable: page
        from: 1
        to: 2
        children:
          - type: get_text
            selector: ".status"
            output_key: status
          - type: if
            condition: status == 'done'
            children:
              - type: break
          - type: else
            children:
              - type: click
                selector: ".next"
"""


class TestTaskLoader:
    """Test TaskLoader parsing."""

    def test_yaml_mapping_document(self):
        """Test a YAML document with a 'tasks' key."""
        tasks = load_tasks_from_string(YAML_DOCUMENT)

        assert len(tasks) == 1
        task = tasks[0]
        assert task.name == "search"
        assert task.wait_time == 1
        assert task.screenshot is True
        assert task.actions[0].action.type == ActionType.FILL

        loop = task.actions[1].control_node
        assert loop.type == ControlType.FOR
        assert loop.variable == "page"
        assert [child.label for child in loop.children] == [
            "action:get_text",
            "control:if",
            "control:else",
        ]

    def test_json_list_document(self):
        """Test a bare JSON list of tasks using the wrapper form."""
        document = [
            {
                "name": "t",
                "url": "https://example.com",
                "actions": [{"action": {"type": "click", "selector": "#a"}}],
            }
        ]

        tasks = load_tasks_from_string(json.dumps(document), format="json")

        assert tasks[0].actions[0].action.selector == "#a"

    def test_load_from_files(self, tmp_path):
        """Test file loading picks the parser by extension."""
        yaml_file = tmp_path / "tasks.yml"
        yaml_file.write_text(YAML_DOCUMENT, encoding="utf-8")
        json_file = tmp_path / "tasks.json"
        json_file.write_text(
            json.dumps({"tasks": [{"name": "j", "url": "https://x.test"}]}), encoding="utf-8"
        )

        assert load_tasks(yaml_file)[0].name == "search"
        assert load_tasks(json_file)[0].name == "j"

    def test_empty_document(self):
        """Test an empty YAML document yields no tasks."""
        assert load_tasks_from_string("") == []

    def test_missing_file(self, tmp_path):
        """Test a missing file is a document error."""
        with pytest.raises(DocumentError, match="Cannot read"):
            load_tasks(tmp_path / "absent.yaml")

    @pytest.mark.parametrize(
        "text,fmt",
        [
            ("{not json", "json"),
            ("tasks: [unclosed", "yaml"),
            ("name: lonely", "yaml"),
            ("42", "json"),
        ],
    )
    def test_malformed_documents(self, text, fmt):
        """Test syntax errors and wrong shapes are document errors."""
        with pytest.raises(DocumentError):
            load_tasks_from_string(text, format=fmt)

    def test_unknown_node_type(self):
        """Test an unknown node type anywhere in the tree is a document error."""
        document = {
            "tasks": [
                {
                    "name": "t",
                    "url": "https://x.test",
                    "actions": [{"type": "for", "to": 1, "children": [{"type": "jump"}]}],
                }
            ]
        }

        with pytest.raises(DocumentError):
            TaskLoader().parse_data(document)

    def test_unknown_format(self):
        """Test an unsupported format name is rejected."""
        with pytest.raises(ValueError):
            load_tasks_from_string("[]", format="toml")


class TestElsePlacement:
    """Test else adjacency validation."""

    def _task(self, actions):
        return {"tasks": [{"name": "t", "url": "https://x.test", "actions": actions}]}

    def test_else_at_start_rejected(self):
        """Test an else with no preceding sibling is rejected."""
        document = self._task([{"type": "else", "children": [{"type": "click", "selector": "a"}]}])

        with pytest.raises(DocumentError, match="must directly follow an if"):
            TaskLoader().parse_data(document)

    def test_else_after_action_rejected(self):
        """Test an else following an action is rejected."""
        document = self._task(
            [
                {"type": "click", "selector": "a"},
                {"type": "else", "children": [{"type": "click", "selector": "b"}]},
            ]
        )

        with pytest.raises(DocumentError):
            TaskLoader().parse_data(document)

    def test_nested_orphan_else_rejected(self):
        """Test placement is checked inside nested children too."""
        document = self._task(
            [
                {
                    "type": "for",
                    "to": 2,
                    "children": [{"type": "else", "children": [{"type": "click", "selector": "a"}]}],
                }
            ]
        )

        with pytest.raises(DocumentError, match="for"):
            TaskLoader().parse_data(document)
