"""Result formatters for CLI output.

Provides formatting for task results in multiple formats:
- JSON: Machine-readable format
- JUnit XML: CI/CD integration format
- TAP: Test Anything Protocol format
"""

import json
import xml.etree.ElementTree as ET
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from ..model import TaskResult

FORMAT_EXTENSIONS = {"json": "json", "junit": "xml", "tap": "tap"}


def format_results(
    results: Sequence[TaskResult],
    summary: dict[str, Any],
    format_type: str,
) -> str:
    """Format task results in the specified format.

    Args:
        results: Task results
        summary: Summary statistics from ``summarize``
        format_type: Output format ("json", "junit", or "tap")

    Returns:
        Formatted string output

    Raises:
        ValueError: If format_type is not recognized
    """
    if format_type == "json":
        return _format_json(results, summary)
    elif format_type == "junit":
        return _format_junit(results, summary)
    elif format_type == "tap":
        return _format_tap(results, summary)
    else:
        raise ValueError(f"Unknown format type: {format_type}")


def _format_json(results: Sequence[TaskResult], summary: dict[str, Any]) -> str:
    output = {
        "summary": summary,
        "tasks": [result.model_dump(mode="json") for result in results],
        "timestamp_iso": datetime.now().isoformat(),
    }
    return json.dumps(output, indent=2, ensure_ascii=False)


def _format_junit(results: Sequence[TaskResult], summary: dict[str, Any]) -> str:
    testsuites = ET.Element("testsuites")
    testsuites.set("tests", str(summary.get("total", 0)))
    testsuites.set("failures", str(summary.get("failed", 0)))
    testsuites.set("time", f"{summary.get('total_duration', 0):.3f}")

    testsuite = ET.SubElement(testsuites, "testsuite")
    testsuite.set("name", "autobrowse tasks")
    testsuite.set("tests", str(summary.get("total", 0)))
    testsuite.set("failures", str(summary.get("failed", 0)))
    testsuite.set("time", f"{summary.get('total_duration', 0):.3f}")

    for result in results:
        testcase = ET.SubElement(testsuite, "testcase")
        testcase.set("name", result.task_name)
        testcase.set("classname", "autobrowse.tasks")
        testcase.set("time", f"{result.duration:.2f}")

        if not result.success:
            failure = ET.SubElement(testcase, "failure")
            failure.set("message", result.error or "Task execution failed")
            failure.set("type", result.error_type or "TaskError")
            failure.text = result.error or ""

    xml_string = ET.tostring(testsuites, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{xml_string}'


def _format_tap(results: Sequence[TaskResult], summary: dict[str, Any]) -> str:
    lines = ["TAP version 13", f"1..{summary.get('total', 0)}"]

    for i, result in enumerate(results, 1):
        status = "ok" if result.success else "not ok"
        lines.append(f"{status} {i} - {result.task_name}")

        # YAML diagnostics block
        lines.append("  ---")
        lines.append(f"  duration_ms: {result.duration * 1000:.2f}")
        if result.screenshot:
            lines.append(f"  screenshot: {result.screenshot}")
        if not result.success and result.error:
            lines.append(f"  error_type: {result.error_type}")
            lines.append(f"  error: {json.dumps(result.error, ensure_ascii=False)}")
        lines.append("  ...")

    lines.append("")
    lines.append(f"# Total: {summary.get('total', 0)}")
    lines.append(f"# Passed: {summary.get('passed', 0)}")
    lines.append(f"# Failed: {summary.get('failed', 0)}")

    return "\n".join(lines)
