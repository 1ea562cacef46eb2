"""Condition expression language and per-task execution state."""
