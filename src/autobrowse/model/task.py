"""Task and TaskResult models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from ..exceptions import DocumentError
from .nodes import NodeItem


class Task(BaseModel):
    """A named browser task: a start URL and the node sequence run against it.

    ``wait_time`` and ``screenshot`` fall back to the configured task defaults
    when a document leaves them out.
    """

    name: str
    url: str
    wait_time: float | None = Field(None, ge=0)
    screenshot: bool | None = None
    actions: list[NodeItem] = Field(default_factory=list)

    model_config = {"frozen": True, "extra": "forbid"}

    @classmethod
    def from_document(cls, data: Any) -> "Task":
        """Decode one task record.

        Raises:
            DocumentError: If the record does not have the task shape
        """
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            name = data.get("name", "<unnamed>") if isinstance(data, dict) else "<invalid>"
            raise DocumentError(f"Invalid task '{name}': {e}", cause=e) from e


class TaskResult(BaseModel):
    """Outcome of running one task."""

    task_name: str
    success: bool = False
    error: str | None = None
    error_type: str | None = None
    start_time: datetime
    end_time: datetime | None = None
    duration: float = 0.0
    """Duration in seconds."""
    screenshot: str | None = None
    variables: dict[str, Any] = Field(default_factory=dict)
    """Shared variable table at the end of the task."""
