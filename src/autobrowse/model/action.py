"""Action model - leaf operations against the browser.

An action names one browser interaction (click, fill, wait, extract, ...)
by its ``type`` and carries the selector and the type-specific secondary
fields. The control signals ``break`` and ``continue`` are modelled as
actions with a reserved type.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_ACTION_TIMEOUT = 10.0
"""Element wait timeout in seconds used when an action leaves ``timeout`` unset."""


class ActionType(str, Enum):
    """Action type tags as they appear in task documents."""

    CLICK = "click"
    FILL = "fill"
    HOVER = "hover"
    SELECT = "select"
    SCROLL = "scroll"
    RIGHT_CLICK = "right_click"
    DRAG_DROP = "drag_drop"
    WAIT_APPEAR = "wait_appear"
    WAIT_DISAPPEAR = "wait_disappear"
    GET_TEXT = "get_text"
    GET_ATTRIBUTE = "get_attribute"
    BREAK = "break"
    CONTINUE = "continue"


FLOW_CONTROL_TYPES = frozenset({ActionType.BREAK, ActionType.CONTINUE})
ACTION_TYPE_VALUES = frozenset(member.value for member in ActionType)


class Action(BaseModel):
    """A single browser operation.

    The meaning of the secondary fields depends on ``type``:

    * ``value``: text for ``fill``, option label for ``select``
    * ``target``: drop target selector for ``drag_drop``
    * ``attribute``: attribute name for ``get_attribute``
    * ``output_key``: variable receiving the result of ``get_text`` and
      ``get_attribute``

    Required secondary fields are checked when the action runs, not when
    the document is decoded.
    """

    type: ActionType
    selector: str = ""
    value: str = ""
    target: str = ""
    attribute: str = ""
    timeout: float = Field(0.0, ge=0)
    output_key: str = ""
    error_message: str = ""

    model_config = {"frozen": True, "extra": "forbid", "use_enum_values": False}

    @field_validator(
        "selector", "value", "target", "attribute", "output_key", "error_message", mode="before"
    )
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        """Accept scalar document values (``value: 42``) for text fields."""
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("timeout", mode="before")
    @classmethod
    def coerce_timeout(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @property
    def effective_timeout(self) -> float:
        """Timeout in seconds, falling back to the default when unset or zero."""
        return self.timeout if self.timeout > 0 else DEFAULT_ACTION_TIMEOUT

    @property
    def is_flow_control(self) -> bool:
        return self.type in FLOW_CONTROL_TYPES
