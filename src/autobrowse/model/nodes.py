"""Node model - control constructs and the action/control tagged union.

A task body is a sequence of :class:`NodeItem`. Each item holds exactly one
of an :class:`~autobrowse.model.action.Action` or a :class:`ControlNode`.

Task documents may write an item either flat, discriminated by ``type``::

    {"type": "for", "variable": "i", "from": 1, "to": 3, "children": [...]}
    {"type": "click", "selector": "#next"}

or as an explicit wrapper::

    {"control_node": {"type": "if", "condition": "n > 0", "children": [...]}}
    {"action": {"type": "fill", "selector": "#q", "value": "{{term}}"}}

Flat items are decoded as control nodes first when their type is one of the
reserved control types, and as actions otherwise.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError
from pydantic import field_validator, model_validator

from ..exceptions import DocumentError
from .action import ACTION_TYPE_VALUES, Action


class ControlType(str, Enum):
    """Control node type tags."""

    FOR = "for"
    IF = "if"
    ELSE = "else"
    WHILE = "while"  # reserved, not executable


CONTROL_TYPE_VALUES = frozenset(member.value for member in ControlType)


class ControlNode(BaseModel):
    """Composite node expressing loop or branch structure over child nodes.

    Attributes:
        type: Control construct
        children: Ordered child items
        variable: Loop variable name (``for``)
        from_: Inclusive start value (``for``), written ``from`` in documents
        to: Inclusive end value (``for``)
        step: Loop increment (``for``), 1 when unset or zero
        condition: Condition expression (``if``); empty means true
    """

    type: ControlType
    children: list["NodeItem"] = Field(default_factory=list)
    variable: str = "i"
    from_: int = Field(0, alias="from")
    to: int = 0
    step: int = 1
    condition: str = ""

    model_config = {"populate_by_name": True, "frozen": True, "extra": "forbid"}

    @field_validator("variable", mode="before")
    @classmethod
    def default_variable(cls, value: Any) -> Any:
        return value or "i"

    @field_validator("step", mode="before")
    @classmethod
    def default_step(cls, value: Any) -> Any:
        return value or 1

    @field_validator("condition", mode="before")
    @classmethod
    def default_condition(cls, value: Any) -> Any:
        return "" if value is None else value

    @model_validator(mode="after")
    def check_else_has_children(self) -> "ControlNode":
        if self.type == ControlType.ELSE and not self.children:
            raise ValueError("else node must contain at least one child")
        return self


class NodeItem(BaseModel):
    """Tagged union of an action or a control node.

    Exactly one of :attr:`action` and :attr:`control_node` is set.
    """

    action: Action | None = None
    control_node: ControlNode | None = None

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="before")
    @classmethod
    def decode_flat_item(cls, data: Any) -> Any:
        """Turn a flat ``type``-discriminated record into the wrapper shape."""
        if isinstance(data, Action):
            return {"action": data}
        if isinstance(data, ControlNode):
            return {"control_node": data}
        if not isinstance(data, dict):
            raise ValueError(f"node item must be a mapping, got {type(data).__name__}")

        if "action" in data or "control_node" in data:
            return data

        node_type = data.get("type")
        if isinstance(node_type, Enum):
            node_type = node_type.value
        if not node_type:
            raise ValueError("node item has no 'type'")
        if node_type in CONTROL_TYPE_VALUES:
            return {"control_node": data}
        if node_type in ACTION_TYPE_VALUES:
            return {"action": data}
        raise ValueError(f"unknown node type '{node_type}'")

    @model_validator(mode="after")
    def check_single_variant(self) -> "NodeItem":
        if (self.action is None) == (self.control_node is None):
            raise ValueError("node item must hold exactly one of 'action' or 'control_node'")
        return self

    @classmethod
    def from_document(cls, data: Any) -> "NodeItem":
        """Decode one item of a task document.

        Raises:
            DocumentError: If the item is neither a valid action nor a valid
                control node, or holds both.
        """
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise DocumentError(f"Invalid node item: {e}", cause=e) from e

    @property
    def is_action(self) -> bool:
        return self.action is not None

    @property
    def is_control_node(self) -> bool:
        return self.control_node is not None

    @property
    def node(self) -> Action | ControlNode:
        """The populated variant.

        Raises:
            DocumentError: If neither variant is set
        """
        if self.action is not None:
            return self.action
        if self.control_node is not None:
            return self.control_node
        raise DocumentError("node item holds neither an action nor a control node")

    @property
    def label(self) -> str:
        """Short description used in log lines."""
        kind = "action" if self.action is not None else "control"
        return f"{kind}:{self.node.type.value}"

    def to_document(self) -> dict[str, Any]:
        """Serialize back to the flat document shape."""
        return _flatten(self.node.model_dump(mode="json", by_alias=True, exclude_defaults=True))


def _flatten(data: dict[str, Any]) -> dict[str, Any]:
    children = data.get("children")
    if children:
        data["children"] = [
            _flatten(child.get("action") or child.get("control_node") or {}) for child in children
        ]
    return data


ControlNode.model_rebuild()
