"""Data models shared by the collector, serializer and renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ComponentDescriptor(BaseModel):
    """The renderable shape of one discovered component."""

    model_config = ConfigDict(frozen=True)

    qualified_key: str = Field(..., description="Registry key, e.g. 'Form.Item'")
    alias: str = Field(..., description="Hyphenated lowercase name, e.g. 'form-item'")
    has_children: bool = Field(default=False, description="propTypes declares 'children'")
    prop_schema: dict[str, None] = Field(
        default_factory=dict, description="Declared prop names (validators discarded)"
    )
    default_props: Any = Field(default=None, description="The component's defaultProps")


# Qualified key -> descriptor, in discovery order.
Registry = dict[str, ComponentDescriptor]


# ---------------------------------------------------------------------------
# Classification result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Component:
    """A value recognised as a component (possibly a nested default export)."""

    value: Any
    unwrapped: bool = False


class NotComponent:
    """A value carrying no component signal."""

    _instance: Optional["NotComponent"] = None

    def __new__(cls) -> "NotComponent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_COMPONENT"


NOT_COMPONENT = NotComponent()

Classification = Union[Component, NotComponent]


# ---------------------------------------------------------------------------
# Serialized props
# ---------------------------------------------------------------------------


@dataclass
class SerializedProps:
    """Markup and tab-stop placeholders built from a component's defaultProps."""

    props_count: int = 0
    props_markup: str = ""
    children: Any = None
    placeholders: dict[str, Any] = field(default_factory=dict)
