"""Component tree models."""

from enum import Enum
from typing import Any, Iterator

from pydantic import Field, field_validator

from .actions import Action, normalize_actions
from .base import CamelModel


class PropertyType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    COLOR = "color"
    IMAGE = "image"
    EVENT = "event"


class BindingMode(str, Enum):
    ONE_WAY = "oneWay"
    TWO_WAY = "twoWay"


class Property(CamelModel):
    """A literal or bound attribute on a node."""

    name: str
    value: Any = None
    type: PropertyType = PropertyType.STRING
    is_binding: bool = False


class DataBinding(CamelModel):
    """Link from an attribute to a data path."""

    property: str
    data_path: str
    mode: BindingMode = BindingMode.ONE_WAY


class ListRendering(CamelModel):
    data_source: str
    item_name: str | None = None
    index_name: str | None = None
    key: str | None = None


class ComponentEvent(CamelModel):
    """Event binding. ``handler`` overrides the synthesized handler name."""

    name: str
    handler: str | None = None
    actions: list[Action] = Field(default_factory=list)

    @field_validator("actions", mode="before")
    @classmethod
    def flatten_legacy_actions(cls, v: Any) -> Any:
        return normalize_actions(v)


class ComponentNode(CamelModel):
    """
    One element of a page tree.

    ``id`` and ``type`` default to empty so that incomplete nodes reach the
    validator and are reported rather than rejected at parse time.
    """

    id: str = ""
    type: str = ""
    name: str | None = None
    properties: list[Property] = Field(default_factory=list)
    style: dict[str, Any] = Field(default_factory=dict)
    responsive: dict[str, dict[str, Any]] = Field(default_factory=dict)
    events: list[ComponentEvent] = Field(default_factory=list)
    data_bindings: list[DataBinding] = Field(default_factory=list)
    condition: str | None = None
    list_rendering: ListRendering | None = None
    children: list["ComponentNode"] = Field(default_factory=list)

    def get_property(self, name: str) -> Property | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def has_binding(self, name: str) -> bool:
        return any(binding.property == name for binding in self.data_bindings)

    def walk(self) -> Iterator["ComponentNode"]:
        """Pre-order traversal including this node."""
        yield self
        for child in self.children:
            yield from child.walk()


def walk_tree(nodes: list[ComponentNode]) -> Iterator[ComponentNode]:
    """Pre-order traversal over a forest."""
    for node in nodes:
        yield from node.walk()


__all__ = [
    "PropertyType",
    "BindingMode",
    "Property",
    "DataBinding",
    "ListRendering",
    "ComponentEvent",
    "ComponentNode",
    "walk_tree",
]
