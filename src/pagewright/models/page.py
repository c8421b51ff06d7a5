"""Page, variable and lifecycle models."""

from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from .actions import Action, normalize_actions
from .base import CamelModel
from .component import ComponentNode, walk_tree


class VariableType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"


class Variable(CamelModel):
    name: str
    type: VariableType = VariableType.STRING
    initial_value: Any = None
    description: str | None = None


class PropertySpec(CamelModel):
    """Declared property of a custom component."""

    name: str
    type: VariableType = VariableType.STRING
    default_value: Any = None
    observer: str | None = None
    description: str | None = None


class LifecycleEvent(CamelModel):
    name: str
    actions: list[Action] = Field(default_factory=list)

    @field_validator("actions", mode="before")
    @classmethod
    def flatten_legacy_actions(cls, v: Any) -> Any:
        return normalize_actions(v)


class CustomEvent(CamelModel):
    """Named page method built from actions."""

    name: str
    params: list[str] = Field(default_factory=list)
    actions: list[Action] = Field(default_factory=list)
    description: str | None = None

    @field_validator("actions", mode="before")
    @classmethod
    def flatten_legacy_actions(cls, v: Any) -> Any:
        return normalize_actions(v)


class PageConfig(CamelModel):
    """Per-page window settings, emitted as the page json."""

    navigation_bar_title_text: str | None = None
    navigation_bar_background_color: str | None = None
    navigation_bar_text_style: str | None = None
    background_color: str | None = None
    background_text_style: str | None = None
    enable_pull_down_refresh: bool | None = None
    on_reach_bottom_distance: int | None = None
    disable_scroll: bool | None = None
    using_components: dict[str, str] = Field(default_factory=dict)


class Page(CamelModel):
    id: str
    name: str
    path: str
    config: PageConfig = Field(default_factory=PageConfig)
    components: list[ComponentNode] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)
    variables: list[Variable] = Field(default_factory=list)
    lifecycle_events: list[LifecycleEvent] = Field(default_factory=list)
    custom_events: list[CustomEvent] = Field(default_factory=list)

    def walk(self):
        """Pre-order traversal of every node on the page."""
        return walk_tree(self.components)

    @property
    def node_count(self) -> int:
        return sum(1 for _ in self.walk())


__all__ = [
    "VariableType",
    "Variable",
    "PropertySpec",
    "LifecycleEvent",
    "CustomEvent",
    "PageConfig",
    "Page",
]
