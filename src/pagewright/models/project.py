"""Project-level models."""

from enum import Enum
from typing import Any

from pydantic import Field

from .base import CamelModel
from .component import ComponentNode
from .page import CustomEvent, LifecycleEvent, Page, PropertySpec, Variable
from .style import Theme


class Window(CamelModel):
    navigation_bar_background_color: str | None = None
    navigation_bar_text_style: str | None = None
    navigation_bar_title_text: str | None = None
    background_color: str | None = None
    background_text_style: str | None = None
    enable_pull_down_refresh: bool | None = None
    on_reach_bottom_distance: int | None = None
    page_orientation: str | None = None


class TabBarItem(CamelModel):
    page_path: str
    text: str
    icon_path: str | None = None
    selected_icon_path: str | None = None


class TabBar(CamelModel):
    color: str | None = None
    selected_color: str | None = None
    background_color: str | None = None
    border_style: str | None = None
    position: str | None = None
    custom: bool | None = None
    items: list[TabBarItem] = Field(default_factory=list, alias="list")


class SubPackage(CamelModel):
    root: str
    pages: list[str] = Field(default_factory=list)
    name: str | None = None
    independent: bool | None = None


class ProjectConfig(CamelModel):
    window: Window = Field(default_factory=Window)
    tab_bar: TabBar | None = None
    network_timeout: dict[str, int] | None = None
    permission: dict[str, Any] | None = None
    debug: bool = False
    sub_packages: list[SubPackage] = Field(default_factory=list)
    plugins: dict[str, Any] = Field(default_factory=dict)


class ResourceType(str, Enum):
    IMAGE = "image"
    ICON = "icon"
    AUDIO = "audio"
    VIDEO = "video"
    FONT = "font"
    DATA = "data"


class Resource(CamelModel):
    """Asset reference; remote entries (``url`` only) are not materialized."""

    id: str
    name: str
    type: ResourceType = ResourceType.IMAGE
    path: str | None = None
    url: str | None = None

    @property
    def is_remote(self) -> bool:
        return not self.path and bool(self.url)


class ComponentDefinition(CamelModel):
    """Reusable custom component emitted under ``components/``."""

    name: str
    template: list[ComponentNode] = Field(default_factory=list)
    properties: list[PropertySpec] = Field(default_factory=list)
    variables: list[Variable] = Field(default_factory=list)
    events: list[CustomEvent] = Field(default_factory=list)
    lifecycle_events: list[LifecycleEvent] = Field(default_factory=list)
    external: bool = False
    npm_package: str | None = None
    version: str | None = None


class Project(CamelModel):
    id: str
    name: str
    version: str = "1.0.0"
    description: str = ""
    app_id: str = ""
    config: ProjectConfig = Field(default_factory=ProjectConfig)
    pages: list[Page] = Field(default_factory=list)
    global_components: list[ComponentDefinition] = Field(default_factory=list)
    resources: list[Resource] = Field(default_factory=list)
    global_variables: list[Variable] = Field(default_factory=list)
    theme: str | None = None
    themes: list[Theme] = Field(default_factory=list)


__all__ = [
    "Window",
    "TabBarItem",
    "TabBar",
    "SubPackage",
    "ProjectConfig",
    "ResourceType",
    "Resource",
    "ComponentDefinition",
    "Project",
]
