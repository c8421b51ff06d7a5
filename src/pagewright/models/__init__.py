"""Page and project models consumed by the compilers."""

from .base import CamelModel
from .actions import (
    Action,
    ActionKind,
    SetDataAction,
    NavigateAction,
    NavigateBackAction,
    ShowToastAction,
    ShowModalAction,
    ShowLoadingAction,
    ShowActionSheetAction,
    RequestAction,
    CustomAction,
    UnknownAction,
    normalize_action,
)
from .component import (
    PropertyType,
    BindingMode,
    Property,
    DataBinding,
    ListRendering,
    ComponentEvent,
    ComponentNode,
    walk_tree,
)
from .page import (
    VariableType,
    Variable,
    PropertySpec,
    LifecycleEvent,
    CustomEvent,
    PageConfig,
    Page,
)
from .style import Breakpoint, StyleRule, Typography, Theme
from .project import (
    Window,
    TabBarItem,
    TabBar,
    SubPackage,
    ProjectConfig,
    ResourceType,
    Resource,
    ComponentDefinition,
    Project,
)

__all__ = [
    "CamelModel",
    # Actions
    "Action",
    "ActionKind",
    "SetDataAction",
    "NavigateAction",
    "NavigateBackAction",
    "ShowToastAction",
    "ShowModalAction",
    "ShowLoadingAction",
    "ShowActionSheetAction",
    "RequestAction",
    "CustomAction",
    "UnknownAction",
    "normalize_action",
    # Components
    "PropertyType",
    "BindingMode",
    "Property",
    "DataBinding",
    "ListRendering",
    "ComponentEvent",
    "ComponentNode",
    "walk_tree",
    # Pages
    "VariableType",
    "Variable",
    "PropertySpec",
    "LifecycleEvent",
    "CustomEvent",
    "PageConfig",
    "Page",
    # Style
    "Breakpoint",
    "StyleRule",
    "Typography",
    "Theme",
    # Project
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
