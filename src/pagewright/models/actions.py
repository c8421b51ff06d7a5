"""Declarative event actions.

Actions form a closed tagged union discriminated by ``kind``; each variant
declares exactly the fields it uses. Anything unrecognized parses to
``UnknownAction`` so generation can degrade to a placeholder instead of
rejecting the whole document.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import ConfigDict, Discriminator, Field, Tag

from .base import CamelModel


class ActionKind(str, Enum):
    SET_DATA = "setData"
    SET_VARIABLE = "setVariable"
    NAVIGATE_TO = "navigateTo"
    REDIRECT_TO = "redirectTo"
    RELAUNCH = "reLaunch"
    SWITCH_TAB = "switchTab"
    NAVIGATE_BACK = "navigateBack"
    SHOW_TOAST = "showToast"
    SHOW_MODAL = "showModal"
    SHOW_LOADING = "showLoading"
    SHOW_ACTION_SHEET = "showActionSheet"
    REQUEST = "request"
    CUSTOM = "custom"


class SetDataAction(CamelModel):
    """Assign ``value`` (or a raw ``expression``) to a data key."""

    kind: Literal["setData", "setVariable"] = "setData"
    key: str
    value: Any = None
    expression: str | None = None


class NavigateAction(CamelModel):
    kind: Literal["navigateTo", "redirectTo", "reLaunch", "switchTab"] = "navigateTo"
    url: str


class NavigateBackAction(CamelModel):
    kind: Literal["navigateBack"] = "navigateBack"
    delta: int = Field(default=1, ge=1)


class ShowToastAction(CamelModel):
    kind: Literal["showToast"] = "showToast"
    title: str
    icon: str = "none"
    duration: int | None = None


class ShowModalAction(CamelModel):
    kind: Literal["showModal"] = "showModal"
    title: str = ""
    content: str = ""
    show_cancel: bool = True


class ShowLoadingAction(CamelModel):
    kind: Literal["showLoading"] = "showLoading"
    title: str = "Loading"
    mask: bool = False


class ShowActionSheetAction(CamelModel):
    kind: Literal["showActionSheet"] = "showActionSheet"
    item_list: list[str] = Field(default_factory=list)


class RequestAction(CamelModel):
    """Call a remote endpoint and store the response under ``result_key``."""

    kind: Literal["request"] = "request"
    url: str
    method: str = "GET"
    data: dict[str, Any] | None = None
    result_key: str = "apiData"


class CustomAction(CamelModel):
    """Invoke a page method by name."""

    kind: Literal["custom"] = "custom"
    method: str
    args: list[Any] = Field(default_factory=list)


class UnknownAction(CamelModel):
    model_config = ConfigDict(extra="allow")

    kind: str


_TAGS = {
    "setData": "setData",
    "setVariable": "setData",
    "navigateTo": "navigate",
    "redirectTo": "navigate",
    "reLaunch": "navigate",
    "switchTab": "navigate",
    "navigateBack": "navigateBack",
    "showToast": "showToast",
    "showModal": "showModal",
    "showLoading": "showLoading",
    "showActionSheet": "showActionSheet",
    "request": "request",
    "custom": "custom",
}

# Older documents use {type, params}
_LEGACY_KINDS = {"navigate": "navigateTo"}


def _action_tag(value: Any) -> str:
    kind = value.get("kind") if isinstance(value, dict) else getattr(value, "kind", None)
    return _TAGS.get(kind, "unknown")


Action = Annotated[
    Union[
        Annotated[SetDataAction, Tag("setData")],
        Annotated[NavigateAction, Tag("navigate")],
        Annotated[NavigateBackAction, Tag("navigateBack")],
        Annotated[ShowToastAction, Tag("showToast")],
        Annotated[ShowModalAction, Tag("showModal")],
        Annotated[ShowLoadingAction, Tag("showLoading")],
        Annotated[ShowActionSheetAction, Tag("showActionSheet")],
        Annotated[RequestAction, Tag("request")],
        Annotated[CustomAction, Tag("custom")],
        Annotated[UnknownAction, Tag("unknown")],
    ],
    Discriminator(_action_tag),
]


def normalize_action(raw: Any) -> Any:
    """Flatten the legacy ``{type, params}`` shape into ``{kind, ...}``."""
    if not isinstance(raw, dict) or "kind" in raw or "type" not in raw:
        return raw

    kind = raw["type"]
    params = raw.get("params") or {}
    flat = {k: v for k, v in raw.items() if k not in ("type", "params")}
    flat.update(params)
    flat["kind"] = _LEGACY_KINDS.get(kind, kind)
    return flat


def normalize_actions(value: Any) -> Any:
    if isinstance(value, list):
        return [normalize_action(item) for item in value]
    return value


__all__ = [
    "ActionKind",
    "Action",
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
    "normalize_actions",
]
