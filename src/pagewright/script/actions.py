"""Translation of declarative actions into script statements.

Each action becomes exactly one statement, in order. Unrecognized kinds
become a marked placeholder comment so the rest of the body still renders.
"""

from typing import Any

from pagewright.core import get_logger
from pagewright.models import (
    CustomAction,
    NavigateAction,
    NavigateBackAction,
    RequestAction,
    SetDataAction,
    ShowActionSheetAction,
    ShowLoadingAction,
    ShowModalAction,
    ShowToastAction,
    UnknownAction,
)
from pagewright.validation import is_valid_identifier

from .formatter import JsExpression, to_js_literal

logger = get_logger(__name__)

PLACEHOLDER_PREFIX = "// unsupported action:"


def _call(target: str, options: dict[str, Any]) -> str:
    return f"{target}({to_js_literal(options, inline=True)})"


def placeholder(kind: str) -> str:
    return f"{PLACEHOLDER_PREFIX} {' '.join(str(kind).split())}"


def _set_data(action: SetDataAction) -> str:
    value = JsExpression(action.expression) if action.expression else action.value
    return f"this.setData({to_js_literal({action.key: value}, inline=True)})"


def _request(action: RequestAction) -> str:
    options: dict[str, Any] = {"url": action.url, "method": action.method.upper()}
    if action.data:
        options["data"] = action.data
    store = to_js_literal({action.result_key: JsExpression("res.data")}, inline=True)
    options["success"] = JsExpression(f"(res) => {{\nthis.setData({store})\n}}")
    options["fail"] = JsExpression("(err) => {\nconsole.error('request failed', err)\n}")
    return f"wx.request({to_js_literal(options)})"


def _custom(action: CustomAction) -> str:
    if not is_valid_identifier(action.method):
        return placeholder(f"custom {action.method}")
    args = ", ".join(to_js_literal(arg, inline=True) for arg in action.args)
    return f"this.{action.method}({args})"


def translate_action(action: Any) -> str:
    """Translate one action to one statement."""
    if isinstance(action, SetDataAction):
        return _set_data(action)
    if isinstance(action, NavigateAction):
        return _call(f"wx.{action.kind}", {"url": action.url})
    if isinstance(action, NavigateBackAction):
        return _call("wx.navigateBack", {"delta": action.delta})
    if isinstance(action, ShowToastAction):
        options: dict[str, Any] = {"title": action.title, "icon": action.icon}
        if action.duration is not None:
            options["duration"] = action.duration
        return _call("wx.showToast", options)
    if isinstance(action, ShowModalAction):
        return _call(
            "wx.showModal",
            {"title": action.title, "content": action.content, "showCancel": action.show_cancel},
        )
    if isinstance(action, ShowLoadingAction):
        return _call("wx.showLoading", {"title": action.title, "mask": action.mask})
    if isinstance(action, ShowActionSheetAction):
        return _call("wx.showActionSheet", {"itemList": action.item_list})
    if isinstance(action, RequestAction):
        return _request(action)
    if isinstance(action, CustomAction):
        return _custom(action)

    kind = action.kind if isinstance(action, UnknownAction) else type(action).__name__
    logger.debug("unsupported_action", kind=kind)
    return placeholder(kind)


def translate_actions(actions: list[Any]) -> list[str]:
    return [translate_action(action) for action in actions]


__all__ = ["translate_action", "translate_actions", "placeholder", "PLACEHOLDER_PREFIX"]
