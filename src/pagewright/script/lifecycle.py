"""Lifecycle method generation.

Signatures come from a fixed (target, event name) table. A name outside
the table for its target is a hard error.
"""

from enum import Enum

from pagewright.core import ScriptError, ValidationReport
from pagewright.models import LifecycleEvent

from .actions import translate_actions


class LifecycleTarget(str, Enum):
    PAGE = "page"
    COMPONENT = "component"
    PAGE_LIFETIMES = "pageLifetimes"


SIGNATURES: dict[LifecycleTarget, dict[str, list[str]]] = {
    LifecycleTarget.PAGE: {
        "onLoad": ["options"],
        "onShow": [],
        "onReady": [],
        "onHide": [],
        "onUnload": [],
        "onPullDownRefresh": [],
        "onReachBottom": [],
        "onShareAppMessage": ["options"],
        "onPageScroll": ["e"],
        "onTabItemTap": ["item"],
        "onResize": ["size"],
    },
    LifecycleTarget.COMPONENT: {
        "created": [],
        "attached": [],
        "ready": [],
        "moved": [],
        "detached": [],
        "error": ["err"],
    },
    LifecycleTarget.PAGE_LIFETIMES: {
        "show": [],
        "hide": [],
        "resize": ["size"],
    },
}


def signature(name: str, target: LifecycleTarget) -> list[str]:
    """
    Parameter list for a lifecycle method.

    Raises:
        ScriptError: ``name`` is not a lifecycle of ``target``
    """
    params = SIGNATURES[target].get(name)
    if params is None:
        raise ScriptError(
            f"Unknown {target.value} lifecycle: {name}",
            code="INVALID_LIFECYCLE",
            details={"name": name, "target": target.value},
        )
    return params


def component_target(name: str) -> LifecycleTarget:
    """Route a component lifecycle name to ``lifetimes`` or ``pageLifetimes``."""
    if name in SIGNATURES[LifecycleTarget.PAGE_LIFETIMES]:
        return LifecycleTarget.PAGE_LIFETIMES
    return LifecycleTarget.COMPONENT


def validate_lifecycle(events: list[LifecycleEvent], target: LifecycleTarget) -> ValidationReport:
    report = ValidationReport()
    seen: set[str] = set()
    for event in events:
        path = f"lifecycle.{event.name}"
        effective = component_target(event.name) if target == LifecycleTarget.COMPONENT else target
        if event.name not in SIGNATURES[effective]:
            report.error("INVALID_LIFECYCLE", f"Unknown {target.value} lifecycle: {event.name}", path)
        if event.name in seen:
            report.error("DUPLICATE_LIFECYCLE", f"Lifecycle declared more than once: {event.name}", path)
        seen.add(event.name)
        if not event.actions:
            report.warn("EMPTY_LIFECYCLE", f"Lifecycle has no actions: {event.name}", path)
    return report


def render_method(name: str, params: list[str], statements: list[str]) -> str:
    head = f"{name}({', '.join(params)})"
    if not statements:
        return f"{head} {{}}"
    body = "\n".join(statements)
    return f"{head} {{\n{body}\n}}"


def generate_lifecycle_block(events: list[LifecycleEvent], target: LifecycleTarget) -> str:
    """
    Render one method per lifecycle event, separated by blank lines.

    Raises:
        ScriptError: An event name is unknown for ``target``
    """
    methods = []
    for event in events:
        params = signature(event.name, target)
        methods.append(render_method(event.name, params, translate_actions(event.actions)))
    return ",\n\n".join(methods)


def split_component_lifecycles(
    events: list[LifecycleEvent],
) -> tuple[list[LifecycleEvent], list[LifecycleEvent]]:
    """Partition into (``lifetimes``, ``pageLifetimes``) events."""
    lifetimes = [e for e in events if component_target(e.name) == LifecycleTarget.COMPONENT]
    page_lifetimes = [e for e in events if component_target(e.name) == LifecycleTarget.PAGE_LIFETIMES]
    return lifetimes, page_lifetimes


__all__ = [
    "LifecycleTarget",
    "SIGNATURES",
    "signature",
    "component_target",
    "validate_lifecycle",
    "render_method",
    "generate_lifecycle_block",
    "split_component_lifecycles",
]
