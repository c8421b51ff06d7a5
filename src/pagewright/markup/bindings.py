"""Escaping, binding expressions and event naming."""

import re

_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#39;"}
_ATTRIBUTE_PATTERN = re.compile(r"[&<>\"']")
_TEXT_PATTERN = re.compile(r"[&<>]")

EVENT_PREFIXES = ("bind", "catch", "mut-bind", "capture-bind", "capture-catch")


def escape_attribute(value: str) -> str:
    """Escape the five reserved markup characters."""
    return _ATTRIBUTE_PATTERN.sub(lambda m: _ESCAPES[m.group(0)], value)


def escape_text(value: str) -> str:
    return _TEXT_PATTERN.sub(lambda m: _ESCAPES[m.group(0)], value)


def escape_comment(value: str) -> str:
    return value.replace("--", "- -")


def to_binding_expression(path: str) -> str:
    """Wrap a data path in ``{{ }}`` unless it already is."""
    text = path.strip()
    if text.startswith("{{") and text.endswith("}}"):
        return text
    return f"{{{{{text}}}}}"


def to_pascal_case(value: str) -> str:
    """Split on ``-``/``_`` and capitalize each word's first letter."""
    return "".join(word[:1].upper() + word[1:] for word in re.split(r"[-_]", value) if word)


def strip_event_prefix(event_name: str) -> str:
    """``catchtap`` -> ``tap``; ``bind:input`` -> ``input``."""
    for prefix in sorted(EVENT_PREFIXES, key=len, reverse=True):
        if event_name.startswith(prefix) and len(event_name) > len(prefix):
            return event_name[len(prefix):].lstrip(":")
    return event_name


def event_attribute(event_name: str) -> str:
    """Attribute that binds an event; explicit bind/catch names pass through."""
    if event_name.startswith(EVENT_PREFIXES):
        return event_name
    return f"bind{event_name}"


def event_handler_name(component_id: str, event_name: str, handler: str | None = None) -> str:
    """Handler method name: explicit ``handler`` or ``on{Id}{Event}``."""
    if handler:
        return handler
    return f"on{to_pascal_case(component_id)}{to_pascal_case(strip_event_prefix(event_name))}"


__all__ = [
    "escape_attribute",
    "escape_text",
    "escape_comment",
    "to_binding_expression",
    "to_pascal_case",
    "strip_event_prefix",
    "event_attribute",
    "event_handler_name",
]
