"""Attribute synthesis for a single node.

Order is fixed: id, literal properties, data bindings, events, render
condition, list rendering, class.
"""

from typing import Any

from pagewright.core import safe_json_dumps
from pagewright.models import BindingMode, ComponentNode
from pagewright.style.selectors import class_name_for
from pagewright.validation import is_self_closing

from .bindings import (
    escape_attribute,
    event_attribute,
    event_handler_name,
    to_binding_expression,
)

DEFAULT_ITEM_NAME = "item"
DEFAULT_KEY = "*this"

# Rendered elsewhere (content) or merged into the synthesized class
_SKIPPED_PROPERTIES = frozenset({"content", "class"})


def stringify_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return safe_json_dumps(value)
    return str(value)


def attr(name: str, value: str) -> str:
    return f'{name}="{escape_attribute(value)}"'


def renders_inline_content(node: ComponentNode) -> bool:
    """Childless, non-self-closing elements carry ``content`` as their body."""
    return not node.children and not is_self_closing(node.type)


def build_attributes(node: ComponentNode) -> list[str]:
    parts: list[str] = []

    if node.id:
        parts.append(attr("id", node.id))

    for prop in node.properties:
        if prop.name in _SKIPPED_PROPERTIES or prop.is_binding or prop.value is None:
            continue
        parts.append(attr(prop.name, stringify_value(prop.value)))

    for binding in node.data_bindings:
        if binding.property == "content" and (node.type == "text" or renders_inline_content(node)):
            continue
        name = f"model:{binding.property}" if binding.mode == BindingMode.TWO_WAY else binding.property
        parts.append(attr(name, to_binding_expression(binding.data_path)))

    for event in node.events:
        handler = event_handler_name(node.id, event.name, event.handler)
        parts.append(attr(event_attribute(event.name), handler))

    if node.condition is not None and node.condition.strip():
        parts.append(attr("wx:if", to_binding_expression(node.condition)))

    if node.list_rendering is not None:
        config = node.list_rendering
        parts.append(attr("wx:for", to_binding_expression(config.data_source)))
        parts.append(attr("wx:for-item", config.item_name or DEFAULT_ITEM_NAME))
        if config.index_name:
            parts.append(attr("wx:for-index", config.index_name))
        parts.append(attr("wx:key", config.key or DEFAULT_KEY))

    classes = []
    literal_class = node.get_property("class")
    if literal_class is not None and not literal_class.is_binding and literal_class.value:
        classes.append(str(literal_class.value))
    if node.style or node.responsive:
        classes.append(class_name_for(node))
    if classes:
        parts.append(attr("class", " ".join(classes)))

    return parts


def render_attributes(node: ComponentNode) -> str:
    parts = build_attributes(node)
    return " " + " ".join(parts) if parts else ""


__all__ = [
    "build_attributes",
    "render_attributes",
    "renders_inline_content",
    "stringify_value",
    "DEFAULT_ITEM_NAME",
    "DEFAULT_KEY",
]
