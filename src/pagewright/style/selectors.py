"""Selector naming shared by the style and markup compilers."""

import re

from pagewright.models import ComponentNode

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]+")
_COMBINATOR = re.compile(r"\s*[>+~]\s*|\s+")


def sanitize_class_name(name: str) -> str:
    """Collapse runs of non-alphanumerics to a single hyphen."""
    return _NON_ALNUM.sub("-", name).strip("-")


def class_name_for(node: ComponentNode) -> str:
    """Class a node's ad-hoc styles are emitted under."""
    if node.name:
        sanitized = sanitize_class_name(node.name)
        if sanitized:
            return sanitized
    return f"{node.type}-{node.id}"


def default_selector(node: ComponentNode) -> str:
    return f".{class_name_for(node)}"


def combine_selectors(parent: str, key: str) -> str:
    """
    Resolve a nested key against its parent selector.

    ``&:hover`` and ``:hover`` attach directly; anything else is a
    descendant joined with a space.
    """
    key = key.strip()
    if key.startswith("&"):
        return f"{parent}{key[1:]}"
    if key.startswith(":"):
        return f"{parent}{key}"
    if not parent:
        return key
    return f"{parent} {key}"


def selector_depth(selector: str) -> int:
    """Number of compound selectors in the longest comma-separated branch."""
    branches = [branch.strip() for branch in selector.split(",") if branch.strip()]
    if not branches:
        return 0
    return max(len([part for part in _COMBINATOR.split(branch) if part]) for branch in branches)


__all__ = [
    "sanitize_class_name",
    "class_name_for",
    "default_selector",
    "combine_selectors",
    "selector_depth",
]
