"""Markup generation."""

from .bindings import (
    escape_attribute,
    escape_text,
    to_binding_expression,
    to_pascal_case,
    event_attribute,
    event_handler_name,
)
from .attributes import build_attributes, render_attributes
from .formatter import format_markup, check_balance, tokenize
from .compiler import MarkupOptions, MarkupResult, MarkupCompiler

__all__ = [
    "escape_attribute",
    "escape_text",
    "to_binding_expression",
    "to_pascal_case",
    "event_attribute",
    "event_handler_name",
    "build_attributes",
    "render_attributes",
    "format_markup",
    "check_balance",
    "tokenize",
    "MarkupOptions",
    "MarkupResult",
    "MarkupCompiler",
]
