"""Script generation."""

from .identifiers import RESERVED_WORDS, is_reserved, is_usable_name
from .formatter import JsExpression, ScriptFormatter, format_script, quote_string, to_js_literal
from .data import (
    zero_value,
    validate_variables,
    validate_properties,
    generate_data,
    generate_properties,
)
from .actions import translate_action, translate_actions
from .lifecycle import LifecycleTarget, SIGNATURES, signature, validate_lifecycle, generate_lifecycle_block
from .events import collect_component_handlers, generate_event_handlers
from .generator import ScriptOptions, ScriptResult, ScriptGenerator, generate_app_script

__all__ = [
    "RESERVED_WORDS",
    "is_reserved",
    "is_usable_name",
    "JsExpression",
    "ScriptFormatter",
    "format_script",
    "quote_string",
    "to_js_literal",
    "zero_value",
    "validate_variables",
    "validate_properties",
    "generate_data",
    "generate_properties",
    "translate_action",
    "translate_actions",
    "LifecycleTarget",
    "SIGNATURES",
    "signature",
    "validate_lifecycle",
    "generate_lifecycle_block",
    "collect_component_handlers",
    "generate_event_handlers",
    "ScriptOptions",
    "ScriptResult",
    "ScriptGenerator",
    "generate_app_script",
]
