"""Stylesheet compilation, theming and caching."""

from .errors import (
    StyleError,
    InvalidSelectorError,
    InvalidPropertyError,
    UnitConversionError,
    ThemeNotFoundError,
    InvalidThemeError,
)
from .units import camel_to_kebab, process_value, convert_unit
from .selectors import sanitize_class_name, class_name_for, default_selector, combine_selectors
from .formatter import format_rule, format_rules, format_media
from .cache import CompiledStyle, StyleCache
from .compiler import BREAKPOINTS, StyleOptions, StyleCompiler
from .validator import StyleValidator
from .theme import DEFAULT_THEME, ThemeManager
from .generator import StylePlugin, StyleResult, StyleGenerator

__all__ = [
    # Errors
    "StyleError",
    "InvalidSelectorError",
    "InvalidPropertyError",
    "UnitConversionError",
    "ThemeNotFoundError",
    "InvalidThemeError",
    # Units and selectors
    "camel_to_kebab",
    "process_value",
    "convert_unit",
    "sanitize_class_name",
    "class_name_for",
    "default_selector",
    "combine_selectors",
    # Formatting
    "format_rule",
    "format_rules",
    "format_media",
    # Compilation
    "CompiledStyle",
    "StyleCache",
    "BREAKPOINTS",
    "StyleOptions",
    "StyleCompiler",
    "StyleValidator",
    # Themes
    "DEFAULT_THEME",
    "ThemeManager",
    # Generation
    "StylePlugin",
    "StyleResult",
    "StyleGenerator",
]
