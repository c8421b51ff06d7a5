"""Model and output validation."""

from .rules import (
    NESTING_RULES,
    TRANSPARENT_CONTAINERS,
    SELF_CLOSING_TAGS,
    BUILTIN_COMPONENTS,
    allows_child,
    is_self_closing,
    is_valid_data_path,
    is_valid_identifier,
    is_builtin,
    is_valid_page_path,
)
from .tree import TreeValidator, validate_tree, strip_mustache
from .project import validate_project, validate_output

__all__ = [
    "NESTING_RULES",
    "TRANSPARENT_CONTAINERS",
    "SELF_CLOSING_TAGS",
    "BUILTIN_COMPONENTS",
    "allows_child",
    "is_self_closing",
    "is_valid_data_path",
    "is_valid_identifier",
    "is_builtin",
    "is_valid_page_path",
    "TreeValidator",
    "validate_tree",
    "strip_mustache",
    "validate_project",
    "validate_output",
]
