"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .errors import (
    ErrorCategory,
    Issue,
    ValidationReport,
    PagewrightError,
    ValidationError,
    GenerationError,
    ScriptError,
    ExportCancelledError,
)
from .validate import validate_json_size, validate_json_depth, validate_project_document
from .logging_config import configure_logging, get_logger, LogContext
from .json import extract_json, parse_json, safe_json_dumps, JSONParseError
from .hash import Algorithm, hash_string, hash_bytes, hash_fields, fingerprint
from .cache import BoundedCache, Stats
from .tracing import trace_operation, trace_operation_async


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "ErrorCategory",
    "Issue",
    "ValidationReport",
    "PagewrightError",
    "ValidationError",
    "GenerationError",
    "ScriptError",
    "ExportCancelledError",
    # Validation
    "validate_json_size",
    "validate_json_depth",
    "validate_project_document",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "extract_json",
    "parse_json",
    "safe_json_dumps",
    "JSONParseError",
    # DI
    "create_container",
    # Hashing
    "Algorithm",
    "hash_string",
    "hash_bytes",
    "hash_fields",
    "fingerprint",
    # Caching
    "BoundedCache",
    "Stats",
    # Tracing
    "trace_operation",
    "trace_operation_async",
]
