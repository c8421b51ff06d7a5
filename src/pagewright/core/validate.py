"""Input limits for project documents."""

from typing import Any

from returns.result import Failure, Result, Success

from .errors import Issue, ValidationError
from .json import JSONParseError, parse_json

# Validation limits
MAX_PROJECT_SIZE = 8 * 1024 * 1024  # 8MB
MAX_JSON_DEPTH = 64


def validate_json_size(data: str | bytes, max_size: int, name: str = "JSON") -> None:
    """
    Validate document size in encoded bytes.

    Raises:
        ValidationError: If size exceeds limit
    """
    size = len(data.encode("utf-8")) if isinstance(data, str) else len(data)
    if size > max_size:
        raise ValidationError(
            f"{name} size {size} bytes exceeds maximum {max_size} bytes",
            code="DOCUMENT_TOO_LARGE",
            details={"size": size, "max_size": max_size},
        )


def validate_json_depth(obj: Any, max_depth: int = MAX_JSON_DEPTH, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth to prevent runaway recursion.

    Raises:
        ValidationError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise ValidationError(
            f"JSON nesting depth {current_depth} exceeds maximum {max_depth}",
            code="DOCUMENT_TOO_DEEP",
        )

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)


def validate_project_document(
    text: str | bytes,
    max_size: int = MAX_PROJECT_SIZE,
    max_depth: int = MAX_JSON_DEPTH,
) -> Result[dict[str, Any], Issue]:
    """
    Parse and bound-check a project document (Result pattern version).

    Returns:
        Success with the decoded object, or Failure with the first issue found
    """
    try:
        validate_json_size(text, max_size, "Project document")
        data = parse_json(text)
        validate_json_depth(data, max_depth)
    except ValidationError as e:
        return Failure(e.to_issue())
    except JSONParseError as e:
        return Failure(Issue(code="INVALID_JSON", message=str(e)))

    if not isinstance(data, dict):
        return Failure(
            Issue(code="INVALID_FORMAT", message=f"Expected object, got {type(data).__name__}")
        )
    return Success(data)


__all__ = [
    "MAX_PROJECT_SIZE",
    "MAX_JSON_DEPTH",
    "validate_json_size",
    "validate_json_depth",
    "validate_project_document",
]
