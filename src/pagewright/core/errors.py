"""Error types and the shared validation document.

Every validator in the pipeline reports through ``ValidationReport`` so that
downstream tooling sees one shape: ``{valid, errors: [...], warnings: [...]}``.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCategory(str, Enum):
    """Where an issue came from."""

    MODEL = "model"  # Input is bad
    GENERATION = "generation"  # Generator is broken
    RESOURCE = "resource"
    ORCHESTRATION = "orchestration"
    CANCELLATION = "cancellation"


class Issue(BaseModel):
    """A single error or warning with a stable code."""

    code: str
    message: str
    path: str | None = None
    category: ErrorCategory = Field(default=ErrorCategory.MODEL, exclude=True)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{code, message, path?}``."""
        return self.model_dump(exclude_none=True)


class ValidationReport(BaseModel):
    """Accumulated validation outcome."""

    errors: list[Issue] = Field(default_factory=list)
    warnings: list[Issue] = Field(default_factory=list)

    @property
    def valid(self) -> bool:
        """True when no errors were collected."""
        return not self.errors

    def error(
        self,
        code: str,
        message: str,
        path: str | None = None,
        category: ErrorCategory = ErrorCategory.MODEL,
    ) -> None:
        self.errors.append(Issue(code=code, message=message, path=path, category=category))

    def warn(
        self,
        code: str,
        message: str,
        path: str | None = None,
        category: ErrorCategory = ErrorCategory.MODEL,
    ) -> None:
        self.warnings.append(Issue(code=code, message=message, path=path, category=category))

    def merge(self, other: "ValidationReport") -> "ValidationReport":
        """Append another report's issues to this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [issue.to_dict() for issue in self.errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
        }


class PagewrightError(Exception):
    """Base error with a stable code."""

    code = "PAGEWRIGHT_ERROR"
    category = ErrorCategory.MODEL

    def __init__(
        self, message: str, code: str | None = None, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.details = details or {}

    def to_issue(self, path: str | None = None) -> Issue:
        """Convert to an ``Issue`` for accumulation."""
        return Issue(code=self.code, message=self.message, path=path, category=self.category)


class ValidationError(PagewrightError):
    """Input failed validation."""

    code = "VALIDATION_ERROR"


class GenerationError(PagewrightError):
    """Generated output is inconsistent."""

    code = "GENERATION_ERROR"
    category = ErrorCategory.GENERATION


class ScriptError(PagewrightError):
    """Script generation failed."""

    code = "SCRIPT_ERROR"


class ExportCancelledError(PagewrightError):
    """Export was cancelled between batches."""

    code = "EXPORT_CANCELLED"
    category = ErrorCategory.CANCELLATION

    def __init__(self, message: str = "Export was cancelled") -> None:
        super().__init__(message)


__all__ = [
    "ErrorCategory",
    "Issue",
    "ValidationReport",
    "PagewrightError",
    "ValidationError",
    "GenerationError",
    "ScriptError",
    "ExportCancelledError",
]
