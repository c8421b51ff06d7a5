"""ID Generation.

ULID-based identifiers for exports and trace spans. ULIDs sort by creation
time, so log lines for one export line up naturally.
"""

from datetime import datetime, timezone
from typing import NewType

from ulid import ULID

ExportID = NewType("ExportID", str)
"""Export run identifier"""

SpanID = NewType("SpanID", str)
"""Trace span identifier"""

TraceID = NewType("TraceID", str)
"""Trace identifier"""


class Prefix:
    """ID prefix constants."""

    EXPORT = "exp"
    SPAN = "span"
    TRACE = "trace"


def generate_raw() -> str:
    """Generate ULID without prefix."""
    return str(ULID())


def generate_prefixed(prefix: str) -> str:
    """Generate ``{prefix}_{ulid}``."""
    return f"{prefix}_{generate_raw()}"


def new_export_id() -> ExportID:
    return ExportID(generate_prefixed(Prefix.EXPORT))


def new_span_id() -> SpanID:
    return SpanID(generate_prefixed(Prefix.SPAN))


def new_trace_id() -> TraceID:
    return TraceID(generate_prefixed(Prefix.TRACE))


def _ulid_part(id_str: str) -> str:
    return id_str.rsplit("_", 1)[-1]


def is_valid(id_str: str) -> bool:
    """Check if string is a (optionally prefixed) ULID."""
    ulid_part = _ulid_part(id_str)
    if len(ulid_part) != 26:
        return False
    try:
        ULID.from_str(ulid_part)
    except ValueError:
        return False
    return True


def extract_timestamp(id_str: str) -> datetime | None:
    """Extract creation time from a ULID, or None if invalid."""
    if not is_valid(id_str):
        return None
    return ULID.from_str(_ulid_part(id_str)).datetime.astimezone(timezone.utc)


def is_export_id(id_str: str) -> bool:
    return id_str.startswith(f"{Prefix.EXPORT}_") and is_valid(id_str)


__all__ = [
    "ExportID",
    "SpanID",
    "TraceID",
    "Prefix",
    "generate_raw",
    "generate_prefixed",
    "new_export_id",
    "new_span_id",
    "new_trace_id",
    "is_valid",
    "extract_timestamp",
    "is_export_id",
]
