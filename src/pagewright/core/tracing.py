"""
Tracing
Lightweight spans around export and page compilation.
"""

import contextvars
import time
from contextlib import asynccontextmanager, contextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Iterator

from .id import new_span_id, new_trace_id
from .logging_config import get_logger

logger = get_logger(__name__)

SLOW_SPAN_SECONDS = 1.0

_trace_id: contextvars.ContextVar[str] = contextvars.ContextVar("trace_id", default="")
_span_id: contextvars.ContextVar[str] = contextvars.ContextVar("span_id", default="")


@dataclass
class Span:
    """Represents a single traced operation."""

    trace_id: str
    span_id: str
    parent_id: str
    name: str
    service: str
    start_time: float
    end_time: float = 0.0
    duration: float = 0.0
    tags: dict[str, str] = field(default_factory=dict)
    error: Exception | None = None

    def finish(self) -> None:
        self.end_time = time.time()
        self.duration = self.end_time - self.start_time

    def set_tag(self, key: str, value: Any) -> None:
        self.tags[key] = str(value)

    def set_error(self, error: Exception) -> None:
        self.error = error


class Tracer:
    """Creates spans and logs them on completion."""

    def __init__(self, service: str = "pagewright") -> None:
        self.service = service

    def start_span(self, name: str, **tags: str) -> tuple[Span, tuple[contextvars.Token, contextvars.Token]]:
        """Create a span and make it current."""
        trace_id = _trace_id.get() or new_trace_id()
        span = Span(
            trace_id=trace_id,
            span_id=new_span_id(),
            parent_id=_span_id.get(),
            name=name,
            service=self.service,
            start_time=time.time(),
            tags=tags,
        )
        tokens = (_trace_id.set(trace_id), _span_id.set(span.span_id))
        return span, tokens

    def submit(self, span: Span) -> None:
        """Log a completed span."""
        fields: dict[str, Any] = {
            "trace_id": span.trace_id,
            "span_id": span.span_id,
            "operation": span.name,
            "duration_ms": round(span.duration * 1000, 3),
            **span.tags,
        }
        if span.parent_id:
            fields["parent_id"] = span.parent_id

        if span.error:
            logger.error("span_completed_with_error", error=str(span.error), **fields)
        elif span.duration > SLOW_SPAN_SECONDS:
            logger.warning("span_completed_slow", **fields)
        else:
            logger.debug("span_completed", **fields)


_tracer = Tracer()


def get_tracer() -> Tracer:
    return _tracer


def _restore(tokens: tuple[contextvars.Token, contextvars.Token]) -> None:
    _trace_id.reset(tokens[0])
    _span_id.reset(tokens[1])


@contextmanager
def trace_operation(operation: str, **kwargs: Any) -> Iterator[Span]:
    """Context manager for tracing operations."""
    span, tokens = _tracer.start_span(operation, **{k: str(v) for k, v in kwargs.items()})
    try:
        yield span
    except Exception as e:
        span.set_error(e)
        raise
    finally:
        span.finish()
        _tracer.submit(span)
        _restore(tokens)


@asynccontextmanager
async def trace_operation_async(operation: str, **kwargs: Any) -> AsyncIterator[Span]:
    """Async context manager for tracing operations."""
    span, tokens = _tracer.start_span(operation, **{k: str(v) for k, v in kwargs.items()})
    try:
        yield span
    except Exception as e:
        span.set_error(e)
        raise
    finally:
        span.finish()
        _tracer.submit(span)
        _restore(tokens)


def get_trace_id() -> str:
    """Get current trace ID from context."""
    return _trace_id.get()


def get_span_id() -> str:
    """Get current span ID from context."""
    return _span_id.get()


__all__ = [
    "Span",
    "Tracer",
    "get_tracer",
    "trace_operation",
    "trace_operation_async",
    "get_trace_id",
    "get_span_id",
]
