"""Tracing helpers for upload operations.

Spans go through the OpenTelemetry API; without an SDK installed the tracer
is a no-op, so decorating service methods costs nothing in development.
"""

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

# Only these keyword arguments are copied onto spans; file contents never are.
SPAN_ARGUMENTS = frozenset({
    "key", "name", "uploader", "path", "content_type", "delete_source_after",
})


@contextmanager
def _span(
    tracer: trace.Tracer,
    name: str,
    static: Mapping[str, Any],
    kwargs: Mapping[str, Any],
) -> Iterator[trace.Span]:
    with tracer.start_as_current_span(name, record_exception=False) as span:
        span.set_attributes(dict(static))
        for arg, value in kwargs.items():
            if arg in SPAN_ARGUMENTS:
                span.set_attribute(f"arg.{arg}", str(value))
        try:
            yield span
        except Exception as e:
            span.record_exception(e)
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise
        span.set_status(Status(StatusCode.OK))


def traced(
    operation_name: str | None = None,
    attributes: dict | None = None,
) -> Callable:
    """Decorator that runs a coroutine function inside a span.

    Args:
        operation_name: Span name (defaults to module.funcname).
        attributes: Static attributes set on every span.
    """

    def decorator(func: Callable) -> Callable:
        tracer = trace.get_tracer(__name__)
        span_name = operation_name or f"{func.__module__}.{func.__qualname__}"
        static = attributes or {}

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            with _span(tracer, span_name, static, kwargs):
                return await func(*args, **kwargs)

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span (ignored when it is not recording)."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)
