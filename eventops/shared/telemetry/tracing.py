"""Span helpers: @traced decorator and TracedOperation context manager.

Without a configured tracer provider these fall back to OpenTelemetry's
no-op tracer, so service code can always call them.
"""

import asyncio
from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

# Only these kwarg names are copied to span attributes.
_SAFE_SPAN_ATTR_KEYS = frozenset({
    "tenant_id", "user_id", "workflow_id", "event_id", "event_type_id",
    "execution_id", "force", "include_stats", "is_active", "limit", "skip",
})


def _set_safe_span_attrs(span: trace.Span, kwargs: dict[str, Any]) -> None:
    for key, value in kwargs.items():
        if key in _SAFE_SPAN_ATTR_KEYS and value is not None:
            span.set_attribute(f"arg.{key}", str(value))


def _mark(span: trace.Span, exc: BaseException | None) -> None:
    if exc is None:
        span.set_status(Status(StatusCode.OK))
    else:
        span.set_status(Status(StatusCode.ERROR, str(exc)))
        span.record_exception(exc)


def traced(
    operation_name: str | None = None,
    attributes: dict[str, str | int | float | bool] | None = None,
) -> Callable:
    """Decorator that runs a (sync or async) function inside a span.

    Args:
        operation_name: Span name (defaults to module.qualname).
        attributes: Static attributes set on every span.
    """

    def decorator(func: Callable) -> Callable:
        tracer = trace.get_tracer(func.__module__)
        span_name = operation_name or f"{func.__module__}.{func.__qualname__}"

        def _start(span: trace.Span, kwargs: dict[str, Any]) -> None:
            for key, value in (attributes or {}).items():
                span.set_attribute(key, value)
            _set_safe_span_attrs(span, kwargs)

        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(span_name) as span:
                _start(span, kwargs)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _mark(span, e)
                    raise
                _mark(span, None)
                return result

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(span_name) as span:
                _start(span, kwargs)
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    _mark(span, e)
                    raise
                _mark(span, None)
                return result

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span."""
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)


def set_span_error(exception: Exception) -> None:
    """Mark the current span as error and record the exception."""
    span = trace.get_current_span()
    if span.is_recording():
        _mark(span, exception)


class TracedOperation:
    """Context manager for a traced block (sync or async)."""

    def __init__(self, operation_name: str, attributes: dict | None = None) -> None:
        self.operation_name = operation_name
        self.attributes = attributes or {}
        self.tracer = trace.get_tracer(__name__)
        self._cm: Any = None
        self.span: trace.Span | None = None

    def __enter__(self) -> "TracedOperation":
        self._cm = self.tracer.start_as_current_span(
            self.operation_name, record_exception=False, set_status_on_exception=False
        )
        self.span = self._cm.__enter__()
        for key, value in self.attributes.items():
            if value is not None:
                self.span.set_attribute(key, value)
        return self

    def __exit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        if self.span is not None:
            _mark(self.span, exc_val)
        if self._cm is not None:
            self._cm.__exit__(exc_type, exc_val, exc_tb)

    async def __aenter__(self) -> "TracedOperation":
        return self.__enter__()

    async def __aexit__(
        self,
        exc_type: type | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)
