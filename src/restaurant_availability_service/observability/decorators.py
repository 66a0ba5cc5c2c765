"""OpenTelemetry tracing decorators."""

import asyncio
import functools
from collections.abc import Callable
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode

from restaurant_availability_service.observability.config import SERVICE_NAME

F = TypeVar("F", bound=Callable[..., Any])


def _record_failure(span: Span, error: Exception) -> None:
    span.set_attribute("success", False)
    span.set_attribute("error.type", type(error).__name__)
    span.record_exception(error)
    span.set_status(Status(StatusCode.ERROR, str(error)))


def traced(
    span_name: str | None = None,
    attributes: dict[str, str] | None = None,
    service_name: str = SERVICE_NAME,
) -> Callable[[F], F]:
    """Decorator to run a function inside an OpenTelemetry span.

    Sync and async functions are supported. Exceptions are recorded on the
    span and re-raised.

    Args:
        span_name: Name for the span (defaults to the function's qualified name)
        attributes: Static attributes added to every span
        service_name: Instrumentation scope name for the tracer

    Returns:
        Decorated function with tracing

    Example:
        @traced("availability.restaurant_status", attributes={"source": "platform"})
        async def get_restaurant_status(self, restaurant_id: str) -> RestaurantStatus | None:
            ...
    """

    def decorator(func: F) -> F:
        name = span_name or func.__qualname__
        tracer = trace.get_tracer(service_name)
        static_attributes = {"function.name": func.__name__, **(attributes or {})}

        if asyncio.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with tracer.start_as_current_span(
                    name, attributes=static_attributes, record_exception=False
                ) as span:
                    try:
                        result = await func(*args, **kwargs)
                    except Exception as e:
                        _record_failure(span, e)
                        raise
                    span.set_attribute("success", True)
                    return result

            return async_wrapper  # type: ignore

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(
                name, attributes=static_attributes, record_exception=False
            ) as span:
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    _record_failure(span, e)
                    raise
                span.set_attribute("success", True)
                return result

        return sync_wrapper  # type: ignore

    return decorator
