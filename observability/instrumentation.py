"""OpenTelemetry instrumentation for the weather server.

Spans are always created through the OpenTelemetry API. Until
init_tracing() registers a tracer provider they go to the no-op tracer,
so the decorators are safe to use in tests.
"""

import functools
import json
import logging
import os
from typing import Any, Callable, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

# Type variable for preserving function signatures
F = TypeVar("F", bound=Callable[..., Any])

DEFAULT_PROJECT_NAME = "weather-server"
DEFAULT_COLLECTOR_ENDPOINT = "http://localhost:6006/v1/traces"

logger = logging.getLogger(__name__)

# Global tracer instance
_tracer: trace.Tracer | None = None


def get_tracer() -> trace.Tracer:
    """Get the global tracer instance."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(DEFAULT_PROJECT_NAME)
    return _tracer


def init_tracing(
    project_name: str = DEFAULT_PROJECT_NAME,
    endpoint: str | None = None,
) -> None:
    """Export spans to a Phoenix collector.

    Args:
        project_name: Name of the project in the Phoenix dashboard.
        endpoint: Collector endpoint. Defaults to PHOENIX_COLLECTOR_ENDPOINT
            or a local Phoenix server.
    """
    from phoenix.otel import register

    collector_endpoint = endpoint or os.getenv(
        "PHOENIX_COLLECTOR_ENDPOINT",
        DEFAULT_COLLECTOR_ENDPOINT,
    )

    tracer_provider = register(
        project_name=project_name,
        endpoint=collector_endpoint,
    )

    global _tracer
    _tracer = trace.get_tracer(project_name, tracer_provider=tracer_provider)

    logger.info("Tracing initialized for project %s, sending to %s", project_name, collector_endpoint)


def _serialize_value(value: Any) -> str:
    """Serialize a value to string for span attributes."""
    try:
        if isinstance(value, (dict, list)):
            return json.dumps(value, ensure_ascii=False, default=str)
        return str(value)
    except Exception:
        return str(value)


def trace_tool(
    name: str | None = None,
    capture_input: bool = True,
    capture_output: bool = True,
    method: bool = False,
) -> Callable[[F], F]:
    """Decorator to trace a call with input/output capture.

    Args:
        name: Custom span name. Defaults to "tool.<function name>".
        capture_input: Whether to capture input arguments. Defaults to True.
        capture_output: Whether to capture return value. Defaults to True.
        method: Whether the function is a method, so `self` is left out of
            the captured arguments. Defaults to False.

    Returns:
        Decorated function with tracing.

    Example:
        @trace_tool(name="open_meteo.fetch_current", method=True)
        def fetch_current(self, latitude, longitude):
            ...
    """
    def decorator(func: F) -> F:
        span_name = name or f"tool.{func.__name__}"

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = get_tracer()

            with tracer.start_as_current_span(span_name) as span:
                span.set_attribute("tool.name", func.__name__)

                if capture_input:
                    captured_args = args[1:] if method else args
                    if captured_args:
                        span.set_attribute("input.args", _serialize_value(captured_args))
                    if kwargs:
                        span.set_attribute("input.kwargs", _serialize_value(kwargs))

                try:
                    result = func(*args, **kwargs)

                    if capture_output and result is not None:
                        span.set_attribute("output.result", _serialize_value(result))

                    span.set_status(Status(StatusCode.OK))
                    return result

                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.set_attribute("error.type", type(e).__name__)
                    span.set_attribute("error.message", str(e))
                    raise

        return wrapper  # type: ignore

    return decorator


def trace_span(name: str) -> Callable[[F], F]:
    """Simple decorator to create a named span around a function.

    Args:
        name: Span name.

    Returns:
        Decorated function with tracing.
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = get_tracer()
            with tracer.start_as_current_span(name) as span:
                span.set_attribute("function.name", func.__name__)
                try:
                    result = func(*args, **kwargs)
                    span.set_status(Status(StatusCode.OK))
                    return result
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    raise

        return wrapper  # type: ignore

    return decorator
