"""Tracing utilities and decorators.

Uses the OpenTelemetry API only. Without an SDK installed and configured by
the host process, the tracer is a no-op and trace ids are not reported.
"""

import functools
from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import StatusCode

F = TypeVar("F", bound=Callable[..., Any])


def get_tracer(name: str = "coder_artifacts") -> trace.Tracer:
    """
    Get an OpenTelemetry tracer.

    Args:
        name: Tracer name (typically module name).

    Returns:
        OpenTelemetry tracer.
    """
    return trace.get_tracer(name)


def traced(
    name: str | None = None,
    attributes: dict[str, Any] | None = None,
    record_exception: bool = True,
) -> Callable[[F], F]:
    """
    Decorator to trace a function.

    Creates a span that wraps the function execution.

    Args:
        name: Span name (defaults to function name).
        attributes: Static attributes to add to the span.
        record_exception: Whether to record exceptions.

    Returns:
        Decorated function.
    """
    def decorator(func: F) -> F:
        span_name = name or func.__name__
        tracer = get_tracer(func.__module__)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with tracer.start_as_current_span(span_name) as span:
                if attributes:
                    span.set_attributes(attributes)
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    if record_exception:
                        span.record_exception(e)
                        span.set_status(StatusCode.ERROR)
                    raise

        return wrapper  # type: ignore

    return decorator


@contextmanager
def stage_span(stage_name: str, **attributes: Any) -> Generator[trace.Span, None, None]:
    """
    Context manager for tracing a processing stage.

    Example:
        with stage_span("extract", input_chars=len(text)):
            result = extract_code_blocks(text)
    """
    tracer = get_tracer("coder_artifacts.pipeline")

    with tracer.start_as_current_span(f"coder_artifacts.{stage_name}") as span:
        span.set_attributes({"pipeline.stage": stage_name, **attributes})
        try:
            yield span
        except Exception as e:
            span.record_exception(e)
            span.set_status(StatusCode.ERROR)
            raise


def add_span_attribute(key: str, value: Any) -> None:
    """Add an attribute to the current span."""
    trace.get_current_span().set_attribute(key, value)


def get_current_trace_id() -> str | None:
    """
    Get the current trace ID.

    Returns:
        Trace ID as hex string, or None if not in a trace.
    """
    ctx = trace.get_current_span().get_span_context()
    if ctx.is_valid:
        return format(ctx.trace_id, "032x")
    return None
