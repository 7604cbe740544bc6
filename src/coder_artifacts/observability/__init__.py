"""Observability module for logging and tracing."""

from coder_artifacts.observability.logging import (
    LogContext,
    configure_logging,
    get_request_id,
    set_request_id,
)
from coder_artifacts.observability.tracing import (
    get_current_trace_id,
    get_tracer,
    stage_span,
    traced,
)

__all__ = [
    # Logging
    "LogContext",
    "configure_logging",
    "get_request_id",
    "set_request_id",
    # Tracing
    "get_current_trace_id",
    "get_tracer",
    "stage_span",
    "traced",
]
