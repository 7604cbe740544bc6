"""Structured JSON logging with request correlation."""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

from coder_artifacts.observability.tracing import get_current_trace_id

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)

# LogRecord attributes that are not user-supplied extras
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime", "request_id", "service"}


def set_request_id(request_id: str | None) -> None:
    """Bind a request id to the current context."""
    _request_id.set(request_id)


def get_request_id() -> str | None:
    """Get the request id bound to the current context."""
    return _request_id.get()


class StructuredLogFormatter(logging.Formatter):
    """
    JSON log formatter with request correlation.

    Outputs logs in JSON format with:
    - Standard log fields (timestamp, level, message, logger)
    - Service name, request id and trace id
    - Extra fields passed via ``extra=`` or LogContext
    - Exception information
    """

    def __init__(self, service_name: str | None = None) -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.service_name:
            log_entry["service"] = self.service_name

        request_id = getattr(record, "request_id", None) or get_request_id()
        if request_id:
            log_entry["request_id"] = request_id

        trace_id = get_current_trace_id()
        if trace_id:
            log_entry["trace_id"] = trace_id

        log_entry["location"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS and key != "extra"
        }
        context_extra = getattr(record, "extra", None)
        if isinstance(context_extra, dict):
            extra = {**context_extra, **extra}
        if extra:
            log_entry["extra"] = extra

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class RequestContextFilter(logging.Filter):
    """
    Logging filter that adds request context to log records.

    Adds request_id to all log records so plain-text formats can use it.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context fields to the log record."""
        if not getattr(record, "request_id", None):
            record.request_id = get_request_id() or ""
        return True


def configure_logging(
    level: str = "INFO",
    json_format: bool = True,
    service_name: str | None = None,
    stream: Any = None,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Default log level.
        json_format: If True, use JSON format. Otherwise, use standard format.
        service_name: Service name added to every JSON record.
        stream: Output stream; defaults to stdout.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(logging.DEBUG)

    if json_format:
        handler.setFormatter(StructuredLogFormatter(service_name=service_name))
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))

    handler.addFilter(RequestContextFilter())
    root_logger.addHandler(handler)

    # Reduce noise from common libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        f"Logging configured: level={level}, json={json_format}"
    )


class LogContext:
    """
    Context manager for adding extra fields to logs.

    Usage:
        with LogContext(task_id="task-1", action="write"):
            logger.info("Writing files")  # Includes extra fields
    """

    def __init__(self, **kwargs: Any) -> None:
        self.extra = kwargs
        self._old_factory = None

    def __enter__(self) -> "LogContext":
        self._old_factory = logging.getLogRecordFactory()

        extra = self.extra
        old_factory = self._old_factory

        def record_factory(*args, **kwargs):
            record = old_factory(*args, **kwargs)
            record.extra = extra
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, *args) -> None:
        if self._old_factory:
            logging.setLogRecordFactory(self._old_factory)
