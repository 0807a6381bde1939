"""Structured logging configuration with OpenTelemetry integration.

Configures structlog over the standard library so domain modules using
logging.getLogger(__name__) and executors using structlog share one output.
Log events carry trace/span ids and any execution context bound with
execution_log_context(); credentials in event fields are masked.
"""

import logging
import sys
from typing import Any

import structlog
from opentelemetry import trace

from command_orchestrator.infrastructure.config import get_settings

_SENSITIVE_KEYS = frozenset(
    {
        "api_key",
        "apikey",
        "token",
        "password",
        "secret",
        "authorization",
        "auth",
        "credentials",
        "x-api-key",
    }
)


def configure_logging(log_level: str | None = None, json_format: bool | None = None) -> None:
    """Configure structured logging with structlog.

    Args:
        log_level: Overrides OTEL_LOG_LEVEL when given
        json_format: Overrides OTEL_LOG_JSON_FORMAT when given
    """
    otel_config = get_settings().observability
    level_name = (log_level or otel_config.log_level).upper()
    use_json = otel_config.log_json_format if json_format is None else json_format

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name, logging.INFO),
    )

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_trace_context,
        _filter_sensitive_data,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def execution_log_context(**values: Any):
    """Context manager binding key/value pairs (e.g. execution_id) to log events.

    Bindings are context-local, so tasks started inside the block inherit
    them and they are removed again on exit.
    """
    return structlog.contextvars.bound_contextvars(**values)


def _add_trace_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add OpenTelemetry trace_id and span_id when a span is active."""
    span = trace.get_current_span()
    if span:
        span_context = span.get_span_context()
        if span_context.is_valid:
            event_dict["trace_id"] = format(span_context.trace_id, "032x")
            event_dict["span_id"] = format(span_context.span_id, "016x")

    return event_dict


def _mask_value(key: Any, value: Any) -> Any:
    if isinstance(key, str) and key.lower() in _SENSITIVE_KEYS:
        if isinstance(value, str) and len(value) > 4:
            return f"{value[:4]}{'*' * (len(value) - 4)}"
        return "***REDACTED***"
    if isinstance(value, dict):
        return {k: _mask_value(k, v) for k, v in value.items()}
    return value


def _filter_sensitive_data(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Mask credentials in log events, including nested parameter dicts.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Log event dictionary

    Returns:
        Event dictionary with sensitive values masked
    """
    return {k: _mask_value(k, v) for k, v in event_dict.items()}


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get structured logger instance.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("chaos_injected", service="order-service", chaos_type="pod_failure")
    """
    return structlog.get_logger(name)
