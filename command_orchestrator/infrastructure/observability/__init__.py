"""Observability infrastructure module.

Provides OpenTelemetry tracing, structured logging, and Prometheus metrics.
"""

from command_orchestrator.infrastructure.observability.logging import (
    execution_log_context,
    configure_logging,
    get_logger,
)
from command_orchestrator.infrastructure.observability.metrics import (
    record_command_analysis,
    record_health_check,
    record_plan_execution,
    record_step_execution,
    record_step_timeout,
    set_active_executions,
)
from command_orchestrator.infrastructure.observability.tracing import (
    get_tracer,
    setup_tracing,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "execution_log_context",
    # Tracing
    "setup_tracing",
    "get_tracer",
    # Metrics
    "record_command_analysis",
    "record_step_execution",
    "record_step_timeout",
    "record_plan_execution",
    "set_active_executions",
    "record_health_check",
]
