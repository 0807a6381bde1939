"""Prometheus metrics instrumentation.

Defines and exports Prometheus metrics for monitoring command analysis and
plan execution. Avoids high cardinality by omitting service names and
execution ids from labels.
"""

from prometheus_client import Counter, Gauge, Histogram

# Command Analysis Metrics
command_analyses_total = Counter(
    name="cmd_orchestrator_command_analyses_total",
    documentation="Total number of command analyses",
    labelnames=["outcome"],  # success, error
)

command_analysis_duration_seconds = Histogram(
    name="cmd_orchestrator_command_analysis_duration_seconds",
    documentation="Command analysis duration in seconds",
    buckets=(
        0.001,  # 1ms
        0.005,  # 5ms
        0.01,  # 10ms
        0.025,  # 25ms
        0.05,  # 50ms
        0.1,  # 100ms
        0.25,  # 250ms
        0.5,  # 500ms
        1.0,  # 1s
    ),
)

# Step Execution Metrics
step_executions_total = Counter(
    name="cmd_orchestrator_step_executions_total",
    documentation="Total number of executed plan steps",
    labelnames=["action_type", "status"],  # status: COMPLETED, FAILED, CANCELLED
)

step_duration_seconds = Histogram(
    name="cmd_orchestrator_step_duration_seconds",
    documentation="Plan step duration in seconds",
    labelnames=["action_type"],
    buckets=(
        0.1,  # 100ms
        0.5,  # 500ms
        1.0,  # 1s
        2.5,  # 2.5s
        5.0,  # 5s
        10.0,  # 10s
        30.0,  # 30s
        60.0,  # 1m
        300.0,  # 5m
        900.0,  # 15m
    ),
)

step_timeouts_total = Counter(
    name="cmd_orchestrator_step_timeouts_total",
    documentation="Total number of plan steps that exceeded their deadline",
    labelnames=["action_type"],
)

# Plan Execution Metrics
plan_executions_total = Counter(
    name="cmd_orchestrator_plan_executions_total",
    documentation="Total number of plan executions",
    labelnames=["strategy", "status"],
)

plan_execution_duration_seconds = Histogram(
    name="cmd_orchestrator_plan_execution_duration_seconds",
    documentation="Plan execution duration in seconds",
    labelnames=["strategy"],
    buckets=(
        1.0,    # 1s
        5.0,    # 5s
        10.0,   # 10s
        30.0,   # 30s
        60.0,   # 1m
        120.0,  # 2m
        300.0,  # 5m
        600.0,  # 10m
        1800.0, # 30m
        3600.0, # 1h
    ),
)

active_executions = Gauge(
    name="cmd_orchestrator_active_executions",
    documentation="Current number of in-flight plan executions",
)

# Health Check Metrics
health_checks_total = Counter(
    name="cmd_orchestrator_health_checks_total",
    documentation="Total number of service health checks",
    labelnames=["result"],  # up, down, unreachable, unknown_service
)


def record_command_analysis(outcome: str, duration: float) -> None:
    """Record command analysis metrics.

    Args:
        outcome: Analysis outcome (success or error)
        duration: Analysis duration in seconds
    """
    command_analyses_total.labels(outcome=outcome).inc()
    command_analysis_duration_seconds.observe(duration)


def record_step_execution(action_type: str, status: str, duration: float) -> None:
    """Record plan step metrics.

    Args:
        action_type: Action type name (e.g. RUN_TESTS)
        status: Final step status
        duration: Step duration in seconds
    """
    step_executions_total.labels(action_type=action_type, status=status).inc()
    step_duration_seconds.labels(action_type=action_type).observe(duration)


def record_step_timeout(action_type: str) -> None:
    step_timeouts_total.labels(action_type=action_type).inc()


def record_plan_execution(strategy: str, status: str, duration: float) -> None:
    """Record plan execution metrics.

    Args:
        strategy: Execution strategy (PARALLEL or SEQUENTIAL)
        status: Final execution status
        duration: Execution duration in seconds
    """
    plan_executions_total.labels(strategy=strategy, status=status).inc()
    plan_execution_duration_seconds.labels(strategy=strategy).observe(duration)


def set_active_executions(count: int) -> None:
    active_executions.set(count)


def record_health_check(result: str) -> None:
    """Record a health check outcome.

    Args:
        result: One of up, down, unreachable, unknown_service
    """
    health_checks_total.labels(result=result).inc()
