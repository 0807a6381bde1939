"""OpenTelemetry tracing for plan execution.

The orchestrator opens an "execute_plan" span per execution and an
"execute_step" span per step through get_tracer(). setup_tracing() installs
the SDK provider that exports those spans and instruments the HTTPX client
used by health checks, so health check requests appear as child spans of their step.
"""

import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    SimpleSpanProcessor,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

from command_orchestrator import __version__
from command_orchestrator.infrastructure.config import get_settings

logger = logging.getLogger(__name__)


def setup_tracing(span_exporter: SpanExporter | None = None) -> TracerProvider:
    """Install the tracer provider for this process.

    Spans go to span_exporter when one is given (synchronously, for tests and
    local debugging); otherwise to the OTLP collector when OTEL_TRACING_ENABLED
    is set. With neither, spans are sampled but dropped.

    Args:
        span_exporter: Exporter to receive every finished span

    Returns:
        The TracerProvider registered as the global provider
    """
    settings = get_settings()
    otel_config = settings.observability

    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": otel_config.service_name,
                "service.version": __version__,
                "deployment.environment": settings.environment,
            }
        ),
        sampler=ParentBased(TraceIdRatioBased(otel_config.trace_sample_rate)),
    )

    if span_exporter is not None:
        provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    elif otel_config.tracing_enabled:
        provider.add_span_processor(
            BatchSpanProcessor(
                OTLPSpanExporter(
                    endpoint=otel_config.exporter_otlp_endpoint, insecure=True
                )
            )
        )
        logger.info(
            f"Exporting execution spans to {otel_config.exporter_otlp_endpoint} "
            f"(sample rate {otel_config.trace_sample_rate})"
        )

    trace.set_tracer_provider(provider)

    instrumentor = HTTPXClientInstrumentor()
    if not instrumentor.is_instrumented_by_opentelemetry:
        instrumentor.instrument()
        logger.info("Health check requests instrumented")

    return provider


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer for manual spans.

    Safe to call at import time: until setup_tracing() runs, spans go to the
    no-op provider.

    Example:
        >>> tracer = get_tracer(__name__)
        >>> with tracer.start_as_current_span("execute_step") as span:
        ...     span.set_attribute("step.id", step.step_id)
    """
    return trace.get_tracer(name)
