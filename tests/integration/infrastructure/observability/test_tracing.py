"""Integration tests for tracing setup and observability bootstrap."""

import pytest
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
    InMemorySpanExporter,
)

from command_orchestrator import __version__
from command_orchestrator.infrastructure import dependencies
from command_orchestrator.infrastructure.config.settings import reset_settings
from command_orchestrator.infrastructure.observability.tracing import (
    get_tracer,
    setup_tracing,
)


@pytest.fixture
def httpx_instrumentor():
    """Remove HTTPX instrumentation installed by a test."""
    instrumentor = HTTPXClientInstrumentor()
    yield instrumentor
    if instrumentor.is_instrumented_by_opentelemetry:
        instrumentor.uninstrument()


class TestSetupTracing:
    """Tests for OpenTelemetry configuration."""

    def test_provider_resource(self, monkeypatch, httpx_instrumentor):
        """Test that the provider describes this service."""
        monkeypatch.setenv("OTEL_SERVICE_NAME", "orchestrator-under-test")
        monkeypatch.setenv("OTEL_TRACING_ENABLED", "false")
        reset_settings()

        provider = setup_tracing()

        attributes = provider.resource.attributes
        assert attributes["service.name"] == "orchestrator-under-test"
        assert attributes["service.version"] == __version__
        assert attributes["deployment.environment"] == "development"
        assert httpx_instrumentor.is_instrumented_by_opentelemetry

    def test_spans_reach_exporter(self, monkeypatch, httpx_instrumentor):
        """Test that finished spans are handed to the given exporter."""
        monkeypatch.setenv("OTEL_TRACE_SAMPLE_RATE", "1.0")
        reset_settings()
        exporter = InMemorySpanExporter()

        provider = setup_tracing(span_exporter=exporter)
        with provider.get_tracer(__name__).start_as_current_span("execute_step"):
            pass

        assert [span.name for span in exporter.get_finished_spans()] == [
            "execute_step"
        ]

    def test_get_tracer_creates_spans(self):
        """Test that manual spans can be opened with or without setup."""
        tracer = get_tracer(__name__)

        with tracer.start_as_current_span("execute_plan") as span:
            span.set_attribute("execution.steps", 2)


class TestInitObservability:
    """Tests for the process-wide observability bootstrap."""

    def test_runs_once(self, monkeypatch):
        """Test that logging and tracing are configured a single time."""
        calls = []
        monkeypatch.setattr(dependencies, "_observability_initialized", False)
        monkeypatch.setattr(
            dependencies, "configure_logging", lambda: calls.append("logging")
        )
        monkeypatch.setattr(dependencies, "setup_tracing", lambda: calls.append("tracing"))

        dependencies.init_observability()
        dependencies.init_observability()

        assert calls == ["logging", "tracing"]
