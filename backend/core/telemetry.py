import logging
from typing import Any, Mapping

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.flask import FlaskInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import ConsoleMetricExporter, PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

logger = logging.getLogger(__name__)

_providers_installed = False


def telemetry_enabled(config: Mapping[str, Any]) -> bool:
    return bool(config.get("OTEL_EXPORTER_OTLP_ENDPOINT") or config.get("OTEL_DEBUG"))


def init_telemetry(app) -> bool:
    """
    Install tracing and metrics providers for the app's service name and
    instrument its requests.  Returns False (and does nothing) when
    telemetry is not enabled in the app config.
    """
    global _providers_installed

    config = app.config
    if not telemetry_enabled(config):
        logger.info("OpenTelemetry is disabled (set OTEL_EXPORTER_OTLP_ENDPOINT to enable).")
        return False

    # Global providers can only be set once per process.
    if not _providers_installed:
        service_name = config.get("OTEL_SERVICE_NAME", "task-service")
        otlp_endpoint = config.get("OTEL_EXPORTER_OTLP_ENDPOINT")
        logger.info(f"Initializing OpenTelemetry for {service_name}...")
        resource = Resource.create({"service.name": service_name})

        # --- Tracing ---
        tracer_provider = TracerProvider(resource=resource)
        trace.set_tracer_provider(tracer_provider)
        span_exporter = OTLPSpanExporter(endpoint=otlp_endpoint) if otlp_endpoint else ConsoleSpanExporter()
        tracer_provider.add_span_processor(BatchSpanProcessor(span_exporter))

        # --- Metrics ---
        metric_exporter = OTLPMetricExporter(endpoint=otlp_endpoint) if otlp_endpoint else ConsoleMetricExporter()
        metric_reader = PeriodicExportingMetricReader(metric_exporter)
        metrics.set_meter_provider(MeterProvider(resource=resource, metric_readers=[metric_reader]))
        _providers_installed = True

    FlaskInstrumentor().instrument_app(app)
    return True


def instrument_engine(engine) -> None:
    """Trace the SQL issued through *engine*."""
    SQLAlchemyInstrumentor().instrument(engine=engine)


def get_meter():
    """Get the application meter for custom metrics."""
    return metrics.get_meter("task-service.metrics")


def get_tracer():
    """Get the application tracer for custom spans."""
    return trace.get_tracer("task-service.tracer")


task_operation_counter = get_meter().create_counter(
    "tasks.operations",
    description="Task mutations by action and outcome",
)


def record_task_operation(action: str, status: str = "success") -> None:
    task_operation_counter.add(1, {"action": action, "status": status})
