# user_directory/shared/telemetry.py
from typing import Optional

import structlog
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from user_directory import __version__
from user_directory.shared.config import Settings, get_settings

logger = structlog.get_logger()


def setup_telemetry(settings: Optional[Settings] = None) -> bool:
    """
    Initializes the OpenTelemetry SDK with OTLP export.
    Should be called once at process startup. Returns False when no
    collector endpoint is configured and tracing stays on the no-op provider.
    """
    settings = settings or get_settings()
    if not settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        logger.info("telemetry_disabled", reason="no OTEL_EXPORTER_OTLP_ENDPOINT")
        return False

    logger.info("telemetry_init", service=settings.OTEL_SERVICE_NAME)

    resource = Resource.create(attributes={
        "service.name": settings.OTEL_SERVICE_NAME,
        "deployment.environment": settings.APP_ENV.value,
        "service.version": __version__,
    })

    trace_provider = TracerProvider(resource=resource)

    endpoint = settings.OTEL_EXPORTER_OTLP_ENDPOINT.rstrip("/")
    otlp_exporter = OTLPSpanExporter(endpoint=f"{endpoint}/v1/traces")
    trace_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    if settings.DEBUG:
        trace_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(trace_provider)
    return True


def instrument_fastapi(app: FastAPI, settings: Optional[Settings] = None) -> None:
    """
    Auto-instruments the FastAPI application to trace incoming HTTP requests.
    """
    settings = settings or get_settings()
    if settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        FastAPIInstrumentor.instrument_app(app)


def get_tracer(name: str):
    """
    Utility to get a tracer for manual instrumentation in specific modules.
    Usage:
        tracer = get_tracer(__name__)
        with tracer.start_as_current_span("my_custom_logic"):
            ...
    """
    return trace.get_tracer(name)
