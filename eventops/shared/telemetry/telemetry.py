"""OpenTelemetry distributed tracing configuration (OTLP or console exporter)."""

import logging
import threading

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)


class TelemetryConfig:
    """OpenTelemetry setup for the API process.

    Instruments FastAPI requests, SQLAlchemy queries and log records
    (trace_id/span_id). Exporters: console, otlp, or none.
    """

    def __init__(
        self,
        service_name: str,
        service_version: str,
        enabled: bool = True,
        environment: str = "development",
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.enabled = enabled
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider | None:
        """Initialize tracing and set the global tracer provider.

        Args:
            exporter_type: "console", "otlp", or "none".
            otlp_endpoint: OTLP gRPC endpoint (e.g. http://localhost:4317).
            sample_rate: Sampling rate 0.0-1.0.

        Returns:
            TracerProvider or None if disabled or setup failed.
        """
        if not self.enabled:
            logger.info("Telemetry disabled")
            return None
        try:
            resource = Resource(
                attributes={
                    SERVICE_NAME: self.service_name,
                    SERVICE_VERSION: self.service_version,
                    "deployment.environment": self.environment,
                }
            )
            self.tracer_provider = TracerProvider(
                resource=resource, sampler=TraceIdRatioBased(sample_rate)
            )
            if exporter_type == "none":
                trace.set_tracer_provider(self.tracer_provider)
                logger.info("Telemetry enabled without exporter")
                return self.tracer_provider
            if exporter_type == "otlp" and otlp_endpoint:
                exporter = OTLPSpanExporter(
                    endpoint=otlp_endpoint,
                    insecure=otlp_endpoint.startswith("http://"),
                )
                logger.info("Using OTLP span exporter: %s", otlp_endpoint)
            else:
                if exporter_type != "console":
                    logger.warning(
                        "Exporter '%s' needs an endpoint, using console", exporter_type
                    )
                exporter = ConsoleSpanExporter()
            self.tracer_provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(self.tracer_provider)
            logger.info(
                "OpenTelemetry initialized: service=%s, version=%s, exporter=%s",
                self.service_name,
                self.service_version,
                exporter_type,
            )
            return self.tracer_provider
        except Exception as e:
            logger.exception("Failed to initialize telemetry: %s", e)
            return None

    def instrument_fastapi(self, app: FastAPI) -> None:
        """Instrument FastAPI (requests, duration, status, exceptions)."""
        if not self.enabled or not self.tracer_provider:
            return
        try:
            FastAPIInstrumentor.instrument_app(
                app,
                tracer_provider=self.tracer_provider,
                excluded_urls="/api/v1/health",
            )
            logger.info("FastAPI instrumentation enabled")
        except Exception as e:
            logger.exception("Failed to instrument FastAPI: %s", e)

    def instrument_sqlalchemy(self, engine: AsyncEngine) -> None:
        """Instrument SQLAlchemy (queries, duration)."""
        if not self.enabled or not self.tracer_provider:
            return
        try:
            SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine,
                tracer_provider=self.tracer_provider,
            )
            logger.info("SQLAlchemy instrumentation enabled")
        except Exception as e:
            logger.exception("Failed to instrument SQLAlchemy: %s", e)

    def instrument_logging(self) -> None:
        """Inject trace context (trace_id, span_id) into log records."""
        if not self.enabled or not self.tracer_provider:
            return
        try:
            LoggingInstrumentor().instrument(
                tracer_provider=self.tracer_provider,
                set_logging_format=False,
            )
            logger.info("Logging instrumentation enabled")
        except Exception as e:
            logger.exception("Failed to instrument logging: %s", e)

    def shutdown(self) -> None:
        """Shutdown tracer provider and flush remaining spans."""
        if self.tracer_provider:
            try:
                self.tracer_provider.shutdown()
            except Exception as e:
                logger.exception("Error during telemetry shutdown: %s", e)


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the global telemetry instance (set at startup)."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    """Set (or clear) the global telemetry instance."""
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry


def get_tracer(name: str) -> trace.Tracer:
    """Return a tracer for creating custom spans (e.g. get_tracer(__name__))."""
    return trace.get_tracer(name)
