"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from eventops.shared.telemetry.logging import get_logger, setup_logging
from eventops.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    get_tracer,
    set_telemetry,
)
from eventops.shared.telemetry.tracing import (
    TracedOperation,
    add_span_attributes,
    set_span_error,
    traced,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "get_tracer",
    "traced",
    "add_span_attributes",
    "set_span_error",
    "TracedOperation",
]
