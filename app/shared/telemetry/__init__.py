"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from app.shared.telemetry.logging import setup_logging
from app.shared.telemetry.telemetry import TelemetryConfig
from app.shared.telemetry.tracing import add_span_event, traced

__all__ = [
    "setup_logging",
    "TelemetryConfig",
    "add_span_event",
    "traced",
]
