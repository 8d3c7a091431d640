"""Observability module for logging and metrics."""

from networking.observability.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    redact_event_urls,
)
from networking.observability.metrics import RequestMetrics


__all__ = [
    # Logging
    "bind_request_context",
    "clear_request_context",
    "configure_logging",
    "redact_event_urls",
    # Metrics
    "RequestMetrics",
]
