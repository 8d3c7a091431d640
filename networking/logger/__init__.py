"""Traffic logging with header and body-field redaction."""

from networking.logger.redact import (
    body_field_pattern,
    redact_body,
    redact_headers,
    redact_url_credentials,
)
from networking.logger.renderer import (
    LogSink,
    RedactingLogger,
    structlog_sink,
    to_curl,
)


__all__ = [
    # Renderer
    "LogSink",
    "RedactingLogger",
    "structlog_sink",
    "to_curl",
    # Redaction
    "body_field_pattern",
    "redact_body",
    "redact_headers",
    "redact_url_credentials",
]
