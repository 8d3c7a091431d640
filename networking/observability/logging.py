"""Structured logging setup for applications embedding the client."""

import logging
import sys
from typing import TextIO

import structlog
from structlog.types import EventDict, WrappedLogger

from networking.logger.redact import redact_url_credentials


_URL_KEYS = ("url", "base_url")


def redact_event_urls(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor hiding ``user:pass@`` credentials in URL-valued fields."""
    for key in _URL_KEYS:
        value = event_dict.get(key)
        if isinstance(value, str):
            event_dict[key] = redact_url_credentials(value)
    return event_dict


def configure_logging(
    level: int = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Configure structlog for executor, transport and traffic events.

    Request ids bound by the executor are merged from context variables,
    and URL fields pass through credential redaction before rendering.

    Args:
        level: Minimum level emitted.
        output: Stream receiving rendered events.
        json_format: Render JSON lines instead of console output.
    """
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_event_urls,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )


def bind_request_context(request_id: str) -> None:
    """Attach a request id to every event logged in the current context."""
    structlog.contextvars.bind_contextvars(request_id=request_id)


def clear_request_context() -> None:
    """Detach the request id bound by bind_request_context."""
    structlog.contextvars.unbind_contextvars("request_id")
