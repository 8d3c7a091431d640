"""Request/response traffic rendering with sensitive-field redaction."""

from collections.abc import Callable, Collection

import structlog

from networking.core.models import LogLevel, WireRequest
from networking.logger.redact import (
    redact_body,
    redact_headers,
    redact_url_credentials,
)


logger = structlog.get_logger()

LogSink = Callable[[str], None]

REQUEST_BANNER = "----- HTTP Request -----"
RESPONSE_BANNER = "----- HTTP Response -----"
CURL_SEPARATOR = " \\\n\t"
CURL_EXCLUDED_HEADERS = frozenset({"Cookie"})


def structlog_sink(text: str) -> None:
    """Default sink: emit rendered traffic as a structlog event."""
    logger.info("http_traffic", component="networking", rendered=text)


def to_curl(wire: WireRequest, filtered_keys: Collection[str] = ()) -> str:
    """Reconstruct a request as an equivalent curl command.

    Headers named ``Cookie`` are omitted; filtered header values and body
    fields are redacted.

    Args:
        wire: Request to reconstruct.
        filtered_keys: Keys whose values must not appear.

    Returns:
        Multi-line curl command.
    """
    command = [f'curl "{redact_url_credentials(wire.url)}"']

    if wire.method.value not in ("GET", "HEAD"):
        command.append(f"-X {wire.method.value}")

    headers = redact_headers(wire.headers, filtered_keys)
    command.extend(
        f"-H '{key}: {value}'"
        for key, value in headers.items()
        if key not in CURL_EXCLUDED_HEADERS
    )

    if wire.body:
        command.append(f"-d '{redact_body(wire.body_text, filtered_keys)}'")

    return CURL_SEPARATOR.join(command)


class RedactingLogger:
    """Renders HTTP traffic as text and hands it to a log sink.

    Rendering is pure; ``log_request``/``log_response`` are the only
    methods that write, and only when rendering produced something.

    Attributes:
        log_level: Current verbosity.
        filtered_keys: Header names and body fields to redact.
    """

    def __init__(
        self,
        log_level: LogLevel = LogLevel.OFF,
        filtered_keys: Collection[str] = (),
        sink: LogSink | None = None,
    ) -> None:
        """Initialize the logger.

        Args:
            log_level: Verbosity level.
            filtered_keys: Keys to redact.
            sink: Destination for rendered strings (default: structlog).
        """
        self.log_level = log_level
        self.filtered_keys = frozenset(filtered_keys)
        self._sink = sink or structlog_sink

    def render_request(self, wire: WireRequest) -> str | None:
        """Render an outgoing request.

        Args:
            wire: Request to render.

        Returns:
            Rendered text, or None when logging is off.
        """
        if self.log_level == LogLevel.OFF:
            return None

        lines = [
            REQUEST_BANNER,
            f"{wire.method.value} to '{redact_url_credentials(wire.url)}'",
            "HEADERS:",
        ]
        lines.extend(
            f"{key} : {value}"
            for key, value in redact_headers(wire.headers, self.filtered_keys).items()
        )
        lines.append("BODY:")
        if wire.body:
            lines.append(redact_body(wire.body_text, self.filtered_keys))

        if self.log_level == LogLevel.DEBUG:
            lines.append(to_curl(wire, self.filtered_keys))

        return "\n".join(lines) + "\n"

    def render_response(self, status_code: int, url: str, body: bytes) -> str | None:
        """Render a received response.

        The body is shown verbatim at debug level; it is not field-redacted.

        Args:
            status_code: HTTP status code.
            url: URL the response came from.
            body: Response body bytes.

        Returns:
            Rendered text, or None when logging is off.
        """
        if self.log_level == LogLevel.OFF:
            return None

        lines = [
            RESPONSE_BANNER,
            f"{status_code} from '{redact_url_credentials(url)}'",
        ]
        if self.log_level == LogLevel.DEBUG:
            lines.append(body.decode("utf-8", errors="replace"))

        return "\n".join(lines) + "\n"

    def log_request(self, wire: WireRequest) -> None:
        """Render a request and write it to the sink."""
        text = self.render_request(wire)
        if text is not None:
            self._sink(text)

    def log_response(self, status_code: int, url: str, body: bytes) -> None:
        """Render a response and write it to the sink."""
        text = self.render_response(status_code, url, body)
        if text is not None:
            self._sink(text)
