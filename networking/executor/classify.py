"""Response classification."""

import json
from collections.abc import Mapping
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any

from networking.core.constants import HTTP_STATUS_OK_MAX, HTTP_STATUS_OK_MIN
from networking.core.errors import HTTPStatusError
from networking.core.models import ResponseOutcome, TransportResponse


def classify_response(response: TransportResponse) -> ResponseOutcome:
    """Map a raw response to a success or failure outcome.

    Args:
        response: Raw transport response.

    Returns:
        ResponseOutcome; ``error`` is set when the status is outside 2xx.
    """
    error: HTTPStatusError | None = None
    if not HTTP_STATUS_OK_MIN <= response.status_code < HTTP_STATUS_OK_MAX:
        error = HTTPStatusError(
            status_code=response.status_code,
            json_payload=parse_json_payload(response.body),
            body=response.body,
            retry_after=parse_retry_after(_header(response.headers, "retry-after")),
        )
    return ResponseOutcome(
        status_code=response.status_code,
        url=response.url,
        headers=response.headers,
        body=response.body,
        error=error,
    )


def parse_json_payload(body: bytes) -> Any:
    """Parse an error body as JSON.

    Args:
        body: Response body.

    Returns:
        Parsed JSON, or None when the body is empty or not JSON.
    """
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return None


def parse_retry_after(value: str | None) -> int | None:
    """Parse Retry-After header value.

    Args:
        value: Header value (seconds or HTTP date).

    Returns:
        Seconds to wait, or None if not parseable.
    """
    if not value:
        return None

    try:
        return max(0, int(value))
    except ValueError:
        pass

    try:
        dt = parsedate_to_datetime(value)
        delta = dt - datetime.now(UTC)
        return max(0, int(delta.total_seconds()))
    except (ValueError, TypeError):
        pass

    return None


def _header(headers: Mapping[str, str], name: str) -> str | None:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None
