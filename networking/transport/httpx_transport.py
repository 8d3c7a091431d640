"""httpx-backed transport."""

from collections.abc import AsyncIterator
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from networking.core.constants import DEFAULT_CHUNK_SIZE
from networking.core.errors import TransportError
from networking.core.models import TransportResponse, WireRequest
from networking.logger.redact import redact_url_credentials
from networking.transport.base import ProgressCallback


logger = structlog.get_logger()


class HttpxTransport:
    """Transport sending requests with ``httpx.AsyncClient``.

    A client is opened per send, so no connection state outlives a
    request. Pass ``transport`` to route requests through a custom
    ``httpx`` transport such as ``httpx.MockTransport``.
    """

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        follow_redirects: bool = True,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """Initialize the transport.

        Args:
            transport: Optional low-level httpx transport.
            follow_redirects: Whether redirects are followed.
            chunk_size: Chunk size used when streaming an upload body.
        """
        self._transport = transport
        self._follow_redirects = follow_redirects
        self._chunk_size = chunk_size
        self._log = logger.bind(component="transport")

    async def send(
        self,
        request: WireRequest,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> TransportResponse:
        """Send a request over httpx.

        Args:
            request: Transport-ready request.
            on_progress: Upload progress callback.

        Returns:
            Raw transport response.

        Raises:
            TransportError: On timeout or any httpx transport failure.
        """
        headers = dict(request.headers)
        content: bytes | AsyncIterator[bytes] = request.body
        if on_progress is not None:
            content = self._stream_body(request.body, on_progress)
            headers["Content-Length"] = str(len(request.body))

        client_kwargs: dict[str, Any] = {
            "transport": self._transport,
            "follow_redirects": self._follow_redirects,
        }
        if request.timeout is not None:
            client_kwargs["timeout"] = request.timeout

        try:
            async with httpx.AsyncClient(**client_kwargs) as client:
                response = await client.request(
                    request.method.value,
                    request.url,
                    headers=headers,
                    content=content,
                )
        except httpx.TimeoutException as e:
            self._log.warning(
                "transport_timeout", url=redact_url_credentials(request.url)
            )
            msg = f"Request timed out: {e}"
            raise TransportError(msg, cause=e, timed_out=True) from e
        except httpx.HTTPError as e:
            self._log.warning(
                "transport_error",
                url=redact_url_credentials(request.url),
                error=str(e),
            )
            msg = f"Request failed: {e}"
            raise TransportError(msg, cause=e) from e

        try:
            return TransportResponse(
                status_code=response.status_code,
                url=str(response.url),
                headers=dict(response.headers),
                body=response.content,
            )
        except ValidationError as e:
            self._log.warning(
                "transport_invalid_response",
                url=redact_url_credentials(request.url),
                status_code=response.status_code,
            )
            msg = f"Invalid response status {response.status_code}"
            raise TransportError(msg, cause=e) from e

    async def _stream_body(
        self,
        body: bytes,
        on_progress: ProgressCallback,
    ) -> AsyncIterator[bytes]:
        """Yield the body in chunks, reporting bytes handed to httpx."""
        total = len(body)
        if total == 0:
            on_progress(0, 0)
            return
        sent = 0
        for start in range(0, total, self._chunk_size):
            chunk = body[start : start + self._chunk_size]
            yield chunk
            sent += len(chunk)
            on_progress(sent, total)
