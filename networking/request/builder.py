"""Outgoing request state and wire request construction."""

from collections.abc import Mapping, Sequence
from typing import Self

import httpx

from networking.codec.multipart import (
    encode_multipart_body,
    make_boundary,
    multipart_content_type,
)
from networking.codec.params import (
    append_query,
    encode_form_body,
    encode_json_body,
    encode_query_string,
)
from networking.core.constants import (
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_HEADER,
    CONTENT_TYPE_JSON,
    DEFAULT_MAX_RETRY_COUNT,
)
from networking.core.errors import BuildError
from networking.core.models import (
    HTTPMethod,
    MultipartPart,
    ParameterEncoding,
    Params,
    ParamValue,
    WireRequest,
)
from networking.request.settings import ConfigProvider, RequestSettings
from networking.retry.policy import RetryPolicy
from networking.transport.base import Transport


class OutgoingRequest:
    """Mutable description of a request prior to execution.

    Holds the caller's method/route/params plus a snapshot of client
    defaults. Per-request overrides are layered on top of the snapshot
    and survive a refresh.
    """

    def __init__(
        self,
        method: HTTPMethod,
        route: str,
        params: Params | None = None,
        *,
        data: bytes | None = None,
        multipart: Sequence[MultipartPart] | None = None,
        settings: RequestSettings | None = None,
        provider: ConfigProvider | None = None,
        retry_policy: RetryPolicy | None = None,
        max_retry_count: int = DEFAULT_MAX_RETRY_COUNT,
    ) -> None:
        """Initialize the request.

        Args:
            method: HTTP method.
            route: Route appended to the base URL.
            params: Parameters; copied so later caller mutation has no effect.
            data: Raw body, taking precedence over encoded params.
            multipart: Multipart parts; selects multipart body construction.
            settings: Snapshot of client defaults.
            provider: Source of live defaults for refresh on retry.
            retry_policy: Per-request policy; when None the provider's
                current policy is used.
            max_retry_count: Maximum retries, fixed for this request.
        """
        if max_retry_count < 0:
            msg = f"max_retry_count must be >= 0, got {max_retry_count}"
            raise ValueError(msg)
        self.method = method
        self.route = route
        self.params: dict[str, ParamValue] = dict(params or {})
        self.data = data
        self.multipart: list[MultipartPart] | None = (
            list(multipart) if multipart is not None else None
        )
        self.max_retry_count = max_retry_count
        self._provider = provider
        self._snapshot = settings or (
            provider.snapshot() if provider else RequestSettings()
        )
        self._retry_policy = retry_policy
        self._header_overrides: dict[str, str] = {}
        self._encoding_override: ParameterEncoding | None = None
        self._timeout_override: float | None = None
        self._transport_override: Transport | None = None

    @property
    def settings(self) -> RequestSettings:
        """Effective settings: snapshot plus per-request overrides."""
        updates: dict[str, object] = {}
        if self._header_overrides:
            updates["headers"] = {**self._snapshot.headers, **self._header_overrides}
        if self._encoding_override is not None:
            updates["parameter_encoding"] = self._encoding_override
        if self._timeout_override is not None:
            updates["timeout"] = self._timeout_override
        if self._transport_override is not None:
            updates["transport"] = self._transport_override
        if not updates:
            return self._snapshot
        return self._snapshot.model_copy(update=updates)

    @property
    def retry_policy(self) -> RetryPolicy | None:
        """Retry policy consulted on failure, read live from the provider."""
        if self._retry_policy is not None:
            return self._retry_policy
        if self._provider is not None:
            return self._provider.retry_policy
        return None

    def refresh_settings(self) -> None:
        """Re-take the defaults snapshot from the provider."""
        if self._provider is not None:
            self._snapshot = self._provider.snapshot()

    def set_header(self, key: str, value: str) -> Self:
        """Set a header for this request only."""
        self._header_overrides[key] = value
        return self

    def set_parameter_encoding(self, encoding: ParameterEncoding) -> Self:
        """Override the parameter encoding for this request only."""
        self._encoding_override = encoding
        return self

    def set_timeout(self, timeout: float) -> Self:
        """Override the timeout (seconds) for this request only."""
        if timeout <= 0:
            msg = f"timeout must be > 0, got {timeout}"
            raise ValueError(msg)
        self._timeout_override = timeout
        return self

    def set_transport(self, transport: Transport) -> Self:
        """Route this request through a specific transport."""
        self._transport_override = transport
        return self

    def set_retry_policy(self, policy: RetryPolicy) -> Self:
        """Use a specific retry policy for this request."""
        self._retry_policy = policy
        return self

    def __repr__(self) -> str:
        return (
            f"OutgoingRequest(method={self.method.value}, route={self.route!r}, "
            f"max_retry_count={self.max_retry_count})"
        )


def build_request(  # noqa: PLR0913
    provider: ConfigProvider,
    method: HTTPMethod,
    route: str,
    params: Params | None = None,
    *,
    data: bytes | None = None,
    multipart: Sequence[MultipartPart] | None = None,
    max_retry_count: int = DEFAULT_MAX_RETRY_COUNT,
) -> OutgoingRequest:
    """Build a request from the provider's current defaults.

    Args:
        provider: Source of client defaults.
        method: HTTP method.
        route: Route appended to the base URL.
        params: Request parameters.
        data: Raw body bytes.
        multipart: Multipart parts.
        max_retry_count: Maximum retries.

    Returns:
        A fresh OutgoingRequest holding a snapshot of the defaults.
    """
    return OutgoingRequest(
        method,
        route,
        params,
        data=data,
        multipart=multipart,
        provider=provider,
        max_retry_count=max_retry_count,
    )


def resolve_url(base_url: str, route: str) -> str:
    """Join base URL and route and validate the result.

    Args:
        base_url: Base URL, e.g. ``https://api.test``.
        route: Route, e.g. ``/items``.

    Returns:
        Absolute URL string.

    Raises:
        BuildError: If the URL is malformed or not absolute.
    """
    url = base_url + route
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise BuildError(url, str(e)) from e
    if not parsed.scheme or not parsed.host:
        raise BuildError(url, "URL must be absolute")
    return url


def build_wire_request(
    request: OutgoingRequest,
    boundary: str | None = None,
) -> WireRequest:
    """Derive the transport-ready request.

    GET requests carry params in the query string and no body. Other
    methods carry an encoded body: multipart when parts are present,
    otherwise raw data if supplied, otherwise params encoded per the
    configured encoding.

    Args:
        request: Request to build.
        boundary: Multipart boundary; generated when omitted.

    Returns:
        WireRequest.

    Raises:
        BuildError: If the URL cannot be constructed.
        EncodingError: If params cannot be encoded.
    """
    settings = request.settings
    url = resolve_url(settings.base_url, request.route)
    headers: dict[str, str] = {}
    body = b""

    if request.method == HTTPMethod.GET:
        if request.params:
            url = append_query(url, encode_query_string(request.params))
        headers.update(settings.headers)
    elif request.multipart is not None:
        boundary = boundary or make_boundary()
        headers.update(settings.headers)
        headers[CONTENT_TYPE_HEADER] = multipart_content_type(boundary)
        body = encode_multipart_body(request.params, request.multipart, boundary)
    else:
        encoding = settings.parameter_encoding
        headers[CONTENT_TYPE_HEADER] = (
            CONTENT_TYPE_JSON
            if encoding == ParameterEncoding.JSON
            else CONTENT_TYPE_FORM
        )
        headers.update(settings.headers)
        if request.data is not None:
            body = request.data
        elif encoding == ParameterEncoding.JSON:
            body = encode_json_body(request.params)
        else:
            body = encode_form_body(request.params)

    return WireRequest(
        method=request.method,
        url=url,
        headers=_single_content_type(headers),
        body=body,
        timeout=settings.timeout,
    )


def _single_content_type(headers: Mapping[str, str]) -> dict[str, str]:
    """Collapse Content-Type variants differing only by case, last one wins."""
    result: dict[str, str] = {}
    content_type: str | None = None
    for key, value in headers.items():
        if key.lower() == CONTENT_TYPE_HEADER.lower():
            content_type = value
            continue
        result[key] = value
    if content_type is not None:
        return {CONTENT_TYPE_HEADER: content_type, **result}
    return result
