"""NetworkingClient facade."""

import json
from collections.abc import AsyncIterator, Collection, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ValidationError

from networking.client.config import ClientConfig
from networking.core.constants import DEFAULT_MAX_RETRY_COUNT
from networking.core.errors import DecodingError
from networking.core.models import (
    HTTPMethod,
    LogLevel,
    MultipartPart,
    ParameterEncoding,
    Params,
    ResponseOutcome,
    UploadEvent,
)
from networking.executor.executor import RequestExecutor
from networking.logger.renderer import LogSink
from networking.request.builder import OutgoingRequest, build_request
from networking.request.settings import RequestSettings
from networking.retry.policy import RetryPolicy
from networking.settings.app import NetworkingSettings, get_settings
from networking.transport.base import Transport
from networking.transport.httpx_transport import HttpxTransport


class NetworkingClient:
    """Holds shared request defaults and produces pre-configured requests.

    Example:
        client = NetworkingClient("https://api.example.com")
        client.config.headers["Authorization"] = "Bearer ..."
        client.config.filtered_keys.add("Authorization")
        items = await client.get_json("/items", {"page": 1})

    The client acts as the ConfigProvider of every request it builds:
    requests snapshot ``config`` when built and again after each retry
    signal completes.
    """

    def __init__(  # noqa: PLR0913
        self,
        base_url: str = "",
        *,
        headers: Mapping[str, str] | None = None,
        parameter_encoding: ParameterEncoding = ParameterEncoding.URL_ENCODED,
        timeout: float | None = None,
        log_level: LogLevel = LogLevel.OFF,
        filtered_keys: Collection[str] = (),
        retry_policy: RetryPolicy | None = None,
        transport: Transport | None = None,
        max_retry_count: int = DEFAULT_MAX_RETRY_COUNT,
        sink: LogSink | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Prefix of every route.
            headers: Default headers.
            parameter_encoding: Body encoding for non-GET params.
            timeout: Request timeout in seconds.
            log_level: Traffic logging verbosity.
            filtered_keys: Header/body keys redacted in traffic logs.
            retry_policy: Policy consulted on failures (None: no retries).
            transport: Transport used to send requests (default: httpx).
            max_retry_count: Retry budget given to new requests.
            sink: Destination for rendered traffic logs (default: structlog).
        """
        self.config = ClientConfig(
            base_url=base_url,
            headers=dict(headers or {}),
            parameter_encoding=parameter_encoding,
            timeout=timeout,
            log_level=log_level,
            filtered_keys=set(filtered_keys),
            retry_policy=retry_policy,
            transport=transport,
            max_retry_count=max_retry_count,
        )
        self._executor = RequestExecutor(sink=sink)

    @classmethod
    def from_settings(
        cls,
        settings: NetworkingSettings | None = None,
        **overrides: Any,
    ) -> "NetworkingClient":
        """Create a client from environment settings.

        Args:
            settings: Settings instance (default: read from environment).
            **overrides: Constructor arguments taking precedence.

        Returns:
            Configured client.
        """
        settings = settings or get_settings()
        kwargs: dict[str, Any] = {
            "base_url": settings.base_url,
            "timeout": settings.timeout_seconds,
            "log_level": settings.log_level,
            "parameter_encoding": settings.parameter_encoding,
            "filtered_keys": settings.filtered_key_set,
            "max_retry_count": settings.max_retry_count,
            "transport": HttpxTransport(follow_redirects=settings.follow_redirects),
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    # ConfigProvider

    def snapshot(self) -> RequestSettings:
        """Snapshot the current defaults."""
        return self.config.snapshot()

    @property
    def retry_policy(self) -> RetryPolicy | None:
        """Currently configured retry policy."""
        return self.config.retry_policy

    # Request factories

    def request(
        self,
        method: HTTPMethod,
        route: str,
        params: Params | None = None,
        *,
        data: bytes | None = None,
        multipart: Sequence[MultipartPart] | None = None,
    ) -> OutgoingRequest:
        """Build a request from the current defaults.

        Args:
            method: HTTP method.
            route: Route appended to ``config.base_url``.
            params: Request parameters.
            data: Raw body, taking precedence over params.
            multipart: Multipart parts.

        Returns:
            OutgoingRequest ready for execute().
        """
        return build_request(
            self,
            method,
            route,
            params,
            data=data,
            multipart=multipart,
            max_retry_count=self.config.max_retry_count,
        )

    def get_request(self, route: str, params: Params | None = None) -> OutgoingRequest:
        """Build a GET request; params go to the query string."""
        return self.request(HTTPMethod.GET, route, params)

    def post_request(
        self, route: str, params: Params | None = None, *, data: bytes | None = None
    ) -> OutgoingRequest:
        """Build a POST request; params or data form the body."""
        return self.request(HTTPMethod.POST, route, params, data=data)

    def put_request(
        self, route: str, params: Params | None = None, *, data: bytes | None = None
    ) -> OutgoingRequest:
        """Build a PUT request; params or data form the body."""
        return self.request(HTTPMethod.PUT, route, params, data=data)

    def patch_request(
        self, route: str, params: Params | None = None, *, data: bytes | None = None
    ) -> OutgoingRequest:
        """Build a PATCH request; params or data form the body."""
        return self.request(HTTPMethod.PATCH, route, params, data=data)

    def delete_request(
        self, route: str, params: Params | None = None
    ) -> OutgoingRequest:
        """Build a DELETE request; params are encoded into the body."""
        return self.request(HTTPMethod.DELETE, route, params)

    # Execution

    async def execute(self, request: OutgoingRequest) -> ResponseOutcome:
        """Execute a request built by this (or any) client."""
        return await self._executor.execute(request)

    async def get(self, route: str, params: Params | None = None) -> bytes:
        """GET a route and return the response body.

        Raises:
            NetworkingError: On any terminal failure.
        """
        return await self._executor.execute_bytes(self.get_request(route, params))

    async def post(
        self, route: str, params: Params | None = None, *, data: bytes | None = None
    ) -> bytes:
        """POST to a route and return the response body."""
        return await self._executor.execute_bytes(
            self.post_request(route, params, data=data)
        )

    async def put(
        self, route: str, params: Params | None = None, *, data: bytes | None = None
    ) -> bytes:
        """PUT to a route and return the response body."""
        return await self._executor.execute_bytes(
            self.put_request(route, params, data=data)
        )

    async def patch(
        self, route: str, params: Params | None = None, *, data: bytes | None = None
    ) -> bytes:
        """PATCH a route and return the response body."""
        return await self._executor.execute_bytes(
            self.patch_request(route, params, data=data)
        )

    async def delete(self, route: str, params: Params | None = None) -> bytes:
        """DELETE a route and return the response body."""
        return await self._executor.execute_bytes(self.delete_request(route, params))

    # JSON helpers

    async def get_json(
        self,
        route: str,
        params: Params | None = None,
        *,
        model: type[BaseModel] | None = None,
    ) -> Any:
        """GET a route and decode the JSON body.

        Args:
            route: Route appended to the base URL.
            params: Query parameters.
            model: Optional pydantic model to validate the body into.

        Returns:
            Decoded JSON value, or a model instance when ``model`` is given.

        Raises:
            DecodingError: If the body is not valid JSON for ``model``.
        """
        return decode_json(await self.get(route, params), model)

    async def post_json(
        self,
        route: str,
        params: Params | None = None,
        *,
        data: bytes | None = None,
        model: type[BaseModel] | None = None,
    ) -> Any:
        """POST to a route and decode the JSON response, see get_json()."""
        return decode_json(await self.post(route, params, data=data), model)

    async def put_json(
        self,
        route: str,
        params: Params | None = None,
        *,
        data: bytes | None = None,
        model: type[BaseModel] | None = None,
    ) -> Any:
        """PUT to a route and decode the JSON response."""
        return decode_json(await self.put(route, params, data=data), model)

    async def patch_json(
        self,
        route: str,
        params: Params | None = None,
        *,
        data: bytes | None = None,
        model: type[BaseModel] | None = None,
    ) -> Any:
        """PATCH a route and decode the JSON response."""
        return decode_json(await self.patch(route, params, data=data), model)

    async def delete_json(
        self,
        route: str,
        params: Params | None = None,
        *,
        model: type[BaseModel] | None = None,
    ) -> Any:
        """DELETE a route and decode the JSON response."""
        return decode_json(await self.delete(route, params), model)

    # Upload

    def upload(
        self,
        route: str,
        params: Params | None = None,
        *,
        parts: Sequence[MultipartPart],
        method: HTTPMethod = HTTPMethod.POST,
    ) -> AsyncIterator[UploadEvent]:
        """Upload multipart parts, streaming progress.

        Args:
            route: Route appended to the base URL.
            params: Form fields sent before the parts.
            parts: Multipart parts.
            method: HTTP method (default POST).

        Returns:
            Async iterator of UploadProgress events ending in UploadComplete.
        """
        if method == HTTPMethod.GET:
            msg = "Uploads require a method with a body"
            raise ValueError(msg)
        request = self.request(method, route, params, multipart=parts)
        return self._executor.upload(request)


def decode_json(body: bytes, model: type[BaseModel] | None = None) -> Any:
    """Decode a response body as JSON, optionally into a pydantic model.

    Args:
        body: Response body.
        model: Optional model class.

    Returns:
        Decoded value.

    Raises:
        DecodingError: On invalid JSON or failed validation.
    """
    if model is not None:
        try:
            return model.model_validate_json(body)
        except ValidationError as e:
            msg = f"Response does not match {model.__name__}: {e}"
            raise DecodingError(msg) from e
    try:
        return json.loads(body)
    except ValueError as e:
        msg = f"Response is not valid JSON: {e}"
        raise DecodingError(msg) from e
