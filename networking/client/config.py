"""Configuration model for the networking client."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from networking.core.constants import (
    DEFAULT_MAX_RETRY_COUNT,
    MAX_RETRY_COUNT_LIMIT,
)
from networking.core.models import LogLevel, ParameterEncoding
from networking.request.settings import RequestSettings
from networking.retry.policy import RetryPolicy
from networking.transport.base import Transport


class ClientConfig(BaseModel):
    """Shared defaults of a NetworkingClient.

    Fields may be reassigned at any time; requests only see the values
    present when they were built or refreshed on retry.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    base_url: str = ""
    headers: dict[str, str] = Field(default_factory=dict)
    parameter_encoding: ParameterEncoding = ParameterEncoding.URL_ENCODED
    timeout: Annotated[float, Field(gt=0, le=3600)] | None = None
    log_level: LogLevel = LogLevel.OFF
    filtered_keys: set[str] = Field(default_factory=set)
    retry_policy: RetryPolicy | None = None
    transport: Transport | None = None
    max_retry_count: Annotated[int, Field(ge=0, le=MAX_RETRY_COUNT_LIMIT)] = (
        DEFAULT_MAX_RETRY_COUNT
    )

    def snapshot(self) -> RequestSettings:
        """Copy the per-request defaults into an immutable snapshot.

        Returns:
            RequestSettings reflecting the current field values.
        """
        return RequestSettings(
            base_url=self.base_url,
            headers=dict(self.headers),
            parameter_encoding=self.parameter_encoding,
            timeout=self.timeout,
            log_level=self.log_level,
            filtered_keys=frozenset(self.filtered_keys),
            transport=self.transport,
        )
