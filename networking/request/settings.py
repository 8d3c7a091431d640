"""Snapshot of client defaults carried by each request."""

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from networking.core.models import LogLevel, ParameterEncoding
from networking.retry.policy import RetryPolicy
from networking.transport.base import Transport


class RequestSettings(BaseModel):
    """Client defaults as they were when a request was built or refreshed."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    base_url: str = ""
    headers: dict[str, str] = Field(default_factory=dict)
    parameter_encoding: ParameterEncoding = ParameterEncoding.URL_ENCODED
    timeout: float | None = Field(default=None, gt=0)
    log_level: LogLevel = LogLevel.OFF
    filtered_keys: frozenset[str] = Field(default_factory=frozenset)
    transport: Transport | None = None


@runtime_checkable
class ConfigProvider(Protocol):
    """Source of live client defaults.

    Requests hold a provider reference instead of the client itself, so a
    request can re-read defaults on retry without owning its client.
    """

    def snapshot(self) -> RequestSettings:
        """Take a snapshot of the current defaults."""
        ...

    @property
    def retry_policy(self) -> RetryPolicy | None:
        """Currently configured retry policy."""
        ...
