"""Environment settings powered by Pydantic BaseSettings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from networking.core.constants import (
    DEFAULT_MAX_RETRY_COUNT,
    MAX_RETRY_COUNT_LIMIT,
)
from networking.core.models import LogLevel, ParameterEncoding


class NetworkingSettings(BaseSettings):
    """Client defaults read from ``NETWORKING_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="NETWORKING_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = ""
    timeout_seconds: float | None = Field(default=None, gt=0)
    log_level: LogLevel = LogLevel.OFF
    parameter_encoding: ParameterEncoding = ParameterEncoding.URL_ENCODED
    filtered_keys: str = Field(
        default="", description="Comma-separated header/body keys to redact"
    )
    max_retry_count: int = Field(
        default=DEFAULT_MAX_RETRY_COUNT, ge=0, le=MAX_RETRY_COUNT_LIMIT
    )
    follow_redirects: bool = True

    @property
    def filtered_key_set(self) -> frozenset[str]:
        """Parsed ``filtered_keys``."""
        return frozenset(
            key.strip() for key in self.filtered_keys.split(",") if key.strip()
        )


def get_settings() -> NetworkingSettings:
    """Get a settings instance."""
    return NetworkingSettings()
