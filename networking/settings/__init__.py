"""Environment-driven settings."""

from networking.settings.app import NetworkingSettings, get_settings


__all__ = [
    "NetworkingSettings",
    "get_settings",
]
