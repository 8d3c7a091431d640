"""Client facade holding shared request defaults."""

from networking.client.client import NetworkingClient, decode_json
from networking.client.config import ClientConfig


__all__ = [
    "ClientConfig",
    "NetworkingClient",
    "decode_json",
]
