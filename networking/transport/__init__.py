"""Transport collaborator: protocol and httpx implementation."""

from networking.transport.base import ProgressCallback, Transport
from networking.transport.httpx_transport import HttpxTransport


__all__ = [
    "HttpxTransport",
    "ProgressCallback",
    "Transport",
]
