"""Protocol interface for HTTP transports."""

from collections.abc import Callable
from typing import Protocol, TypeAlias, runtime_checkable

from networking.core.models import TransportResponse, WireRequest


ProgressCallback: TypeAlias = Callable[[int, int], None]


@runtime_checkable
class Transport(Protocol):
    """Protocol for the collaborator that puts requests on the wire.

    Any object implementing ``send`` with the matching signature can be
    used by the executor, which lets tests substitute a fake without
    touching the network.
    """

    async def send(
        self,
        request: WireRequest,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> TransportResponse:
        """Send a request and return the raw response.

        Args:
            request: Transport-ready request.
            on_progress: Optional callback receiving (bytes_sent, bytes_total)
                as the body is consumed. Providing it selects upload mode.

        Returns:
            Status code, headers and body of the response.

        Raises:
            TransportError: On network failure or timeout.
        """
        ...
