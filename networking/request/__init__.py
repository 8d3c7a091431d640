"""Request construction: defaults snapshot, outgoing request, wire building."""

from networking.request.builder import (
    OutgoingRequest,
    build_request,
    build_wire_request,
    resolve_url,
)
from networking.request.settings import ConfigProvider, RequestSettings
from networking.request.state_machine import (
    RequestState,
    RequestStateMachine,
    RequestStateTransitionError,
)


__all__ = [
    # Builder
    "OutgoingRequest",
    "build_request",
    "build_wire_request",
    "resolve_url",
    # Settings
    "ConfigProvider",
    "RequestSettings",
    # State machine
    "RequestState",
    "RequestStateMachine",
    "RequestStateTransitionError",
]
