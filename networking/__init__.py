"""HTTP client convenience layer.

Builds requests from route/parameter descriptions, executes them against
a transport, retries failures through a pluggable policy, and logs
traffic with sensitive-field redaction.
"""

from networking.client import ClientConfig, NetworkingClient
from networking.core import (
    BuildError,
    DecodingError,
    EncodingError,
    ErrorKind,
    HTTPMethod,
    HTTPStatusError,
    LogLevel,
    MultipartPart,
    NetworkingError,
    ParameterEncoding,
    Params,
    ResponseOutcome,
    RetryExhausted,
    TransportError,
    UploadComplete,
    UploadProgress,
    WireRequest,
)
from networking.executor import RequestExecutor
from networking.logger import RedactingLogger
from networking.request import OutgoingRequest, RequestSettings, build_wire_request
from networking.retry import (
    AsyncRetryPolicy,
    BackoffRetryPolicy,
    CallbackRetryPolicy,
    NoRetry,
    RetryPolicy,
)
from networking.settings import NetworkingSettings
from networking.transport import HttpxTransport, Transport


__all__ = [
    # Client
    "ClientConfig",
    "NetworkingClient",
    "NetworkingSettings",
    # Requests
    "OutgoingRequest",
    "RequestExecutor",
    "RequestSettings",
    "build_wire_request",
    # Models
    "HTTPMethod",
    "LogLevel",
    "MultipartPart",
    "ParameterEncoding",
    "Params",
    "ResponseOutcome",
    "UploadComplete",
    "UploadProgress",
    "WireRequest",
    # Errors
    "BuildError",
    "DecodingError",
    "EncodingError",
    "ErrorKind",
    "HTTPStatusError",
    "NetworkingError",
    "RetryExhausted",
    "TransportError",
    # Logging
    "RedactingLogger",
    # Retry
    "AsyncRetryPolicy",
    "BackoffRetryPolicy",
    "CallbackRetryPolicy",
    "NoRetry",
    "RetryPolicy",
    # Transport
    "HttpxTransport",
    "Transport",
]
