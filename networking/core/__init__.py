"""Core types shared by every networking component."""

from networking.core.constants import (
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_HEADER,
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_MULTIPART,
    DEFAULT_MAX_RETRY_COUNT,
    FILTERED_VALUE,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
    HTTP_STATUS_TOO_MANY_REQUESTS,
)
from networking.core.errors import (
    BuildError,
    DecodingError,
    EncodingError,
    ErrorKind,
    HTTPStatusError,
    NetworkingError,
    RetryExhausted,
    TransportError,
)
from networking.core.models import (
    HTTPMethod,
    LogLevel,
    MultipartPart,
    ParameterEncoding,
    Params,
    ParamValue,
    ResponseOutcome,
    TransportResponse,
    UploadComplete,
    UploadEvent,
    UploadProgress,
    WireRequest,
)


__all__ = [
    # Constants
    "CONTENT_TYPE_FORM",
    "CONTENT_TYPE_HEADER",
    "CONTENT_TYPE_JSON",
    "CONTENT_TYPE_MULTIPART",
    "DEFAULT_MAX_RETRY_COUNT",
    "FILTERED_VALUE",
    "HTTP_STATUS_OK_MAX",
    "HTTP_STATUS_OK_MIN",
    "HTTP_STATUS_TOO_MANY_REQUESTS",
    # Errors
    "BuildError",
    "DecodingError",
    "EncodingError",
    "ErrorKind",
    "HTTPStatusError",
    "NetworkingError",
    "RetryExhausted",
    "TransportError",
    # Models
    "HTTPMethod",
    "LogLevel",
    "MultipartPart",
    "ParameterEncoding",
    "Params",
    "ParamValue",
    "ResponseOutcome",
    "TransportResponse",
    "UploadComplete",
    "UploadEvent",
    "UploadProgress",
    "WireRequest",
]
