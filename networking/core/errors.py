"""Error types for the networking layer."""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Classification of networking errors.

    - BUILD: URL could not be constructed from base URL and route
    - ENCODING: Parameters not representable in the chosen encoding
    - TRANSPORT: Network failure or timeout reported by the transport
    - HTTP_STATUS: Response status outside 2xx
    - RETRY_EXHAUSTED: Retry attempts ran out
    - DECODING: Successful response body could not be decoded
    """

    BUILD = "BUILD"
    ENCODING = "ENCODING"
    TRANSPORT = "TRANSPORT"
    HTTP_STATUS = "HTTP_STATUS"
    RETRY_EXHAUSTED = "RETRY_EXHAUSTED"
    DECODING = "DECODING"


class NetworkingError(Exception):
    """Base exception for networking errors.

    Provides structured error information for logging and for callers
    that branch on the error kind.
    """

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
        """
        super().__init__(message)
        self.message = message

    @property
    def retryable(self) -> bool:
        """Whether a retry policy may be consulted for this error."""
        return False

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "kind": self.kind.value,
            "message": self.message,
        }


class BuildError(NetworkingError):
    """Raised when the request URL cannot be constructed."""

    kind = ErrorKind.BUILD

    def __init__(self, url: str, reason: str | None = None) -> None:
        """Initialize the error.

        Args:
            url: The URL string that failed to parse.
            reason: Optional detail from the URL parser.
        """
        self.url = url
        message = f"Unable to build request URL '{url}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class EncodingError(NetworkingError):
    """Raised when parameters cannot be encoded."""

    kind = ErrorKind.ENCODING


class TransportError(NetworkingError):
    """Network-level failure reported by the transport.

    Attributes:
        cause: Underlying exception raised by the transport library.
        timed_out: Whether the failure was a timeout.
    """

    kind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        timed_out: bool = False,
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.timed_out = timed_out

    @property
    def retryable(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["timed_out"] = self.timed_out
        return result


class HTTPStatusError(NetworkingError):
    """Response status outside the 2xx range.

    Attributes:
        status_code: HTTP status code of the response.
        json_payload: Response body parsed as JSON, if it parsed.
        body: Raw response body.
        retry_after: Seconds from a Retry-After header, if present.
    """

    kind = ErrorKind.HTTP_STATUS

    def __init__(
        self,
        status_code: int,
        json_payload: Any = None,
        body: bytes = b"",
        retry_after: int | None = None,
    ) -> None:
        super().__init__(f"HTTP status {status_code}")
        self.status_code = status_code
        self.json_payload = json_payload
        self.body = body
        self.retry_after = retry_after

    @property
    def retryable(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["status_code"] = self.status_code
        result["json_payload"] = self.json_payload
        return result


class RetryExhausted(NetworkingError):
    """Raised when every retry attempt failed.

    Attributes:
        last_error: The failure of the final attempt.
        attempts: Total number of attempts made.
    """

    kind = ErrorKind.RETRY_EXHAUSTED

    def __init__(
        self,
        last_error: TransportError | HTTPStatusError,
        attempts: int,
    ) -> None:
        super().__init__(
            f"Request failed after {attempts} attempts: {last_error.message}"
        )
        self.last_error = last_error
        self.attempts = attempts

    @property
    def status_code(self) -> int | None:
        """Status code of the last failure, if it was an HTTP status error."""
        if isinstance(self.last_error, HTTPStatusError):
            return self.last_error.status_code
        return None

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["attempts"] = self.attempts
        result["last_error"] = self.last_error.to_dict()
        return result


class DecodingError(NetworkingError):
    """Raised when a successful response body cannot be decoded."""

    kind = ErrorKind.DECODING
