"""Data models for the networking layer."""

from collections.abc import Mapping, Sequence
from enum import Enum
from pathlib import Path
from typing import Annotated, Self, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, model_validator

from networking.core.constants import (
    CONTENT_TYPE_OCTET_STREAM,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
)
from networking.core.errors import EncodingError, HTTPStatusError


Primitive: TypeAlias = str | int | float | bool
ParamValue: TypeAlias = (
    Primitive | Sequence[Primitive] | Mapping[str, "ParamValue"]
)
Params: TypeAlias = Mapping[str, ParamValue]


class HTTPMethod(str, Enum):
    """HTTP methods supported by the request builder."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class ParameterEncoding(str, Enum):
    """How params are encoded into non-GET request bodies."""

    URL_ENCODED = "url_encoded"
    JSON = "json"


class LogLevel(str, Enum):
    """Verbosity of request/response traffic logging.

    - OFF: Nothing is rendered
    - INFO: Request line, headers, body and response status
    - DEBUG: INFO plus curl reconstruction and response body
    """

    OFF = "off"
    INFO = "info"
    DEBUG = "debug"


class MultipartPart(BaseModel):
    """A named part of a multipart/form-data body.

    Exactly one of ``data`` (inline bytes) or ``path`` (file payload)
    must be provided.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Annotated[str, Field(min_length=1, description="Form field name")]
    data: bytes | None = Field(default=None, description="Inline payload")
    path: Path | None = Field(default=None, description="File payload")
    content_type: Annotated[str, Field(min_length=1)] = CONTENT_TYPE_OCTET_STREAM
    filename: str | None = Field(default=None, description="Filename sent to server")

    @model_validator(mode="after")
    def validate_payload(self) -> Self:
        """Ensure exactly one payload source is set."""
        if (self.data is None) == (self.path is None):
            msg = "Exactly one of 'data' or 'path' must be set"
            raise ValueError(msg)
        return self

    @property
    def effective_filename(self) -> str | None:
        """Filename to advertise, falling back to the file name of ``path``."""
        if self.filename is not None:
            return self.filename
        if self.path is not None:
            return self.path.name
        return None

    def read_payload(self) -> bytes:
        """Return the part payload.

        Returns:
            Payload bytes.

        Raises:
            EncodingError: If the file payload cannot be read.
        """
        if self.data is not None:
            return self.data
        try:
            return self.path.read_bytes()  # type: ignore[union-attr]
        except OSError as e:
            msg = f"Unable to read multipart file '{self.path}': {e}"
            raise EncodingError(msg) from e


class WireRequest(BaseModel):
    """Transport-ready request derived from an OutgoingRequest."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: HTTPMethod
    url: Annotated[str, Field(min_length=1, description="Absolute request URL")]
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes = Field(default=b"")
    timeout: float | None = Field(default=None, gt=0)

    @property
    def body_text(self) -> str:
        """Body decoded as UTF-8 with replacement characters."""
        return self.body.decode("utf-8", errors="replace")


class TransportResponse(BaseModel):
    """Raw response returned by a transport."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    status_code: int = Field(ge=100)
    url: Annotated[str, Field(min_length=1)]
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes = Field(default=b"")


class ResponseOutcome(BaseModel):
    """Classified result of one request attempt.

    A success carries the body and status code; a failure additionally
    carries the HTTPStatusError describing it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    status_code: int = Field(ge=100, description="HTTP status code")
    url: Annotated[str, Field(min_length=1)]
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes = Field(default=b"")
    error: HTTPStatusError | None = Field(
        default=None, description="Error details if the status was not 2xx"
    )

    @property
    def is_success(self) -> bool:
        """Check if the attempt was successful (2xx status, no error)."""
        return (
            self.error is None
            and HTTP_STATUS_OK_MIN <= self.status_code < HTTP_STATUS_OK_MAX
        )


class UploadProgress(BaseModel):
    """Progress tick reported while an upload body is being sent."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    bytes_sent: int = Field(ge=0)
    bytes_total: int = Field(ge=0)

    @property
    def fraction(self) -> float:
        """Completed fraction in [0, 1]; 1.0 for an empty body."""
        if self.bytes_total == 0:
            return 1.0
        return min(self.bytes_sent / self.bytes_total, 1.0)


class UploadComplete(BaseModel):
    """Terminal event of an upload stream."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    outcome: ResponseOutcome


UploadEvent: TypeAlias = UploadProgress | UploadComplete
