"""multipart/form-data body construction."""

import uuid
from collections.abc import Sequence

from networking.codec.params import render_value
from networking.core.constants import CONTENT_TYPE_MULTIPART
from networking.core.models import MultipartPart, Params


CRLF = b"\r\n"


def make_boundary() -> str:
    """Create a boundary token unique to one request."""
    return f"Boundary-{str(uuid.uuid4()).upper()}"


def multipart_content_type(boundary: str) -> str:
    """Content-Type header value for a multipart body."""
    return f"{CONTENT_TYPE_MULTIPART}; boundary={boundary}"


def encode_multipart_body(
    params: Params,
    parts: Sequence[MultipartPart],
    boundary: str,
) -> bytes:
    """Build a multipart/form-data body.

    Params are emitted first as plain form fields, then each part in the
    given order, then the closing ``--boundary--`` marker.

    Args:
        params: Form fields.
        parts: File or data parts.
        boundary: Boundary token from make_boundary().

    Returns:
        Body bytes.

    Raises:
        EncodingError: If a value cannot be rendered or a file cannot be read.
    """
    body = bytearray()
    for key, value in params.items():
        body += _section_header(boundary, _disposition(key))
        body += CRLF
        body += render_value(value).encode("utf-8")
        body += CRLF

    for part in parts:
        body += _section_header(
            boundary,
            _disposition(part.name, part.effective_filename),
            f"Content-Type: {part.content_type}",
        )
        body += CRLF
        body += part.read_payload()
        body += CRLF

    body += f"--{boundary}--".encode()
    return bytes(body)


def _disposition(name: str, filename: str | None = None) -> str:
    line = f'Content-Disposition: form-data; name="{_quote(name)}"'
    if filename is not None:
        line += f'; filename="{_quote(filename)}"'
    return line


def _section_header(boundary: str, *lines: str) -> bytes:
    header = bytearray(f"--{boundary}".encode())
    header += CRLF
    for line in lines:
        header += line.encode("utf-8")
        header += CRLF
    return bytes(header)


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')
