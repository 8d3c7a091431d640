"""Parameter encoding for query strings and request bodies."""

import json
from collections.abc import Mapping, Sequence
from urllib.parse import quote

from networking.core.errors import EncodingError
from networking.core.models import Params, ParamValue


# RFC 3986 query characters minus general delimiters ":#[]@" and
# sub-delimiters "!$&'()*+,;=". quote() always keeps unreserved characters.
QUERY_VALUE_SAFE_CHARS = "/?"

ARRAY_KEY_SUFFIX = "[]"


def percent_encode(value: str) -> str:
    """Percent-encode a key or value with the restricted query character set.

    Args:
        value: Raw string.

    Returns:
        Encoded string.
    """
    return quote(value, safe=QUERY_VALUE_SAFE_CHARS)


def render_value(value: ParamValue) -> str:
    """Render a parameter value as its default string form.

    Args:
        value: Parameter value.

    Returns:
        String rendering used on the wire.

    Raises:
        EncodingError: If the value type cannot be rendered.
    """
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int | float):
        return str(value)
    if isinstance(value, Mapping):
        return _dump_json(value).decode("utf-8")
    if _is_sequence(value):
        return ",".join(render_value(item) for item in value)  # type: ignore[union-attr]
    msg = f"Unsupported parameter value of type {type(value).__name__}"
    raise EncodingError(msg)


def encode_pairs(params: Params) -> list[str]:
    """Encode params as ordered ``key=value`` pairs.

    A sequence value emits one ``key[]=item`` pair per item followed by a
    ``key=a,b`` pair carrying the combined rendering. Servers relying on
    either form keep working.

    Args:
        params: Parameters to encode.

    Returns:
        List of encoded pairs in emission order.
    """
    pairs: list[str] = []
    for key, value in params.items():
        encoded_key = percent_encode(key)
        if _is_sequence(value):
            pairs.extend(
                f"{encoded_key}{ARRAY_KEY_SUFFIX}={percent_encode(render_value(item))}"
                for item in value  # type: ignore[union-attr]
            )
        pairs.append(f"{encoded_key}={percent_encode(render_value(value))}")
    return pairs


def encode_query_string(params: Params) -> str:
    """Encode params into a URL query string (without the leading ``?``).

    Args:
        params: Parameters to encode.

    Returns:
        Query string.
    """
    return "&".join(encode_pairs(params))


def encode_form_body(params: Params) -> bytes:
    """Encode params as an application/x-www-form-urlencoded body.

    Args:
        params: Parameters to encode.

    Returns:
        UTF-8 body bytes.
    """
    return encode_query_string(params).encode("utf-8")


def encode_json_body(params: Params) -> bytes:
    """Encode params as a compact JSON object.

    Args:
        params: Parameters to encode.

    Returns:
        UTF-8 JSON bytes.

    Raises:
        EncodingError: If a value is not JSON-representable.
    """
    return _dump_json(params)


def append_query(url: str, query: str) -> str:
    """Append an encoded query string to a URL.

    Args:
        url: URL that may already carry a query.
        query: Encoded query string.

    Returns:
        URL with the query appended.
    """
    if not query:
        return url
    if "?" not in url:
        return f"{url}?{query}"
    if url.endswith(("?", "&")):
        return f"{url}{query}"
    return f"{url}&{query}"


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def _dump_json(value: object) -> bytes:
    try:
        text = json.dumps(
            _plain(value),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        msg = f"Parameters are not JSON-representable: {e}"
        raise EncodingError(msg) from e
    return text.encode("utf-8")


def _plain(value: object) -> object:
    """Convert arbitrary mappings/sequences into dict/list for json.dumps."""
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    if _is_sequence(value):
        return [_plain(item) for item in value]  # type: ignore[attr-defined]
    return value
