"""Parameter codec: query strings, form/JSON bodies and multipart bodies."""

from networking.codec.multipart import (
    encode_multipart_body,
    make_boundary,
    multipart_content_type,
)
from networking.codec.params import (
    append_query,
    encode_form_body,
    encode_json_body,
    encode_pairs,
    encode_query_string,
    percent_encode,
    render_value,
)


__all__ = [
    # Params
    "append_query",
    "encode_form_body",
    "encode_json_body",
    "encode_pairs",
    "encode_query_string",
    "percent_encode",
    "render_value",
    # Multipart
    "encode_multipart_body",
    "make_boundary",
    "multipart_content_type",
]
