"""Request execution pipeline with retry and upload progress."""

from networking.executor.classify import (
    classify_response,
    parse_json_payload,
    parse_retry_after,
)
from networking.executor.executor import RequestExecutor


__all__ = [
    "RequestExecutor",
    "classify_response",
    "parse_json_payload",
    "parse_retry_after",
]
