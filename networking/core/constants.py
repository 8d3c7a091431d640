"""HTTP constants for the networking layer.

Centralizes all HTTP-related constants to avoid duplication across modules.
"""

# HTTP Status Code Ranges
HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 300
HTTP_STATUS_TOO_MANY_REQUESTS = 429
HTTP_STATUS_SERVER_ERROR_MIN = 500
HTTP_STATUS_SERVER_ERROR_MAX = 600

# Content types emitted by the wire builder
CONTENT_TYPE_HEADER = "Content-Type"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_MULTIPART = "multipart/form-data"
CONTENT_TYPE_OCTET_STREAM = "application/octet-stream"

# Retry defaults
DEFAULT_MAX_RETRY_COUNT = 3
MAX_RETRY_COUNT_LIMIT = 10

# Maximum retry delay cap for rate limiting (seconds)
MAX_RETRY_AFTER_SECONDS = 60

# Chunk size for streamed uploads
DEFAULT_CHUNK_SIZE = 8192

# Marker substituted for sensitive values in logs
FILTERED_VALUE = "[FILTERED]"
