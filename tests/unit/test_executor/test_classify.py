"""Unit tests for response classification."""

from datetime import UTC, datetime, timedelta
from email.utils import format_datetime

from networking.core.models import TransportResponse
from networking.executor.classify import (
    classify_response,
    parse_json_payload,
    parse_retry_after,
)


class TestClassifyResponse:
    """Tests for classify_response."""

    def test_2xx_is_success(self) -> None:
        """Test that 2xx responses carry no error."""
        for status in (200, 201, 204, 299):
            outcome = classify_response(
                TransportResponse(status_code=status, url="https://api.test/")
            )

            assert outcome.is_success
            assert outcome.error is None

    def test_3xx_is_failure(self) -> None:
        """Test that unfollowed redirects are failures."""
        outcome = classify_response(
            TransportResponse(status_code=304, url="https://api.test/")
        )

        assert not outcome.is_success
        assert outcome.error is not None
        assert outcome.error.status_code == 304

    def test_nonstandard_status_is_failure(self) -> None:
        """Test that statuses outside 100-599 classify as HTTP failures."""
        outcome = classify_response(
            TransportResponse(status_code=999, url="https://api.test/", body=b"x")
        )

        assert not outcome.is_success
        assert outcome.status_code == 999
        assert outcome.error is not None
        assert outcome.error.status_code == 999

    def test_error_carries_payload_and_body(self) -> None:
        """Test that the error exposes the parsed body."""
        response = TransportResponse(
            status_code=400,
            url="https://api.test/",
            body=b'{"error":"bad"}',
        )

        outcome = classify_response(response)

        assert outcome.error is not None
        assert outcome.error.json_payload == {"error": "bad"}
        assert outcome.error.body == b'{"error":"bad"}'

    def test_retry_after_header_any_case(self) -> None:
        """Test Retry-After lookup ignores header case."""
        response = TransportResponse(
            status_code=429,
            url="https://api.test/",
            headers={"Retry-After": "7"},
        )

        outcome = classify_response(response)

        assert outcome.error is not None
        assert outcome.error.retry_after == 7


class TestParseJsonPayload:
    """Tests for parse_json_payload."""

    def test_empty_body(self) -> None:
        """Test that an empty body yields None."""
        assert parse_json_payload(b"") is None

    def test_non_json_body(self) -> None:
        """Test that a non-JSON body yields None."""
        assert parse_json_payload(b"Internal Server Error") is None

    def test_json_body(self) -> None:
        """Test that JSON bodies are parsed."""
        assert parse_json_payload(b"[1, 2]") == [1, 2]


class TestParseRetryAfter:
    """Tests for parse_retry_after."""

    def test_seconds(self) -> None:
        """Test numeric Retry-After values."""
        assert parse_retry_after("120") == 120

    def test_negative_clamped(self) -> None:
        """Test negative values clamp to zero."""
        assert parse_retry_after("-5") == 0

    def test_http_date(self) -> None:
        """Test HTTP-date Retry-After values."""
        future = datetime.now(UTC) + timedelta(seconds=90)

        seconds = parse_retry_after(format_datetime(future, usegmt=True))

        assert seconds is not None
        assert 80 <= seconds <= 90

    def test_missing_or_invalid(self) -> None:
        """Test unparseable values yield None."""
        assert parse_retry_after(None) is None
        assert parse_retry_after("") is None
        assert parse_retry_after("soon") is None
