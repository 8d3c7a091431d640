"""Unit tests for request metrics."""

from collections.abc import Generator

import pytest

from networking.core.errors import ErrorKind
from networking.observability.metrics import RequestMetrics


@pytest.fixture(autouse=True)
def reset_metrics() -> Generator[None, None, None]:
    """Reset metrics singleton before and after each test."""
    RequestMetrics.reset()
    yield
    RequestMetrics.reset()


class TestRequestMetrics:
    """Tests for RequestMetrics."""

    def test_singleton(self) -> None:
        """Test that get_instance returns the same object until reset."""
        first = RequestMetrics.get_instance()

        assert RequestMetrics.get_instance() is first
        RequestMetrics.reset()
        assert RequestMetrics.get_instance() is not first

    def test_record_request(self) -> None:
        """Test exchange counters."""
        metrics = RequestMetrics.get_instance()

        metrics.record_request(200, bytes_sent=10, bytes_received=100)
        metrics.record_request(200, bytes_sent=0, bytes_received=5)
        metrics.record_request(503, bytes_sent=3, bytes_received=0)

        assert metrics.requests_total == {200: 2, 503: 1}
        assert metrics.bytes_sent_total == 13
        assert metrics.bytes_received_total == 105
        assert metrics.request_count == 3

    def test_failures_by_kind(self) -> None:
        """Test failure counters keyed by error kind."""
        metrics = RequestMetrics.get_instance()

        metrics.record_failure(ErrorKind.TRANSPORT)
        metrics.record_failure(ErrorKind.TRANSPORT)
        metrics.record_failure(ErrorKind.RETRY_EXHAUSTED)

        assert metrics.failures_total == {"TRANSPORT": 2, "RETRY_EXHAUSTED": 1}

    def test_average_duration(self) -> None:
        """Test average duration over executions."""
        metrics = RequestMetrics.get_instance()
        assert metrics.avg_duration_ms == 0.0

        metrics.record_request(200, bytes_sent=0, bytes_received=0)
        metrics.record_request(200, bytes_sent=0, bytes_received=0)
        metrics.record_duration(30.0)
        metrics.record_duration(10.0)

        assert metrics.avg_duration_ms == 20.0

    def test_to_dict(self) -> None:
        """Test serialization."""
        metrics = RequestMetrics.get_instance()
        metrics.record_retry()

        result = metrics.to_dict()

        assert result["retries_total"] == 1
        assert result["requests_total"] == {}
        assert set(result) == {
            "requests_total",
            "retries_total",
            "failures_total",
            "bytes_sent_total",
            "bytes_received_total",
            "duration_ms_total",
            "request_count",
            "execution_count",
        }

    def test_average_counts_executions_not_attempts(self) -> None:
        """Test that retried attempts do not dilute the execution average."""
        metrics = RequestMetrics.get_instance()

        for _ in range(3):
            metrics.record_request(500, bytes_sent=0, bytes_received=0)
        metrics.record_duration(90.0)

        assert metrics.request_count == 3
        assert metrics.execution_count == 1
        assert metrics.avg_duration_ms == 90.0

    def test_average_without_exchanges(self) -> None:
        """Test that an execution with no response still has a duration."""
        metrics = RequestMetrics.get_instance()

        metrics.record_duration(12.5)

        assert metrics.request_count == 0
        assert metrics.avg_duration_ms == 12.5
