"""Metrics collection for request execution."""

from dataclasses import dataclass, field
from typing import ClassVar

from networking.core.errors import ErrorKind


@dataclass
class RequestMetrics:
    """Metrics for HTTP request execution.

    Singleton class that tracks request counts by status, retries,
    failures by kind, byte totals and durations.
    """

    requests_total: dict[int, int] = field(default_factory=dict)
    retries_total: int = 0
    failures_total: dict[str, int] = field(default_factory=dict)
    bytes_sent_total: int = 0
    bytes_received_total: int = 0
    duration_ms_total: float = 0.0
    request_count: int = 0
    execution_count: int = 0

    _instance: ClassVar["RequestMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "RequestMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_request(
        self,
        status_code: int,
        bytes_sent: int,
        bytes_received: int,
    ) -> None:
        """Record a completed HTTP exchange.

        Args:
            status_code: HTTP status code.
            bytes_sent: Request body size.
            bytes_received: Response body size.
        """
        self.requests_total[status_code] = self.requests_total.get(status_code, 0) + 1
        self.bytes_sent_total += bytes_sent
        self.bytes_received_total += bytes_received
        self.request_count += 1

    def record_retry(self) -> None:
        """Record a retry attempt."""
        self.retries_total += 1

    def record_failure(self, kind: ErrorKind) -> None:
        """Record a terminal failure.

        Args:
            kind: Kind of the terminal error.
        """
        key = kind.value
        self.failures_total[key] = self.failures_total.get(key, 0) + 1

    def record_duration(self, duration_ms: float) -> None:
        """Record the duration of one execution, retries included.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self.duration_ms_total += duration_ms
        self.execution_count += 1

    def to_dict(self) -> dict[str, int | float | dict[str, int] | dict[int, int]]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "requests_total": dict(self.requests_total),
            "retries_total": self.retries_total,
            "failures_total": dict(self.failures_total),
            "bytes_sent_total": self.bytes_sent_total,
            "bytes_received_total": self.bytes_received_total,
            "duration_ms_total": self.duration_ms_total,
            "request_count": self.request_count,
            "execution_count": self.execution_count,
        }

    @property
    def avg_duration_ms(self) -> float:
        """Calculate average execution duration.

        Returns:
            Average duration in milliseconds.
        """
        if self.execution_count == 0:
            return 0.0
        return self.duration_ms_total / self.execution_count
