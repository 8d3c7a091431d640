"""Retry policies consulted by the executor after a failed attempt."""

import asyncio
import random
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Annotated, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from networking.core.constants import (
    HTTP_STATUS_SERVER_ERROR_MAX,
    HTTP_STATUS_SERVER_ERROR_MIN,
    HTTP_STATUS_TOO_MANY_REQUESTS,
    MAX_RETRY_AFTER_SECONDS,
)
from networking.core.errors import HTTPStatusError, TransportError
from networking.core.models import WireRequest


RetryableError: TypeAlias = TransportError | HTTPStatusError
RetrySignal: TypeAlias = Awaitable[object]
RetryCallback: TypeAlias = Callable[
    [WireRequest, RetryableError, int], RetrySignal | None
]
AsyncRetryCallback: TypeAlias = Callable[
    [WireRequest, RetryableError, int], Awaitable[object]
]


class RetryPolicy(ABC):
    """Decides whether and when a failed attempt is retried."""

    @abstractmethod
    def decide(
        self,
        request: WireRequest,
        error: RetryableError,
        remaining_attempts: int,
        *,
        retries_made: int = 0,
    ) -> RetrySignal | None:
        """Produce the retry decision for a failed attempt.

        Args:
            request: Wire request of the failed attempt.
            error: The failure.
            remaining_attempts: Retries still available (>= 1).
            retries_made: Retries already performed for this request.

        Returns:
            None to propagate the failure, or an awaitable signal. The
            retry proceeds once the signal completes; if awaiting it
            raises, that exception propagates instead of ``error``.
        """


class NoRetry(RetryPolicy):
    """Never retries."""

    def decide(
        self,
        request: WireRequest,  # noqa: ARG002
        error: RetryableError,  # noqa: ARG002
        remaining_attempts: int,  # noqa: ARG002
        *,
        retries_made: int = 0,  # noqa: ARG002
    ) -> RetrySignal | None:
        return None


class CallbackRetryPolicy(RetryPolicy):
    """Callback-style policy.

    The callback returns an awaitable signal to retry once it completes,
    or None to give up.
    """

    def __init__(self, callback: RetryCallback) -> None:
        self._callback = callback

    def decide(
        self,
        request: WireRequest,
        error: RetryableError,
        remaining_attempts: int,
        *,
        retries_made: int = 0,  # noqa: ARG002
    ) -> RetrySignal | None:
        return self._callback(request, error, remaining_attempts)


class AsyncRetryPolicy(RetryPolicy):
    """Async-style policy.

    The coroutine returning normally means "retry now"; raising means
    "do not retry, propagate this exception instead".
    """

    def __init__(self, callback: AsyncRetryCallback) -> None:
        self._callback = callback

    def decide(
        self,
        request: WireRequest,
        error: RetryableError,
        remaining_attempts: int,
        *,
        retries_made: int = 0,  # noqa: ARG002
    ) -> RetrySignal | None:
        return self._callback(request, error, remaining_attempts)


class BackoffRetryPolicy(BaseModel, RetryPolicy):
    """Exponential backoff for transient failures.

    Retries transport errors and, unless retry_on_statuses narrows it,
    429 and 5xx responses. Uses
    delay = base_delay_ms * (exponential_base ^ attempt), capped at
    max_delay_ms, plus jitter. A Retry-After value on a 429 takes
    precedence, capped at MAX_RETRY_AFTER_SECONDS.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_delay_ms: Annotated[int, Field(ge=0, le=60000)] = 1000
    max_delay_ms: Annotated[int, Field(ge=0, le=300000)] = 30000
    exponential_base: Annotated[float, Field(ge=1.0, le=5.0)] = 2.0
    jitter_factor: Annotated[float, Field(ge=0.0, le=1.0)] = 0.1
    retry_on_statuses: frozenset[int] | None = Field(
        default=None,
        description="Status codes to retry; None retries 429 and 5xx",
    )

    def should_retry(self, error: RetryableError) -> bool:
        """Determine if an error is transient.

        Args:
            error: The error that occurred.

        Returns:
            True if the request should be retried.
        """
        if isinstance(error, TransportError):
            return True
        status = error.status_code
        if self.retry_on_statuses is not None:
            return status in self.retry_on_statuses
        return status == HTTP_STATUS_TOO_MANY_REQUESTS or (
            HTTP_STATUS_SERVER_ERROR_MIN <= status < HTTP_STATUS_SERVER_ERROR_MAX
        )

    def get_delay_ms(self, attempt: int) -> int:
        """Calculate delay before the next retry attempt.

        Args:
            attempt: Retry number (0-indexed).

        Returns:
            Delay in milliseconds.
        """
        delay = self.base_delay_ms * (self.exponential_base**attempt)
        delay = min(delay, self.max_delay_ms)

        jitter = delay * self.jitter_factor * random.random()  # noqa: S311
        return int(delay + jitter)

    def delay_for(self, error: RetryableError, attempt: int) -> float:
        """Seconds to wait before retrying after ``error``."""
        if isinstance(error, HTTPStatusError) and error.retry_after:
            return float(min(error.retry_after, MAX_RETRY_AFTER_SECONDS))
        return self.get_delay_ms(attempt) / 1000.0

    def decide(
        self,
        request: WireRequest,  # noqa: ARG002
        error: RetryableError,
        remaining_attempts: int,  # noqa: ARG002
        *,
        retries_made: int = 0,
    ) -> RetrySignal | None:
        if not self.should_retry(error):
            return None
        return asyncio.sleep(self.delay_for(error, retries_made))
