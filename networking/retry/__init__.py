"""Retry policies: no retry, callback, async callback and exponential backoff."""

from networking.retry.policy import (
    AsyncRetryCallback,
    AsyncRetryPolicy,
    BackoffRetryPolicy,
    CallbackRetryPolicy,
    NoRetry,
    RetryableError,
    RetryCallback,
    RetryPolicy,
    RetrySignal,
)


__all__ = [
    "AsyncRetryCallback",
    "AsyncRetryPolicy",
    "BackoffRetryPolicy",
    "CallbackRetryPolicy",
    "NoRetry",
    "RetryableError",
    "RetryCallback",
    "RetryPolicy",
    "RetrySignal",
]
