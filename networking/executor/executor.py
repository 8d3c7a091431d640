"""Request execution: build, send, classify, retry."""

import asyncio
import time
import uuid
from collections.abc import AsyncIterator

import structlog

from networking.core.errors import (
    HTTPStatusError,
    NetworkingError,
    RetryExhausted,
    TransportError,
)
from networking.core.models import (
    ResponseOutcome,
    UploadComplete,
    UploadEvent,
    UploadProgress,
    WireRequest,
)
from networking.executor.classify import classify_response
from networking.logger.redact import redact_url_credentials
from networking.logger.renderer import LogSink, RedactingLogger
from networking.observability.logging import (
    bind_request_context,
    clear_request_context,
)
from networking.observability.metrics import RequestMetrics
from networking.request.builder import OutgoingRequest, build_wire_request
from networking.request.settings import RequestSettings
from networking.request.state_machine import RequestState, RequestStateMachine
from networking.transport.base import ProgressCallback, Transport
from networking.transport.httpx_transport import HttpxTransport


logger = structlog.get_logger()


class RequestExecutor:
    """Executes OutgoingRequests against a transport.

    Each attempt runs request log -> send -> classify -> response log,
    then, on failure, consults the request's retry policy. The loop ends
    on success, when the policy declines, or when the request's retry
    budget is spent.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        sink: LogSink | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            transport: Default transport when a request carries none.
            sink: Destination for rendered traffic logs (default: structlog).
        """
        self._transport: Transport = transport or HttpxTransport()
        self._sink = sink
        self._metrics = RequestMetrics.get_instance()
        self._log = logger.bind(component="executor")

    async def execute(self, request: OutgoingRequest) -> ResponseOutcome:
        """Execute a request, retrying per its policy.

        Args:
            request: Request to execute. Must not be executed concurrently.

        Returns:
            The successful ResponseOutcome.

        Raises:
            BuildError: If the URL cannot be constructed.
            EncodingError: If params cannot be encoded.
            TransportError: On network failure when no retry happens.
            HTTPStatusError: On a non-2xx response when no retry happens.
            RetryExhausted: When every permitted retry failed.
        """
        request_id = uuid.uuid4().hex[:12]
        bind_request_context(request_id)
        machine = RequestStateMachine(request_id)
        log = self._log.bind(
            method=request.method.value,
            route=request.route,
        )
        start_time_ns = time.perf_counter_ns()
        remaining = request.max_retry_count
        attempts = 0

        try:
            wire = build_wire_request(request)
            while True:
                attempts += 1
                machine.transition_to(RequestState.SENDING)
                log.debug(
                    "request_attempt",
                    attempt=attempts,
                    remaining_retries=remaining,
                    url=redact_url_credentials(wire.url),
                )
                error: TransportError | HTTPStatusError
                try:
                    outcome = await self._send(wire, request.settings)
                except TransportError as e:
                    error = e
                else:
                    machine.transition_to(RequestState.CLASSIFYING)
                    if outcome.error is None:
                        machine.transition_to(RequestState.SUCCEEDED)
                        log.info(
                            "request_complete",
                            status_code=outcome.status_code,
                            attempts=attempts,
                            bytes=len(outcome.body),
                        )
                        return outcome
                    error = outcome.error

                policy = request.retry_policy
                if remaining < 1 or policy is None:
                    if remaining < 1 and attempts > 1:
                        raise RetryExhausted(error, attempts) from error
                    raise error

                signal = policy.decide(
                    wire,
                    error,
                    remaining,
                    retries_made=request.max_retry_count - remaining,
                )
                if signal is None:
                    raise error

                machine.transition_to(RequestState.RETRY_WAITING)
                log.info(
                    "retry_scheduled",
                    attempt=attempts,
                    remaining_retries=remaining,
                    error_kind=error.kind.value,
                )
                await signal
                request.refresh_settings()
                remaining -= 1
                self._metrics.record_retry()
                wire = build_wire_request(request)

        except Exception as e:
            if machine.can_transition_to(RequestState.FAILED):
                machine.transition_to(RequestState.FAILED)
            if isinstance(e, NetworkingError):
                self._metrics.record_failure(e.kind)
                log.warning(
                    "request_failed",
                    attempts=attempts,
                    error_kind=e.kind.value,
                    error=e.message,
                )
            raise

        finally:
            duration_ms = (time.perf_counter_ns() - start_time_ns) / 1_000_000
            self._metrics.record_duration(duration_ms)
            clear_request_context()

    async def execute_bytes(self, request: OutgoingRequest) -> bytes:
        """Execute a request and return the response body."""
        outcome = await self.execute(request)
        return outcome.body

    async def upload(self, request: OutgoingRequest) -> AsyncIterator[UploadEvent]:
        """Execute a request once, streaming upload progress.

        Yields UploadProgress events while the transport consumes the body,
        then a single UploadComplete. Failures are raised from the iterator;
        uploads are not retried. Closing the iterator early cancels the send.

        Args:
            request: Request to upload.

        Yields:
            UploadProgress ticks followed by UploadComplete.

        Raises:
            NetworkingError: On any terminal failure.
        """
        request_id = uuid.uuid4().hex[:12]
        bind_request_context(request_id)
        machine = RequestStateMachine(request_id)
        log = self._log.bind(
            method=request.method.value,
            route=request.route,
        )
        queue: asyncio.Queue[UploadProgress] = asyncio.Queue()

        def on_progress(bytes_sent: int, bytes_total: int) -> None:
            queue.put_nowait(
                UploadProgress(bytes_sent=bytes_sent, bytes_total=bytes_total)
            )

        try:
            wire = build_wire_request(request)
            machine.transition_to(RequestState.SENDING)
            send_task = asyncio.create_task(
                self._send(wire, request.settings, on_progress=on_progress)
            )
            getter: asyncio.Future[UploadProgress] | None = None
            try:
                while not send_task.done() or not queue.empty():
                    if not queue.empty():
                        yield queue.get_nowait()
                        continue
                    getter = asyncio.ensure_future(queue.get())
                    await asyncio.wait(
                        {send_task, getter},
                        return_when=asyncio.FIRST_COMPLETED,
                    )
                    if getter.done():
                        yield getter.result()
                    else:
                        getter.cancel()
                outcome = send_task.result()
            finally:
                if getter is not None and not getter.done():
                    getter.cancel()
                if not send_task.done():
                    send_task.cancel()
                    await asyncio.gather(send_task, return_exceptions=True)

            machine.transition_to(RequestState.CLASSIFYING)
            if outcome.error is not None:
                raise outcome.error
            machine.transition_to(RequestState.SUCCEEDED)
            log.info(
                "upload_complete",
                status_code=outcome.status_code,
                bytes_sent=len(wire.body),
            )
            yield UploadComplete(outcome=outcome)

        except Exception as e:
            if machine.can_transition_to(RequestState.FAILED):
                machine.transition_to(RequestState.FAILED)
            if isinstance(e, NetworkingError):
                self._metrics.record_failure(e.kind)
                log.warning(
                    "upload_failed", error_kind=e.kind.value, error=e.message
                )
            raise

        finally:
            clear_request_context()

    async def _send(
        self,
        wire: WireRequest,
        settings: RequestSettings,
        on_progress: ProgressCallback | None = None,
    ) -> ResponseOutcome:
        """Send one attempt and classify its response.

        Args:
            wire: Request to send.
            settings: Effective settings of the request.
            on_progress: Upload progress callback.

        Returns:
            Classified outcome.

        Raises:
            TransportError: On network failure or timeout.
        """
        traffic = RedactingLogger(
            log_level=settings.log_level,
            filtered_keys=settings.filtered_keys,
            sink=self._sink,
        )
        transport = settings.transport or self._transport

        traffic.log_request(wire)
        response = await transport.send(wire, on_progress=on_progress)
        outcome = classify_response(response)
        traffic.log_response(response.status_code, response.url, response.body)

        self._metrics.record_request(
            response.status_code,
            bytes_sent=len(wire.body),
            bytes_received=len(response.body),
        )
        return outcome
