"""State machine for a single request execution."""

from enum import Enum

import structlog


logger = structlog.get_logger()


class RequestState(str, Enum):
    """State of a request during execution.

    - BUILDING: Deriving the wire request
    - SENDING: Transport call in progress
    - CLASSIFYING: Mapping the response to success or failure
    - RETRY_WAITING: Waiting for the retry policy's signal
    - SUCCEEDED: Completed with a 2xx response
    - FAILED: Completed with a terminal error
    """

    BUILDING = "BUILDING"
    SENDING = "SENDING"
    CLASSIFYING = "CLASSIFYING"
    RETRY_WAITING = "RETRY_WAITING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


# Valid state transitions
_VALID_TRANSITIONS: dict[RequestState, set[RequestState]] = {
    RequestState.BUILDING: {RequestState.SENDING, RequestState.FAILED},
    # Transport errors skip classification
    RequestState.SENDING: {
        RequestState.CLASSIFYING,
        RequestState.RETRY_WAITING,
        RequestState.FAILED,
    },
    RequestState.CLASSIFYING: {
        RequestState.SUCCEEDED,
        RequestState.RETRY_WAITING,
        RequestState.FAILED,
    },
    # The wire request is rebuilt from refreshed settings on the way back to SENDING
    RequestState.RETRY_WAITING: {RequestState.SENDING, RequestState.FAILED},
    RequestState.SUCCEEDED: set(),  # Terminal state
    RequestState.FAILED: set(),  # Terminal state
}


class RequestStateTransitionError(Exception):
    """Raised when an illegal state transition is attempted."""

    def __init__(
        self,
        request_id: str,
        from_state: RequestState,
        to_state: RequestState,
    ) -> None:
        """Initialize the transition error.

        Args:
            request_id: Identifier of the request execution.
            from_state: Current state.
            to_state: Attempted target state.
        """
        self.request_id = request_id
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Illegal state transition for request '{request_id}': "
            f"{from_state.value} -> {to_state.value}"
        )


class RequestStateMachine:
    """Manages state transitions for one request execution.

    Enforces valid transitions and logs all state changes.
    """

    def __init__(
        self,
        request_id: str,
        initial_state: RequestState = RequestState.BUILDING,
    ) -> None:
        """Initialize the state machine.

        Args:
            request_id: Identifier for the request execution.
            initial_state: Starting state.
        """
        self._request_id = request_id
        self._state = initial_state
        self._history: list[RequestState] = [initial_state]
        self._log = logger.bind(component="executor", request_id=request_id)

    @property
    def state(self) -> RequestState:
        """Get the current state."""
        return self._state

    @property
    def history(self) -> list[RequestState]:
        """States visited so far, in order."""
        return list(self._history)

    @property
    def is_terminal(self) -> bool:
        """Check if current state is terminal."""
        return self._state in (RequestState.SUCCEEDED, RequestState.FAILED)

    def can_transition_to(self, target: RequestState) -> bool:
        """Check if a transition to the target state is valid.

        Args:
            target: The target state.

        Returns:
            True if the transition is valid.
        """
        return target in _VALID_TRANSITIONS.get(self._state, set())

    def transition_to(self, target: RequestState) -> None:
        """Transition to a new state.

        Args:
            target: The target state.

        Raises:
            RequestStateTransitionError: If the transition is invalid.
        """
        if not self.can_transition_to(target):
            self._log.error(
                "illegal_state_transition",
                from_state=self._state.value,
                to_state=target.value,
            )
            raise RequestStateTransitionError(
                request_id=self._request_id,
                from_state=self._state,
                to_state=target,
            )

        old_state = self._state
        self._state = target
        self._history.append(target)

        self._log.debug(
            "state_transition",
            from_state=old_state.value,
            to_state=target.value,
        )
