"""Unit tests for the request execution state machine."""

import pytest

from networking.request.state_machine import (
    RequestState,
    RequestStateMachine,
    RequestStateTransitionError,
)


class TestRequestStateMachine:
    """Tests for RequestStateMachine."""

    def test_initial_state(self) -> None:
        """Test that execution starts in BUILDING."""
        machine = RequestStateMachine("req-1")

        assert machine.state == RequestState.BUILDING
        assert not machine.is_terminal

    def test_success_path(self) -> None:
        """Test BUILDING -> SENDING -> CLASSIFYING -> SUCCEEDED."""
        machine = RequestStateMachine("req-1")

        machine.transition_to(RequestState.SENDING)
        machine.transition_to(RequestState.CLASSIFYING)
        machine.transition_to(RequestState.SUCCEEDED)

        assert machine.is_terminal
        assert machine.history == [
            RequestState.BUILDING,
            RequestState.SENDING,
            RequestState.CLASSIFYING,
            RequestState.SUCCEEDED,
        ]

    def test_retry_loop(self) -> None:
        """Test that a retry returns to SENDING."""
        machine = RequestStateMachine("req-1")

        machine.transition_to(RequestState.SENDING)
        machine.transition_to(RequestState.CLASSIFYING)
        machine.transition_to(RequestState.RETRY_WAITING)
        machine.transition_to(RequestState.SENDING)

        assert machine.state == RequestState.SENDING

    def test_transport_failure_skips_classifying(self) -> None:
        """Test SENDING -> RETRY_WAITING and SENDING -> FAILED."""
        machine = RequestStateMachine("req-1", RequestState.SENDING)

        assert machine.can_transition_to(RequestState.RETRY_WAITING)
        assert machine.can_transition_to(RequestState.FAILED)

    def test_build_failure(self) -> None:
        """Test BUILDING -> FAILED."""
        machine = RequestStateMachine("req-1")

        machine.transition_to(RequestState.FAILED)

        assert machine.is_terminal

    def test_illegal_transition_raises(self) -> None:
        """Test that skipping SENDING is rejected."""
        machine = RequestStateMachine("req-1")

        with pytest.raises(RequestStateTransitionError) as exc_info:
            machine.transition_to(RequestState.SUCCEEDED)

        assert exc_info.value.from_state == RequestState.BUILDING
        assert exc_info.value.to_state == RequestState.SUCCEEDED
        assert machine.state == RequestState.BUILDING

    @pytest.mark.parametrize("terminal", [RequestState.SUCCEEDED, RequestState.FAILED])
    def test_terminal_states_have_no_exits(self, terminal: RequestState) -> None:
        """Test that nothing follows a terminal state."""
        machine = RequestStateMachine("req-1", terminal)

        for state in RequestState:
            assert not machine.can_transition_to(state)
