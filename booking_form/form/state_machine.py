"""
Finite state machine for the booking form's view state.

The form is either collecting a selection or showing a confirmation.
A failed submission stays in SELECTING so the customer can correct and
resubmit; only an explicit reset leaves CONFIRMED.

Usage:
    sm = FormStateMachine()
    sm.transition(FormTrigger.SUBMIT_SUCCEEDED)
    assert sm.current_state == FormState.CONFIRMED
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class FormState(str, Enum):
    """All possible view states of the form."""
    SELECTING = "selecting"
    CONFIRMED = "confirmed"


class FormTrigger(str, Enum):
    """Events that cause state transitions."""
    SUBMIT_SUCCEEDED = "submit_succeeded"
    SUBMIT_FAILED = "submit_failed"
    RESET = "reset"


@dataclass
class Transition:
    """A single valid state transition."""
    from_state: FormState
    to_state: FormState
    trigger: FormTrigger


@dataclass
class StateEntry:
    """Recorded history entry for a state visit."""
    state: FormState
    entered_at: datetime
    trigger: Optional[FormTrigger] = None


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current state."""


class FormStateMachine:
    """
    Deterministic state machine controlling the form's view.

    Every transition must be explicitly defined; anything else is rejected
    with a clear error listing what is allowed from the current state.
    """

    TRANSITIONS: list[Transition] = [
        Transition(FormState.SELECTING, FormState.CONFIRMED, FormTrigger.SUBMIT_SUCCEEDED),
        Transition(FormState.SELECTING, FormState.SELECTING, FormTrigger.SUBMIT_FAILED),
        # Clearing a half-filled form is allowed too.
        Transition(FormState.SELECTING, FormState.SELECTING, FormTrigger.RESET),
        Transition(FormState.CONFIRMED, FormState.SELECTING, FormTrigger.RESET),
    ]

    def __init__(self) -> None:
        self._current_state = FormState.SELECTING
        self._history: list[StateEntry] = [
            StateEntry(state=FormState.SELECTING, entered_at=datetime.now(timezone.utc))
        ]
        self._failure_count: int = 0

    @property
    def current_state(self) -> FormState:
        return self._current_state

    @property
    def failure_count(self) -> int:
        return self._failure_count

    def transition(self, trigger: FormTrigger) -> FormState:
        """
        Execute a state transition.

        Args:
            trigger: The event triggering the transition.

        Returns:
            The new form state.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        for t in self.TRANSITIONS:
            if t.from_state == self._current_state and t.trigger == trigger:
                old_state = self._current_state
                self._current_state = t.to_state

                self._history.append(StateEntry(
                    state=self._current_state,
                    entered_at=datetime.now(timezone.utc),
                    trigger=trigger,
                ))

                if trigger == FormTrigger.SUBMIT_FAILED:
                    self._failure_count += 1

                logger.debug(
                    "State transition: %s -> %s (trigger: %s)",
                    old_state.value, self._current_state.value, trigger.value,
                )
                return self._current_state

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_state.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def get_valid_triggers(self) -> list[FormTrigger]:
        """Return all triggers valid from the current state."""
        return [t.trigger for t in self.TRANSITIONS if t.from_state == self._current_state]

    def get_history(self) -> list[StateEntry]:
        """Return the full state transition history."""
        return list(self._history)

    def get_state_trace(self) -> list[str]:
        """Return ordered list of state names visited."""
        return [entry.state.value for entry in self._history]

    def is_confirmed(self) -> bool:
        return self._current_state == FormState.CONFIRMED
