"""
Trial lifecycle state machine.

    IDLE --start--> RECORDING --stop / auto-stop--> COMPLETED --start--> RECORDING
      ^                                                                    |
      +-------------------------------- reset -----------------------------+

`transition` is a pure function of (state, command). It decides whether the
command is accepted, the next state, and which events the controller must
emit. The controller supplies the event payloads.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple


class TrialState(Enum):
    """
    Possible states of the trial controller.
    """

    IDLE = "idle"
    """No trial has run since the last reset."""

    RECORDING = "recording"
    """A trial is running and frames are accepted."""

    COMPLETED = "completed"
    """The last trial finished and its result was emitted."""

    def __str__(self) -> str:
        return self.value


class Command(Enum):
    """
    Commands understood by the state machine.
    """

    START = "start"
    STOP = "stop"
    AUTO_STOP = "auto_stop"
    RESET = "reset"


class EventType(Enum):
    """
    Events emitted to listeners of the controller and the session.
    """

    INITIALIZED = "initialized"
    TRIAL_STARTED = "trial_started"
    TAP_DETECTED = "tap_detected"
    TRIAL_COMPLETED = "trial_completed"
    HAND_FOUND = "hand_found"
    HAND_LOST = "hand_lost"
    ERROR = "error"


@dataclass(frozen=True)
class TrialEvent:
    """
    An event emitted by the controller.
    """

    type: EventType
    payload: Any = None
    """TapEvent, TrialResult, a dict with the hand label, or an error message, depending on `type`."""


@dataclass(frozen=True)
class Transition:
    """
    The outcome of applying a command to a state.
    """

    state: TrialState
    """The state after the command."""

    accepted: bool
    """Whether the command was valid in the previous state."""

    emitted: Tuple[EventType, ...] = ()
    """Events the controller must emit, in order."""

    error: Optional[str] = None
    """Why the command was rejected."""


ALREADY_RECORDING = "Trial already in progress."
NOT_RECORDING = "No trial in progress"


def transition(state: TrialState, command: Command) -> Transition:
    """
    Apply `command` to `state`.
    A rejected command leaves the state unchanged and emits nothing.
    """

    if command == Command.START:
        if state == TrialState.RECORDING:
            return Transition(state, False, error=ALREADY_RECORDING)
        return Transition(TrialState.RECORDING, True, (EventType.TRIAL_STARTED,))

    if command in (Command.STOP, Command.AUTO_STOP):
        if state != TrialState.RECORDING:
            return Transition(state, False, error=NOT_RECORDING)
        return Transition(TrialState.COMPLETED, True, (EventType.TRIAL_COMPLETED,))

    if command == Command.RESET:
        return Transition(TrialState.IDLE, True)

    raise ValueError(f"Unknown command: {command}")


def accepts_frames(state: TrialState) -> bool:
    """
    Whether frames feed the trial signal in this state.
    """
    return state == TrialState.RECORDING
