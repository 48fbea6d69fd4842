"""
State machine for a SKIDODGE game session.

States:
    IDLE: Session constructed, not yet started
    RUNNING: Frames are being ticked
    STOPPED: Collision or explicit stop (terminal)
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class State(Enum):
    """Session states."""
    IDLE = auto()
    RUNNING = auto()
    STOPPED = auto()


Listener = Callable[[State, State], None]


class StateMachine:
    """
    Tracks the lifecycle of one game session.

    STOPPED is terminal: a fresh session is a fresh state machine.
    """

    # Valid state transitions
    VALID_TRANSITIONS: list[tuple[State, State]] = [
        (State.IDLE, State.RUNNING),
        (State.IDLE, State.STOPPED),  # Stopped before the first frame
        (State.RUNNING, State.STOPPED),
    ]

    def __init__(self, initial_state: State = State.IDLE) -> None:
        self._state = initial_state
        self._listeners: list[Listener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> State:
        """Get current state."""
        return self._state

    def can_transition(self, to_state: State) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: State) -> bool:
        """
        Attempt to transition to a new state.

        Args:
            to_state: Target state

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state
        logger.info(f"State transition: {old_state.name} -> {to_state.name}")

        for listener in self._listeners:
            listener(old_state, to_state)

        return True

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """
        Add a state change listener.

        Returns:
            Function to remove the listener
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    @property
    def is_running(self) -> bool:
        return self._state == State.RUNNING

    @property
    def is_stopped(self) -> bool:
        return self._state == State.STOPPED
