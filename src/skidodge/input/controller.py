"""
Keyboard intent for the player.

Key-down / key-up events become a persistent velocity intent that the
game loop reads once per tick.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable
import logging

from skidodge.core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)


class Direction(Enum):
    """The four directional keys."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class Intent:
    """Directional velocity intent, each component is +-speed or 0."""

    dx: float = 0.0
    dy: float = 0.0


# direction -> (axis, sign)
_AXES: dict[Direction, tuple[str, int]] = {
    Direction.UP: ("dy", -1),
    Direction.DOWN: ("dy", 1),
    Direction.LEFT: ("dx", -1),
    Direction.RIGHT: ("dx", 1),
}

_OPPOSITE: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def _parse(key: Direction | str) -> Direction | None:
    if isinstance(key, Direction):
        return key
    # "ArrowLeft" and "left" both name the left key
    try:
        return Direction(str(key).lower().removeprefix("arrow"))
    except ValueError:
        return None


class InputController:
    """Turns held direction keys into an intent vector.

    The most recent key on an axis wins. Releasing a key only zeroes its
    axis when the opposing key is not still held; otherwise the axis
    falls back to the held direction.
    """

    def __init__(self, speed: float = 0.8) -> None:
        self.speed = speed
        self._held: set[Direction] = set()
        # axis -> -1, 0 or 1; scaled by speed when read
        self._signs: dict[str, int] = {"dx": 0, "dy": 0}

    def on_key_down(self, key: Direction | str) -> bool:
        """Handle a key press. Returns True if the key is directional."""
        direction = _parse(key)
        if direction is None:
            return False

        self._held.add(direction)
        axis, sign = _AXES[direction]
        self._signs[axis] = sign
        return True

    def on_key_up(self, key: Direction | str) -> bool:
        """Handle a key release. Returns True if the key is directional."""
        direction = _parse(key)
        if direction is None:
            return False

        self._held.discard(direction)
        axis, _ = _AXES[direction]
        opposite = _OPPOSITE[direction]
        if opposite in self._held:
            _, opposite_sign = _AXES[opposite]
            self._signs[axis] = opposite_sign
        else:
            self._signs[axis] = 0
        return True

    def current_intent(self) -> Intent:
        """Snapshot of the current intent."""
        return Intent(self._signs["dx"] * self.speed, self._signs["dy"] * self.speed)

    def is_held(self, key: Direction | str) -> bool:
        direction = _parse(key)
        return direction is not None and direction in self._held

    def reset(self) -> None:
        """Forget all held keys."""
        self._held.clear()
        self._signs = {"dx": 0, "dy": 0}

    def attach(self, event_bus: EventBus) -> Callable[[], None]:
        """Listen for KEY_DOWN / KEY_UP events on the bus.

        Returns:
            Function that detaches the controller
        """
        def on_down(event: Event) -> None:
            self.on_key_down(event.data.get("key", ""))

        def on_up(event: Event) -> None:
            self.on_key_up(event.data.get("key", ""))

        unsubscribers = [
            event_bus.subscribe(EventType.KEY_DOWN, on_down),
            event_bus.subscribe(EventType.KEY_UP, on_up),
        ]
        logger.debug("InputController attached to event bus")

        def detach() -> None:
            for unsubscribe in unsubscribers:
                unsubscribe()

        return detach
