"""Player body with friction-based motion."""

from dataclasses import dataclass
import logging

from skidodge.game.grid import GridConfig, Position
from skidodge.input.controller import Intent

logger = logging.getLogger(__name__)

FRICTION = 0.9


@dataclass
class Velocity:
    """Pixel position and per-tick delta of the player."""

    x: float = 0.0
    y: float = 0.0
    dx: float = 0.0
    dy: float = 0.0
    speed: float = 0.8  # magnitude applied on directional key-down


class PlayerBody:
    """The skier.

    Motion is continuous: key intent accumulates into the delta and
    friction decays it every tick, so the skier glides to a stop.
    """

    def __init__(self, speed: float = 0.8, friction: float = FRICTION) -> None:
        self.velocity = Velocity(speed=speed)
        self.friction = friction

    @property
    def x(self) -> float:
        return self.velocity.x

    @property
    def y(self) -> float:
        return self.velocity.y

    @property
    def speed(self) -> float:
        return self.velocity.speed

    def place_at(self, position: Position, grid: GridConfig) -> None:
        """Put the player at rest on a grid cell, clamped to the field."""
        row = max(0, min(position.row, grid.total_rows - 1))
        col = max(0, min(position.col, grid.total_cols - 1))
        self.velocity.x, self.velocity.y = grid.cell_origin(Position(row, col))
        self.velocity.dx = 0.0
        self.velocity.dy = 0.0
        logger.debug(f"Player placed at row={row} col={col}")

    def integrate(self, intent: Intent) -> None:
        """Advance one tick: accumulate intent, move, then apply friction."""
        v = self.velocity
        v.dx += intent.dx
        v.dy += intent.dy

        v.x += v.dx
        v.y += v.dy

        v.dx *= self.friction
        v.dy *= self.friction

    def clamp_to_bounds(self, grid: GridConfig) -> None:
        """Keep the player inside the playable rectangle.

        Hitting a wall also kills the delta on that axis.
        """
        v = self.velocity
        if v.x < 0:
            v.x = 0.0
            v.dx = 0.0
        elif v.x > grid.max_x:
            v.x = grid.max_x
            v.dx = 0.0

        if v.y < 0:
            v.y = 0.0
            v.dy = 0.0
        elif v.y > grid.max_y:
            v.y = grid.max_y
            v.dy = 0.0

    def grid_position(self, grid: GridConfig) -> Position:
        return grid.to_position(self.velocity.x, self.velocity.y)

    def center(self, grid: GridConfig) -> tuple[float, float]:
        return grid.cell_center(self.velocity.x, self.velocity.y)
