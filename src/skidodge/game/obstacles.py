"""Obstacle waves travelling across the field."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence
import itertools
import logging
import random

from skidodge.core.errors import InvalidConfiguration
from skidodge.game.grid import GridConfig

logger = logging.getLogger(__name__)

DEFAULT_GLYPHS: tuple[str, ...] = ("🌲", "🪨", "⛄")
MAX_WAVE_SIZE = 4  # exclusive


def check_spawn_rate(spawn_rate: float) -> float:
    """Reject probabilities outside [0, 1]."""
    if not 0.0 <= spawn_rate <= 1.0:
        raise InvalidConfiguration(f"Spawn rate must be within [0, 1], got {spawn_rate}")
    return spawn_rate


class Travel(Enum):
    """Direction obstacles move in."""
    UP = -1    # spawn below the canvas, leave through the top
    DOWN = 1   # spawn above the canvas, leave through the bottom


@dataclass
class Obstacle:
    """One obstacle. Pixel y is authoritative, row is derived."""

    id: int
    row_group_id: int
    x: float
    y: float
    col: int
    row: int
    glyph: str


class ObstacleField:
    """Owns the live obstacles.

    Waves are spawned at the edge opposite the travel direction,
    advanced every tick and dropped once they leave the canvas.
    """

    def __init__(
        self,
        grid: GridConfig,
        glyphs: Sequence[str] = DEFAULT_GLYPHS,
        travel: Travel = Travel.UP,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not glyphs:
            raise InvalidConfiguration("At least one obstacle glyph is required")

        self.grid = grid
        self.glyphs = tuple(glyphs)
        self.travel = travel
        self._rng = rng or random.Random()
        self._obstacles: List[Obstacle] = []
        self._obstacle_ids = itertools.count(1)
        self._group_ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._obstacles)

    def all(self) -> Iterator[Obstacle]:
        """Iterate live obstacles, oldest wave first."""
        for obstacle in self._obstacles:
            yield obstacle

    def _spawn_y(self) -> float:
        if self.travel is Travel.UP:
            return float(self.grid.canvas_height)
        return -self.grid.cell_dimension

    def _is_gone(self, obstacle: Obstacle) -> bool:
        if self.travel is Travel.UP:
            return obstacle.y <= -self.grid.cell_dimension
        return obstacle.y >= self.grid.canvas_height

    def spawn_wave(self) -> List[Obstacle]:
        """Spawn a wave of 0-3 obstacles in distinct columns."""
        size = min(int(self._rng.random() * MAX_WAVE_SIZE), self.grid.total_cols)
        columns = self._rng.sample(range(self.grid.total_cols), size)
        group_id = next(self._group_ids)
        y = self._spawn_y()

        wave = []
        for col in columns:
            obstacle = Obstacle(
                id=next(self._obstacle_ids),
                row_group_id=group_id,
                x=col * self.grid.cell_dimension,
                y=y,
                col=col,
                row=int(y // self.grid.cell_dimension),
                glyph=self._rng.choice(self.glyphs),
            )
            wave.append(obstacle)

        self._obstacles.extend(wave)
        if wave:
            logger.debug(f"Spawned wave {group_id} in columns {sorted(columns)}")
        return wave

    def try_spawn_wave(self, spawn_rate: float) -> List[Obstacle]:
        """Spawn a wave with probability ``spawn_rate``.

        Raises:
            InvalidConfiguration: If the rate is outside [0, 1]
        """
        check_spawn_rate(spawn_rate)
        if self._rng.random() < spawn_rate:
            return self.spawn_wave()
        return []

    def advance(self, move_speed: float) -> int:
        """Move every obstacle along the travel direction.

        Returns:
            Number of obstacles removed past the far boundary
        """
        step = move_speed * self.travel.value
        for obstacle in self._obstacles:
            obstacle.y += step
            obstacle.row = int(obstacle.y // self.grid.cell_dimension)

        before = len(self._obstacles)
        self._obstacles = [o for o in self._obstacles if not self._is_gone(o)]
        return before - len(self._obstacles)

    def has_passed(self, obstacle: Obstacle, y: float) -> bool:
        """True once the obstacle is strictly beyond ``y`` in travel direction."""
        if self.travel is Travel.UP:
            return obstacle.y < y
        return obstacle.y > y
