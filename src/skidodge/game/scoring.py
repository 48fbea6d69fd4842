"""Collision detection and wave scoring."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, List, Optional, Set
import logging
import math

from skidodge.game.grid import GridConfig
from skidodge.game.obstacles import Obstacle, ObstacleField
from skidodge.game.player import PlayerBody

logger = logging.getLogger(__name__)

COLLISION_FACTOR = 0.7


@dataclass
class GameState:
    """Per-session running flag and score."""

    is_running: bool = False
    score: int = 0


class OutcomeKind(Enum):
    NO_EVENT = auto()
    SCORED = auto()
    COLLIDED = auto()


@dataclass
class Outcome:
    """Result of one evaluation.

    Attributes:
        kind: What happened this tick
        obstacle: The obstacle hit (COLLIDED only)
        scored_groups: Wave ids credited this tick, in field order
    """

    kind: OutcomeKind = OutcomeKind.NO_EVENT
    obstacle: Optional[Obstacle] = None
    scored_groups: List[int] = field(default_factory=list)


class CollisionScorer:
    """Compares the player against the obstacle field once per tick."""

    def __init__(self, grid: GridConfig, collision_factor: float = COLLISION_FACTOR) -> None:
        self.grid = grid
        self.threshold = collision_factor * grid.cell_dimension

    def evaluate(
        self,
        player: PlayerBody,
        obstacle_field: ObstacleField,
        scored: Set[int],
        state: GameState,
        obstacles: Optional[Iterable[Obstacle]] = None,
    ) -> Outcome:
        """Check every obstacle in field order.

        The first obstacle within the collision threshold stops the game
        and ends the scan. Otherwise each wave that has passed the player
        is credited once.

        Args:
            player: The player body
            obstacle_field: Field supplying travel direction and, by default, obstacles
            scored: Wave ids already credited this session (mutated)
            state: Session state (mutated)
            obstacles: Override for the iteration order
        """
        px, py = player.center(self.grid)
        outcome = Outcome()

        for obstacle in (obstacle_field.all() if obstacles is None else obstacles):
            ox, oy = self.grid.cell_center(obstacle.x, obstacle.y)
            distance = math.hypot(ox - px, oy - py)

            if distance < self.threshold:
                state.is_running = False
                logger.info(
                    f"Collision with obstacle {obstacle.id} "
                    f"(wave {obstacle.row_group_id}) at distance {distance:.1f}"
                )
                return Outcome(
                    kind=OutcomeKind.COLLIDED,
                    obstacle=obstacle,
                    scored_groups=outcome.scored_groups,
                )

            if (
                state.is_running
                and obstacle.row_group_id not in scored
                and obstacle_field.has_passed(obstacle, player.y)
            ):
                scored.add(obstacle.row_group_id)
                state.score += 1
                outcome.kind = OutcomeKind.SCORED
                outcome.scored_groups.append(obstacle.row_group_id)
                logger.debug(f"Wave {obstacle.row_group_id} passed, score={state.score}")

        return outcome
