"""Game core for SKIDODGE: grid, player, obstacles, scoring and the loop."""

from skidodge.game.grid import GridConfig, Position
from skidodge.game.player import PlayerBody, Velocity
from skidodge.game.obstacles import Obstacle, ObstacleField, Travel
from skidodge.game.scoring import CollisionScorer, GameState, Outcome, OutcomeKind
from skidodge.game.loop import GameLoop

__all__ = [
    "GridConfig",
    "Position",
    "PlayerBody",
    "Velocity",
    "Obstacle",
    "ObstacleField",
    "Travel",
    "CollisionScorer",
    "GameState",
    "Outcome",
    "OutcomeKind",
    "GameLoop",
]
