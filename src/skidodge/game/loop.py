"""
Game loop for one SKIDODGE session.

Each tick: clear the canvas, move the player from the current key
intent, advance and spawn obstacles, draw, then evaluate collisions and
scoring. The next tick is requested only after the current one has
finished, so ticks never overlap.
"""

from typing import TYPE_CHECKING, Optional
import logging
import random

from skidodge.config.settings import GameSettings
from skidodge.core.events import Event, EventBus, EventType
from skidodge.core.scheduling import FrameScheduler, TextSink
from skidodge.core.state import State, StateMachine
from skidodge.game.grid import GridConfig, Position
from skidodge.game.obstacles import ObstacleField, check_spawn_rate
from skidodge.game.player import PlayerBody
from skidodge.game.scoring import CollisionScorer, GameState, Outcome, OutcomeKind
from skidodge.input.controller import InputController

if TYPE_CHECKING:
    from skidodge.graphics.surface import CanvasSurface

logger = logging.getLogger(__name__)

GLYPH_SCALE = 0.7  # glyph font size relative to the cell


def format_score(score: int) -> str:
    return f"Score: {score}"


def format_game_over(score: int) -> str:
    return f"Game over! Final score: {score}"


class GameLoop:
    """
    Owns one session: state, player, obstacles and scored waves.

    Collaborators are injected; a restart is a new GameLoop.

    Args:
        surface: Canvas to draw on
        input_controller: Source of the player's key intent
        scheduler: Frame pacing primitive
        score_sink: Display for the score line
        status_sink: Display for the status line
        settings: Game tunables, copied for the session
        rng: Random source for obstacle spawning
        event_bus: Optional bus notified of session events
    """

    def __init__(
        self,
        surface: "CanvasSurface",
        input_controller: InputController,
        scheduler: FrameScheduler,
        score_sink: TextSink,
        status_sink: TextSink,
        settings: Optional[GameSettings] = None,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.surface = surface
        self.input = input_controller
        self.scheduler = scheduler
        self.score_sink = score_sink
        self.status_sink = status_sink
        # Session-local copy of the tunables
        self.settings = (settings or GameSettings()).model_copy()
        self.event_bus = event_bus
        self._rng = rng or random.Random(self.settings.seed)

        self.state_machine = StateMachine()
        self.game_state = GameState()
        self.scored_groups: set[int] = set()
        self.player = PlayerBody(speed=self.settings.player_speed, friction=self.settings.friction)

        self.grid: Optional[GridConfig] = None
        self.obstacles: Optional[ObstacleField] = None
        self.scorer: Optional[CollisionScorer] = None

        self.frame_count = 0
        self._frame_handle: Optional[int] = None
        self._last_outcome: Optional[Outcome] = None

    @property
    def state(self) -> State:
        return self.state_machine.state

    @property
    def is_running(self) -> bool:
        return self.game_state.is_running

    @property
    def score(self) -> int:
        return self.game_state.score

    @property
    def last_outcome(self) -> Optional[Outcome]:
        return self._last_outcome

    def start(self) -> bool:
        """Set up the field and schedule the first tick.

        Returns:
            False if the session was already started or stopped

        Raises:
            InvalidConfiguration: If the grid or spawn rate is unusable
        """
        if not self.state_machine.can_transition(State.RUNNING):
            logger.warning(f"Cannot start session from {self.state.name}")
            return False

        check_spawn_rate(self.settings.spawn_rate)
        self.grid = GridConfig.from_canvas(
            self.surface.width, self.surface.height, self.settings.total_cols
        )
        self.obstacles = ObstacleField(self.grid, self.settings.obstacle_glyphs, rng=self._rng)
        self.scorer = CollisionScorer(self.grid, self.settings.collision_factor)

        self.player.place_at(
            Position(self.settings.start_row, self.settings.start_col), self.grid
        )
        # Key intent magnitude comes from the player body
        self.input.speed = self.player.speed
        self.obstacles.spawn_wave()

        self.game_state.is_running = True
        self.game_state.score = 0
        self.state_machine.transition(State.RUNNING)

        self.score_sink.set_text(format_score(0))
        self.status_sink.set_text("Dodge the obstacles!")
        self._emit(EventType.SESSION_STARTED, {
            "rows": self.grid.total_rows,
            "cols": self.grid.total_cols,
        })

        self._frame_handle = self.scheduler.request_frame(self.tick)
        logger.info(
            f"Session started on {self.grid.total_rows}x{self.grid.total_cols} grid"
        )
        return True

    def tick(self) -> Optional[Outcome]:
        """Run one frame. Does nothing once the session has stopped."""
        self._frame_handle = None
        if not self.game_state.is_running:
            return None

        self.frame_count += 1
        self.surface.clear()

        self.player.integrate(self.input.current_intent())
        self.player.clamp_to_bounds(self.grid)

        self.obstacles.advance(self.settings.obstacle_speed)
        self.obstacles.try_spawn_wave(self.settings.spawn_rate)

        self.render()

        outcome = self.scorer.evaluate(
            self.player, self.obstacles, self.scored_groups, self.game_state
        )
        self._last_outcome = outcome

        if outcome.scored_groups:
            self.score_sink.set_text(format_score(self.game_state.score))
            self._emit(EventType.SCORE_CHANGED, {"score": self.game_state.score})

        if outcome.kind == OutcomeKind.COLLIDED:
            self._halt()
            return outcome

        self._frame_handle = self.scheduler.request_frame(self.tick)
        return outcome

    def render(self) -> None:
        """Draw the grid (debug), obstacles and the player."""
        grid = self.grid
        font_size = max(1, int(grid.cell_dimension * GLYPH_SCALE))

        if self.settings.debug_grid:
            self.surface.draw_grid(grid)

        for obstacle in self.obstacles.all():
            cx, cy = grid.cell_center(obstacle.x, obstacle.y)
            self.surface.draw_glyph(obstacle.glyph, cx, cy, font_size)

        px, py = self.player.center(grid)
        self.surface.draw_glyph(self.settings.player_glyph, px, py, font_size)

    def stop(self) -> None:
        """Stop the session and drop any pending tick."""
        if self.state_machine.is_stopped:
            return

        self.game_state.is_running = False
        if self._frame_handle is not None:
            self.scheduler.cancel_frame(self._frame_handle)
            self._frame_handle = None

        self.state_machine.transition(State.STOPPED)
        self.status_sink.set_text("Stopped")
        logger.info(f"Session stopped with score {self.game_state.score}")

    def _halt(self) -> None:
        self.state_machine.transition(State.STOPPED)
        self.status_sink.set_text(format_game_over(self.game_state.score))
        self._emit(EventType.GAME_OVER, {"score": self.game_state.score})
        logger.info(
            f"Game over after {self.frame_count} frames, score {self.game_state.score}"
        )

    def _emit(self, event_type: EventType, data: dict) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(Event(event_type, data=data, source="game_loop"))
