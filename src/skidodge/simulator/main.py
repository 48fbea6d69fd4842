"""
Desktop game - wires the window, input and game sessions together.
"""

import logging
import random
from typing import Optional

from ..config.settings import Settings
from ..core.events import EventBus, Event, EventType
from ..game.loop import GameLoop
from ..input.controller import InputController
from .window import GameWindow, WindowConfig

logger = logging.getLogger(__name__)


class SkidodgeSimulator:
    """Main application: one window, one input controller, many sessions."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.event_bus = EventBus()

        self.window = GameWindow(
            config=WindowConfig.from_settings(settings.display),
            event_bus=self.event_bus,
        )
        self.input = InputController(speed=settings.game.player_speed)
        self.input.attach(self.event_bus)

        # One random stream across sessions so a seed reproduces a whole run
        self._rng = random.Random(settings.game.seed)
        self.session: Optional[GameLoop] = None

        self.event_bus.subscribe(EventType.RESTART, self._on_restart)
        self.event_bus.subscribe(EventType.TOGGLE_GRID, self._on_toggle_grid)
        self.event_bus.subscribe(EventType.GAME_OVER, self._on_game_over)
        self.event_bus.subscribe(EventType.SHUTDOWN, self._on_shutdown)

        logger.info("SkidodgeSimulator initialized")

    def new_session(self) -> GameLoop:
        """Stop the current session (if any) and start a fresh one."""
        if self.session is not None:
            self.session.stop()

        self.input.reset()
        self.session = GameLoop(
            surface=self.window.canvas,
            input_controller=self.input,
            scheduler=self.window.scheduler,
            score_sink=self.window.score_display,
            status_sink=self.window.status_display,
            settings=self.settings.game,
            rng=self._rng,
            event_bus=self.event_bus,
        )
        self.session.start()
        return self.session

    def _on_restart(self, event: Event) -> None:
        logger.info("Restart requested")
        self.new_session()

    def _on_toggle_grid(self, event: Event) -> None:
        """Flip the debug grid; the running session keeps its own settings."""
        game = self.settings.game
        game.debug_grid = not game.debug_grid
        logger.info(f"Debug grid: {game.debug_grid} (from next session)")

    def _on_game_over(self, event: Event) -> None:
        logger.info(f"Final score: {event.data.get('score', 0)} - press R to play again")

    def _on_shutdown(self, event: Event) -> None:
        if self.session is not None:
            self.session.stop()
        logger.info("SkidodgeSimulator shut down")

    async def run(self) -> None:
        """Open the window, start the first session and run until closed."""
        logger.info("Starting SKIDODGE...")
        self.window.open()
        self.new_session()
        await self.window.run()
