"""
Main game window using pygame.

Hosts the canvas, the score and status lines, keyboard input and the
frame pacing that drives the game loop.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from ..config.settings import DisplaySettings
from ..core.events import EventBus, EventType, Event, key_down_event, key_up_event
from ..core.scheduling import FrameQueue
from ..graphics.surface import CanvasSurface
from ..input.controller import Direction
from .displays import TextDisplay

logger = logging.getLogger(__name__)

KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_w: Direction.UP,
    pygame.K_s: Direction.DOWN,
    pygame.K_a: Direction.LEFT,
    pygame.K_d: Direction.RIGHT,
}


@dataclass
class WindowConfig:
    """Game window configuration."""
    canvas_width: int = 700
    canvas_height: int = 560
    margin: int = 60
    title: str = "SKIDODGE"
    fps: int = 60

    # Colors
    bg_color: tuple[int, int, int] = (20, 20, 30)
    canvas_color: tuple[int, int, int] = (245, 248, 252)
    text_color: tuple[int, int, int] = (200, 200, 220)

    @classmethod
    def from_settings(cls, display: DisplaySettings) -> "WindowConfig":
        return cls(
            canvas_width=display.canvas_width,
            canvas_height=display.canvas_height,
            margin=display.window_margin,
            title=display.title,
            fps=display.fps,
            bg_color=display.window_color,
            canvas_color=display.bg_color,
            text_color=display.text_color,
        )

    @property
    def width(self) -> int:
        return self.canvas_width + 40

    @property
    def height(self) -> int:
        return self.canvas_height + 2 * self.margin


class GameWindow:
    """
    Desktop window for the game.

    Keyboard Mapping:
        ARROWS / WASD: Move the skier
        R: New session
        G: Toggle debug grid
        ESC / Q: Exit
    """

    def __init__(
        self,
        config: WindowConfig | None = None,
        event_bus: EventBus | None = None
    ) -> None:
        self.config = config or WindowConfig()
        self.event_bus = event_bus or EventBus()
        self.scheduler = FrameQueue()

        self.score_display = TextDisplay("score", self.config.text_color)
        self.status_display = TextDisplay("status", self.config.text_color)

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._canvas: Optional[CanvasSurface] = None
        self._running = False

        logger.info("GameWindow created")

    @property
    def canvas(self) -> CanvasSurface:
        if self._canvas is None:
            raise RuntimeError("Window is not open")
        return self._canvas

    @property
    def canvas_position(self) -> tuple[int, int]:
        return (self.config.width - self.config.canvas_width) // 2, self.config.margin

    def open(self) -> None:
        """Initialize pygame, create the window and the canvas."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            pygame.DOUBLEBUF
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.Font(None, 28)

        self._canvas = CanvasSurface(
            pygame.display.get_surface(),
            self.config.canvas_width,
            self.config.canvas_height,
            bg_color=self.config.canvas_color,
        )

        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.KEYUP:
                self._handle_keyup(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key in KEY_DIRECTIONS:
            self.event_bus.emit(key_down_event(KEY_DIRECTIONS[key].value))
        elif key == pygame.K_ESCAPE or key == pygame.K_q:
            self._running = False
        elif key == pygame.K_r:
            self.event_bus.emit(Event(EventType.RESTART, source="keyboard"))
        elif key == pygame.K_g:
            self.event_bus.emit(Event(EventType.TOGGLE_GRID, source="keyboard"))

    def _handle_keyup(self, event: pygame.event.Event) -> None:
        """Handle key release."""
        if event.key in KEY_DIRECTIONS:
            self.event_bus.emit(key_up_event(KEY_DIRECTIONS[event.key].value))

    def _render(self) -> None:
        """Compose canvas and text lines onto the window."""
        self._screen.fill(self.config.bg_color)

        canvas_x, canvas_y = self.canvas_position
        self.canvas.present((canvas_x, canvas_y))

        score_surface = self.score_display.render(self._font)
        self._screen.blit(score_surface, (canvas_x, (canvas_y - score_surface.get_height()) // 2))

        status_surface = self.status_display.render(self._font)
        status_rect = status_surface.get_rect(
            center=(self.config.width // 2, canvas_y + self.config.canvas_height + self.config.margin // 2)
        )
        self._screen.blit(status_surface, status_rect)

        pygame.display.flip()

    async def run(self) -> None:
        """Main window loop."""
        if self._screen is None:
            self.open()
        self._running = True

        logger.info("Window loop started")

        while self._running:
            self._handle_events()

            # Frame callbacks requested during the previous frame
            self.scheduler.run_pending()

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.event_bus.emit(Event(EventType.SHUTDOWN, source="window"))
        self.scheduler.clear()
        pygame.quit()
        logger.info("Window closed")

    def stop(self) -> None:
        """Stop the window loop."""
        self._running = False
