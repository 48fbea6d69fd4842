"""
Drawing surface for the game canvas.

The canvas is an offscreen pygame surface that is presented onto the
host window each frame.
"""

import logging
import os
from typing import Dict, Optional, Tuple

import numpy as np
import pygame
from numpy.typing import NDArray

from skidodge.core.errors import InvalidConfiguration, ResourceUnavailable
from skidodge.game.grid import GridConfig

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

# Font files with emoji / symbol coverage, tried in order
GLYPH_FONT_PATHS = [
    "/usr/share/fonts/truetype/ancient-scripts/Symbola_hint.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    "C:/Windows/Fonts/seguisym.ttf",
]

GLYPH_SYSTEM_FONTS = ["Symbola", "Segoe UI Symbol", "DejaVu Sans", "Arial Unicode MS"]


class CanvasSurface:
    """Owns the canvas pixels and the drawing primitives used by the game.

    Args:
        host: Window surface the canvas is presented onto
        width: Canvas width in pixels
        height: Canvas height in pixels
        bg_color: Color used by clear()

    Raises:
        ResourceUnavailable: If there is no host surface
        InvalidConfiguration: If the dimensions are not positive
    """

    def __init__(
        self,
        host: Optional[pygame.Surface],
        width: int,
        height: int,
        bg_color: Color = (245, 248, 252),
    ) -> None:
        if host is None:
            raise ResourceUnavailable("No host surface to draw the canvas on")

        self._host = host
        self.bg_color = bg_color
        self._surface: Optional[pygame.Surface] = None
        self._fonts: Dict[int, pygame.font.Font] = {}
        self.configure(width, height)

    @property
    def width(self) -> int:
        return self._surface.get_width()

    @property
    def height(self) -> int:
        return self._surface.get_height()

    @property
    def surface(self) -> pygame.Surface:
        return self._surface

    def configure(self, width: int, height: int) -> None:
        """Set the backing pixel size. Calling again with the same size is a no-op."""
        if width <= 0 or height <= 0:
            raise InvalidConfiguration(f"Canvas dimensions must be positive, got {width}x{height}")

        if self._surface is not None and self._surface.get_size() == (width, height):
            return

        self._surface = pygame.Surface((width, height))
        self._surface.fill(self.bg_color)
        logger.info(f"Canvas configured: {width}x{height}")

    def clear(self) -> None:
        """Wipe the whole canvas."""
        self._surface.fill(self.bg_color)

    def draw_rect(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        """Fill a rectangle."""
        pygame.draw.rect(self._surface, color, pygame.Rect(int(x), int(y), int(width), int(height)))

    def stroke_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Color,
        thickness: int = 1,
    ) -> None:
        """Outline a rectangle."""
        pygame.draw.rect(
            self._surface, color,
            pygame.Rect(int(x), int(y), int(width), int(height)),
            thickness
        )

    def draw_glyph(
        self,
        char: str,
        center_x: float,
        center_y: float,
        font_size_px: int,
        color: Color = (20, 20, 30),
    ) -> None:
        """Render a single character centred on a point."""
        font = self._get_font(font_size_px)
        text_surface = font.render(char, True, color)
        text_rect = text_surface.get_rect(center=(int(center_x), int(center_y)))
        self._surface.blit(text_surface, text_rect)

    def draw_grid(self, grid: GridConfig, color: Color = (220, 60, 60)) -> None:
        """Outline every grid cell. Debug aid."""
        cell = grid.cell_dimension
        for row in range(grid.total_rows):
            for col in range(grid.total_cols):
                self.stroke_rect(col * cell, row * cell, cell, cell, color)

    def present(self, position: Tuple[int, int] = (0, 0)) -> None:
        """Copy the canvas onto the host surface."""
        self._host.blit(self._surface, position)

    def get_buffer(self) -> NDArray[np.uint8]:
        """Copy of the canvas pixels as a (height, width, 3) array."""
        return pygame.surfarray.array3d(self._surface).swapaxes(0, 1).copy()

    def _get_font(self, size: int) -> pygame.font.Font:
        """Load (once per size) a font able to draw glyphs."""
        if size in self._fonts:
            return self._fonts[size]

        if not pygame.font.get_init():
            try:
                pygame.font.init()
            except pygame.error as e:
                raise ResourceUnavailable(f"Font system unavailable: {e}") from e

        font = None
        for font_path in GLYPH_FONT_PATHS:
            if not os.path.exists(font_path):
                continue
            try:
                font = pygame.font.Font(font_path, size)
                logger.debug(f"Glyph font: {font_path} ({size}px)")
                break
            except (OSError, pygame.error) as e:
                logger.debug(f"Font {font_path} failed: {e}")

        if font is None:
            for font_name in GLYPH_SYSTEM_FONTS:
                if pygame.font.match_font(font_name):
                    font = pygame.font.SysFont(font_name, size)
                    logger.debug(f"Glyph system font: {font_name} ({size}px)")
                    break

        if font is None:
            font = pygame.font.Font(None, size)
            logger.warning("No emoji font found, using pygame default font")

        self._fonts[size] = font
        return font
