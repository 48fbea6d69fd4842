"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested values use a double underscore, e.g. ``SKIDODGE_GAME__SPAWN_RATE=0.05``.
"""

from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplaySettings(BaseModel):
    """Canvas and window settings."""

    # 700px wide canvas, 10 columns of 70px
    canvas_width: int = Field(default=700, gt=0)
    canvas_height: int = Field(default=560, gt=0)

    # Space around the canvas for the score and status lines
    window_margin: int = Field(default=60, ge=0)

    # Rendering
    fps: int = Field(default=60, gt=0)
    title: str = "SKIDODGE"

    # Colors
    bg_color: tuple[int, int, int] = (245, 248, 252)
    window_color: tuple[int, int, int] = (20, 20, 30)
    text_color: tuple[int, int, int] = (200, 200, 220)


class GameSettings(BaseModel):
    """Game loop tunables."""

    total_cols: int = Field(default=10, gt=0)

    # Per-tick probability of a new obstacle wave
    spawn_rate: float = Field(default=0.03, ge=0.0, le=1.0)

    # Pixels per tick
    obstacle_speed: float = Field(default=3.0, ge=0.0)
    player_speed: float = Field(default=0.8, ge=0.0)

    friction: float = Field(default=0.9, ge=0.0, le=1.0)

    # Collision distance as a fraction of the cell dimension
    collision_factor: float = Field(default=0.7, gt=0.0)

    player_glyph: str = "⛷"
    obstacle_glyphs: tuple[str, ...] = ("🌲", "🪨", "⛄")

    start_row: int = Field(default=0, ge=0)
    start_col: int = Field(default=0, ge=0)

    debug_grid: bool = False
    seed: Optional[int] = None


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SKIDODGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    log_file: str = "skidodge.log"

    # Nested settings
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    game: GameSettings = Field(default_factory=GameSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
