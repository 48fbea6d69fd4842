"""Desktop host for SKIDODGE (pygame window, displays, frame pacing)."""

from .displays import TextDisplay
from .window import GameWindow, WindowConfig, KEY_DIRECTIONS

__all__ = ["TextDisplay", "GameWindow", "WindowConfig", "KEY_DIRECTIONS"]
