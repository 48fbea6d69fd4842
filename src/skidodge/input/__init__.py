"""Player input handling for SKIDODGE."""

from .controller import Direction, Intent, InputController

__all__ = ["Direction", "Intent", "InputController"]
