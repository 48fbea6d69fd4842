"""
Text displays for the score and status lines.
"""

from typing import Tuple

import pygame

from ..core.scheduling import TextSink


class TextDisplay(TextSink):
    """
    Single line of text shown by the window.

    The game pushes text into it; the window renders it every frame.
    """

    def __init__(self, name: str, color: Tuple[int, int, int] = (200, 200, 220)) -> None:
        self.name = name
        self.color = color
        self._text = ""
        self._updates = 0

    def set_text(self, text: str) -> None:
        self._text = text
        self._updates += 1

    def get_text(self) -> str:
        """Get current display text."""
        return self._text

    @property
    def updates(self) -> int:
        """How many times the text was pushed."""
        return self._updates

    def clear(self) -> None:
        self._text = ""

    def render(self, font: pygame.font.Font) -> pygame.Surface:
        """Render the line to a pygame surface."""
        return font.render(self._text, True, self.color)
