"""SKIDODGE - a grid-aligned arcade game: steer the skier past falling obstacles."""

__version__ = "0.1.0"
