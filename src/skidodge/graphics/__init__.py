"""Graphics for SKIDODGE rendering."""

from skidodge.graphics.surface import CanvasSurface, Color

__all__ = ["CanvasSurface", "Color"]
