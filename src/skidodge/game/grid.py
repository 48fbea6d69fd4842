"""Grid geometry derived from the canvas size."""

from dataclasses import dataclass
import logging

from skidodge.core.errors import InvalidConfiguration

logger = logging.getLogger(__name__)

DEFAULT_COLS = 10


@dataclass(frozen=True)
class Position:
    """Integer grid cell."""

    row: int
    col: int


@dataclass(frozen=True)
class GridConfig:
    """Immutable cell layout of the playing field.

    Attributes:
        cell_dimension: Width and height of one square cell in pixels
        total_rows: Number of full rows that fit in the canvas height
        total_cols: Number of columns across the canvas width
        canvas_width: Canvas width in pixels
        canvas_height: Canvas height in pixels
    """

    cell_dimension: float
    total_rows: int
    total_cols: int
    canvas_width: int
    canvas_height: int

    @classmethod
    def from_canvas(cls, width: int, height: int, total_cols: int = DEFAULT_COLS) -> "GridConfig":
        """Derive the grid from canvas pixel dimensions.

        Raises:
            InvalidConfiguration: If dimensions or columns are not positive,
                or the canvas is shorter than one cell.
        """
        if width <= 0 or height <= 0:
            raise InvalidConfiguration(f"Canvas dimensions must be positive, got {width}x{height}")
        if total_cols <= 0:
            raise InvalidConfiguration(f"Column count must be positive, got {total_cols}")

        cell_dimension = width / total_cols
        total_rows = int(height // cell_dimension)
        if total_rows <= 0:
            raise InvalidConfiguration(
                f"Canvas height {height} is smaller than one cell ({cell_dimension:.1f}px)"
            )

        grid = cls(
            cell_dimension=cell_dimension,
            total_rows=total_rows,
            total_cols=total_cols,
            canvas_width=width,
            canvas_height=height,
        )
        logger.debug(f"Grid: {total_rows}x{total_cols} cells of {cell_dimension:.1f}px")
        return grid

    @property
    def max_x(self) -> float:
        """Largest legal player x (left edge of the last column)."""
        return (self.total_cols - 1) * self.cell_dimension

    @property
    def max_y(self) -> float:
        """Largest legal player y (top edge of the last row)."""
        return (self.total_rows - 1) * self.cell_dimension

    def to_position(self, x: float, y: float) -> Position:
        return Position(row=int(y // self.cell_dimension), col=int(x // self.cell_dimension))

    def cell_origin(self, position: Position) -> tuple[float, float]:
        """Pixel (x, y) of a cell's top-left corner."""
        return position.col * self.cell_dimension, position.row * self.cell_dimension

    def cell_center(self, x: float, y: float) -> tuple[float, float]:
        """Centre of the cell-sized box whose top-left corner is (x, y)."""
        half = self.cell_dimension / 2
        return x + half, y + half
