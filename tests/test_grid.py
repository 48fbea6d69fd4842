import pytest

from skidodge.core.errors import InvalidConfiguration
from skidodge.game.grid import GridConfig, Position


def test_grid_from_canvas(grid):
    assert grid.cell_dimension == 70
    assert grid.total_cols == 10
    assert grid.total_rows == 8
    assert grid.max_x == 630
    assert grid.max_y == 490


def test_rows_round_down():
    grid = GridConfig.from_canvas(700, 600)
    assert grid.total_rows == 8


@pytest.mark.parametrize("width,height,cols", [
    (0, 500, 10),
    (700, 0, 10),
    (-700, 500, 10),
    (700, 500, 0),
    (700, 50, 10),  # shorter than a single cell
])
def test_invalid_grid(width, height, cols):
    with pytest.raises(InvalidConfiguration):
        GridConfig.from_canvas(width, height, cols)


def test_grid_is_immutable(grid):
    with pytest.raises(Exception):
        grid.total_cols = 5


def test_positions(grid):
    assert grid.to_position(0, 0) == Position(0, 0)
    assert grid.to_position(69.9, 140) == Position(row=2, col=0)
    assert grid.cell_origin(Position(row=1, col=3)) == (210, 70)
    assert grid.cell_center(0, 0) == (35, 35)
