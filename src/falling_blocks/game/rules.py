from __future__ import annotations

from .grid import Grid, is_occupied
from .pieces import Position, Shape


def is_valid_position(position: Position, shape: Shape, grid: Grid) -> bool:
    """True iff every cell of `shape` at `position` is on the board and empty.

    All movement, rotation and lock decisions go through this check.
    """
    return all(not is_occupied(grid, x, y) for x, y in shape.cells_at(position.x, position.y))
