from __future__ import annotations

from typing import Tuple

import numpy as np

from .pieces import Position, Shape


Grid = np.ndarray


def _freeze(grid: np.ndarray) -> Grid:
    grid.setflags(write=False)
    return grid


def empty_grid(height: int, width: int) -> Grid:
    """Zero-filled board snapshot, indexed ``grid[y, x]`` with y=0 at the top.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Snapshots are read-only; every transition returns a new array.
    """
    return _freeze(np.zeros((int(height), int(width)), dtype=np.int64))


def is_inside(grid: Grid, x: int, y: int) -> bool:
    h, w = grid.shape
    return 0 <= x < w and 0 <= y < h


def is_occupied(grid: Grid, x: int, y: int) -> bool:
    # Off-board cells count as occupied for collision purposes
    if not is_inside(grid, x, y):
        return True
    return bool(grid[y, x] != 0)


def merge(grid: Grid, shape: Shape, position: Position) -> Grid:
    """Return a copy of `grid` with the shape's in-bounds cells set to its color.

    Points falling outside the board are ignored.
    """
    merged = grid.copy()
    for x, y in shape.cells_at(position.x, position.y):
        if is_inside(merged, x, y):
            merged[y, x] = shape.color
    return _freeze(merged)


def clear_full_lines(grid: Grid, full_width: bool = False) -> Tuple[Grid, bool]:
    """Compact full rows in one top-to-bottom pass.

    By default the last column is excluded from the fullness check, the
    shift and the top-row clear, so it is left exactly as it was. Each full
    row triggers its own shift of every row above it. Returns the new grid
    and whether any row was cleared; an unchanged grid is returned as is.
    """
    h, w = grid.shape
    limit = w if full_width else w - 1
    cleared = grid.copy()
    touched = False
    for y in range(h):
        if not np.all(cleared[y, :limit] != 0):
            continue
        cleared[1 : y + 1, :limit] = cleared[0:y, :limit].copy()
        cleared[0, :limit] = 0
        touched = True
    if not touched:
        return grid, False
    return _freeze(cleared), True
