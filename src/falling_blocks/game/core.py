from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Optional, Tuple, Union

import numpy as np

from .grid import Grid, clear_full_lines, empty_grid, merge
from .pieces import Position, RandomShapeSource, Shape, ShapeSource
from .rules import is_valid_position

logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    SOFT_DROP = 2
    ROTATE = 3
    NONE = 4


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    spawn_x: int = 4
    respawn_x: int = 5
    spawn_y: int = 0
    gravity_ms: int = 300
    random_seed: Optional[int] = None
    # Off by default: the last column is left out of line clears
    full_width_clear: bool = False

    def __post_init__(self) -> None:
        if self.width < 2 or self.height < 1:
            raise ValueError(f"Board must be at least 2x1, got {self.width}x{self.height}")
        if self.gravity_ms <= 0:
            raise ValueError(f"gravity_ms must be positive, got {self.gravity_ms}")
        for name in ("spawn_x", "respawn_x"):
            if not 0 <= getattr(self, name) < self.width:
                raise ValueError(f"{name} must lie within the board width {self.width}")


@dataclass(frozen=True)
class ActivePiece:
    shape: Shape
    position: Position


@dataclass(frozen=True, eq=False)
class GameState:
    """Committed grid plus the falling piece. Compared by identity."""

    grid: Grid
    piece: ActivePiece


@dataclass(frozen=True)
class Falling:
    piece: ActivePiece


@dataclass(frozen=True)
class Lock:
    piece: ActivePiece


Outcome = Union[Falling, Lock]

_MOVES = {
    Action.LEFT: (-1, 0),
    Action.RIGHT: (1, 0),
    Action.SOFT_DROP: (0, 1),
}


def spawn(shape: Shape, position: Position = Position(4, 0)) -> ActivePiece:
    return ActivePiece(shape=shape, position=position)


def spawn_blocked(piece: ActivePiece, grid: Grid) -> bool:
    return not is_valid_position(piece.position, piece.shape, grid)


def try_move(dx: int, dy: int, piece: ActivePiece, grid: Grid) -> Tuple[ActivePiece, bool]:
    candidate = Position(piece.position.x + dx, piece.position.y + dy)
    if not is_valid_position(candidate, piece.shape, grid):
        return piece, False
    return replace(piece, position=candidate), True


def tick(piece: ActivePiece, grid: Grid) -> Outcome:
    """Apply gravity once. A blocked fall means the piece locks where it is."""
    moved, ok = try_move(0, 1, piece, grid)
    if ok:
        return Falling(moved)
    return Lock(piece)


def rotate(piece: ActivePiece, grid: Grid) -> ActivePiece:
    candidate = piece.shape.rotated()
    if not is_valid_position(piece.position, candidate, grid):
        return piece
    return replace(piece, shape=candidate)


def handle_directional_command(action: object, piece: ActivePiece, grid: Grid) -> Tuple[ActivePiece, bool]:
    """Map one input command onto a move or rotation. Unknown input is ignored."""
    if action == Action.ROTATE:
        rotated = rotate(piece, grid)
        return rotated, rotated is not piece
    delta = _MOVES.get(action) if isinstance(action, int) and not isinstance(action, bool) else None
    if delta is None:
        return piece, False
    return try_move(delta[0], delta[1], piece, grid)


def project(state: GameState) -> np.ndarray:
    """Committed cells with the falling piece drawn on top, for display only."""
    return merge(state.grid, state.piece.shape, state.piece.position)


class FallingBlockGame:
    """Owns the current snapshot and replaces it on every accepted transition."""

    def __init__(self, config: Optional[GameConfig] = None, shape_source: Optional[ShapeSource] = None) -> None:
        self.config = config or GameConfig()
        self.shape_source = shape_source or RandomShapeSource(self.config.random_seed)
        self.state: GameState
        self.reset()

    @property
    def grid(self) -> Grid:
        return self.state.grid

    @property
    def piece(self) -> ActivePiece:
        return self.state.piece

    @property
    def spawn_blocked(self) -> bool:
        return spawn_blocked(self.state.piece, self.state.grid)

    def reset(self) -> None:
        grid = empty_grid(self.config.height, self.config.width)
        piece = spawn(self.shape_source(), Position(self.config.spawn_x, self.config.spawn_y))
        self.state = GameState(grid=grid, piece=piece)

    def step(self, action: object) -> bool:
        piece, accepted = handle_directional_command(action, self.state.piece, self.state.grid)
        if accepted:
            self.state = replace(self.state, piece=piece)
        return accepted

    def tick(self) -> Outcome:
        outcome = tick(self.state.piece, self.state.grid)
        if isinstance(outcome, Falling):
            self.state = replace(self.state, piece=outcome.piece)
        else:
            self._lock(outcome.piece)
        return outcome

    def _lock(self, piece: ActivePiece) -> None:
        grid = merge(self.state.grid, piece.shape, piece.position)
        logger.debug("Locked piece color=%d at (%d, %d)", piece.shape.color, piece.position.x, piece.position.y)
        grid, changed = clear_full_lines(grid, full_width=self.config.full_width_clear)
        if changed:
            logger.debug("Cleared full lines")
        next_piece = spawn(self.shape_source(), Position(self.config.respawn_x, self.config.spawn_y))
        self.state = GameState(grid=grid, piece=next_piece)
        if self.spawn_blocked:
            logger.debug("Spawn position (%d, %d) is blocked", next_piece.position.x, next_piece.position.y)

    def get_state(self) -> np.ndarray:
        return project(self.state)
