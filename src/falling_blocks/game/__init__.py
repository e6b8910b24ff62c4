"""Game module for falling_blocks.

Exports the engine and supporting pieces:
- grid helpers: empty_grid, merge, clear_full_lines, is_occupied
- is_valid_position: the collision check every move goes through
- Shape, Position, TetrominoType, RandomShapeSource: piece values and a shape source
- FallingBlockGame: current snapshot, commands, gravity and lock
- GameLoop, GravityClock: single-queue dispatch of commands and gravity
"""

from .grid import Grid, clear_full_lines, empty_grid, is_inside, is_occupied, merge
from .pieces import Point, Position, RandomShapeSource, Shape, ShapeSource, TetrominoType, tetromino
from .rules import is_valid_position
from .core import (
    Action,
    ActivePiece,
    Falling,
    FallingBlockGame,
    GameConfig,
    GameState,
    Lock,
    handle_directional_command,
    project,
    rotate,
    spawn,
    spawn_blocked,
    tick,
    try_move,
)
from .loop import GameLoop, GravityClock

__all__ = [
    "Grid",
    "clear_full_lines",
    "empty_grid",
    "is_inside",
    "is_occupied",
    "merge",
    "Point",
    "Position",
    "RandomShapeSource",
    "Shape",
    "ShapeSource",
    "TetrominoType",
    "tetromino",
    "is_valid_position",
    "Action",
    "ActivePiece",
    "Falling",
    "FallingBlockGame",
    "GameConfig",
    "GameState",
    "Lock",
    "handle_directional_command",
    "project",
    "rotate",
    "spawn",
    "spawn_blocked",
    "tick",
    "try_move",
    "GameLoop",
    "GravityClock",
]
