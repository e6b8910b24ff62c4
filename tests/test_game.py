import logging

import numpy as np
import pytest

from falling_blocks.game import (
    Action,
    Falling,
    FallingBlockGame,
    GameConfig,
    GameState,
    Lock,
    Point,
    Position,
    Shape,
    TetrominoType,
    spawn,
    tetromino,
)


class CountingSource:
    def __init__(self, kind=TetrominoType.O):
        self.kind = kind
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return tetromino(self.kind)


def _drop_until_lock(game, limit=50):
    for _ in range(limit):
        outcome = game.tick()
        if isinstance(outcome, Lock):
            return outcome
    raise AssertionError("piece never locked")


def test_new_game_spawns_at_start_position():
    source = CountingSource()
    game = FallingBlockGame(shape_source=source)
    assert game.piece.position == Position(4, 0)
    assert game.grid.shape == (20, 10)
    assert not game.grid.any()
    assert source.calls == 1


def test_lock_merges_piece_and_respawns_at_respawn_column():
    source = CountingSource()
    game = FallingBlockGame(shape_source=source)

    lock = _drop_until_lock(game)

    assert lock.piece.position == Position(4, 18)
    assert game.grid[18:, 4:6].tolist() == [[2, 2], [2, 2]]
    assert np.count_nonzero(game.grid) == 4
    assert game.piece.position == Position(5, 0)
    assert source.calls == 2


def test_lock_clears_completed_rows():
    game = FallingBlockGame(shape_source=CountingSource())
    grid = np.zeros((20, 10), dtype=np.int8)
    grid[18:, :9] = 1
    grid[18:, 4:6] = 0
    grid[17, 0] = 3
    game.state = GameState(grid=grid, piece=spawn(tetromino(TetrominoType.O), Position(4, 0)))

    _drop_until_lock(game)

    assert game.grid[19, 0] == 3
    assert np.count_nonzero(game.grid) == 1


def test_soft_drop_never_locks():
    game = FallingBlockGame(shape_source=CountingSource())
    while game.step(Action.SOFT_DROP):
        pass
    before = game.state
    assert not game.step(Action.SOFT_DROP)
    assert game.state is before
    assert not game.grid.any()


def test_rejected_command_keeps_snapshot_identity():
    game = FallingBlockGame(shape_source=CountingSource())
    for _ in range(4):
        game.step(Action.LEFT)
    before = game.state
    assert not game.step(Action.LEFT)
    assert game.state is before


def test_accepted_command_replaces_snapshot():
    game = FallingBlockGame(shape_source=CountingSource())
    before = game.state
    assert game.step(Action.RIGHT)
    assert game.state is not before
    assert game.grid is before.grid


def test_falling_tick_moves_piece_down():
    game = FallingBlockGame(shape_source=CountingSource())
    outcome = game.tick()
    assert isinstance(outcome, Falling)
    assert game.piece.position == Position(4, 1)


def test_get_state_overlays_active_piece():
    game = FallingBlockGame(shape_source=CountingSource())
    view = game.get_state()
    assert view[0:2, 4:6].tolist() == [[2, 2], [2, 2]]
    assert not game.grid.any()


def test_spawn_blocked_flag_after_stack_reaches_top():
    game = FallingBlockGame(GameConfig(height=3), shape_source=CountingSource())
    assert not game.spawn_blocked
    _drop_until_lock(game)
    assert game.grid[1:, 4:6].all()
    assert game.spawn_blocked


def test_reset_starts_from_empty_grid():
    game = FallingBlockGame(shape_source=CountingSource())
    _drop_until_lock(game)
    game.reset()
    assert not game.grid.any()
    assert game.piece.position == Position(4, 0)


def test_lock_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="falling_blocks")
    game = FallingBlockGame(shape_source=CountingSource())
    _drop_until_lock(game)
    assert "Locked piece" in caplog.text


@pytest.mark.parametrize("kwargs", [
    {"width": 1},
    {"height": 0},
    {"gravity_ms": 0},
    {"spawn_x": 10},
    {"respawn_x": -1},
])
def test_invalid_config_raises(kwargs):
    with pytest.raises(ValueError):
        GameConfig(**kwargs)


def test_seeded_games_draw_same_shapes():
    a = FallingBlockGame(GameConfig(random_seed=3))
    b = FallingBlockGame(GameConfig(random_seed=3))
    assert a.piece == b.piece


def test_large_color_tags_survive_lock_and_projection():
    shape = Shape(shape=(Point(0, 0),), width=1, height=1, color=300)
    game = FallingBlockGame(shape_source=lambda: shape)
    assert game.get_state()[0, 4] == 300
    _drop_until_lock(game)
    assert game.grid[19, 4] == 300
    assert game.get_state()[0, 5] == 300
