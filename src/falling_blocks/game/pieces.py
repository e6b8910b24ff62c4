from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, NamedTuple, Optional, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


class Point(NamedTuple):
    x: int
    y: int


class Position(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True)
class Shape:
    """One orientation of a piece: offsets inside a width x height box plus a color tag."""

    shape: Tuple[Point, ...]
    width: int
    height: int
    color: int = 1

    def rotated(self) -> "Shape":
        """Rotate 90 degrees about the truncated center of the bounding box.

        The box itself is kept as is, so width and height never change.
        """
        cx = self.width // 2
        cy = self.height // 2
        points = tuple(Point(-(p.y - cy) + cx, (p.x - cx) + cy) for p in self.shape)
        return Shape(shape=points, width=self.width, height=self.height, color=self.color)

    def cells_at(self, origin_x: int, origin_y: int) -> Tuple[Point, ...]:
        return tuple(Point(origin_x + p.x, origin_y + p.y) for p in self.shape)


ShapeSource = Callable[[], Shape]


BASE_SHAPES = {
    TetrominoType.I: np.array([[1, 1, 1, 1]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[1, 1, 1], [0, 1, 0]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1]], dtype=np.int8),
}


def shape_from_array(mask: np.ndarray, color: int) -> Shape:
    h, w = mask.shape
    points = tuple(Point(int(x), int(y)) for y, x in np.argwhere(mask != 0))
    return Shape(shape=points, width=int(w), height=int(h), color=int(color))


def tetromino(kind: TetrominoType) -> Shape:
    return shape_from_array(BASE_SHAPES[kind], int(kind))


class RandomShapeSource:
    """Uniform random tetromino source; seedable for reproducible games."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def __call__(self) -> Shape:
        kind = self.rng.choice(list(TetrominoType))
        return tetromino(kind)
