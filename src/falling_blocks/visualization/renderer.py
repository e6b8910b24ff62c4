from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np
import pygame

RGB = Tuple[int, int, int]

EMPTY_COLOR: RGB = (20, 20, 26)

TETROMINO_PALETTE: Dict[int, RGB] = {
    1: (0, 240, 240),  # I
    2: (240, 240, 0),  # O
    3: (160, 0, 240),  # T
    4: (0, 240, 0),    # S
    5: (240, 0, 0),    # Z
    6: (0, 0, 240),    # J
    7: (240, 160, 0),  # L
}


def color_for_tag(tag: int) -> RGB:
    """Stable color for tags outside the palette, spread around the hue wheel."""
    color = pygame.Color(0, 0, 0)
    color.hsva = ((tag * 137.508) % 360, 70, 90, 100)
    return color.r, color.g, color.b


class Renderer:
    """Draws a board snapshot; never touches engine state.

    `palette` maps cell tags to colors. Tags without an entry get a color
    derived from the tag itself, so any positive tag is drawable.
    """

    def __init__(self, cell_size: int = 30, margin: int = 20, palette: Optional[Dict[int, RGB]] = None) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.palette: Dict[int, RGB] = dict(TETROMINO_PALETTE if palette is None else palette)
        self.palette[0] = EMPTY_COLOR

    def color_of(self, tag: int) -> RGB:
        if tag not in self.palette:
            self.palette[tag] = color_for_tag(tag)
        return self.palette[tag]

    def window_size(self, rows: int, cols: int) -> Tuple[int, int]:
        return cols * self.cell_size + self.margin * 2, rows * self.cell_size + self.margin * 2

    def grid_surface(self, snapshot: np.ndarray) -> pygame.Surface:
        rows, cols = snapshot.shape
        surf = pygame.Surface((cols * self.cell_size, rows * self.cell_size))
        surf.fill((30, 30, 36))
        for (y, x), tag in np.ndenumerate(snapshot):
            rect = pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size - 1, self.cell_size - 1)
            pygame.draw.rect(surf, self.color_of(int(tag)), rect)
        return surf

    def draw(self, screen: pygame.Surface, snapshot: np.ndarray) -> None:
        screen.fill((10, 10, 14))
        screen.blit(self.grid_surface(snapshot), (self.margin, self.margin))
        pygame.display.flip()
