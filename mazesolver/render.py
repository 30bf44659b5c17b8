"""Raster rendering of maze grids."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np
from PIL import Image

from .model import Cell, Maze

Color = Tuple[int, int, int]

EMPTY_COLOR = (255, 255, 255)
WALL_COLOR = (0, 0, 0)
START_COLOR = (220, 30, 30)
END_COLOR = (40, 180, 80)
PATH_COLOR = (250, 200, 60)

DEFAULT_PALETTE: Dict[Cell, Color] = {
    Cell.EMPTY: EMPTY_COLOR,
    Cell.WALL: WALL_COLOR,
    Cell.START: START_COLOR,
    Cell.END: END_COLOR,
    Cell.PATH: PATH_COLOR,
}


def palette_array(palette: Optional[Dict[Cell, Color]] = None, *, show_path: bool = True) -> np.ndarray:
    colors = dict(DEFAULT_PALETTE)
    if palette:
        colors.update(palette)
    if not show_path:
        colors[Cell.PATH] = colors[Cell.EMPTY]
    lookup = np.zeros((len(Cell), 3), dtype=np.uint8)
    for cell in Cell:
        lookup[cell.code] = colors[cell]
    return lookup


def render_maze(
    maze: Maze,
    cell_size: int = 16,
    *,
    show_path: bool = True,
    palette: Optional[Dict[Cell, Color]] = None,
) -> Image.Image:
    """Draw one ``cell_size`` square per cell."""

    if cell_size <= 0:
        raise ValueError("cell_size must be positive")
    pixels = palette_array(palette, show_path=show_path)[maze.to_array()]
    pixels = np.repeat(np.repeat(pixels, cell_size, axis=0), cell_size, axis=1)
    return Image.fromarray(pixels)


__all__ = ["DEFAULT_PALETTE", "palette_array", "render_maze"]
