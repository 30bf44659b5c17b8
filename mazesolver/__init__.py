"""Maze generation and solving toolkit."""

__all__ = [
    "AbstractMazeGenerator",
    "AbstractMetadataStore",
    "BoundsError",
    "Cell",
    "DisjointSet",
    "Maze",
    "MazeBuilder",
    "MazeError",
    "MazeGenerator",
    "MazeRecord",
    "MazeStore",
    "Position",
    "Stage",
    "StateError",
    "ValidationError",
    "format_positions",
    "maze_from_text",
    "parse_positions",
    "render_maze",
    "solve_maze",
]

from .base import AbstractMazeGenerator, AbstractMetadataStore
from .errors import BoundsError, MazeError, StateError, ValidationError
from .model import Cell, Maze, Position
from .union_find import DisjointSet
from .builder import MazeBuilder, Stage
from .solver import solve_maze
from .serialization import format_positions, maze_from_text, parse_positions
from .render import render_maze
from .generator import MazeGenerator, MazeRecord
from .store import MazeStore
