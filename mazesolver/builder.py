"""Staged maze builder.

The builder walks through a fixed sequence of stages::

    DIMENSION -> POSITION -> PATH -> WALL -> FINAL
                     \\__ with_kruskal_maze() ______/

Each method is legal only in certain stages; calling it anywhere else raises
:class:`~mazesolver.errors.StateError` straight away.
"""

from __future__ import annotations

import logging
import math
import random
from enum import Enum
from typing import Iterable, List, NamedTuple, Optional, Set, Tuple

from .errors import BoundsError, StateError, ValidationError
from .model import Cell, Maze, Position
from .union_find import DisjointSet

logger = logging.getLogger(__name__)

MIN_DIMENSION = 5
BORDER_BAND = 2


class Stage(Enum):
    DIMENSION = "dimension"
    POSITION = "position"
    PATH = "path"
    WALL = "wall"
    FINAL = "final"


class WallEdge(NamedTuple):
    """Removable partition between two rooms of the carving lattice."""

    cell_a: Position
    cell_b: Position
    wall: Position


# ----------------------------------------------------------------------
# Carving algorithms


def carve_random_path(
    maze: Maze,
    start: Position,
    end: Position,
    rng: random.Random,
) -> List[Position]:
    """Randomized depth-first walk from ``start`` to ``end``.

    Returns the walk including both endpoints. Dead ends trigger a jump back
    to a random earlier point on the path; positions cut off by the jump are
    released so a later branch can reuse them.
    """

    path = [start]
    visited: Set[Position] = {start}
    current = start
    restarts = 0
    while current != end:
        neighbors = [n for n in current.neighbors() if maze.contains(n)]
        if end in neighbors:
            path.append(end)
            current = end
            break
        unvisited = [n for n in neighbors if n not in visited]
        if unvisited:
            current = rng.choice(unvisited)
            path.append(current)
            visited.add(current)
        elif len(path) > 1:
            path.pop()
            index = rng.randrange(len(path))
            for position in path[index + 1:]:
                if position != start and position != end:
                    visited.discard(position)
            del path[index + 1:]
            current = path[index]
        else:
            # Boxed in at the start by abandoned dead ends.
            restarts += 1
            visited = {start}
    if restarts:
        logger.debug("Random walk restarted %d time(s)", restarts)
    return path


def room_positions(height: int, width: int) -> List[Position]:
    return [
        Position(row, col)
        for row in range(1, height - 1, 2)
        for col in range(1, width - 1, 2)
    ]


def room_edges(rooms: Iterable[Position]) -> List[WallEdge]:
    room_set = set(rooms)
    edges: List[WallEdge] = []
    for room in sorted(room_set):
        for d_row, d_col in ((0, 2), (2, 0)):
            other = Position(room.row + d_row, room.col + d_col)
            if other in room_set:
                wall = Position(room.row + d_row // 2, room.col + d_col // 2)
                edges.append(WallEdge(room, other, wall))
    return edges


def carve_perfect_maze(maze: Maze, rng: random.Random) -> DisjointSet:
    """Kruskal carving: a random spanning tree over the odd-offset rooms."""

    for position in maze.positions():
        maze[position] = Cell.WALL
    rooms = room_positions(maze.height, maze.width)
    sets = DisjointSet()
    for room in rooms:
        maze[room] = Cell.EMPTY
        sets.make_set(room)

    edges = room_edges(rooms)
    rng.shuffle(edges)
    opened = 0
    for edge in edges:
        if not sets.connected(edge.cell_a, edge.cell_b):
            maze[edge.wall] = Cell.EMPTY
            sets.union(edge.cell_a, edge.cell_b)
            opened += 1
    logger.debug("Carved %d rooms, opened %d of %d walls", len(rooms), opened, len(edges))
    return sets


def nearest_empty(
    maze: Maze,
    target: Position,
    exclude: Iterable[Optional[Position]] = (),
) -> Optional[Position]:
    """Closest ``EMPTY`` cell by Manhattan distance, ties in row-major order."""

    skip = {p for p in exclude if p is not None}
    best: Optional[Position] = None
    best_distance = math.inf
    for position in maze.find_cells(Cell.EMPTY):
        if position in skip:
            continue
        distance = position.distance(target)
        if distance < best_distance:
            best, best_distance = position, distance
    return best


# ----------------------------------------------------------------------


class MazeBuilder:
    """Fluent builder producing :class:`~mazesolver.model.Maze` instances."""

    def __init__(self, *, rng: Optional[random.Random] = None, seed: Optional[int] = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)
        self._stage = Stage.DIMENSION
        self._height: Optional[int] = None
        self._width: Optional[int] = None
        self._maze: Optional[Maze] = None
        self._start: Optional[Position] = None
        self._end: Optional[Position] = None

    @classmethod
    def builder(cls, rng: Optional[random.Random] = None, seed: Optional[int] = None) -> "MazeBuilder":
        return cls(rng=rng, seed=seed)

    @property
    def stage(self) -> Stage:
        return self._stage

    def _require(self, operation: str, *stages: Stage) -> None:
        if self._stage not in stages:
            allowed = ", ".join(stage.value for stage in stages)
            raise StateError(
                f"{operation}() is not allowed in the {self._stage.value} stage (allowed: {allowed})"
            )

    @property
    def _grid(self) -> Maze:
        if self._maze is None:
            raise StateError("height() and width() must be set first")
        return self._maze

    def _endpoints(self, operation: str) -> Tuple[Position, Position]:
        if self._start is None or self._end is None:
            raise StateError(f"Start and end positions must be set before {operation}()")
        return self._start, self._end

    @staticmethod
    def _check_dimension(name: str, value: int) -> None:
        if value < MIN_DIMENSION:
            raise ValidationError(f"{name} must be at least {MIN_DIMENSION}, got {value}")

    def _check_position(self, row: int, col: int) -> Position:
        if not self._grid.is_valid_position(row, col):
            raise BoundsError(
                f"Position ({row},{col}) outside maze of size {self._grid.height}x{self._grid.width}"
            )
        return Position(row, col)

    def _stamp_endpoints(self) -> None:
        if self._start is not None:
            self._grid[self._start] = Cell.START
        if self._end is not None:
            self._grid[self._end] = Cell.END

    def _is_endpoint(self, position: Position) -> bool:
        return position == self._start or position == self._end

    # -- dimension stage -----------------------------------------------

    def height(self, height: int) -> "MazeBuilder":
        self._require("height", Stage.DIMENSION)
        self._check_dimension("height", height)
        self._height = height
        return self

    def width(self, width: int) -> "MazeBuilder":
        self._require("width", Stage.DIMENSION)
        self._check_dimension("width", width)
        if self._height is None:
            raise StateError("height() must be set before width()")
        self._width = width
        self._maze = Maze(self._height, width)
        self._stage = Stage.POSITION
        return self

    # -- position stage ------------------------------------------------

    def start(self, row: int, col: int) -> "MazeBuilder":
        self._require("start", Stage.POSITION)
        self._start = self._check_position(row, col)
        return self

    def end(self, row: int, col: int) -> "MazeBuilder":
        self._require("end", Stage.POSITION)
        position = self._check_position(row, col)
        if position == self._start:
            raise ValidationError("End position cannot equal start position")
        self._end = position
        self._stamp_endpoints()
        self._stage = Stage.PATH
        return self

    def random_start_and_end(self) -> "MazeBuilder":
        """Place the endpoints one cell in from two opposite edges."""

        self._require("random_start_and_end", Stage.POSITION)
        last_row = self._grid.height - 2
        last_col = self._grid.width - 2
        if self._rng.choice(("horizontal", "vertical")) == "horizontal":
            first = Position(self._rng.randint(1, last_row), 1)
            second = Position(self._rng.randint(1, last_row), last_col)
        else:
            first = Position(1, self._rng.randint(1, last_col))
            second = Position(last_row, self._rng.randint(1, last_col))
        if self._rng.random() < 0.5:
            first, second = second, first
        self._start, self._end = first, second
        logger.debug("Random endpoints start=%s end=%s", self._start, self._end)
        self._stamp_endpoints()
        self._stage = Stage.PATH
        return self

    def with_kruskal_maze(self) -> "MazeBuilder":
        """Carve a perfect maze and jump straight to the final stage."""

        self._require("with_kruskal_maze", Stage.POSITION)
        carve_perfect_maze(self._grid, self._rng)
        self._place_kruskal_endpoints()
        self._stamp_endpoints()
        self._stage = Stage.FINAL
        return self

    def _place_kruskal_endpoints(self) -> None:
        maze = self._grid
        if self._start is not None and maze[self._start] is Cell.WALL:
            self._start = nearest_empty(maze, self._start, exclude=[self._end])
        if self._end is not None and maze[self._end] is Cell.WALL:
            self._end = nearest_empty(maze, self._end, exclude=[self._start])

        if self._start is None and self._end is None:
            empties = maze.find_cells(Cell.EMPTY)
            near_border = [
                p for p in empties
                if min(p.row, p.col, maze.height - 1 - p.row, maze.width - 1 - p.col) <= BORDER_BAND
            ]
            if near_border:
                self._start = self._rng.choice(near_border)
                self._end = nearest_empty(maze, self._reflect(self._start), exclude=[self._start])
            elif len(empties) >= 2:
                self._start, self._end = self._rng.sample(empties, 2)
        elif self._end is None:
            self._end = nearest_empty(maze, self._reflect(self._start), exclude=[self._start])
        elif self._start is None:
            self._start = nearest_empty(maze, self._reflect(self._end), exclude=[self._end])

        if self._start is None or self._end is None:
            raise StateError("Not enough open cells to place start and end")
        logger.debug("Perfect maze endpoints start=%s end=%s", self._start, self._end)

    def _reflect(self, position: Position) -> Position:
        return Position(self._grid.height - 1 - position.row, self._grid.width - 1 - position.col)

    # -- path stage ----------------------------------------------------

    def with_random_path(self) -> "MazeBuilder":
        self._require("with_random_path", Stage.PATH)
        start, end = self._endpoints("with_random_path")
        path = carve_random_path(self._grid, start, end, self._rng)
        for position in path[1:-1]:
            self._grid[position] = Cell.PATH
        self._stamp_endpoints()
        logger.debug("Random path of %d cells", len(path))
        self._stage = Stage.WALL
        return self

    # -- wall stage ----------------------------------------------------

    def with_random_walls(self, density: float) -> "MazeBuilder":
        """Turn ``round(empty_count * density)`` random empty cells into walls."""

        self._require("with_random_walls", Stage.PATH, Stage.WALL)
        if not 0.0 <= density <= 1.0:
            raise ValidationError(f"density must be between 0.0 and 1.0, got {density}")
        empties = [p for p in self._grid.find_cells(Cell.EMPTY) if not self._is_endpoint(p)]
        count = int(round(len(empties) * density))
        for position in self._rng.sample(empties, count):
            self._grid[position] = Cell.WALL
        logger.debug("Placed %d walls at density %.2f", count, density)
        self._stage = Stage.WALL
        return self

    def with_perimeter_walls(self) -> "MazeBuilder":
        self._require("with_perimeter_walls", Stage.PATH, Stage.WALL)
        maze = self._grid
        for position in maze.positions():
            on_border = (
                position.row in (0, maze.height - 1) or position.col in (0, maze.width - 1)
            )
            if on_border and not self._is_endpoint(position) and maze[position] is Cell.EMPTY:
                maze[position] = Cell.WALL
        self._stage = Stage.FINAL
        return self

    # -- final stage ---------------------------------------------------

    def with_empty_path(self) -> "MazeBuilder":
        self._require("with_empty_path", Stage.FINAL)
        self._grid.clear_path()
        return self

    def build(self) -> Maze:
        self._require("build", Stage.POSITION, Stage.PATH, Stage.WALL, Stage.FINAL)
        if self._start is None or self._end is None:
            raise StateError("Start and end positions must be set before build()")
        self._stamp_endpoints()
        return self._grid.copy()


__all__ = [
    "MIN_DIMENSION",
    "MazeBuilder",
    "Stage",
    "WallEdge",
    "carve_perfect_maze",
    "carve_random_path",
    "nearest_empty",
    "room_edges",
    "room_positions",
]
