"""Grid model for rectangular mazes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .errors import BoundsError, StateError, ValidationError


class Cell(str, Enum):
    EMPTY = " "
    WALL = "w"
    START = "s"
    END = "e"
    PATH = "p"

    @classmethod
    def from_value(cls, value: object) -> "Cell":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as exc:
            raise ValidationError(f"Invalid cell value: {value!r}") from exc

    @property
    def code(self) -> int:
        return _CELL_CODES[self]


_CELL_CODES = {cell: index for index, cell in enumerate(Cell)}


@dataclass(frozen=True, order=True)
class Position:
    row: int
    col: int

    def neighbors(self) -> Tuple["Position", "Position", "Position", "Position"]:
        """Four-connected neighbours in up, down, left, right order."""

        return (
            Position(self.row - 1, self.col),
            Position(self.row + 1, self.col),
            Position(self.row, self.col - 1),
            Position(self.row, self.col + 1),
        )

    def distance(self, other: "Position") -> int:
        return abs(self.row - other.row) + abs(self.col - other.col)

    def to_tuple(self) -> Tuple[int, int]:
        return (self.row, self.col)

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


class Maze:
    """A height x width grid of cell tags plus its solved state."""

    def __init__(
        self,
        height: int,
        width: int,
        grid: Optional[Sequence[Sequence[object]]] = None,
    ) -> None:
        if height <= 0 or width <= 0:
            raise ValidationError("height and width must be positive")
        self._height = height
        self._width = width
        if grid is None:
            self._grid: List[List[Cell]] = [[Cell.EMPTY for _ in range(width)] for _ in range(height)]
        else:
            self._grid = self._copy_grid(grid, height, width)
        self.solved = False
        self.solved_path: Optional[List[Position]] = None

    @staticmethod
    def _copy_grid(grid: Sequence[Sequence[object]], height: int, width: int) -> List[List[Cell]]:
        if len(grid) != height:
            raise ValidationError(f"Grid has {len(grid)} rows, expected {height}")
        copied: List[List[Cell]] = []
        for row_idx, row in enumerate(grid):
            if len(row) != width:
                raise ValidationError(f"Row {row_idx} has {len(row)} cells, expected {width}")
            copied.append([Cell.from_value(value) for value in row])
        return copied

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def grid(self) -> List[List[Cell]]:
        """Copy of the cell grid."""

        return [list(row) for row in self._grid]

    # ------------------------------------------------------------------

    def is_valid_position(self, row: int, col: int) -> bool:
        return 0 <= row < self._height and 0 <= col < self._width

    def contains(self, position: Position) -> bool:
        return self.is_valid_position(position.row, position.col)

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.is_valid_position(row, col):
            raise BoundsError(
                f"Position ({row},{col}) outside maze of size {self._height}x{self._width}"
            )

    def get_cell(self, row: int, col: int) -> Cell:
        self._check_bounds(row, col)
        return self._grid[row][col]

    def set_cell(self, row: int, col: int, value: object) -> None:
        self._check_bounds(row, col)
        self._grid[row][col] = Cell.from_value(value)

    def __getitem__(self, position: Position) -> Cell:
        return self.get_cell(position.row, position.col)

    def __setitem__(self, position: Position, value: object) -> None:
        self.set_cell(position.row, position.col, value)

    def positions(self) -> Iterator[Position]:
        for row in range(self._height):
            for col in range(self._width):
                yield Position(row, col)

    def find_cells(self, value: object) -> List[Position]:
        """Positions holding ``value`` in row-major order."""

        tag = Cell.from_value(value)
        return [
            Position(row, col)
            for row, cells in enumerate(self._grid)
            for col, cell in enumerate(cells)
            if cell is tag
        ]

    def count_cells(self, value: object) -> int:
        tag = Cell.from_value(value)
        return sum(row.count(tag) for row in self._grid)

    @property
    def start(self) -> Optional[Position]:
        found = self.find_cells(Cell.START)
        return found[0] if len(found) == 1 else None

    @property
    def end(self) -> Optional[Position]:
        found = self.find_cells(Cell.END)
        return found[0] if len(found) == 1 else None

    def is_well_formed(self) -> bool:
        return self.count_cells(Cell.START) == 1 and self.count_cells(Cell.END) == 1

    def endpoints(self) -> Tuple[Position, Position]:
        """Return the unique start and end markers."""

        starts = self.find_cells(Cell.START)
        ends = self.find_cells(Cell.END)
        if len(starts) != 1:
            raise StateError(f"Maze must have exactly one start position, found {len(starts)}")
        if len(ends) != 1:
            raise StateError(f"Maze must have exactly one end position, found {len(ends)}")
        return starts[0], ends[0]

    # ------------------------------------------------------------------

    def clear_path(self) -> None:
        for cells in self._grid:
            for col, cell in enumerate(cells):
                if cell is Cell.PATH:
                    cells[col] = Cell.EMPTY
        self.solved = False
        self.solved_path = None

    def set_solved_path(self, path: Iterable[Position]) -> None:
        positions = [p if isinstance(p, Position) else Position(*p) for p in path]
        if not positions:
            raise ValidationError("Solved path must not be empty")
        for position in positions:
            self._check_bounds(position.row, position.col)
        self.solved_path = positions
        self.solved = True

    def solve(self) -> bool:
        from .solver import solve_maze

        return solve_maze(self)

    def copy(self) -> "Maze":
        clone = Maze(self._height, self._width, self._grid)
        clone.solved = self.solved
        clone.solved_path = list(self.solved_path) if self.solved_path is not None else None
        return clone

    # ------------------------------------------------------------------

    def rows(self) -> List[str]:
        return ["".join(cell.value for cell in cells) for cells in self._grid]

    def to_text(self) -> str:
        return "\n".join(self.rows())

    def to_array(self) -> np.ndarray:
        """Grid as a ``uint8`` array of cell codes."""

        return np.array([[cell.code for cell in cells] for cells in self._grid], dtype=np.uint8)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"Maze(height={self._height}, width={self._width}, solved={self.solved})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Maze):
            return NotImplemented
        return self._grid == other._grid and self.solved_path == other.solved_path


__all__ = ["Cell", "Position", "Maze"]
