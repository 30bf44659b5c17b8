"""Maze dataset generator producing grids, images and JSON metadata."""

from __future__ import annotations

import argparse
import logging
import random
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple

from .base import AbstractMazeGenerator, PathLike
from .builder import MazeBuilder
from .errors import ValidationError
from .model import Maze
from .render import render_maze
from .serialization import positions_to_lists

logger = logging.getLogger(__name__)

STRATEGIES = ("random", "kruskal")


@dataclass
class MazeRecord:
    id: str
    strategy: str
    grid_size: Tuple[int, int]
    maze_data: str
    start: Tuple[int, int]
    end: Tuple[int, int]
    solved: bool
    solution_path: Optional[List[List[int]]]
    cell_size: int
    puzzle_image_path: str
    solution_image_path: str
    created_at: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "strategy": self.strategy,
            "grid_size": list(self.grid_size),
            "height": self.grid_size[0],
            "width": self.grid_size[1],
            "maze_data": self.maze_data,
            "start": list(self.start),
            "end": list(self.end),
            "solved": self.solved,
            "solution_path": self.solution_path,
            "cell_size": self.cell_size,
            "puzzle_image_path": self.puzzle_image_path,
            "solution_image_path": self.solution_image_path,
            "created_at": self.created_at,
        }


class MazeGenerator(AbstractMazeGenerator[MazeRecord]):
    """Generate unsolved mazes together with rendered puzzle and solution images."""

    DEFAULT_HEIGHT = 15
    DEFAULT_WIDTH = 15
    DEFAULT_CELL_SIZE = 16
    DEFAULT_WALL_DENSITY = 0.3

    def __init__(
        self,
        output_dir: PathLike = "data/maze",
        *,
        height: int = DEFAULT_HEIGHT,
        width: int = DEFAULT_WIDTH,
        strategy: str = "random",
        wall_density: float = DEFAULT_WALL_DENSITY,
        cell_size: int = DEFAULT_CELL_SIZE,
        seed: Optional[int] = None,
    ) -> None:
        if strategy not in STRATEGIES:
            raise ValidationError(f"Unknown strategy {strategy!r}; expected one of {', '.join(STRATEGIES)}")
        if not 0.0 <= wall_density <= 1.0:
            raise ValidationError("wall_density must be between 0.0 and 1.0")
        if cell_size <= 0:
            raise ValidationError("cell_size must be positive")
        super().__init__(output_dir)
        self.height = height
        self.width = width
        self.strategy = strategy
        self.wall_density = wall_density
        self.cell_size = cell_size
        self._rng = random.Random(seed)

    def build_maze(self) -> Maze:
        positions = MazeBuilder.builder(rng=self._rng).height(self.height).width(self.width)
        if self.strategy == "kruskal":
            return positions.with_kruskal_maze().build()
        return (
            positions.random_start_and_end()
            .with_random_path()
            .with_random_walls(self.wall_density)
            .with_perimeter_walls()
            .with_empty_path()
            .build()
        )

    def create_puzzle(self, *, puzzle_id: Optional[str] = None) -> MazeRecord:
        puzzle_uuid = puzzle_id or str(uuid.uuid4())
        maze = self.build_maze()
        start, end = maze.endpoints()

        solved = maze.copy()
        if not solved.solve():
            raise RuntimeError("Failed to generate maze path")

        puzzle_path = self.image_path("puzzle", puzzle_uuid)
        solution_path = self.image_path("solution", puzzle_uuid)
        render_maze(maze, self.cell_size).save(puzzle_path)
        render_maze(solved, self.cell_size).save(solution_path)
        logger.debug("Created %s maze %s (%dx%d)", self.strategy, puzzle_uuid, maze.height, maze.width)

        return MazeRecord(
            id=puzzle_uuid,
            strategy=self.strategy,
            grid_size=(maze.height, maze.width),
            maze_data=maze.to_text(),
            start=start.to_tuple(),
            end=end.to_tuple(),
            solved=maze.solved,
            solution_path=positions_to_lists(maze.solved_path) if maze.solved_path else None,
            cell_size=self.cell_size,
            puzzle_image_path=self.relativize_path(puzzle_path),
            solution_image_path=self.relativize_path(solution_path),
            created_at=datetime.now(timezone.utc).isoformat(),
        )


__all__ = ["MazeGenerator", "MazeRecord", "STRATEGIES"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate maze puzzles")
    parser.add_argument("count", type=int, help="Number of mazes to generate")
    parser.add_argument("--output-dir", type=Path, default=Path("data/maze"), help="Where to save assets")
    parser.add_argument("--height", type=int, default=MazeGenerator.DEFAULT_HEIGHT)
    parser.add_argument("--width", type=int, default=MazeGenerator.DEFAULT_WIDTH)
    parser.add_argument("--strategy", choices=STRATEGIES, default="random")
    parser.add_argument(
        "--density",
        type=float,
        default=MazeGenerator.DEFAULT_WALL_DENSITY,
        help="Fraction of empty cells turned into walls (random strategy only)",
    )
    parser.add_argument("--cell-size", type=int, default=MazeGenerator.DEFAULT_CELL_SIZE)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format='%(asctime)s - %(levelname)s - %(message)s')
    generator = MazeGenerator(
        output_dir=args.output_dir,
        height=args.height,
        width=args.width,
        strategy=args.strategy,
        wall_density=args.density,
        cell_size=args.cell_size,
        seed=args.seed,
    )
    metadata_path = generator.output_dir / "puzzles.json"
    generator.generate_dataset(args.count, metadata_path=metadata_path)


if __name__ == "__main__":
    main()
