#!/usr/bin/env python3
"""Generate mazes over a range of sizes and sort metadata by difficulty."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mazesolver import MazeGenerator, maze_from_text
from mazesolver.base import write_metadata_list
from mazesolver.generator import STRATEGIES


def _difficulty(maze_data: str) -> int:
    """Length of the solver's route through the maze."""

    maze = maze_from_text(maze_data)
    if not maze.solve():
        return 0
    return len(maze.solved_path or [])


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("data/maze_sweep"),
        help="Directory to write maze assets",
    )
    parser.add_argument(
        "--metadata",
        type=Path,
        default=None,
        help="Optional path for the difficulty-sorted metadata JSON",
    )
    parser.add_argument("--min-size", type=int, default=5, help="Smallest height/width")
    parser.add_argument("--max-size", type=int, default=21, help="Largest height/width")
    parser.add_argument("--step", type=int, default=4, help="Size increment between batches")
    parser.add_argument("--per-size", type=int, default=3, help="Mazes per size and strategy")
    parser.add_argument(
        "--strategy",
        choices=STRATEGIES + ("all",),
        default="all",
        help="Generation strategy, or 'all' for every strategy",
    )
    parser.add_argument("--density", type=float, default=MazeGenerator.DEFAULT_WALL_DENSITY)
    parser.add_argument("--cell-size", type=int, default=MazeGenerator.DEFAULT_CELL_SIZE)
    parser.add_argument("--seed", type=int, default=None, help="Optional RNG seed")
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    strategies = STRATEGIES if args.strategy == "all" else (args.strategy,)
    sizes = list(range(args.min_size, args.max_size + 1, args.step))
    if not sizes:
        raise ValueError(f"No sizes between {args.min_size} and {args.max_size}")

    records: List[dict] = []
    for strategy in strategies:
        for size in sizes:
            generator = MazeGenerator(
                args.output_dir,
                height=size,
                width=size,
                strategy=strategy,
                wall_density=args.density,
                cell_size=args.cell_size,
                seed=None if args.seed is None else args.seed + size,
            )
            for record in generator.generate_dataset(args.per_size):
                record_dict = record.to_dict()
                record_dict["difficulty"] = _difficulty(record.maze_data)
                records.append(record_dict)
            logging.info("Generated %d %s mazes of size %d", args.per_size, strategy, size)

    records.sort(key=lambda item: (item["difficulty"], item["id"]))

    metadata_path = args.metadata or (args.output_dir / "puzzles.json")
    write_metadata_list(metadata_path, records)
    logging.info("Wrote %d mazes to %s", len(records), metadata_path)


if __name__ == "__main__":
    main()
