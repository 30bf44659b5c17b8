"""JSON-backed store for generated mazes."""

from __future__ import annotations

import argparse
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .base import AbstractMetadataStore
from .model import Maze
from .serialization import maze_from_dict, positions_to_lists

logger = logging.getLogger(__name__)

IMAGE_FIELDS = ("puzzle_image_path", "solution_image_path")


class MazeStore(AbstractMetadataStore):
    """Look up, solve and delete mazes recorded in a metadata file."""

    def list_records(self, offset: int = 0, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        if offset < 0:
            raise ValueError("offset must not be negative")
        if limit is not None and limit < 0:
            raise ValueError("limit must not be negative")
        records = list(self._records.values())
        stop = None if limit is None else offset + limit
        return records[offset:stop]

    def load_maze(self, maze_id: str) -> Maze:
        return maze_from_dict(self.get_record(maze_id))

    def image_paths(self, maze_id: str) -> List[Path]:
        """Rendered images of a maze, resolved against ``base_dir``."""

        record = self.get_record(maze_id)
        return [self.resolve_path(record[field]) for field in IMAGE_FIELDS if record.get(field)]

    def solve(self, maze_id: str) -> Optional[Dict[str, Any]]:
        """Solve and persist a stored maze.

        Returns the stored record untouched when it is already solved, and
        ``None`` when no path exists.
        """

        record = self.get_record(maze_id)
        if record.get("solved") and record.get("solution_path"):
            return record

        maze = self.load_maze(maze_id)
        if not maze.solve():
            logger.info("Maze %s has no solution", maze_id)
            return None

        assert maze.solved_path is not None
        record["maze_data"] = maze.to_text()
        record["solved"] = True
        record["solution_path"] = positions_to_lists(maze.solved_path)
        record["updated_at"] = datetime.now(timezone.utc).isoformat()
        self.save()
        logger.info("Solved maze %s with %d steps", maze_id, len(maze.solved_path))
        return record

    def delete(self, maze_id: str, *, remove_images: bool = True) -> None:
        """Drop a maze from the metadata, and its rendered images unless told not to."""

        images = self.image_paths(maze_id)
        del self._records[maze_id]
        self.save()
        if remove_images:
            for image in images:
                if image.exists():
                    image.unlink()
                else:
                    logger.warning("Image %s for maze %s is already gone", image, maze_id)
        logger.info("Deleted maze %s", maze_id)


__all__ = ["MazeStore"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Solve a stored maze")
    parser.add_argument("metadata", type=Path, help="Path to maze metadata JSON")
    parser.add_argument("maze_id", type=str, help="Identifier of the maze to solve")
    parser.add_argument(
        "--base-dir",
        type=Path,
        default=None,
        help="Directory image paths are relative to (defaults to the metadata file's directory)",
    )
    parser.add_argument(
        "--delete",
        action="store_true",
        help="Delete the maze and its images instead of solving it",
    )
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format='%(asctime)s - %(levelname)s - %(message)s')
    store = MazeStore(args.metadata, base_dir=args.base_dir)
    if args.delete:
        store.delete(args.maze_id)
        print(json.dumps({"id": args.maze_id, "deleted": True}, indent=2))
        return
    record = store.solve(args.maze_id)
    if record is None:
        print(json.dumps({"id": args.maze_id, "solved": False}, indent=2))
        return
    maze = store.load_maze(args.maze_id)
    print(maze.to_text())
    print(json.dumps({"id": args.maze_id, "solved": True, "solution_path": record["solution_path"]}, indent=2))


if __name__ == "__main__":
    main()
