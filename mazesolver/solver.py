"""Depth-first maze solver."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Set, Tuple

from .model import Cell, Maze, Position

logger = logging.getLogger(__name__)


def find_path(maze: Maze, start: Position, end: Position) -> Optional[List[Position]]:
    """First path found from ``start`` to ``end`` avoiding walls.

    Neighbours are tried up, down, left, right. The visited set is shared by
    the whole search, so each cell is expanded at most once. Returns ``None``
    when ``end`` is unreachable.
    """

    visited: Set[Position] = {start}
    path: List[Position] = [start]
    stack: List[Tuple[Position, Iterator[Position]]] = [(start, iter(start.neighbors()))]
    while stack:
        current, candidates = stack[-1]
        if current == end:
            return path
        advanced = False
        for neighbor in candidates:
            if neighbor in visited or not maze.contains(neighbor):
                continue
            if maze[neighbor] is Cell.WALL:
                continue
            visited.add(neighbor)
            path.append(neighbor)
            stack.append((neighbor, iter(neighbor.neighbors())))
            advanced = True
            break
        if not advanced:
            stack.pop()
            path.pop()
    return None


def solve_maze(maze: Maze) -> bool:
    """Solve ``maze`` in place.

    On success the empty cells along the route become ``PATH`` and the route
    is stored as the maze's solved path. Raises
    :class:`~mazesolver.errors.StateError` unless the maze has exactly one
    start and one end.
    """

    start, end = maze.endpoints()
    if maze.solved:
        maze.clear_path()
    path = find_path(maze, start, end)
    if path is None:
        logger.debug("No path from %s to %s", start, end)
        return False
    for position in path:
        if maze[position] is Cell.EMPTY:
            maze[position] = Cell.PATH
    maze.set_solved_path(path)
    logger.debug("Solved %dx%d maze with a %d-cell path", maze.height, maze.width, len(path))
    return True


__all__ = ["find_path", "solve_maze"]
