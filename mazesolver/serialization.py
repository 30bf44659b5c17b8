"""Text and position-list forms of a maze."""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .errors import ValidationError
from .model import Maze, Position

_PAIR = r"\(\s*-?\d+\s*,\s*-?\d+\s*\)"
_BRACKET_PAIR = re.compile(r"\(\s*(-?\d+)\s*,\s*(-?\d+)\s*\)")
_BRACKET_BODY = re.compile(rf"{_PAIR}(?:\s*,\s*{_PAIR})*")
_PLAIN_PAIR = re.compile(r"(-?\d+)\s*,\s*(-?\d+)")


def maze_to_text(maze: Maze) -> str:
    return maze.to_text()


def maze_from_text(
    text: str,
    height: Optional[int] = None,
    width: Optional[int] = None,
) -> Maze:
    """Rebuild a maze from its newline-joined rows.

    A single trailing newline is tolerated. ``height`` and ``width`` default
    to the dimensions of the text and are cross-checked when given.
    """

    rows = text.split("\n")
    if len(rows) > 1 and rows[-1] == "":
        rows.pop()
    if not rows or not rows[0]:
        raise ValidationError("Maze text is empty")
    actual_height = len(rows)
    actual_width = len(rows[0])
    if height is not None and height != actual_height:
        raise ValidationError(f"Declared height {height} does not match {actual_height} rows")
    if width is not None and width != actual_width:
        raise ValidationError(f"Declared width {width} does not match row width {actual_width}")
    return Maze(actual_height, actual_width, [list(row) for row in rows])


def format_positions(path: Iterable[Position], style: str = "bracket") -> str:
    """Serialize positions as ``[(r,c), (r,c)]`` or ``r,c;r,c``."""

    positions = list(path)
    if style == "bracket":
        return "[" + ", ".join(f"({p.row},{p.col})" for p in positions) + "]"
    if style == "semicolon":
        return ";".join(f"{p.row},{p.col}" for p in positions)
    raise ValueError(f"Unknown position style: {style!r}")


def parse_positions(text: Optional[str]) -> List[Position]:
    """Parse either form written by :func:`format_positions`."""

    if text is None:
        return []
    body = text.strip()
    if body.startswith("[") and body.endswith("]"):
        body = body[1:-1].strip()
        if not body:
            return []
        if _BRACKET_BODY.fullmatch(body) is None:
            raise ValidationError(f"Malformed position list: {text!r}")
        return [Position(int(m.group(1)), int(m.group(2))) for m in _BRACKET_PAIR.finditer(body)]

    positions: List[Position] = []
    for chunk in body.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        match = _PLAIN_PAIR.fullmatch(chunk)
        if match is None:
            raise ValidationError(f"Malformed position: {chunk!r}")
        positions.append(Position(int(match.group(1)), int(match.group(2))))
    return positions


def maze_to_dict(maze: Maze) -> Dict[str, Any]:
    start = maze.start
    end = maze.end
    return {
        "height": maze.height,
        "width": maze.width,
        "maze_data": maze.to_text(),
        "start": list(start.to_tuple()) if start is not None else None,
        "end": list(end.to_tuple()) if end is not None else None,
        "solved": maze.solved,
        "solution_path": [list(p.to_tuple()) for p in maze.solved_path] if maze.solved_path else None,
    }


def maze_from_dict(payload: Dict[str, Any]) -> Maze:
    maze = maze_from_text(
        payload["maze_data"],
        height=payload.get("height"),
        width=payload.get("width"),
    )
    solution = payload.get("solution_path")
    if payload.get("solved") and solution:
        maze.set_solved_path(_coerce_positions(solution))
    return maze


def _coerce_positions(values: Any) -> List[Position]:
    if isinstance(values, str):
        return parse_positions(values)
    return [Position(int(row), int(col)) for row, col in values]


def positions_to_lists(path: Sequence[Position]) -> List[List[int]]:
    return [list(p.to_tuple()) for p in path]


__all__ = [
    "format_positions",
    "maze_from_dict",
    "maze_from_text",
    "maze_to_dict",
    "maze_to_text",
    "parse_positions",
    "positions_to_lists",
]
