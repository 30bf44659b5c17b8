"""Exception types raised by maze construction and solving."""

from __future__ import annotations


class MazeError(Exception):
    """Base class for maze errors."""


class ValidationError(MazeError, ValueError):
    """Invalid dimension, density, cell tag or endpoint."""


class BoundsError(MazeError, IndexError):
    """Position outside the grid."""


class StateError(MazeError, RuntimeError):
    """Operation not legal in the current builder stage or maze state."""


__all__ = ["MazeError", "ValidationError", "BoundsError", "StateError"]
