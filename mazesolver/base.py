"""Abstract interfaces for maze dataset generation and metadata access."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, Iterable, List, Optional, TypeVar, Union

from .model import Maze

PathLike = Union[str, Path]
RecordT = TypeVar("RecordT")

logger = logging.getLogger(__name__)


def read_metadata(metadata_path: PathLike) -> List[Dict[str, Any]]:
    raw = json.loads(Path(metadata_path).read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError("Maze metadata must be a list of records")
    return raw


def write_metadata_list(metadata_path: PathLike, payload: List[Dict[str, Any]]) -> None:
    path = Path(metadata_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


class AbstractMazeGenerator(ABC, Generic[RecordT]):
    """Base class for dataset builders that emit maze records.

    Rendered images live under ``output_dir/puzzles`` and
    ``output_dir/solutions``; records refer to them by paths relative to
    ``output_dir``, which is also where the metadata file is expected so a
    :class:`AbstractMetadataStore` can resolve them again.
    """

    IMAGE_KINDS = ("puzzle", "solution")

    def __init__(self, output_dir: PathLike) -> None:
        self.output_dir = Path(output_dir)
        for kind in self.IMAGE_KINDS:
            (self.output_dir / f"{kind}s").mkdir(parents=True, exist_ok=True)

    @abstractmethod
    def build_maze(self) -> Maze:
        """Build one unsolved maze from the configured options."""

    @abstractmethod
    def create_puzzle(self, *, puzzle_id: Optional[str] = None) -> RecordT:
        """Build a maze, render it and wrap it in a record."""

    def create_random_puzzle(self) -> RecordT:
        return self.create_puzzle()

    def image_path(self, kind: str, maze_id: str) -> Path:
        if kind not in self.IMAGE_KINDS:
            raise ValueError(f"Unknown image kind {kind!r}")
        return self.output_dir / f"{kind}s" / f"{maze_id}_{kind}.png"

    def relativize_path(self, path: Path) -> str:
        try:
            return path.relative_to(self.output_dir).as_posix()
        except ValueError:
            return path.as_posix()

    def generate_dataset(
        self,
        count: int,
        *,
        metadata_path: Optional[PathLike] = None,
        append: bool = True,
    ) -> List[RecordT]:
        """Generate a batch of mazes and optionally persist metadata."""

        records = [self.create_random_puzzle() for _ in range(count)]
        logger.info("Generated %d maze(s) in %s", len(records), self.output_dir)
        if metadata_path is not None:
            self.write_metadata(records, metadata_path, append=append)
        return records

    def write_metadata(
        self,
        records: Iterable[RecordT],
        metadata_path: PathLike,
        *,
        append: bool = True,
    ) -> None:
        """Merge records into the metadata file keyed by maze id.

        With ``append`` the existing entries are kept and a record whose id is
        already present replaces the old entry in place; otherwise the file is
        overwritten.
        """

        path = Path(metadata_path)
        merged: Dict[str, Dict[str, Any]] = {}
        if append and path.exists():
            merged = {str(entry["id"]): entry for entry in read_metadata(path)}
        replaced = 0
        for record in records:
            entry = self.record_to_dict(record)
            if entry["id"] in merged:
                replaced += 1
            merged[entry["id"]] = entry
        write_metadata_list(path, list(merged.values()))
        logger.info("Wrote %d record(s) to %s (%d replaced)", len(merged), path, replaced)

    def record_to_dict(self, record: RecordT) -> Dict[str, Any]:
        to_dict = getattr(record, "to_dict", None)
        if to_dict is None:
            raise TypeError(
                f"{type(record).__name__} has no to_dict(); override record_to_dict() in the generator"
            )
        return to_dict()


class AbstractMetadataStore(ABC):
    """Keyed access to a JSON metadata file written by a generator."""

    def __init__(
        self,
        metadata_path: PathLike,
        *,
        base_dir: Optional[PathLike] = None,
    ) -> None:
        self.metadata_path = Path(metadata_path)
        if not self.metadata_path.exists():
            raise FileNotFoundError(f"Metadata file not found: {self.metadata_path}")
        self.base_dir = Path(base_dir) if base_dir is not None else self.metadata_path.parent
        self._records = self._load_metadata()

    @property
    def records(self) -> Dict[str, Dict[str, Any]]:
        """Return the loaded metadata keyed by maze id."""

        return self._records

    def _load_metadata(self) -> Dict[str, Dict[str, Any]]:
        records: Dict[str, Dict[str, Any]] = {}
        for record in read_metadata(self.metadata_path):
            maze_id = record.get("id")
            if not maze_id:
                raise ValueError("Each maze record must include an 'id'")
            records[str(maze_id)] = record
        return records

    def save(self) -> None:
        write_metadata_list(self.metadata_path, list(self._records.values()))

    def get_record(self, maze_id: str) -> Dict[str, Any]:
        try:
            return self._records[maze_id]
        except KeyError as exc:
            raise KeyError(f"Maze id '{maze_id}' not found in metadata") from exc

    def resolve_path(self, path_value: object) -> Path:
        """Anchor a record's relative image path at ``base_dir``."""

        candidate = Path(str(path_value))
        if not candidate.is_absolute():
            candidate = self.base_dir / candidate
        return candidate

    @abstractmethod
    def solve(self, maze_id: str, *args, **kwargs):
        """Solve the stored maze with the given id."""


__all__ = [
    "AbstractMazeGenerator",
    "AbstractMetadataStore",
    "PathLike",
    "read_metadata",
    "write_metadata_list",
]
