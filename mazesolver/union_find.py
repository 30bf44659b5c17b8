"""Disjoint-set forest over grid positions."""

from __future__ import annotations

from typing import Dict, Hashable, Iterable

from .model import Position


class DisjointSet:
    """Union-find with path compression and union by rank.

    Every element must be registered with :meth:`make_set` before it is
    passed to :meth:`find`, :meth:`union` or :meth:`connected`; unknown
    elements raise ``KeyError``.
    """

    def __init__(self, elements: Iterable[Hashable] = ()) -> None:
        self._parent: Dict[Hashable, Hashable] = {}
        self._rank: Dict[Hashable, int] = {}
        for element in elements:
            self.make_set(element)

    def __contains__(self, element: object) -> bool:
        return element in self._parent

    def __len__(self) -> int:
        return len(self._parent)

    def make_set(self, element: Position) -> None:
        self._parent[element] = element
        self._rank[element] = 0

    def find(self, element: Position) -> Position:
        root = element
        while self._parent[root] != root:
            root = self._parent[root]
        # Compress: point every node on the walk straight at the root.
        while self._parent[element] != root:
            self._parent[element], element = root, self._parent[element]
        return root

    def union(self, a: Position, b: Position) -> bool:
        """Merge the sets holding ``a`` and ``b``; False if already joined."""

        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False
        rank_a = self._rank[root_a]
        rank_b = self._rank[root_b]
        if rank_a < rank_b:
            self._parent[root_a] = root_b
        elif rank_a > rank_b:
            self._parent[root_b] = root_a
        else:
            self._parent[root_b] = root_a
            self._rank[root_a] = rank_a + 1
        return True

    def connected(self, a: Position, b: Position) -> bool:
        return self.find(a) == self.find(b)

    def count_sets(self) -> int:
        return sum(1 for element in self._parent if self.find(element) == element)


__all__ = ["DisjointSet"]
