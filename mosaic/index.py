"""Edge pattern index used to discover neighbouring tiles."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Dict, Iterable, List, Optional, Set

from .errors import AdjacencyError
from .tile import Tile

logger = logging.getLogger(__name__)


class TileKind(IntEnum):
    """Tile position class, valued by its neighbour count."""

    CORNER = 2
    EDGE = 3
    INTERIOR = 4


class AdjacencyIndex:
    """Map every reachable side pattern to the ids of tiles exposing it."""

    def __init__(self, tiles: Iterable[Tile]) -> None:
        """Build the index once; it is read-only afterwards."""
        self._tiles: Dict[int, Tile] = {}
        self._by_pattern: Dict[int, Set[int]] = {}
        for tile in tiles:
            if tile.id in self._tiles:
                raise AdjacencyError(f"duplicate tile id {tile.id}")
            self._tiles[tile.id] = tile
            for pattern in tile.possible_sides():
                self._by_pattern.setdefault(pattern, set()).add(tile.id)
        logger.debug(
            "indexed %d tiles under %d patterns", len(self._tiles), len(self._by_pattern)
        )

    def __len__(self) -> int:
        return len(self._tiles)

    @property
    def tile_ids(self) -> List[int]:
        return sorted(self._tiles)

    def tile(self, tile_id: int) -> Tile:
        return self._tiles[tile_id]

    def candidates(self, pattern: int) -> Set[int]:
        """Ids of tiles exposing ``pattern`` in some orientation."""
        return set(self._by_pattern.get(pattern, ()))

    def count(self, pattern: int) -> int:
        return len(self._by_pattern.get(pattern, ()))

    def neighbors_of(self, tile: Tile) -> Set[int]:
        """Other tiles sharing any side of ``tile`` or its mirror."""
        out: Set[int] = set()
        for pattern in tile.possible_sides():
            out |= self._by_pattern.get(pattern, set())
        out.discard(tile.id)
        return out

    def classify(self, tile: Tile) -> TileKind:
        count = len(self.neighbors_of(tile))
        try:
            return TileKind(count)
        except ValueError:
            raise AdjacencyError(f"tile {tile.id} has {count} neighbours") from None

    def corners(self) -> List[int]:
        return [tid for tid in self.tile_ids if self.classify(self._tiles[tid]) == TileKind.CORNER]

    def other_tile(self, pattern: int, exclude: int) -> Optional[Tile]:
        """Return the single tile other than ``exclude`` exposing ``pattern``."""
        others = self.candidates(pattern) - {exclude}
        if not others:
            return None
        if len(others) > 1:
            raise AdjacencyError(
                f"pattern {pattern:#x} is shared by {len(others)} tiles besides {exclude}"
            )
        return self._tiles[others.pop()]
