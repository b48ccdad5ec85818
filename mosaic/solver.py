"""Place oriented tiles into a square grid."""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .errors import AdjacencyError
from .index import AdjacencyIndex, TileKind
from .tile import Side, Tile

logger = logging.getLogger(__name__)


@dataclass
class SolverConfig:
    """Configuration for the grid solver."""

    start_corner: Optional[int] = None
    verify: bool = True


@dataclass
class SolvedGrid:
    """Square arrangement of oriented tiles, row-major."""

    tiles: List[List[Tile]]

    @property
    def side(self) -> int:
        return len(self.tiles)

    @property
    def ids(self) -> np.ndarray:
        return np.array([[tile.id for tile in row] for row in self.tiles], dtype=np.int64)

    def __getitem__(self, pos: Tuple[int, int]) -> Tile:
        r, c = pos
        return self.tiles[r][c]


def find_seam_mismatches(grid: SolvedGrid) -> List[Tuple[Tuple[int, int], Tuple[int, int]]]:
    """Return pairs of adjacent cells whose touching sides disagree."""
    out: List[Tuple[Tuple[int, int], Tuple[int, int]]] = []
    side = grid.side
    for r in range(side):
        for c in range(side):
            cur = grid.tiles[r][c]
            if c + 1 < side:
                right = grid.tiles[r][c + 1]
                if cur.right != cur.codec.mirror(right.left):
                    out.append(((r, c), (r, c + 1)))
            if r + 1 < side:
                down = grid.tiles[r + 1][c]
                if cur.bottom != cur.codec.mirror(down.top):
                    out.append(((r, c), (r + 1, c)))
    return out


def grid_side(n: int) -> int:
    """Return the side of a square grid holding ``n`` tiles."""
    side = math.isqrt(n)
    if side * side != n:
        raise AdjacencyError(f"{n} tiles cannot form a square grid")
    if side < 2:
        raise AdjacencyError("at least a 2x2 grid is required")
    return side


class GridSolver:
    """Deterministic row-by-row solver for uniquely matching tile sets."""

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        self.config = config if config is not None else SolverConfig()

    def solve(self, tiles: Sequence[Tile], index: Optional[AdjacencyIndex] = None) -> SolvedGrid:
        """Return the grid of oriented tiles. Input tiles are not modified."""
        if index is None:
            index = AdjacencyIndex(tiles)
        elif sorted(tile.id for tile in tiles) != index.tile_ids:
            raise ValueError("tiles do not match the adjacency index")
        side = grid_side(len(index))
        corners = self._check_classes(index, side)

        start = self.config.start_corner if self.config.start_corner is not None else corners[0]
        if start not in corners:
            raise AdjacencyError(f"tile {start} is not a corner; corners are {corners}")
        logger.info("solving %dx%d grid from corner %d", side, side, start)

        rows: List[List[Tile]] = []
        for r in range(side):
            if r == 0:
                first = self._orient_anchor(index.tile(start).copy(), index)
            else:
                first = self._place_below(rows[r - 1][0], index)
            row = [first]
            for c in range(1, side):
                above = rows[r - 1][c] if r > 0 else None
                row.append(self._place_right(row[c - 1], above, index))
            rows.append(row)
            logger.debug("row %d: %s", r, [tile.id for tile in row])

        last_start = rows[-1][0]
        extra = index.other_tile(last_start.codec.mirror(last_start.bottom), last_start.id)
        if extra is not None:
            raise AdjacencyError(f"tile {extra.id} continues below the last row")

        grid = SolvedGrid(tiles=rows)
        if self.config.verify:
            self._verify(grid)
        return grid

    def _check_classes(self, index: AdjacencyIndex, side: int) -> List[int]:
        """Check the corner/edge/interior histogram of a side x side grid."""
        kinds = {tid: index.classify(index.tile(tid)) for tid in index.tile_ids}
        counts = Counter(kinds.values())
        expected = {
            TileKind.CORNER: 4,
            TileKind.EDGE: 4 * (side - 2),
            TileKind.INTERIOR: (side - 2) ** 2,
        }
        for kind, want in expected.items():
            if counts[kind] != want:
                raise AdjacencyError(
                    f"expected {want} {kind.name.lower()} tiles for a {side}x{side} grid, "
                    f"found {counts[kind]}"
                )
        return sorted(tid for tid, kind in kinds.items() if kind == TileKind.CORNER)

    @staticmethod
    def _orient_anchor(tile: Tile, index: AdjacencyIndex) -> Tile:
        """Turn a corner so its shared sides face right and down."""
        for _ in range(4):
            if index.count(tile.right) == 2 and index.count(tile.bottom) == 2:
                return tile
            tile.rotate()
        raise AdjacencyError(f"corner {tile.id} has no adjacent pair of shared sides")

    @staticmethod
    def _neighbor(pattern: int, current: Tile, index: AdjacencyIndex) -> Tile:
        found = index.other_tile(pattern, current.id)
        if found is None:
            raise AdjacencyError(f"no tile matches pattern {pattern:#x} next to tile {current.id}")
        return found.copy()

    def _place_right(self, left: Tile, above: Optional[Tile], index: AdjacencyIndex) -> Tile:
        target = left.codec.mirror(left.right)
        tile = self._neighbor(target, left, index).orient_to(target, Side.LEFT)
        # A palindromic seam leaves the vertical mirror undetermined.
        if above is None:
            misplaced = index.count(tile.top) != 1
        else:
            misplaced = tile.top != above.codec.mirror(above.bottom)
        if misplaced:
            logger.debug("mirroring tile %d vertically", tile.id)
            tile.flip_vertical()
        return tile

    def _place_below(self, upper: Tile, index: AdjacencyIndex) -> Tile:
        target = upper.codec.mirror(upper.bottom)
        tile = self._neighbor(target, upper, index).orient_to(target, Side.TOP)
        if index.count(tile.right) == 1:
            logger.debug("mirroring row start %d", tile.id)
            tile.flip()
        return tile

    @staticmethod
    def _verify(grid: SolvedGrid) -> None:
        mismatches = find_seam_mismatches(grid)
        if mismatches:
            raise AdjacencyError(f"{len(mismatches)} seams do not match, first at {mismatches[0]}")
