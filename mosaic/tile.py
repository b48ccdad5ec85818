"""Square tiles with clockwise border patterns and an interior pixel block."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Set, Tuple

import numpy as np

from .edges import EdgeCodec
from .errors import AdjacencyError
from .transform import flip_x, rotate_cw


class Side(IntEnum):
    """Index of a border in the clockwise side tuple."""

    TOP = 0
    RIGHT = 1
    BOTTOM = 2
    LEFT = 3


@dataclass(eq=False)
class Tile:
    """A puzzle tile; transforms mutate in place and return the tile."""

    id: int
    sides: Tuple[int, int, int, int]
    interior: np.ndarray
    codec: EdgeCodec

    @classmethod
    def from_block(cls, tile_id: int, block: np.ndarray, codec: EdgeCodec) -> "Tile":
        """Create a tile from a full square block, reading its borders clockwise."""
        block = np.asarray(block, dtype=bool)
        if block.ndim != 2 or block.shape[0] != block.shape[1]:
            raise ValueError("tile block must be a square 2D array")
        sides = (
            codec.encode(block[0, :]),
            codec.encode(block[:, -1]),
            codec.encode(block[-1, ::-1]),
            codec.encode(block[::-1, 0]),
        )
        return cls(id=tile_id, sides=sides, interior=block[1:-1, 1:-1].copy(), codec=codec)

    @property
    def top(self) -> int:
        return self.sides[Side.TOP]

    @property
    def right(self) -> int:
        return self.sides[Side.RIGHT]

    @property
    def bottom(self) -> int:
        return self.sides[Side.BOTTOM]

    @property
    def left(self) -> int:
        return self.sides[Side.LEFT]

    def copy(self) -> "Tile":
        return Tile(id=self.id, sides=self.sides, interior=self.interior.copy(), codec=self.codec)

    def rotate(self) -> "Tile":
        """Rotate 90 degrees clockwise."""
        top, right, bottom, left = self.sides
        self.sides = (left, top, right, bottom)
        self.interior = rotate_cw(self.interior)
        return self

    def flip(self) -> "Tile":
        """Mirror horizontally; every side is now read in the opposite direction."""
        top, right, bottom, left = self.sides
        mirror = self.codec.mirror
        self.sides = (mirror(top), mirror(left), mirror(bottom), mirror(right))
        self.interior = flip_x(self.interior)
        return self

    def flip_vertical(self) -> "Tile":
        """Mirror top to bottom."""
        return self.flip().rotate().rotate()

    def possible_sides(self) -> Set[int]:
        """All patterns this tile can present on any side in any orientation."""
        out: Set[int] = set()
        for side in self.sides:
            out.add(side)
            out.add(self.codec.mirror(side))
        return out

    def orient_to(self, target: int, side: int) -> "Tile":
        """Rotate and flip until ``sides[side] == target``."""
        for _ in range(2):
            if self.sides[side] == target:
                return self
            if target in self.sides:
                current = self.sides.index(target)
                for _ in range((side - current) % 4):
                    self.rotate()
                return self
            self.flip()
        raise AdjacencyError(
            f"Tile {self.id} cannot present pattern {target:#x} on side {Side(side).name}"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return (
            self.id == other.id
            and self.sides == other.sides
            and np.array_equal(self.interior, other.interior)
        )

    def __repr__(self) -> str:
        sides = ", ".join(f"{s:#x}" for s in self.sides)
        return f"Tile(id={self.id}, sides=({sides}), interior={self.interior.shape})"
