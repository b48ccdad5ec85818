"""The eight rotate/flip symmetries of a square pixel block."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np


def rotate_cw(block: np.ndarray) -> np.ndarray:
    """Rotate 90 degrees clockwise: cell (r, c) moves to (c, max - r)."""
    return np.rot90(block, k=-1).copy()


def flip_x(block: np.ndarray) -> np.ndarray:
    """Mirror columns (left becomes right)."""
    return np.fliplr(block).copy()


@dataclass(frozen=True)
class Orientation:
    """A state of the D4 group: optional column mirror followed by clockwise turns."""

    flipped: bool = False
    rotations: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.rotations < 4:
            raise ValueError("rotations must be in [0, 4)")

    def apply(self, block: np.ndarray) -> np.ndarray:
        """Return the block as seen in this orientation."""
        out = np.fliplr(block) if self.flipped else block
        return np.rot90(out, k=-self.rotations).copy()

    def invert(self, block: np.ndarray) -> np.ndarray:
        """Map a block in this orientation back to the identity frame."""
        out = np.rot90(block, k=self.rotations)
        if self.flipped:
            out = np.fliplr(out)
        return out.copy()

    def __str__(self) -> str:
        return f"{'flipped' if self.flipped else 'unflipped'}+{90 * self.rotations}deg"


IDENTITY = Orientation()

# Search order: flip state outermost, clockwise rotations inner.
ORIENTATIONS: List[Orientation] = [
    Orientation(flipped=flipped, rotations=k) for flipped in (False, True) for k in range(4)
]
