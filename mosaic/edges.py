"""Fixed-width bit encoding of tile borders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np


@dataclass(frozen=True)
class EdgeCodec:
    """Encode border pixel sequences of a fixed width as integers."""

    width: int

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("edge width must be a positive integer")

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    def encode(self, pixels: Iterable[bool]) -> int:
        """Fold pixels left to right into an integer, most significant bit first."""
        pattern = 0
        length = 0
        for pixel in pixels:
            pattern = (pattern << 1) | int(bool(pixel))
            length += 1
        if length != self.width:
            raise ValueError(f"Expected edge of width {self.width}, got {length}")
        return pattern

    def decode(self, pattern: int) -> np.ndarray:
        """Return the pixel sequence of a pattern as a boolean array."""
        if pattern < 0 or pattern > self.mask:
            raise ValueError(f"Pattern {pattern} does not fit in {self.width} bits")
        shifts = np.arange(self.width - 1, -1, -1)
        return ((pattern >> shifts) & 1).astype(bool)

    def mirror(self, pattern: int) -> int:
        """Reverse the bit order within the edge width."""
        result = 0
        for _ in range(self.width):
            result = (result << 1) | (pattern & 1)
            pattern >>= 1
        return result

    def is_palindrome(self, pattern: int) -> bool:
        return self.mirror(pattern) == pattern
