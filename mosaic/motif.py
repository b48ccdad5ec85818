"""Search an assembled image for a fixed motif in all eight orientations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

import numpy as np

from .assembler import render_image
from .errors import MotifNotFoundError
from .transform import IDENTITY, ORIENTATIONS, Orientation

logger = logging.getLogger(__name__)

SEA_MONSTER = (
    "                  # \n"
    "#    ##    ##    ###\n"
    " #  #  #  #  #  #   "
)


@dataclass(frozen=True)
class Motif:
    """A rectangular template; ``offsets`` are the (row, col) cells that must be dark."""

    offsets: Tuple[Tuple[int, int], ...]
    height: int
    width: int

    @classmethod
    def from_text(cls, text: str, dark: str = "#") -> "Motif":
        lines = text.strip("\r\n").splitlines()
        offsets = tuple(
            (r, c) for r, line in enumerate(lines) for c, ch in enumerate(line) if ch == dark
        )
        if not offsets:
            raise ValueError("motif has no dark cells")
        return cls(offsets=offsets, height=len(lines), width=max(len(line) for line in lines))


@dataclass
class MatcherConfig:
    """Configuration for the motif search."""

    # Keep searching the remaining orientations after the first one that matches.
    search_all_flips: bool = False


@dataclass(frozen=True)
class MotifMatch:
    orientation: Orientation
    row: int
    col: int


@dataclass
class MotifSearchResult:
    """Outcome of a motif search, expressed in ``orientation``."""

    image: np.ndarray
    orientation: Orientation
    covered: np.ndarray
    matches: List[MotifMatch] = field(default_factory=list)

    @property
    def positions(self) -> List[Tuple[int, int]]:
        return [(m.row, m.col) for m in self.matches if m.orientation == self.orientation]

    @property
    def covered_cells(self) -> Set[Tuple[int, int]]:
        return {(int(r), int(c)) for r, c in zip(*np.nonzero(self.covered))}

    @property
    def roughness(self) -> int:
        return roughness(self.image, self.covered)

    def render(self, dark: str = "#", light: str = ".", mark: str = "O") -> str:
        return render_image(self.image, self.covered, dark=dark, light=light, mark=mark)


def roughness(image: np.ndarray, covered: np.ndarray) -> int:
    """Dark cells minus dark cells covered by the motif."""
    return int(np.count_nonzero(image)) - int(np.count_nonzero(covered & image))


class MotifMatcher:
    """Locate every occurrence of a motif in a boolean image."""

    def __init__(self, motif: Optional[Motif] = None, config: Optional[MatcherConfig] = None) -> None:
        self.motif = motif if motif is not None else Motif.from_text(SEA_MONSTER)
        self.config = config if config is not None else MatcherConfig()

    def find_positions(self, image: np.ndarray) -> List[Tuple[int, int]]:
        """Top-left corners where every motif offset lands on a dark cell."""
        h, w = image.shape
        rows = h - self.motif.height + 1
        cols = w - self.motif.width + 1
        if rows <= 0 or cols <= 0:
            return []
        hits = np.ones((rows, cols), dtype=bool)
        for dy, dx in self.motif.offsets:
            hits &= image[dy : dy + rows, dx : dx + cols]
        return [(int(r), int(c)) for r, c in zip(*np.nonzero(hits))]

    def coverage(self, shape: Tuple[int, int], positions: List[Tuple[int, int]]) -> np.ndarray:
        mask = np.zeros(shape, dtype=bool)
        for r, c in positions:
            for dy, dx in self.motif.offsets:
                mask[r + dy, c + dx] = True
        return mask

    def search(self, image: np.ndarray) -> MotifSearchResult:
        """Search orientations flip-outermost, rotations inner."""
        image = np.asarray(image, dtype=bool)
        if self.config.search_all_flips:
            return self._search_all(image)

        for orientation in ORIENTATIONS:
            oriented = orientation.apply(image)
            positions = self.find_positions(oriented)
            if positions:
                logger.info("found %d motifs at orientation %s", len(positions), orientation)
                return MotifSearchResult(
                    image=oriented,
                    orientation=orientation,
                    covered=self.coverage(oriented.shape, positions),
                    matches=[MotifMatch(orientation, r, c) for r, c in positions],
                )
        raise MotifNotFoundError("motif not found in any orientation")

    def _search_all(self, image: np.ndarray) -> MotifSearchResult:
        covered = np.zeros(image.shape, dtype=bool)
        matches: List[MotifMatch] = []
        for orientation in ORIENTATIONS:
            oriented = orientation.apply(image)
            positions = self.find_positions(oriented)
            if not positions:
                continue
            logger.info("found %d motifs at orientation %s", len(positions), orientation)
            covered |= orientation.invert(self.coverage(oriented.shape, positions))
            matches.extend(MotifMatch(orientation, r, c) for r, c in positions)
        if not matches:
            raise MotifNotFoundError("motif not found in any orientation")
        return MotifSearchResult(image=image.copy(), orientation=IDENTITY, covered=covered, matches=matches)
