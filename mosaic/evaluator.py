"""Summary metrics for a solved puzzle."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .index import AdjacencyIndex
from .motif import MotifSearchResult
from .solver import SolvedGrid, find_seam_mismatches


@dataclass
class EvaluationResult:
    """Container for puzzle metrics."""

    corner_product: int
    seam_mismatches: int
    dark_cells: int
    motif_cells: int
    roughness: int


def corner_product(index: AdjacencyIndex) -> int:
    """Product of the ids of the four corner tiles."""
    return math.prod(index.corners())


class PuzzleEvaluator:
    """Compute the reported metrics for a solved and searched puzzle."""

    def evaluate(
        self, grid: SolvedGrid, index: AdjacencyIndex, search: MotifSearchResult
    ) -> EvaluationResult:
        dark = int(np.count_nonzero(search.image))
        motif = int(np.count_nonzero(search.covered & search.image))
        return EvaluationResult(
            corner_product=corner_product(index),
            seam_mismatches=len(find_seam_mismatches(grid)),
            dark_cells=dark,
            motif_cells=motif,
            roughness=dark - motif,
        )
