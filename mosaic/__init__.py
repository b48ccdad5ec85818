"""Reassemble a picture from square tiles and measure its roughness."""

from .assembler import assemble, render_image
from .edges import EdgeCodec
from .errors import AdjacencyError, MosaicError, MotifNotFoundError, TileParseError
from .evaluator import EvaluationResult, PuzzleEvaluator, corner_product
from .index import AdjacencyIndex, TileKind
from .motif import SEA_MONSTER, MatcherConfig, Motif, MotifMatcher, MotifSearchResult
from .parser import TileParser, load_tiles
from .solver import GridSolver, SolvedGrid, SolverConfig
from .tile import Side, Tile
from .transform import ORIENTATIONS, Orientation

__all__ = [
    "EdgeCodec",
    "Side",
    "Tile",
    "Orientation",
    "ORIENTATIONS",
    "TileParser",
    "load_tiles",
    "AdjacencyIndex",
    "TileKind",
    "SolverConfig",
    "SolvedGrid",
    "GridSolver",
    "assemble",
    "render_image",
    "SEA_MONSTER",
    "Motif",
    "MatcherConfig",
    "MotifMatcher",
    "MotifSearchResult",
    "EvaluationResult",
    "PuzzleEvaluator",
    "corner_product",
    "MosaicError",
    "TileParseError",
    "AdjacencyError",
    "MotifNotFoundError",
]
