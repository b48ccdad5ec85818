"""Reassemble a tile file, search it for the motif and report its roughness."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from mosaic.assembler import assemble
from mosaic.errors import MosaicError
from mosaic.evaluator import PuzzleEvaluator
from mosaic.index import AdjacencyIndex
from mosaic.motif import MatcherConfig, Motif, MotifMatcher, MotifSearchResult
from mosaic.parser import load_tiles
from mosaic.solver import GridSolver, SolverConfig

logger = logging.getLogger("reconstruct")


def save_image(path: Path, search: MotifSearchResult) -> None:
    """Save the image as PNG with motif cells highlighted."""
    import matplotlib.pyplot as plt

    path.parent.mkdir(parents=True, exist_ok=True)
    plt.imsave(path, _to_rgb(search))


def _to_rgb(search: MotifSearchResult) -> np.ndarray:
    rgb = np.full(search.image.shape + (3,), 230, dtype=np.uint8)
    rgb[search.image] = (30, 60, 110)
    rgb[search.covered] = (220, 60, 40)
    return rgb


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Reassemble tiles and measure roughness.")
    parser.add_argument("--input", required=True, help="Path to the tile text file")
    parser.add_argument("--motif", default=None, help="Optional motif text file (default: sea monster)")
    parser.add_argument("--start-corner", type=int, default=None, help="Corner tile id to anchor the grid")
    parser.add_argument(
        "--search-all-flips",
        action="store_true",
        help="Search all 8 orientations instead of stopping at the first match",
    )
    parser.add_argument("--mark", default="O", help="Character marking motif cells (default: O)")
    parser.add_argument(
        "--output",
        default=None,
        help="Optional output path for a PNG of the assembled image (default: do not save)",
    )
    parser.add_argument("--show", action="store_true", help="Display the assembled image")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def main() -> int:
    """Run the pipeline from tile text to roughness."""
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        tiles = load_tiles(args.input)
        index = AdjacencyIndex(tiles)
        grid = GridSolver(SolverConfig(start_corner=args.start_corner)).solve(tiles, index=index)
        image = assemble(grid)

        motif = Motif.from_text(Path(args.motif).read_text(encoding="utf-8")) if args.motif else None
        matcher = MotifMatcher(motif, MatcherConfig(search_all_flips=args.search_all_flips))
        search = matcher.search(image)
        result = PuzzleEvaluator().evaluate(grid, index, search)
    except MosaicError as exc:
        logger.error("cannot reconstruct %s: %s", args.input, exc)
        return 1

    print(search.render(mark=args.mark))
    print(f"Tiles: {len(tiles)} ({grid.side}x{grid.side})")
    print("Solved grid ids:")
    print(grid.ids)
    print(f"Corner product: {result.corner_product}")
    print(f"Motifs found: {len(search.matches)} at orientation {search.orientation}")
    print(f"Dark cells: {result.dark_cells}, motif cells: {result.motif_cells}")
    print(f"Roughness: {result.roughness}")

    if args.output:
        output_path = Path(args.output)
        save_image(output_path, search)
        print(f"Output image: {output_path.resolve()}")

    if args.show:
        import matplotlib.pyplot as plt

        fig, ax = plt.subplots(figsize=(6, 6))
        ax.imshow(_to_rgb(search), interpolation="nearest")
        ax.set_title(f"Roughness {result.roughness}")
        ax.axis("off")
        plt.tight_layout()
        plt.show()
    return 0


if __name__ == "__main__":
    sys.exit(main())
