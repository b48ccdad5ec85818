"""Demo script: scramble a synthetic picture into tiles and reassemble it."""

from __future__ import annotations

import argparse
import logging
import time

import matplotlib.pyplot as plt
import numpy as np

from mosaic.assembler import assemble
from mosaic.evaluator import PuzzleEvaluator
from mosaic.index import AdjacencyIndex
from mosaic.motif import MotifMatcher
from mosaic.parser import TileParser
from mosaic.solver import GridSolver
from mosaic.transform import ORIENTATIONS
from mosaic.utils import generate_puzzle


def run_demo(
    grid_size: int = 4,
    tile_size: int = 12,
    monsters: int = 3,
    seed: int = 42,
    show: bool = True,
) -> None:
    """Run full pipeline and display original and reconstructed pictures."""
    text, picture = generate_puzzle(grid_size, tile_size, motifs=monsters, seed=seed)
    tiles = TileParser().parse(text)
    index = AdjacencyIndex(tiles)

    start = time.perf_counter()
    grid = GridSolver().solve(tiles, index=index)
    duration = time.perf_counter() - start

    image = assemble(grid)
    search = MotifMatcher().search(image)
    result = PuzzleEvaluator().evaluate(grid, index, search)
    recovered = any(np.array_equal(o.apply(picture), image) for o in ORIENTATIONS)

    print(f"Grid size: {grid_size}x{grid_size}, tile size: {tile_size}")
    print(f"Picture recovered up to orientation: {recovered}")
    print(f"Corner product: {result.corner_product}")
    print(f"Monsters planted: {monsters}, found: {len(search.matches)}")
    print(f"Roughness: {result.roughness}")
    print(f"Solve time: {duration:.4f}s")

    if not show:
        return

    overlay = np.zeros(search.image.shape + (3,), dtype=np.uint8)
    overlay[search.image] = (200, 200, 200)
    overlay[search.covered] = (220, 60, 40)

    fig, axes = plt.subplots(1, 2, figsize=(10, 5))
    axes[0].imshow(picture, cmap="gray", interpolation="nearest")
    axes[0].set_title("Original")
    axes[1].imshow(overlay, interpolation="nearest")
    axes[1].set_title(f"Reconstructed ({search.orientation})")
    for ax in axes:
        ax.axis("off")
    plt.tight_layout()
    plt.show()


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Tile mosaic reconstruction demo")
    parser.add_argument("--grid-size", type=int, default=4, help="Tiles per side, default=4")
    parser.add_argument("--tile-size", type=int, default=12, help="Tile side in pixels, default=12")
    parser.add_argument("--monsters", type=int, default=3, help="Motifs to plant, default=3")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--no-show", action="store_true", help="Do not display images")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    run_demo(
        grid_size=args.grid_size,
        tile_size=args.tile_size,
        monsters=args.monsters,
        seed=args.seed,
        show=not args.no_show,
    )
