"""Benchmark solver runtime across grid sizes."""

from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mosaic.assembler import assemble
from mosaic.index import AdjacencyIndex
from mosaic.motif import MotifMatcher
from mosaic.parser import TileParser
from mosaic.solver import GridSolver
from mosaic.transform import ORIENTATIONS
from mosaic.utils import generate_puzzle


@dataclass
class BenchmarkRow:
    grid: str
    seeds: int
    recovered: int
    roughness_mean: float
    solve_mean_sec: float
    search_mean_sec: float


@dataclass
class CaseResult:
    recovered: bool
    roughness: int
    solve_sec: float
    search_sec: float


def run_case(grid_size: int, tile_size: int, seed: int, monsters: int) -> CaseResult:
    text, picture = generate_puzzle(grid_size, tile_size, motifs=monsters, seed=seed)
    tiles = TileParser().parse(text)
    index = AdjacencyIndex(tiles)

    t0 = time.perf_counter()
    grid = GridSolver().solve(tiles, index=index)
    solve_sec = time.perf_counter() - t0

    image = assemble(grid)
    t0 = time.perf_counter()
    search = MotifMatcher().search(image)
    search_sec = time.perf_counter() - t0

    return CaseResult(
        recovered=any(np.array_equal(o.apply(picture), image) for o in ORIENTATIONS),
        roughness=search.roughness,
        solve_sec=solve_sec,
        search_sec=search_sec,
    )


def run_case_multi_seed(grid_size: int, tile_size: int, seeds: List[int], monsters: int) -> BenchmarkRow:
    results = [run_case(grid_size, tile_size, seed=seed, monsters=monsters) for seed in seeds]
    return BenchmarkRow(
        grid=f"{grid_size}x{grid_size}",
        seeds=len(seeds),
        recovered=sum(r.recovered for r in results),
        roughness_mean=float(np.mean([r.roughness for r in results])),
        solve_mean_sec=float(np.mean([r.solve_sec for r in results])),
        search_mean_sec=float(np.mean([r.search_sec for r in results])),
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run mosaic benchmark on multiple grid sizes.")
    parser.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        default=[3, 6, 12],
        help="Grid sizes to benchmark (default: 3 6 12)",
    )
    parser.add_argument("--tile-size", type=int, default=24, help="Tile side in pixels (default: 24)")
    parser.add_argument("--monsters", type=int, default=2, help="Motifs planted per puzzle (default: 2)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument(
        "--num-seeds",
        type=int,
        default=1,
        help="Number of seeds to evaluate per grid (default: 1)",
    )
    return parser.parse_args()


def print_table(rows: List[BenchmarkRow]) -> None:
    header = (
        f"{'Grid':<8}{'Seeds':>7}{'Recovered':>11}{'RoughMean':>11}"
        f"{'Solve(s)':>11}{'Search(s)':>11}"
    )
    print(header)
    print("-" * len(header))
    for row in rows:
        print(
            f"{row.grid:<8}"
            f"{row.seeds:>7d}"
            f"{row.recovered:>11d}"
            f"{row.roughness_mean:>11.1f}"
            f"{row.solve_mean_sec:>11.4f}"
            f"{row.search_mean_sec:>11.4f}"
        )


def main() -> None:
    args = parse_args()
    seeds = [args.seed + i for i in range(args.num_seeds)]
    rows = [
        run_case_multi_seed(size, args.tile_size, seeds=seeds, monsters=args.monsters)
        for size in args.sizes
    ]
    print_table(rows)


if __name__ == "__main__":
    main()
