"""End-to-end tests from tile text to roughness."""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np

from mosaic.assembler import assemble, render_image
from mosaic.evaluator import PuzzleEvaluator
from mosaic.index import AdjacencyIndex
from mosaic.motif import MatcherConfig, MotifMatcher
from mosaic.parser import TileParser, load_tiles
from mosaic.solver import GridSolver
from mosaic.utils import generate_puzzle

DATA = Path(__file__).resolve().parent / "data"


def _evaluate(tiles, config: MatcherConfig | None = None):
    index = AdjacencyIndex(tiles)
    grid = GridSolver().solve(tiles, index=index)
    search = MotifMatcher(config=config).search(assemble(grid))
    return search, PuzzleEvaluator().evaluate(grid, index, search)


def test_example_roughness() -> None:
    """The canonical nine-tile example has roughness 273."""
    search, result = _evaluate(load_tiles(DATA / "example_tiles.txt"))
    assert result.roughness == 273
    assert result.dark_cells == 303
    assert result.motif_cells == 30
    assert result.seam_mismatches == 0
    assert result.corner_product == 20899048083289
    assert len(search.matches) == 2


def test_generated_puzzle_with_monsters() -> None:
    """Planted monsters are found after reassembly in either search mode."""
    text, picture = generate_puzzle(grid_size=4, tile_size=12, motifs=3, seed=7)
    expected = int(picture.sum()) - 3 * 15
    tiles = TileParser().parse(text)

    search, result = _evaluate(tiles)
    assert len(search.matches) == 3
    assert result.roughness == expected

    search_all, result_all = _evaluate(tiles, MatcherConfig(search_all_flips=True))
    assert len(search_all.matches) == 3
    assert result_all.roughness == expected


def test_render_marks_motif_cells() -> None:
    """Rendered output keeps the image size and marks covered cells."""
    search, _ = _evaluate(load_tiles(DATA / "example_tiles.txt"))
    text = search.render(mark="O")
    lines = text.split("\n")
    assert len(lines) == 24 and all(len(line) == 24 for line in lines)
    assert text.count("O") == 30
    assert text.count("#") == 273
    plain = render_image(search.image)
    assert plain.count("#") == 303
    assert np.array_equal(np.array([[ch == "#" for ch in line] for line in plain.split("\n")]), search.image)


def test_cli_reports_roughness(monkeypatch, capsys) -> None:
    """The command line script prints the roughness of a tile file."""
    import reconstruct

    monkeypatch.setattr(sys, "argv", ["reconstruct.py", "--input", str(DATA / "example_tiles.txt")])
    assert reconstruct.main() == 0
    out = capsys.readouterr().out
    assert "Roughness: 273" in out
    assert "Corner product: 20899048083289" in out


def test_cli_fails_on_malformed_input(monkeypatch, tmp_path) -> None:
    """Malformed tile text makes the script exit non-zero."""
    import reconstruct

    bad = tmp_path / "bad.txt"
    bad.write_text("Tile 1:\n#x#\n...\n#.#\n", encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["reconstruct.py", "--input", str(bad)])
    assert reconstruct.main() == 1
