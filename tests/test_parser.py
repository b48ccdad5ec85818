"""Tile text parsing tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from mosaic.errors import MosaicError, TileParseError
from mosaic.parser import TileParser, load_tiles

DATA = Path(__file__).resolve().parent / "data"


def test_load_example_tiles() -> None:
    """The example file holds nine 10x10 tiles."""
    tiles = load_tiles(DATA / "example_tiles.txt")
    assert [t.id for t in tiles] == [2311, 1951, 1171, 1427, 1489, 2473, 2971, 2729, 3079]
    assert {t.codec.width for t in tiles} == {10}
    assert all(t.interior.shape == (8, 8) for t in tiles)


def test_illegal_character_raises() -> None:
    """Characters other than dark and light are rejected."""
    with pytest.raises(TileParseError, match="illegal"):
        TileParser().parse_block("Tile 1:\n#.#\n.x.\n#.#")


def test_ragged_block_raises() -> None:
    """Every row must be as wide as the block is tall."""
    with pytest.raises(TileParseError, match="width"):
        TileParser().parse_block("Tile 1:\n#.#\n.#\n#.#")


def test_bad_header_raises() -> None:
    """The first line must be a tile header."""
    with pytest.raises(TileParseError, match="header"):
        TileParser().parse_block("Piece 1:\n#.#\n...\n#.#")


def test_mixed_widths_raise() -> None:
    """All tiles share the side length of the first one."""
    text = "Tile 1:\n#.#\n...\n#.#\n\nTile 2:\n#..#\n....\n....\n#..#\n"
    with pytest.raises(TileParseError, match="expected 3"):
        TileParser().parse(text)


def test_duplicate_ids_raise() -> None:
    """Tile ids must be unique."""
    text = "Tile 1:\n#.#\n...\n#.#\n\nTile 1:\n###\n...\n#.#\n"
    with pytest.raises(TileParseError, match="duplicate"):
        TileParser().parse(text)


def test_empty_input_raises() -> None:
    """An input without tiles is malformed."""
    with pytest.raises(TileParseError):
        TileParser().parse("\n\n")


def test_custom_characters() -> None:
    """Dark and light characters are configurable."""
    tile = TileParser(dark="X", light="o").parse_block("Tile 7:\nXoo\noXo\nooX")
    assert tile.id == 7
    assert tile.sides == (0b100, 0b001, 0b100, 0b001)
    assert tile.interior.tolist() == [[True]]


def test_parse_errors_are_value_errors() -> None:
    """Parse failures belong to the puzzle error hierarchy."""
    assert issubclass(TileParseError, MosaicError)
    assert issubclass(TileParseError, ValueError)
