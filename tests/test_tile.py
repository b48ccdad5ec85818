"""Tile transform tests."""

from __future__ import annotations

import numpy as np
import pytest

from mosaic.edges import EdgeCodec
from mosaic.errors import AdjacencyError
from mosaic.parser import TileParser
from mosaic.tile import Side, Tile
from mosaic.transform import ORIENTATIONS, flip_x, rotate_cw

TILE_2311 = """Tile 2311:
..##.#..#.
##..#.....
#...##..#.
####.#...#
##.##.###.
##...#.###
.#.#.#..##
..#....#..
###...#.#.
..###..###"""

INTERIOR_2311 = """#..#....
...##..#
###.#...
#.##.###
#...#.##
#.#.#..#
.#....#.
##...#.#"""

def _tile() -> Tile:
    return TileParser().parse_block(TILE_2311)

def _block(text: str) -> np.ndarray:
    return np.array([[ch == "#" for ch in line] for line in text.split("\n")], dtype=bool)

def test_sides_read_clockwise() -> None:
    """Sides are top, right, bottom, left, each read clockwise."""
    tile = _tile()
    assert tile.id == 2311
    assert tile.sides == (0b00110_10010, 0b00010_11001, 0b11100_11100, 0b01001_11110)
    np.testing.assert_array_equal(tile.interior, _block(INTERIOR_2311))

def test_rotate_four_times_is_identity() -> None:
    """Four clockwise turns restore sides and interior."""
    tile = _tile()
    assert tile.copy().rotate().rotate().rotate().rotate() == tile

def test_flip_twice_is_identity() -> None:
    """Two mirrors restore sides and interior."""
    tile = _tile()
    assert tile.copy().flip().flip() == tile

def test_rotate_permutes_sides() -> None:
    """Rotation maps (t, r, b, l) to (l, t, r, b)."""
    tile = _tile()
    top, right, bottom, left = tile.sides
    assert tile.copy().rotate().sides == (left, top, right, bottom)

def test_flip_mirrors_and_swaps_sides() -> None:
    """Mirroring maps (t, r, b, l) to (m(t), m(l), m(b), m(r))."""
    tile = _tile()
    m = tile.codec.mirror
    top, right, bottom, left = tile.sides
    assert tile.copy().flip().sides == (m(top), m(left), m(bottom), m(right))

def test_flip_vertical_mirrors_top_to_bottom() -> None:
    """Vertical mirroring maps (t, r, b, l) to (m(b), m(r), m(t), m(l))."""
    tile = _tile()
    m = tile.codec.mirror
    top, right, bottom, left = tile.sides
    flipped = tile.copy().flip_vertical()
    assert flipped.sides == (m(bottom), m(right), m(top), m(left))
    np.testing.assert_array_equal(flipped.interior, np.flipud(tile.interior))
    assert flipped.flip_vertical() == tile

def test_transforms_agree_with_transformed_block() -> None:
    """Transforming a tile equals parsing the transformed pixel block."""
    block = _block("\n".join(TILE_2311.split("\n")[1:]))
    codec = EdgeCodec(10)
    tile = Tile.from_block(2311, block, codec)
    assert Tile.from_block(2311, rotate_cw(block), codec) == tile.copy().rotate()
    assert Tile.from_block(2311, flip_x(block), codec) == tile.copy().flip()

def test_possible_sides_has_eight_values() -> None:
    """Four raw sides and their mirrors are all distinct for this tile."""
    tile = _tile()
    possible = tile.possible_sides()
    assert len(possible) == 8
    assert set(tile.sides) <= possible

def test_orient_to_reaches_every_pattern_on_every_side() -> None:
    """Any reachable pattern can be placed on any side."""
    tile = _tile()
    for target in tile.possible_sides():
        for side in Side:
            oriented = tile.copy().orient_to(target, side)
            assert oriented.sides[side] == target

def test_orient_to_keeps_interior_consistent() -> None:
    """Orienting moves the interior with the sides."""
    block = _block("\n".join(TILE_2311.split("\n")[1:]))
    codec = EdgeCodec(10)
    tile = Tile.from_block(2311, block, codec)
    target = codec.mirror(tile.right)
    oriented = tile.copy().orient_to(target, Side.TOP)
    candidates = [Tile.from_block(2311, o.apply(block), codec) for o in ORIENTATIONS]
    assert oriented in candidates

def test_orient_to_unreachable_pattern_raises() -> None:
    """A pattern the tile cannot present is a fatal adjacency error."""
    tile = _tile()
    assert 0 not in tile.possible_sides()
    with pytest.raises(AdjacencyError):
        tile.orient_to(0, Side.LEFT)

def test_copy_is_independent() -> None:
    """Transforming a copy leaves the original untouched."""
    tile = _tile()
    sides = tile.sides
    tile.copy().rotate().flip()
    assert tile.sides == sides
