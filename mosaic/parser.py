"""Parse tile text blocks into tiles."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional, Set

import numpy as np

from .edges import EdgeCodec
from .errors import TileParseError
from .tile import Tile

logger = logging.getLogger(__name__)

_HEADER = re.compile(r"^Tile\s+(\d+):\s*$")


class TileParser:
    """Read ``Tile <id>:`` blocks of dark/light characters."""

    def __init__(self, dark: str = "#", light: str = ".") -> None:
        if len(dark) != 1 or len(light) != 1 or dark == light:
            raise ValueError("dark and light must be two distinct single characters")
        self.dark = dark
        self.light = light

    def parse_block(self, text: str, codec: Optional[EdgeCodec] = None) -> Tile:
        """Parse one tile; ``codec`` pins the expected side length."""
        lines = [line.rstrip() for line in text.strip().splitlines()]
        if not lines:
            raise TileParseError("empty tile block")
        match = _HEADER.match(lines[0])
        if match is None:
            raise TileParseError(f"bad tile header: {lines[0]!r}")
        tile_id = int(match.group(1))

        rows = lines[1:]
        size = len(rows)
        if size < 3:
            raise TileParseError(f"tile {tile_id} is too small ({size} rows)")
        for r, row in enumerate(rows):
            if len(row) != size:
                raise TileParseError(
                    f"tile {tile_id} row {r} has width {len(row)}, expected {size}"
                )
            illegal = set(row) - {self.dark, self.light}
            if illegal:
                raise TileParseError(f"tile {tile_id} has illegal characters {sorted(illegal)}")

        if codec is None:
            codec = EdgeCodec(size)
        elif codec.width != size:
            raise TileParseError(f"tile {tile_id} has side {size}, expected {codec.width}")

        block = np.array([[ch == self.dark for ch in row] for row in rows], dtype=bool)
        return Tile.from_block(tile_id, block, codec)

    def parse(self, text: str) -> List[Tile]:
        """Parse blank-line separated tile blocks sharing one side length."""
        chunks = [chunk for chunk in re.split(r"\n\s*\n", text.strip()) if chunk.strip()]
        if not chunks:
            raise TileParseError("no tiles found")

        tiles: List[Tile] = []
        seen: Set[int] = set()
        codec: Optional[EdgeCodec] = None
        for chunk in chunks:
            tile = self.parse_block(chunk, codec)
            codec = tile.codec
            if tile.id in seen:
                raise TileParseError(f"duplicate tile id {tile.id}")
            seen.add(tile.id)
            tiles.append(tile)

        logger.debug("parsed %d tiles of side %d", len(tiles), codec.width)
        return tiles


def load_tiles(path: str | Path, parser: Optional[TileParser] = None) -> List[Tile]:
    """Read and parse a tile file."""
    text = Path(path).read_text(encoding="utf-8")
    return (parser or TileParser()).parse(text)
