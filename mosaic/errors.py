"""Exceptions raised when a tile set cannot be assembled."""

from __future__ import annotations


class MosaicError(ValueError):
    """Base class for unrecoverable puzzle errors."""


class TileParseError(MosaicError):
    """Tile text is malformed (bad header, illegal character, wrong width)."""


class AdjacencyError(MosaicError):
    """Tile borders do not describe a unique square tiling."""


class MotifNotFoundError(MosaicError):
    """The motif does not occur in any orientation of the image."""
