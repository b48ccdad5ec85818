"""Stitch tile interiors into one image and render it as text."""

from __future__ import annotations

from typing import Optional

import numpy as np

from .solver import SolvedGrid


def assemble(grid: SolvedGrid) -> np.ndarray:
    """Concatenate tile interiors in grid row-major order."""
    return np.block([[tile.interior for tile in row] for row in grid.tiles]).astype(bool)


def render_image(
    image: np.ndarray,
    covered: Optional[np.ndarray] = None,
    dark: str = "#",
    light: str = ".",
    mark: str = "O",
) -> str:
    """Return the image as text lines, optionally marking covered cells."""
    chars = np.where(image, dark, light)
    if covered is not None:
        if covered.shape != image.shape:
            raise ValueError("covered mask must have the image shape")
        chars[covered] = mark
    return "\n".join("".join(row) for row in chars)
