"""Helpers for generating reproducible synthetic puzzles."""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .motif import Motif, SEA_MONSTER
from .transform import Orientation


def set_random_seed(seed: int = 42) -> np.random.Generator:
    """Create a deterministic numpy random generator."""
    return np.random.default_rng(seed)


def generate_picture(size: int, density: float = 0.3, seed: int = 42) -> np.ndarray:
    """Generate a random boolean picture with the given share of dark cells."""
    rng = set_random_seed(seed)
    return rng.random((size, size)) < density


def motif_grid_positions(
    picture_size: int, motif: Motif, count: int
) -> List[Tuple[int, int]]:
    """Lay ``count`` non-overlapping motif positions out row by row."""
    per_row = (picture_size + 1) // (motif.width + 1)
    per_col = (picture_size + 1) // (motif.height + 1)
    if count > per_row * per_col:
        raise ValueError(f"cannot fit {count} motifs in a {picture_size}px picture")
    return [
        ((i // per_row) * (motif.height + 1), (i % per_row) * (motif.width + 1))
        for i in range(count)
    ]


def plant_motif(
    picture: np.ndarray, motif: Motif, positions: Sequence[Tuple[int, int]]
) -> np.ndarray:
    """Return a copy of the picture with the motif drawn at each position."""
    out = picture.copy()
    for r, c in positions:
        for dy, dx in motif.offsets:
            out[r + dy, c + dx] = True
    return out


def _edge_keys(block: np.ndarray) -> List[Tuple[bytes, bool]]:
    edges = [block[0, :], block[:, -1], block[-1, ::-1], block[::-1, 0]]
    out = []
    for edge in edges:
        fwd = edge.tobytes()
        rev = edge[::-1].tobytes()
        out.append((min(fwd, rev), fwd == rev))
    return out


Seam = Tuple[Tuple[int, int], Tuple[int, int]]


def _seam_edge(blocks: List[List[np.ndarray]], seam: Seam) -> np.ndarray:
    (r, c), (r2, c2) = seam
    block = blocks[r][c]
    return block[:, -1] if (r2, c2) == (r, c + 1) else block[-1, :]


def _make_palindrome(block: np.ndarray, right: bool) -> None:
    """Mirror the first half of the right column (or bottom row) onto the second."""
    size = block.shape[0]
    for k in range(size // 2):
        if right:
            block[size - 1 - k, -1] = block[k, -1]
        else:
            block[-1, size - 1 - k] = block[-1, k]


def _has_unique_seams(blocks: List[List[np.ndarray]], palindromes: Sequence[Seam] = ()) -> bool:
    n = len(blocks)
    allowed = {_seam_edge(blocks, seam).tobytes() for seam in palindromes}
    counts: Counter = Counter()
    for row in blocks:
        for block in row:
            for key, palindrome in _edge_keys(block):
                if palindrome and key not in allowed:
                    return False
                counts[key] += 1
    shared = sum(1 for v in counts.values() if v == 2)
    return max(counts.values()) <= 2 and shared == 2 * n * (n - 1)


def cut_picture(
    picture: np.ndarray,
    tile_size: int,
    rng: np.random.Generator,
    max_attempts: int = 100,
    palindromes: Sequence[Seam] = (),
) -> List[List[np.ndarray]]:
    """Cut a picture into bordered tiles whose seams match exactly once.

    ``palindromes`` lists seams, as ``((r, c), (r, c + 1))`` or ``((r, c), (r + 1, c))``,
    that must read the same in both directions. Every other seam is asymmetric.
    """
    inner = tile_size - 2
    if inner <= 0:
        raise ValueError("tile_size must be at least 3")
    size = picture.shape[0]
    if picture.shape[0] != picture.shape[1] or size % inner != 0:
        raise ValueError("picture must be square and divisible by tile_size - 2")
    n = size // inner
    right_seams = set()
    down_seams = set()
    for (r, c), (r2, c2) in palindromes:
        if (r2, c2) == (r, c + 1) and c2 < n:
            right_seams.add((r, c))
        elif (r2, c2) == (r + 1, c) and r2 < n:
            down_seams.add((r, c))
        else:
            raise ValueError(f"{(r, c)} and {(r2, c2)} are not neighbouring cells")
    if right_seams & down_seams:
        raise ValueError("a tile can have a palindromic right or bottom seam, not both")

    for _ in range(max_attempts):
        blocks: List[List[np.ndarray]] = []
        for r in range(n):
            row: List[np.ndarray] = []
            for c in range(n):
                block = rng.random((tile_size, tile_size)) < 0.5
                block[1:-1, 1:-1] = picture[r * inner : (r + 1) * inner, c * inner : (c + 1) * inner]
                if c > 0:
                    block[:, 0] = row[c - 1][:, -1]
                if r > 0:
                    block[0, :] = blocks[r - 1][c][-1, :]
                if (r, c) in right_seams:
                    _make_palindrome(block, right=True)
                if (r, c) in down_seams:
                    _make_palindrome(block, right=False)
                row.append(block)
            blocks.append(row)
        if _has_unique_seams(blocks, palindromes):
            return blocks
    raise RuntimeError(f"could not draw unique seams in {max_attempts} attempts")


def scramble_blocks(blocks: List[List[np.ndarray]], seed: int = 42) -> Dict[int, np.ndarray]:
    """Give every block a random id and orientation, in shuffled order."""
    rng = set_random_seed(seed)
    flat = [block for row in blocks for block in row]
    ids = rng.choice(np.arange(1000, 10000), size=len(flat), replace=False)
    order = rng.permutation(len(flat))
    out: Dict[int, np.ndarray] = {}
    for i in order:
        orientation = Orientation(flipped=bool(rng.random() < 0.5), rotations=int(rng.integers(4)))
        out[int(ids[i])] = orientation.apply(flat[i])
    return out


def format_tiles(blocks: Dict[int, np.ndarray], dark: str = "#", light: str = ".") -> str:
    """Render blocks in the ``Tile <id>:`` text format."""
    chunks = []
    for tile_id, block in blocks.items():
        rows = ["".join(dark if px else light for px in row) for row in block]
        chunks.append("\n".join([f"Tile {tile_id}:"] + rows))
    return "\n\n".join(chunks) + "\n"


def generate_puzzle(
    grid_size: int = 3,
    tile_size: int = 10,
    motifs: int = 0,
    density: float = 0.3,
    seed: int = 42,
    motif: Optional[Motif] = None,
) -> Tuple[str, np.ndarray]:
    """Return tile text and the picture its interiors assemble into."""
    motif = motif if motif is not None else Motif.from_text(SEA_MONSTER)
    size = grid_size * (tile_size - 2)
    picture = generate_picture(size, density=density, seed=seed)
    if motifs:
        picture = plant_motif(picture, motif, motif_grid_positions(size, motif, motifs))
    blocks = cut_picture(picture, tile_size, set_random_seed(seed + 1))
    return format_tiles(scramble_blocks(blocks, seed=seed + 2)), picture
