"""
Board geometry helpers.
Maps linear cell indices to (row, col) and back, and applies the
rotations/reflections of a square board.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np


def row_col(index: int, n: int) -> Tuple[int, int]:
    """
    Convert a linear cell index to (row, col).

    Args:
        index: Cell index (0 to n*n - 1).
        n: Board side length.

    Returns:
        (row, col) tuple.
    """
    return index // n, index % n


def to_index(row: int, col: int, n: int) -> int:
    """Convert (row, col) to a linear cell index. Caller keeps row/col in range."""
    return row * n + col


def index_grid(n: int) -> np.ndarray:
    """n x n array where each entry is that cell's linear index."""
    return np.arange(n * n).reshape(n, n)


def _transformed_grid(n: int, rotations: int, flip: bool) -> np.ndarray:
    # grid[r][c] = original index that ends up at (r, c)
    grid = np.rot90(index_grid(n), k=rotations % 4)
    if flip:
        grid = np.fliplr(grid)
    return grid


def transform_board(
    board: Sequence[Optional[object]],
    n: int,
    rotations: int,
    flip: bool = False
) -> Tuple[Optional[object], ...]:
    """
    Rotate a board by quarter turns (counter-clockwise) and optionally mirror it.

    Args:
        board: Row-major board of length n*n.
        n: Board side length.
        rotations: Number of 90 degree turns.
        flip: Mirror left-right after rotating.

    Returns:
        The transformed board as a tuple.
    """
    source = _transformed_grid(n, rotations, flip).ravel()
    return tuple(board[int(i)] for i in source)


def transform_indices(
    indices: Sequence[int],
    n: int,
    rotations: int,
    flip: bool = False
) -> List[int]:
    """
    Map cell indices to where they land under the same transform as
    transform_board().
    """
    source = _transformed_grid(n, rotations, flip).ravel()
    destination = np.empty(n * n, dtype=int)
    destination[source] = np.arange(n * n)
    return [int(destination[i]) for i in indices]


def symmetries(
    board: Sequence[Optional[object]],
    n: int
) -> Iterator[Tuple[Optional[object], ...]]:
    """Yield all 8 rotations/reflections of a board (identity first)."""
    for flip in (False, True):
        for rotations in range(4):
            yield transform_board(board, n, rotations, flip)
