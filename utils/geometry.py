# utils/geometry.py
"""
Row-major index helpers for rectangular grids.

Cells are addressed by a flat index ``row * width + col``. Points are
``(row, col)`` tuples.
"""

from __future__ import annotations
from typing import Iterator, List, Tuple


# Up, down, left, right
_ORTHOGONAL_DELTAS: Tuple[Tuple[int, int], ...] = (
    (-1,  0),
    ( 1,  0),
    ( 0, -1),
    ( 0,  1),
)


def point_to_index(row: int, col: int, width: int) -> int:
    """Convert a (row, col) point to its row-major index."""
    return row * width + col


def index_to_point(index: int, width: int) -> Tuple[int, int]:
    """Convert a row-major index back to a (row, col) point."""
    return divmod(index, width)


def orthogonal_neighbors(index: int, width: int, height: int) -> List[int]:
    """
    Return the indices of the up/down/left/right neighbors of a cell.

    Args:
        index: Row-major cell index
        width: Grid width
        height: Grid height

    Returns:
        Neighbor indices that lie inside the grid
    """
    assert 0 <= index < width * height, f"index {index} out of range [0, {width * height})"

    row, col = index_to_point(index, width)
    neighbors: List[int] = []
    for dr, dc in _ORTHOGONAL_DELTAS:
        nr, nc = row + dr, col + dc
        if 0 <= nr < height and 0 <= nc < width:
            neighbors.append(point_to_index(nr, nc, width))
    return neighbors


def line_points(start: Tuple[int, int], end: Tuple[int, int]) -> Iterator[Tuple[int, int]]:
    """
    Yield the Bresenham line from ``start`` to ``end``, both included.

    Diagonal steps are allowed, so the line has
    ``max(|drow|, |dcol|) + 1`` points.
    """
    r0, c0 = start
    r1, c1 = end
    dc = abs(c1 - c0)
    dr = -abs(r1 - r0)
    step_c = 1 if c0 < c1 else -1
    step_r = 1 if r0 < r1 else -1
    error = dc + dr

    while True:
        yield r0, c0
        if r0 == r1 and c0 == c1:
            return
        doubled = 2 * error
        if doubled >= dr:
            error += dr
            c0 += step_c
        if doubled <= dc:
            error += dc
            r0 += step_r
