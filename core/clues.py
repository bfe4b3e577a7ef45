"""
Clue derivation: run lengths of filled cells along every row and column.
"""
from itertools import groupby
from typing import Iterable, List, Tuple

import numpy as np

Clue = List[int]


def line_runs(line: Iterable[bool]) -> Clue:
    """
    Lengths of the maximal runs of True values in a line, in order.

    An all-False line gives an empty clue.
    """
    return [sum(1 for _ in run) for filled, run in groupby(bool(v) for v in line) if filled]


def derive_clues(solution, width: int = None, height: int = None) -> Tuple[List[Clue], List[Clue]]:
    """
    Derive row and column clues from a boolean solution matrix.

    Args:
        solution: ``height x width`` matrix (nested sequences or numpy array)
                  where True means the cell must end up filled
        width: Optional expected width, checked against the matrix
        height: Optional expected height, checked against the matrix

    Returns:
        Tuple of (row_clues, col_clues); row clues run left-to-right,
        column clues top-to-bottom
    """
    matrix = np.asarray(solution, dtype=bool)
    if matrix.ndim != 2:
        raise ValueError(f"Solution must be two-dimensional, got {matrix.ndim} dimensions")

    rows, cols = matrix.shape
    if width is not None and cols != width:
        raise ValueError(f"Solution width {cols} does not match {width}")
    if height is not None and rows != height:
        raise ValueError(f"Solution height {rows} does not match {height}")

    row_clues = [line_runs(matrix[r, :]) for r in range(rows)]
    col_clues = [line_runs(matrix[:, c]) for c in range(cols)]
    return row_clues, col_clues


def format_clue(clue: Clue) -> str:
    """Render a clue for display; an empty line reads as '0'."""
    return " ".join(str(n) for n in clue) if clue else "0"
