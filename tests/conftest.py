import os
import sys
import pytest

# Add project root to sys.path (so tests can import core.*)
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.append(PROJECT_ROOT)

import numpy as np

from core.grid import GridModel
from core.session import PuzzleSession

# Plus-shaped 3x3 picture
CROSS_SOLUTION = [
    [False, True, False],
    [True, True, True],
    [False, True, False],
]


@pytest.fixture
def cross_grid():
    """Fresh playable 3x3 grid whose solution is a plus sign."""
    return GridModel(3, 3, CROSS_SOLUTION)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def session(cross_grid, tmp_path):
    """Session on the plus-sign grid, saving into a temporary directory."""
    return PuzzleSession(cross_grid, save_dir=tmp_path)


@pytest.fixture
def grid_from_lines():
    """Returns a function building a grid from lines of '1' (filled) and ' ' (empty)."""
    def _build(lines):
        width = max(len(line) for line in lines)
        solution = [[ch == "1" for ch in line.ljust(width)] for line in lines]
        return GridModel(width, len(lines), solution)
    return _build
