"""
GridModel - Live cell state, target solution and clues of a nonogram.

Cells are stored row-major. The solution is a read-only boolean numpy array
fixed at construction; clues are derived from it once and never change.
Only the live cells are mutated, either directly (used by commands) or
through the command history owned by the session.
"""
import logging
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from config.engine_config import EngineConfig
from core.clues import Clue, derive_clues, line_runs
from core.generator import PuzzleGenerator
from core.types import Axis, Cell, CellKind, EMPTY_CELL, OutOfBoundsError
from utils.geometry import index_to_point, point_to_index

logger = logging.getLogger(__name__)

CellLike = Union[Cell, CellKind]


def as_cell(value: CellLike) -> Cell:
    """Accept either a bare CellKind or a full Cell."""
    if isinstance(value, Cell):
        return value
    if isinstance(value, CellKind):
        return Cell(value)
    raise TypeError(f"Expected Cell or CellKind, got {type(value).__name__}")


class GridModel:
    """
    Nonogram grid state.

    Responsibilities:
        - Store live cells (empty, filled, crossed, maybed, measured)
        - Hold the solution and its derived row/column clues
        - Answer solved/progress queries
        - Provide raw mutations for the command system

    Attributes:
        width: Number of columns
        height: Number of rows
        cells: Row-major list of live Cell values
        row_clues: Clue per row, left-to-right runs
        col_clues: Clue per column, top-to-bottom runs
    """

    def __init__(self, width: int, height: int, solution, cells: Optional[Sequence[CellLike]] = None):
        """
        Initialize a new grid.

        Args:
            width: Number of columns (1..99)
            height: Number of rows (1..99)
            solution: ``height x width`` boolean matrix
            cells: Optional initial live cells; all EMPTY if omitted
        """
        if not (EngineConfig.valid_size(width) and EngineConfig.valid_size(height)):
            raise ValueError(
                f"Grid size must be in range {EngineConfig.MIN_SIZE} to {EngineConfig.MAX_SIZE}: "
                f"{width}x{height}"
            )

        self.width: int = width
        self.height: int = height

        # Private copy so callers can't change the target afterwards
        matrix = np.array(solution, dtype=bool)
        if matrix.shape != (height, width):
            raise ValueError(f"Solution shape {matrix.shape} does not match {height}x{width}")
        matrix.setflags(write=False)
        self._solution: np.ndarray = matrix

        row_clues, col_clues = derive_clues(matrix, width, height)
        self.row_clues: Tuple[Tuple[int, ...], ...] = tuple(tuple(c) for c in row_clues)
        self.col_clues: Tuple[Tuple[int, ...], ...] = tuple(tuple(c) for c in col_clues)

        if cells is None:
            self.cells: List[Cell] = [EMPTY_CELL] * (width * height)
        else:
            self.cells = [as_cell(c) for c in cells]
            if len(self.cells) != width * height:
                raise ValueError(f"Expected {width * height} cells, got {len(self.cells)}")

    # =============================================================================
    # CONSTRUCTION
    # =============================================================================

    @classmethod
    def from_random(cls, width: int, height: int, rng: Optional[np.random.Generator] = None) -> 'GridModel':
        """Create a playable grid with a randomly generated solution."""
        solution = PuzzleGenerator(rng).generate(width, height)
        logger.info("Created random %dx%d grid", width, height)
        return cls(width, height, solution)

    @classmethod
    def from_pattern(cls, width: int, height: int, cells: Sequence[CellLike]) -> 'GridModel':
        """
        Create a grid whose solution is the FILLED pattern of ``cells``.

        The live cells keep the given values; use for_play() to get the
        emptied grid a player starts from.
        """
        live = [as_cell(c) for c in cells]
        if len(live) != width * height:
            raise ValueError(f"Expected {width * height} cells, got {len(live)}")
        solution = np.array([c.kind == CellKind.FILLED for c in live], dtype=bool).reshape(height, width)
        return cls(width, height, solution, live)

    def for_play(self) -> 'GridModel':
        """Return a fresh grid with the same solution and all cells EMPTY."""
        return GridModel(self.width, self.height, self._solution)

    # =============================================================================
    # CELL QUERIES
    # =============================================================================

    @property
    def solution(self) -> np.ndarray:
        """Read-only target matrix (True = must be filled)."""
        return self._solution

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def index_of(self, row: int, col: int) -> int:
        """Row-major index of (row, col); raises OutOfBoundsError outside the grid."""
        if not (0 <= row < self.height and 0 <= col < self.width):
            logger.warning("Rejected cell (%d, %d) outside %dx%d grid", row, col, self.width, self.height)
            raise OutOfBoundsError(f"Cell ({row}, {col}) is outside the {self.width}x{self.height} grid")
        return point_to_index(row, col, self.width)

    def point_of(self, index: int) -> Tuple[int, int]:
        """(row, col) of a row-major index."""
        self.check_index(index)
        return index_to_point(index, self.width)

    def check_index(self, index: int) -> None:
        """Raise OutOfBoundsError unless ``index`` addresses a cell."""
        if not (0 <= index < self.cell_count):
            logger.warning("Rejected cell index %d outside %dx%d grid", index, self.width, self.height)
            raise OutOfBoundsError(f"Cell index {index} is outside the {self.width}x{self.height} grid")

    def get_cell(self, index: int) -> Cell:
        """Get the live cell at ``index``."""
        self.check_index(index)
        return self.cells[index]

    def get_kind(self, index: int) -> CellKind:
        return self.get_cell(index).kind

    def measured_indices(self) -> List[int]:
        """Indices of every MEASURED cell."""
        return [i for i, cell in enumerate(self.cells) if cell.kind == CellKind.MEASURED]

    # =============================================================================
    # DIRECT MUTATIONS (used by commands)
    # =============================================================================

    def set_cell(self, index: int, value: CellLike) -> Cell:
        """
        Set a live cell (direct method, go through the history for undo/redo).

        Args:
            index: Row-major cell index
            value: New kind or full cell

        Returns:
            The previous cell value
        """
        cell = as_cell(value)
        self.check_index(index)
        previous = self.cells[index]
        self.cells[index] = cell
        return previous

    def clear(self) -> List[Cell]:
        """Reset every cell to EMPTY and return the previous cell sequence."""
        previous = list(self.cells)
        self.cells = [EMPTY_CELL] * self.cell_count
        return previous

    def restore(self, cells: Sequence[CellLike]) -> None:
        """Replace the whole live cell sequence."""
        restored = [as_cell(c) for c in cells]
        if len(restored) != self.cell_count:
            raise ValueError(f"Expected {self.cell_count} cells, got {len(restored)}")
        self.cells = restored

    # =============================================================================
    # CLUES
    # =============================================================================

    def clue(self, axis: Axis, index: int) -> Clue:
        """Target clue of one row or column."""
        clues = self.row_clues if axis == Axis.ROW else self.col_clues
        if not (0 <= index < len(clues)):
            logger.warning("Rejected %s %d outside %dx%d grid", axis.value, index, self.width, self.height)
            raise OutOfBoundsError(f"No {axis.value} {index} in a {self.width}x{self.height} grid")
        return list(clues[index])

    def _filled_mask(self) -> np.ndarray:
        return np.fromiter(
            (cell.kind == CellKind.FILLED for cell in self.cells), dtype=bool, count=self.cell_count
        ).reshape(self.height, self.width)

    def current_clues(self, axis: Axis, index: int) -> Clue:
        """Runs of live FILLED cells along one row or column."""
        self.clue(axis, index)  # bounds check
        mask = self._filled_mask()
        line = mask[index, :] if axis == Axis.ROW else mask[:, index]
        return line_runs(line)

    def line_solved(self, axis: Axis, index: int) -> bool:
        """True if the live runs of a line match its clue."""
        return self.current_clues(axis, index) == self.clue(axis, index)

    def solved_lines(self) -> int:
        """Number of rows plus columns whose live runs match their clues."""
        mask = self._filled_mask()
        solved = sum(1 for r in range(self.height) if line_runs(mask[r, :]) == list(self.row_clues[r]))
        solved += sum(1 for c in range(self.width) if line_runs(mask[:, c]) == list(self.col_clues[c]))
        return solved

    def line_progress(self) -> float:
        """Share of rows and columns whose clues are currently satisfied."""
        return self.solved_lines() / (self.width + self.height)

    # =============================================================================
    # SOLVED / PROGRESS
    # =============================================================================

    def is_solved(self) -> bool:
        """True iff the FILLED cells are exactly the solution cells."""
        return bool(np.array_equal(self._filled_mask(), self._solution))

    def progress(self) -> float:
        """
        Correctly filled cells divided by the number of solution cells.

        Wrong fills do not count against progress. A solution without any
        filled cell counts as complete.
        """
        total = int(self._solution.sum())
        if total == 0:
            return 1.0
        correct = int(np.logical_and(self._filled_mask(), self._solution).sum())
        return correct / total

    def get_statistics(self) -> Dict:
        """
        Get grid statistics.

        Returns:
            Dict with per-kind counts, dimensions and completion info
        """
        stats = {
            "width": self.width,
            "height": self.height,
            "empty_cells": 0,
            "filled_cells": 0,
            "crossed_cells": 0,
            "maybed_cells": 0,
            "measured_cells": 0,
            "solution_cells": int(self._solution.sum()),
        }

        for cell in self.cells:
            stats[f"{cell.kind.value}_cells"] += 1

        stats["progress"] = self.progress()
        stats["solved_lines"] = self.solved_lines()
        stats["is_solved"] = self.is_solved()
        return stats

    def __repr__(self):
        return (f"GridModel({self.width}x{self.height}, "
                f"filled={sum(1 for c in self.cells if c.kind == CellKind.FILLED)}, "
                f"solution={int(self._solution.sum())})")
