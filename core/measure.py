"""
Measurement tool: marks the cell path between two chosen points.

The overlay cycles none -> first point -> both points -> none. Once both
points are set, every EMPTY cell on the straight line between them becomes
MEASURED with its 0-based step index from the first point. Filled, crossed
and maybed cells are never overwritten.
"""
import logging
from enum import Enum
from typing import List, Optional, Tuple

from core.types import Cell, CellChange, CellKind, EMPTY_CELL
from utils.geometry import line_points

logger = logging.getLogger(__name__)

Points = Tuple[Optional[int], Optional[int]]


class MeasureState(Enum):
    """Position in the two-point cycle."""
    NONE = "none"
    FIRST = "first"
    BOTH = "both"


class MeasurementOverlay:
    """Two-point distance annotation over a grid."""

    def __init__(self):
        self.first_point: Optional[int] = None
        self.second_point: Optional[int] = None

    @property
    def state(self) -> MeasureState:
        if self.first_point is None:
            return MeasureState.NONE
        if self.second_point is None:
            return MeasureState.FIRST
        return MeasureState.BOTH

    def snapshot(self) -> Points:
        return self.first_point, self.second_point

    def restore(self, points: Points) -> None:
        self.first_point, self.second_point = points

    def reset(self) -> None:
        self.first_point = None
        self.second_point = None

    def set_point(self, grid, index: int) -> List[CellChange]:
        """
        Advance the cycle with a new point.

        Args:
            grid: GridModel to annotate
            index: Row-major index of the chosen cell

        Returns:
            The cell changes made, already applied to ``grid``
        """
        grid.check_index(index)
        changes: List[CellChange] = []

        if self.state == MeasureState.BOTH:
            changes.extend(self._erase(grid))
            self.reset()

        if self.state == MeasureState.NONE:
            self.first_point = index
            logger.debug("Measurement started at cell %d", index)
            return changes

        self.second_point = index
        changes.extend(self._draw(grid))
        logger.debug("Measured %d cells from %d to %d", self.distance(grid), self.first_point, index)
        return changes

    def path(self, grid) -> List[int]:
        """Cell indices from the first to the second point, both included."""
        if self.state != MeasureState.BOTH:
            return []
        start = grid.point_of(self.first_point)
        end = grid.point_of(self.second_point)
        return [grid.index_of(row, col) for row, col in line_points(start, end)]

    def distance(self, grid) -> int:
        """Number of cells on the measured path, 0 unless both points are set."""
        return len(self.path(grid))

    def _draw(self, grid) -> List[CellChange]:
        changes = []
        for step, index in enumerate(self.path(grid)):
            previous = grid.cells[index]
            if previous.kind != CellKind.EMPTY:
                continue
            new = Cell(CellKind.MEASURED, step)
            grid.set_cell(index, new)
            changes.append(CellChange(index, previous, new))
        return changes

    def _erase(self, grid) -> List[CellChange]:
        changes = []
        for index in grid.measured_indices():
            previous = grid.set_cell(index, EMPTY_CELL)
            changes.append(CellChange(index, previous, EMPTY_CELL))
        return changes
