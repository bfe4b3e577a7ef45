"""
Shared types for the nonogram engine.
Separated to avoid circular imports between modules.
"""
from enum import Enum
from typing import NamedTuple, Optional


class CellKind(Enum):
    """Possible states for grid cells."""
    EMPTY = "empty"           # Unmarked cell
    FILLED = "filled"         # Marked as part of the picture
    CROSSED = "crossed"       # Marked as certainly empty
    MAYBED = "maybed"         # Tentatively filled, for "what if" reasoning
    MEASURED = "measured"     # Overlay left by the measurement tool


class Cell(NamedTuple):
    """A live cell: its kind plus the step index of a measured cell."""
    kind: CellKind
    measure_index: Optional[int] = None

    def same_region(self, other: 'Cell') -> bool:
        """Measured cells belong together regardless of their index."""
        if self.kind == CellKind.MEASURED:
            return other.kind == CellKind.MEASURED
        return self == other


EMPTY_CELL = Cell(CellKind.EMPTY)


class Axis(Enum):
    """Line direction for clue lookups."""
    ROW = "row"
    COLUMN = "column"


class NonogramError(Exception):
    """Base class for all engine errors."""


class OutOfBoundsError(NonogramError, IndexError):
    """A cell index or coordinate lies outside the grid."""


class LoadError(NonogramError):
    """A grid file could not be loaded."""


class FormatError(LoadError, ValueError):
    """Malformed or out-of-range grid file content."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.message = message
        self.line_number = line_number
        super().__init__(str(self))

    def __str__(self):
        if self.line_number is not None:
            return f"Line {self.line_number}: {self.message}"
        return self.message


class SaveError(NonogramError):
    """Writing a grid file failed. The in-memory grid is unaffected."""

    def __init__(self, message: str, cause: Optional[OSError] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class CellChange(NamedTuple):
    """One cell write inside a batch: where, what it was, what it becomes."""
    index: int
    previous: Cell
    new: Cell
