"""
Nonogram Engine - Core Package
Grid model, clue derivation, puzzle generation, command system and file format.
"""
from .types import (
    Axis, Cell, CellChange, CellKind, EMPTY_CELL,
    NonogramError, OutOfBoundsError, LoadError, FormatError, SaveError,
)
from .clues import derive_clues, format_clue
from .generator import PuzzleGenerator
from .grid import GridModel
from .commands import Command, CommandHistory, SetCellCommand, BatchSetCellsCommand, ClearGridCommand, SetMeasurementPointCommand
from .fill import flood_fill
from .measure import MeasurementOverlay, MeasureState
from .serializer import serialize, deserialize, read_grid_file, write_grid_file
from .session import GridStatus, PuzzleSession, grid_from_args

__all__ = [
    'Axis', 'Cell', 'CellChange', 'CellKind', 'EMPTY_CELL',
    'NonogramError', 'OutOfBoundsError', 'LoadError', 'FormatError', 'SaveError',
    'derive_clues', 'format_clue', 'PuzzleGenerator', 'GridModel',
    'Command', 'CommandHistory', 'SetCellCommand', 'BatchSetCellsCommand', 'ClearGridCommand',
    'SetMeasurementPointCommand', 'flood_fill', 'MeasurementOverlay', 'MeasureState',
    'serialize', 'deserialize', 'read_grid_file', 'write_grid_file',
    'GridStatus', 'PuzzleSession', 'grid_from_args',
]
