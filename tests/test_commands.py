"""
Undo/redo history:
- undo after execute restores the exact prior cells, for every command type
- redo after undo reproduces the post-execute state
- a new command after undo discards the redo stack
"""

import pytest

from core.commands import (
    BatchSetCellsCommand,
    ClearGridCommand,
    CommandHistory,
    SetCellCommand,
    SetMeasurementPointCommand,
)
from core.measure import MeasurementOverlay
from core.types import Cell, CellChange, CellKind, OutOfBoundsError

FILLED = Cell(CellKind.FILLED)
CROSSED = Cell(CellKind.CROSSED)
EMPTY = Cell(CellKind.EMPTY)


def _commands(overlay):
    return [
        SetCellCommand(4, FILLED),
        BatchSetCellsCommand([CellChange(0, CROSSED, FILLED), CellChange(8, EMPTY, CROSSED)]),
        ClearGridCommand(overlay),
        SetMeasurementPointCommand(overlay, 2),
    ]


@pytest.mark.parametrize("position", range(4))
def test_undo_restores_and_redo_reproduces(cross_grid, position):
    overlay = MeasurementOverlay()
    history = CommandHistory()

    # Some prior state so clear/batch have something to restore
    cross_grid.set_cell(0, CROSSED)
    cross_grid.set_cell(5, Cell(CellKind.MAYBED))
    overlay.set_point(cross_grid, 6)

    command = _commands(overlay)[position]
    before = list(cross_grid.cells)
    points_before = overlay.snapshot()

    assert history.execute_command(command, cross_grid)
    after = list(cross_grid.cells)
    points_after = overlay.snapshot()

    assert history.undo(cross_grid)
    assert cross_grid.cells == before
    assert overlay.snapshot() == points_before

    assert history.redo(cross_grid)
    assert cross_grid.cells == after
    assert overlay.snapshot() == points_after


def test_undo_redo_on_empty_history(cross_grid):
    history = CommandHistory()
    assert history.undo(cross_grid) is False
    assert history.redo(cross_grid) is False


def test_new_command_discards_redo(cross_grid):
    history = CommandHistory()
    history.execute_command(SetCellCommand(0, FILLED), cross_grid)
    history.execute_command(SetCellCommand(1, FILLED), cross_grid)
    history.undo(cross_grid)
    assert history.can_redo()

    history.execute_command(SetCellCommand(2, CROSSED), cross_grid)
    assert not history.can_redo()
    assert history.redo(cross_grid) is False
    assert cross_grid.get_kind(1) == CellKind.EMPTY


def test_long_history_unwinds_completely(cross_grid):
    history = CommandHistory()
    kinds = [CellKind.FILLED, CellKind.CROSSED, CellKind.MAYBED, CellKind.EMPTY]
    for step in range(200):
        history.execute_command(SetCellCommand(step % 9, Cell(kinds[step % 4])), cross_grid)

    while history.undo(cross_grid):
        pass
    assert all(cell == EMPTY for cell in cross_grid.cells)
    assert len(history.redo_stack) == 200


def test_max_history_drops_oldest(cross_grid):
    history = CommandHistory(max_history=2)
    for index in range(3):
        history.execute_command(SetCellCommand(index, FILLED), cross_grid)

    assert history.undo(cross_grid) and history.undo(cross_grid)
    assert not history.undo(cross_grid)
    assert cross_grid.get_kind(0) == CellKind.FILLED


def test_failed_command_not_recorded(cross_grid):
    history = CommandHistory()
    with pytest.raises(OutOfBoundsError):
        history.execute_command(SetCellCommand(42, FILLED), cross_grid)
    assert not history.can_undo()


def test_batch_out_of_bounds_is_atomic(cross_grid):
    history = CommandHistory()
    command = BatchSetCellsCommand([CellChange(0, EMPTY, FILLED), CellChange(9, EMPTY, FILLED)])
    with pytest.raises(OutOfBoundsError):
        history.execute_command(command, cross_grid)
    assert cross_grid.get_kind(0) == CellKind.EMPTY


def test_empty_batch_not_recorded(cross_grid):
    history = CommandHistory()
    assert history.execute_command(BatchSetCellsCommand([]), cross_grid) is False
    assert not history.can_undo()


def test_history_info_and_descriptions(cross_grid):
    history = CommandHistory()
    history.execute_command(SetCellCommand(3, FILLED), cross_grid)
    history.execute_command(ClearGridCommand(), cross_grid)
    history.undo(cross_grid)

    info = history.get_history_info()
    assert info["undo_count"] == 1 and info["redo_count"] == 1
    assert info["undo_description"] == "Set cell 3 to filled"
    assert info["redo_description"] == "Clear grid"

    history.clear_history()
    assert history.get_undo_description() is None
    assert history.get_redo_description() is None
