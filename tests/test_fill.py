"""
Flood fill:
- stays inside the 4-connected same-kind region
- one undo step for the whole fill
- no-op when filling with the start cell's own kind
"""

import numpy as np
import pytest

from core.commands import CommandHistory
from core.fill import flood_fill, region
from core.grid import GridModel
from core.types import Cell, CellKind


def _grid(rows):
    """Build a grid from strings: '.' empty, '#' filled, 'x' crossed, 'm' measured."""
    symbols = {'.': CellKind.EMPTY, '#': CellKind.FILLED, 'x': CellKind.CROSSED, 'm': CellKind.MEASURED}
    height, width = len(rows), len(rows[0])
    grid = GridModel(width, height, np.zeros((height, width), dtype=bool))
    for r, row in enumerate(rows):
        for c, ch in enumerate(row):
            kind = symbols[ch]
            cell = Cell(kind, r * width + c) if kind == CellKind.MEASURED else Cell(kind)
            grid.set_cell(r * width + c, cell)
    return grid


def _kinds(grid):
    return [cell.kind for cell in grid.cells]


def test_fill_bounded_by_other_kinds():
    grid = _grid([
        "..#..",
        "..#..",
        "###..",
        ".....",
    ])
    command = flood_fill(grid, 0, CellKind.CROSSED)
    CommandHistory().execute_command(command, grid)

    assert sorted(c.index for c in command.changes) == [0, 1, 5, 6]
    # The empty area right of the wall is a separate region
    assert grid.get_kind(3) == CellKind.EMPTY
    assert _kinds(grid).count(CellKind.CROSSED) == 4


def test_fill_never_touches_cells_outside_region():
    grid = _grid([
        "x.x",
        ".x.",
        "x.x",
    ])
    before = list(grid.cells)
    command = flood_fill(grid, 4, CellKind.FILLED)
    command.execute(grid)

    assert [c.index for c in command.changes] == [4]
    for index in range(9):
        if index != 4:
            assert grid.cells[index] == before[index]


def test_same_kind_is_noop():
    grid = _grid(["...", "..."])
    command = flood_fill(grid, 0, CellKind.EMPTY)
    assert command.changes == []
    assert CommandHistory().execute_command(command, grid) is False


def test_fill_undoes_as_one_step():
    grid = _grid(["....", "....", "...."])
    history = CommandHistory()
    history.execute_command(flood_fill(grid, 5, CellKind.MAYBED), grid)
    assert set(_kinds(grid)) == {CellKind.MAYBED}

    assert history.undo(grid)
    assert set(_kinds(grid)) == {CellKind.EMPTY}
    assert not history.can_undo()

    assert history.redo(grid)
    assert set(_kinds(grid)) == {CellKind.MAYBED}


def test_measured_cells_fill_together():
    grid = _grid([
        "mm.",
        "#m#",
    ])
    assert sorted(region(grid, 0)) == [0, 1, 4]


def test_fill_does_not_mutate_until_executed():
    grid = _grid(["..", ".."])
    flood_fill(grid, 0, CellKind.FILLED)
    assert set(_kinds(grid)) == {CellKind.EMPTY}


@pytest.mark.parametrize("start", [0, 4900, 9800])
def test_largest_grid_terminates(start):
    grid = GridModel(99, 99, np.zeros((99, 99), dtype=bool))
    command = flood_fill(grid, start, CellKind.FILLED)
    assert len(command.changes) == 99 * 99
    assert len({c.index for c in command.changes}) == 99 * 99


def test_checkerboard_region_is_single_cell():
    grid = GridModel(99, 99, np.zeros((99, 99), dtype=bool))
    for index in range(grid.cell_count):
        row, col = divmod(index, 99)
        if (row + col) % 2:
            grid.set_cell(index, CellKind.CROSSED)
    assert region(grid, 0) == [0]
