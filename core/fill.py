"""
Flood fill: replace the 4-connected region of same-kind cells around a start cell.
"""
import logging
from collections import deque
from typing import List

from core.commands import BatchSetCellsCommand
from core.grid import CellLike, as_cell
from core.types import CellChange
from utils.geometry import orthogonal_neighbors

logger = logging.getLogger(__name__)


def region(grid, start_index: int) -> List[int]:
    """
    Indices of the connected region containing ``start_index``.

    Cells join the region when they share the start cell's kind and touch it
    through up/down/left/right steps. Measured cells count as one kind
    whatever their index. Breadth-first, each cell visited at most once.
    """
    start = grid.get_cell(start_index)

    visited = {start_index}
    queue = deque([start_index])
    order: List[int] = []

    while queue:
        current = queue.popleft()
        order.append(current)
        for neighbor in orthogonal_neighbors(current, grid.width, grid.height):
            if neighbor not in visited and start.same_region(grid.cells[neighbor]):
                visited.add(neighbor)
                queue.append(neighbor)

    return order


def flood_fill(grid, start_index: int, new_value: CellLike) -> BatchSetCellsCommand:
    """
    Build the batch command that fills the region around ``start_index``.

    The grid is only read here; executing the returned command through the
    history applies the fill as one undoable step. Filling with the start
    cell's own kind yields an empty batch.

    Args:
        grid: GridModel to fill
        start_index: Row-major index of the start cell
        new_value: Kind (or cell) to write

    Returns:
        BatchSetCellsCommand with one change per region cell, in visit order
    """
    new_cell = as_cell(new_value)
    start = grid.get_cell(start_index)

    if start.kind == new_cell.kind:
        return BatchSetCellsCommand([], "Fill")

    changes = [CellChange(i, grid.cells[i], new_cell) for i in region(grid, start_index)]
    logger.debug("Fill from cell %d covers %d cells", start_index, len(changes))
    return BatchSetCellsCommand(changes, "Fill")
