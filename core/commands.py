"""
Command pattern implementation for undo/redo of grid edits.
Every player edit (cell placement, flood fill, clear, measurement) is a
reversible command recorded by CommandHistory.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple

from core.types import Cell, CellChange

logger = logging.getLogger(__name__)


class Command(ABC):
    """Abstract base class for all reversible commands."""

    @abstractmethod
    def execute(self, grid) -> bool:
        """Execute the command. Returns True if it changed anything worth recording."""
        pass

    @abstractmethod
    def undo(self, grid) -> bool:
        """Undo the command. Returns True if successful."""
        pass

    @abstractmethod
    def get_description(self) -> str:
        """Get human-readable description of the command."""
        pass


class SetCellCommand(Command):
    """Command to change a single cell."""

    def __init__(self, index: int, new_cell: Cell):
        self.index = index
        self.new_cell = new_cell
        self.old_cell: Optional[Cell] = None

    def execute(self, grid) -> bool:
        """Execute the cell change, remembering the old value for undo."""
        self.old_cell = grid.set_cell(self.index, self.new_cell)
        return True

    def undo(self, grid) -> bool:
        """Undo the cell change."""
        if self.old_cell is None:
            return False

        grid.set_cell(self.index, self.old_cell)
        return True

    def get_description(self) -> str:
        return f"Set cell {self.index} to {self.new_cell.kind.value}"


def apply_changes(grid, changes: Sequence[CellChange], forward: bool = True) -> None:
    """Write a batch of changes, or revert them in reverse order."""
    for index, _, _ in changes:
        grid.check_index(index)

    if forward:
        for index, _, new in changes:
            grid.set_cell(index, new)
    else:
        for index, previous, _ in reversed(changes):
            grid.set_cell(index, previous)


class BatchSetCellsCommand(Command):
    """Command that writes many cells as a single undo/redo unit."""

    def __init__(self, changes: List[CellChange], description: str = "Set cells"):
        self.changes = list(changes)
        self.description = description

    def execute(self, grid) -> bool:
        """Apply every change; an empty batch is not recorded."""
        if not self.changes:
            return False

        apply_changes(grid, self.changes)
        return True

    def undo(self, grid) -> bool:
        """Restore every cell in reverse order."""
        apply_changes(grid, self.changes, forward=False)
        return True

    def get_description(self) -> str:
        return f"{self.description} ({len(self.changes)} cells)"


class ClearGridCommand(Command):
    """Command to reset every cell to EMPTY, along with the measurement overlay."""

    def __init__(self, overlay=None):
        self.overlay = overlay
        self.previous_cells: Optional[List[Cell]] = None
        self.previous_points: Optional[Tuple[Optional[int], Optional[int]]] = None

    def execute(self, grid) -> bool:
        """Clear the grid and remember its full prior content."""
        if self.overlay is not None:
            self.previous_points = self.overlay.snapshot()
            self.overlay.reset()

        self.previous_cells = grid.clear()
        return True

    def undo(self, grid) -> bool:
        """Put back the cells (and overlay points) from before the clear."""
        if self.previous_cells is None:
            return False

        grid.restore(self.previous_cells)
        if self.overlay is not None and self.previous_points is not None:
            self.overlay.restore(self.previous_points)
        return True

    def get_description(self) -> str:
        return "Clear grid"


class SetMeasurementPointCommand(Command):
    """Command to place a measurement point, drawing or erasing the measured path."""

    def __init__(self, overlay, index: int):
        self.overlay = overlay
        self.index = index
        self.previous_points: Optional[Tuple[Optional[int], Optional[int]]] = None
        self.changes: List[CellChange] = []

    def execute(self, grid) -> bool:
        """Advance the overlay and remember what it touched."""
        grid.check_index(self.index)
        self.previous_points = self.overlay.snapshot()
        self.changes = self.overlay.set_point(grid, self.index)
        return True

    def undo(self, grid) -> bool:
        """Revert the marked cells and the overlay's points."""
        if self.previous_points is None:
            return False

        apply_changes(grid, self.changes, forward=False)
        self.overlay.restore(self.previous_points)
        return True

    def get_description(self) -> str:
        return f"Measure from cell {self.index}"


class CommandHistory:
    """
    Manages command history for undo/redo operations.

    Two stacks: executed commands on ``undo_stack``, undone ones on
    ``redo_stack``. Recording a new command discards the redo stack.
    """

    def __init__(self, max_history: Optional[int] = None):
        self.max_history = max_history
        self.undo_stack: List[Command] = []
        self.redo_stack: List[Command] = []

    def execute_command(self, command: Command, grid) -> bool:
        """
        Execute a command and add it to history.

        Exceptions raised by the command propagate and nothing is recorded.
        Returns False (and records nothing) for commands with no effect.
        """
        success = command.execute(grid)

        if success:
            self.undo_stack.append(command)
            self.redo_stack.clear()

            # Limit history size
            if self.max_history is not None and len(self.undo_stack) > self.max_history:
                self.undo_stack.pop(0)

            logger.debug("Executed: %s", command.get_description())

        return success

    def can_undo(self) -> bool:
        """Check if undo is possible."""
        return bool(self.undo_stack)

    def can_redo(self) -> bool:
        """Check if redo is possible."""
        return bool(self.redo_stack)

    def undo(self, grid) -> bool:
        """Undo the last command."""
        if not self.can_undo():
            return False

        command = self.undo_stack.pop()
        if not command.undo(grid):
            self.undo_stack.append(command)
            return False

        self.redo_stack.append(command)
        logger.debug("Undone: %s", command.get_description())
        return True

    def redo(self, grid) -> bool:
        """Redo the last undone command."""
        if not self.can_redo():
            return False

        command = self.redo_stack.pop()
        if not command.execute(grid):
            self.redo_stack.append(command)
            return False

        self.undo_stack.append(command)
        logger.debug("Redone: %s", command.get_description())
        return True

    def get_undo_description(self) -> Optional[str]:
        """Get description of command that would be undone."""
        if not self.can_undo():
            return None
        return self.undo_stack[-1].get_description()

    def get_redo_description(self) -> Optional[str]:
        """Get description of command that would be redone."""
        if not self.can_redo():
            return None
        return self.redo_stack[-1].get_description()

    def clear_history(self):
        """Clear all command history."""
        self.undo_stack.clear()
        self.redo_stack.clear()

    def get_history_info(self) -> Dict[str, Any]:
        """Get information about current history state."""
        return {
            "undo_count": len(self.undo_stack),
            "redo_count": len(self.redo_stack),
            "can_undo": self.can_undo(),
            "can_redo": self.can_redo(),
            "undo_description": self.get_undo_description(),
            "redo_description": self.get_redo_description()
        }
