"""
PuzzleSession - the command surface offered to an input/rendering layer.

A session owns the active grid, its undo/redo history, the measurement
overlay, the solve timer and the path this session saves to. Every intent
(place, fill, clear, measure, undo, redo) returns a GridStatus describing
the grid afterwards so the caller can redraw.
"""
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

import numpy as np

from config.engine_config import EngineConfig
from core.commands import (
    Command,
    CommandHistory,
    SetCellCommand,
    ClearGridCommand,
    SetMeasurementPointCommand,
)
from core.fill import flood_fill
from core.grid import CellLike, GridModel, as_cell
from core.measure import MeasurementOverlay
from core.serializer import read_grid_file, write_grid_file
from core.types import CellKind, SaveError
from utils.timing import format_seconds

logger = logging.getLogger(__name__)

PLACEABLE_KINDS = (CellKind.EMPTY, CellKind.FILLED, CellKind.CROSSED, CellKind.MAYBED)


@dataclass
class GridStatus:
    """Snapshot returned after every intent."""
    solved: bool
    progress: float
    changed: bool = True


class PuzzleSession:
    """
    Active puzzle plus everything needed to edit it reversibly.

    Attributes:
        grid: The GridModel being played
        history: Undo/redo command stack for ``grid``
        overlay: Measurement tool state
        save_dir: Directory new save files are created in
        save_path: File this session writes to, set by the first successful save
        editor_enabled: While True, solved detection is suppressed
    """

    def __init__(self, grid: GridModel, save_dir=None,
                 clock: Callable[[], float] = time.monotonic):
        self.grid: GridModel = grid
        self.history: CommandHistory = CommandHistory(max_history=EngineConfig.MAX_HISTORY)
        self.overlay: MeasurementOverlay = MeasurementOverlay()
        self.save_dir: Path = Path(save_dir) if save_dir is not None else Path.cwd()
        self.save_path: Optional[Path] = None
        self.editor_enabled: bool = False
        self._clock = clock
        self._start_timer()

    @classmethod
    def new_random(cls, width: int = None, height: int = None,
                   rng: Optional[np.random.Generator] = None, **kwargs) -> 'PuzzleSession':
        """Start a session on a freshly generated puzzle (5x5 by default)."""
        if width is None:
            width = EngineConfig.DEFAULT_SIZE
        if height is None:
            height = width
        return cls(GridModel.from_random(width, height, rng), **kwargs)

    @classmethod
    def from_file(cls, path, **kwargs) -> 'PuzzleSession':
        """Start a session on the picture stored in a grid file."""
        return cls(read_grid_file(path).for_play(), **kwargs)

    def _start_timer(self) -> None:
        self._started_at = self._clock()
        self.edit_count = 0
        # A grid can be solved before any edit, e.g. an all-empty picture
        self.solved_after: Optional[float] = 0.0 if self.grid.is_solved() else None

    # =============================================================================
    # STATUS
    # =============================================================================

    def status(self, changed: bool = False) -> GridStatus:
        """Current solved flag and progress ratio."""
        solved = not self.editor_enabled and self.grid.is_solved()
        return GridStatus(solved=solved, progress=self.grid.progress(), changed=changed)

    def _run(self, command: Command) -> GridStatus:
        changed = self.history.execute_command(command, self.grid)
        if changed:
            self.edit_count += 1
        return self._after_edit(changed)

    def _after_edit(self, changed: bool) -> GridStatus:
        status = self.status(changed)
        if status.solved and self.solved_after is None:
            self.solved_after = self._clock() - self._started_at
            logger.info("Grid solved after %.1f seconds", self.solved_after)
        return status

    def elapsed(self) -> float:
        """Seconds since play started, frozen once the grid is first solved."""
        if self.solved_after is not None:
            return self.solved_after
        return self._clock() - self._started_at

    def solved_message(self) -> Optional[str]:
        """Message for the solved screen, None while unsolved."""
        if self.solved_after is None:
            return None
        if self.edit_count == 0:
            return "You won by doing nothing"
        seconds = int(self.solved_after)
        if seconds > EngineConfig.MAX_REPORTED_SECONDS:
            return "That took too long"
        return f"Solved in {format_seconds(seconds)}"

    # =============================================================================
    # INTENTS
    # =============================================================================

    def place_cell(self, index: int, value: CellLike) -> GridStatus:
        """Set one cell to EMPTY, FILLED, CROSSED or MAYBED."""
        cell = as_cell(value)
        if cell.kind not in PLACEABLE_KINDS:
            raise ValueError("Measured cells can only be placed with the measurement tool")

        if self.grid.get_cell(index) == cell:
            return self.status(changed=False)
        return self._run(SetCellCommand(index, cell))

    def flood_fill(self, index: int, value: CellLike) -> GridStatus:
        """Fill the region around ``index``; one undo step for the whole region."""
        cell = as_cell(value)
        if cell.kind not in PLACEABLE_KINDS:
            raise ValueError("Measured cells can only be placed with the measurement tool")
        return self._run(flood_fill(self.grid, index, cell))

    def clear_grid(self) -> GridStatus:
        """Reset every cell to EMPTY."""
        return self._run(ClearGridCommand(self.overlay))

    def set_measurement_point(self, index: int) -> GridStatus:
        """Advance the measurement tool with a point at ``index``."""
        return self._run(SetMeasurementPointCommand(self.overlay, index))

    def undo(self) -> GridStatus:
        return self._after_edit(self.history.undo(self.grid))

    def redo(self) -> GridStatus:
        return self._after_edit(self.history.redo(self.grid))

    def toggle_editor(self) -> bool:
        """Switch editor mode on or off; returns the new setting."""
        self.editor_enabled = not self.editor_enabled
        logger.info("Editor %s", "enabled" if self.editor_enabled else "disabled")
        if not self.editor_enabled:
            # A picture finished in the editor counts as solved from now on
            self._after_edit(changed=False)
        return self.editor_enabled

    # =============================================================================
    # FILES
    # =============================================================================

    def save(self) -> Path:
        """
        Write the live grid and return the path written.

        The first save creates a new ``grid-N.yaya`` file in ``save_dir``;
        later saves overwrite it. If that file has since disappeared, a new
        name is chosen. Failures raise SaveError and leave the grid as is.
        """
        if self.save_path is not None and self.save_path.exists():
            write_grid_file(self.grid, self.save_path)
        else:
            self.save_path = self._save_new()

        logger.info("Grid saved as %s", self.save_path)
        return self.save_path

    def _save_new(self) -> Path:
        for index in range(1, EngineConfig.MAX_SAVE_FILES + 1):
            name = EngineConfig.SAVE_NAME_PATTERN.format(index=index, extension=EngineConfig.FILE_EXTENSION)
            path = self.save_dir / name
            try:
                write_grid_file(self.grid, path, exclusive=True)
            except FileExistsError:
                continue
            return path

        logger.warning("No free save file name in %s", self.save_dir)
        raise SaveError("Too many grid files")

    def load(self, path) -> GridModel:
        """
        Replace the active grid with the picture stored in ``path``.

        On success the history, overlay and timer start fresh. On failure
        LoadError/FormatError propagates and the session is unchanged.
        """
        grid = read_grid_file(path).for_play()

        self.grid = grid
        self.history.clear_history()
        self.overlay.reset()
        self._start_timer()
        logger.info("Loaded %dx%d grid from %s", grid.width, grid.height, path)
        return grid

    # =============================================================================
    # INFO
    # =============================================================================

    def get_statistics(self) -> Dict:
        """Grid statistics plus undo/redo availability."""
        stats = self.grid.get_statistics()
        history_info = self.history.get_history_info()
        stats.update({
            "can_undo": history_info["can_undo"],
            "can_redo": history_info["can_redo"],
            "undo_count": history_info["undo_count"],
            "elapsed": self.elapsed(),
        })
        return stats


def _parse_size(arg: str) -> int:
    try:
        size = int(arg)
    except ValueError:
        raise ValueError(f"Not a grid size or .{EngineConfig.FILE_EXTENSION} file: {arg}") from None
    if not EngineConfig.valid_size(size):
        raise ValueError(f"Grid size must be in range {EngineConfig.MIN_SIZE} to {EngineConfig.MAX_SIZE}")
    return size


def grid_from_args(args: Sequence[str], rng: Optional[np.random.Generator] = None) -> GridModel:
    """
    Build the starting grid from command-line style arguments.

    ``[]`` gives a default-size random grid, ``[n]`` an n x n one,
    ``[w, h]`` a w x h one and ``[file.yaya]`` the picture in that file.
    """
    if not args:
        size = EngineConfig.DEFAULT_SIZE
        return GridModel.from_random(size, size, rng)

    if len(args) == 1 and Path(args[0]).suffix == f".{EngineConfig.FILE_EXTENSION}":
        return read_grid_file(args[0]).for_play()

    if len(args) > 2:
        raise ValueError("Expected a grid size, a width and height, or a file name")

    width = _parse_size(args[0])
    height = _parse_size(args[1]) if len(args) == 2 else width
    return GridModel.from_random(width, height, rng)
