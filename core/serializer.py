"""
Grid file format (``.yaya``).

Plain text, line oriented:

    5 3
    .#x?.
    #####
    ..#..

Line 1 holds ``width height``; then one line per row with one symbol per
cell. The solution is not stored: loading treats the FILLED cells as the
target picture. Measured cells lose their index on save and are written as
EMPTY, or as a neutral marker when EngineConfig.MEASURED_SAVE_POLICY is
"marker".
"""
import logging
import os
import tempfile
from contextlib import suppress
from pathlib import Path
from typing import Dict, List, Optional

from config.engine_config import EngineConfig
from core.grid import GridModel
from core.types import Cell, CellKind, FormatError, LoadError, SaveError

logger = logging.getLogger(__name__)

MEASURED_POLICIES = ("empty", "marker")


def _symbol_table() -> Dict[CellKind, str]:
    return {CellKind[name]: symbol for name, symbol in EngineConfig.SYMBOLS.items()}


def _parse_table() -> Dict[str, Cell]:
    table = {symbol: Cell(kind) for kind, symbol in _symbol_table().items()}
    table[EngineConfig.MEASURED_MARKER_SYMBOL] = Cell(CellKind.MEASURED)
    return table


def serialize(grid: GridModel, measured_policy: Optional[str] = None) -> str:
    """
    Encode the live cells of ``grid``.

    Args:
        grid: Grid to encode
        measured_policy: "empty" or "marker"; defaults to
                         EngineConfig.MEASURED_SAVE_POLICY

    Returns:
        File content ending in a newline
    """
    policy = measured_policy or EngineConfig.MEASURED_SAVE_POLICY
    if policy not in MEASURED_POLICIES:
        raise ValueError(f"Unknown measured-cell policy: {policy}")

    symbols = _symbol_table()
    measured_symbol = symbols[CellKind.EMPTY] if policy == "empty" else EngineConfig.MEASURED_MARKER_SYMBOL

    lines = [f"{grid.width} {grid.height}"]
    for row in range(grid.height):
        row_cells = grid.cells[row * grid.width:(row + 1) * grid.width]
        lines.append("".join(
            measured_symbol if cell.kind == CellKind.MEASURED else symbols[cell.kind]
            for cell in row_cells
        ))
    return "\n".join(lines) + "\n"


def _parse_header(line: str):
    parts = line.split()
    if len(parts) != 2:
        raise FormatError("Expected width and height", 1)
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError:
        raise FormatError("Width and height must be whole numbers", 1) from None

    if not (EngineConfig.valid_size(width) and EngineConfig.valid_size(height)):
        raise FormatError(
            f"Grid size must be in range {EngineConfig.MIN_SIZE} to {EngineConfig.MAX_SIZE}, "
            f"found {width}x{height}",
            1,
        )
    return width, height


def deserialize(text: str) -> GridModel:
    """
    Decode file content into a grid.

    The returned grid's live cells are exactly the stored cells and its
    solution is their FILLED pattern; call for_play() for the emptied grid.

    Raises:
        FormatError: on a bad header, wrong row count or length, or an
                     unknown symbol
    """
    lines = text.splitlines()
    if not lines:
        raise FormatError("File is empty", 1)

    width, height = _parse_header(lines[0])

    rows = lines[1:]
    if len(rows) != height:
        raise FormatError(f"Expected {height} rows, found {len(rows)}")

    table = _parse_table()
    cells: List[Cell] = []
    for line_number, row in enumerate(rows, start=2):
        if len(row) != width:
            raise FormatError(f"Expected {width} cells, found {len(row)}", line_number)
        for symbol in row:
            cell = table.get(symbol)
            if cell is None:
                raise FormatError(f"Unknown symbol '{symbol}'", line_number)
            cells.append(cell)

    return GridModel.from_pattern(width, height, cells)


def read_grid_file(path) -> GridModel:
    """Load a grid file, raising LoadError/FormatError on failure."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except OSError as e:
        logger.warning("Could not read %s: %s", path, e)
        raise LoadError(f"Could not read {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise FormatError("File is not valid UTF-8 text") from e

    try:
        grid = deserialize(text)
    except FormatError as e:
        logger.warning("Invalid grid data in %s: %s", path, e)
        raise

    logger.info("Read %dx%d grid from %s", grid.width, grid.height, path)
    return grid


def _write_replacing(path: Path, content: str) -> None:
    # Write beside the target, then swap it in so a failure never truncates it
    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(content)
        os.replace(temp_name, path)
    except BaseException:
        with suppress(OSError):
            os.unlink(temp_name)
        raise


def write_grid_file(grid: GridModel, path, exclusive: bool = False,
                    measured_policy: Optional[str] = None) -> None:
    """
    Write ``grid`` to ``path``.

    The content goes to a temporary file first, so a failed write leaves an
    existing file untouched. In exclusive mode the name is reserved up front
    and released again if the write fails.

    Args:
        grid: Grid to save
        path: Target file
        exclusive: Fail instead of overwriting an existing file
        measured_policy: See serialize()

    Raises:
        FileExistsError: if ``exclusive`` and the file exists
        SaveError: on any other write failure
    """
    content = serialize(grid, measured_policy)
    path = Path(path)
    reserved = False
    try:
        if exclusive:
            with open(path, 'x', encoding='utf-8'):
                reserved = True
        _write_replacing(path, content)
    except FileExistsError:
        raise
    except PermissionError as e:
        _release(path, reserved)
        logger.warning("Permission denied writing %s", path)
        raise SaveError("Permission denied", e) from e
    except OSError as e:
        _release(path, reserved)
        logger.warning("Save to %s failed: %s", path, e)
        raise SaveError("Save failed", e) from e


def _release(path: Path, reserved: bool) -> None:
    if reserved:
        with suppress(OSError):
            path.unlink()
