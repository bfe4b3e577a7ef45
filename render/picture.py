"""
Picture rendering for nonogram grids using matplotlib.
Draws the live cells colored by kind with the row and column clues alongside.
"""
from typing import Dict, Optional

import numpy as np
import matplotlib.patches as patches
from matplotlib.figure import Figure

from core.clues import format_clue
from core.grid import GridModel
from core.types import CellKind

# Every 5 cells the empty shade alternates so lines are easier to count
SEPARATION_POINT = 5

CELL_COLORS: Dict[CellKind, str] = {
    CellKind.FILLED: "#202020",
    CellKind.CROSSED: "#C0392B",
    CellKind.MAYBED: "#2E86C1",
    CellKind.MEASURED: "#27AE60",
}
EMPTY_SHADES = ("#E4E4E4", "#F4F4F4")


class GridPictureRenderer:
    """Render a GridModel onto a matplotlib axis."""

    def __init__(self, cell_size: float = 1.0, clue_font_size: float = 9.0):
        """
        Initialize the renderer.

        Args:
            cell_size: Edge length of a cell in axis units
            clue_font_size: Font size for clue numbers and measure indices
        """
        self.size = float(cell_size)
        self.font_size = float(clue_font_size)

    def _empty_color(self, row: int, col: int) -> str:
        block_row = row // SEPARATION_POINT % 2 == 0
        block_col = col // SEPARATION_POINT % 2 == 0
        return EMPTY_SHADES[int(block_row ^ block_col)]

    def _draw_cells(self, ax, grid: GridModel, kinds: np.ndarray):
        for row in range(grid.height):
            for col in range(grid.width):
                kind = kinds[row, col]
                color = CELL_COLORS.get(kind) or self._empty_color(row, col)
                x, y = col * self.size, row * self.size
                ax.add_patch(patches.Rectangle(
                    (x, y), self.size, self.size,
                    facecolor=color, edgecolor="#808080", linewidth=0.5
                ))

                cell = grid.cells[row * grid.width + col]
                if kind == CellKind.MEASURED and cell.measure_index is not None:
                    ax.text(x + self.size / 2, y + self.size / 2, str(cell.measure_index),
                            ha='center', va='center', fontsize=self.font_size, color='black')

    def _draw_clues(self, ax, grid: GridModel):
        for row, clue in enumerate(grid.row_clues):
            ax.text(-0.3 * self.size, (row + 0.5) * self.size, format_clue(list(clue)),
                    ha='right', va='center', fontsize=self.font_size)

        for col, clue in enumerate(grid.col_clues):
            label = "\n".join(str(n) for n in clue) if clue else "0"
            ax.text((col + 0.5) * self.size, -0.3 * self.size, label,
                    ha='center', va='bottom', fontsize=self.font_size, linespacing=1.1)

    def render_grid(self, grid: GridModel, ax=None, *, show_clues: bool = True,
                    show_solution: bool = False):
        """
        Draw ``grid``.

        Args:
            grid: Grid to draw
            ax: Optional matplotlib axis (creates a new figure if None)
            show_clues: Draw the clue numbers left of and above the grid
            show_solution: Draw the target picture instead of the live cells

        Returns:
            Matplotlib axis object
        """
        if ax is None:
            fig = Figure(figsize=(max(4, grid.width * 0.4), max(4, grid.height * 0.4)))
            ax = fig.subplots()

        if show_solution:
            flat = [CellKind.FILLED if filled else CellKind.EMPTY for filled in grid.solution.ravel()]
        else:
            flat = [cell.kind for cell in grid.cells]
        kinds = np.empty(grid.cell_count, dtype=object)
        kinds[:] = flat
        kinds = kinds.reshape(grid.height, grid.width)

        self._draw_cells(ax, grid, kinds)
        if show_clues:
            self._draw_clues(ax, grid)

        # Leave room for clues on the left and top
        margin_x = max((len(c) for c in grid.row_clues), default=0) * self.size if show_clues else 0
        margin_y = max((len(c) for c in grid.col_clues), default=0) * self.size if show_clues else 0

        ax.set_aspect('equal')
        ax.set_xlim(-margin_x - self.size, grid.width * self.size + 0.1)
        ax.set_ylim(grid.height * self.size + 0.1, -margin_y - self.size)  # Invert Y to match row order
        ax.axis('off')

        return ax


def render_grid(grid: GridModel, ax=None, *, show_clues: bool = True,
                show_solution: bool = False):
    """Draw ``grid`` with a default renderer and return the axis."""
    return GridPictureRenderer().render_grid(grid, ax, show_clues=show_clues, show_solution=show_solution)


def save_picture(grid: GridModel, path, *, show_clues: bool = True,
                 show_solution: bool = False, dpi: int = 100) -> None:
    """Render ``grid`` to an image file (format taken from the extension)."""
    ax = render_grid(grid, show_clues=show_clues, show_solution=show_solution)
    ax.figure.savefig(path, dpi=dpi, bbox_inches='tight')
