"""
Nonogram Engine - Render Package
matplotlib pictures of grids and their clues.
"""
from .picture import GridPictureRenderer, render_grid, save_picture

__all__ = ['GridPictureRenderer', 'render_grid', 'save_picture']
