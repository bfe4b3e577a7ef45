"""
Nonogram Engine - Utilities Package
Row-major grid geometry and time formatting helpers.
"""
from .geometry import point_to_index, index_to_point, orthogonal_neighbors, line_points
from .timing import format_seconds

__all__ = ['point_to_index', 'index_to_point', 'orthogonal_neighbors', 'line_points', 'format_seconds']
