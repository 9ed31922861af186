"""
Canvas <-> grid coordinate mapping.

Cols <-> X <-> width, rows <-> Y <-> height. The pointer source reports
1-based pixel positions, hence the -1 before dividing by the scale.
"""

import math


def screen_to_grid(px, py, scale):
    """Map a pointer position to (col, row).

    The result is not clamped; positions left of / above the canvas give
    negative indices and callers bounds-check before use.
    """
    col = math.floor((px - 1) / scale)
    row = math.floor((py - 1) / scale)
    return col, row


def cells_for_canvas(width, height, scale):
    """Grid size (rows, cols) that exactly covers a width x height canvas."""
    rows = -(-height // scale)
    cols = -(-width // scale)
    return rows, cols
