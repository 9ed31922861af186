"""
Heat Injector

Adds heat at a cell and its 4-neighbourhood. Every touched cell gets the
full amount, so one injection raises up to 5 cells (3 in a corner, 4 on
an edge). There is no upper clamp.
"""

# Cell itself plus up/down/left/right
_OFFSETS = ((0, 0), (-1, 0), (1, 0), (0, -1), (0, 1))


def inject(grid, row, col, amount):
    """Add `amount` to grid[row, col] and its in-bounds cardinal neighbours.

    Out-of-bounds (row, col) is a no-op.
    """
    if not grid.in_bounds(row, col):
        return
    cells = grid.cells
    for dr, dc in _OFFSETS:
        r, c = row + dr, col + dc
        if grid.in_bounds(r, c):
            cells[r, c] = max(cells[r, c] + amount, 0.0)
