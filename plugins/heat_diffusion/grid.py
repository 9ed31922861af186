"""
Heat Grid and Initializer

The grid is a (rows, cols) float64 array of non-negative temperatures.
It has no behavior beyond storage and bounds; the stepper, injector and
rasterizer operate on it from outside.

Initial states:
  zeros   - every cell 0
  radial  - centered gaussian bump, amplitude * exp(-beta * dist^2)
"""

import numbers

import numpy as np

from .errors import InvalidDimensions


MAX_ROWS = 1080
MAX_COLS = 1920

INIT_MODES = ("zeros", "radial")

# Legacy name for the radial bump
_MODE_ALIASES = {"exp": "radial"}


def check_dimensions(rows, cols):
    """Raise InvalidDimensions unless 1 <= rows <= 1080 and 1 <= cols <= 1920."""
    for name, value, limit in (("rows", rows, MAX_ROWS), ("cols", cols, MAX_COLS)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidDimensions(f"{name} must be an integer, got {value!r}")
        if not 1 <= value <= limit:
            raise InvalidDimensions(f"{name}={value} outside [1, {limit}]")


def normalize_mode(mode):
    """Canonical init mode name. ValueError if unknown."""
    mode = _MODE_ALIASES.get(mode, mode)
    if mode not in INIT_MODES:
        raise ValueError(f"Unknown init mode {mode!r}, expected one of {INIT_MODES}")
    return mode


class Grid:
    """2D temperature field.

    Attributes:
        cells: (rows, cols) float64 array, mutated in place by the stepper
            and the injector
    """

    def __init__(self, cells):
        cells = np.asarray(cells, dtype=np.float64)
        if cells.ndim != 2:
            raise InvalidDimensions(f"grid must be 2D, got shape {cells.shape}")
        check_dimensions(int(cells.shape[0]), int(cells.shape[1]))
        if not np.isfinite(cells).all():
            raise ValueError("grid cells must be finite")
        if (cells < 0).any():
            raise ValueError("grid cells must be non-negative")
        self.cells = cells

    @property
    def rows(self):
        return self.cells.shape[0]

    @property
    def cols(self):
        return self.cells.shape[1]

    @property
    def shape(self):
        return self.cells.shape

    def in_bounds(self, row, col):
        return 0 <= row < self.rows and 0 <= col < self.cols

    def copy(self):
        return Grid(self.cells.copy())

    def __repr__(self):
        return f"Grid(rows={self.rows}, cols={self.cols}, max={self.cells.max():.3f})"


def initialize(rows, cols, mode="zeros", beta=1e-4, amplitude=255):
    """Build a fresh grid.

    Args:
        rows: Grid height, 1..1080
        cols: Grid width, 1..1920
        mode: "zeros" or "radial" ("exp" accepted as an alias)
        beta: Spread of the radial bump (smaller = wider)
        amplitude: Peak value of the radial bump, reached at the center cell

    Returns:
        Grid
    """
    check_dimensions(rows, cols)
    mode = normalize_mode(mode)

    if mode == "zeros":
        return Grid(np.zeros((rows, cols), dtype=np.float64))

    mid_x = cols // 2
    mid_y = rows // 2
    Y, X = np.ogrid[:rows, :cols]
    sq_dist = (Y - mid_y) ** 2 + (X - mid_x) ** 2
    cells = amplitude * np.exp(-beta * sq_dist.astype(np.float64))
    return Grid(cells)
