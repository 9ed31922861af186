"""
Errors raised by the heat diffusion core.

Both kinds are configuration/geometry errors: the operation that detects
them aborts without touching its output. Callers fix their inputs (grid
size, scale, canvas size) instead of retrying.
"""


class HeatDiffusionError(ValueError):
    """Base class for heat diffusion geometry errors."""


class InvalidDimensions(HeatDiffusionError):
    """Grid requested with rows/cols outside [1, MAX_ROWS] / [1, MAX_COLS]."""


class GridTargetMismatch(HeatDiffusionError):
    """Render target geometry does not reconcile with the grid at this scale."""
