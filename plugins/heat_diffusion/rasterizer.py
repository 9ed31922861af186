"""
Grid -> RGBA Rasterizer

Paints every grid cell as a scale x scale block of a (height, width, 4)
uint8 buffer. The last row/column of blocks absorbs the remainder when
the canvas is not a multiple of the scale, so the target covers
ceil(W/scale) x ceil(H/scale) cells.

Color map (t = cell temperature):
  R = t, G = 0.2 * t, B = 15, A = 255

Channels are clamped to [0, 255] and rounded to nearest (ties to even),
the same conversion a clamped 8-bit canvas buffer applies.
"""

import numbers

import numpy as np

from .errors import GridTargetMismatch


BLUE = 15
ALPHA = 255
GREEN_RATIO = 0.2


class RenderTarget:
    """RGBA pixel buffer reused across frames.

    Attributes:
        width, height: Canvas size in pixels
        pixels: (height, width, 4) uint8 array
    """

    def __init__(self, width, height, pixels=None):
        if width < 1 or height < 1:
            raise GridTargetMismatch(f"render target must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        if pixels is None:
            pixels = np.zeros((height, width, 4), dtype=np.uint8)
        elif pixels.shape != (height, width, 4) or pixels.dtype != np.uint8:
            raise GridTargetMismatch(
                f"pixel buffer {pixels.shape} {pixels.dtype} does not match {width}x{height} RGBA"
            )
        self.pixels = pixels

    @classmethod
    def allocate(cls, width, height):
        return cls(width, height)

    @property
    def data(self):
        """Flat R,G,B,A byte view of the buffer (no copy)."""
        return self.pixels.reshape(-1)

    def tobytes(self):
        return self.pixels.tobytes()

    @property
    def rgb(self):
        return self.pixels[:, :, :3]


def target_cells(width, height, scale):
    """Number of cells (x, y) a width x height target holds at this scale."""
    full_x, rem_x = divmod(width, scale)
    full_y, rem_y = divmod(height, scale)
    total_x = full_x + 1 if rem_x else full_x
    total_y = full_y + 1 if rem_y else full_y
    return total_x, total_y


def heat_to_rgba(cells):
    """Map a temperature field to per-cell RGBA colors.

    Args:
        cells: (rows, cols) float array

    Returns:
        (rows, cols, 4) uint8 array
    """
    colors = np.empty(cells.shape + (4,), dtype=np.uint8)
    colors[..., 0] = np.rint(np.clip(cells, 0, 255))
    colors[..., 1] = np.rint(np.clip(GREEN_RATIO * cells, 0, 255))
    colors[..., 2] = BLUE
    colors[..., 3] = ALPHA
    return colors


def check_geometry(grid, scale, target):
    """Raise GridTargetMismatch unless grid and target agree at this scale."""
    if isinstance(scale, bool) or not isinstance(scale, numbers.Integral) or scale < 1:
        raise GridTargetMismatch(f"scale must be a positive integer, got {scale!r}")

    if grid.cols > target.width or grid.rows > target.height:
        raise GridTargetMismatch(
            f"grid {grid.cols}x{grid.rows} is larger than canvas {target.width}x{target.height}"
        )

    total_x, total_y = target_cells(target.width, target.height, scale)
    if total_x != grid.cols or total_y != grid.rows:
        raise GridTargetMismatch(
            f"canvas {target.width}x{target.height} at scale {scale} holds "
            f"{total_x}x{total_y} cells, grid is {grid.cols}x{grid.rows}"
        )


def render(grid, scale, target):
    """Fill target.pixels in place from the grid.

    Args:
        grid: Grid to draw
        scale: Pixels per cell (positive int)
        target: RenderTarget sized so that ceil(W/scale) == cols and
            ceil(H/scale) == rows
    """
    check_geometry(grid, scale, target)

    colors = heat_to_rgba(grid.cells)
    if scale == 1:
        target.pixels[...] = colors
        return

    # Upsample by block repetition, crop the remainder blocks at the edge
    blocks = np.repeat(np.repeat(colors, scale, axis=0), scale, axis=1)
    target.pixels[...] = blocks[:target.height, :target.width]
