#!/usr/bin/env python3
"""
Tests for grid -> RGBA rasterization.

Verifies:
1. Target geometry check (full cells + remainder block)
2. Uniform grids fill every pixel, remainder blocks included
3. Per-cell blocks land on the right pixels
4. Channel clamping to [0, 255]
5. The pixel buffer is reused, not reallocated
"""

import numpy as np
from heat_diffusion.grid import Grid, initialize
from heat_diffusion.rasterizer import (
    RenderTarget, render, target_cells, heat_to_rgba, BLUE, ALPHA,
)
from heat_diffusion.coords import cells_for_canvas
from heat_diffusion.errors import GridTargetMismatch


def _raises(exc_type, fn, *args, **kwargs):
    try:
        fn(*args, **kwargs)
    except exc_type:
        return True
    return False


def test_target_cells():
    assert target_cells(10, 10, 4) == (3, 3)
    assert target_cells(10, 10, 5) == (2, 2)
    assert target_cells(800, 600, 8) == (100, 75)
    assert target_cells(801, 600, 8) == (101, 75)
    assert target_cells(7, 3, 1) == (7, 3)


def test_geometry_check():
    """3x3 grid on a 10x10 canvas: scale 4 fits, scale 5 does not."""
    print("Testing geometry check...")
    grid = Grid(np.full((3, 3), 50.0))
    target = RenderTarget.allocate(10, 10)

    render(grid, 4, target)

    assert _raises(GridTargetMismatch, render, grid, 5, target), "scale 5 should mismatch"
    assert _raises(GridTargetMismatch, render, grid, 3, target), "scale 3 should mismatch"
    assert _raises(GridTargetMismatch, render, grid, 0, target)
    assert _raises(GridTargetMismatch, render, grid, 2.0, target)

    # Grid larger than the canvas
    big = initialize(12, 3)
    assert _raises(GridTargetMismatch, render, big, 1, target)
    print("  ✓ geometry check working correctly")


def test_mismatch_leaves_buffer():
    """A rejected render does not touch the pixels."""
    grid = Grid(np.full((3, 3), 80.0))
    target = RenderTarget.allocate(10, 10)
    before = target.pixels.copy()
    assert _raises(GridTargetMismatch, render, grid, 5, target)
    assert np.array_equal(target.pixels, before)


def test_uniform_fill():
    """Every pixel, remainder blocks included, gets the cell color."""
    print("Testing uniform fill...")
    t = 100.0
    for width, height, scale in [(10, 10, 4), (10, 10, 1), (23, 17, 5), (64, 48, 8), (9, 4, 10)]:
        rows, cols = cells_for_canvas(width, height, scale)
        grid = Grid(np.full((rows, cols), t))
        target = RenderTarget.allocate(width, height)
        render(grid, scale, target)
        px = target.pixels
        assert px.shape == (height, width, 4)
        assert (px[..., 0] == 100).all(), f"red not uniform at {width}x{height}/{scale}"
        assert (px[..., 1] == 20).all(), f"green not uniform at {width}x{height}/{scale}"
        assert (px[..., 2] == BLUE).all()
        assert (px[..., 3] == ALPHA).all()
    print("  ✓ uniform fill working correctly")


def test_blocks():
    """Each cell paints its own scale x scale block, cropped at the edge."""
    print("Testing cell blocks...")
    cells = np.zeros((3, 3))
    cells[0, 0] = 10
    cells[1, 2] = 30
    cells[2, 2] = 50
    grid = Grid(cells)
    target = RenderTarget.allocate(10, 10)
    render(grid, 4, target)
    red = target.pixels[..., 0]

    assert (red[0:4, 0:4] == 10).all()
    assert (red[4:8, 8:10] == 30).all()
    assert (red[8:10, 8:10] == 50).all()
    assert (red[8:10, 0:8] == 0).all()
    assert (red[0:4, 4:10] == 0).all()
    # Green tracks 0.2 * t
    assert target.pixels[9, 9, 1] == 10
    assert target.pixels[0, 0, 1] == 2
    print("  ✓ cell blocks working correctly")


def test_channel_clamp():
    """Hot cells saturate instead of wrapping."""
    colors = heat_to_rgba(np.array([[0.0, 254.6, 1000.0, 2000.0]]))
    assert list(colors[0, :, 0]) == [0, 255, 255, 255]
    assert list(colors[0, :, 1]) == [0, 51, 200, 255]
    assert (colors[..., 2] == BLUE).all()
    assert (colors[..., 3] == ALPHA).all()


def test_buffer_reused():
    grid = initialize(5, 5, "radial", beta=0.1)
    target = RenderTarget.allocate(20, 20)
    buf = target.pixels
    render(grid, 4, target)
    render(grid, 4, target)
    assert target.pixels is buf
    assert target.data.shape == (20 * 20 * 4,)
    assert np.shares_memory(target.data, buf)
    assert len(target.tobytes()) == 20 * 20 * 4


def test_bad_pixel_buffer():
    assert _raises(GridTargetMismatch, RenderTarget, 0, 5)
    assert _raises(GridTargetMismatch, RenderTarget, 4, 4, np.zeros((4, 4, 3), dtype=np.uint8))


if __name__ == "__main__":
    print("\n=== Testing Rasterizer ===\n")

    test_target_cells()
    test_geometry_check()
    test_mismatch_leaves_buffer()
    test_uniform_fill()
    test_blocks()
    test_channel_clamp()
    test_buffer_reused()
    test_bad_pixel_buffer()

    print("\n✓ All tests passed!\n")
