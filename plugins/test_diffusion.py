#!/usr/bin/env python3
"""
Tests for the explicit diffusion stepper.

Verifies:
1. Values stay non-negative after a step, even with a blown-up gamma
2. A zero grid is a fixed point
3. Hand-computed single steps, including the zero border
4. Snapshot vs row-major ordering differ as expected
"""

import numpy as np
from heat_diffusion.grid import Grid, initialize
from heat_diffusion.diffusion import step, step_n


def test_non_negative():
    """Clamping holds for any gamma."""
    print("Testing non-negativity...")
    rng = np.random.default_rng(7)
    for gamma in (0.0, 0.1, 0.2, 0.25, 0.3, 1.5, -0.4):
        grid = Grid(rng.random((13, 17)) * 300)
        step(grid, gamma)
        assert (grid.cells >= 0).all(), f"negative cell after step with gamma={gamma}"
        assert np.isfinite(grid.cells).all()
    print("  ✓ non-negativity working correctly")


def test_zero_fixed_point():
    for gamma in (0.0, 0.249, 0.25, 2.0):
        for ordering in ("snapshot", "row_major"):
            grid = initialize(6, 9, "zeros")
            step_n(grid, gamma, 3, ordering=ordering)
            assert not grid.cells.any(), f"zero grid changed ({gamma}, {ordering})"


def test_single_hot_cell():
    """gamma*(neighbours + 4c) - c on a point source with zero border."""
    print("Testing single step...")
    cells = np.zeros((3, 3))
    cells[1, 1] = 100.0
    grid = Grid(cells)
    step(grid, 0.2)
    expected = np.array([
        [0.0, 20.0, 0.0],
        [20.0, 0.0, 20.0],  # center: 0.2*400 - 100 = -20 -> clamped
        [0.0, 20.0, 0.0],
    ])
    assert np.allclose(grid.cells, expected), grid.cells
    print("  ✓ single step working correctly")


def test_border_reads_zero():
    """A uniform field loses heat only at the border."""
    grid = Grid(np.full((4, 5), 10.0))
    step(grid, 0.25)
    # Interior: 0.25 * (40 + 40) - 10 = 10
    assert np.allclose(grid.cells[1:-1, 1:-1], 10.0)
    # Edge (3 neighbours): 0.25 * (30 + 40) - 10 = 7.5
    assert np.isclose(grid.cells[0, 2], 7.5)
    # Corner (2 neighbours): 0.25 * (20 + 40) - 10 = 5
    assert np.isclose(grid.cells[0, 0], 5.0)
    assert np.isclose(grid.cells[3, 4], 5.0)


def test_orderings_differ():
    """Row-major scan sees already-updated left neighbours."""
    print("Testing step orderings...")
    snap = Grid(np.array([[0.0, 10.0, 0.0]]))
    scan = snap.copy()
    step(snap, 0.25, ordering="snapshot")
    step(scan, 0.25, ordering="row_major")

    assert np.allclose(snap.cells, [[2.5, 0.0, 2.5]]), snap.cells
    # cell 1 reads the updated 2.5 on its left: 0.25*(2.5 + 40) - 10
    # cell 2 reads the updated 0.625: 0.25*0.625
    assert np.allclose(scan.cells, [[2.5, 0.625, 0.15625]]), scan.cells
    print("  ✓ step orderings working correctly")


def test_snapshot_symmetry():
    """Double-buffered steps keep a centered bump symmetric."""
    grid = initialize(21, 21, "radial", beta=0.05)
    step_n(grid, 0.249, 10)
    assert np.allclose(grid.cells, grid.cells[::-1, :])
    assert np.allclose(grid.cells, grid.cells[:, ::-1])
    assert np.allclose(grid.cells, grid.cells.T)


def test_blow_up_stays_non_negative():
    """An unstable gamma overflows to inf; later steps must not leave NaN behind."""
    print("Testing blow-up clamping...")
    for ordering in ("snapshot", "row_major"):
        grid = Grid(np.full((3, 3), 1e308))
        with np.errstate(over="ignore", invalid="ignore"):
            step_n(grid, 1.5, 3, ordering=ordering)
        assert not np.isnan(grid.cells).any(), f"NaN after blow-up ({ordering})"
        assert (grid.cells >= 0).all(), f"negative or NaN cell after blow-up ({ordering})"
    print("  ✓ blow-up clamping working correctly")


def test_unknown_ordering():
    grid = initialize(3, 3)
    try:
        step(grid, 0.2, ordering="diagonal")
    except ValueError:
        pass
    else:
        raise AssertionError("unknown ordering should be rejected")


if __name__ == "__main__":
    print("\n=== Testing Diffusion Stepper ===\n")

    test_non_negative()
    test_zero_fixed_point()
    test_single_hot_cell()
    test_border_reads_zero()
    test_orderings_differ()
    test_snapshot_symmetry()
    test_blow_up_stays_non_negative()
    test_unknown_ordering()

    print("\n✓ All tests passed!\n")
