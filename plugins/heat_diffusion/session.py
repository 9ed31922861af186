"""
SimulationSession - headless simulation state and scheduling

Owns the single live Grid, its RenderTarget and the simulation
parameters. No pygame dependency: the viewer and the CLI snapshot mode
both drive a session through advance() / tick().

Two timers, both fed by the caller's clock:
  frame timer    every FRAME_DELAY s: one diffusion step, then one render
  inject timer   every INJECT_DELAY s while the pointer is held: add heat
                 under the last pointer position

Usage:
    from heat_diffusion.session import SimulationSession
    sim = SimulationSession(800, 600)
    sim.advance(0.016)
    frame = sim.target.pixels  # (H, W, 4) uint8
"""

from .coords import cells_for_canvas, screen_to_grid
from .diffusion import step
from .errors import HeatDiffusionError
from .grid import initialize, normalize_mode
from .injector import inject
from .presets import (
    DEFAULT_PRESET, get_preset, scale_beta, scale_for_level,
)
from .rasterizer import RenderTarget, render


FRAME_DELAY = 0.030
INJECT_DELAY = 0.010

# Heat added per injection, before the heat multiplier
HEAT_QUANTUM = 8

DEFAULT_CANVAS = (800, 600)


class SimulationSession:
    """Heat simulation bound to a canvas of fixed pixel size.

    Live parameters (gamma, heat multiplier) apply on the next step or
    injection. Structural parameters (scale level, beta, init mode) are
    staged and only take effect on reset(), which swaps grid and target
    together.
    """

    def __init__(self, width=DEFAULT_CANVAS[0], height=DEFAULT_CANVAS[1],
                 preset=DEFAULT_PRESET, ordering="snapshot", **overrides):
        """
        Args:
            width, height: Canvas size in pixels
            preset: Preset key from presets.PRESETS
            ordering: Stepper ordering ("snapshot" or "row_major")
            **overrides: scale_level, gamma, beta, heat_multiplier, init
        """
        p = get_preset(preset)
        if p is None:
            raise KeyError(f"Unknown preset {preset!r}")
        self.preset_key = preset
        self.width = width
        self.height = height
        self.ordering = ordering

        self.gamma = p["gamma"]
        self.heat_multiplier = p["heat_multiplier"]
        self._staged = {
            "scale_level": p["scale_level"],
            "beta": p["beta"],
            "init": p["init"],
        }

        # Installed by reset()
        self.scale_level = None
        self.scale = None
        self.beta = None
        self.init_mode = None
        self.grid = None
        self.target = None

        self.running = False
        self.paused = False
        self.error = None
        self.steps = 0

        # Pointer state (1-based canvas pixels)
        self.holding = False
        self.pointer = None

        self._frame_clock = 0.0
        self._inject_clock = 0.0

        self.reset(**overrides)

    # --- Parameters ---

    @property
    def beta_scaled(self):
        return scale_beta(self.beta, self.scale)

    def set_gamma(self, gamma):
        self.gamma = float(gamma)

    def set_heat_multiplier(self, multiplier):
        self.heat_multiplier = float(multiplier)

    def set_scale_level(self, level):
        """Stage a scale selector level (applied on reset)."""
        scale_for_level(level)
        self._staged["scale_level"] = level

    def set_beta(self, beta):
        """Stage the beta selector value (applied on reset)."""
        self._staged["beta"] = int(beta)

    def set_init_mode(self, mode):
        """Stage the initial grid state (applied on reset)."""
        self._staged["init"] = normalize_mode(mode)

    def apply_preset(self, key):
        """Load a preset's parameters and reset."""
        p = get_preset(key)
        if p is None:
            raise KeyError(f"Unknown preset {key!r}")
        self.preset_key = key
        self.gamma = p["gamma"]
        self.heat_multiplier = p["heat_multiplier"]
        self.reset(scale_level=p["scale_level"], beta=p["beta"], init=p["init"])

    @property
    def staged(self):
        return dict(self._staged)

    # --- Lifecycle ---

    def reset(self, **overrides):
        """Rebuild grid and render target from the staged parameters.

        Animation is stopped first, so no tick ever runs against a
        half-installed grid/target pair. If building fails the previous
        pair stays in place, the session stays stopped and the error is
        re-raised.
        """
        unknown = set(overrides) - {"gamma", "heat_multiplier", "scale_level", "beta", "init"}
        if unknown:
            raise TypeError(f"Unknown parameters: {sorted(unknown)}")
        # Validate every override before staging any of them
        if "scale_level" in overrides:
            scale_for_level(overrides["scale_level"])
        if "init" in overrides:
            normalize_mode(overrides["init"])

        if "gamma" in overrides:
            self.set_gamma(overrides["gamma"])
        if "heat_multiplier" in overrides:
            self.set_heat_multiplier(overrides["heat_multiplier"])
        if "scale_level" in overrides:
            self.set_scale_level(overrides["scale_level"])
        if "beta" in overrides:
            self.set_beta(overrides["beta"])
        if "init" in overrides:
            self.set_init_mode(overrides["init"])

        self.running = False

        level = self._staged["scale_level"]
        scale = scale_for_level(level)
        beta = self._staged["beta"]
        mode = self._staged["init"]

        try:
            rows, cols = cells_for_canvas(self.width, self.height, scale)
            grid = initialize(rows, cols, mode, beta=scale_beta(beta, scale))
            target = RenderTarget.allocate(self.width, self.height)
            render(grid, scale, target)
        except HeatDiffusionError as e:
            self.error = e
            raise

        self.scale_level = level
        self.scale = scale
        self.beta = beta
        self.init_mode = mode
        self.grid = grid
        self.target = target
        self.steps = 0
        self.error = None
        self._frame_clock = 0.0
        self._inject_clock = 0.0
        self.running = True

    def stop(self, error=None):
        self.running = False
        if error is not None:
            self.error = error

    def tick(self):
        """One frame: diffusion step, then render."""
        try:
            step(self.grid, self.gamma, self.ordering)
            render(self.grid, self.scale, self.target)
        except HeatDiffusionError as e:
            self.stop(e)
            raise
        self.steps += 1

    def advance(self, dt):
        """Feed dt seconds of wall time to both timers.

        Due events fire oldest first. Returns the number of frames stepped.
        """
        if not self.running:
            return 0

        if not self.paused:
            self._frame_clock += dt
        if self.holding:
            self._inject_clock += dt
        else:
            self._inject_clock = 0.0

        ticks = 0
        while self.running:
            frame_late = self._frame_clock - FRAME_DELAY
            inject_late = self._inject_clock - INJECT_DELAY if self.holding else -1.0
            if frame_late < 0 and inject_late < 0:
                break
            if inject_late >= frame_late:
                self._inject_clock -= INJECT_DELAY
                self.pump_heat()
            else:
                self._frame_clock -= FRAME_DELAY
                self.tick()
                ticks += 1
        return ticks

    # --- Pointer ---

    def move(self, px, py):
        self.pointer = (px, py)

    def press(self, px=None, py=None):
        if px is not None and py is not None:
            self.pointer = (px, py)
        if not self.holding:
            self._inject_clock = 0.0
        self.holding = True

    def release(self):
        self.holding = False

    def leave(self):
        self.holding = False

    def pump_heat(self):
        """Inject heat under the pointer. Returns True if a cell was hit."""
        if not self.holding or self.pointer is None:
            return False
        col, row = screen_to_grid(self.pointer[0], self.pointer[1], self.scale)
        if not self.grid.in_bounds(row, col):
            return False
        inject(self.grid, row, col, self.heat_multiplier * HEAT_QUANTUM)
        return True

    # --- Introspection ---

    @property
    def stats(self):
        """Return current grid statistics."""
        cells = self.grid.cells
        return {
            "steps": self.steps,
            "total_heat": float(cells.sum()),
            "mean": float(cells.mean()),
            "max": float(cells.max()),
            "rows": self.grid.rows,
            "cols": self.grid.cols,
            "scale": self.scale,
        }
