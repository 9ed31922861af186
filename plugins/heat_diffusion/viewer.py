"""
Interactive Pygame Viewer for Heat Diffusion

Shows the temperature field on a canvas with a side panel of controls.
Hold the left mouse button on the canvas to inject heat under the cursor.

Gamma and heat multiplier apply immediately. Scale and beta are staged
and take effect on Reset, which rebuilds the grid for the new geometry.

Controls:
  SPACE       Pause / Resume
  R           Reset with current parameters
  1-5         Load preset
  TAB         Toggle control panel
  S           Save screenshot
  H           Toggle HUD overlay
  Q / ESC     Quit
  Mouse L     Add heat (on canvas area)
"""

import os
import time
import numpy as np
import pygame

from .controls import ControlPanel, THEME, draw_banner
from .errors import HeatDiffusionError
from .presets import (
    PRESETS, PRESET_ORDER, SCALE_LEVELS, SCALE_LEVEL_ORDER, DEFAULT_PRESET,
)
from .session import SimulationSession


PANEL_WIDTH = 280

# Cap on the wall time fed to the session per frame, so a stalled window
# does not trigger a burst of catch-up steps
MAX_FRAME_DT = 0.1


class Viewer:
    def __init__(self, width=800, height=600, start_preset=DEFAULT_PRESET, **overrides):
        self.canvas_w = width
        self.canvas_h = height
        self.panel_visible = True
        self.running = True
        self.show_hud = True
        self.fps_history = []

        # Raises InvalidDimensions if the canvas cannot hold a grid
        self.session = SimulationSession(width, height, preset=start_preset, **overrides)

        # Built after pygame.init in run()
        self.panel = None
        self.sliders = {}
        self.scale_selector = None
        self.hud_font = None
        self.panel_font = None
        self._pending_error = None

    @property
    def total_w(self):
        return self.canvas_w + (PANEL_WIDTH if self.panel_visible else 0)

    # --- Panel ---

    def _build_panel(self):
        panel = ControlPanel(self.canvas_w, 0, PANEL_WIDTH, self.canvas_h)
        self.sliders = {}
        s = self.session

        panel.add_section("DIFFUSION")
        self.sliders["gamma"] = panel.add_slider(
            "Gamma", 0.20, 0.26, s.gamma, fmt=".4f", step=0.0005,
            on_change=s.set_gamma
        )
        self.sliders["heat"] = panel.add_slider(
            "Heat multiplier", 0.5, 10.0, s.heat_multiplier, fmt=".1f", step=0.5,
            on_change=s.set_heat_multiplier
        )

        panel.add_section("GRID  (applied on reset)")
        self.sliders["beta"] = panel.add_slider(
            "Beta (spread)", 1, 100, s.staged["beta"], fmt=".0f", step=1,
            on_change=s.set_beta
        )
        labels = [f"{SCALE_LEVELS[level]}px" for level in SCALE_LEVEL_ORDER]
        self.scale_selector = panel.add_selector(
            labels, selected=SCALE_LEVEL_ORDER.index(s.staged["scale_level"]),
            on_select=self._on_scale_select
        )

        panel.add_spacer(4)
        panel.add_button("Reset  [R]", on_click=self._on_reset)
        panel.add_spacer(4)
        panel.add_button("Screenshot  [S]", on_click=self._save_screenshot)

        self.panel = panel

    def _sync_panel(self):
        if not self.panel:
            return
        s = self.session
        self.sliders["gamma"].set_value(s.gamma)
        self.sliders["heat"].set_value(s.heat_multiplier)
        self.sliders["beta"].set_value(s.staged["beta"])
        self.scale_selector.select(SCALE_LEVEL_ORDER.index(s.staged["scale_level"]))

    def _on_scale_select(self, idx, label):
        self.session.set_scale_level(SCALE_LEVEL_ORDER[idx])

    def _on_reset(self):
        try:
            self.session.reset()
        except HeatDiffusionError as e:
            self._pending_error = e
        self._sync_panel()

    def _apply_preset(self, key):
        try:
            self.session.apply_preset(key)
        except HeatDiffusionError as e:
            self._pending_error = e
        self._sync_panel()

    # --- Pointer ---

    def _on_canvas(self, pos):
        return 0 <= pos[0] < self.canvas_w and 0 <= pos[1] < self.canvas_h

    def _handle_canvas_event(self, event):
        """Feed pointer events to the session. Returns True if consumed.

        Pygame positions are 0-based; the session expects the 1-based
        pixel convention of the coordinate mapper.
        """
        s = self.session
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self._on_canvas(event.pos):
                s.press(event.pos[0] + 1, event.pos[1] + 1)
                return True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            s.release()
        elif event.type == pygame.MOUSEMOTION:
            if self._on_canvas(event.pos):
                s.move(event.pos[0] + 1, event.pos[1] + 1)
            else:
                s.leave()
        elif event.type == pygame.WINDOWLEAVE:
            s.leave()
        return False

    # --- Drawing ---

    def _render_canvas(self):
        rgb = self.session.target.rgb
        return pygame.surfarray.make_surface(rgb.swapaxes(0, 1).copy())

    def _draw_hud(self, screen, fps):
        st = self.session.stats
        state = "STOPPED" if not self.session.running else (
            "PAUSED" if self.session.paused else "")
        lines = [
            f"step {st['steps']}  {st['cols']}x{st['rows']} @ {st['scale']}px  {fps:.0f} fps",
            f"gamma {self.session.gamma:.4f}  heat x{self.session.heat_multiplier:.1f}",
            f"total {st['total_heat']:.0f}  max {st['max']:.1f}  {state}",
        ]
        padding = 6
        for i, line in enumerate(lines):
            text = self.hud_font.render(line, True, THEME["text_bright"])
            screen.blit(text, (padding + 4, padding + i * 18))

    def _notify(self, screen, error):
        """Block on a modal banner until the user acknowledges the error."""
        print(f"Error: {error}")
        title = type(error).__name__
        draw_banner(screen, self.panel_font, title, str(error))
        pygame.display.flip()
        while self.running:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type in (pygame.KEYDOWN, pygame.MOUSEBUTTONDOWN):
                break

    def _save_screenshot(self):
        screenshots_dir = os.path.join(
            os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
            "screenshots"
        )
        os.makedirs(screenshots_dir, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        path = os.path.join(screenshots_dir, f"heat_{self.session.preset_key}_{timestamp}.png")
        surface = self._render_canvas()
        pygame.image.save(surface, path)
        pygame.image.save(surface, os.path.join(screenshots_dir, "latest.png"))
        print(f"Screenshot saved: {path}")

    # --- Main loop ---

    def run(self):
        pygame.init()

        screen = pygame.display.set_mode((self.total_w, self.canvas_h))
        pygame.display.set_caption("Heat Diffusion")
        clock = pygame.time.Clock()

        self.hud_font = pygame.font.SysFont("menlo", 13)
        self.panel_font = pygame.font.SysFont("menlo", 12)
        self._build_panel()

        last_time = time.time()

        while self.running:
            now = time.time()
            dt = min(now - last_time, MAX_FRAME_DT)
            last_time = now
            frame_start = now

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    continue
                if event.type == pygame.KEYDOWN:
                    screen = self._handle_keydown(event, screen)
                    continue
                if self.panel_visible and self.panel and self.panel.handle_event(event):
                    continue
                self._handle_canvas_event(event)

            try:
                self.session.advance(dt)
            except HeatDiffusionError as e:
                self._pending_error = e

            screen.fill(THEME["bg"])
            screen.blit(self._render_canvas(), (0, 0))

            frame_time = time.time() - frame_start
            self.fps_history.append(frame_time)
            if len(self.fps_history) > 30:
                self.fps_history.pop(0)
            avg_fps = 1.0 / max(np.mean(self.fps_history), 0.001)

            if self.show_hud:
                self._draw_hud(screen, avg_fps)
            if self.panel_visible and self.panel:
                self.panel.draw(screen, self.panel_font)

            if self._pending_error is not None:
                error, self._pending_error = self._pending_error, None
                self._notify(screen, error)
                last_time = time.time()

            pygame.display.flip()
            clock.tick(60)

        pygame.quit()

    def _handle_keydown(self, event, screen):
        key = event.key

        if key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False

        elif key == pygame.K_SPACE:
            self.session.paused = not self.session.paused

        elif key == pygame.K_r:
            self._on_reset()

        elif key == pygame.K_h:
            self.show_hud = not self.show_hud

        elif key == pygame.K_s:
            self._save_screenshot()

        elif key == pygame.K_TAB:
            self.panel_visible = not self.panel_visible
            screen = pygame.display.set_mode((self.total_w, self.canvas_h))

        elif pygame.K_1 <= key <= pygame.K_9:
            idx = key - pygame.K_1
            if idx < len(PRESET_ORDER) and PRESET_ORDER[idx] in PRESETS:
                self._apply_preset(PRESET_ORDER[idx])

        return screen
