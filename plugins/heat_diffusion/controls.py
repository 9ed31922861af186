"""
Control panel widgets for the heat diffusion viewer.

Flat, dark widgets drawn directly with pygame: sliders for the live
parameters, a selector row for the scale level, plain buttons, and a
modal banner for fatal errors.
"""

import pygame


THEME = {
    "bg": (12, 10, 14),
    "panel": (24, 20, 26),
    "track": (60, 48, 52),
    "track_fill": (230, 90, 30),
    "handle": (220, 205, 195),
    "handle_active": (255, 255, 255),
    "text": (190, 180, 175),
    "text_bright": (240, 232, 225),
    "text_dim": (110, 100, 98),
    "button": (44, 36, 40),
    "button_hover": (62, 50, 54),
    "button_active": (180, 70, 25),
    "divider": (48, 40, 44),
    "banner": (120, 20, 20),
}


class Slider:
    """Horizontal slider with label and value readout."""

    def __init__(self, x, y, width, label, min_val, max_val, value,
                 fmt=".3f", step=None, on_change=None):
        self.x = x
        self.y = y
        self.width = width
        self.height = 36
        self.label = label
        self.min_val = min_val
        self.max_val = max_val
        self.value = value
        self.fmt = fmt
        self.step = step
        self.on_change = on_change
        self.dragging = False

        self.track_x = x + 8
        self.track_y = y + 22
        self.track_w = width - 16

    def _val_to_x(self, val):
        frac = (val - self.min_val) / (self.max_val - self.min_val)
        return self.track_x + frac * self.track_w

    def _x_to_val(self, px):
        frac = max(0.0, min(1.0, (px - self.track_x) / self.track_w))
        val = self.min_val + frac * (self.max_val - self.min_val)
        if self.step:
            val = round(val / self.step) * self.step
        return val

    def _drag_to(self, px):
        self.value = self._x_to_val(px)
        if self.on_change:
            self.on_change(self.value)

    def handle_event(self, event):
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            mx, my = event.pos
            on_track = (self.track_x - 4 <= mx <= self.track_x + self.track_w + 4
                        and abs(my - self.track_y) <= 12)
            if on_track:
                self.dragging = True
                self._drag_to(mx)
                return True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging = False
        elif event.type == pygame.MOUSEMOTION and self.dragging:
            self._drag_to(event.pos[0])
            return True
        return False

    def set_value(self, val):
        self.value = max(self.min_val, min(self.max_val, val))

    def draw(self, surface, font):
        surface.blit(font.render(self.label, True, THEME["text"]), (self.x + 8, self.y + 2))
        val_surf = font.render(f"{self.value:{self.fmt}}", True, THEME["text_bright"])
        surface.blit(val_surf, (self.x + self.width - val_surf.get_width() - 8, self.y + 2))

        hx = self._val_to_x(self.value)
        pygame.draw.rect(surface, THEME["track"],
                         pygame.Rect(self.track_x, self.track_y - 2, self.track_w, 4),
                         border_radius=2)
        pygame.draw.rect(surface, THEME["track_fill"],
                         pygame.Rect(self.track_x, self.track_y - 2, hx - self.track_x, 4),
                         border_radius=2)
        color = THEME["handle_active"] if self.dragging else THEME["handle"]
        pygame.draw.circle(surface, color, (int(hx), self.track_y), 7)


class Button:
    """Clickable button with label."""

    def __init__(self, x, y, width, height, label, on_click=None, active=False):
        self.rect = pygame.Rect(x, y, width, height)
        self.label = label
        self.on_click = on_click
        self.active = active
        self.hovered = False

    def handle_event(self, event):
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                if self.on_click:
                    self.on_click()
                return True
        elif event.type == pygame.MOUSEMOTION:
            self.hovered = self.rect.collidepoint(event.pos)
        return False

    def draw(self, surface, font):
        if self.active:
            color = THEME["button_active"]
        elif self.hovered:
            color = THEME["button_hover"]
        else:
            color = THEME["button"]
        pygame.draw.rect(surface, color, self.rect, border_radius=4)
        label_surf = font.render(self.label, True, THEME["text_bright"])
        surface.blit(label_surf, label_surf.get_rect(center=self.rect.center))


class SelectorRow:
    """Row of equal-width buttons, exactly one selected (scale selector)."""

    def __init__(self, x, y, width, labels, selected=0, on_select=None, btn_height=26):
        self.labels = labels
        self.selected = selected
        self.on_select = on_select
        padding = 4
        bw = (width - padding * (len(labels) - 1)) // max(len(labels), 1)
        self.buttons = [
            Button(x + i * (bw + padding), y, bw, btn_height, label)
            for i, label in enumerate(labels)
        ]
        self.total_height = btn_height
        self._update_active()

    def _update_active(self):
        for i, btn in enumerate(self.buttons):
            btn.active = (i == self.selected)

    def select(self, idx):
        self.selected = idx
        self._update_active()

    def handle_event(self, event):
        for i, btn in enumerate(self.buttons):
            if btn.handle_event(event):
                self.select(i)
                if self.on_select:
                    self.on_select(i, self.labels[i])
                return True
        return False

    def draw(self, surface, font):
        for btn in self.buttons:
            btn.draw(surface, font)


class SectionHeader:
    """Section divider with title."""

    def __init__(self, x, y, width, title):
        self.x = x
        self.y = y
        self.width = width
        self.title = title
        self.height = 24

    def draw(self, surface, font):
        pygame.draw.line(surface, THEME["divider"],
                         (self.x + 8, self.y + 8), (self.x + self.width - 8, self.y + 8))
        surface.blit(font.render(self.title, True, THEME["text_dim"]), (self.x + 8, self.y + 12))


class ControlPanel:
    """
    Side panel holding the viewer's widgets.
    Widgets are stacked top to bottom as they are added.
    """

    def __init__(self, x, y, width, height):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.widgets = []
        self.surface = pygame.Surface((width, height))
        self._cursor_y = 8

    def add_section(self, title):
        header = SectionHeader(0, self._cursor_y, self.width, title)
        self.widgets.append(header)
        self._cursor_y += header.height + 4

    def add_slider(self, label, min_val, max_val, value, fmt=".3f",
                   step=None, on_change=None):
        slider = Slider(0, self._cursor_y, self.width, label,
                        min_val, max_val, value, fmt, step, on_change)
        self.widgets.append(slider)
        self._cursor_y += slider.height + 6
        return slider

    def add_selector(self, labels, selected=0, on_select=None):
        row = SelectorRow(8, self._cursor_y, self.width - 16, labels, selected, on_select)
        self.widgets.append(row)
        self._cursor_y += row.total_height + 8
        return row

    def add_button(self, label, on_click=None):
        btn = Button(8, self._cursor_y, self.width - 16, 28, label, on_click)
        self.widgets.append(btn)
        self._cursor_y += 36
        return btn

    def add_spacer(self, height=8):
        self._cursor_y += height

    def handle_event(self, event):
        """Route an event to the widgets in panel-local coordinates."""
        if hasattr(event, "pos"):
            local = (event.pos[0] - self.x, event.pos[1] - self.y)
            if not (0 <= local[0] <= self.width and 0 <= local[1] <= self.height):
                # Releasing outside the panel still ends a slider drag
                if event.type == pygame.MOUSEBUTTONUP:
                    for widget in self.widgets:
                        if hasattr(widget, "dragging"):
                            widget.dragging = False
                return False
            attrs = {k: v for k, v in event.__dict__.items() if k != "pos"}
            event = pygame.event.Event(event.type, {**attrs, "pos": local})

        for widget in self.widgets:
            if hasattr(widget, "handle_event") and widget.handle_event(event):
                return True
        return False

    def draw(self, target_surface, font):
        self.surface.fill(THEME["panel"])
        pygame.draw.line(self.surface, THEME["divider"], (0, 0), (0, self.height))
        for widget in self.widgets:
            widget.draw(self.surface, font)
        target_surface.blit(self.surface, (self.x, self.y))


def draw_banner(surface, font, title, message):
    """Draw a centered modal banner with a title and a message line."""
    w, h = surface.get_size()
    rect = pygame.Rect(0, 0, min(w - 40, 560), 96)
    rect.center = (w // 2, h // 2)
    shade = pygame.Surface((w, h), pygame.SRCALPHA)
    shade.fill((0, 0, 0, 160))
    surface.blit(shade, (0, 0))
    pygame.draw.rect(surface, THEME["banner"], rect, border_radius=6)
    lines = (title, message, "press any key or click to continue")
    colors = (THEME["text_bright"], THEME["text"], THEME["text_dim"])
    for i, (line, color) in enumerate(zip(lines, colors)):
        text = font.render(line, True, color)
        surface.blit(text, (rect.x + 14, rect.y + 12 + i * 26))
