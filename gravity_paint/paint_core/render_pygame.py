"""
Pygame Renderer
===============

Draws a session to a pygame surface for the interactive window.
Supports both display mode and headless RGB output.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import pygame

from gravity_paint.paint_core.config_loader import PaintConfig, get_config


class PygameRenderer:
    """
    Renderer using pygame.draw primitives.

    Supports:
    - Circle / square / triangle particles
    - Gray obstacle rectangles, green/blue power-ups
    - HUD strip with gravity, preset and brush state
    """

    HUD_HEIGHT = 56

    def __init__(self, config: Optional[PaintConfig] = None, show_hud: bool = True):
        """
        Initialize renderer.

        Args:
            config: Simulation configuration.
            show_hud: Whether to draw the status strip under the canvas.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._show_hud = show_hud

        if not pygame.get_init():
            pygame.init()

        self._screen: Optional[pygame.Surface] = None

        pygame.font.init()
        self._font = pygame.font.Font(None, 22)

        self._bg_color = tuple(config.export.background)
        self._obstacle_color = (128, 128, 128)
        self._hud_color = (235, 235, 240)
        self._text_color = (40, 40, 50)

    @property
    def window_size(self) -> Tuple[int, int]:
        hud = self.HUD_HEIGHT if self._show_hud else 0
        return (self._config.canvas.width, self._config.canvas.height + hud)

    def render(self, render_data: Dict[str, Any]) -> np.ndarray:
        """
        Render the canvas (without HUD) to an RGB array.

        Returns:
            (height, width, 3) uint8 array.
        """
        surface = pygame.Surface((render_data["canvas_width"], render_data["canvas_height"]))
        self._draw_canvas(surface, render_data)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_screen(self, render_data: Dict[str, Any]) -> pygame.Surface:
        """Render to the pygame window, creating it on first use."""
        if self._screen is None:
            self._screen = pygame.display.set_mode(self.window_size)
            pygame.display.set_caption("Gravity Paint")

        canvas_rect = pygame.Rect(0, 0, render_data["canvas_width"], render_data["canvas_height"])
        self._draw_canvas(self._screen.subsurface(canvas_rect), render_data)
        if self._show_hud:
            self._draw_hud(self._screen, render_data)
        return self._screen

    def _draw_canvas(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        surface.fill(self._bg_color)

        for obstacle in render_data["obstacles"]:
            rect = pygame.Rect(
                int(obstacle["x"]), int(obstacle["y"]),
                int(obstacle["width"]), int(obstacle["height"])
            )
            pygame.draw.rect(surface, self._obstacle_color, rect)

        for power_up in render_data["power_ups"]:
            pygame.draw.circle(
                surface,
                power_up["color"],
                (int(power_up["x"]), int(power_up["y"])),
                int(power_up["radius"])
            )

        for particle in render_data["particles"]:
            self._draw_particle(surface, particle)

    def _draw_particle(self, surface: pygame.Surface, particle: Dict[str, Any]) -> None:
        x = particle["x"]
        y = particle["y"]
        r = particle["radius"]
        color = particle["color"]
        shape = particle["shape"]

        if shape == "square":
            pygame.draw.rect(surface, color, pygame.Rect(int(x - r), int(y - r), int(2 * r), int(2 * r)))
        elif shape == "triangle":
            pygame.draw.polygon(surface, color, [(x, y - r), (x - r, y + r), (x + r, y + r)])
        else:
            pygame.draw.circle(surface, color, (int(x), int(y)), max(1, int(r)))

    def _draw_hud(self, screen: pygame.Surface, render_data: Dict[str, Any]) -> None:
        top = render_data["canvas_height"]
        width = render_data["canvas_width"]
        pygame.draw.rect(screen, self._hud_color, pygame.Rect(0, top, width, self.HUD_HEIGHT))

        gx, gy = render_data["gravity"]
        preset = render_data["gravity_preset"] or "custom"
        line1 = f"Gravity: {preset} ({gx:+.1f}, {gy:.2f})   Particles: {len(render_data['particles'])}"
        line2 = (
            f"Brush: {render_data['brush_shape']} {render_data['brush_size']:.1f}"
            f"{'  [painting]' if render_data['painting'] else ''}"
        )

        screen.blit(self._font.render(line1, True, self._text_color), (8, top + 8))
        screen.blit(self._font.render(line2, True, self._text_color), (8, top + 30))

        swatch = pygame.Rect(width - 36, top + 12, 26, 26)
        pygame.draw.rect(screen, render_data["brush_color"], swatch)
        pygame.draw.rect(screen, self._text_color, swatch, 1)

    def close(self) -> None:
        """Release the window."""
        if self._screen is not None:
            pygame.display.quit()
            self._screen = None
