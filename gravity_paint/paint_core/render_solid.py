"""
Solid Renderer
==============

Headless numpy renderer producing an RGB array of the canvas.
Used for image export and for checking frames without a display.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple

import cv2
import numpy as np

from gravity_paint.paint_core.config_loader import PaintConfig, get_config


class SolidRenderer:
    """
    Renders obstacles, power-ups and particles as flat shapes.

    Draw order follows the render data: obstacles, then power-ups, then
    particles in list order. Coordinates are canvas units with y pointing
    down, scaled to the output size.
    """

    def __init__(self, config: Optional[PaintConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Simulation configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._bg_color = np.array(config.export.background, dtype=np.uint8)
        self._obstacle_color = np.array([128, 128, 128], dtype=np.uint8)

    def render(
        self,
        render_data: Dict[str, Any],
        width: Optional[int] = None,
        height: Optional[int] = None
    ) -> np.ndarray:
        """
        Render the canvas to an RGB array.

        Args:
            render_data: Data from Simulation.get_render_data().
            width: Output image width. Canvas width if None.
            height: Output image height. Canvas height if None.

        Returns:
            (height, width, 3) uint8 array.
        """
        canvas_w = render_data["canvas_width"]
        canvas_h = render_data["canvas_height"]
        if width is None:
            width = canvas_w
        if height is None:
            height = canvas_h

        img = np.zeros((height, width, 3), dtype=np.uint8)
        img[:] = self._bg_color

        sx = width / canvas_w
        sy = height / canvas_h
        scale = min(sx, sy)

        for obstacle in render_data["obstacles"]:
            self._draw_rect(
                img,
                obstacle["x"] * sx,
                obstacle["y"] * sy,
                obstacle["width"] * sx,
                obstacle["height"] * sy,
                self._obstacle_color
            )

        for power_up in render_data["power_ups"]:
            self._draw_circle(
                img,
                int(round(power_up["x"] * sx)),
                int(round(power_up["y"] * sy)),
                int(round(power_up["radius"] * scale)),
                np.array(power_up["color"], dtype=np.uint8)
            )

        for particle in render_data["particles"]:
            self._draw_particle(img, particle, sx, sy, scale)

        return img

    def _draw_particle(
        self,
        img: np.ndarray,
        particle: Dict[str, Any],
        sx: float,
        sy: float,
        scale: float
    ) -> None:
        """Draw a particle according to its shape."""
        cx = particle["x"] * sx
        cy = particle["y"] * sy
        r = particle["radius"] * scale
        color = np.array(particle["color"], dtype=np.uint8)
        shape = particle["shape"]

        if shape == "square":
            self._draw_rect(img, cx - r, cy - r, 2 * r, 2 * r, color)
        elif shape == "triangle":
            self._draw_triangle(
                img,
                ((cx, cy - r), (cx - r, cy + r), (cx + r, cy + r)),
                color
            )
        else:
            self._draw_circle(img, int(round(cx)), int(round(cy)), int(round(r)), color)

    def _draw_rect(
        self,
        img: np.ndarray,
        x: float,
        y: float,
        w: float,
        h: float,
        color: np.ndarray
    ) -> None:
        """Fill an axis-aligned rectangle, clipped to the image."""
        height, width = img.shape[:2]
        x_min = max(0, int(round(x)))
        y_min = max(0, int(round(y)))
        x_max = min(width, int(round(x + w)))
        y_max = min(height, int(round(y + h)))
        if y_min >= y_max or x_min >= x_max:
            return
        img[y_min:y_max, x_min:x_max] = color

    def _draw_triangle(
        self,
        img: np.ndarray,
        vertices: Sequence[Tuple[float, float]],
        color: np.ndarray
    ) -> None:
        points = np.array([[int(round(x)), int(round(y))] for x, y in vertices], dtype=np.int32)
        cv2.fillPoly(img, [points], tuple(int(c) for c in color))

    def _draw_circle(
        self,
        img: np.ndarray,
        cx: int,
        cy: int,
        radius: int,
        color: np.ndarray
    ) -> None:
        """Draw a filled circle using numpy."""
        height, width = img.shape[:2]

        # Calculate bounding box
        y_min = max(0, cy - radius)
        y_max = min(height, cy + radius + 1)
        x_min = max(0, cx - radius)
        x_max = min(width, cx + radius + 1)

        if y_min >= y_max or x_min >= x_max:
            return

        y_coords = np.arange(y_min, y_max)
        x_coords = np.arange(x_min, x_max)
        yy, xx = np.meshgrid(y_coords, x_coords, indexing='ij')

        mask = (xx - cx)**2 + (yy - cy)**2 <= radius**2
        img[y_min:y_max, x_min:x_max][mask] = color
