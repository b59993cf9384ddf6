"""
Painting Export
===============

Saves the current frame of a session as a PNG.

Usage:
    from gravity_paint.paint_core import Simulation, export_painting

    sim = Simulation(seed=42)
    ...
    path = export_painting(sim)   # gravity_painting.png
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional, Union, TYPE_CHECKING

import cv2
import numpy as np

from gravity_paint.paint_core.render_solid import SolidRenderer

if TYPE_CHECKING:
    from gravity_paint.paint_core.simulation import Simulation


def generate_export_filename(
    name: str = "gravity_painting",
    directory: Optional[Union[str, Path]] = None
) -> Path:
    """
    Generate a timestamped PNG filename.

    Format: {name}_{YYYYMMDD_HHMMSS}.png
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"{name}_{timestamp}.png"
    if directory:
        return Path(directory) / filename
    return Path(filename)


def save_painting(image: np.ndarray, path: Union[str, Path]) -> Path:
    """
    Write an RGB uint8 array as PNG.

    Raises:
        ValueError: If the array is not (H, W, 3) uint8.
        OSError: If the file could not be written.
    """
    if image.ndim != 3 or image.shape[2] != 3 or image.dtype != np.uint8:
        raise ValueError(f"Expected (H, W, 3) uint8 image, got {image.shape} {image.dtype}")

    path = Path(path)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)

    # OpenCV expects BGR
    if not cv2.imwrite(str(path), cv2.cvtColor(image, cv2.COLOR_RGB2BGR)):
        raise OSError(f"Failed to write image: {path}")
    return path


def export_painting(
    simulation: "Simulation",
    path: Optional[Union[str, Path]] = None,
    renderer: Optional[SolidRenderer] = None
) -> Path:
    """
    Render the session's current frame and save it.

    Args:
        simulation: Session to capture.
        path: Output file. Uses the configured export filename if None.
        renderer: Renderer to use. Created from the session config if None.

    Returns:
        Path of the written file.
    """
    if renderer is None:
        renderer = SolidRenderer(simulation.config)
    if path is None:
        path = simulation.config.export.filename
    image = renderer.render(simulation.get_render_data())
    return save_painting(image, path)
