"""
Geometry
========

Overlap tests shared by particle, obstacle and power-up collision checks.

Anything with ``x``, ``y`` and ``radius`` attributes counts as a circle;
anything with ``x``, ``y``, ``width`` and ``height`` counts as a rectangle
whose origin is its top-left corner.
"""

from __future__ import annotations

import math
from typing import Any


def circles_overlap(a: Any, b: Any) -> bool:
    """True iff the center distance is strictly less than the sum of radii."""
    dx = a.x - b.x
    dy = a.y - b.y
    return math.sqrt(dx * dx + dy * dy) < a.radius + b.radius


def circle_rect_overlap(circle: Any, rect: Any) -> bool:
    """Exact circle vs axis-aligned rectangle test (closest point)."""
    nearest_x = max(rect.x, min(circle.x, rect.x + rect.width))
    nearest_y = max(rect.y, min(circle.y, rect.y + rect.height))
    dx = circle.x - nearest_x
    dy = circle.y - nearest_y
    return dx * dx + dy * dy < circle.radius * circle.radius
