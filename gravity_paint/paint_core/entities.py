"""
Entities
========

Particles, obstacles and power-ups: the things that live on the canvas.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from gravity_paint.paint_core.color_blend import RGB


class ParticleShape(Enum):
    """How a particle is drawn. Collision always treats it as a circle."""
    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"

    @classmethod
    def parse(cls, value: "str | ParticleShape") -> "ParticleShape":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(
                f"Unknown shape '{value}', expected one of {[s.value for s in cls]}"
            ) from None


class PowerUpType(Enum):
    """Collectible effect kinds."""
    SIZE_UP = "sizeUp"
    SPEED_UP = "speedUp"


def mass_for_radius(radius: float) -> float:
    return math.pi * radius * radius


@dataclass(eq=False)
class Particle:
    """
    A blob of paint.

    Mass follows the radius (pi * r^2) except right after a merge, where it is
    set to the exact sum of the two source masses.
    """
    x: float
    y: float
    radius: float
    color: RGB
    shape: ParticleShape = ParticleShape.CIRCLE
    creation_time: float = 0.0  # Milliseconds on the simulation clock
    vx: float = 0.0
    vy: float = 0.0
    is_dry: bool = False
    uid: int = -1
    mass: float = field(init=False)

    def __post_init__(self) -> None:
        if self.radius <= 0:
            raise ValueError(f"Particle radius must be positive, got {self.radius}")
        self.mass = mass_for_radius(self.radius)

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    def set_radius(self, radius: float) -> None:
        """Change the radius and recompute mass."""
        if radius <= 0:
            raise ValueError(f"Particle radius must be positive, got {radius}")
        self.radius = radius
        self.mass = mass_for_radius(radius)

    def age(self, now: float) -> float:
        """Milliseconds since creation."""
        return now - self.creation_time

    def mark_dry(self) -> None:
        # One-way: nothing ever clears this flag.
        self.is_dry = True


@dataclass(frozen=True)
class Obstacle:
    """Static axis-aligned rectangle; (x, y) is the top-left corner."""
    x: float
    y: float
    width: float
    height: float

    @property
    def radius(self) -> float:
        """Bounding radius used by the approximate circle test."""
        return max(self.width, self.height) / 2


@dataclass(eq=False)
class PowerUp:
    """A collectible sitting on the canvas until a particle touches it."""
    x: float
    y: float
    kind: PowerUpType
    radius: float = 10.0
    uid: int = -1

    @property
    def color(self) -> RGB:
        if self.kind is PowerUpType.SIZE_UP:
            return (0, 128, 0)
        return (0, 0, 255)
