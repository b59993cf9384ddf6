"""
Simulation State
================

Everything one painting session mutates, gathered in one place and handed to
each subsystem explicitly.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from gravity_paint.paint_core.color_blend import RGB, parse_hex_color
from gravity_paint.paint_core.config_loader import PaintConfig, get_config
from gravity_paint.paint_core.entities import Obstacle, Particle, ParticleShape, PowerUp
from gravity_paint.paint_core.gravity import GravityModel
from gravity_paint.paint_core.scheduler import EffectScheduler


@dataclass
class BrushState:
    """Controller-facing brush parameters used for the next emitted particle."""
    size: float
    color: RGB
    shape: ParticleShape


@dataclass
class SimulationState:
    """
    Session-wide mutable state.

    Created at startup, mutated every tick, discarded at session end. Only the
    simulation thread touches it.
    """
    config: PaintConfig
    gravity: GravityModel
    brush: BrushState
    scheduler: EffectScheduler
    rng: random.Random
    particles: List[Particle] = field(default_factory=list)
    obstacles: List[Obstacle] = field(default_factory=list)
    power_ups: List[PowerUp] = field(default_factory=list)
    tick_count: int = 0
    _next_uid: int = 0

    @classmethod
    def create(
        cls,
        config: Optional[PaintConfig] = None,
        seed: Optional[int] = None
    ) -> "SimulationState":
        """Build a fresh session from configuration."""
        if config is None:
            config = get_config()

        brush = BrushState(
            size=config.brush.base_size,
            color=parse_hex_color(config.brush.default_color),
            shape=ParticleShape.parse(config.brush.default_shape)
        )
        obstacles = [
            Obstacle(o.x, o.y, o.width, o.height) for o in config.obstacles
        ]
        return cls(
            config=config,
            gravity=GravityModel.from_config(config),
            brush=brush,
            scheduler=EffectScheduler(),
            rng=random.Random(seed),
            obstacles=obstacles
        )

    @property
    def width(self) -> int:
        return self.config.canvas.width

    @property
    def height(self) -> int:
        return self.config.canvas.height

    def next_uid(self) -> int:
        uid = self._next_uid
        self._next_uid += 1
        return uid

    def add_particle(self, particle: Particle) -> Particle:
        if particle.uid < 0:
            particle.uid = self.next_uid()
        self.particles.append(particle)
        return particle

    def add_power_up(self, power_up: PowerUp) -> PowerUp:
        if power_up.uid < 0:
            power_up.uid = self.next_uid()
        self.power_ups.append(power_up)
        return power_up

    @property
    def total_mass(self) -> float:
        return sum(p.mass for p in self.particles)
