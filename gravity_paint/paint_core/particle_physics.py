"""
Particle Physics
================

Advances a single particle by one tick: drying, Euler integration, wall and
obstacle bounce, power-up pickup and resting growth.
"""

from __future__ import annotations

from typing import List, Optional

from gravity_paint.paint_core.entities import Obstacle, Particle
from gravity_paint.paint_core.geometry import circle_rect_overlap, circles_overlap
from gravity_paint.paint_core.powerups import PowerUpEvent, PowerUpSystem
from gravity_paint.paint_core.state import SimulationState


class ParticlePhysics:
    """
    Per-particle update rules.

    Velocities are in canvas units per tick and the timestep is one tick, so
    integration is simply ``v += g; p += v``.
    """

    def __init__(
        self,
        state: SimulationState,
        power_ups: Optional[PowerUpSystem] = None
    ):
        """
        Initialize particle physics.

        Args:
            state: Session state (gravity, obstacles, power-ups, canvas).
            power_ups: Power-up system for pickups. Created if None.
        """
        self._state = state
        self._config = state.config.physics
        self._power_ups = power_ups if power_ups is not None else PowerUpSystem(state)

        if self._config.obstacle_collision == "exact":
            self._hits_obstacle = circle_rect_overlap
        else:
            self._hits_obstacle = circles_overlap

    def update(self, particle: Particle, now: float) -> List[PowerUpEvent]:
        """
        Advance one particle by one tick.

        Args:
            particle: Particle to update in place.
            now: Current simulation time in milliseconds.

        Returns:
            Power-ups collected by this particle during the update.
        """
        self._update_drying(particle, now)
        self._integrate(particle)
        self._collide_walls(particle)
        self._collide_obstacles(particle)
        events = self._power_ups.collect(particle, now)
        self._grow(particle)
        return events

    def _update_drying(self, particle: Particle, now: float) -> None:
        if particle.age(now) > self._config.drying_time_ms:
            particle.mark_dry()

    def _integrate(self, particle: Particle) -> None:
        ax, ay = self._state.gravity.current
        particle.vx += ax
        particle.vy += ay
        particle.x += particle.vx
        particle.y += particle.vy

    def _collide_walls(self, particle: Particle) -> None:
        """Left, right and floor reflect; the top is open."""
        restitution = self._config.wall_restitution
        width = self._state.width
        height = self._state.height
        r = particle.radius

        if particle.x < r:
            particle.x = r
            particle.vx *= restitution
        if particle.x > width - r:
            particle.x = width - r
            particle.vx *= restitution
        if particle.y > height - r:
            particle.y = height - r
            particle.vy *= restitution

    def _collide_obstacles(self, particle: Particle) -> None:
        restitution = self._config.obstacle_restitution
        for obstacle in self._state.obstacles:
            if self.hits_obstacle(particle, obstacle):
                particle.vx *= restitution
                particle.vy *= restitution

    def hits_obstacle(self, particle: Particle, obstacle: Obstacle) -> bool:
        """Obstacle test in the configured mode (approximate circle or exact)."""
        return self._hits_obstacle(particle, obstacle)

    def _grow(self, particle: Particle) -> None:
        threshold = self._config.rest_speed_threshold
        if particle.is_dry:
            return
        if abs(particle.vx) >= threshold or abs(particle.vy) >= threshold:
            return
        particle.set_radius(particle.radius + self._config.growth_per_tick)
        self._contain(particle)

    def _contain(self, particle: Particle) -> None:
        """Pull a grown particle back inside the walls without bouncing it."""
        r = particle.radius
        width = self._state.width
        particle.x = max(r, min(width - r, particle.x))
        particle.y = min(self._state.height - r, particle.y)
