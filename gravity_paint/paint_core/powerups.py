"""
Power-Up System
===============

Spawns collectibles, detects pickup and applies their effects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from gravity_paint.paint_core.entities import Particle, PowerUp, PowerUpType
from gravity_paint.paint_core.geometry import circles_overlap
from gravity_paint.paint_core.state import SimulationState

logger = logging.getLogger(__name__)

SPEED_UP_REVERT_KEY = "speed_up_revert"


@dataclass
class PowerUpEvent:
    """Record of a collected power-up."""
    power_up_uid: int
    particle_uid: int
    kind: PowerUpType
    time: float


class PowerUpSystem:
    """
    Power-up lifecycle against an explicit SimulationState.

    Effects:
    - sizeUp: brush size *= factor, capped. Only future particles are larger.
    - speedUp: gravity ay *= factor now, divided back after a fixed delay.
      Activations stack and each schedules its own revert.
    """

    def __init__(self, state: SimulationState):
        self._state = state
        self._config = state.config.powerups

    def spawn_random(self, now: float) -> PowerUp:
        """Place a power-up at a uniformly random canvas position."""
        rng = self._state.rng
        x = rng.random() * self._state.width
        y = rng.random() * self._state.height
        if rng.random() < self._config.size_up_probability:
            kind = PowerUpType.SIZE_UP
        else:
            kind = PowerUpType.SPEED_UP
        power_up = self._state.add_power_up(
            PowerUp(x, y, kind, radius=self._config.radius)
        )
        logger.debug("Spawned %s at (%.1f, %.1f) t=%.0f", kind.value, x, y, now)
        return power_up

    def collect(self, particle: Particle, now: float) -> List[PowerUpEvent]:
        """
        Collect every live power-up the particle overlaps.

        Each collected power-up leaves the live list before its effect runs,
        so no other particle can trigger it again.
        """
        events: List[PowerUpEvent] = []
        live = self._state.power_ups
        for power_up in list(live):
            if power_up not in live:
                continue
            if not circles_overlap(particle, power_up):
                continue
            live.remove(power_up)
            self.apply(power_up, now)
            events.append(PowerUpEvent(power_up.uid, particle.uid, power_up.kind, now))
        return events

    def apply(self, power_up: PowerUp, now: float) -> None:
        """Apply a power-up's effect once."""
        if power_up.kind is PowerUpType.SIZE_UP:
            self._apply_size_up()
        elif power_up.kind is PowerUpType.SPEED_UP:
            self._apply_speed_up(now)
        else:
            raise ValueError(f"Unhandled power-up type: {power_up.kind}")

    def _apply_size_up(self) -> None:
        brush = self._state.brush
        brush.size = min(brush.size * self._config.size_up_factor, self._config.size_up_cap)
        logger.info("sizeUp: brush size %.2f", brush.size)

    def _apply_speed_up(self, now: float) -> None:
        factor = self._config.speed_up_factor
        gravity = self._state.gravity
        gravity.scale_vertical(factor)
        self._state.scheduler.call_later(
            now,
            self._config.speed_up_duration_ms,
            lambda _t: gravity.scale_vertical(1 / factor),
            key=SPEED_UP_REVERT_KEY
        )
        logger.info("speedUp: gravity ay %.3f until t=%.0f",
                    gravity.current[1], now + self._config.speed_up_duration_ms)
