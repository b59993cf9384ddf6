"""
Simulation
==========

Main orchestrator combining gravity, particle physics, merging, power-ups and
spawning for one painting session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from gravity_paint.paint_core.config_loader import PaintConfig, get_config
from gravity_paint.paint_core.errors import InvalidColorFormat, UnknownGravityPreset
from gravity_paint.paint_core.merge_system import MergeResult, MergeSystem
from gravity_paint.paint_core.particle_physics import ParticlePhysics
from gravity_paint.paint_core.powerups import SPEED_UP_REVERT_KEY, PowerUpEvent, PowerUpSystem
from gravity_paint.paint_core.spawner import SpawnController
from gravity_paint.paint_core.state import SimulationState

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """Result of a single simulation tick."""
    tick: int
    time: float
    particle_count: int
    merges: List[MergeResult] = field(default_factory=list)
    collected: List[PowerUpEvent] = field(default_factory=list)
    callbacks_fired: int = 0


class Simulation:
    """
    One painting session.

    Orchestrates:
    - Scheduled effects (paint emission, power-up spawns, speedUp reverts)
    - Per-particle physics
    - Merge scan and resolution
    - User controls (tilt, preset, brush)

    Time is passed in explicitly as milliseconds; ``tick(now)`` runs every
    callback due by ``now`` and then advances all particles once.
    """

    def __init__(
        self,
        config: Optional[PaintConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize simulation.

        Args:
            config: Simulation configuration. Uses default if None.
            seed: Random seed for power-up placement.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._build(seed)

    def _build(self, seed: Optional[int]) -> None:
        self._state = SimulationState.create(self._config, seed)
        self._power_ups = PowerUpSystem(self._state)
        self._physics = ParticlePhysics(self._state, self._power_ups)
        self._merger = MergeSystem(self._state)
        self._spawner = SpawnController(self._state, self._power_ups)
        self._collected_total = 0

    @property
    def config(self) -> PaintConfig:
        return self._config

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def spawner(self) -> SpawnController:
        return self._spawner

    @property
    def physics(self) -> ParticlePhysics:
        return self._physics

    @property
    def merger(self) -> MergeSystem:
        return self._merger

    @property
    def power_ups(self) -> PowerUpSystem:
        return self._power_ups

    @property
    def gravity(self) -> Tuple[float, float]:
        return self._state.gravity.current

    @property
    def particle_count(self) -> int:
        return len(self._state.particles)

    def start(self, now: float = 0.0) -> None:
        """Begin periodic power-up spawning."""
        self._spawner.start_power_up_spawning(now)
        logger.info("Session started at t=%.0f", now)

    def reset(self, seed: Optional[int] = None, now: float = 0.0) -> None:
        """
        Discard the session and start a new one.

        Args:
            seed: New random seed. Uses previous if None.
            now: Clock value the new session starts at.
        """
        if seed is not None:
            self._seed = seed
        self._build(self._seed)
        self.start(now)

    def tick(self, now: float) -> TickResult:
        """
        Advance the session by one tick.

        Args:
            now: Current simulation time in milliseconds.

        Returns:
            TickResult with merges and power-up pickups of this tick.
        """
        state = self._state
        fired = state.scheduler.run_due(now)

        merges: List[MergeResult] = []
        collected: List[PowerUpEvent] = []
        particles = state.particles

        i = 0
        while i < len(particles):
            collected.extend(self._physics.update(particles[i], now))

            j = self._merger.find_partner(particles, i)
            if j is None:
                i += 1
                continue

            merges.append(self._merger.merge_slots(particles, i, j))
            # Slot i now holds the merged particle: update and rescan it
            # against the shifted tail before moving on.

        state.tick_count += 1
        self._collected_total += len(collected)

        if merges or collected:
            logger.debug(
                "Tick %d: %d merge(s), %d pickup(s), %d particle(s)",
                state.tick_count, len(merges), len(collected), len(particles)
            )

        return TickResult(
            tick=state.tick_count,
            time=now,
            particle_count=len(particles),
            merges=merges,
            collected=collected,
            callbacks_fired=fired
        )

    # ------------------------------------------------------------------
    # User controls
    # ------------------------------------------------------------------

    def tilt_left(self) -> Tuple[float, float]:
        return self._state.gravity.tilt(-self._config.gravity.tilt_step)

    def tilt_right(self) -> Tuple[float, float]:
        return self._state.gravity.tilt(self._config.gravity.tilt_step)

    def select_gravity_preset(self, name: str) -> bool:
        """
        Switch gravity to a named preset.

        Unknown names are ignored and the current gravity is kept.

        Returns:
            True if the preset was applied.
        """
        try:
            self._state.gravity.set_preset(name)
        except UnknownGravityPreset as e:
            logger.warning("%s; keeping gravity %s", e, self._state.gravity.current)
            return False

        if self._config.powerups.cancel_speed_up_on_preset:
            self._state.scheduler.cancel_key(SPEED_UP_REVERT_KEY)
        return True

    def select_color(self, value: str) -> bool:
        """Color picker input; malformed colors are ignored."""
        try:
            self._spawner.set_color(value)
        except InvalidColorFormat as e:
            logger.warning("%s; keeping brush color", e)
            return False
        return True

    def start_painting(self, now: float) -> None:
        self._spawner.start_painting(now)

    def stop_painting(self) -> None:
        self._spawner.stop_painting()

    # ------------------------------------------------------------------
    # Read-side
    # ------------------------------------------------------------------

    def get_info(self) -> Dict[str, Any]:
        """Summary counters for HUDs and benchmarks."""
        state = self._state
        return {
            "tick": state.tick_count,
            "particles": len(state.particles),
            "dry_particles": sum(1 for p in state.particles if p.is_dry),
            "power_ups": len(state.power_ups),
            "merges": self._merger.merges,
            "collected": self._collected_total,
            "total_mass": state.total_mass,
            "gravity": state.gravity.current,
            "gravity_preset": state.gravity.preset_name,
            "brush_size": state.brush.size,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with canvas size and the obstacle, power-up and particle
            lists in draw order.
        """
        state = self._state
        return {
            "canvas_width": state.width,
            "canvas_height": state.height,
            "obstacles": [
                {"x": o.x, "y": o.y, "width": o.width, "height": o.height}
                for o in state.obstacles
            ],
            "power_ups": [
                {"x": p.x, "y": p.y, "radius": p.radius, "kind": p.kind.value, "color": p.color}
                for p in state.power_ups
            ],
            "particles": [
                {
                    "uid": p.uid,
                    "x": p.x,
                    "y": p.y,
                    "radius": p.radius,
                    "color": p.color,
                    "shape": p.shape.value,
                    "is_dry": p.is_dry,
                }
                for p in state.particles
            ],
            "gravity": state.gravity.current,
            "gravity_preset": state.gravity.preset_name,
            "brush_size": state.brush.size,
            "brush_color": state.brush.color,
            "brush_shape": state.brush.shape.value,
            "painting": self._spawner.is_painting,
        }
