"""
Spawn Controller
================

Emits paint particles while the user holds the paint control, spawns power-ups
on a fixed interval, and owns the brush settings exposed to the UI.
"""

from __future__ import annotations

import logging
from typing import Optional

from gravity_paint.paint_core.color_blend import parse_hex_color
from gravity_paint.paint_core.entities import Particle, ParticleShape
from gravity_paint.paint_core.powerups import PowerUpSystem
from gravity_paint.paint_core.scheduler import ScheduledTask
from gravity_paint.paint_core.state import SimulationState

logger = logging.getLogger(__name__)

PAINT_TASK_KEY = "paint"
POWER_UP_TASK_KEY = "power_up_spawn"


class SpawnController:
    """
    Particle and power-up emission.

    While painting, a particle appears at the top-center every
    ``spawn_interval_ms``; before each one the brush size ramps linearly with
    hold time up to ``hold_max_size``. Releasing resets the brush to
    ``base_size``.
    """

    def __init__(
        self,
        state: SimulationState,
        power_ups: Optional[PowerUpSystem] = None
    ):
        """
        Initialize spawn controller.

        Args:
            state: Session state.
            power_ups: Power-up system used for periodic spawns. Created if None.
        """
        self._state = state
        self._brush_config = state.config.brush
        self._power_ups = power_ups if power_ups is not None else PowerUpSystem(state)

        self._paint_task: Optional[ScheduledTask] = None
        self._paint_start: float = 0.0
        self._power_up_task: Optional[ScheduledTask] = None

    @property
    def is_painting(self) -> bool:
        return self._paint_task is not None

    @property
    def brush_size(self) -> float:
        return self._state.brush.size

    # ------------------------------------------------------------------
    # Brush settings
    # ------------------------------------------------------------------

    def set_brush_size(self, value: int) -> float:
        """Slider input: integer size clamped to the slider range."""
        cfg = self._brush_config
        size = max(cfg.slider_min, min(cfg.slider_max, int(value)))
        self._state.brush.size = size
        return size

    def set_color(self, value: str) -> None:
        """
        Color picker input.

        Raises:
            InvalidColorFormat: If value is not '#rrggbb'. Brush is unchanged.
        """
        self._state.brush.color = parse_hex_color(value)

    def set_shape(self, value: "str | ParticleShape") -> ParticleShape:
        shape = ParticleShape.parse(value)
        self._state.brush.shape = shape
        return shape

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def add_paint(self, now: float) -> Particle:
        """Emit one particle at the spawn origin with the current brush."""
        brush = self._state.brush
        x, y = self._state.config.spawn_origin
        particle = Particle(
            x=x,
            y=y,
            radius=brush.size,
            color=brush.color,
            shape=brush.shape,
            creation_time=now
        )
        return self._state.add_particle(particle)

    def start_painting(self, now: float) -> None:
        """Begin press-and-hold emission. Ignored if already painting."""
        if self._paint_task is not None:
            return
        self._paint_start = now
        self._paint_task = self._state.scheduler.call_every(
            now,
            self._brush_config.spawn_interval_ms,
            self._on_paint_tick,
            key=PAINT_TASK_KEY
        )
        logger.debug("Painting started at t=%.0f", now)

    def stop_painting(self) -> None:
        """Cancel emission and reset the brush to its base size."""
        if self._paint_task is not None:
            self._state.scheduler.cancel(self._paint_task)
            self._paint_task = None
        self._state.brush.size = self._brush_config.base_size

    def hold_size(self, hold_ms: float) -> float:
        """Brush size after holding the paint control for hold_ms."""
        cfg = self._brush_config
        return min(cfg.base_size + hold_ms / cfg.hold_ramp_ms, cfg.hold_max_size)

    def _on_paint_tick(self, t: float) -> None:
        self._state.brush.size = self.hold_size(t - self._paint_start)
        self.add_paint(t)

    # ------------------------------------------------------------------
    # Power-ups
    # ------------------------------------------------------------------

    def start_power_up_spawning(self, now: float) -> None:
        """Spawn a power-up every ``spawn_interval_ms`` from now on."""
        if self._power_up_task is not None:
            return
        self._power_up_task = self._state.scheduler.call_every(
            now,
            self._state.config.powerups.spawn_interval_ms,
            self._power_ups.spawn_random,
            key=POWER_UP_TASK_KEY
        )

    def stop_power_up_spawning(self) -> None:
        if self._power_up_task is not None:
            self._state.scheduler.cancel(self._power_up_task)
            self._power_up_task = None
