"""
Gravity Model
=============

Holds the session's current gravity vector and the named presets it can be
switched to.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Tuple

from gravity_paint.paint_core.config_loader import PaintConfig, get_config
from gravity_paint.paint_core.errors import UnknownGravityPreset

logger = logging.getLogger(__name__)

Vector = Tuple[float, float]


class GravityModel:
    """
    Current gravity plus the fixed preset table.

    Every particle reads ``current`` during its next integration step, so all
    mutations here are observed on the following tick.
    """

    def __init__(
        self,
        presets: Mapping[str, Vector],
        tilt_limit: float = 0.5,
        initial: Optional[Vector] = None
    ):
        """
        Initialize gravity model.

        Args:
            presets: Preset name to (ax, ay) table. Copied, never mutated.
            tilt_limit: Bound for the horizontal component under tilt.
            initial: Starting vector. Uses the first preset if None.
        """
        if not presets:
            raise ValueError("GravityModel needs at least one preset")

        self._presets: Dict[str, Vector] = {
            name: (float(v[0]), float(v[1])) for name, v in presets.items()
        }
        self._tilt_limit = float(tilt_limit)
        if initial is None:
            initial = next(iter(self._presets.values()))
        self._ax, self._ay = float(initial[0]), float(initial[1])
        self._preset_name: Optional[str] = None

    @classmethod
    def from_config(cls, config: Optional[PaintConfig] = None) -> "GravityModel":
        """Build a model starting on the configured default preset."""
        if config is None:
            config = get_config()
        gravity = config.gravity
        model = cls(gravity.preset_table, tilt_limit=gravity.tilt_limit)
        model.set_preset(gravity.default_preset)
        return model

    @property
    def current(self) -> Vector:
        """Current (ax, ay)."""
        return (self._ax, self._ay)

    @property
    def preset_name(self) -> Optional[str]:
        """Name of the last selected preset, or None."""
        return self._preset_name

    @property
    def preset_names(self) -> Tuple[str, ...]:
        return tuple(self._presets)

    @property
    def tilt_limit(self) -> float:
        return self._tilt_limit

    def preset(self, name: str) -> Vector:
        """Look up a preset vector without selecting it."""
        try:
            return self._presets[name]
        except KeyError:
            raise UnknownGravityPreset(name, self._presets) from None

    def set_preset(self, name: str) -> Vector:
        """
        Replace current gravity with a preset.

        Raises:
            UnknownGravityPreset: If name is not in the table. Current gravity
                is left unchanged.
        """
        ax, ay = self.preset(name)
        self._ax, self._ay = ax, ay
        self._preset_name = name
        logger.info("Gravity preset %s -> (%.3f, %.3f)", name, ax, ay)
        return self.current

    def tilt(self, delta: float) -> Vector:
        """Nudge the horizontal component, clamped to [-limit, limit]."""
        limit = self._tilt_limit
        self._ax = max(-limit, min(limit, self._ax + delta))
        logger.debug("Tilt %+.2f -> ax=%.3f", delta, self._ax)
        return self.current

    def scale_vertical(self, factor: float) -> Vector:
        """Multiply the vertical component (speedUp and its revert)."""
        self._ay *= factor
        return self.current
