"""
Configuration Loader
====================

Loads and validates paint_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml


SHAPE_NAMES = ("circle", "square", "triangle")
OBSTACLE_COLLISION_MODES = ("approximate", "exact")
_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(frozen=True)
class CanvasConfig:
    """Canvas geometry in logical units."""
    width: int
    height: int


@dataclass(frozen=True)
class PhysicsConfig:
    """Per-tick particle physics parameters."""
    wall_restitution: float
    obstacle_restitution: float
    drying_time_ms: float
    rest_speed_threshold: float
    growth_per_tick: float
    obstacle_collision: str


@dataclass(frozen=True)
class GravityConfig:
    """Gravity presets and tilt limits."""
    default_preset: str
    tilt_step: float
    tilt_limit: float
    presets: Tuple[Tuple[str, Tuple[float, float]], ...]

    @property
    def preset_table(self) -> Dict[str, Tuple[float, float]]:
        return dict(self.presets)

    @property
    def preset_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.presets)


@dataclass(frozen=True)
class BrushConfig:
    """Brush defaults and press-and-hold ramp."""
    base_size: float
    hold_max_size: float
    hold_ramp_ms: float
    spawn_interval_ms: float
    slider_min: int
    slider_max: int
    default_color: str
    default_shape: str


@dataclass(frozen=True)
class PowerUpConfig:
    """Power-up spawning and effect parameters."""
    radius: float
    spawn_interval_ms: float
    size_up_probability: float
    size_up_factor: float
    size_up_cap: float
    speed_up_factor: float
    speed_up_duration_ms: float
    cancel_speed_up_on_preset: bool


@dataclass(frozen=True)
class ObstacleConfig:
    """A static rectangle placed at session start."""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class ExportConfig:
    """Image export settings."""
    filename: str
    background: Tuple[int, int, int]


@dataclass(frozen=True)
class PaintConfig:
    """
    Complete simulation configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    canvas: CanvasConfig
    physics: PhysicsConfig
    gravity: GravityConfig
    brush: BrushConfig
    powerups: PowerUpConfig
    obstacles: Tuple[ObstacleConfig, ...]
    export: ExportConfig

    @property
    def spawn_origin(self) -> Tuple[float, float]:
        """Top-center point where painted particles appear."""
        return (self.canvas.width / 2, 0.0)


def _parse_vector(data: List, what: str) -> Tuple[float, float]:
    """Parse a 2D vector from YAML."""
    if len(data) != 2:
        raise ValueError(f"{what} must have 2 values [x, y], got {data}")
    return (float(data[0]), float(data[1]))


def _parse_color(color_data: List) -> Tuple[int, int, int]:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _parse_obstacle(data: List) -> ObstacleConfig:
    """Parse an obstacle rectangle [x, y, width, height]."""
    if len(data) != 4:
        raise ValueError(f"Obstacle must have 4 values [x, y, width, height], got {data}")
    return ObstacleConfig(
        x=float(data[0]),
        y=float(data[1]),
        width=float(data[2]),
        height=float(data[3])
    )


def _validate_config(config: PaintConfig) -> None:
    """Validate configuration consistency."""
    if config.canvas.width <= 0 or config.canvas.height <= 0:
        raise ValueError(
            f"Canvas size must be positive, got {config.canvas.width}x{config.canvas.height}"
        )

    if not config.gravity.presets:
        raise ValueError("At least one gravity preset is required")

    if config.gravity.default_preset not in config.gravity.preset_table:
        raise ValueError(
            f"default_preset '{config.gravity.default_preset}' is not one of "
            f"{list(config.gravity.preset_names)}"
        )

    if config.gravity.tilt_limit < 0:
        raise ValueError(f"tilt_limit must be >= 0, got {config.gravity.tilt_limit}")

    if config.physics.obstacle_collision not in OBSTACLE_COLLISION_MODES:
        raise ValueError(
            f"obstacle_collision must be 'approximate' or 'exact', "
            f"got '{config.physics.obstacle_collision}'"
        )

    if config.brush.base_size <= 0:
        raise ValueError(f"brush.base_size must be positive, got {config.brush.base_size}")

    if config.brush.slider_min > config.brush.slider_max:
        raise ValueError(
            f"brush.slider_min ({config.brush.slider_min}) exceeds "
            f"slider_max ({config.brush.slider_max})"
        )

    if not _HEX_COLOR.match(config.brush.default_color):
        raise ValueError(f"brush.default_color must be '#rrggbb', got '{config.brush.default_color}'")

    if config.brush.default_shape not in SHAPE_NAMES:
        raise ValueError(f"brush.default_shape must be one of {SHAPE_NAMES}, got '{config.brush.default_shape}'")

    if config.brush.spawn_interval_ms <= 0 or config.powerups.spawn_interval_ms <= 0:
        raise ValueError("Spawn intervals must be positive")

    if config.brush.hold_ramp_ms <= 0:
        raise ValueError(f"brush.hold_ramp_ms must be positive, got {config.brush.hold_ramp_ms}")

    if config.brush.slider_min < 1:
        raise ValueError(f"brush.slider_min must be >= 1, got {config.brush.slider_min}")

    if not 0.0 <= config.powerups.size_up_probability <= 1.0:
        raise ValueError(
            f"size_up_probability must be in [0, 1], got {config.powerups.size_up_probability}"
        )

    if config.powerups.speed_up_factor == 0:
        raise ValueError("speed_up_factor must be non-zero")


def load_config(config_path: Optional[str] = None) -> PaintConfig:
    """
    Load and validate simulation configuration from YAML.

    Args:
        config_path: Path to paint_config.yaml. If None, uses default location.

    Returns:
        Validated PaintConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "paint_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    canvas_data = raw["canvas"]
    canvas = CanvasConfig(
        width=int(canvas_data["width"]),
        height=int(canvas_data["height"])
    )

    physics_data = raw["physics"]
    physics = PhysicsConfig(
        wall_restitution=float(physics_data.get("wall_restitution", -0.5)),
        obstacle_restitution=float(physics_data.get("obstacle_restitution", -1.0)),
        drying_time_ms=float(physics_data["drying_time_ms"]),
        rest_speed_threshold=float(physics_data["rest_speed_threshold"]),
        growth_per_tick=float(physics_data["growth_per_tick"]),
        obstacle_collision=str(physics_data.get("obstacle_collision", "approximate"))
    )

    gravity_data = raw["gravity"]
    gravity = GravityConfig(
        default_preset=str(gravity_data["default_preset"]),
        tilt_step=float(gravity_data.get("tilt_step", 0.1)),
        tilt_limit=float(gravity_data.get("tilt_limit", 0.5)),
        presets=tuple(
            (str(name), _parse_vector(vec, f"Gravity preset '{name}'"))
            for name, vec in gravity_data["presets"].items()
        )
    )

    brush_data = raw["brush"]
    brush = BrushConfig(
        base_size=float(brush_data["base_size"]),
        hold_max_size=float(brush_data["hold_max_size"]),
        hold_ramp_ms=float(brush_data.get("hold_ramp_ms", 100)),
        spawn_interval_ms=float(brush_data["spawn_interval_ms"]),
        slider_min=int(brush_data.get("slider_min", 1)),
        slider_max=int(brush_data.get("slider_max", 20)),
        default_color=str(brush_data.get("default_color", "#ff0000")),
        default_shape=str(brush_data.get("default_shape", "circle"))
    )

    powerup_data = raw["powerups"]
    powerups = PowerUpConfig(
        radius=float(powerup_data["radius"]),
        spawn_interval_ms=float(powerup_data["spawn_interval_ms"]),
        size_up_probability=float(powerup_data.get("size_up_probability", 0.5)),
        size_up_factor=float(powerup_data["size_up_factor"]),
        size_up_cap=float(powerup_data["size_up_cap"]),
        speed_up_factor=float(powerup_data["speed_up_factor"]),
        speed_up_duration_ms=float(powerup_data["speed_up_duration_ms"]),
        cancel_speed_up_on_preset=bool(powerup_data.get("cancel_speed_up_on_preset", False))
    )

    obstacles = tuple(_parse_obstacle(o) for o in raw.get("obstacles", []))

    export_data = raw.get("export", {})
    export = ExportConfig(
        filename=str(export_data.get("filename", "gravity_painting.png")),
        background=_parse_color(export_data.get("background", [255, 255, 255]))
    )

    config = PaintConfig(
        canvas=canvas,
        physics=physics,
        gravity=gravity,
        brush=brush,
        powerups=powerups,
        obstacles=obstacles,
        export=export
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[PaintConfig] = None


def get_config() -> PaintConfig:
    """Get the cached configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> PaintConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
