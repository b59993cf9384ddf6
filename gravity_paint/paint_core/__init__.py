"""
Paint Core - The simulation engine.

Main exports:
- Simulation: One painting session (tick loop + user controls)
- SimulationState: Explicit session state shared by subsystems
- PaintConfig: Configuration loaded from paint_config.yaml
- GravityModel, MergeSystem, ParticlePhysics, PowerUpSystem, SpawnController
- SolidRenderer / export_painting: Headless rendering and PNG export
"""

from gravity_paint.paint_core.config_loader import PaintConfig, load_config, get_config
from gravity_paint.paint_core.errors import (
    EmptyMergeTarget,
    InvalidColorFormat,
    UnknownGravityPreset,
)
from gravity_paint.paint_core.color_blend import blend, blend_rgb, parse_hex_color, to_hex
from gravity_paint.paint_core.entities import (
    Obstacle,
    Particle,
    ParticleShape,
    PowerUp,
    PowerUpType,
)
from gravity_paint.paint_core.geometry import circle_rect_overlap, circles_overlap
from gravity_paint.paint_core.gravity import GravityModel
from gravity_paint.paint_core.scheduler import EffectScheduler
from gravity_paint.paint_core.state import BrushState, SimulationState
from gravity_paint.paint_core.powerups import PowerUpSystem
from gravity_paint.paint_core.particle_physics import ParticlePhysics
from gravity_paint.paint_core.merge_system import MergeResult, MergeSystem, merge_particles
from gravity_paint.paint_core.spawner import SpawnController
from gravity_paint.paint_core.simulation import Simulation, TickResult
from gravity_paint.paint_core.render_solid import SolidRenderer
from gravity_paint.paint_core.export import (
    export_painting,
    generate_export_filename,
    save_painting,
)

__all__ = [
    "PaintConfig",
    "load_config",
    "get_config",
    "EmptyMergeTarget",
    "InvalidColorFormat",
    "UnknownGravityPreset",
    "blend",
    "blend_rgb",
    "parse_hex_color",
    "to_hex",
    "Obstacle",
    "Particle",
    "ParticleShape",
    "PowerUp",
    "PowerUpType",
    "circle_rect_overlap",
    "circles_overlap",
    "GravityModel",
    "EffectScheduler",
    "BrushState",
    "SimulationState",
    "PowerUpSystem",
    "ParticlePhysics",
    "MergeResult",
    "MergeSystem",
    "merge_particles",
    "SpawnController",
    "Simulation",
    "TickResult",
    "SolidRenderer",
    "export_painting",
    "generate_export_filename",
    "save_painting",
]
