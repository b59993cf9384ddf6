"""
Interactive Painting
====================

Paint with falling particles in a pygame window.

Controls:
    - Mouse button / Space (hold): Pour paint from the top-center
    - Left / Right: Tilt gravity
    - 1-5: Gravity preset (earth, moon, jupiter, sun, blackHole)
    - C: Next color
    - Tab: Next shape (circle, square, triangle)
    - [ / ]: Brush size down / up
    - S: Save painting as PNG
    - R: Restart
    - ESC: Quit

Usage:
    python -m tools.paint_interactive [--seed SEED] [--fps FPS] [--config PATH]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

import pygame

from gravity_paint.paint_core.config_loader import PaintConfig, load_config
from gravity_paint.paint_core.entities import ParticleShape
from gravity_paint.paint_core.export import export_painting, generate_export_filename
from gravity_paint.paint_core.render_pygame import PygameRenderer
from gravity_paint.paint_core.simulation import Simulation

PALETTE = ("#ff0000", "#ff8800", "#ffdd00", "#22aa22", "#2266ff", "#8833cc", "#000000")
SHAPES = tuple(ParticleShape)
PRESET_KEYS = (pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4, pygame.K_5)


class InteractivePainter:
    """
    Real-time front-end: one simulation tick per rendered frame.
    """

    def __init__(
        self,
        config: Optional[PaintConfig] = None,
        seed: Optional[int] = None,
        target_fps: int = 60
    ):
        if config is None:
            config = load_config()

        self._config = config
        self._seed = seed
        self._target_fps = target_fps

        pygame.init()
        self._clock = pygame.time.Clock()
        self._renderer = PygameRenderer(config)

        self._sim = Simulation(config=config, seed=seed)
        self._sim.start(self._now())

        self._running = True
        self._color_index = 0
        self._shape_index = SHAPES.index(self._sim.state.brush.shape)
        self._sim.select_color(PALETTE[self._color_index])

    @staticmethod
    def _now() -> float:
        return float(pygame.time.get_ticks())

    def run(self) -> int:
        """Run the main loop. Returns the final particle count."""
        print("=== Gravity Paint ===")
        print("Hold mouse/Space to paint, arrows tilt, 1-5 gravity, S saves, ESC quits")
        print()

        while self._running:
            self._handle_events()
            self._sim.tick(self._now())
            self._renderer.render_to_screen(self._sim.get_render_data())
            pygame.display.flip()
            self._clock.tick(self._target_fps)

        self._renderer.close()
        pygame.quit()
        return self._sim.particle_count

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._on_key(event.key)

            elif event.type == pygame.KEYUP:
                if event.key == pygame.K_SPACE:
                    self._sim.stop_painting()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._sim.start_painting(self._now())

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self._sim.stop_painting()

    def _on_key(self, key: int) -> None:
        sim = self._sim
        if key == pygame.K_ESCAPE:
            self._running = False
        elif key == pygame.K_SPACE:
            sim.start_painting(self._now())
        elif key == pygame.K_LEFT:
            sim.tilt_left()
        elif key == pygame.K_RIGHT:
            sim.tilt_right()
        elif key in PRESET_KEYS:
            names = self._config.gravity.preset_names
            index = PRESET_KEYS.index(key)
            if index < len(names):
                sim.select_gravity_preset(names[index])
                print(f"Gravity: {names[index]} {sim.gravity}")
        elif key == pygame.K_c:
            self._color_index = (self._color_index + 1) % len(PALETTE)
            sim.select_color(PALETTE[self._color_index])
        elif key == pygame.K_TAB:
            self._shape_index = (self._shape_index + 1) % len(SHAPES)
            sim.spawner.set_shape(SHAPES[self._shape_index])
        elif key == pygame.K_LEFTBRACKET:
            sim.spawner.set_brush_size(int(sim.spawner.brush_size) - 1)
        elif key == pygame.K_RIGHTBRACKET:
            sim.spawner.set_brush_size(int(sim.spawner.brush_size) + 1)
        elif key == pygame.K_s:
            path = export_painting(sim, generate_export_filename())
            print(f"Saved {path}")
        elif key == pygame.K_r:
            sim.reset(now=self._now())
            sim.select_color(PALETTE[self._color_index])
            sim.spawner.set_shape(SHAPES[self._shape_index])
            print("\n=== Canvas Cleared ===\n")


def main():
    parser = argparse.ArgumentParser(description="Paint with gravity interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--config", type=str, default=None, help="Path to paint_config.yaml")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level")

    args = parser.parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    config = load_config(args.config)
    painter = InteractivePainter(config=config, seed=args.seed, target_fps=args.fps)
    count = painter.run()
    print(f"\nParticles on canvas: {count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
