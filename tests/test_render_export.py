"""
Tests for headless rendering and PNG export.
"""

import cv2
import numpy as np
import pytest

from gravity_paint.paint_core.entities import Particle, ParticleShape, PowerUp, PowerUpType
from gravity_paint.paint_core.export import (
    export_painting, generate_export_filename, save_painting
)
from gravity_paint.paint_core.render_solid import SolidRenderer
from gravity_paint.paint_core.simulation import Simulation


WHITE = (255, 255, 255)
GRAY = (128, 128, 128)


@pytest.fixture
def sim():
    return Simulation(seed=42)


@pytest.fixture
def renderer(sim):
    return SolidRenderer(sim.config)


def _add(sim, x, y, r=5.0, color=(255, 0, 0), shape=ParticleShape.CIRCLE):
    return sim.state.add_particle(Particle(x=x, y=y, radius=r, color=color, shape=shape))


class TestSolidRenderer:
    """Test the numpy renderer."""

    def test_output_shape(self, sim, renderer):
        img = renderer.render(sim.get_render_data())
        assert img.shape == (400, 400, 3)
        assert img.dtype == np.uint8

    def test_custom_size(self, sim, renderer):
        img = renderer.render(sim.get_render_data(), width=200, height=100)
        assert img.shape == (100, 200, 3)

    def test_background_and_obstacles(self, sim, renderer):
        img = renderer.render(sim.get_render_data())

        assert tuple(img[5, 5]) == WHITE
        assert tuple(img[210, 120]) == GRAY
        assert tuple(img[200, 260]) == GRAY
        assert tuple(img[230, 120]) == WHITE

    def test_particle_pixel(self, sim, renderer):
        _add(sim, 300, 300, color=(255, 0, 0))
        img = renderer.render(sim.get_render_data())
        assert tuple(img[300, 300]) == (255, 0, 0)
        assert tuple(img[300, 310]) == WHITE

    def test_square_vs_circle_corner(self, sim, renderer):
        _add(sim, 50, 50, color=(0, 0, 255), shape=ParticleShape.SQUARE)
        _add(sim, 350, 50, color=(0, 0, 255), shape=ParticleShape.CIRCLE)
        img = renderer.render(sim.get_render_data())

        assert tuple(img[46, 46]) == (0, 0, 255)
        assert tuple(img[46, 346]) == WHITE

    def test_triangle(self, sim, renderer):
        _add(sim, 50, 50, r=10, color=(0, 200, 0), shape=ParticleShape.TRIANGLE)
        img = renderer.render(sim.get_render_data())

        assert tuple(img[57, 50]) == (0, 200, 0)
        assert tuple(img[42, 42]) == WHITE

    def test_power_up_colors(self, sim, renderer):
        sim.state.add_power_up(PowerUp(50, 350, PowerUpType.SIZE_UP))
        sim.state.add_power_up(PowerUp(350, 350, PowerUpType.SPEED_UP))
        img = renderer.render(sim.get_render_data())

        assert tuple(img[350, 50]) == (0, 128, 0)
        assert tuple(img[350, 350]) == (0, 0, 255)

    def test_particles_drawn_over_obstacles(self, sim, renderer):
        _add(sim, 120, 210, color=(10, 20, 30))
        img = renderer.render(sim.get_render_data())
        assert tuple(img[210, 120]) == (10, 20, 30)


class TestExport:
    """Test PNG output."""

    def test_export_round_trip(self, sim, tmp_path):
        _add(sim, 300, 300, color=(255, 0, 0))
        path = export_painting(sim, tmp_path / "painting.png")

        assert path.exists()
        img = cv2.imread(str(path))
        assert img.shape == (400, 400, 3)
        # cv2 reads BGR
        assert tuple(img[300, 300]) == (0, 0, 255)
        assert tuple(img[5, 5]) == WHITE

    def test_creates_parent_directory(self, tmp_path):
        image = np.zeros((4, 4, 3), dtype=np.uint8)
        path = save_painting(image, tmp_path / "nested" / "dir" / "out.png")
        assert path.exists()

    @pytest.mark.parametrize("image", [
        np.zeros((4, 4), dtype=np.uint8),
        np.zeros((4, 4, 4), dtype=np.uint8),
        np.zeros((4, 4, 3), dtype=np.float32),
    ])
    def test_rejects_bad_arrays(self, tmp_path, image):
        with pytest.raises(ValueError):
            save_painting(image, tmp_path / "bad.png")

    def test_default_filename(self, sim, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = export_painting(sim)
        assert path.name == "gravity_painting.png"
        assert (tmp_path / "gravity_painting.png").exists()

    def test_generate_export_filename(self, tmp_path):
        path = generate_export_filename("session", tmp_path)
        assert path.parent == tmp_path
        assert path.name.startswith("session_")
        assert path.suffix == ".png"


class TestPygameRenderer:
    """Test the pygame renderer without a display."""

    @pytest.fixture
    def pygame_renderer(self, sim, monkeypatch):
        monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
        from gravity_paint.paint_core.render_pygame import PygameRenderer

        renderer = PygameRenderer(sim.config, show_hud=False)
        yield renderer
        renderer.close()

    def test_matches_canvas(self, sim, pygame_renderer):
        _add(sim, 300, 300, color=(255, 0, 0))
        img = pygame_renderer.render(sim.get_render_data())

        assert img.shape == (400, 400, 3)
        assert tuple(img[300, 300]) == (255, 0, 0)
        assert tuple(img[5, 5]) == WHITE
        assert tuple(img[210, 120]) == GRAY

    def test_window_size_without_hud(self, pygame_renderer):
        assert pygame_renderer.window_size == (400, 400)

