"""
Tests for the session orchestrator.
"""

import pytest

from gravity_paint.paint_core.entities import Particle, PowerUp, PowerUpType
from gravity_paint.paint_core.simulation import Simulation, TickResult
from gravity_paint.paint_core.spawner import POWER_UP_TASK_KEY


@pytest.fixture
def sim():
    return Simulation(seed=42)


class TestTick:
    """Test tick ordering and results."""

    def test_empty_tick(self, sim):
        result = sim.tick(now=16)

        assert isinstance(result, TickResult)
        assert result.tick == 1
        assert result.particle_count == 0
        assert result.merges == []
        assert result.callbacks_fired == 0

    def test_scheduled_emission_before_physics(self, sim):
        """A particle emitted this tick is integrated in the same tick."""
        sim.start_painting(now=0)

        result = sim.tick(now=100)

        assert result.callbacks_fired == 1
        assert result.particle_count == 1
        p = sim.state.particles[0]
        assert p.vy == pytest.approx(0.5)
        assert p.y == pytest.approx(0.5)
        assert p.x == 200

    def test_stream_merges_at_spawn_point(self, sim):
        """Emissions at the same point overlap and merge."""
        sim.start_painting(now=0)
        sim.tick(now=100)
        result = sim.tick(now=200)

        assert len(result.merges) == 1
        assert sim.particle_count == 1

    def test_tick_count(self, sim):
        for t in range(10):
            sim.tick(now=t * 16)
        assert sim.get_info()["tick"] == 10

    def test_particles_fall(self, sim):
        p = sim.state.add_particle(Particle(x=30, y=10, radius=3, color=(0, 0, 0)))
        for t in range(20):
            sim.tick(now=t * 16)
        assert p.y > 10
        assert p.x == 30


class TestControls:
    """Test user-facing controls."""

    def test_tilt(self, sim):
        assert sim.tilt_left() == pytest.approx((-0.1, 0.5))
        sim.tilt_right()
        sim.tilt_right()
        assert sim.gravity == pytest.approx((0.1, 0.5))

    def test_tilt_clamped(self, sim):
        for _ in range(20):
            sim.tilt_right()
        assert sim.gravity[0] == pytest.approx(0.5)

    def test_select_preset(self, sim):
        assert sim.select_gravity_preset("jupiter")
        assert sim.gravity == (0.0, 1.2)

    def test_preset_resets_tilt(self, sim):
        sim.tilt_left()
        sim.select_gravity_preset("moon")
        assert sim.gravity == (0.0, 0.08)

    def test_unknown_preset_ignored(self, sim):
        sim.tilt_left()
        before = sim.gravity

        assert not sim.select_gravity_preset("mars")
        assert sim.gravity == before

    def test_select_color(self, sim):
        assert sim.select_color("#0000ff")
        assert sim.state.brush.color == (0, 0, 255)

        assert not sim.select_color("blue")
        assert sim.state.brush.color == (0, 0, 255)

    def test_paint_toggle(self, sim):
        sim.start_painting(now=0)
        assert sim.get_render_data()["painting"]
        sim.stop_painting()
        assert not sim.get_render_data()["painting"]


class TestLifecycle:
    """Test start and reset."""

    def test_start_schedules_power_ups(self, sim):
        sim.start(now=0)
        assert len(sim.state.scheduler.pending(POWER_UP_TASK_KEY)) == 1

        sim.tick(now=10000)
        assert len(sim.state.power_ups) == 1

    def test_reset_clears_session(self, sim):
        sim.start_painting(now=0)
        sim.tick(now=100)
        sim.select_gravity_preset("sun")

        sim.reset(now=500)

        assert sim.particle_count == 0
        assert sim.state.tick_count == 0
        assert sim.gravity == (0.0, 0.5)
        assert not sim.spawner.is_painting
        assert len(sim.state.scheduler.pending(POWER_UP_TASK_KEY)) == 1

    def test_reset_reproducible(self, sim):
        sim.start(now=0)
        sim.tick(now=10000)
        first = [(p.x, p.y, p.kind) for p in sim.state.power_ups]

        sim.reset(now=0)
        sim.tick(now=10000)
        second = [(p.x, p.y, p.kind) for p in sim.state.power_ups]

        assert first == second


class TestReadSide:
    """Test info and render data."""

    def test_info(self, sim):
        sim.state.add_particle(Particle(x=30, y=10, radius=3, color=(0, 0, 0)))
        sim.state.add_power_up(PowerUp(300, 300, PowerUpType.SPEED_UP))

        info = sim.get_info()

        assert info["particles"] == 1
        assert info["dry_particles"] == 0
        assert info["power_ups"] == 1
        assert info["merges"] == 0
        assert info["gravity_preset"] == "earth"
        assert info["brush_size"] == 3

    def test_render_data(self, sim):
        sim.state.add_particle(Particle(x=30, y=10, radius=3, color=(1, 2, 3)))
        sim.state.add_power_up(PowerUp(300, 300, PowerUpType.SIZE_UP))

        data = sim.get_render_data()

        assert data["canvas_width"] == 400
        assert data["canvas_height"] == 400
        assert len(data["obstacles"]) == 2
        assert data["obstacles"][0] == {"x": 100, "y": 200, "width": 50, "height": 20}
        assert data["power_ups"][0]["kind"] == "sizeUp"
        assert data["power_ups"][0]["color"] == (0, 128, 0)
        particle = data["particles"][0]
        assert (particle["x"], particle["y"], particle["radius"]) == (30, 10, 3)
        assert particle["color"] == (1, 2, 3)
        assert particle["shape"] == "circle"
        assert data["brush_color"] == (255, 0, 0)
        assert data["gravity_preset"] == "earth"
