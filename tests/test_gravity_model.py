"""
Tests for gravity presets and tilt.
"""

import pytest

from gravity_paint.paint_core.config_loader import load_config
from gravity_paint.paint_core.errors import UnknownGravityPreset
from gravity_paint.paint_core.gravity import GravityModel
from gravity_paint.paint_core.simulation import Simulation


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def gravity(config):
    return GravityModel.from_config(config)


class TestPresets:
    """Test preset selection."""

    def test_starts_on_default_preset(self, gravity, config):
        """New model uses the configured default preset."""
        assert gravity.preset_name == config.gravity.default_preset
        assert gravity.current == (0.0, 0.5)

    @pytest.mark.parametrize("name", ["earth", "moon", "jupiter", "sun", "blackHole"])
    def test_preset_round_trip(self, gravity, config, name):
        """Selecting a preset and reading back returns the table entry exactly."""
        returned = gravity.set_preset(name)

        assert returned == config.gravity.preset_table[name]
        assert gravity.current == config.gravity.preset_table[name]

    def test_default_table_values(self, config):
        """Shipped presets match the documented table."""
        assert config.gravity.preset_table == {
            "earth": (0.0, 0.5),
            "moon": (0.0, 0.08),
            "jupiter": (0.0, 1.2),
            "sun": (0.0, 27.95),
            "blackHole": (0.0, 50.0),
        }

    def test_unknown_preset_raises_and_keeps_gravity(self, gravity):
        """Unknown name fails without touching current gravity."""
        gravity.set_preset("moon")
        gravity.tilt(0.2)
        before = gravity.current

        with pytest.raises(UnknownGravityPreset):
            gravity.set_preset("pluto")

        assert gravity.current == before
        assert gravity.preset_name == "moon"

    def test_unknown_preset_is_a_key_error(self, gravity):
        with pytest.raises(KeyError):
            gravity.set_preset("")

    def test_scaling_does_not_mutate_table(self, gravity):
        """Scaling current gravity leaves the preset itself intact."""
        gravity.set_preset("earth")
        gravity.scale_vertical(1.5)
        assert gravity.current == (0.0, 0.75)

        assert gravity.set_preset("earth") == (0.0, 0.5)

    def test_empty_table_rejected(self):
        with pytest.raises(ValueError):
            GravityModel({})


class TestTilt:
    """Test horizontal tilt."""

    def test_tilt_adds_delta(self, gravity):
        assert gravity.tilt(0.1)[0] == pytest.approx(0.1)
        assert gravity.tilt(-0.3)[0] == pytest.approx(-0.2)

    def test_tilt_clamped_right(self, gravity):
        """Repeated nudges stop at the limit."""
        for _ in range(10):
            gravity.tilt(0.1)

        assert gravity.current[0] == pytest.approx(0.5)
        assert gravity.current[0] <= 0.5

    def test_tilt_clamped_left(self, gravity):
        for _ in range(10):
            gravity.tilt(-0.1)

        assert gravity.current[0] == pytest.approx(-0.5)
        assert gravity.current[0] >= -0.5

    def test_tilt_leaves_vertical_alone(self, gravity):
        """Tilting never changes the vertical component."""
        for name in gravity.preset_names:
            gravity.set_preset(name)
            ay = gravity.current[1]
            gravity.tilt(0.3)
            gravity.tilt(-0.9)
            assert gravity.current[1] == ay

    def test_preset_resets_tilt(self, gravity):
        """Selecting a preset replaces the whole vector."""
        gravity.tilt(0.4)
        gravity.set_preset("jupiter")
        assert gravity.current == (0.0, 1.2)


class TestSimulationControls:
    """Test gravity controls exposed by Simulation."""

    def test_tilt_buttons_use_step(self, config):
        sim = Simulation(config=config, seed=1)

        sim.tilt_right()
        sim.tilt_right()
        assert sim.gravity[0] == pytest.approx(0.2)

        sim.tilt_left()
        assert sim.gravity[0] == pytest.approx(0.1)

    def test_unknown_preset_ignored(self, config):
        """The UI path swallows unknown presets and keeps gravity."""
        sim = Simulation(config=config, seed=1)
        sim.select_gravity_preset("sun")

        assert sim.select_gravity_preset("nebula") is False
        assert sim.gravity == (0.0, 27.95)

    def test_known_preset_applied(self, config):
        sim = Simulation(config=config, seed=1)
        assert sim.select_gravity_preset("moon") is True
        assert sim.gravity == (0.0, 0.08)
