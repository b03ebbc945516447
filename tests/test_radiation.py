"""
Test suite for solar radiation pressure and eclipse shadowing.

Tests cover:
- Shadow classification (sunlight, penumbra, umbra)
- Continuity and monotonicity of the lighting factor
- Acceleration magnitude and direction
- Solar cycle variation
- Independence from the other perturbation toggles
- Shadow type parsing
"""

import pytest
import numpy as np

from trochia import (Satellite, RadiationPressure, SpacecraftParams, ShadowType,
                     ShadowCondition, EnvironmentSnapshot, StaticEnvironment, EARTH,
                     PerturbationType)
from trochia.radiation import (shadow_condition, solar_cycle_variation, parse_shadow_type,
                               SOLAR_CONSTANT, SPEED_OF_LIGHT, AU)

R = EARTH.radius
SUN = np.array([AU, 0.0, 0.0])


def snapshot(sun=SUN, t=0.0):
    return EnvironmentSnapshot(moon_position=[384400000.0, 0.0, 0.0],
                               sun_position=sun, simulation_time=t, body=EARTH)


class TestShadowClassification:
    """Conical umbra and penumbra."""

    def test_day_side(self):
        c = shadow_condition([7000000.0, 0.0, 0.0], SUN, R)
        assert c == ShadowCondition(ShadowType.DIRECT_SUNLIGHT, 1.0)

    def test_terminator_plane_is_sunlit(self):
        c = shadow_condition([0.0, 7000000.0, 0.0], SUN, R)
        assert c.shadow_type == ShadowType.DIRECT_SUNLIGHT

    def test_directly_behind_body(self):
        c = shadow_condition([-7000000.0, 0.0, 0.0], SUN, R)
        assert c == ShadowCondition(ShadowType.UMBRA, 0.0)

    def test_night_side_outside_shadow(self):
        c = shadow_condition([-7000000.0, 2 * R, 0.0], SUN, R)
        assert c == ShadowCondition(ShadowType.DIRECT_SUNLIGHT, 1.0)

    def test_penumbra_edge(self):
        c = shadow_condition([-7000000.0, R + 1000.0, 0.0], SUN, R)
        assert c.shadow_type == ShadowType.PENUMBRA
        assert 0.0 < c.lighting_factor < 1.0

    def test_no_sun(self):
        c = shadow_condition([-7000000.0, 0.0, 0.0], np.zeros(3), R)
        assert c.lighting_factor == 1.0

    def test_umbra_tapers_with_depth(self):
        """Far enough behind the body the umbra closes and only penumbra remains."""
        c = shadow_condition([-2.0e9, 0.0, 0.0], SUN, R)
        assert c.shadow_type == ShadowType.PENUMBRA


class TestShadowContinuity:
    """Lighting factor is continuous and monotonic across the shadow edge."""

    @pytest.mark.parametrize("depth", [7000000.0, 20000000.0, 42164000.0])
    def test_monotonic_sweep(self, depth):
        offsets = np.linspace(0.0, 1.05 * R + 0.01 * depth, 4001)
        factors = np.array([shadow_condition([-depth, y, 0.0], SUN, R).lighting_factor
                            for y in offsets])
        assert factors[0] == 0.0
        assert factors[-1] == 1.0
        assert np.all(np.diff(factors) >= 0.0)
        # no jumps: the steepest step is bounded by the sampling of the penumbra
        penumbra_width = depth * ((695700000.0 + R) + (695700000.0 - R)) / AU
        spacing = offsets[1] - offsets[0]
        assert np.max(np.diff(factors)) <= 1.5 * spacing / penumbra_width + 1e-12

    def test_factor_linear_inside_penumbra(self):
        depth = 7000000.0
        inner = shadow_condition([-depth, R - 20000.0, 0.0], SUN, R).lighting_factor
        middle = shadow_condition([-depth, R, 0.0], SUN, R).lighting_factor
        outer = shadow_condition([-depth, R + 20000.0, 0.0], SUN, R).lighting_factor
        assert middle - inner == pytest.approx(outer - middle, rel=1e-6)


class TestAcceleration:
    """Radiation pressure acceleration."""

    def test_magnitude_at_one_au(self):
        sat = Satellite(7000000.0, 0.0, 0, 0, 0, 0)
        model = RadiationPressure(SpacecraftParams())
        acc = model.current_acceleration(sat, snapshot())
        distance = AU - 7000000.0
        flux = SOLAR_CONSTANT * AU**2 / distance**2
        expected = flux / SPEED_OF_LIGHT * (1 + 0.6 * (1 + 2.0 / 3.0)) * 10.0 / 1000.0
        assert acc == pytest.approx(expected)

    def test_points_away_from_sun(self):
        sat = Satellite(7000000.0, 0.0, 0, 0, 0, 0)
        vec = RadiationPressure(SpacecraftParams()).acceleration_vector(sat, snapshot())
        assert vec[0] < 0
        assert abs(vec[1]) < 1e-20 and abs(vec[2]) < 1e-20

    def test_zero_in_umbra(self):
        sat = Satellite(7000000.0, 0.0, 0, 0, 0, 180)
        assert RadiationPressure(SpacecraftParams()).current_acceleration(sat, snapshot()) == 0.0

    def test_momentum_factor(self):
        absorber = RadiationPressure(SpacecraftParams(reflectivity=0.0))
        mirror = RadiationPressure(SpacecraftParams(reflectivity=1.0, diffuse_fraction=0.0))
        assert absorber.momentum_factor == 1.0
        assert mirror.momentum_factor == 2.0

    def test_solar_cycle(self):
        quarter = 11.0 * 365.25 * 24 * 3600 / 4
        assert solar_cycle_variation(0.0) == 1.0
        assert solar_cycle_variation(quarter) == pytest.approx(1.034)
        assert solar_cycle_variation(3 * quarter) == pytest.approx(0.966)


class TestApplication:
    """Element updates."""

    def test_radiation_acts_alone(self):
        """Radiation pressure works with every other toggle off."""
        sat = Satellite(7000000.0, 0.01, 0, 0, 0, 90, radiation=True)
        assert sat.system.perturbations == (PerturbationType.RADIATION,)
        sat.update_position(10.0)
        assert sat.drift.w > 0
        assert sat.radiation_acceleration() > 0

    def test_no_change_in_umbra(self):
        env = StaticEnvironment(snapshot(sun=-SUN))
        sat = Satellite(7000000.0, 0.01, 0, 0, 0, 0, radiation=True, environment=env)
        RadiationPressure(SpacecraftParams()).apply_perturbation(sat, 10.0, snapshot(sun=-SUN))
        assert sat.accumulated_drift() == {'w': 0.0, 'omega': 0.0, 'i': 0.0}

    def test_not_scaled_for_short_steps(self):
        """Sub-second steps scale linearly with dt."""
        env = snapshot()
        full = Satellite(7000000.0, 0.01, 10, 0, 0, 90)
        half = Satellite(7000000.0, 0.01, 10, 0, 0, 90)
        RadiationPressure(SpacecraftParams()).apply_perturbation(full, 1.0, env)
        RadiationPressure(SpacecraftParams()).apply_perturbation(half, 0.5, env)
        assert half.drift.w == pytest.approx(full.drift.w * 0.5)

    def test_info(self):
        sat = Satellite(7000000.0, 0.0, 0, 0, 0, 0, radiation=True)
        text = sat.radiation_info()
        assert "Shadow condition: Direct Sunlight" in text
        assert "Lighting factor: 1.000" in text
        assert text.endswith("\n")

    def test_info_in_penumbra(self):
        env = snapshot(sun=-SUN)
        # just outside the umbra edge, 7000 km behind the body
        sat = Satellite(np.hypot(7000000.0, R + 1000.0), 0.0, 0, 0, 0,
                        np.degrees(np.arctan2(R + 1000.0, 7000000.0)))
        text = RadiationPressure(SpacecraftParams()).info(sat, env)
        assert "Penumbra" in text
        assert "Partial eclipse" in text


class TestParsing:
    """ShadowType names."""

    @pytest.mark.parametrize("name,expected", [
        ('umbra', ShadowType.UMBRA),
        ('Penumbra', ShadowType.PENUMBRA),
        ('direct', ShadowType.DIRECT_SUNLIGHT),
        (ShadowType.UMBRA, ShadowType.UMBRA),
    ])
    def test_parse(self, name, expected):
        assert parse_shadow_type(name) is expected

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown shadow type"):
            parse_shadow_type('eclipse')
        with pytest.raises(TypeError):
            parse_shadow_type(3)

    def test_str_is_description(self):
        assert str(ShadowType.UMBRA) == 'Umbra (Complete Shadow)'
        assert ShadowType.PENUMBRA.description == 'Penumbra (Partial Shadow)'
