"""
Test suite for Satellite class.

Tests cover:
- Valid construction patterns
- Parameter validation
- Two-body propagation accuracy
- Element mutators and accumulated drift
- Read accessors and per-effect diagnostics
- Environment providers
- Special methods (__repr__, __str__)
"""

import pytest
import numpy as np

from trochia import (Satellite, EARTH, MARS, ShadowType, CircularEphemeris,
                     EnvironmentSnapshot, StaticEnvironment, SpacecraftParams,
                     PerturbationType)
from trochia.transforms import classical_to_equinoctial


@pytest.fixture
def sat():
    return Satellite(7000000.0, 0.1, 0, 0, 0, 0)


class LegacyEnvironment:
    """Provider exposing only the per-value accessors."""

    def moon_position(self):
        return np.array([384400000.0, 0.0])

    def sun_position(self):
        return np.array([149597870700.0, 0.0])

    def current_simulation_time(self):
        return 0.0

    def central_body_radius(self):
        return MARS.radius

    def central_body_mass(self):
        return MARS.mass

    def central_body_g(self):
        return MARS.G

    def central_body_name(self):
        return MARS.name


class TestConstruction:
    """Test valid Satellite construction patterns."""

    def test_angles_in_degrees(self):
        s = Satellite(7000000.0, 0.1, 30, 40, 50, 60)
        assert np.isclose(s.elements.i, np.radians(30))
        assert np.isclose(s.elements.w, np.radians(40))
        assert np.isclose(s.elements.omega, np.radians(50))
        assert np.isclose(s.elements.nu, np.radians(60))

    def test_defaults(self, sat):
        assert sat.gravitational_constant == 6.67430e-11
        assert sat.central_mass == 5.972e24
        assert np.isclose(sat.mu, 6.67430e-11 * 5.972e24)
        assert sat.system.perturbations == ()
        assert isinstance(sat.environment, CircularEphemeris)

    def test_toggles_are_independent(self):
        s = Satellite(7000000.0, 0.1, 0, 0, 0, 0, drag=True, radiation=True)
        assert s.is_enabled('drag')
        assert s.is_enabled(PerturbationType.RADIATION)
        assert not s.is_enabled('J2')
        assert not s.is_enabled('lunar')
        assert not s.is_enabled('solar')

    def test_custom_central_mass(self):
        s = Satellite(7000000.0, 0.1, 0, 0, 0, 0, central_mass=1e24)
        assert s.system.primary_body.mass == 1e24
        assert s.system.primary_body.radius == EARTH.radius

    def test_from_equinoctial(self):
        a, h, k, p, q = classical_to_equinoctial(7000000.0, 0.1, np.radians(30),
                                                 np.radians(40), np.radians(50))
        s = Satellite.from_equinoctial(a, h, k, p, q, 60)
        expected = Satellite(7000000.0, 0.1, 30, 40, 50, 60)
        assert np.allclose(s.elements.as_array(), expected.elements.as_array())

    def test_spacecraft_passed_to_system(self):
        sc = SpacecraftParams(mass=200.0)
        s = Satellite(7000000.0, 0.1, 0, 0, 0, 0, spacecraft=sc)
        assert s.system.spacecraft is sc


class TestValidation:
    """Test that invalid parameters are caught."""

    def test_non_positive_g_rejected(self):
        with pytest.raises(ValueError, match="Gravitational constant must be positive"):
            Satellite(7000000.0, 0.1, 0, 0, 0, 0, gravitational_constant=0.0)

    def test_non_positive_mass_rejected(self):
        with pytest.raises(ValueError, match="Central mass must be positive"):
            Satellite(7000000.0, 0.1, 0, 0, 0, 0, central_mass=-1.0)

    def test_hyperbolic_rejected(self):
        with pytest.raises(ValueError, match="Eccentricity"):
            Satellite(7000000.0, 1.5, 0, 0, 0, 0)


class TestTwoBody:
    """Unperturbed propagation."""

    def test_return_to_perigee_after_one_period(self, sat):
        """a = 7000 km, e = 0.1 from perigee returns within 1 m of (6300 km, 0, 0)."""
        period = sat.orbital_period()
        whole = int(period)
        for _ in range(whole):
            sat.update_position(1.0)
        sat.update_position(period - whole)

        assert np.linalg.norm(sat.position_3d() - np.array([6300000.0, 0.0, 0.0])) < 1.0

    def test_closure_of_inclined_orbit(self):
        """Position and velocity return to their initial values after one period."""
        s = Satellite(8000000.0, 0.2, 40, 30, 60, 45)
        r0 = s.position_3d()
        v0 = s.velocity_vector()
        s.update_position(s.orbital_period())
        assert np.allclose(s.position_3d(), r0, rtol=0, atol=1e-3)
        assert np.allclose(s.velocity_vector(), v0, rtol=0, atol=1e-6)

    def test_elements_constant_without_perturbations(self):
        s = Satellite(8000000.0, 0.2, 40, 30, 60, 45)
        before = s.elements.copy()
        s.update_position(20000.0)
        assert s.elements.a == before.a
        assert s.elements.e == before.e
        assert s.elements.i == before.i
        assert np.isclose(s.elements.w, before.w)
        assert np.isclose(s.elements.omega, before.omega)

    def test_half_period_reaches_apogee(self, sat):
        sat.update_position(sat.orbital_period() / 2)
        assert np.allclose(sat.position_3d(), [-7700000.0, 0.0, 0.0], atol=1.0)

    def test_true_anomaly_advances(self, sat):
        sat.update_position(10.0)
        assert sat.true_anomaly() > 0


class TestMutators:
    """Additive adjust_* mutators."""

    def test_adjust_shape(self, sat):
        sat.adjust_semi_major_axis(1000.0)
        sat.adjust_eccentricity(-0.01)
        assert sat.elements.a == 7001000.0
        assert sat.elements.e == pytest.approx(0.09)

    def test_orientation_adjustments_accumulate_drift(self, sat):
        sat.adjust_inclination(0.01)
        sat.adjust_argument_of_periapsis(0.02)
        sat.adjust_longitude_of_ascending_node(-0.03)
        sat.adjust_longitude_of_ascending_node(-0.03)
        assert sat.drift.i == pytest.approx(0.01)
        assert sat.drift.w == pytest.approx(0.02)
        assert sat.drift.omega == pytest.approx(-0.06)
        assert sat.elements.omega == pytest.approx(-0.06)

    def test_accumulated_drift_in_degrees(self, sat):
        sat.adjust_argument_of_periapsis(np.radians(2.0))
        d = sat.accumulated_drift()
        assert d['w'] == pytest.approx(2.0)
        assert d['omega'] == 0.0
        assert d['i'] == 0.0

    def test_shape_adjustments_do_not_touch_drift(self, sat):
        sat.adjust_semi_major_axis(100.0)
        sat.adjust_eccentricity(0.001)
        assert sat.accumulated_drift() == {'w': 0.0, 'omega': 0.0, 'i': 0.0}


class TestAccessors:
    """Read accessors for collaborators."""

    def test_position_2d(self, sat):
        pos = sat.position()
        assert pos.shape == (2,)
        assert np.allclose(pos, [6300000.0, 0.0])

    def test_position_3d(self, sat):
        assert sat.position_3d().shape == (3,)

    def test_velocity_is_vis_viva(self, sat):
        r = 6300000.0
        expected = np.sqrt(sat.mu * (2 / r - 1 / 7000000.0))
        assert sat.velocity() == pytest.approx(expected)
        assert np.linalg.norm(sat.velocity_vector()) == pytest.approx(expected)

    def test_orbital_period(self, sat):
        expected = 2 * np.pi * np.sqrt(7000000.0**3 / sat.mu)
        assert sat.orbital_period() == pytest.approx(expected)

    def test_elements_degrees(self):
        s = Satellite(7000000.0, 0.1, 30, 40, 50, 60)
        d = s.elements_degrees()
        assert d['a'] == pytest.approx(7000.0)
        assert d['e'] == 0.1
        assert d['i'] == pytest.approx(30)
        assert d['w'] == pytest.approx(40)
        assert d['omega'] == pytest.approx(50)
        assert d['nu'] == pytest.approx(60)


class TestDiagnostics:
    """Per-effect diagnostics."""

    def test_disabled_diagnostics(self, sat):
        assert sat.drag_acceleration() == 0.0
        assert sat.j2_acceleration() == 0.0
        assert sat.j2_rates() == (0.0, 0.0)
        assert not sat.j2_significant()
        assert sat.j2_description() == "J2 effects disabled"
        assert sat.radiation_acceleration() == 0.0
        assert sat.radiation_info() == "Solar radiation pressure disabled"
        assert sat.lunar_acceleration() == 0.0
        assert sat.solar_acceleration() == 0.0

    def test_disabled_shadow_reports_zero_factor(self, sat):
        condition = sat.shadow_condition()
        assert condition.shadow_type == ShadowType.DIRECT_SUNLIGHT
        assert condition.lighting_factor == 0.0

    def test_enabled_diagnostics(self):
        s = Satellite(6771000.0, 0.001, 51.6, 0, 0, 0,
                      lunar=True, solar=True, drag=True, j2=True, radiation=True)
        assert s.drag_acceleration() > 0
        assert s.j2_acceleration() > 0
        assert s.j2_significant()
        assert s.j2_description().startswith("J2 Oblateness Effects:")
        assert s.radiation_acceleration() > 0
        assert s.radiation_info().startswith("Solar Radiation Pressure:")
        assert s.shadow_condition().lighting_factor == 1.0
        assert s.lunar_acceleration() > 0
        assert s.solar_acceleration() > s.lunar_acceleration()


class TestEnvironment:
    """Environment providers."""

    def test_legacy_provider(self):
        """An object with only the accessor set is accepted; its body is used."""
        s = Satellite(5000000.0, 0.1, 0, 0, 0, 0, gravitational_constant=MARS.G,
                      central_mass=MARS.mass, j2=True,
                      environment=LegacyEnvironment())
        assert s.system.primary_body.name == 'Mars'
        assert s.update_position(10.0) == 1
        # prograde equatorial orbit: westward node, eastward periapsis
        assert s.drift.omega < 0.0
        assert s.drift.w > 0.0

    def test_static_environment(self):
        snapshot = EnvironmentSnapshot(moon_position=[384400000.0, 0.0, 0.0],
                                       sun_position=[-149597870700.0, 0.0, 0.0],
                                       simulation_time=0.0, body=EARTH)
        s = Satellite(7000000.0, 0.01, 0, 0, 0, 0, radiation=True,
                      environment=StaticEnvironment(snapshot))
        # satellite on +x with the Sun on -x: behind Earth
        assert s.shadow_condition().shadow_type == ShadowType.UMBRA
        assert s.radiation_acceleration() == 0.0

    def test_invalid_provider_rejected(self):
        s = Satellite(7000000.0, 0.1, 0, 0, 0, 0, environment=object(), body=EARTH)
        with pytest.raises(TypeError, match="missing accessors"):
            s.update_position(1.0)

    def test_default_ephemeris_clock_is_host_driven(self):
        """update_position leaves the default ephemeris clock where it is."""
        s = Satellite(7000000.0, 0.1, 0, 0, 0, 0, solar=True)
        sun = s.environment.sun_position()
        s.update_position(3600.0)
        assert s.environment.time == 0.0
        assert np.allclose(s.environment.sun_position(), sun)
        s.environment.advance(30 * 86400.0)
        assert not np.allclose(s.environment.sun_position(), sun)

    def test_environment_sampled_once_per_call(self):
        """Every sub-step of one call sees the same snapshot."""
        calls = []

        class CountingEphemeris(CircularEphemeris):
            def snapshot(self):
                calls.append(self.time)
                return super().snapshot()

        s = Satellite(7000000.0, 0.1, 0, 0, 0, 0, lunar=True, body=EARTH,
                      environment=CountingEphemeris())
        assert s.update_position(7200.0) == 1440
        assert len(calls) == 1


class TestSpecialMethods:
    """__repr__ and __str__."""

    def test_repr(self):
        s = Satellite(7000000.0, 0.1, 0, 0, 0, 0, j2=True, drag=True)
        text = repr(s)
        assert text.startswith("Satellite(a=7000.000 km")
        assert "perturbations=[drag, J2]" in text

    def test_repr_two_body(self, sat):
        assert "perturbations=[none]" in repr(sat)

    def test_str(self, sat):
        text = str(sat)
        assert text.startswith("Satellite about Earth")
        assert "Keplerian Elements" in text
        assert "period" in text
