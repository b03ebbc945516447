"""
Third-body gravity from the Moon and the Sun.

Both models share one shape: a dimensionless strength built from the mass
ratio, the satellite's distance relative to the third body's reference
distance and a clamped proximity factor, which then drives small secular
and periodic element changes. The coefficients are tuned for visible
effects at compressed time scales, not for physical fidelity.
"""

from abc import abstractmethod
from dataclasses import dataclass

import numpy as np

from .perturbations import Perturbation, PerturbationType, time_step_scale

# Newtonian constant of gravitation [m³/(kg·s²)]
G_NEWTON = 6.67430e-11


@dataclass(frozen=True)
class ThirdBodyCoefficients:
    """
    Tuned constants of one third-body model.

    Attributes
    ----------
    mass : float
        Third-body mass [kg]
    reference_distance : float
        Mean distance of the third body from the central body [m]
    min_satellite_distance, min_body_distance : float
        Below either separation the model contributes nothing [m]
    proximity_floor : float
        Lower bound on d/reference_distance inside the proximity factor
    proximity_min, proximity_max : float
        Clamp on the proximity factor
    strength_scale : float
        Final multiplier on the strength
    """
    mass: float
    reference_distance: float
    min_satellite_distance: float
    min_body_distance: float
    proximity_floor: float
    proximity_min: float
    proximity_max: float
    strength_scale: float


MOON_COEFFICIENTS = ThirdBodyCoefficients(
    mass=7.342e22,
    reference_distance=384400000.0,
    min_satellite_distance=1000.0,
    min_body_distance=1000.0,
    proximity_floor=1.0,
    proximity_min=0.1,
    proximity_max=10.0,
    strength_scale=100.0,
)

SUN_COEFFICIENTS = ThirdBodyCoefficients(
    mass=1.989e30,
    reference_distance=149597870700.0,
    min_satellite_distance=1e7,
    min_body_distance=1e8,
    proximity_floor=0.5,
    proximity_min=0.5,
    proximity_max=2.0,
    strength_scale=0.001,
)


class ThirdBodyPerturbation(Perturbation):
    """
    Shared machinery of the lunar and solar models.

    Subclasses provide ``coefficients``, ``_body_position`` and
    ``_apply_deltas``.
    """
    coefficients: ThirdBodyCoefficients

    @abstractmethod
    def _body_position(self, environment) -> np.ndarray:
        """Third-body position relative to the central body [m]."""

    @abstractmethod
    def _apply_deltas(self, satellite, s, delta_time):
        """Apply element changes for step-scaled strength ``s``."""

    def _distances(self, satellite, environment):
        #Satellite radius, satellite-body separation and body distance [m]
        sat_pos = satellite.position_3d()
        body_pos = self._body_position(environment)
        return (float(np.linalg.norm(sat_pos)),
                float(np.linalg.norm(sat_pos - body_pos)),
                float(np.linalg.norm(body_pos)))

    def strength(self, sat_distance, separation, central_mass) -> float:
        """
        Dimensionless perturbation strength.

        Parameters
        ----------
        sat_distance : float
            Satellite distance from the central body [m]
        separation : float
            Satellite to third-body distance [m]
        central_mass : float
            Central body mass [kg]
        """
        c = self.coefficients
        mass_ratio = c.mass / central_mass
        distance_ratio = sat_distance / c.reference_distance
        proximity = 1.0 / max(c.proximity_floor, separation / c.reference_distance)
        proximity = max(c.proximity_min, min(c.proximity_max, proximity))
        return mass_ratio * distance_ratio * proximity * c.strength_scale

    def apply_perturbation(self, satellite, delta_time, environment):
        sat_distance, separation, body_distance = self._distances(satellite, environment)
        c = self.coefficients
        if separation < c.min_satellite_distance or body_distance < c.min_body_distance:
            return
        s = self.strength(sat_distance, separation, satellite.central_mass)
        self._apply_deltas(satellite, s * time_step_scale(delta_time), delta_time)

    def current_acceleration(self, satellite, environment) -> float:
        """Point-mass gravitational acceleration G·M/d² of the third body [m/s²]"""
        _, separation, _ = self._distances(satellite, environment)
        if separation <= 0:
            return 0.0
        return G_NEWTON * self.coefficients.mass / separation**2


class LunarPerturbation(ThirdBodyPerturbation):
    """Lunar third-body perturbation."""
    kind = PerturbationType.LUNAR
    coefficients = MOON_COEFFICIENTS

    def _body_position(self, environment):
        return environment.moon_position

    def _apply_deltas(self, satellite, s, delta_time):
        i, e, nu = satellite.elements.i, satellite.elements.e, satellite.elements.nu
        # node precession dominates, then apsidal rotation
        satellite.adjust_longitude_of_ascending_node(s * 1e-8 * np.cos(i) * delta_time)
        satellite.adjust_argument_of_periapsis(s * 5e-9 * (1 - e**2) * delta_time)
        satellite.adjust_inclination(s * 1e-10 * np.sin(2 * nu) * delta_time)
        satellite.adjust_semi_major_axis(s * 1e-4 * np.sin(nu) * delta_time)
        satellite.adjust_eccentricity(s * 1e-11 * np.cos(nu) * delta_time)


class SolarPerturbation(ThirdBodyPerturbation):
    """Solar third-body perturbation."""
    kind = PerturbationType.SOLAR
    coefficients = SUN_COEFFICIENTS

    def _body_position(self, environment):
        return environment.sun_position

    def _apply_deltas(self, satellite, s, delta_time):
        i, e, nu = satellite.elements.i, satellite.elements.e, satellite.elements.nu
        satellite.adjust_longitude_of_ascending_node(s * 2e-9 * np.cos(i) * delta_time)
        satellite.adjust_argument_of_periapsis(s * 1e-9 * (1 - e**2) * delta_time)
        satellite.adjust_eccentricity(s * 2e-11 * np.cos(2 * nu) * delta_time)
        satellite.adjust_inclination(s * 5e-11 * np.sin(nu) * delta_time)
        satellite.adjust_semi_major_axis(s * 1e-5 * np.sin(2 * nu) * delta_time)
