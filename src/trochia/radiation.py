"""
Solar radiation pressure with eclipse shadowing.

The central body casts a conical umbra and penumbra sized by the finite
solar disk. Flux at the satellite is scaled by the lighting factor of its
shadow condition and by the 11-year solar cycle, then converted into a
momentum-transfer acceleration pointing away from the Sun.
"""

from enum import Enum
from typing import NamedTuple

import numpy as np

from .perturbations import Perturbation, PerturbationType

SOLAR_CONSTANT = 1361.0          # W/m² at 1 AU
SPEED_OF_LIGHT = 299792458.0     # m/s
AU = 149597870700.0              # m
SUN_RADIUS = 695700000.0         # m
SOLAR_CYCLE_SECONDS = 11.0 * 365.25 * 24 * 3600
SOLAR_CYCLE_AMPLITUDE = 0.034


class ShadowType(Enum):
    DIRECT_SUNLIGHT = 'Direct Sunlight'
    PENUMBRA = 'Penumbra (Partial Shadow)'
    UMBRA = 'Umbra (Complete Shadow)'

    @property
    def description(self) -> str:
        return self.value

    def __str__(self):
        return self.value


def parse_shadow_type(shadow):
    """Convert string or enum to ShadowType enum"""
    if isinstance(shadow, ShadowType):
        return shadow
    elif isinstance(shadow, str):
        type_map = {
            'direct': ShadowType.DIRECT_SUNLIGHT,
            'direct_sunlight': ShadowType.DIRECT_SUNLIGHT,
            'sunlight': ShadowType.DIRECT_SUNLIGHT,
            'penumbra': ShadowType.PENUMBRA,
            'umbra': ShadowType.UMBRA,
        }
        key = shadow.lower()
        if key in type_map:
            return type_map[key]
        else:
            raise ValueError(f"Unknown shadow type '{shadow}'. "
                             f"Use: {list(type_map.keys())}")
    else:
        raise TypeError(f"shadow must be ShadowType or str, got {type(shadow)}")


class ShadowCondition(NamedTuple):
    """
    Eclipse state of a satellite.

    Attributes
    ----------
    shadow_type : ShadowType
    lighting_factor : float
        Fraction of full sunlight reaching the satellite, 0 to 1
    """
    shadow_type: ShadowType
    lighting_factor: float


def shadow_condition(sat_position, sun_position, body_radius) -> ShadowCondition:
    """
    Classify a position as sunlit, in penumbra or in umbra.

    Parameters
    ----------
    sat_position : array_like
        Satellite position relative to the central body [m]
    sun_position : array_like
        Sun position relative to the central body [m]
    body_radius : float
        Radius of the shadowing body [m]

    Returns
    -------
    ShadowCondition
        Points on the day side are always in direct sunlight. On the night
        side the distance from the body-Sun axis is compared with the umbra
        and penumbra radii at that depth; inside the penumbra the lighting
        factor grows linearly from the umbra edge to the penumbra edge.
    """
    sat = np.asarray(sat_position, dtype=float)
    sun = np.asarray(sun_position, dtype=float)
    sun_distance = float(np.linalg.norm(sun))
    if sun_distance <= 0:
        return ShadowCondition(ShadowType.DIRECT_SUNLIGHT, 1.0)

    sun_dir = sun / sun_distance
    projection = float(np.dot(sat, sun_dir))
    if projection >= 0:
        return ShadowCondition(ShadowType.DIRECT_SUNLIGHT, 1.0)

    cross_track = float(np.linalg.norm(sat - projection * sun_dir))
    depth = abs(projection)
    umbra_radius = body_radius - depth * np.tan(np.arctan((SUN_RADIUS - body_radius) / sun_distance))
    penumbra_radius = body_radius + depth * np.tan(np.arctan((SUN_RADIUS + body_radius) / sun_distance))

    if umbra_radius > 0 and cross_track <= umbra_radius:
        return ShadowCondition(ShadowType.UMBRA, 0.0)
    elif cross_track <= penumbra_radius:
        inner = max(0.0, umbra_radius)
        factor = (cross_track - inner) / (penumbra_radius - inner)
        return ShadowCondition(ShadowType.PENUMBRA, float(min(1.0, max(0.0, factor))))
    else:
        return ShadowCondition(ShadowType.DIRECT_SUNLIGHT, 1.0)


def solar_cycle_variation(simulation_time: float) -> float:
    """Solar flux multiplier over the 11-year cycle, 1 ± 0.034."""
    return float(1.0 + SOLAR_CYCLE_AMPLITUDE * np.sin(
        2 * np.pi * simulation_time / SOLAR_CYCLE_SECONDS))


class RadiationPressure(Perturbation):
    """
    Solar radiation pressure perturbation.

    Parameters
    ----------
    spacecraft : SpacecraftParams
        Supplies area, mass, reflectivity and diffuse fraction
    """
    kind = PerturbationType.RADIATION

    def __init__(self, spacecraft):
        self.spacecraft = spacecraft

    @property
    def momentum_factor(self) -> float:
        """Absorbed plus reflected momentum, 1 + ρ(1 + f_diffuse)."""
        sc = self.spacecraft
        return 1.0 + sc.reflectivity * (1.0 + sc.diffuse_fraction)

    def shadow(self, satellite, environment) -> ShadowCondition:
        return shadow_condition(satellite.position_3d(), environment.sun_position,
                                environment.radius)

    def acceleration_vector(self, satellite, environment, condition=None) -> np.ndarray:
        """
        Radiation pressure acceleration [m/s²], directed away from the Sun.
        """
        sat = satellite.position_3d()
        if condition is None:
            condition = shadow_condition(sat, environment.sun_position, environment.radius)
        to_sun = environment.sun_position - sat
        distance = float(np.linalg.norm(to_sun))
        if distance <= 0 or condition.lighting_factor <= 0:
            return np.zeros(3)

        flux = SOLAR_CONSTANT * AU**2 / distance**2
        flux *= condition.lighting_factor
        flux *= solar_cycle_variation(environment.simulation_time)
        sc = self.spacecraft
        magnitude = flux / SPEED_OF_LIGHT * self.momentum_factor * sc.cross_section / sc.mass
        return -magnitude * to_sun / distance

    def current_acceleration(self, satellite, environment) -> float:
        return float(np.linalg.norm(self.acceleration_vector(satellite, environment)))

    def apply_perturbation(self, satellite, delta_time, environment):
        condition = self.shadow(satellite, environment)
        if condition.lighting_factor <= 0:
            return
        acc = float(np.linalg.norm(
            self.acceleration_vector(satellite, environment, condition)))
        if acc <= 0:
            return

        # no time_step_scale here, unlike the other models
        s = acc * 1e6
        e, nu = satellite.elements.e, satellite.elements.nu
        satellite.adjust_semi_major_axis(s * 1e-6 * np.sin(nu) * delta_time)
        satellite.adjust_eccentricity(s * 1e-12 * np.cos(nu) * delta_time)
        satellite.adjust_argument_of_periapsis(s * 1e-11 * (1 + e * np.cos(nu)) * delta_time)
        satellite.adjust_inclination(s * 1e-13 * np.sin(nu) * delta_time)
        satellite.adjust_longitude_of_ascending_node(s * 1e-13 * np.cos(satellite.elements.i) * delta_time)

    def info(self, satellite, environment) -> str:
        """Human-readable summary of the current radiation pressure state."""
        condition = self.shadow(satellite, environment)
        acc = self.current_acceleration(satellite, environment)
        lines = ["Solar Radiation Pressure:",
                 f"• Shadow condition: {condition.shadow_type}",
                 f"• Lighting factor: {condition.lighting_factor:.3f}",
                 f"• Acceleration: {acc:.3e} m/s²"]
        if condition.shadow_type == ShadowType.PENUMBRA:
            lines.append(f"• Partial eclipse: {condition.lighting_factor * 100:.1f}% sunlight")
        return "\n".join(lines) + "\n"
