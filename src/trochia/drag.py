"""
Atmospheric drag and the density models behind it.

Drag acts only between 80 km and 1000 km altitude. The force is
½ρv²·Cd·A with v from the vis-viva equation, and the resulting
acceleration is turned into orbital decay plus small shape and
orientation changes.
"""

from abc import ABC, abstractmethod

import numpy as np

from .perturbations import Perturbation, PerturbationType, time_step_scale

# sidereal rotation rate of Earth, used when the body gives none [rad/s]
DEFAULT_ROTATION_RATE = 7.2921150e-5

SECONDS_PER_DAY = 86400.0
DAYS_PER_YEAR = 365.25
SOLAR_CYCLE_SECONDS = 11.0 * DAYS_PER_YEAR * SECONDS_PER_DAY


# ========== DENSITY MODELS ==========
class DensityModel(ABC):
    """Atmospheric density as a function of altitude and environment."""

    # altitude band in which the atmosphere is modelled [m]
    MIN_ALTITUDE = 80000.0
    MAX_ALTITUDE = 1000000.0

    @abstractmethod
    def density(self, altitude, position=None, environment=None) -> float:
        """
        Density at a point [kg/m³].

        Parameters
        ----------
        altitude : float
            Height above the central body's surface [m]
        position : np.ndarray, optional
            Inertial position of the point [m]
        environment : EnvironmentSnapshot, optional
            Supplies time and Sun direction for time-varying models
        """

    def __repr__(self):
        return f"{type(self).__name__}()"


class ExponentialDensity(DensityModel):
    """
    Exponential atmosphere, ρ(h) = ρ₀·exp(-h/H).

    Parameters
    ----------
    rho0 : float
        Sea-level density [kg/m³]
    scale_height : float
        Scale height [m]
    """
    def __init__(self, rho0: float = 1.225, scale_height: float = 8500.0):
        if rho0 <= 0:
            raise ValueError(f"Reference density must be positive, got {rho0}")
        if scale_height <= 0:
            raise ValueError(f"Scale height must be positive, got {scale_height}")
        self.rho0 = float(rho0)
        self.scale_height = float(scale_height)

    def density(self, altitude, position=None, environment=None) -> float:
        if altitude < 0:
            return self.rho0
        if altitude > self.MAX_ALTITUDE:
            return 0.0
        return float(self.rho0 * np.exp(-altitude / self.scale_height))

    def __repr__(self):
        return f"ExponentialDensity(rho0={self.rho0}, scale_height={self.scale_height})"


class EnhancedDensity(ExponentialDensity):
    """
    Exponential base density modulated by time and geography.

    The base value is multiplied by four factors:

    - local solar time: diurnal bulge peaking near 14h plus a
      semidiurnal term
    - solar activity: 11-year cycle, enhanced on the sunlit side
    - geography: equatorial bulge in latitude and a weak dependence on
      geographic longitude (inertial longitude minus sidereal rotation)
    - season: annual hemispheric term and a semiannual term

    Without a position or environment the base density is returned.
    """
    DIURNAL_AMPLITUDE = 0.35
    SEMIDIURNAL_AMPLITUDE = 0.1
    SOLAR_CYCLE_AMPLITUDE = 0.25
    SOLAR_ELEVATION_AMPLITUDE = 0.1
    LATITUDE_AMPLITUDE = 0.08
    LONGITUDE_AMPLITUDE = 0.02
    ANNUAL_AMPLITUDE = 0.05
    SEMIANNUAL_AMPLITUDE = 0.1

    def density(self, altitude, position=None, environment=None) -> float:
        base = super().density(altitude)
        if base <= 0 or position is None or environment is None:
            return base
        pos = np.asarray(position, dtype=float)
        r = float(np.linalg.norm(pos))
        if r <= 0:
            return base
        t = environment.simulation_time
        return base * (self.local_time_factor(pos, environment)
                       * self.solar_activity_factor(pos, environment)
                       * self.geographic_factor(pos, t, environment)
                       * self.seasonal_factor(pos, t))

    @staticmethod
    def local_solar_time(position, sun_position) -> float:
        """Local solar time of a point [h], 12h when the Sun is overhead."""
        sat_lon = np.arctan2(position[1], position[0])
        sun_lon = np.arctan2(sun_position[1], sun_position[0])
        return float(np.mod(12.0 + np.degrees(sat_lon - sun_lon) / 15.0, 24.0))

    def local_time_factor(self, position, environment) -> float:
        lst = self.local_solar_time(position, environment.sun_position)
        hour_angle = 2.0 * np.pi * (lst - 14.0) / 24.0
        return float((1.0 + self.DIURNAL_AMPLITUDE * np.cos(hour_angle))
                     * (1.0 + self.SEMIDIURNAL_AMPLITUDE * np.cos(2.0 * hour_angle)))

    def solar_activity_factor(self, position, environment) -> float:
        cycle = 1.0 + self.SOLAR_CYCLE_AMPLITUDE * np.sin(
            2.0 * np.pi * environment.simulation_time / SOLAR_CYCLE_SECONDS)
        sun = environment.sun_position
        sun_norm = np.linalg.norm(sun)
        if sun_norm <= 0:
            return float(cycle)
        # cosine of the solar zenith angle at the sub-satellite point
        cos_zenith = np.dot(position, sun) / (np.linalg.norm(position) * sun_norm)
        return float(cycle * (1.0 + self.SOLAR_ELEVATION_AMPLITUDE * max(0.0, cos_zenith)))

    def geographic_factor(self, position, t, environment) -> float:
        r = np.linalg.norm(position)
        latitude = np.arcsin(position[2] / r)
        rotation_rate = environment.body.rotation_rate
        if rotation_rate is None:
            rotation_rate = DEFAULT_ROTATION_RATE
        longitude = np.arctan2(position[1], position[0]) - rotation_rate * t
        return float((1.0 - self.LATITUDE_AMPLITUDE * abs(np.sin(latitude)))
                     * (1.0 + self.LONGITUDE_AMPLITUDE * np.cos(longitude)))

    def seasonal_factor(self, position, t) -> float:
        r = np.linalg.norm(position)
        latitude = np.arcsin(position[2] / r)
        day_of_year = np.mod(t / SECONDS_PER_DAY, DAYS_PER_YEAR) + 1.0
        annual = 1.0 + self.ANNUAL_AMPLITUDE * np.cos(
            2.0 * np.pi * (day_of_year - 172.0) / DAYS_PER_YEAR) * np.sin(latitude)
        semiannual = 1.0 + self.SEMIANNUAL_AMPLITUDE * np.cos(
            4.0 * np.pi * (day_of_year - 110.0) / DAYS_PER_YEAR)
        return float(annual * semiannual)


def parse_density_model(model):
    """Convert string or DensityModel to a DensityModel instance"""
    if isinstance(model, DensityModel):
        return model
    elif isinstance(model, str):
        # Map string to model class
        model_map = {
            'exponential': ExponentialDensity,
            'exp': ExponentialDensity,
            'enhanced': EnhancedDensity,
        }
        key = model.lower()
        if key in model_map:
            return model_map[key]()
        else:
            raise ValueError(f"Unknown density model '{model}'. "
                             f"Use: {list(model_map.keys())}")
    else:
        raise TypeError(f"density_model must be DensityModel or str, got {type(model)}")


# ========== DRAG MODEL ==========
class AtmosphericDrag(Perturbation):
    """
    Atmospheric drag perturbation.

    Parameters
    ----------
    spacecraft : SpacecraftParams
        Supplies mass, drag coefficient and cross-section
    density_model : DensityModel or str, optional
        'exponential' (default) or 'enhanced'
    """
    kind = PerturbationType.DRAG

    # Newtonian constant used for the drag-to-gravity ratio
    G_NEWTON = 6.67430e-11

    def __init__(self, spacecraft, density_model='exponential'):
        self.spacecraft = spacecraft
        self.density_model = parse_density_model(density_model)

    def _state(self, satellite, environment):
        #Radius and acceleration, or None outside the drag band
        pos = satellite.position_3d()
        r = float(np.linalg.norm(pos))
        altitude = r - environment.radius
        if (altitude < DensityModel.MIN_ALTITUDE or
                altitude > DensityModel.MAX_ALTITUDE):
            return None
        rho = self.density_model.density(altitude, pos, environment)
        if rho <= 0:
            return None
        v = satellite.velocity()
        if v <= 0:
            return None
        sc = self.spacecraft
        force = 0.5 * rho * v * v * sc.drag_coeff * sc.cross_section
        return r, force / sc.mass

    def current_acceleration(self, satellite, environment) -> float:
        """Drag acceleration magnitude, 0 outside the atmosphere [m/s²]"""
        state = self._state(satellite, environment)
        if state is None:
            return 0.0
        return float(state[1])

    def apply_perturbation(self, satellite, delta_time, environment):
        state = self._state(satellite, environment)
        if state is None:
            return
        r, acc = state
        gravity = self.G_NEWTON * satellite.central_mass / r**2
        strength = acc / gravity * 1000.0
        scaled_acc = acc * time_step_scale(delta_time)

        el = satellite.elements
        i, e, nu = el.i, el.e, el.nu
        # decay is never positive
        satellite.adjust_semi_major_axis(-scaled_acc * 1e-3 * delta_time)
        satellite.adjust_eccentricity(-strength * 1e-9 * e * abs(np.cos(nu)) * delta_time)
        satellite.adjust_argument_of_periapsis(strength * 5e-11 * np.sin(2 * nu) * delta_time)
        satellite.adjust_inclination(strength * 1e-12 * np.sin(nu) * delta_time)
        satellite.adjust_longitude_of_ascending_node(strength * 1e-12 * np.cos(i) * delta_time)

    def __repr__(self):
        return f"AtmosphericDrag(density_model={self.density_model!r})"
