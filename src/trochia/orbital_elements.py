"""
OrbitalElements and AccumulatedDrift definitions.

OrbitalElements is the live classical-element record of one satellite. Unlike
a value object it is mutated in place by the propagation loop and the
perturbation models, so it is deliberately unhashable; call ``copy()`` to
take a snapshot.
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict, Optional

from . import transforms
from .config import config


class OrbitalElements:
    """
    Classical (Keplerian) orbital elements of an elliptic orbit.

    Attributes
    ----------
    a : float
        Semi-major axis [m]
    e : float
        Eccentricity
    i : float
        Inclination [rad]
    omega : float
        Longitude of ascending node (RAAN) [rad]
    w : float
        Argument of periapsis [rad]
    nu : float
        True anomaly [rad]
    mu : float
        Gravitational parameter of the central body [m³/s²]
    mean_motion : float
        n = √(μ/a³) [rad/s]. Stored, and refreshed by
        ``update_mean_motion()`` once the stability clamp has settled a.
    """
    # Element order used by as_array() and the degree snapshots
    ELEMENT_NAMES = ('a', 'e', 'i', 'omega', 'w', 'nu')

    # Gravitational parameter of Earth (G * 5.972e24 kg) [m³/s²]
    DEFAULT_MU = 6.67430e-11 * 5.972e24

    # ========== CONSTRUCTION ==========
    def __init__(self, a: float, e: float, i: float, omega: float, w: float,
                 nu: float, mu: Optional[float] = None):
        """
        Create orbital elements from radians.

        Parameters
        ----------
        a : float
            Semi-major axis [m], must be positive
        e : float
            Eccentricity, 0 <= e < 1
        i, omega, w, nu : float
            Inclination, RAAN, argument of periapsis and true anomaly [rad]
        mu : float, optional
            Gravitational parameter [m³/s²]. Defaults to Earth.
        """
        self.mu = float(mu) if mu is not None else self.DEFAULT_MU
        if self.mu <= 0:
            raise ValueError(f"Gravitational parameter must be positive, got {self.mu}")
        if a <= 0:
            raise ValueError(f"Elliptic orbit requires positive semi-major axis, got a={a}")
        if e < 0 or e >= 1:
            raise ValueError(f"Eccentricity must be in [0, 1), got e={e}")
        self.a = float(a)
        self.e = float(e)
        self.i = float(i)
        self.omega = float(omega)
        self.w = float(w)
        self.nu = float(nu)
        self.mean_motion = 0.0
        self.update_mean_motion()

    @classmethod
    def from_degrees(cls, a, e, i, omega, w, nu, mu=None):
        """
        Create orbital elements from angles given in degrees.

        Parameters follow the constructor; i, omega, w and nu in degrees.
        """
        return cls(a, e, np.radians(i), np.radians(omega), np.radians(w),
                   np.radians(nu), mu=mu)

    # ========== DERIVED QUANTITIES ==========
    def update_mean_motion(self) -> float:
        """Recompute and store n = √(μ/a³) from the current semi-major axis."""
        self.mean_motion = float(np.sqrt(self.mu / self.a**3))
        return self.mean_motion

    def orbital_period(self) -> float:
        """Orbital period 2π/n [s]"""
        return 2 * np.pi / self.mean_motion

    def semi_latus_rectum(self) -> float:
        """p = a(1 - e²) [m]"""
        return self.a * (1 - self.e**2)

    def radius(self) -> float:
        """Current orbital radius [m]"""
        return transforms.orbital_radius(self.a, self.e, self.nu)

    def position(self) -> np.ndarray:
        """Inertial position vector [m]"""
        return transforms.elements_to_position(
            self.a, self.e, self.nu, self.w, self.i, self.omega)

    def velocity_vector(self) -> np.ndarray:
        """Inertial velocity vector [m/s]"""
        return transforms.elements_to_velocity(
            self.a, self.e, self.nu, self.w, self.i, self.omega, self.mu)

    def speed(self) -> float:
        """Speed from the vis-viva equation, v = √(μ(2/r - 1/a)) [m/s]"""
        return float(np.sqrt(self.mu * (2.0 / self.radius() - 1.0 / self.a)))

    def specific_energy(self) -> float:
        """Specific orbital energy -μ/2a [J/kg]"""
        return -self.mu / (2 * self.a)

    # ========== UTILITY METHODS ==========
    def copy(self) -> "OrbitalElements":
        """Independent snapshot of the current elements."""
        snapshot = OrbitalElements(self.a, self.e, self.i, self.omega, self.w,
                                   self.nu, mu=self.mu)
        # keep the stored n even if it has not been refreshed yet
        snapshot.mean_motion = self.mean_motion
        return snapshot

    def as_array(self) -> np.ndarray:
        """Elements as [a, e, i, Ω, ω, ν] (radians)."""
        return np.array([self.a, self.e, self.i, self.omega, self.w, self.nu])

    def to_degrees(self) -> Dict[str, float]:
        """
        Elements keyed by name with the angles in degrees.

        Returns
        -------
        dict
            {'a': m, 'e': -, 'i': deg, 'omega': deg, 'w': deg, 'nu': deg}
        """
        return {
            'a': self.a,
            'e': self.e,
            'i': float(np.degrees(self.i)),
            'omega': float(np.degrees(self.omega)),
            'w': float(np.degrees(self.w)),
            'nu': float(np.degrees(self.nu)),
        }

    # ========== SPECIAL METHODS ==========
    def __repr__(self):
        #Machine-readable representation
        return (f"OrbitalElements(a={self.a!r}, e={self.e!r}, i={self.i!r}, "
                f"omega={self.omega!r}, w={self.w!r}, nu={self.nu!r}, mu={self.mu!r})")

    def __str__(self):
        #Human-readable representation
        return (f"Keplerian Elements:\n"
                f"  a     = {self.a / 1000:12.4f} km\n"
                f"  e     = {self.e:12.6f}\n"
                f"  i     = {np.degrees(self.i):12.4f}°\n"
                f"  RAAN  = {np.degrees(self.omega):12.4f}°\n"
                f"  ω     = {np.degrees(self.w):12.4f}°\n"
                f"  ν     = {np.degrees(self.nu):12.4f}°")

    def __eq__(self, other):
        #Check equality with tolerance
        if not isinstance(other, OrbitalElements):
            return NotImplemented
        return (np.isclose(self.mu, other.mu, rtol=config.EQUALITY_RTOL,
                           atol=config.EQUALITY_ATOL) and
                np.allclose(self.as_array(), other.as_array(),
                            rtol=config.EQUALITY_RTOL,
                            atol=config.EQUALITY_ATOL))

    # mutable record
    __hash__ = None


@dataclass
class AccumulatedDrift:
    """
    Running totals of the perturbation-driven element changes.

    Only the orientation elements are tracked. Values accumulate the raw
    deltas handed to the adjust-mutators, before any clamping.

    Attributes
    ----------
    w : float
        Accumulated change in argument of periapsis [rad]
    omega : float
        Accumulated change in longitude of ascending node [rad]
    i : float
        Accumulated change in inclination [rad]
    """
    w: float = 0.0
    omega: float = 0.0
    i: float = 0.0

    def to_degrees(self) -> Dict[str, float]:
        """Accumulated drift in degrees, keyed 'w', 'omega', 'i'."""
        return {
            'w': float(np.degrees(self.w)),
            'omega': float(np.degrees(self.omega)),
            'i': float(np.degrees(self.i)),
        }
