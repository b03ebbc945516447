"""
Environment snapshots and providers.

Perturbation models never query a live host. Once per
``Satellite.update_position`` call the satellite takes an
EnvironmentSnapshot from its provider and passes that same snapshot to
every model for every sub-step of the call.

Any object can act as a provider if it has a ``snapshot()`` method, or the
accessor set ``moon_position()``, ``sun_position()``,
``current_simulation_time()``, ``central_body_radius()``,
``central_body_mass()``, ``central_body_g()`` and ``central_body_name()``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from .system import BodyParams
from .defaults import EARTH, CELESTIAL_BODIES, get_body

SECONDS_PER_DAY = 86400.0


def _as_position(vector) -> np.ndarray:
    #Read-only 3-vector; planar input gets z = 0
    arr = np.array(vector, dtype=float).reshape(-1)
    if arr.shape == (2,):
        arr = np.append(arr, 0.0)
    if arr.shape != (3,):
        raise ValueError(f"Position must have 2 or 3 components, got shape {arr.shape}")
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True)
class EnvironmentSnapshot:
    """
    Immutable view of the environment at one instant.

    Attributes
    ----------
    moon_position : np.ndarray
        Moon position relative to the central body [m] (read-only)
    sun_position : np.ndarray
        Sun position relative to the central body [m] (read-only)
    simulation_time : float
        Seconds since the simulation epoch
    body : BodyParams
        Central body
    """
    moon_position: np.ndarray
    sun_position: np.ndarray
    simulation_time: float
    body: BodyParams

    def __post_init__(self):
        object.__setattr__(self, 'moon_position', _as_position(self.moon_position))
        object.__setattr__(self, 'sun_position', _as_position(self.sun_position))
        object.__setattr__(self, 'simulation_time', float(self.simulation_time))
        if not isinstance(self.body, BodyParams):
            raise TypeError(f"body must be BodyParams, got {type(self.body)}")

    @property
    def radius(self) -> float:
        """Central body radius [m]"""
        return self.body.radius

    @property
    def mass(self) -> float:
        """Central body mass [kg]"""
        return self.body.mass

    @property
    def G(self) -> float:
        return self.body.G

    @property
    def mu(self) -> float:
        """Central body gravitational parameter [m³/s²]"""
        return self.body.mu

    @property
    def name(self) -> str:
        return self.body.name

    @classmethod
    def from_provider(cls, provider) -> "EnvironmentSnapshot":
        """
        Take a snapshot from any supported provider.

        Parameters
        ----------
        provider : object
            A snapshot itself, an object with ``snapshot()``, or an
            object with the legacy accessor set.

        Raises
        ------
        TypeError
            If the provider supports neither interface
        """
        if isinstance(provider, EnvironmentSnapshot):
            return provider
        if callable(getattr(provider, 'snapshot', None)):
            return provider.snapshot()

        accessors = ('moon_position', 'sun_position', 'current_simulation_time',
                     'central_body_radius', 'central_body_mass',
                     'central_body_g', 'central_body_name')
        missing = [name for name in accessors
                   if not callable(getattr(provider, name, None))]
        if missing:
            raise TypeError(f"Environment provider {type(provider).__name__} has no "
                            f"snapshot() and is missing accessors: {missing}")

        name = provider.central_body_name()
        #Accessors carry no rotation rate; take it from the catalogue when known
        known = [b for b in CELESTIAL_BODIES if b.name.lower() == str(name).lower()]
        body = BodyParams(name=name,
                          radius=provider.central_body_radius(),
                          mass=provider.central_body_mass(),
                          G=provider.central_body_g(),
                          rotation_rate=known[0].rotation_rate if known else None)
        return cls(moon_position=provider.moon_position(),
                   sun_position=provider.sun_position(),
                   simulation_time=provider.current_simulation_time(),
                   body=body)


class EnvironmentProvider(ABC):
    """Source of environment snapshots."""

    @abstractmethod
    def snapshot(self) -> EnvironmentSnapshot:
        """Environment at the current instant."""


class StaticEnvironment(EnvironmentProvider):
    """Provider that always returns the same snapshot."""

    def __init__(self, snapshot: EnvironmentSnapshot):
        self._snapshot = snapshot

    def snapshot(self) -> EnvironmentSnapshot:
        return self._snapshot


class CircularEphemeris(EnvironmentProvider):
    """
    Moon and Sun on circular orbits in the central body's equatorial plane.

    The Moon starts 84.7° east at 384,400 km and completes a revolution
    every 29.530 days. The Sun starts on the +x axis at 1 AU and completes
    a revolution every 365.25 days.

    Parameters
    ----------
    body : BodyParams, optional
        Central body, Earth by default
    time : float, optional
        Initial simulation time [s]
    """
    MOON_DISTANCE = 384400000.0
    MOON_INITIAL_ANGLE = 84.7
    MOON_PERIOD = 29.530 * SECONDS_PER_DAY
    SUN_DISTANCE = 149597870700.0
    SUN_INITIAL_ANGLE = 0.0
    SUN_PERIOD = 365.25 * SECONDS_PER_DAY

    def __init__(self, body: BodyParams = EARTH, time: float = 0.0):
        if not isinstance(body, BodyParams):
            raise TypeError(f"body must be BodyParams, got {type(body)}")
        self.body = body
        self.time = float(time)

    # ========== CLOCK ==========
    def advance(self, delta_time: float):
        """Move the clock forward by ``delta_time`` seconds."""
        self.time += float(delta_time)

    def reset(self):
        self.time = 0.0

    def set_body(self, body):
        """Switch central body; accepts BodyParams or a catalogue name."""
        if isinstance(body, str):
            body = get_body(body)
        elif not isinstance(body, BodyParams):
            raise TypeError(f"body must be BodyParams or str, got {type(body)}")
        self.body = body

    # ========== EPHEMERIS ==========
    @staticmethod
    def _circular(distance, initial_deg, period, t):
        angle = np.radians(initial_deg + (t / period) * 360.0)
        return np.array([distance * np.cos(angle), distance * np.sin(angle), 0.0])

    def moon_angle(self) -> float:
        """Moon longitude in [0, 360) [deg]"""
        return float((self.MOON_INITIAL_ANGLE + self.time / self.MOON_PERIOD * 360.0) % 360.0)

    def moon_position(self) -> np.ndarray:
        return self._circular(self.MOON_DISTANCE, self.MOON_INITIAL_ANGLE,
                              self.MOON_PERIOD, self.time)

    def sun_position(self) -> np.ndarray:
        return self._circular(self.SUN_DISTANCE, self.SUN_INITIAL_ANGLE,
                              self.SUN_PERIOD, self.time)

    def snapshot(self) -> EnvironmentSnapshot:
        return EnvironmentSnapshot(moon_position=self.moon_position(),
                                   sun_position=self.sun_position(),
                                   simulation_time=self.time,
                                   body=self.body)

    def __repr__(self):
        return f"CircularEphemeris(body='{self.body.name}', time={self.time:.1f} s)"
