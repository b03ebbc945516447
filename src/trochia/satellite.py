"""
Satellite class definition.

A Satellite owns one live OrbitalElements record and advances it in time.
Each call to ``update_position`` splits the tick into sub-steps according
to the System's StepPolicy; every sub-step advances the mean anomaly,
lets the enabled perturbation models adjust the elements, solves Kepler's
equation back to the true anomaly and runs the stability clamp.
"""

import numpy as np
from typing import Dict, Optional

from . import kepler, transforms
from .orbital_elements import OrbitalElements, AccumulatedDrift
from .system import System, BodyParams, SpacecraftParams
from .perturbations import PerturbationType
from .environment import EnvironmentSnapshot, CircularEphemeris
from .radiation import ShadowCondition, ShadowType
from .stability import clamp_elements
from .stepping import StepPolicy
from .defaults import EARTH


class Satellite:
    """
    A satellite on a perturbed Keplerian orbit.

    Parameters
    ----------
    a : float
        Semi-major axis [m]
    e : float
        Eccentricity, 0 <= e < 1
    i : float
        Inclination [deg]
    w : float
        Argument of periapsis [deg]
    omega : float
        Longitude of ascending node [deg]
    nu : float
        True anomaly [deg]
    gravitational_constant : float, optional
        G [m³/(kg·s²)]
    central_mass : float, optional
        Central body mass [kg]
    lunar, solar, drag, j2, radiation : bool, optional
        Independent perturbation toggles, all off by default
    environment : object, optional
        Environment provider (see ``trochia.environment``). Defaults to a
        CircularEphemeris around the central body. The satellite never
        advances that clock: Moon and Sun geometry, the solar cycle and the
        seasonal density stay at t = 0 unless the host calls
        ``satellite.environment.advance(dt)`` or passes its own provider.
    body : BodyParams, optional
        Central body for the force model. Defaults to the provider's body,
        or to an Earth-sized body of ``central_mass``.
    spacecraft : SpacecraftParams, optional
        Physical properties for drag and radiation pressure
    density_model : str or DensityModel, optional
        'exponential' (default) or 'enhanced'
    step_policy : StepPolicy, optional
        Sub-stepping tiers

    Examples
    --------
    >>> sat = Satellite(7000000.0, 0.1, 0, 0, 0, 0, j2=True)
    >>> sat.update_position(60.0)
    1
    >>> sat.orbital_period()
    5828.5...
    """

    # ========== CONSTRUCTION ==========
    def __init__(
        self,
        a: float,
        e: float,
        i: float,
        w: float,
        omega: float,
        nu: float,
        gravitational_constant: float = 6.67430e-11,
        central_mass: float = 5.972e24,
        lunar: bool = False,
        solar: bool = False,
        drag: bool = False,
        j2: bool = False,
        radiation: bool = False,
        environment=None,
        body: Optional[BodyParams] = None,
        spacecraft: Optional[SpacecraftParams] = None,
        density_model='exponential',
        step_policy: Optional[StepPolicy] = None,
    ):
        if gravitational_constant <= 0:
            raise ValueError(f"Gravitational constant must be positive, "
                             f"got {gravitational_constant}")
        if central_mass <= 0:
            raise ValueError(f"Central mass must be positive, got {central_mass}")
        self._G = float(gravitational_constant)
        self._central_mass = float(central_mass)

        if body is None:
            if environment is None:
                body = BodyParams(name=EARTH.name, radius=EARTH.radius,
                                  mass=self._central_mass, G=self._G,
                                  rotation_rate=EARTH.rotation_rate)
            else:
                body = EnvironmentSnapshot.from_provider(environment).body
        if environment is None:
            environment = CircularEphemeris(body)
        self._environment = environment

        self._system = System.from_toggles(
            body, lunar=lunar, solar=solar, drag=drag, j2=j2, radiation=radiation,
            spacecraft=spacecraft, density_model=density_model,
            step_policy=step_policy,
        )

        self._elements = OrbitalElements.from_degrees(
            a, e, i, omega, w, nu, mu=self._G * self._central_mass)
        self._drift = AccumulatedDrift()

    @classmethod
    def from_equinoctial(cls, a, h, k, p, q, nu, **kwargs):
        """
        Create a satellite from equinoctial elements.

        Parameters
        ----------
        a : float
            Semi-major axis [m]
        h, k : float
            Eccentricity vector components, e·sin(ω+Ω) and e·cos(ω+Ω)
        p, q : float
            Inclination vector components, tan(i/2)·sin(Ω) and tan(i/2)·cos(Ω)
        nu : float
            True anomaly [deg]
        **kwargs
            Passed on to the constructor

        Returns
        -------
        Satellite
        """
        a, e, i, w, omega = transforms.equinoctial_to_classical(a, h, k, p, q)
        return cls(a, e, np.degrees(i), np.degrees(w), np.degrees(omega), nu, **kwargs)

    # ========== TIME INTEGRATION ==========
    def update_position(self, delta_time: float) -> int:
        """
        Advance the satellite by ``delta_time`` seconds.

        The environment is sampled once and held fixed for the whole call.
        A non-positive ``delta_time`` does nothing.

        Returns
        -------
        int
            Number of sub-steps performed
        """
        count, step = self._system.step_policy.sub_steps(float(delta_time))
        if count == 0:
            return 0
        environment = EnvironmentSnapshot.from_provider(self._environment)
        for _ in range(count):
            self._single_step(step, environment)
        return count

    def _single_step(self, delta_time, environment):
        #One sub-step: Kepler advance, perturbations, Kepler solve, clamp
        el = self._elements
        before = el.copy()

        M = kepler.true_to_mean(el.nu, el.e)
        M += el.mean_motion * delta_time

        for model in self._system.models:
            model.apply_perturbation(self, delta_time, environment)

        E = kepler.solve_kepler(M, el.e).eccentric_anomaly
        el.nu = kepler.eccentric_to_true(E, el.e)

        clamp_elements(el, before, environment.radius)

    # ========== ELEMENT MUTATORS ==========
    def adjust_semi_major_axis(self, delta: float):
        self._elements.a += delta

    def adjust_eccentricity(self, delta: float):
        self._elements.e += delta

    def adjust_inclination(self, delta: float):
        self._drift.i += delta
        self._elements.i += delta

    def adjust_argument_of_periapsis(self, delta: float):
        self._drift.w += delta
        self._elements.w += delta

    def adjust_longitude_of_ascending_node(self, delta: float):
        self._drift.omega += delta
        self._elements.omega += delta

    # ========== STATE ACCESS ==========
    @property
    def elements(self) -> OrbitalElements:
        """Live orbital elements (radians); mutate only through adjust_*"""
        return self._elements

    @property
    def system(self) -> System:
        return self._system

    @property
    def environment(self):
        """Environment provider"""
        return self._environment

    @property
    def central_mass(self) -> float:
        """Central body mass [kg]"""
        return self._central_mass

    @property
    def gravitational_constant(self) -> float:
        return self._G

    @property
    def mu(self) -> float:
        """Gravitational parameter G·M [m³/s²]"""
        return self._elements.mu

    def is_enabled(self, kind) -> bool:
        """True if the given perturbation is active."""
        return self._system.has(kind)

    def position(self) -> np.ndarray:
        """Position projected onto the x-y plane [m]"""
        return transforms.to_2d(self.position_3d())

    def position_3d(self) -> np.ndarray:
        """Inertial position [m]"""
        return self._elements.position()

    def velocity(self) -> float:
        """Orbital speed from the vis-viva equation [m/s]"""
        return self._elements.speed()

    def velocity_vector(self) -> np.ndarray:
        """Inertial velocity [m/s]"""
        return self._elements.velocity_vector()

    def orbital_period(self) -> float:
        """Orbital period 2π/n [s]"""
        return self._elements.orbital_period()

    def true_anomaly(self) -> float:
        """Current true anomaly [rad]"""
        return self._elements.nu

    def elements_degrees(self) -> Dict[str, float]:
        """
        Elements for display.

        Returns
        -------
        dict
            {'a': km, 'e', 'i': deg, 'w': deg, 'omega': deg, 'nu': deg}
        """
        el = self._elements
        return {
            'a': el.a / 1000.0,
            'e': el.e,
            'i': float(np.degrees(el.i)),
            'w': float(np.degrees(el.w)),
            'omega': float(np.degrees(el.omega)),
            'nu': float(np.degrees(el.nu)),
        }

    @property
    def drift(self) -> AccumulatedDrift:
        """Accumulated perturbation drift (radians)"""
        return self._drift

    def accumulated_drift(self) -> Dict[str, float]:
        """Accumulated Δω, ΔΩ, Δi since creation [deg]"""
        return self._drift.to_degrees()

    # ========== DIAGNOSTICS ==========
    def _diagnostic(self, kind):
        #(model, snapshot) for an enabled model, else (None, None)
        model = self._system.model(kind)
        if model is None:
            return None, None
        return model, EnvironmentSnapshot.from_provider(self._environment)

    def drag_acceleration(self) -> float:
        """Current drag acceleration [m/s²], 0 when drag is off"""
        model, env = self._diagnostic(PerturbationType.DRAG)
        return 0.0 if model is None else model.current_acceleration(self, env)

    def j2_acceleration(self) -> float:
        """Current J2 acceleration magnitude [m/s²], 0 when J2 is off"""
        model, env = self._diagnostic(PerturbationType.J2)
        return 0.0 if model is None else model.current_acceleration(self, env)

    def j2_rates(self):
        """(nodal, apsidal) precession [deg/day], (0, 0) when J2 is off"""
        model, env = self._diagnostic(PerturbationType.J2)
        return (0.0, 0.0) if model is None else model.rates_degrees_per_day(self, env)

    def j2_significant(self) -> bool:
        model, env = self._diagnostic(PerturbationType.J2)
        return False if model is None else model.is_significant(self, env)

    def j2_description(self) -> str:
        model, env = self._diagnostic(PerturbationType.J2)
        return "J2 effects disabled" if model is None else model.description(self, env)

    def radiation_acceleration(self) -> float:
        """Current radiation pressure acceleration [m/s²], 0 when off"""
        model, env = self._diagnostic(PerturbationType.RADIATION)
        return 0.0 if model is None else model.current_acceleration(self, env)

    def shadow_condition(self) -> ShadowCondition:
        """
        Current eclipse state.

        With radiation pressure off this reports direct sunlight with a
        lighting factor of 0.
        """
        model, env = self._diagnostic(PerturbationType.RADIATION)
        if model is None:
            return ShadowCondition(ShadowType.DIRECT_SUNLIGHT, 0.0)
        return model.shadow(self, env)

    def radiation_info(self) -> str:
        model, env = self._diagnostic(PerturbationType.RADIATION)
        if model is None:
            return "Solar radiation pressure disabled"
        return model.info(self, env)

    def lunar_acceleration(self) -> float:
        """Lunar point-mass acceleration [m/s²], 0 when lunar effects are off"""
        model, env = self._diagnostic(PerturbationType.LUNAR)
        return 0.0 if model is None else model.current_acceleration(self, env)

    def solar_acceleration(self) -> float:
        """Solar point-mass acceleration [m/s²], 0 when solar effects are off"""
        model, env = self._diagnostic(PerturbationType.SOLAR)
        return 0.0 if model is None else model.current_acceleration(self, env)

    # ========== SPECIAL METHODS ==========
    def __repr__(self) -> str:
        perts = ", ".join(k.value for k in self._system.perturbations) or "none"
        return (f"Satellite(a={self._elements.a / 1000:.3f} km, e={self._elements.e:.6f}, "
                f"body='{self._system.primary_body.name}', perturbations=[{perts}])")

    def __str__(self) -> str:
        return (f"Satellite about {self._system.primary_body.name}\n"
                f"{self._elements}\n"
                f"  period = {self.orbital_period():12.2f} s")
