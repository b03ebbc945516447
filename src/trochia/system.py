"""
System class definition.

A System is the immutable force-model definition shared by satellites: the
central body, which perturbations are active, the spacecraft properties the
drag and radiation models need, the density model and the sub-stepping
policy. It owns one instance of each active perturbation model, in
application order.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .config import config
from .utils import validation_error
from .perturbations import (Perturbation, PerturbationType, APPLICATION_ORDER,
                            parse_perturbation_type)
from .third_body import LunarPerturbation, SolarPerturbation
from .oblateness import J2Perturbation, j2_coefficient
from .drag import AtmosphericDrag, parse_density_model
from .radiation import RadiationPressure
from .stepping import StepPolicy, DEFAULT_STEP_POLICY

"""
Core dataclasses for System class components.
This module defines immutable dataclasses for celestial body parameters
and spacecraft properties.
"""
@dataclass(frozen=True)
class BodyParams:
    """
    Immutable parameters for a celestial body.

    Attributes
    ----------
    name : str
        Body name, also used for the J2 coefficient lookup
    radius : float
        Mean radius [m]
    mass : float
        Mass [kg]
    G : float, optional
        Gravitational constant [m³/(kg·s²)]
    rotation_rate : float, optional
        Sidereal rotation rate [rad/s], used by the enhanced density model
    """
    name: str
    radius: float
    mass: float
    G: float = 6.67430e-11
    rotation_rate: Optional[float] = None

    def __post_init__(self):
        #Validate parameters
        if self.radius <= 0:
            raise ValueError(f"Radius must be positive, got {self.radius}")
        if self.mass <= 0:
            raise ValueError(f"Mass must be positive, got {self.mass}")
        if self.G <= 0:
            raise ValueError(f"Gravitational constant must be positive, got {self.G}")

    @property
    def mu(self) -> float:
        """Gravitational parameter G·M [m³/s²]"""
        return self.G * self.mass

    @property
    def J2(self) -> float:
        """Second zonal harmonic from the built-in table"""
        return j2_coefficient(self.name)


@dataclass(frozen=True)
class SpacecraftParams:
    """
    Immutable physical properties of the spacecraft.

    Attributes
    ----------
    mass : float
        Spacecraft mass [kg]
    drag_coeff : float
        Dimensionless drag coefficient
    cross_section : float
        Cross-sectional area for drag and radiation pressure [m²]
    reflectivity : float
        Surface reflectivity, 0 (absorb all) to 1 (reflect all)
    diffuse_fraction : float
        Fraction of reflection that is diffuse, 0 to 1
    """
    mass: float = 1000.0
    drag_coeff: float = 2.2
    cross_section: float = 10.0
    reflectivity: float = 0.6
    diffuse_fraction: float = 2.0 / 3.0

    def __post_init__(self):
        """Validate parameters."""
        if self.mass <= 0:
            raise ValueError(f"Mass must be positive, got {self.mass}")
        if self.drag_coeff <= 0:
            raise ValueError(f"Drag coefficient must be positive, got {self.drag_coeff}")
        if self.cross_section <= 0:
            raise ValueError(f"Cross-sectional area must be positive, "
                             f"got {self.cross_section}")
        if not 0 <= self.reflectivity <= 1:
            raise ValueError(f"Reflectivity must be in [0, 1], got {self.reflectivity}")
        if not 0 <= self.diffuse_fraction <= 1:
            raise ValueError(f"Diffuse fraction must be in [0, 1], "
                             f"got {self.diffuse_fraction}")


class System:
    """
    Immutable force-model definition for orbital propagation.

    Parameters
    ----------
    primary_body : BodyParams
        Central body
    perturbations : tuple of str or PerturbationType, optional
        Perturbation models to include. Options: "lunar", "solar", "drag",
        "J2", "radiation" (aliases and any case accepted).
        Default is empty tuple (pure two-body motion)
        Note: Use trailing comma for single perturbation: ('J2',)
    spacecraft : SpacecraftParams, optional
        Physical properties for drag and radiation pressure.
        Defaults to SpacecraftParams().
    density_model : str or DensityModel, optional
        'exponential' (default) or 'enhanced'
    step_policy : StepPolicy, optional
        Sub-stepping tiers. Defaults to the standard 5/10/15 s policy.

    Notes
    -----
    - System is immutable - create a new instance to change parameters
    - Perturbations are applied in the fixed order lunar, solar, drag,
      J2, radiation, whatever order they were listed in
    - Each perturbation is independent of the others; in particular
      radiation pressure acts with every other model disabled
    """
    # ========== CLASS CONSTANTS ==========
    # model class per perturbation type
    _MODEL_CLASSES = {
        PerturbationType.LUNAR: LunarPerturbation,
        PerturbationType.SOLAR: SolarPerturbation,
        PerturbationType.DRAG: AtmosphericDrag,
        PerturbationType.J2: J2Perturbation,
        PerturbationType.RADIATION: RadiationPressure,
    }

    # ========== CONSTRUCTION ==========
    def __init__(
        self,
        primary_body: BodyParams,
        perturbations: tuple = (),
        spacecraft: Optional[SpacecraftParams] = None,
        density_model='exponential',
        step_policy: Optional[StepPolicy] = None,
    ):
        """
        Initialize System with validation.

        Raises
        ------
        ValueError
            If parameters are invalid or incompatible
        TypeError
            If a parameter has the wrong type
        """
        if not isinstance(primary_body, BodyParams):
            raise TypeError(f"primary_body must be BodyParams, got {type(primary_body)}")
        if spacecraft is None:
            spacecraft = SpacecraftParams()
        elif not isinstance(spacecraft, SpacecraftParams):
            raise TypeError(f"spacecraft must be SpacecraftParams, got {type(spacecraft)}")
        if step_policy is None:
            step_policy = DEFAULT_STEP_POLICY
        elif not isinstance(step_policy, StepPolicy):
            raise TypeError(f"step_policy must be StepPolicy, got {type(step_policy)}")

        # Validate before storing
        kinds = self._validate_perturbations(perturbations)

        # Store parameters in private attributes for immutability
        self._primary_body = primary_body
        self._spacecraft = spacecraft
        self._density_model = parse_density_model(density_model)
        self._step_policy = step_policy
        self._perturbations = tuple(k for k in APPLICATION_ORDER if k in kinds)
        self._models = tuple(self._build_model(k) for k in self._perturbations)

    @classmethod
    def from_toggles(cls, primary_body, lunar=False, solar=False, drag=False,
                     j2=False, radiation=False, **kwargs):
        """
        Build a System from one boolean per perturbation.

        Keyword arguments are passed on to the constructor.
        """
        toggles = (
            (lunar, PerturbationType.LUNAR),
            (solar, PerturbationType.SOLAR),
            (drag, PerturbationType.DRAG),
            (j2, PerturbationType.J2),
            (radiation, PerturbationType.RADIATION),
        )
        return cls(primary_body,
                   perturbations=tuple(kind for flag, kind in toggles if flag),
                   **kwargs)

    # ========== VALIDATION ==========
    @staticmethod
    def _validate_perturbations(perturbations):
        """
        Parse perturbation names, rejecting unknown entries and duplicates.

        Unknown names go through ``validation_error``; with
        STRICT_VALIDATION off they are dropped after a warning.
        """
        if isinstance(perturbations, (str, PerturbationType)):
            validation_error(
                f"perturbations must be a tuple, got {perturbations!r}. "
                f"Use a trailing comma for a single entry: ({perturbations!r},)",
                TypeError)
            perturbations = (perturbations,)

        kinds = []
        for pert in perturbations:
            try:
                kind = parse_perturbation_type(pert)
            except (ValueError, TypeError) as err:
                validation_error(str(err), type(err))
                continue
            if kind in kinds:
                validation_error(f"Duplicate perturbations found: {perturbations}")
                continue
            kinds.append(kind)
        return kinds

    def _build_model(self, kind) -> Perturbation:
        #Instantiate one perturbation model
        model_class = self._MODEL_CLASSES[kind]
        if kind == PerturbationType.DRAG:
            return model_class(self._spacecraft, self._density_model)
        if kind == PerturbationType.RADIATION:
            return model_class(self._spacecraft)
        return model_class()

    # ========== MODEL ACCESS ==========
    @property
    def models(self) -> Tuple[Perturbation, ...]:
        """Active perturbation models in application order"""
        return self._models

    def model(self, kind) -> Optional[Perturbation]:
        """
        The active model of a given type, or None if it is disabled.

        Parameters
        ----------
        kind : str or PerturbationType
        """
        kind = parse_perturbation_type(kind)
        for m in self._models:
            if m.kind == kind:
                return m
        return None

    def has(self, kind) -> bool:
        """True if the given perturbation is enabled."""
        return self.model(kind) is not None

    # ========== PROPERTIES ==========
    @property
    def primary_body(self) -> BodyParams:
        """Central body parameters"""
        return self._primary_body

    @property
    def perturbations(self) -> tuple:
        """Enabled perturbation types in application order"""
        return self._perturbations

    @property
    def spacecraft(self) -> SpacecraftParams:
        return self._spacecraft

    @property
    def density_model(self):
        return self._density_model

    @property
    def step_policy(self) -> StepPolicy:
        return self._step_policy

    # ========== OUTPUT ==========
    def summary(self):
        """Print detailed summary of system parameters."""
        body = self._primary_body
        print(f"Primary Body: {body.name}, μ = {body.mu:.6e} m³/s², "
              f"R = {body.radius / 1000:.3f} km")

        if self._perturbations:
            print(f"\nPerturbations: {', '.join(k.value for k in self._perturbations)}")

            if PerturbationType.J2 in self._perturbations:
                print(f"  J₂ = {body.J2:.6e}")

            if PerturbationType.DRAG in self._perturbations:
                print(f"  Atmosphere: {self._density_model!r}")

            if (PerturbationType.DRAG in self._perturbations or
                    PerturbationType.RADIATION in self._perturbations):
                sc = self._spacecraft
                print(f"  Spacecraft: m = {sc.mass} kg, Cd = {sc.drag_coeff}, "
                      f"A = {sc.cross_section} m², reflectivity = {sc.reflectivity}")
        else:
            print("\nPerturbations: None (two-body)")

        tiers = ", ".join(f">{t:g} s: {s:g} s" for t, s in self._step_policy.tiers)
        print(f"Sub-stepping: {tiers}")
        print(f"Stability clamp: |Δa| ≤ {config.MAX_SMA_CHANGE_FRACTION:.0%} a, "
              f"|Δe| ≤ {config.MAX_ECC_CHANGE}, "
              f"|Δi| ≤ {config.MAX_INC_CHANGE_DEG}°, "
              f"|Δω|, |ΔΩ| ≤ {config.MAX_ANGLE_CHANGE_DEG}° per sub-step")

    def __repr__(self):
        """Readable string representation."""
        parts = [f"System(primary='{self._primary_body.name}'",
                 f"μ={self._primary_body.mu:.3e} m³/s²"]
        if self._perturbations:
            parts.append(f"perturbations={tuple(k.value for k in self._perturbations)}")
        return ", ".join(parts) + ")"

    def __eq__(self, other):
        if not isinstance(other, System):
            return NotImplemented
        return (self._primary_body == other._primary_body and
                self._perturbations == other._perturbations and
                self._spacecraft == other._spacecraft and
                type(self._density_model) is type(other._density_model) and
                self._step_policy == other._step_policy)

    def __hash__(self):
        return hash((self._primary_body, self._perturbations,
                     self._spacecraft, type(self._density_model).__name__,
                     self._step_policy))
