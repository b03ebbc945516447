"""
Perturbation model contract.

Every force model advances a satellite's classical elements incrementally:
it reads the current elements and one EnvironmentSnapshot, and pushes its
changes through the satellite's additive ``adjust_*`` mutators. Models hold
no per-satellite state, so one instance can serve any number of satellites.
"""

from abc import ABC, abstractmethod
from enum import Enum


# define an enumerated list of perturbation types
class PerturbationType(Enum):
    LUNAR = 'lunar'
    SOLAR = 'solar'
    DRAG = 'drag'
    J2 = 'J2'
    RADIATION = 'radiation'


# Application order within one sub-step
APPLICATION_ORDER = (
    PerturbationType.LUNAR,
    PerturbationType.SOLAR,
    PerturbationType.DRAG,
    PerturbationType.J2,
    PerturbationType.RADIATION,
)


def parse_perturbation_type(pert):
    """Convert string or enum to PerturbationType enum"""
    if isinstance(pert, PerturbationType):
        return pert
    elif isinstance(pert, str):
        # Map string to enum
        type_map = {
            'lunar': PerturbationType.LUNAR,
            'moon': PerturbationType.LUNAR,
            'solar': PerturbationType.SOLAR,
            'sun': PerturbationType.SOLAR,
            'drag': PerturbationType.DRAG,
            'atmospheric_drag': PerturbationType.DRAG,
            'j2': PerturbationType.J2,
            'oblateness': PerturbationType.J2,
            'radiation': PerturbationType.RADIATION,
            'srp': PerturbationType.RADIATION,
            'solar_radiation_pressure': PerturbationType.RADIATION,
        }
        key = pert.lower()
        if key in type_map:
            return type_map[key]
        else:
            raise ValueError(f"Unknown perturbation '{pert}'. "
                             f"Use: {list(type_map.keys())}")
    else:
        raise TypeError(f"perturbation must be PerturbationType or str, "
                        f"got {type(pert)}")


def time_step_scale(delta_time: float) -> float:
    """Step scaling shared by the tuned models, min(1, dt / 1 s)."""
    return min(1.0, delta_time / 1.0)


class Perturbation(ABC):
    """
    Abstract base for the incremental perturbation models.

    Subclasses set ``kind`` and implement ``apply_perturbation`` and
    ``current_acceleration``.
    """
    kind: PerturbationType

    @abstractmethod
    def apply_perturbation(self, satellite, delta_time: float, environment) -> None:
        """
        Mutate the satellite's elements for one sub-step.

        Parameters
        ----------
        satellite : Satellite
            Satellite whose elements are adjusted in place
        delta_time : float
            Sub-step length [s]
        environment : EnvironmentSnapshot
            Environment values fixed for the whole update call
        """

    @abstractmethod
    def current_acceleration(self, satellite, environment) -> float:
        """Magnitude of the model's acceleration at the current state [m/s²]."""

    @property
    def name(self) -> str:
        return self.kind.value

    def __repr__(self):
        return f"{type(self).__name__}()"
