"""
Global Configuration for Trochia Package
========================================

Package-wide settings read at call time. Users can change them
to control the Kepler solver, the per-step stability clamp, validation behavior,
and default trail sizes.

Examples
--------
View current configuration:

>>> import trochia
>>> print(trochia.config)

Modify settings:

>>> trochia.config.KEPLER_TOL = 1e-12  # Stricter Kepler convergence
>>> trochia.config.DEFAULT_TRAIL_LENGTH = 2000  # Longer trails

Reset to defaults:

>>> trochia.config.reset()

Temporarily modify settings:

>>> with trochia.temp_config(MAX_ANGLE_CHANGE_DEG=0.5):
...     # Tighter angular clamp for this block only
...     sat.update_position(3600.0)

Notes
-----
Settings are read when used, so a change applies to every later
propagation step until it is changed again or reset.
"""

from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class TrochiaConfig:
    """
    Global configuration for Trochia package.

    Attributes
    ----------
    EQUALITY_RTOL : float
        Relative tolerance for floating-point equality comparisons.
        Default: 1e-12
    EQUALITY_ATOL : float
        Absolute tolerance for floating-point equality comparisons.
        Default: 1e-14
    KEPLER_TOL : float
        Newton-Raphson step size below which Kepler's equation is
        considered solved [rad].
        Default: 1e-10
    KEPLER_MAX_ITER : int
        Iteration cap for the Kepler solver. The last estimate is used
        when the cap is reached.
        Default: 100
    WARN_ON_KEPLER_NONCONVERGENCE : bool
        If True, a KeplerConvergenceWarning is issued whenever the
        solver stops on the iteration cap.
        Default: False
    MAX_SMA_CHANGE_FRACTION : float
        Largest per-sub-step change in semi-major axis, as a fraction of
        the value before the sub-step.
        Default: 0.01
    MAX_ECC_CHANGE : float
        Largest per-sub-step change in eccentricity.
        Default: 0.001
    MAX_INC_CHANGE_DEG : float
        Largest per-sub-step change in inclination [deg].
        Default: 0.1
    MAX_ANGLE_CHANGE_DEG : float
        Largest per-sub-step change in argument of periapsis and in
        longitude of ascending node [deg].
        Default: 1.0
    MAX_ECCENTRICITY : float
        Hard upper bound on eccentricity.
        Default: 0.99
    MIN_SMA_RADIUS_FACTOR : float
        Semi-major axis is kept above this multiple of the central body
        radius.
        Default: 1.01
    STRICT_VALIDATION : bool
        If True, validation failures raise exceptions.
        If False, validation failures issue warnings.
        Default: True
    DEFAULT_TRAIL_LENGTH : int
        Default number of points retained by a Trail.
        Default: 500
    """

    # Numerical tolerance for equality comparisons
    EQUALITY_RTOL: float = 1e-12
    EQUALITY_ATOL: float = 1e-14

    # Kepler solver
    KEPLER_TOL: float = 1e-10
    KEPLER_MAX_ITER: int = 100
    WARN_ON_KEPLER_NONCONVERGENCE: bool = False

    # Stability clamp (per sub-step)
    MAX_SMA_CHANGE_FRACTION: float = 0.01
    MAX_ECC_CHANGE: float = 0.001
    MAX_INC_CHANGE_DEG: float = 0.1
    MAX_ANGLE_CHANGE_DEG: float = 1.0

    # Hard physical bounds
    MAX_ECCENTRICITY: float = 0.99
    MIN_SMA_RADIUS_FACTOR: float = 1.01

    # Validation behavior
    STRICT_VALIDATION: bool = True

    # Trail defaults
    DEFAULT_TRAIL_LENGTH: int = 500

    def reset(self):
        """
        Restore every field to its default value.

        Examples
        --------
        >>> import trochia
        >>> trochia.config.KEPLER_TOL = 1e-6  # Modify
        >>> trochia.config.reset()  # Back to defaults
        >>> trochia.config.KEPLER_TOL
        1e-10
        """
        defaults = TrochiaConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))

    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["TrochiaConfig:"]
        lines.append("  Numerical Tolerances:")
        lines.append(f"    EQUALITY_RTOL = {self.EQUALITY_RTOL}")
        lines.append(f"    EQUALITY_ATOL = {self.EQUALITY_ATOL}")
        lines.append("  Kepler Solver:")
        lines.append(f"    KEPLER_TOL = {self.KEPLER_TOL}")
        lines.append(f"    KEPLER_MAX_ITER = {self.KEPLER_MAX_ITER}")
        lines.append(f"    WARN_ON_KEPLER_NONCONVERGENCE = "
                     f"{self.WARN_ON_KEPLER_NONCONVERGENCE}")
        lines.append("  Stability Clamp:")
        lines.append(f"    MAX_SMA_CHANGE_FRACTION = {self.MAX_SMA_CHANGE_FRACTION}")
        lines.append(f"    MAX_ECC_CHANGE = {self.MAX_ECC_CHANGE}")
        lines.append(f"    MAX_INC_CHANGE_DEG = {self.MAX_INC_CHANGE_DEG}")
        lines.append(f"    MAX_ANGLE_CHANGE_DEG = {self.MAX_ANGLE_CHANGE_DEG}")
        lines.append(f"    MAX_ECCENTRICITY = {self.MAX_ECCENTRICITY}")
        lines.append(f"    MIN_SMA_RADIUS_FACTOR = {self.MIN_SMA_RADIUS_FACTOR}")
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        lines.append(f"    DEFAULT_TRAIL_LENGTH = {self.DEFAULT_TRAIL_LENGTH}")
        return "\n".join(lines)


# Global configuration instance
config = TrochiaConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Override configuration values inside a ``with`` block.

    Previous values are put back on exit, including exit by
    exception.

    Parameters
    ----------
    **kwargs
        Setting names and their temporary values.

    Examples
    --------
    >>> import trochia
    >>> with trochia.temp_config(STRICT_VALIDATION=False):
    ...     # Invalid toggles only warn inside this block
    ...     trochia.System(trochia.EARTH, perturbations=("tides",))
    >>> # Original config restored here
    >>> trochia.config.STRICT_VALIDATION
    True

    Raises
    ------
    AttributeError
        If a name is not a TrochiaConfig field.
    """
    old_values = {}
    for key, value in kwargs.items():
        if not hasattr(config, key):
            raise AttributeError(
                f"TrochiaConfig has no attribute '{key}'. "
                f"Valid attributes: {list(config.__dataclass_fields__.keys())}"
            )
        old_values[key] = getattr(config, key)
        setattr(config, key, value)

    try:
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
