"""
Kepler anomaly conversions.

Closed-form conversions between true and eccentric anomaly, and a
Newton-Raphson solution of Kepler's equation M = E - e*sin(E) for
elliptic orbits (0 <= e < 1).
"""

import warnings
from typing import NamedTuple

import numpy as np

from .config import config


class KeplerConvergenceWarning(RuntimeWarning):
    """Kepler's equation was not solved within the iteration cap."""


class KeplerSolution(NamedTuple):
    """
    Result of a Newton-Raphson solution of Kepler's equation.

    Attributes
    ----------
    eccentric_anomaly : float
        Final estimate of E [rad]. Always usable, even when not converged.
    iterations : int
        Number of Newton steps taken
    converged : bool
        True if the last step was smaller than the tolerance
    """
    eccentric_anomaly: float
    iterations: int
    converged: bool


def true_to_eccentric(nu: float, e: float) -> float:
    """
    Convert true anomaly to eccentric anomaly.

    Parameters
    ----------
    nu : float
        True anomaly [rad]
    e : float
        Eccentricity, 0 <= e < 1

    Returns
    -------
    float
        Eccentric anomaly [rad] in (-π, π]
    """
    denom = 1.0 + e * np.cos(nu)
    cos_E = (e + np.cos(nu)) / denom
    sin_E = np.sqrt(1.0 - e * e) * np.sin(nu) / denom
    return float(np.arctan2(sin_E, cos_E))


def eccentric_to_true(E: float, e: float) -> float:
    """
    Convert eccentric anomaly to true anomaly.

    Parameters
    ----------
    E : float
        Eccentric anomaly [rad]
    e : float
        Eccentricity, 0 <= e < 1

    Returns
    -------
    float
        True anomaly [rad] in (-π, π]
    """
    denom = 1.0 - e * np.cos(E)
    cos_nu = (np.cos(E) - e) / denom
    sin_nu = np.sqrt(1.0 - e * e) * np.sin(E) / denom
    return float(np.arctan2(sin_nu, cos_nu))


def eccentric_to_mean(E: float, e: float) -> float:
    """Mean anomaly from Kepler's equation, M = E - e*sin(E)."""
    return float(E - e * np.sin(E))


def true_to_mean(nu: float, e: float) -> float:
    """Convert true anomaly to mean anomaly."""
    return eccentric_to_mean(true_to_eccentric(nu, e), e)


def solve_kepler(M: float, e: float) -> KeplerSolution:
    """
    Solve Kepler's equation for the eccentric anomaly.

    Newton-Raphson iteration starting from E0 = M::

        E <- E - (E - e*sin(E) - M) / (1 - e*cos(E))

    Iteration stops when the step is smaller than ``config.KEPLER_TOL``
    or after ``config.KEPLER_MAX_ITER`` steps, whichever comes first.

    Parameters
    ----------
    M : float
        Mean anomaly [rad]. Not wrapped; any real value is accepted.
    e : float
        Eccentricity, 0 <= e < 1

    Returns
    -------
    KeplerSolution
        The final estimate together with its convergence record.

    Warns
    -----
    KeplerConvergenceWarning
        If the iteration cap is reached and
        ``config.WARN_ON_KEPLER_NONCONVERGENCE`` is True.
    """
    tol = config.KEPLER_TOL
    max_iter = config.KEPLER_MAX_ITER

    E = float(M)
    iterations = 0
    converged = False
    while iterations < max_iter:
        f = E - e * np.sin(E) - M
        fp = 1.0 - e * np.cos(E)
        delta_E = f / fp
        E -= delta_E
        iterations += 1
        if abs(delta_E) < tol:
            converged = True
            break

    if not converged and config.WARN_ON_KEPLER_NONCONVERGENCE:
        warnings.warn(
            f"Kepler's equation did not converge after {iterations} "
            f"iterations (M={M:.6g}, e={e:.6g}); using last estimate",
            KeplerConvergenceWarning,
            stacklevel=2,
        )
    return KeplerSolution(float(E), iterations, converged)


def solve_eccentric_from_mean(M: float, e: float) -> float:
    """
    Eccentric anomaly for a mean anomaly (best estimate, no status).

    Shortcut for ``solve_kepler(M, e).eccentric_anomaly``.
    """
    return solve_kepler(M, e).eccentric_anomaly


def mean_to_true(M: float, e: float) -> float:
    """Convert mean anomaly to true anomaly."""
    return eccentric_to_true(solve_eccentric_from_mean(M, e), e)
