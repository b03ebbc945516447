"""
Post-perturbation stability clamp.

Runs once per sub-step, after the perturbation models and the Kepler
solve, against the elements captured at the start of the sub-step. The
order is fixed: per-step change limits, then hard physical bounds, then
angle normalization, then the mean motion refresh from the final a.
"""

import numpy as np

from .config import config
from .utils import normalize_angle, normalize_angle_difference


def _limit(value, before, max_change):
    #Clip value so that |value - before| <= max_change, keeping the sign
    delta = value - before
    if abs(delta) > max_change:
        return before + np.sign(delta) * max_change
    return value


def clamp_elements(elements, before, body_radius: float):
    """
    Bound the change of an element set over one sub-step.

    Parameters
    ----------
    elements : OrbitalElements
        Live elements, modified in place
    before : OrbitalElements
        Snapshot taken at the start of the sub-step
    body_radius : float
        Central body radius [m], for the minimum semi-major axis

    Returns
    -------
    OrbitalElements
        ``elements``, for chaining

    Notes
    -----
    Limits come from ``config``: |Δa| <= MAX_SMA_CHANGE_FRACTION·a_before,
    |Δe| <= MAX_ECC_CHANGE, |Δi| <= MAX_INC_CHANGE_DEG and
    |Δω|, |ΔΩ| <= MAX_ANGLE_CHANGE_DEG. The angle differences are wrapped
    into [-π, π] before comparison, so crossing 0/2π is not a jump.
    """
    # per-step change limits
    elements.a = float(_limit(elements.a, before.a,
                              before.a * config.MAX_SMA_CHANGE_FRACTION))
    elements.e = float(_limit(elements.e, before.e, config.MAX_ECC_CHANGE))
    elements.i = float(_limit(elements.i, before.i,
                              np.radians(config.MAX_INC_CHANGE_DEG)))

    max_angle = np.radians(config.MAX_ANGLE_CHANGE_DEG)
    for name in ('w', 'omega'):
        diff = normalize_angle_difference(getattr(elements, name) - getattr(before, name))
        if abs(diff) > max_angle:
            setattr(elements, name, float(getattr(before, name) + np.sign(diff) * max_angle))

    # hard physical bounds
    elements.e = float(min(max(elements.e, 0.0), config.MAX_ECCENTRICITY))
    elements.i = float(min(max(elements.i, 0.0), np.pi))
    elements.a = float(max(elements.a, body_radius * config.MIN_SMA_RADIUS_FACTOR))

    elements.w = normalize_angle(elements.w)
    elements.omega = normalize_angle(elements.omega)

    elements.update_mean_motion()
    return elements
