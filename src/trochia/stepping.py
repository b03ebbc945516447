"""
Adaptive sub-stepping policy.

A host hands one tick of simulated time to ``Satellite.update_position``;
the policy decides how finely that tick is divided. Long ticks get short
sub-steps so the per-step perturbation increments stay small.
"""

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class StepPolicy:
    """
    Tiered maximum sub-step size.

    Attributes
    ----------
    tiers : tuple of (float, float)
        (threshold, max_sub_step) pairs in seconds, checked from the
        largest threshold down. A tick longer than a threshold is split
        into sub-steps no longer than the paired size. A tick shorter than
        every threshold is taken whole.

    Examples
    --------
    >>> policy = StepPolicy()
    >>> policy.max_sub_step(7200.0)
    5.0
    >>> policy.sub_steps(7200.0)
    (1440, 5.0)
    """
    tiers: Tuple[Tuple[float, float], ...] = (
        (3600.0, 5.0),
        (600.0, 10.0),
        (60.0, 15.0),
    )

    def __post_init__(self):
        #Validate and sort tiers, largest threshold first
        tiers = tuple(sorted(((float(t), float(s)) for t, s in self.tiers),
                             key=lambda tier: tier[0], reverse=True))
        for threshold, size in tiers:
            if threshold < 0:
                raise ValueError(f"Tier threshold must be non-negative, got {threshold}")
            if size <= 0:
                raise ValueError(f"Sub-step size must be positive, got {size}")
        object.__setattr__(self, 'tiers', tiers)

    def max_sub_step(self, delta_time: float) -> float:
        """Largest sub-step allowed for a tick of ``delta_time`` seconds."""
        for threshold, size in self.tiers:
            if delta_time > threshold:
                return size
        return float(delta_time)

    def sub_steps(self, delta_time: float) -> Tuple[int, float]:
        """
        Split a tick into equal sub-steps.

        Returns
        -------
        tuple
            (count, size) with count = max(1, ceil(dt / max_sub_step)) and
            size = dt / count. A non-positive tick gives (0, 0.0).
        """
        if delta_time <= 0:
            return 0, 0.0
        count = max(1, math.ceil(delta_time / self.max_sub_step(delta_time)))
        return count, delta_time / count


DEFAULT_STEP_POLICY = StepPolicy()
