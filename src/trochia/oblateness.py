"""
J2 oblateness: secular nodal and apsidal precession.

Only the orientation angles drift. The averaged J2 model has no secular
effect on a, e or i, so those elements are left untouched.
"""

import numpy as np

from .perturbations import Perturbation, PerturbationType

# second zonal harmonic per body, keyed by lower-case name
J2_COEFFICIENTS = {
    'earth': 1.08263e-3,
    'mars': 1.956e-3,
    'jupiter': 1.469e-2,
    'saturn': 1.633e-2,
    'moon': 2.033e-4,
    'venus': 4.458e-6,
    'sun': 2.0e-7,
}

SECONDS_PER_DAY = 86400.0
DAYS_PER_YEAR = 365.25
# nodal rate that tracks the mean Sun, 360° per tropical year [rad/s]
SUN_SYNC_NODAL_RATE = 2 * np.pi / (365.2422 * SECONDS_PER_DAY)


def j2_coefficient(body_name) -> float:
    """
    J2 coefficient of a named body.

    Lookup is case-insensitive. Unknown or fictional bodies get Earth's
    value.
    """
    if not body_name:
        return J2_COEFFICIENTS['earth']
    return J2_COEFFICIENTS.get(str(body_name).lower(), J2_COEFFICIENTS['earth'])


class J2Perturbation(Perturbation):
    """
    Secular J2 precession of Ω and ω.

    With n = √(μ/a³) from the environment's central body and
    factor = -1.5·J2·R²·n / (a²(1 - e²)²)::

        dΩ/dt = factor·cos(i)
        dω/dt = factor·(2.5·sin²(i) - 2)

    Each sub-step change is limited to ±``MAX_ANGLE_CHANGE``.
    """
    kind = PerturbationType.J2

    # per sub-step limit on ΔΩ and Δω [rad]
    MAX_ANGLE_CHANGE = np.radians(0.01)
    # yearly drift above which the effect counts as significant [deg/yr]
    SIGNIFICANCE_THRESHOLD = 0.1

    def _rate_factor(self, satellite, environment):
        #-1.5·J2·R²·n / (a²(1 - e²)²) [rad/s]
        el = satellite.elements
        j2 = j2_coefficient(environment.name)
        n = np.sqrt(environment.mu / el.a**3)
        return -1.5 * j2 * environment.radius**2 * n / (el.a**2 * (1 - el.e**2)**2)

    def precession_rates(self, satellite, environment):
        """
        Nodal and apsidal precession rates.

        Returns
        -------
        tuple of float
            (dΩ/dt, dω/dt) [rad/s]
        """
        el = satellite.elements
        factor = self._rate_factor(satellite, environment)
        node_rate = factor * np.cos(el.i)
        apsidal_rate = factor * (2.5 * np.sin(el.i)**2 - 2.0)
        return float(node_rate), float(apsidal_rate)

    def apply_perturbation(self, satellite, delta_time, environment):
        node_rate, apsidal_rate = self.precession_rates(satellite, environment)
        limit = self.MAX_ANGLE_CHANGE
        d_node = float(np.clip(node_rate * delta_time, -limit, limit))
        d_apsis = float(np.clip(apsidal_rate * delta_time, -limit, limit))
        satellite.adjust_longitude_of_ascending_node(d_node)
        satellite.adjust_argument_of_periapsis(d_apsis)

    def current_acceleration(self, satellite, environment) -> float:
        """
        Magnitude of the J2 acceleration at the current position.

        μ·J2·R²/r⁴ · |3·sin²(φ) - 1| with φ the geocentric latitude [m/s²]
        """
        pos = satellite.position_3d()
        r = float(np.linalg.norm(pos))
        if r <= 0:
            return 0.0
        j2 = j2_coefficient(environment.name)
        latitude = np.arcsin(pos[2] / r)
        latitude_term = 3 * np.sin(latitude)**2 - 1
        return float(environment.mu * j2 * environment.radius**2 / r**4
                     * abs(latitude_term))

    def rates_degrees_per_day(self, satellite, environment):
        """(nodal, apsidal) precession rates [deg/day]"""
        node_rate, apsidal_rate = self.precession_rates(satellite, environment)
        return (float(np.degrees(node_rate) * SECONDS_PER_DAY),
                float(np.degrees(apsidal_rate) * SECONDS_PER_DAY))

    def is_significant(self, satellite, environment) -> bool:
        """True if either rate exceeds 0.1 deg per year."""
        nodal, apsidal = self.rates_degrees_per_day(satellite, environment)
        return (abs(nodal) * DAYS_PER_YEAR > self.SIGNIFICANCE_THRESHOLD or
                abs(apsidal) * DAYS_PER_YEAR > self.SIGNIFICANCE_THRESHOLD)

    def description(self, satellite, environment) -> str:
        """Human-readable summary of the J2 effects on the current orbit."""
        nodal, apsidal = self.rates_degrees_per_day(satellite, environment)
        inc = float(np.degrees(satellite.elements.i))
        j2 = j2_coefficient(environment.name)

        lines = ["J2 Oblateness Effects:",
                 f"• Nodal precession: {nodal:.3f}°/day",
                 f"• Apsidal precession: {apsidal:.3f}°/day"]

        if abs(inc - 90) < 1:
            lines.append("• Polar orbit: Maximum nodal precession")
        elif abs(inc) < 1:
            lines.append("• Equatorial orbit: No nodal precession")
        elif inc > 90:
            lines.append("• Retrograde orbit: Eastward nodal drift")
        else:
            lines.append("• Prograde orbit: Westward nodal drift")

        # sun-synchronous check only for noticeably oblate bodies
        if j2 > 1e-6:
            cos_sun_sync = SUN_SYNC_NODAL_RATE / self._rate_factor(satellite, environment)
            if abs(cos_sun_sync) <= 1.0:
                sun_sync_inc = float(np.degrees(np.arccos(cos_sun_sync)))
                if abs(inc - sun_sync_inc) < 0.5:
                    lines.append("• Near sun-synchronous inclination!")

        return "\n".join(lines) + "\n"
