"""
Default Bodies, Orbits and System Configurations
================================================

Celestial-body catalogue used by the environment and the simulation driver,
predefined orbits, and factory functions for commonly-used force models.

Orbits and Systems are created on demand by the factories, since
OrbitalElements are mutable and must never be shared between satellites.

Examples
--------
>>> from trochia.defaults import EARTH, get_body, earth_j2, iss_orbit
>>> mars = get_body('mars')
>>> sys = earth_j2()
>>> oe = iss_orbit()
"""
import numpy as np
from .orbital_elements import OrbitalElements
from .system import System, BodyParams

"""
Predefined Solar System bodies
Mean radius [m] and mass [kg]; rotation rates [rad/s] after Vallado,
Fundamentals of Astrodynamics, Fifth Edition, 2022, Appendix D
"""
SUN = BodyParams(
    name='Sun',
    radius=696340000.0,
    mass=1.989e30,
)

MERCURY = BodyParams(
    name='Mercury',
    radius=2439700.0,
    mass=3.301e23,
    rotation_rate=1.24001e-6,
)

VENUS = BodyParams(
    name='Venus',
    radius=6051800.0,
    mass=4.867e24,
    rotation_rate=-2.9926e-7,
)

EARTH = BodyParams(
    name='Earth',
    radius=6371000.0,
    mass=5.972e24,
    rotation_rate=7.2921150e-5,
)

MOON = BodyParams(
    name='Moon',
    radius=1737400.0,
    mass=7.342e22,
    rotation_rate=2.661700e-6,
)

MARS = BodyParams(
    name='Mars',
    radius=3389500.0,
    mass=6.417e23,
    rotation_rate=7.0882181e-5,
)

JUPITER = BodyParams(
    name='Jupiter',
    radius=69911000.0,
    mass=1.898e27,
    rotation_rate=1.7585e-4,
)

SATURN = BodyParams(
    name='Saturn',
    radius=58232000.0,
    mass=5.683e26,
    rotation_rate=1.662e-4,
)

URANUS = BodyParams(
    name='Uranus',
    radius=25362000.0,
    mass=8.681e25,
    rotation_rate=-1.12e-4,
)

NEPTUNE = BodyParams(
    name='Neptune',
    radius=24622000.0,
    mass=1.024e26,
    rotation_rate=9.47e-5,
)

PLUTO = BodyParams(
    name='Pluto',
    radius=1188300.0,
    mass=1.309e22,
)

# fictional; J2 falls back to Earth's value
TATOOINE = BodyParams(
    name='Tatooine',
    radius=5232500.0,
    mass=3e24,
)

# catalogue in display order
CELESTIAL_BODIES = (SUN, MERCURY, VENUS, EARTH, MOON, MARS, JUPITER, SATURN,
                    URANUS, NEPTUNE, PLUTO, TATOOINE)


def get_body(name) -> BodyParams:
    """
    Look up a catalogue body by name (case-insensitive).

    Raises
    ------
    ValueError
        If the name is not in the catalogue
    """
    for body in CELESTIAL_BODIES:
        if body.name.lower() == str(name).lower():
            return body
    raise ValueError(f"Unknown body '{name}'. "
                     f"Use: {[b.name for b in CELESTIAL_BODIES]}")


"""
Predefined orbits for convenience
Factories rather than constants: OrbitalElements are mutated in place
"""
# Starting orbit of the interactive simulation, angles in degrees
DEFAULT_ORBIT = {
    'a': 7000000.0,
    'e': 0.1,
    'i': 0.0,
    'w': 0.0,
    'omega': 0.0,
    'nu': 0.0,
}


def default_orbit(body: BodyParams = EARTH) -> OrbitalElements:
    """The simulation's starting orbit, a = 7000 km, e = 0.1."""
    d = DEFAULT_ORBIT
    return OrbitalElements.from_degrees(d['a'], d['e'], d['i'], d['omega'],
                                        d['w'], d['nu'], mu=body.mu)


def iss_orbit() -> OrbitalElements:
    return OrbitalElements(a=6778000.0, e=0.0001, i=np.radians(51.6),
                           omega=0, w=0, nu=0, mu=EARTH.mu)


def geo_orbit() -> OrbitalElements:
    return OrbitalElements(a=42164000.0, e=0.0, i=0.0,
                           omega=0, w=0, nu=0, mu=EARTH.mu)


def leo_orbit() -> OrbitalElements:
    return OrbitalElements(a=EARTH.radius + 550000.0, e=0.0, i=0.0,
                           omega=0, w=0, nu=0, mu=EARTH.mu)


def sso_orbit() -> OrbitalElements:
    """Sun-synchronous orbit at 500 km altitude."""
    return OrbitalElements(a=EARTH.radius + 500000.0, e=0.001, i=np.radians(97.4016),
                           omega=np.radians(140), w=0, nu=0, mu=EARTH.mu)


def molniya_orbit() -> OrbitalElements:
    return OrbitalElements(a=26554000.0, e=0.737, i=np.radians(63.4),
                           omega=np.radians(100), w=np.radians(270), nu=0,
                           mu=EARTH.mu)


def earth_2body():
    """
    Create a point-mass 2-body Earth system.

    Spherically symmetric Earth gravity with no perturbations.

    Returns
    -------
    System
        Configured 2-body Earth system
    """
    return System(EARTH)


def earth_j2():
    """
    Create a 2-body Earth system with J2 oblateness.

    Returns
    -------
    System
        2-body Earth system with J2 perturbation
    """
    return System(EARTH, perturbations=('J2',))


def earth_drag(density_model='exponential'):
    """
    Create 2-body Earth with atmospheric drag.

    Parameters
    ----------
    density_model : str, optional
        'exponential' (default) or 'enhanced'

    Notes
    -----
    The exponential model uses ρ₀ = 1.225 kg/m³ at sea level with scale
    height H = 8.5 km, active between 80 and 1000 km altitude.
    """
    return System(EARTH, perturbations=('drag',), density_model=density_model)


def earth_full():
    """Earth with every perturbation enabled."""
    return System(EARTH, perturbations=('lunar', 'solar', 'drag', 'J2', 'radiation'))


def moon_j2():
    """2-body Moon system with J2 oblateness."""
    return System(MOON, perturbations=('J2',))


def mars_j2():
    """2-body Mars system with J2 oblateness."""
    return System(MARS, perturbations=('J2',))
