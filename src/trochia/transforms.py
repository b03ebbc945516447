"""
Coordinate transformations for orbital elements.

Maps orbital-plane polar coordinates to the inertial frame centred on the
central body. The rotation sequence is fixed: argument of periapsis in the
orbital plane, then inclination about the rotated x-axis, then longitude of
ascending node about the inertial z-axis. Eclipse geometry and the signs of
the perturbation models depend on this convention.
"""

from typing import Tuple

import numpy as np

from .utils import normalize_angle


def orbital_radius(a: float, e: float, nu: float) -> float:
    """
    Orbital radius at a true anomaly, r = a(1 - e²)/(1 + e*cos(ν)).

    Parameters
    ----------
    a : float
        Semi-major axis [m]
    e : float
        Eccentricity
    nu : float
        True anomaly [rad]
    """
    return float(a * (1.0 - e * e) / (1.0 + e * np.cos(nu)))


def polar_to_orbital_cartesian(r: float, nu: float) -> Tuple[float, float]:
    """Orbital-plane coordinates (x toward periapsis) from radius and true anomaly."""
    return float(r * np.cos(nu)), float(r * np.sin(nu))


def _rotation_matrix(w: float, i: float, omega: float) -> np.ndarray:
    """
    Perifocal-to-inertial direction cosine matrix.

    Rotation by ω about z, then by i about the rotated x-axis, then by Ω
    about the inertial z-axis.
    """
    # rotation about z-axis by RAAN
    R3_omega = np.array([
        [np.cos(omega), -np.sin(omega), 0],
        [np.sin(omega),  np.cos(omega), 0],
        [0,             0,            1]
    ])
    # rotation about x-axis by inclination
    R1_i = np.array([
        [1,  0,          0         ],
        [0,  np.cos(i), -np.sin(i) ],
        [0,  np.sin(i),  np.cos(i) ]
    ])
    # rotation about z-axis by argument of periapsis
    R3_w = np.array([
        [np.cos(w), -np.sin(w), 0],
        [np.sin(w),  np.cos(w), 0],
        [0,          0,         1]
    ])
    return R3_omega @ R1_i @ R3_w


def orbital_to_inertial(x: float, y: float, w: float, i: float,
                        omega: float) -> np.ndarray:
    """
    Rotate an orbital-plane point into the inertial frame.

    Parameters
    ----------
    x, y : float
        Orbital-plane coordinates [m], x toward periapsis
    w : float
        Argument of periapsis [rad]
    i : float
        Inclination [rad]
    omega : float
        Longitude of ascending node [rad]

    Returns
    -------
    np.ndarray
        Inertial position [x, y, z] [m]
    """
    return _rotation_matrix(w, i, omega) @ np.array([x, y, 0.0])


def elements_to_position(a: float, e: float, nu: float, w: float,
                         i: float, omega: float) -> np.ndarray:
    """Inertial position [m] from classical elements (angles in radians)."""
    r = orbital_radius(a, e, nu)
    x, y = polar_to_orbital_cartesian(r, nu)
    return orbital_to_inertial(x, y, w, i, omega)


def elements_to_velocity(a: float, e: float, nu: float, w: float,
                         i: float, omega: float, mu: float) -> np.ndarray:
    """
    Inertial velocity vector [m/s] from classical elements.

    The radial and transverse components, v_r = μ e sin(ν)/h and
    v_θ = μ(1 + e cos(ν))/h with h = √(μ a (1 - e²)), are rotated with
    the same three rotations as the position.
    """
    h = np.sqrt(mu * a * (1.0 - e * e))
    v_radial = mu * e * np.sin(nu) / h
    v_transverse = mu * (1.0 + e * np.cos(nu)) / h
    vx = v_radial * np.cos(nu) - v_transverse * np.sin(nu)
    vy = v_radial * np.sin(nu) + v_transverse * np.cos(nu)
    return orbital_to_inertial(vx, vy, w, i, omega)


def to_2d(position_3d) -> np.ndarray:
    """Drop the z component of a 3D position."""
    return np.asarray(position_3d, dtype=float)[:2].copy()


# ========== EQUINOCTIAL ELEMENTS ==========
def classical_to_equinoctial(a: float, e: float, i: float, w: float,
                             omega: float) -> Tuple[float, float, float, float, float]:
    """
    Convert classical elements to the non-singular set (a, h, k, p, q).

    h and k are the components of the eccentricity vector measured from the
    longitude of periapsis, p and q the components of the inclination vector::

        h = e sin(ω + Ω)    k = e cos(ω + Ω)
        p = tan(i/2) sin(Ω) q = tan(i/2) cos(Ω)

    Angles are in radians.
    """
    h = e * np.sin(w + omega)
    k = e * np.cos(w + omega)
    p = np.tan(i / 2.0) * np.sin(omega)
    q = np.tan(i / 2.0) * np.cos(omega)
    return float(a), float(h), float(k), float(p), float(q)


def equinoctial_to_classical(a: float, h: float, k: float, p: float,
                             q: float) -> Tuple[float, float, float, float, float]:
    """
    Convert (a, h, k, p, q) back to classical (a, e, i, ω, Ω).

    ω and Ω are returned in [0, 2π). For a circular or equatorial orbit
    the undefined angle is reported as whatever atan2 gives for zero
    components (0).
    """
    e = np.sqrt(h * h + k * k)
    i = 2.0 * np.arctan(np.sqrt(p * p + q * q))
    omega = np.arctan2(p, q)
    w = np.arctan2(h, k) - omega
    return (float(a), float(e), float(i),
            normalize_angle(w), normalize_angle(omega))
