"""
Utility functions for the Trochia package.
"""

import warnings
from typing import Type

import numpy as np

from .config import config

TWO_PI = 2.0 * np.pi


def normalize_angle(angle: float) -> float:
    """
    Wrap an angle into [0, 2π).

    Parameters
    ----------
    angle : float
        Angle [rad]

    Returns
    -------
    float
        Equivalent angle in [0, 2π)
    """
    wrapped = float(np.mod(angle, TWO_PI))
    # np.mod can return 2π for tiny negative inputs
    if wrapped >= TWO_PI:
        wrapped -= TWO_PI
    return wrapped


def normalize_angle_difference(angle_diff: float) -> float:
    """
    Wrap an angle difference into [-π, π].

    Used wherever two angles that may straddle the 0/2π seam are compared.
    """
    wrapped = float(np.mod(angle_diff + np.pi, TWO_PI) - np.pi)
    if wrapped == -np.pi and angle_diff > 0:
        return float(np.pi)
    return wrapped


def validation_error(message: str, error_class: Type[Exception] = ValueError):
    """
    Raise error or warn based on config.STRICT_VALIDATION.

    This function provides consistent validation behavior across the package.
    When STRICT_VALIDATION is True (default), raises the specified exception.
    When False, issues a UserWarning instead.

    Parameters
    ----------
    message : str
        Validation error message
    error_class : Type[Exception], optional
        Exception class to raise if STRICT_VALIDATION is True.
        Default: ValueError

    Raises
    ------
    Exception (of type error_class)
        If config.STRICT_VALIDATION is True

    Warns
    -----
    UserWarning
        If config.STRICT_VALIDATION is False

    Examples
    --------
    >>> from trochia.utils import validation_error
    >>> from trochia import config
    >>> config.STRICT_VALIDATION = True
    >>> validation_error("Invalid value")  # Raises ValueError
    >>> validation_error("Wrong type", TypeError)  # Raises TypeError

    >>> config.STRICT_VALIDATION = False
    >>> validation_error("Invalid value")  # Issues warning
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    else:
        warnings.warn(message, UserWarning, stacklevel=3)
