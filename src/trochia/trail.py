"""
Trail class definition.

A Trail is the bounded recent history of a satellite's position, as drawn
behind the satellite by a renderer. Oldest points are dropped first once
the maximum length is reached.
"""

import numpy as np
import pandas as pd
from collections import deque
from typing import Optional, Tuple

from .config import config
from .utils import validation_error


class Trail:
    """
    Bounded record of propagated positions.

    Parameters
    ----------
    max_length : int, optional
        Maximum number of retained points.
        Defaults to ``config.DEFAULT_TRAIL_LENGTH``.

    Attributes
    ----------
    max_length : int
        Current capacity
    """
    # ========== CONSTRUCTION ==========
    def __init__(self, max_length: Optional[int] = None):
        if max_length is None:
            max_length = config.DEFAULT_TRAIL_LENGTH
        self._max_length = self._validate_length(max_length)
        self._points = deque(maxlen=self._max_length)

    @staticmethod
    def _validate_length(max_length) -> int:
        if isinstance(max_length, bool) or not isinstance(max_length, (int, np.integer)):
            validation_error(f"Trail length must be an integer, got {type(max_length)}",
                             TypeError)
            max_length = int(max_length)
        if max_length < 1:
            validation_error(f"Trail length must be at least 1, got {max_length}")
            max_length = 1
        return int(max_length)

    # ========== RECORDING ==========
    def add_point(self, time: float, position) -> None:
        """
        Append one point.

        Parameters
        ----------
        time : float
            Simulation time [s]
        position : array_like
            Position [m], 2 or 3 components (z = 0 for planar input)
        """
        pos = np.asarray(position, dtype=float).reshape(-1)
        if pos.shape == (2,):
            pos = np.append(pos, 0.0)
        if pos.shape != (3,):
            raise ValueError(f"Position must have 2 or 3 components, got shape {pos.shape}")
        self._points.append((float(time), pos[0], pos[1], pos[2]))

    def record(self, satellite, time: float) -> None:
        """Append the satellite's current 3D position."""
        self.add_point(time, satellite.position_3d())

    def clear(self) -> None:
        self._points.clear()

    def resize(self, max_length: int) -> None:
        """Change capacity, keeping the newest points."""
        self._max_length = self._validate_length(max_length)
        self._points = deque(self._points, maxlen=self._max_length)

    # ========== PROPERTY ACCESS ==========
    @property
    def max_length(self) -> int:
        return self._max_length

    def times(self) -> np.ndarray:
        """Point times [s], oldest first"""
        return np.array([p[0] for p in self._points], dtype=float)

    def positions(self) -> np.ndarray:
        """Positions as an (N, 3) array [m], oldest first"""
        if not self._points:
            return np.empty((0, 3))
        return np.array([p[1:] for p in self._points], dtype=float)

    def positions_2d(self) -> np.ndarray:
        """Positions projected onto the x-y plane, (N, 2) [m]"""
        return self.positions()[:, :2]

    def latest(self) -> Optional[Tuple[float, np.ndarray]]:
        """(time, position) of the newest point, or None if empty"""
        if not self._points:
            return None
        t, x, y, z = self._points[-1]
        return t, np.array([x, y, z])

    def to_dataframe(self) -> pd.DataFrame:
        """
        Export trail to pandas DataFrame.

        Returns:
            DataFrame with columns time, x, y, z, oldest point first
        """
        positions = self.positions()
        data = {
            'time': self.times(),
            'x': positions[:, 0],
            'y': positions[:, 1],
            'z': positions[:, 2],
        }
        return pd.DataFrame(data)

    # ========== SPECIAL METHODS ==========
    def __len__(self):
        return len(self._points)

    def __repr__(self):
        return f"Trail(points={len(self)}, max_length={self._max_length})"
