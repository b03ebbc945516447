"""
Simulation class definition.

The Simulation is the host loop around one Satellite: it owns the clock
(a CircularEphemeris), the time multiplier, the pause state, the current
orbit settings and the trail. Each ``tick`` advances simulated time by
``BASE_TIME_STEP × time_multiplier`` and hands that whole interval to
``Satellite.update_position``, which does all of the sub-stepping.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from .utils import validation_error
from .satellite import Satellite
from .system import BodyParams, SpacecraftParams
from .environment import CircularEphemeris
from .defaults import EARTH, DEFAULT_ORBIT, get_body
from .trail import Trail

# 1970-01-01T00:00:00Z
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Simulation:
    """
    Host driver for a single satellite.

    Parameters
    ----------
    body : BodyParams or str, optional
        Central body, Earth by default
    orbit : dict, optional
        Initial elements with keys 'a' [m], 'e', 'i', 'w', 'omega', 'nu'
        [deg]; missing keys come from ``DEFAULT_ORBIT``
    lunar, solar, drag, j2, radiation : bool, optional
        Perturbation toggles
    spacecraft : SpacecraftParams, optional
    density_model : str, optional
    trail_length : int, optional
        Defaults to ``config.DEFAULT_TRAIL_LENGTH``
    auto_clear_trail : bool, optional
        Clear the trail whenever the satellite is rebuilt (default True)

    Examples
    --------
    >>> sim = Simulation(j2=True)
    >>> sim.set_time_multiplier(1000)
    >>> for _ in range(100):
    ...     sim.tick()
    >>> sim.simulation_time
    5000.0
    """
    BASE_TIME_STEP = 0.05  # s of simulated time per tick at 1x
    MAX_TIME_MULTIPLIER = 100000.0
    # semi-major axis after a body change, in body radii
    BODY_CHANGE_SMA_FACTOR = 1.2

    _TOGGLES = ('lunar', 'solar', 'drag', 'j2', 'radiation')

    # ========== CONSTRUCTION ==========
    def __init__(self, body=EARTH, orbit: Optional[Dict[str, float]] = None,
                 lunar=False, solar=False, drag=False, j2=False, radiation=False,
                 spacecraft: Optional[SpacecraftParams] = None,
                 density_model='exponential', trail_length: Optional[int] = None,
                 auto_clear_trail: bool = True):
        self._ephemeris = CircularEphemeris(self._resolve_body(body))
        self._orbit = dict(DEFAULT_ORBIT)
        if orbit:
            self._update_orbit(orbit)
        self._toggles = dict(lunar=lunar, solar=solar, drag=drag, j2=j2,
                             radiation=radiation)
        self._spacecraft = spacecraft
        self._density_model = density_model
        self._trail = Trail(trail_length)
        self.auto_clear_trail = auto_clear_trail
        self._time_multiplier = 1.0
        self._paused = False
        self._satellite = None
        self._rebuild()

    @staticmethod
    def _resolve_body(body) -> BodyParams:
        if isinstance(body, BodyParams):
            return body
        if isinstance(body, str):
            return get_body(body)
        raise TypeError(f"body must be BodyParams or str, got {type(body)}")

    def _update_orbit(self, orbit):
        unknown = set(orbit) - set(DEFAULT_ORBIT)
        if unknown:
            validation_error(f"Unknown orbital element(s) {sorted(unknown)}. "
                             f"Use: {list(DEFAULT_ORBIT)}")
        for key in DEFAULT_ORBIT:
            if key in orbit:
                self._orbit[key] = float(orbit[key])

    def _rebuild(self):
        #Replace the satellite from the stored settings
        body = self._ephemeris.body
        o = self._orbit
        self._satellite = Satellite(
            o['a'], o['e'], o['i'], o['w'], o['omega'], o['nu'],
            gravitational_constant=body.G, central_mass=body.mass,
            environment=self._ephemeris, body=body,
            spacecraft=self._spacecraft, density_model=self._density_model,
            **self._toggles,
        )
        if self.auto_clear_trail:
            self._trail.clear()

    # ========== LOOP ==========
    def tick(self) -> int:
        """
        Advance one host tick.

        Returns
        -------
        int
            Sub-steps performed by the satellite, 0 while paused
        """
        if self._paused:
            return 0
        delta_time = self.BASE_TIME_STEP * self._time_multiplier
        self._ephemeris.advance(delta_time)
        count = self._satellite.update_position(delta_time)
        self._trail.record(self._satellite, self._ephemeris.time)
        return count

    def run(self, n_ticks: int) -> int:
        """Run ``n_ticks`` ticks; returns the total sub-step count."""
        return sum(self.tick() for _ in range(int(n_ticks)))

    def pause(self):
        self._paused = True

    def resume(self):
        self._paused = False

    def toggle_pause(self) -> bool:
        """Flip the pause state; returns True if now paused."""
        self._paused = not self._paused
        return self._paused

    def reset(self):
        """Back to the epoch with the satellite at true anomaly 0."""
        self._orbit['nu'] = 0.0
        self._ephemeris.reset()
        self._rebuild()
        self._trail.clear()

    # ========== SETTINGS ==========
    def set_time_multiplier(self, multiplier: float):
        """
        Set the time compression factor, 0 < multiplier <= 100,000.

        Out-of-range values go through ``validation_error``; with
        STRICT_VALIDATION off they are clipped into range.
        """
        multiplier = float(multiplier)
        if not 0 < multiplier <= self.MAX_TIME_MULTIPLIER:
            validation_error(f"Time multiplier must be in (0, "
                             f"{self.MAX_TIME_MULTIPLIER:g}], got {multiplier}")
            if multiplier <= 0:
                return
            multiplier = self.MAX_TIME_MULTIPLIER
        self._time_multiplier = multiplier

    def set_body(self, body):
        """
        Switch central body and rebuild the satellite at 1.2 body radii.

        Parameters
        ----------
        body : BodyParams or str
            Body or catalogue name
        """
        body = self._resolve_body(body)
        self._ephemeris.set_body(body)
        self._orbit['a'] = body.radius * self.BODY_CHANGE_SMA_FACTOR
        self._rebuild()

    def set_orbit(self, **elements):
        """Rebuild the satellite with new elements ('a' in m, angles in deg)."""
        self._update_orbit(elements)
        self._rebuild()

    def set_perturbations(self, **toggles):
        """Rebuild the satellite with new perturbation toggles."""
        for name, value in toggles.items():
            if name not in self._TOGGLES:
                validation_error(f"Unknown perturbation toggle '{name}'. "
                                 f"Use: {list(self._TOGGLES)}")
                continue
            self._toggles[name] = bool(value)
        self._rebuild()

    # ========== PROPERTY ACCESS ==========
    @property
    def satellite(self) -> Satellite:
        return self._satellite

    @property
    def trail(self) -> Trail:
        return self._trail

    @property
    def ephemeris(self) -> CircularEphemeris:
        return self._ephemeris

    @property
    def body(self) -> BodyParams:
        return self._ephemeris.body

    @property
    def orbit(self) -> Dict[str, float]:
        """Orbit settings used for the next rebuild"""
        return dict(self._orbit)

    @property
    def toggles(self) -> Dict[str, bool]:
        return dict(self._toggles)

    @property
    def time_multiplier(self) -> float:
        return self._time_multiplier

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def simulation_time(self) -> float:
        """Seconds since the epoch"""
        return self._ephemeris.time

    def current_datetime(self) -> datetime:
        """Simulation clock as a UTC datetime, starting 1970-01-01."""
        return EPOCH + timedelta(seconds=int(self._ephemeris.time))

    def __repr__(self):
        state = "paused" if self._paused else "running"
        return (f"Simulation(body='{self.body.name}', t={self.simulation_time:.1f} s, "
                f"x{self._time_multiplier:g}, {state})")
