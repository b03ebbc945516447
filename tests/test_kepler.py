"""
Test suite for the Kepler anomaly conversions.

Tests cover:
- True/eccentric/mean anomaly conversions
- Newton-Raphson convergence and the convergence record
- Non-convergence reporting through warnings
"""

import warnings

import pytest
import numpy as np

from trochia import temp_config, KeplerConvergenceWarning
from trochia.kepler import (true_to_eccentric, eccentric_to_true, eccentric_to_mean,
                            true_to_mean, solve_kepler, solve_eccentric_from_mean,
                            mean_to_true)


class TestAnomalyConversions:
    """Closed-form conversions between anomalies."""

    @pytest.mark.parametrize("e", [0.0, 0.1, 0.5, 0.9, 0.949])
    @pytest.mark.parametrize("nu", [-3.0, -1.2, 0.0, 0.4, 2.5, 3.1])
    def test_true_eccentric_round_trip(self, nu, e):
        """eccentric_to_true inverts true_to_eccentric."""
        E = true_to_eccentric(nu, e)
        assert abs(eccentric_to_true(E, e) - nu) < 1e-9

    def test_circular_orbit_anomalies_coincide(self):
        """For e = 0 all three anomalies are equal."""
        nu = 1.234
        assert np.isclose(true_to_eccentric(nu, 0.0), nu)
        assert np.isclose(true_to_mean(nu, 0.0), nu)

    def test_periapsis_and_apoapsis(self):
        """Anomalies agree at periapsis and apoapsis."""
        assert true_to_eccentric(0.0, 0.5) == 0.0
        assert np.isclose(abs(true_to_eccentric(np.pi, 0.5)), np.pi)

    def test_mean_anomaly_lags_true_near_periapsis(self):
        """Near periapsis M < E < ν for an eccentric orbit."""
        nu = 0.5
        E = true_to_eccentric(nu, 0.3)
        M = eccentric_to_mean(E, 0.3)
        assert M < E < nu

    def test_results_in_principal_range(self):
        """Converted angles lie in (-π, π]."""
        E = true_to_eccentric(5.0, 0.2)
        assert -np.pi < E <= np.pi


class TestSolveKepler:
    """Newton-Raphson solution of M = E - e sin E."""

    @pytest.mark.parametrize("M,e", [(0.1, 0.0), (1.0, 0.1), (3.0, 0.5), (-2.0, 0.8), (0.2, 0.95)])
    def test_solution_satisfies_equation(self, M, e):
        """The returned E satisfies Kepler's equation."""
        solution = solve_kepler(M, e)
        assert solution.converged
        E = solution.eccentric_anomaly
        assert abs(E - e * np.sin(E) - M) < 1e-9

    def test_circular_orbit_returns_mean_anomaly(self):
        """With e = 0 the solution is E = M."""
        solution = solve_kepler(1.5, 0.0)
        assert solution.eccentric_anomaly == 1.5
        assert solution.iterations == 1

    def test_unwrapped_mean_anomaly_accepted(self):
        """M outside [0, 2π) is solved without wrapping."""
        E = solve_eccentric_from_mean(4 * np.pi + 0.3, 0.2)
        assert np.isclose(E - 0.2 * np.sin(E), 4 * np.pi + 0.3)

    def test_mean_to_true_inverts_true_to_mean(self):
        """mean_to_true(true_to_mean(ν)) recovers ν."""
        nu = 2.2
        assert np.isclose(mean_to_true(true_to_mean(nu, 0.4), 0.4), nu)


class TestNonConvergence:
    """Iteration cap behavior."""

    def test_silent_by_default(self):
        """Hitting the cap is recorded on the solution without a warning."""
        with temp_config(KEPLER_MAX_ITER=1):
            with warnings.catch_warnings():
                warnings.simplefilter("error")
                solution = solve_kepler(1.0, 0.9)
        assert not solution.converged

    def test_cap_returns_last_estimate_with_warning(self):
        """With warnings on, hitting the cap warns and still returns a usable estimate."""
        with temp_config(KEPLER_MAX_ITER=1, WARN_ON_KEPLER_NONCONVERGENCE=True):
            with pytest.warns(KeplerConvergenceWarning, match="did not converge"):
                solution = solve_kepler(1.0, 0.9)
        assert not solution.converged
        assert solution.iterations == 1
        assert np.isfinite(solution.eccentric_anomaly)

    def test_warning_is_runtime_warning(self):
        assert issubclass(KeplerConvergenceWarning, RuntimeWarning)
