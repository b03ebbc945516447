"""
Test suite for package configuration.

Tests cover:
- Default values
- reset()
- temp_config context manager
- validation_error strict and lenient behavior
"""

import pytest

import trochia
from trochia import config, temp_config
from trochia.utils import validation_error


@pytest.fixture(autouse=True)
def restore_config():
    yield
    config.reset()


class TestDefaults:
    """Package defaults."""

    def test_kepler(self):
        assert config.KEPLER_TOL == 1e-10
        assert config.KEPLER_MAX_ITER == 100
        assert config.WARN_ON_KEPLER_NONCONVERGENCE is False

    def test_clamp(self):
        assert config.MAX_SMA_CHANGE_FRACTION == 0.01
        assert config.MAX_ECC_CHANGE == 0.001
        assert config.MAX_INC_CHANGE_DEG == 0.1
        assert config.MAX_ANGLE_CHANGE_DEG == 1.0
        assert config.MAX_ECCENTRICITY == 0.99
        assert config.MIN_SMA_RADIUS_FACTOR == 1.01

    def test_behavior(self):
        assert config.STRICT_VALIDATION is True
        assert config.DEFAULT_TRAIL_LENGTH == 500

    def test_same_object_exported(self):
        assert trochia.config is config


class TestReset:
    """reset() restores defaults."""

    def test_reset(self):
        config.KEPLER_TOL = 1e-6
        config.STRICT_VALIDATION = False
        config.reset()
        assert config.KEPLER_TOL == 1e-10
        assert config.STRICT_VALIDATION is True

    def test_repr(self):
        text = repr(config)
        assert text.startswith("TrochiaConfig:")
        assert "MAX_ANGLE_CHANGE_DEG = 1.0" in text


class TestTempConfig:
    """Temporary overrides."""

    def test_values_restored(self):
        with temp_config(MAX_ECC_CHANGE=0.5, DEFAULT_TRAIL_LENGTH=10) as cfg:
            assert cfg.MAX_ECC_CHANGE == 0.5
            assert config.DEFAULT_TRAIL_LENGTH == 10
        assert config.MAX_ECC_CHANGE == 0.001
        assert config.DEFAULT_TRAIL_LENGTH == 500

    def test_restored_after_exception(self):
        with pytest.raises(RuntimeError):
            with temp_config(KEPLER_MAX_ITER=3):
                raise RuntimeError("boom")
        assert config.KEPLER_MAX_ITER == 100
        assert config.WARN_ON_KEPLER_NONCONVERGENCE is False

    def test_unknown_key(self):
        with pytest.raises(AttributeError, match="no attribute 'NOT_A_SETTING'"):
            with temp_config(NOT_A_SETTING=1):
                pass


class TestValidationError:
    """Strict raises, lenient warns."""

    def test_strict_raises(self):
        with pytest.raises(ValueError, match="bad value"):
            validation_error("bad value")

    def test_strict_custom_class(self):
        with pytest.raises(TypeError, match="bad type"):
            validation_error("bad type", TypeError)

    def test_lenient_warns(self):
        with temp_config(STRICT_VALIDATION=False):
            with pytest.warns(UserWarning, match="bad value"):
                validation_error("bad value")
