"""Tests for environment-driven settings."""

import pytest

from sdf_text.config import Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.scale_correction == 0.05
    assert settings.damping == 0.1
    assert settings.log_level == "WARNING"


def test_overrides():
    settings = Settings.from_env(
        {
            "SDF_TEXT_SCALE_CORRECTION": "0.5",
            "SDF_TEXT_PIXELS_PER_UNIT": "20",
            "SDF_TEXT_LOG_LEVEL": "debug",
            "SDF_TEXT_HTTP_TIMEOUT": " ",
        }
    )
    assert settings.scale_correction == 0.5
    assert settings.pixels_per_unit == 20.0
    assert settings.log_level == "DEBUG"
    assert settings.http_timeout == 30.0


def test_invalid_number():
    with pytest.raises(ValueError, match="SDF_TEXT_DAMPING"):
        Settings.from_env({"SDF_TEXT_DAMPING": "fast"})


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("SDF_TEXT_DAMPING", "0.25")
    assert Settings.from_env().damping == 0.25


def test_orbit_config_uses_damping():
    config = Settings.from_env({"SDF_TEXT_DAMPING": "0.3"}).orbit_config(max_distance=10.0)
    assert config.damping == 0.3
    assert config.max_distance == 10.0


def test_invalid_log_level():
    with pytest.raises(ValueError, match="SDF_TEXT_LOG_LEVEL"):
        Settings.from_env({"SDF_TEXT_LOG_LEVEL": "verbose"})
