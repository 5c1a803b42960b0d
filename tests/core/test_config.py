"""Tests for configuration management."""

import pytest
from pydantic import ValidationError

from stockcast.core.config import FORECAST_PERIODS, Settings, get_settings


def test_settings_defaults(settings):
    """Test that fields have correct defaults."""
    assert settings.min_data_points == 14
    assert settings.default_confidence_level == 0.95
    assert settings.default_forecast_period == "30d"
    assert settings.baseline_window_days == 14
    assert settings.model_version == "1.3.2"
    assert settings.seasonality_enabled is True
    assert settings.seasonality_min_periods == 2
    assert settings.seasonality_max_lag == 7
    assert settings.safety_service_level == 0.95
    assert settings.lead_time_days == 3
    assert settings.max_workers == 1
    assert settings.log_level == "INFO"
    assert settings.log_file is None


def test_settings_loads_from_env(monkeypatch):
    """Test that settings load correctly from environment variables."""
    monkeypatch.setenv("STOCKCAST_MIN_DATA_POINTS", "21")
    monkeypatch.setenv("STOCKCAST_SEASONALITY_ENABLED", "false")
    monkeypatch.setenv("STOCKCAST_LEAD_TIME_DAYS", "5")
    monkeypatch.setenv("STOCKCAST_DEFAULT_FORECAST_PERIOD", "90d")

    s = get_settings()
    assert s.min_data_points == 21
    assert s.seasonality_enabled is False
    assert s.lead_time_days == 5
    assert s.default_forecast_period == "90d"


def test_get_settings_is_cached(monkeypatch):
    """Repeated calls return the same instance."""
    monkeypatch.delenv("STOCKCAST_MIN_DATA_POINTS", raising=False)

    assert get_settings() is get_settings()


@pytest.mark.parametrize("value", ["0", "1", "1.5", "-0.2"])
def test_invalid_probability_rejected(monkeypatch, value):
    """Confidence outside (0, 1) fails validation."""
    monkeypatch.setenv("STOCKCAST_DEFAULT_CONFIDENCE_LEVEL", value)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_invalid_env_reported_as_runtime_error(monkeypatch):
    """get_settings names the offending variables."""
    monkeypatch.setenv("STOCKCAST_SAFETY_SERVICE_LEVEL", "2")
    monkeypatch.setenv("STOCKCAST_DEFAULT_FORECAST_PERIOD", "365d")

    with pytest.raises(RuntimeError) as exc_info:
        get_settings()

    message = str(exc_info.value)
    assert "STOCKCAST_SAFETY_SERVICE_LEVEL" in message
    assert "STOCKCAST_DEFAULT_FORECAST_PERIOD" in message


def test_forecast_periods(settings):
    """Supported periods and their horizons."""
    assert settings.forecast_periods == {"7d": 7, "14d": 14, "30d": 30, "90d": 90}
    assert settings.forecast_periods == FORECAST_PERIODS
