"""Configuration management with pydantic-settings.

Provides type-safe forecasting configuration with environment variable validation.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

FORECAST_PERIODS: dict[str, int] = {
    "7d": 7,
    "14d": 14,
    "30d": 30,
    "90d": 90,
}


class Settings(BaseSettings):
    """Forecasting settings with environment variable validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STOCKCAST_",
        case_sensitive=False,
        extra="ignore",
    )

    # === Forecast ===
    min_data_points: int = Field(14, ge=1, description="Days of history needed for full model")
    default_confidence_level: float = Field(0.95, description="Prediction interval confidence")
    default_forecast_period: str = Field("30d", description="Horizon key: 7d|14d|30d|90d")
    baseline_window_days: int = Field(14, ge=1, description="Moving-average window for baseline")
    model_version: str = Field("1.3.2", description="Reported forecast model version")

    # === Seasonality ===
    seasonality_enabled: bool = Field(True, description="Enable day-of-week seasonality")
    seasonality_min_periods: int = Field(2, ge=1, description="Full weeks required for factors")
    seasonality_max_lag: int = Field(7, description="Max autocorrelation lag (days), reserved")

    # === Safety stock ===
    safety_service_level: float = Field(0.95, description="Service level for safety stock")
    lead_time_days: int = Field(3, ge=0, description="Replenishment lead time in days")

    # === Execution ===
    max_workers: int = Field(1, ge=1, description="Worker threads for per-product fan-out")

    # === Logging ===
    log_level: str = Field("INFO", description="Log level")
    log_json: bool = Field(True, description="Emit JSON log lines")
    log_file: str | None = Field(None, description="Rotating JSON log file (None = disabled)")

    @field_validator("default_confidence_level", "safety_service_level")
    @classmethod
    def _check_probability(cls, v: float) -> float:
        if not 0 < v < 1:
            raise ValueError("must be between 0 and 1 (exclusive)")
        return v

    @field_validator("default_forecast_period")
    @classmethod
    def _check_period(cls, v: str) -> str:
        if v not in FORECAST_PERIODS:
            raise ValueError(f"must be one of {', '.join(FORECAST_PERIODS)}")
        return v

    @property
    def forecast_periods(self) -> dict[str, int]:
        """Supported forecast horizons in days, keyed by period name."""
        return dict(FORECAST_PERIODS)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Raises:
        RuntimeError: If environment variables fail validation.

    """
    try:
        return Settings()
    except ValidationError as e:
        bad_fields = []
        for error in e.errors():
            if error["loc"]:
                bad_fields.append(f"STOCKCAST_{str(error['loc'][0]).upper()}")

        error_msg = (
            f"Configuration error: invalid environment variables: "
            f"{', '.join(bad_fields)}\n"
            f"Please fix them in .env file or in the environment."
        )
        raise RuntimeError(error_msg) from e


__all__ = ["FORECAST_PERIODS", "Settings", "get_settings"]
