"""Demand forecasting pipeline: series, trend, seasonality, projection."""

from stockcast.domain.forecast.errors import ForecastError, InvalidRecordError
from stockcast.domain.forecast.stats import Z_SCORES, get_z_score

__all__ = [
    "ForecastError",
    "InvalidRecordError",
    "Z_SCORES",
    "get_z_score",
]
