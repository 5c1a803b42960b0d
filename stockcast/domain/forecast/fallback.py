"""Flat forecast for products with too little history."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, timedelta

from stockcast.domain.forecast.stats import round_half_up
from stockcast.domain.forecast.types import DailySeriesPoint, ForecastDay

# Interval half-width as a share of the average
FALLBACK_VARIATION = 0.2


def average_quantity(series: Sequence[DailySeriesPoint]) -> float:
    """Mean daily quantity over all history (0 if empty)."""
    if not series:
        return 0.0
    return sum(p["quantity"] for p in series) / len(series)


def generate_fallback_forecast(
    series: Sequence[DailySeriesPoint],
    horizon: int,
    confidence_level: float,
    today: date,
) -> list[ForecastDay]:
    """Same prediction every day: the historical average, ±20%."""
    avg_qty = average_quantity(series)
    margin = avg_qty * FALLBACK_VARIATION
    predicted = max(0, round_half_up(avg_qty))

    return [
        {
            "date": today + timedelta(days=i),
            "predicted_demand": predicted,
            "lower_bound": max(0, round_half_up(predicted - margin)),
            "upper_bound": round_half_up(predicted + margin),
            "confidence_level": confidence_level,
        }
        for i in range(horizon)
    ]
