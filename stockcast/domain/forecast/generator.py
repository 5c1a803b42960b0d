"""Trend- and seasonality-adjusted daily demand forecast."""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import date, timedelta

from stockcast.domain.forecast.stats import get_z_score, historical_std_dev, round_half_up
from stockcast.domain.forecast.types import (
    WEEKDAY_NAMES,
    DailySeriesPoint,
    ForecastDay,
    SeasonalFactors,
    TrendResult,
    weekday_index,
)

DEFAULT_BASELINE_WINDOW = 14


def baseline_value(series: Sequence[DailySeriesPoint], window: int = DEFAULT_BASELINE_WINDOW) -> float:
    """Mean quantity over the last ``window`` days of history (0 if empty)."""
    n = min(window, len(series))
    if n == 0:
        return 0.0

    recent = series[-n:]
    return sum(p["quantity"] for p in recent) / n


def generate_daily_forecast(
    series: Sequence[DailySeriesPoint],
    horizon: int,
    trend: TrendResult,
    seasonal_factors: SeasonalFactors,
    confidence_level: float,
    today: date,
    baseline_window: int = DEFAULT_BASELINE_WINDOW,
) -> list[ForecastDay]:
    """Project the recent baseline forward over ``horizon`` days.

    predicted = max(0, round(base × (1 + slope·i) × factor[weekday]))

    The interval half-width is ceil(std_dev(history) × z) and is the same
    for every day of the horizon.

    Args:
        series: Daily history, oldest first
        horizon: Number of days to forecast, starting today
        trend: Trend estimate over the same history
        seasonal_factors: Weekday multipliers
        confidence_level: Interval confidence, mapped to the nearest tabulated z-score
        today: First forecast date
        baseline_window: Days averaged for the baseline

    Returns:
        One ForecastDay per horizon day

    """
    base = baseline_value(series, baseline_window)
    z_score = get_z_score(confidence_level)
    margin = math.ceil(historical_std_dev(series) * z_score)

    forecast: list[ForecastDay] = []
    for i in range(horizon):
        day = today + timedelta(days=i)
        trend_factor = 1 + trend["slope"] * i
        seasonal_factor = seasonal_factors[WEEKDAY_NAMES[weekday_index(day)]]

        predicted = max(0, round_half_up(base * trend_factor * seasonal_factor))

        forecast.append(
            {
                "date": day,
                "predicted_demand": predicted,
                "lower_bound": max(0, predicted - margin),
                "upper_bound": predicted + margin,
                "confidence_level": confidence_level,
            }
        )

    return forecast
