"""Linear trend detection over a daily sales series."""

from __future__ import annotations

from collections.abc import Sequence

from stockcast.domain.forecast.types import DailySeriesPoint, TrendResult

# |slope| below this (units/day per day) counts as flat
STABLE_SLOPE_THRESHOLD = 0.05


def classify_slope(slope: float) -> str:
    """Map a slope to increasing / decreasing / stable."""
    if abs(slope) < STABLE_SLOPE_THRESHOLD:
        return "stable"
    if slope > 0:
        return "increasing"
    return "decreasing"


def detect_trend(series: Sequence[DailySeriesPoint]) -> TrendResult:
    """Fit ordinary least squares of quantity against the day index.

    slope = (n·Σ(i·q) − Σi·Σq) / (n·Σi² − (Σi)²)

    Args:
        series: Daily series, oldest first

    Returns:
        Slope and direction; flat for fewer than 2 points

    Examples:
        >>> detect_trend([])
        {'slope': 0.0, 'direction': 'stable'}

    """
    n = len(series)
    if n < 2:
        return {"slope": 0.0, "direction": "stable"}

    y = [p["quantity"] for p in series]
    sum_x = n * (n - 1) // 2
    sum_y = sum(y)
    sum_xy = sum(i * q for i, q in enumerate(y))
    sum_xx = sum(i * i for i in range(n))

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)

    return {"slope": slope, "direction": classify_slope(slope)}
