"""Statistical helpers for forecasting and safety stock.

NO DATA ACCESS - pure functions only.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from stockcast.domain.forecast.types import DailySeriesPoint, ForecastDay

# Two-sided z-scores for common confidence / service levels
Z_SCORES: dict[float, float] = {
    0.50: 0.67,
    0.75: 1.15,
    0.80: 1.28,
    0.85: 1.44,
    0.90: 1.64,
    0.95: 1.96,
    0.99: 2.58,
}

# Floor for fewer than 2 observations or zero spread
MIN_SAMPLE_STD_DEV = 1.0


def round_half_up(x: float) -> int:
    """Round to nearest integer, halves toward +infinity.

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -2
        >>> round_half_up(2.8)
        3

    """
    return math.floor(x + 0.5)


def get_z_score(level: float) -> float:
    """Z-score of the tabulated level closest to ``level``.

    Ties resolve to the lower tabulated level.

    Examples:
        >>> get_z_score(0.95)
        1.96
        >>> get_z_score(0.93)  # 0.02 from 0.95, 0.03 from 0.90
        1.96

    """
    closest = min(Z_SCORES, key=lambda tabulated: (abs(tabulated - level), tabulated))
    return Z_SCORES[closest]


def sample_std_dev(values: Sequence[float]) -> float:
    """Sample standard deviation (n-1 denominator).

    Returns 1.0 for fewer than 2 values or when every value is identical.

    Examples:
        >>> sample_std_dev([4, 4, 4])
        1.0
        >>> round(sample_std_dev([2, 4]), 4)
        1.4142

    """
    n = len(values)
    if n < 2:
        return MIN_SAMPLE_STD_DEV

    mean = sum(values) / n
    variance = sum((v - mean) ** 2 for v in values) / (n - 1)
    if variance == 0:
        return MIN_SAMPLE_STD_DEV
    return math.sqrt(variance)


def historical_std_dev(series: Sequence[DailySeriesPoint]) -> float:
    """Spread of realised daily demand, used for prediction intervals."""
    return sample_std_dev([p["quantity"] for p in series])


def forecast_std_dev(forecast: Sequence[ForecastDay]) -> float:
    """Spread of predicted daily demand, used for safety stock."""
    return sample_std_dev([day["predicted_demand"] for day in forecast])
