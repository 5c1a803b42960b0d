"""Day-of-week seasonality from historical daily sales.

Factors are multiplicative: a factor of 1.3 on Saturday means Saturdays sell
30% above the average day.
"""

from __future__ import annotations

from collections.abc import Sequence

from stockcast.domain.forecast.stats import round_half_up
from stockcast.domain.forecast.types import (
    WEEKDAY_NAMES,
    DailySeriesPoint,
    SeasonalFactors,
    neutral_factors,
    weekday_index,
)

DAYS_PER_WEEK = 7


def has_enough_history(series_length: int, min_periods: int) -> bool:
    """Whether the series spans at least ``min_periods`` full weeks."""
    return series_length >= DAYS_PER_WEEK * min_periods


def detect_seasonality(
    series: Sequence[DailySeriesPoint],
    enabled: bool = True,
    min_periods: int = 2,
) -> SeasonalFactors:
    """Compute one multiplicative factor per weekday.

    factor[day] = average(day) / overall average, rounded to one decimal.
    Weekdays with no observations average to 0.

    Args:
        series: Daily series, oldest first
        enabled: Seasonality switch; disabled returns neutral factors
        min_periods: Full weeks of history required (independent of the
            generator's own minimum)

    Returns:
        Factors keyed sunday..saturday

    """
    if not enabled or not has_enough_history(len(series), min_periods):
        return neutral_factors()

    day_groups: list[list[int]] = [[] for _ in range(DAYS_PER_WEEK)]
    for point in series:
        day_groups[weekday_index(point["date"])].append(point["quantity"])

    day_averages = [sum(g) / len(g) if g else 0.0 for g in day_groups]
    total_qty = sum(sum(g) for g in day_groups)
    overall_average = total_qty / len(series)

    if overall_average <= 0:
        return neutral_factors()

    return {
        WEEKDAY_NAMES[day]: round_half_up(day_averages[day] / overall_average * 10) / 10
        for day in range(DAYS_PER_WEEK)
    }
