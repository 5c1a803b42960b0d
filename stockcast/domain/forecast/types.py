"""Value types shared by the forecasting pipeline."""

from __future__ import annotations

import datetime as dt
from typing import Literal

from typing_extensions import TypedDict

TrendDirection = Literal["increasing", "decreasing", "stable"]
StockStatus = Literal["critical", "low", "adequate"]

# Index 0 = Sunday ... 6 = Saturday
WEEKDAY_NAMES: tuple[str, ...] = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)

SeasonalFactors = dict[str, float]


class DailySeriesPoint(TypedDict):
    """Units sold by one product on one calendar day."""

    date: dt.date
    quantity: int


class TrendResult(TypedDict):
    """Least-squares trend over the daily series."""

    slope: float
    direction: TrendDirection


class ForecastDay(TypedDict):
    """Predicted demand for one future day with its prediction interval."""

    date: dt.date
    predicted_demand: int
    lower_bound: int
    upper_bound: int
    confidence_level: float


class InventoryRecommendation(TypedDict):
    """Advisory reorder decision derived from a forecast."""

    stock_status: StockStatus
    days_until_stockout: int
    should_reorder: bool
    recommended_quantity: int
    optimal_order_date: dt.date
    safety_stock: int
    reorder_point: int
    economic_order_quantity: int
    eoq_degenerate: bool


def weekday_index(d: dt.date) -> int:
    """Day of week with Sunday = 0."""
    return (d.weekday() + 1) % 7


def neutral_factors() -> SeasonalFactors:
    """Seasonal factors of 1.0 for every weekday."""
    return {name: 1.0 for name in WEEKDAY_NAMES}
