"""Inventory recommendations derived from a demand forecast.

Business logic for calculating:
- Days until stockout and stock status
- Safety stock and reorder point
- Order quantity (EOQ-floored) and optimal order date

NO DATA ACCESS - pure functions only. Current stock is read, never changed.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from datetime import date, timedelta

from stockcast.domain.forecast.stats import forecast_std_dev, get_z_score, round_half_up
from stockcast.domain.forecast.types import ForecastDay, InventoryRecommendation, StockStatus

logger = logging.getLogger(__name__)

CRITICAL_DAYS = 7
LOW_DAYS = 14

# EOQ inputs: ordering cycle (days), fixed cost per order, holding cost rate
EOQ_CYCLE_DAYS = 30
EOQ_ORDER_COST = 50.0
EOQ_HOLDING_RATE = 0.2

# Extra days of demand covered by a replenishment order
COVERAGE_DAYS = 14


def days_until_stockout(forecast: Sequence[ForecastDay], current_stock: int) -> int:
    """First day index where cumulative predicted demand exceeds stock.

    Returns the horizon length if stock lasts the whole forecast.

    Examples:
        >>> fc = [{"predicted_demand": 4}, {"predicted_demand": 4}, {"predicted_demand": 4}]
        >>> days_until_stockout(fc, 5)
        1
        >>> days_until_stockout(fc, 100)
        3

    """
    cumulative = 0
    for i, day in enumerate(forecast):
        cumulative += day["predicted_demand"]
        if cumulative > current_stock:
            return i
    return len(forecast)


def stock_status(days_left: int) -> StockStatus:
    """Classify stock cover: critical under a week, low under two."""
    if days_left < CRITICAL_DAYS:
        return "critical"
    if days_left < LOW_DAYS:
        return "low"
    return "adequate"


def safety_stock(forecast: Sequence[ForecastDay], service_level: float, lead_time_days: int) -> int:
    """Safety stock = z(service level) × std_dev(forecast) × √lead_time, rounded up."""
    z_score = get_z_score(service_level)
    return math.ceil(z_score * forecast_std_dev(forecast) * math.sqrt(lead_time_days))


def reorder_point(avg_daily_demand: float, lead_time_days: int, safety: int) -> int:
    """Stock level that should trigger a purchase order."""
    return math.ceil(avg_daily_demand * lead_time_days + safety)


def economic_order_quantity(avg_daily_demand: float) -> int | None:
    """Classic EOQ with fixed cycle, order cost and holding rate.

    sqrt(2 × 30 × D × 50 / (0.2 × D)); D cancels out, so any positive
    demand yields the same value. Returns None when D is 0.

    Examples:
        >>> economic_order_quantity(5.0)
        123
        >>> economic_order_quantity(0.0) is None
        True

    """
    if avg_daily_demand <= 0:
        return None

    return math.ceil(
        math.sqrt(
            2 * EOQ_CYCLE_DAYS * avg_daily_demand * EOQ_ORDER_COST
            / (EOQ_HOLDING_RATE * avg_daily_demand)
        )
    )


def calculate_inventory_recommendation(
    forecast: Sequence[ForecastDay],
    current_stock: int,
    service_level: float,
    lead_time_days: int,
    today: date,
) -> InventoryRecommendation:
    """Derive reorder advice from a forecast and the current stock.

    Args:
        forecast: Daily forecast (horizon H), first day = today
        current_stock: Units on hand
        service_level: Target probability of no stockout during lead time
        lead_time_days: Days between ordering and receiving
        today: Date the advice is computed for

    Returns:
        InventoryRecommendation

    """
    horizon = len(forecast)
    days_left = days_until_stockout(forecast, current_stock)

    avg_daily_demand = (
        sum(day["predicted_demand"] for day in forecast) / horizon if horizon else 0.0
    )

    safety = safety_stock(forecast, service_level, lead_time_days)
    rop = reorder_point(avg_daily_demand, lead_time_days, safety)

    eoq = economic_order_quantity(avg_daily_demand)
    eoq_degenerate = eoq is None
    if eoq_degenerate:
        logger.warning(
            "Zero average demand, EOQ undefined; using 0",
            extra={"current_stock": current_stock, "horizon": horizon},
        )
        eoq = 0

    top_up = rop - current_stock + avg_daily_demand * COVERAGE_DAYS
    quantity = max(0, round_half_up(max(eoq, top_up)))

    if days_left > lead_time_days:
        order_date = today + timedelta(days=days_left - lead_time_days)
    else:
        order_date = today

    return {
        "stock_status": stock_status(days_left),
        "days_until_stockout": days_left,
        "should_reorder": current_stock <= rop,
        "recommended_quantity": quantity,
        "optimal_order_date": order_date,
        "safety_stock": safety,
        "reorder_point": rop,
        "economic_order_quantity": eoq,
        "eoq_degenerate": eoq_degenerate,
    }
