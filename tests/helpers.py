"""Builders for test sales data and forecasts."""

from __future__ import annotations

from datetime import date, timedelta

# Sunday; forecasts start here so weekday alignment is predictable
TODAY = date(2024, 1, 21)


def make_records(
    quantities: list[int],
    start: date = date(2024, 1, 1),
    product_id: int | str = 1,
    current_stock: int = 10,
    product_name: str = "Test Widget",
    sku: str = "TEST-001",
) -> list[dict]:
    """One sale record per consecutive day, starting at ``start``."""
    return [
        {
            "product_id": product_id,
            "date": (start + timedelta(days=i)).isoformat(),
            "quantity": qty,
            "product_name": product_name,
            "sku": sku,
            "current_stock": current_stock,
        }
        for i, qty in enumerate(quantities)
    ]


def series_of(quantities: list[int], start: date = date(2024, 1, 1)) -> list[dict]:
    """Daily series points for consecutive days."""
    return [
        {"date": start + timedelta(days=i), "quantity": qty} for i, qty in enumerate(quantities)
    ]


def flat_forecast(predicted: list[int], start: date = TODAY, confidence: float = 0.95) -> list[dict]:
    """Forecast days with zero-width intervals."""
    return [
        {
            "date": start + timedelta(days=i),
            "predicted_demand": p,
            "lower_bound": p,
            "upper_bound": p,
            "confidence_level": confidence,
        }
        for i, p in enumerate(predicted)
    ]
