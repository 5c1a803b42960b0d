"""Explainability for inventory recommendations."""

from __future__ import annotations

import hashlib

from stockcast.domain.forecast.types import InventoryRecommendation


def generate_explanation(
    product_label: str,
    avg_daily_demand: float,
    trend: str,
    current_stock: int,
    rec: InventoryRecommendation,
) -> str:
    """Generate human-readable explanation for one product's advice.

    Args:
        product_label: Product name or id shown to the reader
        avg_daily_demand: Average predicted units per day
        trend: Trend direction
        current_stock: Units on hand
        rec: Inventory recommendation

    Returns:
        Explanation string

    """
    demand_display = f"demand={avg_daily_demand:.1f}/day ({trend})"
    stock_display = f"stock={current_stock}"
    cover_display = f"stockout in {rec['days_until_stockout']}d [{rec['stock_status']}]"
    rop_display = f"ROP={rec['reorder_point']} (safety={rec['safety_stock']})"

    if rec["should_reorder"]:
        action = (
            f"order {rec['recommended_quantity']} by {rec['optimal_order_date'].isoformat()}"
        )
    else:
        action = f"no order needed, review by {rec['optimal_order_date'].isoformat()}"

    return f"{product_label}: {demand_display}, {stock_display}, {cover_display}, {rop_display} → {action}"


def generate_hash(
    product_id: int | str,
    horizon: int,
    avg_daily_demand: float,
    current_stock: int,
    rec: InventoryRecommendation,
) -> str:
    """Generate deterministic hash for recommendation rationale.

    Hash based on: product_id, horizon, avg demand, stock, safety stock,
    reorder point, recommended quantity

    Returns:
        SHA256 hex digest

    """
    rationale_str = (
        f"{product_id}|{horizon}|{avg_daily_demand:.2f}|{current_stock}|"
        f"{rec['safety_stock']}|{rec['reorder_point']}|{rec['recommended_quantity']}"
    )

    return hashlib.sha256(rationale_str.encode()).hexdigest()
