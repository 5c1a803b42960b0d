"""Forecast accuracy against realised sales (MAPE / RMSE)."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from typing import TYPE_CHECKING, Any

from stockcast.domain.forecast.series import build_daily_series, group_by_product, parse_sale_record

if TYPE_CHECKING:
    from stockcast.schemas import ProductForecast, SaleRecord

Actuals = Mapping[int | str, Mapping[date, float]]


def actuals_from_records(
    records: Iterable[SaleRecord | Mapping[str, Any]],
) -> dict[int | str, dict[date, int]]:
    """Aggregate realised sales into product → day → quantity.

    Raises:
        InvalidRecordError: If a realised sale is malformed; positions refer to
            the actuals list.

    """
    actuals: dict[int | str, dict[date, int]] = {}
    for pid, indexed in group_by_product(records).items():
        series = build_daily_series(parse_sale_record(raw, i) for i, raw in indexed)
        actuals[pid] = {p["date"]: p["quantity"] for p in series}
    return actuals


def evaluate_accuracy(
    forecasts: Sequence[ProductForecast],
    actuals: Actuals | None,
) -> dict | None:
    """Compare every forecasted product-day that has a realised value.

    MAPE is a fraction and only covers days with positive actual demand;
    RMSE covers all matched days.

    Args:
        forecasts: Product forecasts from one run
        actuals: Realised demand per product and day (None if not available)

    Returns:
        Dict with mape, rmse and sample_size, or None when nothing can be
        compared. No placeholder values are ever returned.

    """
    if not actuals:
        return None

    squared_errors: list[float] = []
    pct_errors: list[float] = []

    for pf in forecasts:
        realised = actuals.get(pf.product_id)
        if not realised:
            continue

        for day in pf.forecast:
            actual = realised.get(day["date"])
            if actual is None:
                continue

            error = actual - day["predicted_demand"]
            squared_errors.append(error * error)
            if actual > 0:
                pct_errors.append(abs(error) / actual)

    if not squared_errors:
        return None

    return {
        "mape": sum(pct_errors) / len(pct_errors) if pct_errors else None,
        "rmse": math.sqrt(sum(squared_errors) / len(squared_errors)),
        "sample_size": len(squared_errors),
    }
