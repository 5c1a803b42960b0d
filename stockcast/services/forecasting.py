"""Demand forecasting service facade.

Runs the per-product pipeline (series → forecast or fallback → inventory
advice) over a batch and assembles the response. Products are independent:
one product's failure is reported and the rest of the batch completes.
"""

from __future__ import annotations

import contextvars
import hashlib
import logging
import time
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timezone
from typing import Any

from stockcast.core.config import Settings, get_settings
from stockcast.core.logging import set_run_id
from stockcast.core.metrics import (
    forecast_request_duration_seconds,
    forecast_requests_total,
    product_forecast_failures_total,
    product_forecasts_total,
    reorder_recommendations_total,
)
from stockcast.domain.forecast.accuracy import actuals_from_records, evaluate_accuracy
from stockcast.domain.forecast.fallback import average_quantity, generate_fallback_forecast
from stockcast.domain.forecast.generator import generate_daily_forecast
from stockcast.domain.forecast.seasonality import detect_seasonality
from stockcast.domain.forecast.series import build_daily_series, group_by_product, parse_sale_record
from stockcast.domain.forecast.trend import detect_trend
from stockcast.domain.forecast.types import neutral_factors
from stockcast.domain.inventory.explain import generate_explanation, generate_hash
from stockcast.domain.inventory.recommend import calculate_inventory_recommendation
from stockcast.schemas import (
    AccuracyMetrics,
    ForecastMetadata,
    ForecastRequest,
    ForecastResponse,
    ProductFailure,
    ProductForecast,
    ProductSummary,
    SaleRecord,
)

logger = logging.getLogger(__name__)

DEFAULT_HORIZON_DAYS = 30

IndexedRecords = Sequence[tuple[int, SaleRecord | Mapping[str, Any]]]


def resolve_horizon(forecast_period: str, settings: Settings) -> int:
    """Days in a forecast period; unknown keys fall back to 30."""
    return settings.forecast_periods.get(forecast_period, DEFAULT_HORIZON_DAYS)


def derive_run_id(request: ForecastRequest, now: datetime) -> str:
    """Deterministic run id: identical requests at the same instant share it."""
    digest = hashlib.sha256(f"{request.model_dump()!r}|{now.isoformat()}".encode())
    return digest.hexdigest()[:16]


def forecast_product(
    product_id: int | str,
    indexed_records: IndexedRecords,
    *,
    horizon: int,
    confidence_level: float,
    include_historical: bool,
    today: date,
    settings: Settings,
) -> ProductForecast:
    """Forecast demand and derive inventory advice for one product.

    Args:
        product_id: Product being forecast
        indexed_records: (batch position, raw record) pairs for this product
        horizon: Days to forecast
        confidence_level: Prediction interval confidence
        include_historical: Attach the aggregated daily history
        today: First forecast day
        settings: Forecasting configuration

    Returns:
        ProductForecast

    Raises:
        InvalidRecordError: If one of the product's records is malformed.

    """
    records = [parse_sale_record(raw, i) for i, raw in indexed_records]
    details = records[0]
    series = build_daily_series(records)

    if len(series) >= settings.min_data_points:
        method = "trend_seasonal"
        trend = detect_trend(series)
        seasonal_factors = detect_seasonality(
            series,
            enabled=settings.seasonality_enabled,
            min_periods=settings.seasonality_min_periods,
        )
        forecast = generate_daily_forecast(
            series,
            horizon,
            trend,
            seasonal_factors,
            confidence_level,
            today,
            baseline_window=settings.baseline_window_days,
        )
        total = sum(day["predicted_demand"] for day in forecast)
        avg_daily_demand = total / horizon if horizon else 0.0
    else:
        method = "fallback"
        logger.info(
            f"Product {product_id}: {len(series)} days of history "
            f"(< {settings.min_data_points}), using flat forecast"
        )
        trend = {"slope": 0.0, "direction": "stable"}
        seasonal_factors = neutral_factors()
        forecast = generate_fallback_forecast(series, horizon, confidence_level, today)
        total = sum(day["predicted_demand"] for day in forecast)
        avg_daily_demand = average_quantity(series)

    logger.debug(
        "Product forecast computed",
        extra={"product_id": product_id, "method": method, "history_days": len(series)},
    )

    rec = calculate_inventory_recommendation(
        forecast,
        details.current_stock,
        settings.safety_service_level,
        settings.lead_time_days,
        today,
    )

    label = details.product_name or str(product_id)

    return ProductForecast(
        product_id=product_id,
        product_name=details.product_name,
        sku=details.sku,
        current_stock=details.current_stock,
        forecast=forecast,
        historical=series if include_historical else None,
        summary=ProductSummary(
            total_predicted_demand=total,
            avg_daily_demand=avg_daily_demand,
            trend=trend["direction"],
            trend_slope=trend["slope"],
            seasonal_factors=seasonal_factors,
            method=method,
            inventory=rec,
            explanation=generate_explanation(
                label, avg_daily_demand, trend["direction"], details.current_stock, rec
            ),
            rationale_hash=generate_hash(
                product_id, horizon, avg_daily_demand, details.current_stock, rec
            ),
        ),
    )


def _forecast_or_failure(
    product_id: int | str,
    indexed_records: IndexedRecords,
    **kwargs: Any,
) -> ProductForecast | ProductFailure:
    """Run one product, turning its error into a reported failure."""
    try:
        result = forecast_product(product_id, indexed_records, **kwargs)
    except Exception as e:
        logger.warning(f"Forecast failed for product {product_id}: {e}", exc_info=True)
        product_forecast_failures_total.labels(error_type=type(e).__name__).inc()
        return ProductFailure(product_id=product_id, error_type=type(e).__name__, message=str(e))

    product_forecasts_total.labels(method=result.summary.method).inc()
    reorder_recommendations_total.labels(
        stock_status=result.summary.inventory["stock_status"]
    ).inc()
    return result


def run_forecast(
    request: ForecastRequest,
    *,
    today: date | None = None,
    now: datetime | None = None,
    settings: Settings | None = None,
    max_workers: int | None = None,
) -> ForecastResponse:
    """Forecast demand for every product in the request.

    Args:
        request: Sales history and options
        today: First forecast day (default: date of ``now``)
        now: Generation timestamp (default: current UTC time)
        settings: Configuration (default: environment settings)
        max_workers: Worker threads for per-product fan-out (default: settings)

    Returns:
        ForecastResponse with forecasts in first-seen product order, plus failures

    Raises:
        InvalidRecordError: If a record cannot be attributed to any product,
            or a realised sale in ``actuals`` is malformed.

    """
    settings = settings or get_settings()
    now = now or datetime.now(timezone.utc)
    today = today or now.date()
    workers = max_workers or settings.max_workers

    # run_id stays bound to this run; the caller's context is left untouched
    return contextvars.copy_context().run(
        _run_batch, request, today=today, now=now, settings=settings, workers=workers
    )


def _run_batch(
    request: ForecastRequest,
    *,
    today: date,
    now: datetime,
    settings: Settings,
    workers: int,
) -> ForecastResponse:
    run_id = set_run_id(request.run_id or derive_run_id(request, now))
    started = time.perf_counter()

    forecast_period = request.forecast_period or settings.default_forecast_period
    horizon = resolve_horizon(forecast_period, settings)
    confidence_level = request.confidence_level or settings.default_confidence_level

    groups = group_by_product(request.sales_data)
    actuals = actuals_from_records(request.actuals) if request.actuals else None
    logger.info(
        f"Forecast run started: {len(groups)} products, period={forecast_period}",
        extra={"records": len(request.sales_data), "workers": workers},
    )

    options = {
        "horizon": horizon,
        "confidence_level": confidence_level,
        "include_historical": request.include_historical,
        "today": today,
        "settings": settings,
    }

    if workers > 1 and len(groups) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(
                    contextvars.copy_context().run, _forecast_or_failure, pid, indexed, **options
                )
                for pid, indexed in groups.items()
            ]
            results = [f.result() for f in futures]
    else:
        results = [_forecast_or_failure(pid, indexed, **options) for pid, indexed in groups.items()]

    forecasts = [r for r in results if isinstance(r, ProductForecast)]
    failures = [r for r in results if isinstance(r, ProductFailure)]

    metrics = evaluate_accuracy(forecasts, actuals)
    accuracy = AccuracyMetrics(**metrics) if metrics else None

    elapsed = time.perf_counter() - started
    forecast_requests_total.labels(forecast_period=forecast_period).inc()
    forecast_request_duration_seconds.observe(elapsed)
    logger.info(
        f"Forecast run finished: {len(forecasts)} ok, {len(failures)} failed in {elapsed:.3f}s"
    )

    return ForecastResponse(
        forecasts=forecasts,
        failures=failures,
        metadata=ForecastMetadata(
            generated_at=now,
            forecast_period=forecast_period,
            horizon_days=horizon,
            model_version=settings.model_version,
            run_id=run_id,
            accuracy_metrics=accuracy,
        ),
    )


def forecast_demand(
    sales_data: Iterable[SaleRecord | Mapping[str, Any]],
    forecast_period: str | None = None,
    confidence_level: float | None = None,
    include_historical: bool = False,
    actuals: Iterable[SaleRecord | Mapping[str, Any]] | None = None,
    **kwargs: Any,
) -> ForecastResponse:
    """Convenience wrapper building a ForecastRequest from plain arguments.

    Extra keyword arguments (today, now, settings, max_workers) are passed
    to run_forecast.
    """
    request = ForecastRequest(
        sales_data=list(sales_data),
        forecast_period=forecast_period,
        confidence_level=confidence_level,
        include_historical=include_historical,
        actuals=list(actuals) if actuals is not None else None,
    )
    return run_forecast(request, **kwargs)
