"""Prometheus metrics for forecasting runs."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# Request metrics
forecast_requests_total = Counter(
    "forecast_requests_total",
    "Total forecasting requests processed",
    ["forecast_period"],
)

forecast_request_duration_seconds = Histogram(
    "forecast_request_duration_seconds",
    "Forecasting request duration in seconds",
    buckets=[0.001, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 30.0],
)

# Per-product metrics
product_forecasts_total = Counter(
    "product_forecasts_total",
    "Total product forecasts generated",
    ["method"],  # method: trend_seasonal, fallback
)

product_forecast_failures_total = Counter(
    "product_forecast_failures_total",
    "Total product forecasts that failed",
    ["error_type"],
)

# Business metrics
reorder_recommendations_total = Counter(
    "reorder_recommendations_total",
    "Inventory recommendations by stock status",
    ["stock_status"],  # stock_status: critical, low, adequate
)
