"""Pydantic schemas for forecasting requests and responses."""

from __future__ import annotations

import datetime as dt
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stockcast.domain.forecast.types import (
    DailySeriesPoint,
    ForecastDay,
    InventoryRecommendation,
    TrendDirection,
)

ForecastPeriod = Literal["7d", "14d", "30d", "90d"]
ForecastMethod = Literal["trend_seasonal", "fallback"]


# Input schemas
class SaleRecord(BaseModel):
    """One sale of one product, as delivered by the sales history source."""

    model_config = ConfigDict(frozen=True)

    product_id: int | str
    date: dt.date
    quantity: int = Field(..., ge=0)
    product_name: str | None = None
    sku: str | None = None
    current_stock: int = Field(0, ge=0)

    @field_validator("date", mode="before")
    @classmethod
    def _strip_time(cls, v: Any) -> Any:
        """Keep the calendar day only; time of day is irrelevant."""
        if isinstance(v, dt.datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        if isinstance(v, str) and " " in v.strip():
            return v.strip().split(" ", 1)[0]
        return v


class ForecastRequest(BaseModel):
    """Forecasting request for a batch of products."""

    # Records are validated downstream, per product, so a bad one is reported as
    # InvalidRecordError with its batch index instead of rejecting the request
    sales_data: list[Any] = Field(default_factory=list)
    forecast_period: ForecastPeriod | None = None
    confidence_level: float | None = Field(None, gt=0, lt=1)
    include_historical: bool = False
    actuals: list[Any] | None = None
    run_id: str | None = None


# Output schemas
class ProductSummary(BaseModel):
    """Aggregates over one product's forecast."""

    total_predicted_demand: int
    avg_daily_demand: float
    trend: TrendDirection
    trend_slope: float
    seasonal_factors: dict[str, float]
    method: ForecastMethod
    inventory: InventoryRecommendation
    explanation: str
    rationale_hash: str


class ProductForecast(BaseModel):
    """Forecast and inventory advice for one product."""

    product_id: int | str
    product_name: str | None = None
    sku: str | None = None
    current_stock: int
    forecast: list[ForecastDay]
    historical: list[DailySeriesPoint] | None = None
    summary: ProductSummary


class ProductFailure(BaseModel):
    """A product whose forecast could not be produced."""

    product_id: int | str | None
    error_type: str
    message: str


class AccuracyMetrics(BaseModel):
    """Forecast error against realised sales."""

    mape: float | None = Field(None, description="Mean absolute percentage error (fraction)")
    rmse: float
    sample_size: int


class ForecastMetadata(BaseModel):
    """Run-level information."""

    generated_at: dt.datetime
    forecast_period: ForecastPeriod
    horizon_days: int
    model_version: str
    run_id: str
    accuracy_metrics: AccuracyMetrics | None = None


class ForecastResponse(BaseModel):
    """Forecasting result for a batch, including per-product failures."""

    forecasts: list[ProductForecast]
    failures: list[ProductFailure] = Field(default_factory=list)
    metadata: ForecastMetadata
