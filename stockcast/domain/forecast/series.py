"""Daily sales series construction from raw sale records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from stockcast.domain.forecast.errors import InvalidRecordError
from stockcast.domain.forecast.types import DailySeriesPoint
from stockcast.schemas import SaleRecord


def parse_sale_record(raw: SaleRecord | Mapping[str, Any], index: int | None = None) -> SaleRecord:
    """Validate one raw record.

    Args:
        raw: Record as a mapping or an already-validated SaleRecord
        index: Position in the submitted batch, reported on failure

    Returns:
        Validated SaleRecord

    Raises:
        InvalidRecordError: If a field is missing or unusable.

    """
    if isinstance(raw, SaleRecord):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidRecordError(index, raw, "record must be a mapping")

    try:
        return SaleRecord.model_validate(dict(raw))
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "record"
        raise InvalidRecordError(index, raw, f"{field}: {first['msg']}") from e


def parse_sale_records(raw_records: Iterable[SaleRecord | Mapping[str, Any]]) -> list[SaleRecord]:
    """Validate records in order, failing fast on the first malformed one."""
    return [parse_sale_record(raw, i) for i, raw in enumerate(raw_records)]


def product_key(raw: SaleRecord | Mapping[str, Any], index: int | None = None) -> int | str:
    """Extract the product id a raw record belongs to.

    Raises:
        InvalidRecordError: If the record cannot be attributed to a product.

    """
    if isinstance(raw, SaleRecord):
        return raw.product_id
    if not isinstance(raw, Mapping):
        raise InvalidRecordError(index, raw, "record must be a mapping")

    pid = raw.get("product_id")
    if pid is None or pid == "" or isinstance(pid, bool) or not isinstance(pid, (int, str)):
        raise InvalidRecordError(index, raw, "product_id is missing")
    return pid


def group_by_product(
    raw_records: Iterable[SaleRecord | Mapping[str, Any]],
) -> dict[int | str, list[tuple[int, SaleRecord | Mapping[str, Any]]]]:
    """Group records by product, keeping first-seen product order.

    Each entry keeps the record's position in the batch for error reporting.
    """
    groups: dict[int | str, list[tuple[int, SaleRecord | Mapping[str, Any]]]] = {}
    for i, raw in enumerate(raw_records):
        groups.setdefault(product_key(raw, i), []).append((i, raw))
    return groups


def build_daily_series(records: Iterable[SaleRecord]) -> list[DailySeriesPoint]:
    """Sum quantities per calendar day, ascending by date.

    Examples:
        >>> build_daily_series([])
        []

    """
    by_day: dict = {}
    for rec in records:
        by_day[rec.date] = by_day.get(rec.date, 0) + rec.quantity

    return [{"date": d, "quantity": by_day[d]} for d in sorted(by_day)]
