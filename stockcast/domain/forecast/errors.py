"""Typed errors raised by the forecasting core."""

from __future__ import annotations

from typing import Any


class ForecastError(Exception):
    """Base error for a forecast that could not be produced."""


class InvalidRecordError(ForecastError, ValueError):
    """Sale record is missing a field or holds a value the engine cannot use."""

    def __init__(self, index: int | None, record: Any, reason: str):
        """Initialize error.

        Args:
            index: Position of the record in the submitted sales data (None if unknown)
            record: The offending record as submitted
            reason: Human-readable description of the problem

        """
        self.index = index
        self.record = record
        self.reason = reason
        where = f"record #{index}" if index is not None else "record"
        super().__init__(f"Invalid sale {where}: {reason} ({record!r})")


__all__ = ["ForecastError", "InvalidRecordError"]
