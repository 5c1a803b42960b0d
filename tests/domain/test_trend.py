"""Tests for linear trend detection."""

from __future__ import annotations

import pytest

from stockcast.domain.forecast.trend import classify_slope, detect_trend
from tests.helpers import series_of


def test_single_point_is_stable():
    """Fewer than 2 points → slope 0, stable."""
    assert detect_trend(series_of([7])) == {"slope": 0.0, "direction": "stable"}


@pytest.mark.parametrize("qty,n", [(0, 2), (5, 3), (12, 20), (1, 90)])
def test_identical_quantities_have_zero_slope(qty, n):
    """A flat series has slope exactly 0."""
    result = detect_trend(series_of([qty] * n))

    assert result["slope"] == 0
    assert result["direction"] == "stable"


def test_increasing_series():
    """1..20 has slope exactly 1."""
    result = detect_trend(series_of(list(range(1, 21))))

    assert result["slope"] == pytest.approx(1.0)
    assert result["direction"] == "increasing"


def test_decreasing_series():
    """20..1 has slope -1."""
    result = detect_trend(series_of(list(range(20, 0, -1))))

    assert result["slope"] == pytest.approx(-1.0)
    assert result["direction"] == "decreasing"


def test_ols_slope_matches_formula():
    """Least-squares slope over day indices 0..n-1."""
    # Σi=6, Σq=14, Σi·q=25, Σi²=14 → (4·25 − 6·14) / (4·14 − 36) = 0.8
    result = detect_trend(series_of([2, 4, 3, 5]))

    assert result["slope"] == pytest.approx(0.8)
    assert result["direction"] == "increasing"


@pytest.mark.parametrize(
    "slope,direction",
    [
        (0.0, "stable"),
        (0.0499, "stable"),
        (-0.0499, "stable"),
        (0.05, "increasing"),
        (-0.05, "decreasing"),
        (1.5, "increasing"),
        (-3.0, "decreasing"),
    ],
)
def test_classify_slope_thresholds(slope, direction):
    """|slope| < 0.05 is stable; otherwise sign decides."""
    assert classify_slope(slope) == direction
