"""Tests for z-score lookup, rounding and spread helpers."""

from __future__ import annotations

import math

import pytest

from stockcast.domain.forecast.stats import (
    Z_SCORES,
    forecast_std_dev,
    get_z_score,
    historical_std_dev,
    round_half_up,
    sample_std_dev,
)
from tests.helpers import flat_forecast, series_of


@pytest.mark.parametrize("level,z", sorted(Z_SCORES.items()))
def test_tabulated_levels_exact(level, z):
    """Tabulated levels map to their own z-score."""
    assert get_z_score(level) == z


@pytest.mark.parametrize(
    "level,z",
    [
        (0.93, 1.96),  # nearer 0.95
        (0.91, 1.64),  # nearer 0.90
        (0.999, 2.58),
        (0.01, 0.67),
    ],
)
def test_nearest_level(level, z):
    """Untabulated levels use the closest one."""
    assert get_z_score(level) == z


@pytest.mark.parametrize("x,expected", [(0.5, 1), (1.5, 2), (2.49, 2), (113.4, 113), (0.0, 0)])
def test_round_half_up(x, expected):
    """Halves round up."""
    assert round_half_up(x) == expected


def test_sample_std_dev():
    """n-1 denominator."""
    assert sample_std_dev(list(range(1, 21))) == pytest.approx(math.sqrt(35))
    assert sample_std_dev([2, 4]) == pytest.approx(math.sqrt(2))


def test_sample_std_dev_floor_for_tiny_samples():
    """Fewer than 2 values → 1.0."""
    assert sample_std_dev([]) == 1.0
    assert sample_std_dev([9]) == 1.0


def test_zero_variance_floored():
    """Identical values get the 1.0 floor, not 0."""
    assert sample_std_dev([4, 4, 4]) == 1.0
    assert sample_std_dev([0] * 30) == 1.0


def test_series_and_forecast_wrappers():
    """Wrappers read quantity / predicted_demand."""
    assert historical_std_dev(series_of([2, 4])) == pytest.approx(math.sqrt(2))
    assert forecast_std_dev(flat_forecast([2, 4])) == pytest.approx(math.sqrt(2))
