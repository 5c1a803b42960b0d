"""Tests for recommendation explanations and rationale hashes."""

from __future__ import annotations

from stockcast.domain.inventory.explain import generate_explanation, generate_hash
from stockcast.domain.inventory.recommend import calculate_inventory_recommendation
from tests.helpers import TODAY, flat_forecast


def _rec(stock=10):
    return calculate_inventory_recommendation(flat_forecast([3] * 30), stock, 0.95, 3, TODAY)


def test_explanation_with_reorder():
    """Reorder advice names quantity and date."""
    rec = _rec(stock=5)

    text = generate_explanation("Widget", 3.0, "stable", 5, rec)

    assert text.startswith("Widget: demand=3.0/day (stable), stock=5")
    assert f"order {rec['recommended_quantity']} by {TODAY.isoformat()}" in text
    assert "[critical]" in text


def test_explanation_without_reorder():
    """No reorder → review date instead."""
    rec = _rec(stock=30)

    text = generate_explanation("7", 3.0, "increasing", 30, rec)

    assert "no order needed" in text
    assert "ROP=13 (safety=4)" in text


def test_hash_deterministic():
    """Same inputs, same hash."""
    rec = _rec()

    h1 = generate_hash(1, 30, 3.0, 10, rec)
    h2 = generate_hash(1, 30, 3.0, 10, rec)

    assert h1 == h2
    assert len(h1) == 64


def test_hash_changes_with_inputs():
    """Any rationale input changes the digest."""
    rec = _rec()
    base = generate_hash(1, 30, 3.0, 10, rec)

    assert generate_hash(2, 30, 3.0, 10, rec) != base
    assert generate_hash(1, 7, 3.0, 10, rec) != base
    assert generate_hash(1, 30, 3.5, 10, rec) != base
    assert generate_hash(1, 30, 3.0, 11, rec) != base
