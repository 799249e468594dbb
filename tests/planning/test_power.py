"""Tests for two-proportion sample size."""
import math

import pytest
from src.experiment_planner.schema import InvalidInputError
from src.experiment_planner.stats.power import (
    proportion_pair,
    sample_size_from_z,
    sample_size_proportion,
)


def test_proportion_pair_absolute_points():
    """5 points on an 8.19% baseline -> 13.19% expected."""
    pair = proportion_pair(8.19, 5)
    assert pair.p1 == pytest.approx(0.0819)
    assert pair.p2 == pytest.approx(0.1319)
    assert pair.relative_lift_pct == pytest.approx(61.05, abs=0.01)
    assert pair.expected_rate_pct == pytest.approx(13.19)


def test_sample_size_known_case():
    """Homepage offer: 8.19% baseline, 5 points, 95% / 90%."""
    assert sample_size_proportion(8.19, 5, 95, 90) == 987


def test_sample_size_matches_formula():
    """Un-pooled normal approximation, rounded up."""
    p1, p2 = 0.0819, 0.0919
    expected = math.ceil((1.96 + 0.84) ** 2 * (p1 * (1 - p1) + p2 * (1 - p2)) / (p1 - p2) ** 2)
    assert sample_size_proportion(8.19, 1, 95, 80) == expected


def test_default_power_is_90():
    assert sample_size_proportion(8.19, 5, 95) == sample_size_proportion(8.19, 5, 95, 90)


def test_sample_size_smaller_effect_needs_more():
    """Shrinking the MDE never shrinks the sample."""
    sizes = [sample_size_proportion(10, mde, 95, 80) for mde in (20, 10, 5, 2, 1)]
    assert all(n > 0 for n in sizes)
    assert sizes == sorted(sizes)


def test_sample_size_monotone_in_confidence_and_power():
    """Higher confidence or power never shrinks the sample."""
    levels = (80, 90, 95, 99)
    by_sig = [sample_size_proportion(8.19, 2, s, 80) for s in levels]
    by_power = [sample_size_proportion(8.19, 2, 95, p) for p in levels]
    assert by_sig == sorted(by_sig)
    assert by_power == sorted(by_power)


def test_sample_size_upper_mde_bound():
    """5% baseline with 50 points stays finite and small."""
    pair = proportion_pair(5.0, 50)
    assert pair.p2 == pytest.approx(0.55)
    n = sample_size_proportion(5.0, 50, 95, 90)
    assert isinstance(n, int)
    assert 0 < n < 100


def test_zero_baseline_rejected():
    with pytest.raises(InvalidInputError):
        sample_size_proportion(0, 5, 95, 90)


def test_zero_mde_rejected():
    """p1 == p2 would divide by zero."""
    with pytest.raises(InvalidInputError):
        sample_size_proportion(8.19, 0, 95, 90)


def test_sample_size_from_z():
    pair = proportion_pair(10, 5)
    assert sample_size_from_z(pair, 1.96, 0.84) == sample_size_proportion(10, 5, 95, 80)
