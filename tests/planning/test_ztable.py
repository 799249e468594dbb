"""Tests for z-value lookup."""
import pytest
from src.experiment_planner.stats.ztable import (
    Z_VALUES,
    SUPPORTED_LEVELS,
    z_value,
    critical_z,
    is_two_sided,
)


def test_z_value_table():
    """Tabulated levels return their fixed values."""
    assert z_value(80) == 0.84
    assert z_value(90) == 1.645
    assert z_value(95) == 1.96
    assert z_value(99) == 2.576


def test_z_value_unknown_falls_back_to_95():
    """Unsupported levels resolve to 1.96 rather than failing."""
    assert z_value(85) == 1.96
    assert z_value(98.75) == 1.96
    assert z_value(None) == 1.96


def test_supported_levels_closed():
    """Lookup table is read-only."""
    assert SUPPORTED_LEVELS == (80, 90, 95, 99)
    with pytest.raises(TypeError):
        Z_VALUES[97] = 2.17


def test_critical_z_matches_table():
    """Exact two-sided values agree with the table for confidence levels."""
    assert critical_z(0.05) == pytest.approx(1.96, abs=0.01)
    assert critical_z(0.01) == pytest.approx(2.576, abs=0.01)
    assert critical_z(0.10) == pytest.approx(1.645, abs=0.01)


def test_critical_z_corrected_level():
    """alpha 0.0125 (Bonferroni, 4 comparisons) is stricter than 95%."""
    z = critical_z(0.0125)
    assert z == pytest.approx(2.4977, abs=1e-3)
    assert z > z_value(95)


def test_critical_z_rejects_out_of_range():
    with pytest.raises(ValueError):
        critical_z(0)
    with pytest.raises(ValueError):
        critical_z(1.2)


def test_critical_z_one_sided_matches_80_entry():
    """The 80% entry is one-sided; the one-sided value at alpha 0.20 reproduces it."""
    assert critical_z(0.20, two_sided=False) == pytest.approx(0.84, abs=0.01)
    assert critical_z(0.20) == pytest.approx(1.2816, abs=1e-3)
    assert not is_two_sided(80)
    assert all(is_two_sided(level) for level in (90, 95, 99))
