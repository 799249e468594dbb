"""Tests for sizing input validation."""
import math

import pytest
from src.experiment_planner.schema import CorrectionMethod, ExperimentInput, InvalidInputError
from src.experiment_planner.validation import check_input, parse_input, validate_input


def _input(**overrides):
    params = dict(
        baseline_rate_pct=8.19,
        mde_points=5,
        weekly_traffic=72314,
        significance_pct=95,
        power_pct=90,
        variant_count=2,
    )
    params.update(overrides)
    return ExperimentInput(**params)


def test_valid_input_passes():
    inp = _input()
    assert check_input(inp) == []
    assert validate_input(inp) is inp


@pytest.mark.parametrize("field,value", [
    ("baseline_rate_pct", 0),
    ("baseline_rate_pct", 0.05),
    ("baseline_rate_pct", 99.5),
    ("baseline_rate_pct", -3),
    ("baseline_rate_pct", math.nan),
    ("mde_points", 0),
    ("mde_points", 0.5),
    ("mde_points", 51),
    ("mde_points", math.inf),
    ("weekly_traffic", 99),
    ("weekly_traffic", 1000.5),
    ("significance_pct", 85),
    ("significance_pct", True),
    ("power_pct", 70),
    ("variant_count", 1),
    ("variant_count", 2.5),
    ("variant_count", 21),
    ("variant_count", 10 ** 16),
    ("variant_count", 10 ** 400),
    ("correction_method", "holm"),
])
def test_out_of_range_rejected(field, value):
    with pytest.raises(InvalidInputError) as exc:
        validate_input(_input(**{field: value}))
    assert field in [name for name, _ in exc.value.errors]


def test_bounds_inclusive():
    assert check_input(_input(baseline_rate_pct=0.1, mde_points=1, weekly_traffic=100)) == []
    assert check_input(_input(baseline_rate_pct=50, mde_points=50)) == []


def test_variant_count_upper_bound():
    assert check_input(_input(variant_count=20)) == []
    errors = check_input(_input(variant_count=10 ** 400))
    assert [name for name, _ in errors] == ["variant_count"]


def test_no_correction_requires_two_variants():
    assert check_input(_input(correction_method=CorrectionMethod.NONE)) == []
    errors = check_input(_input(variant_count=3, correction_method="none"))
    assert [name for name, _ in errors] == ["correction_method"]


def test_effect_beyond_100_percent_rejected():
    errors = check_input(_input(baseline_rate_pct=60, mde_points=50))
    assert [name for name, _ in errors] == ["mde_points"]


def test_all_errors_collected():
    with pytest.raises(InvalidInputError) as exc:
        validate_input(_input(baseline_rate_pct=0, weekly_traffic=5, variant_count=1))
    fields = {name for name, _ in exc.value.errors}
    assert fields == {"baseline_rate_pct", "weekly_traffic", "variant_count"}
    assert isinstance(exc.value, ValueError)


def test_parse_input_coerces_strings():
    """Form and query values arrive as strings."""
    inp = parse_input({
        "baseline_rate_pct": "8.19",
        "mde_points": "5",
        "weekly_traffic": "72314",
        "significance_pct": "95",
        "variant_count": "3",
        "correction_method": "sidak",
    })
    assert inp.baseline_rate_pct == 8.19
    assert inp.weekly_traffic == 72314
    assert inp.significance_pct == 95
    assert inp.power_pct == 90
    assert inp.variant_count == 3
    assert CorrectionMethod(inp.correction_method) == CorrectionMethod.SIDAK


def test_parse_input_missing_fields():
    with pytest.raises(InvalidInputError) as exc:
        parse_input({"baseline_rate_pct": 8.19})
    fields = {name for name, _ in exc.value.errors}
    assert fields == {"mde_points", "weekly_traffic", "significance_pct"}


def test_parse_input_rejects_garbage():
    with pytest.raises(InvalidInputError):
        parse_input({
            "baseline_rate_pct": "lots",
            "mde_points": 5,
            "weekly_traffic": 1000,
            "significance_pct": 95,
        })
