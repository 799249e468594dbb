"""
Input validation for the sizing engine.

Sizing is guarded at the orchestrator boundary: every violation is collected
and raised as a single InvalidInputError, so no NaN or infinite duration ever
reaches a caller.
"""

import math
from numbers import Integral, Real
from typing import Any, List, Mapping, Tuple

from .schema import (
    DEFAULT_POWER_PCT,
    CorrectionMethod,
    ExperimentInput,
    InvalidInputError,
)
from .stats.ztable import SUPPORTED_LEVELS

MIN_BASELINE_PCT = 0.1
MAX_BASELINE_PCT = 99.0
MIN_MDE_POINTS = 1.0
MAX_MDE_POINTS = 50.0
MIN_WEEKLY_TRAFFIC = 100
MIN_VARIANTS = 2
MAX_VARIANTS = 20


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _is_integer(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def check_input(inp: ExperimentInput) -> List[Tuple[str, str]]:
    """
    Collect validation errors for an experiment input.

    Returns:
        List of (field, message); empty when the input is valid
    """
    errors = []

    baseline_ok = _is_number(inp.baseline_rate_pct)
    if not baseline_ok or not MIN_BASELINE_PCT <= inp.baseline_rate_pct <= MAX_BASELINE_PCT:
        baseline_ok = False
        errors.append((
            "baseline_rate_pct",
            f"must be between {MIN_BASELINE_PCT} and {MAX_BASELINE_PCT}",
        ))

    mde_ok = _is_number(inp.mde_points)
    if not mde_ok or not MIN_MDE_POINTS <= inp.mde_points <= MAX_MDE_POINTS:
        mde_ok = False
        errors.append((
            "mde_points",
            f"must be between {MIN_MDE_POINTS:g} and {MAX_MDE_POINTS:g} percentage points",
        ))

    if baseline_ok and mde_ok and inp.baseline_rate_pct + inp.mde_points > 100:
        errors.append((
            "mde_points",
            "baseline plus effect exceeds 100%",
        ))

    if not _is_integer(inp.weekly_traffic) or inp.weekly_traffic < MIN_WEEKLY_TRAFFIC:
        errors.append(("weekly_traffic", f"must be an integer of at least {MIN_WEEKLY_TRAFFIC}"))

    if inp.significance_pct not in SUPPORTED_LEVELS or isinstance(inp.significance_pct, bool):
        errors.append(("significance_pct", f"must be one of {list(SUPPORTED_LEVELS)}"))

    if inp.power_pct not in SUPPORTED_LEVELS or isinstance(inp.power_pct, bool):
        errors.append(("power_pct", f"must be one of {list(SUPPORTED_LEVELS)}"))

    variants_ok = (
        _is_integer(inp.variant_count)
        and MIN_VARIANTS <= inp.variant_count <= MAX_VARIANTS
    )
    if not variants_ok:
        errors.append((
            "variant_count",
            f"must be an integer between {MIN_VARIANTS} and {MAX_VARIANTS}",
        ))

    try:
        method = CorrectionMethod(inp.correction_method)
    except ValueError:
        errors.append((
            "correction_method",
            f"must be one of {[m.value for m in CorrectionMethod]}",
        ))
    else:
        if method == CorrectionMethod.NONE and variants_ok and inp.variant_count > 2:
            errors.append((
                "correction_method",
                "a correction is required for more than two variants",
            ))

    return errors


def validate_input(inp: ExperimentInput) -> ExperimentInput:
    """Raise InvalidInputError unless the input is inside the supported domain."""
    errors = check_input(inp)
    if errors:
        raise InvalidInputError(errors)
    return inp


def _coerce_number(raw: Any) -> Any:
    if isinstance(raw, str):
        try:
            return float(raw.strip())
        except ValueError:
            return raw
    return raw


def _coerce_int(raw: Any) -> Any:
    raw = _coerce_number(raw)
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    return raw


def parse_input(data: Mapping[str, Any]) -> ExperimentInput:
    """
    Build a validated ExperimentInput from raw form, JSON or query values.

    Numeric strings are coerced; whole-number floats are accepted for integer
    fields. Missing required fields are reported alongside range errors.
    """
    missing = [
        (name, "is required")
        for name in ("baseline_rate_pct", "mde_points", "weekly_traffic", "significance_pct")
        if data.get(name) in (None, "")
    ]
    if missing:
        raise InvalidInputError(missing)

    power = data.get("power_pct")
    inp = ExperimentInput(
        baseline_rate_pct=_coerce_number(data["baseline_rate_pct"]),
        mde_points=_coerce_number(data["mde_points"]),
        weekly_traffic=_coerce_int(data["weekly_traffic"]),
        significance_pct=_coerce_int(data["significance_pct"]),
        power_pct=DEFAULT_POWER_PCT if power in (None, "") else _coerce_int(power),
        variant_count=_coerce_int(data.get("variant_count", 2)),
        correction_method=data.get("correction_method") or CorrectionMethod.BONFERRONI,
    )
    return validate_input(inp)
