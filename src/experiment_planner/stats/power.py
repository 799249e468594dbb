"""
Sample size calculator for two-proportion tests.

Takes the minimum detectable effect in absolute percentage points of the
baseline rate and sizes each arm with the un-pooled normal approximation:

    n = (z_alpha + z_beta)^2 * (p1(1-p1) + p2(1-p2)) / (p1 - p2)^2
"""

import logging

import numpy as np

from ..schema import DEFAULT_POWER_PCT, InvalidInputError, ProportionPair
from .ztable import z_value

logger = logging.getLogger(__name__)


def proportion_pair(baseline_rate_pct: float, mde_points: float) -> ProportionPair:
    """
    Baseline and expected treatment probabilities.

    The absolute MDE is turned into a relative lift on the baseline, then
    applied to it: p2 = p1 * (1 + mde_points / baseline_rate_pct).

    Args:
        baseline_rate_pct: Baseline conversion rate in percent (e.g. 8.19)
        mde_points: Minimum detectable effect in percentage points (e.g. 5)

    Returns:
        ProportionPair
    """
    if not baseline_rate_pct > 0:
        raise InvalidInputError([("baseline_rate_pct", "must be greater than 0")])

    p1 = baseline_rate_pct / 100
    relative_lift_pct = (mde_points / baseline_rate_pct) * 100
    p2 = p1 * (1 + relative_lift_pct / 100)
    return ProportionPair(p1=p1, p2=p2)


def sample_size_from_z(pair: ProportionPair, z_alpha: float, z_beta: float) -> int:
    """Per-arm sample size for explicit critical values, rounded up."""
    effect = pair.p1 - pair.p2
    if effect == 0:
        raise InvalidInputError([("mde_points", "must be non-zero (p1 equals p2)")])

    variance = pair.p1 * (1 - pair.p1) + pair.p2 * (1 - pair.p2)
    n = (z_alpha + z_beta) ** 2 * variance / effect ** 2
    if not np.isfinite(n) or n <= 0:
        raise InvalidInputError([("mde_points", f"yields no valid sample size (p2={pair.p2:.4f})")])

    logger.debug(
        f"p1={pair.p1:.6f} p2={pair.p2:.6f} z_alpha={z_alpha:.4f} "
        f"z_beta={z_beta:.4f} n_raw={n:.2f}"
    )
    return int(np.ceil(n))


def sample_size_proportion(
    baseline_rate_pct: float,
    mde_points: float,
    significance_pct: int = 95,
    power_pct: int = DEFAULT_POWER_PCT,
) -> int:
    """
    Sample size per variant for a two-proportion test.

    Args:
        baseline_rate_pct: Baseline conversion rate in percent
        mde_points: Minimum detectable effect in percentage points
        significance_pct: Confidence level (80, 90, 95 or 99)
        power_pct: Statistical power (80, 90, 95 or 99)

    Returns:
        Required visitors per variant (ceiling)
    """
    pair = proportion_pair(baseline_rate_pct, mde_points)
    return sample_size_from_z(pair, z_value(significance_pct), z_value(power_pct))
