"""
Critical values for confidence and power levels.

The sizing formulas work from a closed table of z-values keyed by the levels
the planner offers. Levels outside the table resolve to the 95% value; this is
an approximation, not a continuous inverse-CDF. Corrected per-comparison levels
never land in the table, so they are resolved exactly with `critical_z`.
"""

import logging
from types import MappingProxyType

from scipy import stats

logger = logging.getLogger(__name__)

Z_VALUES = MappingProxyType({
    80: 0.84,
    90: 1.645,
    95: 1.96,
    99: 2.576,
})
SUPPORTED_LEVELS = tuple(sorted(Z_VALUES))
DEFAULT_LEVEL = 95
# 0.84 is the one-sided 80% value; the other entries are two-sided.
ONE_SIDED_LEVELS = frozenset({80})
DEFAULT_Z = Z_VALUES[DEFAULT_LEVEL]


def z_value(level_pct) -> float:
    """
    Look up the critical value for a confidence or power percentage.

    Args:
        level_pct: One of 80, 90, 95, 99

    Returns:
        Tabulated z-value, or 1.96 for any level not in the table
    """
    try:
        return Z_VALUES[level_pct]
    except (KeyError, TypeError):
        logger.debug(f"No tabulated z-value for level {level_pct!r}; using {DEFAULT_Z}")
        return DEFAULT_Z


def critical_z(alpha: float, two_sided: bool = True) -> float:
    """
    Exact critical value for a significance threshold.

    Args:
        alpha: Per-comparison Type I error rate (0 < alpha < 1)
        two_sided: Split alpha across both tails

    Returns:
        z such that P(|Z| > z) = alpha, or P(Z > z) = alpha when one-sided
    """
    if not 0 < alpha < 1:
        raise ValueError(f"alpha must be in (0, 1), got {alpha}")
    tail = alpha / 2 if two_sided else alpha
    return float(stats.norm.ppf(1 - tail))


def is_two_sided(level_pct) -> bool:
    """Whether the tabulated value for a level is a two-sided critical value."""
    return level_pct not in ONE_SIDED_LEVELS
