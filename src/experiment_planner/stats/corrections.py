"""
Multiple-comparison correction for multi-variant tests.

Each non-control variant is one comparison against control. The family-wise
significance is split across comparisons and the per-comparison critical value
is resolved exactly, since corrected levels (e.g. 98.75%) are not tabulated.
It is taken on the same scale (one- or two-sided) as the family level's table
entry, so the correction only reflects the split of alpha.
"""

import logging

from ..schema import (
    DEFAULT_POWER_PCT,
    CorrectionContext,
    CorrectionMethod,
    InvalidInputError,
)
from .power import proportion_pair, sample_size_from_z
from .ztable import critical_z, is_two_sided, z_value

logger = logging.getLogger(__name__)


def correction_context(
    significance_pct: float,
    variant_count: int,
    method: CorrectionMethod = CorrectionMethod.BONFERRONI,
) -> CorrectionContext:
    """
    Per-comparison alpha for a multi-variant test.

    Args:
        significance_pct: Family-wise confidence level in percent
        variant_count: Number of arms including control (must be > 2)
        method: BONFERRONI (alpha / m) or SIDAK (1 - (1 - alpha)^(1/m))

    Returns:
        CorrectionContext
    """
    if variant_count <= 2:
        raise InvalidInputError([
            ("variant_count", "correction applies only to more than two variants"),
        ])

    method = CorrectionMethod(method)
    num_comparisons = variant_count - 1
    alpha = (100 - significance_pct) / 100

    if method == CorrectionMethod.BONFERRONI:
        adjusted_alpha = alpha / num_comparisons
    elif method == CorrectionMethod.SIDAK:
        adjusted_alpha = 1 - (1 - alpha) ** (1 / num_comparisons)
    else:
        raise ValueError(f"Unsupported correction: {method.value}")

    return CorrectionContext(
        num_comparisons=num_comparisons,
        family_alpha=alpha,
        adjusted_alpha=adjusted_alpha,
        method=method,
    )


def corrected_sample_size(
    baseline_rate_pct: float,
    mde_points: float,
    significance_pct: int,
    variant_count: int,
    power_pct: int = DEFAULT_POWER_PCT,
    method: CorrectionMethod = CorrectionMethod.BONFERRONI,
) -> int:
    """
    Sample size per variant with family-wise error correction.

    Returns:
        Required visitors per variant (ceiling)
    """
    ctx = correction_context(significance_pct, variant_count, method)
    pair = proportion_pair(baseline_rate_pct, mde_points)
    z_alpha = critical_z(ctx.adjusted_alpha, two_sided=is_two_sided(significance_pct))

    logger.debug(
        f"{ctx.method.value}: {ctx.num_comparisons} comparisons, "
        f"alpha {ctx.family_alpha:.4f} -> {ctx.adjusted_alpha:.6f} "
        f"({ctx.adjusted_significance_pct:.2f}% confidence)"
    )
    return sample_size_from_z(pair, z_alpha, z_value(power_pct))


def bonferroni_sample_size(
    baseline_rate_pct: float,
    mde_points: float,
    significance_pct: int,
    variant_count: int,
    power_pct: int = DEFAULT_POWER_PCT,
) -> int:
    """Sample size per variant with Bonferroni correction."""
    return corrected_sample_size(
        baseline_rate_pct,
        mde_points,
        significance_pct,
        variant_count,
        power_pct=power_pct,
        method=CorrectionMethod.BONFERRONI,
    )
