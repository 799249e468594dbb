"""
Experiment metrics: sample size, duration and correction summary.

Input: ExperimentInput (baseline, MDE in points, weekly traffic, confidence,
power, variant count).
Output: SizingResult with per-variant sample size, statistical and recommended
weeks, and the multiple-comparison correction applied.
"""

import logging
import math
from dataclasses import replace
from typing import Optional

import numpy as np
import pandas as pd

from .schema import CorrectionMethod, ExperimentInput, SizingResult
from .stats import (
    correction_context,
    corrected_sample_size,
    proportion_pair,
    sample_size_proportion,
)
from .validation import validate_input

logger = logging.getLogger(__name__)

MIN_RECOMMENDED_WEEKS = 2
PRACTICAL_MAX_WEEKS = 12


def weeks_needed(sample_size: int, weekly_traffic: int, variant_count: int) -> float:
    """
    Statistical weeks needed to fill every variant.

    Traffic is split evenly across variants; the result is not rounded and may
    be below one week.
    """
    visitors_per_variant = weekly_traffic / variant_count
    return sample_size / visitors_per_variant


def recommended_weeks(statistical_weeks: float) -> int:
    """Whole weeks to run, never fewer than two to cover weekly cycles."""
    return max(MIN_RECOMMENDED_WEEKS, int(math.ceil(statistical_weeks)))


def insufficient_traffic_advisory(weeks: int) -> str:
    return (
        f"Insufficient traffic for this effect size: the test would need {weeks} weeks "
        f"(more than {PRACTICAL_MAX_WEEKS}). Consider a larger minimum detectable effect, "
        "fewer variants, or a higher-traffic page."
    )


def compute_metrics(inp: ExperimentInput) -> SizingResult:
    """
    Size an experiment.

    Args:
        inp: Validated or raw ExperimentInput; invalid input raises
            InvalidInputError before any arithmetic runs

    Returns:
        SizingResult
    """
    validate_input(inp)
    method = CorrectionMethod(inp.correction_method)
    pair = proportion_pair(inp.baseline_rate_pct, inp.mde_points)

    adjusted_alpha = None
    adjusted_significance = None
    if inp.variant_count > 2:
        ctx = correction_context(inp.significance_pct, inp.variant_count, method)
        sample_size = corrected_sample_size(
            inp.baseline_rate_pct,
            inp.mde_points,
            inp.significance_pct,
            inp.variant_count,
            power_pct=inp.power_pct,
            method=method,
        )
        adjusted_alpha = ctx.adjusted_alpha
        adjusted_significance = ctx.adjusted_significance_pct
        correction_applied = True
    else:
        sample_size = sample_size_proportion(
            inp.baseline_rate_pct,
            inp.mde_points,
            inp.significance_pct,
            inp.power_pct,
        )
        method = CorrectionMethod.NONE
        correction_applied = False

    visitors_per_variant = inp.weekly_traffic / inp.variant_count
    statistical_weeks = weeks_needed(sample_size, inp.weekly_traffic, inp.variant_count)
    weeks = recommended_weeks(statistical_weeks)

    exceeds = weeks > PRACTICAL_MAX_WEEKS
    advisory = ""
    if exceeds:
        advisory = insufficient_traffic_advisory(weeks)
        logger.warning(advisory)

    result = SizingResult(
        sample_size_per_variant=sample_size,
        statistical_weeks_needed=statistical_weeks,
        recommended_weeks_needed=weeks,
        correction_applied=correction_applied,
        num_comparisons=inp.variant_count - 1,
        correction_method=method,
        total_sample_size=sample_size * inp.variant_count,
        visitors_per_variant=visitors_per_variant,
        adjusted_alpha=adjusted_alpha,
        adjusted_significance_pct=adjusted_significance,
        expected_rate_pct=pair.expected_rate_pct,
        relative_lift_pct=pair.relative_lift_pct,
        exceeds_practical_duration=exceeds,
        advisory=advisory,
    )
    logger.info(
        f"Sized {inp.variant_count}-variant test: {sample_size} per variant, "
        f"{statistical_weeks:.2f} statistical weeks, {weeks} recommended "
        f"(correction={method.value})"
    )
    return result


def variation_impact_table(
    inp: ExperimentInput,
    max_variants: int = 6,
) -> pd.DataFrame:
    """
    Sample size and duration across variant counts.

    One row per variant count from 2 to max_variants, holding every other
    input fixed. The two-variant row is the uncorrected baseline that the
    increase column is measured against.

    Returns:
        DataFrame with columns: variants, num_comparisons, adjusted_alpha,
        confidence_pct, sample_size, increase_pct, statistical_weeks,
        recommended_weeks, exceeds_practical_duration
    """
    rows = []
    baseline_n: Optional[int] = None
    for variants in range(2, max(2, max_variants) + 1):
        res = compute_metrics(replace(inp, variant_count=variants))
        if baseline_n is None:
            baseline_n = res.sample_size_per_variant
        alpha = res.adjusted_alpha
        if alpha is None:
            alpha = (100 - inp.significance_pct) / 100
        rows.append({
            "variants": variants,
            "num_comparisons": res.num_comparisons,
            "adjusted_alpha": alpha,
            "confidence_pct": (1 - alpha) * 100,
            "sample_size": res.sample_size_per_variant,
            "increase_pct": (res.sample_size_per_variant / baseline_n - 1) * 100,
            "statistical_weeks": res.statistical_weeks_needed,
            "recommended_weeks": res.recommended_weeks_needed,
            "exceeds_practical_duration": res.exceeds_practical_duration,
        })

    df = pd.DataFrame(rows)
    df["increase_pct"] = np.round(df["increase_pct"], 1)
    return df
