#!/usr/bin/env python3
"""
Run sizing demo: reference cases -> variation impact table -> sample plan.

Creates artifacts/plans/<id>/variation_impact.csv, test_plan.md and sizing.json.
"""

import logging
import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

REFERENCE_CASES = [
    # name, baseline %, MDE points, weekly traffic, variants
    ("WeMoney Award", 8.19, 1, 77034, 2),
    ("Homepage Offer", 8.19, 5, 72314, 2),
    ("Homepage Offer, 5 variants", 8.19, 5, 72314, 5),
    ("Smallest effect, 4 variants", 8.19, 1, 72314, 4),
]


def main():
    logging.basicConfig(level=logging.INFO)

    from src.experiment_planner.schema import ExperimentInput, InvalidInputError
    from src.experiment_planner.metrics import compute_metrics, variation_impact_table
    from src.experiment_planner.plan import PlanSession, describe_sizing
    from src.experiment_planner.report import save_test_plan

    plan_id = "demo_homepage_offer"
    artifacts_dir = ROOT / "artifacts" / "plans"

    print("1. Sizing reference cases...")
    for name, baseline, mde, traffic, variants in REFERENCE_CASES:
        inp = ExperimentInput(
            baseline_rate_pct=baseline,
            mde_points=mde,
            weekly_traffic=traffic,
            significance_pct=95,
            power_pct=90,
            variant_count=variants,
        )
        try:
            res = compute_metrics(inp)
        except InvalidInputError as e:
            print(f"   {name}: rejected ({e})")
            continue
        print(
            f"   {name}: {res.sample_size_per_variant:,} per variant, "
            f"{res.statistical_weeks_needed:.2f} statistical weeks, "
            f"{res.recommended_weeks_needed} recommended "
            f"[correction={res.correction_method.value}]"
        )
        if res.advisory:
            print(f"   ! {res.advisory}")

    print("2. Variation impact table...")
    base_inp = ExperimentInput(
        baseline_rate_pct=8.19,
        mde_points=5,
        weekly_traffic=72314,
        significance_pct=95,
        power_pct=90,
    )
    table = variation_impact_table(base_inp, max_variants=6)
    print(table.to_string(index=False))

    out_dir = artifacts_dir / plan_id
    out_dir.mkdir(parents=True, exist_ok=True)
    table.to_csv(out_dir / "variation_impact.csv", index=False)

    print("3. Writing sample test plan...")
    inp = ExperimentInput(
        baseline_rate_pct=8.19,
        mde_points=5,
        weekly_traffic=72314,
        significance_pct=95,
        power_pct=90,
        variant_count=5,
    )
    res = compute_metrics(inp)
    session = (
        PlanSession()
        .answer("problem", "Homepage offer click-through is flat at 8.19%.")
        .answer("solution", "Test four alternative offer banners against the current one.")
        .answer("hypothesis", "I believe a clearer offer will lift sign-ups by 5 points "
                              "BECAUSE visitors do not notice the current banner.")
        .answer("long_term_metric", "Conversion rate")
        .answer("proxy_metric", "Click-through rate")
        .answer("change_impact", "moderate")
        .answer("mda_calculation", describe_sizing(res, inp))
        .answer("timeline", f"Run for {res.recommended_weeks_needed} weeks, then analyse.")
    )
    out_path = save_test_plan(session, plan_id, sizing=res, inp=inp, artifacts_dir=str(artifacts_dir))

    print(f"\n[OK] Demo complete. Artifacts in {out_dir}:")
    for f in sorted(out_dir.iterdir()):
        print(f"   - {f.name}")
    return out_path


if __name__ == "__main__":
    main()
