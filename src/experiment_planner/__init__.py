"""Experiment planning module for A/B test sizing and test-plan export."""

from .schema import (
    ExperimentInput,
    ProportionPair,
    CorrectionContext,
    CorrectionMethod,
    SizingResult,
    InvalidInputError,
)
from .validation import validate_input, parse_input
from .metrics import compute_metrics, variation_impact_table
from .plan import PlanSession, WIZARD_STEPS
from .report import render_test_plan, save_test_plan

__all__ = [
    "ExperimentInput",
    "ProportionPair",
    "CorrectionContext",
    "CorrectionMethod",
    "SizingResult",
    "InvalidInputError",
    "validate_input",
    "parse_input",
    "compute_metrics",
    "variation_impact_table",
    "PlanSession",
    "WIZARD_STEPS",
    "render_test_plan",
    "save_test_plan",
]
