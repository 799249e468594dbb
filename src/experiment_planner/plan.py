"""
Test-plan wizard state.

Eight ordered steps take a user from a problem statement to a timeline. The
session is an immutable value: every change returns a new PlanSession, so the
surrounding app decides where (and whether) to persist it.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional
from urllib.parse import parse_qsl, urlencode

from .schema import ExperimentInput, SizingResult, WizardStep

logger = logging.getLogger(__name__)


class ChangeImpact(str, Enum):
    """Scope of the proposed change."""
    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"


WIZARD_STEPS = (
    WizardStep(
        number=1,
        field="problem",
        title="Problem/Opportunity Identification",
        prompt="What problem or opportunity does this test address?",
        help_text=(
            "Define the problem with the metrics or behaviour you observed, the data "
            "source that surfaced it and its impact on business goals. Example: "
            "analytics show 70% cart abandonment at checkout, highest at the payment step."
        ),
    ),
    WizardStep(
        number=2,
        field="solution",
        title="Solution Proposal",
        prompt="What change will you make?",
        help_text=(
            "Be specific about the change and focus on one primary change per test. "
            "Example: add security badges and payment icons above the checkout form."
        ),
    ),
    WizardStep(
        number=3,
        field="hypothesis",
        title="Hypothesis Formation",
        prompt="I believe [solution] will [outcome] BECAUSE [reasoning].",
        help_text=(
            "State the belief, a specific measurable outcome and the reasoning. Example: "
            "I believe adding trust badges will increase checkout completion by 15% "
            "BECAUSE users will feel more confident about payment security."
        ),
    ),
    WizardStep(
        number=4,
        field="long_term_metric",
        title="Long-term Metric Selection",
        prompt="Which business metric should improve?",
        help_text=(
            "Pick a metric that matters to the business, can be measured accurately and "
            "has enough volume for significance: conversion rate, revenue per visitor, "
            "retention rate, subscription signups."
        ),
        options=(
            "Conversion rate",
            "Revenue per visitor",
            "Customer lifetime value",
            "Retention rate",
            "Subscription signups",
        ),
    ),
    WizardStep(
        number=5,
        field="proxy_metric",
        title="Proxy Metric Identification",
        prompt="Which faster-moving metric tracks it?",
        help_text=(
            "A proxy metric gives earlier feedback and correlates with the long-term "
            "metric. For conversion rate: add-to-cart rate, time on checkout page or "
            "form completion rate."
        ),
        options=(
            "Add-to-cart rate",
            "Click-through rate",
            "Form completion rate",
            "Time on page",
            "Bounce rate",
        ),
    ),
    WizardStep(
        number=6,
        field="change_impact",
        title="Change Impact Assessment",
        prompt="How large is the change?",
        help_text=(
            "Minor: copy, colour or small UI tweaks. Moderate: layout changes or new "
            "content sections. Major: redesigns or new features. Larger changes tend to "
            "have bigger effects but may need longer tests."
        ),
        options=tuple(c.value for c in ChangeImpact),
    ),
    WizardStep(
        number=7,
        field="mda_calculation",
        title="MDA Calculation",
        prompt="How many visitors does each variant need?",
        help_text=(
            "The sample size needed to detect a meaningful difference depends on the "
            "current conversion rate, the minimum effect worth detecting, the confidence "
            "level (typically 95%) and statistical power."
        ),
    ),
    WizardStep(
        number=8,
        field="timeline",
        title="Timeline & Plan Setting",
        prompt="How long will the test run and how will you decide?",
        help_text=(
            "Record minimum and maximum duration, success and failure criteria, and the "
            "post-test analysis plan. Run for at least one full business cycle."
        ),
    ),
)
MAX_STEP = len(WIZARD_STEPS)
FIELDS = tuple(s.field for s in WIZARD_STEPS)


def get_step(number: int) -> WizardStep:
    if not 1 <= number <= MAX_STEP:
        raise ValueError(f"Step must be between 1 and {MAX_STEP}, got {number}")
    return WIZARD_STEPS[number - 1]


@dataclass(frozen=True)
class PlanSession:
    """Wizard position and answers."""
    current_step: int = 1
    answers: Dict[str, str] = field(default_factory=dict)
    completed: bool = False

    def get(self, field_name: str) -> str:
        return self.answers.get(field_name, "")

    def answer(self, field_name: str, value: str) -> "PlanSession":
        """Return a session with one answer replaced."""
        if field_name not in FIELDS:
            raise ValueError(f"Unknown plan field: {field_name}")
        answers = dict(self.answers)
        answers[field_name] = "" if value is None else str(value)
        return replace(self, answers=answers)

    def is_step_valid(self, step: Optional[int] = None) -> bool:
        """A step is valid once its answer has non-whitespace content."""
        wizard_step = get_step(self.current_step if step is None else step)
        return bool(self.get(wizard_step.field).strip())

    def advance(self) -> "PlanSession":
        """
        Move past the current step.

        Raises:
            ValueError: if the current step has no answer
        """
        if not self.is_step_valid():
            raise ValueError(f"Step {self.current_step} needs an answer before continuing")
        if self.current_step == MAX_STEP:
            return replace(self, completed=True)
        return replace(self, current_step=self.current_step + 1)

    def reset(self) -> "PlanSession":
        return PlanSession()

    def to_dict(self) -> Dict:
        return {
            "current_step": self.current_step,
            "answers": {f: self.get(f) for f in FIELDS},
            "completed": self.completed,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict) -> "PlanSession":
        answers = data.get("answers")
        if not isinstance(answers, dict):
            answers = {}
        step = data.get("current_step", 1)
        if not isinstance(step, int) or not 1 <= step <= MAX_STEP:
            step = 1
        return cls(
            current_step=step,
            answers={f: str(answers[f]) for f in FIELDS if answers.get(f)},
            completed=bool(data.get("completed", False)),
        )

    @classmethod
    def from_json(cls, payload: Optional[str]) -> "PlanSession":
        """Restore a saved session; unreadable payloads give a fresh one."""
        if not payload:
            return cls()
        try:
            data = json.loads(payload)
            if not isinstance(data, dict):
                raise ValueError("saved session is not an object")
            return cls.from_dict(data)
        except ValueError as e:
            logger.warning(f"Could not restore plan session: {e}")
            return cls()

    def to_query(self) -> str:
        """URL query string for sharing the plan."""
        params = [("step", str(self.current_step))]
        params.extend((f, self.get(f)) for f in FIELDS if self.get(f))
        if self.completed:
            params.append(("completed", "1"))
        return urlencode(params)

    @classmethod
    def from_query(cls, query: str) -> "PlanSession":
        params = dict(parse_qsl(query.lstrip("?")))
        try:
            step = int(params.get("step", 1))
        except ValueError:
            step = 1
        return cls.from_dict({
            "current_step": step,
            "answers": {f: params[f] for f in FIELDS if f in params},
            "completed": params.get("completed") == "1",
        })


def describe_sizing(result: SizingResult, inp: ExperimentInput) -> str:
    """Plain-text sizing summary for the MDA calculation step."""
    text = (
        f"Baseline {inp.baseline_rate_pct:g}% with a minimum detectable effect of "
        f"{inp.mde_points:g} percentage points "
        f"({result.expected_rate_pct:.2f}% expected, +{result.relative_lift_pct:.1f}% relative). "
        f"At {inp.significance_pct}% confidence and {inp.power_pct}% power each of "
        f"{inp.variant_count} variants needs {result.sample_size_per_variant:,} visitors "
        f"({result.total_sample_size:,} total)."
    )
    if result.correction_applied:
        text += (
            f" {result.correction_method.value.capitalize()} correction for "
            f"{result.num_comparisons} comparisons lowers alpha to "
            f"{result.adjusted_alpha:.4f} ({result.adjusted_significance_pct:.2f}% confidence)."
        )
    text += (
        f" With {inp.weekly_traffic:,} weekly visitors that is "
        f"{result.statistical_weeks_needed:.1f} statistical weeks; run for "
        f"{result.recommended_weeks_needed} weeks."
    )
    if result.advisory:
        text += f" {result.advisory}"
    return text
