"""
Test plan export.

Renders the wizard answers, and optionally a sizing result, as a Markdown
"AB Test Plan" document with Jinja2, and saves it under artifacts/plans/<plan_id>/.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from jinja2 import Environment, StrictUndefined

from .plan import WIZARD_STEPS, PlanSession
from .schema import ExperimentInput, SizingResult

logger = logging.getLogger(__name__)

DEFAULT_PLANS_DIR = "artifacts/plans"

PLAN_TEMPLATE = """# AB Test Plan
{% for step in steps %}
## {{ step.title }}

{{ answers[step.field] or "_Not provided_" }}
{% endfor %}
{%- if sizing %}
## Sample Size & Duration

| Parameter | Value |
|---|---|
| Baseline conversion rate | {{ "%g"|format(inp.baseline_rate_pct) }}% |
| Minimum detectable effect | {{ "%g"|format(inp.mde_points) }} percentage points ({{ "%.2f"|format(sizing.relative_lift_pct) }}% relative) |
| Expected treatment rate | {{ "%.2f"|format(sizing.expected_rate_pct) }}% |
| Confidence / power | {{ inp.significance_pct }}% / {{ inp.power_pct }}% |
| Variants (incl. control) | {{ inp.variant_count }} |
| Weekly traffic | {{ "{:,}".format(inp.weekly_traffic) }} |
| Sample size per variant | {{ "{:,}".format(sizing.sample_size_per_variant) }} |
| Total sample size | {{ "{:,}".format(sizing.total_sample_size) }} |
| Statistical duration | {{ "%.2f"|format(sizing.statistical_weeks_needed) }} weeks |
| Recommended duration | {{ sizing.recommended_weeks_needed }} weeks |
{%- if sizing.correction_applied %}
| Multiple-comparison correction | {{ sizing.correction_method.value }} ({{ sizing.num_comparisons }} comparisons, alpha {{ "%.4f"|format(sizing.adjusted_alpha) }}) |
{%- endif %}
{% if sizing.advisory %}
> **Warning:** {{ sizing.advisory }}
{% endif %}
{%- endif %}
---

_Generated by AB Test Setup Guide_
"""

_env = Environment(undefined=StrictUndefined, keep_trailing_newline=True)
_template = _env.from_string(PLAN_TEMPLATE)


def render_test_plan(
    session: PlanSession,
    sizing: Optional[SizingResult] = None,
    inp: Optional[ExperimentInput] = None,
) -> str:
    """
    Render the test plan as Markdown.

    Args:
        session: Wizard session holding the step answers
        sizing: Optional sizing result; requires inp
        inp: Input the sizing result was computed from

    Returns:
        Markdown document
    """
    if sizing is not None and inp is None:
        raise ValueError("inp is required when rendering a sizing result")
    return _template.render(
        steps=WIZARD_STEPS,
        answers={s.field: session.get(s.field).strip() for s in WIZARD_STEPS},
        sizing=sizing,
        inp=inp,
    )


def save_test_plan(
    session: PlanSession,
    plan_id: str,
    sizing: Optional[SizingResult] = None,
    inp: Optional[ExperimentInput] = None,
    artifacts_dir: str = DEFAULT_PLANS_DIR,
) -> Path:
    """
    Write test_plan.md (and sizing.json when sized) to artifacts_dir/plan_id.

    Returns:
        Path to test_plan.md
    """
    out_dir = Path(artifacts_dir) / plan_id
    out_dir.mkdir(parents=True, exist_ok=True)

    out_path = out_dir / "test_plan.md"
    out_path.write_text(render_test_plan(session, sizing, inp), encoding="utf-8")

    if sizing is not None:
        with open(out_dir / "sizing.json", "w") as f:
            json.dump({"input": inp.to_dict(), "result": sizing.to_dict()}, f, indent=2)

    logger.info(f"Test plan saved to {out_dir}")
    return out_path
