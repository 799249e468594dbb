"""Pytest configuration - add project root to path, shared sizing inputs."""
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))


@pytest.fixture
def homepage_offer():
    """8.19% baseline, 5 points, 72,314 weekly visitors, A/B at 95% / 90%."""
    from src.experiment_planner.schema import ExperimentInput
    return ExperimentInput(
        baseline_rate_pct=8.19,
        mde_points=5,
        weekly_traffic=72314,
        significance_pct=95,
        power_pct=90,
        variant_count=2,
    )
