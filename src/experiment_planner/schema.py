"""
Data models for experiment sizing and test planning.

Frozen dataclasses for sizing inputs, derived proportions, multiple-comparison
context and sizing results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

DEFAULT_POWER_PCT = 90


class InvalidInputError(ValueError):
    """Raised when sizing inputs fall outside the supported domain."""

    def __init__(self, errors: List[Tuple[str, str]]):
        self.errors = list(errors)
        detail = "; ".join(f"{name}: {msg}" for name, msg in self.errors)
        super().__init__(f"Invalid experiment input: {detail}")


class CorrectionMethod(str, Enum):
    """Family-wise error correction applied to multi-variant tests."""
    NONE = "none"
    BONFERRONI = "bonferroni"
    SIDAK = "sidak"


@dataclass(frozen=True)
class ExperimentInput:
    """User-supplied parameters for one sizing calculation."""
    baseline_rate_pct: float
    mde_points: float  # absolute percentage points, not relative lift
    weekly_traffic: int
    significance_pct: int = 95
    power_pct: int = DEFAULT_POWER_PCT
    variant_count: int = 2  # includes control
    correction_method: CorrectionMethod = CorrectionMethod.BONFERRONI

    def to_dict(self) -> Dict[str, Any]:
        return {
            "baseline_rate_pct": self.baseline_rate_pct,
            "mde_points": self.mde_points,
            "weekly_traffic": self.weekly_traffic,
            "significance_pct": self.significance_pct,
            "power_pct": self.power_pct,
            "variant_count": self.variant_count,
            "correction_method": CorrectionMethod(self.correction_method).value,
        }


@dataclass(frozen=True)
class ProportionPair:
    """Baseline and expected treatment probabilities."""
    p1: float
    p2: float

    @property
    def effect(self) -> float:
        return self.p2 - self.p1

    @property
    def relative_lift_pct(self) -> float:
        return (self.p2 / self.p1 - 1) * 100

    @property
    def expected_rate_pct(self) -> float:
        return self.p2 * 100


@dataclass(frozen=True)
class CorrectionContext:
    """Per-comparison significance derived from a family-wise level."""
    num_comparisons: int
    family_alpha: float
    adjusted_alpha: float
    method: CorrectionMethod = CorrectionMethod.BONFERRONI

    @property
    def adjusted_significance_pct(self) -> float:
        return (1 - self.adjusted_alpha) * 100


@dataclass(frozen=True)
class SizingResult:
    """Complete sizing result for one experiment input."""
    sample_size_per_variant: int
    statistical_weeks_needed: float
    recommended_weeks_needed: int
    correction_applied: bool
    num_comparisons: int
    correction_method: CorrectionMethod = CorrectionMethod.NONE

    # Supporting figures
    total_sample_size: int = 0
    visitors_per_variant: float = 0.0
    adjusted_alpha: Optional[float] = None
    adjusted_significance_pct: Optional[float] = None
    expected_rate_pct: Optional[float] = None
    relative_lift_pct: Optional[float] = None

    # Advisory
    exceeds_practical_duration: bool = False
    advisory: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "sample_size_per_variant": self.sample_size_per_variant,
            "total_sample_size": self.total_sample_size,
            "visitors_per_variant": self.visitors_per_variant,
            "statistical_weeks_needed": self.statistical_weeks_needed,
            "recommended_weeks_needed": self.recommended_weeks_needed,
            "correction_applied": self.correction_applied,
            "num_comparisons": self.num_comparisons,
            "correction_method": CorrectionMethod(self.correction_method).value,
            "adjusted_alpha": self.adjusted_alpha,
            "adjusted_significance_pct": self.adjusted_significance_pct,
            "expected_rate_pct": self.expected_rate_pct,
            "relative_lift_pct": self.relative_lift_pct,
            "exceeds_practical_duration": self.exceeds_practical_duration,
            "advisory": self.advisory,
        }


@dataclass(frozen=True)
class WizardStep:
    """One step of the test-planning wizard."""
    number: int
    field: str
    title: str
    prompt: str = ""
    help_text: str = ""
    options: Tuple[str, ...] = field(default_factory=tuple)
