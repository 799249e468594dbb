"""Experiment sizing statistics module."""

from .ztable import Z_VALUES, SUPPORTED_LEVELS, z_value, critical_z, is_two_sided
from .power import proportion_pair, sample_size_from_z, sample_size_proportion
from .corrections import correction_context, corrected_sample_size, bonferroni_sample_size

__all__ = [
    "Z_VALUES",
    "SUPPORTED_LEVELS",
    "z_value",
    "critical_z",
    "is_two_sided",
    "proportion_pair",
    "sample_size_from_z",
    "sample_size_proportion",
    "correction_context",
    "corrected_sample_size",
    "bonferroni_sample_size",
]
