"""
Classification Engine

Two independent classifiers with their own label vocabularies:

    classify_percentile(...)  → PercentileLabel  ("Média …")
    classify_z_score(...)     → ZScoreLabel      ("Médio …")

plus the Z-score helper that feeds the second one.

Usage:
    from neuroscore.core.classification import classify_percentile, compute_z, classify_z_score

    classify_percentile("<5")                        # PercentileLabel.INFERIOR
    classify_z_score(compute_z(115, 100, 15))        # ZScoreLabel.MEDIO_SUPERIOR
"""
from .base import (
    ExactPercentile,
    Percentile,
    PercentileLabel,
    PercentileRange,
    RangePercentile,
    ZScoreLabel,
    parse_percentile,
    parse_percentile_strict,
)
from .percentile import classify_normal_percentile, classify_percentile
from .zscore import classify_z_score, compute_z, format_z, round_z, z_to_percentile

__all__ = [
    "ExactPercentile",
    "Percentile",
    "PercentileLabel",
    "PercentileRange",
    "RangePercentile",
    "ZScoreLabel",
    "classify_normal_percentile",
    "classify_percentile",
    "classify_z_score",
    "compute_z",
    "format_z",
    "parse_percentile",
    "parse_percentile_strict",
    "round_z",
    "z_to_percentile",
]
