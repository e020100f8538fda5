"""
Percentile Classifier

Maps a percentile (exact number or manual range) onto the five-band
percentile vocabulary:

    <5  or 5              → Inferior
    5-25 or 25            → Média Inferior
    25-50, 50 or 50-75    → Média
    75  or 75-95          → Média Superior
    95  or >95            → Superior

The manual's point values are matched before the numeric bands, so an
exact 75 is Média Superior even though the numeric band (25, 75] would
say Média. Any other number falls into its band. Input that is neither a
number nor a known token is classified as Média. Infinite values sit at
the ends of the scale: +inf is Superior, -inf is Inferior.
"""
from __future__ import annotations

import math
from numbers import Real
from typing import Any, Dict, Optional

from neuroscore.utils import get_logger, is_finite_number
from .base import (
    ExactPercentile,
    PercentileLabel,
    PercentileRange,
    RangePercentile,
    parse_percentile,
)

logger = get_logger(__name__)

# ── Bands ────────────────────────────────────────────────────────────────────
INFERIOR_MAX       = 5     # ≤ 5
MEDIA_INFERIOR_MAX = 25    # (5, 25]
MEDIA_MAX          = 75    # (25, 75]
SUPERIOR_MIN       = 95    # ≥ 95; (75, 95) is Média Superior

FALLBACK_LABEL = PercentileLabel.MEDIA

_RANGE_LABELS: Dict[PercentileRange, PercentileLabel] = {
    PercentileRange.BELOW_5:  PercentileLabel.INFERIOR,
    PercentileRange.P5_25:    PercentileLabel.MEDIA_INFERIOR,
    PercentileRange.P25_50:   PercentileLabel.MEDIA,
    PercentileRange.P50_75:   PercentileLabel.MEDIA,
    PercentileRange.P75_95:   PercentileLabel.MEDIA_SUPERIOR,
    PercentileRange.ABOVE_95: PercentileLabel.SUPERIOR,
}

_POINT_LABELS: Dict[int, PercentileLabel] = {
    5:  PercentileLabel.INFERIOR,
    25: PercentileLabel.MEDIA_INFERIOR,
    50: PercentileLabel.MEDIA,
    75: PercentileLabel.MEDIA_SUPERIOR,
    95: PercentileLabel.SUPERIOR,
}


def _classify_number(value) -> PercentileLabel:
    point = _POINT_LABELS.get(value)
    if point is not None:
        return point
    if value <= INFERIOR_MAX:
        return PercentileLabel.INFERIOR
    if value <= MEDIA_INFERIOR_MAX:
        return PercentileLabel.MEDIA_INFERIOR
    if value <= MEDIA_MAX:
        return PercentileLabel.MEDIA
    if value < SUPERIOR_MIN:
        return PercentileLabel.MEDIA_SUPERIOR
    return PercentileLabel.SUPERIOR


def _unbounded_number(value: Any) -> Optional[float]:
    """+inf or -inf for infinite (or float-overflowing) numbers, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip().replace(",", "."))
        except ValueError:
            return None
    if not isinstance(value, Real) or is_finite_number(value) or value != value:
        return None
    return math.inf if value > 0 else -math.inf


def classify_percentile(value: Any) -> PercentileLabel:
    """
    Classify a percentile.

    Args:
        value: ExactPercentile, RangePercentile, a PercentileRange, a number
               or a string token.

    Returns:
        One of the five PercentileLabel members; never raises.
    """
    percentile = parse_percentile(value)
    if isinstance(percentile, RangePercentile):
        return _RANGE_LABELS[percentile.token]
    if isinstance(percentile, ExactPercentile):
        return _classify_number(percentile.value)

    unbounded = _unbounded_number(value)
    if unbounded is not None:
        return PercentileLabel.SUPERIOR if unbounded > 0 else PercentileLabel.INFERIOR

    logger.warning(f"Percentile classifier: unreadable percentile {value!r}, using {FALLBACK_LABEL.value}")
    return FALLBACK_LABEL


# ── Percentiles estimated from Z (BNT-BR) ────────────────────────────────────
NORMAL_INFERIOR_MAX       = 5
NORMAL_MEDIA_INFERIOR_MAX = 25
NORMAL_MEDIA_MAX          = 74
NORMAL_MEDIA_SUPERIOR_MAX = 94


def classify_normal_percentile(percentile: int) -> PercentileLabel:
    """
    Label a whole-number percentile read off the normal curve.

    ≤5 Inferior; 6–25 Média Inferior; 26–74 Média; 75–94 Média Superior;
    ≥95 Superior.
    """
    if percentile <= NORMAL_INFERIOR_MAX:
        return PercentileLabel.INFERIOR
    if percentile <= NORMAL_MEDIA_INFERIOR_MAX:
        return PercentileLabel.MEDIA_INFERIOR
    if percentile <= NORMAL_MEDIA_MAX:
        return PercentileLabel.MEDIA
    if percentile <= NORMAL_MEDIA_SUPERIOR_MAX:
        return PercentileLabel.MEDIA_SUPERIOR
    return PercentileLabel.SUPERIOR
