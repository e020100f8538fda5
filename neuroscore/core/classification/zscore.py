"""
Z-Score Helper and Classifier

    Z = (raw − mean) / standard deviation

Classification bands (closed intervals, as used in clinical sign-off):

    Z ≥ 1.37               → Superior
    0.66  ≤ Z ≤ 1.36       → Médio Superior
    −0.69 ≤ Z ≤ 0.65       → Médio
    −1.31 ≤ Z ≤ −0.70      → Médio Inferior
    Z ≤ −1.32              → Inferior

Values in the hairline gaps between bands (e.g. −1.315, 0.655) and NaN are
classified as Médio. Z is classified unrounded; rounding to two decimals
happens only when it is displayed.
"""
from __future__ import annotations

import math
from decimal import Decimal
from typing import Any

from scipy.stats import norm

from neuroscore.utils import format_fixed, get_logger, is_finite_number, round_half_away
from neuroscore.utils.exceptions import UndefinedScoreError
from .base import ZScoreLabel

logger = get_logger(__name__)

# ── Bands ────────────────────────────────────────────────────────────────────
SUPERIOR_MIN       = 1.37
MEDIO_SUPERIOR_MIN = 0.66
MEDIO_SUPERIOR_MAX = 1.36
MEDIO_MIN          = -0.69
MEDIO_MAX          = 0.65
MEDIO_INFERIOR_MIN = -1.31
MEDIO_INFERIOR_MAX = -0.70
INFERIOR_MAX       = -1.32

FALLBACK_LABEL = ZScoreLabel.MEDIO

# ── Z → percentile conversion ────────────────────────────────────────────────
Z_CLAMP        = 4.0
PERCENTILE_MIN = 1
PERCENTILE_MAX = 99

Z_DECIMALS = 2


def compute_z(raw: Any, mean: Any, sd: Any) -> float:
    """
    Standardise ``raw`` against a reference mean and standard deviation.

    Raises:
        UndefinedScoreError: if any input is not a finite number or sd is 0.
    """
    inputs = {"raw": raw, "mean": mean, "sd": sd}
    bad = [name for name, value in inputs.items() if not is_finite_number(value)]
    if bad:
        raise UndefinedScoreError(
            f"Z-score indefinido: valor inválido em {', '.join(bad)}",
            metric="z_score",
            details={name: type(inputs[name]).__name__ for name in bad},
        )
    if sd == 0:
        raise UndefinedScoreError(
            "Z-score indefinido: desvio padrão igual a zero",
            metric="z_score",
            details={"sd": sd},
        )

    z = (raw - mean) / sd
    if not math.isfinite(z):
        raise UndefinedScoreError("Z-score indefinido: resultado não finito", metric="z_score")
    return float(z)


def round_z(z: float) -> Decimal:
    """Z rounded half away from zero to two decimals."""
    return round_half_away(z, Z_DECIMALS)


def format_z(z: float) -> str:
    return format_fixed(z, Z_DECIMALS)


def classify_z_score(z: float) -> ZScoreLabel:
    """Classify an unrounded Z value; never raises."""
    if z >= SUPERIOR_MIN:
        return ZScoreLabel.SUPERIOR
    if MEDIO_SUPERIOR_MIN <= z <= MEDIO_SUPERIOR_MAX:
        return ZScoreLabel.MEDIO_SUPERIOR
    if MEDIO_MIN <= z <= MEDIO_MAX:
        return ZScoreLabel.MEDIO
    if MEDIO_INFERIOR_MIN <= z <= MEDIO_INFERIOR_MAX:
        return ZScoreLabel.MEDIO_INFERIOR
    if z <= INFERIOR_MAX:
        return ZScoreLabel.INFERIOR

    logger.debug(f"Z-score classifier: {z!r} outside all bands, using {FALLBACK_LABEL.value}")
    return FALLBACK_LABEL


def z_to_percentile(z: float) -> int:
    """
    Approximate percentile rank of ``z`` under the standard normal curve.

    Z is clamped to ±4 and the result to 1–99, rounded half away from zero.
    """
    if not is_finite_number(z):
        raise UndefinedScoreError(f"Percentil indefinido para Z={z!r}", metric="z_percentile")
    clamped = max(-Z_CLAMP, min(Z_CLAMP, z))
    cdf = float(norm.cdf(clamped)) * 100
    bounded = max(PERCENTILE_MIN, min(PERCENTILE_MAX, cdf))
    return int(round_half_away(bounded, 0))
