"""
TIN Derivations and Classification

Teste Infantil de Nomeação. The only input is the number of items named
correctly (0–60). The standard score (mean 100, SD 15) comes from an
age-normative table owned by the caller and injected as a
StandardScoreLookup; this module never reads a table itself.

TIN is classified on the standard score with its own fixed bands, not
with the percentile or Z-score classifiers.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from neuroscore.utils import get_logger, is_finite_number
from .base import DerivationContext, Number, RawScoreSet, read_number

logger = get_logger(__name__)

# ── Standard-score bands ─────────────────────────────────────────────────────
VERY_LOW_BELOW = 70
LOW_MAX        = 84
AVERAGE_MIN    = 85
AVERAGE_MAX    = 114
HIGH_MIN       = 115
HIGH_MAX       = 129
VERY_HIGH_MIN  = 130


class TINClassification(str, Enum):
    MUITO_BAIXA = "Muito Baixa"
    BAIXA       = "Baixa"
    MEDIA       = "Média"
    ALTA        = "Alta"
    MUITO_ALTA  = "Muito Alta"


def classify_tin_standard_score(score: Optional[Number]) -> Optional[TINClassification]:
    """
    <70 Muito Baixa; 70–84 Baixa; 85–114 Média; 115–129 Alta; ≥130 Muito Alta.

    Standard scores are integers in practice; a fractional value that falls
    between two bands (e.g. 84.5) or a missing score is not classified.
    """
    if score is None or not is_finite_number(score):
        return None
    if score < VERY_LOW_BELOW:
        return TINClassification.MUITO_BAIXA
    if VERY_LOW_BELOW <= score <= LOW_MAX:
        return TINClassification.BAIXA
    if AVERAGE_MIN <= score <= AVERAGE_MAX:
        return TINClassification.MEDIA
    if HIGH_MIN <= score <= HIGH_MAX:
        return TINClassification.ALTA
    if score >= VERY_HIGH_MIN:
        return TINClassification.MUITO_ALTA
    logger.warning(f"TIN: standard score {score} falls between bands, not classified")
    return None


def derive_tin(raw: RawScoreSet, context: DerivationContext) -> Dict[str, Optional[Number]]:
    acertos = read_number(raw, "acertos")
    return {
        "acertos": acertos,
        "escorePadrao": _standard_score(acertos, context),
    }


def _standard_score(acertos: Number, context: DerivationContext) -> Optional[Number]:
    lookup = context.standard_score_lookup
    if lookup is None:
        logger.debug("TIN: no standard-score lookup supplied, escorePadrao left undefined")
        return None
    if context.patient_age is None:
        logger.debug("TIN: patient age unknown, escorePadrao left undefined")
        return None

    try:
        score = lookup(acertos, context.patient_age)
    except Exception as exc:
        # acertos is still reported
        logger.error(f"TIN: standard-score lookup raised {exc}", exc_info=True)
        return None

    if score is None:
        logger.debug(f"TIN: no normative entry for age {context.patient_age}")
        return None
    if not is_finite_number(score):
        logger.warning(f"TIN: lookup returned non-numeric standard score {score!r}")
        return None
    return score
