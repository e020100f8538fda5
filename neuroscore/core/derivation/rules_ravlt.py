"""
RAVLT Derivations

Rey Auditory Verbal Learning Test. Trials A1–A5 are the learning list,
B1 the interference list, A6 immediate and A7 delayed recall, REC the raw
recognition count before the 35-word correction.

The trials themselves are reported raw; Escore Total and Reconhecimento
are the two calculated subtests that get percentiles. ALT and the three
ratios only appear in the calculations section.
"""
from __future__ import annotations

from typing import Dict, Optional

from .base import DerivationContext, Number, RawScoreSet, read_number, safe_ratio

RECOGNITION_OFFSET = 35
TRIAL_FIELDS = ("a1", "a2", "a3", "a4", "a5", "b1", "a6", "a7")


def escore_total(a1: Number, a2: Number, a3: Number, a4: Number, a5: Number) -> Number:
    return a1 + a2 + a3 + a4 + a5


def reconhecimento(rec: Number) -> Number:
    return rec - RECOGNITION_OFFSET


def alt(total: Number, a1: Number) -> Number:
    """Learning over trials: total minus five times the first trial."""
    return total - 5 * a1


def derive_ravlt(raw: RawScoreSet, context: DerivationContext) -> Dict[str, Optional[Number]]:
    v = {name: read_number(raw, name) for name in TRIAL_FIELDS}
    rec = read_number(raw, "rec")

    total = escore_total(v["a1"], v["a2"], v["a3"], v["a4"], v["a5"])

    scores: Dict[str, Optional[Number]] = dict(v)
    scores.update({
        "escoreTotal": total,
        "reconhecimento": reconhecimento(rec),
        "alt": alt(total, v["a1"]),
        "velocidadeEsquecimento": safe_ratio(v["a7"], v["a6"]),
        "interferenciaProativa": safe_ratio(v["b1"], v["a1"]),
        "interferenciaRetroativa": safe_ratio(v["a6"], v["a5"]),
    })
    return scores
