"""
BPA-2 Derivations

Three attention sub-scales (concentrada, dividida, alternada), each scored
as hits minus errors minus omissions, and their sum, Atenção Geral.

Inputs may arrive flat (``AC_acertos``) or nested per scale
(``{"AC": {"acertos": 40, ...}}``); both shapes give the same result.
A scale score can be negative when errors and omissions outnumber hits.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Dict, Optional

from neuroscore.core.protocols.registry import BPA2_SCALES
from .base import DerivationContext, Number, RawScoreSet, coerce_number


def scale_field(raw: RawScoreSet, scale: str, field: str) -> Number:
    """Read one scale field from either the nested or the flat layout."""
    nested = raw.get(scale)
    if isinstance(nested, Mapping):
        return coerce_number(nested.get(field))
    return coerce_number(raw.get(f"{scale}_{field}"))


def subscale_score(acertos: Number, erros: Number, omissoes: Number) -> Number:
    return acertos - erros - omissoes


def derive_bpa2(raw: RawScoreSet, context: DerivationContext) -> Dict[str, Optional[Number]]:
    scores: Dict[str, Optional[Number]] = {}
    for scale in BPA2_SCALES:
        scores[scale] = subscale_score(
            scale_field(raw, scale, "acertos"),
            scale_field(raw, scale, "erros"),
            scale_field(raw, scale, "omissoes"),
        )
    scores["AG"] = sum(scores[scale] for scale in BPA2_SCALES)
    return scores
