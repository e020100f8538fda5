"""
Pass-through Derivation

For protocols whose subtests are the raw counts themselves (FVA, BNT-BR):
each raw field is copied, coerced, to the subtest of the same name.
"""
from __future__ import annotations

from typing import Dict, Iterable, Optional

from .base import DerivationContext, Deriver, Number, RawScoreSet, read_number


def passthrough(fields: Iterable[str]) -> Deriver:
    """Build a deriver that copies ``fields`` unchanged."""
    names = tuple(fields)

    def derive_passthrough(raw: RawScoreSet, context: DerivationContext) -> Dict[str, Optional[Number]]:
        return {name: read_number(raw, name) for name in names}

    return derive_passthrough
