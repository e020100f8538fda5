"""
Derivation Engine

Protocol-specific formulas that turn raw administration numbers into
calculated scores.

Usage:
    from neuroscore.core.derivation import derive

    scores = derive("FDT", {"leitura": 20, "escolha": 35, "alternancia": 50})
    scores["inibicao"]   # 15
"""
from .base import (
    CalculatedScoreSet,
    DerivationContext,
    RawScoreSet,
    coerce_number,
    read_number,
    safe_ratio,
)
from .engine import DerivationEngine, derive
from .rules_bpa2 import derive_bpa2
from .rules_fdt import derive_fdt
from .rules_ravlt import derive_ravlt
from .rules_tin import TINClassification, classify_tin_standard_score, derive_tin

__all__ = [
    "CalculatedScoreSet",
    "DerivationContext",
    "DerivationEngine",
    "RawScoreSet",
    "TINClassification",
    "classify_tin_standard_score",
    "coerce_number",
    "derive",
    "derive_bpa2",
    "derive_fdt",
    "derive_ravlt",
    "derive_tin",
    "read_number",
    "safe_ratio",
]
