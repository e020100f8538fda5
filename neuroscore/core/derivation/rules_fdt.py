"""
FDT Derivations

Five Digit Test. Inputs are elapsed times in seconds for the four parts
(leitura, contagem, escolha, alternância).
"""
from __future__ import annotations

from typing import Dict, Optional

from .base import DerivationContext, Number, RawScoreSet, read_number


def derive_fdt(raw: RawScoreSet, context: DerivationContext) -> Dict[str, Optional[Number]]:
    leitura = read_number(raw, "leitura")
    escolha = read_number(raw, "escolha")
    alternancia = read_number(raw, "alternancia")

    return {
        "inibicao": escolha - leitura,
        "flexibilidade": alternancia - leitura,
    }
