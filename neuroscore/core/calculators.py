"""
Ad-hoc Calculators

One-off classification for tests that have no full protocol in the registry.
The clinician reads a percentile from the manual, or a raw score with the
reference mean and SD, and gets a label plus a one-line summary to paste
into the report.

Usage:
    from neuroscore.core.calculators import calculate_percentile, calculate_z_score

    calculate_percentile("TMT", "25-50").summary()
    # 'TMT (Trail Making Test): Percentil 25-50, Classificação Média'

    calculate_z_score("FAS", 28, 35, 8).summary()
    # 'FAS (Fluência Fonêmica): Z-Score -0.88, Classificação Médio Inferior'
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from neuroscore.core.classification import (
    Percentile,
    PercentileLabel,
    ZScoreLabel,
    classify_percentile,
    classify_z_score,
    compute_z,
    format_z,
    parse_percentile_strict,
)
from neuroscore.utils import get_logger

logger = get_logger(__name__)

# ── Catalogues: calculator id → display name ─────────────────────────────────
PERCENTILE_CALCULATOR_TESTS: Dict[str, str] = {
    "FVA":              "FVA (Fluência Verbal Animais)",
    "TFV":              "TFV (Teste de Fluência Verbal)",
    "TMT":              "TMT (Trail Making Test)",
    "FPT_ADULTO":       "FPT Adulto (Five-Point Test)",
    "HAYLING_INFANTIL": "Hayling Infantil",
}

ZSCORE_CALCULATOR_TESTS: Dict[str, str] = {
    "BNTBR":          "BNT-BR (Boston Naming Test)",
    "SPAN_DIGITOS":   "Span de Dígitos",
    "CUBOS_CORSI":    "Cubos de Corsi",
    "HAYLING_ADULTO": "Hayling Adulto",
    "TAYLOR":         "Taylor (Figura Complexa)",
    "TOM":            "TOM (Teoria da Mente)",
    "FAS":            "FAS (Fluência Fonêmica)",
}


def _test_name(catalogue: Dict[str, str], test_id: str) -> str:
    name = catalogue.get(test_id)
    if name is None:
        logger.debug(f"Calculator: {test_id!r} not in catalogue, using id as name")
        return test_id
    return name


@dataclass(frozen=True)
class PercentileCalculation:
    test_id: str
    test_name: str
    percentile: Percentile
    classification: PercentileLabel

    def summary(self) -> str:
        return (
            f"{self.test_name}: Percentil {self.percentile.display()}, "
            f"Classificação {self.classification.value}"
        )


@dataclass(frozen=True)
class ZScoreCalculation:
    """``z`` is unrounded; ``summary()`` shows it to two decimals."""
    test_id: str
    test_name: str
    raw: float
    mean: float
    sd: float
    z: float
    classification: ZScoreLabel

    def summary(self) -> str:
        return f"{self.test_name}: Z-Score {format_z(self.z)}, Classificação {self.classification.value}"

    def formula(self) -> str:
        return f"({self.raw:g} - {self.mean:g}) / {self.sd:g} = {format_z(self.z)}"


def calculate_percentile(test_id: str, value: Any) -> PercentileCalculation:
    """
    Classify a percentile read from a test manual.

    Raises:
        InvalidPercentileError: if ``value`` is neither a number nor one of
            the six range tokens.
    """
    percentile = parse_percentile_strict(value)
    return PercentileCalculation(
        test_id=test_id,
        test_name=_test_name(PERCENTILE_CALCULATOR_TESTS, test_id),
        percentile=percentile,
        classification=classify_percentile(percentile),
    )


def calculate_z_score(test_id: str, raw: Any, mean: Any, sd: Any) -> ZScoreCalculation:
    """
    Standardise a raw score and classify it.

    Raises:
        UndefinedScoreError: on non-numeric inputs or a zero SD.
    """
    z = compute_z(raw, mean, sd)
    return ZScoreCalculation(
        test_id=test_id,
        test_name=_test_name(ZSCORE_CALCULATOR_TESTS, test_id),
        raw=raw,
        mean=mean,
        sd=sd,
        z=z,
        classification=classify_z_score(z),
    )
