"""
Pytest Configuration and Fixtures

Shared fixtures for scoring engine tests.
"""
import pytest
from datetime import date
from pathlib import Path
from typing import Any, Dict
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from neuroscore.core.reports import PatientContext
from neuroscore.core.scoring import ScoringEngine


@pytest.fixture
def ravlt_raw() -> Dict[str, Any]:
    """RAVLT administration with a typical learning curve."""
    return {"a1": 5, "a2": 7, "a3": 8, "a4": 9, "a5": 10, "b1": 6, "a6": 9, "a7": 8, "rec": 40}


@pytest.fixture
def fdt_raw() -> Dict[str, Any]:
    """FDT part times in seconds."""
    return {"leitura": 20, "contagem": 25, "escolha": 35, "alternancia": 50}


@pytest.fixture
def bpa2_nested() -> Dict[str, Any]:
    """BPA-2 inputs grouped per scale."""
    return {
        "AC": {"acertos": 40, "erros": 2, "omissoes": 1},
        "AD": {"acertos": 30, "erros": 3, "omissoes": 2},
        "AA": {"acertos": 35, "erros": 1, "omissoes": 0},
    }


@pytest.fixture
def bpa2_flat() -> Dict[str, Any]:
    """Same BPA-2 inputs as bpa2_nested, in the flat field layout."""
    return {
        "AC_acertos": 40, "AC_erros": 2, "AC_omissoes": 1,
        "AD_acertos": 30, "AD_erros": 3, "AD_omissoes": 2,
        "AA_acertos": 35, "AA_erros": 1, "AA_omissoes": 0,
    }


@pytest.fixture
def adult_patient() -> PatientContext:
    return PatientContext(name="Maria Silva", age=34)


@pytest.fixture
def child_patient() -> PatientContext:
    return PatientContext(name="João Pereira", age=8)


@pytest.fixture
def administered_at() -> date:
    return date(2025, 3, 12)


@pytest.fixture
def mock_standard_score_lookup():
    """TIN norms stub: 100 for any count, None for ages outside 3-14."""
    def lookup(acertos, age):
        if age < 3 or age > 14:
            return None
        return 100
    return lookup


@pytest.fixture
def scoring_engine() -> ScoringEngine:
    return ScoringEngine()
