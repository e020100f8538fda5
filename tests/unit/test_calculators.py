"""
Unit Tests for the Ad-hoc Calculators

Tests for one-off percentile and Z-score classification.
"""
import pytest

from neuroscore.core.calculators import (
    PERCENTILE_CALCULATOR_TESTS,
    ZSCORE_CALCULATOR_TESTS,
    calculate_percentile,
    calculate_z_score,
)
from neuroscore.core.classification import PercentileLabel, ZScoreLabel
from neuroscore.utils.exceptions import InvalidPercentileError, UndefinedScoreError


class TestPercentileCalculator:
    """Tests for calculate_percentile."""

    def test_range_token(self):
        """Test a range token below 5."""
        result = calculate_percentile("TMT", "<5")
        assert result.classification is PercentileLabel.INFERIOR

    def test_exact_75(self):
        """Test that an exact 75 is Média Superior."""
        result = calculate_percentile("FVA", 75)
        assert result.classification is PercentileLabel.MEDIA_SUPERIOR

    def test_summary(self):
        """Test the copy-to-clipboard line."""
        result = calculate_percentile("TMT", "25-50")
        assert result.summary() == "TMT (Trail Making Test): Percentil 25-50, Classificação Média"

    def test_unknown_test_uses_id(self):
        """Test the display-name fallback."""
        result = calculate_percentile("STROOP", "40")
        assert result.test_name == "STROOP"
        assert result.summary() == "STROOP: Percentil 40, Classificação Média"

    def test_invalid_percentile(self):
        """Test that garbage is rejected rather than labelled."""
        with pytest.raises(InvalidPercentileError):
            calculate_percentile("TMT", "muito bom")

    def test_catalogue(self):
        """Test the catalogue ids."""
        assert list(PERCENTILE_CALCULATOR_TESTS) == [
            "FVA", "TFV", "TMT", "FPT_ADULTO", "HAYLING_INFANTIL",
        ]


class TestZScoreCalculator:
    """Tests for calculate_z_score."""

    def test_one_sd_above_mean(self):
        """Test Z = 1.00 is Médio Superior."""
        result = calculate_z_score("SPAN_DIGITOS", 115, 100, 15)
        assert result.z == pytest.approx(1.0)
        assert result.classification is ZScoreLabel.MEDIO_SUPERIOR
        assert result.summary() == "Span de Dígitos: Z-Score 1.00, Classificação Médio Superior"

    def test_summary_rounds_half_away(self):
        """Test the two-decimal summary of a negative Z."""
        result = calculate_z_score("FAS", 28, 35, 8)
        assert result.z == pytest.approx(-0.875)
        assert result.summary() == "FAS (Fluência Fonêmica): Z-Score -0.88, Classificação Médio Inferior"

    def test_formula(self):
        """Test the worked formula line."""
        result = calculate_z_score("TOM", 115, 100, 15)
        assert result.formula() == "(115 - 100) / 15 = 1.00"

    def test_zero_sd(self):
        """Test that sd = 0 fails."""
        with pytest.raises(UndefinedScoreError):
            calculate_z_score("TAYLOR", 30, 30, 0)

    def test_catalogue(self):
        """Test the catalogue ids and a display name."""
        assert len(ZSCORE_CALCULATOR_TESTS) == 7
        assert ZSCORE_CALCULATOR_TESTS["BNTBR"] == "BNT-BR (Boston Naming Test)"
