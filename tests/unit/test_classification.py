"""
Unit Tests for the Classification Engine

Tests for percentile parsing and the percentile and Z-score classifiers.
"""
import math
import pytest
from decimal import Decimal

from neuroscore.core.classification import (
    ExactPercentile,
    PercentileLabel,
    PercentileRange,
    RangePercentile,
    ZScoreLabel,
    classify_normal_percentile,
    classify_percentile,
    classify_z_score,
    compute_z,
    format_z,
    parse_percentile,
    parse_percentile_strict,
    round_z,
    z_to_percentile,
)
from neuroscore.utils.exceptions import InvalidPercentileError, UndefinedScoreError


class TestPercentileParsing:
    """Tests for parse_percentile."""

    @pytest.mark.parametrize("value, expected", [
        ("<5", RangePercentile(PercentileRange.BELOW_5)),
        ("5-25", RangePercentile(PercentileRange.P5_25)),
        (" 25 – 50 ", RangePercentile(PercentileRange.P25_50)),
        (">95", RangePercentile(PercentileRange.ABOVE_95)),
        (PercentileRange.P50_75, RangePercentile(PercentileRange.P50_75)),
        (75, ExactPercentile(75)),
        ("75", ExactPercentile(75)),
        ("P10", ExactPercentile(10)),
        ("12,5", ExactPercentile(12.5)),
        (ExactPercentile(40), ExactPercentile(40)),
    ])
    def test_accepted_forms(self, value, expected):
        """Test numbers, numeric strings and range tokens."""
        assert parse_percentile(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", "5-", float("nan"), True])
    def test_rejected_forms(self, value):
        """Test that unreadable values parse to None."""
        assert parse_percentile(value) is None

    def test_strict_parsing_raises(self):
        """Test parse_percentile_strict on garbage."""
        with pytest.raises(InvalidPercentileError) as exc_info:
            parse_percentile_strict("abc")
        assert exc_info.value.code == "INVALID_PERCENTILE"

    def test_display(self):
        """Test how each variant prints."""
        assert ExactPercentile(75).display() == "75"
        assert ExactPercentile(12.5).display() == "12.5"
        assert RangePercentile(PercentileRange.P75_95).display() == "75-95"


class TestPercentileClassifier:
    """Tests for classify_percentile."""

    @pytest.mark.parametrize("token, expected", [
        ("<5", PercentileLabel.INFERIOR),
        ("5-25", PercentileLabel.MEDIA_INFERIOR),
        ("25-50", PercentileLabel.MEDIA),
        ("50-75", PercentileLabel.MEDIA),
        ("75-95", PercentileLabel.MEDIA_SUPERIOR),
        (">95", PercentileLabel.SUPERIOR),
    ])
    def test_range_tokens(self, token, expected):
        """Test each of the six manual ranges."""
        assert classify_percentile(token) is expected

    @pytest.mark.parametrize("value, expected", [
        (5, PercentileLabel.INFERIOR),
        (25, PercentileLabel.MEDIA_INFERIOR),
        (50, PercentileLabel.MEDIA),
        (75, PercentileLabel.MEDIA_SUPERIOR),
        (95, PercentileLabel.SUPERIOR),
    ])
    def test_point_values(self, value, expected):
        """Test the manual's point values, including exact 75."""
        assert classify_percentile(value) is expected
        assert classify_percentile(str(value)) is expected

    @pytest.mark.parametrize("value, expected", [
        (0, PercentileLabel.INFERIOR),
        (4.9, PercentileLabel.INFERIOR),
        (5.1, PercentileLabel.MEDIA_INFERIOR),
        (24.9, PercentileLabel.MEDIA_INFERIOR),
        (25.1, PercentileLabel.MEDIA),
        (74.9, PercentileLabel.MEDIA),
        (75.1, PercentileLabel.MEDIA_SUPERIOR),
        (94.9, PercentileLabel.MEDIA_SUPERIOR),
        (99, PercentileLabel.SUPERIOR),
        (-3, PercentileLabel.INFERIOR),
        (150, PercentileLabel.SUPERIOR),
    ])
    def test_numeric_bands(self, value, expected):
        """Test numbers between the point values."""
        assert classify_percentile(value) is expected

    @pytest.mark.parametrize("value, expected", [
        (float("inf"), PercentileLabel.SUPERIOR),
        ("inf", PercentileLabel.SUPERIOR),
        (10**400, PercentileLabel.SUPERIOR),
        (float("-inf"), PercentileLabel.INFERIOR),
        ("-inf", PercentileLabel.INFERIOR),
        (-(10**400), PercentileLabel.INFERIOR),
    ])
    def test_infinite_values_take_outer_labels(self, value, expected):
        """Test that unbounded values land at the ends of the scale, not on Média."""
        assert classify_percentile(value) is expected

    @pytest.mark.parametrize("value", ["abc", "", None, "5-", float("nan")])
    def test_malformed_defaults_to_media(self, value, caplog):
        """Test the documented fallback for unreadable input."""
        with caplog.at_level("WARNING"):
            assert classify_percentile(value) is PercentileLabel.MEDIA
        assert "unreadable percentile" in caplog.text

    @pytest.mark.parametrize("value", [
        "<5", "5-25", "25-50", "50-75", "75-95", ">95",
        -1.5, 0, 3, 5, 17.25, 25, 42, 50, 61, 75, 88, 95, 100, 1e6,
    ])
    def test_total_and_idempotent(self, value):
        """Test that every input maps to exactly one label, the same every time."""
        first = classify_percentile(value)
        assert first in set(PercentileLabel)
        assert classify_percentile(value) is first

    def test_vocabulary_is_percentile_family(self):
        """Test that percentile labels use the feminine wording."""
        assert {label.value for label in PercentileLabel} == {
            "Inferior", "Média Inferior", "Média", "Média Superior", "Superior",
        }


class TestNormalPercentileClassifier:
    """Tests for classify_normal_percentile."""

    @pytest.mark.parametrize("percentile, expected", [
        (1, PercentileLabel.INFERIOR),
        (5, PercentileLabel.INFERIOR),
        (6, PercentileLabel.MEDIA_INFERIOR),
        (25, PercentileLabel.MEDIA_INFERIOR),
        (26, PercentileLabel.MEDIA),
        (50, PercentileLabel.MEDIA),
        (74, PercentileLabel.MEDIA),
        (75, PercentileLabel.MEDIA_SUPERIOR),
        (94, PercentileLabel.MEDIA_SUPERIOR),
        (95, PercentileLabel.SUPERIOR),
        (99, PercentileLabel.SUPERIOR),
    ])
    def test_band_boundaries(self, percentile, expected):
        """Test the cut-offs used for percentiles estimated from Z."""
        assert classify_normal_percentile(percentile) is expected

    @pytest.mark.parametrize("z, expected", [
        (-0.68, PercentileLabel.MEDIA_INFERIOR),
        (-0.69, PercentileLabel.MEDIA_INFERIOR),
        (0.65, PercentileLabel.MEDIA),
        (-1.65, PercentileLabel.INFERIOR),
        (1.65, PercentileLabel.SUPERIOR),
    ])
    def test_from_z(self, z, expected):
        """Test labels reached through z_to_percentile."""
        assert classify_normal_percentile(z_to_percentile(z)) is expected


class TestZScoreClassifier:
    """Tests for classify_z_score."""

    @pytest.mark.parametrize("z, expected", [
        (1.37, ZScoreLabel.SUPERIOR),
        (1.36, ZScoreLabel.MEDIO_SUPERIOR),
        (0.66, ZScoreLabel.MEDIO_SUPERIOR),
        (0.65, ZScoreLabel.MEDIO),
        (-0.69, ZScoreLabel.MEDIO),
        (-0.70, ZScoreLabel.MEDIO_INFERIOR),
        (-1.31, ZScoreLabel.MEDIO_INFERIOR),
        (-1.32, ZScoreLabel.INFERIOR),
        (3.0, ZScoreLabel.SUPERIOR),
        (0.0, ZScoreLabel.MEDIO),
        (-3.0, ZScoreLabel.INFERIOR),
    ])
    def test_band_boundaries(self, z, expected):
        """Test the exact closed-interval boundaries."""
        assert classify_z_score(z) is expected

    @pytest.mark.parametrize("z", [-1.315, 0.655, 1.365, -0.695, float("nan")])
    def test_gap_values_fall_back_to_medio(self, z):
        """Test that values between bands are classified as Médio."""
        assert classify_z_score(z) is ZScoreLabel.MEDIO

    def test_vocabulary_is_z_family(self):
        """Test that Z-score labels use the masculine wording."""
        assert {label.value for label in ZScoreLabel} == {
            "Inferior", "Médio Inferior", "Médio", "Médio Superior", "Superior",
        }


class TestZScoreHelper:
    """Tests for compute_z and its presentation helpers."""

    def test_compute_z(self):
        """Test the standardisation formula."""
        assert compute_z(115, 100, 15) == pytest.approx(1.0)
        assert compute_z(85, 100, 15) == pytest.approx(-1.0)
        assert compute_z(22.5, 20, 2) == pytest.approx(1.25)

    def test_compute_z_is_unrounded(self):
        """Test that Z keeps full precision."""
        assert compute_z(10, 0, 3) == pytest.approx(3.3333333333)

    @pytest.mark.parametrize("raw, mean", [(0, 0), (115, 100), (-4, 7.5)])
    def test_zero_sd_fails(self, raw, mean):
        """Test that sd = 0 never returns a number."""
        with pytest.raises(UndefinedScoreError) as exc_info:
            compute_z(raw, mean, 0)
        assert exc_info.value.code == "UNDEFINED_SCORE"

    @pytest.mark.parametrize("raw, mean, sd", [
        ("abc", 100, 15),
        (None, 100, 15),
        (100, float("nan"), 15),
        (100, 100, float("inf")),
        (True, 100, 15),
    ])
    def test_invalid_inputs_fail(self, raw, mean, sd):
        """Test that non-finite or non-numeric inputs are rejected."""
        with pytest.raises(UndefinedScoreError):
            compute_z(raw, mean, sd)

    def test_overflow_fails(self):
        """Test that an infinite quotient is rejected."""
        with pytest.raises(UndefinedScoreError):
            compute_z(1e308, -1e308, 1e-10)

    @pytest.mark.parametrize("raw, mean, sd", [
        (10**400, 0, 1),
        (0, 10**400, 1),
        (1, 0, 10**400),
    ])
    def test_oversized_integers_fail(self, raw, mean, sd):
        """Test that integers beyond float range are rejected, not raised as OverflowError."""
        with pytest.raises(UndefinedScoreError) as exc_info:
            compute_z(raw, mean, sd)
        assert exc_info.value.details

    @pytest.mark.parametrize("z, expected", [
        (1.0, "1.00"),
        (0.125, "0.13"),
        (-0.125, "-0.13"),
        (-0.875, "-0.88"),
        (-0.001, "0.00"),
        (2.344999, "2.34"),
    ])
    def test_format_z(self, z, expected):
        """Test two-decimal rounding half away from zero."""
        assert format_z(z) == expected

    def test_round_z(self):
        """Test round_z returns a Decimal."""
        assert round_z(1.005) == Decimal("1.01")

    @pytest.mark.parametrize("z, expected", [
        (0.0, 50),
        (1.0, 84),
        (-1.0, 16),
        (1.96, 98),
        (3.0, 99),
        (-3.0, 1),
        (10.0, 99),
        (-10.0, 1),
    ])
    def test_z_to_percentile(self, z, expected):
        """Test the normal-curve conversion and its 1-99 clamp."""
        assert z_to_percentile(z) == expected

    def test_z_to_percentile_rejects_nan(self):
        """Test that NaN has no percentile."""
        with pytest.raises(UndefinedScoreError):
            z_to_percentile(math.nan)
