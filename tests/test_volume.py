"""Tests for search-volume normalization."""

import pytest

from geosearch_analyst.modules.keyword_analysis.volume import (
    VolumeKind,
    classify_volume,
    normalize_volume,
)


class TestNormalizeVolume:

    @pytest.mark.parametrize("value", ["", "   ", None, "N/A", "n/a", "unavailable",
                                       "Data Unavailable", "unknown", "Unknown volume"])
    def test_missing_data_is_zero(self, value):
        assert normalize_volume(value) == 0

    @pytest.mark.parametrize("value,expected", [
        ("High", 80), ("HIGH", 80), ("  high  ", 80), ("(high)", 80), ("very high!", 80),
        ("Medium", 50), ("medium.", 50),
        ("Low", 20), ("low-ish", 20),
    ])
    def test_qualitative_bands(self, value, expected):
        assert normalize_volume(value) == expected

    def test_band_order_prefers_medium_over_low(self):
        assert normalize_volume("Low-Medium") == 50

    @pytest.mark.parametrize("value,expected", [
        ("12,500", 12500),
        ("1.5k", 1500),
        ("2m", 2000000),
        ("500+", 500),
        ("10K+", 10000),
        ("15000 searches", 15000),
        ("0.5", 0.5),
    ])
    def test_numerals_and_multipliers(self, value, expected):
        assert normalize_volume(value) == expected

    @pytest.mark.parametrize("value,expected", [
        ("1000-5000", 3000),
        ("0-100", 50),
        ("3-8", 6),
        ("10-11", 11),
        ("2-3", 3),
        ("0-1", 1),
    ])
    def test_range_mean_rounds_half_up(self, value, expected):
        assert normalize_volume(value) == expected

    def test_range_with_suffixes(self):
        assert normalize_volume("1k-10k") == 5500
        assert normalize_volume("1K–10K") == 5500
        assert normalize_volume("1,000 - 5,000") == 3000

    def test_unparseable_is_zero(self):
        assert normalize_volume("lots") == 0
        assert normalize_volume("~") == 0

    def test_never_negative(self):
        assert normalize_volume("-5") >= 0

    def test_numeric_input_is_accepted(self):
        assert normalize_volume(12500) == 12500

    def test_idempotent_for_plain_numbers(self):
        first = normalize_volume("12,500")
        assert normalize_volume(str(first)) == first


class TestClassifyVolume:

    @pytest.mark.parametrize("value,kind", [
        ("12,500", VolumeKind.EXACT),
        ("1k-10k", VolumeKind.RANGE),
        ("High", VolumeKind.QUALITATIVE),
        ("Data Unavailable", VolumeKind.UNAVAILABLE),
        ("", VolumeKind.UNAVAILABLE),
        ("lots", VolumeKind.UNPARSED),
    ])
    def test_kinds(self, value, kind):
        assert classify_volume(value) is kind
