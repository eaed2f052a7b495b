"""Tests for region/token classification."""

import pytest

from src.data.models.enums import AssetKind, Region
from src.data.models.inflation import CountryInflation, RegionalInflation
from src.engine.classifier import (
    FALLBACK_INFLATION_RATE,
    get_asset_kind,
    get_region_inflation_rate,
    get_token_inflation_rate,
    get_token_region,
    is_rwa_token,
    normalize_symbol,
)


class TestSymbolNormalization:
    """Tests for normalize_symbol."""

    def test_upper_cases(self):
        assert normalize_symbol("paxg") == "PAXG"
        assert normalize_symbol(" usdm ") == "USDM"

    def test_legacy_names_mapped_forward(self):
        """Legacy c-prefixed names resolve to the current m-suffixed names."""
        assert normalize_symbol("cKES") == "KESM"
        assert normalize_symbol("cUSD") == "USDM"
        assert normalize_symbol("PUSO") == "PHPM"


class TestTokenRegion:
    """Tests for get_token_region."""

    @pytest.mark.parametrize(
        "symbol,region",
        [
            ("USDC", Region.USA),
            ("USDY", Region.USA),
            ("EURm", Region.EUROPE),
            ("BRLm", Region.LATAM),
            ("KESm", Region.AFRICA),
            ("PHPm", Region.ASIA),
            ("PAXG", Region.GLOBAL),
            ("SYRUPUSDC", Region.GLOBAL),
        ],
    )
    def test_known_tokens(self, symbol, region):
        assert get_token_region(symbol) == region

    def test_unmapped_is_unknown(self):
        """Unmapped symbols never raise."""
        assert get_token_region("DOGE") == Region.UNKNOWN

    def test_legacy_symbol(self):
        assert get_token_region("cEUR") == Region.EUROPE


class TestAssetKind:
    """Tests for get_asset_kind and is_rwa_token."""

    def test_kinds(self):
        assert get_asset_kind("PAXG") == AssetKind.HARD_ASSET
        assert get_asset_kind("usdy") == AssetKind.YIELD_BEARING
        assert get_asset_kind("SYRUPUSDC") == AssetKind.YIELD_BEARING
        assert get_asset_kind("USDM") == AssetKind.CURRENCY
        assert get_asset_kind("DOGE") == AssetKind.CURRENCY

    def test_rwa_tokens(self):
        assert is_rwa_token("paxg")
        assert is_rwa_token("USDY")
        assert not is_rwa_token("USDC")


class TestInflationRate:
    """Tests for regional and per-token inflation lookup."""

    def test_region_average(self, inflation_data):
        assert get_region_inflation_rate(Region.AFRICA, inflation_data) == 15.0
        assert get_region_inflation_rate("Europe", inflation_data) == 2.0

    def test_missing_region_uses_fallback(self, inflation_data):
        """Global has no sample in the fixture dataset."""
        assert get_region_inflation_rate(Region.GLOBAL, inflation_data) == FALLBACK_INFLATION_RATE
        assert get_region_inflation_rate(Region.GLOBAL, inflation_data, fallback=4.0) == 4.0

    def test_country_mean_when_no_average(self):
        """Without an average, the mean of country samples is used.

        Example: Kenya 6.0, Nigeria 24.0 -> 15.0
        """
        data = {
            "Africa": RegionalInflation(
                region="Africa",
                avg_rate=None,
                countries=(
                    CountryInflation(country="Kenya", value=6.0),
                    CountryInflation(country="Nigeria", value=24.0),
                ),
            )
        }
        assert get_region_inflation_rate(Region.AFRICA, data) == pytest.approx(15.0)

    def test_empty_entry_uses_fallback(self):
        data = {"Asia": RegionalInflation(region="Asia", avg_rate=None)}
        assert get_region_inflation_rate(Region.ASIA, data) == FALLBACK_INFLATION_RATE

    def test_unknown_region_uses_fallback(self, inflation_data):
        assert get_region_inflation_rate(Region.UNKNOWN, inflation_data) == FALLBACK_INFLATION_RATE

    def test_token_rate(self, inflation_data):
        assert get_token_inflation_rate("KESm", inflation_data) == 15.0
        assert get_token_inflation_rate("cEUR", inflation_data) == 2.0
        assert get_token_inflation_rate("DOGE", inflation_data) == FALLBACK_INFLATION_RATE
