"""Tests for exposure aggregation and portfolio risk metrics."""

import pytest

from src.data.models.enums import Region
from src.data.models.holdings import ChainBalance
from src.engine.models.enums import ConcentrationRisk, DiversificationRating
from src.engine.models.params import RiskThresholds
from src.engine.models.portfolio import RegionalExposure, TokenAllocation
from src.engine.portfolio.exposure import (
    aggregate_allocations,
    aggregate_regional_exposure,
    calc_total_value,
)
from src.engine.portfolio.risk_metrics import (
    calc_concentration_risk,
    calc_diversification_score,
    calc_regional_hhi,
    calc_weighted_inflation_risk,
    get_diversification_rating,
)


def _exposure(region: Region, percentage: float) -> RegionalExposure:
    return RegionalExposure(
        region=region,
        value_usd=percentage * 10,
        percentage=percentage,
        avg_inflation_rate=3.0,
    )


class TestAllocations:
    """Tests for aggregate_allocations."""

    def test_total_value(self, mixed_balances):
        assert calc_total_value(mixed_balances) == pytest.approx(1000.0)

    def test_one_allocation_per_balance(self, mixed_balances, inflation_data):
        """Same symbol on two chains stays two allocations."""
        tokens = aggregate_allocations(mixed_balances, inflation_data)
        assert len(tokens) == 5
        usdm = [t for t in tokens if t.symbol == "USDM"]
        assert {t.chain_id for t in usdm} == {42220, 1}

    def test_percentages_sum_to_100(self, mixed_balances, inflation_data):
        tokens = aggregate_allocations(mixed_balances, inflation_data)
        assert sum(t.percentage for t in tokens) == pytest.approx(100.0)

    def test_classification_applied(self, two_region_balances, inflation_data, provider):
        """Symbols are canonicalized and carry region, inflation and APY."""
        kes, usdc = aggregate_allocations(two_region_balances, inflation_data, provider)
        assert kes.symbol == "KESM"
        assert kes.region == Region.AFRICA
        assert kes.inflation_rate == 15.0
        assert kes.yield_rate == 2.0
        assert usdc.region == Region.USA
        assert usdc.percentage == pytest.approx(50.0)

    def test_without_provider_yield_is_zero(self, two_region_balances, inflation_data):
        tokens = aggregate_allocations(two_region_balances, inflation_data)
        assert all(t.yield_rate == 0.0 for t in tokens)

    def test_zero_total_is_empty(self, inflation_data):
        balances = [ChainBalance(chain_id=1, symbol="USDC", value_usd=0.0)]
        assert aggregate_allocations(balances, inflation_data) == ()


class TestRegionalExposure:
    """Tests for aggregate_regional_exposure."""

    def test_merges_across_chains(self, mixed_balances, inflation_data):
        """USDM on two chains merges into one USA exposure of $400."""
        tokens = aggregate_allocations(mixed_balances, inflation_data)
        regional = {r.region: r for r in aggregate_regional_exposure(tokens)}
        usa = regional[Region.USA]
        assert usa.value_usd == pytest.approx(400.0)
        assert usa.percentage == pytest.approx(40.0)
        assert usa.tokens == ("USDM",)

    def test_first_seen_order(self, mixed_balances, inflation_data):
        tokens = aggregate_allocations(mixed_balances, inflation_data)
        regions = [r.region for r in aggregate_regional_exposure(tokens)]
        assert regions == [Region.AFRICA, Region.USA, Region.EUROPE, Region.GLOBAL]

    def test_percentages_sum_to_100(self, mixed_balances, inflation_data):
        tokens = aggregate_allocations(mixed_balances, inflation_data)
        regional = aggregate_regional_exposure(tokens)
        assert sum(r.percentage for r in regional) == pytest.approx(100.0)

    def test_value_weighted_inflation(self):
        """Region average is weighted by value.

        $300 at 2% and $100 at 6% -> (600 + 600) / 400 = 3.0
        """
        tokens = [
            TokenAllocation("USDM", 300.0, 75.0, Region.USA, 2.0),
            TokenAllocation("USDC", 100.0, 25.0, Region.USA, 6.0),
        ]
        (usa,) = aggregate_regional_exposure(tokens)
        assert usa.avg_inflation_rate == pytest.approx(3.0)
        assert usa.tokens == ("USDM", "USDC")

    def test_empty(self):
        assert aggregate_regional_exposure([]) == ()


class TestWeightedInflationRisk:
    """Tests for calc_weighted_inflation_risk."""

    def test_two_equal_holdings(self):
        """$500 at 2% and $500 at 8% -> 5.0"""
        tokens = [
            TokenAllocation("EURM", 500.0, 50.0, Region.EUROPE, 2.0),
            TokenAllocation("BRLM", 500.0, 50.0, Region.LATAM, 8.0),
        ]
        assert calc_weighted_inflation_risk(tokens) == pytest.approx(5.0)

    def test_single_holding_equals_its_rate(self, single_kes_balance, inflation_data):
        tokens = aggregate_allocations(single_kes_balance, inflation_data)
        assert calc_weighted_inflation_risk(tokens) == pytest.approx(15.0)

    def test_bounded_by_held_rates(self, mixed_balances, inflation_data):
        tokens = aggregate_allocations(mixed_balances, inflation_data)
        risk = calc_weighted_inflation_risk(tokens)
        assert min(t.inflation_rate for t in tokens) <= risk <= max(t.inflation_rate for t in tokens)

    def test_empty_is_zero(self):
        assert calc_weighted_inflation_risk([]) == 0.0


class TestDiversificationScore:
    """Tests for calc_diversification_score and its rating."""

    def test_hhi(self):
        """Two equal regions -> HHI 0.5; one region -> 1.0"""
        assert calc_regional_hhi([_exposure(Region.USA, 50), _exposure(Region.EUROPE, 50)]) == pytest.approx(0.5)
        assert calc_regional_hhi([_exposure(Region.USA, 100)]) == pytest.approx(1.0)
        assert calc_regional_hhi([]) == 0.0

    def test_single_token(self, single_kes_balance, inflation_data):
        """1 token, 1 region: 0 + 4 + 10 = 14"""
        tokens = aggregate_allocations(single_kes_balance, inflation_data)
        regional = aggregate_regional_exposure(tokens)
        assert calc_diversification_score(tokens, regional) == pytest.approx(14.0)

    def test_two_equal_regions(self, two_region_balances, inflation_data):
        """2 tokens, 2 equal regions: 50 + 8 + 20 = 78"""
        tokens = aggregate_allocations(two_region_balances, inflation_data)
        regional = aggregate_regional_exposure(tokens)
        assert calc_diversification_score(tokens, regional) == pytest.approx(78.0)

    def test_bonuses_capped(self):
        """Ten tokens in six equal regions: bonuses capped at 20 and 30."""
        regions = [Region.USA, Region.EUROPE, Region.ASIA, Region.AFRICA, Region.LATAM, Region.GLOBAL]
        tokens = [
            TokenAllocation(f"T{i}", 10.0, 10.0, regions[i % 6], 3.0) for i in range(10)
        ]
        regional = aggregate_regional_exposure(tokens)
        assert calc_diversification_score(tokens, regional) == pytest.approx(100.0)

    @staticmethod
    def _equal_regions_score(n: int) -> float:
        regions = [Region.USA, Region.EUROPE, Region.ASIA, Region.AFRICA]
        tokens = [TokenAllocation(f"T{i}", 100.0, 100.0 / n, regions[i], 3.0) for i in range(n)]
        return calc_diversification_score(tokens, aggregate_regional_exposure(tokens))

    def test_more_equal_regions_strictly_increase_score(self):
        """1, 2, 4 equal regions: 14 < 78 < 100 (clamped)"""
        scores = [self._equal_regions_score(n) for n in (1, 2, 4)]
        assert scores == pytest.approx([14.0, 78.0, 100.0])
        assert scores[0] < scores[1] < scores[2]

    def test_adding_a_region_never_lowers_score(self):
        scores = [self._equal_regions_score(n) for n in range(1, 5)]
        assert all(0.0 <= s <= 100.0 for s in scores)
        assert scores == sorted(scores)

    def test_empty_is_zero(self):
        assert calc_diversification_score([], []) == 0.0

    @pytest.mark.parametrize(
        "score,rating",
        [
            (100, DiversificationRating.EXCELLENT),
            (80, DiversificationRating.EXCELLENT),
            (79.9, DiversificationRating.GOOD),
            (60, DiversificationRating.GOOD),
            (40, DiversificationRating.FAIR),
            (20, DiversificationRating.POOR),
            (19.9, DiversificationRating.VERY_POOR),
            (0, DiversificationRating.VERY_POOR),
        ],
    )
    def test_rating_bands(self, score, rating):
        assert get_diversification_rating(score) == rating


class TestConcentrationRisk:
    """Tests for calc_concentration_risk."""

    @pytest.mark.parametrize(
        "max_share,expected",
        [
            (50.0, ConcentrationRisk.LOW),
            (50.01, ConcentrationRisk.MEDIUM),
            (70.0, ConcentrationRisk.MEDIUM),
            (70.01, ConcentrationRisk.HIGH),
            (100.0, ConcentrationRisk.HIGH),
        ],
    )
    def test_boundaries(self, max_share, expected):
        """Thresholds are strict: exactly 50 is LOW, exactly 70 is MEDIUM."""
        regional = [_exposure(Region.USA, max_share), _exposure(Region.EUROPE, 100 - max_share)]
        assert calc_concentration_risk(regional) == expected

    def test_empty_is_low(self):
        assert calc_concentration_risk([]) == ConcentrationRisk.LOW

    def test_custom_thresholds(self):
        thresholds = RiskThresholds(concentration_high=40.0, concentration_medium=30.0)
        regional = [_exposure(Region.USA, 45.0), _exposure(Region.EUROPE, 55.0)]
        assert calc_concentration_risk(regional, thresholds) == ConcentrationRisk.HIGH
