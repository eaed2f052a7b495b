"""Tests for the portfolio analysis orchestrator."""

import pytest

from src.data.models.enums import REGION_UNIVERSE, Goal, InvalidGoalError, Region
from src.data.models.holdings import ChainBalance
from src.engine.analyzer import (
    analyze_portfolio,
    build_diversification_tips,
    build_goal_analysis,
    create_empty_analysis,
)
from src.engine.models.enums import (
    ConcentrationRisk,
    DiversificationRating,
    OptimizedRateMode,
    ReasonCode,
)
from src.engine.models.params import AnalysisParams, ProjectionParams
from src.engine.models.portfolio import PortfolioAnalysis, TokenAllocation
from src.engine.models.reasons import Reason, ReasonParams


def _codes(reasons):
    return [r.code for r in reasons]


class TestEmptyPortfolio:
    """Tests for empty and zero-value portfolios."""

    @pytest.mark.parametrize("balances", [None, [], [ChainBalance(1, "USDC", 0.0)]])
    def test_zeroed_analysis(self, balances, inflation_data):
        analysis = analyze_portfolio(balances, inflation_data)
        assert analysis.total_value == 0.0
        assert analysis.token_count == 0
        assert analysis.tokens == ()
        assert analysis.weighted_inflation_risk == 0.0
        assert analysis.diversification_score == 0.0
        assert analysis.concentration_risk == ConcentrationRisk.LOW
        assert analysis.missing_regions == REGION_UNIVERSE
        assert analysis.rebalancing_opportunities == ()
        assert analysis.diversification_tips == ()

    def test_targets_still_computed(self, inflation_data):
        analysis = analyze_portfolio([], inflation_data)
        for goal in Goal:
            assert analysis.target_allocations.for_goal(goal)

    def test_projection_horizon_kept(self, inflation_data):
        params = AnalysisParams(projection=ProjectionParams(horizon_years=5))
        analysis = create_empty_analysis(inflation_data, params=params)
        assert analysis.projections.horizon_years == 5
        assert analysis.projections.current_path.value_at_horizon == 0.0

    def test_goal_headline(self, inflation_data):
        analysis = analyze_portfolio([], inflation_data, Goal.RWA_ACCESS)
        assert analysis.goal_analysis.headline.code == ReasonCode.ADD_RWA_EXPOSURE


class TestAnalyzePortfolio:
    """Tests for analyze_portfolio on real holdings."""

    def test_single_high_inflation_holding(self, single_kes_balance, inflation_data):
        """$1000 KESM: fully concentrated in a 15% region."""
        analysis = analyze_portfolio(single_kes_balance, inflation_data, "inflation_protection")

        assert analysis.total_value == 1000.0
        assert analysis.token_count == 1
        assert analysis.region_count == 1
        assert analysis.weighted_inflation_risk == pytest.approx(15.0)
        assert analysis.diversification_score == pytest.approx(14.0)
        assert analysis.diversification_rating == DiversificationRating.VERY_POOR
        assert analysis.concentration_risk == ConcentrationRisk.HIGH
        assert analysis.over_exposed_regions == (Region.AFRICA,)
        assert Region.AFRICA not in analysis.missing_regions

        top = analysis.rebalancing_opportunities[0]
        assert (top.from_token, top.to_token) == ("KESM", "EURM")
        assert top.suggested_amount == pytest.approx(500.0)
        assert analysis.goal_analysis.top_opportunity == top

        assert analysis.goal_analysis.headline.code == ReasonCode.HIGH_INFLATION_EXPOSURE
        assert analysis.goal_analysis.headline.params["weighted_inflation_risk"] == pytest.approx(15.0)

    def test_two_regions(self, two_region_balances, inflation_data):
        """$500 KESM (15%) + $500 USDC (3%).

        risk = 9.0, score = 50 + 8 + 20 = 78, max share exactly 50 -> LOW
        """
        analysis = analyze_portfolio(two_region_balances, inflation_data, Goal.INFLATION_PROTECTION)
        assert analysis.weighted_inflation_risk == pytest.approx(9.0)
        assert analysis.diversification_score == pytest.approx(78.0)
        assert analysis.diversification_rating == DiversificationRating.GOOD
        assert analysis.concentration_risk == ConcentrationRisk.LOW
        assert analysis.over_exposed_regions == ()
        assert analysis.missing_regions == (Region.EUROPE, Region.ASIA, Region.LATAM, Region.GLOBAL)

    def test_percentages_sum_to_100(self, mixed_balances, inflation_data):
        analysis = analyze_portfolio(mixed_balances, inflation_data)
        assert sum(t.percentage for t in analysis.tokens) == pytest.approx(100.0)
        assert sum(r.percentage for r in analysis.regional_exposure) == pytest.approx(100.0)

    def test_flat_projection(self, two_region_balances, inflation_data):
        """Default flat mode: optimized = 9.0 × 0.6 = 5.4"""
        analysis = analyze_portfolio(two_region_balances, inflation_data)
        p = analysis.projections
        assert p.current_rate == pytest.approx(9.0)
        assert p.optimized_rate == pytest.approx(5.4)
        assert p.current_path.value_at_horizon == pytest.approx(1000 * 0.91**3)

    def test_rebalance_projection(self, single_kes_balance, inflation_data):
        """Rebalance mode applies the suggested moves to the holdings."""
        params = AnalysisParams(
            projection=ProjectionParams(optimized_rate_mode=OptimizedRateMode.REBALANCE)
        )
        analysis = analyze_portfolio(
            single_kes_balance, inflation_data, Goal.INFLATION_PROTECTION, params=params
        )
        # $500 -> EURM (2%), $500 -> USDM (3%), nothing left for the rest
        assert analysis.projections.optimized_rate == pytest.approx(2.5)

    def test_yield_from_provider(self, single_kes_balance, inflation_data, provider):
        """KESM earns 2% APY in the static tables: $20/year."""
        analysis = analyze_portfolio(single_kes_balance, inflation_data, provider=provider)
        assert analysis.yield_summary.total_annual_yield == pytest.approx(20.0)
        assert analysis.yield_summary.total_inflation_cost == pytest.approx(150.0)
        assert analysis.yield_summary.is_net_positive is False

    def test_goal_scores(self, mixed_balances, inflation_data):
        analysis = analyze_portfolio(mixed_balances, inflation_data)
        assert analysis.goal_scores.rwa == 85.0
        assert analysis.goal_scores.diversify == analysis.diversification_score

    def test_invalid_goal_raises(self, single_kes_balance, inflation_data):
        with pytest.raises(InvalidGoalError):
            analyze_portfolio(single_kes_balance, inflation_data, "get_rich")

    def test_deterministic(self, mixed_balances, inflation_data):
        first = analyze_portfolio(mixed_balances, inflation_data, Goal.GEOGRAPHIC_DIVERSIFICATION)
        second = analyze_portfolio(mixed_balances, inflation_data, Goal.GEOGRAPHIC_DIVERSIFICATION)
        assert first == second
        assert isinstance(first, PortfolioAnalysis)


class TestDiversificationTips:
    """Tests for build_diversification_tips."""

    def test_single_holding_gets_every_tip(self, single_kes_balance, inflation_data):
        analysis = analyze_portfolio(single_kes_balance, inflation_data)
        tips = analysis.diversification_tips
        assert _codes(tips) == [
            ReasonCode.ADD_REGIONS,
            ReasonCode.ADD_MISSING_REGIONS,
            ReasonCode.REDUCE_CONCENTRATION,
            ReasonCode.ADD_RWA_HEDGE,
        ]
        assert tips[0].params == {"min_regions": 3}
        assert tips[1].params == {"regions": ("USA", "Europe")}
        assert tips[3].params == {"symbol": "PAXG"}

    def test_well_diversified_with_rwa(self):
        tokens = (TokenAllocation("PAXG", 100.0, 100.0, Region.GLOBAL, 3.0),)
        assert build_diversification_tips(tokens, 85.0, (), ConcentrationRisk.LOW) == ()


class TestGoalAnalysis:
    """Tests for build_goal_analysis headlines."""

    def test_diversification_balanced(self):
        ga = build_goal_analysis(Goal.GEOGRAPHIC_DIVERSIFICATION, (), 3.0, ())
        assert ga.headline.code == ReasonCode.REGIONALLY_BALANCED
        assert ga.top_opportunity is None

    def test_diversification_spread(self, single_kes_balance, inflation_data):
        analysis = analyze_portfolio(single_kes_balance, inflation_data, Goal.GEOGRAPHIC_DIVERSIFICATION)
        headline = analysis.goal_analysis.headline
        assert headline.code == ReasonCode.SPREAD_INTO_TARGET
        assert headline.params == {"from_token": "KESM", "to_token": "EURM"}

    def test_rwa_held(self):
        tokens = (TokenAllocation("USDY", 100.0, 100.0, Region.USA, 3.0),)
        ga = build_goal_analysis(Goal.RWA_ACCESS, tokens, 3.0, ())
        assert ga.headline.code == ReasonCode.HAS_RWA_EXPOSURE

    def test_inflation_protection_threshold(self):
        """Exactly 5% is not high exposure."""
        ga = build_goal_analysis(Goal.INFLATION_PROTECTION, (), 5.0, ())
        assert ga.headline.code == ReasonCode.LOW_INFLATION_EXPOSURE

    def test_exploring(self):
        ga = build_goal_analysis(Goal.EXPLORING, (), 9.0, ())
        assert ga.headline.code == ReasonCode.PERSONALIZED_OPPORTUNITIES
        assert ga.goal == Goal.EXPLORING


class TestImmutableResults:
    """Results are values: nothing reachable from them can be edited."""

    def test_reason_params_are_read_only(self):
        reason = Reason(ReasonCode.ADD_MISSING_REGIONS, {"regions": ["USA", "Europe"]})
        assert isinstance(reason.params, ReasonParams)
        assert reason.params["regions"] == ("USA", "Europe")
        with pytest.raises(TypeError):
            reason.params["regions"] = ("Asia",)
        with pytest.raises(AttributeError):
            reason.params["regions"].append("Asia")

    def test_source_dict_changes_do_not_leak(self):
        params = {"symbol": "PAXG"}
        reason = Reason(ReasonCode.ADD_RWA_HEDGE, params)
        params["symbol"] = "USDY"
        assert reason.params["symbol"] == "PAXG"

    def test_equal_reasons_hash_equal(self):
        a = Reason(ReasonCode.ADD_REGIONS, {"min_regions": 3})
        b = Reason(ReasonCode.ADD_REGIONS, {"min_regions": 3})
        assert a == b
        assert hash(a) == hash(b)

    def test_to_dict_returns_plain_types(self):
        reason = Reason(ReasonCode.ADD_MISSING_REGIONS, {"regions": ("USA",)})
        assert reason.to_dict() == {"code": "add_missing_regions", "params": {"regions": ["USA"]}}

    def test_analysis_is_hashable(self, mixed_balances, inflation_data):
        first = analyze_portfolio(mixed_balances, inflation_data, Goal.INFLATION_PROTECTION)
        second = analyze_portfolio(mixed_balances, inflation_data, Goal.INFLATION_PROTECTION)
        assert hash(first) == hash(second)
