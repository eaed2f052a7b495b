"""Tests for the rebalancing opportunity generator.

Fixture rates: Africa 15, LatAm 8, Asia 3.5, USA 3, Europe 2,
Global (no sample) 3.
"""

import pytest

from src.data.models.enums import Goal, InvalidGoalError, Region
from src.data.models.holdings import ChainBalance
from src.engine.models.enums import Priority
from src.engine.models.params import RebalancingParams
from src.engine.models.portfolio import TokenAllocation
from src.engine.portfolio.exposure import aggregate_allocations
from src.engine.rebalancing import (
    REPRESENTATIVE_TARGETS,
    build_target_universe,
    calc_priority,
    generate_rebalancing_opportunities,
    is_goal_aligned,
    select_targets,
)


def _tokens(balances, inflation_data, provider=None):
    return aggregate_allocations(balances, inflation_data, provider)


class TestTargetUniverse:
    """Tests for build_target_universe and select_targets."""

    def test_held_first_then_representatives(self, single_kes_balance, inflation_data):
        universe = build_target_universe(_tokens(single_kes_balance, inflation_data), inflation_data)
        symbols = [t.symbol for t in universe]
        assert symbols[0] == "KESM"
        assert symbols[1:] == [s for s in REPRESENTATIVE_TARGETS if s != "KESM"]

    def test_symbols_unique(self, mixed_balances, inflation_data):
        universe = build_target_universe(_tokens(mixed_balances, inflation_data), inflation_data)
        symbols = [t.symbol for t in universe]
        assert len(symbols) == len(set(symbols))

    def test_unknown_region_excluded(self, inflation_data):
        balances = [ChainBalance(chain_id=1, symbol="DOGE", value_usd=100.0)]
        universe = build_target_universe(_tokens(balances, inflation_data), inflation_data)
        assert "DOGE" not in [t.symbol for t in universe]

    def test_representatives_carry_apy(self, single_kes_balance, inflation_data, provider):
        tokens = _tokens(single_kes_balance, inflation_data, provider)
        universe = {t.symbol: t for t in build_target_universe(tokens, inflation_data, provider)}
        assert universe["USDY"].yield_rate == 5.0
        assert universe["USDY"].value_usd == 0.0

    def test_rwa_targets(self, single_kes_balance, inflation_data):
        """rwa_access keeps Global assets and the <= 2% region."""
        universe = build_target_universe(_tokens(single_kes_balance, inflation_data), inflation_data)
        targets = select_targets(universe, {Region.AFRICA}, Goal.RWA_ACCESS)
        assert [t.symbol for t in targets] == ["EURM", "PAXG", "SYRUPUSDC"]

    def test_diversification_targets_prefer_new_regions(self, inflation_data):
        """Held regions sort after new ones; Global needs <= 2%."""
        balances = [
            ChainBalance(chain_id=1, symbol="KESm", value_usd=500.0),
            ChainBalance(chain_id=1, symbol="USDm", value_usd=500.0),
        ]
        tokens = _tokens(balances, inflation_data)
        universe = build_target_universe(tokens, inflation_data)
        targets = select_targets(universe, {Region.AFRICA, Region.USA}, Goal.GEOGRAPHIC_DIVERSIFICATION)
        symbols = [t.symbol for t in targets]
        assert symbols == ["EURM", "PHPM", "USDM", "USDY"]

    def test_empty_goal_set_falls_back(self):
        """No Global or <= 2% target: rwa_access falls back to <= 4%."""
        universe = [
            TokenAllocation("USDM", 0.0, 0.0, Region.USA, 3.0),
            TokenAllocation("KESM", 0.0, 0.0, Region.AFRICA, 15.0),
        ]
        targets = select_targets(universe, set(), Goal.RWA_ACCESS)
        assert [t.symbol for t in targets] == ["USDM"]


class TestPriority:
    """Tests for calc_priority and goal alignment."""

    @pytest.mark.parametrize(
        "delta,amount,aligned,expected",
        [
            (5.1, 101.0, False, Priority.HIGH),
            (5.0, 1000.0, False, Priority.MEDIUM),
            (3.1, 10.0, True, Priority.HIGH),
            (3.0, 10.0, True, Priority.MEDIUM),
            (3.1, 51.0, False, Priority.MEDIUM),
            (3.1, 50.0, False, Priority.LOW),
            (2.0, 1000.0, False, Priority.LOW),
        ],
    )
    def test_priority_rules(self, delta, amount, aligned, expected):
        assert calc_priority(delta, amount, aligned) == expected

    def test_alignment_per_goal(self):
        kes = TokenAllocation("KESM", 100.0, 100.0, Region.AFRICA, 15.0)
        eur = TokenAllocation("EURM", 0.0, 0.0, Region.EUROPE, 2.0)
        usd = TokenAllocation("USDM", 0.0, 0.0, Region.USA, 3.0)
        paxg = TokenAllocation("PAXG", 0.0, 0.0, Region.GLOBAL, 3.0)

        assert is_goal_aligned(kes, eur, Goal.INFLATION_PROTECTION)
        assert not is_goal_aligned(kes, usd, Goal.INFLATION_PROTECTION)
        assert is_goal_aligned(kes, usd, Goal.GEOGRAPHIC_DIVERSIFICATION)
        assert is_goal_aligned(kes, paxg, Goal.RWA_ACCESS)
        assert not is_goal_aligned(kes, eur, Goal.RWA_ACCESS)
        assert not is_goal_aligned(kes, eur, Goal.EXPLORING)


class TestGenerateOpportunities:
    """Tests for generate_rebalancing_opportunities."""

    def test_single_high_inflation_holding(self, single_kes_balance, inflation_data):
        """$1000 KESM (100% share) for inflation protection.

        Fraction 0.5 -> $500 moved. Top pick is EURM:
        delta = 15 - 2 = 13, savings = 500 × 13 / 100 = 65
        """
        tokens = _tokens(single_kes_balance, inflation_data)
        opps = generate_rebalancing_opportunities(tokens, inflation_data, Goal.INFLATION_PROTECTION)

        assert [o.to_token for o in opps] == ["EURM", "USDM", "PAXG", "USDY", "SYRUPUSDC"]
        top = opps[0]
        assert top.from_token == "KESM"
        assert top.from_region == Region.AFRICA
        assert top.to_region == Region.EUROPE
        assert top.suggested_amount == pytest.approx(500.0)
        assert top.inflation_delta == pytest.approx(13.0)
        assert top.annual_savings == pytest.approx(65.0)
        assert top.priority == Priority.HIGH

    def test_capped_at_max_opportunities(self, single_kes_balance, inflation_data):
        tokens = _tokens(single_kes_balance, inflation_data)
        opps = generate_rebalancing_opportunities(
            tokens, inflation_data, Goal.INFLATION_PROTECTION, RebalancingParams(max_opportunities=2)
        )
        assert len(opps) == 2

    def test_nothing_above_source_threshold(self, low_inflation_data):
        """Every holding at or below 5%: no opportunities."""
        balances = [
            ChainBalance(chain_id=1, symbol="KESm", value_usd=500.0),
            ChainBalance(chain_id=1, symbol="BRLm", value_usd=500.0),
        ]
        tokens = _tokens(balances, low_inflation_data)
        assert generate_rebalancing_opportunities(tokens, low_inflation_data) == ()

    def test_empty_portfolio(self, inflation_data):
        assert generate_rebalancing_opportunities((), inflation_data) == ()

    def test_small_position_uses_default_fraction(self, mixed_balances, inflation_data):
        """KESM is 20% of the portfolio: 0.25 × $200 = $50 moved.

        Exploring: delta 13 but amount 50 is not > 100 and not > 50 -> LOW.
        """
        tokens = _tokens(mixed_balances, inflation_data)
        opps = generate_rebalancing_opportunities(tokens, inflation_data, Goal.EXPLORING)
        assert opps
        assert all(o.from_token == "KESM" for o in opps)
        assert all(o.suggested_amount == pytest.approx(50.0) for o in opps)
        assert all(o.priority == Priority.LOW for o in opps)

    def test_aligned_small_move_is_high(self, mixed_balances, inflation_data):
        """Inflation protection: KESM -> EURM is aligned with delta 13 > 3."""
        tokens = _tokens(mixed_balances, inflation_data)
        opps = generate_rebalancing_opportunities(tokens, inflation_data, Goal.INFLATION_PROTECTION)
        assert opps[0].to_token == "EURM"
        assert opps[0].priority == Priority.HIGH

    def test_geographic_diversification(self, single_kes_balance, inflation_data):
        """Global targets above 2% are excluded; every region change is aligned."""
        tokens = _tokens(single_kes_balance, inflation_data)
        opps = generate_rebalancing_opportunities(
            tokens, inflation_data, Goal.GEOGRAPHIC_DIVERSIFICATION
        )
        assert [o.to_token for o in opps] == ["EURM", "USDM", "USDY", "PHPM"]
        assert all(o.to_region != o.from_region for o in opps)

    def test_rwa_access(self, single_kes_balance, inflation_data):
        tokens = _tokens(single_kes_balance, inflation_data)
        opps = generate_rebalancing_opportunities(tokens, inflation_data, "rwa_access")
        assert [o.to_token for o in opps] == ["EURM", "PAXG", "SYRUPUSDC"]

    def test_sorted_by_priority_then_savings(self, mixed_balances, inflation_data):
        tokens = _tokens(mixed_balances, inflation_data)
        for goal in Goal:
            opps = generate_rebalancing_opportunities(tokens, inflation_data, goal)
            keys = [(o.priority.rank, -o.annual_savings) for o in opps]
            assert keys == sorted(keys)

    def test_invariants(self, mixed_balances, inflation_data):
        """Positive delta and savings, no self-moves."""
        tokens = _tokens(mixed_balances, inflation_data)
        for goal in Goal:
            for o in generate_rebalancing_opportunities(tokens, inflation_data, goal):
                assert o.from_token != o.to_token
                assert o.inflation_delta > 0
                assert o.annual_savings > 0

    def test_deterministic(self, mixed_balances, inflation_data):
        tokens = _tokens(mixed_balances, inflation_data)
        first = generate_rebalancing_opportunities(tokens, inflation_data, Goal.RWA_ACCESS)
        second = generate_rebalancing_opportunities(tokens, inflation_data, Goal.RWA_ACCESS)
        assert first == second

    def test_invalid_goal(self, single_kes_balance, inflation_data):
        tokens = _tokens(single_kes_balance, inflation_data)
        with pytest.raises(InvalidGoalError):
            generate_rebalancing_opportunities(tokens, inflation_data, "moon")
