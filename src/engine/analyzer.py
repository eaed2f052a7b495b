"""Portfolio analysis orchestrator.

Single entry point turning a balance snapshot, a regional inflation dataset
and a goal into one immutable PortfolioAnalysis. Pure: no I/O, no clock and
no state kept between calls.

Usage:
    analysis = analyze_portfolio(balances, inflation_data, "inflation_protection")
    analysis.weighted_inflation_risk
    analysis.rebalancing_opportunities[0]
"""

import logging
from typing import Sequence

from src.data.models.enums import REGION_UNIVERSE, Goal
from src.data.models.holdings import ChainBalance
from src.data.models.inflation import InflationDataset
from src.data.models.market import MarketContext
from src.data.providers.base import TokenMetricsProvider
from src.data.providers.static_provider import StaticTokenMetricsProvider
from src.engine.models.enums import ConcentrationRisk, ReasonCode
from src.engine.models.params import DEFAULT_PARAMS, AnalysisParams
from src.engine.models.portfolio import (
    GoalAnalysis,
    PortfolioAnalysis,
    Projections,
    RebalancingOpportunity,
    TokenAllocation,
)
from src.engine.models.reasons import Reason
from src.engine.portfolio.exposure import aggregate_allocations, aggregate_regional_exposure
from src.engine.portfolio.gaps import (
    find_missing_regions,
    find_over_exposed_regions,
    find_under_exposed_regions,
)
from src.engine.portfolio.risk_metrics import (
    calc_concentration_risk,
    calc_diversification_score,
    calc_weighted_inflation_risk,
    get_diversification_rating,
)
from src.engine.portfolio.yields import calc_goal_scores, calc_yield_summary, has_rwa_exposure
from src.engine.projection import calc_optimized_rate, calc_projections
from src.engine.rebalancing import generate_rebalancing_opportunities
from src.engine.targets import generate_all_target_allocations

logger = logging.getLogger(__name__)

# Tip thresholds
TIP_MIN_DIVERSIFICATION_SCORE = 60.0
TIP_MAX_MISSING_REGIONS = 2

# Goal headline threshold for inflation_protection (%)
HIGH_INFLATION_HEADLINE_RATE = 5.0


def build_diversification_tips(
    tokens: tuple[TokenAllocation, ...],
    diversification_score: float,
    missing_regions: tuple,
    concentration_risk: ConcentrationRisk,
) -> tuple[Reason, ...]:
    """Actionable diversification tips, in fixed order."""
    tips: list[Reason] = []
    if diversification_score < TIP_MIN_DIVERSIFICATION_SCORE:
        tips.append(Reason(ReasonCode.ADD_REGIONS, {"min_regions": 3}))
    if missing_regions:
        tips.append(
            Reason(
                ReasonCode.ADD_MISSING_REGIONS,
                {"regions": tuple(r.value for r in missing_regions[:TIP_MAX_MISSING_REGIONS])},
            )
        )
    if concentration_risk == ConcentrationRisk.HIGH:
        tips.append(Reason(ReasonCode.REDUCE_CONCENTRATION))
    if not has_rwa_exposure(tokens):
        tips.append(Reason(ReasonCode.ADD_RWA_HEDGE, {"symbol": "PAXG"}))
    return tuple(tips)


def build_goal_analysis(
    goal: Goal,
    tokens: tuple[TokenAllocation, ...],
    weighted_inflation_risk: float,
    opportunities: tuple[RebalancingOpportunity, ...],
) -> GoalAnalysis:
    """Pick the goal headline.

    - geographic_diversification: spread the top move, or already balanced
    - rwa_access: already holds a real-world asset, or should add one
    - inflation_protection: high (> 5%) or low inflation exposure
    - exploring: personalized opportunities
    """
    if goal == Goal.GEOGRAPHIC_DIVERSIFICATION:
        if opportunities:
            top = opportunities[0]
            headline = Reason(
                ReasonCode.SPREAD_INTO_TARGET,
                {"from_token": top.from_token, "to_token": top.to_token},
            )
        else:
            headline = Reason(ReasonCode.REGIONALLY_BALANCED)
    elif goal == Goal.RWA_ACCESS:
        if has_rwa_exposure(tokens):
            headline = Reason(ReasonCode.HAS_RWA_EXPOSURE)
        else:
            headline = Reason(ReasonCode.ADD_RWA_EXPOSURE)
    elif goal == Goal.INFLATION_PROTECTION:
        if weighted_inflation_risk > HIGH_INFLATION_HEADLINE_RATE:
            headline = Reason(
                ReasonCode.HIGH_INFLATION_EXPOSURE,
                {"weighted_inflation_risk": weighted_inflation_risk},
            )
        else:
            headline = Reason(ReasonCode.LOW_INFLATION_EXPOSURE)
    else:
        headline = Reason(ReasonCode.PERSONALIZED_OPPORTUNITIES)

    return GoalAnalysis(goal=goal, headline=headline, recommendations=opportunities)


def create_empty_analysis(
    inflation_dataset: InflationDataset,
    goal: Goal | str = Goal.EXPLORING,
    *,
    market_context: MarketContext | None = None,
    provider: TokenMetricsProvider | None = None,
    params: AnalysisParams | None = None,
) -> PortfolioAnalysis:
    """Zeroed analysis for an empty or zero-value portfolio.

    Every region is missing, concentration is LOW and projections are zero.
    Target allocations are still computed since they do not depend on
    holdings.
    """
    goal = Goal.parse(goal)
    params = params or DEFAULT_PARAMS
    provider = provider or StaticTokenMetricsProvider()

    return PortfolioAnalysis(
        missing_regions=REGION_UNIVERSE,
        concentration_risk=ConcentrationRisk.LOW,
        goal_analysis=build_goal_analysis(goal, (), 0.0, ()),
        target_allocations=generate_all_target_allocations(
            inflation_dataset,
            market_context,
            provider,
            params.risk.fallback_inflation_rate,
        ),
        projections=Projections(horizon_years=params.projection.horizon_years),
    )


def analyze_portfolio(
    balances: Sequence[ChainBalance] | None,
    inflation_dataset: InflationDataset,
    goal: Goal | str = Goal.EXPLORING,
    *,
    market_context: MarketContext | None = None,
    provider: TokenMetricsProvider | None = None,
    params: AnalysisParams | None = None,
) -> PortfolioAnalysis:
    """Analyze a portfolio's regional inflation exposure.

    Args:
        balances: Per-chain balances. None or empty yields a zeroed analysis.
        inflation_dataset: Region name -> RegionalInflation.
        goal: User goal. Values outside the goal set raise InvalidGoalError.
        market_context: Market snapshot for Global target scoring.
        provider: Token metrics (APY, performance). Defaults to static tables.
        params: Policy parameters. Defaults to DEFAULT_PARAMS.

    Returns:
        PortfolioAnalysis.

    Raises:
        InvalidGoalError: goal outside the closed goal set.
    """
    goal = Goal.parse(goal)
    params = params or DEFAULT_PARAMS
    provider = provider or StaticTokenMetricsProvider()
    fallback = params.risk.fallback_inflation_rate
    balances = list(balances or [])

    total_value = sum(b.value_usd for b in balances)
    if total_value <= 0:
        logger.debug("Empty or zero-value portfolio, returning zeroed analysis")
        return create_empty_analysis(
            inflation_dataset,
            goal,
            market_context=market_context,
            provider=provider,
            params=params,
        )

    # 1. Allocations and regional exposure
    tokens = aggregate_allocations(balances, inflation_dataset, provider, fallback)
    regional_exposure = aggregate_regional_exposure(tokens)

    # 2. Risk and diversification
    weighted_risk = calc_weighted_inflation_risk(tokens)
    diversification_score = calc_diversification_score(tokens, regional_exposure)
    concentration_risk = calc_concentration_risk(regional_exposure, params.risk)

    # 3. Gaps
    missing = find_missing_regions(regional_exposure)
    over_exposed = find_over_exposed_regions(regional_exposure, params.risk)
    under_exposed = find_under_exposed_regions(regional_exposure, params.risk)

    # 4. Recommendations
    opportunities = generate_rebalancing_opportunities(
        tokens, inflation_dataset, goal, params.rebalancing, provider, fallback
    )

    # 5. Projections
    optimized_rate = calc_optimized_rate(weighted_risk, tokens, opportunities, params.projection)
    projections = calc_projections(
        weighted_risk, optimized_rate, total_value, params.projection.horizon_years
    )

    logger.debug(
        f"Analyzed {len(tokens)} holdings across {len(regional_exposure)} regions: "
        f"risk={weighted_risk:.2f}% score={diversification_score:.1f} "
        f"opportunities={len(opportunities)}"
    )

    return PortfolioAnalysis(
        total_value=total_value,
        token_count=len(tokens),
        region_count=len(regional_exposure),
        tokens=tokens,
        regional_exposure=regional_exposure,
        weighted_inflation_risk=weighted_risk,
        diversification_score=diversification_score,
        diversification_rating=get_diversification_rating(diversification_score),
        diversification_tips=build_diversification_tips(
            tokens, diversification_score, missing, concentration_risk
        ),
        concentration_risk=concentration_risk,
        goal_scores=calc_goal_scores(tokens, weighted_risk, diversification_score),
        yield_summary=calc_yield_summary(tokens, weighted_risk),
        missing_regions=missing,
        over_exposed_regions=over_exposed,
        under_exposed_regions=under_exposed,
        rebalancing_opportunities=opportunities,
        goal_analysis=build_goal_analysis(goal, tokens, weighted_risk, opportunities),
        target_allocations=generate_all_target_allocations(
            inflation_dataset, market_context, provider, fallback
        ),
        projections=projections,
    )
