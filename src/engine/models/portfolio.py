"""Portfolio-level data models.

This module defines data structures for portfolio-level calculations,
following the principle that all calculation logic belongs in engine layer
while the business layer only renders and routes results.

Every model is frozen and holds tuples, so a PortfolioAnalysis is an
immutable value that can be shared across callers and cached.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.data.models.enums import Goal, Region
from src.engine.models.enums import (
    ConcentrationRisk,
    DiversificationRating,
    Priority,
)
from src.engine.models.reasons import AllocationReason, Reason


@dataclass(frozen=True)
class TokenAllocation:
    """One (chain, symbol) holding. Never merged across chains.

    Attributes:
        symbol: Canonical upper-case symbol.
        value_usd: Position value in USD.
        percentage: Share of total portfolio value (0-100).
        region: Classified region.
        inflation_rate: Inflation rate of the token's region (%).
        yield_rate: Token APY (%).
        chain_id: Originating chain.
    """

    symbol: str
    value_usd: float
    percentage: float
    region: Region
    inflation_rate: float
    yield_rate: float = 0.0
    chain_id: int | None = None


@dataclass(frozen=True)
class RegionalExposure:
    """Aggregated exposure to one region.

    Attributes:
        region: Region.
        value_usd: Total value across chains and tokens.
        percentage: Share of total portfolio value (0-100).
        avg_inflation_rate: Value-weighted inflation of contributing tokens.
        tokens: Distinct contributing symbols in first-seen order.
    """

    region: Region
    value_usd: float
    percentage: float
    avg_inflation_rate: float
    tokens: tuple[str, ...] = ()


@dataclass(frozen=True)
class RebalancingOpportunity:
    """Suggested partial move from a higher- to a lower-inflation token.

    Attributes:
        from_token: Source symbol.
        to_token: Target symbol.
        from_region: Source region.
        to_region: Target region.
        suggested_amount: USD amount to move.
        from_inflation: Source inflation (%).
        to_inflation: Target inflation (%).
        inflation_delta: from_inflation - to_inflation.
        annual_savings: USD of purchasing power preserved per year.
        priority: HIGH / MEDIUM / LOW.
    """

    from_token: str
    to_token: str
    from_region: Region
    to_region: Region
    suggested_amount: float
    from_inflation: float
    to_inflation: float
    inflation_delta: float
    annual_savings: float
    priority: Priority


@dataclass(frozen=True)
class TargetAllocation:
    """Ideal allocation slot for a goal.

    Attributes:
        symbol: Representative token for the region.
        target_percentage: Target share (0-100).
        reason: Parameterized reason (region, inflation, goal).
    """

    symbol: str
    target_percentage: float
    reason: AllocationReason


@dataclass(frozen=True)
class GoalScores:
    """0-100 grades per goal."""

    hedge: float = 0.0
    diversify: float = 0.0
    rwa: float = 0.0


@dataclass(frozen=True)
class YieldSummary:
    """Annual yield versus inflation cost.

    Attributes:
        total_annual_yield: USD earned per year from token APYs.
        total_inflation_cost: USD of purchasing power lost per year.
        net_annual_gain: Yield minus inflation cost.
        avg_yield_rate: Value-weighted APY (%).
        net_rate: avg_yield_rate - weighted inflation risk.
        is_net_positive: Whether yield covers inflation.
    """

    total_annual_yield: float = 0.0
    total_inflation_cost: float = 0.0
    net_annual_gain: float = 0.0
    avg_yield_rate: float = 0.0
    net_rate: float = 0.0
    is_net_positive: bool = True


@dataclass(frozen=True)
class GoalAnalysis:
    """Goal-specific headline and the recommendations backing it."""

    goal: Goal = Goal.EXPLORING
    headline: Reason | None = None
    recommendations: tuple[RebalancingOpportunity, ...] = ()

    @property
    def top_opportunity(self) -> RebalancingOpportunity | None:
        return self.recommendations[0] if self.recommendations else None


@dataclass(frozen=True)
class CurrentPath:
    """Purchasing power if nothing changes."""

    value_1_year: float = 0.0
    value_at_horizon: float = 0.0
    purchasing_power_lost: float = 0.0


@dataclass(frozen=True)
class OptimizedPath:
    """Purchasing power at the optimized inflation rate."""

    value_1_year: float = 0.0
    value_at_horizon: float = 0.0
    purchasing_power_preserved: float = 0.0


@dataclass(frozen=True)
class Projections:
    """Current versus optimized purchasing-power paths.

    Attributes:
        horizon_years: Projection horizon.
        current_rate: Rate used for the current path (%).
        optimized_rate: Rate used for the optimized path (%).
        current_path: Current path values.
        optimized_path: Optimized path values.
    """

    horizon_years: int = 3
    current_rate: float = 0.0
    optimized_rate: float = 0.0
    current_path: CurrentPath = field(default_factory=CurrentPath)
    optimized_path: OptimizedPath = field(default_factory=OptimizedPath)


@dataclass(frozen=True)
class TargetAllocations:
    """Target allocations for every goal. Always fully populated."""

    inflation_protection: tuple[TargetAllocation, ...] = ()
    geographic_diversification: tuple[TargetAllocation, ...] = ()
    rwa_access: tuple[TargetAllocation, ...] = ()
    exploring: tuple[TargetAllocation, ...] = ()

    def for_goal(self, goal: Goal) -> tuple[TargetAllocation, ...]:
        return getattr(self, goal.value)


@dataclass(frozen=True)
class PortfolioAnalysis:
    """Immutable snapshot of a portfolio's inflation exposure.

    Pure data container with no calculation logic; built by
    src.engine.analyzer.analyze_portfolio().
    """

    # Aggregate stats
    total_value: float = 0.0
    token_count: int = 0
    region_count: int = 0
    tokens: tuple[TokenAllocation, ...] = ()
    regional_exposure: tuple[RegionalExposure, ...] = ()

    # Risk metrics
    weighted_inflation_risk: float = 0.0
    diversification_score: float = 0.0
    diversification_rating: DiversificationRating = DiversificationRating.VERY_POOR
    diversification_tips: tuple[Reason, ...] = ()
    concentration_risk: ConcentrationRisk = ConcentrationRisk.LOW
    goal_scores: GoalScores = field(default_factory=GoalScores)

    # Financial metrics
    yield_summary: YieldSummary = field(default_factory=YieldSummary)

    # Gap analysis
    missing_regions: tuple[Region, ...] = ()
    over_exposed_regions: tuple[Region, ...] = ()
    under_exposed_regions: tuple[Region, ...] = ()

    # Recommendations
    rebalancing_opportunities: tuple[RebalancingOpportunity, ...] = ()
    goal_analysis: GoalAnalysis = field(default_factory=GoalAnalysis)
    target_allocations: TargetAllocations = field(default_factory=TargetAllocations)

    # Projections
    projections: Projections = field(default_factory=Projections)
