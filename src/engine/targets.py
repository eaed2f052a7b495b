"""Goal-based target allocations.

Each goal maps to a fixed regional weighting. Every non-zero region resolves
to a representative token; Global is chosen by the token scoring engine.
"""

from src.data.models.enums import Goal, Region, RiskTolerance
from src.data.models.inflation import InflationDataset
from src.data.models.market import DEFAULT_MARKET_CONTEXT, MarketContext, UserContext
from src.data.providers.base import TokenMetricsProvider
from src.engine.classifier import FALLBACK_INFLATION_RATE, get_region_inflation_rate
from src.engine.models.portfolio import TargetAllocation, TargetAllocations
from src.engine.models.reasons import AllocationReason
from src.engine.scoring.token_scoring import get_best_token_for_region

# Region weights (%) per goal; every row sums to 100
GOAL_ALLOCATIONS: dict[Goal, dict[Region, float]] = {
    Goal.INFLATION_PROTECTION: {
        Region.EUROPE: 35,
        Region.USA: 30,
        Region.GLOBAL: 25,
        Region.ASIA: 10,
        Region.AFRICA: 0,
        Region.LATAM: 0,
    },
    Goal.GEOGRAPHIC_DIVERSIFICATION: {
        Region.EUROPE: 25,
        Region.USA: 20,
        Region.GLOBAL: 5,
        Region.ASIA: 20,
        Region.AFRICA: 15,
        Region.LATAM: 15,
    },
    Goal.RWA_ACCESS: {
        Region.EUROPE: 20,
        Region.USA: 20,
        Region.GLOBAL: 50,
        Region.ASIA: 10,
        Region.AFRICA: 0,
        Region.LATAM: 0,
    },
    Goal.EXPLORING: {
        Region.EUROPE: 20,
        Region.USA: 20,
        Region.GLOBAL: 5,
        Region.ASIA: 20,
        Region.AFRICA: 20,
        Region.LATAM: 15,
    },
}

# User profile the Global slot is scored under
TARGET_SCORING_HORIZON_MONTHS = 12
TARGET_SCORING_PORTFOLIO_VALUE = 10000.0


def generate_target_allocations(
    goal: Goal | str,
    inflation_data: InflationDataset,
    market_context: MarketContext | None = None,
    provider: TokenMetricsProvider | None = None,
    fallback_rate: float = FALLBACK_INFLATION_RATE,
) -> tuple[TargetAllocation, ...]:
    """Build the target allocation for one goal.

    Holdings-independent. Zero-weight regions are omitted.

    Args:
        goal: Goal whose table is used.
        inflation_data: Regional inflation dataset (for reasons).
        market_context: Market snapshot used to score the Global slot.
        provider: Performance / APY source for the Global slot.
        fallback_rate: Rate reported for regions without a sample.

    Returns:
        TargetAllocation per non-zero region, in table order.
    """
    goal = Goal.parse(goal)
    market = market_context or DEFAULT_MARKET_CONTEXT
    user = UserContext(
        risk_tolerance=RiskTolerance.BALANCED,
        goal=goal,
        time_horizon_months=TARGET_SCORING_HORIZON_MONTHS,
        portfolio_value=TARGET_SCORING_PORTFOLIO_VALUE,
    )

    targets = []
    for region, weight in GOAL_ALLOCATIONS[goal].items():
        if weight <= 0:
            continue
        best = get_best_token_for_region(region, market, user, inflation_data, provider)
        targets.append(
            TargetAllocation(
                symbol=best.symbol,
                target_percentage=float(weight),
                reason=AllocationReason(
                    region=region,
                    inflation_rate=get_region_inflation_rate(region, inflation_data, fallback_rate),
                    goal=goal,
                ),
            )
        )
    return tuple(targets)


def generate_all_target_allocations(
    inflation_data: InflationDataset,
    market_context: MarketContext | None = None,
    provider: TokenMetricsProvider | None = None,
    fallback_rate: float = FALLBACK_INFLATION_RATE,
) -> TargetAllocations:
    """Target allocations for all four goals."""
    per_goal = {
        goal.value: generate_target_allocations(
            goal, inflation_data, market_context, provider, fallback_rate
        )
        for goal in Goal
    }
    return TargetAllocations(**per_goal)
