"""Rebalancing opportunity generator.

Suggests partial moves out of high-inflation holdings into lower-inflation
tokens, biased by the user's goal.
"""

import logging

from src.data.models.enums import Goal, Region
from src.data.models.inflation import InflationDataset
from src.data.providers.base import TokenMetricsProvider
from src.engine.classifier import (
    FALLBACK_INFLATION_RATE,
    get_token_inflation_rate,
    get_token_region,
)
from src.engine.models.enums import Priority
from src.engine.models.params import RebalancingParams
from src.engine.models.portfolio import RebalancingOpportunity, TokenAllocation

logger = logging.getLogger(__name__)

_DEFAULT_PARAMS = RebalancingParams()

# One representative per region, offered as a target even when not held
REPRESENTATIVE_TARGETS: tuple[str, ...] = (
    "USDM",
    "EURM",
    "BRLM",
    "KESM",
    "PHPM",
    "PAXG",
    "USDY",
    "SYRUPUSDC",
)

# Target inflation caps per goal (%)
DEFAULT_TARGET_MAX_INFLATION = 4.0
DIVERSIFICATION_TARGET_MAX_INFLATION = 6.0
LOW_INFLATION_TARGET = 2.0

# Minimum source - target inflation gap for a pair to qualify
DIVERSIFICATION_MIN_DELTA = 1.0
DEFAULT_MIN_DELTA = 2.0


def build_target_universe(
    tokens: tuple[TokenAllocation, ...] | list[TokenAllocation],
    inflation_data: InflationDataset,
    provider: TokenMetricsProvider | None = None,
    fallback_rate: float = FALLBACK_INFLATION_RATE,
) -> list[TokenAllocation]:
    """Held tokens first, then the regional representatives not already held.

    Each symbol appears once. Unknown-region tokens are excluded since their
    inflation is only a fallback guess. Representatives carry zero value.
    """
    universe: list[TokenAllocation] = []
    seen: set[str] = set()

    for token in tokens:
        if token.symbol in seen or token.region == Region.UNKNOWN:
            continue
        seen.add(token.symbol)
        universe.append(token)

    for symbol in REPRESENTATIVE_TARGETS:
        if symbol in seen:
            continue
        seen.add(symbol)
        universe.append(
            TokenAllocation(
                symbol=symbol,
                value_usd=0.0,
                percentage=0.0,
                region=get_token_region(symbol),
                inflation_rate=get_token_inflation_rate(symbol, inflation_data, fallback_rate),
                yield_rate=provider.get_holding_apy(symbol) if provider is not None else 0.0,
            )
        )

    return universe


def select_targets(
    universe: list[TokenAllocation],
    held_regions: set[Region],
    goal: Goal,
) -> list[TokenAllocation]:
    """Filter the target universe by goal.

    - geographic_diversification: inflation <= 6, Global only when <= 2,
      regions not yet held first
    - rwa_access: Global region or inflation <= 2
    - inflation_protection / exploring: inflation <= 4

    An empty goal-specific set falls back to inflation <= 4.
    """
    if goal == Goal.GEOGRAPHIC_DIVERSIFICATION:
        targets = [
            t
            for t in universe
            if t.inflation_rate <= DIVERSIFICATION_TARGET_MAX_INFLATION
            and (t.region != Region.GLOBAL or t.inflation_rate <= LOW_INFLATION_TARGET)
        ]
        # Stable: keeps universe order inside each group
        targets.sort(key=lambda t: 0 if t.region not in held_regions else 1)
    elif goal == Goal.RWA_ACCESS:
        targets = [
            t
            for t in universe
            if t.region == Region.GLOBAL or t.inflation_rate <= LOW_INFLATION_TARGET
        ]
    else:
        targets = [t for t in universe if t.inflation_rate <= DEFAULT_TARGET_MAX_INFLATION]

    if not targets:
        targets = [t for t in universe if t.inflation_rate <= DEFAULT_TARGET_MAX_INFLATION]

    return targets


def is_goal_aligned(source: TokenAllocation, target: TokenAllocation, goal: Goal) -> bool:
    """Whether a move directly serves the goal.

    - geographic_diversification: the move changes region
    - rwa_access: the target is a Global asset
    - inflation_protection: the target inflation is <= 2
    """
    if goal == Goal.GEOGRAPHIC_DIVERSIFICATION:
        return source.region != target.region
    if goal == Goal.RWA_ACCESS:
        return target.region == Region.GLOBAL
    if goal == Goal.INFLATION_PROTECTION:
        return target.inflation_rate <= LOW_INFLATION_TARGET
    return False


def calc_priority(delta: float, amount: float, aligned: bool) -> Priority:
    """Rank a move.

    - HIGH: (delta > 5 and amount > 100) or (aligned and delta > 3)
    - MEDIUM: (delta > 3 and amount > 50) or aligned
    - LOW: otherwise
    """
    if (delta > 5 and amount > 100) or (aligned and delta > 3):
        return Priority.HIGH
    if (delta > 3 and amount > 50) or aligned:
        return Priority.MEDIUM
    return Priority.LOW


def generate_rebalancing_opportunities(
    tokens: tuple[TokenAllocation, ...] | list[TokenAllocation],
    inflation_data: InflationDataset,
    goal: Goal | str = Goal.EXPLORING,
    params: RebalancingParams = _DEFAULT_PARAMS,
    provider: TokenMetricsProvider | None = None,
    fallback_rate: float = FALLBACK_INFLATION_RATE,
) -> tuple[RebalancingOpportunity, ...]:
    """Generate ranked rebalancing opportunities.

    Sources are held tokens with inflation above ``params.source_min_inflation``.
    Every (source, target) pair with differing symbols and a large enough
    inflation gap yields one opportunity:

        amount = source value × (0.5 if source share > 50% else 0.25)
        annual_savings = amount × delta / 100

    Args:
        tokens: Held token allocations.
        inflation_data: Regional inflation dataset.
        goal: User goal.
        params: Rebalancing policy.
        provider: APY source for representative targets.
        fallback_rate: Inflation rate for unmapped tokens.

    Returns:
        Opportunities sorted by priority then annual savings (descending),
        capped at ``params.max_opportunities``. Empty when nothing qualifies.

    Example:
        # $1000 KESM at 15%, goal inflation_protection, Europe at 2.5%
        # -> KESM -> EURM, amount 500, delta 12.5, savings 62.5, HIGH
    """
    goal = Goal.parse(goal)
    total = sum(t.value_usd for t in tokens)
    if total <= 0:
        return ()

    sources = [t for t in tokens if t.inflation_rate > params.source_min_inflation]
    if not sources:
        return ()

    universe = build_target_universe(tokens, inflation_data, provider, fallback_rate)
    held_regions = {t.region for t in tokens}
    targets = select_targets(universe, held_regions, goal)

    min_delta = (
        DIVERSIFICATION_MIN_DELTA
        if goal == Goal.GEOGRAPHIC_DIVERSIFICATION
        else DEFAULT_MIN_DELTA
    )

    opportunities: list[RebalancingOpportunity] = []
    for source in sources:
        fraction = (
            params.large_position_fraction
            if source.percentage > params.large_position_share
            else params.default_fraction
        )
        amount = source.value_usd * fraction

        for target in targets:
            if source.symbol == target.symbol:
                continue

            delta = source.inflation_rate - target.inflation_rate
            if delta < min_delta:
                continue

            aligned = is_goal_aligned(source, target, goal)
            opportunities.append(
                RebalancingOpportunity(
                    from_token=source.symbol,
                    to_token=target.symbol,
                    from_region=source.region,
                    to_region=target.region,
                    suggested_amount=amount,
                    from_inflation=source.inflation_rate,
                    to_inflation=target.inflation_rate,
                    inflation_delta=delta,
                    annual_savings=amount * delta / 100,
                    priority=calc_priority(delta, amount, aligned),
                )
            )

    opportunities.sort(key=lambda o: (o.priority.rank, -o.annual_savings))
    logger.debug(
        f"{len(opportunities)} rebalancing pairs for goal {goal.value}, "
        f"keeping {min(len(opportunities), params.max_opportunities)}"
    )
    return tuple(opportunities[: params.max_opportunities])
