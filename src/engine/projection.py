"""Purchasing-power projections.

Compares the current path (current weighted inflation) with an optimized
path over a multi-year horizon:

    value(t) = total × (1 - rate / 100) ^ t
"""

import logging

from src.engine.models.enums import OptimizedRateMode
from src.engine.models.params import ProjectionParams
from src.engine.models.portfolio import (
    CurrentPath,
    OptimizedPath,
    Projections,
    RebalancingOpportunity,
    TokenAllocation,
)

logger = logging.getLogger(__name__)

_DEFAULT_PARAMS = ProjectionParams()

MAX_RATE = 100.0


def _clamp_rate(rate: float) -> float:
    if rate >= MAX_RATE:
        logger.debug(f"Inflation rate {rate}% clamped to {MAX_RATE}%")
        return MAX_RATE
    return rate


def project_value(total_value: float, rate: float, years: int) -> float:
    """Value after ``years`` of compounding erosion at ``rate`` %.

    Rates at or above 100% are clamped, so the value floors at 0.

    Example:
        >>> round(project_value(1000, 6, 3), 2)
        830.58
    """
    return total_value * (1 - _clamp_rate(rate) / 100) ** years


def calc_projections(
    current_rate: float,
    optimized_rate: float,
    total_value: float,
    horizon_years: int = 3,
) -> Projections:
    """Calculate current versus optimized purchasing-power paths.

    Args:
        current_rate: Current weighted inflation (%).
        optimized_rate: Inflation after optimization (%).
        total_value: Portfolio value today.
        horizon_years: Projection horizon.

    Returns:
        Projections with both paths. Lost = total - current at horizon;
        preserved = optimized at horizon - current at horizon.

    Example:
        # $1000 at 6% over 3 years
        # current_path.value_at_horizon = 1000 × 0.94³ ≈ 830.58
    """
    current_1y = project_value(total_value, current_rate, 1)
    current_h = project_value(total_value, current_rate, horizon_years)
    optimized_1y = project_value(total_value, optimized_rate, 1)
    optimized_h = project_value(total_value, optimized_rate, horizon_years)

    return Projections(
        horizon_years=horizon_years,
        current_rate=current_rate,
        optimized_rate=optimized_rate,
        current_path=CurrentPath(
            value_1_year=current_1y,
            value_at_horizon=current_h,
            purchasing_power_lost=total_value - current_h,
        ),
        optimized_path=OptimizedPath(
            value_1_year=optimized_1y,
            value_at_horizon=optimized_h,
            purchasing_power_preserved=optimized_h - current_h,
        ),
    )


def calc_rebalanced_inflation_rate(
    tokens: tuple[TokenAllocation, ...] | list[TokenAllocation],
    opportunities: tuple[RebalancingOpportunity, ...] | list[RebalancingOpportunity],
) -> float:
    """Weighted inflation after applying the suggested moves.

    Moves are applied in order. Each move takes at most what is left of the
    source token across all its chains, so overlapping suggestions never
    move more than is held.

    Args:
        tokens: Held token allocations.
        opportunities: Suggested moves.

    Returns:
        Weighted inflation (%) of the rebalanced portfolio. 0 when empty.
    """
    total = sum(t.value_usd for t in tokens)
    if total <= 0:
        return 0.0

    remaining: dict[str, float] = {}
    rates: dict[str, float] = {}
    for t in tokens:
        remaining[t.symbol] = remaining.get(t.symbol, 0.0) + t.value_usd
        rates[t.symbol] = t.inflation_rate

    for opp in opportunities:
        moved = min(opp.suggested_amount, remaining.get(opp.from_token, 0.0))
        if moved <= 0:
            continue
        remaining[opp.from_token] -= moved
        remaining[opp.to_token] = remaining.get(opp.to_token, 0.0) + moved
        rates.setdefault(opp.to_token, opp.to_inflation)

    return sum(value * rates[symbol] for symbol, value in remaining.items()) / total


def calc_optimized_rate(
    current_rate: float,
    tokens: tuple[TokenAllocation, ...] | list[TokenAllocation],
    opportunities: tuple[RebalancingOpportunity, ...] | list[RebalancingOpportunity],
    params: ProjectionParams = _DEFAULT_PARAMS,
) -> float:
    """Pick the optimized rate according to ``params.optimized_rate_mode``."""
    if params.optimized_rate_mode == OptimizedRateMode.REBALANCE:
        return calc_rebalanced_inflation_rate(tokens, opportunities)
    return current_rate * params.optimized_rate_multiplier
