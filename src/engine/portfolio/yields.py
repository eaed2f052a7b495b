"""Yield versus inflation-cost summary and goal grades."""

from src.engine.classifier import is_rwa_token
from src.engine.models.portfolio import GoalScores, TokenAllocation, YieldSummary

# Grade given to any portfolio holding a real-world asset
RWA_GOAL_SCORE = 85.0


def calc_yield_summary(
    tokens: list[TokenAllocation] | tuple[TokenAllocation, ...],
    weighted_inflation_risk: float,
) -> YieldSummary:
    """Compare annual yield income with annual inflation cost.

    Formula:
        yield = Σ(value × apy / 100)
        cost = Σ(value × inflation / 100)
        avg_yield_rate = yield / total × 100
        net_rate = avg_yield_rate - weighted_inflation_risk

    Args:
        tokens: Token allocations (yield_rate populated).
        weighted_inflation_risk: Portfolio weighted inflation (%).

    Returns:
        YieldSummary, all zeros for an empty portfolio.
    """
    total = sum(t.value_usd for t in tokens)
    if total <= 0:
        return YieldSummary()

    total_yield = sum(t.value_usd * t.yield_rate / 100 for t in tokens)
    inflation_cost = sum(t.value_usd * t.inflation_rate / 100 for t in tokens)
    net_gain = total_yield - inflation_cost
    avg_yield_rate = total_yield / total * 100

    return YieldSummary(
        total_annual_yield=total_yield,
        total_inflation_cost=inflation_cost,
        net_annual_gain=net_gain,
        avg_yield_rate=avg_yield_rate,
        net_rate=avg_yield_rate - weighted_inflation_risk,
        is_net_positive=net_gain >= 0,
    )


def has_rwa_exposure(tokens: list[TokenAllocation] | tuple[TokenAllocation, ...]) -> bool:
    return any(is_rwa_token(t.symbol) for t in tokens)


def calc_goal_scores(
    tokens: list[TokenAllocation] | tuple[TokenAllocation, ...],
    weighted_inflation_risk: float,
    diversification_score: float,
) -> GoalScores:
    """Grade the portfolio 0-100 against each goal.

    - hedge: 100 - 10 per point of weighted inflation, floored at 0
    - diversify: the diversification score
    - rwa: 85 with any real-world asset held, else 0
    """
    if not tokens:
        return GoalScores()

    return GoalScores(
        hedge=max(0.0, 100 - weighted_inflation_risk * 10),
        diversify=diversification_score,
        rwa=RWA_GOAL_SCORE if has_rwa_exposure(tokens) else 0.0,
    )
