"""Portfolio-level calculations for regional inflation exposure.

This module provides calculations at the portfolio level:
- Exposure aggregation (per-token allocations, per-region exposure)
- Risk metrics (weighted inflation, diversification, concentration)
- Gap analysis (missing, over- and under-exposed regions)
- Yield summary and goal scores
"""

from src.engine.portfolio.exposure import (
    aggregate_allocations,
    aggregate_regional_exposure,
    calc_total_value,
)
from src.engine.portfolio.gaps import (
    find_missing_regions,
    find_over_exposed_regions,
    find_under_exposed_regions,
)
from src.engine.portfolio.risk_metrics import (
    calc_concentration_risk,
    calc_diversification_score,
    calc_regional_hhi,
    calc_weighted_inflation_risk,
    get_diversification_rating,
)
from src.engine.portfolio.yields import (
    calc_goal_scores,
    calc_yield_summary,
    has_rwa_exposure,
)

__all__ = [
    # Exposure
    "aggregate_allocations",
    "aggregate_regional_exposure",
    "calc_total_value",
    # Gaps
    "find_missing_regions",
    "find_over_exposed_regions",
    "find_under_exposed_regions",
    # Risk metrics
    "calc_concentration_risk",
    "calc_diversification_score",
    "calc_regional_hhi",
    "calc_weighted_inflation_risk",
    "get_diversification_rating",
    # Yield
    "calc_goal_scores",
    "calc_yield_summary",
    "has_rwa_exposure",
]
