"""Calculation Engine Layer.

This module turns holdings, regional inflation data and market context into
risk metrics, token scores and recommendations. It processes input models
from the data layer and outputs immutable results for use by the business
layer. Nothing here performs I/O or keeps state between calls.

Architecture:
- classifier: Token -> region / asset kind / inflation rate
- portfolio/: Portfolio-level calculations (list[TokenAllocation])
    - exposure: Allocation and regional exposure aggregation
    - risk_metrics: Weighted inflation, diversification, concentration
    - gaps: Missing / over- / under-exposed regions
    - yields: Yield summary and goal scores
- scoring/: Token scoring engine and opportunity cost
- rebalancing: Rebalancing opportunity generator
- targets: Goal-based target allocations
- projection: Purchasing-power projections
- analyzer: analyze_portfolio() orchestrator
"""

from src.engine.analyzer import analyze_portfolio, create_empty_analysis
from src.engine.classifier import (
    get_asset_kind,
    get_region_inflation_rate,
    get_token_inflation_rate,
    get_token_region,
    is_rwa_token,
    normalize_symbol,
)
from src.engine.projection import (
    calc_optimized_rate,
    calc_projections,
    calc_rebalanced_inflation_rate,
)
from src.engine.rebalancing import generate_rebalancing_opportunities
from src.engine.scoring import (
    calc_opportunity_cost,
    calc_real_yield,
    get_best_token_for_region,
    score_tokens,
)
from src.engine.targets import (
    GOAL_ALLOCATIONS,
    generate_all_target_allocations,
    generate_target_allocations,
)

__all__ = [
    # Orchestrator
    "analyze_portfolio",
    "create_empty_analysis",
    # Classifier
    "get_asset_kind",
    "get_region_inflation_rate",
    "get_token_inflation_rate",
    "get_token_region",
    "is_rwa_token",
    "normalize_symbol",
    # Projection
    "calc_optimized_rate",
    "calc_projections",
    "calc_rebalanced_inflation_rate",
    # Rebalancing
    "generate_rebalancing_opportunities",
    # Scoring
    "calc_opportunity_cost",
    "calc_real_yield",
    "get_best_token_for_region",
    "score_tokens",
    # Targets
    "GOAL_ALLOCATIONS",
    "generate_all_target_allocations",
    "generate_target_allocations",
]
