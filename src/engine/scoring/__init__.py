"""Token scoring: composite desirability ranking and opportunity cost."""

from src.engine.scoring.token_scoring import (
    GLOBAL_CANDIDATES,
    REGION_PRIMARY_TOKEN,
    calc_opportunity_cost,
    calc_real_yield,
    get_best_token_for_region,
    score_tokens,
)

__all__ = [
    "GLOBAL_CANDIDATES",
    "REGION_PRIMARY_TOKEN",
    "calc_opportunity_cost",
    "calc_real_yield",
    "get_best_token_for_region",
    "score_tokens",
]
