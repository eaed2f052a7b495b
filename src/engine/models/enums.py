"""Engine layer enumerations.

Centralized location for all enums used in the engine layer.
"""

from enum import Enum


class ConcentrationRisk(str, Enum):
    """Regional concentration classification."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"  # Largest region > 50%
    HIGH = "HIGH"  # Largest region > 70%


class DiversificationRating(str, Enum):
    """Banded diversification score."""

    EXCELLENT = "Excellent"  # >= 80
    GOOD = "Good"  # >= 60
    FAIR = "Fair"  # >= 40
    POOR = "Poor"  # >= 20
    VERY_POOR = "Very Poor"


class Priority(str, Enum):
    """Rebalancing / tour priority. Declaration order is sort order."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


class OptimizedRateMode(str, Enum):
    """How the projection's optimized inflation rate is derived."""

    FLAT = "flat"  # current rate x policy multiplier
    REBALANCE = "rebalance"  # rate after applying the suggested moves


class ReasonCode(str, Enum):
    """Locale-free reason codes emitted by the engine.

    Text rendering happens in src.business.formatters.
    """

    # Token scoring
    HARD_ASSET_HIGH_INFLATION = "hard_asset_high_inflation"
    NEGATIVE_REAL_YIELD = "negative_real_yield"
    REAL_YIELD_OPPORTUNITY_COST = "real_yield_opportunity_cost"
    GOLD_MOMENTUM = "gold_momentum"
    TREASURY_APY = "treasury_apy"
    POSITIVE_REAL_YIELD = "positive_real_yield"
    LOW_INFLATION_FAVORS_YIELD = "low_inflation_favors_yield"
    STRONG_RISK_ADJUSTED_RETURN = "strong_risk_adjusted_return"
    PRIMARY_REGIONAL_STABLECOIN = "primary_regional_stablecoin"

    # Diversification tips
    ADD_REGIONS = "add_regions"
    ADD_MISSING_REGIONS = "add_missing_regions"
    REDUCE_CONCENTRATION = "reduce_concentration"
    ADD_RWA_HEDGE = "add_rwa_hedge"

    # Goal analysis headlines
    SPREAD_INTO_TARGET = "spread_into_target"
    REGIONALLY_BALANCED = "regionally_balanced"
    HAS_RWA_EXPOSURE = "has_rwa_exposure"
    ADD_RWA_EXPOSURE = "add_rwa_exposure"
    HIGH_INFLATION_EXPOSURE = "high_inflation_exposure"
    LOW_INFLATION_EXPOSURE = "low_inflation_exposure"
    PERSONALIZED_OPPORTUNITIES = "personalized_opportunities"
