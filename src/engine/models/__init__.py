"""Engine layer data models.

This module provides data models for the calculation engine layer,
designed to work with data layer models (src.data.models) while
providing clean interfaces for engine functions.

Models:
    TokenAllocation: One (chain, symbol) holding
    RegionalExposure: Aggregated exposure to one region
    RebalancingOpportunity: Suggested move to a lower-inflation token
    TargetAllocation: Ideal allocation slot for a goal
    PortfolioAnalysis: Full analysis snapshot
    TokenScore: Composite token desirability score
    Reason / AllocationReason: Locale-free reason codes with parameters
    AnalysisParams: Policy thresholds

Enums:
    ConcentrationRisk: LOW / MEDIUM / HIGH
    DiversificationRating: Banded diversification score
    Priority: Rebalancing priority
    OptimizedRateMode: Projection optimized-rate derivation
    ReasonCode: Reason codes
"""

from src.engine.models.enums import (
    ConcentrationRisk,
    DiversificationRating,
    OptimizedRateMode,
    Priority,
    ReasonCode,
)
from src.engine.models.params import (
    DEFAULT_PARAMS,
    AnalysisParams,
    ProjectionParams,
    RebalancingParams,
    RiskThresholds,
)
from src.engine.models.portfolio import (
    CurrentPath,
    GoalAnalysis,
    GoalScores,
    OptimizedPath,
    PortfolioAnalysis,
    Projections,
    RebalancingOpportunity,
    RegionalExposure,
    TargetAllocation,
    TargetAllocations,
    TokenAllocation,
    YieldSummary,
)
from src.engine.models.reasons import AllocationReason, Reason
from src.engine.models.result import OpportunityCost, ScoreBreakdown, TokenScore

__all__ = [
    # Enums
    "ConcentrationRisk",
    "DiversificationRating",
    "OptimizedRateMode",
    "Priority",
    "ReasonCode",
    # Params
    "DEFAULT_PARAMS",
    "AnalysisParams",
    "ProjectionParams",
    "RebalancingParams",
    "RiskThresholds",
    # Portfolio
    "CurrentPath",
    "GoalAnalysis",
    "GoalScores",
    "OptimizedPath",
    "PortfolioAnalysis",
    "Projections",
    "RebalancingOpportunity",
    "RegionalExposure",
    "TargetAllocation",
    "TargetAllocations",
    "TokenAllocation",
    "YieldSummary",
    # Reasons
    "AllocationReason",
    "Reason",
    # Scoring
    "OpportunityCost",
    "ScoreBreakdown",
    "TokenScore",
]
