"""Policy parameters for the analysis engine.

Pure data containers. Defaults are the production policy; the business
layer builds instances from YAML (see src.business.config.analysis_config).
"""

from dataclasses import dataclass, field

from src.engine.models.enums import OptimizedRateMode


@dataclass(frozen=True)
class RiskThresholds:
    """Risk and gap thresholds, all in percent of portfolio value.

    Attributes:
        concentration_high: Max regional share above which risk is HIGH.
        concentration_medium: Max regional share above which risk is MEDIUM.
        over_exposed: Regional share above which a region is over-exposed.
        under_exposed: Regional share below which a held region is under-exposed.
        fallback_inflation_rate: Rate used for unmapped tokens / missing samples.
    """

    concentration_high: float = 70.0
    concentration_medium: float = 50.0
    over_exposed: float = 50.0
    under_exposed: float = 10.0
    fallback_inflation_rate: float = 3.0


@dataclass(frozen=True)
class RebalancingParams:
    """Rebalancing opportunity policy.

    Attributes:
        source_min_inflation: Holdings above this rate are move candidates.
        max_opportunities: Cap on returned opportunities.
        large_position_share: Share (%) above which the large fraction applies.
        large_position_fraction: Fraction moved out of a large position.
        default_fraction: Fraction moved out of any other position.
    """

    source_min_inflation: float = 5.0
    max_opportunities: int = 5
    large_position_share: float = 50.0
    large_position_fraction: float = 0.5
    default_fraction: float = 0.25


@dataclass(frozen=True)
class ProjectionParams:
    """Purchasing-power projection policy.

    Attributes:
        horizon_years: Projection horizon.
        optimized_rate_multiplier: Flat-mode multiplier on the current rate.
        optimized_rate_mode: Flat multiplier or derived from suggested moves.
    """

    horizon_years: int = 3
    optimized_rate_multiplier: float = 0.6
    optimized_rate_mode: OptimizedRateMode = OptimizedRateMode.FLAT


@dataclass(frozen=True)
class AnalysisParams:
    """All engine policy parameters."""

    risk: RiskThresholds = field(default_factory=RiskThresholds)
    rebalancing: RebalancingParams = field(default_factory=RebalancingParams)
    projection: ProjectionParams = field(default_factory=ProjectionParams)


DEFAULT_PARAMS = AnalysisParams()
