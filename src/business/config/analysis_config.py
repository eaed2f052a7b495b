"""
Analysis Configuration

Loads the policy thresholds of the portfolio analysis engine and the default
market context from YAML.
"""

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.business.config.config_utils import ConfigError, merge_overrides
from src.data.models.enums import AnalysisContractError
from src.data.models.market import DEFAULT_MARKET_CONTEXT, MarketContext
from src.engine.models.enums import OptimizedRateMode
from src.engine.models.params import (
    AnalysisParams,
    ProjectionParams,
    RebalancingParams,
    RiskThresholds,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path(__file__).parent.parent.parent.parent / "config" / "analysis.yaml"


@dataclass
class RiskConfig:
    """Risk and gap thresholds (% of portfolio value)"""

    concentration_high: float = 70.0
    concentration_medium: float = 50.0
    over_exposed: float = 50.0
    under_exposed: float = 10.0
    fallback_inflation_rate: float = 3.0


@dataclass
class RebalancingConfig:
    """Rebalancing opportunity policy"""

    source_min_inflation: float = 5.0
    max_opportunities: int = 5
    large_position_share: float = 50.0
    large_position_fraction: float = 0.5
    default_fraction: float = 0.25


@dataclass
class ProjectionConfig:
    """Purchasing-power projection policy"""

    horizon_years: int = 3
    optimized_rate_multiplier: float = 0.6
    optimized_rate_mode: str = "flat"


@dataclass
class MarketConfig:
    """Default market context, used when no live snapshot is supplied"""

    treasury_yield: float = DEFAULT_MARKET_CONTEXT.treasury_yield
    inflation: float = DEFAULT_MARKET_CONTEXT.inflation
    gold_price: float = DEFAULT_MARKET_CONTEXT.gold_price
    gold_ytd_change: float = DEFAULT_MARKET_CONTEXT.gold_ytd_change
    usd_strength: float = DEFAULT_MARKET_CONTEXT.usd_strength
    policy_stance: str = DEFAULT_MARKET_CONTEXT.policy_stance.value


@dataclass
class AnalysisConfig:
    """Portfolio analysis configuration"""

    risk: RiskConfig = field(default_factory=RiskConfig)
    rebalancing: RebalancingConfig = field(default_factory=RebalancingConfig)
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)
    market: MarketConfig = field(default_factory=MarketConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AnalysisConfig":
        """Load from a YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisConfig":
        """Create from a dict. Missing keys keep their defaults."""
        if not isinstance(data, dict):
            raise ConfigError(f"Config root must be a mapping, got {type(data).__name__}")

        config = cls()

        try:
            if "risk" in data:
                r = data["risk"]
                config.risk = RiskConfig(
                    concentration_high=float(r.get("concentration_high", 70.0)),
                    concentration_medium=float(r.get("concentration_medium", 50.0)),
                    over_exposed=float(r.get("over_exposed", 50.0)),
                    under_exposed=float(r.get("under_exposed", 10.0)),
                    fallback_inflation_rate=float(r.get("fallback_inflation_rate", 3.0)),
                )

            if "rebalancing" in data:
                rb = data["rebalancing"]
                config.rebalancing = RebalancingConfig(
                    source_min_inflation=float(rb.get("source_min_inflation", 5.0)),
                    max_opportunities=int(rb.get("max_opportunities", 5)),
                    large_position_share=float(rb.get("large_position_share", 50.0)),
                    large_position_fraction=float(rb.get("large_position_fraction", 0.5)),
                    default_fraction=float(rb.get("default_fraction", 0.25)),
                )

            if "projection" in data:
                p = data["projection"]
                config.projection = ProjectionConfig(
                    horizon_years=int(p.get("horizon_years", 3)),
                    optimized_rate_multiplier=float(p.get("optimized_rate_multiplier", 0.6)),
                    optimized_rate_mode=str(p.get("optimized_rate_mode", "flat")),
                )

            if "market" in data:
                m = data["market"]
                base = MarketConfig()
                config.market = MarketConfig(
                    treasury_yield=float(m.get("treasury_yield", base.treasury_yield)),
                    inflation=float(m.get("inflation", base.inflation)),
                    gold_price=float(m.get("gold_price", base.gold_price)),
                    gold_ytd_change=float(m.get("gold_ytd_change", base.gold_ytd_change)),
                    usd_strength=float(m.get("usd_strength", base.usd_strength)),
                    policy_stance=str(m.get("policy_stance", base.policy_stance)),
                )
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid analysis config: {e}") from e

        config.validate()
        return config

    @classmethod
    def load(cls, path: str | Path | None = None) -> "AnalysisConfig":
        """Load the config file, falling back to defaults when it is absent."""
        config_file = Path(path) if path is not None else DEFAULT_CONFIG_FILE
        if config_file.exists():
            logger.debug(f"Loading analysis config from {config_file}")
            return cls.from_yaml(config_file)
        if path is not None:
            raise ConfigError(f"Config file not found: {config_file}")
        return cls()

    def with_overrides(self, overrides: dict[str, Any]) -> "AnalysisConfig":
        """Return a new config with overrides deep-merged in."""
        return AnalysisConfig.from_dict(merge_overrides(self.to_dict(), overrides))

    def validate(self) -> None:
        """Check cross-field constraints.

        Raises:
            ConfigError: On inconsistent thresholds or unknown enum values.
        """
        if self.risk.concentration_medium > self.risk.concentration_high:
            raise ConfigError(
                "risk.concentration_medium must not exceed risk.concentration_high "
                f"({self.risk.concentration_medium} > {self.risk.concentration_high})"
            )
        for name in ("large_position_fraction", "default_fraction"):
            value = getattr(self.rebalancing, name)
            if not 0 < value <= 1:
                raise ConfigError(f"rebalancing.{name} must be in (0, 1], got {value}")
        if self.rebalancing.max_opportunities < 0:
            raise ConfigError("rebalancing.max_opportunities must be >= 0")
        if self.projection.horizon_years < 0:
            raise ConfigError("projection.horizon_years must be >= 0")
        try:
            OptimizedRateMode(self.projection.optimized_rate_mode)
        except ValueError as e:
            raise ConfigError(
                f"Unknown projection.optimized_rate_mode: {self.projection.optimized_rate_mode!r}"
            ) from e
        try:
            self.market_context()
        except AnalysisContractError as e:
            raise ConfigError(f"Invalid market config: {e}") from e

    def to_params(self) -> AnalysisParams:
        """Convert to engine policy parameters."""
        return AnalysisParams(
            risk=RiskThresholds(**asdict(self.risk)),
            rebalancing=RebalancingParams(**asdict(self.rebalancing)),
            projection=ProjectionParams(
                horizon_years=self.projection.horizon_years,
                optimized_rate_multiplier=self.projection.optimized_rate_multiplier,
                optimized_rate_mode=OptimizedRateMode(self.projection.optimized_rate_mode),
            ),
        )

    def market_context(self) -> MarketContext:
        """Build the default market context."""
        return MarketContext.from_dict(asdict(self.market))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict (YAML layout)."""
        return asdict(self)
