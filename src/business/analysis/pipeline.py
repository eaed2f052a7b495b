"""
Analysis Pipeline

Service object wiring configuration, token metrics, the cached analyzer and
the guided tour rules together:
1. Load a portfolio snapshot (balances + inflation data + optional market)
2. Analyze it for a goal
3. Detect the guided tour that fits the result

Usage:
    pipeline = AnalysisPipeline(AnalysisConfig.load())
    snapshot = pipeline.load_snapshot("portfolio.yaml")
    report = pipeline.run(snapshot, goal="inflation_protection")
    report.analysis.weighted_inflation_risk
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Sequence

import yaml

from src.business.cache.analysis_cache import CachedPortfolioAnalyzer
from src.business.config.analysis_config import AnalysisConfig
from src.business.config.config_utils import ConfigError
from src.business.tour.guided_tour import GuidedTourRecommendation, detect_guided_tour
from src.data.models.enums import AnalysisContractError, Goal, RiskTolerance
from src.data.models.holdings import ChainBalance, balances_from_chains
from src.data.models.inflation import RegionalInflation, parse_inflation_dataset
from src.data.models.market import MarketContext, TokenPerformance, UserContext
from src.data.providers.base import TokenMetricsProvider
from src.data.providers.static_provider import (
    DEFAULT_HOLDING_APY,
    DEFAULT_TOKEN_APY,
    DEFAULT_TOKEN_PERFORMANCE,
    StaticTokenMetricsProvider,
)
from src.engine.models.portfolio import PortfolioAnalysis
from src.engine.models.result import TokenScore
from src.engine.scoring.token_scoring import score_tokens

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Inputs for one analysis run.

    Attributes:
        balances: Per-chain balances.
        inflation: Region name -> RegionalInflation.
        market_context: Market snapshot, None to use the configured default.
        performance: Token performance overrides.
        apy: Token APY overrides.
    """

    balances: tuple[ChainBalance, ...] = ()
    inflation: dict[str, RegionalInflation] = field(default_factory=dict)
    market_context: MarketContext | None = None
    performance: dict[str, TokenPerformance] = field(default_factory=dict)
    apy: dict[str, float] = field(default_factory=dict)

    @property
    def total_value(self) -> float:
        return sum(b.value_usd for b in self.balances)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PortfolioSnapshot":
        """Create from a snapshot dict.

        Balances come either per chain (``chains: [{chain_id, balances}]``) or
        flat (``balances: [{chain_id, symbol, value}]``).
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Snapshot root must be a mapping, got {type(data).__name__}")

        try:
            balances: list[ChainBalance] = []
            if "chains" in data:
                balances.extend(balances_from_chains(data["chains"] or []))
            for entry in data.get("balances", []) or []:
                balances.append(ChainBalance.from_dict(entry))

            market = data.get("market")
            tokens = data.get("tokens", {}) or {}
            performance = {
                symbol.upper(): TokenPerformance.from_dict({"symbol": symbol.upper(), **values})
                for symbol, values in (tokens.get("performance", {}) or {}).items()
            }
            apy = {symbol.upper(): float(v) for symbol, v in (tokens.get("apy", {}) or {}).items()}

            return cls(
                balances=tuple(balances),
                inflation=parse_inflation_dataset(data.get("inflation", {}) or {}),
                market_context=MarketContext.from_dict(market) if market else None,
                performance=performance,
                apy=apy,
            )
        except AnalysisContractError:
            raise
        except KeyError as e:
            raise ConfigError(f"Invalid portfolio snapshot: missing field {e}") from e
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid portfolio snapshot: {e}") from e


@dataclass(frozen=True)
class AnalysisReport:
    """Analysis result plus the recommended guided tour."""

    goal: Goal
    analysis: PortfolioAnalysis
    tour: GuidedTourRecommendation | None = None


class AnalysisPipeline:
    """Portfolio analysis service.

    Holds one cached analyzer per token metrics provider, so repeated runs on
    the same snapshot (goal toggles, re-renders) are served from the cache.
    """

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        provider: TokenMetricsProvider | None = None,
        cache_size: int = 128,
        max_providers: int = 8,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Analysis config (default: AnalysisConfig.load())
            provider: Token metrics source (default: static tables)
            cache_size: Max cached analyses per provider
            max_providers: Max providers with a live analyzer, least recently
                used evicted first
        """
        self.config = config or AnalysisConfig.load()
        self.params = self.config.to_params()
        self.default_market = self.config.market_context()
        self.provider = provider or StaticTokenMetricsProvider()
        self._cache_size = cache_size
        self._max_providers = max(1, max_providers)
        self._analyzers: OrderedDict[Any, CachedPortfolioAnalyzer] = OrderedDict()

    @staticmethod
    def load_snapshot(path: str | Path) -> PortfolioSnapshot:
        """Load a portfolio snapshot from YAML."""
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        return PortfolioSnapshot.from_dict(data or {})

    def provider_for(self, snapshot: PortfolioSnapshot) -> TokenMetricsProvider:
        """Token metrics for a snapshot: its overrides layered on the defaults."""
        if not snapshot.performance and not snapshot.apy:
            return self.provider
        return StaticTokenMetricsProvider(
            performance={**DEFAULT_TOKEN_PERFORMANCE, **snapshot.performance},
            apy={**DEFAULT_TOKEN_APY, **snapshot.apy},
            holding_apy={**DEFAULT_HOLDING_APY, **snapshot.apy},
        )

    def _analyzer_for(self, provider: TokenMetricsProvider) -> CachedPortfolioAnalyzer:
        key_fn = getattr(provider, "cache_key", None)
        key = key_fn() if callable(key_fn) else id(provider)
        analyzer = self._analyzers.get(key)
        if analyzer is not None:
            self._analyzers.move_to_end(key)
            return analyzer

        analyzer = CachedPortfolioAnalyzer(provider, self.params, maxsize=self._cache_size)
        self._analyzers[key] = analyzer
        while len(self._analyzers) > self._max_providers:
            self._analyzers.popitem(last=False)
            logger.debug(f"Evicted least recently used analyzer, {len(self._analyzers)} kept")
        return analyzer

    def analyze(
        self,
        snapshot: PortfolioSnapshot,
        goal: Goal | str = Goal.EXPLORING,
    ) -> PortfolioAnalysis:
        """Analyze a snapshot for a goal."""
        analyzer = self._analyzer_for(self.provider_for(snapshot))
        return analyzer.analyze(
            snapshot.balances,
            snapshot.inflation,
            goal,
            snapshot.market_context or self.default_market,
        )

    def run(
        self,
        snapshot: PortfolioSnapshot,
        goal: Goal | str = Goal.EXPLORING,
        visited_sections: Iterable[str] | None = None,
    ) -> AnalysisReport:
        """Analyze a snapshot and pick a guided tour.

        Args:
            snapshot: Portfolio snapshot
            goal: User goal
            visited_sections: Sections the user has seen (default: overview, info)

        Returns:
            AnalysisReport
        """
        goal = Goal.parse(goal)
        analysis = self.analyze(snapshot, goal)
        tour = detect_guided_tour(analysis, goal, visited_sections)
        logger.info(
            f"Analyzed ${analysis.total_value:,.2f} across {analysis.region_count} regions "
            f"for {goal.value}: {len(analysis.rebalancing_opportunities)} opportunities, "
            f"tour={tour.tour_id.value if tour else 'none'}"
        )
        return AnalysisReport(goal=goal, analysis=analysis, tour=tour)

    def score(
        self,
        symbols: Sequence[str],
        risk_tolerance: RiskTolerance | str = RiskTolerance.BALANCED,
        goal: Goal | str = Goal.EXPLORING,
        market_context: MarketContext | None = None,
        portfolio_value: float = 10000.0,
        snapshot: PortfolioSnapshot | None = None,
    ) -> list[TokenScore]:
        """Score candidate tokens.

        Args:
            symbols: Candidate symbols
            risk_tolerance: User risk tolerance
            goal: User goal
            market_context: Market snapshot (default: snapshot's, then config's)
            portfolio_value: Amount opportunity costs are quoted against
            snapshot: Optional snapshot supplying inflation data and metric overrides

        Returns:
            Ranked TokenScore list
        """
        user = UserContext(
            risk_tolerance=risk_tolerance,
            goal=goal,
            portfolio_value=portfolio_value,
        )
        market = market_context
        if market is None and snapshot is not None:
            market = snapshot.market_context
        provider = self.provider_for(snapshot) if snapshot is not None else self.provider
        return score_tokens(
            symbols,
            market or self.default_market,
            user,
            snapshot.inflation if snapshot is not None else {},
            provider,
        )
