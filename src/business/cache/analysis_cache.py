"""Cached portfolio analysis.

LRU memoization around the stateless analyze_portfolio() orchestrator. The
engine itself never caches; repeated interactive recomputes (goal toggles,
re-renders) go through this wrapper instead.

Usage:
    from src.business.cache.analysis_cache import CachedPortfolioAnalyzer

    analyzer = CachedPortfolioAnalyzer(maxsize=256)
    analysis = analyzer.analyze(balances, inflation_data, "exploring")

    # Check cache stats
    print(analyzer.cache_info())

    # Clear cache if needed
    analyzer.clear_cache()
"""

from functools import lru_cache
from typing import Sequence

from src.data.models.enums import Goal
from src.data.models.holdings import ChainBalance
from src.data.models.inflation import InflationDataset, RegionalInflation
from src.data.models.market import MarketContext
from src.data.providers.base import TokenMetricsProvider
from src.data.providers.static_provider import StaticTokenMetricsProvider
from src.engine.analyzer import analyze_portfolio
from src.engine.models.params import DEFAULT_PARAMS, AnalysisParams
from src.engine.models.portfolio import PortfolioAnalysis


def _dataset_to_key(inflation_data: InflationDataset) -> tuple[tuple[str, RegionalInflation], ...]:
    """Convert an inflation dataset to a hashable, order-independent key."""
    return tuple(sorted(inflation_data.items(), key=lambda item: item[0]))


class CachedPortfolioAnalyzer:
    """LRU-cached portfolio analyzer.

    The provider and policy parameters are fixed per instance; the cache is
    keyed on the balance snapshot, the inflation dataset, the goal and the
    market context. All of them are immutable values, so a hit returns the
    exact same PortfolioAnalysis the orchestrator produced.

    Usage:
        analyzer = CachedPortfolioAnalyzer(maxsize=256)
        analysis = analyzer.analyze(balances, inflation_data, "rwa_access")

        # Check cache efficiency
        info = analyzer.cache_info()
        print(f"Hit rate: {info.hits / (info.hits + info.misses):.1%}")
    """

    def __init__(
        self,
        provider: TokenMetricsProvider | None = None,
        params: AnalysisParams | None = None,
        maxsize: int = 128,
    ) -> None:
        """Initialize cached analyzer.

        Args:
            provider: Token metrics source (default: static tables)
            params: Engine policy parameters (default: DEFAULT_PARAMS)
            maxsize: Maximum number of cached analyses (default: 128)
        """
        self._provider = provider or StaticTokenMetricsProvider()
        self._params = params or DEFAULT_PARAMS
        self._maxsize = maxsize

        @lru_cache(maxsize=maxsize)
        def _analyze_cached(
            balances: tuple[ChainBalance, ...],
            dataset: tuple[tuple[str, RegionalInflation], ...],
            goal: Goal,
            market_context: MarketContext | None,
        ) -> PortfolioAnalysis:
            """Internal cached analysis."""
            return analyze_portfolio(
                balances,
                dict(dataset),
                goal,
                market_context=market_context,
                provider=self._provider,
                params=self._params,
            )

        self._analyze_cached = _analyze_cached

    @property
    def params(self) -> AnalysisParams:
        return self._params

    def analyze(
        self,
        balances: Sequence[ChainBalance] | None,
        inflation_data: InflationDataset,
        goal: Goal | str = Goal.EXPLORING,
        market_context: MarketContext | None = None,
    ) -> PortfolioAnalysis:
        """Analyze a portfolio with caching.

        Args:
            balances: Per-chain balances
            inflation_data: Regional inflation dataset
            goal: User goal (validated before lookup)
            market_context: Market snapshot

        Returns:
            PortfolioAnalysis
        """
        return self._analyze_cached(
            tuple(balances or ()),
            _dataset_to_key(inflation_data),
            Goal.parse(goal),
            market_context,
        )

    def cache_info(self):
        """Get cache statistics.

        Returns:
            CacheInfo with hits, misses, maxsize, currsize
        """
        return self._analyze_cached.cache_info()

    def clear_cache(self) -> None:
        """Clear the cache."""
        self._analyze_cached.cache_clear()
