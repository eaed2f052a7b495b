"""Static token metrics provider.

Ships the reference performance and APY figures used when no live feed is
wired in. Values can be overridden per instance, e.g. from a YAML snapshot.
"""

import logging
from typing import Mapping

from src.data.models.market import TokenPerformance

logger = logging.getLogger(__name__)


DEFAULT_TOKEN_PERFORMANCE: dict[str, TokenPerformance] = {
    "PAXG": TokenPerformance(
        symbol="PAXG",
        ytd_return=15.0,
        volatility=12.0,
        sharpe_ratio=1.25,
        correlation_with_inflation=0.3,
    ),
    "USDY": TokenPerformance(
        symbol="USDY",
        ytd_return=4.8,
        volatility=0.5,
        sharpe_ratio=9.6,
        correlation_with_inflation=-0.1,
    ),
    "SYRUPUSDC": TokenPerformance(
        symbol="SYRUPUSDC",
        ytd_return=4.5,
        volatility=0.8,
        sharpe_ratio=5.6,
        correlation_with_inflation=-0.05,
    ),
    "USDM": TokenPerformance(
        symbol="USDM",
        ytd_return=0.0,
        volatility=0.1,
        sharpe_ratio=0.0,
        correlation_with_inflation=-0.8,
    ),
    "EURM": TokenPerformance(
        symbol="EURM",
        ytd_return=-2.0,
        volatility=8.0,
        sharpe_ratio=-0.25,
        correlation_with_inflation=-0.3,
    ),
}

# Yields used when ranking tokens against each other. Local stablecoins
# score as non-yielding.
DEFAULT_TOKEN_APY: dict[str, float] = {
    "USDY": 5.0,
    "SYRUPUSDC": 4.5,
}

# Yields credited to holdings in the portfolio yield summary
DEFAULT_HOLDING_APY: dict[str, float] = {
    "USDY": 5.0,
    "SYRUPUSDC": 4.5,
    "KESM": 2.0,
    "USDM": 0.1,
}


class StaticTokenMetricsProvider:
    """Token metrics backed by in-memory tables.

    Usage:
        provider = StaticTokenMetricsProvider()
        provider.get_apy("USDY")  # 5.0
        provider.get_holding_apy("KESM")  # 2.0

        # Test double with a custom table, used for scoring and holdings
        provider = StaticTokenMetricsProvider(apy={"USDY": 7.0})
    """

    def __init__(
        self,
        performance: Mapping[str, TokenPerformance] | None = None,
        apy: Mapping[str, float] | None = None,
        holding_apy: Mapping[str, float] | None = None,
    ) -> None:
        """Initialize provider.

        Args:
            performance: Symbol -> TokenPerformance. Defaults to the reference table.
            apy: Symbol -> scoring APY (%). Defaults to the reference table.
            holding_apy: Symbol -> APY (%) earned by held positions. Defaults to
                the reference table, or to ``apy`` when only ``apy`` is given.
        """
        source_perf = DEFAULT_TOKEN_PERFORMANCE if performance is None else performance
        source_apy = DEFAULT_TOKEN_APY if apy is None else apy
        if holding_apy is None:
            holding_apy = DEFAULT_HOLDING_APY if apy is None else apy
        self._performance = {k.upper(): v for k, v in source_perf.items()}
        self._apy = {k.upper(): float(v) for k, v in source_apy.items()}
        self._holding_apy = {k.upper(): float(v) for k, v in holding_apy.items()}

    @property
    def name(self) -> str:
        return "static"

    def get_performance(self, symbol: str) -> TokenPerformance | None:
        perf = self._performance.get(symbol.upper())
        if perf is None:
            logger.debug(f"No performance data for {symbol}")
        return perf

    def get_apy(self, symbol: str) -> float:
        return self._apy.get(symbol.upper(), 0.0)

    def get_holding_apy(self, symbol: str) -> float:
        return self._holding_apy.get(symbol.upper(), 0.0)

    def cache_key(self) -> tuple:
        """Hashable snapshot of the tables, used by memoizing wrappers."""
        return (
            tuple(sorted(self._performance.items())),
            tuple(sorted(self._apy.items())),
            tuple(sorted(self._holding_apy.items())),
        )
