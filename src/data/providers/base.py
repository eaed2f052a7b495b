"""Token metrics provider interface.

The scoring engine never reads a compiled-in performance table directly; it
asks a provider. A live feed, the static defaults or a test double can all be
plugged in as long as they implement :class:`TokenMetricsProvider`.
"""

from typing import Protocol, runtime_checkable

from src.data.models.market import TokenPerformance


@runtime_checkable
class TokenMetricsProvider(Protocol):
    """Supplies current performance and yield figures for a token symbol."""

    @property
    def name(self) -> str:
        """Provider name (e.g. 'static')."""
        ...

    def get_performance(self, symbol: str) -> TokenPerformance | None:
        """Get recent performance statistics.

        Args:
            symbol: Canonical (upper-case) token symbol.

        Returns:
            TokenPerformance or None when the provider has no data.
        """
        ...

    def get_apy(self, symbol: str) -> float:
        """Get the APY (%) used to rank tokens, 0 for non-yielding tokens."""
        ...

    def get_holding_apy(self, symbol: str) -> float:
        """Get the APY (%) a held position earns, used for portfolio yield."""
        ...
