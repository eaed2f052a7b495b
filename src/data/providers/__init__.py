"""Token metrics providers."""

from src.data.providers.base import TokenMetricsProvider
from src.data.providers.static_provider import (
    DEFAULT_HOLDING_APY,
    DEFAULT_TOKEN_APY,
    DEFAULT_TOKEN_PERFORMANCE,
    StaticTokenMetricsProvider,
)

__all__ = [
    "TokenMetricsProvider",
    "StaticTokenMetricsProvider",
    "DEFAULT_HOLDING_APY",
    "DEFAULT_TOKEN_APY",
    "DEFAULT_TOKEN_PERFORMANCE",
]
