"""Data layer: input models and injected capabilities for the analysis engine."""

from src.data.models import (
    ChainBalance,
    MarketContext,
    RegionalInflation,
    TokenPerformance,
    UserContext,
)

__all__ = [
    "ChainBalance",
    "MarketContext",
    "RegionalInflation",
    "TokenPerformance",
    "UserContext",
]
