"""Data models for analysis inputs."""

from src.data.models.enums import (
    REGION_UNIVERSE,
    AnalysisContractError,
    AssetKind,
    Goal,
    InputContractError,
    InvalidEnumValueError,
    InvalidGoalError,
    PolicyStance,
    Region,
    RiskTolerance,
)
from src.data.models.holdings import ChainBalance, balances_from_chains
from src.data.models.inflation import (
    CountryInflation,
    InflationDataset,
    RegionalInflation,
    parse_inflation_dataset,
)
from src.data.models.market import (
    DEFAULT_MARKET_CONTEXT,
    MarketContext,
    TokenPerformance,
    UserContext,
)

__all__ = [
    # Enums
    "AssetKind",
    "Goal",
    "PolicyStance",
    "Region",
    "REGION_UNIVERSE",
    "RiskTolerance",
    # Errors
    "AnalysisContractError",
    "InputContractError",
    "InvalidEnumValueError",
    "InvalidGoalError",
    # Holdings
    "ChainBalance",
    "balances_from_chains",
    # Inflation
    "CountryInflation",
    "InflationDataset",
    "RegionalInflation",
    "parse_inflation_dataset",
    # Market
    "DEFAULT_MARKET_CONTEXT",
    "MarketContext",
    "TokenPerformance",
    "UserContext",
]
