"""
Shared fixtures for the analysis test suite.

Rates are chosen so every branch is reachable with small portfolios:
Africa is well above the 5% source threshold, Europe sits at the 2%
low-inflation target, and Global has no sample (falls back to 3%).
"""

import pytest

from src.data.models.holdings import ChainBalance
from src.data.models.inflation import RegionalInflation
from src.data.models.market import MarketContext
from src.data.providers.static_provider import StaticTokenMetricsProvider

CELO = 42220
ETHEREUM = 1
ARBITRUM = 42161


# ============================================================================
# Inflation data
# ============================================================================


@pytest.fixture
def inflation_data():
    """Regional inflation dataset without a Global sample."""
    return {
        "USA": RegionalInflation(region="USA", avg_rate=3.0),
        "Europe": RegionalInflation(region="Europe", avg_rate=2.0),
        "Asia": RegionalInflation(region="Asia", avg_rate=3.5),
        "Africa": RegionalInflation(region="Africa", avg_rate=15.0),
        "LatAm": RegionalInflation(region="LatAm", avg_rate=8.0),
    }


@pytest.fixture
def low_inflation_data():
    """Every region at or below 5%."""
    return {
        "USA": RegionalInflation(region="USA", avg_rate=3.0),
        "Europe": RegionalInflation(region="Europe", avg_rate=2.0),
        "Asia": RegionalInflation(region="Asia", avg_rate=3.5),
        "Africa": RegionalInflation(region="Africa", avg_rate=4.5),
        "LatAm": RegionalInflation(region="LatAm", avg_rate=5.0),
    }


# ============================================================================
# Metrics and market
# ============================================================================


@pytest.fixture
def provider():
    """Static token metrics with the reference tables."""
    return StaticTokenMetricsProvider()


@pytest.fixture
def market():
    """Default market: treasury 4.5%, inflation 3.2%, real yield 1.3%."""
    return MarketContext()


@pytest.fixture
def high_inflation_market():
    """Negative real yield regime: treasury 4%, inflation 6%."""
    return MarketContext(treasury_yield=4.0, inflation=6.0)


# ============================================================================
# Balances
# ============================================================================


@pytest.fixture
def single_kes_balance():
    """$1000 of KESM on Celo, the only holding."""
    return [ChainBalance(chain_id=CELO, symbol="KESm", value_usd=1000.0)]


@pytest.fixture
def two_region_balances():
    """$500 KESM (Africa, 15%) and $500 USDC (USA, 3%)."""
    return [
        ChainBalance(chain_id=CELO, symbol="KESm", value_usd=500.0),
        ChainBalance(chain_id=ETHEREUM, symbol="USDC", value_usd=500.0),
    ]


@pytest.fixture
def mixed_balances():
    """Five holdings over four regions, one symbol on two chains."""
    return [
        ChainBalance(chain_id=CELO, symbol="KESm", value_usd=200.0),
        ChainBalance(chain_id=CELO, symbol="USDm", value_usd=300.0),
        ChainBalance(chain_id=ETHEREUM, symbol="USDm", value_usd=100.0),
        ChainBalance(chain_id=CELO, symbol="EURm", value_usd=250.0),
        ChainBalance(chain_id=ARBITRUM, symbol="PAXG", value_usd=150.0),
    ]
