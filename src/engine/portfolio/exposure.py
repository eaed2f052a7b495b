"""Exposure aggregation.

Turns raw per-chain balances into per-token allocations and per-region
exposure summaries.
"""

from typing import Iterable

from src.data.models.enums import Region
from src.data.models.holdings import ChainBalance
from src.data.models.inflation import InflationDataset
from src.data.providers.base import TokenMetricsProvider
from src.engine.classifier import (
    FALLBACK_INFLATION_RATE,
    get_token_inflation_rate,
    get_token_region,
    normalize_symbol,
)
from src.engine.models.portfolio import RegionalExposure, TokenAllocation


def calc_total_value(balances: Iterable[ChainBalance]) -> float:
    """Sum of all balance values in USD."""
    return sum(b.value_usd for b in balances)


def aggregate_allocations(
    balances: list[ChainBalance],
    inflation_data: InflationDataset,
    provider: TokenMetricsProvider | None = None,
    fallback_rate: float = FALLBACK_INFLATION_RATE,
) -> tuple[TokenAllocation, ...]:
    """Build one TokenAllocation per (chain, symbol) balance.

    Percentages are computed against the total portfolio value. Entries are
    never merged across chains.

    Args:
        balances: Per-chain balances.
        inflation_data: Regional inflation dataset.
        provider: Supplies token APYs. Yield rates are 0 when omitted.
        fallback_rate: Inflation rate for unmapped tokens.

    Returns:
        Allocations in input order, empty when total value is 0.
    """
    total = calc_total_value(balances)
    if total <= 0:
        return ()

    allocations = []
    for balance in balances:
        symbol = normalize_symbol(balance.symbol)
        allocations.append(
            TokenAllocation(
                symbol=symbol,
                value_usd=balance.value_usd,
                percentage=balance.value_usd / total * 100,
                region=get_token_region(symbol),
                inflation_rate=get_token_inflation_rate(symbol, inflation_data, fallback_rate),
                yield_rate=provider.get_holding_apy(symbol) if provider is not None else 0.0,
                chain_id=balance.chain_id,
            )
        )
    return tuple(allocations)


def aggregate_regional_exposure(
    tokens: tuple[TokenAllocation, ...] | list[TokenAllocation],
) -> tuple[RegionalExposure, ...]:
    """Merge token allocations into per-region exposure.

    Region totals merge across chains and tokens. The region's average
    inflation is the value-weighted mean of its tokens' rates (plain mean if
    the region holds only zero-value entries).

    Args:
        tokens: Token allocations.

    Returns:
        One RegionalExposure per region present, in first-seen order.
    """
    total = sum(t.value_usd for t in tokens)
    if total <= 0:
        return ()

    grouped: dict[Region, list[TokenAllocation]] = {}
    for token in tokens:
        grouped.setdefault(token.region, []).append(token)

    exposures = []
    for region, members in grouped.items():
        value = sum(t.value_usd for t in members)
        if value > 0:
            avg_rate = sum(t.inflation_rate * t.value_usd for t in members) / value
        else:
            avg_rate = sum(t.inflation_rate for t in members) / len(members)

        symbols: list[str] = []
        for t in members:
            if t.symbol not in symbols:
                symbols.append(t.symbol)

        exposures.append(
            RegionalExposure(
                region=region,
                value_usd=value,
                percentage=value / total * 100,
                avg_inflation_rate=avg_rate,
                tokens=tuple(symbols),
            )
        )
    return tuple(exposures)
