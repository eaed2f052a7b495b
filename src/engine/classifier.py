"""Region/token classification.

Maps a token symbol to its monetary region, asset kind and regional inflation
rate. Lookups are case-insensitive and never raise: unmapped symbols resolve
to Region.UNKNOWN with the fallback inflation rate.
"""

import logging

from src.data.models.enums import AssetKind, Region
from src.data.models.inflation import InflationDataset

logger = logging.getLogger(__name__)

# Used when a token is unmapped or its region has no inflation sample
FALLBACK_INFLATION_RATE = 3.0

TOKEN_REGION_MAP: dict[str, Region] = {
    # USD-pegged and US equities
    "USDM": Region.USA,
    "USDC": Region.USA,
    "CADM": Region.USA,
    "USDY": Region.USA,
    "TSLA": Region.USA,
    "AMZN": Region.USA,
    "PLTR": Region.USA,
    "NFLX": Region.USA,
    "AMD": Region.USA,
    # Europe
    "EURM": Region.EUROPE,
    "EURC": Region.EUROPE,
    "GBPM": Region.EUROPE,
    "CHFM": Region.EUROPE,
    # Latin America
    "BRLM": Region.LATAM,
    "COPM": Region.LATAM,
    # Africa
    "KESM": Region.AFRICA,
    "GHSM": Region.AFRICA,
    "ZARM": Region.AFRICA,
    "XOFM": Region.AFRICA,
    "EXOF": Region.AFRICA,
    "NGNM": Region.AFRICA,
    # Asia-Pacific
    "PHPM": Region.ASIA,
    "AUDM": Region.ASIA,
    "JPYM": Region.ASIA,
    # Commodity / treasury-backed
    "PAXG": Region.GLOBAL,
    "SYRUPUSDC": Region.GLOBAL,
}

# Legacy Mento "c"-prefixed names -> current "m"-suffixed names
LEGACY_SYMBOL_MAP: dict[str, str] = {
    "CUSD": "USDM",
    "CEUR": "EURM",
    "CREAL": "BRLM",
    "CKES": "KESM",
    "CCOP": "COPM",
    "CPHP": "PHPM",
    "PUSO": "PHPM",
    "CGHS": "GHSM",
    "CXOF": "XOFM",
    "CGBP": "GBPM",
    "CZAR": "ZARM",
    "CCAD": "CADM",
    "CAUD": "AUDM",
    "CCHF": "CHFM",
    "CJPY": "JPYM",
    "CNGN": "NGNM",
}

TOKEN_KIND_MAP: dict[str, AssetKind] = {
    "PAXG": AssetKind.HARD_ASSET,
    "USDY": AssetKind.YIELD_BEARING,
    "SYRUPUSDC": AssetKind.YIELD_BEARING,
}

# Real-world-asset tokens
RWA_SYMBOLS: frozenset[str] = frozenset({"PAXG", "USDY", "SYRUPUSDC"})


def normalize_symbol(symbol: str) -> str:
    """Canonicalize a symbol: upper-case, legacy names mapped forward.

    Example:
        >>> normalize_symbol("cKES")
        'KESM'
        >>> normalize_symbol("paxg")
        'PAXG'
    """
    upper = symbol.strip().upper()
    return LEGACY_SYMBOL_MAP.get(upper, upper)


def get_token_region(symbol: str) -> Region:
    """Get the region a token is pegged to.

    Args:
        symbol: Token symbol in any case.

    Returns:
        Region, Region.UNKNOWN for unmapped symbols.
    """
    return TOKEN_REGION_MAP.get(normalize_symbol(symbol), Region.UNKNOWN)


def get_asset_kind(symbol: str) -> AssetKind:
    """Get the economic kind of a token (currency, hard asset, yield-bearing)."""
    return TOKEN_KIND_MAP.get(normalize_symbol(symbol), AssetKind.CURRENCY)


def is_rwa_token(symbol: str) -> bool:
    """Check whether a token is a real-world asset (gold, treasuries)."""
    return normalize_symbol(symbol) in RWA_SYMBOLS


def get_region_inflation_rate(
    region: Region | str,
    inflation_data: InflationDataset,
    fallback: float = FALLBACK_INFLATION_RATE,
) -> float:
    """Get a region's inflation rate.

    Resolution order:
    1. The region's average rate.
    2. Mean of the region's per-country samples.
    3. ``fallback``.

    Args:
        region: Region enum or name.
        inflation_data: Region name -> RegionalInflation.
        fallback: Rate used when no sample exists.

    Returns:
        Inflation rate (%).
    """
    key = region.value if isinstance(region, Region) else region
    if key == Region.UNKNOWN.value:
        return fallback

    entry = inflation_data.get(key)
    if entry is None:
        logger.debug(f"No inflation sample for {key}, using fallback {fallback}%")
        return fallback

    if entry.avg_rate is not None:
        return entry.avg_rate

    if entry.countries:
        return sum(c.value for c in entry.countries) / len(entry.countries)

    logger.debug(f"Empty inflation entry for {key}, using fallback {fallback}%")
    return fallback


def get_token_inflation_rate(
    symbol: str,
    inflation_data: InflationDataset,
    fallback: float = FALLBACK_INFLATION_RATE,
) -> float:
    """Get the inflation rate a token is exposed to via its region.

    Example:
        >>> data = {"Africa": RegionalInflation(region="Africa", avg_rate=15.2)}
        >>> get_token_inflation_rate("KESm", data)
        15.2
        >>> get_token_inflation_rate("DOGE", data)
        3.0
    """
    return get_region_inflation_rate(get_token_region(symbol), inflation_data, fallback)
