"""Data layer enumerations.

Closed value sets shared by the data, engine and business layers.
"""

from enum import Enum


class AnalysisContractError(ValueError):
    """Base exception for inputs that violate the analysis contract."""

    pass


class InvalidEnumValueError(AnalysisContractError):
    """A value outside one of the closed enumerations."""

    pass


class InvalidGoalError(InvalidEnumValueError):
    """Goal outside the closed goal set.

    Never defaulted: a guessed goal would select the wrong allocation table.
    """

    pass


class InputContractError(AnalysisContractError):
    """Structurally invalid input (negative balances, negative horizons)."""

    pass


class _ParseableEnum(str, Enum):
    """String enum with case-insensitive parsing."""

    @classmethod
    def parse(cls, value: "str | _ParseableEnum"):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value.lower() == normalized:
                    return member
        raise cls._error_type()(
            f"Invalid {cls.__name__}: {value!r}. "
            f"Expected one of: {', '.join(m.value for m in cls)}"
        )

    @classmethod
    def _error_type(cls) -> type[InvalidEnumValueError]:
        return InvalidEnumValueError


class Region(_ParseableEnum):
    """Monetary/geographic grouping used to bucket a token."""

    USA = "USA"
    EUROPE = "Europe"
    LATAM = "LatAm"
    AFRICA = "Africa"
    ASIA = "Asia"
    GLOBAL = "Global"  # Commodity and treasury-backed assets
    UNKNOWN = "Unknown"

    @classmethod
    def parse_or_unknown(cls, value: "str | Region") -> "Region":
        """Parse a region name, falling back to UNKNOWN."""
        try:
            return cls.parse(value)
        except InvalidEnumValueError:
            return cls.UNKNOWN


# Fixed universe for gap analysis. Unknown is never a gap.
REGION_UNIVERSE: tuple[Region, ...] = (
    Region.USA,
    Region.EUROPE,
    Region.ASIA,
    Region.AFRICA,
    Region.LATAM,
    Region.GLOBAL,
)


class Goal(_ParseableEnum):
    """User goal, selects the allocation table and opportunity bias."""

    INFLATION_PROTECTION = "inflation_protection"
    GEOGRAPHIC_DIVERSIFICATION = "geographic_diversification"
    RWA_ACCESS = "rwa_access"
    EXPLORING = "exploring"

    @classmethod
    def _error_type(cls) -> type[InvalidEnumValueError]:
        return InvalidGoalError


class RiskTolerance(_ParseableEnum):
    """User risk tolerance."""

    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"


class PolicyStance(_ParseableEnum):
    """Central-bank policy stance."""

    HAWKISH = "hawkish"
    NEUTRAL = "neutral"
    DOVISH = "dovish"


class AssetKind(_ParseableEnum):
    """Economic nature of a token, drives the scoring regime rules."""

    CURRENCY = "currency"  # Fiat-pegged stablecoin
    HARD_ASSET = "hard_asset"  # Non-yielding commodity (gold)
    YIELD_BEARING = "yield_bearing"  # Tokenized treasuries / lending yield
