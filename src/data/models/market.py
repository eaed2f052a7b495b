"""Market and user context models."""

from dataclasses import dataclass
from typing import Any

from src.data.models.enums import (
    Goal,
    InputContractError,
    PolicyStance,
    RiskTolerance,
)


@dataclass(frozen=True)
class MarketContext:
    """Macro snapshot that drives the token scoring regime.

    Attributes:
        treasury_yield: 10-year treasury yield (%).
        inflation: Current headline inflation (%).
        gold_price: Gold price per ounce (USD).
        gold_ytd_change: Gold year-to-date change (%).
        usd_strength: Dollar index level (higher = stronger USD).
        policy_stance: Central-bank policy stance.
    """

    treasury_yield: float = 4.5
    inflation: float = 3.2
    gold_price: float = 2650.0
    gold_ytd_change: float = 15.0
    usd_strength: float = 103.0
    policy_stance: PolicyStance = PolicyStance.NEUTRAL

    @property
    def real_yield(self) -> float:
        """Nominal treasury yield minus inflation."""
        return self.treasury_yield - self.inflation

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "treasury_yield": self.treasury_yield,
            "inflation": self.inflation,
            "gold_price": self.gold_price,
            "gold_ytd_change": self.gold_ytd_change,
            "usd_strength": self.usd_strength,
            "policy_stance": self.policy_stance.value,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        defaults: "MarketContext | None" = None,
    ) -> "MarketContext":
        """Create from dictionary, filling missing keys from defaults.

        Accepts both snake_case and camelCase keys.
        """
        base = defaults or DEFAULT_MARKET_CONTEXT

        def pick(snake: str, camel: str, fallback: Any) -> Any:
            if snake in data:
                return data[snake]
            return data.get(camel, fallback)

        stance = pick("policy_stance", "fedPolicy", base.policy_stance)
        return cls(
            treasury_yield=float(pick("treasury_yield", "treasuryYield", base.treasury_yield)),
            inflation=float(data.get("inflation", base.inflation)),
            gold_price=float(pick("gold_price", "goldPrice", base.gold_price)),
            gold_ytd_change=float(pick("gold_ytd_change", "goldYtdChange", base.gold_ytd_change)),
            usd_strength=float(pick("usd_strength", "usdStrength", base.usd_strength)),
            policy_stance=PolicyStance.parse(stance),
        )


# Used when no live market snapshot is available
DEFAULT_MARKET_CONTEXT = MarketContext()


@dataclass(frozen=True)
class UserContext:
    """Caller-supplied user preferences.

    Attributes:
        risk_tolerance: Conservative, balanced or aggressive.
        goal: Selected goal.
        time_horizon_months: Investment horizon in months.
        portfolio_value: Portfolio value in USD.
    """

    risk_tolerance: RiskTolerance = RiskTolerance.BALANCED
    goal: Goal = Goal.EXPLORING
    time_horizon_months: int = 12
    portfolio_value: float = 10000.0

    def __post_init__(self) -> None:
        # Accept raw strings at the boundary, reject anything outside the enums
        object.__setattr__(self, "risk_tolerance", RiskTolerance.parse(self.risk_tolerance))
        object.__setattr__(self, "goal", Goal.parse(self.goal))
        if self.time_horizon_months < 0:
            raise InputContractError(
                f"time_horizon_months must be >= 0, got {self.time_horizon_months}"
            )


@dataclass(frozen=True)
class TokenPerformance:
    """Recent performance statistics for one token.

    Attributes:
        symbol: Token symbol.
        ytd_return: Year-to-date return (%).
        volatility: Annualized volatility (%).
        sharpe_ratio: Risk-adjusted return.
        correlation_with_inflation: Correlation with inflation, -1 to 1.
    """

    symbol: str
    ytd_return: float
    volatility: float
    sharpe_ratio: float
    correlation_with_inflation: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenPerformance":
        """Create instance from dictionary."""
        return cls(
            symbol=data["symbol"],
            ytd_return=float(data.get("ytd_return", 0.0)),
            volatility=float(data.get("volatility", 0.0)),
            sharpe_ratio=float(data.get("sharpe_ratio", 0.0)),
            correlation_with_inflation=float(data.get("correlation_with_inflation", 0.0)),
        )
