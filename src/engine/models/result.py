"""Token scoring result models."""

from dataclasses import dataclass
from typing import Any

from src.engine.models.reasons import Reason


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-factor scores. Each factor is unbounded; the total is their sum.

    Attributes:
        yield_score: APY relative to the best candidate (0-100).
        inflation_hedge_score: Regime-dependent hedge value.
        real_yield_score: Real-yield regime bonus/penalty.
        performance_score: Year-to-date momentum.
        risk_adjusted_score: Sharpe-based score adjusted for risk tolerance.
    """

    yield_score: float = 0.0
    inflation_hedge_score: float = 0.0
    real_yield_score: float = 0.0
    performance_score: float = 0.0
    risk_adjusted_score: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.yield_score
            + self.inflation_hedge_score
            + self.real_yield_score
            + self.performance_score
            + self.risk_adjusted_score
        )

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary."""
        return {
            "yield_score": self.yield_score,
            "inflation_hedge_score": self.inflation_hedge_score,
            "real_yield_score": self.real_yield_score,
            "performance_score": self.performance_score,
            "risk_adjusted_score": self.risk_adjusted_score,
        }


@dataclass(frozen=True)
class OpportunityCost:
    """Yield given up by holding a token instead of its best alternative.

    Attributes:
        vs_best_alternative: Highest-APY alternative symbol.
        annual_difference: USD per year lost on the invested amount.
    """

    vs_best_alternative: str
    annual_difference: float


@dataclass(frozen=True)
class TokenScore:
    """Composite desirability score for one candidate token.

    Attributes:
        symbol: Token symbol.
        total_score: Sum of the breakdown factors.
        breakdown: Per-factor scores.
        reasoning: Ordered reason codes.
        opportunity_cost: Opportunity cost vs the other candidates, if any.
    """

    symbol: str
    total_score: float
    breakdown: ScoreBreakdown
    reasoning: tuple[Reason, ...] = ()
    opportunity_cost: OpportunityCost | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "symbol": self.symbol,
            "total_score": self.total_score,
            "breakdown": self.breakdown.to_dict(),
            "reasoning": [r.to_dict() for r in self.reasoning],
            "opportunity_cost": (
                {
                    "vs_best_alternative": self.opportunity_cost.vs_best_alternative,
                    "annual_difference": self.opportunity_cost.annual_difference,
                }
                if self.opportunity_cost
                else None
            ),
        }
