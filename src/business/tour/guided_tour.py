"""
Guided Tour Detection

Thin rules layer over a PortfolioAnalysis: decides whether a guided tour
would help the user and which one. Reads only the analysis, keeps no state.

Rules, first match wins:
- inflation_fighter: weighted inflation > 5% and protect not visited
- goal_explorer: goal is exploring, value > 100 and strategies not visited
- diversification_guide: diversification score < 40 and value > 50
- rwa_discovery: no PAXG/USDY/SYRUPUSDC, value > 200 and protect not visited
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from src.data.models.enums import Goal
from src.engine.classifier import RWA_SYMBOLS
from src.engine.models.enums import Priority
from src.engine.models.portfolio import PortfolioAnalysis

DEFAULT_VISITED_SECTIONS: frozenset[str] = frozenset({"overview", "info"})

# Thresholds
INFLATION_FIGHTER_MIN_RISK = 5.0
GOAL_EXPLORER_MIN_VALUE = 100.0
DIVERSIFICATION_GUIDE_MAX_SCORE = 40.0
DIVERSIFICATION_GUIDE_MIN_VALUE = 50.0
RWA_DISCOVERY_MIN_VALUE = 200.0

# rwa_discovery prefill: 25% of the portfolio, at most 100
RWA_PREFILL_SHARE = 0.25
RWA_PREFILL_CAP = 100.0
RWA_PREFILL_TOKEN = "USDY"
RWA_POTENTIAL_APY = 0.05


class TourId(str, Enum):
    """Guided tour identifiers"""

    INFLATION_FIGHTER = "inflation_fighter"
    GOAL_EXPLORER = "goal_explorer"
    DIVERSIFICATION_GUIDE = "diversification_guide"
    RWA_DISCOVERY = "rwa_discovery"


class TourAction(str, Enum):
    """What the UI should do at a step"""

    HIGHLIGHT = "highlight"
    PREFILL = "prefill"
    SCROLL = "scroll"


@dataclass(frozen=True)
class SwapPrefill:
    """Pre-filled swap form values"""

    from_token: str | None = None
    to_token: str | None = None
    amount: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "from_token": self.from_token,
            "to_token": self.to_token,
            "amount": self.amount,
        }


@dataclass(frozen=True)
class TourStep:
    """One step of a guided tour"""

    tab: str
    message: str
    section: str | None = None
    action: TourAction | None = None
    prefill: SwapPrefill | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "tab": self.tab,
            "section": self.section,
            "message": self.message,
            "action": self.action.value if self.action else None,
            "prefill": self.prefill.to_dict() if self.prefill else None,
        }


@dataclass(frozen=True)
class GuidedTourRecommendation:
    """A recommended guided tour"""

    tour_id: TourId
    title: str
    description: str
    estimated_benefit: str
    priority: Priority
    steps: tuple[TourStep, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tour_id": self.tour_id.value,
            "title": self.title,
            "description": self.description,
            "estimated_benefit": self.estimated_benefit,
            "priority": self.priority.value,
            "steps": [s.to_dict() for s in self.steps],
        }


def _inflation_fighter(analysis: PortfolioAnalysis) -> GuidedTourRecommendation:
    top = analysis.rebalancing_opportunities[0] if analysis.rebalancing_opportunities else None
    if top is not None:
        swap_step = TourStep(
            tab="swap",
            message=f"Ready to protect? Swap {top.from_token} -> {top.to_token}",
            action=TourAction.PREFILL,
            prefill=SwapPrefill(
                from_token=top.from_token,
                to_token=top.to_token,
                amount=round(top.suggested_amount, 2),
            ),
        )
        benefit = f"Save ${top.annual_savings:.0f}/year"
    else:
        swap_step = TourStep(
            tab="swap",
            message="Execute your protection strategy",
            action=TourAction.PREFILL,
        )
        benefit = "Reduce inflation exposure"

    return GuidedTourRecommendation(
        tour_id=TourId.INFLATION_FIGHTER,
        title="High Inflation Protection",
        description=(
            f"Your portfolio faces {analysis.weighted_inflation_risk:.1f}% inflation risk. "
            "Let me show you protection strategies."
        ),
        estimated_benefit=benefit,
        priority=Priority.HIGH,
        steps=(
            TourStep(
                tab="protect",
                section="regional-data",
                message="See how your region compares to lower-inflation alternatives",
                action=TourAction.SCROLL,
            ),
            TourStep(
                tab="protect",
                section="rwa-cards",
                message="Real-world assets like gold and treasuries protect against inflation",
                action=TourAction.HIGHLIGHT,
            ),
            swap_step,
        ),
    )


def _goal_explorer() -> GuidedTourRecommendation:
    return GuidedTourRecommendation(
        tour_id=TourId.GOAL_EXPLORER,
        title="Discover Goal-Based Strategies",
        description="Save for education, travel, or business with inflation-protected strategies.",
        estimated_benefit="Structured savings with protection",
        priority=Priority.MEDIUM,
        steps=(
            TourStep(
                tab="protect",
                section="strategies",
                message="Choose a goal that matches your financial plans",
                action=TourAction.SCROLL,
            ),
            TourStep(
                tab="protect",
                section="strategies",
                message="See recommended allocations and monthly targets for your goal",
                action=TourAction.HIGHLIGHT,
            ),
        ),
    )


def _diversification_guide(analysis: PortfolioAnalysis) -> GuidedTourRecommendation:
    missing = analysis.missing_regions[0] if analysis.missing_regions else None
    return GuidedTourRecommendation(
        tour_id=TourId.DIVERSIFICATION_GUIDE,
        title="Improve Diversification",
        description=(
            f"Your diversification score is {analysis.diversification_score:.0f}/100. "
            "Spread risk across regions."
        ),
        estimated_benefit="Reduce concentration risk",
        priority=Priority.MEDIUM,
        steps=(
            TourStep(
                tab="protect",
                section="regional-recommendations",
                message="Explore regional diversification patterns used by others",
                action=TourAction.SCROLL,
            ),
            TourStep(
                tab="swap",
                message=(
                    f"Start by adding exposure to {missing.value}" if missing else "Begin diversifying"
                ),
                action=TourAction.PREFILL,
            ),
        ),
    )


def _rwa_discovery(analysis: PortfolioAnalysis) -> GuidedTourRecommendation:
    amount = min(RWA_PREFILL_CAP, analysis.total_value * RWA_PREFILL_SHARE)
    return GuidedTourRecommendation(
        tour_id=TourId.RWA_DISCOVERY,
        title="Discover Real-World Assets",
        description="Your stablecoins earn 0% yield. Explore RWAs earning 4-5% APY.",
        estimated_benefit=f"Potential {analysis.total_value * RWA_POTENTIAL_APY:.0f} USDC/year",
        priority=Priority.HIGH,
        steps=(
            TourStep(
                tab="protect",
                section="rwa-cards",
                message="Explore USDY (5% APY) and SYRUPUSDC (4.5% APY) - no KYC needed",
                action=TourAction.HIGHLIGHT,
            ),
            TourStep(
                tab="swap",
                message="Ready to earn yield? Start with a small allocation",
                action=TourAction.PREFILL,
                prefill=SwapPrefill(to_token=RWA_PREFILL_TOKEN, amount=round(amount, 2)),
            ),
        ),
    )


def detect_guided_tour(
    analysis: PortfolioAnalysis,
    goal: Goal | str | None = None,
    visited_sections: Iterable[str] | None = None,
) -> GuidedTourRecommendation | None:
    """Pick the guided tour that would help the user most.

    Args:
        analysis: Portfolio analysis.
        goal: User goal. None matches no goal-specific rule.
        visited_sections: Sections already visited. Defaults to overview and info.

    Returns:
        GuidedTourRecommendation, or None when no rule matches.

    Raises:
        InvalidGoalError: goal outside the closed goal set.
    """
    user_goal = Goal.parse(goal) if goal is not None else None
    visited = (
        set(visited_sections) if visited_sections is not None else set(DEFAULT_VISITED_SECTIONS)
    )
    visited_protect = "protect" in visited
    visited_strategies = "strategies" in visited

    if analysis.weighted_inflation_risk > INFLATION_FIGHTER_MIN_RISK and not visited_protect:
        return _inflation_fighter(analysis)

    if (
        user_goal == Goal.EXPLORING
        and analysis.total_value > GOAL_EXPLORER_MIN_VALUE
        and not visited_strategies
    ):
        return _goal_explorer()

    if (
        analysis.diversification_score < DIVERSIFICATION_GUIDE_MAX_SCORE
        and analysis.total_value > DIVERSIFICATION_GUIDE_MIN_VALUE
    ):
        return _diversification_guide(analysis)

    has_rwa = any(t.symbol in RWA_SYMBOLS for t in analysis.tokens)
    if not has_rwa and analysis.total_value > RWA_DISCOVERY_MIN_VALUE and not visited_protect:
        return _rwa_discovery(analysis)

    return None
