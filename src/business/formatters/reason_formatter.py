"""
Reason Formatter

Renders the engine's locale-free reason codes as English text. This is the
only place reason text is produced; swap the templates to localize.
"""

import logging
from collections.abc import Mapping
from typing import Any

from src.data.models.enums import Goal, Region
from src.engine.models.enums import ReasonCode
from src.engine.models.reasons import AllocationReason, Reason

logger = logging.getLogger(__name__)

REASON_TEMPLATES: dict[ReasonCode, str] = {
    # Token scoring
    ReasonCode.HARD_ASSET_HIGH_INFLATION: "Strong inflation hedge: {inflation}% inflation favors hard assets",
    ReasonCode.NEGATIVE_REAL_YIELD: "Negative real yield ({real_yield:.1f}%) makes gold attractive vs cash",
    ReasonCode.REAL_YIELD_OPPORTUNITY_COST: (
        "Opportunity cost: Missing {real_yield:.1f}% yield from Treasury alternatives"
    ),
    ReasonCode.GOLD_MOMENTUM: "Strong momentum: Gold up {gold_ytd_change}% YTD",
    ReasonCode.TREASURY_APY: "{apy}% APY from Treasury yields",
    ReasonCode.POSITIVE_REAL_YIELD: "Positive real yield ({real_yield:.1f}%) preserves purchasing power",
    ReasonCode.LOW_INFLATION_FAVORS_YIELD: "Low inflation ({inflation}%) environment favors yield over hedges",
    ReasonCode.STRONG_RISK_ADJUSTED_RETURN: "Excellent risk-adjusted returns (Sharpe: {sharpe_ratio:.2f})",
    ReasonCode.PRIMARY_REGIONAL_STABLECOIN: "Primary {region} stablecoin",
    # Diversification tips
    ReasonCode.ADD_REGIONS: "Aim to have at least {min_regions} different regions in your portfolio.",
    ReasonCode.ADD_MISSING_REGIONS: "Consider adding exposure to {regions} to improve diversification.",
    ReasonCode.REDUCE_CONCENTRATION: "High concentration detected. Consider rebalancing to other regions.",
    ReasonCode.ADD_RWA_HEDGE: "Add {symbol} on Arbitrum as a hedge against currency debasement.",
    # Goal headlines
    ReasonCode.SPREAD_INTO_TARGET: (
        "Spreading your {from_token} into {to_token} improves your regional balance "
        "and reduces concentration risk."
    ),
    ReasonCode.REGIONALLY_BALANCED: (
        "Your portfolio is regionally balanced. Consider exploring new emerging markets."
    ),
    ReasonCode.HAS_RWA_EXPOSURE: (
        "You have RWA exposure. Consider increasing your allocation to gold or "
        "yield-bearing treasuries."
    ),
    ReasonCode.ADD_RWA_EXPOSURE: (
        "Add gold-backed PAXG or yield-bearing USDY to protect your purchasing power "
        "with hard assets."
    ),
    ReasonCode.HIGH_INFLATION_EXPOSURE: (
        "Your holdings face {weighted_inflation_risk:.1f}% inflation. Move into US/EU "
        "stablecoins or Gold to preserve value."
    ),
    ReasonCode.LOW_INFLATION_EXPOSURE: (
        "Your inflation risk is low. Continue monitoring global rates to stay protected."
    ),
    ReasonCode.PERSONALIZED_OPPORTUNITIES: (
        "Get personalized recommendations based on your holdings and market conditions."
    ),
}

GOAL_TITLES: dict[Goal, str] = {
    Goal.GEOGRAPHIC_DIVERSIFICATION: "Regional Diversification",
    Goal.RWA_ACCESS: "Real-World Assets",
    Goal.INFLATION_PROTECTION: "Inflation Protection",
    Goal.EXPLORING: "Portfolio Opportunities",
}

ALLOCATION_TEMPLATES: dict[Goal, dict[Region, str]] = {
    Goal.INFLATION_PROTECTION: {
        Region.EUROPE: "Low inflation anchor ({rate:.1f}%) provides stability",
        Region.USA: "Reserve currency ({rate:.1f}%) for global stability",
        Region.GLOBAL: "Gold-backed PAXG as hard asset hedge",
        Region.ASIA: "Moderate inflation ({rate:.1f}%) with growth exposure",
    },
    Goal.GEOGRAPHIC_DIVERSIFICATION: {
        Region.EUROPE: "Diversification into stable Eurozone",
        Region.USA: "USD reserve currency exposure",
        Region.ASIA: "High-growth Asian markets",
        Region.AFRICA: "Emerging market diversification",
        Region.LATAM: "Regional diversification into LatAm",
        Region.GLOBAL: "Commodity hedge with gold",
    },
    Goal.RWA_ACCESS: {
        Region.GLOBAL: "Primary gold (PAXG) or yield (SYRUPUSDC) for wealth preservation",
        Region.EUROPE: "Stable European exposure",
        Region.USA: "USD Treasury yield (USDY) for stable returns",
        Region.ASIA: "Asian market diversification",
    },
    Goal.EXPLORING: {
        Region.EUROPE: "Explore Eurozone stability",
        Region.USA: "USD as benchmark",
        Region.ASIA: "Asian market exposure",
        Region.AFRICA: "African emerging markets",
        Region.LATAM: "Latin American diversification",
        Region.GLOBAL: "Gold as alternative asset",
    },
}

DEFAULT_ALLOCATION_TEMPLATE = "Targeting {region} for balanced exposure"


class ReasonFormatter:
    """Reason code to text renderer.

    Usage:
        formatter = ReasonFormatter()
        formatter.format(Reason(ReasonCode.REDUCE_CONCENTRATION))

        # Custom wording for one code
        formatter = ReasonFormatter({ReasonCode.REDUCE_CONCENTRATION: "Too concentrated"})
    """

    def __init__(self, templates: dict[ReasonCode, str] | None = None) -> None:
        """Initialize formatter.

        Args:
            templates: Per-code overrides merged over REASON_TEMPLATES.
        """
        self.templates = {**REASON_TEMPLATES, **(templates or {})}

    @staticmethod
    def _prepare(params: Mapping[str, Any]) -> dict[str, Any]:
        # Lists render as comma-separated text
        return {
            k: ", ".join(str(v) for v in value) if isinstance(value, (list, tuple)) else value
            for k, value in params.items()
        }

    def format(self, reason: Reason) -> str:
        """Render one reason."""
        template = self.templates.get(reason.code)
        if template is None:
            return reason.code.value
        try:
            return template.format(**self._prepare(reason.params))
        except (KeyError, ValueError) as e:
            logger.warning(f"Cannot render {reason.code.value} with {reason.params}: {e}")
            return reason.code.value

    def format_all(self, reasons: tuple[Reason, ...] | list[Reason]) -> list[str]:
        """Render reasons in order."""
        return [self.format(r) for r in reasons]

    def format_allocation(self, reason: AllocationReason) -> str:
        """Render why a region appears in a goal's target allocation."""
        template = ALLOCATION_TEMPLATES.get(reason.goal, {}).get(
            reason.region, DEFAULT_ALLOCATION_TEMPLATE
        )
        return template.format(rate=reason.inflation_rate, region=reason.region.value)

    @staticmethod
    def goal_title(goal: Goal) -> str:
        return GOAL_TITLES[goal]
