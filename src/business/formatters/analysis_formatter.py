"""
Analysis Formatter

Renders PortfolioAnalysis, token scores and guided tours as terminal text,
and converts them to JSON-ready dicts.
"""

import dataclasses
from collections.abc import Mapping
from enum import Enum
from typing import Any

from src.business.formatters.reason_formatter import ReasonFormatter
from src.business.tour.guided_tour import GuidedTourRecommendation
from src.data.models.enums import Goal
from src.engine.models.portfolio import PortfolioAnalysis
from src.engine.models.result import TokenScore

WIDTH = 60


def to_jsonable(value: Any) -> Any:
    """Recursively convert dataclasses, enums and tuples to JSON types."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {str(to_jsonable(k)): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


class AnalysisFormatter:
    """Text / JSON renderer for analysis results.

    Usage:
        formatter = AnalysisFormatter()
        print(formatter.format_analysis(analysis))
        payload = formatter.analysis_to_dict(analysis)
    """

    def __init__(self, reason_formatter: ReasonFormatter | None = None) -> None:
        self.reasons = reason_formatter or ReasonFormatter()

    # ------------------------------------------------------------------
    # JSON
    # ------------------------------------------------------------------

    def analysis_to_dict(self, analysis: PortfolioAnalysis) -> dict[str, Any]:
        """JSON-ready dict with rendered text next to each reason code."""
        data = to_jsonable(analysis)
        data["diversification_tips_text"] = self.reasons.format_all(analysis.diversification_tips)
        if analysis.goal_analysis.headline is not None:
            data["goal_analysis"]["title"] = self.reasons.goal_title(analysis.goal_analysis.goal)
            data["goal_analysis"]["description"] = self.reasons.format(
                analysis.goal_analysis.headline
            )
        for goal in Goal:
            for entry, target in zip(
                data["target_allocations"][goal.value],
                analysis.target_allocations.for_goal(goal),
            ):
                entry["reason_text"] = self.reasons.format_allocation(target.reason)
        return data

    def scores_to_list(self, scores: list[TokenScore]) -> list[dict[str, Any]]:
        """JSON-ready list of token scores."""
        result = []
        for score in scores:
            data = score.to_dict()
            data["reasoning_text"] = self.reasons.format_all(score.reasoning)
            result.append(data)
        return result

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def format_analysis(self, analysis: PortfolioAnalysis) -> str:
        """Multi-section terminal report."""
        lines: list[str] = []
        lines.append("=" * WIDTH)
        lines.append(" Portfolio Inflation Analysis")
        lines.append("=" * WIDTH)
        lines.append(f"   Total value: ${analysis.total_value:,.2f}")
        lines.append(f"   Holdings: {analysis.token_count} | Regions: {analysis.region_count}")
        lines.append(f"   Weighted inflation risk: {analysis.weighted_inflation_risk:.2f}%")
        lines.append(
            f"   Diversification: {analysis.diversification_score:.1f}/100 "
            f"({analysis.diversification_rating.value})"
        )
        lines.append(f"   Concentration risk: {analysis.concentration_risk.value}")

        if analysis.regional_exposure:
            lines.append("")
            lines.append("-" * 40)
            lines.append(" Regional exposure")
            lines.append("-" * 40)
            lines.append(f"   {'Region':<8} {'Value':>12} {'Share':>8} {'Infl.':>7}  Tokens")
            for r in sorted(analysis.regional_exposure, key=lambda x: x.value_usd, reverse=True):
                lines.append(
                    f"   {r.region.value:<8} {r.value_usd:>12,.2f} {r.percentage:>7.1f}% "
                    f"{r.avg_inflation_rate:>6.1f}%  {', '.join(r.tokens)}"
                )

        ys = analysis.yield_summary
        lines.append("")
        lines.append("-" * 40)
        lines.append(" Yield vs inflation")
        lines.append("-" * 40)
        lines.append(f"   Annual yield: ${ys.total_annual_yield:,.2f} ({ys.avg_yield_rate:.2f}%)")
        lines.append(f"   Inflation cost: ${ys.total_inflation_cost:,.2f}")
        sign = "+" if ys.is_net_positive else "-"
        lines.append(f"   Net: {sign}${abs(ys.net_annual_gain):,.2f} ({ys.net_rate:+.2f}%)")

        gs = analysis.goal_scores
        lines.append(
            f"   Goal scores: hedge={gs.hedge:.0f} diversify={gs.diversify:.0f} rwa={gs.rwa:.0f}"
        )

        if analysis.missing_regions:
            lines.append(f"   Missing regions: {', '.join(r.value for r in analysis.missing_regions)}")
        if analysis.over_exposed_regions:
            lines.append(
                f"   Over-exposed: {', '.join(r.value for r in analysis.over_exposed_regions)}"
            )
        if analysis.under_exposed_regions:
            lines.append(
                f"   Under-exposed: {', '.join(r.value for r in analysis.under_exposed_regions)}"
            )

        ga = analysis.goal_analysis
        lines.append("")
        lines.append("-" * 40)
        lines.append(f" {self.reasons.goal_title(ga.goal)}")
        lines.append("-" * 40)
        if ga.headline is not None:
            lines.append(f"   {self.reasons.format(ga.headline)}")

        if analysis.rebalancing_opportunities:
            lines.append("")
            lines.append(f"   {'Priority':<8} {'From':<10} {'To':<10} {'Amount':>10} {'Delta':>7} {'Saves/yr':>10}")
            for o in analysis.rebalancing_opportunities:
                lines.append(
                    f"   {o.priority.value:<8} {o.from_token:<10} {o.to_token:<10} "
                    f"{o.suggested_amount:>10,.2f} {o.inflation_delta:>6.1f}% {o.annual_savings:>10,.2f}"
                )

        if analysis.diversification_tips:
            lines.append("")
            lines.append(" Tips:")
            for tip in self.reasons.format_all(analysis.diversification_tips):
                lines.append(f"   - {tip}")

        targets = analysis.target_allocations.for_goal(ga.goal)
        if targets:
            lines.append("")
            lines.append(f" Target allocation ({ga.goal.value}):")
            for t in targets:
                lines.append(
                    f"   {t.target_percentage:>5.0f}%  {t.symbol:<10} "
                    f"{self.reasons.format_allocation(t.reason)}"
                )

        p = analysis.projections
        lines.append("")
        lines.append("-" * 40)
        lines.append(f" {p.horizon_years}-year purchasing power")
        lines.append("-" * 40)
        lines.append(
            f"   Current  ({p.current_rate:.2f}%): ${p.current_path.value_at_horizon:,.2f} "
            f"(lost ${p.current_path.purchasing_power_lost:,.2f})"
        )
        lines.append(
            f"   Optimized ({p.optimized_rate:.2f}%): ${p.optimized_path.value_at_horizon:,.2f} "
            f"(preserved ${p.optimized_path.purchasing_power_preserved:,.2f})"
        )
        return "\n".join(lines)

    def format_scores(self, scores: list[TokenScore]) -> str:
        """Ranked score table with reasoning."""
        lines = ["=" * WIDTH, " Token scores", "=" * WIDTH]
        if not scores:
            lines.append("   No scorable tokens")
            return "\n".join(lines)

        lines.append(
            f"   {'#':<3}{'Symbol':<11}{'Total':>8}{'Yield':>8}{'Hedge':>8}{'Real':>8}{'Perf':>8}{'Risk':>8}"
        )
        for i, s in enumerate(scores, 1):
            b = s.breakdown
            lines.append(
                f"   {i:<3}{s.symbol:<11}{s.total_score:>8.1f}{b.yield_score:>8.1f}"
                f"{b.inflation_hedge_score:>8.1f}{b.real_yield_score:>8.1f}"
                f"{b.performance_score:>8.1f}{b.risk_adjusted_score:>8.1f}"
            )
            for text in self.reasons.format_all(s.reasoning):
                lines.append(f"        - {text}")
            if s.opportunity_cost is not None:
                oc = s.opportunity_cost
                lines.append(
                    f"        ! ${oc.annual_difference:,.0f}/yr less than {oc.vs_best_alternative}"
                )
        return "\n".join(lines)

    def format_tour(self, tour: GuidedTourRecommendation | None) -> str:
        """Guided tour summary."""
        if tour is None:
            return "No guided tour recommended."
        lines = [
            f"[{tour.priority.value}] {tour.title}",
            f"   {tour.description}",
            f"   Benefit: {tour.estimated_benefit}",
        ]
        for i, step in enumerate(tour.steps, 1):
            where = f"{step.tab}/{step.section}" if step.section else step.tab
            lines.append(f"   {i}. ({where}) {step.message}")
        return "\n".join(lines)
