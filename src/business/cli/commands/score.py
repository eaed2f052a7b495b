"""
Score Command

Ranks candidate tokens under a market context and user profile.
"""

import json
import logging
from typing import Optional

import click

from src.business.analysis.pipeline import AnalysisPipeline
from src.business.config.analysis_config import AnalysisConfig
from src.business.config.config_utils import ConfigError
from src.business.formatters.analysis_formatter import AnalysisFormatter
from src.data.models.enums import AnalysisContractError, Goal, PolicyStance, RiskTolerance
from src.data.models.market import MarketContext
from src.engine.scoring.token_scoring import GLOBAL_CANDIDATES

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--symbol",
    "-S",
    multiple=True,
    help="Candidate token (repeatable). Default: PAXG, USDY, SYRUPUSDC",
)
@click.option(
    "--risk",
    "-r",
    type=click.Choice([r.value for r in RiskTolerance], case_sensitive=False),
    default=RiskTolerance.BALANCED.value,
    help="Risk tolerance",
)
@click.option(
    "--goal",
    "-g",
    type=click.Choice([g.value for g in Goal], case_sensitive=False),
    default=Goal.EXPLORING.value,
    help="Goal",
)
@click.option("--treasury-yield", type=float, help="Treasury yield (%) override")
@click.option("--inflation", type=float, help="Inflation (%) override")
@click.option("--gold-ytd", type=float, help="Gold YTD change (%) override")
@click.option(
    "--policy",
    type=click.Choice([p.value for p in PolicyStance], case_sensitive=False),
    help="Policy stance override",
)
@click.option(
    "--portfolio-value",
    type=float,
    default=10000.0,
    show_default=True,
    help="Amount opportunity costs are quoted against",
)
@click.option(
    "--snapshot",
    type=click.Path(exists=True, dir_okay=False),
    help="Portfolio snapshot YAML supplying market data and metric overrides",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Analysis config YAML (default: config/analysis.yaml)",
)
@click.option(
    "--output",
    "-o",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show debug logs",
)
def score(
    symbol: tuple[str, ...],
    risk: str,
    goal: str,
    treasury_yield: Optional[float],
    inflation: Optional[float],
    gold_ytd: Optional[float],
    policy: Optional[str],
    portfolio_value: float,
    snapshot: Optional[str],
    config_path: Optional[str],
    output: str,
    verbose: bool,
) -> None:
    """Score and rank candidate tokens

    \b
    Examples:
      # Default Global candidates under the configured market
      hedgescope score

      # Conservative RWA seeker
      hedgescope score -S PAXG -S USDY -r conservative -g rwa_access

      # What if inflation jumps to 6%?
      hedgescope score --inflation 6 --treasury-yield 4
    """
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = AnalysisConfig.load(config_path)
        pipeline = AnalysisPipeline(config)
        data = pipeline.load_snapshot(snapshot) if snapshot else None

        base_market = (data.market_context if data else None) or pipeline.default_market
        overrides = {
            k: v
            for k, v in {
                "treasury_yield": treasury_yield,
                "inflation": inflation,
                "gold_ytd_change": gold_ytd,
                "policy_stance": policy,
            }.items()
            if v is not None
        }
        market = MarketContext.from_dict(overrides, defaults=base_market)

        scores = pipeline.score(
            list(symbol) or list(GLOBAL_CANDIDATES),
            risk_tolerance=risk,
            goal=goal,
            market_context=market,
            portfolio_value=portfolio_value,
            snapshot=data,
        )
    except (AnalysisContractError, ConfigError) as e:
        logger.debug("Scoring failed", exc_info=True)
        raise click.ClickException(str(e)) from e

    formatter = AnalysisFormatter()
    if output == "json":
        payload = {
            "market": market.to_dict(),
            "scores": formatter.scores_to_list(scores),
        }
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    click.echo(
        f"Market: treasury {market.treasury_yield}% | inflation {market.inflation}% | "
        f"real yield {market.real_yield:.1f}% | {market.policy_stance.value}"
    )
    click.echo(formatter.format_scores(scores))
