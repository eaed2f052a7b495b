"""
Analyze Command

Analyzes a portfolio snapshot's regional inflation exposure.
"""

import json
import logging
from typing import Optional

import click

from src.business.analysis.pipeline import AnalysisPipeline
from src.business.config.analysis_config import AnalysisConfig
from src.business.config.config_utils import ConfigError
from src.business.formatters.analysis_formatter import AnalysisFormatter
from src.data.models.enums import AnalysisContractError, Goal

logger = logging.getLogger(__name__)


@click.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--goal",
    "-g",
    type=click.Choice([g.value for g in Goal], case_sensitive=False),
    default=Goal.EXPLORING.value,
    help="Goal: selects the allocation table and opportunity bias",
)
@click.option(
    "--visited",
    multiple=True,
    help="Sections already visited (repeatable). Default: overview, info",
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
def analyze(
    snapshot: str,
    goal: str,
    visited: tuple[str, ...],
    config_path: Optional[str],
    output: str,
    verbose: bool,
) -> None:
    """Analyze a portfolio snapshot

    SNAPSHOT is a YAML file with balances, regional inflation data and an
    optional market context.

    \b
    Examples:
      # Default goal (exploring), text report
      hedgescope analyze portfolio.yaml

      # Inflation protection, JSON
      hedgescope analyze portfolio.yaml -g inflation_protection -o json

      # User already saw the protect tab
      hedgescope analyze portfolio.yaml --visited overview --visited protect
    """
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = AnalysisConfig.load(config_path)
        pipeline = AnalysisPipeline(config)
        data = pipeline.load_snapshot(snapshot)
        report = pipeline.run(data, goal, visited or None)
    except (AnalysisContractError, ConfigError) as e:
        logger.debug("Analysis failed", exc_info=True)
        raise click.ClickException(str(e)) from e

    formatter = AnalysisFormatter()
    if output == "json":
        payload = {
            "goal": report.goal.value,
            "analysis": formatter.analysis_to_dict(report.analysis),
            "guided_tour": report.tour.to_dict() if report.tour else None,
        }
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    click.echo(formatter.format_analysis(report.analysis))
    click.echo()
    click.echo("-" * 40)
    click.echo(" Guided tour")
    click.echo("-" * 40)
    click.echo(formatter.format_tour(report.tour))
