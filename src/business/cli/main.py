"""
CLI Main Entry Point

Command line built with Click.
"""

import click

from src.business.cli.commands.analyze import analyze
from src.business.cli.commands.score import score


@click.group()
@click.version_option(version="0.1.0", prog_name="hedgescope")
def cli() -> None:
    """Regional inflation portfolio analysis

    Analyzes portfolio exposure to regional inflation and ranks hedge tokens.
    """
    pass


cli.add_command(analyze)
cli.add_command(score)


if __name__ == "__main__":
    cli()
