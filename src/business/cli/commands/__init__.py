"""
CLI Commands
"""

from src.business.cli.commands.analyze import analyze
from src.business.cli.commands.score import score

__all__ = ["analyze", "score"]
